#!/usr/bin/env python3
"""
Headless content index for a Jekyll-style blog.

- Posts <- _posts/YYYY-MM-DD-<name>.md
  slug: YYYY-MM-DD-<name>, front matter: layout, title (required), tags
- Pages <- any other front-matter file outside `_`/`.` directories
  slug: path without suffix, links: ordered (label, target) pairs

Malformed files are reported and skipped; the rest of the corpus loads.
Options come from an optional corpus.yml at the corpus root.
"""

from __future__ import annotations

import argparse
import pathlib
import sys
from typing import Optional, Sequence

import yaml

from .config import MANIFEST_NAME
from .errors import DuplicateSlugError
from .loader import load_corpus
from .settings import load_settings


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blogcorpus",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("root", nargs="?", default=".",
                        help="Corpus root holding _posts/ and pages")
    parser.add_argument("--strict", action="store_true",
                        help="Exit non-zero if any file failed to parse")
    parser.add_argument("--check-links", action="store_true",
                        help="Report internal links that resolve to nothing")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    root = pathlib.Path(args.root)

    if not root.is_dir():
        print(f"ERROR: corpus root {root} is not a directory", file=sys.stderr)
        return 1

    try:
        settings = load_settings(root)
    except (ValueError, yaml.YAMLError) as exc:
        print(f"ERROR: {MANIFEST_NAME}: {exc}", file=sys.stderr)
        return 1

    try:
        corpus = load_corpus(root, settings)
    except DuplicateSlugError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    for _, group in sorted(corpus.duplicate_titles().items()):
        print(f"= {len(group)} records titled {group[0].title!r}: "
              + ", ".join(r.slug for r in group))

    status = 0
    if args.strict and corpus.errors:
        status = 1

    if args.check_links:
        dangling = corpus.unresolved_links()
        for record, link in dangling:
            print(f"! {record.slug}: no target for [{link.label}]({link.target})",
                  file=sys.stderr)
        if dangling:
            status = 1
        else:
            print("✓ all internal links resolve")

    return status


if __name__ == "__main__":
    sys.exit(main())
