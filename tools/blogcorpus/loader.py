from __future__ import annotations

import fnmatch
import pathlib
import sys
from typing import List, Optional, Tuple

from .corpus import Corpus
from .errors import ParseError
from .pages import load_page
from .posts import load_post
from .settings import Settings, load_settings
from .utils import has_frontmatter, natural_key, read_content


def _excluded(rel: pathlib.Path, settings: Settings) -> bool:
    rel_s = rel.as_posix()
    return any(fnmatch.fnmatch(rel_s, pat) for pat in settings.exclude)


def _sorted(paths: List[pathlib.Path], root: pathlib.Path) -> List[pathlib.Path]:
    return sorted(paths, key=lambda p: natural_key(p.relative_to(root).as_posix()))


def discover(
    root: pathlib.Path, settings: Settings
) -> Tuple[List[pathlib.Path], List[pathlib.Path]]:
    """Split the content files under ``root`` into post and page paths.

    Posts live under ``settings.posts_dir``. Pages are the remaining
    content files outside ``_``/``.`` directories; whether they carry
    front matter is decided when they are read.
    """
    posts_root = root / settings.posts_dir
    posts: List[pathlib.Path] = []
    if posts_root.is_dir():
        for p in posts_root.rglob("*"):
            if not p.is_file() or p.suffix.lower() not in settings.suffixes:
                continue
            if p.name.startswith(".") or _excluded(p.relative_to(root), settings):
                continue
            posts.append(p)

    pages: List[pathlib.Path] = []
    for p in root.rglob("*"):
        if not p.is_file() or p.suffix.lower() not in settings.suffixes:
            continue
        rel = p.relative_to(root)
        if any(part.startswith(("_", ".")) for part in rel.parts):
            continue
        if posts_root in p.parents or _excluded(rel, settings):
            continue
        pages.append(p)

    return _sorted(posts, root), _sorted(pages, root)


def _report(corpus: Corpus, exc: ParseError) -> None:
    corpus.errors.append(exc)
    print(f"! skipped {exc}", file=sys.stderr)


def load_corpus(
    root: pathlib.Path,
    settings: Optional[Settings] = None,
) -> Corpus:
    """Read every post and page under ``root`` into a :class:`Corpus`.

    A file that fails to parse is reported and skipped; the rest of the
    corpus still loads. Only a duplicate slug under the ``fail`` policy
    aborts the load.
    """
    root = pathlib.Path(root)
    if settings is None:
        settings = load_settings(root)
    post_paths, page_paths = discover(root, settings)
    corpus = Corpus(root)

    for path in post_paths:
        try:
            post = load_post(path)
        except ParseError as exc:
            _report(corpus, exc)
            continue
        if not post.published and not settings.include_unpublished:
            print(f"- {post.slug} unpublished, skip")
            continue
        corpus.add(post, settings.duplicates)

    for path in page_paths:
        rel = path.relative_to(root).as_posix()
        try:
            text = read_content(path)
            if not has_frontmatter(text):
                print(f"- {rel} has no front matter, skip")
                continue
            page = load_page(path, root, text)
        except ParseError as exc:
            _report(corpus, exc)
            continue
        if not page.published and not settings.include_unpublished:
            print(f"- {page.slug} unpublished, skip")
            continue
        corpus.add(page, settings.duplicates)

    print(
        f"✓ loaded {len(corpus.posts())} posts, {len(corpus.pages())} pages"
        + (f" ({len(corpus.errors)} skipped)" if corpus.errors else "")
    )
    return corpus
