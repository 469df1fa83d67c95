from __future__ import annotations

import pathlib
from typing import Any, Dict

from .config import POSTS_DIR_NAME
from .models import Post, Record
from .utils import yaml_frontmatter_block


def frontmatter_of(record: Record) -> Dict[str, Any]:
    fm: Dict[str, Any] = {"layout": record.layout, "title": record.title}
    if record.tags:
        fm["tags"] = sorted(record.tags)
    fm.update(record.meta)
    return fm


def dumps(record: Record) -> str:
    """Render a record back to front matter + body text."""
    return yaml_frontmatter_block(frontmatter_of(record)) + record.body


def relative_path(record: Record, posts_dir: str = POSTS_DIR_NAME) -> pathlib.PurePosixPath:
    if isinstance(record, Post):
        return pathlib.PurePosixPath(posts_dir) / f"{record.slug}.md"
    return pathlib.PurePosixPath(f"{record.slug}.md")


def write(
    record: Record,
    root: pathlib.Path,
    posts_dir: str = POSTS_DIR_NAME,
) -> pathlib.Path:
    out = pathlib.Path(root) / relative_path(record, posts_dir)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(dumps(record), encoding="utf-8")
    print(f"✓ wrote {record.slug}")
    return out
