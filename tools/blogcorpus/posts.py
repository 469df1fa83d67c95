from __future__ import annotations

import pathlib
from datetime import date
from typing import Any, Dict, Optional, Tuple

from .config import DEFAULT_POST_LAYOUT, POST_FILENAME
from .errors import ParseError
from .models import Post
from .utils import (
    parse_frontmatter,
    plain_dates,
    read_content,
    require_title,
    slugify,
    split_tags,
)

# Front-matter keys that become Post fields rather than `meta` entries.
RECORD_KEYS = ("layout", "title", "tags", "tag")


def parse_post_filename(path: pathlib.Path) -> Tuple[date, str]:
    """Return the publish date and the name part of ``YYYY-MM-DD-name.md``."""
    m = POST_FILENAME.match(path.stem)
    if not m:
        raise ParseError("post filename must start with YYYY-MM-DD-", path)
    try:
        published = date(int(m.group("year")), int(m.group("month")),
                         int(m.group("day")))
    except ValueError as exc:
        raise ParseError(f"invalid date in filename: {exc}", path) from exc
    name = slugify(m.group("name"))
    if not name:
        raise ParseError("post filename has no name after the date", path)
    return published, name


def post_from_frontmatter(
    slug: str,
    published: date,
    fm: Dict[str, Any],
    body: str,
    path: Optional[pathlib.Path] = None,
) -> Post:
    fm = plain_dates(dict(fm))
    return Post(
        slug=slug,
        publish_date=published,
        title=require_title(fm),
        body=body,
        tags=split_tags(fm["tags"] if "tags" in fm else fm.get("tag")),
        layout=str(fm.get("layout") or DEFAULT_POST_LAYOUT),
        meta={k: v for k, v in fm.items() if k not in RECORD_KEYS},
        path=path,
    )


def load_post(path: pathlib.Path, text: Optional[str] = None) -> Post:
    """Load one dated post; raises :class:`ParseError` naming ``path``."""
    published, name = parse_post_filename(path)
    if text is None:
        text = read_content(path)
    try:
        fm, body = parse_frontmatter(text)
        if fm is None:
            raise ParseError("missing front matter")
        return post_from_frontmatter(
            f"{published.isoformat()}-{name}", published, fm, body, path
        )
    except ParseError as exc:
        exc.attach(path)
        raise
