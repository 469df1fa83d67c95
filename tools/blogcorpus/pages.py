from __future__ import annotations

import pathlib
from typing import Any, Dict, List, Optional

from .config import DEFAULT_PAGE_LAYOUT
from .errors import ParseError
from .markdown_processing import Link, extract_links, normalize_target
from .models import Page
from .utils import (
    parse_frontmatter,
    plain_dates,
    read_content,
    require_title,
    slugify,
    split_tags,
)

RECORD_KEYS = ("layout", "title", "tags", "tag")


def page_slug(path: pathlib.Path, root: pathlib.Path) -> str:
    """``talks.md`` -> ``talks``; ``about/index.md`` -> ``about``."""
    rel = path.relative_to(root).with_suffix("")
    parts = [slugify(p) for p in rel.parts]
    if len(parts) > 1 and parts[-1] == "index":
        parts = parts[:-1]
    slug = "/".join(p for p in parts if p)
    if not slug:
        raise ParseError("cannot derive a slug from the file name", path)
    return slug


def _frontmatter_links(value: Any) -> List[Link]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ParseError("'links' must be a list")
    links: List[Link] = []
    for li in value:
        if isinstance(li, str):
            links.append(Link(li, normalize_target(li)))
        elif isinstance(li, dict) and li.get("url"):
            url = str(li["url"])
            links.append(Link(str(li.get("title") or url), normalize_target(url)))
        else:
            raise ParseError(f"link entry needs a 'url': {li!r}")
    return links


def page_from_frontmatter(
    slug: str,
    fm: Dict[str, Any],
    body: str,
    path: Optional[pathlib.Path] = None,
) -> Page:
    fm = plain_dates(dict(fm))
    links = _frontmatter_links(fm.get("links")) + extract_links(body)
    return Page(
        slug=slug,
        title=require_title(fm),
        body=body,
        links=tuple(links),
        tags=split_tags(fm["tags"] if "tags" in fm else fm.get("tag")),
        layout=str(fm.get("layout") or DEFAULT_PAGE_LAYOUT),
        meta={k: v for k, v in fm.items() if k not in RECORD_KEYS},
        path=path,
    )


def load_page(
    path: pathlib.Path,
    root: pathlib.Path,
    text: Optional[str] = None,
) -> Page:
    slug = page_slug(path, root)
    if text is None:
        text = read_content(path)
    try:
        fm, body = parse_frontmatter(text)
        if fm is None:
            raise ParseError("missing front matter")
        return page_from_frontmatter(slug, fm, body, path)
    except ParseError as exc:
        exc.attach(path)
        raise
