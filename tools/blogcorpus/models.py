from __future__ import annotations

import pathlib
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, FrozenSet, List, Optional, Tuple, Union

from .config import DEFAULT_PAGE_LAYOUT, DEFAULT_POST_LAYOUT
from .markdown_processing import (
    CodeBlock,
    Link,
    excerpt,
    extract_code_blocks,
    extract_images,
    extract_links,
)


@dataclass(frozen=True)
class _Document:
    # `meta` holds every front-matter key the record does not model itself.

    @property
    def images(self) -> List[str]:
        return extract_images(self.body)

    @property
    def code_blocks(self) -> List[CodeBlock]:
        return extract_code_blocks(self.body)

    @property
    def excerpt(self) -> str:
        sep = self.meta.get("excerpt_separator")
        return excerpt(self.body, str(sep) if sep else None)

    @property
    def published(self) -> bool:
        return self.meta.get("published", True) is not False


@dataclass(frozen=True)
class Post(_Document):
    slug: str
    publish_date: date
    title: str
    body: str = ""
    tags: FrozenSet[str] = frozenset()
    layout: str = DEFAULT_POST_LAYOUT
    meta: Dict[str, Any] = field(default_factory=dict, hash=False)
    path: Optional[pathlib.Path] = field(default=None, compare=False)

    @property
    def name(self) -> str:
        """The slug without its ``YYYY-MM-DD-`` prefix."""
        return self.slug[11:]

    @property
    def permalink(self) -> str:
        if self.meta.get("permalink"):
            return str(self.meta["permalink"])
        d = self.publish_date
        return f"/{d:%Y}/{d:%m}/{d:%d}/{self.name}.html"

    @property
    def links(self) -> Tuple[Link, ...]:
        return tuple(extract_links(self.body))


@dataclass(frozen=True)
class Page(_Document):
    slug: str
    title: str
    body: str = ""
    links: Tuple[Link, ...] = ()
    tags: FrozenSet[str] = frozenset()
    layout: str = DEFAULT_PAGE_LAYOUT
    meta: Dict[str, Any] = field(default_factory=dict, hash=False)
    path: Optional[pathlib.Path] = field(default=None, compare=False)

    @property
    def permalink(self) -> str:
        if self.meta.get("permalink"):
            return str(self.meta["permalink"])
        return "/" if self.slug == "index" else f"/{self.slug}.html"


Record = Union[Post, Page]
