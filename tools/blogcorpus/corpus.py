from __future__ import annotations

import pathlib
import sys
from collections import Counter
from typing import Dict, Iterator, List, Optional, Tuple

from .config import DATED_PERMALINK
from .errors import DuplicateSlugError, ParseError
from .markdown_processing import Link, is_content_target, normalize_target
from .models import Page, Post, Record
from .utils import normalize_title, slugify


class Corpus:
    """Slug -> record mapping with listing and lookup helpers.

    Records keep discovery order. Files that failed to parse are kept in
    ``errors``; records replaced by a later duplicate slug in ``shadowed``.
    """

    def __init__(self, root: Optional[pathlib.Path] = None):
        self.root = root
        self.errors: List[ParseError] = []
        self.shadowed: List[Record] = []
        self._records: Dict[str, Record] = {}

    # ---------- building

    def add(self, record: Record, duplicates: str = "last") -> None:
        existing = self._records.get(record.slug)
        if existing is not None:
            if duplicates == "fail":
                raise DuplicateSlugError(
                    f"slug {record.slug!r} already defined by {existing.path}",
                    record.path,
                )
            print(
                f"! duplicate slug {record.slug}: {record.path} replaces"
                f" {existing.path}",
                file=sys.stderr,
            )
            self.shadowed.append(existing)
            del self._records[record.slug]
        self._records[record.slug] = record

    # ---------- mapping protocol

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self._records.values())

    def __contains__(self, slug: object) -> bool:
        return slug in self._records

    def __getitem__(self, slug: str) -> Record:
        return self._records[slug]

    def get(self, slug: str, default: Optional[Record] = None) -> Optional[Record]:
        return self._records.get(slug, default)

    def slugs(self) -> List[str]:
        return list(self._records)

    # ---------- listings

    def posts(self) -> List[Post]:
        """Posts, newest first."""
        posts = [r for r in self._records.values() if isinstance(r, Post)]
        return sorted(posts, key=lambda p: (p.publish_date, p.slug), reverse=True)

    def pages(self) -> List[Page]:
        return [r for r in self._records.values() if isinstance(r, Page)]

    def by_tag(self, tag: str) -> List[Record]:
        return [r for r in [*self.posts(), *self.pages()] if tag in r.tags]

    def tags(self) -> Counter:
        counts: Counter = Counter()
        for record in self._records.values():
            counts.update(record.tags)
        return counts

    def find_by_title(self, title: str) -> List[Record]:
        key = normalize_title(title)
        return [
            r for r in [*self.posts(), *self.pages()]
            if normalize_title(r.title) == key
        ]

    def duplicate_titles(self) -> Dict[str, List[Record]]:
        groups: Dict[str, List[Record]] = {}
        for record in [*self.posts(), *self.pages()]:
            groups.setdefault(normalize_title(record.title), []).append(record)
        return {k: v for k, v in groups.items() if len(v) > 1}

    def neighbours(self, slug: str) -> Tuple[Optional[Post], Optional[Post]]:
        """The chronologically previous and next post around ``slug``."""
        chrono = self.posts()[::-1]
        for i, post in enumerate(chrono):
            if post.slug == slug:
                prv = chrono[i - 1] if i > 0 else None
                nxt = chrono[i + 1] if i < len(chrono) - 1 else None
                return prv, nxt
        raise KeyError(slug)

    # ---------- link resolution

    def _permalinks(self) -> Dict[str, Record]:
        return {
            normalize_target(r.permalink): r
            for r in self._records.values()
            if r.meta.get("permalink")
        }

    def resolve(self, target: str) -> Optional[Record]:
        """Find the record a (normalized) link target points at."""
        target = normalize_target(target)
        if target in self._records:
            return self._records[target]
        slug = "/".join(p for p in (slugify(s) for s in target.split("/")) if p)
        if slug in self._records:
            return self._records[slug]
        m = DATED_PERMALINK.match(target)
        if m:
            key = (f"{m.group('year')}-{m.group('month')}-{m.group('day')}"
                   f"-{slugify(m.group('name'))}")
            if key in self._records:
                return self._records[key]
        return self._permalinks().get(target)

    def unresolved_links(self) -> List[Tuple[Record, Link]]:
        dangling: List[Tuple[Record, Link]] = []
        for record in self._records.values():
            for link in record.links:
                if not is_content_target(link.target):
                    continue
                if self.resolve(link.target) is None:
                    dangling.append((record, link))
        return dangling
