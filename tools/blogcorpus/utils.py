from __future__ import annotations

import pathlib
import re
import unicodedata
from datetime import date, datetime
from typing import Any, Dict, FrozenSet, Optional, Tuple

import yaml

from .config import SLUG_RE
from .errors import ParseError


def slugify(s: str) -> str:
    return re.sub(r"-{2,}", "-", SLUG_RE.sub("-", s.lower()).strip("-"))


def natural_key(s: str):
    return [int(t) if t.isdigit() else t for t in re.split(r'(\d+)', s.lower())]


def normalize_title(title: str) -> str:
    """Lower-case, NFKC-normalize, drop punctuation and collapse whitespace."""
    text = unicodedata.normalize("NFKC", title.lower())
    text = re.sub(r"[^\w\s]", "", text)
    return re.sub(r"\s+", " ", text).strip()


def read_yaml(path: pathlib.Path) -> Dict[str, Any]:
    if path.exists():
        return yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return {}


def read_content(path: pathlib.Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ParseError(f"not valid UTF-8: {exc.reason}", path) from exc


def _norm_text(s: str) -> str:
    return s.replace('\r\n', '\n').replace('\r', '\n').lstrip('\ufeff')


def _coerce_date_like(v):
    if isinstance(v, datetime):
        return v.date()
    if isinstance(v, date):
        return v
    if isinstance(v, str):
        s = v.strip().strip('"').strip("'")
        try:
            return date.fromisoformat(s)
        except ValueError:
            return v
    return v


def normalize_frontmatter_dates(
    fm: Dict[str, Any],
    keys=("date", "last_modified_at"),
) -> Dict[str, Any]:
    if not isinstance(fm, dict):
        return fm
    for k in keys:
        if k in fm:
            fm[k] = _coerce_date_like(fm[k])
    return fm


def plain_dates(fm: Dict[str, Any]) -> Dict[str, Any]:
    fm = normalize_frontmatter_dates(fm)
    for k, v in fm.items():
        if isinstance(v, datetime):
            fm[k] = v.date()
    return fm


def yaml_frontmatter_block(data: Dict[str, Any]) -> str:
    data = plain_dates(dict(data))
    dumped = yaml.safe_dump(
        data, sort_keys=False, allow_unicode=True
    ).rstrip()
    return f"---\n{dumped}\n---\n\n"


def has_frontmatter(text: str) -> bool:
    return _norm_text(text).startswith("---\n")


def parse_frontmatter(text: str) -> Tuple[Optional[Dict[str, Any]], str]:
    """Split ``text`` into its front-matter mapping and body.

    Returns ``(None, text)`` when there is no opening ``---`` line. An
    opening delimiter without a closing one, YAML that does not parse, or
    YAML that is not a mapping raises :class:`ParseError`.
    """
    text = _norm_text(text)
    if not text.startswith("---\n"):
        return None, text

    lines = text.splitlines(keepends=True)
    for i in range(1, len(lines)):
        if lines[i].strip() == "---":
            fm_text = "".join(lines[1:i])
            body = "".join(lines[i + 1 :])
            try:
                fm = yaml.safe_load(fm_text)
            except (yaml.YAMLError, ValueError) as exc:
                # PyYAML raises a bare ValueError for impossible timestamps.
                raise ParseError(f"invalid front matter: {exc}") from exc
            if fm is None:
                fm = {}
            if not isinstance(fm, dict):
                raise ParseError(
                    f"front matter must be a mapping, got {type(fm).__name__}"
                )
            return fm, body.lstrip("\n")
    raise ParseError("front matter is not closed by '---'")


def split_tags(value: Any) -> FrozenSet[str]:
    """Accept a YAML list or a space-separated string of tags."""
    if value is None:
        return frozenset()
    if isinstance(value, str):
        return frozenset(value.split())
    if isinstance(value, (list, tuple, set, frozenset)):
        tags = set()
        for t in value:
            if t is None:
                continue
            if isinstance(t, (dict, list)):
                raise ParseError(f"tag must be a scalar, got {t!r}")
            s = str(t).strip()
            if s:
                tags.add(s)
        return frozenset(tags)
    if isinstance(value, (int, float)):
        return frozenset({str(value)})
    raise ParseError(f"tags must be a list or a string, got {type(value).__name__}")


def require_title(fm: Dict[str, Any]) -> str:
    title = fm.get("title")
    if title is None:
        raise ParseError("missing required key 'title'")
    if isinstance(title, (dict, list)):
        raise ParseError("'title' must be a string")
    title = str(title).strip()
    if not title:
        raise ParseError("'title' is empty")
    return title
