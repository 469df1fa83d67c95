from __future__ import annotations

import pathlib
import re
from typing import Iterator, List, NamedTuple, Optional

from .config import (
    EXCERPT_SEPARATOR,
    FENCE,
    FENCE_INFO,
    MD_LINK_IMG,
    POST_URL_TAG,
)

_SCHEME = re.compile(r'^[a-zA-Z][a-zA-Z0-9+.-]*:')
_INDEX_NAMES = ("index.html", "index.md", "index.markdown")
_CONTENT_EXTS = (".html", ".md", ".markdown")


class Link(NamedTuple):
    label: str
    target: str


class CodeBlock(NamedTuple):
    language: str
    code: str


def noncode_segments(md: str) -> Iterator[str]:
    last = 0
    for m in FENCE.finditer(md):
        yield md[last : m.start()]
        last = m.end()
    yield md[last:]


def extract_code_blocks(md: str) -> List[CodeBlock]:
    blocks: List[CodeBlock] = []
    for m in FENCE.finditer(md):
        info = FENCE_INFO.match(m.group(1))
        lang = info.group("lang") if info else ""
        code = m.group(2)
        if code.startswith("\n"):
            code = code[1:]
        blocks.append(CodeBlock(lang.lower(), code.rstrip("\n")))
    return blocks


def is_external(url: str) -> bool:
    """Anything with a scheme (``https:``, ``mailto:``, ``data:``) or ``//host``."""
    return bool(_SCHEME.match(url)) or url.startswith("//")


def normalize_target(url: str) -> str:
    """Reduce a link URL to something comparable with slugs.

    ``{% post_url key %}`` becomes ``key``; site-relative URLs lose query,
    fragment, surrounding slashes, ``index.html`` and content suffixes.
    External URLs and bare ``#anchors`` are returned unchanged.
    """
    url = url.strip()
    m = POST_URL_TAG.match(url)
    if m:
        return m.group("key")
    if is_external(url) or url.startswith("#"):
        return url

    path = re.split(r'[?#]', url, maxsplit=1)[0]
    while path.startswith("./"):
        path = path[2:]
    path = path.strip("/")
    for name in _INDEX_NAMES:
        if path == name:
            return ""
        if path.endswith("/" + name):
            path = path[: -len(name) - 1]
            break
    lower = path.lower()
    for ext in _CONTENT_EXTS:
        if lower.endswith(ext):
            path = path[: -len(ext)]
            break
    return path


def is_content_target(target: str) -> bool:
    """True for internal targets that should name a post or page."""
    if not target or is_external(target) or target.startswith("#"):
        return False
    return pathlib.PurePosixPath(target).suffix == ""


def extract_links(md: str) -> List[Link]:
    links: List[Link] = []
    for seg in noncode_segments(md):
        for m in MD_LINK_IMG.finditer(seg):
            if m.group(1):
                continue
            links.append(Link(m.group("alt").strip(), normalize_target(m.group("url"))))
    return links


def extract_images(md: str) -> List[str]:
    return [
        m.group("url")
        for seg in noncode_segments(md)
        for m in MD_LINK_IMG.finditer(seg)
        if m.group(1)
    ]


def excerpt(md: str, separator: Optional[str] = None) -> str:
    """Text before ``separator``, else the first paragraph outside code."""
    md = md.strip()
    if not md:
        return ""
    if separator:
        return md.split(separator, 1)[0].strip()
    for seg in noncode_segments(md):
        for para in seg.split(EXCERPT_SEPARATOR):
            if para.strip():
                return para.strip()
    return ""
