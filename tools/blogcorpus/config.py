#!/usr/bin/env python3
from __future__ import annotations

import re

# ---------- Config

MANIFEST_NAME = "corpus.yml"
POSTS_DIR_NAME = "_posts"
CONTENT_SUFFIXES = (".md", ".markdown", ".html")
DEFAULT_POST_LAYOUT = "post"
DEFAULT_PAGE_LAYOUT = "page"
DUPLICATE_POLICIES = ("last", "fail")
DEFAULT_EXCLUDE = ("node_modules/*", "vendor/*")
EXCERPT_SEPARATOR = "\n\n"

# Some shared regexes

POST_FILENAME = re.compile(
    r'^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})-(?P<name>.+)$'
)
MD_LINK_IMG = re.compile(
    r'(!?)\[(?P<alt>[^\]]*)\]'
    r'\((?P<url>\{%.*?%\}|[^)\s]+)(?:\s+"[^"]*")?\)'
)
POST_URL_TAG = re.compile(r'^\{%\s*post_url\s+(?P<key>\S+?)\s*%\}$')
DATED_PERMALINK = re.compile(
    r'^(?P<year>\d{4})/(?P<month>\d{2})/(?P<day>\d{2})/(?P<name>[^/]+)$'
)
FENCE = re.compile(r"(^```.*?$)(.*?)(^```$)",
                   re.MULTILINE | re.DOTALL)
FENCE_INFO = re.compile(r'^```\s*(?P<lang>[\w+#.-]*)')
SLUG_RE = re.compile(r"[^a-z0-9-]+")
