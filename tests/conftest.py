"""Shared pytest fixtures for blogcorpus tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

PI_POST = """\
---
layout: post
title: Computing digits of pi
tags: [math, python]
---
A spigot formula gives any hex digit of pi directly.

```python
def bbp(n):
    return sum(1 / 16 ** k for k in range(n))
```

![convergence](/assets/bbp.png)

Slides are listed on the [talks](/talks/) page.
"""

BENCH_POST = """\
---
layout: post
title: Benchmarks
tags: python perf
---
First run.
"""

BENCH_POST_REVISED = """\
---
layout: post
title: Benchmarks
tags: python perf
---
Second run, with warm caches.
"""

BROKEN_POST = """\
---
layout: post
tags: [oops]
---
No title here.
"""

ABOUT_PAGE = """\
---
layout: page
title: About me
---
I write about numbers.
"""

TALKS_PAGE = """\
---
layout: page
title: Talks
---
1. [Digits of pi]({% post_url 2015-03-02-pi-digits %})
2. [Who am I](/about.html)
3. [Slides](https://example.com/slides.pdf)
"""


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write ``text`` to ``tmp_path / rel`` and return the path."""

    def _write(rel: str, text: str) -> Path:
        path = tmp_path / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def blog_root(tmp_path: Path, write_file) -> Path:
    """A small Jekyll-style corpus: four posts (one broken), two pages."""
    write_file("_posts/2015-03-02-pi-digits.md", PI_POST)
    write_file("_posts/2016-05-10-benchmarks.md", BENCH_POST)
    write_file("_posts/2016-05-11-benchmarks.md", BENCH_POST_REVISED)
    write_file("_posts/2017-01-01-broken.md", BROKEN_POST)
    write_file("about.md", ABOUT_PAGE)
    write_file("talks.md", TALKS_PAGE)
    write_file("README.md", "# My blog\n\nSource for the site.\n")
    write_file("_layouts/default.html", "---\ntitle: Layout\n---\n{{ content }}\n")
    return tmp_path
