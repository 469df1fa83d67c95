from __future__ import annotations

import pathlib
from typing import Optional


class ParseError(ValueError):
    """A content file could not be turned into a record."""

    def __init__(self, reason: str, path: Optional[pathlib.Path] = None):
        self.reason = reason
        self.path = path
        super().__init__(self._message())

    def _message(self) -> str:
        if self.path is None:
            return self.reason
        return f"{self.path}: {self.reason}"

    def attach(self, path: pathlib.Path) -> None:
        """Record the offending file if the raiser did not know it."""
        if self.path is None:
            self.path = path
            self.args = (self._message(),)


class DuplicateSlugError(ParseError):
    """Two content files claim the same slug under the ``fail`` policy."""
