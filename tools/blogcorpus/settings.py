from __future__ import annotations

import pathlib
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from .config import (
    CONTENT_SUFFIXES,
    DEFAULT_EXCLUDE,
    DUPLICATE_POLICIES,
    MANIFEST_NAME,
    POSTS_DIR_NAME,
)
from .utils import read_yaml


@dataclass(frozen=True)
class Settings:
    """Corpus options, read from ``corpus.yml`` at the corpus root."""

    posts_dir: str = POSTS_DIR_NAME
    suffixes: Tuple[str, ...] = CONTENT_SUFFIXES
    duplicates: str = "last"
    include_unpublished: bool = False
    exclude: Tuple[str, ...] = DEFAULT_EXCLUDE

    def __post_init__(self):
        if self.duplicates not in DUPLICATE_POLICIES:
            raise ValueError(
                f"duplicates must be one of {', '.join(DUPLICATE_POLICIES)},"
                f" got {self.duplicates!r}"
            )

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "Settings":
        kwargs: Dict[str, Any] = {}
        if data.get("posts_dir"):
            kwargs["posts_dir"] = str(data["posts_dir"]).strip("/")
        if data.get("suffixes"):
            suffixes = data["suffixes"]
            if isinstance(suffixes, str):
                suffixes = suffixes.split()
            kwargs["suffixes"] = tuple(
                s.lower() if s.startswith(".") else f".{s.lower()}"
                for s in map(str, suffixes)
            )
        if "duplicates" in data:
            kwargs["duplicates"] = str(data["duplicates"])
        if "include_unpublished" in data:
            value = data["include_unpublished"]
            if not isinstance(value, bool):
                raise ValueError(
                    f"include_unpublished must be true or false, got {value!r}"
                )
            kwargs["include_unpublished"] = value
        if data.get("exclude"):
            exclude = data["exclude"]
            if isinstance(exclude, str):
                exclude = [exclude]
            kwargs["exclude"] = tuple(map(str, exclude))
        return cls(**kwargs)


def load_settings(root: pathlib.Path) -> Settings:
    manifest = read_yaml(pathlib.Path(root) / MANIFEST_NAME)
    if not isinstance(manifest, dict):
        raise ValueError(f"{MANIFEST_NAME} must be a mapping")
    return Settings.from_mapping(manifest)
