"""Runtime configuration objects."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_WRAPPER_TAG = "main"
DEFAULT_MARKER_ATTRIBUTES: tuple[str, ...] = ("data-element", "data-type")
DEFAULT_TREE_BUILDER = "lxml"


@dataclass(slots=True)
class ParserConfig:
    """Settings shared by the HTML parser and serializer.

    ``marker_attributes`` are checked in order: the first entry is the primary
    type marker, later entries are accepted for older documents.
    ``features`` is handed to BeautifulSoup and selects the tree builder.
    """

    wrapper_tag: str = DEFAULT_WRAPPER_TAG
    marker_attributes: tuple[str, ...] = DEFAULT_MARKER_ATTRIBUTES
    features: str = DEFAULT_TREE_BUILDER

    def __post_init__(self) -> None:
        self.wrapper_tag = self.wrapper_tag.lower()
        if not self.marker_attributes:
            raise ValueError("At least one marker attribute is required.")

    @property
    def primary_marker(self) -> str:
        return self.marker_attributes[0]


@dataclass(slots=True)
class StorageConfig:
    """Database settings for the bundled storage client."""

    database_url: str | None = None
    sqlite_path: str | None = None
    echo: bool = False

    def __post_init__(self) -> None:
        if self.database_url is None and self.sqlite_path is None:
            self.database_url = os.getenv("PAGE_BLOCKS_DATABASE_URL") or os.getenv("DATABASE_URL")


__all__ = [
    "DEFAULT_MARKER_ATTRIBUTES",
    "DEFAULT_TREE_BUILDER",
    "DEFAULT_WRAPPER_TAG",
    "ParserConfig",
    "StorageConfig",
]
