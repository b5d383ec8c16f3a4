"""Error and warning types shared across the package."""

from __future__ import annotations

from dataclasses import dataclass


class StructuralParseWarning(UserWarning):
    """Emitted when a document has no wrapper or the wrapper yields no blocks."""


@dataclass(frozen=True, slots=True)
class ContentExtractionGap:
    """A recognised block was missing an expected sub-element."""

    block_id: str
    field: str


class SerializationError(ValueError):
    """Raised when blocks cannot be written back into a theme document."""


class BlockStoreError(RuntimeError):
    """Raised when an OrderedBlockStore operation would break its invariants."""


class PersistenceError(RuntimeError):
    """Raised when the storage collaborator fails to save or load a page."""


__all__ = [
    "BlockStoreError",
    "ContentExtractionGap",
    "PersistenceError",
    "SerializationError",
    "StructuralParseWarning",
]
