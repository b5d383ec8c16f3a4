"""In-memory ordered block sequence for a single page."""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Iterable, Iterator, Mapping

from pydantic import ValidationError

from page_blocks.errors import BlockStoreError
from page_blocks.models.blocks import (
    Block,
    BlockType,
    StructuredContent,
    StyleRecord,
    build_block,
    canonical_block_type,
    content_model_for,
)
from page_blocks.models.page import PageSnapshot, Theme
from page_blocks.parser.html_parser import BLOCK_ID_PREFIX

logger = logging.getLogger(__name__)

ChangeHook = Callable[[PageSnapshot], None]

_GENERATED_ID = re.compile(rf"^{re.escape(BLOCK_ID_PREFIX)}(\d+)$")
_UPDATABLE_FIELDS = frozenset({"id", "type", "content", "styles"})


class OrderedBlockStore:
    """Authoritative ordered blocks and theme of one page.

    All edits go through this class so ids stay unique and order indexes stay
    dense. Each edit calls ``on_change`` with a fresh ``PageSnapshot``; hook
    failures are logged and never reach the caller.
    """

    def __init__(
        self,
        project_id: str,
        page_id: str,
        *,
        blocks: Iterable[Block] = (),
        theme: Theme | None = None,
        on_change: ChangeHook | None = None,
    ):
        self.project_id = project_id
        self.page_id = page_id
        self.on_change = on_change
        self._blocks: list[Block] = []
        self._theme = theme or Theme()
        self._next_id = 1
        self.load(blocks, theme, notify=False)

    # ------------------------------------------------------------------ Queries
    @property
    def blocks(self) -> tuple[Block, ...]:
        return tuple(self._blocks)

    @property
    def theme(self) -> Theme:
        return self._theme

    def __len__(self) -> int:
        return len(self._blocks)

    def __iter__(self) -> Iterator[Block]:
        return iter(tuple(self._blocks))

    def index_of(self, block_id: str) -> int | None:
        for index, block in enumerate(self._blocks):
            if block.id == block_id:
                return index
        return None

    def get(self, block_id: str) -> Block | None:
        index = self.index_of(block_id)
        return None if index is None else self._blocks[index]

    def order_indexes(self) -> list[tuple[str, int]]:
        return [(block.id, index) for index, block in enumerate(self._blocks)]

    def snapshot(self) -> PageSnapshot:
        return PageSnapshot(
            project_id=self.project_id,
            page_id=self.page_id,
            blocks=tuple(self._blocks),
            theme=self._theme,
        )

    # ----------------------------------------------------------- Mutating ops
    def new_block(
        self,
        block_type: BlockType | str,
        content: Any = None,
        *,
        styles: StyleRecord | Mapping[str, Any] | None = None,
    ) -> Block:
        """Build a block with a fresh id; placeholder content when ``content`` is omitted.

        The block is not inserted.
        """
        return build_block(
            block_type,
            block_id=self._allocate_id(),
            content=content,
            styles=dict(styles) if isinstance(styles, Mapping) else styles,
        )

    def insert_at(self, block: Block, index: int) -> int:
        """Insert ``block`` at ``index`` clamped to ``[0, len]``; return the used index."""
        if self.index_of(block.id) is not None:
            raise BlockStoreError(f"Block {block.id} already exists on page {self.page_id}.")
        position = max(0, min(index, len(self._blocks)))
        self._blocks.insert(position, block)
        self._observe_id(block.id)
        self._notify()
        return position

    def append(self, block: Block) -> int:
        return self.insert_at(block, len(self._blocks))

    def delete_at(self, index: int) -> Block | None:
        """Remove the block at ``index``; out-of-range indexes are ignored."""
        if not 0 <= index < len(self._blocks):
            return None
        removed = self._blocks.pop(index)
        self._notify()
        return removed

    def delete_by_id(self, block_id: str) -> Block | None:
        index = self.index_of(block_id)
        if index is None:
            return None
        return self.delete_at(index)

    def move_to(self, block_id: str, target_index: int) -> bool:
        """Move ``block_id`` to ``target_index`` (clamped). Return whether order changed."""
        source = self.index_of(block_id)
        if source is None:
            return False
        target = max(0, min(target_index, len(self._blocks) - 1))
        if target == source:
            return False
        block = self._blocks.pop(source)
        self._blocks.insert(target, block)
        self._notify()
        return True

    def move_onto(self, active_id: str, over_id: str) -> bool:
        """Drop ``active_id`` where ``over_id`` currently sits (drag-end semantics)."""
        if active_id == over_id:
            return False
        target = self.index_of(over_id)
        if target is None:
            return False
        return self.move_to(active_id, target)

    def replace_content(self, block_id: str, update: Mapping[str, Any]) -> Block | None:
        """Merge ``update`` into the block without moving it.

        ``update`` may carry ``type``, ``content`` and ``styles``. Mapping
        content merges into structured payloads, mapping styles merge into the
        current style record and ``styles=None`` clears them. Unknown ids are
        ignored.
        """
        index = self.index_of(block_id)
        if index is None:
            return None

        unknown = set(update) - _UPDATABLE_FIELDS
        if unknown:
            raise BlockStoreError(f"Cannot update block field(s): {sorted(unknown)}.")
        if update.get("id", block_id) != block_id:
            raise BlockStoreError(f"Block ids are immutable (tried {block_id} -> {update['id']}).")

        current = self._blocks[index]
        block_type = self._resolve_type(current, update)
        content = self._merge_content(current, block_type, update)

        try:
            styles = self._merge_styles(current, update)
            updated = build_block(block_type, block_id=block_id, content=content, styles=styles)
        except ValidationError as exc:
            raise BlockStoreError(f"Invalid update for block {block_id}: {exc}") from exc

        self._blocks[index] = updated
        self._notify()
        return updated

    def set_theme(self, theme: Theme) -> None:
        self._theme = theme
        self._notify()

    def load(
        self,
        blocks: Iterable[Block],
        theme: Theme | None = None,
        *,
        notify: bool = True,
    ) -> None:
        """Replace the whole sequence (and theme when given)."""
        incoming = list(blocks)
        seen: set[str] = set()
        for block in incoming:
            if block.id in seen:
                raise BlockStoreError(f"Duplicate block id {block.id} on page {self.page_id}.")
            seen.add(block.id)

        self._blocks = incoming
        if theme is not None:
            self._theme = theme
        for block in incoming:
            self._observe_id(block.id)
        if notify:
            self._notify()

    def clear(self) -> None:
        """Forget the page's blocks and theme; used when the page is deleted."""
        self._blocks = []
        self._theme = Theme()

    # ----------------------------------------------------------------- Helpers
    def _allocate_id(self) -> str:
        existing = {block.id for block in self._blocks}
        while True:
            candidate = f"{BLOCK_ID_PREFIX}{self._next_id}"
            self._next_id += 1
            if candidate not in existing:
                return candidate

    def _observe_id(self, block_id: str) -> None:
        match = _GENERATED_ID.match(block_id)
        if match:
            self._next_id = max(self._next_id, int(match.group(1)) + 1)

    @staticmethod
    def _resolve_type(current: Block, update: Mapping[str, Any]) -> BlockType:
        if "type" not in update:
            return current.type
        raw = update["type"]
        resolved = raw if isinstance(raw, BlockType) else canonical_block_type(raw)
        if resolved is None:
            raise BlockStoreError(f"Unknown block type: {raw!r}")
        return resolved

    @staticmethod
    def _merge_content(current: Block, block_type: BlockType, update: Mapping[str, Any]) -> Any:
        if "content" not in update:
            if block_type is current.type:
                return current.content
            if content_model_for(block_type) is None and isinstance(current.content, str):
                return current.content
            raise BlockStoreError(
                f"Changing block {current.id} to {block_type.value} requires new content."
            )

        content = update["content"]
        if (
            isinstance(content, Mapping)
            and block_type is current.type
            and isinstance(current.content, StructuredContent)
        ):
            return {**current.content.model_dump(), **content}
        return content

    @staticmethod
    def _merge_styles(current: Block, update: Mapping[str, Any]) -> StyleRecord | None:
        if "styles" not in update:
            return current.styles
        styles = update["styles"]
        if styles is None:
            return None
        if isinstance(styles, StyleRecord):
            return styles
        incoming = StyleRecord.model_validate(dict(styles)).model_dump(exclude_unset=True)
        base = current.styles.model_dump(exclude_none=True) if current.styles else {}
        return StyleRecord(**{**base, **incoming})

    def _notify(self) -> None:
        if self.on_change is None:
            return
        snapshot = self.snapshot()
        try:
            self.on_change(snapshot)
        except Exception:
            logger.exception("Change hook failed for page %s/%s", self.project_id, self.page_id)


__all__ = ["ChangeHook", "OrderedBlockStore"]
