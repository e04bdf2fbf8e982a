"""Ordered store of rendered blocks.

The store is what the host rendering surface sees: an append-only list of
``{id, html}`` entries. Only the last entry is ever rewritten, always as a
whole (a new frozen RenderedBlock with the same id), so a reader never
observes a half-merged block.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class RenderedBlock:
    """One displayed block.

    Attributes:
        id: Stable identifier, assigned once and never reused in a stream
        html: Sanitized HTML of one or more complete top-level elements
        open: The block may still accept continuation content

    """

    id: str
    html: str
    open: bool = False

    def to_dict(self) -> dict[str, str]:
        """Host-facing representation."""
        return {"id": self.id, "html": self.html}


class BlockStore:
    """Append-only sequence of RenderedBlock with monotonically assigned ids.

    Usage:
        >>> store = BlockStore()
        >>> store.append("<p>a</p>").id
        'block-0'
        >>> store.replace_last("<p>a b</p>").id
        'block-0'

    """

    __slots__ = ("_blocks", "_counter", "_prefix")

    def __init__(self, id_prefix: str = "block-") -> None:
        self._blocks: list[RenderedBlock] = []
        self._counter = 0
        self._prefix = id_prefix

    def __len__(self) -> int:
        return len(self._blocks)

    def __iter__(self) -> Iterator[RenderedBlock]:
        return iter(tuple(self._blocks))

    def __getitem__(self, index: int) -> RenderedBlock:
        return self._blocks[index]

    @property
    def blocks(self) -> tuple[RenderedBlock, ...]:
        return tuple(self._blocks)

    @property
    def last(self) -> RenderedBlock | None:
        return self._blocks[-1] if self._blocks else None

    def append(self, html: str, *, open: bool = False) -> RenderedBlock:
        """Append a block with a freshly allocated identifier."""
        block = RenderedBlock(id=f"{self._prefix}{self._counter}", html=html, open=open)
        self._counter += 1
        self._blocks.append(block)
        return block

    def replace_last(self, html: str, *, open: bool = False) -> RenderedBlock:
        """Rewrite the last block's content, keeping its identifier.

        Raises:
            IndexError: If the store is empty.
        """
        if not self._blocks:
            raise IndexError("replace_last on an empty BlockStore")
        block = replace(self._blocks[-1], html=html, open=open)
        self._blocks[-1] = block
        return block

    def close_last(self) -> None:
        """Mark the last block as no longer accepting continuation."""
        if self._blocks and self._blocks[-1].open:
            self._blocks[-1] = replace(self._blocks[-1], open=False)

    def clear(self) -> None:
        """Drop every block and restart identifier allocation."""
        self._blocks.clear()
        self._counter = 0

    def snapshot(self) -> list[dict[str, str]]:
        """Ordered ``{id, html}`` entries for the host."""
        return [block.to_dict() for block in self._blocks]
