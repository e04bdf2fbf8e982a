"""Scan state and boundary records.

ScanState is the mutable per-pass state of the boundary scanner. Each pass
starts from a copy of the snapshot stored with the last flushed boundary,
so a pass that begins right after a soft boundary (inside a list or a
table) resumes in the same mode.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from goteo.scanner.modes import ScanMode


@dataclass(slots=True)
class ScanState:
    """Mutable line-scan state.

    Attributes:
        mode: Current scanner mode
        fence_char: Character of the open fence ("`" or "~")
        fence_count: Length of the open fence marker
        fence_return: Mode restored when the open fence closes
        list_indent: Indentation of the most recent list item
        blank_pending: A blank run inside a list awaits the next line
        blank_end: Offset just past the pending blank run
        prev_pipe: The previous line was a possible table header
        pending: Content has accumulated since the last boundary
        carry: The last boundary left its block open and nothing has
            closed it since
        chunk_continues: The pending content continues that open block

    """

    mode: ScanMode = ScanMode.IDLE
    fence_char: str = ""
    fence_count: int = 0
    fence_return: ScanMode = ScanMode.IDLE
    list_indent: int = 0
    blank_pending: bool = False
    blank_end: int = 0
    prev_pipe: bool = False
    pending: bool = False
    carry: bool = False
    chunk_continues: bool = False

    def copy(self) -> ScanState:
        return replace(self)


@dataclass(frozen=True, slots=True)
class Boundary:
    """Exclusive end of one complete block in the scanned text.

    Attributes:
        offset: Offset just past the block
        open: The block may still accept continuation (soft boundary)
        continues: The block continues the one left open by the previous
            boundary
        state: Scan state to resume from after this boundary

    """

    offset: int
    open: bool = False
    continues: bool = False
    state: ScanState | None = None
