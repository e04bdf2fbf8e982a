"""Line-driven boundary scanner.

Walks the unflushed buffer one complete line at a time, classifies each
line, and records the offsets at which a complete block ends. A trailing
line without its newline is never classified (it may still grow into a
fence, heading or list marker) unless the pass is final.

Boundaries are either hard (the block is closed) or soft (the block ends
here for display purposes but may still continue: a list whose level
decreased, a table after each row, a forced split of an oversized block).

Thread Safety:
Scanner instances are single-use. Create one per pass.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from goteo.config import DEFAULT_CONFIG, StreamConfig
from goteo.scanner.classifiers import (
    FenceClassifierMixin,
    HeadingClassifierMixin,
    ListClassifierMixin,
    TableClassifierMixin,
)
from goteo.scanner.modes import LIST_CONTINUATION_INDENT, TAB_WIDTH, LineKind, ScanMode
from goteo.scanner.state import Boundary, ScanState
from goteo.utils.logger import get_logger

logger = get_logger(__name__)


class BoundaryScanner(
    HeadingClassifierMixin,
    FenceClassifierMixin,
    ListClassifierMixin,
    TableClassifierMixin,
):
    """Finite-state boundary scanner over one buffer.

    Usage:
        >>> scanner = BoundaryScanner("# Title\\nSome text\\n\\nMore")
        >>> [b.offset for b in scanner.scan()]
        [8, 19]

    """

    def __init__(
        self,
        text: str,
        state: ScanState | None = None,
        config: StreamConfig | None = None,
    ) -> None:
        """Initialize scanner.

        Args:
            text: Unflushed buffer to scan
            state: Snapshot to resume from (copied, never mutated)
            config: Stream configuration for the size fallback
        """
        self._text = text
        self._config = config or DEFAULT_CONFIG
        self._state = state.copy() if state is not None else ScanState()
        self._boundaries: list[Boundary] = []
        self._last_offset = 0
        # Latest line end a forced split may use, with the state there
        self._fallback: tuple[int, ScanState] | None = None

    @property
    def state(self) -> ScanState:
        return self._state

    def scan(self, *, final: bool = False) -> list[Boundary]:
        """Scan the buffer and return its boundaries in ascending order.

        Args:
            final: Treat the trailing partial line as complete and close
                whatever is still pending at the end of the text.

        Returns:
            List of boundaries.
        """
        text = self._text
        text_len = len(text)
        pos = 0

        while pos < text_len:
            newline = text.find("\n", pos)
            if newline == -1:
                if not final:
                    break
                self.classify_line(text[pos:], pos, text_len)
                pos = text_len
                break
            self.classify_line(text[pos:newline], pos, newline + 1)
            pos = newline + 1
            self._note_fallback(pos)

        if final:
            self._state.blank_pending = False
            self._close(text_len)
        elif not self._boundaries and text_len > self._config.flush_threshold:
            self._force_boundary()

        return self._boundaries

    # =========================================================================
    # Line classification
    # =========================================================================

    def classify_line(self, line: str, start: int, end: int) -> LineKind:
        """Classify one line and apply its state transitions.

        Args:
            line: Line text without its newline
            start: Offset of the first character of the line
            end: Offset just past the line (and its newline)

        Returns:
            The LineKind assigned to the line.
        """
        state = self._state

        if state.mode is ScanMode.IN_FENCE:
            if self._is_closing_fence(line.rstrip("\r"), state):
                state.mode = state.fence_return
                state.fence_char = ""
                state.fence_count = 0
                self._emit(end, open=state.mode is ScanMode.IN_LIST)
                return LineKind.FENCE
            return LineKind.FENCE_INTERIOR

        content = line.strip()
        was_pipe = state.prev_pipe
        state.prev_pipe = False

        if not content:
            return self._classify_blank(end)

        indent = _measure_indent(line)

        if state.mode is ScanMode.IN_LIST and state.blank_pending:
            self._resolve_list_blank(content, indent)

        fence = self._match_fence_start(content)
        if fence is not None and (indent < 4 or state.mode is ScanMode.IN_LIST):
            if state.mode is ScanMode.IN_LIST:
                state.fence_return = ScanMode.IN_LIST
            else:
                self._close(start)
                state.fence_return = ScanMode.IDLE
            state.fence_char, state.fence_count = fence
            state.mode = ScanMode.IN_FENCE
            self._mark_content()
            return LineKind.FENCE

        if state.mode is ScanMode.IN_TABLE_ROW:
            if self._is_table_row(content):
                self._mark_content()
                self._emit(end, open=True)
                return LineKind.TABLE_ROW
            self._close(start)

        if state.mode is not ScanMode.IN_LIST and indent < 4 and self._is_atx_heading(content):
            self._close(start)
            self._mark_content()
            self._emit(end)
            return LineKind.HEADING

        if was_pipe and state.mode is ScanMode.IDLE and self._is_table_separator(content):
            state.mode = ScanMode.IN_TABLE_ROW
            self._mark_content()
            self._emit(end, open=True)
            return LineKind.TABLE_SEPARATOR

        if self._is_list_marker(content) and (indent < 4 or state.mode is ScanMode.IN_LIST):
            if state.mode is ScanMode.IN_LIST:
                if indent < state.list_indent:
                    # Shallower item: the nested list is done, the outer continues
                    self._emit(start, open=True)
            else:
                state.mode = ScanMode.IN_LIST
            state.list_indent = indent
            self._mark_content()
            return LineKind.LIST_ITEM

        state.prev_pipe = state.mode is ScanMode.IDLE and self._is_table_row(content)
        self._mark_content()
        return LineKind.TEXT

    def _classify_blank(self, end: int) -> LineKind:
        state = self._state
        if state.mode is ScanMode.IN_LIST:
            # Whether the list survives depends on the next non-blank line
            state.blank_pending = True
            state.blank_end = end
        else:
            self._close(end)
        return LineKind.BLANK

    def _resolve_list_blank(self, content: str, indent: int) -> None:
        state = self._state
        state.blank_pending = False

        if self._is_list_marker(content):
            if indent < state.list_indent:
                self._emit(state.blank_end, open=True)
            return

        if indent >= state.list_indent + LIST_CONTINUATION_INDENT:
            return

        self._close(state.blank_end)

    # =========================================================================
    # Boundary recording
    # =========================================================================

    def _mark_content(self) -> None:
        state = self._state
        if not state.pending:
            state.pending = True
            state.chunk_continues = state.carry

    def _close(self, offset: int) -> None:
        """Close the open block: hard boundary at offset if content is pending."""
        state = self._state
        if state.mode is not ScanMode.IN_FENCE:
            state.mode = ScanMode.IDLE
        if state.pending:
            self._emit(offset)
        else:
            state.carry = False

    def _emit(self, offset: int, *, open: bool = False) -> None:
        state = self._state
        if not state.pending or offset <= self._last_offset:
            return

        continues = state.chunk_continues
        state.pending = False
        state.carry = open
        state.chunk_continues = False
        self._boundaries.append(
            Boundary(offset=offset, open=open, continues=continues, state=state.copy())
        )
        self._last_offset = offset

    def _note_fallback(self, offset: int) -> None:
        state = self._state
        if (
            state.pending
            and state.mode is not ScanMode.IN_FENCE
            and not state.blank_pending
            and offset >= self._config.min_flush_offset
        ):
            self._fallback = (offset, state.copy())

    def _force_boundary(self) -> None:
        if self._fallback is None:
            return
        offset, snapshot = self._fallback
        logger.debug(
            "No boundary in %d buffered chars; forcing one at %d",
            len(self._text),
            offset,
        )
        self._state = snapshot
        self._emit(offset, open=True)


def _measure_indent(line: str) -> int:
    """Leading indentation in columns, tabs expanded to the next tab stop."""
    col = 0
    for char in line:
        if char == " ":
            col += 1
        elif char == "\t":
            col += TAB_WIDTH - (col % TAB_WIDTH)
        else:
            break
    return col


def find_boundaries(
    text: str,
    state: ScanState | None = None,
    *,
    config: StreamConfig | None = None,
    final: bool = False,
) -> list[Boundary]:
    """Find the offsets at which complete blocks end in ``text``.

    Args:
        text: Unflushed buffer
        state: Snapshot from the last flushed boundary (None for a fresh stream)
        config: Stream configuration (size fallback thresholds)
        final: Stream is complete; close everything at the end of the text

    Returns:
        Ordered list of boundaries.

    Example:
        >>> [b.offset for b in find_boundaries("one\\n\\ntwo\\n")]
        [5]
    """
    return BoundaryScanner(text, state, config).scan(final=final)
