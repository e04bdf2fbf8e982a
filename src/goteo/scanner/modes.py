"""Scanner operating modes and line kinds.

This module defines the finite state machine modes for the boundary
scanner and the classification tags produced for each source line.
"""

from __future__ import annotations

from enum import Enum, auto


class ScanMode(Enum):
    """Boundary scanner operating modes.

    The scanner switches between modes based on context:
    - IDLE: Between blocks or inside a paragraph-like block
    - IN_FENCE: Inside fenced code block
    - IN_LIST: Inside a list (items, continuations, blank-line lookahead)
    - IN_TABLE_ROW: After a table separator, expecting rows

    """

    IDLE = auto()
    IN_FENCE = auto()
    IN_LIST = auto()
    IN_TABLE_ROW = auto()


class LineKind(Enum):
    """Classification of a single source line."""

    FENCE = auto()  # Opening or closing fence marker
    FENCE_INTERIOR = auto()  # Any line inside an open fence
    HEADING = auto()  # ATX heading
    LIST_ITEM = auto()  # Bullet or ordinal list marker
    TABLE_SEPARATOR = auto()  # | --- | :-: | delimiter row
    TABLE_ROW = auto()  # Pipe row while a table is open
    BLANK = auto()
    TEXT = auto()


# Columns a continuation line must be indented past the list level to stay
# inside the list after a blank line
LIST_CONTINUATION_INDENT = 2

# Tab stop used when measuring indentation
TAB_WIDTH = 4
