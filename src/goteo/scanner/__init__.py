"""Boundary scanner for streaming Markdown.

This package decides which prefix of the unflushed buffer forms complete
blocks. It scans whole lines, classifies them, and records boundaries.

Architecture:
scanner/
├── __init__.py          # Re-exports BoundaryScanner, find_boundaries
├── core.py              # BoundaryScanner (mixin composition + transitions)
├── modes.py             # ScanMode, LineKind enums and constants
├── state.py             # ScanState, Boundary
└── classifiers/         # Line classification mixins
    ├── fence.py         # Fenced code open/close
    ├── heading.py       # ATX heading
    ├── list.py          # List markers, thematic breaks
    └── table.py         # Pipe rows and delimiter rows

Usage:
    >>> from goteo.scanner import find_boundaries
    >>> [b.offset for b in find_boundaries("# Hi\\npara\\n\\n")]
    [5, 11]

"""

from goteo.scanner.core import BoundaryScanner, find_boundaries
from goteo.scanner.modes import LineKind, ScanMode
from goteo.scanner.state import Boundary, ScanState

__all__ = ["Boundary", "BoundaryScanner", "LineKind", "ScanMode", "ScanState", "find_boundaries"]
