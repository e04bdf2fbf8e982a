"""
Goteo: incremental Markdown to HTML for streamed text

Converts a growing, possibly mid-token Markdown stream (live output from a
language model, for instance) into stable, sanitized HTML blocks. Content
already on screen is never re-rendered from scratch: only complete blocks
are converted, and the last block is rewritten in place when new text
continues it.

Quick Start:
    >>> from goteo import MarkdownStream
    >>> stream = MarkdownStream()
    >>> for delta in ["# Hel", "lo\\n", "Some *text*", " here.\\n\\n"]:
    ...     stream.append(delta)
    >>> stream.snapshot()
    [{'id': 'block-0', 'html': '<h1>Hello</h1>'}, {'id': 'block-1', 'html': '<p>Some <em>text</em> here.</p>'}]

    >>> # Or in one call
    >>> from goteo import render_stream
    >>> render_stream(["| a |\\n", "|---|\\n", "| 1 |\\n"])[0]["id"]
    'block-0'

Custom Collaborators:
    >>> stream = MarkdownStream(converter=my_convert, sanitizer=my_sanitize)

Installation:
    pip install goteo                # markdown-it-py + mdit-py-plugins
    pip install goteo[test]          # + pytest, hypothesis
"""

from goteo.accumulator import Chunk, StreamAccumulator
from goteo.config import DEFAULT_CONFIG, StreamConfig
from goteo.convert import MarkdownConverter
from goteo.errors import ConfigError, GoteoError, RenderError
from goteo.html import DEFAULT_ALLOW_LIST, AllowList, sanitize_html, split_blocks
from goteo.merge import BlockKind, MergePolicy, can_merge, classify_block, merge_blocks
from goteo.pipeline import RenderPipeline
from goteo.protocols import Converter, Sanitizer
from goteo.scanner import Boundary, BoundaryScanner, ScanState, find_boundaries
from goteo.session import MarkdownStream, render_stream
from goteo.store import BlockStore, RenderedBlock

__version__ = "0.1.0"

__all__ = [  # noqa: RUF022 - grouped by category
    # Version
    "__version__",
    # Core API
    "MarkdownStream",
    "render_stream",
    # Streaming components
    "Chunk",
    "StreamAccumulator",
    "RenderPipeline",
    # Boundary detection
    "Boundary",
    "BoundaryScanner",
    "ScanState",
    "find_boundaries",
    # HTML
    "DEFAULT_ALLOW_LIST",
    "AllowList",
    "sanitize_html",
    "split_blocks",
    # Merge engine
    "BlockKind",
    "MergePolicy",
    "can_merge",
    "classify_block",
    "merge_blocks",
    # Block store
    "BlockStore",
    "RenderedBlock",
    # Collaborators
    "Converter",
    "MarkdownConverter",
    "Sanitizer",
    # Configuration
    "DEFAULT_CONFIG",
    "StreamConfig",
    # Errors
    "ConfigError",
    "GoteoError",
    "RenderError",
]
