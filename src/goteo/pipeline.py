"""Render pipeline: chunk to stored blocks.

Each flushed chunk goes through the same stages:

    convert -> sanitize -> table class -> split -> close/merge/append

The pipeline is the only writer of the BlockStore. A chunk that does not
continue the open block closes it first, so only an unfinished paragraph
can still absorb what is rendered later. Every split block, not only the
first of a chunk, is offered to the merge engine against the current last
block. Conversion or sanitization failures degrade to an escaped
plain-text paragraph unless the configuration is strict.
"""

from __future__ import annotations

import html as html_module
import re
from collections.abc import Callable
from typing import TYPE_CHECKING

from goteo.config import DEFAULT_CONFIG, StreamConfig
from goteo.convert import MarkdownConverter
from goteo.errors import RenderError
from goteo.html.sanitize import sanitize_html
from goteo.html.splitter import split_blocks
from goteo.html.tags import close_unclosed, unclosed_tags
from goteo.merge import MergePolicy, merge_blocks
from goteo.store import BlockStore, RenderedBlock
from goteo.utils.logger import get_logger

if TYPE_CHECKING:
    from goteo.accumulator import Chunk
    from goteo.protocols import Converter, Sanitizer

logger = get_logger(__name__)

_TABLE_TAG_PATTERN = re.compile(r"<table\b([^>]*)>", re.IGNORECASE)
_CLASS_ATTR_PATTERN = re.compile(r'\sclass="([^"]*)"', re.IGNORECASE)


def add_table_class(html: str, class_name: str) -> str:
    """Add ``class_name`` to the class list of every <table> in ``html``.

    Example:
        >>> add_table_class('<table class="x"><tr></tr></table>', "markdown-table")
        '<table class="x markdown-table"><tr></tr></table>'
    """
    if not class_name or "<table" not in html.lower():
        return html

    def add(match: re.Match[str]) -> str:
        attrs = match.group(1)
        existing = _CLASS_ATTR_PATTERN.search(attrs)
        if existing is None:
            return f'<table class="{class_name}"{attrs}>'
        classes = existing.group(1).split()
        if class_name in classes:
            return match.group(0)
        merged = " ".join([*classes, class_name])
        attrs = attrs[: existing.start()] + f' class="{merged}"' + attrs[existing.end() :]
        return f"<table{attrs}>"

    return _TABLE_TAG_PATTERN.sub(add, html)


class RenderPipeline:
    """Turn chunks into stored blocks.

    Args:
        store: Block store to write to (a new one when omitted)
        config: Stream configuration
        converter: ``convert(markdown) -> html``; MarkdownConverter by default
        sanitizer: ``sanitize(html) -> html``; sanitize_html by default

    """

    __slots__ = ("_config", "_convert", "_policy", "_sanitize", "_store")

    def __init__(
        self,
        store: BlockStore | None = None,
        config: StreamConfig | None = None,
        converter: Converter | Callable[[str], str] | None = None,
        sanitizer: Sanitizer | Callable[[str], str] | None = None,
    ) -> None:
        self._config = config or DEFAULT_CONFIG
        self._store = store if store is not None else BlockStore(self._config.id_prefix)
        self._convert = converter if converter is not None else MarkdownConverter(self._config)
        self._sanitize = sanitizer if sanitizer is not None else sanitize_html
        self._policy = MergePolicy.from_config(self._config)

    @property
    def store(self) -> BlockStore:
        return self._store

    @property
    def config(self) -> StreamConfig:
        return self._config

    def render(self, chunk: Chunk) -> list[RenderedBlock]:
        """Render one chunk into the store.

        Args:
            chunk: Flushed source text with its continuation flags

        Returns:
            The blocks appended or rewritten, in store order.

        Raises:
            RenderError: If a collaborator fails and the config is strict.
        """
        store = self._store
        if not chunk.continues:
            store.close_last()

        if not chunk.text.strip():
            if not chunk.open:
                store.close_last()
            return []

        try:
            html = self._run("convert", self._convert, chunk.text, chunk.text)
            html = self._run("sanitize", self._sanitize, html, chunk.text)
        except RenderError as exc:
            if self._config.strict:
                raise
            logger.warning(
                "Rendering failed at the %s stage; falling back to plain text",
                exc.stage,
                exc_info=True,
            )
            return [self._append_fallback(chunk.text)]

        html = add_table_class(html, self._config.table_class)
        blocks = split_blocks(html)
        if not blocks:
            if not chunk.open:
                store.close_last()
            return []

        touched: dict[str, RenderedBlock] = {}
        last_index = len(blocks) - 1
        for index, raw in enumerate(blocks):
            unclosed = unclosed_tags(raw)
            block_html = close_unclosed(raw) if unclosed else raw
            is_open = bool(unclosed) or (index == last_index and chunk.open)

            previous = store.last
            merged = merge_blocks(previous, block_html, self._policy)
            if merged is not None and previous is not None:
                logger.debug("Merged incoming block into %s", previous.id)
                block = store.replace_last(merged, open=is_open)
            else:
                store.close_last()
                block = store.append(block_html, open=is_open)
            touched[block.id] = block

        return list(touched.values())

    def _run(
        self,
        stage: str,
        func: Callable[[str], str],
        value: str,
        chunk_text: str,
    ) -> str:
        try:
            return func(value)
        except Exception as exc:
            raise RenderError(stage, chunk_text, str(exc) or type(exc).__name__) from exc

    def _append_fallback(self, text: str) -> RenderedBlock:
        """Append the raw chunk as an escaped, closed paragraph."""
        escaped = f"<p>{html_module.escape(text.strip())}</p>"
        try:
            safe = self._sanitize(escaped)
        except Exception:
            logger.warning("Sanitizer failed on the fallback block", exc_info=True)
            safe = escaped
        self._store.close_last()
        return self._store.append(safe)


__all__ = ["RenderPipeline", "add_table_class"]
