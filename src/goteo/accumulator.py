"""Stream accumulator: buffer deltas and flush complete blocks.

The accumulator owns the unflushed source text. Every delta that completes
a line (or pushes the buffer over the flush threshold) triggers a boundary
pass over the buffer; each boundary becomes a Chunk for the render
pipeline and the text after the last boundary stays buffered.

The scan state stored with the last flushed boundary seeds the next pass,
so a list or table cut by a soft boundary is scanned in the same mode when
the rest of it arrives.
"""

from __future__ import annotations

from dataclasses import dataclass

from goteo.config import StreamConfig
from goteo.pipeline import RenderPipeline
from goteo.scanner import Boundary, ScanState, find_boundaries
from goteo.store import BlockStore, RenderedBlock
from goteo.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Chunk:
    """Flushed source text handed to the render pipeline.

    Attributes:
        text: Markdown source of one or more complete blocks
        continues: The text continues the block left open by the previous
            chunk
        open: The last block of the text may continue in the next chunk

    """

    text: str
    continues: bool = False
    open: bool = False


class StreamAccumulator:
    """Boundary-gated buffer in front of a RenderPipeline.

    Usage:
        >>> acc = StreamAccumulator(RenderPipeline())
        >>> acc.append("# Title\\nSome")
        [RenderedBlock(id='block-0', html='<h1>Title</h1>', open=False)]
        >>> acc.buffer
        'Some'

    """

    __slots__ = ("_buffer", "_config", "_finalized", "_observed", "_pipeline", "_resume")

    def __init__(
        self,
        pipeline: RenderPipeline,
        config: StreamConfig | None = None,
    ) -> None:
        self._pipeline = pipeline
        self._config = config or pipeline.config
        self._buffer = ""
        self._observed = 0
        self._resume: ScanState | None = None
        self._finalized = False

    @property
    def buffer(self) -> str:
        """Source text received but not yet flushed."""
        return self._buffer

    @property
    def observed_length(self) -> int:
        """Total stream length seen so far."""
        return self._observed

    @property
    def store(self) -> BlockStore:
        return self._pipeline.store

    @property
    def finalized(self) -> bool:
        return self._finalized

    def append(self, delta: str, *, total_length: int | None = None) -> list[RenderedBlock]:
        """Append a delta and flush every complete block.

        Args:
            delta: New source text
            total_length: Total stream length after this delta, when the
                producer knows it. A value shorter than the length already
                observed starts a new stream.

        Returns:
            Blocks appended or rewritten by this call.
        """
        if total_length is not None and total_length < self._observed:
            logger.debug(
                "Stream shrank from %d to %d chars; resetting",
                self._observed,
                total_length,
            )
            self.reset()

        if total_length is not None:
            self._observed = max(total_length, self._observed + len(delta))
        else:
            self._observed += len(delta)

        if not delta:
            return []

        self._finalized = False
        self._buffer += delta

        if "\n" not in delta and len(self._buffer) <= self._config.flush_threshold:
            return []

        boundaries = find_boundaries(self._buffer, self._resume, config=self._config)
        return self._flush(boundaries)

    def finalize(self) -> list[RenderedBlock]:
        """Flush whatever is buffered and close the last block.

        Calling it again without new input does nothing.
        """
        if self._finalized and not self._buffer:
            return []

        touched: list[RenderedBlock] = []
        if self._buffer:
            boundaries = find_boundaries(
                self._buffer, self._resume, config=self._config, final=True
            )
            touched = self._flush(boundaries)

        self._buffer = ""
        self._resume = None
        self.store.close_last()
        self._finalized = True
        return touched

    def reset(self) -> None:
        """Drop all buffered text, scan state and rendered blocks."""
        self._buffer = ""
        self._observed = 0
        self._resume = None
        self._finalized = False
        self.store.clear()

    def _flush(self, boundaries: list[Boundary]) -> list[RenderedBlock]:
        if not boundaries:
            return []

        touched: dict[str, RenderedBlock] = {}
        consumed = 0
        for boundary in boundaries:
            chunk = Chunk(
                text=self._buffer[consumed : boundary.offset],
                continues=boundary.continues,
                open=boundary.open,
            )
            logger.debug(
                "Flushing %d chars (continues=%s, open=%s)",
                len(chunk.text),
                chunk.continues,
                chunk.open,
            )
            for block in self._pipeline.render(chunk):
                touched.pop(block.id, None)
                touched[block.id] = block
            consumed = boundary.offset
            self._resume = boundary.state

        self._buffer = self._buffer[consumed:]
        return list(touched.values())


__all__ = ["Chunk", "StreamAccumulator"]
