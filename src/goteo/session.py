"""Per-stream session facade.

MarkdownStream wires a BlockStore, a RenderPipeline and a
StreamAccumulator together for one stream. Hosts either push deltas with
``append`` or hand over the whole growing value with ``update``.

There is no module-level state: two sessions never share a buffer, a store
or an identifier counter.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator

from goteo.accumulator import StreamAccumulator
from goteo.config import DEFAULT_CONFIG, StreamConfig
from goteo.pipeline import RenderPipeline
from goteo.store import BlockStore, RenderedBlock
from goteo.utils.logger import get_logger

logger = get_logger(__name__)


class MarkdownStream:
    """Incremental Markdown to HTML block stream.

    Usage:
        >>> stream = MarkdownStream()
        >>> stream.append("Hello ")
        []
        >>> stream.append("world.\\n\\n")
        [RenderedBlock(id='block-0', html='<p>Hello world.</p>', open=False)]
        >>> stream.snapshot()
        [{'id': 'block-0', 'html': '<p>Hello world.</p>'}]

        >>> # Driven by the full value, as most chat UIs hold it
        >>> stream.reset()
        >>> stream.update("# Done", completed=True)
        [RenderedBlock(id='block-0', html='<h1>Done</h1>', open=False)]

    Thread Safety:
        Not thread-safe. Serialize calls on one session; separate sessions
        are independent.

    """

    __slots__ = ("_accumulator", "_config", "_pipeline", "_seen", "_store")

    def __init__(
        self,
        config: StreamConfig | None = None,
        *,
        converter: Callable[[str], str] | None = None,
        sanitizer: Callable[[str], str] | None = None,
    ) -> None:
        """Initialize a stream session.

        Args:
            config: Stream configuration (defaults when omitted)
            converter: ``convert(markdown) -> html``; markdown-it-py by default
            sanitizer: ``sanitize(html) -> html``; the allow-list sanitizer
                by default
        """
        self._config = config or DEFAULT_CONFIG
        self._store = BlockStore(self._config.id_prefix)
        self._pipeline = RenderPipeline(
            self._store,
            self._config,
            converter=converter,
            sanitizer=sanitizer,
        )
        self._accumulator = StreamAccumulator(self._pipeline, self._config)
        self._seen = ""

    @property
    def config(self) -> StreamConfig:
        return self._config

    @property
    def blocks(self) -> tuple[RenderedBlock, ...]:
        return self._store.blocks

    @property
    def html(self) -> str:
        """All block HTML concatenated in display order."""
        return "\n".join(block.html for block in self._store)

    @property
    def finalized(self) -> bool:
        return self._accumulator.finalized

    def __len__(self) -> int:
        return len(self._store)

    def __iter__(self) -> Iterator[RenderedBlock]:
        return iter(self._store)

    def append(self, delta: str, *, total_length: int | None = None) -> list[RenderedBlock]:
        """Feed a delta; returns the blocks appended or rewritten."""
        if total_length is not None and total_length < self._accumulator.observed_length:
            self._seen = ""
        self._seen += delta
        return self._accumulator.append(delta, total_length=total_length)

    def finalize(self) -> list[RenderedBlock]:
        """Mark the stream complete and flush the trailing text."""
        return self._accumulator.finalize()

    def reset(self) -> None:
        """Forget everything and start a new stream."""
        logger.debug("Resetting stream with %d blocks", len(self._store))
        self._accumulator.reset()
        self._seen = ""

    def update(self, content: str, *, completed: bool = False) -> list[RenderedBlock]:
        """Drive the session from the full, growing content value.

        A value that is not an extension of the previous one starts a new
        stream. ``completed`` finalizes the stream once; later calls with the
        same content do nothing.

        Args:
            content: Entire stream content so far
            completed: The producer has finished

        Returns:
            Blocks appended or rewritten by this call.
        """
        if len(content) < len(self._seen) or not content.startswith(self._seen):
            logger.debug("Content is not an extension of the stream; resetting")
            self.reset()

        delta = content[len(self._seen) :]
        touched: dict[str, RenderedBlock] = {}
        if delta:
            for block in self.append(delta, total_length=len(content)):
                touched[block.id] = block
        if completed and not self._accumulator.finalized:
            for block in self.finalize():
                touched.pop(block.id, None)
                touched[block.id] = block
        return list(touched.values())

    def snapshot(self) -> list[dict[str, str]]:
        """Ordered ``{"id", "html"}`` entries for the host."""
        return self._store.snapshot()


def render_stream(
    deltas: Iterable[str],
    config: StreamConfig | None = None,
) -> list[dict[str, str]]:
    """Feed ``deltas`` through a fresh session and return the final snapshot.

    Example:
        >>> render_stream(["- a\\n", "- b\\n"])
        [{'id': 'block-0', 'html': '<ul>\\n<li>a</li>\\n<li>b</li>\\n</ul>'}]
    """
    stream = MarkdownStream(config)
    for delta in deltas:
        stream.append(delta)
    stream.finalize()
    return stream.snapshot()


__all__ = ["MarkdownStream", "render_stream"]
