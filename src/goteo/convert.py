"""Default Markdown converter built on markdown-it-py.

The pipeline only needs ``convert(markdown) -> html``. MarkdownConverter
configures a CommonMark parser once per stream and renders each chunk with
it; GFM tables and strikethrough come from markdown-it-py's own rules, task
lists from mdit-py-plugins.

Example:
    >>> convert = MarkdownConverter()
    >>> convert("Hello *world*")
    '<p>Hello <em>world</em></p>\\n'
"""

from __future__ import annotations

from markdown_it import MarkdownIt
from mdit_py_plugins.tasklists import tasklists_plugin

from goteo.config import DEFAULT_CONFIG, StreamConfig


class MarkdownConverter:
    """Callable Markdown to HTML converter.

    Instances are stateless between calls and may be shared by streams that
    use the same configuration.
    """

    __slots__ = ("_md",)

    def __init__(self, config: StreamConfig | None = None) -> None:
        config = config or DEFAULT_CONFIG
        md = MarkdownIt("commonmark", {"breaks": config.breaks})
        if config.tables:
            md.enable("table")
        if config.strikethrough:
            md.enable("strikethrough")
        if config.task_lists:
            md.use(tasklists_plugin)
        self._md = md

    @property
    def parser(self) -> MarkdownIt:
        return self._md

    def __call__(self, markdown: str) -> str:
        return self._md.render(markdown)


__all__ = ["MarkdownConverter"]
