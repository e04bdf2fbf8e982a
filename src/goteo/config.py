"""Stream configuration for goteo.

A single immutable StreamConfig is created per stream (or shared between
streams, since it is frozen) and handed to every component that needs a
tunable: the boundary scanner reads the flush thresholds, the converter
reads the syntax switches, the merge engine reads the paragraph policy.

Usage:
    >>> from goteo import MarkdownStream, StreamConfig
    >>> config = StreamConfig(flush_threshold=2000, table_class="table")
    >>> stream = MarkdownStream(config)

    # From an external settings source
    >>> config = StreamConfig.from_dict({"breaks": False, "unknown": 1})
    >>> config.breaks
    False

"""

from dataclasses import dataclass

from goteo.errors import ConfigError

# Latin and CJK sentence terminators
DEFAULT_SENTENCE_TERMINATORS = ".!?。！？"


@dataclass(frozen=True, slots=True)
class StreamConfig:
    """Immutable stream configuration.

    Attributes:
        flush_threshold: Buffer length after which a boundary is forced when
            none was found
        min_flush_offset: Smallest offset a forced boundary may land on
        sentence_terminators: Characters that end a paragraph for merge
            purposes (a paragraph ending in one is never continued)
        table_class: Class added to every rendered table element ("" to skip)
        breaks: Render soft line breaks inside paragraphs as <br>
        tables: Enable GFM pipe tables in the default converter
        strikethrough: Enable ~~strikethrough~~ in the default converter
        task_lists: Enable - [ ] task list items in the default converter
        id_prefix: Prefix of the stable block identifiers
        strict: Raise RenderError instead of degrading on collaborator failure

    """

    flush_threshold: int = 1000
    min_flush_offset: int = 100
    sentence_terminators: str = DEFAULT_SENTENCE_TERMINATORS
    table_class: str = "markdown-table"
    breaks: bool = True
    tables: bool = True
    strikethrough: bool = True
    task_lists: bool = True
    id_prefix: str = "block-"
    strict: bool = False

    def __post_init__(self) -> None:
        if self.flush_threshold <= 0:
            raise ConfigError("flush_threshold", "must be positive")
        if self.min_flush_offset < 0:
            raise ConfigError("min_flush_offset", "must not be negative")
        if self.min_flush_offset >= self.flush_threshold:
            raise ConfigError("min_flush_offset", "must be smaller than flush_threshold")

    @property
    def paragraph_joiner(self) -> str:
        """Markup placed between two halves of a merged paragraph."""
        return "<br>\n" if self.breaks else "\n"

    @classmethod
    def from_dict(cls, config_dict: dict) -> "StreamConfig":
        """Create StreamConfig from dictionary.

        Only includes keys that are valid StreamConfig fields; unknown keys
        are silently ignored.

        Args:
            config_dict: Dictionary with config values. Keys should match
                StreamConfig attribute names.

        Returns:
            New StreamConfig instance with values from dict.

        Raises:
            ConfigError: If a value is out of range.

        Example:
            >>> config = StreamConfig.from_dict({
            ...     "flush_threshold": 4000,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.flush_threshold
            4000

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
DEFAULT_CONFIG: StreamConfig = StreamConfig()


__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_SENTENCE_TERMINATORS",
    "StreamConfig",
]
