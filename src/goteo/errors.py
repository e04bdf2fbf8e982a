"""Exception classes for goteo.

Provides standardized exceptions for error handling throughout goteo.
Rendering failures are normally recovered inside the pipeline; these types
surface only for invalid configuration or when strict mode is enabled.
"""

from __future__ import annotations


class GoteoError(Exception):
    """Base exception for all goteo errors.

    Subclass this for specific error categories.
    """

    pass


class ConfigError(GoteoError):
    """Invalid stream configuration.

    Raised when a StreamConfig field is outside its accepted range.
    """

    def __init__(self, field: str, message: str) -> None:
        """Initialize config error.

        Args:
            field: Name of the offending StreamConfig field
            message: Description of the problem
        """
        self.field = field
        super().__init__(f"Invalid config '{field}': {message}")


class RenderError(GoteoError):
    """Error while converting or sanitizing a chunk.

    Only raised when ``StreamConfig.strict`` is set; otherwise the pipeline
    logs the failure and falls back to an escaped plain-text block.
    """

    def __init__(self, stage: str, chunk: str, message: str) -> None:
        """Initialize render error.

        Args:
            stage: Collaborator that failed ("convert" or "sanitize")
            chunk: Markdown chunk being rendered
            message: Description of the failure
        """
        self.stage = stage
        self.chunk = chunk
        preview = chunk[:40] + ("..." if len(chunk) > 40 else "")
        super().__init__(f"{stage} failed for chunk {preview!r}: {message}")
