"""Collaborator contracts.

The pipeline treats the converter and the sanitizer as plain callables, so
a function, a bound method or an object with ``__call__`` all qualify.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Converter(Protocol):
    """Markdown to HTML conversion."""

    def __call__(self, markdown: str) -> str: ...


@runtime_checkable
class Sanitizer(Protocol):
    """Reduce untrusted HTML to safe HTML."""

    def __call__(self, html: str) -> str: ...


__all__ = ["Converter", "Sanitizer"]
