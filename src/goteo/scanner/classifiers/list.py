"""List marker classifier mixin."""

from __future__ import annotations

# Bullet list markers
UNORDERED_LIST_MARKERS: frozenset[str] = frozenset("-*+")

# Thematic break characters
THEMATIC_BREAK_CHARS: frozenset[str] = frozenset("-*_")

# Ordinal list markers are at most nine digits
MAX_ORDINAL_DIGITS = 9


class ListClassifierMixin:
    """Mixin providing list marker classification."""

    def _is_thematic_break(self, content: str) -> bool:
        """Check for a thematic break: 3+ of the same -, * or _ with spaces."""
        char = content[0]
        if char not in THEMATIC_BREAK_CHARS:
            return False
        count = 0
        for c in content:
            if c == char:
                count += 1
            elif c not in " \t":
                return False
        return count >= 3

    def _is_list_marker(self, content: str) -> bool:
        """Check whether content starts with a list item marker.

        Unordered: ``-``, ``*`` or ``+``. Ordered: 1-9 digits followed by
        ``.`` or ``)``. The marker must be followed by a space, a tab, or the
        end of the line.

        Args:
            content: Line content with leading whitespace stripped

        Returns:
            True if the line is a list item.
        """
        if not content:
            return False

        if content[0] in UNORDERED_LIST_MARKERS:
            # "- - -" and "* * *" are thematic breaks, not items
            if self._is_thematic_break(content):
                return False
            return len(content) == 1 or content[1] in " \t"

        if content[0].isdigit():
            pos = 0
            while pos < len(content) and content[pos].isdigit():
                pos += 1
            if pos > MAX_ORDINAL_DIGITS:
                return False
            if pos < len(content) and content[pos] in ".)":
                return pos + 1 == len(content) or content[pos + 1] in " \t"
        return False
