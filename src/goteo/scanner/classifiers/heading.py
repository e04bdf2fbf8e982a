"""ATX heading classifier mixin."""


class HeadingClassifierMixin:
    """Mixin providing ATX heading classification."""

    def _is_atx_heading(self, content: str) -> bool:
        """Check whether content is an ATX heading.

        ATX headings start with 1-6 # characters followed by space, tab, or
        end of line.

        Args:
            content: Line content with leading whitespace stripped

        Returns:
            True if the line is a heading.
        """
        level = 0
        while level < len(content) and content[level] == "#":
            level += 1
            if level > 6:
                return False

        if level == 0:
            return False
        return level == len(content) or content[level] in " \t"
