"""GFM pipe table classifier mixin."""

from __future__ import annotations


class TableClassifierMixin:
    """Mixin providing table separator and row classification."""

    def _is_table_row(self, content: str) -> bool:
        """Check whether content can be a table row (it contains a pipe)."""
        return "|" in content

    def _is_table_separator(self, content: str) -> bool:
        """Check whether content is a table delimiter row.

        Delimiter rows contain at least one pipe and consist only of cells of
        the form ``:?-+:?`` separated by pipes, e.g. ``| --- | :-: |``.

        Args:
            content: Line content with surrounding whitespace stripped

        Returns:
            True if the line is a delimiter row.
        """
        if "|" not in content:
            return False

        cells = content.strip("|").split("|")
        if not cells:
            return False

        for cell in cells:
            cell = cell.strip()
            if cell.startswith(":"):
                cell = cell[1:]
            if cell.endswith(":"):
                cell = cell[:-1]
            if not cell or cell.strip("-"):
                return False
        return True
