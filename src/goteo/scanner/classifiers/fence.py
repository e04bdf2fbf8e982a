"""Fenced code block classifier mixin."""

from goteo.scanner.modes import ScanMode
from goteo.scanner.state import ScanState


class FenceClassifierMixin:
    """Mixin providing fenced code block classification."""

    def _match_fence_start(self, content: str) -> tuple[str, int] | None:
        """Try to classify content as a fence opening.

        Fenced code blocks start with 3+ backticks or tildes.
        Backtick fences cannot have backticks in the info string.

        Args:
            content: Line content with leading whitespace stripped

        Returns:
            (fence_char, fence_count) if valid fence, None otherwise.
        """
        if not content:
            return None

        fence_char = content[0]
        if fence_char not in "`~":
            return None

        count = 0
        while count < len(content) and content[count] == fence_char:
            count += 1

        if count < 3:
            return None

        # Rest is info string (language hint)
        info = content[count:].strip()
        if fence_char == "`" and "`" in info:
            return None

        return fence_char, count

    def _is_closing_fence(self, line: str, state: ScanState) -> bool:
        """Check if line is a closing fence for the open code block.

        Closing fences may be indented 0-3 spaces (any amount when the fence
        was opened inside a list item), must repeat the opening character at
        least as many times, and carry nothing else.

        Args:
            line: Full line content including leading whitespace
            state: Scan state holding the open fence

        Returns:
            True if this is a valid closing fence.
        """
        if not state.fence_char:
            return False

        indent = 0
        while indent < len(line) and line[indent] in " \t":
            indent += 1

        if indent >= 4 and state.fence_return is not ScanMode.IN_LIST:
            return False

        content = line[indent:]
        count = 0
        while count < len(content) and content[count] == state.fence_char:
            count += 1

        if count < 3 or count < state.fence_count:
            return False

        # Rest must be whitespace only
        return content[count:].strip() == ""
