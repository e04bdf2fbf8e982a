"""Property-based tests for boundary scanner invariants using Hypothesis.

These tests verify that certain properties always hold regardless
of the input, helping catch edge cases that example-based tests miss.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from goteo.scanner import find_boundaries

# Lines that look like block syntax outside a fence
MARKUP_LINES = [
    "# heading",
    "- item",
    "  - nested",
    "1. ordered",
    "| a | b |",
    "|---|---|",
    "> quote",
    "plain text",
    "Sentence ends.",
    "",
    "    indented",
]

documents = st.lists(st.sampled_from(MARKUP_LINES), max_size=25).map(
    lambda lines: "".join(line + "\n" for line in lines)
)


class TestOrderingInvariants:
    @given(st.text(alphabet="#-*|`~> 1.\nab", max_size=300))
    @settings(max_examples=200)
    def test_offsets_strictly_ascending_and_in_range(self, text: str) -> None:
        for final in (False, True):
            result = [b.offset for b in find_boundaries(text, final=final)]
            assert result == sorted(set(result))
            assert all(0 < offset <= len(text) for offset in result)

    @given(documents)
    @settings(max_examples=200)
    def test_boundaries_fall_on_line_ends(self, text: str) -> None:
        for boundary in find_boundaries(text):
            assert text[boundary.offset - 1] == "\n"


class TestFenceInvariants:
    @given(
        prefix=documents,
        body=st.lists(st.sampled_from(MARKUP_LINES), max_size=15),
        suffix=documents,
    )
    @settings(max_examples=200)
    def test_no_boundary_inside_fence(self, prefix: str, body: list[str], suffix: str) -> None:
        # Blank line first so the fence is not swallowed by a list item
        prefix = prefix + "\n"
        fence = "```text\n" + "".join(line + "\n" for line in body) + "```\n"
        text = prefix + fence + suffix
        fence_start = len(prefix)
        fence_end = fence_start + len(fence)

        for final in (False, True):
            for boundary in find_boundaries(text, final=final):
                assert not fence_start < boundary.offset < fence_end


class TestPrefixStability:
    @given(documents, st.integers(min_value=0, max_value=400))
    @settings(max_examples=200)
    def test_prefix_boundaries_survive_extension(self, text: str, cut: int) -> None:
        prefix = text[: min(cut, len(text))]
        full = {b.offset for b in find_boundaries(text)}
        partial = {b.offset for b in find_boundaries(prefix)}
        assert partial <= full

    @given(documents, st.integers(min_value=0, max_value=400))
    @settings(max_examples=200)
    def test_resuming_matches_single_pass(self, text: str, cut: int) -> None:
        """Flushing at any boundary and resuming yields the same later boundaries."""
        single = find_boundaries(text, final=True)
        candidates = [b for b in single if b.offset <= cut]
        if not candidates:
            return
        resume_from = candidates[-1]
        resumed = find_boundaries(text[resume_from.offset :], resume_from.state, final=True)

        later = [(b.offset, b.open, b.continues) for b in single if b.offset > resume_from.offset]
        shifted = [(b.offset + resume_from.offset, b.open, b.continues) for b in resumed]
        assert shifted == later
