"""Tests for the MarkdownStream session facade."""

from goteo import MarkdownStream, StreamConfig, render_stream
from goteo.store import RenderedBlock


class TestAppendAndFinalize:
    def test_paragraph_flushed_on_blank_line(self) -> None:
        stream = MarkdownStream()
        assert stream.append("Hello ") == []
        touched = stream.append("world.\n\n")
        assert touched == [RenderedBlock(id="block-0", html="<p>Hello world.</p>")]
        assert stream.snapshot() == [{"id": "block-0", "html": "<p>Hello world.</p>"}]

    def test_finalize_renders_trailing_text(self) -> None:
        stream = MarkdownStream()
        stream.append("# Title\nunfinished *emph")
        stream.finalize()
        assert [b.html for b in stream] == ["<h1>Title</h1>", "<p>unfinished *emph</p>"]
        assert stream.finalized

    def test_container_protocol(self) -> None:
        stream = MarkdownStream()
        stream.append("# A\n## B\n")
        assert len(stream) == 2
        assert [b.id for b in stream] == ["block-0", "block-1"]
        assert stream.blocks == tuple(stream)
        assert stream.html == "<h1>A</h1>\n<h2>B</h2>"

    def test_sessions_are_independent(self) -> None:
        first = MarkdownStream()
        second = MarkdownStream()
        first.append("# One\n")
        second.append("# Two\n")
        assert first.snapshot() == [{"id": "block-0", "html": "<h1>One</h1>"}]
        assert second.snapshot() == [{"id": "block-0", "html": "<h1>Two</h1>"}]

    def test_custom_converter(self) -> None:
        stream = MarkdownStream(converter=lambda md: f"<pre>{md.strip()}</pre>")
        stream.append("raw\n\n")
        assert stream.snapshot()[0]["html"] == "<pre>raw</pre>"


class TestUpdate:
    def test_growing_value(self) -> None:
        stream = MarkdownStream()
        assert stream.update("# Ti") == []
        assert [b.html for b in stream.update("# Title\nbo")] == ["<h1>Title</h1>"]
        touched = stream.update("# Title\nbody", completed=True)
        assert [b.html for b in touched] == ["<p>body</p>"]

    def test_completed_finalizes_once(self) -> None:
        stream = MarkdownStream()
        stream.update("text", completed=True)
        assert stream.update("text", completed=True) == []
        assert len(stream) == 1

    def test_shorter_value_resets(self) -> None:
        stream = MarkdownStream()
        stream.update("# First title\nbody\n\n")
        assert len(stream) == 2
        touched = stream.update("# New\n")
        assert [(b.id, b.html) for b in touched] == [("block-0", "<h1>New</h1>")]
        assert len(stream) == 1

    def test_rewritten_value_resets(self) -> None:
        stream = MarkdownStream()
        stream.update("# Title\n")
        stream.update("# Other\n")
        assert stream.snapshot() == [{"id": "block-0", "html": "<h1>Other</h1>"}]

    def test_append_shrink_then_update(self) -> None:
        stream = MarkdownStream()
        stream.append("abc\n\n", total_length=5)
        stream.append("x", total_length=1)
        assert len(stream) == 0
        stream.update("x y\n\n")
        assert stream.snapshot() == [{"id": "block-0", "html": "<p>x y</p>"}]


class TestScenarios:
    def test_list_continuation(self) -> None:
        stream = MarkdownStream()
        for delta in ["- a\n", "- b\n", "\n", "- c\n"]:
            stream.append(delta)
        stream.finalize()
        assert len(stream) == 1
        assert stream.blocks[0].html.count("<li") == 3

    def test_nested_list_returning_to_outer_level(self) -> None:
        snapshot = render_stream(["- a\n", "  - b\n", "- c\n", "- d\n"])
        assert len(snapshot) == 1
        html = snapshot[0]["html"]
        assert html.count("<li") == 4
        assert html.count("<ul>") == 2

    def test_table_growth(self) -> None:
        stream = MarkdownStream()
        stream.append("| a | b |\n")
        stream.append("|:--|--:|\n")
        assert len(stream) == 1
        for row in ["| 1 | 2 |\n", "| 3 | 4 |\n", "| 5 | 6 |\n"]:
            touched = stream.append(row)
            assert [b.id for b in touched] == ["block-0"]
        stream.finalize()

        html = stream.blocks[0].html
        assert len(stream) == 1
        assert html.startswith('<table class="markdown-table">')
        assert html.count("<tr") == 4
        assert html.count("<tbody>") == 1
        assert '<td style="text-align:right">6</td>' in html

    def test_table_then_paragraph(self) -> None:
        snapshot = render_stream(["| a |\n|---|\n| 1 |\n", "After the table.\n\n"])
        assert [entry["id"] for entry in snapshot] == ["block-0", "block-1"]
        assert snapshot[1]["html"] == "<p>After the table.</p>"

    def test_image_freeze(self) -> None:
        config = StreamConfig(flush_threshold=60, min_flush_offset=10)
        stream = MarkdownStream(config)
        stream.append("![img](https://e.com/a.png) caption text\n")
        stream.append("more words follow here\n")
        assert len(stream) == 1
        frozen = stream.blocks[0]
        assert "<img" in frozen.html

        stream.append("final words.\n\n")
        assert len(stream) == 2
        assert stream.blocks[0] == RenderedBlock(id=frozen.id, html=frozen.html, open=False)
        assert stream.blocks[1].html == "<p>final words.</p>"

    def test_overflow_fallback_keeps_one_paragraph(self) -> None:
        config = StreamConfig(flush_threshold=200, min_flush_offset=20)
        stream = MarkdownStream(config)
        lines = [f"word{i} word word word\n" for i in range(20)]
        flushed_early = False
        for line in lines:
            if stream.append(line):
                flushed_early = True
        assert flushed_early
        stream.finalize()

        assert len(stream) == 1
        html = stream.blocks[0].html
        assert html.startswith("<p>") and html.endswith("</p>")
        assert all(f"word{i} " in html for i in range(20))

    def test_overflow_fallback_rejoins_finished_sentences(self) -> None:
        config = StreamConfig(flush_threshold=200, min_flush_offset=20)
        text = "".join(f"Sentence number {i} ends here.\n" for i in range(20))
        whole = render_stream([text], config)
        assert len(whole) == 1
        assert render_stream(list(text), config) == whole

    def test_unfinished_paragraph_continues_after_blank_line(self) -> None:
        text = "Hello world\n\nand more text\n"
        expected = [{"id": "block-0", "html": "<p>Hello world<br>\nand more text</p>"}]
        assert render_stream([text]) == expected
        assert render_stream(list(text)) == expected

    def test_finished_paragraph_is_not_continued(self) -> None:
        snapshot = render_stream(list("Hello world.\n\nand more text\n"))
        assert [entry["html"] for entry in snapshot] == [
            "<p>Hello world.</p>",
            "<p>and more text</p>",
        ]

    def test_code_fence_never_split(self) -> None:
        code = "```python\n" + "".join(f"x = {i}\n\n" for i in range(10)) + "```\n"
        stream = MarkdownStream()
        for char in code:
            stream.append(char)
            if len(stream):
                break
        assert len(stream) == 1
        assert stream.blocks[0].html.count("x = ") == 10

    def test_reset_detection(self) -> None:
        stream = MarkdownStream()
        stream.update("# Long first message\n\nWith a paragraph.\n\n")
        assert len(stream) == 2
        stream.update("Short\n\n")
        assert stream.snapshot() == [{"id": "block-0", "html": "<p>Short</p>"}]


class TestRenderStream:
    def test_returns_final_snapshot(self) -> None:
        assert render_stream(["- a\n", "- b\n"]) == [
            {"id": "block-0", "html": "<ul>\n<li>a</li>\n<li>b</li>\n</ul>"}
        ]

    def test_empty_input(self) -> None:
        assert render_stream([]) == []
        assert render_stream(["", "\n\n"]) == []

    def test_config_id_prefix(self) -> None:
        snapshot = render_stream(["# x\n"], StreamConfig(id_prefix="m-"))
        assert snapshot[0]["id"] == "m-0"
