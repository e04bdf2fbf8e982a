"""Tests for the allow-list sanitizer."""

import pytest

from goteo.html import DEFAULT_ALLOW_LIST, AllowList, sanitize_html


class TestAllowedMarkup:
    def test_keeps_allowed_tags(self) -> None:
        html = "<h2>T</h2><p>a <strong>b</strong> <del>c</del></p>"
        assert sanitize_html(html) == html

    def test_lowercases_tags(self) -> None:
        assert sanitize_html("<P>x</P>") == "<p>x</p>"

    def test_normalizes_self_closing(self) -> None:
        assert sanitize_html("a<br />b") == "a<br>b"
        assert sanitize_html('<img src="a.png" alt="A" />') == '<img src="a.png" alt="A">'

    def test_boolean_attributes(self) -> None:
        html = '<input type="checkbox" checked disabled>'
        assert sanitize_html(html) == html

    def test_task_list_checkbox(self) -> None:
        html = '<input class="task-list-item-checkbox" disabled="disabled" type="checkbox">'
        assert sanitize_html(html) == html

    def test_table_alignment_style(self) -> None:
        html = '<th style="text-align:right">n</th>'
        assert sanitize_html(html) == html


class TestRemovedMarkup:
    def test_script_and_event_handlers(self) -> None:
        html = '<p onclick="x()">Hi <script>alert(1)</script><b>there</b></p>'
        assert sanitize_html(html) == "<p>Hi <b>there</b></p>"

    def test_style_element_content_dropped(self) -> None:
        assert sanitize_html("<style>p { color: red }</style><p>x</p>") == "<p>x</p>"

    def test_unknown_tags_unwrapped(self) -> None:
        assert sanitize_html("<div><custom-el>text</custom-el></div>") == "<div>text</div>"
        assert sanitize_html("<iframe>frame text</iframe>") == "frame text"

    def test_comments_dropped(self) -> None:
        assert sanitize_html("<p>a<!-- secret -->b</p>") == "<p>ab</p>"

    def test_unknown_attributes_dropped(self) -> None:
        assert sanitize_html('<p data-x="1" id="k">a</p>') == '<p id="k">a</p>'


class TestUrls:
    @pytest.mark.parametrize(
        "href",
        [
            "javascript:alert(1)",
            "JavaScript:alert(1)",
            " java\nscript:alert(1)",
            "&#106;avascript:alert(1)",
            "vbscript:msgbox(1)",
        ],
    )
    def test_dangerous_href_removed(self, href: str) -> None:
        assert sanitize_html(f'<a href="{href}">x</a>') == "<a>x</a>"

    @pytest.mark.parametrize(
        "href", ["https://example.com", "http://example.com/a?b=1", "mailto:a@b.c", "/docs", "#top"]
    )
    def test_safe_href_kept(self, href: str) -> None:
        assert sanitize_html(f'<a href="{href}">x</a>') == f'<a href="{href}">x</a>'

    def test_data_image_removed(self) -> None:
        assert sanitize_html('<img src="data:image/png;base64,AAAA" alt="a">') == '<img alt="a">'


class TestEscaping:
    def test_text_is_reescaped(self) -> None:
        assert sanitize_html("<p>1 &lt; 2 &amp; 3</p>") == "<p>1 &lt; 2 &amp; 3</p>"

    def test_attribute_values_are_reescaped(self) -> None:
        html = '<a title="a &quot;q&quot; &lt;b&gt;">x</a>'
        assert sanitize_html(html) == html


class TestRobustness:
    def test_unbalanced_markup_passes_through(self) -> None:
        assert sanitize_html("<ul><li>a") == "<ul><li>a"

    @pytest.mark.parametrize("html", ["<p <<>>> </", "<a href='x", "<<<", "</p></p>", ""])
    def test_malformed_never_raises(self, html: str) -> None:
        assert isinstance(sanitize_html(html), str)


class TestAllowList:
    def test_default_is_shared(self) -> None:
        assert "img" in DEFAULT_ALLOW_LIST.tags
        assert "script" not in DEFAULT_ALLOW_LIST.tags
        assert "data-line" in DEFAULT_ALLOW_LIST.attributes

    def test_extend(self) -> None:
        allow = DEFAULT_ALLOW_LIST.extend(tags=("IFRAME",), attributes=("data-id",))
        assert "iframe" in allow.tags
        assert "iframe" not in DEFAULT_ALLOW_LIST.tags
        assert sanitize_html('<span data-id="3">a</span>', allow) == '<span data-id="3">a</span>'

    def test_custom_schemes(self) -> None:
        allow = AllowList(url_schemes=frozenset({"https"}))
        assert sanitize_html('<a href="http://x">x</a>', allow) == "<a>x</a>"
