"""Tag scanning primitives over HTML strings.

A forgiving, allocation-light tag scanner shared by the block splitter and
the merge engine. It understands comments, quoted attribute values and
self-closing syntax; it does not build a tree.

Example:
    >>> [t.name for t in iter_tags('<p class="x">a <em>b</em></p>')]
    ['p', 'em', 'em', 'p']
"""

from __future__ import annotations

import html as html_module
from collections.abc import Iterator
from dataclasses import dataclass

# Elements that never have a closing tag
VOID_TAGS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "source",
        "track",
        "wbr",
    }
)


@dataclass(frozen=True, slots=True)
class Tag:
    """One opening or closing tag.

    Attributes:
        name: Lower-cased tag name
        start: Offset of "<"
        end: Offset just past ">"
        closing: True for </name>
        self_closing: True for <name ... />

    """

    name: str
    start: int
    end: int
    closing: bool = False
    self_closing: bool = False

    @property
    def is_void(self) -> bool:
        return not self.closing and (self.self_closing or self.name in VOID_TAGS)


def _find_tag_end(html: str, pos: int) -> int:
    """Return the offset just past the ">" ending a tag, or -1 if truncated."""
    quote = ""
    html_len = len(html)
    while pos < html_len:
        char = html[pos]
        if quote:
            if char == quote:
                quote = ""
        elif char in "\"'":
            quote = char
        elif char == ">":
            return pos + 1
        pos += 1
    return -1


def iter_tags(html: str, start: int = 0) -> Iterator[Tag]:
    """Yield tags in document order.

    Comments, doctypes and processing instructions are skipped. A stray "<"
    that does not start a tag name is treated as text. Scanning stops at a
    tag truncated by the end of the input.

    Args:
        html: HTML text
        start: Offset to start scanning from

    Yields:
        Tag objects
    """
    pos = start
    html_len = len(html)
    while pos < html_len:
        lt = html.find("<", pos)
        if lt == -1:
            return

        if html.startswith("<!--", lt):
            close = html.find("-->", lt + 4)
            if close == -1:
                return
            pos = close + 3
            continue

        if html.startswith("<!", lt) or html.startswith("<?", lt):
            gt = html.find(">", lt)
            if gt == -1:
                return
            pos = gt + 1
            continue

        closing = html.startswith("</", lt)
        name_start = lt + 2 if closing else lt + 1
        if name_start >= html_len or not html[name_start].isalpha():
            pos = lt + 1
            continue

        name_end = name_start
        while name_end < html_len and (html[name_end].isalnum() or html[name_end] == "-"):
            name_end += 1

        end = _find_tag_end(html, name_end)
        if end == -1:
            return

        yield Tag(
            name=html[name_start:name_end].lower(),
            start=lt,
            end=end,
            closing=closing,
            self_closing=not closing and html[end - 2] == "/",
        )
        pos = end


def unclosed_tags(html: str) -> list[str]:
    """Names of elements left open at the end of ``html``, outermost first.

    Closing tags without a matching opener are ignored.

    Example:
        >>> unclosed_tags("<ul><li>a</li><li>b")
        ['ul', 'li']
    """
    stack: list[str] = []
    for tag in iter_tags(html):
        if tag.is_void:
            continue
        if not tag.closing:
            stack.append(tag.name)
        elif tag.name in stack:
            while stack.pop() != tag.name:
                pass
    return stack


def close_unclosed(html: str) -> str:
    """Append closing tags for every element left open."""
    missing = unclosed_tags(html)
    if not missing:
        return html
    return html + "".join(f"</{name}>" for name in reversed(missing))


def element_spans(html: str, name: str) -> list[tuple[int, int]]:
    """Offsets of every complete outermost ``name`` element.

    Elements nested inside another ``name`` element are part of their
    ancestor's span. Unclosed elements are not reported.

    Example:
        >>> html = "<ul><li>a</li><li>b</li></ul>"
        >>> [html[s:e] for s, e in element_spans(html, "li")]
        ['<li>a</li>', '<li>b</li>']
    """
    spans: list[tuple[int, int]] = []
    stack: list[str] = []
    start = -1
    depth = 0

    for tag in iter_tags(html):
        if tag.is_void:
            continue
        if not tag.closing:
            stack.append(tag.name)
            if tag.name == name:
                depth += 1
                if depth == 1:
                    start = tag.start
            continue
        if tag.name not in stack:
            continue
        while stack:
            popped = stack.pop()
            if popped == name:
                depth -= 1
                if depth == 0:
                    spans.append((start, tag.end))
            if popped == tag.name:
                break
    return spans


def first_tag(html: str) -> Tag | None:
    """The tag that opens ``html`` when it starts with one (after whitespace)."""
    stripped = html.lstrip()
    if not stripped.startswith("<"):
        return None
    offset = len(html) - len(stripped)
    for tag in iter_tags(html, offset):
        return tag if tag.start == offset else None
    return None


def is_element(html: str, name: str) -> bool:
    """Check whether ``html`` is exactly one complete ``name`` element."""
    stripped = html.strip()
    spans = element_spans(stripped, name)
    return len(spans) == 1 and spans[0] == (0, len(stripped))


def inner_html(html: str, name: str) -> str:
    """Content between the leading ``<name>`` tag and the last ``</name>``."""
    stripped = html.strip()
    opener = first_tag(stripped)
    if opener is None or opener.name != name or opener.closing:
        return stripped
    close = stripped.rfind(f"</{name}>")
    if close < opener.end:
        return stripped[opener.end :]
    return stripped[opener.end : close]


def strip_tags(html: str) -> str:
    """Text content of ``html`` with entities decoded."""
    parts: list[str] = []
    pos = 0
    for tag in iter_tags(html):
        parts.append(html[pos : tag.start])
        pos = tag.end
    parts.append(html[pos:])
    return html_module.unescape("".join(parts))


def has_image(html: str) -> bool:
    """Check whether ``html`` contains an <img> element."""
    if "<img" not in html.lower():
        return False
    return any(tag.name == "img" and not tag.closing for tag in iter_tags(html))
