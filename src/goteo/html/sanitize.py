"""Allow-list HTML sanitizer.

Rebuilds the converter's HTML keeping only allowed tags and attributes.
Disallowed tags are unwrapped (their text is kept), the contents of
script-like elements are dropped, comments and declarations are dropped,
and URL attributes are limited to safe schemes. Malformed markup never
raises: whatever the parser cannot make sense of is emitted as escaped
text.

Example:
    >>> sanitize_html('<p onclick="x()">Hi <script>alert(1)</script><b>there</b></p>')
    '<p>Hi <b>there</b></p>'
"""

from __future__ import annotations

import html as html_module
import re
from dataclasses import dataclass
from html.parser import HTMLParser

from goteo.html.tags import VOID_TAGS

_ALLOWED_TAGS = frozenset(
    {
        # Headings and paragraphs
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "p",
        "br",
        "hr",
        # Emphasis family
        "em",
        "strong",
        "b",
        "i",
        "u",
        "s",
        "del",
        "ins",
        "mark",
        "sub",
        "sup",
        # Code
        "code",
        "pre",
        # Lists and quotes
        "ul",
        "ol",
        "li",
        "blockquote",
        # Tables
        "table",
        "thead",
        "tbody",
        "tfoot",
        "tr",
        "th",
        "td",
        # Links, media, forms
        "a",
        "img",
        "input",
        "label",
        # Containers
        "div",
        "span",
    }
)

_ALLOWED_ATTRIBUTES = frozenset(
    {
        "alt",
        "checked",
        "class",
        "data-line",
        "disabled",
        "href",
        "id",
        "rel",
        "src",
        "start",
        "style",
        "target",
        "title",
        "type",
    }
)

_DEFAULT_ALLOWED_SCHEMES = frozenset(("https", "http", "mailto"))

# Attributes whose value is a URL
_URL_ATTRIBUTES = frozenset(("href", "src"))

# Elements whose content is dropped together with the element
_DROP_CONTENT_TAGS = frozenset(("script", "style", "template", "textarea", "title"))

_SCHEME_PATTERN = re.compile(r"^([a-z][a-z0-9+.\-]*):")

# Whitespace and control characters browsers ignore inside a scheme
_URL_NOISE_PATTERN = re.compile(r"[\x00-\x20]+")


@dataclass(frozen=True, slots=True)
class AllowList:
    """Tags, attributes and URL schemes that survive sanitization.

    Attributes:
        tags: Allowed tag names (lower case)
        attributes: Allowed attribute names, on any allowed tag
        url_schemes: Schemes accepted in href/src; relative URLs always pass

    """

    tags: frozenset[str] = _ALLOWED_TAGS
    attributes: frozenset[str] = _ALLOWED_ATTRIBUTES
    url_schemes: frozenset[str] = _DEFAULT_ALLOWED_SCHEMES

    def extend(
        self,
        *,
        tags: tuple[str, ...] = (),
        attributes: tuple[str, ...] = (),
    ) -> "AllowList":
        """Return a copy that also allows the given tags and attributes."""
        return AllowList(
            tags=self.tags | frozenset(t.lower() for t in tags),
            attributes=self.attributes | frozenset(a.lower() for a in attributes),
            url_schemes=self.url_schemes,
        )


DEFAULT_ALLOW_LIST = AllowList()


def _url_allowed(url: str, allowed: frozenset[str]) -> bool:
    """Check if a URL is relative or uses an allowed scheme."""
    compact = _URL_NOISE_PATTERN.sub("", html_module.unescape(url)).lower()
    match = _SCHEME_PATTERN.match(compact)
    if match is None:
        return True
    return match.group(1) in allowed


class _SanitizingParser(HTMLParser):
    """HTMLParser that re-serializes only allowed markup."""

    def __init__(self, allow_list: AllowList) -> None:
        super().__init__(convert_charrefs=True)
        self._allow = allow_list
        self._out: list[str] = []
        self._drop_depth = 0

    @property
    def result(self) -> str:
        return "".join(self._out)

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag in _DROP_CONTENT_TAGS:
            if tag not in VOID_TAGS:
                self._drop_depth += 1
            return
        if self._drop_depth or tag not in self._allow.tags:
            return
        self._out.append(self._serialize_start(tag, attrs))

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if self._drop_depth or tag not in self._allow.tags or tag in _DROP_CONTENT_TAGS:
            return
        if tag in VOID_TAGS:
            self._out.append(self._serialize_start(tag, attrs))
        else:
            self._out.append(self._serialize_start(tag, attrs) + f"</{tag}>")

    def handle_endtag(self, tag: str) -> None:
        if tag in _DROP_CONTENT_TAGS:
            if self._drop_depth:
                self._drop_depth -= 1
            return
        if self._drop_depth or tag not in self._allow.tags or tag in VOID_TAGS:
            return
        self._out.append(f"</{tag}>")

    def handle_data(self, data: str) -> None:
        if not self._drop_depth:
            self._out.append(html_module.escape(data, quote=False))

    def _serialize_start(self, tag: str, attrs: list[tuple[str, str | None]]) -> str:
        parts = [tag]
        for name, value in attrs:
            if name not in self._allow.attributes:
                continue
            if value is None:
                parts.append(name)
                continue
            if name in _URL_ATTRIBUTES and not _url_allowed(value, self._allow.url_schemes):
                continue
            parts.append(f'{name}="{html_module.escape(value, quote=True)}"')
        return "<" + " ".join(parts) + ">"


def sanitize_html(html: str, allow_list: AllowList = DEFAULT_ALLOW_LIST) -> str:
    """Strip everything outside the allow-list from ``html``.

    Args:
        html: Untrusted HTML
        allow_list: Tags, attributes and URL schemes to keep

    Returns:
        Sanitized HTML. Unbalanced tags are passed through as they are.
    """
    if not html:
        return ""
    parser = _SanitizingParser(allow_list)
    parser.feed(html)
    parser.close()
    return parser.result


__all__ = [
    "DEFAULT_ALLOW_LIST",
    "AllowList",
    "sanitize_html",
]
