"""HTML handling for goteo.

Provides:
- tags: forgiving tag scanner and element predicates
- splitter: split_blocks for top-level block extraction
- sanitize: sanitize_html allow-list sanitizer
"""

from goteo.html.sanitize import DEFAULT_ALLOW_LIST, AllowList, sanitize_html
from goteo.html.splitter import split_blocks
from goteo.html.tags import close_unclosed, has_image, strip_tags, unclosed_tags

__all__ = [
    "DEFAULT_ALLOW_LIST",
    "AllowList",
    "close_unclosed",
    "has_image",
    "sanitize_html",
    "split_blocks",
    "strip_tags",
    "unclosed_tags",
]
