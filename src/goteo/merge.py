"""Merge engine: continue the last block with newly rendered content.

When a chunk ends on a soft boundary (a forced split, a table row, a list
returning to an outer level) the block it rendered stays open. The first
block of the next chunk may then belong to it. ``merge_blocks`` decides by
the kind of the last block and returns the merged HTML, or None when the
new block must be appended on its own.

Rules by kind of the previous block:

- Paragraph: the new block is a paragraph and the previous text does not
  end a sentence. Contents are joined inside one <p>. Applies whether or
  not the previous block is open; an open paragraph was cut by a forced
  split and rejoins whatever its last character.

The remaining rules need the previous block to be open:

- List: the new block is a list of the same type, bare <li> items, or a
  paragraph (rewrapped as an item). Items go before the list's close.
- Table: the new block is a table (its body rows), bare <tr> rows, or a
  paragraph of pipe rows. Rows go into <tbody>.
- Blockquote: any block-level content, unwrapped from a nested
  blockquote, goes before the final </blockquote>.

A previous block containing an image is never rewritten: replacing it would
make the host destroy and recreate the painted image.

All functions are pure.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto

from goteo.config import DEFAULT_SENTENCE_TERMINATORS, StreamConfig
from goteo.html.splitter import TOP_LEVEL_TAGS
from goteo.html.tags import (
    element_spans,
    first_tag,
    has_image,
    inner_html,
    is_element,
    iter_tags,
    strip_tags,
)
from goteo.store import RenderedBlock

# Closing quotes and brackets that may follow a sentence terminator
_TRAILING_CLOSERS = "\"')]}”’」』》"

_LINE_SPLIT_PATTERN = re.compile(r"<br\s*/?>\s*|\n")
_STYLE_PATTERN = re.compile(r"""\sstyle=(?:"([^"]*)"|'([^']*)')""")


class BlockKind(Enum):
    """Kind of a rendered block, derived from its outermost tag."""

    PARAGRAPH = auto()
    LIST = auto()
    LIST_ITEM = auto()
    TABLE = auto()
    TABLE_ROW = auto()
    BLOCKQUOTE = auto()
    OTHER = auto()


@dataclass(frozen=True, slots=True)
class MergePolicy:
    """Tunables of the merge heuristics.

    Attributes:
        sentence_terminators: A paragraph whose text ends in one of these is
            complete and never continued
        paragraph_joiner: Markup between the two halves of a merged paragraph

    """

    sentence_terminators: str = DEFAULT_SENTENCE_TERMINATORS
    paragraph_joiner: str = "<br>\n"

    @classmethod
    def from_config(cls, config: StreamConfig) -> "MergePolicy":
        return cls(
            sentence_terminators=config.sentence_terminators,
            paragraph_joiner=config.paragraph_joiner,
        )


DEFAULT_POLICY = MergePolicy()


def classify_block(html: str) -> BlockKind:
    """Derive the kind of a block from its outermost tag."""
    tag = first_tag(html)
    if tag is None or tag.closing:
        return BlockKind.OTHER

    name = tag.name
    if name == "p":
        return BlockKind.PARAGRAPH if is_element(html, "p") else BlockKind.OTHER
    if name in ("ul", "ol"):
        return BlockKind.LIST
    if name == "li":
        return BlockKind.LIST_ITEM
    if name == "table":
        return BlockKind.TABLE
    if name == "tr":
        return BlockKind.TABLE_ROW
    if name == "blockquote":
        return BlockKind.BLOCKQUOTE
    return BlockKind.OTHER


def ends_sentence(html: str, terminators: str = DEFAULT_SENTENCE_TERMINATORS) -> bool:
    """Check whether the text of ``html`` ends with a sentence terminator."""
    text = strip_tags(html).rstrip().rstrip(_TRAILING_CLOSERS)
    return bool(text) and text[-1] in terminators


def merge_blocks(
    previous: RenderedBlock | None,
    incoming: str,
    policy: MergePolicy = DEFAULT_POLICY,
) -> str | None:
    """Merge ``incoming`` into ``previous`` when the rules allow it.

    Args:
        previous: Last stored block (None when the store is empty)
        incoming: HTML of one newly split block
        policy: Merge heuristics

    Returns:
        The merged HTML, or None when ``incoming`` must be appended.
    """
    if previous is None or has_image(previous.html):
        return None

    kind = classify_block(previous.html)
    if kind is BlockKind.PARAGRAPH:
        return _merge_paragraph(
            previous.html.strip(), incoming.strip(), policy, cut=previous.open
        )
    if not previous.open:
        return None

    merger = _MERGERS.get(kind)
    if merger is None:
        return None
    return merger(previous.html.strip(), incoming.strip(), policy)


def can_merge(
    previous: RenderedBlock | None,
    incoming: str,
    policy: MergePolicy = DEFAULT_POLICY,
) -> bool:
    """Check whether ``incoming`` would merge into ``previous``."""
    return merge_blocks(previous, incoming, policy) is not None


# =========================================================================
# Per-kind mergers
# =========================================================================


def _merge_paragraph(
    previous: str,
    incoming: str,
    policy: MergePolicy,
    *,
    cut: bool = False,
) -> str | None:
    """Join two paragraphs; ``cut`` means previous was split mid-block."""
    if classify_block(incoming) is not BlockKind.PARAGRAPH:
        return None
    if not cut and ends_sentence(previous, policy.sentence_terminators):
        return None

    opener = first_tag(previous)
    assert opener is not None
    head = previous[opener.start : opener.end]
    return (
        head
        + inner_html(previous, "p")
        + policy.paragraph_joiner
        + inner_html(incoming, "p")
        + "</p>"
    )


def _merge_list(previous: str, incoming: str, policy: MergePolicy) -> str | None:
    opener = first_tag(previous)
    assert opener is not None
    list_tag = opener.name

    kind = classify_block(incoming)
    if kind is BlockKind.LIST:
        incoming_opener = first_tag(incoming)
        assert incoming_opener is not None
        if incoming_opener.name != list_tag:
            return None
        items = inner_html(incoming, list_tag).strip()
    elif kind is BlockKind.LIST_ITEM:
        items = incoming
    elif kind is BlockKind.PARAGRAPH:
        # Continuation item rendered without its list wrapper
        items = "<li>" + inner_html(incoming, "p") + "</li>"
    else:
        return None

    if not items:
        return None
    return _insert_before_close(previous, list_tag, items)


def _merge_table(previous: str, incoming: str, policy: MergePolicy) -> str | None:
    kind = classify_block(incoming)
    if kind is BlockKind.TABLE:
        rows = _body_rows(incoming)
    elif kind is BlockKind.TABLE_ROW:
        rows = [incoming[start:end] for start, end in element_spans(incoming, "tr")]
    elif kind is BlockKind.PARAGRAPH:
        rows = _rows_from_pipe_text(inner_html(incoming, "p"), _header_styles(previous))
    else:
        return None

    if not rows:
        return None

    row_html = "\n".join(rows)
    if element_spans(previous, "tbody"):
        return _insert_before_close(previous, "tbody", row_html)
    return _insert_before_close(previous, "table", "<tbody>\n" + row_html + "\n</tbody>")


def _merge_blockquote(previous: str, incoming: str, policy: MergePolicy) -> str | None:
    tag = first_tag(incoming)
    if tag is None or tag.closing or tag.name not in TOP_LEVEL_TAGS:
        return None

    content = inner_html(incoming, "blockquote").strip() if tag.name == "blockquote" else incoming
    if not content:
        return None
    return _insert_before_close(previous, "blockquote", content)


# Kinds that only continue while the previous block is open
_MERGERS: dict[BlockKind, Callable[[str, str, MergePolicy], str | None]] = {
    BlockKind.LIST: _merge_list,
    BlockKind.TABLE: _merge_table,
    BlockKind.BLOCKQUOTE: _merge_blockquote,
}


# =========================================================================
# Helpers
# =========================================================================


def _insert_before_close(html: str, name: str, content: str) -> str:
    """Insert content before the last </name> of html."""
    close = html.rfind(f"</{name}>")
    if close == -1:
        return html + content + f"</{name}>"
    head = html[:close]
    if head and not head.endswith("\n"):
        head += "\n"
    return head + content + "\n" + html[close:]


def _body_rows(table: str) -> list[str]:
    """<tr> elements of a table outside its <thead>."""
    head_spans = element_spans(table, "thead")
    rows = []
    for start, end in element_spans(table, "tr"):
        if any(h_start <= start and end <= h_end for h_start, h_end in head_spans):
            continue
        rows.append(table[start:end])
    return rows


def _header_styles(table: str) -> list[str]:
    """Style attribute of each header cell, "" where absent."""
    heads = element_spans(table, "thead")
    if not heads:
        return []
    start, end = heads[0]
    thead = table[start:end]

    styles: list[str] = []
    for tag in iter_tags(thead):
        if tag.name != "th" or tag.closing:
            continue
        match = _STYLE_PATTERN.search(thead[tag.start : tag.end])
        styles.append((match.group(1) or match.group(2) or "") if match else "")
    return styles


def _rows_from_pipe_text(text: str, styles: list[str]) -> list[str] | None:
    """Turn pipe-delimited lines into <tr> rows; None if any line is not a row."""
    lines = [line.strip() for line in _LINE_SPLIT_PATTERN.split(text) if line.strip()]
    if not lines or any("|" not in line for line in lines):
        return None

    rows = []
    for line in lines:
        if line.startswith("|"):
            line = line[1:]
        if line.endswith("|"):
            line = line[:-1]
        cells = [cell.strip() for cell in line.split("|")]

        if styles:
            cells = cells[: len(styles)] + [""] * (len(styles) - len(cells))

        parts = ["<tr>"]
        for index, cell in enumerate(cells):
            style = styles[index] if index < len(styles) else ""
            attr = f' style="{style}"' if style else ""
            parts.append(f"<td{attr}>{cell}</td>")
        parts.append("</tr>")
        rows.append("\n".join(parts))
    return rows
