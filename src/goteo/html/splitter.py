"""Split rendered HTML into top-level blocks.

The converter returns one HTML string per chunk; the store needs it as a
sequence of independent top-level elements so each can be merged or
appended on its own. Splitting is a single forward pass with a tag stack:

- A top-level block tag opened with an empty stack starts a block.
- Tags opened inside a block are pushed; they never start a block.
- A closing tag pops down to its opener; emptying the stack on a
  top-level tag ends the block.
- Void elements with an empty stack are blocks of their own.
- Anything left open at the end is emitted as-is; the merge engine decides
  what an unclosed span means.

Example:
    >>> split_blocks("<h1>T</h1>\\n<ul>\\n<li>a<ul><li>b</li></ul></li>\\n</ul>\\n")
    ['<h1>T</h1>', '<ul>\\n<li>a<ul><li>b</li></ul></li>\\n</ul>']
"""

from __future__ import annotations

from goteo.html.tags import iter_tags

# Elements that start a new top-level block
TOP_LEVEL_TAGS = frozenset(
    {
        "blockquote",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "hr",
        "ol",
        "p",
        "pre",
        "table",
        "ul",
    }
)

# Void elements emitted as single-element blocks at the top level
STANDALONE_TAGS = frozenset({"br", "hr", "img", "input"})


def split_blocks(html: str) -> list[str]:
    """Split sanitized HTML into top-level blocks.

    Args:
        html: Sanitized HTML for one chunk

    Returns:
        Blocks in document order. Whitespace between blocks is dropped.
        Input with no top-level elements is returned as a single block;
        blank input yields an empty list.
    """
    blocks: list[str] = []
    stack: list[str] = []
    block_start = 0
    run_start = 0
    found = False

    def emit_run(end: int) -> None:
        run = html[run_start:end].strip()
        if run:
            blocks.append(run)

    for tag in iter_tags(html):
        if not stack:
            if tag.closing:
                # Stray closer at the top level stays in the text run
                continue
            if tag.name in STANDALONE_TAGS:
                emit_run(tag.start)
                blocks.append(html[tag.start : tag.end])
                run_start = tag.end
                found = True
                continue
            if tag.name in TOP_LEVEL_TAGS and not tag.is_void:
                emit_run(tag.start)
                block_start = tag.start
                stack.append(tag.name)
                found = True
            continue

        if tag.is_void:
            continue
        if not tag.closing:
            stack.append(tag.name)
            continue
        if tag.name not in stack:
            continue

        while stack:
            popped = stack.pop()
            if popped == tag.name:
                break

        if not stack:
            blocks.append(html[block_start : tag.end])
            run_start = tag.end

    if stack:
        blocks.append(html[block_start:].rstrip())
    elif not found:
        return [html.strip()] if html.strip() else []
    else:
        emit_run(len(html))

    return blocks
