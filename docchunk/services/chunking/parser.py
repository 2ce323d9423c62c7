"""
Block parser for headed markdown. Turns raw text into an ordered stream of typed
blocks (heading, paragraph, code, table, list, other) in one line-oriented pass.

Parsing is lazy: iter_blocks() is a generator and each call is a fresh pass over
the text. render_block() turns a block back into markdown and falls
back to the block's raw source when the block is malformed; it never raises.
"""

import re
from dataclasses import dataclass
from typing import Iterator

from docchunk.config.logging import get_logger
from docchunk.services.chunking.cleaners import normalize_line_endings

logger = get_logger(__name__)

ATX_HEADING = re.compile(r"^ {0,3}(#{1,6})(?:[ \t]+(.*?))?(?:[ \t]+#+)?[ \t]*$")
SETEXT_UNDERLINE = re.compile(r"^ {0,3}(=+|-+)[ \t]*$")
FENCE_OPEN = re.compile(r"^ {0,3}(`{3,}|~{3,})[ \t]*([^`]*?)[ \t]*$")
THEMATIC_BREAK = re.compile(r"^ {0,3}(?:(?:-[ \t]*){3,}|(?:\*[ \t]*){3,}|(?:_[ \t]*){3,})$")
LIST_ITEM = re.compile(r"^[ \t]*(?:[-*+]|\d{1,9}[.)])(?:[ \t]+|$)")


@dataclass(frozen=True)
class Block:
    text: str
    raw: str


@dataclass(frozen=True)
class Heading(Block):
    level: int = 1


@dataclass(frozen=True)
class Paragraph(Block):
    pass


@dataclass(frozen=True)
class CodeBlock(Block):
    fence: str = "```"
    info: str = ""
    closed: bool = True


@dataclass(frozen=True)
class Table(Block):
    pass


@dataclass(frozen=True)
class ListBlock(Block):
    pass


@dataclass(frozen=True)
class Other(Block):
    pass


class BlockRenderError(ValueError):
    """A block cannot be rendered structurally."""


def _is_table_row(line: str) -> bool:
    return line.lstrip().startswith("|")


def _is_blockquote(line: str) -> bool:
    return line.lstrip(" ").startswith(">")


def _starts_block(line: str) -> bool:
    """True if line opens a block that interrupts a paragraph."""
    return bool(
        FENCE_OPEN.match(line)
        or ATX_HEADING.match(line)
        or THEMATIC_BREAK.match(line)
        or _is_table_row(line)
        or LIST_ITEM.match(line)
        or _is_blockquote(line)
    )


def _closes_fence(line: str, fence: str) -> bool:
    stripped = line.strip()
    return (
        len(line) - len(line.lstrip(" ")) <= 3
        and stripped.startswith(fence)
        and set(stripped) == {fence[0]}
    )


def heading_text(raw_text: str | None) -> str:
    """Heading text with surrounding whitespace trimmed."""
    return (raw_text or "").strip()


def iter_blocks(text: str) -> Iterator[Block]:
    """Yield the blocks of a markdown document in document order."""
    lines = normalize_line_endings(text).split("\n")
    n = len(lines)
    i = 0
    while i < n:
        line = lines[i]
        if not line.strip():
            i += 1
            continue

        fence_match = FENCE_OPEN.match(line)
        if fence_match:
            fence = fence_match.group(1)
            info = fence_match.group(2)
            j = i + 1
            while j < n and not _closes_fence(lines[j], fence):
                j += 1
            closed = j < n
            body = lines[i + 1 : j]
            end = j + 1 if closed else n
            yield CodeBlock(
                text="\n".join(body),
                raw="\n".join(lines[i:end]),
                fence=fence,
                info=info,
                closed=closed,
            )
            i = end
            continue

        heading_match = ATX_HEADING.match(line)
        if heading_match:
            yield Heading(
                text=heading_text(heading_match.group(2)),
                raw=line,
                level=len(heading_match.group(1)),
            )
            i += 1
            continue

        if THEMATIC_BREAK.match(line):
            yield Other(text=line.strip(), raw=line)
            i += 1
            continue

        if _is_table_row(line):
            j = i
            while j < n and _is_table_row(lines[j]):
                j += 1
            rows = [row.rstrip() for row in lines[i:j]]
            yield Table(text="\n".join(rows), raw="\n".join(lines[i:j]))
            i = j
            continue

        if LIST_ITEM.match(line):
            j = _scan_list(lines, i)
            items = [item.rstrip() for item in lines[i:j]]
            yield ListBlock(text="\n".join(items).strip("\n"), raw="\n".join(lines[i:j]))
            i = j
            continue

        if _is_blockquote(line):
            j = i + 1
            while j < n and lines[j].strip() and (_is_blockquote(lines[j]) or not _starts_block(lines[j])):
                j += 1
            quoted = [q.rstrip() for q in lines[i:j]]
            yield Other(text="\n".join(quoted), raw="\n".join(lines[i:j]))
            i = j
            continue

        # Paragraph, possibly promoted to a setext heading
        j = i + 1
        setext_level = 0
        while j < n and lines[j].strip():
            underline = SETEXT_UNDERLINE.match(lines[j])
            if underline:
                setext_level = 1 if underline.group(1).startswith("=") else 2
                break
            if _starts_block(lines[j]):
                break
            j += 1
        paragraph_lines = [p.strip() for p in lines[i:j]]
        if setext_level:
            yield Heading(
                text=" ".join(paragraph_lines),
                raw="\n".join(lines[i : j + 1]),
                level=setext_level,
            )
            i = j + 1
        else:
            yield Paragraph(text="\n".join(paragraph_lines), raw="\n".join(lines[i:j]))
            i = j


def _scan_list(lines: list[str], start: int) -> int:
    """Return the index one past the last line of the list beginning at start."""
    n = len(lines)
    j = start + 1
    while j < n:
        line = lines[j]
        if not line.strip():
            # Loose list: a blank run continues the list only if an item or indented line follows
            k = j
            while k < n and not lines[k].strip():
                k += 1
            if k < n and (LIST_ITEM.match(lines[k]) or lines[k][:1] in (" ", "\t")):
                j = k
                continue
            return j
        if LIST_ITEM.match(line) or line[:1] in (" ", "\t"):
            j += 1
            continue
        if _starts_block(line):
            return j
        # Lazy continuation of the previous item
        j += 1
    return j


def _render_structural(block: Block) -> str:
    if isinstance(block, Heading):
        if block.level < 1 or not block.text:
            raise BlockRenderError(f"heading without text at level {block.level}")
        return f"{'#' * block.level} {block.text}"
    if isinstance(block, CodeBlock):
        if not block.closed:
            raise BlockRenderError("unterminated code fence")
        opener = f"{block.fence}{block.info}"
        if not block.text:
            return f"{opener}\n{block.fence}"
        return f"{opener}\n{block.text}\n{block.fence}"
    if isinstance(block, (Paragraph, Table, ListBlock, Other)):
        return block.text.rstrip()
    raise BlockRenderError(f"unknown block type {type(block).__name__}")


def render_block(block: Block) -> str:
    """Render a block back to markdown; malformed blocks degrade to their raw source."""
    try:
        rendered = _render_structural(block)
    except (BlockRenderError, TypeError, AttributeError) as e:
        logger.debug(
            "Block rendered from raw source",
            extra={"block_type": type(block).__name__, "reason": str(e)},
        )
        return block.raw.rstrip()
    if not rendered.strip():
        return block.raw.rstrip()
    return rendered
