"""
Semantic-boundary chunking: header-aware like header_based, but a heading only
closes a chunk at a natural break, and paragraphs become cut points once the
buffer nears max_chunk_size. A heuristic over document structure, not embeddings.
"""

import re

from docchunk.config.chunking.models import ChunkingOptions, SemanticBreakThresholds
from docchunk.services.chunking.headers import HeaderContextTracker
from docchunk.services.chunking.parser import Heading, Paragraph, iter_blocks, render_block
from docchunk.services.chunking.strategies.buffer import ChunkBuffer, ChunkDraft

TRAILING_BLANK_LINE = re.compile(r"\n[ \t]*\n\s*\Z")
SENTENCE_THEN_BLANK_LINE = re.compile(r"[.!?]\n[ \t]*\n")


def is_natural_break(content: str, max_chunk_size: int, thresholds: SemanticBreakThresholds) -> bool:
    """
    True when content is at least min_fill_ratio full and either ends with a blank
    line, has a sentence followed by a blank line, or is past forced_break_ratio.
    """
    if len(content) < max_chunk_size * thresholds.min_fill_ratio:
        return False
    return bool(
        TRAILING_BLANK_LINE.search(content)
        or SENTENCE_THEN_BLANK_LINE.search(content)
        or len(content) > max_chunk_size * thresholds.forced_break_ratio
    )


def semantic_boundary_chunks(text: str, options: ChunkingOptions) -> list[ChunkDraft]:
    if not text or not text.strip():
        return []
    thresholds = options.semantic
    max_size = options.max_chunk_size
    tracker = HeaderContextTracker()
    buffer = ChunkBuffer(tracker)
    for block in iter_blocks(text):
        rendered = render_block(block)
        if isinstance(block, Heading):
            if len(buffer) and is_natural_break(buffer.text, max_size, thresholds):
                buffer.flush()
            parents = tracker.enter(block.level, block.text)
            buffer.append(rendered, parents)
        elif isinstance(block, Paragraph) and len(buffer) > max_size * thresholds.paragraph_cut_ratio:
            buffer.flush()
            buffer.append(rendered)
        else:
            buffer.append(rendered)
    buffer.flush()
    return buffer.drafts
