"""Header-based chunking. Headings open new chunks; other blocks fill them up to max_chunk_size."""

from docchunk.config.chunking.models import ChunkingOptions
from docchunk.services.chunking.headers import HeaderContextTracker
from docchunk.services.chunking.parser import Heading, iter_blocks, render_block
from docchunk.services.chunking.strategies.buffer import ChunkBuffer, ChunkDraft


def header_based_chunks(text: str, options: ChunkingOptions) -> list[ChunkDraft]:
    """
    Cut before every heading and after any block that pushes the buffer past
    max_chunk_size. The size limit is checked between blocks only, so a heading
    always stays with its body and a single oversized block is never truncated.
    """
    if not text or not text.strip():
        return []
    tracker = HeaderContextTracker()
    buffer = ChunkBuffer(tracker)
    for block in iter_blocks(text):
        if isinstance(block, Heading):
            buffer.flush()
            parents = tracker.enter(block.level, block.text)
            buffer.append(render_block(block), parents)
            continue
        buffer.append(render_block(block))
        if len(buffer) > options.max_chunk_size:
            buffer.flush()
    buffer.flush()
    return buffer.drafts
