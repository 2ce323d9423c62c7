"""
Fixed-size chunking over raw text with overlap. Preserved spans (code fences,
tables) are swapped for placeholders before windowing so no window cuts them.
"""

import math

from docchunk.config.chunking.models import ChunkingOptions
from docchunk.config.logging import get_logger
from docchunk.services.chunking.errors import ResourceExhaustedError
from docchunk.services.chunking.preserved import ProtectedText
from docchunk.services.chunking.strategies.buffer import ChunkDraft

logger = get_logger(__name__)

# A window is trimmed back to its last space only if that space lies past this fraction.
WORD_BOUNDARY_RATIO = 0.8


def overlap_size(options: ChunkingOptions) -> int:
    return int(options.max_chunk_size * options.overlap_percentage / 100)


def minimum_advance(size: int, overlap: int) -> int:
    """Smallest step a window can take: one trimmed back to the word-boundary floor, minus the overlap."""
    return max(1, math.ceil(size * WORD_BOUNDARY_RATIO) - overlap)


def iteration_bound(total_length: int, advance: int) -> int:
    """Upper bound on windows for one run; exceeding it means advance has degenerated."""
    return max(10, total_length // advance + 5)


def fixed_size_chunks(text: str, options: ChunkingOptions) -> list[ChunkDraft]:
    """
    Slide a max_chunk_size window over the text, stepping by the window length
    minus the overlap. Windows that stop short of the end are pulled back to the
    last space when that keeps more than 80% of the window. The run stops once a
    window reaches the end of the text, so the tail is emitted exactly once.
    """
    if not text or not text.strip():
        return []
    size = options.max_chunk_size
    overlap = overlap_size(options)
    protected = ProtectedText.protect(text, options.preserve_code_blocks, options.preserve_tables)
    processed = protected.text
    total = len(processed)
    if size - overlap < 1 and total > size:
        _exhausted(
            f"Overlap of {overlap} chars leaves no room to advance a {size}-char window "
            f"over {total} chars of content.",
            size,
            overlap,
            total,
        )
    max_iterations = iteration_bound(total, minimum_advance(size, overlap))

    drafts: list[ChunkDraft] = []
    position = 0
    iterations = 0
    while position < total:
        if iterations >= max_iterations:
            _exhausted(
                f"Fixed-size chunking exceeded maximum iterations ({max_iterations}). "
                f"Content length: {total}, chunk size: {size}, overlap: {overlap}, position: {position}",
                size,
                overlap,
                total,
            )
        iterations += 1

        end = protected.widen(min(position + size, total))
        if end < total:
            last_space = processed.rfind(" ", position, end)
            if last_space - position > (end - position) * WORD_BOUNDARY_RATIO:
                end = last_space + 1

        content = protected.restore(processed[position:end]).strip()
        if content:
            drafts.append(ChunkDraft(content, []))
        if end >= total:
            break
        step = max(1, (end - position) - overlap)
        position = protected.skip_emitted(position + step, end)
    return drafts


def _exhausted(message: str, size: int, overlap: int, total: int) -> None:
    logger.warning(
        "Fixed-size chunking stopped by iteration guard",
        extra={"max_chunk_size": size, "overlap": overlap, "content_length": total},
    )
    raise ResourceExhaustedError(message)
