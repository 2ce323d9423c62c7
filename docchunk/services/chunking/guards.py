"""
Guard layer: input ceilings, option coercion and run observation.

Validation happens before any strategy runs, so an InvalidInputError never comes
with partial output. A MemoryError inside a run surfaces as ResourceExhaustedError.
Slow or allocation-heavy runs are logged, never failed.
"""

import time
import tracemalloc
from contextlib import contextmanager
from typing import Iterator

from docchunk.config.chunking.models import ChunkingOptions, ChunkingStrategy
from docchunk.config.logging import get_logger
from docchunk.config.settings import get_settings
from docchunk.services.chunking.errors import InvalidInputError, ResourceExhaustedError

logger = get_logger(__name__)


def resolve_strategy(strategy: ChunkingStrategy | str) -> ChunkingStrategy:
    """Accept the enum or its string value; anything else is invalid input."""
    try:
        return ChunkingStrategy(strategy)
    except ValueError as e:
        raise InvalidInputError(f"Unsupported chunking strategy: {strategy!r}", cause=e) from e


def check_document_size(content: str) -> None:
    """Raise InvalidInputError if content is over the configured character ceiling."""
    limit = get_settings().max_document_chars
    if len(content) > limit:
        raise InvalidInputError(
            f"Document too large ({len(content)} chars). Maximum supported size is {limit} characters."
        )


def effective_options(options: ChunkingOptions | None) -> ChunkingOptions:
    """Return a copy of options with a usable max_chunk_size. The caller's instance is untouched."""
    if options is None:
        options = ChunkingOptions()
    if options.max_chunk_size <= 0:
        return options.model_copy(update={"max_chunk_size": get_settings().default_max_chunk_size}, deep=True)
    return options.model_copy(deep=True)


class RunStats:
    """Figures collected for one chunking run."""

    def __init__(self, strategy: ChunkingStrategy, document_id: str):
        self.strategy = strategy
        self.document_id = document_id
        self.chunk_count = 0
        self.duration_seconds = 0.0
        self.memory_delta_bytes = 0


@contextmanager
def observe_run(strategy: ChunkingStrategy, document_id: str) -> Iterator[RunStats]:
    """
    Time a run and, when enabled, sample its allocation delta. MemoryError is
    converted to ResourceExhaustedError; other exceptions pass through unchanged.
    """
    settings = get_settings()
    stats = RunStats(strategy, document_id)
    trace_memory = settings.observe_memory and not tracemalloc.is_tracing()
    if trace_memory:
        tracemalloc.start()
    start_memory = tracemalloc.get_traced_memory()[0] if tracemalloc.is_tracing() else 0
    started = time.perf_counter()
    try:
        yield stats
    except MemoryError as e:
        logger.warning(
            "Chunking ran out of memory",
            extra={"strategy": strategy.value, "document_id": document_id},
        )
        raise ResourceExhaustedError(
            "Document chunking exceeded available memory. Try reducing chunk size or document size.",
            cause=e,
        ) from e
    else:
        stats.duration_seconds = time.perf_counter() - started
        if tracemalloc.is_tracing():
            stats.memory_delta_bytes = tracemalloc.get_traced_memory()[0] - start_memory
        _report(stats, settings.slow_run_seconds, settings.memory_warning_mb * 1024 * 1024)
    finally:
        if trace_memory:
            tracemalloc.stop()


def _report(stats: RunStats, slow_seconds: float, memory_warning_bytes: int) -> None:
    fields = {
        "strategy": stats.strategy.value,
        "document_id": stats.document_id,
        "chunk_count": stats.chunk_count,
        "duration_s": round(stats.duration_seconds, 3),
        "memory_delta_mb": round(stats.memory_delta_bytes / 1024 / 1024, 2),
    }
    if stats.duration_seconds > slow_seconds or stats.memory_delta_bytes > memory_warning_bytes:
        logger.warning("Chunking run exceeded performance thresholds", extra=fields)
    else:
        logger.debug("Chunking run finished", extra=fields)
