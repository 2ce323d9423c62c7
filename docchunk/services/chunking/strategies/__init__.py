"""Chunking strategy implementations, dispatched once per run by strategy name."""

from typing import Callable

from docchunk.config.chunking.models import ChunkingOptions, ChunkingStrategy
from docchunk.services.chunking.strategies.buffer import ChunkDraft
from docchunk.services.chunking.strategies.fixed_size import fixed_size_chunks
from docchunk.services.chunking.strategies.header_based import header_based_chunks
from docchunk.services.chunking.strategies.semantic_boundary import semantic_boundary_chunks

STRATEGY_REGISTRY: dict[ChunkingStrategy, Callable[[str, ChunkingOptions], list[ChunkDraft]]] = {
    ChunkingStrategy.HEADER_BASED: header_based_chunks,
    ChunkingStrategy.FIXED_SIZE: fixed_size_chunks,
    ChunkingStrategy.SEMANTIC_BOUNDARY: semantic_boundary_chunks,
}


def get_strategy_fn(strategy: ChunkingStrategy):
    """Return the chunking function for the given strategy, or None."""
    return STRATEGY_REGISTRY.get(strategy)
