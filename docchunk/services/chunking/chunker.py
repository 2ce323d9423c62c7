"""
Chunker: takes a document + strategy + options and returns ordered chunk records.
Pure and deterministic apart from the created_at timestamp; performs no I/O.
Flow: validate → clean → run strategy → attach index and metadata.
"""

from datetime import datetime, timezone
from typing import Any

from docchunk.config.chunking.models import ChunkingOptions, ChunkingStrategy
from docchunk.config.logging import get_logger
from docchunk.services.chunking.cleaners import clean_for_chunking
from docchunk.services.chunking.guards import (
    check_document_size,
    effective_options,
    observe_run,
    resolve_strategy,
)
from docchunk.services.chunking.metadata import build_chunk_metadata, chunk_id_for
from docchunk.services.chunking.models import Document, DocumentChunk, encode_metadata
from docchunk.services.chunking.strategies import get_strategy_fn
from docchunk.services.chunking.strategies.buffer import ChunkDraft

logger = get_logger(__name__)


def chunk_document(
    document: Document,
    strategy: ChunkingStrategy | str,
    options: ChunkingOptions | None = None,
) -> list[DocumentChunk]:
    """
    Split a document into chunks. chunk_index runs 0..N-1 in emission order and no
    chunk is blank. Raises InvalidInputError before any work for an unsupported
    strategy or oversized content; raises ResourceExhaustedError if the run cannot
    finish within its bounds. Empty content yields an empty list.
    """
    strategy = resolve_strategy(strategy)
    content = document.content or ""
    if not content:
        return []
    check_document_size(content)
    options = effective_options(options)
    strategy_fn = get_strategy_fn(strategy)
    if strategy_fn is None:
        raise ValueError(f"No implementation registered for strategy: {strategy.value!r}")

    document_id = str(document.id)
    logger.debug(
        "Chunking document",
        extra={"document_id": document_id, "strategy": strategy.value, "content_length": len(content)},
    )
    with observe_run(strategy, document_id) as stats:
        drafts = strategy_fn(clean_for_chunking(content), options)
        chunks = _build_chunks(drafts, document, strategy, options)
        stats.chunk_count = len(chunks)
    return chunks


def _build_chunks(
    drafts: list[ChunkDraft],
    document: Document,
    strategy: ChunkingStrategy,
    options: ChunkingOptions,
) -> list[DocumentChunk]:
    now = datetime.now(timezone.utc)
    chunks: list[DocumentChunk] = []
    for draft in drafts:
        if not draft.content.strip():
            continue
        index = len(chunks)
        metadata = build_chunk_metadata(
            content=draft.content,
            chunk_index=index,
            document=document,
            parent_headers=draft.parent_headers,
            strategy=strategy,
            options=options,
            created_at=now,
        )
        chunks.append(DocumentChunk(content=draft.content, chunk_index=index, metadata=metadata))
    return chunks


def materialize_document(
    document: Document,
    strategy: ChunkingStrategy | str,
    options: ChunkingOptions | None = None,
) -> list[dict[str, Any]]:
    """
    Same computation as chunk_document, flattened for a storage layer: one record
    per chunk with the metadata serialized to JSON and a deterministic chunk_id.
    """
    document_id = str(document.id)
    records: list[dict[str, Any]] = []
    for chunk in chunk_document(document, strategy, options):
        chunk_hash = chunk.metadata.additional_metadata["chunk_hash"]
        records.append({
            "chunk_id": chunk_id_for(document_id, chunk.chunk_index, chunk_hash),
            "document_id": document_id,
            "content": chunk.content,
            "chunk_index": chunk.chunk_index,
            "metadata": encode_metadata(chunk.metadata),
            "chunk_hash": chunk_hash,
        })
    return records
