"""Per-chunk metadata: provenance, content category and auxiliary fields."""

import hashlib
import json
from datetime import datetime

from docchunk.config.chunking.models import ChunkingOptions, ChunkingStrategy
from docchunk.services.chunking.models import ChunkMetadata, ContentCategory, Document

# First match wins; the order is part of the contract.
CATEGORY_KEYWORDS: tuple[tuple[ContentCategory, tuple[str, ...]], ...] = (
    (ContentCategory.PROBLEM_RESOLUTION, ("problem", "issue", "error")),
    (ContentCategory.INTERFACE_USAGE, ("api", "interface", "method")),
    (ContentCategory.TECHNICAL_DOCS, ("```", "code", "function")),
)


def determine_content_category(content: str) -> ContentCategory:
    """Case-insensitive substring scan over the chunk text."""
    lowered = content.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return category
    return ContentCategory.GENERAL


def compute_chunk_hash(content: str, strategy: ChunkingStrategy, options: ChunkingOptions) -> str:
    """Chunk hash = SHA-256(content + strategy + canonical options)."""
    options_canonical = json.dumps(options.model_dump(mode="json"), sort_keys=True)
    payload = f"{content}|{strategy.value}|{options_canonical}"
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def chunk_id_for(document_id: str, chunk_index: int, chunk_hash: str) -> str:
    """Deterministic chunk_id; the same document, position and content give the same id."""
    payload = f"{document_id}:{chunk_index}:{chunk_hash}"
    return "chunk_" + hashlib.sha256(payload.encode("utf-8")).hexdigest()[:24]


def build_chunk_metadata(
    content: str,
    chunk_index: int,
    document: Document,
    parent_headers: list[str],
    strategy: ChunkingStrategy,
    options: ChunkingOptions,
    created_at: datetime,
) -> ChunkMetadata:
    return ChunkMetadata(
        source_document_id=str(document.id),
        source_document_title=document.title,
        chunk_index=chunk_index,
        parent_headers=list(parent_headers),
        content_category=determine_content_category(content),
        additional_metadata={
            "chunk_size": str(len(content)),
            "created_at": created_at.isoformat(),
            "chunking_strategy": strategy.value,
            "chunk_hash": compute_chunk_hash(content, strategy, options),
        },
    )
