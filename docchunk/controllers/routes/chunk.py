"""POST /chunk/preview and /chunk/materialize: chunk an inline document with a static.json profile."""

from fastapi import APIRouter, HTTPException

from docchunk.config.chunking.models import ChunkingProfile
from docchunk.config.chunking.static import ACTIVE_PROFILE, profile_for_strategy, resolve_chunking_profile
from docchunk.controllers.schema.chunk import (
    ChunkPreview,
    ChunkPreviewResponse,
    ChunkRequest,
    MaterializeResponse,
)
from docchunk.services.chunking.chunker import chunk_document, materialize_document
from docchunk.services.chunking.models import Document

router = APIRouter(prefix="/chunk", tags=["chunking"])

PREVIEW_CHARS = 200
_OPTION_OVERRIDES = (
    "max_chunk_size",
    "overlap_percentage",
    "preserve_code_blocks",
    "preserve_tables",
    "preserve_lists",
)


def _resolve_profile(body: ChunkRequest) -> ChunkingProfile:
    """
    Profile from static.json with request overrides applied on top. A strategy
    override without an explicit profile starts from that strategy's own profile.
    """
    try:
        if body.strategy is not None and body.profile == ACTIVE_PROFILE:
            base = profile_for_strategy(body.strategy)
        else:
            base = resolve_chunking_profile(body.profile)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    option_overrides = {
        name: getattr(body, name) for name in _OPTION_OVERRIDES if getattr(body, name) is not None
    }
    if not option_overrides and body.strategy is None:
        return base
    inline = base.model_dump(mode="json")
    inline["options"].update(option_overrides)
    if body.strategy is not None:
        inline["strategy"] = body.strategy
    try:
        return resolve_chunking_profile(body.profile, inline)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


def _document(body: ChunkRequest) -> Document:
    return Document(id=body.document.id, title=body.document.title, content=body.document.content)


@router.post("/preview", response_model=ChunkPreviewResponse)
def preview_chunks(body: ChunkRequest) -> ChunkPreviewResponse:
    """Show how a document would be chunked without saving anything."""
    profile = _resolve_profile(body)
    chunks = chunk_document(_document(body), profile.strategy, profile.options)
    previews = [
        ChunkPreview(
            chunk_index=c.chunk_index,
            content=c.content[:PREVIEW_CHARS] + "..." if len(c.content) > PREVIEW_CHARS else c.content,
            content_length=len(c.content),
            parent_headers=c.metadata.parent_headers,
            content_category=c.metadata.content_category.value,
        )
        for c in chunks
    ]
    return ChunkPreviewResponse(
        document_id=str(body.document.id),
        document_title=body.document.title,
        strategy=profile.strategy.value,
        total_chunks=len(chunks),
        chunk_previews=previews,
    )


@router.post("/materialize", response_model=MaterializeResponse)
def materialize_chunks(body: ChunkRequest) -> MaterializeResponse:
    """Chunk a document into flat records (serialized metadata) for the storage layer to persist."""
    profile = _resolve_profile(body)
    records = materialize_document(_document(body), profile.strategy, profile.options)
    return MaterializeResponse(
        document_id=str(body.document.id),
        strategy=profile.strategy.value,
        chunk_count=len(records),
        chunks=records,
    )
