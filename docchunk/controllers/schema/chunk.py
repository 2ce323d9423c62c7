"""Request/response schemas for the /chunk routes."""

from typing import Any

from pydantic import BaseModel, Field


class DocumentPayload(BaseModel):
    """Inline document to chunk. Nothing is read from or written to storage."""

    id: str | int = Field(..., description="Opaque document id")
    title: str = Field(default="")
    content: str = Field(default="", description="Raw markdown source")


class ChunkRequest(BaseModel):
    """Document plus a chunking profile from static.json and optional per-request overrides."""

    document: DocumentPayload
    profile: str = Field(default="active", description="Profile name from static.json, or 'active'")
    strategy: str | None = Field(default=None, description="Override: header_based|fixed_size|semantic_boundary")
    max_chunk_size: int | None = Field(default=None, le=1_000_000, description="Override for chunk size (chars)")
    overlap_percentage: int | None = Field(default=None, ge=0, le=100)
    preserve_code_blocks: bool | None = None
    preserve_tables: bool | None = None
    preserve_lists: bool | None = None


class ChunkPreview(BaseModel):
    chunk_index: int
    content: str = Field(..., description="First 200 characters of the chunk")
    content_length: int
    parent_headers: list[str] = Field(default_factory=list)
    content_category: str


class ChunkPreviewResponse(BaseModel):
    """POST /chunk/preview response body."""

    document_id: str
    document_title: str
    strategy: str
    total_chunks: int = Field(..., ge=0)
    chunk_previews: list[ChunkPreview] = Field(default_factory=list)


class MaterializeResponse(BaseModel):
    """POST /chunk/materialize response body: records ready for a storage layer."""

    document_id: str
    strategy: str
    chunk_count: int = Field(..., ge=0)
    chunks: list[dict[str, Any]] = Field(default_factory=list)
