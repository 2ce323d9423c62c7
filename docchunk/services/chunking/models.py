"""Engine input/output models: Document in, DocumentChunk out."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ContentCategory(str, Enum):
    """Coarse keyword-derived label attached to each chunk."""

    PROBLEM_RESOLUTION = "problem_resolution"
    INTERFACE_USAGE = "interface_usage"
    TECHNICAL_DOCS = "technical_docs"
    GENERAL = "general"


class Document(BaseModel):
    """A titled markdown document owned by the caller. Never mutated by the engine."""

    model_config = ConfigDict(frozen=True)

    id: str | int = Field(..., description="Opaque document identity")
    title: str = Field(default="")
    content: str | None = Field(default=None, description="Raw marked-up source")


class ChunkMetadata(BaseModel):
    """Provenance and classification for one chunk. Serialized verbatim by storage."""

    model_config = ConfigDict(frozen=True)

    source_document_id: str
    source_document_title: str = ""
    chunk_index: int = Field(..., ge=0)
    parent_headers: list[str] = Field(default_factory=list, description="Outermost heading first")
    content_category: ContentCategory = ContentCategory.GENERAL
    additional_metadata: dict[str, str] = Field(default_factory=dict)


class DocumentChunk(BaseModel):
    model_config = ConfigDict(frozen=True)

    content: str = Field(..., min_length=1)
    chunk_index: int = Field(..., ge=0)
    metadata: ChunkMetadata


def encode_metadata(metadata: ChunkMetadata) -> str:
    """Serialize metadata to the flat JSON object stored next to each chunk."""
    return metadata.model_dump_json()


def decode_metadata(raw: str) -> ChunkMetadata:
    """Inverse of encode_metadata."""
    return ChunkMetadata.model_validate_json(raw)
