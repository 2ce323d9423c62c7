"""Chunking configuration models. Read-only; no business logic."""

from enum import Enum

from pydantic import BaseModel, Field


class ChunkingStrategy(str, Enum):
    """The three interchangeable chunk-boundary algorithms."""

    HEADER_BASED = "header_based"
    FIXED_SIZE = "fixed_size"
    SEMANTIC_BOUNDARY = "semantic_boundary"


class SemanticBreakThresholds(BaseModel):
    """Fractions of max_chunk_size used by the semantic-boundary heuristic."""

    min_fill_ratio: float = Field(default=0.5, ge=0, le=1, description="Buffer fill required before a heading may close a chunk")
    paragraph_cut_ratio: float = Field(default=0.8, ge=0, description="Buffer fill after which a paragraph starts a new chunk")
    forced_break_ratio: float = Field(default=0.8, ge=0, description="Buffer fill that counts as a natural break on its own")


class ChunkingOptions(BaseModel):
    """Per-run chunking parameters. Sizes are in characters."""

    max_chunk_size: int = Field(default=1000, description="Target chunk size; non-positive values fall back to the configured default")
    overlap_percentage: int = Field(default=10, ge=0, le=100, description="Window overlap, fixed_size only")
    preserve_code_blocks: bool = Field(default=True)
    preserve_tables: bool = Field(default=True)
    preserve_lists: bool = Field(default=True)
    semantic: SemanticBreakThresholds = Field(default_factory=SemanticBreakThresholds)


class ChunkingProfile(BaseModel):
    """A named strategy + options pair from static.json."""

    strategy: ChunkingStrategy = Field(..., description="header_based|fixed_size|semantic_boundary")
    options: ChunkingOptions = Field(default_factory=ChunkingOptions)
