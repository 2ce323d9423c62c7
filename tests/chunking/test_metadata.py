"""Content categories, auxiliary metadata fields and chunk identity."""

from datetime import datetime, timezone

import pytest

from docchunk.config.chunking.models import ChunkingOptions, ChunkingStrategy
from docchunk.services.chunking.metadata import (
    build_chunk_metadata,
    chunk_id_for,
    compute_chunk_hash,
    determine_content_category,
)
from docchunk.services.chunking.models import ContentCategory, Document, decode_metadata, encode_metadata


@pytest.mark.parametrize(
    "content,expected",
    [
        ("There was an error in the system.", ContentCategory.PROBLEM_RESOLUTION),
        ("Known ISSUE with login", ContentCategory.PROBLEM_RESOLUTION),
        ("This describes the user API interface.", ContentCategory.INTERFACE_USAGE),
        ("Call this method twice", ContentCategory.INTERFACE_USAGE),
        ("```\nx = 1\n```", ContentCategory.TECHNICAL_DOCS),
        ("The function returns nothing", ContentCategory.TECHNICAL_DOCS),
        ("Just general information.", ContentCategory.GENERAL),
        ("", ContentCategory.GENERAL),
    ],
)
def test_determine_content_category(content, expected):
    assert determine_content_category(content) == expected


def test_problem_keywords_take_precedence():
    assert determine_content_category("API problem with the code") == ContentCategory.PROBLEM_RESOLUTION
    assert determine_content_category("interface code sample") == ContentCategory.INTERFACE_USAGE


class TestChunkHash:
    def test_deterministic(self):
        options = ChunkingOptions()
        first = compute_chunk_hash("body", ChunkingStrategy.HEADER_BASED, options)
        assert first == compute_chunk_hash("body", ChunkingStrategy.HEADER_BASED, ChunkingOptions())
        assert len(first) == 64

    def test_depends_on_content_strategy_and_options(self):
        options = ChunkingOptions()
        base = compute_chunk_hash("body", ChunkingStrategy.HEADER_BASED, options)
        assert base != compute_chunk_hash("body!", ChunkingStrategy.HEADER_BASED, options)
        assert base != compute_chunk_hash("body", ChunkingStrategy.FIXED_SIZE, options)
        assert base != compute_chunk_hash("body", ChunkingStrategy.HEADER_BASED, ChunkingOptions(max_chunk_size=10))


def test_chunk_id_is_stable_and_prefixed():
    chunk_id = chunk_id_for("42", 0, "abc")
    assert chunk_id == chunk_id_for("42", 0, "abc")
    assert chunk_id.startswith("chunk_")
    assert len(chunk_id) == len("chunk_") + 24
    assert chunk_id != chunk_id_for("42", 1, "abc")
    assert chunk_id != chunk_id_for("43", 0, "abc")


def test_build_chunk_metadata_fields():
    created_at = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    document = Document(id=7, title="Guide", content="ignored")
    parents = ["Top"]
    metadata = build_chunk_metadata(
        content="## Setup\n\nInstall it.",
        chunk_index=3,
        document=document,
        parent_headers=parents,
        strategy=ChunkingStrategy.SEMANTIC_BOUNDARY,
        options=ChunkingOptions(),
        created_at=created_at,
    )
    parents.append("mutated later")

    assert metadata.source_document_id == "7"
    assert metadata.source_document_title == "Guide"
    assert metadata.chunk_index == 3
    assert metadata.parent_headers == ["Top"]
    assert metadata.content_category == ContentCategory.GENERAL
    assert metadata.additional_metadata == {
        "chunk_size": "21",
        "created_at": "2024-05-01T12:00:00+00:00",
        "chunking_strategy": "semantic_boundary",
        "chunk_hash": compute_chunk_hash("## Setup\n\nInstall it.", ChunkingStrategy.SEMANTIC_BOUNDARY, ChunkingOptions()),
    }


def test_metadata_json_round_trip():
    metadata = build_chunk_metadata(
        content="error: \"quoted\" ünïcode",
        chunk_index=0,
        document=Document(id="doc-1", title="T"),
        parent_headers=["A", "B"],
        strategy=ChunkingStrategy.HEADER_BASED,
        options=ChunkingOptions(),
        created_at=datetime.now(timezone.utc),
    )
    encoded = encode_metadata(metadata)
    assert '"content_category":"problem_resolution"' in encoded
    assert decode_metadata(encoded) == metadata
