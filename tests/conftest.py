"""Shared fixtures for the chunking engine tests."""

import pytest

from docchunk.config.settings import get_settings
from docchunk.services.chunking.models import Document


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop cached settings so monkeypatched environment variables take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_document():
    def _make(content: str | None, title: str = "Test Document", doc_id: str | int = 1) -> Document:
        return Document(id=doc_id, title=title, content=content)

    return _make


@pytest.fixture
def nested_markdown() -> str:
    return """# Main Heading

This is content under main heading.

## Sub Heading 1

Content under sub heading 1.

### Deep Heading

Content under deep heading.

## Sub Heading 2

Content under sub heading 2."""
