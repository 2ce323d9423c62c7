"""Accumulating text buffer shared by the block-driven strategies."""

from typing import NamedTuple

from docchunk.services.chunking.headers import HeaderContextTracker

BLOCK_SEPARATOR = "\n\n"


class ChunkDraft(NamedTuple):
    """Content and parent headers of a chunk before index and metadata are assigned."""

    content: str
    parent_headers: list[str]


class ChunkBuffer:
    """
    Rendered blocks of the chunk being built.

    The parent headers are captured when the first block enters an empty buffer,
    so a chunk keeps the ancestry it started under even if later headings move
    the tracker on.
    """

    def __init__(self, tracker: HeaderContextTracker):
        self._tracker = tracker
        self._parts: list[str] = []
        self._length = 0
        self._parents: list[str] = []
        self.drafts: list[ChunkDraft] = []

    def __len__(self) -> int:
        return self._length

    @property
    def text(self) -> str:
        return BLOCK_SEPARATOR.join(self._parts)

    def append(self, rendered: str, parents: list[str] | None = None) -> None:
        """Add a rendered block. parents overrides the tracker ancestry for a fresh chunk."""
        if not rendered.strip():
            return
        if not self._parts:
            self._parents = parents if parents is not None else self._tracker.ancestry()
            self._length = len(rendered)
        else:
            self._length += len(BLOCK_SEPARATOR) + len(rendered)
        self._parts.append(rendered)

    def flush(self) -> None:
        """Emit the buffer as a draft unless it is blank, then clear it."""
        if self._parts:
            content = self.text.strip()
            if content:
                self.drafts.append(ChunkDraft(content, self._parents))
        self._parts = []
        self._length = 0
        self._parents = []
