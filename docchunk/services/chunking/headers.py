"""Heading-hierarchy tracking while blocks are consumed."""

from typing import NamedTuple

MAX_HEADER_DEPTH = 10


class HeaderFrame(NamedTuple):
    level: int
    text: str


class HeaderContextTracker:
    """
    Stack of open headings, strictly increasing in level from bottom to top.

    A new heading closes every open heading at the same or a deeper level. Past
    max_depth the heading is not pushed, so pathological nesting cannot grow the
    stack without bound.
    """

    def __init__(self, max_depth: int = MAX_HEADER_DEPTH):
        self.max_depth = max_depth
        self._stack: list[HeaderFrame] = []

    def __len__(self) -> int:
        return len(self._stack)

    def enter(self, level: int, text: str) -> list[str]:
        """
        Apply a heading and return its parent ancestry: the headings still open
        after closing siblings and deeper levels, excluding the heading itself.
        A heading with blank text leaves the stack untouched.
        """
        if not text or not text.strip():
            return self.ancestry()
        while self._stack and self._stack[-1].level >= level:
            self._stack.pop()
        parents = self.ancestry()
        if len(self._stack) < self.max_depth:
            self._stack.append(HeaderFrame(level, text))
        return parents

    def ancestry(self) -> list[str]:
        """Texts of the open headings, outermost first. A fresh list on every call."""
        return [frame.text for frame in self._stack]

    def frames(self) -> tuple[HeaderFrame, ...]:
        return tuple(self._stack)

    def reset(self) -> None:
        self._stack.clear()
