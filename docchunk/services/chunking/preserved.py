"""
Preserved spans: fenced code and contiguous pipe-table rows that size-driven
windowing must never cut. Spans are swapped for short placeholder tokens before
windowing and swapped back afterwards.
"""

import re
from bisect import bisect_left, bisect_right
from dataclasses import dataclass

CODE_FENCE_SPAN = re.compile(r"```[\s\S]*?```")
PLACEHOLDER_PREFIX = "__PRESERVED_BLOCK_"


@dataclass(frozen=True)
class PreservedSpan:
    start: int
    end: int
    text: str


def _code_spans(text: str) -> list[PreservedSpan]:
    return [PreservedSpan(m.start(), m.end(), m.group()) for m in CODE_FENCE_SPAN.finditer(text)]


def _table_spans(text: str) -> list[PreservedSpan]:
    """Runs of consecutive lines whose first non-space character is '|'."""
    spans: list[PreservedSpan] = []
    run_start: int | None = None
    run_end = 0
    offset = 0
    for line in text.split("\n"):
        line_end = offset + len(line)
        if line.strip().startswith("|"):
            if run_start is None:
                run_start = offset
            run_end = line_end
        elif run_start is not None:
            spans.append(PreservedSpan(run_start, run_end, text[run_start:run_end]))
            run_start = None
        offset = line_end + 1
    if run_start is not None:
        spans.append(PreservedSpan(run_start, run_end, text[run_start:run_end]))
    return spans


def extract_preserved_spans(
    text: str,
    preserve_code_blocks: bool = True,
    preserve_tables: bool = True,
) -> list[PreservedSpan]:
    """
    Return non-overlapping preserved spans sorted by position. Code fences win over
    table rows that fall inside them.
    """
    spans: list[PreservedSpan] = []
    if preserve_code_blocks:
        spans.extend(_code_spans(text))
    if preserve_tables:
        code = list(spans)
        for table in _table_spans(text):
            if not any(table.start < c.end and c.start < table.end for c in code):
                spans.append(table)
    spans.sort(key=lambda s: s.start)
    return spans


def _placeholder_prefix(text: str) -> str:
    prefix = PLACEHOLDER_PREFIX
    while prefix in text:
        prefix = "_" + prefix
    return prefix


class ProtectedText:
    """
    Text with preserved spans replaced by atomic placeholder tokens.

    Offsets of the placeholders inside `text` are kept so a window can be widened
    to cover a token it would otherwise cut, and so overlap can skip a token that
    the previous window already emitted whole.
    """

    def __init__(self, source: str, spans: list[PreservedSpan]):
        self._prefix = _placeholder_prefix(source)
        self._pattern = re.compile(re.escape(self._prefix) + r"(\d+)__")
        self._originals: list[str] = []
        self._starts: list[int] = []
        self._ends: list[int] = []
        parts: list[str] = []
        cursor = 0
        length = 0
        for i, span in enumerate(spans):
            before = source[cursor : span.start]
            parts.append(before)
            length += len(before)
            token = f"{self._prefix}{i}__"
            self._starts.append(length)
            parts.append(token)
            length += len(token)
            self._ends.append(length)
            self._originals.append(span.text)
            cursor = span.end
        parts.append(source[cursor:])
        self.text = "".join(parts)

    @classmethod
    def protect(cls, source: str, preserve_code_blocks: bool, preserve_tables: bool) -> "ProtectedText":
        return cls(source, extract_preserved_spans(source, preserve_code_blocks, preserve_tables))

    def __len__(self) -> int:
        return len(self.text)

    @property
    def placeholder_count(self) -> int:
        return len(self._originals)

    def widen(self, end: int) -> int:
        """Move a window end that falls inside a placeholder to the end of that placeholder."""
        i = bisect_right(self._starts, end - 1) - 1
        if i >= 0 and self._starts[i] < end < self._ends[i]:
            return self._ends[i]
        return end

    def skip_emitted(self, position: int, emitted_end: int) -> int:
        """
        Move position past any placeholder that overlaps [position, emitted_end).
        Such placeholders were emitted whole by the window that ended at emitted_end.
        """
        i = bisect_left(self._starts, emitted_end) - 1
        if i >= 0 and self._ends[i] > position:
            return max(position, self._ends[i])
        return position

    def restore(self, chunk: str) -> str:
        """Substitute placeholder tokens in chunk with their original text."""
        if not self._originals:
            return chunk
        return self._pattern.sub(lambda m: self._originals[int(m.group(1))], chunk)
