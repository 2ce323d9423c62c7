"""Text cleaners for chunking input. Structure-preserving: only line endings and BOM are touched."""

import re

_LINE_ENDINGS = re.compile(r"\r\n?")


def normalize_line_endings(text: str) -> str:
    """Convert CRLF and bare CR line endings to LF."""
    if not text or not isinstance(text, str):
        return ""
    return _LINE_ENDINGS.sub("\n", text)


def clean_for_chunking(text: str) -> str:
    """Clean raw content before chunking. Drops a leading BOM and normalizes line endings."""
    text = normalize_line_endings(text)
    if text.startswith("\ufeff"):
        text = text[1:]
    return text
