"""Tests for preserved-span extraction and placeholder protection."""

from docchunk.services.chunking.preserved import (
    PLACEHOLDER_PREFIX,
    ProtectedText,
    extract_preserved_spans,
)

DOC = """Intro text.

```python
def f():
    return 1
```

| a | b |
|---|---|
| 1 | 2 |

Outro."""


class TestExtractPreservedSpans:
    def test_code_and_table_spans(self):
        spans = extract_preserved_spans(DOC)
        assert [s.text.splitlines()[0] for s in spans] == ["```python", "| a | b |"]
        for span in spans:
            assert DOC[span.start : span.end] == span.text

    def test_flags_select_span_kinds(self):
        assert [s.text[:3] for s in extract_preserved_spans(DOC, preserve_tables=False)] == ["```"]
        assert [s.text[:1] for s in extract_preserved_spans(DOC, preserve_code_blocks=False)] == ["|"]
        assert extract_preserved_spans(DOC, False, False) == []

    def test_table_rows_inside_code_are_not_separate_spans(self):
        text = "```\n| not | a table |\n```"
        spans = extract_preserved_spans(text)
        assert len(spans) == 1
        assert spans[0].text == text

    def test_table_at_end_of_text(self):
        text = "para\n| x |\n| y |"
        (span,) = extract_preserved_spans(text)
        assert span.text == "| x |\n| y |"


class TestProtectedText:
    def test_protect_and_restore(self):
        protected = ProtectedText.protect(DOC, True, True)
        assert protected.placeholder_count == 2
        assert "```" not in protected.text
        assert "| a |" not in protected.text
        assert protected.restore(protected.text) == DOC

    def test_placeholder_never_collides_with_text(self):
        text = f"mentions {PLACEHOLDER_PREFIX}0__ literally\n```\ncode\n```"
        protected = ProtectedText.protect(text, True, True)
        assert protected.restore(protected.text) == text

    def test_widen_moves_end_out_of_placeholder(self):
        text = "abc ```x``` def"
        protected = ProtectedText.protect(text, True, True)
        token_start = protected.text.index("_")
        token_end = protected.text.index(" def")
        assert protected.widen(token_start + 2) == token_end
        assert protected.widen(token_start) == token_start
        assert protected.widen(token_end) == token_end

    def test_skip_emitted_jumps_past_emitted_placeholder(self):
        text = "abc ```x``` def"
        protected = ProtectedText.protect(text, True, True)
        token_start = protected.text.index("_")
        token_end = protected.text.index(" def")
        assert protected.skip_emitted(token_start - 1, token_end) == token_end
        assert protected.skip_emitted(token_end, len(protected)) == token_end
