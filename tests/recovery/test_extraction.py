# tests/recovery/test_extraction.py
"""Tests for JSON candidate extraction."""

from errata.recovery import (
    Extraction,
    extract_candidate,
    extract_candidates,
    extract_fenced_block,
    find_matching_brace,
)


class TestExtractFencedBlock:
    def test_json_fence(self):
        text = 'Here you go:\n```json\n{"a": 1}\n```\nThanks'
        assert extract_fenced_block(text) == '{"a": 1}'

    def test_plain_fence(self):
        assert extract_fenced_block('```\n{"a": 1}\n```') == '{"a": 1}'

    def test_fence_tag_case_insensitive(self):
        assert extract_fenced_block('```JSON\n{"a": 1}\n```') == '{"a": 1}'

    def test_first_block_wins(self):
        text = '```json\n{"a": 1}\n```\n```json\n{"b": 2}\n```'
        assert extract_fenced_block(text) == '{"a": 1}'

    def test_unclosed_fence_runs_to_end(self):
        assert extract_fenced_block('```json\n{"a": 1, "b": ') == '{"a": 1, "b":'

    def test_no_fence(self):
        assert extract_fenced_block('{"a": 1}') is None


class TestFindMatchingBrace:
    def test_simple(self):
        text = '{"a": {"b": 1}} tail'
        assert find_matching_brace(text, 0) == 14

    def test_braces_inside_strings_ignored(self):
        text = '{"a": "}{"} x'
        assert find_matching_brace(text, 0) == 10

    def test_escaped_quote_inside_string(self):
        text = r'{"a": "say \"}\" now"}'
        assert find_matching_brace(text, 0) == len(text) - 1

    def test_latex_braces_inside_string(self):
        text = r'{"q": "$\frac{1}{2}$"} extra }'
        assert find_matching_brace(text, 0) == text.index("} extra")

    def test_unclosed(self):
        assert find_matching_brace('{"a": {"b": 1}', 0) is None

    def test_starts_at_offset(self):
        text = 'prefix {"a": 1}'
        assert find_matching_brace(text, text.index("{")) == len(text) - 1


class TestExtractCandidate:
    def test_prose_around_object(self):
        result = extract_candidate('Sure! {"a": 1} Hope this helps.')
        assert result.candidate == '{"a": 1}'
        assert result.method == "brace-matched"

    def test_fenced_object(self):
        result = extract_candidate('Result:\n```json\n{"a": 1}\n```')
        assert result.candidate == '{"a": 1}'
        assert result.method == "fenced+brace-matched"

    def test_prose_inside_fence(self):
        result = extract_candidate('```\nJSON below\n{"a": 1}\n```')
        assert result.candidate == '{"a": 1}'

    def test_unbalanced_uses_last_brace(self):
        text = '{"a": "x", "b": {"c": 1}'
        result = extract_candidate(text)
        assert result.method == "last-brace"
        assert result.candidate == text

    def test_truncated_object_runs_to_end(self):
        result = extract_candidate('Answer: {"a": "unfinished')
        assert result.method == "open-ended"
        assert result.candidate == '{"a": "unfinished'

    def test_no_brace_returns_text(self):
        result = extract_candidate("  I cannot read this image.  ")
        assert result.method == "no-brace"
        assert result.candidate == "I cannot read this image."

    def test_empty_text(self):
        result = extract_candidate("")
        assert result.candidate == ""
        assert result.method == "no-brace"


class TestExtractCandidates:
    def test_fenced_then_whole_text(self):
        text = 'Sure: {"q": "What does ```print(1)``` output?", "a": "1"} Done.'
        candidates = extract_candidates(text)

        assert [c.method for c in candidates] == ["fenced", "brace-matched"]
        assert candidates[0].candidate == "print(1)"
        assert candidates[1].candidate == '{"q": "What does ```print(1)``` output?", "a": "1"}'

    def test_duplicates_dropped(self):
        candidates = extract_candidates('```json\n{"a": 1}\n```')
        assert candidates == [Extraction('{"a": 1}', "fenced+brace-matched")]

    def test_no_brace_anywhere(self):
        assert extract_candidates("```\nno json\n```") == [Extraction("no json", "no-brace")]

    def test_first_candidate_is_extract_candidate(self):
        text = 'Intro {"a": {"b": 1}} outro'
        assert extract_candidates(text)[0] == extract_candidate(text)
