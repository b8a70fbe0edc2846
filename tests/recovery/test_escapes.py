# tests/recovery/test_escapes.py
"""Tests for escape normalization inside JSON string literals."""

import json

import pytest

from errata.recovery import has_eaten_latex, normalize_escapes


def loads_normalized(text: str):
    return json.loads(normalize_escapes(text))


class TestLatexBackslashes:
    def test_invalid_escape_doubled(self):
        assert loads_normalized(r'{"q": "$\sqrt{2}$"}') == {"q": r"$\sqrt{2}$"}

    @pytest.mark.parametrize(
        "command", [r"\frac", r"\beta", r"\neq", r"\right", r"\times", r"\theta", r"\text"]
    )
    def test_commands_colliding_with_json_escapes(self, command):
        source = '{"q": "$' + command + '{x}$"}'
        assert loads_normalized(source) == {"q": "$" + command + "{x}$"}

    def test_mixed_formula(self):
        source = r'{"a": "$x = \frac{-b \pm \sqrt{b^2 - 4ac}}{2a}$"}'
        assert loads_normalized(source)["a"] == r"$x = \frac{-b \pm \sqrt{b^2 - 4ac}}{2a}$"

    def test_command_prefix_of_longer_word_is_not_latex(self):
        # "\next" is a newline followed by "ext", not the \ne command.
        assert loads_normalized(r'{"a": "first\next"}') == {"a": "first\next"}


class TestLineBreaksBeforeWords:
    def test_newline_before_short_word_kept(self):
        assert loads_normalized(r'{"a": "line one\nu two"}') == {"a": "line one\nu two"}

    def test_tab_before_short_word_kept(self):
        assert loads_normalized(r'{"a": "a\to b"}') == {"a": "a\to b"}

    def test_same_command_inside_math_is_latex(self):
        assert loads_normalized(r'{"a": "$\nu = 2$, $x \to 0$"}') == {
            "a": r"$\nu = 2$, $x \to 0$"
        }

    def test_other_command_marks_latex(self):
        assert loads_normalized(r'{"a": "\sqrt{2} \neq 1"}') == {"a": r"\sqrt{2} \neq 1"}

    def test_bf_commands_without_math(self):
        assert loads_normalized(r'{"a": "\frac{1}{2}"}') == {"a": r"\frac{1}{2}"}


class TestHasEatenLatex:
    @pytest.mark.parametrize(
        "value",
        [
            "x = \x0crac{1}{2}",
            "\x08eta",
            "$a \times b$",
            "$x \neq 0$",
            "$\\left(x\right)$",
        ],
    )
    def test_detected(self, value):
        assert has_eaten_latex(value)

    @pytest.mark.parametrize(
        "value",
        ["第一行\n第二行", "a\to b", "$x^2$\nnext line", r"$\frac{1}{2}$", ""],
    )
    def test_clean(self, value):
        assert not has_eaten_latex(value)


class TestValidEscapesKept:
    def test_simple_escapes(self):
        source = r'{"a": "say \"hi\"\n\tdone \\ \/"}'
        assert normalize_escapes(source) == source
        assert loads_normalized(source) == {"a": 'say "hi"\n\tdone \\ /'}

    def test_unicode_escape(self):
        source = r'{"a": "\u4e2d\u6587"}'
        assert normalize_escapes(source) == source
        assert loads_normalized(source) == {"a": "中文"}

    def test_already_doubled_latex(self):
        source = r'{"a": "$\\frac{1}{2}$"}'
        assert normalize_escapes(source) == source


class TestControlCharacters:
    def test_raw_newline_in_string(self):
        assert loads_normalized('{"a": "line1\nline2"}') == {"a": "line1\nline2"}

    def test_raw_carriage_return_and_tab(self):
        assert loads_normalized('{"a": "x\r\n\ty"}') == {"a": "x\r\n\ty"}

    def test_other_control_character(self):
        assert normalize_escapes('{"a": "x\x01y"}') == '{"a": "x\\u0001y"}'

    def test_whitespace_outside_strings_untouched(self):
        source = '{\n  "a": "b",\n  "c": "d"\n}'
        assert normalize_escapes(source) == source


class TestStructure:
    def test_keys_and_values_both_normalized(self):
        source = (
            '{"questionText": "求 $\\sqrt{9}$", "answerText": "3",\n'
            ' "analysis": "第一步\n第二步", "subject": "数学", "knowledgePoints": ["实数"]}'
        )
        parsed = loads_normalized(source)
        assert parsed["questionText"] == "求 $\\sqrt{9}$"
        assert parsed["analysis"] == "第一步\n第二步"
        assert parsed["knowledgePoints"] == ["实数"]

    def test_no_strings(self):
        assert normalize_escapes("[1, 2, 3]") == "[1, 2, 3]"
