# src/errata/recovery/escapes.py
"""Escape normalization for JSON string literals written by a model.

Models often emit LaTeX with single backslashes (``\\sqrt{2}``) and put raw
line breaks inside strings. Both make ``json.loads`` fail. This module
rewrites the inside of every double-quoted literal so it parses, keeping
LaTeX backslashes as literal backslashes.
"""

from __future__ import annotations

import re

# A literal: opening quote, any run of non-quote/non-backslash chars or
# backslash pairs, closing quote.
_STRING_LITERAL = re.compile(r'"((?:[^"\\]|\\.)*)"', re.DOTALL)

_SIMPLE_ESCAPES = frozenset('"\\/bfnrt')
_UNICODE_ESCAPE = re.compile(r"u[0-9a-fA-F]{4}")

# LaTeX commands whose first letter is also a JSON escape letter. Without
# this list "\frac" would parse as a form feed followed by "rac".
_LATEX_COMMANDS = (
    "backslash", "bar", "because", "begin", "beta", "bf", "big", "bigcap", "bigcup",
    "bigg", "biggl", "biggr", "bigl", "bigr", "binom", "blacksquare", "bm", "bmod",
    "boldsymbol", "bot", "boxed", "bullet",
    "fbox", "flat", "forall", "frac", "frown",
    "nabla", "natural", "ne", "nearrow", "neg", "neq", "newline", "nexists", "ngeq",
    "ni", "nleq", "nolimits", "nonumber", "not", "notin", "nparallel", "nu",
    "rangle", "rbrace", "rceil", "rfloor", "rho", "right", "rightarrow",
    "rightleftharpoons", "rm", "rvert",
    "tan", "tanh", "tau", "tbinom", "text", "textbf", "textit", "textrm", "textstyle",
    "tfrac", "therefore", "theta", "tilde", "times", "to", "top", "triangle", "tt",
)

# \b and \f are never meant literally in question text, so b/f commands are
# always LaTeX. n/r/t commands also read as a plain line break or tab before
# a word, so they count only inside LaTeX context and before a LaTeX delimiter.
_BF_COMMANDS = "|".join(c for c in _LATEX_COMMANDS if c[0] in "bf")
_NRT_COMMANDS = [c for c in _LATEX_COMMANDS if c[0] in "nrt"]
_COMMAND_END = r"(?=[{}()\\ $^_]|$)"

_BF_COMMAND = re.compile(r"(?:%s)(?![A-Za-z])" % _BF_COMMANDS)
_NRT_COMMAND = re.compile(r"(?:%s)%s" % ("|".join(_NRT_COMMANDS), _COMMAND_END))

# "$" or a backslash command that cannot be a JSON escape.
_LATEX_CONTEXT = re.compile(r"\$|\\(?![bfnrtu])[A-Za-z]{2,}")

# Decoded forms of commands whose backslash a JSON parser took as an escape.
_DECODED = {"n": "\n", "r": "\r", "t": "\t"}
_EATEN_NRT_COMMAND = re.compile(
    r"(?:%s)%s"
    % ("|".join(re.escape(_DECODED[c[0]] + c[1:]) for c in _NRT_COMMANDS), _COMMAND_END)
)

_CONTROL_ESCAPES = {"\n": "\\n", "\r": "\\r", "\t": "\\t"}


def _starts_latex_command(rest: str, in_latex: bool) -> bool:
    if _BF_COMMAND.match(rest):
        return True
    return in_latex and _NRT_COMMAND.match(rest) is not None


def _escape_body(body: str) -> str:
    out: list[str] = []
    index = 0
    length = len(body)
    in_latex = _LATEX_CONTEXT.search(body) is not None

    while index < length:
        char = body[index]

        if char == "\\":
            rest = body[index + 1 :]
            if _starts_latex_command(rest, in_latex):
                out.append("\\\\")
                index += 1
            elif rest and rest[0] in _SIMPLE_ESCAPES:
                out.append(char + rest[0])
                index += 2
            elif _UNICODE_ESCAPE.match(rest):
                out.append(char + rest[:5])
                index += 6
            else:
                out.append("\\\\")
                index += 1
            continue

        if char in _CONTROL_ESCAPES:
            out.append(_CONTROL_ESCAPES[char])
        elif ord(char) < 0x20:
            out.append(f"\\u{ord(char):04x}")
        else:
            out.append(char)
        index += 1

    return "".join(out)


def normalize_escapes(text: str) -> str:
    """Make every string literal in ``text`` a valid JSON string.

    Inside each double-quoted literal: raw newlines, carriage returns, tabs
    and other control characters become escape sequences, and any backslash
    that does not start a valid JSON escape is doubled. A backslash starting
    a LaTeX command is doubled too: always for ``\\b``/``\\f`` commands, and for
    ``\\n``/``\\r``/``\\t`` commands only when the literal already holds LaTeX
    (a ``$`` or another command) and the command ends at a LaTeX delimiter.
    Text outside literals is left untouched.
    """
    return _STRING_LITERAL.sub(lambda match: f'"{_escape_body(match.group(1))}"', text)


def has_eaten_latex(value: str) -> bool:
    """True if a decoded string shows LaTeX backslashes consumed as JSON escapes.

    ``"\\frac"`` decodes to a form feed followed by ``rac``; ``"$a \\times b$"``
    decodes to a tab followed by ``imes``. Backspace and form feed always
    count; a line break or tab followed by the rest of a command counts only
    when the string also holds LaTeX.
    """
    if "\x08" in value or "\x0c" in value:
        return True
    if _LATEX_CONTEXT.search(value) is None:
        return False
    return _EATEN_NRT_COMMAND.search(value) is not None
