"""
Textual preprocessing shared by the language analyzers.

Nothing here is lexer-aware: a comment marker inside a string literal is
treated as a comment, and a quote inside a comment is removed together with
the comment before masking ever sees it.
"""

import re

_LINE_COMMENT = re.compile(r"//[^\n]*")
_HASH_COMMENT = re.compile(r"(?<!\\)#[^\n]*")

_STRING_LITERAL = re.compile(
    r'"(?:\\.|[^"\\\n])*"'
    r"|'(?:\\.|[^'\\\n])*'"
    r"|`(?:\\.|[^`\\])*`"
)


def strip_block_comments(code: str) -> str:
    """
    Remove closed /* block */ comments in a single left-to-right pass.

    An unterminated "/*" and everything after it is kept as-is.
    """
    parts = []
    pos = 0
    while True:
        start = code.find("/*", pos)
        if start == -1:
            break
        end = code.find("*/", start + 2)
        if end == -1:
            break
        parts.append(code[pos:start])
        pos = end + 2
    parts.append(code[pos:])
    return "".join(parts)


def strip_js_comments(code: str) -> str:
    """Remove /* block */ comments, then // line comments."""
    return _LINE_COMMENT.sub("", strip_block_comments(code))


def strip_python_comments(code: str) -> str:
    """Remove everything from an unescaped '#' to end of line."""
    return _HASH_COMMENT.sub("", code)


def mask_strings(code: str) -> str:
    """
    Replace every quoted literal with an empty one.

    Template literals may span lines; the newlines they contained are kept
    so line-oriented scans still see the same number of lines.
    """
    def _empty(match: re.Match) -> str:
        return '""' + "\n" * match.group(0).count("\n")

    return _STRING_LITERAL.sub(_empty, code)


def count_lines(code: str) -> int:
    return len(code.split("\n"))


def leading_whitespace(line: str) -> int:
    return len(line) - len(line.lstrip())
