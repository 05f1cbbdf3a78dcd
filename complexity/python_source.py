"""
Heuristic complexity analyzer for Python source.

Blocks are inferred from indentation alone; nothing is parsed.
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .labels import (
    CONSTANT,
    CUBIC,
    LINEAR,
    LOGARITHMIC,
    QUADRATIC,
    maintainability_index,
    normalize_label,
)
from .models import ComplexityResult
from .preprocess import count_lines, leading_whitespace
from .rules import Rule, classify, constant

logger = logging.getLogger(__name__)

MAINTAINABILITY_WEIGHT = 3

_DEF = re.compile(r"^([ \t]*)(?:async\s+)?def\s+([A-Za-z_]\w*)\s*\(")
_DEF_HEADERS = ("def ", "async def ")
_LOOP_HEADERS = ("for ", "while ")
_WHILE = re.compile(r"\bwhile\b")
_MIDPOINT = re.compile(
    r"//\s*2\b"
    r"|>>\s*1\b"
)
_DIVMOD_CALL = re.compile(r"\bdivmod\s*\(")
_LAST_ARGUMENT_TWO = re.compile(r"\b2\s*\Z")
_GROWING_STORAGE = re.compile(
    r"\blist\s*\("
    r"|=\s*\["
)
_BRACKET_GROUP = re.compile(r"\[[^\[\]]*\]")
_FOR = re.compile(r"\bfor\b")
_IN = re.compile(r"\bin\b")
_DECISION_POINTS = re.compile(
    r"\b(?:if|elif|for|while|except|with|and|or)\b"
)


@dataclass(frozen=True)
class PythonSignals:
    is_recursive: bool = False
    is_binary_search: bool = False
    max_loop_nesting: int = 0


RULES = (
    Rule("binary_search", lambda s: s.is_binary_search, constant(LOGARITHMIC)),
    Rule("triple_loop", lambda s: s.max_loop_nesting >= 3, constant(CUBIC)),
    Rule("double_loop", lambda s: s.max_loop_nesting == 2, constant(QUADRATIC)),
    Rule("single_loop", lambda s: s.max_loop_nesting == 1, constant(LINEAR)),
    Rule("recursion", lambda s: s.is_recursive, constant(LINEAR)),
    Rule("constant", lambda s: True, constant(CONSTANT)),
)


def first_function(code: str) -> Tuple[Optional[str], List[str]]:
    """
    Locate the first ``def`` and the lines that make up its body.

    The body is every following line indented deeper than the ``def``; the
    scan stops at the first non-blank line back at column zero.
    """
    lines = code.split("\n")
    for index, line in enumerate(lines):
        match = _DEF.match(line)
        if match:
            break
    else:
        return None, []

    indent = len(match.group(1))
    body = []
    for line in lines[index + 1:]:
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        depth = leading_whitespace(line)
        if depth == 0:
            break
        if depth > indent:
            body.append(line)
    return match.group(2), body


def is_recursive(code: str) -> bool:
    name, body = first_function(code)
    if name is None:
        return False
    # self.NAME( counts too, so methods recursing through self are caught.
    call = re.compile(r"(?<!\w)" + re.escape(name) + r"\s*\(")
    return any(call.search(line) for line in body)


def max_loop_nesting(code: str) -> int:
    """
    Count loop headers since the last return to column zero.

    A ``def`` at column zero does not reset the count.
    """
    depth = deepest = 0
    for line in code.split("\n"):
        stripped = line.strip()
        if not stripped:
            continue
        if leading_whitespace(line) == 0 and not stripped.startswith(_DEF_HEADERS):
            depth = 0
        if stripped.startswith(_LOOP_HEADERS):
            depth += 1
            deepest = max(deepest, depth)
    return deepest


def halves_with_divmod(code: str) -> bool:
    """
    True when some ``divmod(`` call has 2 as the last thing before its first ")".

    Calls nested inside one another share that ")" and are checked once.
    """
    pos = 0
    while True:
        call = _DIVMOD_CALL.search(code, pos)
        if call is None:
            return False
        close = code.find(")", call.end())
        if close == -1:
            return False
        if _LAST_ARGUMENT_TWO.search(code[call.end():close]):
            return True
        pos = close + 1


def has_midpoint(code: str) -> bool:
    return bool(_MIDPOINT.search(code)) or halves_with_divmod(code)


def has_comprehension(code: str) -> bool:
    """A bracket group with no brackets inside holding ``for`` and then ``in``."""
    for group in _BRACKET_GROUP.finditer(code):
        loop = _FOR.search(code, group.start(), group.end())
        if loop and _IN.search(code, loop.end(), group.end()):
            return True
    return False


def detect_signals(code: str) -> PythonSignals:
    return PythonSignals(
        is_recursive=is_recursive(code),
        is_binary_search=bool(has_midpoint(code) and _WHILE.search(code)),
        max_loop_nesting=max_loop_nesting(code),
    )


def estimate_space(code: str, recursive: bool) -> str:
    if recursive or _GROWING_STORAGE.search(code) or has_comprehension(code):
        return LINEAR
    return CONSTANT


def cyclomatic_complexity(code: str) -> int:
    return 1 + len(_DECISION_POINTS.findall(code))


def analyze_python(code: str) -> ComplexityResult:
    """Estimate complexity of comment-stripped Python source."""
    signals = detect_signals(code)
    verdict = classify(RULES, signals)
    space = verdict.space or estimate_space(code, signals.is_recursive)
    cyclomatic = cyclomatic_complexity(code)

    logger.debug("python rule=%s signals=%s", verdict.rule, signals)

    return ComplexityResult(
        time=normalize_label(verdict.time),
        space=normalize_label(space),
        maintainability=maintainability_index(
            cyclomatic, count_lines(code), MAINTAINABILITY_WEIGHT
        ),
        cyclomatic=cyclomatic,
    )
