"""
Heuristic complexity analyzer for JavaScript/TypeScript-shaped source.

Every language tag other than "python" is routed here, so Java, C++, Go and
friends are read with JavaScript-shaped patterns as well.
"""

import logging
import re
from collections import Counter
from dataclasses import dataclass

from .labels import (
    CONSTANT,
    CUBIC,
    EXPONENTIAL,
    LINEAR,
    LINEARITHMIC,
    LOGARITHMIC,
    QUADRATIC,
    maintainability_index,
    normalize_label,
)
from .models import ComplexityResult
from .preprocess import count_lines, mask_strings
from .rules import Rule, classify, constant

logger = logging.getLogger(__name__)

MAINTAINABILITY_WEIGHT = 2

_IDENTIFIER = r"[A-Za-z_$][\w$]*"
# Type arguments are capped so a stray "<" cannot rescan a whole line.
_TYPE_ARGUMENTS = r"\s*(?:<[^>\n]{0,120}>\s*)?"
_FUNCTION_DECL = re.compile(
    r"\bfunction[\s*]*(" + _IDENTIFIER + r")" + _TYPE_ARGUMENTS + r"\("
)
_CALL = re.compile(r"(?<![\w$])(" + _IDENTIFIER + r")\s*\(")
_CALL_SITE = re.compile(r"(?<![\w$])(" + _IDENTIFIER + r")" + _TYPE_ARGUMENTS + r"\(")
_LOOP = re.compile(r"\b(?:for|while)\b")
_WHILE = re.compile(r"\bwhile\b")
_SLICE = re.compile(r"\.slice\s*\(")
_FLOOR_CALL = re.compile(r"Math\.floor\s*\(")
_HALVED = re.compile(r"/\s*2\s*\)")
_MIDPOINT = re.compile(
    r">>>?\s*1\b"
    r"|(?<![\w$.])mid\s*=(?!=)"
)
_GROWING_STORAGE = re.compile(
    r"new\s+Map\s*\("
    r"|new\s+Set\s*\("
    r"|\[\s*\.\.\."
    r"|\.slice\s*\("
    r"|\.map\s*\("
    r"|new\s+Array\s*\("
    r"|(?<![=!<>])=(?!=)\s*\[\s*\]"
)
_DECISION_POINTS = re.compile(r"\b(?:if|while|for|case)\b|&&|\|\|")

# Keywords that are followed by "(" without being calls.
_NOT_CALLS = frozenset({
    "if", "for", "while", "switch", "catch", "function", "return",
    "typeof", "await", "yield", "void", "delete", "in", "of", "new",
    "do", "else", "with",
})


@dataclass(frozen=True)
class JavaScriptSignals:
    is_recursive: bool = False
    has_midpoint: bool = False
    has_while: bool = False
    has_slice: bool = False
    max_loop_nesting: int = 0
    branching_factor: int = 1

    @property
    def divide_and_conquer(self) -> bool:
        return self.is_recursive and (self.has_midpoint or self.has_slice)


RULES = (
    Rule(
        "binary_search",
        lambda s: not s.is_recursive and s.has_midpoint and s.has_while,
        constant(LOGARITHMIC),
        space=CONSTANT,
    ),
    Rule(
        "divide_and_conquer",
        lambda s: s.divide_and_conquer and s.branching_factor >= 2,
        constant(LINEARITHMIC),
    ),
    Rule(
        "linear_recursion",
        lambda s: s.is_recursive and s.branching_factor <= 2 and s.max_loop_nesting == 0,
        constant(LINEAR),
    ),
    Rule(
        "branching_recursion",
        lambda s: s.is_recursive and s.branching_factor >= 3,
        constant(EXPONENTIAL),
    ),
    Rule("triple_loop", lambda s: s.max_loop_nesting >= 3, constant(CUBIC)),
    Rule("double_loop", lambda s: s.max_loop_nesting == 2, constant(QUADRATIC)),
    Rule("single_loop", lambda s: s.max_loop_nesting == 1, constant(LINEAR)),
    Rule("recursion", lambda s: s.is_recursive, constant(LINEAR)),
    Rule("constant", lambda s: True, constant(CONSTANT)),
)


def is_recursive(masked: str) -> bool:
    """True when some declared function's name is called besides its declaration."""
    declared = set(_FUNCTION_DECL.findall(masked))
    if not declared:
        return False
    # The declaration itself is one of the call sites.
    sites = Counter(name for name in _CALL_SITE.findall(masked) if name in declared)
    return any(count > 1 for count in sites.values())


def has_midpoint(masked: str) -> bool:
    """Math.floor(... / 2) on one line, a shift by one, or a ``mid =`` assignment."""
    if _MIDPOINT.search(masked):
        return True
    for line in masked.split("\n"):
        floor = _FLOOR_CALL.search(line)
        if floor and _HALVED.search(line, floor.end()):
            return True
    return False


def max_loop_nesting(masked: str) -> int:
    """
    Approximate loop depth from braces.

    A loop header opening a brace on the same line goes one level deeper;
    every closing brace climbs back out, whatever block it closes.
    """
    depth = deepest = 0
    for line in masked.split("\n"):
        if _LOOP.search(line) and "{" in line:
            depth += 1
            deepest = max(deepest, depth)
        depth = max(0, depth - line.count("}"))
    return deepest


def branching_factor(masked: str) -> int:
    """Most call-like tokens found on a single line, at least 1."""
    widest = 1
    for line in masked.split("\n"):
        line = _FUNCTION_DECL.sub(" ", line)
        calls = [name for name in _CALL.findall(line) if name not in _NOT_CALLS]
        widest = max(widest, len(calls))
    return widest


def detect_signals(masked: str) -> JavaScriptSignals:
    recursive = is_recursive(masked)
    return JavaScriptSignals(
        is_recursive=recursive,
        has_midpoint=has_midpoint(masked),
        has_while=bool(_WHILE.search(masked)),
        has_slice=bool(_SLICE.search(masked)),
        max_loop_nesting=max_loop_nesting(masked),
        branching_factor=branching_factor(masked) if recursive else 1,
    )


def estimate_space(masked: str, recursive: bool) -> str:
    if recursive or _GROWING_STORAGE.search(masked):
        return LINEAR
    return CONSTANT


def cyclomatic_complexity(masked: str) -> int:
    return 1 + len(_DECISION_POINTS.findall(masked))


def analyze_javascript(code: str) -> ComplexityResult:
    """
    Estimate complexity of comment-stripped JS/TS source.

    Args:
        code: Source with comments already removed

    Returns:
        ComplexityResult for the whole text
    """
    masked = mask_strings(code)
    signals = detect_signals(masked)
    verdict = classify(RULES, signals)
    space = verdict.space or estimate_space(masked, signals.is_recursive)
    cyclomatic = cyclomatic_complexity(masked)

    logger.debug("javascript rule=%s signals=%s", verdict.rule, signals)

    return ComplexityResult(
        time=normalize_label(verdict.time),
        space=normalize_label(space),
        maintainability=maintainability_index(
            cyclomatic, count_lines(code), MAINTAINABILITY_WEIGHT
        ),
        cyclomatic=cyclomatic,
    )
