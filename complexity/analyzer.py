"""
Heuristic complexity classifier entry point.

Takes source text and a language tag, returns a ComplexityResult. Never
raises: anything unexpected degrades to the O(1)/O(1) baseline.
"""

import logging

from .javascript import analyze_javascript
from .models import BASELINE, ComplexityResult
from .preprocess import strip_js_comments, strip_python_comments
from .python_source import analyze_python

logger = logging.getLogger(__name__)

PYTHON = "python"


def analyze_complexity(code: str, language: str) -> ComplexityResult:
    """
    Estimate time/space complexity of ``code``.

    Args:
        code: Raw source as typed by the user
        language: Language tag, case-insensitive. Only "python" gets its own
            rules; every other tag uses the JavaScript heuristics.

    Returns:
        ComplexityResult, fully populated
    """
    try:
        if str(language or "").strip().lower() == PYTHON:
            return analyze_python(strip_python_comments(code))
        return analyze_javascript(strip_js_comments(code))
    except Exception as e:
        logger.warning(
            "Heuristic analysis failed, using baseline: %s: %s",
            type(e).__name__,
            str(e)[:200],
        )
        return BASELINE
