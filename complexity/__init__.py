"""Core module for code complexity analysis."""

from .models import AIReport, ComplexityResult
from .analyzer import analyze_complexity
from .ai_analyzer import AIComplexityAnalyzer

__all__ = [
    "AIReport",
    "ComplexityResult",
    "analyze_complexity",
    "AIComplexityAnalyzer",
]
