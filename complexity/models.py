"""
Data models for code complexity analysis.

Pydantic models for the heuristic verdict and the AI report.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ComplexityResult(BaseModel):
    """
    Heuristic complexity verdict for one piece of source text.

    Built fresh per call and never mutated afterwards.
    """

    model_config = ConfigDict(frozen=True)

    time: str = Field(
        default="O(1)",
        description="Big-O time complexity label"
    )
    space: str = Field(
        default="O(1)",
        description="Big-O space complexity label"
    )
    maintainability: int = Field(
        default=100,
        ge=0,
        le=100,
        description="Heuristic readability score"
    )
    cyclomatic: int = Field(
        default=1,
        ge=1,
        description="Decision points + 1"
    )


BASELINE = ComplexityResult()


class AIReport(BaseModel):
    """
    Complexity report produced by the LLM.

    This is the exact schema the LLM must return.
    """

    language: str = Field(default="", description="Language the report is about")
    time: str = Field(description="Time complexity in Big-O notation")
    space: str = Field(description="Space complexity in Big-O notation")
    explanation: str = Field(default="", description="Breakdown of the complexity")
    suggestions: list[str] = Field(default_factory=list)
    model: Optional[str] = Field(default=None, description="Model that wrote the report")
