"""
Pydantic models for the LogicCraft analyzer API.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from backend.app.config import settings
from complexity.models import AIReport, ComplexityResult


class AnalyzeRequest(BaseModel):
    """Request payload for code analysis."""
    code: str = Field(..., description="Source code to analyze")
    language: str = Field(default="javascript", max_length=50, description="Programming language")

    @field_validator("code")
    @classmethod
    def validate_code(cls, v: str) -> str:
        if len(v) > settings.MAX_CODE_LENGTH:
            raise ValueError(f"Code exceeds {settings.MAX_CODE_LENGTH} characters")
        return v

    @field_validator("language")
    @classmethod
    def validate_language(cls, v: str) -> str:
        return v.strip().lower() or "javascript"


class AnalyzeResponse(BaseModel):
    """Heuristic analysis response."""
    success: bool = True
    language: str
    result: ComplexityResult


class AIReportResponse(BaseModel):
    """AI report response."""
    success: bool = True
    model: Optional[str] = Field(default=None, description="Model that wrote the report")
    result: AIReport


class ErrorResponse(BaseModel):
    """Error response."""
    success: bool = False
    error: str
    details: Optional[str] = None
