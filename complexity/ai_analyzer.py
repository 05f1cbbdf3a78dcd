"""
AI complexity reporter.

Independent of the heuristic classifier: it asks an LLM for a report and
always hands one back, even when the provider is missing or failing.
"""

import logging
from typing import Callable, Optional

from pydantic import ValidationError

from providers.openrouter_provider import AIProviderError, OpenRouterProvider

from .models import AIReport
from .prompts import build_analysis_prompt, build_system_prompt

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[], OpenRouterProvider]


def key_missing_report(language: str) -> AIReport:
    return AIReport(
        language=language,
        time="Key Missing",
        space="-",
        explanation="Please add your OPENROUTER_API_KEY to use AI Analysis.",
        suggestions=["Configuration Required"],
    )


def unavailable_report(language: str, reason: str) -> AIReport:
    return AIReport(
        language=language,
        time="AI Unavailable",
        space="-",
        explanation=f"The AI service reported: {reason}",
        suggestions=["Try the local analyzer or wait for the free quota to reset."],
    )


class AIComplexityAnalyzer:
    """
    Code complexity reporter using an LLM.

    Takes code and a language tag, returns an AIReport.
    """

    def __init__(self, provider_factory: ProviderFactory):
        self._provider_factory = provider_factory
        self._provider: Optional[OpenRouterProvider] = None

    async def _get_provider(self) -> OpenRouterProvider:
        """Get or create the provider."""
        if self._provider is None:
            self._provider = self._provider_factory()
        return self._provider

    async def close(self) -> None:
        """Close provider connection."""
        if self._provider:
            await self._provider.close()
            self._provider = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def report(self, code: str, language: str) -> AIReport:
        """
        Ask the LLM for a complexity report.

        Args:
            code: Source code to report on
            language: Language tag passed through to the prompt

        Returns:
            AIReport; a "Key Missing" or "AI Unavailable" report when the
            provider cannot deliver one
        """
        try:
            provider = await self._get_provider()
        except ValueError as e:
            logger.warning("AI provider not configured: %s", e)
            return key_missing_report(language)

        try:
            data, model = await provider.complete_json(
                prompt=build_analysis_prompt(code),
                system_prompt=build_system_prompt(language),
            )
            if not isinstance(data, dict):
                raise AIProviderError(f"Expected a JSON object, got {type(data).__name__}")
            data.setdefault("language", language)
            report = AIReport.model_validate(data)
        except AIProviderError as e:
            logger.error("AI report failed: %s", e.message)
            return unavailable_report(language, e.message)
        except ValidationError as e:
            logger.error("AI report did not match schema: %s", e.error_count())
            return unavailable_report(language, "response did not match the report schema")

        return report.model_copy(update={"model": model})
