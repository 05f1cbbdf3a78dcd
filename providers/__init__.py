"""LLM providers for the AI complexity report."""

from .openrouter_provider import AIProviderError, OpenRouterProvider

__all__ = [
    "AIProviderError",
    "OpenRouterProvider",
]
