"""
OpenRouter LLM provider for the AI complexity report.

Walks a rail of models and returns the first usable JSON completion.
"""

import json
import logging
from typing import Any, Optional, Sequence

import httpx
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

logger = logging.getLogger(__name__)


class AIProviderError(Exception):
    """Exception for LLM provider errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class OpenRouterProvider:
    """
    OpenRouter chat-completions provider with JSON mode support.

    Free models share a global daily quota, so each request walks the model
    rail in order until one of them answers.
    """

    BASE_URL = "https://openrouter.ai/api/v1/chat/completions"
    DEFAULT_MODELS = (
        "google/gemini-2.0-flash-exp:free",
        "meta-llama/llama-3.3-70b-instruct:free",
        "mistralai/mistral-small-3.1-24b-instruct:free",
        "qwen/qwen2.5-72b-instruct:free",
        "deepseek/deepseek-chat:free",
    )

    def __init__(
        self,
        api_key: Optional[str],
        models: Sequence[str] = DEFAULT_MODELS,
        timeout: float = 30.0,
        max_tokens: int = 1024,
        temperature: float = 0.1,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize OpenRouter provider.

        Raises:
            ValueError: If no API key is given or the model rail is empty
        """
        if not api_key:
            raise ValueError(
                "OPENROUTER_API_KEY not set. "
                "Get your key from https://openrouter.ai/keys"
            )
        if not models:
            raise ValueError("At least one OpenRouter model must be configured")

        self.api_key = api_key
        self.models = tuple(models)
        self.timeout = timeout
        self.max_tokens = max_tokens
        self.temperature = temperature
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                    "X-Title": "LogicCraft",
                },
                transport=self._transport,
            )
        return self._client

    async def close(self):
        """Close HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type((httpx.TimeoutException, httpx.NetworkError)),
        reraise=True,
    )
    async def _make_request(
        self,
        model: str,
        messages: list[dict[str, str]],
    ) -> dict[str, Any]:
        """
        Make one chat-completions request.

        Args:
            model: OpenRouter model id
            messages: Chat messages

        Returns:
            API response dict
        """
        client = await self._get_client()

        payload = {
            "model": model,
            "messages": messages,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "response_format": {"type": "json_object"},
        }

        response = await client.post(self.BASE_URL, json=payload)

        if response.status_code != 200:
            error_detail = response.text
            try:
                error_json = response.json()
                error_detail = error_json.get("error", {}).get("message", error_detail)
            except (ValueError, AttributeError):
                pass
            raise AIProviderError(
                f"API error ({response.status_code}): {error_detail}",
                status_code=response.status_code
            )

        try:
            return response.json()
        except ValueError:
            raise AIProviderError(
                f"Non-JSON response body: {response.text[:200]}",
                status_code=response.status_code,
            )

    async def complete(self, messages: list[dict[str, str]]) -> tuple[str, str]:
        """
        Get the first non-empty completion along the model rail.

        Returns:
            Tuple of (content, model that produced it)

        Raises:
            AIProviderError: If every model failed or answered empty
        """
        last_error = "All models returned empty response"
        last_status: Optional[int] = None

        for model in self.models:
            logger.info("Attempting model %s", model)
            try:
                response = await self._make_request(model, messages)
            except AIProviderError as e:
                logger.warning("Model %s failed: %s", model, e.message)
                last_error, last_status = e.message, e.status_code
                continue
            except httpx.HTTPError as e:
                logger.warning("Model %s unreachable: %s", model, e)
                last_error, last_status = str(e), None
                continue

            try:
                content = response["choices"][0]["message"]["content"]
            except (KeyError, IndexError, TypeError):
                content = None

            if not isinstance(content, str):
                logger.warning("Model %s returned no text content", model)
                content = ""

            if content.strip():
                logger.info("Model %s answered", model)
                return content.strip(), model

        raise AIProviderError(last_error, status_code=last_status)

    async def complete_json(
        self,
        prompt: str,
        system_prompt: str,
    ) -> tuple[dict[str, Any], str]:
        """
        Get JSON completion from OpenRouter.

        Args:
            prompt: User prompt
            system_prompt: System prompt

        Returns:
            Tuple of (parsed JSON dict, model that produced it)
        """
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": prompt},
        ]

        content, model = await self.complete(messages)

        # Parse JSON
        try:
            return json.loads(content), model
        except json.JSONDecodeError:
            # Try to extract JSON from response
            start = content.find("{")
            end = content.rfind("}") + 1
            if start != -1 and end > start:
                try:
                    return json.loads(content[start:end]), model
                except json.JSONDecodeError:
                    pass

            raise AIProviderError(f"Failed to parse JSON response: {content[:200]}...")
