"""OpenAI and Azure OpenAI chat providers.

Requires the ``openai`` extra. Credentials come from ``OPENAI_API_KEY`` or,
for Azure, ``AZURE_OPENAI_API_KEY`` / ``AZURE_OPENAI_ENDPOINT``.
"""

from __future__ import annotations

import logging
from typing import Any

from patent_review.llm.base import LLMProvider

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o"
DEFAULT_API_VERSION = "2024-06-01"


class OpenAILLMProvider(LLMProvider):
    """Generate replies via the OpenAI Chat Completions API."""

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        api_key: str | None = None,
        base_url: str | None = None,
        max_tokens: int = 2048,
        temperature: float = 0.2,
        timeout: float = 120.0,
    ):
        try:
            import openai
        except ImportError as exc:
            raise ImportError(
                "openai package required: pip install patent-review-rag[openai]"
            ) from exc

        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self._client: Any = self._make_client(openai, api_key, base_url, timeout)

    def _make_client(
        self, openai: Any, api_key: str | None, base_url: str | None, timeout: float
    ) -> Any:
        kwargs: dict[str, Any] = {"timeout": timeout}
        if api_key:
            kwargs["api_key"] = api_key
        if base_url:
            kwargs["base_url"] = base_url
        return openai.OpenAI(**kwargs)

    def chat(self, messages: list[dict[str, str]]) -> list[str]:
        response = self._client.chat.completions.create(
            model=self.model,
            messages=messages,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
        )
        return [choice.message.content or "" for choice in response.choices or []]


class AzureOpenAILLMProvider(OpenAILLMProvider):
    """Generate replies via an Azure OpenAI deployment.

    ``model`` is the deployment name; ``base_url`` is the Azure endpoint.
    """

    def __init__(self, *args, api_version: str = DEFAULT_API_VERSION, **kwargs):
        self.api_version = api_version
        super().__init__(*args, **kwargs)

    def _make_client(
        self, openai: Any, api_key: str | None, base_url: str | None, timeout: float
    ) -> Any:
        kwargs: dict[str, Any] = {"api_version": self.api_version, "timeout": timeout}
        if api_key:
            kwargs["api_key"] = api_key
        if base_url:
            kwargs["azure_endpoint"] = base_url
        return openai.AzureOpenAI(**kwargs)
