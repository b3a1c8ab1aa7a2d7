"""Ollama chat provider — local-first, no API keys.

Supports Llama, Mistral, Qwen and any chat model available via Ollama.
"""

from __future__ import annotations

import logging

import httpx

from patent_review.llm.base import LLMProvider

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "llama3.1:8b"
DEFAULT_BASE_URL = "http://localhost:11434"


class OllamaLLMProvider(LLMProvider):
    """Generate replies via a local Ollama server."""

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        temperature: float = 0.2,
        max_tokens: int = 2048,
        timeout: float = 120.0,
    ):
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._client = httpx.Client(base_url=self.base_url, timeout=timeout)

    def chat(self, messages: list[dict[str, str]]) -> list[str]:
        payload = {
            "model": self.model,
            "messages": messages,
            "stream": False,
            "options": {
                "temperature": self.temperature,
                "num_predict": self.max_tokens,
            },
        }

        resp = self._client.post("/api/chat", json=payload)
        resp.raise_for_status()
        message = resp.json().get("message")
        if not message:
            return []
        return [message.get("content", "")]
