"""Anthropic Claude chat provider.

Requires the ``anthropic`` extra and ``ANTHROPIC_API_KEY`` env var.
"""

from __future__ import annotations

import logging
from typing import Any

from patent_review.llm.base import LLMProvider

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-sonnet-4-20250514"


def split_system(messages: list[dict[str, str]]) -> tuple[str, list[dict[str, str]]]:
    """Fold a chat transcript into Anthropic's ``system`` + turns shape.

    Leading system messages become the system prompt. System messages that
    arrive after the conversation has started are sent as user turns so they
    keep their position, and consecutive same-role turns are merged.
    """
    system_parts: list[str] = []
    turns: list[dict[str, str]] = []

    for message in messages:
        role = message["role"]
        if role == "system" and not turns:
            system_parts.append(message["content"])
            continue
        if role == "system":
            role = "user"
        if turns and turns[-1]["role"] == role:
            turns[-1] = {"role": role, "content": turns[-1]["content"] + "\n\n" + message["content"]}
        else:
            turns.append({"role": role, "content": message["content"]})

    return "\n\n".join(system_parts), turns


class AnthropicLLMProvider(LLMProvider):
    """Generate replies via the Anthropic Messages API."""

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        api_key: str | None = None,
        max_tokens: int = 2048,
        temperature: float = 0.2,
        timeout: float = 120.0,
    ):
        try:
            import anthropic
        except ImportError as exc:
            raise ImportError(
                "anthropic package required: pip install patent-review-rag[anthropic]"
            ) from exc

        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self._client: Any = anthropic.Anthropic(api_key=api_key, timeout=timeout)

    def chat(self, messages: list[dict[str, str]]) -> list[str]:
        system, turns = split_system(messages)

        kwargs: dict[str, Any] = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "messages": turns,
        }
        if system:
            kwargs["system"] = system

        response = self._client.messages.create(**kwargs)
        texts = [block.text for block in response.content if getattr(block, "type", "") == "text"]
        return ["".join(texts)] if texts else []
