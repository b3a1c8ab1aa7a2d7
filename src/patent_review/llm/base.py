"""Abstract base class for chat-completion providers."""

from __future__ import annotations

from abc import ABC, abstractmethod


class LLMProvider(ABC):
    """Interface for multi-turn chat completion."""

    model: str = "unknown"

    @abstractmethod
    def chat(self, messages: list[dict[str, str]]) -> list[str]:
        """Complete a conversation.

        Args:
            messages: Ordered ``{"role", "content"}`` dicts.

        Returns:
            The candidate replies, best first. May be empty if the service
            produced no choices.
        """

    @classmethod
    def provider_name(cls) -> str:
        """Return human-readable provider name."""
        return cls.__name__
