"""Completion gateway — submit a dialogue, get exactly one assistant reply."""

from __future__ import annotations

import logging

from patent_review.errors import CompletionError
from patent_review.llm.base import LLMProvider
from patent_review.llm.schemas import Dialogue, DialogueMessage, Role

logger = logging.getLogger(__name__)


class CompletionGateway:
    """Wrap an ``LLMProvider`` with choice checks and typed failures."""

    def __init__(self, provider: LLMProvider):
        self.provider = provider

    @property
    def model(self) -> str:
        return getattr(self.provider, "model", "unknown")

    def complete(self, dialogue: Dialogue) -> DialogueMessage:
        """Submit the full *dialogue* and return the first choice.

        Raises:
            CompletionError: If the provider fails or returns zero choices.
        """
        if not dialogue:
            raise CompletionError("Cannot complete an empty dialogue")

        messages = [message.to_dict() for message in dialogue]
        try:
            choices = self.provider.chat(messages)
        except Exception as exc:
            logger.error("Completion request failed (model=%s): %s", self.model, exc)
            raise CompletionError(f"Completion service failed: {exc}") from exc

        if not choices:
            raise CompletionError(
                f"Completion service returned no choices (model={self.model})"
            )

        logger.info(
            "Completed dialogue of %d messages with %s (%d choices)",
            len(dialogue),
            self.model,
            len(choices),
        )
        return DialogueMessage(role=Role.ASSISTANT, content=choices[0])
