"""Dialogue assembly — pure functions over immutable message tuples."""

from __future__ import annotations

from collections.abc import Sequence

from patent_review.llm.schemas import Dialogue, DialogueMessage, Role
from patent_review.pipeline.prompts import ground_context
from patent_review.vectorstore.schemas import Match


def build_initial_dialogue(
    system_context: str,
    grounding_matches: Sequence[Match],
    legal_context: str,
    user_text: str,
) -> Dialogue:
    """Build the opening ``system, system, user`` dialogue.

    Args:
        system_context: Instructions the grounding metadata is appended to.
        grounding_matches: Every match to inject; may be empty.
        legal_context: Second system message.
        user_text: The submission as the user turn.
    """
    return (
        DialogueMessage(Role.SYSTEM, ground_context(system_context, grounding_matches)),
        DialogueMessage(Role.SYSTEM, legal_context),
        DialogueMessage(Role.USER, user_text),
    )


def append_follow_up(
    dialogue: Dialogue,
    prior_answer: DialogueMessage,
    new_context: str,
) -> Dialogue:
    """Return *dialogue* extended with the prior answer and a new system turn."""
    return (
        *dialogue,
        DialogueMessage(Role.ASSISTANT, prior_answer.content),
        DialogueMessage(Role.SYSTEM, new_context),
    )
