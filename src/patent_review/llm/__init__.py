"""Chat-completion providers and the gateway the review pipeline calls."""

from patent_review.llm.base import LLMProvider
from patent_review.llm.factory import available_providers, get_llm_provider
from patent_review.llm.gateway import CompletionGateway
from patent_review.llm.schemas import Dialogue, DialogueMessage, Role

__all__ = [
    "CompletionGateway",
    "Dialogue",
    "DialogueMessage",
    "LLMProvider",
    "Role",
    "available_providers",
    "get_llm_provider",
]
