"""Embedding providers and the gateway the review pipeline calls."""

from patent_review.embeddings.base import EmbeddingProvider
from patent_review.embeddings.factory import available_providers, get_embedding_provider
from patent_review.embeddings.gateway import EmbeddingGateway

__all__ = [
    "EmbeddingGateway",
    "EmbeddingProvider",
    "available_providers",
    "get_embedding_provider",
]
