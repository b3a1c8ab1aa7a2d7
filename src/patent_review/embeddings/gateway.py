"""Embedding gateway: one text in, one validated vector out."""

from __future__ import annotations

import logging

from patent_review.embeddings.base import EmbeddingProvider
from patent_review.errors import EmbeddingError

logger = logging.getLogger(__name__)


class EmbeddingGateway:
    """Wrap an ``EmbeddingProvider`` with shape checks and typed failures.

    No caching: every call reaches the provider.
    """

    def __init__(self, provider: EmbeddingProvider):
        self.provider = provider

    def embed(self, text: str) -> list[float]:
        """Embed *text*.

        Raises:
            EmbeddingError: If the provider fails or returns a vector that is
                empty or of the wrong dimensionality.
        """
        try:
            vector = self.provider.embed_query(text)
        except Exception as exc:
            logger.error("Embedding request failed: %s", exc)
            raise EmbeddingError(f"Embedding service failed: {exc}") from exc

        if not vector:
            raise EmbeddingError("Embedding service returned no vector")

        expected = self.provider.dimension
        if len(vector) != expected:
            raise EmbeddingError(
                f"Embedding service returned {len(vector)} dimensions, expected {expected}"
            )

        return [float(v) for v in vector]

    @property
    def dimension(self) -> int:
        return self.provider.dimension
