"""Retrieval client — validated namespaced queries with typed failures."""

from __future__ import annotations

import logging

from patent_review.errors import RetrievalError
from patent_review.retrieval.schemas import RetrievalResult
from patent_review.vectorstore.base import VectorStore

logger = logging.getLogger(__name__)


class RetrievalClient:
    """Query a ``VectorStore`` and normalize what comes back."""

    def __init__(self, vector_store: VectorStore):
        self.vector_store = vector_store

    def query(
        self,
        namespace: str,
        vector: list[float],
        top_k: int,
        include_metadata: bool = True,
    ) -> RetrievalResult:
        """Return the top-K nearest neighbours of *vector* in *namespace*.

        Args:
            namespace: Corpus partition, e.g. ``prior_patent``.
            vector: Query embedding.
            top_k: Positive maximum number of matches.
            include_metadata: Whether matches carry their stored metadata.

        Returns:
            A ``RetrievalResult`` ordered by descending score with at most
            ``top_k`` matches. An empty namespace gives an empty result.

        Raises:
            ValueError: If ``top_k`` is not a positive integer or the
                namespace is empty.
            RetrievalError: If the backend call fails.
        """
        if isinstance(top_k, bool) or not isinstance(top_k, int) or top_k < 1:
            raise ValueError(f"top_k must be a positive integer, got {top_k!r}")
        if not namespace:
            raise ValueError("namespace must be a non-empty string")

        try:
            raw = self.vector_store.query(
                namespace=namespace,
                vector=vector,
                top_k=top_k,
                include_metadata=include_metadata,
            )
        except Exception as exc:
            logger.error("Query against namespace '%s' failed: %s", namespace, exc)
            raise RetrievalError(f"Vector index query failed for '{namespace}': {exc}") from exc

        matches = sorted(raw, key=lambda m: m.score, reverse=True)[:top_k]

        logger.info(
            "Retrieved %d/%d matches from namespace '%s'",
            len(matches),
            top_k,
            namespace,
        )
        return RetrievalResult(namespace=namespace, top_k=top_k, matches=tuple(matches))
