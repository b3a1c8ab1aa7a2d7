"""Pinecone vector store — hosted index with native namespaces.

Requires the ``pinecone`` extra and ``PINECONE_API_KEY`` env var.
"""

from __future__ import annotations

import logging
from typing import Any

from patent_review.vectorstore.base import VectorStore
from patent_review.vectorstore.schemas import Match, VectorRecord

logger = logging.getLogger(__name__)

UPSERT_BATCH_SIZE = 100


class PineconeStore(VectorStore):
    """Pinecone-backed namespaced vector store."""

    def __init__(
        self,
        index_name: str = "patent-review",
        api_key: str | None = None,
        host: str | None = None,
    ):
        try:
            from pinecone import Pinecone
        except ImportError as exc:
            raise ImportError(
                "pinecone required: pip install patent-review-rag[pinecone]"
            ) from exc

        self._index_name = index_name
        # Pinecone() falls back to PINECONE_API_KEY when api_key is None
        self._pc: Any = Pinecone(api_key=api_key)
        self._index: Any = self._pc.Index(index_name, host=host) if host else self._pc.Index(index_name)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def upsert(self, namespace: str, records: list[VectorRecord]) -> int:
        if not records:
            return 0

        vectors = [
            {"id": record.id, "values": record.embedding, "metadata": dict(record.metadata)}
            for record in records
        ]
        for i in range(0, len(vectors), UPSERT_BATCH_SIZE):
            self._index.upsert(
                vectors=vectors[i : i + UPSERT_BATCH_SIZE],
                namespace=namespace,
            )

        logger.info("PineconeStore upserted %d records into '%s'", len(records), namespace)
        return len(records)

    def query(
        self,
        namespace: str,
        vector: list[float],
        top_k: int = 10,
        include_metadata: bool = True,
    ) -> list[Match]:
        response = self._index.query(
            namespace=namespace,
            vector=vector,
            top_k=top_k,
            include_metadata=include_metadata,
        )

        return [
            Match(
                id=str(m.id),
                score=float(m.score) if m.score is not None else 0.0,
                metadata=dict(m.metadata or {}) if include_metadata else {},
            )
            for m in (response.matches or [])
        ]

    def count(self, namespace: str) -> int:
        stats = self._index.describe_index_stats()
        summary = (stats.namespaces or {}).get(namespace)
        return summary.vector_count if summary is not None else 0

    def delete_namespace(self, namespace: str) -> None:
        self._index.delete(delete_all=True, namespace=namespace)
