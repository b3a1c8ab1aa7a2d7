"""Qdrant vector store — one collection, namespaces as a filtered payload field.

Requires the ``qdrant`` extra. Supports Qdrant Cloud, local servers and an
in-memory instance for testing.
"""

from __future__ import annotations

import logging
import os
import uuid
from typing import Any

from patent_review.vectorstore.base import VectorStore
from patent_review.vectorstore.schemas import Match, VectorRecord

logger = logging.getLogger(__name__)

_NAMESPACE_KEY = "namespace"
_RECORD_ID_KEY = "record_id"
_METADATA_KEY = "metadata"


class QdrantStore(VectorStore):
    """Qdrant-backed namespaced vector store."""

    def __init__(
        self,
        collection_name: str = "patent-review",
        dimension: int = 1536,
        url: str | None = None,
        api_key: str | None = None,
        path: str | None = None,
        timeout: float = 30.0,
    ):
        try:
            from qdrant_client import QdrantClient, models
        except ImportError as exc:
            raise ImportError(
                "qdrant-client required: pip install patent-review-rag[qdrant]"
            ) from exc

        self._models = models
        self._collection_name = collection_name
        self._dimension = dimension

        # Connect to Qdrant
        if url:
            self._client = QdrantClient(
                url=url,
                api_key=api_key or os.getenv("QDRANT_API_KEY"),
                timeout=int(timeout),
            )
        elif path:
            self._client = QdrantClient(path=path)
        else:
            # In-memory for testing
            self._client = QdrantClient(":memory:")

        # Ensure collection exists
        collections = [c.name for c in self._client.get_collections().collections]
        if collection_name not in collections:
            self._client.create_collection(
                collection_name=collection_name,
                vectors_config=models.VectorParams(
                    size=dimension,
                    distance=models.Distance.COSINE,
                ),
            )
            logger.info("Created Qdrant collection '%s' (dim=%d)", collection_name, dimension)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def upsert(self, namespace: str, records: list[VectorRecord]) -> int:
        if not records:
            return 0

        points = [
            self._models.PointStruct(
                id=self._point_id(namespace, record.id),
                vector=record.embedding,
                payload={
                    _NAMESPACE_KEY: namespace,
                    _RECORD_ID_KEY: record.id,
                    _METADATA_KEY: dict(record.metadata),
                },
            )
            for record in records
        ]

        self._client.upsert(
            collection_name=self._collection_name,
            points=points,
        )

        logger.info("QdrantStore upserted %d records into '%s'", len(records), namespace)
        return len(records)

    def query(
        self,
        namespace: str,
        vector: list[float],
        top_k: int = 10,
        include_metadata: bool = True,
    ) -> list[Match]:
        response = self._client.query_points(
            collection_name=self._collection_name,
            query=vector,
            limit=top_k,
            query_filter=self._namespace_filter(namespace),
            with_payload=True,
        )

        matches: list[Match] = []
        for point in response.points:
            payload = point.payload or {}
            matches.append(Match(
                id=str(payload.get(_RECORD_ID_KEY, point.id)),
                score=point.score if point.score is not None else 0.0,
                metadata=dict(payload.get(_METADATA_KEY) or {}) if include_metadata else {},
            ))

        return matches

    def count(self, namespace: str) -> int:
        result = self._client.count(
            collection_name=self._collection_name,
            count_filter=self._namespace_filter(namespace),
            exact=True,
        )
        return result.count

    def delete_namespace(self, namespace: str) -> None:
        self._client.delete(
            collection_name=self._collection_name,
            points_selector=self._models.FilterSelector(
                filter=self._namespace_filter(namespace),
            ),
        )

    # ------------------------------------------------------------------
    # Private
    # ------------------------------------------------------------------

    def _namespace_filter(self, namespace: str) -> Any:
        return self._models.Filter(must=[
            self._models.FieldCondition(
                key=_NAMESPACE_KEY,
                match=self._models.MatchValue(value=namespace),
            )
        ])

    @staticmethod
    def _point_id(namespace: str, record_id: str) -> str:
        # Qdrant only accepts UUIDs or unsigned ints as point ids.
        return str(uuid.uuid5(uuid.NAMESPACE_URL, f"{namespace}/{record_id}"))
