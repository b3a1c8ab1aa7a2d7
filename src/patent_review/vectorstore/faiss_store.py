"""FAISS vector store — local, zero infrastructure.

Keeps one flat inner-product index per namespace plus the normalized vectors
and metadata needed to rebuild it, so upserts can replace existing ids.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import numpy as np

from patent_review.vectorstore.base import VectorStore
from patent_review.vectorstore.schemas import Match, VectorRecord

logger = logging.getLogger(__name__)


@dataclass
class _Namespace:
    index: Any
    ids: list[str] = field(default_factory=list)
    vectors: dict[str, np.ndarray] = field(default_factory=dict)
    metadata: dict[str, dict[str, Any]] = field(default_factory=dict)


class FAISSStore(VectorStore):
    """FAISS-backed namespaced vector store."""

    def __init__(self, dimension: int = 1536, path: str | None = None):
        try:
            import faiss
        except ImportError as exc:
            raise ImportError(
                "faiss-cpu required: pip install patent-review-rag"
            ) from exc

        self._faiss = faiss
        self._dimension = dimension
        self._namespaces: dict[str, _Namespace] = {}
        self.path = path

        if path and (Path(path) / "metadata.json").exists():
            self.load(path)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def upsert(self, namespace: str, records: list[VectorRecord]) -> int:
        if not records:
            return 0

        vectors = np.array([r.embedding for r in records], dtype=np.float32)
        if vectors.shape[1] != self._dimension:
            raise ValueError(
                f"Expected {self._dimension}-dim vectors, got {vectors.shape[1]}"
            )
        # L2-normalize for cosine similarity via inner product
        self._faiss.normalize_L2(vectors)

        ns = self._namespaces.setdefault(namespace, self._new_namespace())
        for record, vector in zip(records, vectors, strict=True):
            ns.vectors[record.id] = vector
            ns.metadata[record.id] = dict(record.metadata)

        self._rebuild(ns)
        logger.info(
            "FAISSStore upserted %d records into '%s' (total: %d)",
            len(records),
            namespace,
            len(ns.ids),
        )
        return len(records)

    def query(
        self,
        namespace: str,
        vector: list[float],
        top_k: int = 10,
        include_metadata: bool = True,
    ) -> list[Match]:
        ns = self._namespaces.get(namespace)
        if ns is None or ns.index.ntotal == 0:
            return []

        query_vec = np.array([vector], dtype=np.float32)
        self._faiss.normalize_L2(query_vec)

        fetch_k = min(top_k, ns.index.ntotal)
        scores, indices = ns.index.search(query_vec, fetch_k)

        matches: list[Match] = []
        for score, idx in zip(scores[0], indices[0], strict=True):
            if idx == -1:
                continue
            record_id = ns.ids[int(idx)]
            metadata = dict(ns.metadata[record_id]) if include_metadata else {}
            matches.append(Match(id=record_id, score=float(score), metadata=metadata))

        return matches

    def count(self, namespace: str) -> int:
        ns = self._namespaces.get(namespace)
        return ns.index.ntotal if ns is not None else 0

    def delete_namespace(self, namespace: str) -> None:
        self._namespaces.pop(namespace, None)

    def namespaces(self) -> list[str]:
        return sorted(self._namespaces)

    def save(self, path: str) -> None:
        """Save one FAISS index per namespace plus a metadata manifest."""
        p = Path(path)
        p.mkdir(parents=True, exist_ok=True)

        manifest: dict[str, Any] = {"dimension": self._dimension, "namespaces": []}
        for i, (name, ns) in enumerate(sorted(self._namespaces.items())):
            index_file = f"namespace_{i}.faiss"
            self._faiss.write_index(ns.index, str(p / index_file))
            manifest["namespaces"].append({
                "name": name,
                "index_file": index_file,
                "ids": ns.ids,
                "metadata": [ns.metadata[record_id] for record_id in ns.ids],
            })

        with open(p / "metadata.json", "w", encoding="utf-8") as f:
            json.dump(manifest, f, ensure_ascii=False)

        logger.info("FAISSStore saved %d namespaces to %s", len(self._namespaces), path)

    def load(self, path: str) -> None:
        """Load every namespace saved by :meth:`save`."""
        p = Path(path)

        with open(p / "metadata.json", encoding="utf-8") as f:
            manifest = json.load(f)

        self._dimension = manifest.get("dimension", self._dimension)
        self._namespaces = {}
        for entry in manifest["namespaces"]:
            index = self._faiss.read_index(str(p / entry["index_file"]))
            stored = index.reconstruct_n(0, index.ntotal) if index.ntotal else []
            ns = _Namespace(index=index, ids=list(entry["ids"]))
            for record_id, vector, meta in zip(
                entry["ids"], stored, entry["metadata"], strict=True
            ):
                ns.vectors[record_id] = np.asarray(vector, dtype=np.float32)
                ns.metadata[record_id] = meta
            self._namespaces[entry["name"]] = ns

        logger.info("FAISSStore loaded %d namespaces from %s", len(self._namespaces), path)

    # ------------------------------------------------------------------
    # Private
    # ------------------------------------------------------------------

    def _new_namespace(self) -> _Namespace:
        return _Namespace(index=self._faiss.IndexFlatIP(self._dimension))

    def _rebuild(self, ns: _Namespace) -> None:
        # IndexFlatIP has no in-place replace; rebuild from the stored vectors.
        ns.index = self._faiss.IndexFlatIP(self._dimension)
        ns.ids = list(ns.vectors)
        if ns.ids:
            ns.index.add(np.stack([ns.vectors[record_id] for record_id in ns.ids]))
