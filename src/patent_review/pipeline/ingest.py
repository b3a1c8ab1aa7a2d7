"""Corpus ingestion — file → records → embed → upsert into a namespace.

Loads prior-art or patent-law corpora so the review pipeline has something
to retrieve from. Each record is ``{"id", "text", "metadata"}``; ``text`` is
what gets embedded and ``metadata`` is what the review dialogue sees.
"""

from __future__ import annotations

import json
import logging
import uuid
from pathlib import Path
from typing import Any

import yaml

from patent_review.embeddings.base import EmbeddingProvider
from patent_review.pipeline.schemas import IngestResult
from patent_review.vectorstore.base import VectorStore
from patent_review.vectorstore.schemas import VectorRecord

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = {".jsonl", ".json", ".yaml", ".yml"}


class CorpusIngestor:
    """Orchestrates corpus ingestion: load → embed → store."""

    def __init__(
        self,
        embedding_provider: EmbeddingProvider,
        vector_store: VectorStore,
        batch_size: int = 64,
    ):
        self.embedding_provider = embedding_provider
        self.vector_store = vector_store
        self.batch_size = batch_size

    def ingest_file(self, path: str | Path, namespace: str) -> IngestResult:
        """Ingest every record of a corpus file into *namespace*."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        ext = path.suffix.lower()
        if ext not in SUPPORTED_EXTENSIONS:
            raise ValueError(
                f"Unsupported format '{ext}'. Supported: {sorted(SUPPORTED_EXTENSIONS)}"
            )

        raw_records = self._load(path, ext)
        result = self.ingest_records(raw_records, namespace=namespace, source=str(path))

        logger.info(
            "Ingested %s into '%s': %d read → %d embedded → %d stored",
            path.name,
            namespace,
            result.records_read,
            result.records_embedded,
            result.records_stored,
        )
        return result

    def ingest_records(
        self,
        raw_records: list[dict[str, Any]],
        namespace: str,
        source: str = "inline",
    ) -> IngestResult:
        """Ingest already-parsed records (no file loading step)."""
        warnings: list[str] = []
        ids: list[str] = []
        texts: list[str] = []
        metadata: list[dict[str, Any]] = []

        for i, item in enumerate(raw_records):
            if not isinstance(item, dict):
                warnings.append(f"Record {i} is not an object; skipped")
                continue
            text =str(item.get("text") or "").strip()
            if not text:
                warnings.append(f"Record {i} has no text; skipped")
                continue
            ids.append(str(item.get("id") or uuid.uuid4()))
            texts.append(text)
            metadata.append(dict(item.get("metadata") or {}))

        if not texts:
            return IngestResult(
                source=source,
                namespace=namespace,
                records_read=len(raw_records),
                records_embedded=0,
                records_stored=0,
                warnings=warnings,
            )

        # Embed in batches
        all_embeddings: list[list[float]] = []
        for i in range(0, len(texts), self.batch_size):
            batch = texts[i : i + self.batch_size]
            all_embeddings.extend(self.embedding_provider.embed_texts(batch))

        records = [
            VectorRecord(id=record_id, embedding=embedding, metadata=meta)
            for record_id, embedding, meta in zip(ids, all_embeddings, metadata, strict=True)
        ]
        stored = self.vector_store.upsert(namespace, records)

        return IngestResult(
            source=source,
            namespace=namespace,
            records_read=len(raw_records),
            records_embedded=len(all_embeddings),
            records_stored=stored,
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Private
    # ------------------------------------------------------------------

    @staticmethod
    def _load(path: Path, ext: str) -> list[dict[str, Any]]:
        with open(path, encoding="utf-8") as f:
            if ext == ".jsonl":
                data: Any = [json.loads(line) for line in f if line.strip()]
            elif ext == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f) or []

        if isinstance(data, dict):
            data = data.get("records", [data])
        if not isinstance(data, list):
            raise ValueError(f"Corpus file {path} must contain a list of records")
        return data
