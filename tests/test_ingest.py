"""Tests for corpus ingestion into the FAISS store."""

from __future__ import annotations

import json

import pytest
from conftest import DIM, MockEmbedder

from patent_review.pipeline.ingest import CorpusIngestor
from patent_review.vectorstore.faiss_store import FAISSStore

RECORDS = [
    {"id": "P1", "text": "Spring-loaded widget hinge", "metadata": {"registration": "R1", "name": "Hinge"}},
    {"id": "P2", "text": "Coil spring damper", "metadata": {"registration": "R2", "name": "Damper"}},
    {"id": "P3", "text": "Widget housing", "metadata": {"registration": "R3", "name": "Housing"}},
]


class BatchRecordingEmbedder(MockEmbedder):
    def __init__(self):
        super().__init__()
        self.batches: list[int] = []

    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        self.batches.append(len(texts))
        return super().embed_texts(texts)


@pytest.fixture
def ingestor() -> CorpusIngestor:
    return CorpusIngestor(embedding_provider=MockEmbedder(), vector_store=FAISSStore(dimension=DIM))


class TestIngestRecords:
    def test_stores_records(self, ingestor):
        result = ingestor.ingest_records(RECORDS, namespace="prior_patent")

        assert result.records_read == 3
        assert result.records_embedded == 3
        assert result.records_stored == 3
        assert result.warnings == []
        assert ingestor.vector_store.count("prior_patent") == 3

    def test_query_finds_identical_text(self, ingestor):
        ingestor.ingest_records(RECORDS, namespace="prior_patent")
        vector = MockEmbedder().embed_query("Coil spring damper")

        top = ingestor.vector_store.query("prior_patent", vector, top_k=1)[0]

        assert top.id == "P2"
        assert top.metadata == {"registration": "R2", "name": "Damper"}

    def test_skips_records_without_text(self, ingestor):
        result = ingestor.ingest_records(
            [{"id": "x", "text": "  "}, RECORDS[0]], namespace="prior_patent"
        )

        assert result.records_read == 2
        assert result.records_stored == 1
        assert result.warnings == ["Record 0 has no text; skipped"]

    def test_skips_non_object_records(self, ingestor):
        result = ingestor.ingest_records(["bare text", 42, RECORDS[1]], namespace="prior_patent")

        assert result.records_read == 3
        assert result.records_stored == 1
        assert result.warnings == [
            "Record 0 is not an object; skipped",
            "Record 1 is not an object; skipped",
        ]

    def test_missing_id_generated(self, ingestor):
        ingestor.ingest_records([{"text": "Anonymous record"}], namespace="patent_law")
        assert ingestor.vector_store.count("patent_law") == 1

    def test_nothing_to_store(self, ingestor):
        result = ingestor.ingest_records([], namespace="patent_law")
        assert result.records_stored == 0
        assert ingestor.vector_store.count("patent_law") == 0

    def test_batches(self):
        embedder = BatchRecordingEmbedder()
        ingestor = CorpusIngestor(embedder, FAISSStore(dimension=DIM), batch_size=2)

        ingestor.ingest_records(RECORDS, namespace="prior_patent")

        assert embedder.batches == [2, 1]


class TestIngestFile:
    def test_jsonl(self, ingestor, tmp_path):
        path = tmp_path / "prior_art.jsonl"
        path.write_text("\n".join(json.dumps(r) for r in RECORDS) + "\n\n", encoding="utf-8")

        result = ingestor.ingest_file(path, namespace="prior_patent")

        assert result.records_stored == 3
        assert result.source == str(path)
        assert result.namespace == "prior_patent"

    def test_jsonl_with_scalar_lines(self, ingestor, tmp_path):
        path = tmp_path / "prior_art.jsonl"
        path.write_text('"just a string"\n7\n' + json.dumps(RECORDS[0]) + "\n", encoding="utf-8")

        result = ingestor.ingest_file(path, namespace="prior_patent")

        assert result.records_stored == 1
        assert len(result.warnings) == 2

    def test_json_with_records_key(self, ingestor, tmp_path):
        path = tmp_path / "law.json"
        path.write_text(json.dumps({"records": RECORDS[:2]}), encoding="utf-8")

        assert ingestor.ingest_file(path, namespace="patent_law").records_stored == 2

    def test_yaml(self, ingestor, tmp_path):
        path = tmp_path / "law.yaml"
        path.write_text(
            "- id: A29\n"
            "  text: Novelty requirement\n"
            "  metadata:\n"
            "    article: '29'\n",
            encoding="utf-8",
        )

        assert ingestor.ingest_file(path, namespace="patent_law").records_stored == 1

    def test_missing_file(self, ingestor, tmp_path):
        with pytest.raises(FileNotFoundError):
            ingestor.ingest_file(tmp_path / "nope.jsonl", namespace="prior_patent")

    def test_unsupported_extension(self, ingestor, tmp_path):
        path = tmp_path / "corpus.csv"
        path.write_text("id,text\n", encoding="utf-8")
        with pytest.raises(ValueError, match="Unsupported format"):
            ingestor.ingest_file(path, namespace="prior_patent")

    def test_scalar_payload_rejected(self, ingestor, tmp_path):
        path = tmp_path / "corpus.json"
        path.write_text("42", encoding="utf-8")
        with pytest.raises(ValueError, match="list of records"):
            ingestor.ingest_file(path, namespace="prior_patent")
