"""Shared fixtures for tests — deterministic fakes, no network calls."""

from __future__ import annotations

import hashlib
from datetime import datetime
from typing import Any

import numpy as np
import pytest

from patent_review.embeddings.base import EmbeddingProvider
from patent_review.embeddings.gateway import EmbeddingGateway
from patent_review.llm.base import LLMProvider
from patent_review.llm.gateway import CompletionGateway
from patent_review.pipeline.review import ReviewPipeline
from patent_review.retrieval.retriever import RetrievalClient
from patent_review.vectorstore.base import VectorStore
from patent_review.vectorstore.schemas import Match, VectorRecord

DIM = 64
FIXED_NOW = datetime(2024, 3, 15, 9, 30)

# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class MockEmbedder(EmbeddingProvider):
    """Deterministic hash-based embeddings that count calls."""

    def __init__(self, dim: int = DIM):
        self._dim = dim
        self.calls: list[str] = []

    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        return [self._hash_embed(t) for t in texts]

    def embed_query(self, query: str) -> list[float]:
        self.calls.append(query)
        return self._hash_embed(query)

    @property
    def dimension(self) -> int:
        return self._dim

    def _hash_embed(self, text: str) -> list[float]:
        h = hashlib.sha256(text.encode()).digest()
        vec = np.array([h[i % len(h)] / 255.0 for i in range(self._dim)], dtype=np.float32)
        vec /= np.linalg.norm(vec)
        return vec.tolist()


class StaticStore(VectorStore):
    """Returns canned matches per namespace and records every query."""

    def __init__(self, matches: dict[str, list[Match]] | None = None):
        self.matches = matches or {}
        self.queries: list[dict[str, Any]] = []

    def upsert(self, namespace: str, records: list[VectorRecord]) -> int:
        self.matches.setdefault(namespace, []).extend(
            Match(id=r.id, score=1.0, metadata=r.metadata) for r in records
        )
        return len(records)

    def query(
        self,
        namespace: str,
        vector: list[float],
        top_k: int = 10,
        include_metadata: bool = True,
    ) -> list[Match]:
        self.queries.append({
            "namespace": namespace,
            "vector": vector,
            "top_k": top_k,
            "include_metadata": include_metadata,
        })
        return list(self.matches.get(namespace, []))[:top_k]

    def count(self, namespace: str) -> int:
        return len(self.matches.get(namespace, []))

    def delete_namespace(self, namespace: str) -> None:
        self.matches.pop(namespace, None)


class ScriptedLLM(LLMProvider):
    """Replays scripted choice lists, one per call, and records each request."""

    def __init__(self, replies: list[list[str]] | None = None, model: str = "mock-llm"):
        self.model = model
        self.replies = list(replies) if replies is not None else None
        self.requests: list[list[dict[str, str]]] = []

    def chat(self, messages: list[dict[str, str]]) -> list[str]:
        self.requests.append(messages)
        if self.replies is None:
            return [f"Opinion #{len(self.requests)}"]
        return self.replies.pop(0)


def make_matches(prefix: str, n: int) -> list[Match]:
    """*n* matches with strictly decreasing scores."""
    return [
        Match(
            id=f"{prefix}{i + 1}",
            score=round(0.95 - i * 0.1, 2),
            metadata={"registration": f"R{i + 1}", "name": f"{prefix} entry {i + 1}"},
        )
        for i in range(n)
    ]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def submission_body() -> dict[str, Any]:
    return {
        "date": "2024-01-01",
        "organization": "Acme",
        "name": "Jane Doe",
        "description": "A widget with a spring",
    }


@pytest.fixture
def embedder() -> MockEmbedder:
    return MockEmbedder()


@pytest.fixture
def store() -> StaticStore:
    return StaticStore({
        "prior_patent": make_matches("P", 5),
        "patent_law": make_matches("L", 3),
    })


@pytest.fixture
def llm() -> ScriptedLLM:
    return ScriptedLLM()


@pytest.fixture
def pipeline(embedder: MockEmbedder, store: StaticStore, llm: ScriptedLLM) -> ReviewPipeline:
    return ReviewPipeline(
        embedder=EmbeddingGateway(embedder),
        retriever=RetrievalClient(store),
        completer=CompletionGateway(llm),
    )
