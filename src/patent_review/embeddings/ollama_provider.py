"""Ollama embedding provider — local-first, no API keys needed.

Uses the Ollama REST API (http://localhost:11434) with models like
``nomic-embed-text``, ``mxbai-embed-large``, etc.
"""

from __future__ import annotations

import logging

import httpx

from patent_review.embeddings.base import EmbeddingProvider

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "nomic-embed-text"
DEFAULT_BASE_URL = "http://localhost:11434"
DEFAULT_DIM = 768


class OllamaEmbeddingProvider(EmbeddingProvider):
    """Embed text via a local Ollama server."""

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        dimension: int = DEFAULT_DIM,
        timeout: float = 60.0,
    ):
        self.model = model
        self.base_url = base_url.rstrip("/")
        self._dimension = dimension
        self._client = httpx.Client(base_url=self.base_url, timeout=timeout)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        """Embed a batch through ``/api/embed``, which takes a list of inputs."""
        if not texts:
            return []

        resp = self._client.post(
            "/api/embed",
            json={"model": self.model, "input": texts},
        )
        resp.raise_for_status()
        return resp.json().get("embeddings", [])

    def embed_query(self, query: str) -> list[float]:
        embeddings = self.embed_texts([query])
        return embeddings[0] if embeddings else []

    @property
    def dimension(self) -> int:
        return self._dimension
