"""OpenAI and Azure OpenAI embedding providers.

Requires the ``openai`` extra. Credentials come from ``OPENAI_API_KEY`` or,
for Azure, ``AZURE_OPENAI_API_KEY`` / ``AZURE_OPENAI_ENDPOINT``.
"""

from __future__ import annotations

import logging
from typing import Any

from patent_review.embeddings.base import EmbeddingProvider

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "text-embedding-3-small"
DEFAULT_API_VERSION = "2024-06-01"

_DIMENSION_MAP = {
    "text-embedding-3-small": 1536,
    "text-embedding-3-large": 3072,
    "text-embedding-ada-002": 1536,
}

BATCH_SIZE = 2048  # OpenAI max batch size


def _import_openai() -> Any:
    try:
        import openai
    except ImportError as exc:
        raise ImportError(
            "openai package required: pip install patent-review-rag[openai]"
        ) from exc
    return openai


class OpenAIEmbeddingProvider(EmbeddingProvider):
    """Embed text via the OpenAI Embeddings API."""

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        api_key: str | None = None,
        base_url: str | None = None,
        dimension: int | None = None,
        timeout: float = 30.0,
    ):
        openai = _import_openai()

        self.model = model
        self._dimension = dimension or _DIMENSION_MAP.get(model, 1536)
        self._client: Any = self._make_client(openai, api_key, base_url, timeout)

    def _make_client(
        self, openai: Any, api_key: str | None, base_url: str | None, timeout: float
    ) -> Any:
        kwargs: dict[str, Any] = {"timeout": timeout}
        if api_key:
            kwargs["api_key"] = api_key
        if base_url:
            kwargs["base_url"] = base_url
        return openai.OpenAI(**kwargs)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            return []

        all_embeddings: list[list[float]] = []

        for i in range(0, len(texts), BATCH_SIZE):
            batch = texts[i : i + BATCH_SIZE]
            resp = self._client.embeddings.create(
                model=self.model,
                input=batch,
            )
            # Sort by index to guarantee order
            sorted_data = sorted(resp.data, key=lambda x: x.index)
            all_embeddings.extend([d.embedding for d in sorted_data])

        return all_embeddings

    def embed_query(self, query: str) -> list[float]:
        resp = self._client.embeddings.create(
            model=self.model,
            input=[query],
        )
        if not resp.data:
            return []
        return resp.data[0].embedding

    @property
    def dimension(self) -> int:
        return self._dimension


class AzureOpenAIEmbeddingProvider(OpenAIEmbeddingProvider):
    """Embed text via an Azure OpenAI deployment.

    ``model`` is the deployment name; ``base_url`` is the Azure endpoint.
    """

    def __init__(self, *args, api_version: str = DEFAULT_API_VERSION, **kwargs):
        self.api_version = api_version
        super().__init__(*args, **kwargs)

    def _make_client(
        self, openai: Any, api_key: str | None, base_url: str | None, timeout: float
    ) -> Any:
        kwargs: dict[str, Any] = {"api_version": self.api_version, "timeout": timeout}
        if api_key:
            kwargs["api_key"] = api_key
        if base_url:
            kwargs["azure_endpoint"] = base_url
        return openai.AzureOpenAI(**kwargs)
