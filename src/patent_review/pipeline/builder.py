"""Wire providers, gateways and the review pipeline from ``Settings``.

Shared by the Lambda handlers and the CLI so both construct clients the same
way. Components can be passed in to override what the settings would build.
"""

from __future__ import annotations

import logging
from typing import Any

from patent_review.config import Settings
from patent_review.embeddings.base import EmbeddingProvider
from patent_review.embeddings.factory import get_embedding_provider
from patent_review.embeddings.gateway import EmbeddingGateway
from patent_review.llm.base import LLMProvider
from patent_review.llm.factory import get_llm_provider
from patent_review.llm.gateway import CompletionGateway
from patent_review.pipeline.review import ReviewPipeline
from patent_review.retrieval.retriever import RetrievalClient
from patent_review.vectorstore.base import VectorStore
from patent_review.vectorstore.factory import get_vector_store

logger = logging.getLogger(__name__)


def build_embedding_provider(settings: Settings) -> EmbeddingProvider:
    cfg = settings.embedding
    kwargs: dict[str, Any] = {"model": cfg.model, "timeout": cfg.timeout}
    # Unset means the provider's own default for the model
    if cfg.dimension:
        kwargs["dimension"] = cfg.dimension
    if cfg.base_url:
        kwargs["base_url"] = cfg.base_url
    return get_embedding_provider(cfg.provider, **kwargs)


def build_vector_store(settings: Settings, dimension: int | None = None) -> VectorStore:
    """Build the configured store.

    *dimension* sizes the FAISS and Qdrant indexes; it defaults to
    ``embedding.dimension`` and should be the embedding provider's dimension
    when that setting is left unset.
    """
    cfg = settings.vectorstore
    backend = cfg.backend.lower()
    dimension = dimension or settings.embedding.dimension
    kwargs: dict[str, Any]
    if backend in ("faiss", "qdrant") and not dimension:
        raise ValueError(f"Vector store '{backend}' needs an embedding dimension")
    if backend == "faiss":
        kwargs = {"dimension": dimension, "path": cfg.path}
    elif backend == "qdrant":
        kwargs = {
            "collection_name": cfg.index,
            "dimension": dimension,
            "url": cfg.url,
            "timeout": cfg.timeout,
        }
    else:
        kwargs = {"index_name": cfg.index}
        if cfg.url:
            kwargs["host"] = cfg.url
    return get_vector_store(backend, **kwargs)


def build_llm_provider(settings: Settings) -> LLMProvider:
    cfg = settings.llm
    kwargs: dict[str, Any] = {
        "model": cfg.model,
        "temperature": cfg.temperature,
        "max_tokens": cfg.max_tokens,
        "timeout": cfg.timeout,
    }
    if cfg.base_url and cfg.provider.lower() != "anthropic":
        kwargs["base_url"] = cfg.base_url
    return get_llm_provider(cfg.provider, **kwargs)


def build_review_pipeline(
    settings: Settings,
    embedding_provider: EmbeddingProvider | None = None,
    vector_store: VectorStore | None = None,
    llm_provider: LLMProvider | None = None,
) -> ReviewPipeline:
    """Assemble a ``ReviewPipeline`` with gateways around each provider."""
    review = settings.review
    embedding_provider = embedding_provider or build_embedding_provider(settings)
    vector_store = vector_store or build_vector_store(settings, embedding_provider.dimension)

    pipeline = ReviewPipeline(
        embedder=EmbeddingGateway(embedding_provider),
        retriever=RetrievalClient(vector_store),
        completer=CompletionGateway(llm_provider or build_llm_provider(settings)),
        prior_art_namespace=review.prior_art_namespace,
        law_namespace=review.law_namespace,
        prior_art_top_k=review.prior_art_top_k,
        law_top_k=review.law_top_k,
        report_grounding_limit=review.report_grounding_limit,
        deadline_seconds=review.deadline_seconds,
    )
    logger.info(
        "Built review pipeline (embedding=%s, store=%s, llm=%s)",
        settings.embedding.provider,
        settings.vectorstore.backend,
        settings.llm.provider,
    )
    return pipeline
