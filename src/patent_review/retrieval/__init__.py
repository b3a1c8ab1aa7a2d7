"""Namespaced top-K retrieval against the vector index."""

from patent_review.retrieval.retriever import RetrievalClient
from patent_review.retrieval.schemas import RetrievalResult

__all__ = ["RetrievalClient", "RetrievalResult"]
