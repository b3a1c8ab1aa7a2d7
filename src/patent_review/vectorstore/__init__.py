"""Namespaced vector store backends — FAISS (local), Qdrant, Pinecone."""

from patent_review.vectorstore.base import VectorStore
from patent_review.vectorstore.factory import available_stores, get_vector_store
from patent_review.vectorstore.schemas import Match, VectorRecord

__all__ = [
    "Match",
    "VectorRecord",
    "VectorStore",
    "available_stores",
    "get_vector_store",
]
