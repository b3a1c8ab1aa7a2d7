"""Abstract base class for vector stores."""

from __future__ import annotations

from abc import ABC, abstractmethod

from patent_review.vectorstore.schemas import Match, VectorRecord


class VectorStore(ABC):
    """Interface for vector store backends partitioned into namespaces."""

    @abstractmethod
    def upsert(self, namespace: str, records: list[VectorRecord]) -> int:
        """Insert or replace records in a namespace.

        Returns:
            Number of records written.
        """

    @abstractmethod
    def query(
        self,
        namespace: str,
        vector: list[float],
        top_k: int = 10,
        include_metadata: bool = True,
    ) -> list[Match]:
        """Search one namespace for the nearest neighbours of *vector*.

        Args:
            namespace: Corpus partition to search.
            vector: The query vector.
            top_k: Maximum results to return.
            include_metadata: Whether to return stored metadata with each match.

        Returns:
            List of ``Match`` sorted by relevance (highest first). Empty when
            the namespace holds no records.
        """

    @abstractmethod
    def count(self, namespace: str) -> int:
        """Return the number of records in a namespace."""

    @abstractmethod
    def delete_namespace(self, namespace: str) -> None:
        """Delete every record in a namespace."""

    def save(self, path: str) -> None:
        """Persist the store to disk (optional)."""
        raise NotImplementedError(f"{self.__class__.__name__} does not support save()")

    def load(self, path: str) -> None:
        """Load the store from disk (optional)."""
        raise NotImplementedError(f"{self.__class__.__name__} does not support load()")

    @classmethod
    def store_name(cls) -> str:
        """Return human-readable store name."""
        return cls.__name__
