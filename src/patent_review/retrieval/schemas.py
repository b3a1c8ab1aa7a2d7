"""Data models for retrieval operations."""

from __future__ import annotations

from dataclasses import dataclass, field

from patent_review.vectorstore.schemas import Match


@dataclass(frozen=True)
class RetrievalResult:
    """Ranked matches from one namespaced query.

    ``matches`` holds at most ``top_k`` entries and may be empty; callers
    must not assume it is full.
    """

    namespace: str
    top_k: int
    matches: tuple[Match, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.matches)

    def top(self, limit: int | None = None) -> tuple[Match, ...]:
        """Return up to *limit* matches in rank order (all when ``None``)."""
        if limit is None:
            return self.matches
        return self.matches[: max(limit, 0)]
