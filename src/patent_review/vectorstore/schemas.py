"""Data models for vector store operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class VectorRecord:
    """A corpus entry with its embedding, ready for storage."""

    id: str
    embedding: list[float]
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Match:
    """A single ranked hit from a namespaced similarity query."""

    id: str
    score: float
    metadata: dict[str, Any] = field(default_factory=dict)
