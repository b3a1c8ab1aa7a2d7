"""Data models for the compiled patentability report."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True)
class ReportHeader:
    """Who asked, when, and about what."""

    register_date: str
    company: str
    now_date: str
    name: str
    report: str
    summary: str
    registration: str = ""


@dataclass(frozen=True)
class PriorArtFinding:
    """One cited prior-art entry.

    ``register_date``, ``company`` and ``similarity`` are reserved for a
    later scoring stage and stay empty.
    """

    index: str
    registration: str
    name: str
    register_date: str = ""
    company: str = ""
    similarity: str = ""


@dataclass(frozen=True)
class ReportFindings:
    """Cited prior art plus the review opinion."""

    other_patents: tuple[PriorArtFinding, ...] = field(default_factory=tuple)
    opinion: str = ""
    probability: str = ""


@dataclass(frozen=True)
class ReportRecord:
    """Everything the renderer needs for one report."""

    header: ReportHeader
    findings: ReportFindings

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
