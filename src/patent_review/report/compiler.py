"""Report compiler — submission + retrieval + opinion → ``ReportRecord``."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from patent_review.pipeline.schemas import Submission
from patent_review.report.schemas import (
    PriorArtFinding,
    ReportFindings,
    ReportHeader,
    ReportRecord,
)
from patent_review.retrieval.schemas import RetrievalResult
from patent_review.vectorstore.schemas import Match

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Patentability Assessment Report"
DEFAULT_MAX_FINDINGS = 3
DATE_FORMAT = "%Y-%m-%d"


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def to_finding(match: Match) -> PriorArtFinding:
    """Map one match to a findings entry; missing metadata becomes ``""``."""
    return PriorArtFinding(
        index=match.id,
        registration=_text(match.metadata.get("registration")),
        name=_text(match.metadata.get("name")),
    )


def compile_report(
    submission: Submission,
    retrieval: RetrievalResult,
    opinion_text: str,
    now: datetime | None = None,
    max_findings: int = DEFAULT_MAX_FINDINGS,
    title: str = DEFAULT_TITLE,
) -> ReportRecord:
    """Build the report for one request.

    Args:
        submission: The parsed request.
        retrieval: Prior-art matches from the same request's review run.
        opinion_text: The review opinion.
        now: Report date; the current local time when ``None``.
        max_findings: Most matches cited, taken in rank order.
        title: Report title shown in the header.

    Returns:
        A ``ReportRecord`` with one finding per available match, up to
        ``max_findings``. Fewer matches give fewer findings.
    """
    now = now or datetime.now()

    header = ReportHeader(
        register_date=submission.date,
        company=submission.organization,
        now_date=now.strftime(DATE_FORMAT),
        name=submission.name,
        report=title,
        summary=submission.description,
    )
    findings = ReportFindings(
        other_patents=tuple(to_finding(m) for m in retrieval.top(max_findings)),
        opinion=opinion_text,
    )

    logger.info(
        "Compiled report with %d findings (%d matches available)",
        len(findings.other_patents),
        len(retrieval),
    )
    return ReportRecord(header=header, findings=findings)
