"""Report service — request body → review → compiled record → PDF bytes."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from patent_review.pipeline.review import ReviewPipeline
from patent_review.pipeline.schemas import Submission
from patent_review.report.compiler import DEFAULT_MAX_FINDINGS, DEFAULT_TITLE, compile_report
from patent_review.report.renderer import DocumentRenderer
from patent_review.report.schemas import ReportRecord

logger = logging.getLogger(__name__)


class ReportService:
    """Run the single-pass report review and render its result."""

    def __init__(
        self,
        pipeline: ReviewPipeline,
        renderer: DocumentRenderer,
        max_findings: int = DEFAULT_MAX_FINDINGS,
        title: str = DEFAULT_TITLE,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.pipeline = pipeline
        self.renderer = renderer
        self.max_findings = max_findings
        self.title = title
        self._clock = clock

    def compile(self, body: Any) -> ReportRecord:
        """Review the submission in *body* and compile the report record."""
        submission = Submission.from_body(body)
        outcome = self.pipeline.assess(submission)
        tech = outcome.phase("tech")

        return compile_report(
            submission,
            tech.retrieval,
            outcome.opinion,
            now=self._clock(),
            max_findings=self.max_findings,
            title=self.title,
        )

    def generate(self, body: Any) -> bytes:
        """Review, compile and render; returns the document bytes."""
        record = self.compile(body)
        return self.renderer.render(record)
