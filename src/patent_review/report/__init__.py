"""Patentability report — compile review results and render them to PDF."""

from patent_review.report.compiler import compile_report
from patent_review.report.renderer import DocumentRenderer, FPDFRenderer
from patent_review.report.schemas import (
    PriorArtFinding,
    ReportFindings,
    ReportHeader,
    ReportRecord,
)
from patent_review.report.service import ReportService

__all__ = [
    "DocumentRenderer",
    "FPDFRenderer",
    "PriorArtFinding",
    "ReportFindings",
    "ReportHeader",
    "ReportRecord",
    "ReportService",
    "compile_report",
]
