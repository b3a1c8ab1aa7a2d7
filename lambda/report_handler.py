"""Lambda handler for patentability reports — ``POST /`` via API Gateway.

Thin wrapper around ReportService. All business logic lives in
src/patent_review/.
"""

from __future__ import annotations

import logging
import os
from typing import Any

from patent_review.config import load_settings
from patent_review.errors import ReviewError
from patent_review.http import binary_response, error_response, parse_event_body
from patent_review.pipeline.builder import build_review_pipeline
from patent_review.report.renderer import FPDFRenderer
from patent_review.report.service import ReportService

logger = logging.getLogger(__name__)
logger.setLevel(os.getenv("LOG_LEVEL", "INFO"))

# Initialize outside handler for Lambda warm-start reuse
_service: ReportService | None = None


def _get_service() -> ReportService:
    global _service
    if _service is not None:
        return _service

    settings = load_settings()
    _service = ReportService(
        pipeline=build_review_pipeline(settings),
        renderer=FPDFRenderer.from_settings(settings.report),
        max_findings=settings.report.max_findings,
        title=settings.report.title,
    )
    return _service


def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Handle API Gateway request — review the submission, return the PDF."""
    try:
        body = parse_event_body(event)
        service = _get_service()
        document = service.generate(body)
    except ReviewError as exc:
        logger.warning("Report request failed (%s): %s", exc.kind, exc)
        return error_response(exc)
    except Exception as exc:
        logger.exception("Report request crashed")
        return error_response(exc)

    return binary_response(document, service.renderer.media_type, "report.pdf")
