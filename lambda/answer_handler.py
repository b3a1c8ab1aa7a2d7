"""Lambda handler for interactive review answers — ``POST /answer``.

Thin wrapper around ReviewPipeline. All business logic lives in
src/patent_review/.
"""

from __future__ import annotations

import logging
import os
from typing import Any

from patent_review.config import load_settings
from patent_review.errors import ReviewError
from patent_review.http import error_response, json_response, parse_event_body
from patent_review.pipeline.builder import build_review_pipeline
from patent_review.pipeline.review import ReviewPipeline
from patent_review.pipeline.schemas import Submission

logger = logging.getLogger(__name__)
logger.setLevel(os.getenv("LOG_LEVEL", "INFO"))

# Initialize outside handler for Lambda warm-start reuse
_pipeline: ReviewPipeline | None = None


def _get_pipeline() -> ReviewPipeline:
    global _pipeline
    if _pipeline is not None:
        return _pipeline

    _pipeline = build_review_pipeline(load_settings())
    return _pipeline


def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Handle API Gateway request — run both review phases, return JSON."""
    try:
        submission = Submission.from_body(parse_event_body(event))
        outcome = _get_pipeline().answer(submission)
    except ReviewError as exc:
        logger.warning("Answer request failed (%s): %s", exc.kind, exc)
        return error_response(exc)
    except Exception as exc:
        logger.exception("Answer request crashed")
        return error_response(exc)

    return json_response(200, {
        "opinion": outcome.opinion,
        "state": outcome.state.value,
        "model": outcome.model,
        **{
            phase.name: [
                {"id": m.id, "score": m.score, "metadata": m.metadata}
                for m in phase.retrieval.matches
            ]
            for phase in outcome.phases
        },
    })
