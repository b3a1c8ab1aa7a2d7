"""API Gateway request/response helpers shared by the Lambda handlers."""

from __future__ import annotations

import base64
import binascii
import json
import logging
from typing import Any

from patent_review.errors import InvalidSubmissionError, ReviewError

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


def parse_event_body(event: dict[str, Any]) -> Any:
    """Decode the JSON body of an API Gateway proxy event.

    Raises:
        InvalidSubmissionError: If the body is missing or not valid JSON.
    """
    raw = event.get("body")
    if not raw:
        raise InvalidSubmissionError("Request body is empty")

    try:
        if event.get("isBase64Encoded"):
            raw = base64.b64decode(raw).decode("utf-8")
        return json.loads(raw)
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError, TypeError) as exc:
        raise InvalidSubmissionError(f"Request body is not valid JSON: {exc}") from exc


def json_response(status_code: int, payload: dict[str, Any]) -> dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": dict(JSON_HEADERS),
        "body": json.dumps(payload, ensure_ascii=False),
    }


def error_response(exc: Exception) -> dict[str, Any]:
    """Structured error body: ``{"error": {"kind", "message"}}``."""
    if isinstance(exc, ReviewError):
        return json_response(exc.status_code, {"error": exc.to_dict()})
    return json_response(
        500,
        {"error": {"kind": "internal_error", "message": "Unexpected server error"}},
    )


def binary_response(
    document: bytes,
    media_type: str,
    filename: str,
) -> dict[str, Any]:
    return {
        "statusCode": 200,
        "headers": {
            "Content-Type": media_type,
            "Content-Disposition": f"attachment; filename={filename}",
        },
        "isBase64Encoded": True,
        "body": base64.b64encode(document).decode("ascii"),
    }
