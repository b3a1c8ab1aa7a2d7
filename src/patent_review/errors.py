"""Typed failures for each stage of the review pipeline.

Every error carries a machine-readable ``kind`` and the HTTP status the
boundary layers map it to.
"""

from __future__ import annotations


class ReviewError(Exception):
    """Base class for all pipeline failures."""

    kind = "review_error"
    status_code = 500

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind, "message": str(self)}


class InvalidSubmissionError(ReviewError):
    """The inbound request body is not a usable submission."""

    kind = "invalid_submission"
    status_code = 400


class EmbeddingError(ReviewError):
    """The embedding service failed or returned a malformed payload."""

    kind = "embedding_error"
    status_code = 502


class RetrievalError(ReviewError):
    """The vector index could not be queried."""

    kind = "retrieval_error"
    status_code = 502


class CompletionError(ReviewError):
    """The chat-completion service failed or returned no choices."""

    kind = "completion_error"
    status_code = 502


class MalformedResultError(ReviewError):
    """A stage received fewer results than a downstream step requires."""

    kind = "malformed_result"
    status_code = 502


class StageTimeoutError(ReviewError):
    """The pipeline deadline expired before a stage could start."""

    kind = "timeout"
    status_code = 504


class RenderError(ReviewError):
    """The report could not be rendered to a document."""

    kind = "render_error"
    status_code = 500
