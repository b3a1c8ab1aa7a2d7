"""Data models for the review pipeline."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from patent_review.errors import InvalidSubmissionError
from patent_review.llm.schemas import Dialogue, DialogueMessage
from patent_review.retrieval.schemas import RetrievalResult

_HEADER_FIELDS = ("date", "organization", "name", "description")


@dataclass(frozen=True)
class Submission:
    """A request for patentability review.

    ``query_text`` is the whole request body serialized as JSON, so extra
    fields reach the retrieval query and the dialogue alongside the header
    fields.
    """

    description: str
    date: str = ""
    organization: str = ""
    name: str = ""
    extra: dict[str, Any] = field(default_factory=dict)
    query_text: str = ""

    @classmethod
    def from_body(cls, body: Any) -> Submission:
        """Build a submission from a decoded JSON request body.

        Raises:
            InvalidSubmissionError: If the body is not an object or has no
                description.
        """
        if not isinstance(body, dict):
            raise InvalidSubmissionError("Request body must be a JSON object")

        values: dict[str, str] = {}
        for key in _HEADER_FIELDS:
            value = body.get(key, "")
            if value is None:
                value = ""
            if isinstance(value, bool) or not isinstance(value, (str, int, float)):
                raise InvalidSubmissionError(f"Field '{key}' must be a string")
            values[key] = str(value).strip()

        if not values["description"]:
            raise InvalidSubmissionError("Field 'description' is required")

        extra = {k: v for k, v in body.items() if k not in _HEADER_FIELDS}
        return cls(
            description=values["description"],
            date=values["date"],
            organization=values["organization"],
            name=values["name"],
            extra=extra,
            query_text=json.dumps(body, ensure_ascii=False),
        )


class ReviewState(StrEnum):
    """Progress of one orchestration run."""

    IDLE = "idle"
    TECH_RETRIEVED = "tech_retrieved"
    TECH_ANSWERED = "tech_answered"
    LAW_RETRIEVED = "law_retrieved"
    LAW_ANSWERED = "law_answered"
    ANSWERED = "answered"


@dataclass(frozen=True)
class PhaseConfig:
    """One retrieval + dialogue + completion cycle.

    Attributes:
        name: Label used in logs and outcomes (``tech``, ``law``).
        namespace: Vector index namespace to search.
        top_k: Matches to request.
        context_prompt: System text the retrieved metadata is appended to.
        retrieved_state: State entered once retrieval succeeds.
        answered_state: State entered once the completion succeeds.
        grounding_limit: Most matches injected into the dialogue (all when
            ``None``).
        min_matches: Fewest matches the phase accepts before failing.
    """

    name: str
    namespace: str
    top_k: int
    context_prompt: str
    retrieved_state: ReviewState
    answered_state: ReviewState
    grounding_limit: int | None = None
    min_matches: int = 0


@dataclass(frozen=True)
class PhaseOutcome:
    """What one phase retrieved and answered."""

    name: str
    retrieval: RetrievalResult
    answer: DialogueMessage


@dataclass(frozen=True)
class ReviewOutcome:
    """Result of a full orchestration run."""

    submission: Submission
    phases: tuple[PhaseOutcome, ...]
    dialogue: Dialogue
    states: tuple[ReviewState, ...]
    model: str = ""

    @property
    def opinion(self) -> str:
        """Text of the last phase's answer."""
        return self.phases[-1].answer.content if self.phases else ""

    @property
    def state(self) -> ReviewState:
        return self.states[-1] if self.states else ReviewState.IDLE

    def phase(self, name: str) -> PhaseOutcome:
        for outcome in self.phases:
            if outcome.name == name:
                return outcome
        raise KeyError(name)


@dataclass
class IngestResult:
    """Result of loading a corpus file into a namespace."""

    source: str
    namespace: str
    records_read: int
    records_embedded: int
    records_stored: int
    warnings: list[str] = field(default_factory=list)
