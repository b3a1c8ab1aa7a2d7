"""Review orchestrator — retrieve → ground → complete, one or two phases.

The interactive answer runs a prior-art phase and then a patent-law phase
whose query is the first phase's opinion. The formal report runs the
prior-art phase only.
"""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Callable, Sequence

from patent_review.embeddings.gateway import EmbeddingGateway
from patent_review.errors import MalformedResultError, StageTimeoutError
from patent_review.llm.gateway import CompletionGateway
from patent_review.llm.schemas import Dialogue, DialogueMessage
from patent_review.pipeline.dialogue import append_follow_up, build_initial_dialogue
from patent_review.pipeline.prompts import LAW_PROMPT, TECH_PROMPT, ground_context
from patent_review.pipeline.schemas import (
    PhaseConfig,
    PhaseOutcome,
    ReviewOutcome,
    ReviewState,
    Submission,
)
from patent_review.retrieval.retriever import RetrievalClient
from patent_review.retrieval.schemas import RetrievalResult

logger = logging.getLogger(__name__)


class _Deadline:
    """Wall-clock budget for one run, checked before every external call."""

    def __init__(self, seconds: float | None, clock: Callable[[], float]):
        self._clock = clock
        self._expires_at = clock() + seconds if seconds is not None else None

    def check(self, stage: str) -> None:
        if self._expires_at is not None and self._clock() >= self._expires_at:
            raise StageTimeoutError(f"Review deadline expired before {stage}")


class ReviewPipeline:
    """Sequence embedding, retrieval and completion for a submission."""

    def __init__(
        self,
        embedder: EmbeddingGateway,
        retriever: RetrievalClient,
        completer: CompletionGateway,
        prior_art_namespace: str = "prior_patent",
        law_namespace: str = "patent_law",
        prior_art_top_k: int = 5,
        law_top_k: int = 3,
        report_grounding_limit: int = 3,
        tech_prompt: str = TECH_PROMPT,
        law_prompt: str = LAW_PROMPT,
        deadline_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.embedder = embedder
        self.retriever = retriever
        self.completer = completer
        self.prior_art_namespace = prior_art_namespace
        self.law_namespace = law_namespace
        self.prior_art_top_k = prior_art_top_k
        self.law_top_k = law_top_k
        self.report_grounding_limit = report_grounding_limit
        self.tech_prompt = tech_prompt
        self.law_prompt = law_prompt
        self.deadline_seconds = deadline_seconds
        self._clock = clock

    # ------------------------------------------------------------------
    # Phase plans
    # ------------------------------------------------------------------

    def answer_phases(self) -> tuple[PhaseConfig, ...]:
        return (
            PhaseConfig(
                name="tech",
                namespace=self.prior_art_namespace,
                top_k=self.prior_art_top_k,
                context_prompt=self.tech_prompt,
                retrieved_state=ReviewState.TECH_RETRIEVED,
                answered_state=ReviewState.TECH_ANSWERED,
            ),
            PhaseConfig(
                name="law",
                namespace=self.law_namespace,
                top_k=self.law_top_k,
                context_prompt=self.law_prompt,
                retrieved_state=ReviewState.LAW_RETRIEVED,
                answered_state=ReviewState.LAW_ANSWERED,
            ),
        )

    def report_phases(self) -> tuple[PhaseConfig, ...]:
        return (
            PhaseConfig(
                name="tech",
                namespace=self.prior_art_namespace,
                top_k=self.prior_art_top_k,
                context_prompt=self.tech_prompt,
                retrieved_state=ReviewState.TECH_RETRIEVED,
                answered_state=ReviewState.ANSWERED,
                grounding_limit=self.report_grounding_limit,
            ),
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def answer(self, submission: Submission) -> ReviewOutcome:
        """Two-phase review: prior art, then patent law on the first opinion."""
        return self.run(submission, self.answer_phases())

    def assess(self, submission: Submission) -> ReviewOutcome:
        """Single-pass prior-art review used for the formal report."""
        return self.run(submission, self.report_phases())

    def run(self, submission: Submission, phases: Sequence[PhaseConfig]) -> ReviewOutcome:
        """Run *phases* in order, threading each answer into the next query.

        The first failure aborts the run; nothing is retried.
        """
        if not phases:
            raise ValueError("At least one phase is required")

        run_id = uuid.uuid4().hex[:8]
        deadline = _Deadline(self.deadline_seconds, self._clock)
        states: list[ReviewState] = [ReviewState.IDLE]
        outcomes: list[PhaseOutcome] = []
        dialogue: Dialogue = ()
        query_text = submission.query_text
        previous: DialogueMessage | None = None

        for phase in phases:
            retrieval = self._retrieve(phase, query_text, deadline)
            states.append(phase.retrieved_state)
            logger.info(
                "Review %s: %s (%d matches from '%s')",
                run_id,
                phase.retrieved_state,
                len(retrieval),
                phase.namespace,
            )

            grounding = retrieval.top(phase.grounding_limit)
            if previous is None:
                dialogue = build_initial_dialogue(
                    system_context=phase.context_prompt,
                    grounding_matches=grounding,
                    legal_context=self.law_prompt,
                    user_text=submission.query_text,
                )
            else:
                dialogue = append_follow_up(
                    dialogue,
                    previous,
                    ground_context(phase.context_prompt, grounding),
                )

            deadline.check(f"{phase.name} completion")
            answer = self.completer.complete(dialogue)
            states.append(phase.answered_state)
            logger.info("Review %s: %s", run_id, phase.answered_state)

            outcomes.append(PhaseOutcome(name=phase.name, retrieval=retrieval, answer=answer))
            previous = answer
            query_text = answer.content

        return ReviewOutcome(
            submission=submission,
            phases=tuple(outcomes),
            dialogue=dialogue,
            states=tuple(states),
            model=self.completer.model,
        )

    # ------------------------------------------------------------------
    # Private
    # ------------------------------------------------------------------

    def _retrieve(
        self, phase: PhaseConfig, query_text: str, deadline: _Deadline
    ) -> RetrievalResult:
        deadline.check(f"{phase.name} embedding")
        vector = self.embedder.embed(query_text)

        deadline.check(f"{phase.name} retrieval")
        retrieval = self.retriever.query(
            namespace=phase.namespace,
            vector=vector,
            top_k=phase.top_k,
            include_metadata=True,
        )

        if len(retrieval) < phase.min_matches:
            raise MalformedResultError(
                f"Phase '{phase.name}' needs at least {phase.min_matches} matches "
                f"from '{phase.namespace}', got {len(retrieval)}"
            )
        return retrieval
