"""Review pipeline: dialogue assembly, orchestration and corpus ingestion."""

from patent_review.pipeline.dialogue import append_follow_up, build_initial_dialogue
from patent_review.pipeline.ingest import CorpusIngestor
from patent_review.pipeline.review import ReviewPipeline
from patent_review.pipeline.schemas import (
    IngestResult,
    PhaseConfig,
    PhaseOutcome,
    ReviewOutcome,
    ReviewState,
    Submission,
)

__all__ = [
    "CorpusIngestor",
    "IngestResult",
    "PhaseConfig",
    "PhaseOutcome",
    "ReviewOutcome",
    "ReviewPipeline",
    "ReviewState",
    "Submission",
    "append_follow_up",
    "build_initial_dialogue",
]
