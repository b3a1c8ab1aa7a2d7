"""Patent-review prompt templates and grounding-context serialization."""

from __future__ import annotations

import json
from collections.abc import Sequence

from patent_review.vectorstore.schemas import Match

# ---------------------------------------------------------------------------
# System prompts
# ---------------------------------------------------------------------------

TECH_PROMPT = """\
You are a patent examiner reviewing an invention disclosure for novelty and \
inventive step. Compare the submission against the prior-art records listed \
below (one JSON object per record, most similar first).

Rules:
1. Refer to prior art by its registration number and name.
2. State which elements of the submission are anticipated by a record and \
which are not disclosed by any record.
3. Do not invent prior art that is not listed.
4. If no records are listed, say that no comparable prior art was found.

Prior-art records:
"""

LAW_PROMPT = """\
Assess the submission and the prior-art review against the patent-law \
provisions below (one JSON object per provision). Cite the article for each \
requirement you apply, address novelty, inventive step and industrial \
applicability, and finish with an overall opinion on registrability.

Patent-law provisions:
"""


def serialize_metadata(match: Match) -> str:
    """Render one match's metadata as compact JSON."""
    return json.dumps(match.metadata, ensure_ascii=False, separators=(",", ":"))


def ground_context(context: str, matches: Sequence[Match]) -> str:
    """Append the metadata of every given match, in rank order, to *context*."""
    return context + "".join(serialize_metadata(m) + "\n" for m in matches)
