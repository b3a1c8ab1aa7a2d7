"""Application settings loaded from YAML with environment variable overrides."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

ENV_PREFIX = "PATENT_REVIEW__"

# ---------------------------------------------------------------------------
# Settings sections
# ---------------------------------------------------------------------------


class EmbeddingSettings(BaseModel):
    provider: str = "openai"
    model: str = "text-embedding-3-small"
    dimension: int | None = None
    base_url: str | None = None
    timeout: float = 30.0


class VectorStoreSettings(BaseModel):
    backend: str = "pinecone"
    index: str = "patent-review"
    path: str = "local_data/vectorstore"
    url: str | None = None
    timeout: float = 30.0


class LLMSettings(BaseModel):
    provider: str = "openai"
    model: str = "gpt-4o"
    temperature: float = 0.2
    max_tokens: int = 2048
    base_url: str | None = None
    timeout: float = 120.0


class ReviewSettings(BaseModel):
    prior_art_namespace: str = "prior_patent"
    law_namespace: str = "patent_law"
    prior_art_top_k: int = 5
    law_top_k: int = 3
    report_grounding_limit: int = 3
    deadline_seconds: float | None = 300.0


class ReportSettings(BaseModel):
    title: str = "Patentability Assessment Report"
    max_findings: int = 3
    template_path: str | None = None
    font_path: str | None = None


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------


class Settings(BaseModel):
    embedding: EmbeddingSettings = Field(default_factory=EmbeddingSettings)
    vectorstore: VectorStoreSettings = Field(default_factory=VectorStoreSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    review: ReviewSettings = Field(default_factory=ReviewSettings)
    report: ReportSettings = Field(default_factory=ReportSettings)


def _find_settings_file() -> Path | None:
    """Walk up from cwd looking for settings.yaml."""
    profile = os.getenv("PATENT_REVIEW_PROFILE", "")
    names = [f"settings-{profile}.yaml", "settings.yaml"] if profile else ["settings.yaml"]

    cwd = Path.cwd()
    for parent in [cwd, *cwd.parents]:
        for name in names:
            candidate = parent / name
            if candidate.exists():
                return candidate
    return None


def _apply_env_overrides(raw: dict[str, Any], environ: dict[str, str]) -> dict[str, Any]:
    """Overlay ``PATENT_REVIEW__<SECTION>__<FIELD>`` variables onto *raw*.

    Values stay strings; pydantic coerces them to the field types.
    """
    for name, value in environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        parts = name[len(ENV_PREFIX):].lower().split("__")
        if len(parts) != 2:
            continue
        section, key = parts
        if section not in Settings.model_fields:
            continue
        raw.setdefault(section, {})
        raw[section][key] = value
    return raw


def load_settings(path: str | Path | None = None) -> Settings:
    """Load settings from YAML file, falling back to defaults."""
    settings_path = Path(path) if path else _find_settings_file()

    raw: dict[str, Any] = {}
    if settings_path is not None:
        with open(settings_path, encoding="utf-8") as fh:
            raw = yaml.safe_load(fh) or {}

    raw = _apply_env_overrides(raw, dict(os.environ))
    return Settings(**raw)
