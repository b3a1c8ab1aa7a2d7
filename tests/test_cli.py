"""Tests for the Typer CLI."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest
from conftest import DIM, MockEmbedder
from typer.testing import CliRunner

from patent_review.cli import app
from patent_review.errors import CompletionError

runner = CliRunner()


@pytest.fixture
def settings_file(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text(
        "embedding:\n"
        "  provider: ollama\n"
        f"  dimension: {DIM}\n"
        "vectorstore:\n"
        "  backend: faiss\n"
        f"  path: {tmp_path / 'store'}\n"
        "llm:\n"
        "  provider: ollama\n",
        encoding="utf-8",
    )
    return path


class TestStatus:
    def test_lists_components(self, settings_file):
        result = runner.invoke(app, ["status", "--settings", str(settings_file)])

        assert result.exit_code == 0
        assert "Embedding" in result.output
        assert "faiss" in result.output
        assert "prior_patent" in result.output


class TestIngest:
    def test_ingest_saves_faiss(self, settings_file, tmp_path):
        corpus = tmp_path / "prior_art.jsonl"
        corpus.write_text(
            json.dumps({"id": "P1", "text": "Spring hinge", "metadata": {"registration": "R1"}}) + "\n",
            encoding="utf-8",
        )

        with patch(
            "patent_review.pipeline.builder.build_embedding_provider",
            return_value=MockEmbedder(),
        ):
            result = runner.invoke(app, [
                "ingest", str(corpus), "--namespace", "prior_patent",
                "--settings", str(settings_file),
            ])

        assert result.exit_code == 0, result.output
        assert "Stored: 1" in result.output
        assert (tmp_path / "store" / "metadata.json").exists()


class TestReport:
    def test_missing_submission_file(self, settings_file, tmp_path):
        result = runner.invoke(app, [
            "report", str(tmp_path / "missing.json"), "--settings", str(settings_file),
        ])
        assert result.exit_code == 1

    def test_review_error_exits_nonzero(self, settings_file, tmp_path):
        submission = tmp_path / "submission.json"
        submission.write_text(json.dumps({"description": "A widget"}), encoding="utf-8")

        with patch("patent_review.report.service.ReportService.generate",
                   side_effect=CompletionError("no choices")), \
                patch("patent_review.pipeline.builder.build_review_pipeline"):
            result = runner.invoke(app, [
                "report", str(submission), "--settings", str(settings_file),
            ])

        assert result.exit_code == 1
        assert "completion_error" in result.output

    def test_writes_pdf(self, settings_file, tmp_path, pipeline, submission_body):
        submission = tmp_path / "submission.json"
        submission.write_text(json.dumps(submission_body), encoding="utf-8")
        output = tmp_path / "out" / "report.pdf"
        output.parent.mkdir()

        with patch("patent_review.pipeline.builder.build_review_pipeline", return_value=pipeline):
            result = runner.invoke(app, [
                "report", str(submission), "--output", str(output),
                "--settings", str(settings_file),
            ])

        assert result.exit_code == 0, result.output
        assert "Report written" in result.output
        assert output.read_bytes().startswith(b"%PDF")


class TestAnswer:
    def test_prints_opinion_and_context(self, settings_file, tmp_path, pipeline, submission_body):
        submission = tmp_path / "submission.json"
        submission.write_text(json.dumps(submission_body), encoding="utf-8")

        with patch("patent_review.pipeline.builder.build_review_pipeline", return_value=pipeline):
            result = runner.invoke(app, [
                "answer", str(submission), "--settings", str(settings_file),
            ])

        assert result.exit_code == 0, result.output
        assert "Opinion #2" in result.output
        assert "law_answered" in result.output
        assert "P1" in result.output
        assert "L3" in result.output

    def test_invalid_submission_exits_nonzero(self, settings_file, tmp_path, pipeline):
        submission = tmp_path / "submission.json"
        submission.write_text(json.dumps({"name": "Jane Doe"}), encoding="utf-8")

        with patch("patent_review.pipeline.builder.build_review_pipeline", return_value=pipeline):
            result = runner.invoke(app, [
                "answer", str(submission), "--settings", str(settings_file),
            ])

        assert result.exit_code == 1
        assert "invalid_submission" in result.output
