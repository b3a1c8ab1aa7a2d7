"""Tests for report compilation, PDF rendering and the report service."""

from __future__ import annotations

import pytest
from conftest import FIXED_NOW, ScriptedLLM, StaticStore, make_matches

from patent_review.config import ReportSettings
from patent_review.embeddings.gateway import EmbeddingGateway
from patent_review.errors import CompletionError, InvalidSubmissionError, RenderError
from patent_review.llm.gateway import CompletionGateway
from patent_review.pipeline.review import ReviewPipeline
from patent_review.pipeline.schemas import Submission
from patent_review.report.compiler import compile_report, to_finding
from patent_review.report.renderer import FPDFRenderer
from patent_review.report.schemas import PriorArtFinding
from patent_review.report.service import ReportService
from patent_review.report.templates import NO_FINDINGS
from patent_review.retrieval.retriever import RetrievalClient
from patent_review.retrieval.schemas import RetrievalResult
from patent_review.vectorstore.schemas import Match


def _retrieval(matches: list[Match]) -> RetrievalResult:
    return RetrievalResult(namespace="prior_patent", top_k=5, matches=tuple(matches))


@pytest.fixture
def submission(submission_body) -> Submission:
    return Submission.from_body(submission_body)


# ---------------------------------------------------------------------------
# Compiler
# ---------------------------------------------------------------------------


class TestCompileReport:
    def test_single_match(self, submission):
        match = Match(id="P1", score=0.91, metadata={"registration": "R1", "name": "Spring Widget"})

        record = compile_report(submission, _retrieval([match]), "Likely novel", now=FIXED_NOW)

        assert record.header.name == "Jane Doe"
        assert record.header.company == "Acme"
        assert record.header.register_date == "2024-01-01"
        assert record.header.summary == "A widget with a spring"
        assert record.header.now_date == "2024-03-15"
        assert record.findings.other_patents == (
            PriorArtFinding(index="P1", registration="R1", name="Spring Widget"),
        )
        assert record.findings.opinion == "Likely novel"

    def test_caps_findings_at_three(self, submission):
        record = compile_report(submission, _retrieval(make_matches("P", 5)), "x", now=FIXED_NOW)
        assert [f.index for f in record.findings.other_patents] == ["P1", "P2", "P3"]

    def test_no_matches(self, submission):
        record = compile_report(submission, _retrieval([]), "No prior art", now=FIXED_NOW)
        assert record.findings.other_patents == ()
        assert record.findings.opinion == "No prior art"

    def test_custom_limit_and_title(self, submission):
        record = compile_report(
            submission,
            _retrieval(make_matches("P", 5)),
            "x",
            now=FIXED_NOW,
            max_findings=1,
            title="Prior Art Search",
        )
        assert len(record.findings.other_patents) == 1
        assert record.header.report == "Prior Art Search"

    def test_idempotent(self, submission):
        retrieval = _retrieval(make_matches("P", 4))
        first = compile_report(submission, retrieval, "x", now=FIXED_NOW)
        second = compile_report(submission, retrieval, "x", now=FIXED_NOW)
        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_to_dict_shape(self, submission):
        record = compile_report(submission, _retrieval(make_matches("P", 1)), "x", now=FIXED_NOW)
        data = record.to_dict()

        assert set(data) == {"header", "findings"}
        assert data["findings"]["other_patents"][0]["index"] == "P1"
        assert data["findings"]["probability"] == ""


class TestToFinding:
    def test_missing_metadata_is_empty(self):
        finding = to_finding(Match(id="P7", score=0.5, metadata={"name": None}))
        assert finding == PriorArtFinding(index="P7", registration="", name="")

    def test_non_string_values(self):
        finding = to_finding(Match(id="P7", score=0.5, metadata={"registration": 1020240001}))
        assert finding.registration == "1020240001"


# ---------------------------------------------------------------------------
# Renderer
# ---------------------------------------------------------------------------


class TestFPDFRenderer:
    def test_fill_escapes_values(self, submission):
        record = compile_report(
            submission,
            _retrieval([Match(id="P1", score=0.9, metadata={"name": "<Spring & Co>"})]),
            "Line one\nLine two",
            now=FIXED_NOW,
        )

        markup = FPDFRenderer().fill(record)

        assert "&lt;Spring &amp; Co&gt;" in markup
        assert "Line one<br>Line two" in markup
        assert "Jane Doe" in markup
        assert "2024-03-15" in markup

    def test_fill_without_findings(self, submission):
        record = compile_report(submission, _retrieval([]), "x", now=FIXED_NOW)
        assert NO_FINDINGS in FPDFRenderer().fill(record)

    def test_render_pdf(self, submission):
        record = compile_report(submission, _retrieval(make_matches("P", 3)), "Novel", now=FIXED_NOW)

        document = FPDFRenderer().render(record)

        assert document.startswith(b"%PDF")
        assert len(document) > 500

    def test_render_latin1_accents_without_font(self, submission):
        record = compile_report(submission, _retrieval([]), "Brevet déposé à Zürich", now=FIXED_NOW)
        assert FPDFRenderer().render(record).startswith(b"%PDF")

    def test_render_non_latin_without_font_raises(self, caplog):
        submission = Submission.from_body({"description": "스프링이 있는 위젯", "name": "홍길동"})
        record = compile_report(submission, _retrieval([]), "등록 가능성이 높습니다", now=FIXED_NOW)

        with caplog.at_level("ERROR", logger="patent_review.report.renderer"):
            with pytest.raises(RenderError, match="requires report.font_path") as info:
                FPDFRenderer().render(record)

        assert "unsupported characters" in str(info.value)
        assert info.value.status_code == 500
        assert any("outside Latin-1" in r.getMessage() for r in caplog.records)

    def test_bad_template_raises(self, submission):
        record = compile_report(submission, _retrieval([]), "x", now=FIXED_NOW)
        with pytest.raises(RenderError):
            FPDFRenderer(template="<p>{unknown_field}</p>").render(record)

    def test_missing_font_raises(self, submission, tmp_path):
        record = compile_report(submission, _retrieval([]), "x", now=FIXED_NOW)
        renderer = FPDFRenderer(font_path=str(tmp_path / "missing.ttf"))
        with pytest.raises(RenderError):
            renderer.render(record)

    def test_from_settings_reads_template(self, tmp_path):
        template = tmp_path / "report.html"
        template.write_text("<h1>{title}</h1>", encoding="utf-8")

        renderer = FPDFRenderer.from_settings(ReportSettings(template_path=str(template)))

        assert renderer.template == "<h1>{title}</h1>"
        assert renderer.media_type == "application/pdf"


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class TestReportService:
    def _service(self, pipeline: ReviewPipeline) -> ReportService:
        return ReportService(pipeline, FPDFRenderer(), clock=lambda: FIXED_NOW)

    def test_compile_end_to_end(self, pipeline, submission_body):
        record = self._service(pipeline).compile(submission_body)

        assert record.header.name == "Jane Doe"
        assert record.header.now_date == "2024-03-15"
        assert [f.index for f in record.findings.other_patents] == ["P1", "P2", "P3"]
        assert record.findings.opinion == "Opinion #1"

    def test_single_prior_art_match(self, embedder, llm, submission_body):
        store = StaticStore({"prior_patent": [
            Match(id="P1", score=0.88, metadata={"registration": "R1", "name": "Spring Widget"}),
        ]})
        pipeline = ReviewPipeline(
            embedder=EmbeddingGateway(embedder),
            retriever=RetrievalClient(store),
            completer=CompletionGateway(llm),
        )

        record = self._service(pipeline).compile(submission_body)

        assert record.findings.other_patents == (
            PriorArtFinding(index="P1", registration="R1", name="Spring Widget"),
        )
        assert record.header.company == "Acme"

    def test_identical_runs_identical_records(self, embedder, store, submission_body):
        pipeline = ReviewPipeline(
            embedder=EmbeddingGateway(embedder),
            retriever=RetrievalClient(store),
            completer=CompletionGateway(ScriptedLLM([["Novel."], ["Novel."]])),
        )
        service = self._service(pipeline)

        assert service.compile(submission_body) == service.compile(submission_body)

    def test_generate_pdf(self, pipeline, submission_body):
        document = self._service(pipeline).generate(submission_body)
        assert document.startswith(b"%PDF")

    def test_empty_corpus_still_renders(self, embedder, llm, submission_body):
        pipeline = ReviewPipeline(
            embedder=EmbeddingGateway(embedder),
            retriever=RetrievalClient(StaticStore()),
            completer=CompletionGateway(llm),
        )
        service = self._service(pipeline)

        assert service.compile(submission_body).findings.other_patents == ()
        assert service.generate(submission_body).startswith(b"%PDF")

    def test_invalid_body(self, pipeline, store):
        with pytest.raises(InvalidSubmissionError):
            self._service(pipeline).generate({"name": "no description"})
        assert store.queries == []

    def test_completion_failure_propagates(self, embedder, store, submission_body):
        pipeline = ReviewPipeline(
            embedder=EmbeddingGateway(embedder),
            retriever=RetrievalClient(store),
            completer=CompletionGateway(ScriptedLLM([[]])),
        )
        with pytest.raises(CompletionError):
            self._service(pipeline).generate(submission_body)
