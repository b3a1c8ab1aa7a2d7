"""CLI entry point — Typer app for patent-review commands.

Usage:
    patent-review report submission.json --output report.pdf
    patent-review answer submission.json
    patent-review ingest prior_art.jsonl --namespace prior_patent
    patent-review status
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated, Any, NoReturn

import typer
from rich.console import Console
from rich.table import Table

from patent_review import __version__
from patent_review.errors import ReviewError

app = typer.Typer(
    name="patent-review",
    help="Patentability review: grounded opinions and PDF reports.",
    no_args_is_help=True,
)

console = Console()

_SUBMISSION_PATH = typer.Argument(..., help="JSON file with date, organization, name, description")
_CORPUS_PATH = typer.Argument(..., help="Corpus file (.jsonl, .json, .yaml)")
_SETTINGS = typer.Option(None, "--settings", help="Path to settings.yaml")


@app.callback()
def main(
    log_level: str = typer.Option("WARNING", "--log-level", help="Python logging level"),
) -> None:
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def _read_submission(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        console.print(f"[bold red]Cannot read submission:[/] {exc}")
        raise typer.Exit(code=1) from exc


def _fail(exc: ReviewError) -> NoReturn:
    console.print(f"[bold red]{exc.kind}:[/] {exc}")
    raise typer.Exit(code=1) from exc


@app.command()
def report(
    submission_path: Annotated[Path, _SUBMISSION_PATH],
    output: Path = typer.Option(
        Path("report.pdf"), "--output", "-o", help="Where to write the PDF",
    ),
    settings_path: Path | None = _SETTINGS,
) -> None:
    """Run the single-pass review and write the PDF report."""
    from patent_review.config import load_settings
    from patent_review.pipeline.builder import build_review_pipeline
    from patent_review.report.renderer import FPDFRenderer
    from patent_review.report.service import ReportService

    settings = load_settings(settings_path)
    service = ReportService(
        pipeline=build_review_pipeline(settings),
        renderer=FPDFRenderer.from_settings(settings.report),
        max_findings=settings.report.max_findings,
        title=settings.report.title,
    )

    body = _read_submission(submission_path)
    try:
        document = service.generate(body)
    except ReviewError as exc:
        _fail(exc)

    output.write_bytes(document)
    console.print(f"\n[bold green]Report written:[/] {output} ({len(document)} bytes)")


@app.command()
def answer(
    submission_path: Annotated[Path, _SUBMISSION_PATH],
    settings_path: Path | None = _SETTINGS,
) -> None:
    """Run the two-phase review and print the opinion."""
    from patent_review.config import load_settings
    from patent_review.pipeline.builder import build_review_pipeline
    from patent_review.pipeline.schemas import Submission

    settings = load_settings(settings_path)
    pipeline = build_review_pipeline(settings)

    body = _read_submission(submission_path)
    try:
        outcome = pipeline.answer(Submission.from_body(body))
    except ReviewError as exc:
        _fail(exc)

    table = Table(title="Retrieved context")
    table.add_column("Phase", style="cyan")
    table.add_column("ID")
    table.add_column("Score", justify="right")
    table.add_column("Metadata")
    for phase in outcome.phases:
        for m in phase.retrieval.matches:
            table.add_row(
                phase.name, m.id, f"{m.score:.3f}",
                json.dumps(m.metadata, ensure_ascii=False)[:60],
            )

    console.print(table)
    console.print(f"\n[bold green]Opinion:[/] {outcome.opinion}")
    console.print(f"\n[dim]Model: {outcome.model} | State: {outcome.state}[/]")


@app.command()
def ingest(
    corpus_path: Annotated[Path, _CORPUS_PATH],
    namespace: str = typer.Option(
        ..., "--namespace", "-n", help="Target namespace (e.g. prior_patent, patent_law)",
    ),
    settings_path: Path | None = _SETTINGS,
) -> None:
    """Embed a corpus file and store it in a namespace."""
    from patent_review.config import load_settings
    from patent_review.pipeline.builder import build_embedding_provider, build_vector_store
    from patent_review.pipeline.ingest import CorpusIngestor

    settings = load_settings(settings_path)
    embedding_provider = build_embedding_provider(settings)
    store = build_vector_store(settings, embedding_provider.dimension)
    ingestor = CorpusIngestor(embedding_provider=embedding_provider, vector_store=store)
    result = ingestor.ingest_file(corpus_path, namespace=namespace)

    if settings.vectorstore.backend.lower() == "faiss":
        store.save(settings.vectorstore.path)

    console.print(f"\n[bold green]Ingested:[/] {corpus_path.name} → {namespace}")
    console.print(f"  Read: {result.records_read}")
    console.print(f"  Embedded: {result.records_embedded}")
    console.print(f"  Stored: {result.records_stored}")

    for w in result.warnings:
        console.print(f"  [yellow]Warning:[/] {w}")


@app.command()
def status(settings_path: Path | None = _SETTINGS) -> None:
    """Show available providers and the active configuration."""
    from patent_review.config import load_settings
    from patent_review.embeddings.factory import available_providers as emb_providers
    from patent_review.llm.factory import available_providers as llm_providers
    from patent_review.vectorstore.factory import available_stores

    settings = load_settings(settings_path)

    console.print(f"\n[bold green]patent-review-rag[/] v{__version__}\n")

    table = Table(title="Components")
    table.add_column("Layer", style="cyan")
    table.add_column("Available")
    table.add_column("Configured")

    table.add_row(
        "Embedding Providers", ", ".join(emb_providers()),
        f"{settings.embedding.provider} ({settings.embedding.model})",
    )
    table.add_row(
        "Vector Stores", ", ".join(available_stores()),
        f"{settings.vectorstore.backend} ({settings.vectorstore.index})",
    )
    table.add_row(
        "LLM Providers", ", ".join(llm_providers()),
        f"{settings.llm.provider} ({settings.llm.model})",
    )
    table.add_row(
        "Namespaces", "",
        f"{settings.review.prior_art_namespace}, {settings.review.law_namespace}",
    )

    console.print(table)


if __name__ == "__main__":
    app()
