"""Document renderers — ``ReportRecord`` → PDF bytes.

Every call builds its own ``FPDF`` document in memory, so concurrent
requests never share a file path or buffer.
"""

from __future__ import annotations

import html
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from fpdf import FPDF

from patent_review.config import ReportSettings
from patent_review.errors import RenderError
from patent_review.report.schemas import ReportRecord
from patent_review.report.templates import FINDING_TEMPLATE, NO_FINDINGS, REPORT_TEMPLATE

logger = logging.getLogger(__name__)

_FONT_FAMILY = "report"


class DocumentRenderer(ABC):
    """Interface for report renderers."""

    media_type: str = "application/octet-stream"

    @abstractmethod
    def render(self, record: ReportRecord) -> bytes:
        """Render *record* to document bytes.

        Raises:
            RenderError: If the document cannot be produced.
        """


def _escape(value: str) -> str:
    return html.escape(value).replace("\n", "<br>")


class FPDFRenderer(DocumentRenderer):
    """Fill an HTML template and lay it out as an A4 PDF with fpdf2."""

    media_type = "application/pdf"

    def __init__(
        self,
        template: str = REPORT_TEMPLATE,
        finding_template: str = FINDING_TEMPLATE,
        font_path: str | None = None,
        page_format: str = "A4",
        orientation: str = "portrait",
        margin_mm: float = 10.0,
        font_size: int = 11,
    ):
        self.template = template
        self.finding_template = finding_template
        self.font_path = font_path
        self.page_format = page_format
        self.orientation = orientation
        self.margin_mm = margin_mm
        self.font_size = font_size

    @classmethod
    def from_settings(cls, settings: ReportSettings) -> FPDFRenderer:
        template = REPORT_TEMPLATE
        if settings.template_path:
            template = Path(settings.template_path).read_text(encoding="utf-8")
        return cls(template=template, font_path=settings.font_path)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def fill(self, record: ReportRecord) -> str:
        """Substitute the escaped record fields into the HTML template."""
        header = record.header
        findings = record.findings

        rows = "".join(
            self.finding_template.format(
                index=_escape(f.index),
                registration=_escape(f.registration),
                name=_escape(f.name),
                register_date=_escape(f.register_date),
                company=_escape(f.company),
                similarity=_escape(f.similarity),
            )
            for f in findings.other_patents
        )

        return self.template.format(
            title=_escape(header.report),
            registration=_escape(header.registration),
            register_date=_escape(header.register_date),
            company=_escape(header.company),
            now_date=_escape(header.now_date),
            name=_escape(header.name),
            summary=_escape(header.summary),
            findings=f"<ul>\n{rows}</ul>\n" if rows else NO_FINDINGS,
            opinion=_escape(findings.opinion),
            probability=_escape(findings.probability),
        )

    def render(self, record: ReportRecord) -> bytes:
        try:
            markup = self.fill(record)
        except (KeyError, IndexError, ValueError) as exc:
            raise RenderError(f"Report template could not be filled: {exc!r}") from exc

        if not self.font_path:
            # Core fonts only cover Latin-1
            unsupported = sum(1 for ch in markup if ord(ch) > 0xFF)
            if unsupported:
                logger.error(
                    "Report has %d characters outside Latin-1 and no report.font_path",
                    unsupported,
                )
                raise RenderError(
                    f"non-Latin-1 text requires report.font_path "
                    f"({unsupported} unsupported characters)"
                )

        try:
            pdf = FPDF(orientation=self.orientation, unit="mm", format=self.page_format)
            pdf.set_margins(self.margin_mm, self.margin_mm, self.margin_mm)
            pdf.set_auto_page_break(auto=True, margin=self.margin_mm)
            if self.font_path:
                # One TTF serves every style the template's <b>/<i> tags ask for
                for style in ("", "B", "I", "BI"):
                    pdf.add_font(_FONT_FAMILY, style=style, fname=self.font_path)
                pdf.set_font(_FONT_FAMILY, size=self.font_size)
            else:
                pdf.set_font("Helvetica", size=self.font_size)
            pdf.add_page()
            pdf.write_html(markup)
            document = bytes(pdf.output())
        except Exception as exc:
            logger.error("PDF rendering failed: %s", exc)
            raise RenderError(f"PDF rendering failed: {exc}") from exc

        logger.info("Rendered report (%d bytes)", len(document))
        return document
