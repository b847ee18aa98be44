"""
Report export.

Packages a rendered report as a named artifact (filename, bytes, MIME type)
that can be written to the reports directory or streamed as an HTTP download.
Platform share sheets and media libraries are outside this service.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from config import Settings
from services.report_renderer import (
    pdf_currency_prefix,
    render_report_html,
    render_report_pdf,
    report_filename,
)
from services.report_service import Report

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"
HTML_MIME_TYPE = "text/html"


@dataclass(frozen=True, slots=True)
class ReportArtifact:
    filename: str
    content: bytes
    mime_type: str = PDF_MIME_TYPE

    @property
    def content_disposition(self) -> str:
        return f"attachment; filename={self.filename}"


def build_pdf_artifact(report: Report, settings: Settings) -> ReportArtifact:
    """Render the report to PDF and name it after the generation time."""

    content = render_report_pdf(
        report.aggregate,
        report.generated_at,
        brand=settings.brand,
        currency_prefix=pdf_currency_prefix(settings.currency_symbol, settings.currency_code),
    )
    return ReportArtifact(
        filename=report_filename(report.generated_at, product=settings.product_slug),
        content=content,
        mime_type=PDF_MIME_TYPE,
    )


def build_html_artifact(report: Report, settings: Settings) -> ReportArtifact:
    """Render the report to HTML; same name as the PDF with an .html suffix."""

    html = render_report_html(
        report.aggregate,
        report.generated_at,
        brand=settings.brand,
        currency_symbol=settings.currency_symbol,
    )
    filename = report_filename(report.generated_at, product=settings.product_slug)
    return ReportArtifact(
        filename=filename[: -len(".pdf")] + ".html",
        content=html.encode("utf-8"),
        mime_type=HTML_MIME_TYPE,
    )


def save_artifact(artifact: ReportArtifact, directory: Path) -> Path:
    """
    Write an artifact into `directory`, creating it if needed.

    Returns:
        Path of the written file

    Raises:
        OSError: If the directory or file cannot be written
    """

    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / artifact.filename
    path.write_bytes(artifact.content)

    logger.info(
        "Report saved",
        extra={"path": str(path), "mime_type": artifact.mime_type, "size_bytes": len(artifact.content)},
    )
    return path


__all__ = [
    "PDF_MIME_TYPE",
    "HTML_MIME_TYPE",
    "ReportArtifact",
    "build_pdf_artifact",
    "build_html_artifact",
    "save_artifact",
]
