"""
Report rendering.

Turns a ReportAggregate into:
- chart-ready series (zero amounts replaced by a small floor value so empty
  buckets still show up on a chart; the aggregate itself is never modified)
- an HTML document for browser printing
- a PDF document (US Letter) built with reportlab

Amounts are formatted with two decimals, thousands separators, and a currency
glyph prefix. Formatting happens here only; aggregates keep full precision.
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from datetime import datetime
from html import escape
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from domain.report import ReportAggregate, ReportEntry

CHART_FLOOR = 0.1
ACCENT_COLOR = colors.HexColor("#FF9F43")
TEXT_COLOR = colors.HexColor("#2C3E50")
MUTED_COLOR = colors.HexColor("#666666")

# (title, subtitle) for the three summary cards.
SUMMARY_CARDS = (
    ("Daily Sales", "Today's Revenue"),
    ("Weekly Sales", "Last 7 Days"),
    ("Monthly Sales", "Past Month"),
)

# (key, section title, label column header) for the three series tables.
SERIES_SECTIONS = (
    ("daily_trend", "Daily Sales Trend", "Day"),
    ("weekly_distribution", "Weekly Distribution", "Day of Week"),
    ("monthly_breakdown", "Monthly Breakdown", "Month"),
)


@dataclass(frozen=True, slots=True)
class ChartSeries:
    title: str
    labels: Tuple[str, ...]
    values: Tuple[float, ...]


def format_currency(amount: float, symbol: str = "₱") -> str:
    """Display format: symbol, thousands separators, two decimals (e.g. ₱1,234.50)."""

    return f"{symbol}{amount:,.2f}"


def pdf_currency_prefix(symbol: str, code: str) -> str:
    """
    Currency prefix usable with reportlab's built-in fonts.

    The standard PDF fonts only cover cp1252; glyphs outside it (such as ₱)
    fall back to the ISO currency code.
    """

    try:
        symbol.encode("cp1252")
    except UnicodeEncodeError:
        return f"{code} "
    return symbol


def _series_of(aggregate: ReportAggregate, key: str) -> Tuple[ReportEntry, ...]:
    return getattr(aggregate, key)


def chart_series(aggregate: ReportAggregate, floor: float = CHART_FLOOR) -> Dict[str, ChartSeries]:
    """
    Chart-ready series for the three report sections.

    Any bucket whose amount is exactly zero is drawn at `floor` instead.
    """

    result: Dict[str, ChartSeries] = {}
    for key, title, _ in SERIES_SECTIONS:
        entries = _series_of(aggregate, key)
        result[key] = ChartSeries(
            title=title,
            labels=tuple(entry.label for entry in entries),
            values=tuple(floor if entry.amount == 0 else entry.amount for entry in entries),
        )
    return result


def report_filename(generated_at: datetime, product: str = "vetra") -> str:
    """e.g. vetra-sales-report-03-15-2024-10-00.pdf"""

    return f"{product}-sales-report-{generated_at:%m-%d-%Y}-{generated_at:%H-%M}.pdf"


def format_generated_at(generated_at: datetime) -> str:
    """e.g. 'Friday, March 15, 2024 at 10:00 AM'"""

    return (
        f"{generated_at:%A}, {generated_at:%B} {generated_at.day}, {generated_at.year}"
        f" at {generated_at:%I:%M %p}"
    )


def _summary_values(aggregate: ReportAggregate) -> Sequence[float]:
    return (aggregate.daily_total, aggregate.weekly_total, aggregate.monthly_total)


# ============================================================================
# HTML
# ============================================================================

_HTML_STYLE = """
      body { font-family: 'Helvetica'; padding: 40px; color: #2C3E50; line-height: 1.6; }
      .header { text-align: center; margin-bottom: 40px; border-bottom: 3px solid #FF9F43; padding-bottom: 20px; }
      .logo { font-size: 28px; font-weight: bold; color: #FF9F43; margin-bottom: 10px; }
      .title { font-size: 24px; font-weight: bold; }
      .date { color: #666; margin-top: 10px; font-size: 14px; }
      .section { margin-bottom: 40px; }
      .section-title { font-size: 20px; font-weight: bold; margin-bottom: 20px; border-bottom: 2px solid #FF9F43; padding-bottom: 10px; }
      .summary-grid { display: grid; grid-template-columns: repeat(3, 1fr); gap: 20px; }
      .summary-card { background: #f8f9fa; padding: 20px; border-radius: 10px; text-align: center; }
      .card-title { font-size: 16px; color: #666; margin-bottom: 10px; }
      .card-value { font-size: 24px; font-weight: bold; color: #FF9F43; }
      .card-subtitle { font-size: 12px; color: #666; margin-top: 5px; }
      table { width: 100%; border-collapse: collapse; margin-top: 20px; }
      th, td { padding: 12px; text-align: left; border-bottom: 1px solid #ddd; }
      th { background-color: #f8f9fa; font-weight: bold; }
      .footer { margin-top: 60px; text-align: center; color: #666; font-size: 12px; border-top: 1px solid #ddd; padding-top: 20px; }
"""


def _html_table(label_header: str, entries: Iterable[ReportEntry], symbol: str) -> str:
    rows = "".join(
        f"<tr><td>{escape(entry.label)}</td><td>{escape(format_currency(entry.amount, symbol))}</td></tr>"
        for entry in entries
    )
    return (
        "<table>"
        f"<thead><tr><th>{escape(label_header)}</th><th>Sales Amount</th></tr></thead>"
        f"<tbody>{rows}</tbody>"
        "</table>"
    )


def render_report_html(
    aggregate: ReportAggregate,
    generated_at: datetime,
    brand: str = "Vetra POS",
    currency_symbol: str = "₱",
) -> str:
    """Printable HTML sales report with summary cards and one table per series."""

    cards = "".join(
        '<div class="summary-card">'
        f'<div class="card-title">{escape(title)}</div>'
        f'<div class="card-value">{escape(format_currency(value, currency_symbol))}</div>'
        f'<div class="card-subtitle">{escape(subtitle)}</div>'
        "</div>"
        for (title, subtitle), value in zip(SUMMARY_CARDS, _summary_values(aggregate))
    )

    sections = "".join(
        '<div class="section">'
        f'<div class="section-title">{escape(title)}</div>'
        f"{_html_table(header, _series_of(aggregate, key), currency_symbol)}"
        "</div>"
        for key, title, header in SERIES_SECTIONS
    )

    return (
        "<!DOCTYPE html>\n"
        "<html>\n"
        "  <head>\n"
        '    <meta charset="utf-8" />\n'
        '    <meta name="viewport" content="width=device-width, initial-scale=1.0" />\n'
        f"    <title>{escape(brand)} Sales Report</title>\n"
        f"    <style>{_HTML_STYLE}    </style>\n"
        "  </head>\n"
        "  <body>\n"
        '    <div class="header">'
        f'<div class="logo">{escape(brand.upper())}</div>'
        '<div class="title">Sales Report</div>'
        f'<div class="date">Generated on {escape(format_generated_at(generated_at))}</div>'
        "</div>\n"
        '    <div class="section"><div class="section-title">Sales Overview</div>'
        f'<div class="summary-grid">{cards}</div></div>\n'
        f"    {sections}\n"
        '    <div class="footer">'
        f"<p>Generated by {escape(brand)} System</p>"
        f"<p>&copy; {generated_at.year} All rights reserved</p>"
        "</div>\n"
        "  </body>\n"
        "</html>\n"
    )


# ============================================================================
# PDF
# ============================================================================

def _pdf_styles() -> Dict[str, ParagraphStyle]:
    base = getSampleStyleSheet()
    return {
        "logo": ParagraphStyle(
            "ReportLogo", parent=base["Title"], fontSize=22, textColor=ACCENT_COLOR, spaceAfter=6,
        ),
        "title": ParagraphStyle(
            "ReportTitle", parent=base["Heading1"], alignment=1, textColor=TEXT_COLOR,
        ),
        "date": ParagraphStyle(
            "ReportDate", parent=base["Normal"], alignment=1, textColor=MUTED_COLOR, fontSize=10,
        ),
        "section": ParagraphStyle(
            "ReportSection", parent=base["Heading2"], textColor=TEXT_COLOR, spaceBefore=12,
        ),
        "footer": ParagraphStyle(
            "ReportFooter", parent=base["Normal"], alignment=1, textColor=MUTED_COLOR, fontSize=8,
        ),
    }


def _pdf_table(data: List[List[str]], col_widths: List[float]) -> Table:
    table = Table(data, colWidths=col_widths)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#f8f9fa")),
                ("TEXTCOLOR", (0, 0), (-1, -1), TEXT_COLOR),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTNAME", (0, 1), (-1, -1), "Helvetica"),
                ("FONTSIZE", (0, 0), (-1, -1), 10),
                ("ALIGN", (0, 0), (-1, -1), "LEFT"),
                ("LINEBELOW", (0, 0), (-1, -1), 0.5, colors.HexColor("#dddddd")),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
                ("TOPPADDING", (0, 0), (-1, -1), 6),
            ]
        )
    )
    return table


def render_report_pdf(
    aggregate: ReportAggregate,
    generated_at: datetime,
    brand: str = "Vetra POS",
    currency_prefix: str = "PHP ",
    page_compression: Optional[int] = None,
) -> bytes:
    """
    PDF version of the sales report (US Letter, 612 x 792 points).

    Args:
        aggregate: Report to render
        generated_at: Wall-clock time shown in the header
        brand: Shop/product name for header and footer
        currency_prefix: Prefix for amounts; must be encodable in cp1252
            (see pdf_currency_prefix)
        page_compression: 0 writes plain-text page streams; None keeps
            reportlab's configured default

    Returns:
        PDF bytes
    """

    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=letter,
        rightMargin=0.75 * inch,
        leftMargin=0.75 * inch,
        topMargin=0.75 * inch,
        bottomMargin=0.75 * inch,
        title=f"{brand} Sales Report",
        pageCompression=page_compression,
    )
    styles = _pdf_styles()
    width = letter[0] - 1.5 * inch

    story = [
        Paragraph(escape(brand.upper()), styles["logo"]),
        Paragraph("Sales Report", styles["title"]),
        Paragraph(f"Generated on {escape(format_generated_at(generated_at))}", styles["date"]),
        Spacer(1, 18),
        Paragraph("Sales Overview", styles["section"]),
    ]

    summary = [
        [title for title, _ in SUMMARY_CARDS],
        [format_currency(value, currency_prefix) for value in _summary_values(aggregate)],
        [subtitle for _, subtitle in SUMMARY_CARDS],
    ]
    summary_table = _pdf_table(summary, [width / 3] * 3)
    summary_table.setStyle(
        TableStyle(
            [
                ("ALIGN", (0, 0), (-1, -1), "CENTER"),
                ("FONTNAME", (0, 1), (-1, 1), "Helvetica-Bold"),
                ("FONTSIZE", (0, 1), (-1, 1), 14),
                ("TEXTCOLOR", (0, 1), (-1, 1), ACCENT_COLOR),
                ("TEXTCOLOR", (0, 2), (-1, 2), MUTED_COLOR),
            ]
        )
    )
    story.append(summary_table)

    for key, title, header in SERIES_SECTIONS:
        rows = [[header, "Sales Amount"]]
        rows.extend(
            [entry.label, format_currency(entry.amount, currency_prefix)]
            for entry in _series_of(aggregate, key)
        )
        story.append(Paragraph(title, styles["section"]))
        story.append(_pdf_table(rows, [width / 2, width / 2]))

    story.append(Spacer(1, 36))
    story.append(Paragraph(f"Generated by {escape(brand)} System", styles["footer"]))
    story.append(Paragraph(f"© {generated_at.year} All rights reserved", styles["footer"]))

    doc.build(story)
    pdf_bytes = buffer.getvalue()
    buffer.close()

    return pdf_bytes


__all__ = [
    "CHART_FLOOR",
    "ChartSeries",
    "chart_series",
    "format_currency",
    "format_generated_at",
    "pdf_currency_prefix",
    "render_report_html",
    "render_report_pdf",
    "report_filename",
]
