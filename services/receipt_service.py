"""
Receipt generation for completed sales.

Produces a narrow PDF receipt (80mm roll width) listing each line as
`quantity x unit price` with its line total, followed by the sale total.
"""

from __future__ import annotations

import io
from datetime import datetime
from html import escape
from typing import List

from reportlab.lib import colors
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch, mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
from reportlab.platypus.flowables import HRFlowable

from domain.sale import SaleRecord
from services.report_renderer import ACCENT_COLOR, format_currency

RECEIPT_WIDTH = 80 * mm
RECEIPT_MARGIN = 5 * mm


def receipt_filename(issued_at: datetime) -> str:
    """e.g. receipt_20240315100000.pdf"""

    return f"receipt_{issued_at:%Y%m%d%H%M%S}.pdf"


def _styles() -> dict:
    base = getSampleStyleSheet()
    return {
        "brand": ParagraphStyle(
            "ReceiptBrand", parent=base["Title"], fontSize=16, textColor=ACCENT_COLOR, spaceAfter=2,
        ),
        "meta": ParagraphStyle("ReceiptMeta", parent=base["Normal"], fontSize=7, leading=9),
        "total": ParagraphStyle(
            "ReceiptTotal", parent=base["Normal"], fontSize=10, fontName="Helvetica-Bold", alignment=2,
        ),
        "footer": ParagraphStyle("ReceiptFooter", parent=base["Normal"], fontSize=7, alignment=1),
    }


def _item_rows(sale: SaleRecord, currency_prefix: str) -> List[List[str]]:
    rows = [["Item", "Qty x Price", "Total"]]
    for item in sale.items:
        name = item.product_name or item.product_id
        if len(name) > 20:
            name = name[:20] + "..."
        rows.append([
            name,
            f"{item.quantity} x {format_currency(item.unit_price, currency_prefix)}",
            format_currency(item.line_total, currency_prefix),
        ])
    return rows


def render_receipt_pdf(
    sale: SaleRecord,
    brand: str = "Vetra",
    currency_prefix: str = "PHP ",
) -> bytes:
    """
    Generate a PDF receipt for a sale.

    Args:
        sale: The recorded sale (product names are shown when present)
        brand: Shop name printed at the top
        currency_prefix: Prefix for amounts; must be encodable in cp1252

    Returns:
        PDF bytes
    """

    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=(RECEIPT_WIDTH, 11 * inch),
        rightMargin=RECEIPT_MARGIN,
        leftMargin=RECEIPT_MARGIN,
        topMargin=RECEIPT_MARGIN,
        bottomMargin=RECEIPT_MARGIN,
        title=f"Receipt {sale.sale_id}",
    )
    styles = _styles()
    content_width = RECEIPT_WIDTH - 2 * RECEIPT_MARGIN

    table = Table(
        _item_rows(sale, currency_prefix),
        colWidths=[content_width * 0.4, content_width * 0.35, content_width * 0.25],
    )
    table.setStyle(
        TableStyle(
            [
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTNAME", (0, 1), (-1, -1), "Helvetica"),
                ("FONTSIZE", (0, 0), (-1, -1), 7),
                ("ALIGN", (2, 0), (2, -1), "RIGHT"),
                ("LINEBELOW", (0, 0), (-1, 0), 0.5, colors.black),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 2),
                ("TOPPADDING", (0, 0), (-1, -1), 2),
            ]
        )
    )

    story = [
        Paragraph(escape(brand), styles["brand"]),
        Paragraph(f"Transaction ID: {escape(sale.sale_id)}", styles["meta"]),
        Paragraph(f"Date: {sale.sold_at:%m/%d/%Y, %I:%M:%S %p}", styles["meta"]),
        Spacer(1, 4),
        HRFlowable(width="100%", thickness=0.5, color=colors.black),
        Spacer(1, 4),
        table,
        Spacer(1, 4),
        HRFlowable(width="100%", thickness=0.5, color=colors.black),
        Paragraph(f"Total Items: {sale.item_count}", styles["meta"]),
        Paragraph(f"Total: {escape(format_currency(sale.total_amount, currency_prefix))}", styles["total"]),
        Spacer(1, 8),
        Paragraph("Thank you for your purchase!", styles["footer"]),
    ]

    doc.build(story)
    pdf_bytes = buffer.getvalue()
    buffer.close()

    return pdf_bytes


__all__ = ["receipt_filename", "render_receipt_pdf"]
