"""
Reports API Endpoints.

Sales summaries computed over the user's complete sale history, plus HTML and
PDF renderings of the same report.
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from fastapi.responses import HTMLResponse

from api.dependencies import get_sale_source, get_settings
from api.models import (
    ChartSeriesResponse,
    DashboardResponse,
    ReportEntryResponse,
    ReportSummaryResponse,
)
from config import Settings
from services.report_export import build_html_artifact, build_pdf_artifact
from services.report_renderer import chart_series
from services.report_service import Report, build_dashboard_stats, build_report
from services.sale_source import SaleFetchError, SaleRecordSource

logger = logging.getLogger(__name__)

router = APIRouter()

_NOW_QUERY = Query(None, description="Report clock (ISO-8601); defaults to the current time")


def _load_report(source: SaleRecordSource, now: Optional[datetime], settings: Settings) -> Report:
    try:
        return build_report(source, now=now, tz=settings.tz)
    except SaleFetchError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.get(
    "/reports/summary",
    response_model=ReportSummaryResponse,
    summary="Sales Summary",
    description="Daily/weekly/monthly totals and the three report series."
)
def get_report_summary(
    now: Optional[datetime] = _NOW_QUERY,
    source: SaleRecordSource = Depends(get_sale_source),
    settings: Settings = Depends(get_settings),
):
    """
    **Series:**
    - `daily_trend`: last 7 days, oldest first
    - `weekly_distribution`: Sun..Sat over the trailing 7 days
    - `monthly_breakdown`: last 6 months, oldest first

    `charts` holds the same series with zero buckets raised to a small floor
    value so they remain visible when plotted.
    """
    def _entries(entries):
        return [ReportEntryResponse(label=e.label, amount=e.amount) for e in entries]

    try:
        report = _load_report(source, now, settings)
        aggregate = report.aggregate

        return ReportSummaryResponse(
            generated_at=report.generated_at,
            sale_count=report.sale_count,
            daily_total=aggregate.daily_total,
            weekly_total=aggregate.weekly_total,
            monthly_total=aggregate.monthly_total,
            daily_trend=_entries(aggregate.daily_trend),
            weekly_distribution=_entries(aggregate.weekly_distribution),
            monthly_breakdown=_entries(aggregate.monthly_breakdown),
            charts=[
                ChartSeriesResponse(title=s.title, labels=list(s.labels), values=list(s.values))
                for s in chart_series(aggregate).values()
            ],
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Report summary failed")
        raise HTTPException(status_code=500, detail=f"Failed to build report: {str(e)}")


@router.get("/reports/dashboard", response_model=DashboardResponse, summary="Today's Stats")
def get_dashboard(
    now: Optional[datetime] = _NOW_QUERY,
    source: SaleRecordSource = Depends(get_sale_source),
    settings: Settings = Depends(get_settings),
):
    try:
        stats = build_dashboard_stats(source, now=now, tz=settings.tz)
    except SaleFetchError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        logger.exception("Dashboard stats failed")
        raise HTTPException(status_code=500, detail=f"Failed to build dashboard stats: {str(e)}")
    return DashboardResponse(total_sales=stats.total_sales, order_count=stats.order_count)


@router.get("/reports/html", response_class=HTMLResponse, summary="HTML Report")
def get_report_html(
    now: Optional[datetime] = _NOW_QUERY,
    source: SaleRecordSource = Depends(get_sale_source),
    settings: Settings = Depends(get_settings),
):
    try:
        report = _load_report(source, now, settings)
        artifact = build_html_artifact(report, settings)
        return HTMLResponse(content=artifact.content.decode("utf-8"))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("HTML rendering failed")
        raise HTTPException(status_code=500, detail=f"Failed to generate HTML report: {str(e)}")


@router.get(
    "/reports/pdf",
    summary="Download PDF Report",
    description="Printable sales report, named after the generation date and time.",
    response_class=Response
)
def download_report_pdf(
    now: Optional[datetime] = _NOW_QUERY,
    source: SaleRecordSource = Depends(get_sale_source),
    settings: Settings = Depends(get_settings),
):
    """
    **Response:**
    PDF file download with filename: `vetra-sales-report-MM-DD-YYYY-HH-MM.pdf`
    """
    try:
        report = _load_report(source, now, settings)
        artifact = build_pdf_artifact(report, settings)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("PDF rendering failed")
        raise HTTPException(status_code=500, detail=f"Failed to generate PDF report: {str(e)}")

    return Response(
        content=artifact.content,
        media_type=artifact.mime_type,
        headers={"Content-Disposition": artifact.content_disposition}
    )
