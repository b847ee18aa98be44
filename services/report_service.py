"""
Report service.

Outermost caller of the aggregation: fetches the sale history from a source
and runs the pure aggregation over it. This is the only place where "now"
defaults to the current wall-clock time.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Optional

from domain.report import DailyStats, ReportAggregate, aggregate_sales, daily_stats
from domain.time import to_wall_clock
from services.sale_source import SaleRecordSource


@dataclass(frozen=True, slots=True)
class Report:
    """An aggregate together with the wall-clock time it was computed for."""

    aggregate: ReportAggregate
    generated_at: datetime
    sale_count: int


def resolve_now(now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> datetime:
    """
    Wall-clock "now" for reporting.

    Aware values are converted to `tz` (system local zone when None); a missing
    value means the current time.
    """

    if now is None:
        return datetime.now(tz).replace(tzinfo=None)
    return to_wall_clock(now, tz)


def build_report(
    source: SaleRecordSource,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> Report:
    """
    Fetch the complete sale history and aggregate it.

    Raises:
        SaleFetchError: If the source could not deliver the sale history
    """

    generated_at = resolve_now(now, tz)
    sales = source.fetch_sales()
    return Report(
        aggregate=aggregate_sales(sales, generated_at, tz=tz),
        generated_at=generated_at,
        sale_count=len(sales),
    )


def build_dashboard_stats(
    source: SaleRecordSource,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> DailyStats:
    """Today's revenue and order count for the home screen."""

    return daily_stats(source.fetch_sales(), resolve_now(now, tz))


__all__ = ["Report", "resolve_now", "build_report", "build_dashboard_stats"]
