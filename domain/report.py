"""
Domain: Sales report aggregation (pure).

Turns the complete list of sale records into three summary totals and three
time-bucketed series. Everything is recomputed from scratch on every call;
there is no caching and no incremental update.

Contract excerpts implemented here:
- today      = now truncated to midnight (local wall-clock)
- week_ago   = today - 604,800 elapsed seconds (in the shop's zone, so across
               a DST change it lands an hour off midnight)
- month_ago  = today shifted back one calendar month (day clamped)
- daily_total   : sold_at >= today
- weekly_total  : sold_at >= week_ago
- monthly_total : sold_at >= month_ago
- daily_trend        : 7 day buckets [day_start, day_end), oldest first
- weekly_distribution: Sun..Sat, only sales with sold_at >= week_ago
- monthly_breakdown  : 6 month buckets [month_start, month_end], oldest first,
                       where month_end is midnight starting the month's last day

The daily bucket is end-exclusive and the monthly bucket is end-inclusive.
Both comparisons are intentional and must stay as they are.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from .sale import SaleRecord
from .time import (
    WEEKDAY_ABBREVIATIONS,
    add_months,
    last_day_of_month,
    month_abbreviation,
    month_start,
    require_wall_clock_timestamp,
    start_of_day,
    to_wall_clock,
    wall_clock_to_utc,
    weekday_abbreviation,
)

WEEK_WINDOW = timedelta(seconds=7 * 24 * 60 * 60)
TREND_DAYS = 7
BREAKDOWN_MONTHS = 6


@dataclass(frozen=True, slots=True)
class ReportEntry:
    """A labeled amount in one of the report series."""

    label: str
    amount: float


@dataclass(frozen=True, slots=True)
class ReportAggregate:
    """
    Derived summary of a sale history at a point in time.

    Owned by whoever requested it; never persisted.
    """

    daily_total: float
    weekly_total: float
    monthly_total: float
    daily_trend: Tuple[ReportEntry, ...]
    weekly_distribution: Tuple[ReportEntry, ...]
    monthly_breakdown: Tuple[ReportEntry, ...]

    def as_dict(self) -> Dict[str, object]:
        def _series(entries: Iterable[ReportEntry]) -> List[Dict[str, object]]:
            return [{"label": e.label, "amount": e.amount} for e in entries]

        return {
            "daily_total": self.daily_total,
            "weekly_total": self.weekly_total,
            "monthly_total": self.monthly_total,
            "daily_trend": _series(self.daily_trend),
            "weekly_distribution": _series(self.weekly_distribution),
            "monthly_breakdown": _series(self.monthly_breakdown),
        }


@dataclass(frozen=True, slots=True)
class DailyStats:
    """Today's revenue and number of orders (home dashboard)."""

    total_sales: float
    order_count: int


def _sum_where(sales: Sequence[SaleRecord], predicate: Callable[[datetime], bool]) -> float:
    total = 0.0
    for sale in sales:
        if predicate(sale.sold_at):
            total += sale.total_amount
    return total


def _daily_trend(sales: Sequence[SaleRecord], today: datetime) -> Tuple[ReportEntry, ...]:
    entries: List[ReportEntry] = []
    for i in range(TREND_DAYS):
        day_start = today - timedelta(days=i)
        day_end = day_start + timedelta(days=1)
        amount = _sum_where(sales, lambda ts: day_start <= ts < day_end)
        entries.append(ReportEntry(label=weekday_abbreviation(day_start), amount=amount))
    entries.reverse()
    return tuple(entries)


def _weekly_distribution(sales: Sequence[SaleRecord], week_ago: datetime) -> Tuple[ReportEntry, ...]:
    return tuple(
        ReportEntry(
            label=day,
            amount=_sum_where(
                sales,
                lambda ts: ts >= week_ago and weekday_abbreviation(ts) == day,
            ),
        )
        for day in WEEKDAY_ABBREVIATIONS
    )


def _monthly_breakdown(sales: Sequence[SaleRecord], today: datetime) -> Tuple[ReportEntry, ...]:
    entries: List[ReportEntry] = []
    for i in range(BREAKDOWN_MONTHS):
        start = month_start(today, months_back=i)
        end = last_day_of_month(start)
        amount = _sum_where(sales, lambda ts: start <= ts <= end)
        entries.append(ReportEntry(label=month_abbreviation(start), amount=amount))
    entries.reverse()
    return tuple(entries)


def week_start(today: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """
    Wall-clock time exactly WEEK_WINDOW of elapsed time before `today`.

    With a zone the subtraction happens on the UTC timeline, so it does not
    snap to midnight when the week spans a DST change. Without one the
    wall-clock values are treated as a fixed-offset timeline.
    """

    if tz is None:
        return today - WEEK_WINDOW
    return to_wall_clock(wall_clock_to_utc(today, tz) - WEEK_WINDOW, tz)


def aggregate_sales(
    sales: Iterable[SaleRecord],
    now: datetime,
    tz: Optional[tzinfo] = None,
) -> ReportAggregate:
    """
    Build a ReportAggregate from the complete sale history.

    Args:
        sales: Every sale record for the shop, in any order
        now: Local wall-clock time to report against (timezone-naive)
        tz: Zone the wall-clock times belong to; only affects week_ago

    Returns:
        ReportAggregate with totals and zero-filled series (7, 7, 6 entries)

    Example:
        aggregate = aggregate_sales(sales, now=datetime(2024, 3, 15, 10, 0))
        aggregate.daily_total  # revenue since 2024-03-15 00:00
    """

    require_wall_clock_timestamp("now", now)
    records = list(sales)

    today = start_of_day(now)
    week_ago = week_start(today, tz)
    month_ago = add_months(today, -1)

    return ReportAggregate(
        daily_total=_sum_where(records, lambda ts: ts >= today),
        weekly_total=_sum_where(records, lambda ts: ts >= week_ago),
        monthly_total=_sum_where(records, lambda ts: ts >= month_ago),
        daily_trend=_daily_trend(records, today),
        weekly_distribution=_weekly_distribution(records, week_ago),
        monthly_breakdown=_monthly_breakdown(records, today),
    )


def daily_stats(sales: Iterable[SaleRecord], now: datetime) -> DailyStats:
    """Revenue and order count for sales recorded since midnight of `now`."""

    require_wall_clock_timestamp("now", now)
    today = start_of_day(now)
    todays = [sale for sale in sales if sale.sold_at >= today]
    return DailyStats(
        total_sales=sum((sale.total_amount for sale in todays), 0.0),
        order_count=len(todays),
    )


__all__ = [
    "WEEK_WINDOW",
    "week_start",
    "ReportEntry",
    "ReportAggregate",
    "DailyStats",
    "aggregate_sales",
    "daily_stats",
]
