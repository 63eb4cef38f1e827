"""History filtering by time window.

Custom-range bounds may be dates or YYYY-MM-DD text; text bounds are
parsed before comparing, so "2024-3-1" means 1 March 2024.
"""

from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Union

from tradejournal.analytics.stats import aggregate
from tradejournal.models import HistorySummary, TradeRecord

FILTER_TYPES: tuple[str, ...] = ("all", "today", "week", "month", "year", "custom")

DateLike = Union[date, str, None]


def parse_bound(value: DateLike) -> Optional[date]:
    """Parse a custom-range bound. Empty values mean an open bound.

    Raises:
        ValueError: If text is not a YYYY-MM-DD date.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = value.strip()
    if not text:
        return None
    try:
        return datetime.strptime(text, "%Y-%m-%d").date()
    except ValueError as e:
        raise ValueError(f"Invalid date {value!r}, expected YYYY-MM-DD") from e


def week_bounds(now: datetime) -> tuple[date, date]:
    """Get the Sunday-Saturday week containing ``now``.

    Both boundaries derive from the same instant.

    Returns:
        Tuple of (sunday, saturday).
    """
    today = now.date()
    # weekday(): Monday=0 .. Sunday=6
    start = today - timedelta(days=(today.weekday() + 1) % 7)
    return start, start + timedelta(days=6)


def filter_records(
    records: Iterable[TradeRecord],
    filter_type: str = "all",
    start: DateLike = None,
    end: DateLike = None,
    now: Optional[datetime] = None,
) -> list[TradeRecord]:
    """Select the records that fall in a time window.

    Args:
        records: Trade records; relative order is preserved.
        filter_type: One of all, today, week, month, year, custom.
        start: Inclusive start date for custom (open if None).
        end: Inclusive end date for custom (open if None).
        now: Reference moment. Defaults to the current moment.

    Returns:
        Filtered list of records.

    Raises:
        ValueError: If filter_type is unknown or a custom bound is not a
            YYYY-MM-DD date.
    """
    if filter_type not in FILTER_TYPES:
        raise ValueError(
            f"Unknown filter {filter_type!r}, expected one of {', '.join(FILTER_TYPES)}"
        )

    records = list(records)
    if filter_type == "all":
        return records

    if now is None:
        now = datetime.now()
    today = now.date()

    if filter_type == "today":
        today_text = today.isoformat()
        return [r for r in records if r.date.isoformat() == today_text]

    if filter_type == "week":
        week_start, week_end = week_bounds(now)
        return [r for r in records if week_start <= r.date <= week_end]

    if filter_type == "month":
        return [
            r for r in records
            if r.date.year == today.year and r.date.month == today.month
        ]

    if filter_type == "year":
        return [r for r in records if r.date.year == today.year]

    start_date = parse_bound(start)
    end_date = parse_bound(end)
    return [
        r for r in records
        if (start_date is None or r.date >= start_date)
        and (end_date is None or r.date <= end_date)
    ]


def summarize(records: Iterable[TradeRecord]) -> HistorySummary:
    """Net PnL, win rate and count of a (filtered) set of records."""
    summary = aggregate(records, initial_balance=0.0)
    return HistorySummary(
        total_pnl=summary.total_pnl,
        win_rate=summary.win_rate,
        total_trades=summary.total_trades,
    )


def filtered_summary(
    records: Iterable[TradeRecord],
    filter_type: str = "all",
    start: DateLike = None,
    end: DateLike = None,
    now: Optional[datetime] = None,
) -> tuple[list[TradeRecord], HistorySummary]:
    """Filter records and summarize the selection.

    Returns:
        Tuple of (filtered records, summary).
    """
    selected = filter_records(records, filter_type, start, end, now)
    return selected, summarize(selected)
