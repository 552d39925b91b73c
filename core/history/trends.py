from datetime import date, datetime, time, timedelta, timezone
from typing import Mapping, Optional

from core.contracts.models import TrendAnalysis

WINDOW_DAYS = 30
WEEK_DAYS = 7


def _as_utc(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def analyze_trends(day_counts: Mapping[date, int], now: Optional[datetime] = None) -> Optional[TrendAnalysis]:
    """
    Summarizes commit activity over the last 30 and 7 days.

    A day counts toward a window when its midnight (UTC) lies strictly after
    `now` minus the window length. The most active day is the one with the
    highest count, the earliest such day on ties.

    Returns:
        None when `day_counts` is empty.
    """
    if not day_counts:
        return None

    now = _as_utc(now)
    month_start = now - timedelta(days=WINDOW_DAYS)
    week_start = now - timedelta(days=WEEK_DAYS)

    total_30 = 0
    total_7 = 0
    most_active: Optional[date] = None
    max_count = 0
    for day in sorted(day_counts):
        count = day_counts[day]
        midnight = datetime.combine(day, time.min, tzinfo=timezone.utc)
        if midnight > month_start:
            total_30 += count
        if midnight > week_start:
            total_7 += count
        if count > max_count:
            max_count = count
            most_active = day

    return TrendAnalysis(
        last_30_days=total_30,
        last_7_days=total_7,
        most_active_day=most_active.isoformat() if most_active else "",
        average_per_day=total_30 / float(WINDOW_DAYS),
    )
