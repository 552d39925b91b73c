from datetime import datetime
from typing import Iterable, Optional

from core.contracts.models import CommitStats
from core.history.aggregator import CommitStatsAggregator
from core.history.parser import parse_commit_record
from utils.logger import logger


def analyze_commit_history(records: Iterable[str], now: Optional[datetime] = None) -> CommitStats:
    """
    Builds commit statistics from raw pipe-delimited log records.

    Every non-blank record counts toward `total_commits`. Records with too few
    fields add nothing else. Records with an unparseable date still count toward
    subject, author and type statistics.

    Args:
        records: Raw records in log order (newest first, as git prints them).
        now: Reference time for trend windows. Defaults to the current UTC time.

    Raises:
        ValueError: If `records` is None.
    """
    if records is None:
        raise ValueError("records must be an iterable of strings, got None.")

    aggregator = CommitStatsAggregator()
    skipped = 0
    for raw in records:
        if not raw.strip():
            continue
        record = parse_commit_record(raw)
        if record is None:
            skipped += 1
            aggregator.add_unparsed()
            continue
        aggregator.add(record)

    if skipped:
        logger.debug(f"Counted {skipped} malformed log records without statistics")
    return aggregator.build(now)
