import re
from collections import Counter
from datetime import datetime
from typing import Optional

from core.contracts.models import CommitRecord, CommitStats
from core.history.language import detect_language
from core.history.parser import parse_conventional_subject
from core.history.tickets import has_ticket
from core.history.trends import analyze_trends

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

_FIRST_WORD = re.compile(r"^(\w+)", re.ASCII)


class CommitStatsAggregator:
    """
    Accumulates commit records into the distributions of a CommitStats.

    Feed records with `add` in log order, then call `build`. Each aggregator
    owns its counters; create a new one per batch.
    """

    def __init__(self):
        self.total = 0
        self.types: Counter = Counter()
        self.scopes: Counter = Counter()
        self.authors: Counter = Counter()
        self.verbs: Counter = Counter()
        self.languages: Counter = Counter()
        self.hours: Counter = Counter()
        self.weekdays: Counter = Counter()
        self.days: Counter = Counter()
        self.total_subject_length = 0
        self.longest: Optional[str] = None
        self.shortest: Optional[str] = None
        self.with_scope = 0
        self.with_body = 0
        self.with_ticket = 0

    def add_unparsed(self) -> None:
        """Counts a record that was too short to parse. It only affects the total."""
        self.total += 1

    def add(self, record: CommitRecord) -> None:
        subject = record.subject
        self.total += 1
        self.authors[record.author] += 1

        # Strict comparisons: the first subject of a given length wins ties.
        self.total_subject_length += len(subject)
        if self.longest is None or len(subject) > len(self.longest):
            self.longest = subject
        if self.shortest is None or len(subject) < len(self.shortest):
            self.shortest = subject

        if record.timestamp is not None:
            self._add_timestamp(record.timestamp)

        conventional = parse_conventional_subject(subject)
        if conventional:
            self.types[conventional.type] += 1
            if conventional.scope:
                self.scopes[conventional.scope] += 1
                self.with_scope += 1
            verb = _FIRST_WORD.match(conventional.message)
            if verb:
                self.verbs[verb.group(1).lower()] += 1

        if record.body.strip():
            self.with_body += 1
        if has_ticket(subject):
            self.with_ticket += 1

        self.languages[detect_language(subject)] += 1

    def _add_timestamp(self, timestamp: datetime) -> None:
        self.hours[f"{timestamp.hour:02d}:00"] += 1
        self.weekdays[WEEKDAYS[timestamp.weekday()]] += 1
        self.days[timestamp.date()] += 1

    def build(self, now: Optional[datetime] = None) -> CommitStats:
        return CommitStats(
            total_commits=self.total,
            type_distribution=dict(self.types),
            scope_distribution=dict(self.scopes),
            author_distribution=dict(self.authors),
            verb_distribution=dict(self.verbs),
            language_distribution=dict(self.languages),
            hour_distribution=dict(self.hours),
            weekday_distribution=dict(self.weekdays),
            # Unparsed records count in the denominator too
            average_subject_length=self.total_subject_length // self.total if self.total else 0,
            longest_subject=self.longest or "",
            shortest_subject=self.shortest or "",
            with_scope=self.with_scope,
            with_body=self.with_body,
            with_ticket=self.with_ticket,
            recent_trends=analyze_trends(self.days, now),
        )
