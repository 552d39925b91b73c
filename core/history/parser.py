"""
Parsing of raw `git log` records.

A record holds five pipe-delimited fields, as produced by
``--pretty=format:%H|%an|%s|%b|%ad --date=iso``::

    <hash>|<author>|<subject>|<body>|<YYYY-MM-DD HH:MM:SS +ZZZZ>
"""
import re
from datetime import datetime
from typing import NamedTuple, Optional

from core.contracts.models import CommitRecord

FIELD_DELIMITER = "|"
MIN_FIELDS = 5
DATE_FORMAT = "%Y-%m-%d %H:%M:%S %z"

# type(scope): message, scope optional
CONVENTIONAL_SUBJECT = re.compile(r"^(\w+)(?:\(([^)]+)\))?:\s*(.+)$", re.ASCII)


class ConventionalSubject(NamedTuple):
    type: str
    scope: str
    message: str


def parse_commit_date(value: str) -> Optional[datetime]:
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT)
    except ValueError:
        return None


def parse_commit_record(record: str) -> Optional[CommitRecord]:
    """
    Parses one raw log record.

    Returns None for records with fewer than five fields. The date is taken
    from the last field, so a body containing the delimiter stays intact.
    An unparseable date leaves `timestamp` unset.
    """
    parts = record.split(FIELD_DELIMITER)
    if len(parts) < MIN_FIELDS:
        return None

    return CommitRecord(
        hash=parts[0],
        author=parts[1],
        subject=parts[2],
        body=FIELD_DELIMITER.join(parts[3:-1]),
        timestamp=parse_commit_date(parts[-1]),
    )


def parse_conventional_subject(subject: str) -> Optional[ConventionalSubject]:
    """Splits `type(scope): message` into its literal parts; scope is '' when absent."""
    match = CONVENTIONAL_SUBJECT.match(subject)
    if not match:
        return None
    return ConventionalSubject(match.group(1), match.group(2) or "", match.group(3))
