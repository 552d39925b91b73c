"""Ticket references in commit subjects and branch names."""
import re
from typing import Optional

from utils.logger import logger

# [ABC-123], [hotfix] or a bare ABC-123
SUBJECT_TICKET = re.compile(r"\[([\w-]+)\]|\b([A-Z]+-\d+)\b", re.ASCII)

BRANCH_TICKET_PATTERNS = (
    re.compile(r"[A-Z]+-\d+"),      # PROJ-123
    re.compile(r"[A-Z]{2,}-\d+"),   # ABC-123
    re.compile(r"#\d+"),            # #123
    re.compile(r"GH-\d+"),          # GH-123
    re.compile(r"[A-Z]+_\d+"),      # PROJ_123
)

_DIGITS = re.compile(r"^\d+$")


def has_ticket(subject: str) -> bool:
    return SUBJECT_TICKET.search(subject) is not None


def extract_ticket_from_branch(branch_name: str, pattern: Optional[str] = None) -> str:
    """
    Finds a ticket id such as PROJ-123 or #42 in a branch name.

    A custom `pattern` is tried first; an invalid pattern is logged and ignored.
    Returns an empty string when nothing matches.
    """
    if not branch_name:
        return ""

    if pattern:
        try:
            match = re.search(pattern, branch_name)
        except re.error as e:
            logger.warning(f"Invalid ticket pattern {pattern!r}: {e}")
        else:
            if match:
                return match.group(0)

    for default in BRANCH_TICKET_PATTERNS:
        match = default.search(branch_name)
        if match:
            return match.group(0)
    return ""


def format_ticket_number(ticket: str, prefix: Optional[str] = None) -> str:
    """Prefixes a bare ticket number, e.g. ('123', 'PROJ') -> 'PROJ-123'."""
    ticket = ticket.strip()
    if not ticket:
        return ""
    if "-" in ticket or "#" in ticket:
        return ticket
    if prefix and _DIGITS.match(ticket):
        return f"{prefix}-{ticket}"
    return ticket
