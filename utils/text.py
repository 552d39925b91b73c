"""Small text helpers shared by the diff and history engines."""
from typing import Iterable, List


def unique_strings(items: Iterable[str]) -> List[str]:
    """Drops empty strings and duplicates, keeping first occurrences in order."""
    seen = set()
    result = []
    for item in items:
        if item and item not in seen:
            seen.add(item)
            result.append(item)
    return result


def truncate_string(s: str, max_len: int) -> str:
    """Cuts `s` to `max_len` characters and marks the cut with '...'."""
    if len(s) <= max_len:
        return s
    return s[:max_len] + "..."


def shorten(s: str, max_len: int) -> str:
    """Like truncate_string, but the result including '...' fits in `max_len`."""
    if len(s) <= max_len:
        return s
    return s[:max_len - 3] + "..."


def byte_len(s: str) -> int:
    """Length of `s` in UTF-8 bytes."""
    return len(s.encode("utf-8"))
