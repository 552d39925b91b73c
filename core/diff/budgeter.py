"""
Budget-constrained rendering of a large diff.

When the raw diff is larger than the byte budget, the output is rebuilt as a
summary of every file followed by hunks from the most relevant files. The
budget is soft: each file gets an advisory share of what is left, and the walk
stops once less than MIN_REMAINING bytes remain, but the result may still end
up somewhat longer than the budget.
"""
from typing import List, Sequence

from core.contracts.models import FileSummary
from utils.text import byte_len

MIN_REMAINING = 500
MAX_CONTEXT_LINES = 3
HEADER_SCAN_LINES = 10
HEADER_PREFIXES = ("diff ", "index ", "---", "+++")


class _TextBuffer:
    """Accumulates text and tracks its UTF-8 size."""

    def __init__(self):
        self._parts: List[str] = []
        self._size = 0

    def write(self, text: str) -> None:
        self._parts.append(text)
        self._size += byte_len(text)

    def __len__(self) -> int:
        return self._size

    def getvalue(self) -> str:
        return "".join(self._parts)


def _priority(item):
    summary = item[0]
    return (summary.is_test_file, summary.is_config_file, -summary.changed_lines)


def extract_important_chunks(file_diff: str, max_chunk_length: int) -> str:
    """
    Returns the header lines and hunks of one file diff, eliding long runs of context.

    Hunk collection stops once the chunk would exceed `max_chunk_length` bytes.
    """
    lines = file_diff.split("\n")
    buf = _TextBuffer()

    for line in lines[:HEADER_SCAN_LINES]:
        if line.startswith(HEADER_PREFIXES):
            buf.write(line + "\n")

    in_hunk = False
    hunk: List[str] = []
    hunk_size = 0
    context_lines = 0

    for line in lines:
        if line.startswith("@@"):
            if hunk:
                buf.write("\n".join(hunk) + "\n")
            hunk = [line]
            hunk_size = byte_len(line)
            in_hunk = True
            context_lines = 0
            continue

        if not in_hunk:
            continue

        if not line.startswith(("+", "-")):
            context_lines += 1
            if context_lines > MAX_CONTEXT_LINES:
                continue
        else:
            context_lines = 0

        hunk.append(line)
        hunk_size += byte_len(line) + 1

        if len(buf) + hunk_size > max_chunk_length:
            break

    if hunk and len(buf) < max_chunk_length:
        buf.write("\n".join(hunk) + "\n")

    return buf.getvalue()


def build_smart_diff(
    full_diff: str,
    file_diffs: Sequence[str],
    summaries: Sequence[FileSummary],
    import_changes: Sequence[str],
    max_length: int,
) -> str:
    """
    Returns `full_diff` unchanged if it fits in `max_length` bytes, else a prioritized digest.

    `file_diffs` and `summaries` are parallel sequences in diff order.
    """
    if byte_len(full_diff) <= max_length:
        return full_diff

    total_additions = sum(s.additions for s in summaries)
    total_deletions = sum(s.deletions for s in summaries)

    buf = _TextBuffer()
    buf.write(f"DIFF SUMMARY ({len(summaries)} files, +{total_additions}/-{total_deletions} lines)\n")
    buf.write("=" * 60 + "\n\n")

    for summary in summaries:
        buf.write(f"📄 {summary.path} [{summary.status}] +{summary.additions}/-{summary.deletions}\n")
        if summary.key_changes:
            buf.write(f"   Key changes: {', '.join(summary.key_changes)}\n")
    buf.write("\n")

    if import_changes:
        buf.write("📦 Import changes:\n")
        for imp in import_changes:
            buf.write(f"   {imp}\n")
        buf.write("\n")

    remaining = max_length - len(buf)
    buf.write("SELECTED DIFF CHUNKS:\n")
    buf.write("-" * 60 + "\n\n")

    ranked = sorted(zip(summaries, file_diffs), key=_priority)
    for i, (_, file_diff) in enumerate(ranked):
        chunk = extract_important_chunks(file_diff, remaining // max(len(ranked) - i, 1))
        if chunk:
            buf.write(chunk)
            buf.write("\n")
            remaining -= byte_len(chunk)

        if remaining < MIN_REMAINING:
            break

    buf.write(f"\n... (diff truncated: {len(buf)}/{byte_len(full_diff)} bytes shown)\n")
    return buf.getvalue()
