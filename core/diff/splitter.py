import re
from typing import List

from core.diff.classifier import DIFF_HEADER

_HEADER_RE = re.compile(r"^" + re.escape(DIFF_HEADER), re.MULTILINE)


def split_diff_by_file(diff: str) -> List[str]:
    """
    Splits a full unified diff into one blob per file.

    Every blob after the first split point starts with the "diff --git" marker.
    Text before the first marker is kept as its own blob unless it is empty.
    """
    parts = _HEADER_RE.split(diff)
    files = []
    for i, part in enumerate(parts):
        if i == 0:
            if part == "":
                continue
            files.append(part)
        else:
            files.append(DIFF_HEADER + part)
    return files
