from core.contracts.models import FileSummary
from core.diff import classifier
from core.diff.classifier import DIFF_HEADER
from core.diff.extractors import extract_key_changes

# Checked in this order; the first marker found in a blob decides the status.
STATUS_MARKERS = (
    ("new file", "added"),
    ("deleted file", "deleted"),
    ("rename from", "renamed"),
)


def _path_from_header(line: str) -> str:
    # diff --git a/<path> b/<path>; paths may contain spaces
    _, separator, path = line[len(DIFF_HEADER):].rpartition(" b/")
    return path.rstrip() if separator else ""


def analyze_file_diff(file_diff: str) -> FileSummary:
    """Builds the FileSummary of one per-file diff blob in a single pass over its lines."""
    path = ""
    status = ""
    has_file_headers = False
    additions = 0
    deletions = 0

    for line in file_diff.split("\n"):
        if line.startswith(DIFF_HEADER):
            if not path:
                path = _path_from_header(line)
        elif line.startswith("+++") or line.startswith("---"):
            has_file_headers = True
        elif not status:
            for marker, marker_status in STATUS_MARKERS:
                if line.startswith(marker):
                    status = marker_status
                    break

        if classifier.is_addition(line):
            additions += 1
        elif classifier.is_deletion(line):
            deletions += 1

    if not status and has_file_headers:
        status = "modified"

    file_type = classifier.file_type(path)
    return FileSummary(
        path=path,
        status=status,
        additions=additions,
        deletions=deletions,
        file_type=file_type,
        is_test_file=classifier.is_test_file(path),
        is_config_file=classifier.is_config_file(path),
        key_changes=extract_key_changes(file_diff, file_type),
    )
