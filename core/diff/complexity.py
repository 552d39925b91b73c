from core.contracts.models import Complexity

LARGE_CHANGE_LINES = 500
COMPLEX_FILES = 10
MODERATE_LINES = 100
MODERATE_FILES = 3


def classify_complexity(changed_lines: int, file_count: int) -> Complexity:
    """Rates a change set as simple, moderate or complex from its size."""
    if changed_lines > LARGE_CHANGE_LINES or file_count > COMPLEX_FILES:
        return "complex"
    if changed_lines > MODERATE_LINES or file_count > MODERATE_FILES:
        return "moderate"
    return "simple"


def is_large_change(changed_lines: int) -> bool:
    return changed_lines > LARGE_CHANGE_LINES
