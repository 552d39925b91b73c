from core.contracts.models import DiffAnalysisResult
from core.diff.budgeter import build_smart_diff
from core.diff.complexity import classify_complexity, is_large_change
from core.diff.extractors import extract_import_changes
from core.diff.file_analyzer import analyze_file_diff
from core.diff.splitter import split_diff_by_file
from utils.logger import logger


def analyze_diff(full_diff: str, max_length: int) -> DiffAnalysisResult:
    """
    Analyzes a unified diff and renders it within a byte budget.

    Args:
        full_diff: The raw output of `git diff`. May be empty.
        max_length: Byte budget for the smart diff.

    Returns:
        The per-file summaries, totals, complexity and smart diff of the change set.

    Raises:
        ValueError: If `full_diff` or `max_length` is missing, or the budget is negative.
    """
    if full_diff is None:
        raise ValueError("full_diff must be a string, got None.")
    if max_length is None or max_length < 0:
        raise ValueError(f"max_length must be a non-negative integer, got {max_length!r}.")

    if not full_diff:
        return DiffAnalysisResult()

    file_diffs = split_diff_by_file(full_diff)
    summaries = []
    key_changes = []
    import_changes = []
    for file_diff in file_diffs:
        summary = analyze_file_diff(file_diff)
        summaries.append(summary)
        key_changes.extend(summary.key_changes)
        import_changes.extend(extract_import_changes(file_diff))

    total_additions = sum(s.additions for s in summaries)
    total_deletions = sum(s.deletions for s in summaries)
    changed_lines = total_additions + total_deletions
    logger.debug(f"Analyzed {len(summaries)} files: +{total_additions}/-{total_deletions}")

    return DiffAnalysisResult(
        file_summaries=summaries,
        smart_diff=build_smart_diff(full_diff, file_diffs, summaries, import_changes, max_length),
        total_additions=total_additions,
        total_deletions=total_deletions,
        modified_files=len(summaries),
        key_changes=key_changes,
        import_changes=import_changes,
        complexity=classify_complexity(changed_lines, len(summaries)),
        is_large_change=is_large_change(changed_lines),
    )
