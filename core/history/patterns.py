from typing import List, Mapping

from core.contracts.models import CommitPattern, CommitStats


def _ranked(distribution: Mapping[str, int]) -> List[str]:
    # Highest count first, then alphabetical.
    return sorted(distribution, key=lambda key: (-distribution[key], key))


def get_top_patterns(stats: CommitStats, top_n: int) -> List[CommitPattern]:
    """
    Returns the `top_n` most frequent commit types as patterns.

    Every pattern carries the most frequent scope of the whole history, not the
    most frequent scope of its own type.
    """
    if top_n is None or top_n < 0:
        raise ValueError(f"top_n must be a non-negative integer, got {top_n!r}.")

    scopes = _ranked(stats.scope_distribution)
    scope = scopes[0] if scopes else ""
    return [
        CommitPattern(type=commit_type, scope=scope, frequency=stats.type_distribution[commit_type])
        for commit_type in _ranked(stats.type_distribution)[:top_n]
    ]
