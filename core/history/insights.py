from typing import List

from core.contracts.models import CommitStats


def _share(count: int, total: int) -> float:
    return count / total * 100 if total else 0.0


def build_insights(stats: CommitStats) -> List[str]:
    """Returns recommendations about commit message habits. Empty when there are no commits."""
    if stats.total_commits == 0:
        return []

    insights = []
    if stats.average_subject_length > 72:
        insights.append("⚠️  Your average subject line is quite long (>72 chars). "
                        "Consider using shorter, more concise subjects.")
    elif stats.average_subject_length < 30:
        insights.append("ℹ️  Your subject lines are very brief (<30 chars). "
                        "Consider adding more context when helpful.")

    if _share(stats.with_scope, stats.total_commits) < 20:
        insights.append("💡 You rarely use scopes in commits (<20%). "
                        "Scopes help organize changes by component/module.")

    if _share(stats.with_body, stats.total_commits) < 10:
        insights.append("💡 Most commits have no body (<10%). "
                        "Consider adding details for non-trivial changes.")

    trends = stats.recent_trends
    if trends is not None:
        if trends.average_per_day > 10:
            insights.append("🔥 Very high commit frequency (>10/day avg). "
                            "Consider squashing related commits.")
        elif trends.average_per_day < 1:
            insights.append("📉 Low commit frequency (<1/day avg). "
                            "Consider committing more frequently.")

    if len(stats.type_distribution) < 3:
        insights.append("ℹ️  Limited commit type variety. "
                        "Explore other types: docs, test, refactor, perf, etc.")
    return insights
