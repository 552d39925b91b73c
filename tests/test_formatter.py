import tempfile
import unittest
from datetime import datetime, timezone
from pathlib import Path

from core.diff.engine import analyze_diff
from core.formatter.jinja_formatter import Jinja2Formatter, bar, by_count, percent
from core.history.engine import analyze_commit_history
from core.history.insights import build_insights
from core.history.patterns import get_top_patterns
from utils.errors import FormatterError

DIFF = """diff --git a/src/auth.go b/src/auth.go
index 1234567..89abcde 100644
--- a/src/auth.go
+++ b/src/auth.go
@@ -1,1 +1,2 @@
-panic(1)
+func Login() error {
+return nil
"""

LOG_RECORDS = [
    "h1|alice|feat(api): add login|adds the endpoint|2024-01-01 10:00:00 +0000",
    "h2|bob|feat(api): add logout||2024-01-02 11:00:00 +0000",
    "h3|alice|fix: typo||2024-01-02 11:30:00 +0000",
]


class TestFilters(unittest.TestCase):

    def test_percent(self):
        self.assertEqual(percent(1, 4), 25.0)
        self.assertEqual(percent(3, 0), 0.0)

    def test_bar(self):
        self.assertEqual(bar(50, 10), "[█████░░░░░]")
        self.assertEqual(bar(0, 4), "[░░░░]")
        self.assertEqual(bar(150, 4), "[████]")

    def test_by_count(self):
        distribution = {"b": 2, "a": 2, "c": 5}
        self.assertEqual(by_count(distribution), [("c", 5), ("a", 2), ("b", 2)])
        self.assertEqual(by_count(distribution, 1), [("c", 5)])


class TestJinja2Formatter(unittest.TestCase):
    def setUp(self):
        self.formatter = Jinja2Formatter()
        self.diff = analyze_diff(DIFF, 8000)
        self.stats = analyze_commit_history(LOG_RECORDS, now=datetime(2024, 1, 10, tzinfo=timezone.utc))

    def render_prompt(self, **overrides):
        context = dict(
            diff=self.diff,
            branch="feature/PROJ-1-login",
            ticket="PROJ-1",
            recent_subjects=["feat(api): add login"],
            commit_type=None,
            scope=None,
            language="en",
            max_subject_len=72,
            detailed=False,
        )
        context.update(overrides)
        return self.formatter.render("commit_prompt.j2", **context)

    def test_render_stats_report(self):
        report = self.formatter.render(
            "stats_report.j2",
            stats=self.stats,
            patterns=get_top_patterns(self.stats, 3),
            insights=build_insights(self.stats),
        )

        self.assertIn("Total Commits: 3", report)
        self.assertIn("With Scope: 2 (66.7%)", report)
        self.assertIn("With Body: 1 (33.3%)", report)
        self.assertIn("💡 Your Top Commit Patterns:", report)
        self.assertIn("  1. feat(api) - used 2 times", report)
        self.assertIn("  2. fix(api) - used 1 times", report)
        self.assertIn("💭 Insights & Recommendations:", report)
        self.assertIn("Most active:  2024-01-02", report)
        self.assertNotIn("Language Usage", report)

    def test_render_prompt(self):
        prompt = self.render_prompt()

        self.assertIn("- Branch: feature/PROJ-1-login", prompt)
        self.assertIn("  * feat(api): add login", prompt)
        self.assertIn("Include the ticket number [PROJ-1]", prompt)
        self.assertIn("CHANGED FILES (1 files, +2/-1 lines, simple change):", prompt)
        self.assertIn("- src/auth.go [modified] +2/-1", prompt)
        self.assertIn("KEY CHANGES:\n- function Login\n", prompt)
        self.assertIn("CHANGES:\n" + DIFF, prompt)
        self.assertIn("max 72 characters", prompt)
        self.assertIn("Generate ONLY the subject line", prompt)
        self.assertIn("<type>: [PROJ-1] <subject line>", prompt)

    def test_render_detailed_prompt_with_type_and_scope(self):
        prompt = self.render_prompt(commit_type="fix", scope="auth", ticket=None, detailed=True)

        self.assertIn("Generate a fix commit message", prompt)
        self.assertIn("Scope: auth", prompt)
        self.assertIn("Body: explain WHAT changed and WHY", prompt)
        self.assertNotIn("Ticket/Issue Number", prompt)
        self.assertIn("fix(auth): <subject line>", prompt)

    def test_missing_context_variable(self):
        with self.assertRaises(FormatterError):
            self.formatter.render("commit_prompt.j2", diff=self.diff)

    def test_template_not_found(self):
        with self.assertRaises(FormatterError):
            self.formatter.render("non_existent_template.j2")

    def test_custom_template_dir(self):
        with tempfile.TemporaryDirectory() as template_dir:
            Path(template_dir, "custom.j2").write_text(
                "{{ stats.total_commits }} commits, {{ 1|percent(4) }}%", encoding="utf-8"
            )
            formatter = Jinja2Formatter(template_dir=template_dir)

            self.assertEqual(formatter.render("custom.j2", stats=self.stats), "3 commits, 25.0%")


if __name__ == "__main__":
    unittest.main()
