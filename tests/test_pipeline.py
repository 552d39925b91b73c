import asyncio
import unittest
from unittest.mock import MagicMock, patch

import pytest

from config.models import CollectorConfig, Config, HistoryConfig, TicketConfig
from core.contracts.models import AnalysisReport
from core.pipeline import InsightPipeline
from utils.errors import CollectorError

DIFF = """diff --git a/core/app.py b/core/app.py
index 1234567..89abcde 100644
--- a/core/app.py
+++ b/core/app.py
@@ -1,1 +1,2 @@
-pass
+import os
+def main():
"""

LOG_RECORDS = [
    "h1|alice|feat(cli): add stats command||2024-01-01 10:00:00 +0000",
    "h2|bob|fix(cli): handle empty repo||2024-01-02 11:00:00 +0000",
    "h3|alice|feat: support tickets||2024-01-03 12:00:00 +0000",
]


class DummyDiffCollector:
    def collect(self):
        return {"diff": DIFF}


class DummyHistoryCollector:
    def __init__(self, n=100):
        self.n = n

    def collect(self):
        return {"log_records": LOG_RECORDS[:self.n]}


class DummyBranchCollector:
    def __init__(self, pattern=None, prefix=None):
        self.pattern = pattern
        self.prefix = prefix

    async def collect(self):
        return {"branch": "feature/PROJ-7", "ticket": "PROJ-7"}


COLLECTORS = {
    "diff": DummyDiffCollector,
    "history": DummyHistoryCollector,
    "branch": DummyBranchCollector,
}


# Mock the registry
@patch("core.pipeline.collector_registry")
class TestInsightPipeline(unittest.TestCase):
    def setUp(self):
        self.config = Config(
            collectors=[
                CollectorConfig(type="diff"),
                CollectorConfig(type="branch"),
                CollectorConfig(type="history"),
            ],
        )

    def test_run_end_to_end(self, mock_collector_registry):
        """
        Tests the full pipeline from collection to analysis.
        """
        mock_collector_registry.get.side_effect = COLLECTORS.__getitem__

        report = asyncio.run(InsightPipeline(self.config).run())

        self.assertEqual(report.diff.modified_files, 1)
        self.assertEqual(report.diff.key_changes, ["function main"])
        self.assertEqual(report.diff.import_changes, ["import os"])
        self.assertEqual(report.history.total_commits, 3)
        self.assertEqual(
            [(p.type, p.scope, p.frequency) for p in report.patterns],
            [("feat", "cli", 2), ("fix", "cli", 1)],
        )
        self.assertEqual(report.branch, "feature/PROJ-7")
        self.assertEqual(report.ticket, "PROJ-7")
        self.assertEqual(report.recent_subjects, [
            "feat(cli): add stats command",
            "fix(cli): handle empty repo",
            "feat: support tickets",
        ])

    def test_run_selected_collectors(self, mock_collector_registry):
        mock_collector_registry.get.side_effect = COLLECTORS.__getitem__

        report = asyncio.run(InsightPipeline(self.config).run(only=["history"]))

        mock_collector_registry.get.assert_called_once_with("history")
        self.assertIsNone(report.diff)
        self.assertIsNone(report.branch)
        self.assertEqual(report.history.total_commits, 3)

    def test_collector_options_come_from_config(self, mock_collector_registry):
        history_cls = MagicMock(return_value=DummyHistoryCollector())
        branch_cls = MagicMock(return_value=DummyBranchCollector())
        mock_collector_registry.get.side_effect = {"history": history_cls, "branch": branch_cls}.__getitem__
        config = Config(
            history=HistoryConfig(limit=42),
            ticket=TicketConfig(pattern=r"\d+", prefix="OPS"),
            collectors=[
                CollectorConfig(type="history"),
                CollectorConfig(type="branch", options={"prefix": "DEV"}),
            ],
        )

        asyncio.run(InsightPipeline(config).run())

        history_cls.assert_called_once_with(n=42)
        branch_cls.assert_called_once_with(pattern=r"\d+", prefix="DEV")

    def test_unknown_collector(self, mock_collector_registry):
        mock_collector_registry.get.side_effect = KeyError("missing")

        with self.assertRaises(CollectorError):
            asyncio.run(InsightPipeline(self.config).run())

    def test_collector_failure_is_reraised(self, mock_collector_registry):
        class FailingCollector:
            def collect(self):
                raise CollectorError("git exploded")

        mock_collector_registry.get.return_value = FailingCollector

        with self.assertRaises(CollectorError) as cm:
            asyncio.run(InsightPipeline(self.config).run(only=["diff"]))
        self.assertIn("git exploded", str(cm.exception))

    def test_empty_branch_values_become_none(self, mock_collector_registry):
        class NoTicketBranch(DummyBranchCollector):
            async def collect(self):
                return {"branch": "main", "ticket": ""}

        mock_collector_registry.get.return_value = NoTicketBranch

        report = asyncio.run(InsightPipeline(self.config).run(only=["branch"]))

        self.assertEqual(report.branch, "main")
        self.assertIsNone(report.ticket)


class TestRendering(unittest.TestCase):
    def setUp(self):
        self.formatter = MagicMock()
        self.formatter.render.return_value = "rendered"
        self.pipeline = InsightPipeline(Config(), formatter=self.formatter)

    def test_render_without_analysis(self):
        with self.assertRaises(ValueError):
            self.pipeline.render_prompt(AnalysisReport())
        with self.assertRaises(ValueError):
            self.pipeline.render_stats_report(AnalysisReport())

    def test_render_prompt_uses_output_config(self):
        report = self.pipeline._analyze({"diff": DIFF, "branch": "main"})

        result = self.pipeline.render_prompt(report, commit_type="feat")

        self.assertEqual(result, "rendered")
        self.formatter.render.assert_called_once_with(
            "commit_prompt.j2",
            diff=report.diff,
            branch="main",
            ticket=None,
            recent_subjects=[],
            commit_type="feat",
            scope=None,
            language="en",
            max_subject_len=72,
            detailed=False,
        )

    def test_render_stats_report_includes_insights(self):
        report = self.pipeline._analyze({"log_records": LOG_RECORDS})

        self.pipeline.render_stats_report(report)

        _, kwargs = self.formatter.render.call_args
        self.assertEqual(self.formatter.render.call_args.args, ("stats_report.j2",))
        self.assertEqual(kwargs["stats"], report.history)
        self.assertEqual(kwargs["patterns"], report.patterns)
        self.assertTrue(kwargs["insights"])


@pytest.mark.asyncio
async def test_pipeline_renders_with_default_templates(mocker):
    registry = mocker.patch("core.pipeline.collector_registry")
    registry.get.side_effect = COLLECTORS.__getitem__
    pipeline = InsightPipeline(Config(collectors=[CollectorConfig(type="diff"), CollectorConfig(type="history")]))

    report = await pipeline.run()

    assert "CHANGED FILES (1 files, +2/-1 lines, simple change):" in pipeline.render_prompt(report)
    assert "Total Commits: 3" in pipeline.render_stats_report(report)


if __name__ == "__main__":
    unittest.main()
