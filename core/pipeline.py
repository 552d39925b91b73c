import asyncio
import inspect
from typing import Any, Dict, List, Mapping, Optional, Sequence

from config.models import CollectorConfig, Config
from core.contracts.collector import Collector
from core.contracts.formatter import Formatter
from core.contracts.models import AnalysisReport, CommitStats, DiffAnalysisResult
from core.diff.engine import analyze_diff
from core.formatter.jinja_formatter import Jinja2Formatter
from core.history.engine import analyze_commit_history
from core.history.insights import build_insights
from core.history.parser import parse_commit_record
from core.history.patterns import get_top_patterns
from core.registry import collector_registry
from utils.errors import CollectorError
from utils.logger import logger

RECENT_SUBJECTS = 5


class InsightPipeline:
    """
    Runs the configured collectors and turns their raw git output into an AnalysisReport.
    """

    def __init__(self, config: Config, formatter: Optional[Formatter] = None):
        """
        Initializes the pipeline with the given configuration.

        Args:
            config: The configuration object.
            formatter: Renders reports and prompts. Defaults to the Jinja2 templates.
        """
        self.config = config
        self._formatter = formatter

    @property
    def formatter(self) -> Formatter:
        if self._formatter is None:
            self._formatter = Jinja2Formatter(template_dir=self.config.formatter.template_dir)
        return self._formatter

    async def run(self, only: Optional[Sequence[str]] = None) -> AnalysisReport:
        """
        Collects raw git data and analyzes it.

        Args:
            only: Collector types to run. Runs every configured collector when omitted.

        Returns:
            The analysis of the staged diff and/or the commit history, depending on
            which collectors ran.
        """
        logger.info("Starting analysis pipeline...")
        try:
            data = await self._collect(only)
            logger.info(f"Collected data: {list(data.keys())}")
        except CollectorError as e:
            logger.opt(exception=True).error(f"Failed to collect data: {e}")
            raise  # Re-raise to be handled by the CLI

        report = self._analyze(data)
        logger.success("Analysis pipeline completed successfully!")
        return report

    async def _collect(self, only: Optional[Sequence[str]]) -> Dict[str, Any]:
        """
        Runs the selected collectors concurrently.
        """
        configs = [c for c in self.config.collectors if only is None or c.type in only]
        logger.info(f"Running {len(configs)} collectors...")
        tasks = []
        for collector_config in configs:
            try:
                collector_cls = collector_registry.get(collector_config.type)
                collector: Collector = collector_cls(**self._collector_options(collector_config))
            except KeyError:
                raise CollectorError(f"Collector '{collector_config.type}' not found in registry.")
            except Exception as e:
                raise CollectorError(f"Failed to instantiate collector '{collector_config.type}': {e}") from e

            if inspect.iscoroutinefunction(collector.collect):
                tasks.append(asyncio.create_task(collector.collect()))
            else:
                tasks.append(asyncio.to_thread(collector.collect))

        results: List[Mapping[str, Any]] = await asyncio.gather(*tasks)

        combined_data: Dict[str, Any] = {}
        for data in results:
            combined_data.update(data)
        return combined_data

    def _collector_options(self, collector_config: CollectorConfig) -> Dict[str, Any]:
        """Options of a collector, with defaults taken from the matching config section."""
        defaults: Dict[str, Any] = {}
        if collector_config.type == "history":
            defaults["n"] = self.config.history.limit
        elif collector_config.type == "branch":
            defaults["pattern"] = self.config.ticket.pattern
            defaults["prefix"] = self.config.ticket.prefix
        return {**defaults, **collector_config.options}

    def _analyze(self, data: Mapping[str, Any]) -> AnalysisReport:
        diff_result: Optional[DiffAnalysisResult] = None
        if "diff" in data:
            diff_result = analyze_diff(data["diff"], self.config.diff.max_length)
            logger.info(
                f"Analyzed diff: {diff_result.modified_files} files, "
                f"complexity {diff_result.complexity}"
            )

        stats: Optional[CommitStats] = None
        patterns = []
        recent_subjects: List[str] = []
        if "log_records" in data:
            records = data["log_records"]
            stats = analyze_commit_history(records)
            patterns = get_top_patterns(stats, self.config.history.top_patterns)
            recent_subjects = self._recent_subjects(records)
            logger.info(f"Analyzed {stats.total_commits} commits")

        return AnalysisReport(
            diff=diff_result,
            history=stats,
            patterns=patterns,
            branch=data.get("branch") or None,
            ticket=data.get("ticket") or None,
            recent_subjects=recent_subjects,
        )

    @staticmethod
    def _recent_subjects(records: Sequence[str]) -> List[str]:
        subjects = []
        for raw in records:
            record = parse_commit_record(raw)
            if record and record.subject:
                subjects.append(record.subject)
            if len(subjects) >= RECENT_SUBJECTS:
                break
        return subjects

    def render_prompt(
        self,
        report: AnalysisReport,
        commit_type: Optional[str] = None,
        scope: Optional[str] = None,
    ) -> str:
        """
        Renders the commit-message prompt for the analyzed staged changes.
        """
        if report.diff is None:
            raise ValueError("The report has no diff analysis; run the 'diff' collector first.")
        output = self.config.output
        return self.formatter.render(
            self.config.formatter.prompt_template,
            diff=report.diff,
            branch=report.branch,
            ticket=report.ticket,
            recent_subjects=report.recent_subjects,
            commit_type=commit_type,
            scope=scope,
            language=output.language,
            max_subject_len=output.max_subject_len,
            detailed=output.detailed,
        )

    def render_stats_report(self, report: AnalysisReport) -> str:
        """
        Renders the human-readable commit history report.
        """
        if report.history is None:
            raise ValueError("The report has no history analysis; run the 'history' collector first.")
        return self.formatter.render(
            self.config.formatter.report_template,
            stats=report.history,
            patterns=report.patterns,
            insights=build_insights(report.history),
        )
