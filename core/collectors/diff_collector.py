from typing import Any, Mapping

from core.contracts.collector import Collector
from core.registry import collector_registry
from utils.errors import CollectorError, GitAIException
from utils.git import get_staged_diff
from utils.logger import logger


@collector_registry.register("diff")
class DiffCollector(Collector):
    """Collects the unified diff of the staged changes (`git diff --cached`) under "diff"."""

    def collect(self) -> Mapping[str, Any]:
        try:
            diff = get_staged_diff()
        except GitAIException as e:
            raise CollectorError(f"Failed to collect git diff: {e}") from e

        logger.debug(f"Collected staged diff ({len(diff)} characters)")
        return {"diff": diff}
