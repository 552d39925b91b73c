from typing import Any, Mapping

from core.contracts.collector import Collector
from core.registry import collector_registry
from utils.errors import CollectorError, GitAIException
from utils.git import get_commit_log
from utils.logger import logger


@collector_registry.register("history")
class HistoryCollector(Collector):
    """
    Collects the raw records of the last `n` commits under "log_records".

    Records keep git's order (newest first) and the hash|author|subject|body|date
    layout expected by the history engine.
    """

    def __init__(self, n: int = 100):
        if n <= 0:
            raise ValueError("Number of commits (n) must be a positive integer.")
        self.n = n

    def collect(self) -> Mapping[str, Any]:
        try:
            records = get_commit_log(self.n)
        except GitAIException as e:
            raise CollectorError(f"Failed to collect git history: {e}") from e

        logger.debug(f"Collected {len(records)} commit records")
        return {"log_records": records}
