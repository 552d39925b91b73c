from typing import Any, Mapping, Optional

from core.contracts.collector import Collector
from core.history.tickets import extract_ticket_from_branch, format_ticket_number
from core.registry import collector_registry
from utils.errors import CollectorError, GitAIException
from utils.git import get_current_branch_name, is_git_repository
from utils.logger import logger


@collector_registry.register("branch")
class BranchCollector(Collector):
    """
    Collects the current branch name and the ticket id it refers to, if any.
    """

    def __init__(self, pattern: Optional[str] = None, prefix: Optional[str] = None):
        self.pattern = pattern
        self.prefix = prefix

    def collect(self) -> Mapping[str, Any]:
        if not is_git_repository():
            logger.debug("Not a git repository, skipping branch collection.")
            return {}

        try:
            branch_name = get_current_branch_name()
        except GitAIException as e:
            raise CollectorError(f"Failed to collect branch name: {e}") from e

        ticket = format_ticket_number(extract_ticket_from_branch(branch_name, self.pattern), self.prefix)
        if ticket:
            logger.info(f"Found ticket {ticket} in branch {branch_name}.")
        else:
            logger.info("No ticket found in branch name.")
        return {"branch": branch_name, "ticket": ticket}
