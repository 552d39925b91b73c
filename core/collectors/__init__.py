# Importing the modules registers the collectors.
from core.collectors import branch_collector, diff_collector, history_collector  # noqa: F401
