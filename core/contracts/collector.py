from typing import Any, Mapping, Protocol


class Collector(Protocol):
    """
    Source of raw git output for the analysis pipeline.

    Each collector returns its data under its own keys ("diff", "log_records",
    "branch", "ticket"). `collect` may be a plain or an async method.
    """

    def collect(self) -> Mapping[str, Any]:
        ...
