import datetime
from pathlib import Path
from typing import Any, List, Mapping, Optional, Tuple

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from core.contracts.formatter import Formatter
from core.history.aggregator import WEEKDAYS
from core.history.language import language_name
from utils.errors import FormatterError
from utils.text import shorten

DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


def percent(count: int, total: int) -> float:
    """Share of `count` in `total` as a percentage; 0.0 when `total` is zero."""
    if not total:
        return 0.0
    return count / total * 100


def bar(percentage: float, width: int) -> str:
    """Fixed-width text bar such as [███░░░░░░░] for a 0-100 percentage."""
    percentage = max(0, min(int(percentage), 100))
    filled = percentage * width // 100
    return "[" + "█" * filled + "░" * (width - filled) + "]"


def by_count(distribution: Mapping[str, int], limit: Optional[int] = None) -> List[Tuple[str, int]]:
    """Items of a distribution, highest count first, then alphabetical."""
    items = sorted(distribution.items(), key=lambda kv: (-kv[1], kv[0]))
    return items[:limit] if limit is not None else items


class Jinja2Formatter(Formatter):
    def __init__(self, template_dir: Optional[str] = None):
        if template_dir is None:
            template_dir = str(DEFAULT_TEMPLATE_DIR)

        self.template_dir = template_dir
        try:
            self.env = Environment(
                loader=FileSystemLoader(self.template_dir),
                trim_blocks=True,
                lstrip_blocks=True,
                keep_trailing_newline=True,
                undefined=StrictUndefined,
            )
        except Exception as e:
            raise FormatterError(f"Failed to initialize Jinja2 environment: {e}") from e

        self.env.filters["percent"] = percent
        self.env.filters["bar"] = bar
        self.env.filters["by_count"] = by_count
        self.env.filters["shorten"] = shorten
        self.env.filters["language_name"] = language_name
        self.env.globals["weekdays"] = WEEKDAYS

    def render(self, template_name: str, **context: Any) -> str:
        try:
            template = self.env.get_template(template_name)
            return template.render(now=datetime.datetime.now, **context)
        except Exception as e:
            raise FormatterError(f"Failed to render template {template_name}: {e}") from e
