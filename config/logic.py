from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError

from config.loader import load_config
from config.models import Config
from utils.errors import ConfigError
from utils.logger import logger

DEFAULT_CONFIG_PATH = Path(__file__).parent / "default.yaml"
USER_CONFIG_PATH = Path.home() / ".gitai" / "config.yaml"
PROJECT_CONFIG_FILENAME = ".gitai.yaml"


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Returns a copy of `base` updated with `override`. Nested mappings merge, everything else is replaced."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def find_project_root(start_dir: Path = Path(".")) -> Optional[Path]:
    """Nearest directory at or above `start_dir` that holds a .git directory or a pyproject.toml."""
    start = start_dir.resolve()
    for directory in (start, *start.parents):
        if (directory / ".git").is_dir() or (directory / "pyproject.toml").is_file():
            return directory
    return None


def find_project_config(start_dir: Path = Path(".")) -> Optional[Path]:
    project_root = find_project_root(start_dir)
    if project_root is None:
        return None
    path = project_root / PROJECT_CONFIG_FILENAME
    return path if path.is_file() else None


def _config_paths(custom_config_path: Optional[str]) -> List[Path]:
    if not DEFAULT_CONFIG_PATH.is_file():
        raise ConfigError("Default configuration file not found.")

    if custom_config_path:
        path = Path(custom_config_path)
        if not path.is_file():
            raise ConfigError(f"Custom config file not found at: {custom_config_path}")
        logger.info(f"Using custom configuration from: {custom_config_path}")
        return [DEFAULT_CONFIG_PATH, path]

    paths = [DEFAULT_CONFIG_PATH]
    if USER_CONFIG_PATH.is_file():
        paths.append(USER_CONFIG_PATH)
    project_config = find_project_config()
    if project_config:
        paths.append(project_config)
    return paths


def load_and_merge_configs(custom_config_path: Optional[str] = None) -> Config:
    """
    Builds the effective configuration.

    The bundled default.yaml is always loaded first. A custom config path is
    merged over it; without one, ~/.gitai/config.yaml and then the project's
    .gitai.yaml are merged in that order.

    Raises:
        ConfigError: If a required file is missing or the merged values are invalid.
    """
    merged: Dict[str, Any] = {}
    for path in _config_paths(custom_config_path):
        logger.debug(f"Loading configuration from: {path}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                merged = deep_merge(merged, load_config(f))
        except OSError as e:
            logger.warning(f"Could not read config at {path}: {e}")

    try:
        config = Config(**merged)
    except ValidationError as e:
        raise ConfigError(f"Configuration validation failed: {e}") from e
    logger.debug(f"Final merged config: {config.model_dump_json()}")
    return config
