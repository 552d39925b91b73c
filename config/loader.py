import os
import re
from typing import IO, Any, Dict

import yaml

from utils.errors import ConfigError

# ${NAME} references in plain scalars, e.g. "template_dir: ${HOME}/.gitai/templates"
ENV_VAR_MATCHER = re.compile(r"\$\{(\w+)\}")


class EnvVarLoader(yaml.SafeLoader):
    """SafeLoader that expands ${NAME} references from the environment."""


def _expand(match: "re.Match[str]") -> str:
    name = match.group(1)
    value = os.getenv(name)
    if value is None:
        raise ConfigError(f"Environment variable '{name}' not found for substitution in config.")
    return value


def _env_var_constructor(loader: yaml.SafeLoader, node: yaml.ScalarNode) -> str:
    return ENV_VAR_MATCHER.sub(_expand, loader.construct_scalar(node))


EnvVarLoader.add_constructor("!env", _env_var_constructor)
EnvVarLoader.add_implicit_resolver("!env", ENV_VAR_MATCHER, None)


def load_config(config_file: IO[str]) -> Dict[str, Any]:
    """
    Reads one YAML config document. An empty document yields an empty dict.

    Raises:
        ConfigError: If the YAML is invalid, its top level is not a mapping, or a
            referenced environment variable is not set.
    """
    try:
        config = yaml.load(config_file, Loader=EnvVarLoader)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML configuration: {e}") from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigError(f"Configuration must be a mapping, got {type(config).__name__}.")
    return config
