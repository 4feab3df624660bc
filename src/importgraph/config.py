"""Command-line configuration: YAML file, environment and defaults."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

import yaml

from .constants import Constants
from .errors import ConfigError

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """Effective settings of a command-line run."""
    root: Optional[str] = None
    conditions: List[str] = field(default_factory=list)
    loglevel: str = Constants.DEFAULT_LOG_LEVEL


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load YAML configuration file.

    Args:
        path: Configuration file path. When omitted, `importgraph.yml` in the
            working directory is used if present.

    Returns:
        Configuration mapping, empty when there is no file to load.

    Raises:
        ConfigError: If the file can not be read, is not valid YAML, or is not a mapping.
    """
    if path is None:
        if not os.path.isfile(Constants.CONFIG_FILE):
            return {}
        path = Constants.CONFIG_FILE

    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except OSError as e:
        raise ConfigError(f"Can not read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Malformed config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ConfigError(f"Config file {path} must contain a mapping")

    logger.debug("Loaded config from %s", path)
    return dict(data)


def resolve_settings(args: Any, environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Merge settings from parsed arguments, environment, config file and defaults.

    Earlier sources win: command line, then environment, then config file.

    Args:
        args: Parsed command-line arguments.
        environ: Environment variables. `os.environ` by default.

    Returns:
        Effective settings.

    Raises:
        ConfigError: If the config file is invalid, or contains values of wrong types.
    """
    if environ is None:
        environ = os.environ
    config = load_config(getattr(args, "CONFIG", None))

    root = getattr(args, "ROOT", None) or environ.get(Constants.ENV_ROOT) or config.get("root")
    if root is not None and not isinstance(root, str):
        raise ConfigError("Config key 'root' must be a string")

    conditions = getattr(args, "CONDITIONS", None) or config.get("conditions") or []
    if isinstance(conditions, str):
        conditions = [conditions]
    if not isinstance(conditions, list) or not all(isinstance(c, str) for c in conditions):
        raise ConfigError("Config key 'conditions' must be a list of strings")

    loglevel = (
        getattr(args, "LOG_LEVEL", None)
        or environ.get(Constants.ENV_LOG_LEVEL)
        or config.get("loglevel")
        or Constants.DEFAULT_LOG_LEVEL
    )
    loglevel = str(loglevel).upper()
    if loglevel not in Constants.LOG_LEVELS:
        raise ConfigError(f"Unknown log level: {loglevel}")

    return Settings(root=root, conditions=list(conditions), loglevel=loglevel)
