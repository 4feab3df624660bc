"""Centralized logging setup and structured logging helpers."""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from ..constants import Constants

_HANDLER_NAME = "importgraph"


def _level_from_env() -> int:
    name = os.environ.get(Constants.ENV_LOG_LEVEL, Constants.DEFAULT_LOG_LEVEL)
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(log_file: Optional[str] = None, quiet: bool = False) -> None:
    """Configure the root logger once.

    The level is taken from the IMPORTGRAPH_LOG_LEVEL environment variable.
    Repeated calls replace the handler installed by a previous call.

    Args:
        log_file: Optional file to write records to instead of stderr.
        quiet: Suppress console output entirely.
    """
    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)
            handler.close()

    handler: logging.Handler
    if log_file:
        handler = logging.FileHandler(log_file, encoding="utf-8")
    elif quiet:
        handler = logging.NullHandler()
    else:
        handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(_level_from_env())


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Check whether debug records would be emitted by the logger."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build the `extra` mapping for structured log records.

    None values are dropped so that formatters only see populated fields.
    """
    return {key: value for key, value in fields.items() if value is not None}
