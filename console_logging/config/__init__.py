"""
Logging Configuration Module

Loads the console log level and formatter options from the bundled JSON file,
a ``.env`` file and the environment.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import dotenv

from ..schemas.formatter_config import FormatterConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = Path(__file__).parent / "logging.json"
ENV_PREFIX = "CONSOLE_FORMATTER_"
ENV_LOG_LEVEL = "CONSOLE_LOG_LEVEL"
DEFAULT_LEVEL = "INFO"

__all__ = ["DEFAULT_CONFIG_FILE", "DEFAULT_LEVEL", "ENV_PREFIX", "ENV_LOG_LEVEL", "load_logging_config", "load_formatter_options"]


def load_logging_config(
    path: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None
) -> Dict[str, Any]:
    """
    Load the logging configuration.

    Args:
        path: JSON configuration file (defaults to the bundled ``logging.json``)
        environ: Environment to read overrides from; the process environment,
            after loading ``.env``, when None

    Returns:
        Dictionary with ``level`` and ``formatter`` keys
    """
    if environ is None:
        dotenv.load_dotenv()
        environ = os.environ

    config: Dict[str, Any] = {
        "level": DEFAULT_LEVEL,
        "formatter": {},
    }

    config_file = Path(path) if path is not None else DEFAULT_CONFIG_FILE
    if config_file.exists():
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                loaded = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Failed to load logging configuration from %s: %s", config_file, e)
        else:
            config["level"] = loaded.get("level", config["level"])
            config["formatter"] = dict(loaded.get("formatter", {}))

    level = environ.get(ENV_LOG_LEVEL)
    if level:
        config["level"] = level.strip().upper()

    for option in FormatterConfig.model_fields:
        value = environ.get(ENV_PREFIX + option.upper())
        if value is not None:
            config["formatter"][option] = value

    return config


def load_formatter_options(
    path: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None
) -> Dict[str, Any]:
    """
    Load only the console formatter options.

    Values coming from the environment are strings; ``FormatterConfig``
    validation converts them to the option types.
    """
    return load_logging_config(path, environ)["formatter"]
