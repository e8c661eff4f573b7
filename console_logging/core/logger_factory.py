"""
Logger Factory Module

Provides a singleton LoggerFactory that wires the console handler and
formatter into the standard library logging tree.
"""

import logging
import threading
from pathlib import Path
from typing import Any, Mapping, Optional, TextIO, Union

from ..config import load_logging_config
from ..formatters.console_formatter import ConsoleFormatter
from ..handlers.console_handler import ConsoleHandler

ROOT_LOGGER = "console"


def resolve_level(level: Union[int, str]) -> int:
    """
    Turn a level name (``"info"``, ``"WARNING"``) or number into a logging level.

    Raises:
        ValueError: If the name is not a known logging level
    """
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Invalid log level: {level}")
    return resolved


class LoggerFactory:
    """
    Singleton factory wiring the console handler and formatter onto the
    ``console`` logger.

    Loggers handed out by ``get_logger`` live under that logger and inherit
    its handler and its single configured level.
    """

    _instance: Optional['LoggerFactory'] = None
    _lock = threading.Lock()

    def __new__(cls, *args: Any, **kwargs: Any) -> 'LoggerFactory':
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(
        self,
        config_path: Optional[Union[str, Path]] = None,
        stream: Optional[TextIO] = None,
        environ: Optional[Mapping[str, str]] = None
    ) -> None:
        """
        Initialize the factory on first use; later calls return the same instance untouched.

        Args:
            config_path: JSON configuration file (defaults to the bundled one)
            stream: Console stream (defaults to stdout)
            environ: Environment overrides (defaults to the process environment)

        Raises:
            ValueError: If the configured level is unknown
        """
        if hasattr(self, '_initialized'):
            return

        config = load_logging_config(config_path, environ)
        self.level = resolve_level(config["level"])

        self.handler = ConsoleHandler(stream)
        options = dict(config["formatter"])
        options.setdefault("colors", self.handler.decorated)
        self.formatter = ConsoleFormatter(options)
        self.handler.setFormatter(self.formatter)

        root_logger = logging.getLogger(ROOT_LOGGER)
        root_logger.setLevel(self.level)
        root_logger.addHandler(self.handler)
        root_logger.propagate = False

        self._initialized = True

    @classmethod
    def reset(cls) -> None:
        """Shut down and forget the current instance."""
        with cls._lock:
            instance = cls._instance
            cls._instance = None
        if instance is not None and hasattr(instance, '_initialized'):
            instance.shutdown()

    def get_logger(self, name: str) -> logging.Logger:
        """
        Get a logger under the console hierarchy.

        Args:
            name: Logger name; prefixed with ``console.`` when outside the hierarchy

        Returns:
            Logger writing through the console handler
        """
        if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
            name = f"{ROOT_LOGGER}.{name}"
        return logging.getLogger(name)

    def shutdown(self) -> None:
        """Detach the console handler."""
        root_logger = logging.getLogger(ROOT_LOGGER)
        root_logger.removeHandler(self.handler)
        self.handler.flush()
        self.handler.close()
