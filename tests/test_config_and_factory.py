"""
Unit tests for configuration loading and the LoggerFactory wiring.
"""

import io
import json
import logging

import pytest

from console_logging.config import DEFAULT_CONFIG_FILE, load_formatter_options, load_logging_config
from console_logging.core.logger_factory import LoggerFactory, resolve_level
from console_logging.schemas import FormatterConfig


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "logging.json"
    path.write_text(json.dumps({
        "level": "debug",
        "formatter": {"date_format": "%H:%M", "multiline": False},
    }), encoding="utf-8")
    return path


# -----------------------------------------------------------------------------
# 1. Configuration loading
# -----------------------------------------------------------------------------
def test_bundled_config_is_valid():
    options = load_formatter_options(DEFAULT_CONFIG_FILE, environ={})

    assert FormatterConfig.from_options(options).date_format == "%H:%M:%S"


def test_file_values_are_loaded(config_file):
    config = load_logging_config(config_file, environ={})

    assert config["level"] == "debug"
    assert config["formatter"] == {"date_format": "%H:%M", "multiline": False}


def test_environment_overrides_file(config_file):
    environ = {
        "CONSOLE_FORMATTER_MULTILINE": "true",
        "CONSOLE_FORMATTER_COLORS": "0",
        "CONSOLE_LOG_LEVEL": "warning",
        "UNRELATED": "x",
    }

    config = load_logging_config(config_file, environ=environ)
    formatter_config = FormatterConfig.from_options(config["formatter"])

    assert config["level"] == "WARNING"
    assert formatter_config.multiline is True
    assert formatter_config.colors is False
    assert formatter_config.date_format == "%H:%M"


def test_missing_file_gives_defaults(tmp_path):
    config = load_logging_config(tmp_path / "absent.json", environ={})

    assert config == {"level": "INFO", "formatter": {}}


def test_malformed_file_is_reported(tmp_path, caplog):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="console_logging.config"):
        config = load_logging_config(path, environ={})

    assert config["formatter"] == {}
    assert "Failed to load logging configuration" in caplog.text


# -----------------------------------------------------------------------------
# 2. Logger factory
# -----------------------------------------------------------------------------
@pytest.mark.usefixtures("reset_logger_factory")
def test_factory_is_a_singleton(config_file):
    first = LoggerFactory(config_file, stream=io.StringIO(), environ={})

    assert LoggerFactory() is first


@pytest.mark.usefixtures("reset_logger_factory")
def test_factory_logs_through_console_formatter(config_file):
    stream = io.StringIO()
    factory = LoggerFactory(config_file, stream=stream, environ={})

    logger = factory.get_logger("worker")
    logger.info("Started {job}", extra={"context": {"job": "sync"}})

    output = stream.getvalue()
    assert logger.name == "console.worker"
    assert "INFO      [console.worker] Started sync" in output
    assert output.endswith(' {"job": "sync"}\n')
    assert factory.formatter.config.colors is False


@pytest.mark.usefixtures("reset_logger_factory")
def test_configured_level_applies_to_every_logger(config_file):
    stream = io.StringIO()
    factory = LoggerFactory(config_file, stream=stream, environ={})

    worker = factory.get_logger("worker")
    worker.debug("tick")

    assert factory.level == logging.DEBUG
    assert worker.level == logging.NOTSET
    assert worker.getEffectiveLevel() == logging.DEBUG
    assert "DEBUG     [console.worker] tick" in stream.getvalue()


@pytest.mark.usefixtures("reset_logger_factory")
def test_environment_level_hides_lower_records(config_file):
    stream = io.StringIO()
    factory = LoggerFactory(config_file, stream=stream, environ={"CONSOLE_LOG_LEVEL": "error"})

    logger = factory.get_logger("worker")
    logger.info("hidden")
    logger.error("shown")

    assert "hidden" not in stream.getvalue()
    assert "shown" in stream.getvalue()


@pytest.mark.usefixtures("reset_logger_factory")
def test_invalid_level_is_rejected(config_file):
    with pytest.raises(ValueError, match="Invalid log level: LOUD"):
        LoggerFactory(config_file, stream=io.StringIO(), environ={"CONSOLE_LOG_LEVEL": "loud"})


@pytest.mark.parametrize("level, expected", [
    ("info", logging.INFO),
    (" Warning ", logging.WARNING),
    (logging.ERROR, logging.ERROR),
])
def test_resolve_level(level, expected):
    assert resolve_level(level) == expected


@pytest.mark.usefixtures("reset_logger_factory")
def test_shutdown_detaches_handler(config_file):
    stream = io.StringIO()
    factory = LoggerFactory(config_file, stream=stream, environ={})

    LoggerFactory.reset()
    logging.getLogger("console.worker").info("after shutdown")

    assert factory.handler not in logging.getLogger("console").handlers
    assert stream.getvalue() == ""
