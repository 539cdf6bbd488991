"""Structured logging setup driven by the ``logging`` config section."""

from __future__ import annotations

from datetime import UTC, datetime
import json
import logging
from pathlib import Path
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from aero_arc_relay.config.schema import LoggingConfig


ROOT_LOGGER_NAME = "aero_arc_relay"
DEFAULT_LOG_FILE = "logs/aero-arc-relay.log"
TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}
VALID_LOG_FORMATS = {"text", "json"}
VALID_LOG_OUTPUTS = {"stdout", "file"}


def _strip_empty(value: object) -> object | None:
    if isinstance(value, dict):
        cleaned = {key: _strip_empty(item) for key, item in value.items()}
        return {key: item for key, item in cleaned.items() if item is not None} or None
    if value in ("", None):
        return None
    return value


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, UTC).isoformat(timespec="microseconds")
        payload: dict[str, object] = {
            "@timestamp": timestamp,
            "message": record.getMessage(),
            "log": {
                "level": record.levelname.lower(),
                "logger": record.name,
            },
            "event": {
                "action": getattr(record, "event_action", None),
            },
            "endpoint": getattr(record, "endpoint", None),
            "error": getattr(record, "error", None),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        cleaned = _strip_empty(payload) or {}
        return json.dumps(cleaned, separators=(",", ":"))


def _level(config: LoggingConfig) -> int:
    level = LOG_LEVELS.get(config.level.strip().lower())
    if level is None:
        raise ValueError(f"invalid log level '{config.level}'")
    return level


def _formatter(config: LoggingConfig) -> logging.Formatter:
    if config.format not in VALID_LOG_FORMATS:
        raise ValueError(f"invalid log format '{config.format}'")
    if config.format == "json":
        return JsonFormatter()
    return logging.Formatter(TEXT_FORMAT)


def _output_handler(config: LoggingConfig, formatter: logging.Formatter) -> logging.Handler:
    if config.output not in VALID_LOG_OUTPUTS:
        raise ValueError(f"invalid log output '{config.output}'")
    if config.output == "file":
        log_file = Path(config.file or DEFAULT_LOG_FILE)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    return handler


def configure_logging(config: LoggingConfig, force: bool = False) -> None:
    """Install the single output handler on the package logger.

    Expects a defaulted ``LoggingConfig`` as returned by ``load_config``.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if getattr(root, "_aero_arc_relay_configured", False) and not force:
        return

    level = _level(config)
    handler = _output_handler(config, _formatter(config))
    root.setLevel(level)
    for existing in list(root.handlers):
        existing.close()
    root.handlers.clear()
    root.addHandler(handler)
    root.propagate = False
    setattr(root, "_aero_arc_relay_configured", True)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
