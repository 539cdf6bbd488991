"""Fallback values for fields left unset in the config source."""

from __future__ import annotations

from aero_arc_relay.config.schema import Config


DEFAULT_BUFFER_SIZE = 1000
DEFAULT_DIALECT_NAME = "common"
DEFAULT_LOG_LEVEL = "info"
DEFAULT_LOG_FORMAT = "text"
DEFAULT_LOG_OUTPUT = "stdout"


def apply_relay_defaults(config: Config) -> None:
    if config.relay.buffer_size == 0:
        config.relay.buffer_size = DEFAULT_BUFFER_SIZE
    if config.mavlink.dialect_name == "":
        config.mavlink.dialect_name = DEFAULT_DIALECT_NAME


def apply_logging_defaults(config: Config) -> None:
    if config.logging.level == "":
        config.logging.level = DEFAULT_LOG_LEVEL
    if config.logging.format == "":
        config.logging.format = DEFAULT_LOG_FORMAT
    if config.logging.output == "":
        config.logging.output = DEFAULT_LOG_OUTPUT
