"""Relay configuration loading, validation and defaults."""

from .dialects import DIALECT_ALIASES, MavlinkDialect, resolve_dialect
from .endpoints import EndpointRejection, filter_endpoints, validate_endpoint
from .errors import (
    ConfigError,
    ConfigFileAccessError,
    ConfigParseError,
    DroneIdRequiredError,
    EndpointValidationError,
    InvalidDialectError,
    InvalidModeError,
    InvalidProtocolError,
    MultiModeNotSupportedError,
    NoEndpointsError,
    NoValidEndpointsError,
)
from .loader import DEFAULT_CONFIG_PATH, expand_env, initialize_config, load_config
from .schema import (
    Config,
    EndpointConfig,
    EndpointMode,
    EndpointProtocol,
    LoggingConfig,
    MavlinkConfig,
    RelayConfig,
    parse_config,
)
from .sinks import SinkKind, SinksConfig, parse_sinks

__all__ = [
    "Config",
    "ConfigError",
    "ConfigFileAccessError",
    "ConfigParseError",
    "DEFAULT_CONFIG_PATH",
    "DIALECT_ALIASES",
    "DroneIdRequiredError",
    "EndpointConfig",
    "EndpointMode",
    "EndpointProtocol",
    "EndpointRejection",
    "EndpointValidationError",
    "InvalidDialectError",
    "InvalidModeError",
    "InvalidProtocolError",
    "LoggingConfig",
    "MavlinkConfig",
    "MavlinkDialect",
    "MultiModeNotSupportedError",
    "NoEndpointsError",
    "NoValidEndpointsError",
    "RelayConfig",
    "SinkKind",
    "SinksConfig",
    "expand_env",
    "filter_endpoints",
    "initialize_config",
    "load_config",
    "parse_config",
    "parse_sinks",
    "resolve_dialect",
    "validate_endpoint",
]
