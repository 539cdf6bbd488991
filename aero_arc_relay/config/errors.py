"""Error types raised while loading relay configuration."""

from __future__ import annotations

from pathlib import Path


class ConfigError(ValueError):
    """Base error for configuration loading."""


class ConfigFileAccessError(ConfigError):
    """Config source could not be read."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        super().__init__(f"failed to read config file '{self.path}': {reason}")


class ConfigParseError(ConfigError):
    """Config source is structurally malformed."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        self.path = Path(path) if path is not None else None
        if self.path is not None:
            message = f"failed to parse config file '{self.path}': {message}"
        super().__init__(message)


class NoEndpointsError(ConfigError):
    def __init__(self) -> None:
        super().__init__("no MAVLink endpoints configured in 'mavlink.endpoints'")


class NoValidEndpointsError(ConfigError):
    def __init__(self, rejected: int) -> None:
        self.rejected = rejected
        super().__init__(f"no valid MAVLink endpoints: all {rejected} configured endpoints were rejected")


class InvalidDialectError(ConfigError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"invalid MAVLink dialect '{name}'")


class EndpointValidationError(ConfigError):
    """Per-endpoint failure; the loader drops the endpoint instead of raising."""


class InvalidModeError(EndpointValidationError):
    def __init__(self, mode: str) -> None:
        self.mode = mode
        super().__init__(f"invalid MAVLink endpoint mode '{mode}'")


class DroneIdRequiredError(EndpointValidationError):
    def __init__(self) -> None:
        super().__init__("drone_id is required for mode '1:1'")


class MultiModeNotSupportedError(EndpointValidationError):
    def __init__(self) -> None:
        super().__init__("mode 'multi' is not supported yet")


class InvalidProtocolError(EndpointValidationError):
    def __init__(self, protocol: str) -> None:
        self.protocol = protocol
        super().__init__(f"invalid MAVLink endpoint protocol '{protocol}'")
