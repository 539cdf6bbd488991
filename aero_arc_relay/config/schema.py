"""Dataclasses for top-level relay config."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from aero_arc_relay.config.dialects import MavlinkDialect
from aero_arc_relay.config.errors import ConfigParseError
from aero_arc_relay.config.fields import read_int, read_section, read_str
from aero_arc_relay.config.sinks import SinksConfig, parse_sinks


class EndpointProtocol(str, Enum):
    UDP = "udp"
    TCP = "tcp"
    SERIAL = "serial"


class EndpointMode(str, Enum):
    ONE_TO_ONE = "1:1"
    MULTI = "multi"


@dataclass(slots=True)
class RelayConfig:
    buffer_size: int = 0


@dataclass(slots=True)
class EndpointConfig:
    name: str = ""
    drone_id: str = ""
    protocol_name: str = ""
    protocol: EndpointProtocol | None = None
    mode_name: str = ""
    mode: EndpointMode | None = None
    port: int = 0  # udp/tcp
    baud_rate: int = 0  # serial


@dataclass(slots=True)
class MavlinkConfig:
    dialect_name: str = ""
    dialect: MavlinkDialect | None = None
    endpoints: list[EndpointConfig] = field(default_factory=list)


@dataclass(slots=True)
class LoggingConfig:
    level: str = ""
    format: str = ""
    output: str = ""
    file: str = ""


@dataclass(slots=True)
class Config:
    relay: RelayConfig = field(default_factory=RelayConfig)
    mavlink: MavlinkConfig = field(default_factory=MavlinkConfig)
    sinks: SinksConfig = field(default_factory=SinksConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _parse_endpoints(raw: Any) -> list[EndpointConfig]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ConfigParseError("'mavlink.endpoints' must be a list")
    endpoints: list[EndpointConfig] = []
    for index, item in enumerate(raw):
        prefix = f"mavlink.endpoints[{index}]"
        item = read_section(item, field_name=prefix)
        endpoints.append(
            EndpointConfig(
                name=read_str(item, "name", field_name=f"{prefix}.name"),
                drone_id=read_str(item, "drone_id", field_name=f"{prefix}.drone_id"),
                protocol_name=read_str(item, "protocol", field_name=f"{prefix}.protocol"),
                mode_name=read_str(item, "mode", field_name=f"{prefix}.mode"),
                port=read_int(item, "port", field_name=f"{prefix}.port"),
                baud_rate=read_int(item, "baud_rate", field_name=f"{prefix}.baud_rate"),
            )
        )
    return endpoints


def parse_config(data: dict[str, Any]) -> Config:
    """Convert a decoded YAML document into a typed, not yet validated, config tree."""
    relay_raw = read_section(data.get("relay"), field_name="relay")
    buffer_size = read_int(relay_raw, "buffer_size", field_name="relay.buffer_size")
    if buffer_size < 0:
        raise ConfigParseError("'relay.buffer_size' must be greater than or equal to zero")

    mavlink_raw = read_section(data.get("mavlink"), field_name="mavlink")
    mavlink = MavlinkConfig(
        dialect_name=read_str(mavlink_raw, "dialect", field_name="mavlink.dialect"),
        endpoints=_parse_endpoints(mavlink_raw.get("endpoints")),
    )

    logging_raw = read_section(data.get("logging"), field_name="logging")
    logging_config = LoggingConfig(
        level=read_str(logging_raw, "level", field_name="logging.level"),
        format=read_str(logging_raw, "format", field_name="logging.format"),
        output=read_str(logging_raw, "output", field_name="logging.output"),
        file=read_str(logging_raw, "file", field_name="logging.file"),
    )

    return Config(
        relay=RelayConfig(buffer_size=buffer_size),
        mavlink=mavlink,
        sinks=parse_sinks(data.get("sinks")),
        logging=logging_config,
    )
