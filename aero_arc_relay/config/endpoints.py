"""Per-endpoint mode and protocol validation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from aero_arc_relay.config.errors import (
    DroneIdRequiredError,
    EndpointValidationError,
    InvalidModeError,
    InvalidProtocolError,
    MultiModeNotSupportedError,
)
from aero_arc_relay.config.schema import EndpointConfig, EndpointMode, EndpointProtocol


_PROTOCOLS = {protocol.value: protocol for protocol in EndpointProtocol}


@dataclass(slots=True)
class EndpointRejection:
    endpoint: EndpointConfig
    error: EndpointValidationError


def _validate_mode(endpoint: EndpointConfig) -> None:
    if endpoint.mode_name == EndpointMode.ONE_TO_ONE.value:
        endpoint.mode = EndpointMode.ONE_TO_ONE
        if not endpoint.drone_id:
            raise DroneIdRequiredError()
        return
    if endpoint.mode_name == EndpointMode.MULTI.value:
        # Recognized so the resolved mode is recorded, but reserved for later.
        endpoint.mode = EndpointMode.MULTI
        raise MultiModeNotSupportedError()
    raise InvalidModeError(endpoint.mode_name)


def _validate_protocol(endpoint: EndpointConfig) -> None:
    protocol = _PROTOCOLS.get(endpoint.protocol_name)
    if protocol is None:
        raise InvalidProtocolError(endpoint.protocol_name)
    endpoint.protocol = protocol


def validate_endpoint(endpoint: EndpointConfig) -> None:
    """Resolve ``mode`` then ``protocol`` in place; the first failure is raised."""
    _validate_mode(endpoint)
    _validate_protocol(endpoint)


def filter_endpoints(
    endpoints: Iterable[EndpointConfig],
) -> tuple[list[EndpointConfig], list[EndpointRejection]]:
    survivors: list[EndpointConfig] = []
    rejections: list[EndpointRejection] = []
    for endpoint in endpoints:
        try:
            validate_endpoint(endpoint)
        except EndpointValidationError as exc:
            rejections.append(EndpointRejection(endpoint=endpoint, error=exc))
            continue
        survivors.append(endpoint)
    return survivors, rejections
