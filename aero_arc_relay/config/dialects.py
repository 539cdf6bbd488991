"""MAVLink dialect name resolution."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType

from aero_arc_relay.config.errors import InvalidDialectError


class MavlinkDialect(str, Enum):
    """Canonical dialect identifiers.

    Values are the dialect module names used by pymavlink, so a transport can
    select its message tables with ``importlib.import_module(dialect.module_path)``.
    """

    COMMON = "common"
    MINIMAL = "minimal"
    ARDUPILOT_MEGA = "ardupilotmega"
    PAPARAZZI = "paparazzi"
    STANDARD = "standard"
    ALL = "all"
    DEVELOPMENT = "development"

    @property
    def module_path(self) -> str:
        return f"pymavlink.dialects.v20.{self.value}"


DIALECT_ALIASES = MappingProxyType(
    {
        "common": MavlinkDialect.COMMON,
        "minimal": MavlinkDialect.MINIMAL,
        "ardupilot": MavlinkDialect.ARDUPILOT_MEGA,
        "ardupilotmega": MavlinkDialect.ARDUPILOT_MEGA,
        "apm": MavlinkDialect.ARDUPILOT_MEGA,
        "paparazzi": MavlinkDialect.PAPARAZZI,
        "standard": MavlinkDialect.STANDARD,
        "all": MavlinkDialect.ALL,
        # PX4 runs common plus the development extensions.
        "px4": MavlinkDialect.DEVELOPMENT,
        "development": MavlinkDialect.DEVELOPMENT,
    }
)


def resolve_dialect(name: str) -> MavlinkDialect:
    try:
        return DIALECT_ALIASES[name.lower()]
    except KeyError:
        raise InvalidDialectError(name) from None
