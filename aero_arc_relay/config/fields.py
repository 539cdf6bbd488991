"""Typed field readers shared by the config schema modules."""

from __future__ import annotations

from datetime import timedelta
import re
from typing import Any

from aero_arc_relay.config.errors import ConfigParseError


_DURATION_PART_RE = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")
_DURATION_UNIT_MICROSECONDS = {
    "ns": 0.001,
    "us": 1.0,
    "µs": 1.0,
    "μs": 1.0,
    "ms": 1_000.0,
    "s": 1_000_000.0,
    "m": 60_000_000.0,
    "h": 3_600_000_000.0,
}


def parse_duration(value: str) -> timedelta:
    """Parse a Go-style duration string such as ``"30s"``, ``"1h30m"`` or ``"250ms"``.

    A bare ``"0"`` is accepted; any other value needs a unit on every component.
    """
    text = value.strip()
    sign = 1
    if text[:1] in {"+", "-"}:
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    if text == "0":
        return timedelta(0)
    if not text:
        raise ValueError(f"invalid duration '{value}'")
    total = 0.0
    position = 0
    while position < len(text):
        match = _DURATION_PART_RE.match(text, position)
        if match is None:
            raise ValueError(f"invalid duration '{value}'")
        total += float(match.group(1)) * _DURATION_UNIT_MICROSECONDS[match.group(2)]
        position = match.end()
    try:
        return timedelta(microseconds=sign * total)
    except OverflowError as exc:
        raise ValueError(f"duration '{value}' out of range") from exc


def read_section(raw: Any, *, field_name: str) -> dict[str, Any]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigParseError(f"'{field_name}' must be a mapping")
    return raw


def read_optional_section(raw: dict[str, Any], key: str, *, field_name: str) -> dict[str, Any] | None:
    value = raw.get(key)
    if value is None:
        return None
    return read_section(value, field_name=field_name)


def read_str(raw: dict[str, Any], key: str, *, field_name: str) -> str:
    value = raw.get(key)
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise ConfigParseError(f"'{field_name}' must be a string")


def read_int(raw: dict[str, Any], key: str, *, field_name: str) -> int:
    value = raw.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigParseError(f"'{field_name}' must be an integer")
    return value


def read_bool(raw: dict[str, Any], key: str, *, field_name: str) -> bool:
    value = raw.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ConfigParseError(f"'{field_name}' must be a boolean")
    return value


def read_str_list(raw: dict[str, Any], key: str, *, field_name: str) -> list[str]:
    value = raw.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigParseError(f"'{field_name}' must be a list")
    items: list[str] = []
    for index, item in enumerate(value):
        if isinstance(item, (dict, list)):
            raise ConfigParseError(f"'{field_name}[{index}]' must be a string")
        items.append(read_str({"item": item}, "item", field_name=f"{field_name}[{index}]"))
    return items


def read_duration(raw: dict[str, Any], key: str, *, field_name: str) -> timedelta:
    value = raw.get(key)
    if value is None:
        return timedelta(0)
    if isinstance(value, bool):
        raise ConfigParseError(f"'{field_name}' must be a duration")
    if isinstance(value, (int, float)):
        try:
            return timedelta(seconds=value)
        except (ValueError, OverflowError) as exc:
            raise ConfigParseError(f"'{field_name}': invalid duration '{value}'") from exc
    if not isinstance(value, str):
        raise ConfigParseError(f"'{field_name}' must be a duration")
    try:
        return parse_duration(value)
    except ValueError as exc:
        raise ConfigParseError(f"'{field_name}': {exc}") from exc
