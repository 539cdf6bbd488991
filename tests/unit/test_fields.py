from datetime import timedelta

import pytest

from aero_arc_relay.config.errors import ConfigParseError
from aero_arc_relay.config.fields import parse_duration, read_duration, read_int, read_str, read_str_list


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("0", timedelta(0)),
        ("30s", timedelta(seconds=30)),
        ("24h", timedelta(hours=24)),
        ("1h30m", timedelta(hours=1, minutes=30)),
        ("250ms", timedelta(milliseconds=250)),
        ("1.5s", timedelta(seconds=1.5)),
        ("-2m", timedelta(minutes=-2)),
        ("10us", timedelta(microseconds=10)),
    ],
)
def test_parse_duration_accepts_go_style_strings(text: str, expected: timedelta) -> None:
    assert parse_duration(text) == expected


@pytest.mark.parametrize("text", ["", "30", "1d", "h", "10 s", "1h-30m"])
def test_parse_duration_rejects_malformed_strings(text: str) -> None:
    with pytest.raises(ValueError, match="invalid duration"):
        parse_duration(text)


def test_read_duration_accepts_seconds_and_reports_field() -> None:
    assert read_duration({"interval": 45}, "interval", field_name="sinks.s3.flush_interval") == timedelta(seconds=45)
    assert read_duration({}, "interval", field_name="sinks.s3.flush_interval") == timedelta(0)
    with pytest.raises(ConfigParseError, match="sinks.s3.flush_interval"):
        read_duration({"interval": "soon"}, "interval", field_name="sinks.s3.flush_interval")


def test_read_str_renders_scalars() -> None:
    assert read_str({"value": 42}, "value", field_name="x") == "42"
    assert read_str({"value": True}, "value", field_name="x") == "true"
    assert read_str({"value": None}, "value", field_name="x") == ""
    with pytest.raises(ConfigParseError, match="'x' must be a string"):
        read_str({"value": ["a"]}, "value", field_name="x")


def test_read_int_rejects_bools_and_text() -> None:
    assert read_int({"value": 5}, "value", field_name="x") == 5
    with pytest.raises(ConfigParseError):
        read_int({"value": True}, "value", field_name="x")
    with pytest.raises(ConfigParseError):
        read_int({"value": "5"}, "value", field_name="x")


def test_read_str_list_requires_list_of_scalars() -> None:
    assert read_str_list({"value": ["a", 1]}, "value", field_name="x") == ["a", "1"]
    with pytest.raises(ConfigParseError, match="'x' must be a list"):
        read_str_list({"value": "a"}, "value", field_name="x")
    with pytest.raises(ConfigParseError, match=r"x\[0\]"):
        read_str_list({"value": [{"a": 1}]}, "value", field_name="x")


def test_parse_duration_out_of_range_is_value_error() -> None:
    with pytest.raises(ValueError, match="out of range"):
        parse_duration("99999999999999h")


@pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan"), 10**20, "99999999999999h"])
def test_read_duration_rejects_unrepresentable_values(value: object) -> None:
    with pytest.raises(ConfigParseError, match="sinks.file.rotation_interval"):
        read_duration({"interval": value}, "interval", field_name="sinks.file.rotation_interval")
