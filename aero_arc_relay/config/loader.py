"""Config loading and initialization."""

from __future__ import annotations

import os
import re
import shutil
from pathlib import Path

import yaml

from aero_arc_relay.config.defaults import apply_logging_defaults, apply_relay_defaults
from aero_arc_relay.config.dialects import resolve_dialect
from aero_arc_relay.config.endpoints import filter_endpoints
from aero_arc_relay.config.errors import (
    ConfigFileAccessError,
    ConfigParseError,
    NoEndpointsError,
    NoValidEndpointsError,
)
from aero_arc_relay.config.schema import Config, parse_config
from aero_arc_relay.core.logging import get_logger


DEFAULT_CONFIG_PATH = Path(__file__).with_name("defaults.yml")
_ENV_TOKEN_RE = re.compile(
    r"\$(?:\{([A-Za-z_][A-Za-z0-9_]*)(?::-(.*?))?\}|([A-Za-z_][A-Za-z0-9_]*))"
)
_BOOL_TAG = "tag:yaml.org,2002:bool"
_INT_TAG = "tag:yaml.org,2002:int"
_FLOAT_TAG = "tag:yaml.org,2002:float"
_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"
_YAML11_TAGS = {_BOOL_TAG, _INT_TAG, _FLOAT_TAG, _TIMESTAMP_TAG}

logger = get_logger(__name__)


class RelayYamlLoader(yaml.SafeLoader):
    """SafeLoader resolving plain scalars with the YAML 1.2 core schema.

    Only ``true``/``false`` are booleans and only canonical decimal, ``0o`` and
    ``0x`` forms are integers. ``yes``, ``007``, ``1:1`` and ``2024-01-01`` stay
    strings, so identifiers keep the text that was written.
    """


RelayYamlLoader.yaml_implicit_resolvers = {
    first: [(tag, pattern) for tag, pattern in resolvers if tag not in _YAML11_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
RelayYamlLoader.add_implicit_resolver(
    _BOOL_TAG,
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)
RelayYamlLoader.add_implicit_resolver(
    _INT_TAG,
    re.compile(
        r"""^(?:[-+]?(?:0|[1-9][0-9_]*)
        |0o[0-7_]+
        |0x[0-9a-fA-F_]+)$""",
        re.X,
    ),
    list("-+0123456789"),
)
RelayYamlLoader.add_implicit_resolver(
    _FLOAT_TAG,
    re.compile(
        r"""^(?:[-+]?(?:[0-9][0-9_]*)\.[0-9_]*(?:[eE][-+]?[0-9]+)?
        |[-+]?\.[0-9_]+(?:[eE][-+]?[0-9]+)?
        |[-+]?\.(?:inf|Inf|INF)
        |\.(?:nan|NaN|NAN))$""",
        re.X,
    ),
    list("-+0123456789."),
)


def expand_env(text: str) -> str:
    """Substitute ``$NAME``, ``${NAME}`` and ``${NAME:-default}`` from the environment.

    References to unset variables without a default are kept verbatim.
    """
    if "$" not in text:
        return text

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1) or match.group(3)
        default = match.group(2)
        resolved = os.environ.get(name)
        if resolved is not None:
            return resolved
        if default is not None:
            return default
        return match.group(0)

    return _ENV_TOKEN_RE.sub(_replace, text)


def _read_text(path: Path) -> str:
    try:
        with path.open("r", encoding="utf-8") as handle:
            return handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigFileAccessError(path, str(exc)) from exc


def _parse_text(text: str, path: Path) -> Config:
    try:
        raw = yaml.load(text, Loader=RelayYamlLoader)
    except yaml.YAMLError as exc:
        raise ConfigParseError(str(exc), path) from exc
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigParseError("top-level document must be a mapping", path)
    try:
        return parse_config(raw)
    except ConfigParseError as exc:
        raise ConfigParseError(str(exc), path) from exc


def load_config(path: Path | str) -> Config:
    """Load, validate and default the relay config at ``path``.

    Invalid endpoints are dropped with a warning; every other problem raises a
    ``ConfigError`` subclass and no config is returned.
    """
    path = Path(path)
    config = _parse_text(expand_env(_read_text(path)), path)

    endpoints = config.mavlink.endpoints
    if not endpoints:
        raise NoEndpointsError()

    survivors, rejections = filter_endpoints(endpoints)
    for rejection in rejections:
        logger.warning(
            "invalid MAVLink endpoint '%s': %s",
            rejection.endpoint.name,
            rejection.error,
            extra={
                "event_action": "endpoint_rejected",
                "endpoint": rejection.endpoint.name,
                "error": str(rejection.error),
            },
        )
    if not survivors:
        raise NoValidEndpointsError(len(rejections))
    config.mavlink.endpoints = survivors

    apply_relay_defaults(config)
    config.mavlink.dialect = resolve_dialect(config.mavlink.dialect_name)
    apply_logging_defaults(config)
    return config


def initialize_config(path: Path, force: bool = False) -> Path:
    """Write the sample relay config to ``path``, refusing to clobber an existing file."""
    if path.exists() and not force:
        raise FileExistsError(f"relay config already exists at '{path}'; pass force=True to overwrite")
    path.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(DEFAULT_CONFIG_PATH, path)
    return path
