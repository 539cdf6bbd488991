from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

import pytest


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    # configure_logging() detaches the package logger from the root; undo it so
    # caplog keeps seeing records in later tests.
    root = logging.getLogger("aero_arc_relay")
    for handler in list(root.handlers):
        handler.close()
    root.handlers.clear()
    root.propagate = True
    root.setLevel(logging.NOTSET)
    if hasattr(root, "_aero_arc_relay_configured"):
        delattr(root, "_aero_arc_relay_configured")


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str], Path]:
    def _write(content: str, name: str = "relay.yml") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
