from __future__ import annotations

from pathlib import Path
import tomllib


def _pyproject() -> dict:
    pyproject_path = Path(__file__).resolve().parents[2] / "pyproject.toml"
    return tomllib.loads(pyproject_path.read_text(encoding="utf-8"))


def test_runtime_dependencies_include_pyyaml() -> None:
    dependencies = _pyproject().get("project", {}).get("dependencies", [])
    assert any(str(item).startswith("PyYAML") for item in dependencies)


def test_sample_config_is_packaged() -> None:
    package_data = _pyproject().get("tool", {}).get("setuptools", {}).get("package-data", {})
    assert "*.yml" in package_data.get("aero_arc_relay.config", [])
