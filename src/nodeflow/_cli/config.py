"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass
from pathlib import Path

from nodeflow._errors import ConfigError

DEFAULT_PRESET = "wave"
DEFAULT_TICKS = 10
DEFAULT_DT = 0.1


@dataclass(slots=True, frozen=True)
class NodeflowConfig:
    """Configuration loaded from the ``[tool.nodeflow]`` table of pyproject.toml.

    Fields left as None fall back to the CLI defaults.
    """

    preset: str | None = None
    ticks: int | None = None
    dt: float | None = None


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Find pyproject.toml by walking up from start_dir.

    Args:
        start_dir: Starting directory. Defaults to current working directory.

    Returns:
        Path to pyproject.toml if found, None otherwise.

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        candidate = current / "pyproject.toml"
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            # Reached filesystem root
            return None
        current = parent


def _parse_ticks(value: object) -> int:
    # bool is an int subclass; `ticks = true` is a typo, not a count
    if not isinstance(value, int) or isinstance(value, bool) or value < 1:
        msg = f"Invalid [tool.nodeflow].ticks: expected positive integer, got {value!r}"
        raise ConfigError(msg)
    return value


def _parse_dt(value: object) -> float:
    if not isinstance(value, int | float) or isinstance(value, bool) or value < 0:
        msg = f"Invalid [tool.nodeflow].dt: expected non-negative number of seconds, got {value!r}"
        raise ConfigError(msg)
    return float(value)


def load_config(pyproject_path: Path) -> NodeflowConfig:
    """Load and validate [tool.nodeflow] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed NodeflowConfig

    Raises:
        ConfigError: If the configuration is invalid

    """

    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    section = data.get("tool", {}).get("nodeflow", {})
    if not section:
        return NodeflowConfig()

    preset: str | None = None
    if "preset" in section:
        preset = section["preset"]
        if not isinstance(preset, str):
            msg = "Invalid [tool.nodeflow].preset: expected string"
            raise ConfigError(msg)

    ticks = _parse_ticks(section["ticks"]) if "ticks" in section else None
    dt = _parse_dt(section["dt"]) if "dt" in section else None

    return NodeflowConfig(preset=preset, ticks=ticks, dt=dt)


def get_config() -> NodeflowConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        NodeflowConfig (may be empty if no pyproject.toml or no [tool.nodeflow] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return NodeflowConfig()
    return load_config(pyproject_path)
