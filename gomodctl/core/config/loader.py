"""
Configuration loader — reads .gomodctl.yml into Settings.

The file is optional.  Values are layered:

    defaults  <  environment (GOMODCTL_GO, GO111MODULE)  <  .gomodctl.yml

YAML is validated against the Pydantic Settings schema.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from gomodctl.core.models.settings import Settings

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = ".gomodctl.yml"

_MODULE_MODES = ("on", "off", "auto")


class ConfigError(Exception):
    """Raised when the configuration file is invalid or unreadable."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for .gomodctl.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to the config file, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def find_manifest(start_dir: Path | None = None, name: str = "go.mod") -> Path | None:
    """Locate the nearest go.mod at or above ``start_dir``."""
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):
        candidate = current / name
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def env_defaults(environ: dict[str, str] | None = None) -> dict[str, object]:
    """Settings seeded from the process environment."""
    env = os.environ if environ is None else environ
    data: dict[str, object] = {}

    if env.get("GOMODCTL_GO"):
        data["go_binary"] = env["GOMODCTL_GO"]

    mode = env.get("GO111MODULE", "").strip().lower()
    if mode in _MODULE_MODES:
        data["go111module"] = mode
    elif mode:
        logger.warning("Ignoring unrecognized GO111MODULE=%s, using auto", mode)

    return data


def load_settings(
    path: Path | None = None,
    environ: dict[str, str] | None = None,
    start_dir: Path | None = None,
) -> Settings:
    """Load settings from the environment and an optional config file.

    Args:
        path: Explicit config path. If None, searches upward from ``start_dir``.
        environ: Environment mapping (default: os.environ).
        start_dir: Where the upward search begins (default: cwd).

    Raises:
        ConfigError: If the file is missing (when explicit) or invalid.
    """
    data = env_defaults(environ)

    explicit = path is not None
    if path is None:
        path = find_config_file(start_dir)

    if path is None:
        return Settings.model_validate(data)

    if not path.is_file():
        if explicit:
            raise ConfigError(f"Config file not found: {path}")
        return Settings.model_validate(data)

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        file_data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if file_data is None:
        file_data = {}
    if not isinstance(file_data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(file_data).__name__}")

    # YAML 1.1 reads bare on/off as booleans
    mode = file_data.get("go111module")
    if isinstance(mode, bool):
        file_data["go111module"] = "on" if mode else "off"

    data.update(file_data)

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    logger.info("Loaded config from %s", path)
    return settings
