"""
Configuration loader — reads provision.yml into the Settings model.

Reads YAML, validates against the Pydantic schema, and returns a typed
``Settings``.  When no file is given and none is found, the built-in
defaults are used.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from ghidra_provisioner.core.models.settings import Settings

logger = logging.getLogger(__name__)

SETTINGS_FILE = "provision.yml"


class ConfigError(Exception):
    """Raised when provisioning configuration is invalid or missing."""


class _SettingsLoader(yaml.SafeLoader):
    """SafeLoader that keeps an unquoted ``mode`` as its literal text.

    ``mode: 500`` means octal 500, not decimal.
    """


_INT_TAG = "tag:yaml.org,2002:int"


def _construct_mapping(loader: _SettingsLoader, node: yaml.MappingNode) -> dict:
    mapping = loader.construct_mapping(node, deep=True)
    for key_node, value_node in node.value:
        if (
            isinstance(key_node, yaml.ScalarNode)
            and key_node.value == "mode"
            and isinstance(value_node, yaml.ScalarNode)
            and value_node.tag == _INT_TAG
        ):
            mapping["mode"] = value_node.value
    return mapping


_SettingsLoader.add_constructor("tag:yaml.org,2002:map", _construct_mapping)


def find_settings_file(start_dir: Path | None = None) -> Path | None:
    """Nearest provision.yml in ``start_dir`` (default: cwd) or an ancestor."""
    start = (start_dir or Path.cwd()).resolve()
    for directory in (start, *start.parents):
        candidate = directory / SETTINGS_FILE
        if candidate.is_file():
            return candidate
    return None


def parse_settings(data: object, source: str = "<settings>") -> Settings:
    """Validate a raw mapping into ``Settings``.

    The mapping may be flat or wrapped under a ``provision`` key.

    Raises:
        ConfigError: Not a mapping, or schema validation failed.
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {source}, got {type(data).__name__}")

    section = data.get("provision")
    if isinstance(section, dict):
        data = section

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid provisioning configuration in {source}: {e}") from e


def _read_yaml(path: Path) -> object:
    try:
        with path.open(encoding="utf-8") as fh:
            return yaml.load(fh, Loader=_SettingsLoader)
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e


def load_settings(path: Path | None = None, *, search: bool = True) -> Settings:
    """Load and validate provisioning settings.

    Args:
        path: Explicit path to provision.yml.  Must exist.
        search: When ``path`` is None, search upward from cwd.

    Returns:
        Validated Settings (defaults when no file applies).

    Raises:
        ConfigError: Explicit file missing, unreadable, or invalid.
    """
    if path is None and search:
        path = find_settings_file()
    if path is None:
        logger.debug("No %s found, using built-in defaults", SETTINGS_FILE)
        return Settings()

    logger.debug("Loading settings from %s", path)
    settings = parse_settings(_read_yaml(path), str(path))
    logger.info(
        "Loaded settings from %s (variant=%s, release=%s)",
        path, settings.variant, settings.release.version,
    )
    return settings
