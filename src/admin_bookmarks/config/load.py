"""Configuration loading from the site YAML file."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from admin_bookmarks.config.model import Config
from admin_bookmarks.config.plugin import get_plugin_config

_STRING_OPTIONS = (
    "label_separator",
    "key_format",
    "placeholder",
    "page_status",
    "editor_path",
)


def read_site_file(config_path: Path) -> dict[str, Any]:
    """Parse the site file into a mapping.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the document is not a mapping.
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, encoding="utf-8") as f:
        raw = yaml.load(f, Loader=yaml.SafeLoader)

    if not isinstance(raw, dict):
        raise ValueError(f"Config file must be a mapping: {config_path}")
    return raw


def load_config(config_path: Path) -> Config:
    """Load and resolve configuration from the site file.

    Args:
        config_path: Path to the site YAML file.

    Returns:
        Resolved Config object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If the file or plugin options are malformed.
    """
    return _config_from_site(read_site_file(config_path))


def _config_from_site(raw: dict[str, Any]) -> Config:
    """Build a Config from a parsed site mapping."""
    admin_url = raw.get("admin_url") or ""
    if not isinstance(admin_url, str):
        raise ValueError(
            f"'admin_url' must be a string, got {type(admin_url).__name__}"
        )

    options = dict(get_plugin_config(raw) or {})
    config = Config(admin_url=admin_url.rstrip("/"))

    if "max_bookmarks" in options:
        max_bookmarks = options.pop("max_bookmarks")
        if isinstance(max_bookmarks, bool) or not isinstance(max_bookmarks, int):
            raise ValueError(
                "admin_bookmarks 'max_bookmarks' must be an integer, "
                f"got {type(max_bookmarks).__name__}"
            )
        if max_bookmarks < 0:
            raise ValueError(
                f"admin_bookmarks 'max_bookmarks' must be >= 0, got {max_bookmarks}"
            )
        config.max_bookmarks = max_bookmarks

    for name in _STRING_OPTIONS:
        if name not in options:
            continue
        value = options.pop(name)
        if not isinstance(value, str):
            raise ValueError(
                f"admin_bookmarks '{name}' must be a string, "
                f"got {type(value).__name__}"
            )
        setattr(config, name, value)

    if "{slot}" not in config.key_format:
        raise ValueError("admin_bookmarks 'key_format' must contain '{slot}'")

    # Whatever remains is persisted slot values
    for key in options:
        if not isinstance(key, str):
            raise ValueError(
                "admin_bookmarks option keys must be strings, "
                f"got {type(key).__name__}"
            )
    config.slots = options
    return config
