"""Plugin section helpers for the site config."""

from __future__ import annotations

from typing import Any

PLUGIN_NAME = "admin_bookmarks"


def get_plugin_config(raw: dict[str, Any]) -> dict[str, Any] | None:
    """Extract the admin_bookmarks plugin options from site config plugins.

    Two plugin config styles are supported:

    List form:
        plugins:
          - admin_bookmarks:
              bookmark_1_url: settings

    Mapping form:
        plugins:
          admin_bookmarks:
            bookmark_1_url: settings
    """
    plugins = raw.get("plugins")
    if plugins is None:
        return None

    # Mapping form: plugins is a dict with plugin names as keys
    if isinstance(plugins, dict):
        if PLUGIN_NAME in plugins:
            config = plugins[PLUGIN_NAME]
            # Plugin with no options is represented as empty dict or None
            return config if isinstance(config, dict) else {}
        return None

    if not isinstance(plugins, list):
        raise ValueError(
            f"'plugins' must be a list or mapping, got {type(plugins).__name__}"
        )

    # List form: plugins is a list of strings or dicts
    for plugin in plugins:
        if isinstance(plugin, dict) and PLUGIN_NAME in plugin:
            config = plugin[PLUGIN_NAME]
            return config if isinstance(config, dict) else {}
        if plugin == PLUGIN_NAME:
            return {}
    return None


def has_plugin(plugins: Any) -> bool:
    """Check whether a plugins list or mapping already names the plugin."""
    if isinstance(plugins, dict):
        return PLUGIN_NAME in plugins
    if isinstance(plugins, list):
        return any(
            plugin == PLUGIN_NAME
            or (isinstance(plugin, dict) and PLUGIN_NAME in plugin)
            for plugin in plugins
        )
    return False
