"""Configuration loading and resolution."""

from admin_bookmarks.config.load import load_config
from admin_bookmarks.config.model import Config

__all__ = ["Config", "load_config"]
