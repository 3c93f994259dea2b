"""Admin bookmarks dropdown widget."""

__version__ = "0.2.0"
