"""Configuration model and derived helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from admin_bookmarks.config.derive import DEFAULT_STATUS
from admin_bookmarks.options import (
    DEFAULT_KEY_FORMAT,
    DEFAULT_MAX_BOOKMARKS,
    DEFAULT_PLACEHOLDER,
    slot_key,
)
from admin_bookmarks.pages import DEFAULT_LABEL_SEPARATOR

DEFAULT_EDITOR_PATH = "admin-theme/editor/"


@dataclass
class Config:
    """Resolved configuration for the bookmarks widget."""

    admin_url: str = ""
    max_bookmarks: int = DEFAULT_MAX_BOOKMARKS
    label_separator: str = DEFAULT_LABEL_SEPARATOR
    key_format: str = DEFAULT_KEY_FORMAT
    placeholder: str = DEFAULT_PLACEHOLDER
    page_status: str = DEFAULT_STATUS
    editor_path: str = DEFAULT_EDITOR_PATH
    slots: dict[str, Any] = field(default_factory=dict)

    def slot_key(self, slot: int) -> str:
        """Return the persisted option key for a 1-based slot."""
        return slot_key(slot, self.key_format)

    def get_slot(self, slot: int) -> str:
        """Return the stored path for a slot, or an empty string."""
        value = self.slots.get(self.slot_key(slot))
        return "" if value is None else str(value)
