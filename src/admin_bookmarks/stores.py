"""Host collaborator interfaces and YAML-file reference adapters."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Protocol

import yaml

from admin_bookmarks.config.derive import DEFAULT_STATUS, pages_from_rows
from admin_bookmarks.config.load import read_site_file
from admin_bookmarks.errors import PageStoreUnavailable
from admin_bookmarks.options import DEFAULT_KEY_FORMAT, slot_key
from admin_bookmarks.pages import Page


class PageStore(Protocol):
    """Source of the host's live admin pages."""

    def list_live_pages(self) -> Sequence[Page]: ...


class SettingsStore(Protocol):
    """Source of persisted bookmark slot values."""

    def get_slot_values(self, max_bookmarks: int) -> list[str | None]: ...


class UrlBuilder(Protocol):
    """Turns a stored page path into an admin URL."""

    def build(self, path: str) -> str: ...


class YamlPageStore:
    """Reads pages from the ``pages`` list of a site file on every call."""

    def __init__(self, site_path: Path, status: str | None = DEFAULT_STATUS) -> None:
        self.site_path = site_path
        self.status = status

    def list_live_pages(self) -> list[Page]:
        try:
            raw = read_site_file(self.site_path)
            rows = raw.get("pages") or []
            if not isinstance(rows, list):
                raise ValueError(
                    f"'pages' must be a list, got {type(rows).__name__}"
                )
            pages = pages_from_rows(rows, status=self.status)
        except (OSError, ValueError, yaml.YAMLError) as exc:
            raise PageStoreUnavailable(
                f"Cannot read pages from {self.site_path}: {exc}"
            ) from exc
        return list(pages.values())


class MappingSettingsStore:
    """Reads slot values from a mapping of persisted option keys."""

    def __init__(
        self, values: Mapping[str, Any], key_format: str = DEFAULT_KEY_FORMAT
    ) -> None:
        self.values = values
        self.key_format = key_format

    def get_slot_values(self, max_bookmarks: int) -> list[str | None]:
        slot_values: list[str | None] = []
        for slot in range(1, max_bookmarks + 1):
            value = self.values.get(slot_key(slot, self.key_format))
            slot_values.append(None if value is None else str(value))
        return slot_values


class AdminUrlBuilder:
    """Joins page paths onto the admin base URL."""

    def __init__(self, admin_url: str = "") -> None:
        self.admin_url = admin_url.rstrip("/")

    def build(self, path: str) -> str:
        if not self.admin_url:
            return path
        return f"{self.admin_url}/{path.lstrip('/')}"
