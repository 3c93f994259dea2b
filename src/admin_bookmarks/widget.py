"""The admin bookmarks widget as called by the host framework."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from admin_bookmarks.config import Config
from admin_bookmarks.config.model import DEFAULT_EDITOR_PATH
from admin_bookmarks.errors import PageStoreUnavailable
from admin_bookmarks.options import (
    DEFAULT_KEY_FORMAT,
    DEFAULT_MAX_BOOKMARKS,
    DEFAULT_PLACEHOLDER,
    FieldSpec,
    default_description,
    describe_options,
)
from admin_bookmarks.pages import DEFAULT_LABEL_SEPARATOR, PageIndex, build_page_index
from admin_bookmarks.render import render_dropdown
from admin_bookmarks.resolve import ResolvedBookmark, resolve
from admin_bookmarks.stores import (
    AdminUrlBuilder,
    MappingSettingsStore,
    PageStore,
    SettingsStore,
    UrlBuilder,
    YamlPageStore,
)


@dataclass
class WidgetResult:
    """Result of building the dropdown for one request."""

    html: str
    bookmarks: list[ResolvedBookmark]
    skipped: list[tuple[int, str]]
    warnings: list[str]


class AdminBookmarks:
    """Bookmarks dropdown for the admin header.

    Every call reads the page store again; nothing is cached between calls.
    """

    def __init__(
        self,
        page_store: PageStore,
        settings_store: SettingsStore,
        url_builder: UrlBuilder,
        *,
        max_bookmarks: int = DEFAULT_MAX_BOOKMARKS,
        label_separator: str = DEFAULT_LABEL_SEPARATOR,
        key_format: str = DEFAULT_KEY_FORMAT,
        placeholder: str = DEFAULT_PLACEHOLDER,
        editor_path: str | None = DEFAULT_EDITOR_PATH,
    ) -> None:
        if max_bookmarks < 0:
            raise ValueError(f"max_bookmarks must be >= 0, got {max_bookmarks}")
        self.page_store = page_store
        self.settings_store = settings_store
        self.url_builder = url_builder
        self.max_bookmarks = max_bookmarks
        self.label_separator = label_separator
        self.key_format = key_format
        self.placeholder = placeholder
        self.editor_path = editor_path

    @classmethod
    def from_config(cls, config: Config, site_path: Path) -> AdminBookmarks:
        """Wire the widget to a site file and its plugin options."""
        return cls(
            YamlPageStore(site_path, status=config.page_status),
            MappingSettingsStore(config.slots, config.key_format),
            AdminUrlBuilder(config.admin_url),
            max_bookmarks=config.max_bookmarks,
            label_separator=config.label_separator,
            key_format=config.key_format,
            placeholder=config.placeholder,
            editor_path=config.editor_path,
        )

    def path_index(self) -> PageIndex:
        """Index the host's current live pages."""
        pages = {page.id: page for page in self.page_store.list_live_pages()}
        return build_page_index(pages, self.label_separator)

    def options(self) -> list[FieldSpec]:
        """Describe the settings fields for choosing bookmarks."""
        editor_url = (
            self.url_builder.build(self.editor_path) if self.editor_path else None
        )
        return describe_options(
            self.path_index().entries,
            self.max_bookmarks,
            key_format=self.key_format,
            placeholder=self.placeholder,
            description=default_description(self.max_bookmarks, editor_url),
        )

    def bookmarks(self) -> list[ResolvedBookmark]:
        """Resolve the persisted slots against the current pages."""
        return self._resolve(self.path_index())

    def build(self) -> WidgetResult:
        """Build the dropdown, rendering nothing if pages can't be read."""
        try:
            index = self.path_index()
        except PageStoreUnavailable as exc:
            return WidgetResult(html="", bookmarks=[], skipped=[], warnings=[str(exc)])

        bookmarks = self._resolve(index)
        warnings = [
            f"Page {page_id} left out of bookmarks: {reason}"
            for page_id, reason in index.skipped
        ]
        return WidgetResult(
            html=render_dropdown(bookmarks, self.url_builder),
            bookmarks=bookmarks,
            skipped=index.skipped,
            warnings=warnings,
        )

    def render(self) -> str:
        """Render the dropdown markup for the admin header."""
        return self.build().html

    def _resolve(self, index: PageIndex) -> list[ResolvedBookmark]:
        slot_values = self.settings_store.get_slot_values(self.max_bookmarks)
        return resolve(slot_values, index.entries, self.max_bookmarks)
