"""Helpers for deriving pages from raw host rows."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from admin_bookmarks.pages import Page

DEFAULT_STATUS = "live"


def pages_from_rows(
    rows: Iterable[Any], status: str | None = DEFAULT_STATUS
) -> dict[int, Page]:
    """Convert raw page rows to pages keyed by id.

    Rows without a status, or with a null one, are treated as live.
    Missing or null slugs and titles become empty strings.

    Args:
        rows: Mappings with id, title, slug, parent and status keys.
        status: Only keep rows with this status; None keeps every row.

    Returns:
        Pages keyed by id, in row order.

    Raises:
        ValueError: If a row is not a mapping or has an invalid id or parent.
    """
    pages: dict[int, Page] = {}
    for row in rows:
        if not isinstance(row, dict):
            raise ValueError(f"Page rows must be mappings, got {type(row).__name__}")
        if status is not None and (row.get("status") or DEFAULT_STATUS) != status:
            continue
        page_id = _to_int(row.get("id"), "id")
        if page_id <= 0:
            raise ValueError(f"Page 'id' must be positive, got {page_id}")
        pages[page_id] = Page(
            id=page_id,
            title=_to_text(row.get("title")),
            slug=_to_text(row.get("slug")),
            parent=_to_int(row.get("parent") or 0, "parent"),
        )
    return pages


def _to_int(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Page '{name}' must be an integer, got bool")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Page '{name}' must be an integer, got {value!r}") from None


def _to_text(value: Any) -> str:
    return "" if value is None else str(value)
