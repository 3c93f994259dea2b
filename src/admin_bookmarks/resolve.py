"""Resolve persisted bookmark slots against the page index."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class ResolvedBookmark:
    """A bookmark whose stored path matches a live page."""

    label: str
    url: str


def resolve(
    slot_values: Sequence[str | None],
    path_index: Mapping[str, str],
    max_bookmarks: int | None = None,
) -> list[ResolvedBookmark]:
    """Resolve slot values to bookmarks, keeping slot order.

    Empty slots and paths no longer in the index are dropped silently.

    Args:
        slot_values: Stored path per slot, in slot order.
        path_index: Path -> label mapping of live pages.
        max_bookmarks: Number of slots to read. Defaults to all of them.

    Returns:
        Resolved bookmarks, at most one per slot read.
    """
    if max_bookmarks is not None:
        slot_values = slot_values[: max(max_bookmarks, 0)]

    bookmarks: list[ResolvedBookmark] = []
    for value in slot_values:
        url = (value or "").strip()
        if url and url in path_index:
            bookmarks.append(ResolvedBookmark(label=path_index[url], url=url))
    return bookmarks
