"""Errors raised by the bookmarks core."""

from __future__ import annotations


class CycleDetected(ValueError):
    """Raised when walking a page's ancestry revisits a page."""

    def __init__(self, page_id: int, cycle: list[int]) -> None:
        self.page_id = page_id
        self.cycle = cycle
        chain = " -> ".join(str(i) for i in cycle)
        super().__init__(f"Parent cycle detected for page {page_id}: {chain}")


class PageStoreUnavailable(RuntimeError):
    """Raised when the host's page collection cannot be read."""
