"""Path and label index built from admin page records."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field

from admin_bookmarks.errors import CycleDetected

DEFAULT_LABEL_SEPARATOR = " -- "


@dataclass(frozen=True)
class Page:
    """An admin content page as read from the host."""

    id: int
    title: str = ""
    slug: str = ""
    parent: int = 0


@dataclass
class PageIndex:
    """Result of indexing pages (path -> label)."""

    entries: dict[str, str] = field(default_factory=dict)
    skipped: list[tuple[int, str]] = field(default_factory=list)


def _ancestry(pages: Mapping[int, Page], page_id: int) -> Iterator[Page]:
    """Yield the page and its ancestors, leaf first.

    Raises:
        CycleDetected: If a page is reached twice during the walk.
    """
    chain: list[int] = []
    seen: set[int] = set()
    current = page_id
    while current and current in pages:
        if current in seen:
            raise CycleDetected(page_id, [*chain, current])
        chain.append(current)
        seen.add(current)
        page = pages[current]
        yield page
        current = page.parent


def build_path(pages: Mapping[int, Page], page_id: int) -> str:
    """Build the slash-joined slug path of a page, root first.

    Ancestors whose slug is empty after trimming add no segment.

    Args:
        pages: Pages keyed by id.
        page_id: Id of the page to build the path for.

    Returns:
        The path, or an empty string if the page is unknown.
    """
    segments: list[str] = []
    for page in _ancestry(pages, page_id):
        slug = (page.slug or "").strip()
        if slug:
            segments.insert(0, slug)
    return "/".join(segments)


def build_label(
    pages: Mapping[int, Page],
    page_id: int,
    separator: str = DEFAULT_LABEL_SEPARATOR,
) -> str:
    """Build the breadcrumb label of a page from ancestor titles, root first.

    Titles are kept as-is, including those of pages without a slug.
    """
    titles = [page.title or "" for page in _ancestry(pages, page_id)]
    return separator.join(reversed(titles))


def build_page_index(
    pages: Mapping[int, Page],
    separator: str = DEFAULT_LABEL_SEPARATOR,
) -> PageIndex:
    """Index every page that has its own slug by path.

    Pages caught in a parent cycle are left out and recorded in
    ``skipped``. On a path collision the last page wins.

    Args:
        pages: Pages keyed by id, in the order choices should be offered.
        separator: Delimiter placed between titles in labels.

    Returns:
        PageIndex with path -> label entries in page order.
    """
    index = PageIndex()
    for page_id, page in pages.items():
        if not (page.slug or "").strip():
            continue
        try:
            path = build_path(pages, page_id)
            label = build_label(pages, page_id, separator)
        except CycleDetected:
            index.skipped.append((page_id, "parent cycle detected"))
            continue
        index.entries[path] = label
    return index
