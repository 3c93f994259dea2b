"""Dropdown markup for resolved bookmarks."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from bs4 import BeautifulSoup
from bs4.element import Script, Stylesheet

from admin_bookmarks.resolve import ResolvedBookmark

if TYPE_CHECKING:
    from admin_bookmarks.stores import UrlBuilder

DROPDOWN_CSS = """
.admin-bookmarks-dropdown { position: relative; padding-top: 10px; font-size: 17px; }
.admin-bookmarks-toggle { color: unset; cursor: pointer; display: flex; align-items: center; column-gap: 5px; width: fit-content; }
.admin-bookmarks-list { display: none; position: absolute; top: 100%; left: 0; background: white; border: 1px solid rgba(0, 0, 0, 0.1); margin: 0; padding: 4px 0; list-style: none; z-index: 9999; border-radius: 7px; }
.admin-bookmarks-link { display: block; text-decoration: none; color: #333; padding: 4px 22.5px; }
.admin-bookmarks-link:hover { text-decoration: underline; }
.admin-bookmarks-dropdown.open .admin-bookmarks-list { display: block; }
"""

DROPDOWN_JS = """
document.addEventListener('DOMContentLoaded', function() {
    const btn = document.querySelector('.admin-bookmarks-dropdown .admin-bookmarks-toggle');
    const menu = document.querySelector('.admin-bookmarks-dropdown .admin-bookmarks-list');
    if (btn && menu) {
        btn.addEventListener('click', function(e) {
            e.preventDefault();
            menu.style.display = (menu.style.display === 'block') ? 'none' : 'block';
        });
        document.addEventListener('click', function(e) {
            if (!btn.contains(e.target) && !menu.contains(e.target)) {
                menu.style.display = 'none';
            }
        });
    }
});
"""

MENU_ICON = (
    '<svg class="icon icon-menu" xmlns="http://www.w3.org/2000/svg" width="20" '
    'height="20" viewBox="0 0 24 24" fill="none" stroke="currentColor" '
    'stroke-width="2" stroke-linecap="round" stroke-linejoin="round">'
    '<line x1="3" y1="6" x2="21" y2="6"></line>'
    '<line x1="3" y1="12" x2="21" y2="12"></line>'
    '<line x1="3" y1="18" x2="21" y2="18"></line></svg>'
)


def render_dropdown(
    bookmarks: Sequence[ResolvedBookmark],
    url_builder: UrlBuilder | None = None,
    *,
    icon: str = MENU_ICON,
) -> str:
    """Render the bookmarks dropdown.

    Args:
        bookmarks: Resolved bookmarks, in display order.
        url_builder: Turns stored paths into admin URLs. Paths are used
            as-is when omitted.
        icon: Markup placed before the toggle text.

    Returns:
        Style, dropdown and toggle script markup, or an empty string when
        there are no bookmarks.
    """
    if not bookmarks:
        return ""

    soup = BeautifulSoup("", "html.parser")

    style = soup.new_tag("style")
    style.append(Stylesheet(DROPDOWN_CSS))
    soup.append(style)

    dropdown = soup.new_tag("div", attrs={"class": "admin-bookmarks-dropdown"})
    toggle = soup.new_tag("a", attrs={"class": "admin-bookmarks-toggle"})
    if icon:
        icon_soup = BeautifulSoup(icon, "html.parser")
        for element in list(icon_soup.contents):
            toggle.append(element.extract())
    toggle.append("Bookmarks")
    dropdown.append(toggle)

    menu = soup.new_tag("ul", attrs={"class": "admin-bookmarks-list"})
    for bookmark in bookmarks:
        href = url_builder.build(bookmark.url) if url_builder else bookmark.url
        item = soup.new_tag("li", attrs={"class": "admin-bookmarks-item"})
        link = soup.new_tag("a", attrs={"href": href, "class": "admin-bookmarks-link"})
        link.string = bookmark.label
        item.append(link)
        menu.append(item)
    dropdown.append(menu)
    soup.append(dropdown)

    script = soup.new_tag("script")
    script.append(Script(DROPDOWN_JS))
    soup.append(script)

    return str(soup)
