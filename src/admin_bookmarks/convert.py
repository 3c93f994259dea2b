"""Dropdown markup to Markdown conversion."""

from __future__ import annotations

import re
from typing import Any

import mdformat
from bs4 import BeautifulSoup, Tag
from markdownify import MarkdownConverter

_LINK_TEXT_SPECIAL = re.compile(r"([\\`*_\[\]<>])")
_DESTINATION_SPECIAL = re.compile(r"[\s()<>]")


def _should_remove(tag: Tag) -> bool:
    """Check if a tag should be dropped before conversion."""
    if tag.name in {"svg", "img", "script", "style"}:
        return True
    classes = tag.get("class") or ()
    return "admin-bookmarks-toggle" in classes


def _link_destination(href: str) -> str:
    """Wrap destinations that would end or split an inline link in <...>."""
    if not _DESTINATION_SPECIAL.search(href):
        return href
    return "<" + href.replace("<", r"\<").replace(">", r"\>") + ">"


class BookmarkConverter(MarkdownConverter):
    """Converter that keeps bookmark labels and URLs intact as links."""

    def convert_a(self, el: Tag, text: str, *args: Any, **kwargs: Any) -> str:
        label = _LINK_TEXT_SPECIAL.sub(r"\\\1", el.get_text())
        href = el.get("href")
        if not href:
            return label
        return f"[{label}]({_link_destination(href)})"


_converter = BookmarkConverter(
    bullets="-",
    escape_misc=False,
    escape_underscores=False,
)


def dropdown_to_markdown(html: str) -> str:
    """Convert rendered dropdown markup to a Markdown list of links.

    Args:
        html: Markup produced by ``render_dropdown``.

    Returns:
        Markdown bullet list, or an empty string if no bookmark list is found.
    """
    soup = BeautifulSoup(html, "html.parser")

    content = soup.select_one(".admin-bookmarks-list")
    if content is None:
        return ""

    for element in content.find_all(_should_remove):
        element.decompose()

    md = _converter.convert_soup(content)
    return mdformat.text(md, options={"wrap": "no"})
