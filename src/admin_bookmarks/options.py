"""Settings field descriptors for choosing bookmarked pages."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from html import escape
from typing import Any

DEFAULT_MAX_BOOKMARKS = 10
DEFAULT_KEY_FORMAT = "bookmark_{slot}_url"
DEFAULT_PLACEHOLDER = "-- Select a Page --"
DESCRIPTION_FIELD = "bookmark_desc"


@dataclass
class FieldSpec:
    """A single field for the host's settings UI."""

    name: str
    type: str
    label: str = ""
    html: str = ""
    options: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain mapping, omitting unused keys."""
        data: dict[str, Any] = {"type": self.type}
        if self.label:
            data["label"] = self.label
        if self.type == "custom":
            data["html"] = self.html
        else:
            data["options"] = dict(self.options)
        return data


def slot_key(slot: int, key_format: str = DEFAULT_KEY_FORMAT) -> str:
    """Return the persisted option key for a 1-based slot."""
    return key_format.format(slot=slot)


def default_description(max_bookmarks: int, editor_url: str | None = None) -> str:
    """Build the help paragraph shown above the bookmark selectors."""
    text = f"Select up to {max_bookmarks} pages to bookmark for quick access in the admin area."
    if editor_url:
        text += (
            f' Once selected, go to the <a href="{escape(editor_url)}">'
            "Admin Template Editor</a> and drag the Admin Bookmarks box"
            " to your desired templates. Suggested placement:"
            " <code>Body</code> -&gt; <code>Section:Header</code> -&gt;"
            " <code>Container:Header</code> -&gt;"
            " <em>Placed below the Flex container</em>."
        )
    return f'<p style="max-width:664px">{text}</p>'


def describe_options(
    path_index: Mapping[str, str],
    max_bookmarks: int = DEFAULT_MAX_BOOKMARKS,
    *,
    key_format: str = DEFAULT_KEY_FORMAT,
    placeholder: str = DEFAULT_PLACEHOLDER,
    description: str | None = None,
) -> list[FieldSpec]:
    """Describe the settings fields for configuring bookmark slots.

    Args:
        path_index: Path -> label mapping of selectable pages.
        max_bookmarks: Number of slot selectors to produce.
        key_format: Format string for slot field names; receives ``slot``.
        placeholder: Label of the empty "no selection" choice.
        description: HTML for the leading help field. Defaults to a
            generic paragraph.

    Returns:
        The description field followed by one select field per slot.

    Raises:
        ValueError: If max_bookmarks is negative.
    """
    if max_bookmarks < 0:
        raise ValueError(f"max_bookmarks must be >= 0, got {max_bookmarks}")

    if description is None:
        description = default_description(max_bookmarks)

    fields = [FieldSpec(name=DESCRIPTION_FIELD, type="custom", html=description)]
    choices = {"": placeholder, **path_index}
    for slot in range(1, max_bookmarks + 1):
        fields.append(
            FieldSpec(
                name=slot_key(slot, key_format),
                type="select",
                label=f"Bookmark {slot}",
                options=dict(choices),
            )
        )
    return fields
