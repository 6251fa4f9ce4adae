"""Universal Editor field vocabulary and positional selectors.

This module is the single source of truth for the vocabulary used in
generated models:
- Field component types and value types understood by the editor
- Positional (nth-child) selectors that bind a field to a block cell
- Default field labels derived from a selector position
"""

import re
from dataclasses import dataclass
from enum import Enum


class FieldComponent(str, Enum):
    """Editor component types a model field can use."""

    TEXT = "text"
    RICHTEXT = "richtext"
    REFERENCE = "reference"
    MULTISELECT = "multiselect"
    SELECT = "select"
    BOOLEAN = "boolean"
    NUMBER = "number"
    DATE = "date"


class ValueType(str, Enum):
    """Value types stored by a model field."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"


# Ordinal labels for the first cells of a row; later cells get "Field N".
FIELD_LABELS: tuple[str, ...] = ("Title", "Content", "Image", "Description", "Link")


# === SELECTORS ===


def generate_child_selector(index: int, tag_name: str = "div") -> str:
    """Positional selector for the child at a zero-based index.

    Example:
        >>> generate_child_selector(0)
        'div:nth-child(1)'
    """
    return f"{tag_name}:nth-child({index + 1})"


def generate_image_selector(index: int) -> str:
    """Selector for the source of the image at a zero-based index."""
    return f"img:nth-child({index + 1})[src]"


def generate_image_alt_selector(index: int) -> str:
    """Selector for the alt text of the image at a zero-based index."""
    return f"img:nth-child({index + 1})[alt]"


@dataclass(frozen=True)
class SelectorInfo:
    """Parsed parts of a positional selector.

    Attributes:
        tag_name: Leading tag name, if any.
        index: Zero-based child index from nth-child, if any.
        attribute: Attribute in brackets, if any.
        is_image: Selector targets an img or picture.
        is_link: Selector targets a link href.
    """

    tag_name: str | None = None
    index: int | None = None
    attribute: str | None = None
    is_image: bool = False
    is_link: bool = False


def parse_selector(selector: str) -> SelectorInfo:
    """Split a positional selector into tag, index and attribute.

    Example:
        >>> parse_selector("img:nth-child(3)[alt]")
        SelectorInfo(tag_name='img', index=2, attribute='alt', is_image=True, is_link=False)
    """
    tag_match = re.match(r"^(\w+)", selector)
    index_match = re.search(r"nth-child\((\d+)\)", selector)
    attr_match = re.search(r"\[([^\]]+)\]", selector)

    return SelectorInfo(
        tag_name=tag_match.group(1) if tag_match else None,
        index=int(index_match.group(1)) - 1 if index_match else None,
        attribute=attr_match.group(1) if attr_match else None,
        is_image="img" in selector or "picture" in selector,
        is_link="a[href]" in selector,
    )


# === LABELS ===


def generate_field_label(selector: str, custom_label: str | None = None) -> str:
    """Default label for the field bound to a selector.

    Positional selectors map onto FIELD_LABELS by position and fall back
    to "Field N" (one-based) past the end of the table. Attribute-only
    selectors use the capitalized attribute name.

    Args:
        selector: Field selector, e.g. "div:nth-child(2)".
        custom_label: Label supplied by the author; wins when set.

    Returns:
        Human-readable label.
    """
    if custom_label:
        return custom_label

    info = parse_selector(selector)
    if info.index is not None:
        position = info.index + 1
        if info.index < len(FIELD_LABELS):
            return FIELD_LABELS[info.index]
        return f"Field {position}"

    if info.attribute:
        attr = info.attribute
        return attr[0].upper() + attr[1:].replace("-", " ", 1)

    return "Content"


__all__ = [
    # Enums
    "FieldComponent",
    "ValueType",
    # Labels
    "FIELD_LABELS",
    "generate_field_label",
    # Selectors
    "SelectorInfo",
    "generate_child_selector",
    "generate_image_selector",
    "generate_image_alt_selector",
    "parse_selector",
]
