"""Field vocabulary, positional selectors and default labels."""

from ue_enabler.schema.lib import (
    FIELD_LABELS,
    FieldComponent,
    SelectorInfo,
    ValueType,
    generate_child_selector,
    generate_field_label,
    generate_image_alt_selector,
    generate_image_selector,
    parse_selector,
)

__all__ = [
    "FieldComponent",
    "ValueType",
    "FIELD_LABELS",
    "generate_field_label",
    "SelectorInfo",
    "generate_child_selector",
    "generate_image_selector",
    "generate_image_alt_selector",
    "parse_selector",
]
