"""Unit tests for the field vocabulary module."""

import pytest

from ue_enabler.schema import (
    FIELD_LABELS,
    FieldComponent,
    ValueType,
    generate_child_selector,
    generate_field_label,
    generate_image_alt_selector,
    generate_image_selector,
    parse_selector,
)


class TestEnums:
    """Tests for field vocabulary enums."""

    @pytest.mark.unit
    def test_field_components(self):
        """All editor component types are defined."""
        assert {c.value for c in FieldComponent} == {
            "text",
            "richtext",
            "reference",
            "multiselect",
            "select",
            "boolean",
            "number",
            "date",
        }

    @pytest.mark.unit
    def test_value_types(self):
        """String is the default value type used for generated fields."""
        assert ValueType.STRING.value == "string"
        assert len(ValueType) == 5


class TestSelectors:
    """Tests for positional selector helpers."""

    @pytest.mark.unit
    def test_child_selector_is_one_based(self):
        """Zero-based index becomes a one-based nth-child."""
        assert generate_child_selector(0) == "div:nth-child(1)"
        assert generate_child_selector(4, "p") == "p:nth-child(5)"

    @pytest.mark.unit
    def test_image_selectors(self):
        """Image selectors target src and alt attributes."""
        assert generate_image_selector(2) == "img:nth-child(3)[src]"
        assert generate_image_alt_selector(2) == "img:nth-child(3)[alt]"

    @pytest.mark.unit
    def test_parse_selector(self):
        """Parser extracts tag, index and attribute."""
        info = parse_selector("img:nth-child(3)[alt]")
        assert info.tag_name == "img"
        assert info.index == 2
        assert info.attribute == "alt"
        assert info.is_image is True
        assert info.is_link is False

    @pytest.mark.unit
    def test_parse_link_selector(self):
        """Link href selectors are recognized."""
        info = parse_selector("a[href]")
        assert info.is_link is True
        assert info.index is None


class TestFieldLabels:
    """Tests for default label generation."""

    @pytest.mark.unit
    def test_labels_follow_table(self):
        """First five positions use the ordinal label table."""
        labels = [generate_field_label(generate_child_selector(i)) for i in range(5)]
        assert labels == list(FIELD_LABELS)

    @pytest.mark.unit
    def test_label_fallback(self):
        """Positions past the table fall back to a numbered label."""
        assert generate_field_label("div:nth-child(6)") == "Field 6"

    @pytest.mark.unit
    def test_custom_label_wins(self):
        """Author-supplied labels take priority."""
        assert generate_field_label("div:nth-child(1)", "Heading") == "Heading"

    @pytest.mark.unit
    def test_attribute_label(self):
        """Attribute-only selectors use the attribute name."""
        assert generate_field_label("img[data-src]") == "Data src"

    @pytest.mark.unit
    def test_plain_selector(self):
        """Selectors without position or attribute default to Content."""
        assert generate_field_label("p") == "Content"
