"""Authoring schema synthesis.

Turns an AnalysisRecord into the definitions, models and filters the
Universal Editor reads, and provides the fixed schemas for built-in
content types (page metadata, text, image, section) plus the aggregation
templates that stitch every per-file schema into the root configs.

Example:
    >>> record = analyze(code)
    >>> schema = synthesize("hero-banner", record)
    >>> schema.definitions[0].title
    'Hero Banner'
"""

import logging
from typing import Any, Mapping, Sequence

from ue_enabler.ir import (
    MULTIPLE,
    AnalysisRecord,
    AuthoringSchema,
    ComponentFilter,
    ComponentModel,
    DaPlugin,
    Definition,
    FieldOption,
    FieldOverride,
    ModelField,
    Plugins,
    StructureType,
)
from ue_enabler.schema import (
    FieldComponent,
    ValueType,
    generate_child_selector,
    generate_field_label,
    generate_image_alt_selector,
    generate_image_selector,
)

logger = logging.getLogger(__name__)

OverrideLike = FieldOverride | Mapping[str, Any] | None

# File names written under ue/models by generate_base_configs.
PAGE_CONFIG_FILE = "page.json"
TEXT_CONFIG_FILE = "text.json"
IMAGE_CONFIG_FILE = "image.json"
SECTION_CONFIG_FILE = "section.json"
COMPONENT_DEFINITION_FILE = "component-definition.json"
COMPONENT_MODELS_FILE = "component-models.json"
COMPONENT_FILTERS_FILE = "component-filters.json"

BASE_CONFIG_FILES: tuple[str, ...] = (
    PAGE_CONFIG_FILE,
    TEXT_CONFIG_FILE,
    IMAGE_CONFIG_FILE,
    SECTION_CONFIG_FILE,
)
TEMPLATE_CONFIG_FILES: tuple[str, ...] = (
    COMPONENT_DEFINITION_FILE,
    COMPONENT_MODELS_FILE,
    COMPONENT_FILTERS_FILE,
)


def capitalize_block_name(name: str) -> str:
    """Display title for a hyphenated block name.

    Example:
        >>> capitalize_block_name("hero-banner")
        'Hero Banner'
    """
    return " ".join(word[:1].upper() + word[1:] for word in name.split("-"))


def _item_id(name: str) -> str:
    return f"{name}-item"


def _normalize_overrides(overrides: Sequence[OverrideLike] | None) -> list[FieldOverride | None]:
    if not overrides:
        return []
    normalized: list[FieldOverride | None] = []
    for override in overrides:
        if override is None or isinstance(override, FieldOverride):
            normalized.append(override)
        else:
            normalized.append(FieldOverride.model_validate(override))
    return normalized


# =============================================================================
# Block Schemas
# =============================================================================


def generate_block_definitions(name: str, record: AnalysisRecord) -> list[Definition]:
    """Definitions for a block, plus an item definition for containers.

    The primary definition takes its row count from the record only for
    non-container tables; every other shape is authored as a single row.
    Columns always come from the record.
    """
    structure = record.expected_structure

    rows = 1
    if structure.type == StructureType.TABLE and not record.is_container:
        rows = structure.rows if isinstance(structure.rows, int) else 1

    definitions = [
        Definition(
            title=capitalize_block_name(name),
            id=name,
            plugins=Plugins(da=DaPlugin(name=name, rows=rows, columns=structure.columns)),
        )
    ]

    if record.is_container:
        definitions.append(
            Definition(
                title=f"{capitalize_block_name(name)} Item",
                id=_item_id(name),
                plugins=Plugins(
                    da=DaPlugin(
                        name=_item_id(name),
                        rows=2 if structure.rows == MULTIPLE else 1,
                        columns=0,
                    )
                ),
            )
        )

    return definitions


def generate_block_models(
    name: str,
    record: AnalysisRecord,
    overrides: Sequence[OverrideLike] | None = None,
) -> list[ComponentModel]:
    """One model with a field per expected column.

    Args:
        name: Block name.
        record: Analysis record for the block.
        overrides: Per-position label/component overrides. Missing or
            empty entries fall back to the defaults.

    Returns:
        A single-element list with the block (or item) model.
    """
    field_overrides = _normalize_overrides(overrides)

    fields: list[ModelField] = []
    for index in range(record.expected_structure.columns):
        override = field_overrides[index] if index < len(field_overrides) else None
        selector = generate_child_selector(index)

        fields.append(
            ModelField(
                component=(override and override.type) or FieldComponent.RICHTEXT.value,
                name=selector,
                value="",
                label=generate_field_label(selector, override and override.label),
                value_type=ValueType.STRING.value,
                required=True if index == 0 else None,
            )
        )

    model_id = _item_id(name) if record.is_container else name
    return [ComponentModel(id=model_id, fields=fields)]


def generate_block_filters(name: str, record: AnalysisRecord) -> list[ComponentFilter]:
    """Container blocks accept their own item component; others get no filter."""
    if not record.is_container:
        return []
    return [ComponentFilter(id=name, components=[_item_id(name)])]


def synthesize(
    name: str,
    record: AnalysisRecord,
    overrides: Sequence[OverrideLike] | None = None,
) -> AuthoringSchema:
    """Build the complete authoring schema for an analyzed block.

    Args:
        name: Block name (directory name, e.g. "hero-banner").
        record: Analysis record produced by the analyzer.
        overrides: Optional per-field label/component overrides.

    Returns:
        AuthoringSchema with definitions, models and filters.

    Raises:
        ValueError: If name is empty or only whitespace.
    """
    if not name or not name.strip():
        raise ValueError("Block name must not be empty")
    schema = AuthoringSchema(
        definitions=generate_block_definitions(name, record),
        models=generate_block_models(name, record, overrides),
        filters=generate_block_filters(name, record),
    )
    logger.debug(
        "Synthesized %s: %d definitions, %d fields, %d filters",
        name,
        len(schema.definitions),
        len(schema.models[0].fields),
        len(schema.filters),
    )
    return schema


# =============================================================================
# Built-in Content Types
# =============================================================================


def generate_page_config() -> AuthoringSchema:
    """Page metadata model edited from the page properties panel."""
    return AuthoringSchema(
        models=[
            ComponentModel(
                id="page-metadata",
                fields=[
                    ModelField(component=FieldComponent.TEXT.value, name="title", label="Title"),
                    ModelField(
                        component=FieldComponent.TEXT.value,
                        name="description",
                        label="Description",
                    ),
                    ModelField(
                        component=FieldComponent.REFERENCE.value, name="image", label="Image"
                    ),
                    ModelField(
                        component=FieldComponent.TEXT.value,
                        name="robots",
                        label="Robots",
                        description="Index control via robots",
                    ),
                ],
            )
        ]
    )


def generate_text_config() -> AuthoringSchema:
    """Default text content, edited in place."""
    return AuthoringSchema(
        definitions=[
            Definition(
                title="Text",
                id="text",
                plugins=Plugins(da=DaPlugin(name="text", type="text")),
            )
        ]
    )


def generate_image_config() -> AuthoringSchema:
    """Default image content with source and alt text fields."""
    return AuthoringSchema(
        definitions=[
            Definition(
                title="Image",
                id="image",
                plugins=Plugins(da=DaPlugin(name="image", type="image")),
            )
        ],
        models=[
            ComponentModel(
                id="image",
                fields=[
                    ModelField(
                        component=FieldComponent.REFERENCE.value,
                        name="image",
                        hidden=True,
                        multi=False,
                    ),
                    ModelField(
                        component=FieldComponent.REFERENCE.value,
                        name=generate_image_selector(2),
                        label="Image",
                        multi=False,
                    ),
                    ModelField(
                        component=FieldComponent.TEXT.value,
                        name=generate_image_alt_selector(2),
                        label="Alt Text",
                    ),
                ],
            )
        ],
    )


def generate_section_config(component_names: Sequence[str] = ()) -> AuthoringSchema:
    """Section container that accepts text, image and the given components."""
    return AuthoringSchema(
        definitions=[
            Definition(
                title="Section",
                id="section",
                plugins=Plugins(da=DaPlugin(unsafe_html="<div></div>")),
                filter="section",
                model="section",
            )
        ],
        models=[
            ComponentModel(
                id="section",
                fields=[
                    ModelField(
                        component=FieldComponent.MULTISELECT.value,
                        name="style",
                        label="Style",
                        options=[FieldOption(name="Highlight", value="highlight")],
                    )
                ],
            )
        ],
        filters=[
            ComponentFilter(id="section", components=["text", "image", *component_names])
        ],
    )


# =============================================================================
# Aggregation Templates
# =============================================================================


def _include(reference: str) -> dict[str, str]:
    return {"...": reference}


def generate_component_definition_template() -> dict[str, Any]:
    """Root component-definition.json grouping every definition include."""
    return {
        "groups": [
            {
                "title": "Default Content",
                "id": "default",
                "components": [
                    _include("./text.json#/definitions"),
                    _include("./image.json#/definitions"),
                ],
            },
            {
                "title": "Sections",
                "id": "sections",
                "components": [_include("./section.json#/definitions")],
            },
            {
                "title": "Blocks",
                "id": "blocks",
                "components": [_include("./blocks/*.json#/definitions")],
            },
        ]
    }


def generate_component_models_template() -> list[dict[str, str]]:
    """Root component-models.json including every model list."""
    return [
        _include("./page.json#/models"),
        _include("./text.json#/models"),
        _include("./image.json#/models"),
        _include("./section.json#/models"),
        _include("./blocks/*.json#/models"),
    ]


def generate_component_filters_template() -> list[dict[str, Any]]:
    """Root component-filters.json: main accepts sections, then includes."""
    return [
        {"id": "main", "components": ["section"]},
        _include("./section.json#/filters"),
        _include("./blocks/*.json#/filters"),
    ]


def generate_base_configs(component_names: Sequence[str] = ()) -> dict[str, Any]:
    """All base files for a project, keyed by file name.

    Args:
        component_names: Block names the section filter should accept.

    Returns:
        Mapping of file name to JSON-ready data, built-ins first.
    """
    return {
        PAGE_CONFIG_FILE: generate_page_config().to_dict(),
        TEXT_CONFIG_FILE: generate_text_config().to_dict(),
        IMAGE_CONFIG_FILE: generate_image_config().to_dict(),
        SECTION_CONFIG_FILE: generate_section_config(component_names).to_dict(),
        COMPONENT_DEFINITION_FILE: generate_component_definition_template(),
        COMPONENT_MODELS_FILE: generate_component_models_template(),
        COMPONENT_FILTERS_FILE: generate_component_filters_template(),
    }


__all__ = [
    "BASE_CONFIG_FILES",
    "TEMPLATE_CONFIG_FILES",
    "capitalize_block_name",
    # Block schemas
    "generate_block_definitions",
    "generate_block_models",
    "generate_block_filters",
    "synthesize",
    # Built-ins
    "generate_page_config",
    "generate_text_config",
    "generate_image_config",
    "generate_section_config",
    # Templates
    "generate_component_definition_template",
    "generate_component_models_template",
    "generate_component_filters_template",
    "generate_base_configs",
]
