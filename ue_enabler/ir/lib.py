"""Core IR models for block analysis and authoring schemas.

This module defines the two records that flow through the pipeline:

- AnalysisRecord: what the analyzer inferred about a block's expected
  markup. Created fresh per analysis and frozen once returned.
- AuthoringSchema: the definitions/models/filters triple the editor reads.
  Serializes to the persisted JSON contract with camelCase keys.
"""

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

from ue_enabler.patterns import Complexity, score_complexity

MULTIPLE = "multiple"

RowCount = Union[Annotated[int, Field(ge=1)], Literal["multiple"]]


class StructureType(str, Enum):
    """Overall shape of the authored table a block expects.

    - UNKNOWN: no structural evidence found
    - TABLE: rows and cells, read by spreading the block children
    - CONFIG_TABLE: key/value rows read through readBlockConfig
    """

    UNKNOWN = "unknown"
    TABLE = "table"
    CONFIG_TABLE = "config-table"


class ChildrenAccessType(str, Enum):
    """How a block reaches into its children."""

    INDEX_ACCESS = "index-access"
    SPREAD = "spread"


class _CamelModel(BaseModel):
    """Base for models that serialize with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )

    def to_dict(self) -> dict[str, Any]:
        """Dump to the JSON-ready wire shape, omitting unset optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# =============================================================================
# Analysis Record
# =============================================================================


class ExpectedStructure(_CamelModel):
    """Rows and columns the block expects its authored table to have."""

    model_config = ConfigDict(frozen=True)

    type: StructureType = StructureType.UNKNOWN
    rows: RowCount = 1
    columns: Annotated[int, Field(ge=0)] = 1


class ChildrenAccess(_CamelModel):
    """A detected children access, with its literal index when indexed."""

    model_config = ConfigDict(frozen=True)

    type: ChildrenAccessType
    index: int | None = None


class AnalysisRecord(_CamelModel):
    """Inferred structure of a block, produced by the analyzer.

    Attributes:
        expected_structure: Table shape the block expects.
        dom_transformations: Transform names in detection order.
        is_container: Iteration or children spread evidence was found.
        requires_observer: A matched transform re-renders markup after
            decoration, so editor instrumentation must be re-applied.
        children_access_patterns: Index and spread accesses found.
        has_async: Async keywords appear in the source.
        has_variants: Class list or class name manipulation appears.
        uses_read_block_config: The block reads a key/value config table.
        config_keys: Sorted, unique config keys (config-table blocks only).

    The complexity field is derived from the other fields and cannot be
    set; build a new record to change it.

    Example:
        >>> record = AnalysisRecord(is_container=True)
        >>> record.complexity
        <Complexity.SIMPLE: 'SIMPLE'>
    """

    model_config = ConfigDict(frozen=True)

    expected_structure: ExpectedStructure = Field(default_factory=ExpectedStructure)
    dom_transformations: tuple[str, ...] = ()
    is_container: bool = False
    requires_observer: bool = False
    children_access_patterns: tuple[ChildrenAccess, ...] = ()
    has_async: bool = False
    has_variants: bool = False
    uses_read_block_config: bool = False
    config_keys: tuple[str, ...] = ()

    @computed_field  # type: ignore[prop-decorator]
    @property
    def complexity(self) -> Complexity:
        """Complexity bucket scored from the record's signals."""
        return score_complexity(self)


# =============================================================================
# Authoring Schema
# =============================================================================


class FieldOverride(_CamelModel):
    """Author-supplied label and component type for one field position."""

    label: str | None = None
    type: str | None = None


class DaPlugin(_CamelModel):
    """Rendering hints for the document authoring plugin."""

    name: str | None = None
    rows: int | None = None
    columns: int | None = None
    type: str | None = None
    unsafe_html: str | None = Field(None, alias="unsafeHTML")


class Plugins(_CamelModel):
    """Plugin configuration attached to a definition."""

    da: DaPlugin = Field(default_factory=DaPlugin)


class Definition(_CamelModel):
    """A component definition shown in the editor's insert menu."""

    title: str
    id: str
    plugins: Plugins = Field(default_factory=Plugins)
    filter: str | None = None
    model: str | None = None


class FieldOption(_CamelModel):
    """One option of a select or multiselect field."""

    name: str
    value: str


class ModelField(_CamelModel):
    """A single editable field bound to a selector."""

    component: str
    name: str
    value: str | None = None
    label: str | None = None
    value_type: str | None = None
    required: bool | None = None
    description: str | None = None
    hidden: bool | None = None
    multi: bool | None = None
    options: list[FieldOption] | None = None


class ComponentModel(_CamelModel):
    """The field set edited for a component id."""

    id: str
    fields: list[ModelField] = Field(default_factory=list)


class ComponentFilter(_CamelModel):
    """Which components may be placed inside a container."""

    id: str
    components: list[str] = Field(default_factory=list)


class AuthoringSchema(_CamelModel):
    """Definitions, models and filters for one component or content type.

    Serializes to the persisted JSON contract with exactly the top-level
    keys ``definitions``, ``models`` and ``filters``.
    """

    definitions: list[Definition] = Field(default_factory=list)
    models: list[ComponentModel] = Field(default_factory=list)
    filters: list[ComponentFilter] = Field(default_factory=list)


def export_json_schema() -> dict:
    """Export the AuthoringSchema JSON Schema.

    Returns:
        dict: JSON Schema of the persisted authoring schema shape.
    """
    return AuthoringSchema.model_json_schema(by_alias=True)


__all__ = [
    "MULTIPLE",
    "RowCount",
    # Analysis
    "StructureType",
    "ChildrenAccessType",
    "ExpectedStructure",
    "ChildrenAccess",
    "AnalysisRecord",
    # Authoring schema
    "FieldOverride",
    "DaPlugin",
    "Plugins",
    "Definition",
    "FieldOption",
    "ModelField",
    "ComponentModel",
    "ComponentFilter",
    "AuthoringSchema",
    "export_json_schema",
]
