"""Intermediate Representation (IR) models for analysis and authoring schemas."""

from ue_enabler.ir.lib import (
    MULTIPLE,
    AnalysisRecord,
    AuthoringSchema,
    ChildrenAccess,
    ChildrenAccessType,
    ComponentFilter,
    ComponentModel,
    DaPlugin,
    Definition,
    ExpectedStructure,
    FieldOption,
    FieldOverride,
    ModelField,
    Plugins,
    RowCount,
    StructureType,
    export_json_schema,
)

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
