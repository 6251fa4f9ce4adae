"""Unit tests for IR models."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from ue_enabler.ir import (
    AnalysisRecord,
    AuthoringSchema,
    ChildrenAccess,
    ChildrenAccessType,
    ComponentFilter,
    ComponentModel,
    DaPlugin,
    Definition,
    ExpectedStructure,
    ModelField,
    Plugins,
    StructureType,
    export_json_schema,
)
from ue_enabler.patterns import Complexity


class TestExpectedStructure:
    """Tests for ExpectedStructure model."""

    @pytest.mark.unit
    def test_defaults(self):
        """Defaults describe a single unknown cell."""
        structure = ExpectedStructure()
        assert structure.type == StructureType.UNKNOWN
        assert structure.rows == 1
        assert structure.columns == 1

    @pytest.mark.unit
    def test_rows_accepts_multiple(self):
        """Rows can be the symbolic value 'multiple'."""
        structure = ExpectedStructure(type=StructureType.TABLE, rows="multiple")
        assert structure.rows == "multiple"

    @pytest.mark.unit
    def test_rows_rejects_zero(self):
        """Rows must be positive."""
        with pytest.raises(PydanticValidationError):
            ExpectedStructure(rows=0)

    @pytest.mark.unit
    def test_rows_rejects_other_strings(self):
        """Only 'multiple' is a valid symbolic row count."""
        with pytest.raises(PydanticValidationError):
            ExpectedStructure(rows="many")

    @pytest.mark.unit
    def test_frozen(self):
        """Structure cannot be mutated after creation."""
        structure = ExpectedStructure()
        with pytest.raises(PydanticValidationError):
            structure.columns = 4


class TestAnalysisRecord:
    """Tests for AnalysisRecord model."""

    @pytest.mark.unit
    def test_empty_record_is_simple(self):
        """A record with no signals is SIMPLE."""
        assert AnalysisRecord().complexity == Complexity.SIMPLE

    @pytest.mark.unit
    def test_complexity_tracks_signals(self):
        """Complexity is derived from the other fields."""
        record = AnalysisRecord(
            dom_transformations=["div->ul", "div->li"],
            requires_observer=True,
            is_container=True,
        )
        assert record.complexity == Complexity.COMPLEX

    @pytest.mark.unit
    def test_complexity_cannot_be_supplied(self):
        """A supplied complexity value is ignored."""
        record = AnalysisRecord(complexity="COMPLEX")
        assert record.complexity == Complexity.SIMPLE

    @pytest.mark.unit
    def test_complexity_cannot_be_assigned(self):
        """Frozen record rejects assignment."""
        record = AnalysisRecord()
        with pytest.raises((PydanticValidationError, AttributeError)):
            record.complexity = Complexity.COMPLEX

    @pytest.mark.unit
    def test_sequence_fields_are_immutable(self):
        """List inputs are stored as tuples so complexity cannot drift."""
        record = AnalysisRecord(
            dom_transformations=["div->ul"],
            children_access_patterns=[ChildrenAccess(type=ChildrenAccessType.SPREAD)],
            config_keys=["limit"],
        )
        assert record.dom_transformations == ("div->ul",)
        assert isinstance(record.children_access_patterns, tuple)
        assert record.config_keys == ("limit",)
        with pytest.raises(AttributeError):
            record.dom_transformations.append("div->li")
        assert record.complexity == Complexity.SIMPLE

    @pytest.mark.unit
    def test_to_dict_uses_camel_case(self):
        """Serialized keys follow the wire format."""
        record = AnalysisRecord(
            expected_structure=ExpectedStructure(type=StructureType.TABLE, columns=2),
            children_access_patterns=[
                ChildrenAccess(type=ChildrenAccessType.INDEX_ACCESS, index=1),
                ChildrenAccess(type=ChildrenAccessType.SPREAD),
            ],
        )
        data = record.to_dict()
        assert data["expectedStructure"] == {"type": "table", "rows": 1, "columns": 2}
        assert data["childrenAccessPatterns"] == [
            {"type": "index-access", "index": 1},
            {"type": "spread"},
        ]
        assert data["complexity"] == "SIMPLE"
        assert data["usesReadBlockConfig"] is False
        assert data["configKeys"] == []

    @pytest.mark.unit
    def test_populate_by_alias(self):
        """Records can be built from their wire form."""
        record = AnalysisRecord.model_validate(
            {"isContainer": True, "expectedStructure": {"rows": "multiple"}}
        )
        assert record.is_container is True
        assert record.expected_structure.rows == "multiple"


class TestAuthoringSchema:
    """Tests for authoring schema models."""

    @pytest.mark.unit
    def test_empty_schema_has_three_keys(self):
        """Serialized schema always has the three top-level keys."""
        assert AuthoringSchema().to_dict() == {
            "definitions": [],
            "models": [],
            "filters": [],
        }

    @pytest.mark.unit
    def test_unset_optionals_omitted(self):
        """Unset optional keys are not serialized."""
        schema = AuthoringSchema(
            definitions=[
                Definition(
                    title="Cards",
                    id="cards",
                    plugins=Plugins(da=DaPlugin(name="cards", rows=1, columns=2)),
                )
            ],
            models=[
                ComponentModel(
                    id="cards",
                    fields=[ModelField(component="richtext", name="div:nth-child(1)")],
                )
            ],
            filters=[ComponentFilter(id="cards", components=["cards-item"])],
        )
        data = schema.to_dict()
        assert data["definitions"][0] == {
            "title": "Cards",
            "id": "cards",
            "plugins": {"da": {"name": "cards", "rows": 1, "columns": 2}},
        }
        assert data["models"][0]["fields"][0] == {
            "component": "richtext",
            "name": "div:nth-child(1)",
        }

    @pytest.mark.unit
    def test_unsafe_html_alias(self):
        """unsafe_html serializes with its editor spelling."""
        plugin = DaPlugin(unsafe_html="<div></div>")
        assert plugin.to_dict() == {"unsafeHTML": "<div></div>"}

    @pytest.mark.unit
    def test_value_type_alias(self):
        """value_type serializes as valueType."""
        field = ModelField(component="text", name="title", value_type="string")
        assert field.to_dict()["valueType"] == "string"


class TestExportJsonSchema:
    """Tests for JSON Schema export."""

    @pytest.mark.unit
    def test_schema_properties(self):
        """Exported schema lists the three top-level arrays."""
        schema = export_json_schema()
        assert schema["title"] == "AuthoringSchema"
        assert set(schema["properties"]) == {"definitions", "models", "filters"}
