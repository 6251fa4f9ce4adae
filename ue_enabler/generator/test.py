"""Unit tests for the schema synthesizer."""

import pytest

from ue_enabler.analyzer import analyze
from ue_enabler.generator import (
    BASE_CONFIG_FILES,
    TEMPLATE_CONFIG_FILES,
    capitalize_block_name,
    generate_base_configs,
    generate_component_filters_template,
    generate_component_models_template,
    generate_image_config,
    generate_page_config,
    generate_section_config,
    generate_text_config,
    synthesize,
)
from ue_enabler.ir import (
    AnalysisRecord,
    ExpectedStructure,
    FieldOverride,
    StructureType,
)


def _record(
    type: StructureType = StructureType.UNKNOWN,
    rows: int | str = 1,
    columns: int = 1,
    is_container: bool = False,
) -> AnalysisRecord:
    return AnalysisRecord(
        expected_structure=ExpectedStructure(type=type, rows=rows, columns=columns),
        is_container=is_container,
    )


class TestCapitalizeBlockName:
    """Tests for capitalize_block_name()."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "name,expected",
        [
            ("hero", "Hero"),
            ("hero-banner", "Hero Banner"),
            ("a-b-c", "A B C"),
            ("columns-2x", "Columns 2x"),
        ],
    )
    def test_title(self, name, expected):
        """Hyphen-separated segments are capitalized and joined by spaces."""
        assert capitalize_block_name(name) == expected


class TestSynthesizeDefinitions:
    """Tests for synthesized definitions."""

    @pytest.mark.unit
    def test_non_container_single_definition(self):
        """Non-container blocks get one definition and no filters."""
        schema = synthesize("hero", _record(columns=3))
        assert len(schema.definitions) == 1
        assert schema.definitions[0].title == "Hero"
        assert schema.definitions[0].id == "hero"
        assert schema.filters == []

    @pytest.mark.unit
    def test_container_adds_item_definition_and_filter(self):
        """Containers get an item definition and a filter for it."""
        record = _record(StructureType.TABLE, rows="multiple", columns=2, is_container=True)
        schema = synthesize("cards", record)

        assert [d.id for d in schema.definitions] == ["cards", "cards-item"]
        item = schema.definitions[1]
        assert item.title == "Cards Item"
        assert item.plugins.da.name == "cards-item"
        assert item.plugins.da.rows == 2
        assert item.plugins.da.columns == 0

        assert len(schema.filters) == 1
        assert schema.filters[0].id == "cards"
        assert schema.filters[0].components == ["cards-item"]

    @pytest.mark.unit
    def test_container_item_single_row(self):
        """Item rows are 1 when the record row count is numeric."""
        schema = synthesize("tabs", _record(StructureType.TABLE, rows=1, is_container=True))
        assert schema.definitions[1].plugins.da.rows == 1

    @pytest.mark.unit
    def test_rows_from_record_only_for_non_container_tables(self):
        """Primary row count comes from the record only for plain tables."""
        table = synthesize("grid", _record(StructureType.TABLE, rows=3, columns=2))
        assert table.definitions[0].plugins.da.rows == 3

        unknown = synthesize("grid", _record(StructureType.UNKNOWN, rows=3, columns=2))
        assert unknown.definitions[0].plugins.da.rows == 1

        container = synthesize(
            "grid", _record(StructureType.TABLE, rows=3, columns=2, is_container=True)
        )
        assert container.definitions[0].plugins.da.rows == 1

    @pytest.mark.unit
    def test_columns_always_from_record(self):
        """Primary column count is copied in every branch."""
        for record in (
            _record(StructureType.TABLE, columns=4),
            _record(StructureType.CONFIG_TABLE, rows="multiple", columns=2),
            _record(StructureType.TABLE, rows="multiple", columns=5, is_container=True),
        ):
            schema = synthesize("block", record)
            assert schema.definitions[0].plugins.da.columns == record.expected_structure.columns

    @pytest.mark.unit
    def test_multiple_rows_on_plain_table(self):
        """Symbolic multiple rows on a non-container table become one row."""
        schema = synthesize("list", _record(StructureType.TABLE, rows="multiple", columns=1))
        assert schema.definitions[0].plugins.da.rows == 1


class TestSynthesizeModels:
    """Tests for synthesized models."""

    @pytest.mark.unit
    def test_three_columns(self):
        """Three columns give Title, Content and Image fields."""
        schema = synthesize("hero", _record(columns=3))
        model = schema.models[0]

        assert model.id == "hero"
        assert [f.label for f in model.fields] == ["Title", "Content", "Image"]
        assert [f.name for f in model.fields] == [
            "div:nth-child(1)",
            "div:nth-child(2)",
            "div:nth-child(3)",
        ]
        assert model.fields[0].required is True
        assert all(f.required is None for f in model.fields[1:])
        assert all(f.component == "richtext" for f in model.fields)
        assert all(f.value == "" and f.value_type == "string" for f in model.fields)

    @pytest.mark.unit
    def test_labels_past_table(self):
        """Columns beyond the label table are numbered."""
        schema = synthesize("wide", _record(columns=7))
        labels = [f.label for f in schema.models[0].fields]
        assert labels[4] == "Link"
        assert labels[5:] == ["Field 6", "Field 7"]

    @pytest.mark.unit
    def test_zero_columns(self):
        """Zero columns give a model with no fields."""
        schema = synthesize("empty", _record(columns=0))
        assert schema.models[0].fields == []

    @pytest.mark.unit
    def test_container_model_targets_item(self):
        """Container fields are edited on the item model."""
        record = _record(StructureType.TABLE, rows="multiple", columns=2, is_container=True)
        assert synthesize("cards", record).models[0].id == "cards-item"

    @pytest.mark.unit
    def test_overrides(self):
        """Overrides replace label and component per position."""
        overrides = [
            FieldOverride(label="Heading", type="text"),
            None,
            {"type": "reference"},
            FieldOverride(label=""),
        ]
        fields = synthesize("hero", _record(columns=4), overrides).models[0].fields

        assert (fields[0].label, fields[0].component) == ("Heading", "text")
        assert (fields[1].label, fields[1].component) == ("Content", "richtext")
        assert (fields[2].label, fields[2].component) == ("Image", "reference")
        assert (fields[3].label, fields[3].component) == ("Description", "richtext")

    @pytest.mark.unit
    def test_overrides_shorter_than_columns(self):
        """Missing override entries fall back to defaults."""
        fields = synthesize("hero", _record(columns=2), [FieldOverride(label="X")]).models[0].fields
        assert [f.label for f in fields] == ["X", "Content"]

    @pytest.mark.unit
    @pytest.mark.parametrize("name", ["", "   "])
    def test_blank_name_rejected(self, name):
        """A block needs a name to derive its ids from."""
        with pytest.raises(ValueError):
            synthesize(name, _record())


class TestSynthesizeFromAnalysis:
    """Tests running synthesis on analyzed sources."""

    @pytest.mark.unit
    def test_hero(self, hero_block):
        """Indexed hero block gives three fields and one definition."""
        schema = synthesize("hero", analyze(hero_block))
        assert len(schema.definitions) == 1
        assert len(schema.models[0].fields) == 3

    @pytest.mark.unit
    def test_cards(self, cards_block):
        """Cards container gives item definition and filter."""
        schema = synthesize("cards", analyze(cards_block))
        assert len(schema.definitions) == 2
        assert len(schema.filters) == 1

    @pytest.mark.unit
    def test_json_contract(self, config_block):
        """Serialized schema has exactly the three top-level keys."""
        data = synthesize("feed", analyze(config_block)).to_dict()
        assert set(data) == {"definitions", "models", "filters"}
        assert data["definitions"][0]["plugins"] == {
            "da": {"name": "feed", "rows": 1, "columns": 2}
        }
        field = data["models"][0]["fields"][0]
        assert field == {
            "component": "richtext",
            "name": "div:nth-child(1)",
            "value": "",
            "label": "Title",
            "valueType": "string",
            "required": True,
        }


class TestBuiltIns:
    """Tests for built-in content type schemas."""

    @pytest.mark.unit
    def test_page_config(self):
        """Page metadata model has four fields."""
        model = generate_page_config().models[0]
        assert model.id == "page-metadata"
        assert [f.name for f in model.fields] == ["title", "description", "image", "robots"]
        assert model.fields[2].component == "reference"
        assert model.fields[3].description == "Index control via robots"

    @pytest.mark.unit
    def test_text_config(self):
        """Text is a typed definition without models."""
        data = generate_text_config().to_dict()
        assert data["definitions"][0]["plugins"] == {"da": {"name": "text", "type": "text"}}
        assert data["models"] == []

    @pytest.mark.unit
    def test_image_config(self):
        """Image fields bind source and alt text of the image."""
        fields = generate_image_config().models[0].fields
        assert fields[0].hidden is True
        assert fields[1].name == "img:nth-child(3)[src]"
        assert fields[1].multi is False
        assert (fields[2].name, fields[2].label) == ("img:nth-child(3)[alt]", "Alt Text")

    @pytest.mark.unit
    def test_section_config(self):
        """Section accepts text, image and the given components."""
        data = generate_section_config(["hero", "cards"]).to_dict()
        definition = data["definitions"][0]
        assert definition["plugins"] == {"da": {"unsafeHTML": "<div></div>"}}
        assert definition["filter"] == "section"
        assert definition["model"] == "section"
        assert data["filters"] == [
            {"id": "section", "components": ["text", "image", "hero", "cards"]}
        ]
        assert data["models"][0]["fields"][0]["options"] == [
            {"name": "Highlight", "value": "highlight"}
        ]

    @pytest.mark.unit
    def test_section_config_without_components(self):
        """Section filter defaults to text and image."""
        assert generate_section_config().filters[0].components == ["text", "image"]


class TestTemplates:
    """Tests for aggregation templates."""

    @pytest.mark.unit
    def test_models_template_includes(self):
        """Models template includes every model source."""
        refs = [entry["..."] for entry in generate_component_models_template()]
        assert refs[-1] == "./blocks/*.json#/models"
        assert len(refs) == 5

    @pytest.mark.unit
    def test_filters_template_main(self):
        """Main filter accepts sections."""
        assert generate_component_filters_template()[0] == {
            "id": "main",
            "components": ["section"],
        }

    @pytest.mark.unit
    def test_base_configs_files(self):
        """Base configs cover the built-ins and the templates."""
        configs = generate_base_configs(["hero"])
        assert list(configs) == [*BASE_CONFIG_FILES, *TEMPLATE_CONFIG_FILES]
        assert configs["section.json"]["filters"][0]["components"][-1] == "hero"
        assert configs["component-definition.json"]["groups"][2]["id"] == "blocks"
