"""Unit tests for validation module."""

import json

import pytest

from ue_enabler.analyzer import analyze
from ue_enabler.generator import generate_base_configs, synthesize
from ue_enabler.validation import is_valid, validate_project_setup, validate_schema


def _valid_schema() -> dict:
    return {
        "definitions": [{"title": "Hero", "id": "hero", "plugins": {"da": {"name": "hero"}}}],
        "models": [
            {
                "id": "hero",
                "fields": [
                    {"component": "richtext", "name": "div:nth-child(1)", "label": "Title"}
                ],
            }
        ],
        "filters": [],
    }


class TestValidateSchema:
    """Tests for validate_schema function."""

    @pytest.mark.unit
    def test_valid_schema(self):
        """Well-formed schema passes validation."""
        result = validate_schema(_valid_schema())
        assert result.valid is True
        assert result.errors == []
        assert result.warnings == []

    @pytest.mark.unit
    def test_missing_top_level_keys(self):
        """Each missing top-level list is an error."""
        result = validate_schema({})
        assert result.valid is False
        assert [e.message for e in result.errors] == [
            'Missing "definitions" array',
            'Missing "models" array',
            'Missing "filters" array',
        ]

    @pytest.mark.unit
    def test_empty_lists_are_valid(self):
        """Empty lists are present, not missing."""
        assert validate_schema({"definitions": [], "models": [], "filters": []}).valid

    @pytest.mark.unit
    def test_definition_missing_title(self):
        """Definitions need a title."""
        schema = _valid_schema()
        del schema["definitions"][0]["title"]
        result = validate_schema(schema)
        assert result.errors[0].message == 'Definition 0: missing "title"'
        assert result.errors[0].path == "definitions[0]"
        assert result.errors[0].error_type == "missing_field"

    @pytest.mark.unit
    def test_definition_missing_plugins(self):
        """Definitions need plugins.da."""
        schema = _valid_schema()
        schema["definitions"][0]["plugins"] = {}
        messages = [e.message for e in validate_schema(schema).errors]
        assert messages == ['Definition 0: missing "plugins.da"']

    @pytest.mark.unit
    def test_field_missing_component(self):
        """Fields need a component."""
        schema = _valid_schema()
        schema["models"][0]["fields"].append({"name": "div:nth-child(2)", "label": "Content"})
        result = validate_schema(schema)
        assert result.errors[0].message == 'Model 0, Field 1: missing "component"'
        assert result.errors[0].path == "models[0].fields[1]"

    @pytest.mark.unit
    def test_field_missing_name(self):
        """Fields need a selector name."""
        schema = _valid_schema()
        del schema["models"][0]["fields"][0]["name"]
        messages = [e.message for e in validate_schema(schema).errors]
        assert messages == ['Model 0, Field 0: missing "name" (CSS selector)']

    @pytest.mark.unit
    def test_missing_label_is_warning(self):
        """A missing label warns without invalidating."""
        schema = _valid_schema()
        del schema["models"][0]["fields"][0]["label"]
        result = validate_schema(schema)
        assert result.valid is True
        assert [w.message for w in result.warnings] == [
            'Model 0, Field 0: missing "label" - recommended for UE UI'
        ]

    @pytest.mark.unit
    def test_model_missing_fields(self):
        """Models need a fields array."""
        schema = _valid_schema()
        schema["models"][0]["fields"] = "nope"
        messages = [e.message for e in validate_schema(schema).errors]
        assert messages == ['Model 0: missing "fields" array']

    @pytest.mark.unit
    def test_filter_missing_components(self):
        """Filters need a components array."""
        schema = _valid_schema()
        schema["filters"] = [{"id": "hero"}]
        messages = [e.message for e in validate_schema(schema).errors]
        assert messages == ['Filter 0: missing "components" array']

    @pytest.mark.unit
    def test_to_dict(self):
        """to_dict reports messages only."""
        result = validate_schema({"definitions": [], "models": []})
        assert result.to_dict() == {
            "valid": False,
            "errors": ['Missing "filters" array'],
            "warnings": [],
        }

    @pytest.mark.unit
    def test_accepts_model(self, cards_block):
        """AuthoringSchema instances are validated through their JSON form."""
        assert is_valid(synthesize("cards", analyze(cards_block)))

    @pytest.mark.unit
    def test_synthesized_schemas_always_valid(
        self, hero_block, cards_block, config_block, quote_block
    ):
        """Every synthesized schema passes validation."""
        for name, code in (
            ("hero", hero_block),
            ("cards", cards_block),
            ("feed", config_block),
            ("quote", quote_block),
            ("empty", ""),
        ):
            result = validate_schema(synthesize(name, analyze(code)))
            assert result.valid, result.to_dict()

    @pytest.mark.unit
    def test_built_in_schemas_valid(self):
        """Built-in content schemas pass validation."""
        configs = generate_base_configs(["hero"])
        for name in ("page.json", "text.json", "image.json", "section.json"):
            assert validate_schema(configs[name]).valid, name


class TestValidateProjectSetup:
    """Tests for validate_project_setup function."""

    @pytest.mark.unit
    def test_complete_project(self, ue_project):
        """A complete project has no errors or warnings."""
        result = validate_project_setup(ue_project)
        assert result.errors == []
        assert result.warnings == []
        assert result.valid is True
        assert result.checks["baseConfigs"]["section.json"] is True
        assert result.checks["dependencies"]["husky"] is True

    @pytest.mark.unit
    def test_empty_directory(self, tmp_path):
        """An empty directory reports every required piece."""
        result = validate_project_setup(tmp_path)
        assert result.valid is False
        assert "package.json not found" in result.errors
        assert "ue/ directory not found" in result.errors
        assert "Base config page.json not found" in result.errors
        assert "ue/scripts/ue.js not found" in result.errors
        assert ".husky/ directory not found - git hooks not set up" in result.warnings
        assert "dependencies" not in result.checks

    @pytest.mark.unit
    def test_read_only(self, tmp_path):
        """Checking a project creates nothing."""
        validate_project_setup(tmp_path)
        assert list(tmp_path.iterdir()) == []

    @pytest.mark.unit
    def test_missing_dependency_is_error(self, ue_project):
        """Missing required dependencies are errors."""
        package_path = ue_project / "package.json"
        package = json.loads(package_path.read_text())
        del package["devDependencies"]["husky"]
        package_path.write_text(json.dumps(package))

        result = validate_project_setup(ue_project)
        assert result.errors == ['Required dependency "husky" not found in package.json']

    @pytest.mark.unit
    def test_missing_build_script_is_warning(self, ue_project):
        """Missing build scripts are warnings."""
        package_path = ue_project / "package.json"
        package = json.loads(package_path.read_text())
        del package["scripts"]["build:json:filters"]
        package_path.write_text(json.dumps(package))

        result = validate_project_setup(ue_project)
        assert result.valid is True
        assert result.warnings == ['Build script "build:json:filters" not found in package.json']

    @pytest.mark.unit
    def test_missing_root_configs_warn(self, ue_project):
        """Unbuilt consolidated configs are warnings."""
        (ue_project / "component-models.json").unlink()
        result = validate_project_setup(ue_project)
        assert result.valid is True
        assert result.checks["rootConfigs"]["component-models.json"] is False

    @pytest.mark.unit
    def test_invalid_package_json(self, ue_project):
        """Unreadable package.json is reported as an error."""
        (ue_project / "package.json").write_text("{not json")
        result = validate_project_setup(ue_project)
        assert result.valid is False
        assert result.errors[0].startswith("Validation error:")

    @pytest.mark.unit
    def test_non_object_dependencies(self, ue_project):
        """A dependencies list is reported instead of crashing the check."""
        package_path = ue_project / "package.json"
        package = json.loads(package_path.read_text())
        package["dependencies"] = ["husky"]
        package["scripts"] = "build"
        package_path.write_text(json.dumps(package))

        result = validate_project_setup(ue_project)
        assert result.valid is False
        assert 'Validation error: "dependencies" in package.json is not an object' in result.errors
        assert 'Validation error: "scripts" in package.json is not an object' in result.errors
        assert result.checks["dependencies"]["husky"] is True
