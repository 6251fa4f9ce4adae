"""Integration tests for the analyze, synthesize, validate, persist pipeline."""

import json

import pytest

from ue_enabler.analyzer import analyze
from ue_enabler.generator import synthesize
from ue_enabler.mcp.tools import (
    generate_base_configs,
    generate_block_json,
    validate_block_json,
    validate_setup,
)
from ue_enabler.validation import validate_schema

BLOCK_FIXTURES = ("hero_block", "cards_block", "config_block", "quote_block")


@pytest.mark.integration
@pytest.mark.parametrize("fixture_name", BLOCK_FIXTURES)
def test_synthesized_schemas_are_valid(fixture_name, request):
    """Every analyzed block synthesizes to a valid schema."""
    code = request.getfixturevalue(fixture_name)
    record = analyze(code)
    schema = synthesize("sample", record)

    result = validate_schema(schema)
    assert result.valid, result.errors
    assert result.warnings == []


@pytest.mark.integration
@pytest.mark.parametrize("fixture_name", BLOCK_FIXTURES)
def test_pipeline_is_deterministic(fixture_name, request):
    """Running the pipeline twice gives identical JSON."""
    code = request.getfixturevalue(fixture_name)
    first = synthesize("sample", analyze(code)).to_dict()
    second = synthesize("sample", analyze(code)).to_dict()
    assert first == second


@pytest.mark.integration
def test_config_block_schema(config_block):
    """A config table is authored as two columns over multiple rows."""
    record = analyze(config_block)
    assert record.config_keys == ("limit", "sort-order", "source")

    schema = synthesize("settings", record).to_dict()
    da = schema["definitions"][0]["plugins"]["da"]
    assert da == {"name": "settings", "rows": 1, "columns": 2}
    assert len(schema["models"][0]["fields"]) == 2
    assert schema["filters"] == []


@pytest.mark.integration
def test_project_round_trip(blocks_dir):
    """A bare project is brought to a valid setup and its schemas validate."""
    project = blocks_dir.parent
    before = validate_setup(str(project))
    assert before["valid"] is False

    generate_base_configs(str(project), ["hero", "cards"])
    written = [
        generate_block_json(name, project_path=str(project))["file_path"]
        for name in ("hero", "cards")
    ]

    for path in written:
        assert validate_block_json(file_path=path)["valid"] is True

    after = validate_setup(str(project))
    checks = after["checks"]
    assert checks["ueBlocksFolder"] is True
    assert all(checks["baseConfigs"].values())
    assert all(checks["templateConfigs"].values())

    models = json.loads(
        (project / "ue" / "models" / "component-models.json").read_text(encoding="utf-8")
    )
    assert isinstance(models, list)
