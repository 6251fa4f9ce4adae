"""Unit tests for MCP tool implementations."""

import json

import pytest

from ue_enabler.sources import ComponentNotFoundError, GitHubComponentSource, LocalComponentSource

from .analysis import analyze_block_structure, list_blocks, resolve_source
from .generation import block_schema_path, generate_base_configs, generate_block_json
from .validation import validate_block_json, validate_setup


class TestResolveSource:
    """Tests for resolve_source."""

    @pytest.mark.unit
    def test_local_default(self, tmp_path):
        """Without github the project's blocks directory is used."""
        source = resolve_source(tmp_path)
        assert isinstance(source, LocalComponentSource)
        assert source.blocks_path == tmp_path / "blocks"

    @pytest.mark.unit
    def test_local_override(self, tmp_path):
        """A custom blocks directory is resolved against the project."""
        source = resolve_source(tmp_path, local_blocks_path="src/blocks")
        assert source.blocks_path == tmp_path / "src" / "blocks"

    @pytest.mark.unit
    def test_github(self):
        """A github location selects the GitHub source."""
        source = resolve_source(
            github={"org": "acme", "repo": "site", "branch": "dev", "blocksPath": "web/blocks"}
        )
        assert isinstance(source, GitHubComponentSource)
        assert source.branch == "dev"
        assert source.blocks_path == "web/blocks"

    @pytest.mark.unit
    def test_github_requires_repo(self):
        """org and repo are both required."""
        with pytest.raises(ValueError, match="org and repo"):
            resolve_source(github={"org": "acme"})


class TestAnalysisTools:
    """Tests for list_blocks and analyze_block_structure."""

    @pytest.mark.unit
    def test_list_blocks(self, blocks_dir):
        """Blocks are listed with their files."""
        result = list_blocks(project_path=str(blocks_dir.parent))
        assert result["blocks_found"] == 3
        assert result["source"].startswith("Local: ")
        hero = result["blocks"][2]
        assert hero["name"] == "hero"
        assert hero["has_js"] is True
        assert hero["has_css"] is True

    @pytest.mark.unit
    def test_analyze_by_name(self, blocks_dir):
        """A named block is read from the project."""
        result = analyze_block_structure("hero", project_path=str(blocks_dir.parent))
        assert result["block_name"] == "hero"
        assert result["analysis"]["expectedStructure"] == {
            "type": "unknown",
            "rows": 1,
            "columns": 3,
        }
        assert result["analysis"]["complexity"] == "SIMPLE"
        assert result["complexity_level"]["score"] == 1
        assert result["mutations"] == []

    @pytest.mark.unit
    def test_analyze_inline_code(self, cards_block):
        """Inline code needs no project."""
        result = analyze_block_structure(code=cards_block)
        assert result["block_name"] is None
        assert result["analysis"]["isContainer"] is True
        assert result["code_snippet"] == cards_block
        assert result["suggestion"]["useUnsafeHTML"] is True

    @pytest.mark.unit
    def test_snippet_truncated(self, hero_block):
        """Long sources are truncated in the snippet."""
        code = hero_block + "// " + "x" * 600 + "\n"
        result = analyze_block_structure(code=code)
        assert result["code_snippet"].endswith("...")
        assert len(result["code_snippet"]) == 503

    @pytest.mark.unit
    def test_analyze_requires_input(self):
        """Either a name or code is required."""
        with pytest.raises(ValueError, match="block_name or code"):
            analyze_block_structure()

    @pytest.mark.unit
    def test_analyze_block_without_code(self, blocks_dir):
        """A block directory without JavaScript is reported."""
        with pytest.raises(ComponentNotFoundError, match="does not have a JavaScript file"):
            analyze_block_structure("empty", project_path=str(blocks_dir.parent))


class TestGenerationTools:
    """Tests for generate_block_json and generate_base_configs."""

    @pytest.mark.unit
    def test_preview_does_not_write(self, blocks_dir):
        """Preview returns the schema only."""
        project = blocks_dir.parent
        result = generate_block_json("hero", project_path=str(project), preview=True)

        assert "file_path" not in result
        assert not block_schema_path(project, "hero").exists()
        assert result["analysis"]["complexity"] == "SIMPLE"
        fields = result["json_config"]["models"][0]["fields"]
        assert [f["label"] for f in fields] == ["Title", "Content", "Image"]

    @pytest.mark.unit
    def test_write_default_location(self, blocks_dir):
        """The schema is written to ue/models/blocks/<name>.json."""
        project = blocks_dir.parent
        result = generate_block_json("cards", project_path=str(project))

        target = project / "ue" / "models" / "blocks" / "cards.json"
        assert result["file_path"] == str(target)
        assert result["message"] == "Successfully generated cards.json"
        written = json.loads(target.read_text(encoding="utf-8"))
        assert written == result["json_config"]
        assert len(written["definitions"]) == 2
        assert len(written["filters"]) == 1

    @pytest.mark.unit
    def test_write_custom_output(self, tmp_path, quote_block):
        """Inline code can be written anywhere."""
        target = tmp_path / "out" / "quote.json"
        result = generate_block_json(
            "quote", project_path=str(tmp_path), code=quote_block, output_path=str(target)
        )
        assert result["validation"]["valid"] is True
        assert target.read_text(encoding="utf-8").endswith("}\n")

    @pytest.mark.unit
    def test_custom_fields(self, hero_block):
        """Overrides replace labels and types by position."""
        result = generate_block_json(
            "hero",
            code=hero_block,
            preview=True,
            custom_fields=[{"label": "Heading"}, {}, {"type": "reference"}],
        )
        fields = result["json_config"]["models"][0]["fields"]
        assert fields[0]["label"] == "Heading"
        assert fields[1]["label"] == "Content"
        assert fields[2]["component"] == "reference"

    @pytest.mark.unit
    def test_unknown_block(self, blocks_dir):
        """Unknown blocks are not found."""
        with pytest.raises(ComponentNotFoundError, match="not found"):
            generate_block_json("nope", project_path=str(blocks_dir.parent))

    @pytest.mark.unit
    def test_base_configs(self, tmp_path):
        """Seven files are written under ue/models."""
        result = generate_base_configs(str(tmp_path), ["hero", "cards"])

        models = tmp_path / "ue" / "models"
        assert result["success"] is True
        assert len(result["created"]) == 7
        assert (models / "blocks").is_dir()
        section = json.loads((models / "section.json").read_text(encoding="utf-8"))
        assert section["filters"][0]["components"][-2:] == ["hero", "cards"]


class TestValidationTools:
    """Tests for validate_block_json and validate_setup."""

    @pytest.mark.unit
    def test_validate_inline(self):
        """Inline schemas are validated."""
        result = validate_block_json(schema={"definitions": [], "models": []})
        assert result["valid"] is False
        assert result["errors"] == ['Missing "filters" array']

    @pytest.mark.unit
    def test_validate_file(self, hero_block, tmp_path):
        """A written schema validates from its file."""
        target = tmp_path / "hero.json"
        generate_block_json("hero", code=hero_block, output_path=str(target))
        assert validate_block_json(file_path=str(target)) == {
            "valid": True,
            "errors": [],
            "warnings": [],
        }

    @pytest.mark.unit
    def test_validate_missing_file(self, tmp_path):
        """A missing file is reported."""
        with pytest.raises(FileNotFoundError):
            validate_block_json(file_path=str(tmp_path / "nope.json"))

    @pytest.mark.unit
    def test_validate_invalid_json(self, tmp_path):
        """A file that is not JSON is reported."""
        target = tmp_path / "bad.json"
        target.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON"):
            validate_block_json(file_path=str(target))

    @pytest.mark.unit
    def test_validate_requires_input(self):
        """Either a schema or a file is required."""
        with pytest.raises(ValueError):
            validate_block_json()

    @pytest.mark.unit
    def test_validate_setup_complete(self, ue_project):
        """A complete project is valid."""
        result = validate_setup(str(ue_project))
        assert result["valid"] is True
        assert result["total_errors"] == 0
        assert result["total_warnings"] == 0
        assert result["message"] == "Universal Editor setup is complete and valid"

    @pytest.mark.unit
    def test_validate_setup_empty(self, tmp_path):
        """An empty directory reports errors."""
        result = validate_setup(str(tmp_path))
        assert result["valid"] is False
        assert result["total_errors"] == len(result["errors"])
        assert "package.json not found" in result["errors"]
        assert result["message"].startswith("Universal Editor setup has")
