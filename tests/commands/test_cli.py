"""Tests for the root CLI commands."""

import json
import subprocess
import sys
from pathlib import Path

import pytest

# Project root (three levels up from this file)
PROJECT_ROOT = Path(__file__).parent.parent.parent


def run_cli(*args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, ".", *args],
        capture_output=True,
        text=True,
        cwd=PROJECT_ROOT,
        timeout=60,
    )


@pytest.mark.integration
class TestCLI:
    """End-to-end runs of python . <command>."""

    def test_help(self):
        """--help lists the block commands."""
        result = run_cli("--help")
        assert result.returncode == 0
        assert "analyze" in result.stdout
        assert "base-configs" in result.stdout

    def test_unknown_command(self):
        """Unknown commands exit 1."""
        assert run_cli("frobnicate").returncode == 1

    def test_list(self, blocks_dir):
        """list prints each block with its files."""
        result = run_cli("list", "-p", str(blocks_dir.parent))
        assert result.returncode == 0
        assert "(3 blocks)" in result.stdout
        assert "js, css" in result.stdout

    def test_analyze_file(self, tmp_path, cards_block):
        """analyze --file prints the analysis as JSON."""
        source = tmp_path / "cards.js"
        source.write_text(cards_block, encoding="utf-8")

        result = run_cli("analyze", "--file", str(source))
        assert result.returncode == 0
        data = json.loads(result.stdout)
        assert data["analysis"]["isContainer"] is True
        assert "code_snippet" not in data

    def test_analyze_malformed_exits_1(self, tmp_path, malformed_block):
        """Parse failures are logged and exit 1."""
        source = tmp_path / "broken.js"
        source.write_text(malformed_block, encoding="utf-8")

        result = run_cli("analyze", "--file", str(source))
        assert result.returncode == 1
        assert "Analysis failed" in result.stderr

    def test_generate_preview(self, blocks_dir):
        """generate --preview prints the schema without writing."""
        project = blocks_dir.parent
        result = run_cli("generate", "hero", "--preview", "-p", str(project))
        assert result.returncode == 0
        assert set(json.loads(result.stdout)) == {"definitions", "models", "filters"}
        assert not (project / "ue").exists()

    def test_generate_then_validate(self, blocks_dir):
        """A written schema validates from the CLI."""
        project = blocks_dir.parent
        assert run_cli("generate", "cards", "-p", str(project)).returncode == 0

        target = project / "ue" / "models" / "blocks" / "cards.json"
        assert target.is_file()
        assert run_cli("validate", str(target)).returncode == 0

    def test_validate_setup_fails_on_empty_project(self, tmp_path):
        """An empty project fails the setup check."""
        result = run_cli("validate", "setup", str(tmp_path))
        assert result.returncode == 1
        assert "package.json not found" in result.stderr

    def test_base_configs(self, tmp_path):
        """base-configs writes seven files."""
        result = run_cli("base-configs", "hero", "-p", str(tmp_path))
        assert result.returncode == 0
        assert len(list((tmp_path / "ue" / "models").glob("*.json"))) == 7
