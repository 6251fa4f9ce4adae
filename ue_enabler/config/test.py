"""Tests for configuration management."""

import pytest

from .lib import (
    EnvConfig,
    EnvVar,
    _convert_value,
    get_blocks_path,
    get_environment,
    get_environment_info,
    get_models_path,
    list_environment_variables,
)

# =============================================================================
# Tests for get_environment (main interface)
# =============================================================================


class TestGetEnvironment:
    """Tests for the unified get_environment interface."""

    @pytest.mark.unit
    def test_returns_default_when_not_set(self, monkeypatch):
        """Returns default value when env var is not set."""
        monkeypatch.delenv("MCP_PORT", raising=False)
        assert get_environment(EnvVar.MCP_PORT) == 18080

    @pytest.mark.unit
    def test_override_takes_priority(self, monkeypatch):
        """Override parameter takes highest priority."""
        monkeypatch.setenv("MCP_PORT", "9999")
        assert get_environment(EnvVar.MCP_PORT, override=5000) == 5000

    @pytest.mark.unit
    def test_env_var_overrides_default(self, monkeypatch):
        """Environment variable overrides default value."""
        monkeypatch.setenv("GITHUB_BRANCH", "develop")
        assert get_environment(EnvVar.GITHUB_BRANCH) == "develop"

    @pytest.mark.unit
    def test_int_type_conversion(self, monkeypatch):
        """Integer type conversion from string."""
        monkeypatch.setenv("MCP_PORT", "8080")
        result = get_environment(EnvVar.MCP_PORT)
        assert result == 8080
        assert isinstance(result, int)

    @pytest.mark.unit
    def test_float_type_conversion(self, monkeypatch):
        """Float type conversion from string."""
        monkeypatch.setenv("GITHUB_TIMEOUT", "12.5")
        assert get_environment(EnvVar.GITHUB_TIMEOUT) == 12.5

    @pytest.mark.unit
    def test_invalid_int_returns_default(self, monkeypatch):
        """Invalid integer value returns default."""
        monkeypatch.setenv("MCP_PORT", "not-a-number")
        assert get_environment(EnvVar.MCP_PORT) == 18080

    @pytest.mark.unit
    def test_none_default_for_token(self, monkeypatch):
        """Token defaults to None when not set."""
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        assert get_environment(EnvVar.GITHUB_TOKEN) is None


class TestConversionHelpers:
    """Tests for value conversion helpers."""

    @pytest.mark.unit
    def test_missing_value_uses_default(self):
        """Unset values fall back to the default."""
        assert _convert_value(None, int, 7) == 7

    @pytest.mark.unit
    def test_invalid_float_uses_default(self):
        """Unparseable floats fall back to the default."""
        assert _convert_value("soon", float, 30.0) == 30.0


class TestGetEnvironmentInfo:
    """Tests for environment variable metadata."""

    @pytest.mark.unit
    def test_returns_env_config(self):
        """Returns EnvConfig dataclass."""
        info = get_environment_info(EnvVar.GITHUB_API_URL)
        assert isinstance(info, EnvConfig)
        assert info.name == "GITHUB_API_URL"
        assert info.default == "https://api.github.com"
        assert info.var_type is str
        assert info.category == "github"


class TestListEnvironmentVariables:
    """Tests for listing environment variables."""

    @pytest.mark.unit
    def test_list_all(self):
        """Listing without category returns every variable."""
        assert list_environment_variables() == list(EnvVar)

    @pytest.mark.unit
    def test_filter_by_category(self):
        """Category filter returns only matching variables."""
        project_vars = list_environment_variables("project")
        assert set(project_vars) == {EnvVar.UE_BLOCKS_DIR, EnvVar.UE_MODELS_DIR}


class TestProjectPaths:
    """Tests for project path helpers."""

    @pytest.mark.unit
    def test_blocks_path_default(self, monkeypatch, tmp_path):
        """Blocks directory defaults to ./blocks."""
        monkeypatch.delenv("UE_BLOCKS_DIR", raising=False)
        assert get_blocks_path(tmp_path) == tmp_path / "blocks"

    @pytest.mark.unit
    def test_blocks_path_override(self, tmp_path):
        """Override is resolved relative to the project."""
        assert get_blocks_path(tmp_path, "src/blocks") == tmp_path / "src" / "blocks"

    @pytest.mark.unit
    def test_models_path_from_env(self, monkeypatch, tmp_path):
        """Models directory follows UE_MODELS_DIR."""
        monkeypatch.setenv("UE_MODELS_DIR", "editor/models")
        assert get_models_path(tmp_path) == tmp_path / "editor" / "models"
