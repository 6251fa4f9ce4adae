"""Unit tests for MCP server module.

Tests cover:
- Server configuration
- Server instance creation
- Tool registration and calls over the MCP protocol
"""

import json

import pytest

from .lib import (
    SERVER_NAME,
    ServerConfig,
    TransportType,
    describe_complexity_levels,
    get_server_capabilities,
    get_server_version,
    server_status,
)
from .server import create_server, main, mcp

EXPECTED_TOOLS = {
    "list_blocks",
    "analyze_block_structure",
    "generate_block_json",
    "generate_base_configs",
    "validate_block_json",
    "validate_setup",
    "status",
}


def _payload(result) -> dict:
    """Decode the JSON text content of a tool result."""
    return json.loads(result.content[0].text)


# =============================================================================
# Configuration Tests
# =============================================================================


class TestServerConfig:
    """Tests for ServerConfig dataclass."""

    @pytest.mark.unit
    def test_default_config(self):
        """Default config has expected values."""
        config = ServerConfig()

        assert config.name == "ue-enabler-mcp"
        assert config.transport == TransportType.STDIO
        assert config.host == "0.0.0.0"
        assert config.port == 18080
        assert config.path == "/mcp"

    @pytest.mark.unit
    def test_from_env(self, monkeypatch):
        """from_env reads host and port from the environment."""
        monkeypatch.setenv("MCP_HOST", "127.0.0.1")
        monkeypatch.setenv("MCP_PORT", "9001")
        config = ServerConfig.from_env("http")

        assert config.transport == TransportType.HTTP
        assert config.host == "127.0.0.1"
        assert config.port == 9001

    @pytest.mark.unit
    def test_from_env_arguments_win(self, monkeypatch):
        """Explicit host and port override the environment."""
        monkeypatch.setenv("MCP_PORT", "9001")
        config = ServerConfig.from_env(TransportType.SSE, host="localhost", port=7000)

        assert config.host == "localhost"
        assert config.port == 7000

    @pytest.mark.unit
    def test_url(self):
        """HTTP serves under the path, SSE at the root, STDIO has no URL."""
        assert ServerConfig().url is None
        http = ServerConfig(transport=TransportType.HTTP, host="localhost", port=8000)
        assert http.url == "http://localhost:8000/mcp"
        sse = ServerConfig(transport=TransportType.SSE, host="localhost", port=8000)
        assert sse.url == "http://localhost:8000"


class TestTransportType:
    """Tests for TransportType enum."""

    @pytest.mark.unit
    def test_transport_from_string(self):
        """TransportType can be created from its value."""
        assert TransportType("http") is TransportType.HTTP

    @pytest.mark.unit
    def test_invalid_transport(self):
        """Unknown transports are rejected."""
        with pytest.raises(ValueError):
            TransportType("websocket")


class TestServerUtilities:
    """Tests for server utility functions."""

    @pytest.mark.unit
    def test_get_server_version(self):
        """Version matches the package version."""
        from ue_enabler import __version__

        assert get_server_version() == __version__

    @pytest.mark.unit
    def test_get_server_capabilities(self):
        """Capabilities advertise tools and resources."""
        capabilities = get_server_capabilities()
        assert capabilities["tools"] is True
        assert capabilities["resources"] is True

    @pytest.mark.unit
    def test_complexity_levels(self):
        """Levels are keyed by name with ascending scores."""
        levels = describe_complexity_levels()
        assert [levels[k]["score"] for k in ("SIMPLE", "MODERATE", "COMPLEX")] == [1, 2, 3]
        assert "Requires observers" in levels["COMPLEX"]["characteristics"]

    @pytest.mark.unit
    def test_status_without_token(self, monkeypatch):
        """A note is added when no GitHub token is set."""
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        status = server_status()
        assert status["status"] == "healthy"
        assert status["github"]["token_configured"] is False
        assert "GITHUB_TOKEN" in status["note"]

    @pytest.mark.unit
    def test_status_with_token(self, monkeypatch):
        """No note once a token is configured."""
        monkeypatch.setenv("GITHUB_TOKEN", "secret")
        status = server_status()
        assert status["github"]["token_configured"] is True
        assert "note" not in status


# =============================================================================
# Server Instance Tests
# =============================================================================


class TestServerInstance:
    """Tests for FastMCP server instance."""

    @pytest.mark.unit
    def test_create_server_returns_mcp(self):
        """create_server returns the mcp instance."""
        assert create_server() is mcp

    @pytest.mark.unit
    def test_server_has_name(self):
        """Server has correct name."""
        assert mcp.name == SERVER_NAME

    @pytest.mark.unit
    def test_main_rejects_unknown_transport(self):
        """CLI rejects transports it does not know."""
        with pytest.raises(SystemExit):
            main(["--transport", "websocket"])


# =============================================================================
# MCP Protocol Tests
# =============================================================================


@pytest.mark.mcp
class TestMCPProtocol:
    """Integration tests using MCP client protocol."""

    @pytest.mark.asyncio
    async def test_client_can_list_tools(self, mcp_client):
        """Exactly the block tools are exposed."""
        tools = await mcp_client.list_tools()
        assert {t.name for t in tools} == EXPECTED_TOOLS

    @pytest.mark.asyncio
    async def test_status(self, mcp_client):
        """status reports version and complexity levels."""
        data = _payload(await mcp_client.call_tool("status", {}))
        assert data["status"] == "healthy"
        assert data["version"] == get_server_version()
        assert set(data["complexity_levels"]) == {"SIMPLE", "MODERATE", "COMPLEX"}

    @pytest.mark.asyncio
    async def test_analyze_inline_code(self, mcp_client, cards_block):
        """analyze_block_structure accepts inline code."""
        data = _payload(
            await mcp_client.call_tool("analyze_block_structure", {"code": cards_block})
        )
        assert data["analysis"]["isContainer"] is True
        assert data["suggestion"]["useUnsafeHTML"] is True

    @pytest.mark.asyncio
    async def test_analyze_malformed_code_errors(self, mcp_client, malformed_block):
        """Malformed code surfaces as a tool error."""
        with pytest.raises(Exception, match="Failed to analyze block structure"):
            await mcp_client.call_tool("analyze_block_structure", {"code": malformed_block})

    @pytest.mark.asyncio
    async def test_list_blocks(self, mcp_client, blocks_dir):
        """list_blocks reads the project's blocks directory."""
        data = _payload(
            await mcp_client.call_tool("list_blocks", {"project_path": str(blocks_dir.parent)})
        )
        assert data["blocks_found"] == 3

    @pytest.mark.asyncio
    async def test_unknown_block_errors(self, mcp_client, blocks_dir):
        """Unknown blocks surface as a not found error."""
        with pytest.raises(Exception, match="not found"):
            await mcp_client.call_tool(
                "generate_block_json",
                {"block_name": "nope", "project_path": str(blocks_dir.parent)},
            )

    @pytest.mark.asyncio
    async def test_generate_preview(self, mcp_client, blocks_dir):
        """Preview returns the schema without writing it."""
        project = blocks_dir.parent
        data = _payload(
            await mcp_client.call_tool(
                "generate_block_json",
                {"block_name": "hero", "project_path": str(project), "preview": True},
            )
        )
        assert data["validation"]["valid"] is True
        assert len(data["json_config"]["models"][0]["fields"]) == 3
        assert not (project / "ue").exists()

    @pytest.mark.asyncio
    async def test_authoring_schema_resource(self, mcp_client):
        """The authoring JSON schema is exposed as a resource."""
        contents = await mcp_client.read_resource("schema://authoring")
        schema = json.loads(contents[0].text)
        assert set(schema["properties"]) == {"definitions", "models", "filters"}
