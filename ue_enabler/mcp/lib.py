"""Core MCP server logic for ue-enabler.

Holds the server configuration, version and capability metadata, and the
status report served by the status tool.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from ue_enabler.config import EnvVar, get_environment
from ue_enabler.patterns import COMPLEXITY_LEVELS

SERVER_NAME = "ue-enabler-mcp"
HTTP_PATH = "/mcp"


class TransportType(str, Enum):
    """Supported MCP transport types."""

    STDIO = "stdio"
    HTTP = "http"
    SSE = "sse"


@dataclass(frozen=True)
class ServerConfig:
    """How the MCP server is exposed.

    Attributes:
        transport: Transport type for communication.
        host: Bind address for HTTP/SSE transports.
        port: Port for HTTP/SSE transports.
        path: URL path for the HTTP transport.
    """

    transport: TransportType = TransportType.STDIO
    host: str = "0.0.0.0"
    port: int = 18080
    path: str = HTTP_PATH

    @property
    def name(self) -> str:
        return SERVER_NAME

    @property
    def url(self) -> str | None:
        """Address clients connect to, or None for STDIO."""
        if self.transport == TransportType.STDIO:
            return None
        suffix = self.path if self.transport == TransportType.HTTP else ""
        return f"http://{self.host}:{self.port}{suffix}"

    @classmethod
    def from_env(
        cls,
        transport: TransportType | str | None = None,
        host: str | None = None,
        port: int | None = None,
    ) -> "ServerConfig":
        """Build a config, filling host and port from MCP_HOST and MCP_PORT.

        Explicit arguments win over the environment.
        """
        return cls(
            transport=TransportType(transport or TransportType.STDIO),
            host=get_environment(EnvVar.MCP_HOST, override=host),
            port=get_environment(EnvVar.MCP_PORT, override=port),
        )


def get_server_version() -> str:
    """Get server version string."""
    from ue_enabler import __version__

    return __version__


def get_server_capabilities() -> dict[str, bool]:
    """Capability flags advertised by the server."""
    return {
        "tools": True,
        "resources": True,
        "prompts": False,
        "logging": True,
    }


def describe_complexity_levels() -> dict[str, dict[str, Any]]:
    """Score and characteristics of each complexity bucket, keyed by name."""
    return {
        level.complexity.value: {
            "score": level.score,
            "characteristics": list(level.characteristics),
        }
        for level in COMPLEXITY_LEVELS.values()
    }


def server_status() -> dict[str, Any]:
    """Health and configuration report.

    A note is added when no GitHub token is configured, since anonymous
    access cannot read private repositories and is heavily rate limited.
    """
    token_configured = bool(get_environment(EnvVar.GITHUB_TOKEN))
    status: dict[str, Any] = {
        "status": "healthy",
        "version": get_server_version(),
        "capabilities": get_server_capabilities(),
        "github": {
            "token_configured": token_configured,
            "api_url": get_environment(EnvVar.GITHUB_API_URL),
        },
        "complexity_levels": describe_complexity_levels(),
    }
    if not token_configured:
        status["note"] = "Set GITHUB_TOKEN in .env for private repositories and higher rate limits"
    return status


__all__ = [
    "SERVER_NAME",
    "HTTP_PATH",
    "TransportType",
    "ServerConfig",
    "get_server_version",
    "get_server_capabilities",
    "describe_complexity_levels",
    "server_status",
]
