"""MCP (Model Context Protocol) server for ue-enabler.

This module provides the MCP server implementation that exposes block
analysis and authoring schema generation to LLM clients.

Example:
    # Start server in STDIO mode
    >>> from ue_enabler.mcp import run_server
    >>> run_server()

    # Start server in HTTP mode
    >>> from ue_enabler.mcp import ServerConfig, TransportType, run_server
    >>> run_server(ServerConfig(transport=TransportType.HTTP, port=18080))

    # Create server for testing
    >>> from ue_enabler.mcp import create_server
    >>> server = create_server()

Available Tools:
    - list_blocks: List blocks in a project or GitHub repository
    - analyze_block_structure: Infer the structure a block expects
    - generate_block_json: Generate a block's authoring schema
    - generate_base_configs: Write built-in schemas and templates
    - validate_block_json: Validate an authoring schema
    - validate_setup: Check project setup
    - status: Server status and configuration
"""

from .lib import (
    SERVER_NAME,
    ServerConfig,
    TransportType,
    get_server_capabilities,
    get_server_version,
    server_status,
)
from .server import create_server, mcp, run_server

__all__ = [
    # Server instance
    "mcp",
    "create_server",
    "run_server",
    # Configuration
    "SERVER_NAME",
    "ServerConfig",
    "TransportType",
    # Utilities
    "get_server_version",
    "get_server_capabilities",
    "server_status",
]
