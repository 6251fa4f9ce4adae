"""Pytest fixtures for MCP server tests.

This module provides:
- Server and client fixtures for protocol testing
"""

from __future__ import annotations

from typing import AsyncGenerator

import pytest
from fastmcp import Client, FastMCP

# =============================================================================
# Server Fixtures
# =============================================================================


@pytest.fixture
def mcp_server() -> FastMCP:
    """Create MCP server instance for testing.

    Returns:
        Configured FastMCP server instance.
    """
    from .server import create_server

    return create_server()


@pytest.fixture
async def mcp_client(mcp_server: FastMCP) -> AsyncGenerator[Client, None]:
    """Create connected MCP client for testing.

    Args:
        mcp_server: The MCP server instance.

    Yields:
        Connected Client instance for testing.
    """
    async with Client(mcp_server) as client:
        yield client
