"""Centralized configuration management for ue-enabler.

Provides unified access to all configuration via the `get_environment()` function.

Example:
    >>> from ue_enabler.config import EnvVar, get_environment
    >>>
    >>> token = get_environment(EnvVar.GITHUB_TOKEN)  # Returns str | None
    >>> branch = get_environment(EnvVar.GITHUB_BRANCH)  # Returns "main"
    >>>
    >>> # Override at runtime
    >>> port = get_environment(EnvVar.MCP_PORT, override=9000)

Environment Variable Categories:
    github: Token, API URL, branch and timeout for remote block sources
    project: Blocks and models directories inside a project
    service: MCP server host and port
"""

from .lib import (
    # Core types
    EnvConfig,
    EnvVar,
    # Main interface
    get_blocks_path,
    get_environment,
    get_environment_info,
    get_models_path,
    # Introspection
    list_environment_variables,
)

__all__ = [
    # Core types
    "EnvConfig",
    "EnvVar",
    # Main interface
    "get_environment",
    "get_environment_info",
    # Convenience functions
    "get_blocks_path",
    "get_models_path",
    # Introspection
    "list_environment_variables",
]
