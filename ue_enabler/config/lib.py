"""Centralized environment configuration management for ue-enabler.

Provides a unified interface for all environment variables with:
- Single `get_environment()` function for all configuration
- Type-safe enum with metadata (default, type, description)
- Consistent resolution: override > environment > default

Example:
    >>> from ue_enabler.config import EnvVar, get_environment
    >>>
    >>> # Get values with automatic type conversion
    >>> port = get_environment(EnvVar.MCP_PORT)  # Returns int
    >>> token = get_environment(EnvVar.GITHUB_TOKEN)  # Returns str | None
    >>>
    >>> # Override at runtime
    >>> port = get_environment(EnvVar.MCP_PORT, override=9000)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, overload

# =============================================================================
# Environment Variable Configuration
# =============================================================================


@dataclass(frozen=True)
class EnvConfig:
    """Metadata for an environment variable.

    Attributes:
        name: Environment variable name (e.g., "GITHUB_TOKEN").
        default: Default value if not set in environment.
        var_type: Python type for value conversion (str, int, float).
        description: Human-readable description.
        category: Grouping category for documentation.
    """

    name: str
    default: Any
    var_type: type
    description: str = ""
    category: str = "general"


class EnvVar(Enum):
    """All environment variables used by ue-enabler.

    Each member contains an EnvConfig with name, default, type, and description.
    Use with `get_environment()` for type-safe access.

    Categories:
        - github: Remote block retrieval
        - project: Project layout (blocks and models directories)
        - service: MCP server host and port
    """

    # -------------------------------------------------------------------------
    # GitHub (remote block sources)
    # -------------------------------------------------------------------------
    GITHUB_TOKEN = EnvConfig(
        name="GITHUB_TOKEN",
        default=None,
        var_type=str,
        description="GitHub token used to read block sources from repositories",
        category="github",
    )
    GITHUB_API_URL = EnvConfig(
        name="GITHUB_API_URL",
        default="https://api.github.com",
        var_type=str,
        description="GitHub REST API base URL (set for GitHub Enterprise)",
        category="github",
    )
    GITHUB_BRANCH = EnvConfig(
        name="GITHUB_BRANCH",
        default="main",
        var_type=str,
        description="Default branch to read block sources from",
        category="github",
    )
    GITHUB_TIMEOUT = EnvConfig(
        name="GITHUB_TIMEOUT",
        default=30.0,
        var_type=float,
        description="Request timeout in seconds for GitHub API calls",
        category="github",
    )

    # -------------------------------------------------------------------------
    # Project Layout
    # -------------------------------------------------------------------------
    UE_BLOCKS_DIR = EnvConfig(
        name="UE_BLOCKS_DIR",
        default="blocks",
        var_type=str,
        description="Blocks directory relative to the project root",
        category="project",
    )
    UE_MODELS_DIR = EnvConfig(
        name="UE_MODELS_DIR",
        default="ue/models",
        var_type=str,
        description="Universal Editor models directory relative to the project root",
        category="project",
    )

    # -------------------------------------------------------------------------
    # Service Configuration
    # -------------------------------------------------------------------------
    MCP_HOST = EnvConfig(
        name="MCP_HOST",
        default="0.0.0.0",
        var_type=str,
        description="MCP server bind address",
        category="service",
    )
    MCP_PORT = EnvConfig(
        name="MCP_PORT",
        default=18080,
        var_type=int,
        description="MCP server port (avoids 8080)",
        category="service",
    )


# =============================================================================
# Type Conversion
# =============================================================================


def _convert_value(value: str | None, var_type: type, default: Any) -> Any:
    """Convert string value to target type.

    Args:
        value: Raw string value from environment (or None).
        var_type: Target Python type.
        default: Default value if conversion fails or value is None.

    Returns:
        Converted value or default.
    """
    if value is None:
        return default

    if var_type is str:
        return value

    if var_type in (int, float):
        try:
            return var_type(value)
        except ValueError:
            return default

    # Unknown type, return as-is
    return value


# =============================================================================
# Main Interface
# =============================================================================


@overload
def get_environment(env_var: EnvVar, override: int) -> int: ...
@overload
def get_environment(env_var: EnvVar, override: str) -> str: ...
@overload
def get_environment(env_var: EnvVar, override: None = None) -> Any: ...


def get_environment(env_var: EnvVar, override: Any = None) -> Any:
    """Get environment variable value with type conversion.

    Resolution priority:
        1. Explicit override parameter (highest)
        2. Environment variable value
        3. Default from EnvConfig (lowest)

    Args:
        env_var: Environment variable enum member.
        override: Optional override value (bypasses env lookup).

    Returns:
        Value converted to the appropriate type.

    Example:
        >>> get_environment(EnvVar.MCP_PORT)
        18080
        >>> get_environment(EnvVar.MCP_PORT, override=9000)
        9000
    """
    config: EnvConfig = env_var.value

    if override is not None:
        return override

    raw_value = os.environ.get(config.name)
    return _convert_value(raw_value, config.var_type, config.default)


def get_environment_info(env_var: EnvVar) -> EnvConfig:
    """Get metadata for an environment variable.

    Args:
        env_var: Environment variable enum member.

    Returns:
        EnvConfig with name, default, type, and description.
    """
    return env_var.value


# =============================================================================
# Convenience Functions
# =============================================================================


def get_blocks_path(project_path: Path | str, override: Path | str | None = None) -> Path:
    """Get the blocks directory for a project.

    Resolution: override (relative to project) > UE_BLOCKS_DIR > ./blocks
    """
    relative = override if override is not None else get_environment(EnvVar.UE_BLOCKS_DIR)
    return Path(project_path) / relative


def get_models_path(project_path: Path | str) -> Path:
    """Get the Universal Editor models directory for a project."""
    return Path(project_path) / get_environment(EnvVar.UE_MODELS_DIR)


def list_environment_variables(category: str | None = None) -> list[EnvVar]:
    """List all environment variables, optionally filtered by category.

    Args:
        category: Filter by category (github, project, service).
                 None returns all variables.

    Returns:
        List of EnvVar enum members.
    """
    if category is None:
        return list(EnvVar)

    return [var for var in EnvVar if var.value.category == category]


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
