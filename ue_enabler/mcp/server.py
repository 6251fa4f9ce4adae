"""FastMCP server instance for ue-enabler.

This module provides the MCP server that exposes block analysis and
authoring schema generation to LLM clients. The typical workflow:

    1. list_blocks: find the blocks in a project
    2. analyze_block_structure: see what a block expects
    3. generate_block_json: preview, then write its authoring schema
    4. validate_setup: confirm the project is wired for the editor

Usage:
    # STDIO mode (for desktop clients)
    python -m ue_enabler.mcp.server

    # HTTP mode
    python -m ue_enabler.mcp.server --transport http --port 18080

    # Via CLI
    python . mcp run
"""

import argparse
import json
import logging
import sys
from functools import lru_cache
from typing import Any

from fastmcp import FastMCP

from ue_enabler.core.log import setup_logging

from .lib import (
    SERVER_NAME,
    ServerConfig,
    TransportType,
    get_server_version,
    server_status,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Server Instructions (LLM Guidance)
# =============================================================================

SERVER_INSTRUCTIONS = """\
## UE Enabler MCP Server

Instruments Edge Delivery Services blocks for the Universal Editor by
inferring the table structure each block expects and generating the
definitions, models and filters the editor reads.

### Quick Start
1. `list_blocks(project_path)` → see available blocks
2. `analyze_block_structure(block_name, project_path)` → inferred structure
3. `generate_block_json(block_name, project_path, preview=True)` → review
4. `generate_block_json(block_name, project_path)` → write ue/models/blocks/<name>.json
5. `validate_setup(project_path)` → check the project

### New Projects
- `generate_base_configs(project_path, block_names)` writes page, text,
  image and section schemas plus the component-* aggregation templates.

### GitHub
Pass `github={"org": ..., "repo": ..., "branch": ..., "blocks_path": ...}`
to read blocks from a repository instead of the local project.
"""

# =============================================================================
# Server Instance
# =============================================================================

mcp = FastMCP(
    name=SERVER_NAME,
    instructions=SERVER_INSTRUCTIONS,
)


# =============================================================================
# Analysis Tools
# =============================================================================


@mcp.tool
def list_blocks(
    project_path: str = ".",
    local_blocks_path: str | None = None,
    github: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """List all blocks in a project or GitHub repository.

    Args:
        project_path: Project root. Blocks are read from <project>/blocks.
        local_blocks_path: Custom blocks directory (relative or absolute).
        github: Repository to read instead, e.g.
            {"org": "adobe", "repo": "aem-boilerplate", "branch": "main"}.

    Returns:
        Dictionary with:
        - source: Where the blocks were read from
        - blocks_found: Number of blocks
        - blocks: name, path, has_js, has_css per block
    """
    from .tools.analysis import list_blocks as _list_blocks

    return _list_blocks(
        project_path=project_path,
        local_blocks_path=local_blocks_path,
        github=github,
    )


@mcp.tool
def analyze_block_structure(
    block_name: str | None = None,
    code: str | None = None,
    project_path: str = ".",
    local_blocks_path: str | None = None,
    github: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Analyze the markup structure a block's decorator expects.

    Pass block_name to read the block from the project (or github), or
    pass its JavaScript source directly as code.

    Returns:
        Dictionary with:
        - analysis: expectedStructure, domTransformations, isContainer,
          requiresObserver, complexity, configKeys, ...
        - complexity_level: score and characteristics
        - mutations: DOM mutations that can strip editor attributes
        - suggestion: rows/columns or unsafeHTML recommendation
        - code_snippet: first 500 characters of the source
    """
    from .tools.analysis import analyze_block_structure as _analyze

    return _analyze(
        block_name=block_name,
        code=code,
        project_path=project_path,
        local_blocks_path=local_blocks_path,
        github=github,
    )


# =============================================================================
# Generation Tools
# =============================================================================


@mcp.tool
def generate_block_json(
    block_name: str,
    project_path: str = ".",
    code: str | None = None,
    output_path: str | None = None,
    preview: bool = False,
    custom_fields: list[dict[str, Any]] | None = None,
    local_blocks_path: str | None = None,
    github: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Generate a block's Universal Editor authoring schema.

    Use preview=True first to review the schema without writing.

    Args:
        block_name: Block to generate for.
        project_path: Project root.
        code: Block source (optional, read from the project otherwise).
        output_path: Custom output file. Default: ue/models/blocks/<name>.json
        preview: Return JSON without writing.
        custom_fields: Per-field overrides by position, e.g.
            [{"label": "Heading", "type": "text"}, {}, {"type": "reference"}]
        local_blocks_path: Custom blocks directory.
        github: Repository to read the block from.

    Returns:
        Dictionary with analysis summary, json_config, validation and,
        when written, file_path.
    """
    from .tools.generation import generate_block_json as _generate

    return _generate(
        block_name=block_name,
        project_path=project_path,
        code=code,
        output_path=output_path,
        preview=preview,
        custom_fields=custom_fields,
        local_blocks_path=local_blocks_path,
        github=github,
    )


@mcp.tool
def generate_base_configs(
    project_path: str = ".",
    block_names: list[str] | None = None,
) -> dict[str, Any]:
    """Write base configs: page, text, image, section and component-* templates.

    Args:
        project_path: Project root. Files go to ue/models/.
        block_names: Blocks the section filter should accept.

    Returns:
        Dictionary with created file paths and a summary message.
    """
    from .tools.generation import generate_base_configs as _generate_base

    return _generate_base(project_path=project_path, block_names=block_names)


# =============================================================================
# Validation Tools
# =============================================================================


@mcp.tool
def validate_block_json(
    schema: dict[str, Any] | None = None,
    file_path: str | None = None,
) -> dict[str, Any]:
    """Validate an authoring schema (definitions, models, filters).

    Args:
        schema: Schema JSON to validate.
        file_path: Or a path to a schema file.

    Returns:
        Dictionary with valid, errors and warnings.
    """
    from .tools.validation import validate_block_json as _validate

    return _validate(schema=schema, file_path=file_path)


@mcp.tool
def validate_setup(project_path: str = ".") -> dict[str, Any]:
    """Check a project's Universal Editor setup.

    Checks package.json dependencies and build scripts, the ue/ folder
    layout, base and template configs, editor scripts and git hooks.
    Read-only.

    Returns:
        Dictionary with valid, errors, warnings, checks and a message.
    """
    from .tools.validation import validate_setup as _validate_setup

    return _validate_setup(project_path=project_path)


@mcp.tool
def status() -> dict[str, Any]:
    """Check server status and configuration.

    Returns:
        Dictionary with:
        - status: "healthy"
        - version: Server version
        - capabilities: Protocol capability flags
        - github: Whether a token is configured and the API URL
        - complexity_levels: What each complexity bucket means
    """
    return server_status()


# =============================================================================
# Resources (Schema Reference)
# =============================================================================


@lru_cache(maxsize=1)
def _cached_authoring_schema() -> str:
    """Cached authoring schema."""
    from ue_enabler.ir import export_json_schema

    return json.dumps(export_json_schema(), indent=2)


@mcp.resource("schema://authoring")
def get_authoring_schema() -> str:
    """Get the JSON schema of block authoring files.

    Describes the definitions, models and filters structure written to
    ue/models/blocks/<name>.json.
    """
    return _cached_authoring_schema()


# =============================================================================
# Server Factory & Runner
# =============================================================================


def create_server() -> FastMCP:
    """Create and configure the MCP server instance.

    Returns:
        Configured FastMCP server instance.
    """
    return mcp


def run_server(config: ServerConfig | None = None) -> None:
    """Run the MCP server with the configured transport.

    Args:
        config: Transport, host and port. Defaults to STDIO.
    """
    config = config or ServerConfig()
    logger.info(f"Starting {SERVER_NAME} server v{get_server_version()}")
    logger.info(f"Transport: {config.transport.value}")

    if config.transport == TransportType.STDIO:
        logger.info("Running in STDIO mode")
        mcp.run()
    elif config.transport == TransportType.HTTP:
        logger.info(f"Running in HTTP mode at {config.url}")
        mcp.run(
            transport="http",
            host=config.host,
            port=config.port,
            path=config.path,
        )
    elif config.transport == TransportType.SSE:
        logger.info(f"Running in SSE mode at {config.url}")
        mcp.run(
            transport="sse",
            host=config.host,
            port=config.port,
        )
    else:
        raise ValueError(f"Unknown transport: {config.transport}")


# =============================================================================
# CLI Entry Point
# =============================================================================


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for MCP server.

    Args:
        argv: Command line arguments (uses sys.argv if None).

    Returns:
        Exit code (0 for success).
    """
    parser = argparse.ArgumentParser(
        prog=SERVER_NAME,
        description="MCP server for Universal Editor block instrumentation",
    )
    parser.add_argument(
        "--transport",
        "-t",
        type=str,
        choices=[t.value for t in TransportType],
        default=TransportType.STDIO.value,
        help="Transport type (default: stdio)",
    )
    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Bind address for HTTP/SSE (default: MCP_HOST or 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        "-p",
        type=int,
        default=None,
        help="Port for HTTP/SSE (default: MCP_PORT or 18080)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args(argv)

    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        run_server(ServerConfig.from_env(args.transport, host=args.host, port=args.port))
        return 0
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
        return 0
    except Exception as e:
        logger.error(f"Server error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
