"""CLI entry point for ue-enabler-mcp.

This module acts as the central entry point for the project's CLI tools.
It delegates commands to the appropriate submodules or runs specific tasks.
"""

import argparse
import json
import subprocess
import sys
from pathlib import Path

from dotenv import load_dotenv

from ue_enabler.config import EnvVar, get_environment
from ue_enabler.core.log import get_logger, setup_logging

# Load environment variables from .env file
load_dotenv()

logger = get_logger("cli")


def _github_location(args: argparse.Namespace) -> dict[str, str] | None:
    """Build a GitHub location from --github org/repo and --branch."""
    if not getattr(args, "github", None):
        return None
    org, _, repo = args.github.partition("/")
    location = {"org": org, "repo": repo}
    if args.branch:
        location["branch"] = args.branch
    if args.blocks_path:
        location["blocks_path"] = args.blocks_path
    return location


def _add_source_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--project",
        "-p",
        type=Path,
        default=Path("."),
        help="Project root (default: current directory)",
    )
    parser.add_argument(
        "--blocks-path",
        type=str,
        default=None,
        help="Blocks directory, relative to the project or repository",
    )
    parser.add_argument(
        "--github",
        type=str,
        default=None,
        metavar="ORG/REPO",
        help="Read blocks from a GitHub repository",
    )
    parser.add_argument(
        "--branch",
        type=str,
        default=None,
        help="Branch to read from (default: GITHUB_BRANCH or main)",
    )


def _emit(data: object) -> None:
    print(json.dumps(data, indent=2))


# =============================================================================
# List Command
# =============================================================================


def handle_list_command(argv: list[str]) -> int:
    """List blocks in a project or repository."""
    parser = argparse.ArgumentParser(
        prog="python . list",
        description="List blocks with their JavaScript and CSS files",
    )
    _add_source_arguments(parser)
    args = parser.parse_args(argv)

    from ue_enabler.mcp.tools import list_blocks

    try:
        result = list_blocks(
            project_path=str(args.project),
            local_blocks_path=None if args.github else args.blocks_path,
            github=_github_location(args),
        )
    except Exception as e:
        logger.error(f"Listing blocks failed: {e}")
        return 1

    print(f"{result['source']} ({result['blocks_found']} blocks)")
    for block in result["blocks"]:
        files = [ext for ext, key in (("js", "has_js"), ("css", "has_css")) if block[key]]
        print(f"  {block['name']:<24} {', '.join(files) or '-'}")
    return 0


# =============================================================================
# Analyze Command
# =============================================================================


def handle_analyze_command(argv: list[str]) -> int:
    """Analyze a block and print the inferred structure."""
    parser = argparse.ArgumentParser(
        prog="python . analyze",
        description="Infer the table structure a block decorator expects",
    )
    parser.add_argument("block", nargs="?", help="Block name")
    parser.add_argument(
        "--file",
        "-f",
        type=Path,
        default=None,
        help="Analyze a JavaScript file instead of a named block",
    )
    _add_source_arguments(parser)
    args = parser.parse_args(argv)

    if not args.block and not args.file:
        parser.error("provide a block name or --file")

    from ue_enabler.mcp.tools import analyze_block_structure

    try:
        code = args.file.read_text(encoding="utf-8") if args.file else None
        result = analyze_block_structure(
            block_name=args.block,
            code=code,
            project_path=str(args.project),
            local_blocks_path=None if args.github else args.blocks_path,
            github=_github_location(args),
        )
    except Exception as e:
        logger.error(f"Analysis failed: {e}")
        return 1

    result.pop("code_snippet", None)
    _emit(result)
    return 0


# =============================================================================
# Generate Command
# =============================================================================


def handle_generate_command(argv: list[str]) -> int:
    """Generate a block's authoring schema."""
    parser = argparse.ArgumentParser(
        prog="python . generate",
        description="Generate definitions, models and filters for a block",
    )
    parser.add_argument("block", help="Block name")
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Output file (default: ue/models/blocks/<name>.json)",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Print the schema without writing it",
    )
    parser.add_argument(
        "--fields",
        type=Path,
        default=None,
        help="JSON file with per-field overrides ([{\"label\": ..., \"type\": ...}])",
    )
    _add_source_arguments(parser)
    args = parser.parse_args(argv)

    from ue_enabler.mcp.tools import generate_block_json

    try:
        custom_fields = (
            json.loads(args.fields.read_text(encoding="utf-8")) if args.fields else None
        )
        result = generate_block_json(
            block_name=args.block,
            project_path=str(args.project),
            output_path=str(args.output) if args.output else None,
            preview=args.preview,
            custom_fields=custom_fields,
            local_blocks_path=None if args.github else args.blocks_path,
            github=_github_location(args),
        )
    except Exception as e:
        logger.error(f"Generation failed: {e}")
        return 1

    for warning in result["validation"]["warnings"]:
        logger.warning(warning)

    if args.preview:
        _emit(result["json_config"])
    else:
        logger.info(result["message"])
        logger.info(f"Written to {result['file_path']}")
    return 0


def handle_base_configs_command(argv: list[str]) -> int:
    """Write base page/text/image/section configs and templates."""
    parser = argparse.ArgumentParser(
        prog="python . base-configs",
        description="Write the base Universal Editor configs to ue/models",
    )
    parser.add_argument(
        "blocks",
        nargs="*",
        help="Block names the section filter should accept",
    )
    parser.add_argument(
        "--project",
        "-p",
        type=Path,
        default=Path("."),
        help="Project root (default: current directory)",
    )
    args = parser.parse_args(argv)

    from ue_enabler.mcp.tools import generate_base_configs

    try:
        result = generate_base_configs(project_path=str(args.project), block_names=args.blocks)
    except OSError as e:
        logger.error(f"Writing base configs failed: {e}")
        return 1

    for path in result["created"]:
        logger.info(f"  {path}")
    logger.info(result["message"])
    return 0


# =============================================================================
# Validate Command
# =============================================================================


def handle_validate_command(argv: list[str]) -> int:
    """Validate a schema file or a project's setup."""
    parser = argparse.ArgumentParser(
        prog="python . validate",
        description="Validate authoring schemas or project setup",
    )
    subparsers = parser.add_subparsers(dest="command", help="What to validate")

    schema_parser = subparsers.add_parser("schema", help="Validate a schema JSON file")
    schema_parser.add_argument("file", type=Path, help="Schema file")

    setup_parser = subparsers.add_parser("setup", help="Check project setup")
    setup_parser.add_argument(
        "project",
        nargs="?",
        type=Path,
        default=Path("."),
        help="Project root (default: current directory)",
    )

    if not argv:
        parser.print_help()
        return 1

    # Bare file paths validate a schema
    if argv[0] not in ("schema", "setup", "-h", "--help"):
        argv = ["schema"] + argv

    args = parser.parse_args(argv)

    from ue_enabler.mcp.tools import validate_block_json, validate_setup

    try:
        if args.command == "schema":
            result = validate_block_json(file_path=str(args.file))
        else:
            result = validate_setup(project_path=str(args.project))
    except (OSError, ValueError) as e:
        logger.error(f"Validation failed: {e}")
        return 1

    for error in result["errors"]:
        logger.error(error)
    for warning in result["warnings"]:
        logger.warning(warning)

    if result["valid"]:
        logger.info(result.get("message", "Schema is valid"))
        return 0
    logger.error(result.get("message", "Schema is invalid"))
    return 1


# =============================================================================
# MCP Command
# =============================================================================


def handle_mcp_command(argv: list[str]) -> int:
    """Handle MCP server commands.

    Usage:
        python . mcp run              # Start in STDIO mode
        python . mcp serve            # Start in HTTP mode
        python . mcp serve --port 8080
        python . mcp info             # Show server info
    """
    if not argv:
        print("MCP Server Commands")
        print("\nUsage: python . mcp {command} [options]")
        print("\nCommands:")
        print("  run                 Start server in STDIO mode")
        print("  serve               Start server in HTTP mode")
        print("  info                Show server information")
        print("\nOptions for 'serve':")
        print("  --host HOST         Bind address (default: MCP_HOST or 0.0.0.0)")
        print("  --port PORT         Port number (default: MCP_PORT or 18080)")
        print("  --transport TYPE    Transport: http or sse (default: http)")
        print("\nClient Configuration:")
        print("  {")
        print('    "mcpServers": {')
        print('      "ue-enabler": {')
        print('        "command": "python",')
        print('        "args": [".", "mcp", "run"],')
        print('        "cwd": "/path/to/ue-enabler-mcp"')
        print("      }")
        print("    }")
        print("  }")
        return 1

    subcommand = argv[0]
    subargs = argv[1:]

    if subcommand == "run":
        from ue_enabler.mcp import ServerConfig, run_server

        logger.info("Starting MCP server in STDIO mode...")
        run_server(ServerConfig())
        return 0

    elif subcommand == "serve":
        from ue_enabler.mcp import ServerConfig, run_server

        parser = argparse.ArgumentParser(prog="python . mcp serve")
        parser.add_argument("--host", default=None)
        parser.add_argument("--port", type=int, default=None)
        parser.add_argument("--transport", choices=["http", "sse"], default="http")
        args = parser.parse_args(subargs)

        config = ServerConfig.from_env(args.transport, host=args.host, port=args.port)
        logger.info(f"Starting MCP server in {config.transport.value} mode...")
        logger.info(f"Listening on {config.host}:{config.port}")
        run_server(config)
        return 0

    elif subcommand == "info":
        from ue_enabler.mcp import get_server_capabilities, get_server_version

        print("UE Enabler MCP Server")
        print("=" * 40)
        print(f"Version: {get_server_version()}")
        print("\nCapabilities:")
        for cap, enabled in get_server_capabilities().items():
            status = "enabled" if enabled else "disabled"
            print(f"  {cap}: {status}")
        print("\nAvailable Tools:")
        print("  - list_blocks: List blocks in a project or repository")
        print("  - analyze_block_structure: Infer a block's table structure")
        print("  - generate_block_json: Generate a block's authoring schema")
        print("  - generate_base_configs: Write base configs and templates")
        print("  - validate_block_json: Validate an authoring schema")
        print("  - validate_setup: Check a project's editor setup")
        print("  - status: Server status and configuration")
        return 0

    logger.error(f"Unknown mcp command: {subcommand}")
    return handle_mcp_command([])


# =============================================================================
# Dev Command
# =============================================================================


def cmd_test(extra_args: list[str]) -> int:
    """Run pytest with provided arguments and test tier options.

    Usage:
        python . dev test                # Run all tests
        python . dev test --unit         # Run only unit tests
        python . dev test --integration  # Run integration tests
        python . dev test --mcp          # Run MCP protocol tests
        python . dev test -k "analyze"   # Run tests matching pattern
    """
    tier_markers = {
        "--unit": ["-m", "unit"],
        "--integration": ["-m", "integration"],
        "--mcp": ["-m", "mcp"],
        "--all": [],
    }

    pytest_args: list[str] = []
    remaining_args: list[str] = []

    for arg in extra_args:
        if arg in tier_markers:
            pytest_args.extend(tier_markers[arg])
        else:
            remaining_args.append(arg)

    cmd = [sys.executable, "-m", "pytest", *pytest_args, *remaining_args]
    logger.info(f"Running: {' '.join(cmd)}")

    try:
        return subprocess.call(cmd)
    except KeyboardInterrupt:
        return 130


def cmd_env(_args: list[str]) -> int:
    """Show environment configuration."""
    from ue_enabler.config import list_environment_variables

    for category in ("github", "project", "service"):
        print(f"\n{category}:")
        for var in list_environment_variables(category):
            value = get_environment(var)
            if var == EnvVar.GITHUB_TOKEN and value:
                value = "***"
            print(f"  {var.value.name:<16} {value}")
    return 0


def handle_dev_command(argv: list[str]) -> int:
    """Handle development workflow commands.

    Usage:
        python . dev test [args]       # Run pytest
        python . dev env               # Show configuration
    """
    if not argv:
        print("Development workflow commands")
        print("\nUsage: python . dev {command} [args]")
        print("\nCommands:")
        print("  test       Run pytest with tier options")
        print("  env        Show environment configuration")
        print("\nExamples:")
        print("  python . dev test --unit           # Fast unit tests")
        print("  python . dev test --mcp            # MCP protocol tests")
        return 1

    subcommand = argv[0]
    subargs = argv[1:]

    dev_commands = {
        "test": lambda: cmd_test(subargs),
        "env": lambda: cmd_env(subargs),
    }

    if subcommand in dev_commands:
        return dev_commands[subcommand]()

    logger.error(f"Unknown dev command: {subcommand}")
    return handle_dev_command([])


# =============================================================================
# Main
# =============================================================================


def show_help() -> None:
    """Show CLI help."""
    print("UE Enabler MCP CLI")
    print("\nUsage: python . {command} [args]")
    print("\n=== Blocks ===")
    print("  list          List blocks in a project or repository")
    print("  analyze       Infer the table structure a block expects")
    print("  generate      Generate a block's authoring schema")
    print("  base-configs  Write base configs and component templates")
    print("  validate      Validate a schema file or project setup")
    print("\n=== MCP Server ===")
    print("  mcp           Run MCP server (STDIO or HTTP mode)")
    print("\n=== Development ===")
    print("  dev           Development workflows (test, env)")
    print("\nExamples:")
    print("  python . list -p ../my-site")
    print("  python . analyze cards --github adobe/aem-boilerplate")
    print("  python . generate hero --preview")
    print("  python . base-configs hero cards")
    print("  python . validate setup ../my-site")
    print("  python . mcp run")


def main() -> int:
    """Main entry point for the CLI."""
    if len(sys.argv) < 2:
        show_help()
        return 1

    command = sys.argv[1]
    rest_args = sys.argv[2:]

    if command in ("-h", "--help"):
        show_help()
        return 0

    if command == "dev":
        return handle_dev_command(rest_args)

    commands = {
        "list": lambda: handle_list_command(rest_args),
        "analyze": lambda: handle_analyze_command(rest_args),
        "generate": lambda: handle_generate_command(rest_args),
        "base-configs": lambda: handle_base_configs_command(rest_args),
        "validate": lambda: handle_validate_command(rest_args),
        "mcp": lambda: handle_mcp_command(rest_args),
    }

    if command in commands:
        setup_logging()
        return commands[command]()

    logger.error(f"Unknown command: {command}")
    show_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
