"""Block listing and analysis tools for MCP server.

These tools locate blocks in a local project or a GitHub repository and
report what the analyzer infers about them.
"""

import logging
from pathlib import Path
from typing import Any

from ue_enabler.analyzer import analyze, detect_mutations, suggest_structure
from ue_enabler.config import get_blocks_path
from ue_enabler.patterns import COMPLEXITY_LEVELS
from ue_enabler.sources import (
    ComponentNotFoundError,
    ComponentSource,
    GitHubComponentSource,
    LocalComponentSource,
    find_component,
)

logger = logging.getLogger(__name__)

# Characters of block source echoed back with an analysis.
SNIPPET_LENGTH = 500


def resolve_source(
    project_path: str | Path = ".",
    local_blocks_path: str | None = None,
    github: dict[str, Any] | None = None,
) -> ComponentSource:
    """Pick the component source for a tool call.

    Args:
        project_path: Project root for local blocks.
        local_blocks_path: Blocks directory, relative to the project root
            or absolute. Defaults to UE_BLOCKS_DIR.
        github: Repository location with "org", "repo" and optional
            "branch" and "blocks_path" keys. Takes precedence when given.

    Returns:
        A GitHub or local component source.

    Raises:
        ValueError: If github is given without org and repo.
    """
    if github:
        org, repo = github.get("org"), github.get("repo")
        if not org or not repo:
            raise ValueError("GitHub org and repo are required for GitHub sources")
        return GitHubComponentSource(
            org,
            repo,
            branch=github.get("branch"),
            blocks_path=github.get("blocks_path") or github.get("blocksPath") or "blocks",
        )
    return LocalComponentSource(get_blocks_path(project_path, local_blocks_path))


def load_block_code(source: ComponentSource, block_name: str) -> str:
    """Find a block in a source and return its code.

    Raises:
        ComponentNotFoundError: If the block or its JavaScript file is missing.
    """
    info = find_component(source, block_name)
    if not info.has_code:
        raise ComponentNotFoundError(f'Block "{block_name}" does not have a JavaScript file')
    return source.get_component_code(info)


def list_blocks(
    project_path: str = ".",
    local_blocks_path: str | None = None,
    github: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """List blocks with their code and style files.

    Args:
        project_path: Project root.
        local_blocks_path: Optional blocks directory override.
        github: Optional repository location.

    Returns:
        Dictionary with source, blocks_found and blocks.
    """
    source = resolve_source(project_path, local_blocks_path, github)
    components = source.list_components()
    return {
        "source": source.description,
        "blocks_found": len(components),
        "blocks": [c.to_dict() for c in components],
    }


def analyze_block_structure(
    block_name: str | None = None,
    code: str | None = None,
    project_path: str = ".",
    local_blocks_path: str | None = None,
    github: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Analyze one block.

    Either pass the block source directly as code, or a block_name to
    read from the local project or GitHub repository.

    Returns:
        Dictionary containing:
        - block_name: Name analyzed (None for inline code)
        - analysis: Analysis record (camelCase keys)
        - complexity_level: Description of the complexity bucket
        - mutations: DOM mutations that can strip editor instrumentation
        - suggestion: Recommended authoring structure
        - code_snippet: Start of the analyzed source

    Raises:
        ValueError: If neither code nor block_name is given, or the code
            does not parse.
        ComponentNotFoundError: If the block cannot be found.
    """
    if code is None:
        if not block_name:
            raise ValueError("Provide either block_name or code")
        source = resolve_source(project_path, local_blocks_path, github)
        code = load_block_code(source, block_name)

    record = analyze(code)
    level = COMPLEXITY_LEVELS[record.complexity]
    snippet = code[:SNIPPET_LENGTH] + ("..." if len(code) > SNIPPET_LENGTH else "")

    return {
        "block_name": block_name,
        "analysis": record.to_dict(),
        "complexity_level": {
            "score": level.score,
            "characteristics": list(level.characteristics),
        },
        "mutations": [m.to_dict() for m in detect_mutations(code)],
        "suggestion": suggest_structure(record).to_dict(),
        "code_snippet": snippet,
    }


__all__ = ["resolve_source", "load_block_code", "list_blocks", "analyze_block_structure"]
