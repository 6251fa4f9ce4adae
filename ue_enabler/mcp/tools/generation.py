"""Schema generation tools for MCP server.

These tools synthesize authoring schemas for blocks and write the base
configuration files a project needs.
"""

import json
import logging
from pathlib import Path
from typing import Any

from ue_enabler.analyzer import analyze
from ue_enabler.config import get_models_path
from ue_enabler.generator import generate_base_configs as build_base_configs
from ue_enabler.generator import synthesize
from ue_enabler.ir import FieldOverride
from ue_enabler.validation import validate_schema

from .analysis import load_block_code, resolve_source

logger = logging.getLogger(__name__)


def write_json(path: Path, data: Any) -> Path:
    """Write pretty-printed JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    return path


def block_schema_path(project_path: str | Path, block_name: str) -> Path:
    """Default location of a block's schema: <models>/blocks/<name>.json."""
    return get_models_path(project_path) / "blocks" / f"{block_name}.json"


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
    """Analyze a block and synthesize its authoring schema.

    Args:
        block_name: Block name; also the schema id.
        project_path: Project root.
        code: Block source; read from the project or GitHub when omitted.
        output_path: Where to write. Defaults to ue/models/blocks/<name>.json.
        preview: Return the schema without writing it.
        custom_fields: Per-position {"label", "type"} overrides.
        local_blocks_path: Optional blocks directory override.
        github: Optional repository location.

    Returns:
        Dictionary containing:
        - block_name: Name of the block
        - analysis: Summary of the analysis record
        - json_config: The authoring schema
        - validation: Validation result for the schema
        - file_path, message: Set when the schema was written

    Raises:
        ValueError: If the code does not parse or the schema is invalid.
        ComponentNotFoundError: If the block cannot be found.
    """
    if code is None:
        source = resolve_source(project_path, local_blocks_path, github)
        code = load_block_code(source, block_name)

    record = analyze(code)
    overrides = [FieldOverride.model_validate(f) for f in custom_fields or []]
    schema = synthesize(block_name, record, overrides)
    validation = validate_schema(schema)

    result: dict[str, Any] = {
        "block_name": block_name,
        "analysis": {
            "complexity": record.complexity.value,
            "is_container": record.is_container,
            "requires_observer": record.requires_observer,
            "dom_transformations": list(record.dom_transformations),
        },
        "json_config": schema.to_dict(),
        "validation": validation.to_dict(),
    }

    if preview:
        return result

    if not validation.valid:
        errors = "; ".join(result["validation"]["errors"])
        raise ValueError(f"Generated schema for {block_name} is invalid: {errors}")

    target = Path(output_path) if output_path else block_schema_path(project_path, block_name)
    write_json(target, result["json_config"])
    logger.info("Wrote %s", target)

    result["file_path"] = str(target)
    result["message"] = f"Successfully generated {block_name}.json"
    return result


def generate_base_configs(
    project_path: str = ".",
    block_names: list[str] | None = None,
) -> dict[str, Any]:
    """Write the built-in schemas and aggregation templates.

    Args:
        project_path: Project root.
        block_names: Blocks the section filter should accept.

    Returns:
        Dictionary with created (file paths), success and message.
    """
    models_path = get_models_path(project_path)
    (models_path / "blocks").mkdir(parents=True, exist_ok=True)

    created = [
        str(write_json(models_path / name, data))
        for name, data in build_base_configs(block_names or []).items()
    ]
    logger.info("Wrote %d base configs to %s", len(created), models_path)

    return {
        "created": created,
        "success": True,
        "message": f"Successfully created {len(created)} configuration files",
    }


__all__ = ["write_json", "block_schema_path", "generate_block_json", "generate_base_configs"]
