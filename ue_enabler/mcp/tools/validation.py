"""Validation tools for MCP server.

These tools check authoring schemas and project setup.
"""

import json
from pathlib import Path
from typing import Any

from ue_enabler.validation import validate_project_setup, validate_schema


def validate_block_json(
    schema: dict[str, Any] | None = None,
    file_path: str | None = None,
) -> dict[str, Any]:
    """Validate an authoring schema given inline or as a JSON file.

    Returns:
        Dictionary with valid, errors and warnings.

    Raises:
        ValueError: If neither input is given or the file is not JSON.
        FileNotFoundError: If file_path does not exist.
    """
    if schema is None:
        if not file_path:
            raise ValueError("Provide either schema or file_path")
        path = Path(file_path)
        if not path.is_file():
            raise FileNotFoundError(f"Schema file not found: {file_path}")
        try:
            schema = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {file_path}: {e}") from e

    return validate_schema(schema).to_dict()


def validate_setup(project_path: str = ".") -> dict[str, Any]:
    """Check a project's Universal Editor setup.

    Returns:
        Dictionary containing:
        - valid, errors, warnings, checks: Setup validation result
        - total_errors, total_warnings: Counts
        - message: One-line summary
    """
    result = validate_project_setup(project_path)
    summary = result.to_dict()
    summary["total_errors"] = len(result.errors)
    summary["total_warnings"] = len(result.warnings)
    summary["message"] = (
        "Universal Editor setup is complete and valid"
        if result.valid
        else (
            f"Universal Editor setup has {len(result.errors)} error(s) "
            f"and {len(result.warnings)} warning(s)"
        )
    )
    return summary


__all__ = ["validate_block_json", "validate_setup"]
