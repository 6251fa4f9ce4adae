"""Authoring schema and project setup validation.

This module provides validation for authoring schemas before they are
persisted, and a read-only check of a project's Universal Editor layout.
Problems are collected and returned, never raised.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ue_enabler.generator import BASE_CONFIG_FILES, TEMPLATE_CONFIG_FILES
from ue_enabler.ir import AuthoringSchema

logger = logging.getLogger(__name__)

REQUIRED_BUILD_SCRIPTS: tuple[str, ...] = (
    "build:json",
    "build:json:models",
    "build:json:definitions",
    "build:json:filters",
)
REQUIRED_DEPENDENCIES: tuple[str, ...] = ("merge-json-cli", "npm-run-all", "husky")


@dataclass
class ValidationError:
    """Represents a problem found in an authoring schema.

    Attributes:
        path: Location in the schema, e.g. "models[0].fields[1]".
        message: Human-readable error description.
        error_type: Machine-readable error classification.
    """

    path: str
    message: str
    error_type: str


@dataclass
class ValidationResult:
    """Outcome of validating one authoring schema.

    Attributes:
        errors: Structural violations; any error makes the schema invalid.
        warnings: Recommendations that do not affect validity.
    """

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationError] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire format (messages only)."""
        return {
            "valid": self.valid,
            "errors": [e.message for e in self.errors],
            "warnings": [w.message for w in self.warnings],
        }


@dataclass
class SetupValidationResult:
    """Outcome of checking a project's Universal Editor setup.

    Attributes:
        errors: Missing pieces that break the editor integration.
        warnings: Missing pieces that only affect tooling.
        checks: Check name to result; grouped checks map file names to bools.
    """

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    checks: dict[str, Any] = field(default_factory=dict)

    @property
    def valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire format."""
        return {
            "valid": self.valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "checks": dict(self.checks),
        }


# =============================================================================
# Schema Validation
# =============================================================================


def _missing_list(result: ValidationResult, key: str) -> None:
    result.errors.append(
        ValidationError(path=key, message=f'Missing "{key}" array', error_type="missing_key")
    )


def _validate_definitions(definitions: list, result: ValidationResult) -> None:
    for i, definition in enumerate(definitions):
        path = f"definitions[{i}]"
        if not isinstance(definition, dict):
            result.errors.append(
                ValidationError(path, f"Definition {i}: not an object", "invalid_type")
            )
            continue
        for key in ("title", "id"):
            if not definition.get(key):
                result.errors.append(
                    ValidationError(path, f'Definition {i}: missing "{key}"', "missing_field")
                )
        plugins = definition.get("plugins")
        if not isinstance(plugins, dict) or not isinstance(plugins.get("da"), dict):
            result.errors.append(
                ValidationError(path, f'Definition {i}: missing "plugins.da"', "missing_field")
            )


def _validate_models(models: list, result: ValidationResult) -> None:
    for i, model in enumerate(models):
        path = f"models[{i}]"
        if not isinstance(model, dict):
            result.errors.append(ValidationError(path, f"Model {i}: not an object", "invalid_type"))
            continue
        if not model.get("id"):
            result.errors.append(
                ValidationError(path, f'Model {i}: missing "id"', "missing_field")
            )

        fields = model.get("fields")
        if not isinstance(fields, list):
            result.errors.append(
                ValidationError(path, f'Model {i}: missing "fields" array', "missing_field")
            )
            continue

        for j, model_field in enumerate(fields):
            field_path = f"{path}.fields[{j}]"
            prefix = f"Model {i}, Field {j}"
            if not isinstance(model_field, dict):
                result.errors.append(
                    ValidationError(field_path, f"{prefix}: not an object", "invalid_type")
                )
                continue
            if not model_field.get("component"):
                result.errors.append(
                    ValidationError(field_path, f'{prefix}: missing "component"', "missing_field")
                )
            if not model_field.get("name"):
                result.errors.append(
                    ValidationError(
                        field_path,
                        f'{prefix}: missing "name" (CSS selector)',
                        "missing_field",
                    )
                )
            if not model_field.get("label"):
                result.warnings.append(
                    ValidationError(
                        field_path,
                        f'{prefix}: missing "label" - recommended for UE UI',
                        "missing_label",
                    )
                )


def _validate_filters(filters: list, result: ValidationResult) -> None:
    for i, component_filter in enumerate(filters):
        path = f"filters[{i}]"
        if not isinstance(component_filter, dict):
            result.errors.append(
                ValidationError(path, f"Filter {i}: not an object", "invalid_type")
            )
            continue
        if not component_filter.get("id"):
            result.errors.append(
                ValidationError(path, f'Filter {i}: missing "id"', "missing_field")
            )
        if not isinstance(component_filter.get("components"), list):
            result.errors.append(
                ValidationError(
                    path, f'Filter {i}: missing "components" array', "missing_field"
                )
            )


def validate_schema(schema: AuthoringSchema | dict[str, Any]) -> ValidationResult:
    """Validate an authoring schema.

    Performs the following checks:
        - definitions, models and filters are present
        - every definition has a title, an id and plugins.da
        - every model has an id and a fields array
        - every field has a component and a name (selector)
        - every filter has an id and a components array

    A field without a label is only a warning.

    Args:
        schema: Schema model, or its plain JSON form.

    Returns:
        ValidationResult with collected errors and warnings.

    Example:
        >>> result = validate_schema(synthesize("hero", record))
        >>> result.valid
        True
    """
    data = schema.to_dict() if isinstance(schema, AuthoringSchema) else schema
    result = ValidationResult()

    if not isinstance(data, dict):
        result.errors.append(
            ValidationError("", "Schema must be a JSON object", "invalid_type")
        )
        return result

    for key, check in (
        ("definitions", _validate_definitions),
        ("models", _validate_models),
        ("filters", _validate_filters),
    ):
        value = data.get(key)
        if value is None:
            _missing_list(result, key)
        elif not isinstance(value, list):
            result.errors.append(
                ValidationError(key, f'"{key}" must be an array', "invalid_type")
            )
        else:
            check(value, result)

    return result


def is_valid(schema: AuthoringSchema | dict[str, Any]) -> bool:
    """Check if an authoring schema has no errors.

    Example:
        >>> if is_valid(schema):
        ...     write_schema(path, schema)
    """
    return validate_schema(schema).valid


# =============================================================================
# Project Setup Validation
# =============================================================================


def _package_section(package: dict, key: str, result: SetupValidationResult) -> dict:
    """A package.json mapping section, or {} with an error when it has the wrong type."""
    section = package.get(key)
    if section is None:
        return {}
    if not isinstance(section, dict):
        result.errors.append(f'Validation error: "{key}" in package.json is not an object')
        return {}
    return section


def _check_package_json(package_path: Path, result: SetupValidationResult) -> None:
    try:
        package = json.loads(package_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        result.errors.append(f"Validation error: could not read package.json: {e}")
        return
    if not isinstance(package, dict):
        result.errors.append("Validation error: package.json is not an object")
        return

    scripts = _package_section(package, "scripts", result)
    result.checks["buildScripts"] = {}
    for script in REQUIRED_BUILD_SCRIPTS:
        exists = script in scripts
        result.checks["buildScripts"][script] = exists
        if not exists:
            result.warnings.append(f'Build script "{script}" not found in package.json')

    dependencies = _package_section(package, "dependencies", result)
    dev_dependencies = _package_section(package, "devDependencies", result)
    result.checks["dependencies"] = {}
    for dependency in REQUIRED_DEPENDENCIES:
        exists = bool(dependencies.get(dependency) or dev_dependencies.get(dependency))
        result.checks["dependencies"][dependency] = exists
        if not exists:
            result.errors.append(f'Required dependency "{dependency}" not found in package.json')


def validate_project_setup(project_path: Path | str) -> SetupValidationResult:
    """Check that a project has everything the editor integration needs.

    Read-only: nothing is created or modified.

    Args:
        project_path: Project root directory.

    Returns:
        SetupValidationResult with errors, warnings and per-check results.
    """
    root = Path(project_path)
    ue_path = root / "ue"
    models_path = ue_path / "models"
    scripts_path = ue_path / "scripts"
    result = SetupValidationResult()
    checks = result.checks

    package_path = root / "package.json"
    checks["packageJson"] = package_path.is_file()
    if not checks["packageJson"]:
        result.errors.append("package.json not found")

    checks["ueFolder"] = ue_path.is_dir()
    if not checks["ueFolder"]:
        result.errors.append("ue/ directory not found")

    checks["ueModelsFolder"] = models_path.is_dir()
    if not checks["ueModelsFolder"]:
        result.errors.append("ue/models/ directory not found")

    checks["ueBlocksFolder"] = (models_path / "blocks").is_dir()
    if not checks["ueBlocksFolder"]:
        result.warnings.append(
            "ue/models/blocks/ directory not found - no blocks instrumented yet"
        )

    checks["ueScriptsFolder"] = scripts_path.is_dir()
    if not checks["ueScriptsFolder"]:
        result.errors.append("ue/scripts/ directory not found")

    checks["baseConfigs"] = {}
    for name in BASE_CONFIG_FILES:
        exists = (models_path / name).is_file()
        checks["baseConfigs"][name] = exists
        if not exists:
            result.errors.append(f"Base config {name} not found")

    checks["templateConfigs"] = {}
    for name in TEMPLATE_CONFIG_FILES:
        exists = (models_path / name).is_file()
        checks["templateConfigs"][name] = exists
        if not exists:
            result.errors.append(f"Template config {name} not found in ue/models/")

    checks["rootConfigs"] = {}
    for name in TEMPLATE_CONFIG_FILES:
        exists = (root / name).is_file()
        checks["rootConfigs"][name] = exists
        if not exists:
            result.warnings.append(
                f"Consolidated config {name} not found in root - run build:json"
            )

    for key, name in (("ueJs", "ue.js"), ("ueUtilsJs", "ue-utils.js")):
        checks[key] = (scripts_path / name).is_file()
        if not checks[key]:
            result.errors.append(f"ue/scripts/{name} not found")

    if checks["packageJson"]:
        _check_package_json(package_path, result)

    husky_path = root / ".husky"
    checks["huskyFolder"] = husky_path.is_dir()
    if not checks["huskyFolder"]:
        result.warnings.append(".husky/ directory not found - git hooks not set up")
    else:
        checks["preCommitHook"] = (husky_path / "pre-commit").is_file()
        if not checks["preCommitHook"]:
            result.warnings.append(
                "Pre-commit hook not found - automatic build on commit not enabled"
            )

    logger.debug(
        "Setup check for %s: %d errors, %d warnings",
        root,
        len(result.errors),
        len(result.warnings),
    )
    return result


__all__ = [
    "ValidationError",
    "ValidationResult",
    "SetupValidationResult",
    "validate_schema",
    "is_valid",
    "validate_project_setup",
    "REQUIRED_BUILD_SCRIPTS",
    "REQUIRED_DEPENDENCIES",
]
