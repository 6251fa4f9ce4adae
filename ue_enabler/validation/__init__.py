"""Validation for authoring schemas and project setup."""

from ue_enabler.validation.lib import (
    REQUIRED_BUILD_SCRIPTS,
    REQUIRED_DEPENDENCIES,
    SetupValidationResult,
    ValidationError,
    ValidationResult,
    is_valid,
    validate_project_setup,
    validate_schema,
)

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
