"""Structural analyzer: infer the authored table shape a block expects."""

from ue_enabler.analyzer.lib import (
    MutationWarning,
    ParseError,
    StructureSuggestion,
    analyze,
    detect_mutations,
    extract_config_keys,
    parse_module,
    suggest_structure,
)

__all__ = [
    # Errors
    "ParseError",
    # Results
    "MutationWarning",
    "StructureSuggestion",
    # Operations
    "parse_module",
    "analyze",
    "extract_config_keys",
    "detect_mutations",
    "suggest_structure",
]
