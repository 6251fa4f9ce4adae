"""ue-enabler: Universal Editor instrumentation for Edge Delivery Services blocks.

Infers the authored table structure a block decorator expects and
generates the definitions, models and filters the Universal Editor reads.

Example:
    >>> from ue_enabler import analyze, synthesize, validate_schema
    >>> record = analyze(code)
    >>> schema = synthesize("cards", record)
    >>> validate_schema(schema).valid
    True
"""

__version__ = "0.1.0"

from ue_enabler.analyzer import ParseError, analyze, detect_mutations, suggest_structure
from ue_enabler.generator import generate_base_configs, synthesize
from ue_enabler.ir import AnalysisRecord, AuthoringSchema
from ue_enabler.validation import validate_project_setup, validate_schema

__all__ = [
    "__version__",
    "ParseError",
    "AnalysisRecord",
    "AuthoringSchema",
    "analyze",
    "detect_mutations",
    "suggest_structure",
    "synthesize",
    "generate_base_configs",
    "validate_schema",
    "validate_project_setup",
]
