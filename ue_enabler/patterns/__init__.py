"""Pattern catalog: recognizable block code signals and complexity scoring."""

from ue_enabler.patterns.lib import (
    CHILDREN_ACCESS_PATTERNS,
    COMPLEXITY_LEVELS,
    CONTAINER_PATTERNS,
    DOM_TRANSFORMATIONS,
    ChildrenAccessKind,
    ChildrenAccessPattern,
    Complexity,
    ComplexityLevel,
    ComplexitySignals,
    Confidence,
    ContainerPattern,
    DomTransformation,
    PatternCategory,
    score_complexity,
)

__all__ = [
    # Enums
    "PatternCategory",
    "Confidence",
    "ChildrenAccessKind",
    "Complexity",
    # Catalog records
    "DomTransformation",
    "ContainerPattern",
    "ChildrenAccessPattern",
    "ComplexityLevel",
    "ComplexitySignals",
    # Tables
    "DOM_TRANSFORMATIONS",
    "CONTAINER_PATTERNS",
    "CHILDREN_ACCESS_PATTERNS",
    "COMPLEXITY_LEVELS",
    # Scoring
    "score_complexity",
]
