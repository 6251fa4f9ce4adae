"""Pattern catalog for block structure detection.

Static tables of the surface patterns the analyzer recognizes in block
source code, plus the complexity scoring rule. Every entry is an immutable
record; the analyzer walks the tables in order, so table order is part of
the contract (container patterns resolve last-match-wins).
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Protocol, Sequence


class PatternCategory(str, Enum):
    """Catalog table a pattern belongs to."""

    DOM_TRANSFORMATION = "dom-transformation"
    CONTAINER = "container"
    CHILDREN_ACCESS = "children-access"


class Confidence(str, Enum):
    """How strongly a container pattern indicates container behavior."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ChildrenAccessKind(str, Enum):
    """Ways block code reaches into its child rows."""

    INDEX = "index"
    SPREAD = "spread"


class Complexity(str, Enum):
    """Complexity bucket for an analyzed block."""

    SIMPLE = "SIMPLE"
    MODERATE = "MODERATE"
    COMPLEX = "COMPLEX"


@dataclass(frozen=True)
class DomTransformation:
    """A createElement call that rewrites authored markup.

    Attributes:
        pattern: Compiled regex tested against raw source.
        transform: Short name of the transformation (e.g. "div->ul").
        requires_observer: Whether editor instrumentation must be re-applied
            after the block decorates.
    """

    pattern: re.Pattern
    transform: str
    requires_observer: bool
    category: PatternCategory = PatternCategory.DOM_TRANSFORMATION


@dataclass(frozen=True)
class ContainerPattern:
    """A pattern that implies (or denies) container behavior."""

    pattern: re.Pattern
    is_container: bool
    confidence: Confidence
    category: PatternCategory = PatternCategory.CONTAINER


@dataclass(frozen=True)
class ChildrenAccessPattern:
    """A pattern describing how a block reads its children."""

    pattern: re.Pattern
    kind: ChildrenAccessKind
    category: PatternCategory = PatternCategory.CHILDREN_ACCESS

    def extract_index(self, match: str) -> int | None:
        """Extract the literal child index from an index-access match."""
        if self.kind is not ChildrenAccessKind.INDEX:
            return None
        digits = re.search(r"\d+", match)
        return int(digits.group(0)) if digits else None


def _create_element(tag: str) -> re.Pattern:
    return re.compile(rf"""createElement\(['"]{tag}['"]\)""")


DOM_TRANSFORMATIONS: tuple[DomTransformation, ...] = (
    DomTransformation(_create_element("details"), "div->details", True),
    DomTransformation(_create_element("ul"), "div->ul", True),
    DomTransformation(_create_element("li"), "div->li", True),
    DomTransformation(_create_element("blockquote"), "div->blockquote", False),
    DomTransformation(_create_element("summary"), "div->summary", True),
    DomTransformation(_create_element("picture"), "img->picture", True),
)

CONTAINER_PATTERNS: tuple[ContainerPattern, ...] = (
    ContainerPattern(re.compile(r"\.forEach\(\(.*\)\s*=>"), True, Confidence.HIGH),
    ContainerPattern(re.compile(r"data-aue-model"), True, Confidence.MEDIUM),
    ContainerPattern(re.compile(r"\.children\[\d+\]"), False, Confidence.LOW),
)

CHILDREN_ACCESS_PATTERNS: tuple[ChildrenAccessPattern, ...] = (
    # row.children[0], block.children[1], ...
    ChildrenAccessPattern(re.compile(r"\.children\[(\d+)\]"), ChildrenAccessKind.INDEX),
    # [...block.children]
    ChildrenAccessPattern(
        re.compile(r"\[\.\.\.(\w+)\.children\]"), ChildrenAccessKind.SPREAD
    ),
)


@dataclass(frozen=True)
class ComplexityLevel:
    """Descriptive metadata for a complexity bucket."""

    complexity: Complexity
    score: int
    characteristics: tuple[str, ...]


COMPLEXITY_LEVELS: dict[Complexity, ComplexityLevel] = {
    Complexity.SIMPLE: ComplexityLevel(
        Complexity.SIMPLE,
        1,
        (
            "No DOM transformations",
            "Direct children access",
            "No container behavior",
        ),
    ),
    Complexity.MODERATE: ComplexityLevel(
        Complexity.MODERATE,
        2,
        (
            "Minor DOM transformations",
            "Some iteration",
            "May have variants",
        ),
    ),
    Complexity.COMPLEX: ComplexityLevel(
        Complexity.COMPLEX,
        3,
        (
            "Multiple DOM transformations",
            "Container block",
            "Dynamic content",
            "Requires observers",
        ),
    ),
}


class ComplexitySignals(Protocol):
    """Fields the scoring rule reads from an analysis record."""

    dom_transformations: Sequence[str]
    is_container: bool
    requires_observer: bool
    has_variants: bool
    has_async: bool


def score_complexity(signals: ComplexitySignals) -> Complexity:
    """Score block complexity from detected signals.

    Scoring:
        +1   any DOM transformation
        +1   container behavior
        +1   observer required
        +0.5 variants (class manipulation)
        +0.5 async operations

    Totals of 1 or less are SIMPLE, 2 or less MODERATE, anything
    higher COMPLEX. Bounds are inclusive.

    Args:
        signals: Any object exposing the analysis record signal fields.

    Returns:
        Complexity bucket.
    """
    score = 0.0

    if signals.dom_transformations:
        score += 1
    if signals.is_container:
        score += 1
    if signals.requires_observer:
        score += 1
    if signals.has_variants:
        score += 0.5
    if signals.has_async:
        score += 0.5

    if score <= 1:
        return Complexity.SIMPLE
    if score <= 2:
        return Complexity.MODERATE
    return Complexity.COMPLEX


__all__ = [
    "PatternCategory",
    "Confidence",
    "ChildrenAccessKind",
    "Complexity",
    "DomTransformation",
    "ContainerPattern",
    "ChildrenAccessPattern",
    "ComplexityLevel",
    "ComplexitySignals",
    "DOM_TRANSFORMATIONS",
    "CONTAINER_PATTERNS",
    "CHILDREN_ACCESS_PATTERNS",
    "COMPLEXITY_LEVELS",
    "score_complexity",
]
