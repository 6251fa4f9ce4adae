"""Unit tests for the pattern catalog."""

from dataclasses import dataclass, field

import pytest

from ue_enabler.patterns import (
    CHILDREN_ACCESS_PATTERNS,
    COMPLEXITY_LEVELS,
    CONTAINER_PATTERNS,
    DOM_TRANSFORMATIONS,
    ChildrenAccessKind,
    Complexity,
    Confidence,
    PatternCategory,
    score_complexity,
)


@dataclass
class Signals:
    """Minimal stand-in for an analysis record."""

    dom_transformations: list[str] = field(default_factory=list)
    is_container: bool = False
    requires_observer: bool = False
    has_variants: bool = False
    has_async: bool = False


class TestDomTransformations:
    """Tests for the DOM transformation table."""

    @pytest.mark.unit
    def test_table_order(self):
        """Transforms are listed in catalog order."""
        assert [t.transform for t in DOM_TRANSFORMATIONS] == [
            "div->details",
            "div->ul",
            "div->li",
            "div->blockquote",
            "div->summary",
            "img->picture",
        ]

    @pytest.mark.unit
    def test_only_blockquote_skips_observer(self):
        """Blockquote is the only transform without an observer requirement."""
        no_observer = [t.transform for t in DOM_TRANSFORMATIONS if not t.requires_observer]
        assert no_observer == ["div->blockquote"]

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "code",
        ["document.createElement('ul')", 'document.createElement("ul")'],
    )
    def test_matches_both_quote_styles(self, code):
        """Single and double quoted tag names both match."""
        ul = DOM_TRANSFORMATIONS[1]
        assert ul.pattern.search(code)

    @pytest.mark.unit
    def test_category_tag(self):
        """Entries are tagged with their table category."""
        assert all(
            t.category == PatternCategory.DOM_TRANSFORMATION for t in DOM_TRANSFORMATIONS
        )


class TestContainerPatterns:
    """Tests for the container pattern table."""

    @pytest.mark.unit
    def test_confidence_tiers(self):
        """Confidence tiers run high to low in table order."""
        assert [p.confidence for p in CONTAINER_PATTERNS] == [
            Confidence.HIGH,
            Confidence.MEDIUM,
            Confidence.LOW,
        ]

    @pytest.mark.unit
    def test_foreach_arrow(self):
        """forEach with an arrow callback matches the first entry."""
        assert CONTAINER_PATTERNS[0].pattern.search("rows.forEach((row) => {")
        assert not CONTAINER_PATTERNS[0].pattern.search("rows.forEach(decorateRow)")

    @pytest.mark.unit
    def test_index_access_denies_container(self):
        """Direct index access is the only non-container entry."""
        assert CONTAINER_PATTERNS[-1].is_container is False


class TestChildrenAccessPatterns:
    """Tests for the children access table."""

    @pytest.mark.unit
    def test_extract_index(self):
        """Index pattern extracts the literal integer."""
        index_pattern = CHILDREN_ACCESS_PATTERNS[0]
        assert index_pattern.kind == ChildrenAccessKind.INDEX
        assert index_pattern.extract_index(".children[12]") == 12

    @pytest.mark.unit
    def test_extract_index_other_kinds(self):
        """Non-index patterns never extract an index."""
        spread = CHILDREN_ACCESS_PATTERNS[1]
        assert spread.extract_index("[...block.children]") is None

    @pytest.mark.unit
    def test_spread_captures_variable(self):
        """Spread pattern captures the spread collection owner."""
        match = CHILDREN_ACCESS_PATTERNS[1].pattern.search("const rows = [...block.children];")
        assert match.group(1) == "block"


class TestScoreComplexity:
    """Tests for the complexity scoring rule."""

    @pytest.mark.unit
    def test_no_signals_is_simple(self):
        """Zero score is SIMPLE."""
        assert score_complexity(Signals()) == Complexity.SIMPLE

    @pytest.mark.unit
    def test_score_one_is_simple(self):
        """Inclusive upper bound: exactly 1 stays SIMPLE."""
        assert score_complexity(Signals(is_container=True)) == Complexity.SIMPLE

    @pytest.mark.unit
    def test_half_points_accumulate(self):
        """Variants and async add half a point each."""
        signals = Signals(is_container=True, has_variants=True, has_async=True)
        assert score_complexity(signals) == Complexity.MODERATE

    @pytest.mark.unit
    def test_score_two_is_moderate(self):
        """Inclusive upper bound: exactly 2 stays MODERATE."""
        signals = Signals(dom_transformations=["div->ul"], requires_observer=True)
        assert score_complexity(signals) == Complexity.MODERATE

    @pytest.mark.unit
    def test_above_two_is_complex(self):
        """Scores above 2 are COMPLEX."""
        signals = Signals(
            dom_transformations=["div->ul"],
            requires_observer=True,
            has_async=True,
        )
        assert score_complexity(signals) == Complexity.COMPLEX

    @pytest.mark.unit
    def test_levels_cover_every_bucket(self):
        """Every complexity bucket has descriptive metadata."""
        assert set(COMPLEXITY_LEVELS) == set(Complexity)
        assert COMPLEXITY_LEVELS[Complexity.COMPLEX].score == 3
