"""Unit tests for the structural analyzer."""

import pytest

from ue_enabler.analyzer import (
    ParseError,
    analyze,
    detect_mutations,
    extract_config_keys,
    parse_module,
    suggest_structure,
)
from ue_enabler.ir import AnalysisRecord, ExpectedStructure, StructureType
from ue_enabler.patterns import Complexity, score_complexity


class TestParseModule:
    """Tests for the module parse gate."""

    @pytest.mark.unit
    def test_valid_module(self, hero_block):
        """A valid ES module parses to a program node."""
        root = parse_module(hero_block)
        assert root.type == "program"

    @pytest.mark.unit
    def test_malformed_raises(self, malformed_block):
        """Malformed source raises ParseError with a position."""
        with pytest.raises(ParseError) as exc_info:
            parse_module(malformed_block)
        assert exc_info.value.line is not None
        assert exc_info.value.line >= 1
        assert exc_info.value.column >= 1
        assert "line" in str(exc_info.value)

    @pytest.mark.unit
    def test_parse_error_is_value_error(self):
        """ParseError can be caught as ValueError."""
        with pytest.raises(ValueError):
            parse_module("function (")

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "code, detail",
        [
            ("return 1;", "'return' outside of function"),
            ("const a = <div>hi</div>;", "JSX"),
            ("with (obj) { x = 1; }", "'with'"),
            ("let x = 1;\nlet x = 2;", "'x' has already been declared"),
            ("var y = 1;\nconst y = 2;", "'y' has already been declared"),
            ("import { a } from './a.js';\nconst a = 1;", "'a' has already been declared"),
            ("export default 1;\nexport default 2;", "duplicate export 'default'"),
            ("const n = 010;", "legacy octal"),
        ],
    )
    def test_rejects_non_module_syntax(self, code, detail):
        """Constructs a strict-mode module rejects raise ParseError."""
        with pytest.raises(ParseError) as exc_info:
            parse_module(code)
        assert detail in str(exc_info.value)

    @pytest.mark.unit
    def test_redeclaration_reports_second_binding(self):
        """The error points at the repeated name."""
        with pytest.raises(ParseError) as exc_info:
            parse_module("let x = 1;\nlet x = 2;")
        assert exc_info.value.line == 2
        assert exc_info.value.column == 5

    @pytest.mark.unit
    def test_accepts_scoped_and_nested_code(self):
        """Shadowing in inner blocks and returns inside functions are valid."""
        code = (
            "let x = 1;\n"
            "if (x) { let x = 2; }\n"
            "var y = 1;\n"
            "var y = 2;\n"
            "const f = () => { return 0.5; };\n"
            "class A { static { let x = 3; } method() { return x; } }\n"
            "switch (x) { case 1: { let z = 1; break; } default: { let z = 2; } }\n"
            "export default function decorate(block) { return block; }\n"
        )
        assert parse_module(code).type == "program"

    @pytest.mark.unit
    def test_unpaired_surrogate_raises_parse_error(self):
        """Source that cannot be encoded as UTF-8 raises ParseError."""
        with pytest.raises(ParseError) as exc_info:
            analyze("const s = '\ud800';")
        assert exc_info.value.line == 1
        assert exc_info.value.column == 12


class TestAnalyze:
    """Tests for analyze()."""

    @pytest.mark.unit
    def test_malformed_rejected_before_heuristics(self, malformed_block):
        """Malformed input never produces a record."""
        with pytest.raises(ParseError):
            analyze(malformed_block)

    @pytest.mark.unit
    def test_empty_source_defaults(self):
        """No signals yields the default record."""
        record = analyze("")
        assert record.expected_structure == ExpectedStructure()
        assert record.dom_transformations == ()
        assert record.children_access_patterns == ()
        assert record.config_keys == ()
        assert record.complexity == Complexity.SIMPLE

    @pytest.mark.unit
    def test_indexed_children_set_columns(self, hero_block):
        """Highest literal child index determines the column count."""
        record = analyze(hero_block)
        assert record.expected_structure.columns == 3
        assert record.expected_structure.rows == 1
        assert [p.index for p in record.children_access_patterns] == [0, 1, 2]

    @pytest.mark.unit
    def test_sparse_indices(self):
        """Indices {0, 2, 3} give four columns."""
        code = "const a = row.children[0]; const b = row.children[2]; const c = row.children[3];"
        record = analyze(code)
        assert record.expected_structure.columns == 4

    @pytest.mark.unit
    def test_hero_is_simple_with_variants(self, hero_block):
        """Class manipulation alone keeps a block simple."""
        record = analyze(hero_block)
        assert record.has_variants is True
        assert record.has_async is False
        assert record.is_container is False
        assert record.complexity == Complexity.SIMPLE

    @pytest.mark.unit
    def test_spread_with_foreach_is_container(self, cards_block):
        """Spread plus forEach marks a multi-row container table."""
        record = analyze(cards_block)
        assert record.expected_structure.type == StructureType.TABLE
        assert record.expected_structure.rows == "multiple"
        assert record.is_container is True
        assert {"type": "spread"} in [p.to_dict() for p in record.children_access_patterns]

    @pytest.mark.unit
    def test_dom_transformations_in_catalog_order(self, cards_block):
        """Transforms are appended in catalog order and flag observers."""
        record = analyze(cards_block)
        assert record.dom_transformations == ("div->ul", "div->li")
        assert record.requires_observer is True
        assert record.complexity == Complexity.COMPLEX

    @pytest.mark.unit
    def test_spread_of_other_collection_ignored(self):
        """Only spreading the block's own children marks a table."""
        record = analyze("const cells = [...row.children];")
        assert record.expected_structure.type == StructureType.UNKNOWN

    @pytest.mark.unit
    def test_blockquote_needs_no_observer(self, quote_block):
        """Blockquote transform does not require an observer."""
        record = analyze(quote_block)
        assert record.dom_transformations == ("div->blockquote",)
        assert record.requires_observer is False

    @pytest.mark.unit
    def test_config_table_override(self, config_block):
        """readBlockConfig forces a two-column multi-row config table."""
        record = analyze(config_block)
        assert record.uses_read_block_config is True
        assert record.expected_structure.type == StructureType.CONFIG_TABLE
        assert record.expected_structure.rows == "multiple"
        assert record.expected_structure.columns == 2
        assert record.config_keys == ("limit", "sort-order", "source")
        assert record.has_async is True

    @pytest.mark.unit
    def test_config_table_ignores_indices_for_columns(self):
        """Indexed access is recorded but cannot change config columns."""
        code = "const config = readBlockConfig(block); const x = block.children[4];"
        record = analyze(code)
        assert record.expected_structure.columns == 2
        assert record.children_access_patterns[0].index == 4

    @pytest.mark.unit
    def test_config_table_ignores_spread(self):
        """Spread does not turn a config table into a table."""
        code = (
            "const config = readBlockConfig(block);\n"
            "[...block.children].forEach((row) => row.remove());\n"
        )
        record = analyze(code)
        assert record.expected_structure.type == StructureType.CONFIG_TABLE
        assert record.expected_structure.rows == "multiple"

    @pytest.mark.unit
    def test_container_last_match_wins(self):
        """A later non-container pattern overrides earlier container evidence."""
        code = (
            "[...block.children].forEach((row) => row.classList.add('x'));\n"
            "const first = block.children[0];\n"
        )
        record = analyze(code)
        assert record.is_container is False
        assert record.expected_structure.rows == "multiple"

    @pytest.mark.unit
    def test_aue_model_attribute_marks_container(self):
        """data-aue-model marks a container without iteration."""
        record = analyze("block.setAttribute('data-aue-model', 'item');")
        assert record.is_container is True

    @pytest.mark.unit
    def test_class_name_assignment_is_variant(self):
        """className assignment counts as variant evidence."""
        record = analyze("block.className = 'wide';")
        assert record.has_variants is True

    @pytest.mark.unit
    def test_complexity_matches_scoring(self, hero_block, cards_block, config_block):
        """Record complexity always equals the scoring rule."""
        for code in (hero_block, cards_block, config_block):
            record = analyze(code)
            assert record.complexity == score_complexity(record)

    @pytest.mark.unit
    def test_idempotent(self, cards_block):
        """Analyzing the same source twice gives equal records."""
        assert analyze(cards_block) == analyze(cards_block)

    @pytest.mark.unit
    def test_wire_shape(self, config_block):
        """to_dict uses camelCase keys."""
        data = analyze(config_block).to_dict()
        assert data["expectedStructure"] == {
            "type": "config-table",
            "rows": "multiple",
            "columns": 2,
        }
        assert data["usesReadBlockConfig"] is True
        assert data["complexity"] == "SIMPLE"


class TestExtractConfigKeys:
    """Tests for extract_config_keys()."""

    @pytest.mark.unit
    def test_bracket_and_property_forms(self):
        """All access forms on config and blockConfig are collected."""
        code = (
            "config['a']; config[\"b\"]; config.c;"
            " blockConfig['d']; blockConfig[\"e\"]; blockConfig.f;"
        )
        assert extract_config_keys(code) == ["a", "b", "c", "d", "e", "f"]

    @pytest.mark.unit
    def test_deduplicated_and_sorted(self):
        """Keys are unique and sorted."""
        assert extract_config_keys("config.zeta; config.alpha; config['zeta'];") == [
            "alpha",
            "zeta",
        ]

    @pytest.mark.unit
    def test_name_comparisons_need_class_name_idiom(self):
        """name comparisons only count alongside toClassName(cols[0].textContent)."""
        comparisons = "if (name === 'title') {} if (name.trim() === 'style') {}"
        assert extract_config_keys(comparisons) == []

        code = "const name = toClassName(cols[0].textContent);\n" + comparisons
        assert extract_config_keys(code) == ["style", "title"]

    @pytest.mark.unit
    def test_call_syntax_keys_dropped(self):
        """Keys containing call syntax are discarded."""
        assert extract_config_keys("config['get()']; config['ok'];") == ["ok"]

    @pytest.mark.unit
    def test_no_keys(self):
        """Source without config access yields an empty list."""
        assert extract_config_keys("const x = 1;") == []


class TestDetectMutations:
    """Tests for detect_mutations()."""

    @pytest.mark.unit
    def test_dom_transformations_need_observer(self, quote_block):
        """Every catalog transformation is reported as needing an observer."""
        mutations = detect_mutations(quote_block)
        assert [m.transform for m in mutations] == ["div->blockquote"]
        assert mutations[0].needs_observer is True

    @pytest.mark.unit
    def test_replace_with(self):
        """replaceWith is an element replacement."""
        mutations = detect_mutations("cell.replaceWith(picture);")
        assert mutations[0].transform == "element-replacement"
        assert mutations[0].needs_observer is True

    @pytest.mark.unit
    def test_inner_html_is_advisory(self):
        """innerHTML writes carry a warning but no observer requirement."""
        mutations = detect_mutations("block.innerHTML = '<p>hi</p>';")
        assert len(mutations) == 1
        assert mutations[0].needs_observer is False
        assert mutations[0].to_dict() == {
            "transform": "innerHTML-replacement",
            "pattern": "innerHTML",
            "needsObserver": False,
            "warning": "innerHTML replacements may lose UE attributes",
        }

    @pytest.mark.unit
    def test_does_not_parse(self, malformed_block):
        """Mutation detection works on text and tolerates malformed source."""
        assert detect_mutations(malformed_block) == []


class TestSuggestStructure:
    """Tests for suggest_structure()."""

    @pytest.mark.unit
    def test_complex_block_uses_unsafe_html(self, cards_block):
        """Multiple transformations recommend raw markup."""
        suggestion = suggest_structure(analyze(cards_block))
        assert suggestion.use_unsafe_html is True
        assert suggestion.reason == (
            "Complex DOM structure detected, recommend using unsafeHTML"
        )

    @pytest.mark.unit
    def test_complex_score_alone_uses_unsafe_html(self):
        """A COMPLEX record with a single transformation still gets raw markup."""
        record = AnalysisRecord(
            dom_transformations=["div->ul"],
            is_container=True,
            requires_observer=True,
        )
        assert suggest_structure(record).use_unsafe_html is True

    @pytest.mark.unit
    def test_simple_block_keeps_table(self, hero_block):
        """Simple blocks keep their rows and columns."""
        suggestion = suggest_structure(analyze(hero_block))
        assert suggestion.use_unsafe_html is False
        assert suggestion.to_dict() == {"useUnsafeHTML": False, "rows": 1, "columns": 3}

    @pytest.mark.unit
    def test_multiple_rows_suggested_as_one(self, config_block):
        """Symbolic multiple rows become a single suggested row."""
        suggestion = suggest_structure(analyze(config_block))
        assert suggestion.rows == 1
        assert suggestion.columns == 2
