"""Block structure analysis.

Infers the authored table shape a block decorator expects by scanning its
source for the surface patterns in the pattern catalog. The source is
parsed as a JavaScript module first so malformed input is rejected before
any heuristic runs; the heuristics themselves only read the text.

Example:
    >>> record = analyze(code)
    >>> record.expected_structure.columns
    2
    >>> suggest_structure(record).use_unsafe_html
    False
"""

import logging
import re
from dataclasses import dataclass
from typing import Any

import tree_sitter_javascript as ts_js
from tree_sitter import Language, Node, Parser

from ue_enabler.ir import (
    MULTIPLE,
    AnalysisRecord,
    ChildrenAccess,
    ChildrenAccessType,
    ExpectedStructure,
    StructureType,
)
from ue_enabler.patterns import (
    CHILDREN_ACCESS_PATTERNS,
    CONTAINER_PATTERNS,
    DOM_TRANSFORMATIONS,
    ChildrenAccessKind,
    Complexity,
)

logger = logging.getLogger(__name__)

JS_LANGUAGE = Language(ts_js.language())

READ_BLOCK_CONFIG_PATTERN = re.compile(r"readBlockConfig\s*\(")

# Column-to-className derivation used by hand-rolled config readers.
CLASS_NAME_DERIVATION_PATTERN = re.compile(r"toClassName\(cols\[0\]\.textContent\)")

CONFIG_KEY_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(r"config\['([^']+)'\]"),
    re.compile(r'config\["([^"]+)"\]'),
    re.compile(r"config\.([a-zA-Z][a-zA-Z0-9_-]*)"),
    re.compile(r"blockConfig\['([^']+)'\]"),
    re.compile(r'blockConfig\["([^"]+)"\]'),
    re.compile(r"blockConfig\.([a-zA-Z][a-zA-Z0-9_-]*)"),
)

CONFIG_NAME_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(r"name === '([^']+)'"),
    re.compile(r'name === "([^"]+)"'),
    re.compile(r"name\.trim\(\) === '([^']+)'"),
    re.compile(r"name !== '([^']+)'"),
    re.compile(r'name !== "([^"]+)"'),
)

VARIANT_ASSIGNMENT_PATTERN = re.compile(r"className\s*=")

UNSAFE_HTML_REASON = "Complex DOM structure detected, recommend using unsafeHTML"
INNER_HTML_WARNING = "innerHTML replacements may lose UE attributes"


class ParseError(ValueError):
    """Block source is not a syntactically valid JavaScript module.

    Attributes:
        line: One-based line of the first syntax error, if known.
        column: One-based column of the first syntax error, if known.
    """

    def __init__(
        self,
        message: str,
        line: int | None = None,
        column: int | None = None,
    ):
        super().__init__(message)
        self.line = line
        self.column = column


@dataclass(frozen=True)
class MutationWarning:
    """A DOM mutation that can strip editor instrumentation.

    Attributes:
        transform: Name of the mutation (e.g. "div->ul", "element-replacement").
        pattern: Source pattern that matched.
        needs_observer: Instrumentation must be re-applied after decoration.
        warning: Advisory for mutations an observer cannot repair.
    """

    transform: str
    pattern: str
    needs_observer: bool
    warning: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire format."""
        data: dict[str, Any] = {
            "transform": self.transform,
            "pattern": self.pattern,
            "needsObserver": self.needs_observer,
        }
        if self.warning:
            data["warning"] = self.warning
        return data


@dataclass(frozen=True)
class StructureSuggestion:
    """Recommended authoring strategy for a block."""

    use_unsafe_html: bool
    rows: int
    columns: int
    reason: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire format."""
        data: dict[str, Any] = {
            "useUnsafeHTML": self.use_unsafe_html,
            "rows": self.rows,
            "columns": self.columns,
        }
        if self.reason:
            data["reason"] = self.reason
        return data


# =============================================================================
# Parsing
# =============================================================================

# Node types that start a function body; `return` is only legal inside one.
FUNCTION_NODE_TYPES = frozenset(
    {
        "function_declaration",
        "function_expression",
        "function",
        "generator_function",
        "generator_function_declaration",
        "arrow_function",
        "method_definition",
    }
)

# Node types whose direct statements share one lexical scope.
SCOPE_NODE_TYPES = frozenset({"program", "statement_block", "switch_body", "class_static_block"})

LEGACY_NUMBER_PATTERN = re.compile(r"^0[0-9]")


def _first_error_node(root: Node) -> Node | None:
    """Depth-first search for the first ERROR or MISSING node."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_error or node.is_missing:
            return node
        if node.has_error:
            stack.extend(reversed(node.children))
    return None


def _parse_error(detail: str, line: int, column: int) -> ParseError:
    return ParseError(
        f"Failed to analyze block structure: {detail} at line {line}, column {column}",
        line=line,
        column=column,
    )


def _node_error(node: Node, detail: str) -> ParseError:
    return _parse_error(detail, node.start_point[0] + 1, node.start_point[1] + 1)


def _binding_names(pattern: Node | None) -> list[Node]:
    """Identifier nodes bound by a declaration name or destructuring pattern."""
    if pattern is None:
        return []
    if pattern.type in ("identifier", "shorthand_property_identifier_pattern"):
        return [pattern]
    if pattern.type in ("assignment_pattern", "object_assignment_pattern"):
        return _binding_names(pattern.child_by_field_name("left"))
    if pattern.type == "pair_pattern":
        return _binding_names(pattern.child_by_field_name("value"))
    names: list[Node] = []
    for child in pattern.named_children:
        names.extend(_binding_names(child))
    return names


def _import_names(statement: Node) -> list[Node]:
    names: list[Node] = []
    for clause in statement.named_children:
        if clause.type != "import_clause":
            continue
        for part in clause.named_children:
            if part.type == "identifier":
                names.append(part)
            elif part.type == "namespace_import":
                names.extend(c for c in part.named_children if c.type == "identifier")
            elif part.type == "named_imports":
                for specifier in part.named_children:
                    local = specifier.child_by_field_name(
                        "alias"
                    ) or specifier.child_by_field_name("name")
                    if local is not None and local.type == "identifier":
                        names.append(local)
    return names


def _declarations(statement: Node) -> list[tuple[Node, bool]]:
    """Names a statement declares in its scope, flagged True when lexical."""
    if statement.type == "export_statement":
        declaration = statement.child_by_field_name("declaration")
        return _declarations(declaration) if declaration is not None else []
    if statement.type in ("lexical_declaration", "variable_declaration"):
        lexical = statement.type == "lexical_declaration"
        return [
            (name, lexical)
            for declarator in statement.named_children
            if declarator.type == "variable_declarator"
            for name in _binding_names(declarator.child_by_field_name("name"))
        ]
    if statement.type == "class_declaration":
        name = statement.child_by_field_name("name")
        return [(name, True)] if name is not None else []
    if statement.type in ("function_declaration", "generator_function_declaration"):
        name = statement.child_by_field_name("name")
        return [(name, False)] if name is not None else []
    if statement.type == "import_statement":
        return [(name, True) for name in _import_names(statement)]
    return []


def _scope_statements(scope: Node) -> list[Node]:
    if scope.type != "switch_body":
        return list(scope.named_children)
    return [stmt for case in scope.named_children for stmt in case.named_children]


def _redeclaration(scope: Node, source_bytes: bytes) -> list[tuple[Node, str]]:
    """let/const/class/import names declared twice, or shadowing a var, in one scope."""
    lexical_names: set[str] = set()
    other_names: set[str] = set()
    problems: list[tuple[Node, str]] = []
    for statement in _scope_statements(scope):
        for node, lexical in _declarations(statement):
            name = source_bytes[node.start_byte : node.end_byte].decode("utf-8")
            if name in lexical_names or (lexical and name in other_names):
                problems.append((node, f"identifier '{name}' has already been declared"))
            (lexical_names if lexical else other_names).add(name)
    return problems


def _strict_module_violation(root: Node, source_bytes: bytes) -> ParseError | None:
    """First construct a strict-mode ES module rejects that the grammar accepts.

    Covers JSX, top-level return, with statements, legacy octal and
    leading-zero numbers, a second default export, and lexical
    redeclaration within one scope.
    """
    problems: list[tuple[Node, str]] = []
    default_exports = 0
    stack: list[tuple[Node, bool]] = [(root, False)]

    while stack:
        node, in_function = stack.pop()
        kind = node.type

        if kind.startswith("jsx_"):
            problems.append((node, "JSX is not valid JavaScript"))
            continue
        if kind == "with_statement":
            problems.append((node, "'with' is not allowed in strict mode"))
        elif kind == "return_statement" and not in_function:
            problems.append((node, "'return' outside of function"))
        elif kind == "number":
            text = source_bytes[node.start_byte : node.end_byte].decode("utf-8")
            if LEGACY_NUMBER_PATTERN.match(text):
                problems.append((node, "legacy octal literals are not allowed in strict mode"))
        elif kind == "export_statement" and any(c.type == "default" for c in node.children):
            default_exports += 1
            if default_exports > 1:
                problems.append((node, "duplicate export 'default'"))

        if kind in SCOPE_NODE_TYPES:
            problems.extend(_redeclaration(node, source_bytes))

        if kind in FUNCTION_NODE_TYPES:
            child_in_function = True
        elif kind == "class_static_block":
            child_in_function = False
        else:
            child_in_function = in_function
        stack.extend((child, child_in_function) for child in reversed(node.children))

    if not problems:
        return None
    node, detail = min(problems, key=lambda problem: problem[0].start_byte)
    return _node_error(node, detail)


def parse_module(source: str) -> Node:
    """Parse block source as a strict-mode JavaScript module.

    The grammar recovers from some input a module parser rejects, so the
    tree is also checked for the strict-mode and module-only errors listed
    in _strict_module_violation.

    Args:
        source: JavaScript source text.

    Returns:
        Root node of the syntax tree.

    Raises:
        ParseError: If the source contains a syntax error or cannot be
            encoded as UTF-8 (lone surrogates).
    """
    try:
        source_bytes = source.encode("utf-8")
    except UnicodeEncodeError as e:
        before = source[: e.start]
        line = before.count("\n") + 1
        column = e.start - (before.rfind("\n") + 1) + 1
        raise _parse_error("invalid character (unpaired surrogate)", line, column) from e

    parser = Parser()
    parser.language = JS_LANGUAGE
    root = parser.parse(source_bytes).root_node

    if root.has_error:
        node = _first_error_node(root) or root
        if node.is_missing:
            detail = f"missing '{node.type}'"
        else:
            snippet = source_bytes[node.start_byte : node.end_byte].decode(
                "utf-8", errors="replace"
            )
            snippet = snippet.strip().splitlines()[0][:40] if snippet.strip() else ""
            detail = f"unexpected '{snippet}'" if snippet else "unexpected token"
        raise _node_error(node, detail)

    violation = _strict_module_violation(root, source_bytes)
    if violation is not None:
        raise violation
    return root


# =============================================================================
# Heuristics
# =============================================================================


def extract_config_keys(source: str) -> list[str]:
    """Extract the keys a block reads from its config table.

    Keys come from bracket access (``config['key']``) and property access
    (``config.key``) on ``config`` or ``blockConfig``. Name comparisons
    (``name === 'key'``) are only trusted when the block also derives
    names from the first column with ``toClassName``.

    Args:
        source: Block source text.

    Returns:
        Sorted, duplicate-free key names.
    """
    keys: set[str] = set()

    for pattern in CONFIG_KEY_PATTERNS:
        keys.update(match.group(1) for match in pattern.finditer(source))

    if CLASS_NAME_DERIVATION_PATTERN.search(source):
        for pattern in CONFIG_NAME_PATTERNS:
            keys.update(match.group(1) for match in pattern.finditer(source))

    return sorted(
        key
        for key in keys
        if key and "(" not in key and ")" not in key and "readBlockConfig" not in key
    )


def _children_pattern(kind: ChildrenAccessKind):
    return next(p for p in CHILDREN_ACCESS_PATTERNS if p.kind is kind)


def analyze(source: str) -> AnalysisRecord:
    """Infer the expected structure of a block from its source.

    Rules run in a fixed order and later rules override earlier ones:

        1. readBlockConfig forces a two-column config table
        2. literal children indices set the column count
        3. spreading the block children marks a table, and with forEach
           a multi-row container
        4. DOM transformations in catalog order
        5. container patterns, last match wins
        6. async keywords
        7. class manipulation (variants)

    Complexity is derived from the finished record.

    Args:
        source: Block JavaScript source.

    Returns:
        A new, frozen AnalysisRecord.

    Raises:
        ParseError: If the source is not a valid JavaScript module.
    """
    parse_module(source)

    structure_type = StructureType.UNKNOWN
    rows: int | str = 1
    columns = 1
    is_container = False
    uses_read_block_config = False
    config_keys: list[str] = []
    children_access: list[ChildrenAccess] = []

    # 1. Config table
    if READ_BLOCK_CONFIG_PATTERN.search(source):
        uses_read_block_config = True
        structure_type = StructureType.CONFIG_TABLE
        config_keys = extract_config_keys(source)
        rows = MULTIPLE
        columns = 2

    # 2. Direct indexed child access
    index_pattern = _children_pattern(ChildrenAccessKind.INDEX)
    indices: set[int] = set()
    for match in index_pattern.pattern.finditer(source):
        index = index_pattern.extract_index(match.group(0))
        if index is None:
            continue
        indices.add(index)
        children_access.append(
            ChildrenAccess(type=ChildrenAccessType.INDEX_ACCESS, index=index)
        )

    if indices and not uses_read_block_config:
        columns = max(indices) + 1

    # 3. Spread of all block children
    spread_pattern = _children_pattern(ChildrenAccessKind.SPREAD)
    spreads_block = any(
        match.group(1) == "block" for match in spread_pattern.pattern.finditer(source)
    )
    if spreads_block and not uses_read_block_config:
        structure_type = StructureType.TABLE
        children_access.append(ChildrenAccess(type=ChildrenAccessType.SPREAD))
        if ".forEach" in source:
            rows = MULTIPLE
            is_container = True

    # 4. DOM transformations
    dom_transformations: list[str] = []
    requires_observer = False
    for transformation in DOM_TRANSFORMATIONS:
        if transformation.pattern.search(source):
            dom_transformations.append(transformation.transform)
            requires_observer = requires_observer or transformation.requires_observer

    # 5. Container patterns
    for container in CONTAINER_PATTERNS:
        if container.pattern.search(source):
            is_container = container.is_container

    # 6. Async operations
    has_async = "async" in source or "await" in source

    # 7. Variants
    has_variants = "classList" in source or bool(
        VARIANT_ASSIGNMENT_PATTERN.search(source)
    )

    record = AnalysisRecord(
        expected_structure=ExpectedStructure(
            type=structure_type, rows=rows, columns=columns
        ),
        dom_transformations=dom_transformations,
        is_container=is_container,
        requires_observer=requires_observer,
        children_access_patterns=children_access,
        has_async=has_async,
        has_variants=has_variants,
        uses_read_block_config=uses_read_block_config,
        config_keys=config_keys,
    )
    logger.debug(
        "Analyzed block: type=%s rows=%s columns=%s container=%s complexity=%s",
        record.expected_structure.type,
        record.expected_structure.rows,
        record.expected_structure.columns,
        record.is_container,
        record.complexity.value,
    )
    return record


def detect_mutations(source: str) -> list[MutationWarning]:
    """Find DOM mutations that can break editor instrumentation.

    Every catalog DOM transformation is reported as needing an observer,
    as is full element replacement. innerHTML writes are reported without
    an observer requirement but with an advisory, since an observer
    cannot restore attributes that were overwritten.

    Args:
        source: Block JavaScript source.

    Returns:
        Warnings in detection order (empty if none).
    """
    mutations = [
        MutationWarning(
            transform=transformation.transform,
            pattern=transformation.pattern.pattern,
            needs_observer=True,
        )
        for transformation in DOM_TRANSFORMATIONS
        if transformation.pattern.search(source)
    ]

    if ".replaceWith(" in source:
        mutations.append(
            MutationWarning(
                transform="element-replacement",
                pattern="replaceWith",
                needs_observer=True,
            )
        )

    if ".innerHTML" in source:
        mutations.append(
            MutationWarning(
                transform="innerHTML-replacement",
                pattern="innerHTML",
                needs_observer=False,
                warning=INNER_HTML_WARNING,
            )
        )

    return mutations


def suggest_structure(record: AnalysisRecord) -> StructureSuggestion:
    """Recommend rows/columns authoring or raw markup for a block.

    Blocks with more than one DOM transformation, or scored COMPLEX, are
    better authored as raw markup. Everything else uses a rows/columns
    table; a symbolic "multiple" row count is suggested as a single row.

    Args:
        record: Analysis record for the block.

    Returns:
        StructureSuggestion.
    """
    if len(record.dom_transformations) > 1 or record.complexity == Complexity.COMPLEX:
        return StructureSuggestion(
            use_unsafe_html=True,
            rows=1,
            columns=1,
            reason=UNSAFE_HTML_REASON,
        )

    rows = record.expected_structure.rows
    return StructureSuggestion(
        use_unsafe_html=False,
        rows=rows if isinstance(rows, int) else 1,
        columns=record.expected_structure.columns,
    )


__all__ = [
    "ParseError",
    "MutationWarning",
    "StructureSuggestion",
    "parse_module",
    "extract_config_keys",
    "analyze",
    "detect_mutations",
    "suggest_structure",
]
