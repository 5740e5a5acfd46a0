"""
Flowchart parser.

Turns Mermaid-style flowchart text into a ParseResult: nodes in declaration
order, edges, direction, per-type node counts and diagnostics.
"""

import re
import time
from typing import Dict, List, Optional, Tuple

from ...shared import get_logger, get_metrics
from ...shared.exceptions import ErrorCode, ParseError, Severity
from ...shared.models import (
    Diagnostic, Direction, Edge, EdgeStyle, Node, NodeShape, NodeStyle, NodeType, ParseResult,
    NODE_ID_PATTERN,
)
from .formatters import to_mermaid
from .matchers import EdgeEndpoint, EdgeMatch, EdgeMatcher, ShapeMatch, ShapeMatcher
from .models import ParserOptions
from .validators import validate_direction, validate_node_references

HEADER_PATTERN = re.compile(r"^(?:flowchart|graph)\s+([A-Za-z]{2})", re.IGNORECASE)
COMMENT_PATTERN = re.compile(r"%%.*$")
FRONTMATTER_TITLE_PATTERN = re.compile(r"^title:\s*(.*)$")
NODE_ID_PREFIX = re.compile(NODE_ID_PATTERN)

# (fill, stroke) per semantic type
TYPE_STYLES: Dict[NodeType, Tuple[str, str]] = {
    NodeType.START: ("#9DB4F9", "#4B6BF5"),
    NodeType.END: ("#FFA07A", "#FF6347"),
    NodeType.DECISION: ("#FFE4B5", "#FFA500"),
    NodeType.PROCESS: ("#F0F8FF", "#87CEEB"),
    NodeType.INPUT: ("#98FB98", "#3CB371"),
    NodeType.OUTPUT: ("#DDA0DD", "#9370DB"),
    NodeType.SUBROUTINE: ("#F0FFF0", "#98FB98"),
    NodeType.DATABASE: ("#E6E6FA", "#9370DB"),
}

SHAPE_TYPES: Dict[NodeShape, NodeType] = {
    NodeShape.RHOMBUS: NodeType.DECISION,
    NodeShape.PARALLELOGRAM: NodeType.INPUT,
    NodeShape.TRAPEZOID: NodeType.INPUT,
    NodeShape.PARALLELOGRAM_ALT: NodeType.OUTPUT,
    NodeShape.TRAPEZOID_ALT: NodeType.OUTPUT,
    NodeShape.SUBROUTINE: NodeType.SUBROUTINE,
    NodeShape.CYLINDRICAL: NodeType.DATABASE,
}

START_MARKERS = ("start",)
END_MARKERS = ("end",)
SUBROUTINE_MARKERS = ("sub", "call")

AFFIRMATIVE_LABELS = {"yes", "true"}
NEGATIVE_LABELS = {"no", "false"}
AFFIRMATIVE_COLOR = "#4CAF50"
NEGATIVE_COLOR = "#F44336"


def infer_semantic_type(shape: NodeShape, node_id: str, label: str) -> NodeType:
    """
    Infer a node's role from its id, label and shape.

    Start and end markers in the id or label win over the shape.
    """
    text = f"{node_id.lower()} {label.lower()}"

    if any(marker in text for marker in START_MARKERS):
        return NodeType.START
    if any(marker in text for marker in END_MARKERS):
        return NodeType.END

    shape = NodeShape(shape)
    if shape == NodeShape.HEXAGON:
        if any(marker in text for marker in SUBROUTINE_MARKERS):
            return NodeType.SUBROUTINE
        return NodeType.PROCESS

    return SHAPE_TYPES.get(shape, NodeType.PROCESS)


def node_style(semantic_type: NodeType, shape: NodeShape, base: Optional[NodeStyle] = None) -> NodeStyle:
    """Default style for a semantic type; double circles get twice the stroke width."""
    base = base or NodeStyle()
    colors = TYPE_STYLES.get(NodeType(semantic_type))
    style = base.model_copy(update={"fill": colors[0], "stroke": colors[1]}) if colors else base

    if NodeShape(shape) == NodeShape.DOUBLE_CIRCLE:
        style = style.model_copy(update={"stroke_width": (style.stroke_width or 1) * 2})

    return style


def edge_style(label: Optional[str], base: Optional[EdgeStyle] = None) -> EdgeStyle:
    """Colour affirmative branches green and negative branches red."""
    base = base or EdgeStyle()
    if not label:
        return base

    lowered = label.lower()
    if lowered in AFFIRMATIVE_LABELS:
        return base.model_copy(update={"line_color": AFFIRMATIVE_COLOR})
    if lowered in NEGATIVE_LABELS:
        return base.model_copy(update={"line_color": NEGATIVE_COLOR})
    return base


class _ParseState:
    """Mutable state of a single parse run."""

    def __init__(self, options: ParserOptions):
        self.options = options
        self.nodes: Dict[str, Node] = {}
        self.edges: List[Edge] = []
        self.edge_positions: List[Tuple[int, int, int]] = []
        self.direction: Direction = Direction(options.default_direction)
        self.title: Optional[str] = None
        self.diagnostics: List[Diagnostic] = []

    def report(self, diagnostic: Diagnostic) -> None:
        """Record a diagnostic; in strict mode an error aborts the parse."""
        self.diagnostics.append(diagnostic)
        if diagnostic.is_error and self.options.strict_mode:
            raise ParseError(diagnostic)

    def to_result(self) -> ParseResult:
        result = ParseResult(
            nodes=list(self.nodes.values()),
            edges=self.edges,
            direction=self.direction,
            title=self.title,
            diagnostics=self.diagnostics,
        )
        return result.model_copy(update={
            "metadata": {"type": "flowchart", "node_types": result.node_type_counts()},
        })


class FlowchartParser:
    """
    Line-oriented flowchart parser.

    Each line is tried as an edge first and as a node declaration second.
    In strict mode the first error raises ``ParseError``; in lenient mode
    errors are collected on the returned ParseResult.
    """

    def __init__(self, options: Optional[ParserOptions] = None, **overrides):
        if options is None:
            options = ParserOptions(**overrides)
        elif overrides:
            options = options.model_copy(update=overrides)

        self.options = options
        self.shape_matcher = ShapeMatcher()
        self.edge_matcher = EdgeMatcher(
            shape_matcher=self.shape_matcher,
            max_id_length=options.max_node_id_length,
        )
        self.logger = get_logger(__name__)
        self.metrics = get_metrics()

    def parse(self, content: str, strict: Optional[bool] = None) -> ParseResult:
        """
        Parse flowchart text.

        Args:
            content: Diagram text
            strict: Override the configured strict mode for this call

        Returns:
            ParseResult with the assembled graph and its diagnostics

        Raises:
            ParseError: In strict mode, on the first error-severity diagnostic
        """
        options = self.options
        if strict is not None and strict != options.strict_mode:
            options = options.model_copy(update={"strict_mode": strict})

        start_time = time.time()
        state = _ParseState(options)

        try:
            self._scan(content, state)
            if options.validate_connections:
                self._validate_connections(state)
        except ParseError as e:
            self.logger.error(f"Flowchart parse failed: {e}")
            self.metrics.record_parse(time.time() - start_time, 0, 0, success=False)
            raise

        result = state.to_result()

        for warning in result.warnings:
            self.logger.warning(str(warning))
        self.logger.debug(
            f"Parsed flowchart {result.direction}: {len(result.nodes)} nodes, "
            f"{len(result.edges)} edges, {len(result.errors)} errors"
        )
        self.metrics.record_parse(
            time.time() - start_time, len(result.nodes), len(result.edges), success=result.is_valid
        )

        return result

    def validate(self, content: str) -> List[Diagnostic]:
        """Parse leniently and return every diagnostic, never raising on syntax."""
        return self.parse(content, strict=False).diagnostics

    def format(self, content: str) -> str:
        """Parse ``content`` and re-emit it as canonical flowchart text."""
        return to_mermaid(self.parse(content))

    @staticmethod
    def preprocess_line(line: str) -> str:
        """Drop a trailing ``%%`` comment and surrounding whitespace."""
        return COMMENT_PATTERN.sub("", line).strip()

    def _scan(self, content: str, state: _ParseState) -> None:
        header_found = False
        in_frontmatter = False

        for line_number, raw_line in enumerate(content.split("\n"), start=1):
            line = self.preprocess_line(raw_line)
            if not line:
                continue

            column = len(raw_line) - len(raw_line.lstrip()) + 1

            try:
                if not header_found:
                    if line == "---":
                        in_frontmatter = not in_frontmatter
                    elif in_frontmatter:
                        title_match = FRONTMATTER_TITLE_PATTERN.match(line)
                        if title_match:
                            state.title = title_match.group(1).strip() or None
                    elif HEADER_PATTERN.match(line):
                        header_found = True
                        self._parse_header(line, line_number, column, state)
                    continue

                edge_match = self.edge_matcher.match(line, line_number, column)
                if edge_match:
                    self._handle_edge(edge_match.result, line_number, state)
                else:
                    self._handle_node_line(line, line_number, column, state)

            except ParseError as e:
                state.report(e.diagnostic)

        if not header_found:
            state.report(Diagnostic(
                line=1,
                column=1,
                code=ErrorCode.INVALID_SYNTAX,
                message="Flowchart definition not found",
            ))

    def _parse_header(self, line: str, line_number: int, column: int, state: _ParseState) -> None:
        match = HEADER_PATTERN.match(line)
        state.direction = validate_direction(
            match.group(1).upper(), line_number, column + match.start(1)
        )

    def _handle_node_line(self, line: str, line_number: int, column: int, state: _ParseState) -> None:
        id_match = NODE_ID_PREFIX.match(line)
        if not id_match:
            raise ParseError.create(
                line_number, column, ErrorCode.INVALID_SYNTAX,
                "Invalid node definition: missing ID",
            )

        node_id = id_match.group(0)
        remainder = line[len(node_id):]
        shape_text = remainder.strip()
        shape_column = column + len(node_id) + len(remainder) - len(remainder.lstrip())

        if not shape_text:
            if node_id not in state.nodes:
                state.nodes[node_id] = self._implicit_node(node_id)
            return

        shape_match = self.shape_matcher.match(shape_text, line_number, shape_column)
        if not shape_match:
            raise ParseError(shape_match.error)

        state.nodes[node_id] = self._build_node(node_id, shape_match.result)

    def _handle_edge(self, edge: EdgeMatch, line_number: int, state: _ParseState) -> None:
        for endpoint in (edge.source, edge.target):
            self._upsert_endpoint(endpoint, state)

        state.edges.append(Edge(
            source=edge.source.id,
            target=edge.target.id,
            label=edge.label,
            line_type=edge.line_type,
            style=edge_style(edge.label, self.options.default_edge_style),
        ))
        state.edge_positions.append((line_number, edge.source.column, edge.target.column))

    def _upsert_endpoint(self, endpoint: EdgeEndpoint, state: _ParseState) -> None:
        if endpoint.node is not None:
            state.nodes[endpoint.id] = self._build_node(endpoint.id, endpoint.node)
        elif endpoint.id not in state.nodes and self.options.allow_undefined_nodes:
            state.nodes[endpoint.id] = self._implicit_node(endpoint.id)

    def _build_node(self, node_id: str, shape_match: ShapeMatch) -> Node:
        semantic_type = infer_semantic_type(shape_match.shape, node_id, shape_match.label)
        return Node(
            id=node_id,
            label=shape_match.label,
            shape=shape_match.shape,
            semantic_type=semantic_type,
            style=node_style(semantic_type, shape_match.shape, self.options.default_node_style),
        )

    def _implicit_node(self, node_id: str) -> Node:
        """A node known only by its id; the id doubles as the label."""
        shape = NodeShape(self.options.default_node_shape)
        return self._build_node(node_id, ShapeMatch(shape=shape, label=node_id, original=node_id))

    def _validate_connections(self, state: _ParseState) -> None:
        for diagnostic in validate_node_references(state.nodes, state.edges, state.edge_positions):
            state.report(diagnostic)

        semantic_types = {NodeType(node.semantic_type) for node in state.nodes.values()}
        if NodeType.START not in semantic_types:
            state.report(Diagnostic(
                line=0, column=0, code=ErrorCode.INVALID_SYNTAX,
                message="Flowchart must have a start node", severity=Severity.WARNING,
            ))
        if NodeType.END not in semantic_types:
            state.report(Diagnostic(
                line=0, column=0, code=ErrorCode.INVALID_SYNTAX,
                message="Flowchart must have an end node", severity=Severity.WARNING,
            ))
