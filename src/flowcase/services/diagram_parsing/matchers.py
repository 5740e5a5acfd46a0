"""
Shape and connector matchers for flowchart lines.

Both matchers walk an ordered pattern table and stop at the first match.
The order matters: several delimiter pairs are textual prefixes of others
(``[[x]]`` versus ``[x]``, ``(((x)))`` versus ``((x))``), so the longer
encodings are tried first.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Pattern, Tuple, Union

from ...shared.exceptions import ErrorCode
from ...shared.models import Diagnostic, EdgeLineType, NodeShape, NODE_ID_PATTERN


@dataclass(frozen=True)
class ShapeMatch:
    """A recognized shape encoding."""

    shape: NodeShape
    label: str
    original: str


@dataclass(frozen=True)
class EdgeEndpoint:
    """One side of an edge: a node id with an optional inline shape."""

    id: str
    node: Optional[ShapeMatch] = None
    column: int = 1


@dataclass(frozen=True)
class EdgeMatch:
    """A recognized edge line."""

    source: EdgeEndpoint
    target: EdgeEndpoint
    line_type: EdgeLineType
    label: Optional[str]
    original: str


@dataclass
class MatchResult:
    """Outcome of a match attempt: either ``result`` or ``error`` is set."""

    matched: bool
    result: Optional[Union[ShapeMatch, EdgeMatch]] = None
    error: Optional[Diagnostic] = None

    def __bool__(self) -> bool:
        return self.matched


# (shape, pattern); evaluated in order, first full match wins
SHAPE_PATTERNS: List[Tuple[NodeShape, Pattern]] = [
    (NodeShape.SUBROUTINE, re.compile(r"\[\[([^\]]*)\]\]")),
    (NodeShape.CYLINDRICAL, re.compile(r"\[\(([^)]*)\)\]")),
    (NodeShape.PARALLELOGRAM, re.compile(r"\[/([^/]*)/\]")),
    (NodeShape.PARALLELOGRAM_ALT, re.compile(r"\[\\([^\\]*)\\\]")),
    (NodeShape.TRAPEZOID, re.compile(r"\[/([^\\]*)\\\]")),
    (NodeShape.TRAPEZOID_ALT, re.compile(r"\[\\([^/]*)/\]")),
    (NodeShape.SQUARE, re.compile(r"\[([^\]]*)\]")),
    (NodeShape.DOUBLE_CIRCLE, re.compile(r"\(\(\(([^)]*)\)\)\)")),
    (NodeShape.CIRCLE, re.compile(r"\(\(([^)]*)\)\)")),
    (NodeShape.STADIUM, re.compile(r"\(\[([^\]]*)\]\)")),
    (NodeShape.ROUND, re.compile(r"\(([^)]*)\)")),
    (NodeShape.ASYMMETRIC, re.compile(r">([^\]]*)\]")),
    (NodeShape.HEXAGON, re.compile(r"\{\{([^}]*)\}\}")),
    (NodeShape.RHOMBUS, re.compile(r"\{([^}]*)\}")),
]

SHAPE_DELIMITERS = {
    NodeShape.SQUARE: ("[", "]"),
    NodeShape.ROUND: ("(", ")"),
    NodeShape.STADIUM: ("([", "])"),
    NodeShape.SUBROUTINE: ("[[", "]]"),
    NodeShape.CYLINDRICAL: ("[(", ")]"),
    NodeShape.CIRCLE: ("((", "))"),
    NodeShape.ASYMMETRIC: (">", "]"),
    NodeShape.RHOMBUS: ("{", "}"),
    NodeShape.HEXAGON: ("{{", "}}"),
    NodeShape.PARALLELOGRAM: ("[/", "/]"),
    NodeShape.PARALLELOGRAM_ALT: ("[\\", "\\]"),
    NodeShape.TRAPEZOID: ("[/", "\\]"),
    NodeShape.TRAPEZOID_ALT: ("[\\", "/]"),
    NodeShape.DOUBLE_CIRCLE: ("(((", ")))"),
}


class ShapeMatcher:
    """Recognizes the shape-delimited label that follows a node id."""

    def __init__(self, patterns: Optional[List[Tuple[NodeShape, Pattern]]] = None):
        self.patterns = patterns or SHAPE_PATTERNS

    def match(self, text: str, line: int = 1, column: int = 1) -> MatchResult:
        """
        Match ``text`` against the shape table.

        Args:
            text: Text immediately following a node id
            line: Line number used for the diagnostic
            column: Column number used for the diagnostic

        Returns:
            MatchResult carrying a ShapeMatch, or an INVALID_SYNTAX diagnostic
        """
        trimmed = text.strip()

        for shape, pattern in self.patterns:
            match = pattern.fullmatch(trimmed)
            if match:
                return MatchResult(
                    matched=True,
                    result=ShapeMatch(shape=shape, label=match.group(1), original=trimmed),
                )

        return MatchResult(
            matched=False,
            error=Diagnostic(
                line=line,
                column=column,
                code=ErrorCode.INVALID_SYNTAX,
                message=f"Invalid node shape: {text}",
            ),
        )

    def format(self, shape: Union[NodeShape, str], label: str) -> str:
        """Wrap ``label`` in the delimiters of ``shape``; unknown shapes render as squares."""
        try:
            opening, closing = SHAPE_DELIMITERS[NodeShape(shape)]
        except ValueError:
            opening, closing = SHAPE_DELIMITERS[NodeShape.SQUARE]
        return f"{opening}{label}{closing}"


@dataclass(frozen=True)
class Connector:
    """A connector token and the line type it encodes."""

    line_type: EdgeLineType
    token: str
    example: str = field(default="", compare=False)


CONNECTORS: List[Connector] = [
    Connector(EdgeLineType.SOLID, "-->", "A --> B"),
    Connector(EdgeLineType.DOTTED, "-.->", "A -.-> B"),
    Connector(EdgeLineType.THICK, "==>", "A ==> B"),
]

# Any of the shape encodings, loose enough to defer classification to ShapeMatcher
_ENDPOINT_SHAPE = (
    r"(?:\[[^\]]*\]|\([^)]*\)|\{[^}]*\}|\{\{[^}]*\}\}|\(\([^)]*\)\)|\[\[[^\]]*\]\]"
    r"|>[^\]]*\]|\[/[^/]*/\]|\[\\[^\\]*\\\]|\[/[^\\]*\\\]|\[\\[^/]*/\]|\(\(\([^)]*\)\)\))"
)
_ENDPOINT = rf"{NODE_ID_PATTERN}(?:\s*{_ENDPOINT_SHAPE})?"
_ID_PREFIX = re.compile(NODE_ID_PATTERN)


class EdgeMatcher:
    """Recognizes ``<endpoint> <connector> [|label|] <endpoint>`` lines."""

    def __init__(self, connectors: Optional[List[Connector]] = None,
                 shape_matcher: Optional[ShapeMatcher] = None,
                 max_id_length: int = 50):
        self.connectors = connectors or CONNECTORS
        self.shape_matcher = shape_matcher or ShapeMatcher()
        self.max_id_length = max_id_length

        connector_pattern = "|".join(re.escape(c.token) for c in self.connectors)
        self.pattern = re.compile(
            rf"(?P<source>{_ENDPOINT})\s*(?P<connector>{connector_pattern})"
            rf"\s*(?:\|(?P<label>[^|]+)\|)?\s*(?P<target>{_ENDPOINT})"
        )

    def match(self, text: str, line: int = 1, column: int = 1) -> MatchResult:
        """
        Match one edge line.

        Args:
            text: Line content
            line: Line number used for diagnostics
            column: Column of the first character of ``text``

        Returns:
            MatchResult carrying an EdgeMatch, or an INVALID_SYNTAX diagnostic
        """
        trimmed = text.strip()
        match = self.pattern.fullmatch(trimmed)

        if not match:
            return MatchResult(
                matched=False,
                error=Diagnostic(
                    line=line,
                    column=column,
                    code=ErrorCode.INVALID_SYNTAX,
                    message=(
                        f"Invalid edge definition: {text}. "
                        'Expected format: "nodeA --> nodeB" or "nodeA -->|label| nodeB"'
                    ),
                ),
            )

        offset = column + (len(text) - len(text.lstrip()))
        label = match.group("label")

        return MatchResult(
            matched=True,
            result=EdgeMatch(
                source=self._parse_endpoint(match.group("source"), offset + match.start("source")),
                target=self._parse_endpoint(match.group("target"), offset + match.start("target")),
                line_type=self.determine_line_type(match.group("connector")),
                label=label.strip() if label is not None else None,
                original=trimmed,
            ),
        )

    def _parse_endpoint(self, text: str, column: int) -> EdgeEndpoint:
        """Split an endpoint into its id and optional shape."""
        node_id = _ID_PREFIX.match(text).group(0)
        node = None

        shape_text = text[len(node_id):].strip()
        if shape_text:
            shape_match = self.shape_matcher.match(shape_text)
            if shape_match:
                node = shape_match.result

        return EdgeEndpoint(id=node_id, node=node, column=column)

    @staticmethod
    def determine_line_type(connector: str) -> EdgeLineType:
        """Derive the line type from the connector characters."""
        if "=" in connector:
            return EdgeLineType.THICK
        if "-." in connector:
            return EdgeLineType.DOTTED
        return EdgeLineType.SOLID

    def format(self, source: Union[EdgeEndpoint, str], target: Union[EdgeEndpoint, str],
               line_type: Union[EdgeLineType, str] = EdgeLineType.SOLID,
               label: Optional[str] = None) -> str:
        """
        Produce canonical edge text.

        Endpoints carrying a shape are written with their id followed by the
        shape-delimited label.
        """
        line_type = EdgeLineType(line_type)
        connector = next(
            (c.token for c in self.connectors if c.line_type == line_type),
            CONNECTORS[0].token,
        )

        source_text = self._format_endpoint(source)
        target_text = self._format_endpoint(target)

        if label:
            return f"{source_text} {connector}|{label}| {target_text}"
        return f"{source_text} {connector} {target_text}"

    def _format_endpoint(self, endpoint: Union[EdgeEndpoint, str]) -> str:
        if isinstance(endpoint, str):
            return endpoint
        if endpoint.node is None:
            return endpoint.id
        return f"{endpoint.id}{self.shape_matcher.format(endpoint.node.shape, endpoint.node.label)}"

    def validate(self, text: str, line: int = 1, column: int = 1) -> List[Diagnostic]:
        """
        Validate one edge line.

        Unlike ``match``, also reports endpoint ids longer than the
        configured maximum, one diagnostic per offending endpoint.
        """
        if not text.strip():
            return [Diagnostic(
                line=line,
                column=column,
                code=ErrorCode.INVALID_SYNTAX,
                message="Empty edge definition",
            )]

        result = self.match(text, line, column)
        if not result:
            return [result.error]

        errors: List[Diagnostic] = []
        edge = result.result

        if len(edge.source.id) > self.max_id_length:
            errors.append(Diagnostic(
                line=line,
                column=edge.source.column,
                code=ErrorCode.INVALID_SYNTAX,
                message=f"Source node ID is too long (max {self.max_id_length} characters)",
            ))

        if len(edge.target.id) > self.max_id_length:
            errors.append(Diagnostic(
                line=line,
                column=edge.target.column,
                code=ErrorCode.INVALID_SYNTAX,
                message=f"Target node ID is too long (max {self.max_id_length} characters)",
            ))

        return errors
