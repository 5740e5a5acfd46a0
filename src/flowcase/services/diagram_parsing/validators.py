"""
Validation helpers for flowchart elements.

Each ``validate_*`` function returns the normalized value or raises
``ParseError`` positioned at the given line and column.
"""

import re
from typing import Dict, Iterable, List, Optional, Tuple

from ...shared.exceptions import ErrorCode, ParseError
from ...shared.models import (
    Diagnostic, Direction, Edge, EdgeLineType, NodeShape, NODE_ID_PATTERN,
)

_NODE_ID = re.compile(NODE_ID_PATTERN)
_HEX_COLOR = re.compile(r"#(?:[A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})")
_CSS_COLOR_NAME = re.compile(r"[a-zA-Z]+")


def validate_node_id(node_id: str, line: int, column: int) -> str:
    if not _NODE_ID.fullmatch(node_id):
        raise ParseError.create(
            line, column, ErrorCode.INVALID_SYNTAX,
            f"Invalid node ID: {node_id}. Node IDs must contain only letters, "
            "numbers, underscores, and hyphens.",
        )
    return node_id


def validate_node_shape(shape: str, line: int, column: int) -> NodeShape:
    try:
        return NodeShape(shape)
    except ValueError:
        valid = ", ".join(s.value for s in NodeShape)
        raise ParseError.create(
            line, column, ErrorCode.INVALID_SHAPE,
            f"Invalid node shape: {shape}. Valid shapes are: {valid}",
        ) from None


def validate_edge_line_type(line_type: str, line: int, column: int) -> EdgeLineType:
    try:
        return EdgeLineType(line_type)
    except ValueError:
        valid = ", ".join(t.value for t in EdgeLineType)
        raise ParseError.create(
            line, column, ErrorCode.INVALID_EDGE,
            f"Invalid edge line type: {line_type}. Valid line types are: {valid}",
        ) from None


def validate_direction(direction: str, line: int, column: int) -> Direction:
    try:
        return Direction(direction)
    except ValueError:
        valid = ", ".join(d.value for d in Direction)
        raise ParseError.create(
            line, column, ErrorCode.INVALID_DIRECTION,
            f"Invalid graph direction: {direction}. Valid directions are: {valid}",
        ) from None


def validate_color(color: str, line: int = 0, column: int = 0) -> str:
    """Accept ``#rgb``/``#rrggbb`` hex codes and bare CSS colour names."""
    if not (_HEX_COLOR.fullmatch(color) or _CSS_COLOR_NAME.fullmatch(color)):
        raise ParseError.create(
            line, column, ErrorCode.INVALID_STYLE,
            f"Invalid color value: {color}. Use hex color code or CSS color name.",
        )
    return color


def validate_node_references(
    node_ids: Iterable[str],
    edges: Iterable[Edge],
    positions: Optional[List[Tuple[int, int, int]]] = None,
) -> List[Diagnostic]:
    """
    Find edge endpoints that do not name a declared node.

    Args:
        node_ids: Declared node ids
        edges: Edges to check
        positions: Optional ``(line, source_column, target_column)`` per edge,
            in the same order as ``edges``

    Returns:
        One UNDEFINED_NODE diagnostic per unresolved endpoint, in edge order
    """
    known = set(node_ids)
    diagnostics: List[Diagnostic] = []

    for index, edge in enumerate(edges):
        line, source_column, target_column = (
            positions[index] if positions and index < len(positions) else (0, 0, 0)
        )
        for endpoint, column in ((edge.source, source_column), (edge.target, target_column)):
            if endpoint not in known:
                diagnostics.append(Diagnostic(
                    line=line,
                    column=column,
                    code=ErrorCode.UNDEFINED_NODE,
                    message=f"Edge references undefined node: {endpoint}",
                ))

    return diagnostics


def validate_style_colors(style: Dict[str, Optional[str]], line: int = 0, column: int = 0) -> None:
    """Validate every colour-valued entry of a style mapping."""
    for key, value in style.items():
        if value is not None and key.endswith(("fill", "stroke", "color")):
            validate_color(value, line, column)
