"""
Diagram parsing for flowcase.

Turns flowchart text into a typed node/edge graph:
- ShapeMatcher / EdgeMatcher recognize node shapes and connectors
- FlowchartParser builds the graph, infers node roles and validates it
- formatters re-emit a parsed graph as flowchart text, JSON or a summary
"""

from .matchers import (
    ShapeMatcher, EdgeMatcher, ShapeMatch, EdgeMatch, EdgeEndpoint, MatchResult,
    SHAPE_PATTERNS, CONNECTORS,
)
from .models import ParserOptions
from .parser import FlowchartParser, infer_semantic_type, node_style, edge_style
from .formatters import to_mermaid, to_json, to_text, format_node, format_edge
from .validators import (
    validate_node_id, validate_node_shape, validate_edge_line_type,
    validate_direction, validate_color, validate_node_references,
)

__all__ = [
    "ShapeMatcher",
    "EdgeMatcher",
    "ShapeMatch",
    "EdgeMatch",
    "EdgeEndpoint",
    "MatchResult",
    "SHAPE_PATTERNS",
    "CONNECTORS",
    "ParserOptions",
    "FlowchartParser",
    "infer_semantic_type",
    "node_style",
    "edge_style",
    "to_mermaid",
    "to_json",
    "to_text",
    "format_node",
    "format_edge",
    "validate_node_id",
    "validate_node_shape",
    "validate_edge_line_type",
    "validate_direction",
    "validate_color",
    "validate_node_references",
]
