"""
Re-emit a ParseResult as flowchart text, JSON or a plain summary.
"""

from typing import List

from ...shared.models import Edge, Node, ParseResult
from .matchers import EdgeMatcher, ShapeMatcher

_shape_matcher = ShapeMatcher()
_edge_matcher = EdgeMatcher(shape_matcher=_shape_matcher)


def format_node(node: Node) -> str:
    """Canonical declaration line for one node."""
    return f"{node.id}{_shape_matcher.format(node.shape, node.label)}"


def format_edge(edge: Edge) -> str:
    """Canonical connector line for one edge."""
    return _edge_matcher.format(edge.source, edge.target, edge.line_type, edge.label)


def format_node_style(node: Node) -> str:
    """Mermaid ``style`` directive for a node, or an empty string."""
    parts: List[str] = []
    if node.style.fill:
        parts.append(f"fill:{node.style.fill}")
    if node.style.stroke:
        parts.append(f"stroke:{node.style.stroke}")
    if node.style.stroke_width:
        parts.append(f"stroke-width:{node.style.stroke_width:g}px")
    if node.style.font_color:
        parts.append(f"color:{node.style.font_color}")
    return f"style {node.id} {','.join(parts)}" if parts else ""


def to_mermaid(result: ParseResult, include_styles: bool = False) -> str:
    """
    Render a parse result as flowchart text.

    Without styles the output parses back to an equivalent graph. Style
    directives are meant for diagram renderers and are not re-parsed.
    """
    lines: List[str] = []
    if result.title:
        lines.extend(["---", f"title: {result.title}", "---"])

    lines.append(f"flowchart {result.direction}")
    lines.extend(f"    {format_node(node)}" for node in result.nodes)
    lines.extend(f"    {format_edge(edge)}" for edge in result.edges)

    if include_styles:
        for node in result.nodes:
            directive = format_node_style(node)
            if directive:
                lines.append(f"    {directive}")

    return "\n".join(lines)


def to_json(result: ParseResult, include_diagnostics: bool = True) -> str:
    """Serialize a parse result as indented JSON, edges keyed ``from``/``to``."""
    exclude = None if include_diagnostics else {"diagnostics"}
    return result.model_dump_json(indent=2, by_alias=True, exclude_none=True, exclude=exclude)


def to_text(result: ParseResult) -> str:
    """Short human-readable listing of nodes and edges."""
    lines: List[str] = []

    if result.title:
        lines.append(f"Title: {result.title}")
        lines.append("")

    lines.append("Nodes:")
    for node in result.nodes:
        lines.append(f"- {node.id}: {node.label}")

    lines.append("")
    lines.append("Edges:")
    for edge in result.edges:
        label = f" ({edge.label})" if edge.label else ""
        lines.append(f"- {edge.source} -> {edge.target}{label}")

    return "\n".join(lines)
