"""
Tests for the ParseResult formatters.
"""

import json

from flowcase.services.diagram_parsing import format_edge, format_node, to_json, to_mermaid, to_text
from flowcase.shared import Edge, EdgeLineType, Node, NodeShape


def test_format_node_and_edge():
    node = Node(id="db", label="Users", shape=NodeShape.CYLINDRICAL)
    edge = Edge(source="A", target="db", label="save", line_type=EdgeLineType.THICK)
    
    assert format_node(node) == "db[(Users)]"
    assert format_edge(edge) == "A ==>|save| db"


def test_mermaid_round_trip(parser, login_result):
    reparsed = parser.parse(to_mermaid(login_result))
    
    assert reparsed.direction == login_result.direction
    assert [(n.id, n.label, n.shape) for n in reparsed.nodes] == [
        (n.id, n.label, n.shape) for n in login_result.nodes
    ]
    assert [(e.source, e.target, e.label, e.line_type) for e in reparsed.edges] == [
        (e.source, e.target, e.label, e.line_type) for e in login_result.edges
    ]


def test_mermaid_writes_title(parser):
    result = parser.parse("---\ntitle: Checkout\n---\nflowchart TD\nA((Start)) --> B((End))")
    text = to_mermaid(result)
    
    assert text.startswith("---\ntitle: Checkout\n---\nflowchart TD\n")
    assert parser.parse(text).title == "Checkout"


def test_mermaid_style_directives(parser):
    result = parser.parse("flowchart TD\nA((Start)) --> B(((End)))")
    text = to_mermaid(result, include_styles=True)
    
    assert "    style A fill:#9DB4F9,stroke:#4B6BF5" in text.splitlines()
    assert "    style B fill:#FFA07A,stroke:#FF6347,stroke-width:2px" in text.splitlines()


def test_json_uses_from_and_to(branch_result):
    data = json.loads(to_json(branch_result))
    
    assert data["direction"] == "TD"
    assert data["edges"][0]["from"] == "A"
    assert data["edges"][0]["to"] == "B"
    assert data["nodes"][0]["semantic_type"] == "start"
    assert "diagnostics" in data


def test_json_without_diagnostics(branch_result):
    assert "diagnostics" not in json.loads(to_json(branch_result, include_diagnostics=False))


def test_text_summary(branch_result):
    lines = to_text(branch_result).splitlines()
    
    assert lines[0] == "Nodes:"
    assert "- A: Start" in lines
    assert "- B -> C (Yes)" in lines
    assert "- A -> B" in lines
