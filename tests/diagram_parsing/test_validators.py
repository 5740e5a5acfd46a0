"""
Tests for the element validators.
"""

import pytest

from flowcase.services.diagram_parsing import (
    validate_color, validate_direction, validate_edge_line_type,
    validate_node_id, validate_node_references, validate_node_shape,
)
from flowcase.shared import Direction, Edge, EdgeLineType, ErrorCode, NodeShape, ParseError


class TestElementValidators:
    
    def test_node_id(self):
        assert validate_node_id("node_1-a", 1, 1) == "node_1-a"
        
        with pytest.raises(ParseError) as exc_info:
            validate_node_id("bad id", 2, 3)
        assert exc_info.value.code == ErrorCode.INVALID_SYNTAX
        assert (exc_info.value.line, exc_info.value.column) == (2, 3)
    
    def test_node_shape(self):
        assert validate_node_shape("hexagon", 1, 1) == NodeShape.HEXAGON
        
        with pytest.raises(ParseError) as exc_info:
            validate_node_shape("star", 1, 1)
        assert exc_info.value.code == ErrorCode.INVALID_SHAPE
        assert "Valid shapes are:" in exc_info.value.message
    
    def test_edge_line_type(self):
        assert validate_edge_line_type("dotted", 1, 1) == EdgeLineType.DOTTED
        
        with pytest.raises(ParseError) as exc_info:
            validate_edge_line_type("wavy", 1, 1)
        assert exc_info.value.code == ErrorCode.INVALID_EDGE
    
    def test_direction(self):
        assert validate_direction("BT", 1, 1) == Direction.BT
        
        with pytest.raises(ParseError) as exc_info:
            validate_direction("XY", 1, 11)
        assert exc_info.value.code == ErrorCode.INVALID_DIRECTION
    
    @pytest.mark.parametrize("color", ["#fff", "#A1B2C3", "red", "SteelBlue"])
    def test_valid_colors(self, color):
        assert validate_color(color) == color
    
    @pytest.mark.parametrize("color", ["#12", "#GGGGGG", "rgb(0,0,0)", "light blue"])
    def test_invalid_colors(self, color):
        with pytest.raises(ParseError) as exc_info:
            validate_color(color)
        assert exc_info.value.code == ErrorCode.INVALID_STYLE


class TestNodeReferences:
    
    def test_all_resolved(self):
        edges = [Edge(source="A", target="B")]
        assert validate_node_references(["A", "B"], edges) == []
    
    def test_one_diagnostic_per_unresolved_endpoint(self):
        edges = [Edge(source="A", target="C"), Edge(source="X", target="Y")]
        diagnostics = validate_node_references(["A", "B"], edges)
        
        assert [d.message for d in diagnostics] == [
            "Edge references undefined node: C",
            "Edge references undefined node: X",
            "Edge references undefined node: Y",
        ]
        assert all(d.code == ErrorCode.UNDEFINED_NODE for d in diagnostics)
    
    def test_positions_are_used(self):
        edges = [Edge(source="A", target="C")]
        diagnostics = validate_node_references(["A"], edges, positions=[(7, 3, 10)])
        
        assert (diagnostics[0].line, diagnostics[0].column) == (7, 10)
    
    def test_edges_accept_from_and_to_aliases(self):
        edge = Edge(**{"from": "A", "to": "B"})
        assert (edge.source, edge.target) == ("A", "B")
