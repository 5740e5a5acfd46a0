"""
Flowchart graph models for flowcase.

These models are produced by the diagram parser and consumed, read-only,
by the path explorer, the test case synthesizer and the formatters.
"""

from collections import Counter
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional

import networkx as nx
from pydantic import Field, field_validator

from .base import FrozenModel
from .diagnostics import Diagnostic

NODE_ID_PATTERN = r"[A-Za-z0-9_-]+"


class Direction(str, Enum):
    """Graph direction declared in the flowchart header."""
    TB = "TB"
    TD = "TD"
    BT = "BT"
    LR = "LR"
    RL = "RL"


class NodeShape(str, Enum):
    """Visual node shape, encoded by the delimiters around the label."""
    SQUARE = "square"
    ROUND = "round"
    STADIUM = "stadium"
    SUBROUTINE = "subroutine"
    CYLINDRICAL = "cylindrical"
    CIRCLE = "circle"
    ASYMMETRIC = "asymmetric"
    RHOMBUS = "rhombus"
    HEXAGON = "hexagon"
    PARALLELOGRAM = "parallelogram"
    PARALLELOGRAM_ALT = "parallelogram-alt"
    TRAPEZOID = "trapezoid"
    TRAPEZOID_ALT = "trapezoid-alt"
    DOUBLE_CIRCLE = "double-circle"


class NodeType(str, Enum):
    """Inferred role of a node in the flow."""
    START = "start"
    END = "end"
    PROCESS = "process"
    DECISION = "decision"
    INPUT = "input"
    OUTPUT = "output"
    SUBROUTINE = "subroutine"
    DATABASE = "database"
    CUSTOM = "custom"


class EdgeLineType(str, Enum):
    """Connector line type."""
    SOLID = "solid"
    DOTTED = "dotted"
    THICK = "thick"


class NodeStyle(FrozenModel):
    """Node colours and stroke."""
    
    fill: Optional[str] = Field(default=None, description="Fill colour")
    stroke: Optional[str] = Field(default=None, description="Stroke colour")
    stroke_width: Optional[float] = Field(default=None, gt=0, description="Stroke width")
    font_color: Optional[str] = Field(default=None, description="Label colour")


class EdgeStyle(FrozenModel):
    """Edge colours and widths."""
    
    line_color: Optional[str] = Field(default=None, description="Line colour")
    text_color: Optional[str] = Field(default=None, description="Label colour")
    line_width: Optional[float] = Field(default=None, gt=0, description="Line width")
    font_size: Optional[float] = Field(default=None, gt=0, description="Label font size")


class Node(FrozenModel):
    """
    A flowchart node.
    
    The shape comes from the declaration syntax; the semantic type is
    inferred from the id, the label and the shape.
    """
    
    id: str = Field(..., pattern=f"^{NODE_ID_PATTERN}$", description="Unique node identifier")
    label: str = Field(..., description="Display text")
    shape: NodeShape = Field(default=NodeShape.SQUARE, description="Visual shape")
    semantic_type: NodeType = Field(default=NodeType.PROCESS, description="Inferred role")
    style: NodeStyle = Field(default_factory=NodeStyle, description="Node style")


class Edge(FrozenModel):
    """A directed connection between two nodes."""
    
    source: str = Field(..., alias="from", description="Source node id")
    target: str = Field(..., alias="to", description="Target node id")
    label: Optional[str] = Field(default=None, description="Branch condition or description")
    line_type: EdgeLineType = Field(default=EdgeLineType.SOLID, description="Connector line type")
    style: EdgeStyle = Field(default_factory=EdgeStyle, description="Edge style")
    
    @field_validator('label')
    @classmethod
    def normalize_label(cls, v):
        """Treat blank labels as missing."""
        if v is None:
            return v
        v = v.strip()
        return v or None


class ParseResult(FrozenModel):
    """
    A parsed flowchart.
    
    Carries the assembled graph together with every diagnostic collected
    while parsing. A strict parse only ever returns results without
    error-severity diagnostics; a lenient parse may return a partial graph.
    """
    
    nodes: List[Node] = Field(default_factory=list, description="Nodes in declaration order")
    edges: List[Edge] = Field(default_factory=list, description="Edges in declaration order")
    direction: Direction = Field(default=Direction.TD, description="Graph direction")
    title: Optional[str] = Field(default=None, description="Graph title")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Type and per-type node counts")
    diagnostics: List[Diagnostic] = Field(default_factory=list, description="Errors and warnings")
    
    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.is_error]
    
    @property
    def warnings(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if not d.is_error]
    
    @property
    def is_valid(self) -> bool:
        """True when no error-severity diagnostic was recorded."""
        return not self.errors
    
    @property
    def node_ids(self) -> List[str]:
        return [node.id for node in self.nodes]
    
    def get_node(self, node_id: str) -> Optional[Node]:
        """Get a node by its ID."""
        return next((n for n in self.nodes if n.id == node_id), None)
    
    def find_edge(self, source: str, target: str) -> Optional[Edge]:
        """Get the first edge declared from ``source`` to ``target``."""
        return next((e for e in self.edges if e.source == source and e.target == target), None)
    
    def iter_resolved_edges(self) -> Iterator[Edge]:
        """Yield edges whose endpoints are both declared nodes."""
        known = set(self.node_ids)
        for edge in self.edges:
            if edge.source in known and edge.target in known:
                yield edge
    
    def node_type_counts(self) -> Dict[str, int]:
        """Count nodes per semantic type."""
        return dict(Counter(node.semantic_type for node in self.nodes))
    
    def to_networkx(self) -> nx.DiGraph:
        """
        Build a directed graph view of the flowchart.
        
        Node attributes hold the Node model; parallel edges collapse into
        one graph edge. Edges to undeclared nodes are left out.
        """
        graph = nx.DiGraph(direction=self.direction)
        for node in self.nodes:
            graph.add_node(node.id, node=node)
        for edge in self.iter_resolved_edges():
            if not graph.has_edge(edge.source, edge.target):
                graph.add_edge(edge.source, edge.target, edge=edge)
        return graph
