"""
Shared data models for flowcase.
"""

from .base import BaseModel, FrozenModel
from .diagnostics import Diagnostic
from .graph import (
    Direction, NodeShape, NodeType, EdgeLineType,
    NodeStyle, EdgeStyle, Node, Edge, ParseResult, NODE_ID_PATTERN,
)
from .testcase import Priority, FlowPath, TestCase

__all__ = [
    # Base models
    "BaseModel",
    "FrozenModel",
    # Diagnostics
    "Diagnostic",
    # Graph models
    "Direction",
    "NodeShape",
    "NodeType",
    "EdgeLineType",
    "NodeStyle",
    "EdgeStyle",
    "Node",
    "Edge",
    "ParseResult",
    "NODE_ID_PATTERN",
    # Test case models
    "Priority",
    "FlowPath",
    "TestCase",
]
