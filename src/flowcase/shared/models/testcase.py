"""
Path and test case models for flowcase.
"""

from enum import Enum
from typing import List

from pydantic import Field

from .base import FrozenModel
from .graph import Node


class Priority(str, Enum):
    """Test case priority tiers, highest first."""
    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class FlowPath(FrozenModel):
    """
    An execution path from an entry node to a terminal node.
    
    Identified by the sequence of node ids it visits; a node may appear
    more than once when the path goes around a loop.
    """
    
    nodes: List[Node] = Field(..., min_length=1, description="Visited nodes in order")
    
    @property
    def node_ids(self) -> List[str]:
        return [node.id for node in self.nodes]
    
    @property
    def first(self) -> Node:
        return self.nodes[0]
    
    @property
    def last(self) -> Node:
        return self.nodes[-1]
    
    @property
    def is_circular(self) -> bool:
        """True when at least one node id repeats."""
        ids = self.node_ids
        return len(set(ids)) != len(ids)
    
    def __len__(self) -> int:
        return len(self.nodes)
    
    def __str__(self) -> str:
        return " → ".join(node.label for node in self.nodes)


class TestCase(FrozenModel):
    """A synthesized end-to-end test case."""
    
    # Keep pytest from collecting this model as a test class
    __test__ = False
    
    id: str = Field(..., description="Prefixed, zero-padded sequential id")
    title: str = Field(..., description="Short title")
    priority: Priority = Field(default=Priority.MEDIUM, description="Priority tier")
    description: str = Field(default="", description="Flow path description")
    preconditions: List[str] = Field(default_factory=list, description="Conditions before the test")
    steps: List[str] = Field(default_factory=list, description="Ordered test steps")
    expected_results: List[str] = Field(default_factory=list, description="Expected outcomes")
    node_path: List[str] = Field(default_factory=list, description="Node ids along the tested path")
    is_error_path: bool = Field(default=False, description="Whether the path exercises an error branch")
