"""
Turn execution paths into test cases.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from ...shared.models import Edge, FlowPath, Node, NodeType, Priority, TestCase
from .models import GeneratorOptions

STEP_TEMPLATES: Dict[NodeType, str] = {
    NodeType.INPUT: 'Input: enter the information required for "{label}"',
    NodeType.PROCESS: 'Process: execute "{label}"',
    NodeType.DECISION: 'Decision: check the condition of "{label}"',
    NodeType.OUTPUT: 'Output: verify the output of "{label}"',
    NodeType.SUBROUTINE: 'Subroutine: run the "{label}" subroutine',
    NodeType.DATABASE: 'Database: perform the data operation for "{label}"',
    NodeType.START: 'Start: begin the flow from "{label}"',
    NodeType.END: 'End: finish the flow at "{label}"',
}
DEFAULT_STEP_TEMPLATE = 'Execute: run "{label}"'
BRANCH_STEP_TEMPLATE = 'Perform the action matching branch condition "{label}"'

BASE_PRECONDITIONS = [
    "The system is operating normally",
    "The flow's entry condition is satisfied",
]
LOGIN_MARKERS = ("login", "log in", "sign in")
LOGIN_PRECONDITIONS = [
    "A user account has already been created",
    "The login screen is accessible",
]
REGISTRATION_MARKERS = ("regist", "sign up")
REGISTRATION_PRECONDITIONS = [
    "The information required for registration is prepared",
]

NEGATIVE_EDGE_MARKERS = ("no", "ng")
ERROR_NODE_MARKERS = ("error",)
INPUT_MARKERS = ("input",)

ERROR_RESULTS = [
    "An appropriate error message is displayed",
    "The error state is handled correctly",
]
RETRY_RESULT = "Re-entry is possible"
DISPLAY_UPDATE_RESULT = "The screen display is updated appropriately"


def _contains_any(text: str, markers: Sequence[str]) -> bool:
    lowered = text.lower()
    return any(marker in lowered for marker in markers)


class EdgeIndex:
    """First declared edge per ``(source, target)`` pair."""
    
    def __init__(self, edges: Sequence[Edge]):
        self._edges: Dict[Tuple[str, str], Edge] = {}
        for edge in edges:
            self._edges.setdefault((edge.source, edge.target), edge)
    
    def find(self, source: str, target: str) -> Optional[Edge]:
        return self._edges.get((source, target))


class TestCaseSynthesizer:
    """
    Builds one test case per execution path.
    
    Priority, preconditions, steps and expected results are all derived
    from node labels, node semantic types and edge labels along the path.
    """
    
    __test__ = False
    
    def __init__(self, options: Optional[GeneratorOptions] = None):
        self.options = options or GeneratorOptions()
    
    def determine_priority(self, path: FlowPath) -> Priority:
        """
        The first node whose label matches a keyword decides the priority.
        
        Within that node tiers are checked from Critical down to Low.
        """
        for node in path.nodes:
            for tier, keywords in self.options.ordered_rules:
                if _contains_any(node.label, [k.lower() for k in keywords]):
                    return tier
        return Priority(self.options.default_priority)
    
    def is_error_path(self, path: FlowPath, edges: EdgeIndex) -> bool:
        """True when a traversed edge is a negative branch or a later node reports an error."""
        for current, following in zip(path.nodes, path.nodes[1:]):
            edge = edges.find(current.id, following.id)
            if edge is not None and edge.label and _contains_any(edge.label, NEGATIVE_EDGE_MARKERS):
                return True
            if _contains_any(following.label, ERROR_NODE_MARKERS):
                return True
        return False
    
    def title(self, path: FlowPath) -> str:
        return f"{path.first.label} to {path.last.label} flow verification"
    
    def description(self, path: FlowPath) -> str:
        return f"Flow path: {path}"
    
    def preconditions(self, path: FlowPath) -> List[str]:
        conditions = list(BASE_PRECONDITIONS)
        first_label = path.first.label
        
        if _contains_any(first_label, LOGIN_MARKERS):
            conditions.extend(LOGIN_PRECONDITIONS)
        elif _contains_any(first_label, REGISTRATION_MARKERS):
            conditions.extend(REGISTRATION_PRECONDITIONS)
        
        return conditions
    
    def _node_step(self, node: Node) -> str:
        template = STEP_TEMPLATES.get(NodeType(node.semantic_type), DEFAULT_STEP_TEMPLATE)
        return template.format(label=node.label)
    
    def steps(self, path: FlowPath, edges: EdgeIndex) -> List[str]:
        """One step per node, plus a branch step after each labelled edge taken."""
        steps: List[str] = []
        
        for current, following in zip(path.nodes, path.nodes[1:]):
            steps.append(self._node_step(current))
            
            edge = edges.find(current.id, following.id)
            if edge is not None and edge.label:
                steps.append(BRANCH_STEP_TEMPLATE.format(label=edge.label))
        
        steps.append(self._node_step(path.last))
        return steps
    
    def expected_results(self, path: FlowPath, error_path: bool) -> List[str]:
        if error_path:
            results = list(ERROR_RESULTS)
            if any(_contains_any(node.label, INPUT_MARKERS) for node in path.nodes):
                results.append(RETRY_RESULT)
            return results
        
        results = self._terminal_results(path.last)
        if any(NodeType(node.semantic_type) == NodeType.OUTPUT for node in path.nodes):
            results.append(DISPLAY_UPDATE_RESULT)
        return results
    
    @staticmethod
    def _terminal_results(node: Node) -> List[str]:
        node_type = NodeType(node.semantic_type)
        
        if node_type == NodeType.OUTPUT:
            return [
                f'"{node.label}" is displayed correctly',
                "The displayed content matches the specification",
            ]
        if node_type == NodeType.DATABASE:
            return [
                f'The data operation for "{node.label}" completes successfully',
                "Data integrity is maintained",
            ]
        if node_type == NodeType.END:
            return [f'The flow completes successfully and reaches the "{node.label}" state']
        return [f'"{node.label}" completes successfully']
    
    def format_id(self, index: int) -> str:
        """Zero-padded sequential id, 1-based."""
        return f"{self.options.id_prefix}-{index:03d}"
    
    def synthesize(self, path: FlowPath, edges: Sequence[Edge], index: int) -> TestCase:
        """
        Build the test case for one path.
        
        Args:
            path: Execution path
            edges: All edges of the flowchart, in declaration order
            index: 1-based sequence number used for the id
        """
        edge_index = edges if isinstance(edges, EdgeIndex) else EdgeIndex(edges)
        error_path = self.is_error_path(path, edge_index)
        
        return TestCase(
            id=self.format_id(index),
            title=self.title(path),
            priority=self.determine_priority(path),
            description=self.description(path),
            preconditions=self.preconditions(path),
            steps=self.steps(path, edge_index),
            expected_results=self.expected_results(path, error_path),
            node_path=path.node_ids,
            is_error_path=error_path,
        )
    
    def synthesize_all(self, paths: Sequence[FlowPath], edges: Sequence[Edge],
                       start_index: int = 1) -> List[TestCase]:
        """Build test cases for consecutive paths, numbering from ``start_index``."""
        edge_index = EdgeIndex(edges)
        return [
            self.synthesize(path, edge_index, start_index + offset)
            for offset, path in enumerate(paths)
        ]
