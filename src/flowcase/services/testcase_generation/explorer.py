"""
Execution path enumeration over a parsed flowchart.

Paths are enumerated depth-first from each entry node. Every node may be
visited at most ``max_visits`` times within the traversal from one root,
which bounds loops while still producing the "go around once more" paths
that retry flows need.
"""

from collections import defaultdict
from typing import Dict, Iterator, List, Optional, Tuple

import networkx as nx

from ...shared import get_logger
from ...shared.models import FlowPath, Node, NodeType, ParseResult
from .models import MAX_NODE_VISITS

logger = get_logger(__name__)


def is_terminal(graph: nx.DiGraph, node_id: str) -> bool:
    """A node ends a path when it is end-typed or has no outgoing edges."""
    node: Node = graph.nodes[node_id]["node"]
    return NodeType(node.semantic_type) == NodeType.END or graph.out_degree(node_id) == 0


def find_entry_nodes(graph: nx.DiGraph) -> List[str]:
    """
    Traversal roots in declaration order.
    
    Start-typed nodes when there are any, otherwise every node without
    incoming edges.
    """
    starts = [
        node_id for node_id, data in graph.nodes(data=True)
        if NodeType(data["node"].semantic_type) == NodeType.START
    ]
    if starts:
        return starts
    return [node_id for node_id in graph.nodes if graph.in_degree(node_id) == 0]


def enumerate_paths(graph: nx.DiGraph, root: str, max_visits: int = MAX_NODE_VISITS) -> List[List[str]]:
    """
    Enumerate node-id sequences from ``root`` to terminal nodes.
    
    Successors are followed in edge declaration order and paths are
    returned in discovery order. Only paths with more than one node are
    recorded.
    """
    paths: List[List[str]] = []
    path: List[str] = []
    visits: Dict[str, int] = defaultdict(int)
    
    def enter(node_id: str) -> Optional[Iterator[str]]:
        path.append(node_id)
        visits[node_id] += 1
        if is_terminal(graph, node_id):
            if len(path) > 1:
                paths.append(list(path))
            return None
        return iter(list(graph.successors(node_id)))
    
    # Explicit stack so long chains do not hit the recursion limit
    stack: List[Tuple[str, Optional[Iterator[str]]]] = [(root, enter(root))]
    
    while stack:
        node_id, successors = stack[-1]
        advanced = False
        
        if successors is not None:
            for successor in successors:
                if visits[successor] < max_visits:
                    stack.append((successor, enter(successor)))
                    advanced = True
                    break
        
        if not advanced:
            stack.pop()
            path.pop()
            visits[node_id] -= 1
    
    return paths


def order_paths(paths: List[FlowPath]) -> List[FlowPath]:
    """Non-circular paths first, then circular ones, each group shortest first."""
    straight = sorted((p for p in paths if not p.is_circular), key=len)
    circular = sorted((p for p in paths if p.is_circular), key=len)
    return straight + circular


class PathExplorer:
    """Enumerates execution paths of a flowchart."""
    
    def __init__(self, max_visits: int = MAX_NODE_VISITS):
        if max_visits < 1:
            raise ValueError("max_visits must be at least 1")
        self.max_visits = max_visits
    
    def explore_from(self, result: ParseResult, root: str,
                     graph: Optional[nx.DiGraph] = None) -> List[FlowPath]:
        """
        Execution paths starting at one root, ordered for test generation.
        
        Args:
            result: Parsed flowchart
            root: Id of the node to start from
            graph: Prebuilt graph of ``result``; built when omitted
            
        Returns:
            Ordered list of FlowPath objects
        """
        graph = graph if graph is not None else result.to_networkx()
        if root not in graph:
            raise KeyError(f"Unknown node: {root}")
        
        paths = [
            FlowPath(nodes=[graph.nodes[node_id]["node"] for node_id in node_ids])
            for node_ids in enumerate_paths(graph, root, self.max_visits)
        ]
        ordered = order_paths(paths)
        logger.debug(f"Found {len(ordered)} paths from '{root}'")
        return ordered
    
    def explore(self, result: ParseResult) -> List[Tuple[str, List[FlowPath]]]:
        """
        Execution paths for every entry node.
        
        Returns:
            ``(root id, ordered paths)`` pairs in root declaration order
        """
        graph = result.to_networkx()
        roots = find_entry_nodes(graph)
        
        if not roots:
            logger.warning("No entry nodes found; flowchart has no paths to explore")
            return []
        
        return [(root, self.explore_from(result, root, graph)) for root in roots]
