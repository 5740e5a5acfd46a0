"""
Tests for execution path enumeration.
"""

from collections import Counter

import pytest

from flowcase.services.testcase_generation import (
    PathExplorer, enumerate_paths, find_entry_nodes, is_terminal,
)


def ids(paths):
    return [p.node_ids for p in paths]


class TestEntryAndTerminalNodes:
    
    def test_start_typed_nodes_are_entries(self, login_result):
        assert find_entry_nodes(login_result.to_networkx()) == ["A"]
    
    def test_zero_in_degree_fallback(self, parser):
        result = parser.parse("flowchart TD\nA[One] --> C[Three]\nB[Two] --> C")
        assert find_entry_nodes(result.to_networkx()) == ["A", "B"]
    
    def test_terminal_nodes(self, login_result):
        graph = login_result.to_networkx()
        
        assert is_terminal(graph, "F")
        assert not is_terminal(graph, "E")
    
    def test_end_typed_node_with_outgoing_edge_is_terminal(self, parser):
        result = parser.parse("flowchart TD\nA((Start)) --> B((End))\nB --> C[Cleanup]")
        assert is_terminal(result.to_networkx(), "B")


class TestPathEnumeration:
    
    def test_simple_path(self, parser):
        result = parser.parse("flowchart TD\nA[Go]-->B[End]")
        assert ids(PathExplorer().explore_from(result, "A")) == [["A", "B"]]
    
    def test_decision_branches(self, branch_result):
        paths = PathExplorer().explore_from(branch_result, "A")
        assert ids(paths) == [["A", "B", "C"], ["A", "B", "D"]]
    
    def test_retry_loop_is_bounded(self, login_result):
        paths = PathExplorer().explore_from(login_result, "A")
        
        assert ids(paths) == [
            ["A", "B", "C", "D", "F"],
            ["A", "B", "C", "E", "B", "C", "D", "F"],
        ]
        assert not paths[0].is_circular
        assert paths[1].is_circular
    
    def test_visit_bound_holds_on_every_path(self, login_result):
        for max_visits in (1, 2, 3):
            paths = PathExplorer(max_visits=max_visits).explore_from(login_result, "A")
            node_count = len(login_result.nodes)
            
            assert paths
            for path in paths:
                assert max(Counter(path.node_ids).values()) <= max_visits
                assert len(path) <= (max_visits + 1) * node_count
                assert path.node_ids[0] == "A"
                assert path.node_ids[-1] == "F"
    
    def test_higher_bound_finds_more_paths(self, login_result):
        once = PathExplorer(max_visits=1).explore_from(login_result, "A")
        thrice = PathExplorer(max_visits=3).explore_from(login_result, "A")
        
        assert ids(once) == [["A", "B", "C", "D", "F"]]
        assert len(thrice) == 3
    
    def test_straight_paths_come_before_circular_ones(self, mixed_result):
        paths = PathExplorer().explore_from(mixed_result, "A")
        
        assert ids(paths) == [
            ["A", "B", "T1"],
            ["A", "L1", "L2", "L3", "L4", "T2"],
            ["A", "B", "A", "B", "T1"],
            ["A", "B", "A", "L1", "L2", "L3", "L4", "T2"],
        ]
    
    def test_discovery_order_without_sorting(self, mixed_result):
        assert enumerate_paths(mixed_result.to_networkx(), "A") == [
            ["A", "B", "A", "B", "T1"],
            ["A", "B", "A", "L1", "L2", "L3", "L4", "T2"],
            ["A", "B", "T1"],
            ["A", "L1", "L2", "L3", "L4", "T2"],
        ]
    
    def test_exploration_is_deterministic(self, login_result):
        explorer = PathExplorer()
        assert ids(explorer.explore_from(login_result, "A")) == ids(explorer.explore_from(login_result, "A"))
    
    def test_single_node_produces_no_paths(self, parser):
        result = parser.parse("flowchart TD\nA((Start))")
        assert PathExplorer().explore(result) == [("A", [])]
    
    def test_long_chain_does_not_recurse(self, parser):
        lines = ["flowchart TD", "N0((Start))"]
        lines.extend(f"N{i} --> N{i + 1}[Step {i + 1}]" for i in range(1500))
        result = parser.parse("\n".join(lines))
        
        paths = PathExplorer().explore_from(result, "N0")
        assert len(paths) == 1
        assert len(paths[0]) == 1501
    
    def test_unknown_root(self, login_result):
        with pytest.raises(KeyError):
            PathExplorer().explore_from(login_result, "missing")
    
    def test_invalid_bound(self):
        with pytest.raises(ValueError):
            PathExplorer(max_visits=0)
    
    def test_explore_groups_by_root(self, parser):
        result = parser.parse("flowchart TD\nA[One] --> C[Three]\nB[Two] --> C")
        explored = PathExplorer().explore(result)
        
        assert [(root, ids(paths)) for root, paths in explored] == [
            ("A", [["A", "C"]]),
            ("B", [["B", "C"]]),
        ]
