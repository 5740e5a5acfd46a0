"""
Tests for test case synthesis.
"""

import pytest
from pydantic import ValidationError

from flowcase.services.testcase_generation import (
    EdgeIndex, FlowchartTestCaseGenerator, GeneratorOptions, TestCaseSynthesizer,
)
from flowcase.shared import ConfigurationError, Edge, FlowPath, Node, NodeType, Priority


def make_path(*specs):
    """Build a path from (id, label, type) triples."""
    return FlowPath(nodes=[
        Node(id=node_id, label=label, semantic_type=node_type)
        for node_id, label, node_type in specs
    ])


class TestPriority:
    
    @pytest.mark.parametrize("label,expected", [
        ("Login screen", Priority.CRITICAL),
        ("Process payment", Priority.CRITICAL),
        ("Update profile", Priority.HIGH),
        ("Search products", Priority.MEDIUM),
        ("Open help", Priority.LOW),
        ("Do something", Priority.MEDIUM),
    ])
    def test_keyword_tiers(self, label, expected):
        path = make_path(("a", label, NodeType.PROCESS), ("b", "Finish", NodeType.PROCESS))
        assert TestCaseSynthesizer().determine_priority(path) == expected
    
    def test_first_matching_node_wins(self):
        path = make_path(
            ("a", "Open help", NodeType.PROCESS),
            ("b", "Login", NodeType.PROCESS),
        )
        assert TestCaseSynthesizer().determine_priority(path) == Priority.LOW
    
    def test_highest_tier_within_a_node(self):
        path = make_path(("a", "Delete settings", NodeType.PROCESS), ("b", "Done", NodeType.PROCESS))
        assert TestCaseSynthesizer().determine_priority(path) == Priority.HIGH
    
    def test_matching_is_case_insensitive(self):
        path = make_path(("a", "SECURITY CHECK", NodeType.PROCESS), ("b", "Done", NodeType.PROCESS))
        assert TestCaseSynthesizer().determine_priority(path) == Priority.CRITICAL
    
    def test_custom_rules(self):
        options = GeneratorOptions(priority_rules={
            "Critical": ["Checkout"], "High": [], "Medium": [], "Low": ["login"],
        })
        path = make_path(("a", "Login", NodeType.PROCESS), ("b", "checkout cart", NodeType.PROCESS))
        
        assert TestCaseSynthesizer(options).determine_priority(path) == Priority.LOW
    
    def test_unknown_tier_is_rejected(self):
        with pytest.raises(ValidationError):
            GeneratorOptions(priority_rules={"Urgent": ["x"]})
    
    def test_options_from_settings(self):
        options = GeneratorOptions.from_settings(id_prefix="LOGIN")
        
        assert options.id_prefix == "LOGIN"
        assert options.max_node_visits == 2
        
        with pytest.raises(ConfigurationError, match="GeneratorOptions"):
            GeneratorOptions.from_settings(max_node_visits=0)


class TestPreconditionsAndSteps:
    
    def test_base_preconditions(self):
        path = make_path(("a", "Begin", NodeType.START), ("b", "Finish", NodeType.END))
        assert TestCaseSynthesizer().preconditions(path) == [
            "The system is operating normally",
            "The flow's entry condition is satisfied",
        ]
    
    def test_login_preconditions(self):
        path = make_path(("a", "Login page", NodeType.START), ("b", "Finish", NodeType.END))
        conditions = TestCaseSynthesizer().preconditions(path)
        
        assert conditions[2:] == [
            "A user account has already been created",
            "The login screen is accessible",
        ]
    
    def test_registration_preconditions(self):
        path = make_path(("a", "Registration form", NodeType.START), ("b", "Finish", NodeType.END))
        conditions = TestCaseSynthesizer().preconditions(path)
        
        assert conditions[2:] == ["The information required for registration is prepared"]
    
    def test_only_the_first_node_drives_preconditions(self):
        path = make_path(("a", "Home", NodeType.START), ("b", "Login", NodeType.END))
        assert len(TestCaseSynthesizer().preconditions(path)) == 2
    
    @pytest.mark.parametrize("node_type,expected", [
        (NodeType.INPUT, 'Input: enter the information required for "X"'),
        (NodeType.PROCESS, 'Process: execute "X"'),
        (NodeType.DECISION, 'Decision: check the condition of "X"'),
        (NodeType.OUTPUT, 'Output: verify the output of "X"'),
        (NodeType.SUBROUTINE, 'Subroutine: run the "X" subroutine'),
        (NodeType.DATABASE, 'Database: perform the data operation for "X"'),
        (NodeType.START, 'Start: begin the flow from "X"'),
        (NodeType.END, 'End: finish the flow at "X"'),
        (NodeType.CUSTOM, 'Execute: run "X"'),
    ])
    def test_step_templates(self, node_type, expected):
        path = make_path(("a", "X", node_type), ("b", "Y", NodeType.END))
        steps = TestCaseSynthesizer().steps(path, EdgeIndex([]))
        
        assert steps == [expected, 'End: finish the flow at "Y"']
    
    def test_labelled_edges_add_branch_steps(self):
        path = make_path(
            ("a", "Valid?", NodeType.DECISION),
            ("b", "Save", NodeType.DATABASE),
        )
        edges = EdgeIndex([Edge(source="a", target="b", label="Yes")])
        
        assert TestCaseSynthesizer().steps(path, edges) == [
            'Decision: check the condition of "Valid?"',
            'Perform the action matching branch condition "Yes"',
            'Database: perform the data operation for "Save"',
        ]
    
    def test_first_declared_edge_is_used(self):
        edges = EdgeIndex([
            Edge(source="a", target="b", label="first"),
            Edge(source="a", target="b", label="second"),
        ])
        assert edges.find("a", "b").label == "first"
        assert edges.find("b", "a") is None


class TestErrorPathsAndResults:
    
    @pytest.mark.parametrize("label", ["No", "NG", "not valid", "Unknown"])
    def test_negative_edge_labels(self, label):
        path = make_path(("a", "Check", NodeType.DECISION), ("b", "Next", NodeType.PROCESS))
        edges = EdgeIndex([Edge(source="a", target="b", label=label)])
        
        assert TestCaseSynthesizer().is_error_path(path, edges)
    
    def test_error_node_after_the_first(self):
        path = make_path(("a", "Check", NodeType.DECISION), ("b", "Show Error", NodeType.OUTPUT))
        assert TestCaseSynthesizer().is_error_path(path, EdgeIndex([]))
    
    def test_error_in_first_node_does_not_count(self):
        path = make_path(("a", "Error log", NodeType.START), ("b", "Finish", NodeType.END))
        assert not TestCaseSynthesizer().is_error_path(path, EdgeIndex([]))
    
    def test_error_results_with_retry(self):
        path = make_path(("a", "Input form", NodeType.INPUT), ("b", "Error", NodeType.OUTPUT))
        assert TestCaseSynthesizer().expected_results(path, True) == [
            "An appropriate error message is displayed",
            "The error state is handled correctly",
            "Re-entry is possible",
        ]
    
    @pytest.mark.parametrize("node_type,expected", [
        (NodeType.OUTPUT, [
            '"Report" is displayed correctly',
            "The displayed content matches the specification",
            "The screen display is updated appropriately",
        ]),
        (NodeType.DATABASE, [
            'The data operation for "Report" completes successfully',
            "Data integrity is maintained",
        ]),
        (NodeType.END, ['The flow completes successfully and reaches the "Report" state']),
        (NodeType.PROCESS, ['"Report" completes successfully']),
    ])
    def test_success_results_by_terminal_type(self, node_type, expected):
        path = make_path(("a", "Begin", NodeType.START), ("b", "Report", node_type))
        assert TestCaseSynthesizer().expected_results(path, False) == expected
    
    def test_output_anywhere_adds_display_update(self):
        path = make_path(
            ("a", "Begin", NodeType.START),
            ("b", "Preview", NodeType.OUTPUT),
            ("c", "Finish", NodeType.END),
        )
        results = TestCaseSynthesizer().expected_results(path, False)
        assert results[-1] == "The screen display is updated appropriately"


class TestSynthesize:
    
    def test_record_fields(self):
        path = make_path(("a", "Login", NodeType.START), ("b", "Home", NodeType.END))
        test_case = TestCaseSynthesizer().synthesize(path, [Edge(source="a", target="b")], 7)
        
        assert test_case.id == "FLOW-007"
        assert test_case.title == "Login to Home flow verification"
        assert test_case.description == "Flow path: Login → Home"
        assert test_case.priority == Priority.CRITICAL
        assert test_case.node_path == ["a", "b"]
        assert not test_case.is_error_path
    
    def test_custom_prefix(self):
        options = GeneratorOptions(id_prefix="LOGIN")
        assert TestCaseSynthesizer(options).format_id(12) == "LOGIN-012"
    
    def test_synthesize_all_numbers_consecutively(self):
        paths = [
            make_path(("a", "One", NodeType.START), ("b", "Two", NodeType.END)),
            make_path(("a", "One", NodeType.START), ("c", "Three", NodeType.END)),
        ]
        cases = TestCaseSynthesizer().synthesize_all(paths, [], start_index=4)
        assert [tc.id for tc in cases] == ["FLOW-004", "FLOW-005"]


class TestGenerator:
    
    def test_single_edge_flowchart(self, parser):
        result = parser.parse("flowchart TD\nA[Go]-->B[End]")
        test_cases = FlowchartTestCaseGenerator().generate(result)
        
        assert len(test_cases) == 1
        steps = " ".join(test_cases[0].steps)
        assert "Go" in steps
        assert "End" in steps
    
    def test_decision_produces_success_and_error_cases(self, branch_result):
        test_cases = FlowchartTestCaseGenerator().generate(branch_result)
        success, failure = test_cases
        
        assert [tc.id for tc in test_cases] == ["FLOW-001", "FLOW-002"]
        assert not success.is_error_path
        assert success.expected_results[0] == '"Welcome page" is displayed correctly'
        assert failure.is_error_path
        assert failure.expected_results[:2] == [
            "An appropriate error message is displayed",
            "The error state is handled correctly",
        ]
    
    def test_retry_loop_case(self, login_result):
        test_cases = FlowchartTestCaseGenerator().generate(login_result)
        
        assert len(test_cases) == 2
        assert test_cases[1].is_error_path
        assert test_cases[1].node_path == ["A", "B", "C", "E", "B", "C", "D", "F"]
        assert test_cases[1].steps[-1] == 'End: finish the flow at "End"'
    
    def test_ids_continue_across_roots(self, parser):
        result = parser.parse("flowchart TD\nA[One] --> C[Three]\nB[Two] --> C")
        test_cases = FlowchartTestCaseGenerator(GeneratorOptions(id_prefix="TC")).generate(result)
        
        assert [(tc.id, tc.node_path) for tc in test_cases] == [
            ("TC-001", ["A", "C"]),
            ("TC-002", ["B", "C"]),
        ]
    
    def test_visit_bound_option(self, login_result):
        generator = FlowchartTestCaseGenerator(GeneratorOptions(max_node_visits=1))
        assert len(generator.generate(login_result)) == 1
    
    def test_partial_graph_from_lenient_parse(self, lenient_parser):
        result = lenient_parser.parse("flowchart TD\nA((Start)) --> B[Work]\nB --> C\nB --> D((End))")
        test_cases = FlowchartTestCaseGenerator().generate(result)
        
        assert [tc.node_path for tc in test_cases] == [["A", "B", "D"]]
    
    def test_no_nodes_no_cases(self, lenient_parser):
        result = lenient_parser.parse("not a flowchart")
        assert FlowchartTestCaseGenerator().generate(result) == []
