"""
Test case generation for flowcase.

Turns a parsed flowchart into end-to-end test cases:
- PathExplorer enumerates bounded execution paths per entry node
- TestCaseSynthesizer derives priority, steps and expectations per path
- MarkdownTestCaseGenerator renders the result
- TestCaseGenerationService ties parsing, generation and export together
"""

from .models import GeneratorOptions, MAX_NODE_VISITS
from .explorer import PathExplorer, enumerate_paths, find_entry_nodes, is_terminal, order_paths
from .synthesizer import TestCaseSynthesizer, EdgeIndex, STEP_TEMPLATES
from .generator import FlowchartTestCaseGenerator
from .markdown import MarkdownTestCaseGenerator
from .service import TestCaseGenerationService

__all__ = [
    "GeneratorOptions",
    "MAX_NODE_VISITS",
    "PathExplorer",
    "enumerate_paths",
    "find_entry_nodes",
    "is_terminal",
    "order_paths",
    "TestCaseSynthesizer",
    "EdgeIndex",
    "STEP_TEMPLATES",
    "FlowchartTestCaseGenerator",
    "MarkdownTestCaseGenerator",
    "TestCaseGenerationService",
]
