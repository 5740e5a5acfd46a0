"""
flowcase - Flowchart-driven end-to-end test case generation.
"""

__version__ = "1.0.0"
__author__ = "flowcase Team"

# Re-export main components for easy access
from .shared.config.settings import get_settings
from .shared.models import Node, Edge, ParseResult, FlowPath, TestCase, Priority
from .shared.exceptions import FlowcaseError, ParseError, GenerationError
from .services.diagram_parsing import FlowchartParser, ParserOptions
from .services.testcase_generation import TestCaseGenerationService, GeneratorOptions

__all__ = [
    "get_settings",
    "Node",
    "Edge",
    "ParseResult",
    "FlowPath",
    "TestCase",
    "Priority",
    "FlowcaseError",
    "ParseError",
    "GenerationError",
    "FlowchartParser",
    "ParserOptions",
    "TestCaseGenerationService",
    "GeneratorOptions",
]
