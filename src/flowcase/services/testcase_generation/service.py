"""
Test Case Generation Service implementation.

Ties the flowchart parser, the path explorer, the test case synthesizer
and the Markdown renderer together behind one entry point.
"""

import time
from pathlib import Path
from typing import List, Optional, Union

from ...shared import (
    get_logger, get_metrics, get_settings, timed_operation,
    ParseResult, TestCase, FlowcaseError, GenerationError, ParseError,
)
from ..diagram_parsing import FlowchartParser, ParserOptions
from .generator import FlowchartTestCaseGenerator
from .markdown import MarkdownTestCaseGenerator
from .models import GeneratorOptions

SUPPORTED_EXTENSIONS = (".mmd",)


class TestCaseGenerationService:
    """
    Service for turning flowcharts into test cases.
    
    Provides a high-level interface over parsing, path exploration and
    synthesis, with logging and metrics around each run.
    """
    
    __test__ = False
    
    def __init__(self,
                 parser_options: Optional[ParserOptions] = None,
                 generator_options: Optional[GeneratorOptions] = None,
                 renderer: Optional[MarkdownTestCaseGenerator] = None):
        """Initialize the service."""
        self.logger = get_logger(__name__)
        self.metrics = get_metrics()
        self.settings = get_settings()
        
        self.parser = FlowchartParser(parser_options or ParserOptions.from_settings())
        self.generator = FlowchartTestCaseGenerator(generator_options or GeneratorOptions.from_settings())
        self.renderer = renderer or MarkdownTestCaseGenerator()
        
        self.logger.info("Test Case Generation Service initialized")
    
    def parse(self, content: str, strict: Optional[bool] = None) -> ParseResult:
        """Parse flowchart text with the configured parser."""
        return self.parser.parse(content, strict=strict)
    
    def generate(self, result: ParseResult) -> List[TestCase]:
        """
        Generate test cases from a parsed flowchart.
        
        Args:
            result: Parsed flowchart
            
        Returns:
            Ordered list of test cases
            
        Raises:
            GenerationError: If path exploration or synthesis fails
        """
        start_time = time.time()
        
        try:
            test_cases = self.generator.generate(result)
        except FlowcaseError:
            raise
        except (KeyError, ValueError) as e:
            self.logger.error(f"Test case generation failed: {e}")
            raise GenerationError(f"Test case generation failed: {e}") from e
        
        self.metrics.record_generation(time.time() - start_time, len(test_cases), len(test_cases))
        return test_cases
    
    def generate_from_text(self, content: str, strict: Optional[bool] = None) -> List[TestCase]:
        """Parse flowchart text and generate its test cases."""
        return self.generate(self.parse(content, strict=strict))
    
    def generate_from_file(self, file_path: Union[str, Path],
                           strict: Optional[bool] = None) -> List[TestCase]:
        """
        Read a ``.mmd`` file and generate its test cases.
        
        Raises:
            GenerationError: If the file is missing, unreadable or not a ``.mmd`` file
            ParseError: In strict mode, if the flowchart is malformed
        """
        path = Path(file_path)
        
        if path.suffix.lower() not in SUPPORTED_EXTENSIONS:
            raise GenerationError(
                f"Unsupported file type: {path.suffix or '(none)'}. "
                f"Supported: {', '.join(SUPPORTED_EXTENSIONS)}"
            )
        if not path.is_file():
            raise GenerationError(f"Flowchart file not found: {path}")
        
        try:
            content = path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise GenerationError(f"Failed to read flowchart file {path}: {e}") from e
        
        self.logger.info(f"Generating test cases from {path}")
        try:
            return self.generate_from_text(content, strict=strict)
        except ParseError as e:
            self.logger.error(f"{path}: {e}")
            raise
    
    def default_output_path(self, source: Union[str, Path]) -> Path:
        """Markdown path for a flowchart file inside the configured output directory."""
        return Path(self.settings.output_dir) / f"{Path(source).stem}.md"
    
    @timed_operation("markdown_export_duration")
    def export_markdown(self, test_cases: List[TestCase],
                        output_path: Union[str, Path]) -> Path:
        """Render test cases to a Markdown file and return its path."""
        return self.renderer.save_to_file(test_cases, output_path)
