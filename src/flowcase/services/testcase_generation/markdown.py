"""
Markdown rendering for generated test cases.
"""

from pathlib import Path
from typing import List, Optional, Sequence, Union

from ...shared import RenderError, TestCase, get_logger, get_settings

logger = get_logger(__name__)


class MarkdownTestCaseGenerator:
    """Renders test cases as Markdown documents."""
    
    __test__ = False
    
    def __init__(self, header: Optional[str] = None, separator: Optional[str] = None):
        settings = get_settings()
        self.header = settings.markdown_file_header if header is None else header
        self.separator = settings.markdown_separator if separator is None else separator
    
    def format_test_case(self, test_case: TestCase) -> str:
        """Render one test case."""
        lines: List[str] = [
            f"# {test_case.id}: {test_case.title}",
            "",
            f"**Priority**: {test_case.priority}",
            "",
            "## Description",
            "",
            test_case.description,
            "",
            "## Preconditions",
            "",
        ]
        lines.extend(f"- {condition}" for condition in test_case.preconditions)
        lines.extend(["", "## Test Steps", ""])
        lines.extend(f"{number}. {step}" for number, step in enumerate(test_case.steps, start=1))
        lines.extend(["", "## Expected Results", ""])
        lines.extend(f"- {result}" for result in test_case.expected_results)
        
        return "\n".join(lines) + "\n"
    
    def format_test_cases(self, test_cases: Sequence[TestCase], include_header: bool = True) -> str:
        """Render several test cases separated by horizontal rules."""
        sections = [self.format_test_case(tc).rstrip("\n") for tc in test_cases]
        body = f"\n\n{self.separator}\n\n".join(sections)
        
        if include_header and self.header:
            body = f"{self.header}\n\n{body}" if body else self.header
        
        return body + "\n"
    
    def save_to_file(self, test_cases: Sequence[TestCase], file_path: Union[str, Path]) -> Path:
        """
        Write the rendered test cases to ``file_path``.
        
        Parent directories are created as needed.
        
        Returns:
            The path written
            
        Raises:
            RenderError: If the file cannot be written
        """
        path = Path(file_path)
        content = self.format_test_cases(test_cases)
        
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', encoding='utf-8') as f:
                f.write(content)
        except OSError as e:
            raise RenderError(f"Failed to write test cases to {path}: {e}") from e
        
        logger.info(f"Saved {len(test_cases)} test cases to {path}")
        return path
