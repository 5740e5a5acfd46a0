"""
Flowchart test case generator: path exploration followed by synthesis.
"""

from typing import List, Optional

from ...shared import get_logger
from ...shared.models import ParseResult, TestCase
from .explorer import PathExplorer
from .models import GeneratorOptions
from .synthesizer import EdgeIndex, TestCaseSynthesizer

logger = get_logger(__name__)


class FlowchartTestCaseGenerator:
    """Generates one test case per execution path of a parsed flowchart."""
    
    def __init__(self, options: Optional[GeneratorOptions] = None):
        self.options = options or GeneratorOptions()
        self.explorer = PathExplorer(max_visits=self.options.max_node_visits)
        self.synthesizer = TestCaseSynthesizer(self.options)
    
    def generate(self, result: ParseResult) -> List[TestCase]:
        """
        Generate test cases for every entry node.
        
        Ids are numbered consecutively across roots, in root declaration
        order and then in path order within each root.
        
        Args:
            result: Parsed flowchart; a partial graph from a lenient parse is accepted
            
        Returns:
            Ordered list of test cases
        """
        if not result.is_valid:
            logger.warning(
                f"Generating test cases from a flowchart with {len(result.errors)} error(s)"
            )
        
        edges = EdgeIndex(result.edges)
        test_cases: List[TestCase] = []
        
        for root, paths in self.explorer.explore(result):
            for path in paths:
                test_cases.append(self.synthesizer.synthesize(path, edges, len(test_cases) + 1))
            logger.debug(f"Root '{root}': {len(paths)} test case(s)")
        
        logger.info(f"Generated {len(test_cases)} test cases from {len(result.nodes)} nodes")
        return test_cases
