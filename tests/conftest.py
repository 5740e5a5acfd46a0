"""
Shared fixtures for the flowcase test suite.
"""

import sys
from pathlib import Path

import pytest

# Add src to path so the suite runs without an editable install
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from flowcase.services.diagram_parsing import FlowchartParser  # noqa: E402
from flowcase.shared import get_metrics  # noqa: E402


LOGIN_FLOW = r"""flowchart TD
    A((Start)) --> B[/Enter credentials/]
    B --> C{Valid?}
    C -->|Yes| D[\Show dashboard\]
    C -->|No| E[Show error]
    E --> B
    D --> F((End))
"""

BRANCH_FLOW = r"""flowchart TD
    A((Start)) --> B{Valid?}
    B -->|Yes| C[\Welcome page\]
    B -->|No| D[Show error]
"""

# A short loop that comes back around, plus a longer straight branch
MIXED_FLOW = """flowchart LR
    A((Start)) --> B{Check}
    B --> A
    B --> T1[Done one]
    A --> L1[Step 1]
    L1 --> L2[Step 2]
    L2 --> L3[Step 3]
    L3 --> L4[Step 4]
    L4 --> T2[Done two]
"""


@pytest.fixture
def parser():
    return FlowchartParser()


@pytest.fixture
def lenient_parser():
    return FlowchartParser(strict_mode=False)


@pytest.fixture
def login_result(parser):
    return parser.parse(LOGIN_FLOW)


@pytest.fixture
def branch_result(parser):
    return parser.parse(BRANCH_FLOW)


@pytest.fixture
def mixed_result(parser):
    return parser.parse(MIXED_FLOW)


@pytest.fixture
def metrics():
    collector = get_metrics()
    collector.reset()
    yield collector
    collector.reset()


@pytest.fixture
def login_flow():
    return LOGIN_FLOW


@pytest.fixture
def branch_flow():
    return BRANCH_FLOW
