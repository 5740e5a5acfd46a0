"""
Shared components for flowcase.

Contains the common models, configuration, exception hierarchy and
monitoring infrastructure used by the parsing and generation services.
"""

from .models import *
from .config import *
from .exceptions import *
from .infrastructure import *

__all__ = [
    # From models
    "BaseModel", "FrozenModel", "Diagnostic",
    "Direction", "NodeShape", "NodeType", "EdgeLineType",
    "NodeStyle", "EdgeStyle", "Node", "Edge", "ParseResult", "NODE_ID_PATTERN",
    "Priority", "FlowPath", "TestCase",
    
    # From config
    "Settings", "get_settings",
    
    # From exceptions
    "ErrorCode", "Severity", "FlowcaseError", "ConfigurationError",
    "ParseError", "GenerationError", "RenderError",
    
    # From infrastructure
    "get_logger", "setup_logging", "MetricsCollector", "get_metrics", "timed_operation",
]
