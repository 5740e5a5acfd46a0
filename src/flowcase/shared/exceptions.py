"""
Common exceptions for flowcase.
"""

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models.diagnostics import Diagnostic

__all__ = [
    "ErrorCode",
    "Severity",
    "FlowcaseError",
    "ConfigurationError",
    "ParseError",
    "GenerationError",
    "RenderError",
]


class ErrorCode(str, Enum):
    """Diagnostic codes reported while parsing a flowchart."""
    INVALID_SYNTAX = "E001"
    UNDEFINED_NODE = "E002"
    INVALID_EDGE = "E003"
    INVALID_SHAPE = "E004"
    INVALID_STYLE = "E005"
    INVALID_DIRECTION = "E006"


class Severity(str, Enum):
    """Diagnostic severity."""
    ERROR = "error"
    WARNING = "warning"


class FlowcaseError(Exception):
    """Base exception for all flowcase errors."""
    pass


class ConfigurationError(FlowcaseError):
    """Raised when there are configuration issues."""
    pass


class ParseError(FlowcaseError):
    """
    Raised when a flowchart cannot be parsed.
    
    Wraps a single diagnostic so callers can read the code, message
    and position of the failure.
    """
    
    def __init__(self, diagnostic: "Diagnostic"):
        super().__init__(diagnostic.message)
        self.diagnostic = diagnostic
    
    @classmethod
    def create(cls, line: int, column: int, code: ErrorCode, message: str,
               severity: Severity = Severity.ERROR) -> "ParseError":
        """Build the exception together with its diagnostic."""
        from .models.diagnostics import Diagnostic
        
        return cls(Diagnostic(
            line=line,
            column=column,
            code=code,
            message=message,
            severity=severity,
        ))
    
    @property
    def code(self) -> str:
        return self.diagnostic.code
    
    @property
    def line(self) -> int:
        return self.diagnostic.line
    
    @property
    def column(self) -> int:
        return self.diagnostic.column
    
    @property
    def severity(self) -> str:
        return self.diagnostic.severity
    
    @property
    def message(self) -> str:
        return self.diagnostic.message
    
    def __str__(self) -> str:
        return str(self.diagnostic)


class GenerationError(FlowcaseError):
    """Raised when test case generation fails."""
    pass


class RenderError(FlowcaseError):
    """Raised when rendering or saving test cases fails."""
    pass
