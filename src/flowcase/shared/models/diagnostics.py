"""
Diagnostic records produced while parsing flowcharts.
"""

from pydantic import Field

from .base import FrozenModel
from ..exceptions import ErrorCode, Severity


class Diagnostic(FrozenModel):
    """A positioned parse error or warning."""
    
    line: int = Field(..., ge=0, description="1-based line number (0 when not tied to a line)")
    column: int = Field(..., ge=0, description="Column of the offending text")
    code: ErrorCode = Field(..., description="Diagnostic code (E001-E006)")
    message: str = Field(..., description="Human-readable description")
    severity: Severity = Field(default=Severity.ERROR, description="error or warning")
    
    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR
    
    def __str__(self) -> str:
        return (
            f"{self.severity.upper()} {self.code}: {self.message} "
            f"at line {self.line}, column {self.column}"
        )
