"""
Parser option models for diagram parsing.
"""

from typing import Any, Dict

from pydantic import Field, ValidationError, field_validator

from ...shared.config.settings import get_settings
from ...shared.exceptions import ConfigurationError, ParseError
from ...shared.models.base import BaseModel
from ...shared.models import Direction, EdgeStyle, NodeShape, NodeStyle
from .validators import validate_style_colors


class ParserOptions(BaseModel):
    """Options controlling how a flowchart is parsed."""
    
    strict_mode: bool = Field(default=True, description="Raise on the first error instead of collecting diagnostics")
    default_direction: Direction = Field(default=Direction.TD, description="Direction reported before a header is read")
    validate_connections: bool = Field(default=True, description="Check edge endpoints and start/end presence")
    allow_undefined_nodes: bool = Field(default=False, description="Create implicit nodes for bare, undeclared endpoints")
    default_node_shape: NodeShape = Field(default=NodeShape.SQUARE, description="Shape given to implicit nodes")
    default_node_style: NodeStyle = Field(default_factory=NodeStyle, description="Base style merged under type styles")
    default_edge_style: EdgeStyle = Field(default_factory=EdgeStyle, description="Base style merged under label styles")
    max_node_id_length: int = Field(default=50, ge=1, description="Maximum endpoint id length for edge validation")
    
    @field_validator('default_node_style', 'default_edge_style')
    @classmethod
    def validate_style(cls, v):
        """Reject malformed colour values."""
        try:
            validate_style_colors(v.model_dump())
        except ParseError as e:
            raise ValueError(str(e)) from e
        return v
    
    @classmethod
    def from_settings(cls, **overrides: Any) -> "ParserOptions":
        """
        Build options from the application settings, then apply overrides.

        Raises:
            ConfigurationError: If the combined values are invalid
        """
        values: Dict[str, Any] = dict(get_settings().parser_config)
        values.update(overrides)
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid {cls.__name__}: {e}") from e
