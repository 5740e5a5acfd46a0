"""
Option models for test case generation.
"""

from typing import Any, Dict, List

from pydantic import Field, ValidationError, field_validator

from ...shared.config.settings import DEFAULT_PRIORITY_RULES, get_settings
from ...shared.exceptions import ConfigurationError
from ...shared.models.base import BaseModel
from ...shared.models import Priority

MAX_NODE_VISITS = 2


class GeneratorOptions(BaseModel):
    """Options controlling path exploration and test case synthesis."""
    
    id_prefix: str = Field(default="FLOW", description="Prefix for test case ids")
    priority_rules: Dict[Priority, List[str]] = Field(
        default_factory=lambda: {Priority(tier): list(words) for tier, words in DEFAULT_PRIORITY_RULES.items()},
        description="Priority tier -> trigger keywords",
    )
    default_priority: Priority = Field(default=Priority.MEDIUM, description="Priority when no keyword matches")
    max_node_visits: int = Field(default=MAX_NODE_VISITS, ge=1, description="Visits allowed per node per traversal root")
    
    @field_validator('id_prefix')
    @classmethod
    def validate_id_prefix(cls, v):
        if not v or not v.strip():
            raise ValueError("ID prefix cannot be empty")
        return v.strip()
    
    @property
    def ordered_rules(self) -> List[tuple]:
        """(tier, keywords) pairs, highest tier first."""
        rules = {Priority(tier): keywords for tier, keywords in self.priority_rules.items()}
        return [(tier, rules.get(tier, [])) for tier in Priority]
    
    @classmethod
    def from_settings(cls, **overrides: Any) -> "GeneratorOptions":
        """Build options from the application settings, then apply overrides."""
        values: Dict[str, Any] = dict(get_settings().generator_config)
        values.update(overrides)
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid {cls.__name__}: {e}") from e
