"""
Centralized configuration management for flowcase.

All environment variables and settings are managed here so the parser,
the test case generator and the CLI share one source of defaults.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


DEFAULT_PRIORITY_RULES: Dict[str, List[str]] = {
    "Critical": ["authentication", "login", "security", "database", "payment"],
    "High": ["registration", "register", "update", "delete", "upload"],
    "Medium": ["display", "search", "list"],
    "Low": ["settings", "help", "notification"],
}

VALID_DIRECTIONS = ("TB", "TD", "BT", "LR", "RL")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """
    Centralized settings for flowcase.
    
    All configuration is loaded from environment variables prefixed with
    ``FLOWCASE_`` (or a ``.env`` file) with sensible defaults.
    """
    
    # --- application ---
    app_name: str = Field(default="flowcase", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    log_level: str = Field(default="INFO", description="Level name for the flowcase logger")
    log_file: str = Field(default="", description="Optional log file path")
    
    # --- parser ---
    strict_mode: bool = Field(default=True, description="Abort parsing on the first error")
    validate_connections: bool = Field(default=True, description="Check that edges reference declared nodes")
    allow_undefined_nodes: bool = Field(default=False, description="Create implicit nodes for undeclared edge endpoints")
    default_direction: str = Field(default="TD", description="Direction used before a header is read")
    max_node_id_length: int = Field(default=50, ge=1, description="Maximum node id length accepted by edge validation")
    
    # --- generator ---
    max_node_visits: int = Field(default=2, ge=1, description="Maximum visits of one node per traversal root")
    test_case_id_prefix: str = Field(default="FLOW", description="Prefix for generated test case ids")
    priority_rules: Dict[str, List[str]] = Field(
        default_factory=lambda: {tier: list(words) for tier, words in DEFAULT_PRIORITY_RULES.items()},
        description="Priority tier -> trigger keywords",
    )
    
    # --- output ---
    output_dir: Path = Field(default=Path("docs/testcases"), description="Directory for generated Markdown")
    markdown_file_header: str = Field(
        default="# Test Case List\n\nThis document is generated automatically.",
        description="Header written at the top of generated Markdown files",
    )
    markdown_separator: str = Field(default="---", description="Separator between rendered test cases")
    
    # --- monitoring ---
    enable_metrics: bool = Field(default=True, description="Record parse and generation metrics")
    metrics_max_history: int = Field(default=1000, ge=1, description="Samples kept per metric")
    
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "FLOWCASE_",
        "case_sensitive": False,
        "extra": "ignore",
    }
    
    @property
    def logging_config(self) -> Dict[str, Any]:
        """Level, optional file and record format for setup_logging."""
        return {
            'level': self.log_level,
            'file': self.log_file or None,
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        }
    
    @property
    def parser_config(self) -> Dict[str, Any]:
        """Get parser options as a dictionary."""
        return {
            'strict_mode': self.strict_mode,
            'validate_connections': self.validate_connections,
            'allow_undefined_nodes': self.allow_undefined_nodes,
            'default_direction': self.default_direction,
            'max_node_id_length': self.max_node_id_length,
        }
    
    @property
    def generator_config(self) -> Dict[str, Any]:
        """Get test case generator options as a dictionary."""
        return {
            'id_prefix': self.test_case_id_prefix,
            'priority_rules': self.priority_rules,
            'max_node_visits': self.max_node_visits,
        }
    
    @property
    def monitoring_config(self) -> Dict[str, Any]:
        """Switch and window size for the metrics collector."""
        return {
            'enabled': self.enable_metrics,
            'max_history': self.metrics_max_history,
        }
    
    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level {v!r}; expected one of {', '.join(LOG_LEVELS)}")
        return level
    
    @field_validator('default_direction')
    @classmethod
    def validate_default_direction(cls, v):
        if v.upper() not in VALID_DIRECTIONS:
            raise ValueError(f"Default direction must be one of {', '.join(VALID_DIRECTIONS)}")
        return v.upper()
    
    @field_validator('test_case_id_prefix')
    @classmethod
    def validate_prefix(cls, v):
        if not v or not v.strip():
            raise ValueError("Test case id prefix cannot be empty")
        return v.strip()
    
    @field_validator('priority_rules')
    @classmethod
    def validate_priority_rules(cls, v):
        unknown = set(v) - set(DEFAULT_PRIORITY_RULES)
        if unknown:
            raise ValueError(f"Unknown priority tiers: {sorted(unknown)}")
        return v


@lru_cache()
def get_settings() -> Settings:
    """Settings loaded once per process; call ``get_settings.cache_clear()`` to reload."""
    return Settings()
