"""Configuration for XML node trees.

A single immutable ``TreeConfig`` controls logging and auditing behaviour for
every node in the process. ``configure()`` installs a new active
configuration; nodes and tools read it through ``get_config()``.
"""

import json
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, List, Optional

from xml_document_builder.shared.logging import set_package_level

VALID_LOGGING_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class TreeConfig:
    """Process-wide settings for node trees.

    Thread-safe to share due to the frozen dataclass implementation.
    """

    logging_level: str = "WARNING"
    enable_mutation_logging: bool = False
    correlation_id: Optional[str] = None
    validation_max_depth: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate tree configuration."""
        if self.logging_level not in VALID_LOGGING_LEVELS:
            raise ValueError(f"logging_level must be one of {VALID_LOGGING_LEVELS}")
        if not isinstance(self.enable_mutation_logging, bool):
            raise ValueError("enable_mutation_logging must be a bool")
        if self.validation_max_depth is not None and (
            isinstance(self.validation_max_depth, bool)
            or not isinstance(self.validation_max_depth, int)
            or self.validation_max_depth <= 0
        ):
            raise ValueError("validation_max_depth must be > 0 or None")

    def override(self, **kwargs: Any) -> "TreeConfig":
        """Create a new configuration with specific overrides.

        Example:
            >>> config = TreeConfig()
            >>> debug_config = config.override(logging_level="DEBUG")
        """
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TreeConfig":
        """Create configuration from dictionary.

        Raises:
            ConfigValidationError: If keys are unknown or values invalid
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration fields: {unknown}",
                field_name=unknown[0],
                suggestions=[f"Valid fields are {sorted(known)}"],
            )
        try:
            return cls(**data)
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

    @classmethod
    def from_json(cls, json_str: str) -> "TreeConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid JSON configuration: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("JSON configuration must be an object")
        return cls.from_dict(data)


_active_config = TreeConfig()
set_package_level(_active_config.logging_level)


def get_config() -> TreeConfig:
    """Return the active tree configuration."""
    return _active_config


def configure(config: Optional[TreeConfig] = None, **overrides: Any) -> TreeConfig:
    """Install a new active configuration.

    Args:
        config: Base configuration, defaults to the currently active one
        **overrides: Field overrides applied on top of ``config``

    Returns:
        The configuration now in effect
    """
    global _active_config

    new_config = config if config is not None else _active_config
    if overrides:
        new_config = new_config.override(**overrides)

    _active_config = new_config
    set_package_level(new_config.logging_level)
    return new_config


def reset_config() -> TreeConfig:
    """Restore the default configuration."""
    return configure(TreeConfig())
