"""Configuration classes for JSX element insertion.

This module provides configuration objects for the element builder, the
position resolver and global logging behaviour, plus an immutable
:class:`InserterConfig` that groups them and supports overrides, presets and
JSON round-tripping.
"""

import json
from dataclasses import dataclass, field, replace
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

DEFAULT_SELF_CLOSING_TAGS: FrozenSet[str] = frozenset(
    {"img", "input", "br", "hr", "meta", "link"}
)

_VALID_LOGGING_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
_COMPONENT_FIELDS = ["builder", "resolver", "global_"]


@dataclass
class BuilderConfig:
    """Configuration for building elements from structured descriptions."""

    self_closing_tags: FrozenSet[str] = DEFAULT_SELF_CLOSING_TAGS
    json_separators: Tuple[str, str] = (",", ":")
    json_ensure_ascii: bool = False
    skip_empty_text: bool = True

    def __post_init__(self) -> None:
        """Validate builder configuration."""
        self.self_closing_tags = frozenset(self.self_closing_tags)
        self.json_separators = tuple(self.json_separators)  # type: ignore[assignment]
        if not self.self_closing_tags:
            raise ValueError("self_closing_tags must not be empty")
        for tag in self.self_closing_tags:
            if not tag or tag != tag.lower():
                raise ValueError("self_closing_tags must be non-empty lower-case names")
        if len(self.json_separators) != 2:
            raise ValueError("json_separators must be a pair of strings")

    def is_self_closing(self, tag_name: str) -> bool:
        """Check whether a tag name is rendered as an opening-only element."""
        return tag_name.lower() in self.self_closing_tags


@dataclass
class ResolverConfig:
    """Configuration for resolving and applying insertion positions."""

    record_diagnostics: bool = True
    report_clamped_index: bool = False


@dataclass
class GlobalConfig:
    """Global configuration settings that apply across all components."""

    logging_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    enable_correlation_tracking: bool = True

    def __post_init__(self) -> None:
        """Validate global configuration."""
        if self.logging_level not in _VALID_LOGGING_LEVELS:
            raise ValueError(f"logging_level must be one of {_VALID_LOGGING_LEVELS}")


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
class InserterConfig:
    """Complete configuration for element building and insertion.

    Instances are immutable; use :meth:`override` to derive a modified copy.
    """

    builder: BuilderConfig = field(default_factory=BuilderConfig)
    resolver: ResolverConfig = field(default_factory=ResolverConfig)
    global_: GlobalConfig = field(default_factory=GlobalConfig)

    version: str = "1.0.0"
    name: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the complete configuration."""
        try:
            self.builder.__post_init__()
            self.global_.__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

    def override(self, **kwargs: Any) -> "InserterConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Keyword arguments for configuration fields to override,
                using ``component__field`` for nested fields

        Returns:
            New InserterConfig instance with overrides applied

        Example:
            >>> config = InserterConfig()
            >>> new_config = config.override(
            ...     resolver__report_clamped_index=True,
            ...     global___logging_level="DEBUG"
            ... )
        """
        nested_overrides: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if key.startswith("global___"):
                component, field_name = "global_", key[len("global___"):]
            elif "__" in key:
                component, field_name = key.split("__", 1)
            else:
                nested_overrides[key] = value
                continue
            if component not in _COMPONENT_FIELDS:
                raise ConfigValidationError(
                    f"Unknown configuration component: {component}",
                    field_name=key,
                    suggestions=[f"Use one of {_COMPONENT_FIELDS}"],
                )
            nested_overrides.setdefault(component, {})[field_name] = value

        new_fields: Dict[str, Any] = {}
        for key, value in nested_overrides.items():
            if key in _COMPONENT_FIELDS and isinstance(value, dict):
                try:
                    new_fields[key] = replace(getattr(self, key), **value)
                except (TypeError, ValueError) as e:
                    raise ConfigValidationError(str(e), field_name=key) from e
            else:
                new_fields[key] = value

        return replace(self, **new_fields)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return {
            "builder": {
                "self_closing_tags": sorted(self.builder.self_closing_tags),
                "json_separators": list(self.builder.json_separators),
                "json_ensure_ascii": self.builder.json_ensure_ascii,
                "skip_empty_text": self.builder.skip_empty_text,
            },
            "resolver": {
                "record_diagnostics": self.resolver.record_diagnostics,
                "report_clamped_index": self.resolver.report_clamped_index,
            },
            "global_": {
                "logging_level": self.global_.logging_level,
                "enable_correlation_tracking": self.global_.enable_correlation_tracking,
            },
            "version": self.version,
            "name": self.name,
            "description": self.description,
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InserterConfig":
        """Create configuration from dictionary.

        Missing sections and fields keep their defaults.
        """
        component_classes = {
            "builder": BuilderConfig,
            "resolver": ResolverConfig,
            "global_": GlobalConfig,
        }
        values: Dict[str, Any] = {}
        try:
            for key, value in data.items():
                if key in component_classes:
                    if not isinstance(value, dict):
                        raise ConfigValidationError(
                            f"Section '{key}' must be an object", field_name=key
                        )
                    values[key] = component_classes[key](**value)
                elif key in ("version", "name", "description"):
                    values[key] = value
                else:
                    raise ConfigValidationError(
                        f"Unknown configuration key: {key}", field_name=key
                    )
            return cls(**values)
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e

    @classmethod
    def from_json(cls, json_str: str) -> "InserterConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)

    # Preset factory methods
    @classmethod
    def default(cls) -> "InserterConfig":
        """Create the default configuration."""
        return cls(name="default")

    @classmethod
    def strict(cls) -> "InserterConfig":
        """Create a configuration that reports every silent fallback."""
        return cls(
            resolver=ResolverConfig(record_diagnostics=True, report_clamped_index=True),
            global_=GlobalConfig(logging_level="DEBUG"),
            name="strict",
            description="Report clamped indexes and log at debug level",
        )

    @classmethod
    def quiet(cls) -> "InserterConfig":
        """Create a configuration that keeps results free of diagnostics."""
        return cls(
            resolver=ResolverConfig(record_diagnostics=False),
            global_=GlobalConfig(logging_level="WARNING"),
            name="quiet",
            description="No diagnostics on results, warnings and above in logs",
        )
