"""Configuration classes for the XML editor.

This module provides configuration objects for every processing component:
the byte-pair codec, the verifier, the formatter and minifier, the JSON
emitter and the follower-graph renderer. Component configurations validate
themselves on construction; :class:`EditorConfig` bundles them immutably.
"""

import json
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

# Replacement symbols of the codec occupy the upper half of the byte range
MAX_DICTIONARY_ENTRIES = 128
FIRST_REPLACEMENT_BYTE = 128

_BYTE_ORDER_PREFIXES = {"native": "=", "little": "<", "big": ">"}

_COMPONENT_FIELDS = ("codec", "verifier", "formatter", "minifier", "json_output", "graph", "global_")


@dataclass
class CodecConfig:
    """Configuration for the byte-pair-encoding codec."""

    max_dictionary_entries: int = MAX_DICTIONARY_ENTRIES
    header_byte_order: str = "native"  # native, little, big

    def __post_init__(self) -> None:
        """Validate codec configuration."""
        if not (0 <= self.max_dictionary_entries <= MAX_DICTIONARY_ENTRIES):
            raise ValueError(
                f"max_dictionary_entries must be between 0 and {MAX_DICTIONARY_ENTRIES}"
            )
        if self.header_byte_order not in _BYTE_ORDER_PREFIXES:
            raise ValueError(
                f"header_byte_order must be one of {sorted(_BYTE_ORDER_PREFIXES)}"
            )

    @property
    def struct_prefix(self) -> str:
        """``struct`` byte-order prefix for the header count field."""
        return _BYTE_ORDER_PREFIXES[self.header_byte_order]


@dataclass
class VerifierConfig:
    """Configuration for structural verification."""

    fail_fast: bool = False


@dataclass
class FormatterConfig:
    """Configuration for pretty-printing."""

    indent: str = "  "

    def __post_init__(self) -> None:
        """Validate formatter configuration."""
        if self.indent.strip(" \t"):
            raise ValueError("indent must contain only spaces or tabs")


@dataclass
class MinifierConfig:
    """Configuration for minification."""

    preserve_tag_spacing: bool = False


@dataclass
class JsonConfig:
    """Configuration for XML to JSON conversion."""

    indent: Optional[int] = 4
    ensure_ascii: bool = False

    def __post_init__(self) -> None:
        """Validate JSON configuration."""
        if self.indent is not None and self.indent < 0:
            raise ValueError("indent must be >= 0 or None")


@dataclass
class GraphConfig:
    """Configuration for follower-graph export and rendering."""

    dot_executable: str = "dot"
    image_format: str = "jpg"
    graph_name: str = "SocialNetwork"
    render_timeout_seconds: float = 60.0

    def __post_init__(self) -> None:
        """Validate graph configuration."""
        if not self.dot_executable:
            raise ValueError("dot_executable cannot be empty")
        if not self.image_format.isalnum():
            raise ValueError("image_format must be alphanumeric (e.g. 'jpg', 'png')")
        if not self.graph_name.isidentifier():
            raise ValueError("graph_name must be a valid DOT identifier")
        if self.render_timeout_seconds <= 0:
            raise ValueError("render_timeout_seconds must be > 0")


@dataclass
class GlobalConfig:
    """Global settings that apply across all components."""

    logging_level: str = "WARNING"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    enable_profiling: bool = False

    def __post_init__(self) -> None:
        """Validate global configuration."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.logging_level not in valid_levels:
            raise ValueError(f"logging_level must be one of {valid_levels}")


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
class EditorConfig:
    """Complete configuration for all editor components.

    Immutable: use :meth:`override` to derive a modified copy.
    """

    codec: CodecConfig = field(default_factory=CodecConfig)
    verifier: VerifierConfig = field(default_factory=VerifierConfig)
    formatter: FormatterConfig = field(default_factory=FormatterConfig)
    minifier: MinifierConfig = field(default_factory=MinifierConfig)
    json_output: JsonConfig = field(default_factory=JsonConfig)
    graph: GraphConfig = field(default_factory=GraphConfig)
    global_: GlobalConfig = field(default_factory=GlobalConfig)

    name: Optional[str] = None

    def __post_init__(self) -> None:
        """Re-run component validation, reporting failures uniformly."""
        try:
            for field_name in _COMPONENT_FIELDS:
                component = getattr(self, field_name)
                post_init = getattr(component, "__post_init__", None)
                if post_init is not None:
                    post_init()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

    def override(self, **kwargs: Any) -> "EditorConfig":
        """Create a new configuration with specific overrides.

        Example:
            >>> config = EditorConfig()
            >>> config.override(formatter__indent="    ").formatter.indent
            '    '
        """
        nested_overrides: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                component, field_name = key.split("__", 1)
                nested_overrides.setdefault(component, {})[field_name] = value
            else:
                nested_overrides[key] = value

        new_fields: Dict[str, Any] = {}
        try:
            for key, value in nested_overrides.items():
                if key in _COMPONENT_FIELDS and isinstance(value, dict):
                    new_fields[key] = replace(getattr(self, key), **value)
                else:
                    new_fields[key] = value
            return replace(self, **new_fields)
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a JSON-compatible dictionary."""
        def _dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, "__dataclass_fields__"):
                return {
                    name: _dataclass_to_dict(getattr(obj, name))
                    for name in obj.__dataclass_fields__
                }
            if isinstance(obj, Enum):
                return obj.name
            return obj

        return _dataclass_to_dict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EditorConfig":
        """Create configuration from dictionary.

        Unknown top-level or component keys are rejected so that typos in a
        configuration file do not pass silently.
        """
        field_values: Dict[str, Any] = {}
        for key, value in data.items():
            if key not in cls.__dataclass_fields__:
                raise ConfigValidationError(
                    f"Unknown configuration section: {key}",
                    field_name=key,
                    suggestions=list(cls.__dataclass_fields__),
                )
            field_type = cls.__dataclass_fields__[key].type
            if hasattr(field_type, "__dataclass_fields__"):
                if not isinstance(value, dict):
                    raise ConfigValidationError(
                        f"Section '{key}' must be an object", field_name=key
                    )
                unknown = set(value) - set(field_type.__dataclass_fields__)
                if unknown:
                    raise ConfigValidationError(
                        f"Unknown fields in section '{key}': {sorted(unknown)}",
                        field_name=key,
                        suggestions=list(field_type.__dataclass_fields__),
                    )
                try:
                    field_values[key] = field_type(**value)
                except ValueError as e:
                    raise ConfigValidationError(str(e), field_name=key) from e
            else:
                field_values[key] = value
        return cls(**field_values)

    @classmethod
    def from_json(cls, json_str: str) -> "EditorConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "EditorConfig":
        """Load configuration from a JSON file."""
        config_path = Path(path)
        try:
            content = config_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Could not read config file {config_path}: {e}") from e
        return cls.from_json(content)
