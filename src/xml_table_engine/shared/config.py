"""Configuration classes for the XML table engine.

Configuration is immutable: components receive an ``EngineConfig`` at
construction and never mutate it. Use ``EngineConfig.override`` to derive a
variant.
"""

import json
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, List, Optional

# Element and attribute names of the table markup
DEFAULT_TABLE_TAG = "table"
DEFAULT_ROW_TAG = "row"
DEFAULT_CELL_TAG = "cell"
DEFAULT_NAME_ATTRIBUTE = "name"
DEFAULT_PLACEHOLDER_PREFIX = "Column_"

DEFAULT_INDENT_WIDTH = 4
DEFAULT_ENCODING = "utf-8"

XML_DECLARATION_MODES = ("preserve", "always", "never")
LOGGING_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


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
class LayoutConfig:
    """Names that identify table, row and cell elements in a document."""

    table_tag: str = DEFAULT_TABLE_TAG
    row_tag: str = DEFAULT_ROW_TAG
    cell_tag: str = DEFAULT_CELL_TAG
    name_attribute: str = DEFAULT_NAME_ATTRIBUTE
    placeholder_prefix: str = DEFAULT_PLACEHOLDER_PREFIX

    def __post_init__(self) -> None:
        """Validate layout configuration."""
        for name in ("table_tag", "row_tag", "cell_tag", "name_attribute"):
            value = getattr(self, name)
            if not value or any(ch.isspace() for ch in value):
                raise ConfigValidationError(
                    f"{name} must be a non-empty name without whitespace",
                    field_name=name
                )
        tags = {self.table_tag, self.row_tag, self.cell_tag}
        if len(tags) != 3:
            raise ConfigValidationError(
                "table_tag, row_tag and cell_tag must be distinct",
                suggestions=["Use different element names for each level"]
            )
        if not self.placeholder_prefix:
            raise ConfigValidationError(
                "placeholder_prefix cannot be empty", field_name="placeholder_prefix"
            )


@dataclass(frozen=True)
class OutputConfig:
    """Serialization settings used when a document is saved."""

    indent_width: int = DEFAULT_INDENT_WIDTH
    encoding: str = DEFAULT_ENCODING
    xml_declaration: str = "preserve"  # preserve, always, never
    atomic_save: bool = True

    def __post_init__(self) -> None:
        """Validate output configuration."""
        if self.indent_width < 0:
            raise ConfigValidationError("indent_width must be >= 0", field_name="indent_width")
        if self.xml_declaration not in XML_DECLARATION_MODES:
            raise ConfigValidationError(
                f"xml_declaration must be one of {list(XML_DECLARATION_MODES)}",
                field_name="xml_declaration"
            )
        try:
            "".encode(self.encoding)
        except LookupError as e:
            raise ConfigValidationError(
                f"Unknown encoding: {self.encoding}", field_name="encoding"
            ) from e


@dataclass(frozen=True)
class EngineConfig:
    """Complete configuration for a ``DocumentEngine``."""

    layout: LayoutConfig = field(default_factory=LayoutConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging_level: str = "INFO"

    def __post_init__(self) -> None:
        """Validate engine configuration."""
        if self.logging_level not in LOGGING_LEVELS:
            raise ConfigValidationError(
                f"logging_level must be one of {list(LOGGING_LEVELS)}",
                field_name="logging_level"
            )

    def override(self, **kwargs: Any) -> "EngineConfig":
        """Create a new configuration with specific overrides.

        Nested fields use double-underscore notation.

        Example:
            >>> config = EngineConfig().override(
            ...     layout__table_tag="sheet",
            ...     output__indent_width=2,
            ... )
        """
        nested_overrides: Dict[str, Dict[str, Any]] = {}
        top_level: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                component, field_name = key.split("__", 1)
                nested_overrides.setdefault(component, {})[field_name] = value
            else:
                top_level[key] = value

        for component, values in nested_overrides.items():
            if component not in ("layout", "output"):
                raise ConfigValidationError(
                    f"Unknown configuration component: {component}",
                    field_name=component
                )
            try:
                top_level[component] = replace(getattr(self, component), **values)
            except TypeError as e:
                raise ConfigValidationError(str(e), field_name=component) from e

        try:
            return replace(self, **top_level)
        except TypeError as e:
            raise ConfigValidationError(str(e)) from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a plain nested dictionary."""
        return {
            "layout": {f.name: getattr(self.layout, f.name) for f in fields(self.layout)},
            "output": {f.name: getattr(self.output, f.name) for f in fields(self.output)},
            "logging_level": self.logging_level,
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EngineConfig":
        """Create configuration from dictionary; missing keys keep defaults."""
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration data must be a JSON object")

        unknown = set(data) - {"layout", "output", "logging_level"}
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration keys: {sorted(unknown)}",
                suggestions=["Valid keys are 'layout', 'output' and 'logging_level'"]
            )

        try:
            layout = LayoutConfig(**data.get("layout", {}))
            output = OutputConfig(**data.get("output", {}))
        except TypeError as e:
            raise ConfigValidationError(str(e)) from e

        return cls(
            layout=layout,
            output=output,
            logging_level=data.get("logging_level", "INFO"),
        )

    @classmethod
    def from_json(cls, json_str: str) -> "EngineConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        return cls.from_dict(data)

    # Preset factory methods
    @classmethod
    def default(cls) -> "EngineConfig":
        """Default configuration: 4-space indent, atomic saves."""
        return cls()

    @classmethod
    def compact_output(cls) -> "EngineConfig":
        """Preset writing 2-space indented output without an XML declaration."""
        return cls(output=OutputConfig(indent_width=2, xml_declaration="never"))
