"""Configuration loading and management for javastyle.

This module provides configuration discovery and validation. Configuration
sources are merged in priority order:
    1. Defaults (defined in StyleConfig)
    2. Global config (~/.javastyle.toml)
    3. Project config (./javastyle.toml)
    4. Explicit config file
    5. Environment variables (JAVASTYLE_* prefix)
    6. CLI overrides (passed as kwargs)

The resulting StyleConfig is passed explicitly into the pipeline; there is
no process-wide settings object.

Example:
    >>> config = load_config(max_identifier_length=20)
    >>> config.max_identifier_length
    20
    >>> config.class_naming_style
    <NamingStyle.PASCAL_CASE: 'pascal_case'>
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError
from .format.naming import NamingStyle

Verbosity = Literal["quiet", "normal", "verbose"]

_NAMING_FIELDS = (
    "class_naming_style",
    "method_naming_style",
    "variable_naming_style",
    "constant_naming_style",
)


@dataclass(frozen=True)
class StyleConfig:
    """Rule parameters for one analysis run.

    Defaults follow the Oracle code conventions for Java.

    Attributes:
        Identifiers:
            min_identifier_length: Declared names shorter than this are too short
            max_identifier_length: Declared names longer than this are too long
            class_naming_style: Expected style of class, interface and enum names
            method_naming_style: Expected style of method and constructor names
            variable_naming_style: Expected style of fields, locals and parameters
            constant_naming_style: Expected style of static or final fields/variables

        Lines:
            max_line_length: Lines visually longer than this are too long

        Verdict:
            allowed_violations: Total violations a file may have and still pass

        Output control:
            verbosity: Logging verbosity level
    """

    # Identifiers
    min_identifier_length: int = 4
    max_identifier_length: int = 15
    class_naming_style: NamingStyle = NamingStyle.PASCAL_CASE
    method_naming_style: NamingStyle = NamingStyle.CAMEL_CASE
    variable_naming_style: NamingStyle = NamingStyle.CAMEL_CASE
    constant_naming_style: NamingStyle = NamingStyle.UPPERCASE_UNDERSCORE

    # Lines
    max_line_length: int = 100

    # Verdict
    allowed_violations: int = 0

    # Output control
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.min_identifier_length < 1:
            raise InvalidConfigError(
                "min_identifier_length", self.min_identifier_length, "must be at least 1"
            )
        if self.max_identifier_length < self.min_identifier_length:
            raise InvalidConfigError(
                "max_identifier_length",
                self.max_identifier_length,
                "must not be smaller than min_identifier_length",
            )
        for name in _NAMING_FIELDS:
            if not isinstance(getattr(self, name), NamingStyle):
                raise InvalidConfigError(name, getattr(self, name), "must be a NamingStyle")
        if self.max_line_length < 1:
            raise InvalidConfigError("max_line_length", self.max_line_length, "must be at least 1")
        if self.allowed_violations < 0:
            raise InvalidConfigError(
                "allowed_violations", self.allowed_violations, "must be non-negative"
            )
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError(
                "verbosity", self.verbosity, "expected one of quiet/normal/verbose"
            )


DEFAULT_CONFIG = StyleConfig()


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> StyleConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags); ``None``
            values are ignored so unset CLI options keep lower-priority values

    Returns:
        Validated StyleConfig instance

    Raises:
        ConfigurationError: If a config file is missing or unreadable
        InvalidConfigError: If a value is out of range or unknown
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / ".javastyle.toml"
    if global_config.exists():
        merged.update(_read_config_file(global_config, "global"))

    project_config = Path.cwd() / "javastyle.toml"
    if project_config.exists():
        merged.update(_read_config_file(project_config, "project"))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_read_config_file(config_file, "explicit"))

    merged.update(_load_env_vars())

    # Convert verbosity boolean flags to string
    if "verbose" in overrides:
        if overrides.pop("verbose"):
            overrides["verbosity"] = "verbose"
    if "quiet" in overrides:
        if overrides.pop("quiet"):
            overrides["verbosity"] = "quiet"

    merged.update({k: v for k, v in overrides.items() if v is not None})

    known = {f.name for f in fields(StyleConfig)}
    for key in merged:
        if key not in known:
            raise InvalidConfigError(key, merged[key], "unknown configuration key")

    for name in _NAMING_FIELDS:
        if name in merged:
            merged[name] = parse_naming_style(merged[name], name)

    return StyleConfig(**merged)


def parse_naming_style(value: Any, field_name: str = "naming_style") -> NamingStyle:
    """Accept a NamingStyle, its name (``PASCAL_CASE``) or its value (``pascal_case``)."""
    if isinstance(value, NamingStyle):
        return value
    if isinstance(value, str):
        text = value.strip()
        for style in NamingStyle:
            if text.upper() == style.name or text.lower() == style.value:
                return style
    choices = ", ".join(style.value for style in NamingStyle)
    raise InvalidConfigError(field_name, value, f"expected one of {choices}")


def _read_config_file(path: Path, origin: str) -> dict[str, Any]:
    try:
        data = _load_toml_file(path)
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(f"Invalid {origin} config '{path}': {e}")
    # Accept both a flat file and a [javastyle] table
    section = data.get("javastyle", data)
    if not isinstance(section, dict):
        raise ConfigurationError(f"Invalid {origin} config '{path}': [javastyle] must be a table")
    return dict(section)


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from JAVASTYLE_* environment variables.

    Supported environment variables:
        JAVASTYLE_MIN_IDENTIFIER_LENGTH: int
        JAVASTYLE_MAX_IDENTIFIER_LENGTH: int
        JAVASTYLE_CLASS_NAMING_STYLE: naming style name
        JAVASTYLE_METHOD_NAMING_STYLE: naming style name
        JAVASTYLE_VARIABLE_NAMING_STYLE: naming style name
        JAVASTYLE_CONSTANT_NAMING_STYLE: naming style name
        JAVASTYLE_MAX_LINE_LENGTH: int
        JAVASTYLE_ALLOWED_VIOLATIONS: int
        JAVASTYLE_VERBOSITY: quiet/normal/verbose

    Returns:
        Dict of field_name -> parsed_value for any JAVASTYLE_* vars found.
    """
    type_hints = get_type_hints(StyleConfig)

    result: dict[str, Any] = {}

    for config_field in fields(StyleConfig):
        env_key = f"JAVASTYLE_{config_field.name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(config_field.name)
        try:
            result[config_field.name] = _parse_env_value(env_value, type_hint, config_field.name)
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))

    return result


def _parse_env_value(value: str, type_hint: Any, field_name: str) -> Any:
    """Parse environment variable string to the correct type."""
    if type_hint is int:
        return int(value)
    if type_hint is NamingStyle:
        return parse_naming_style(value, field_name)
    # String (including Literal types like Verbosity)
    return value


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigurationError: If tomllib/tomli not available
        Exception: If TOML parsing fails
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
