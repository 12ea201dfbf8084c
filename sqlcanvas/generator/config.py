"""
Configuration types and structures for the SQL generator.
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any

import sqlglot

from .exceptions import ConfigurationError


class AliasStyle(Enum):
    """How table aliases are synthesized when the user did not declare one."""

    PREFIX = "prefix"  # first characters of the table name
    WORDS = "words"  # initials of the words in the table name


@dataclass
class GeneratorConfig:
    """Configuration for the SQL generator."""

    # sqlglot dialect used when validating output
    dialect: str = "tsql"

    # Schema used for tables that do not declare one
    default_schema: str = "dbo"

    # Alias synthesis
    alias_style: AliasStyle = AliasStyle.PREFIX
    alias_prefix_length: int = 3

    # Rendering
    indent: str = "    "

    # Prepend a warning comment when relevant tables cannot be joined to the root
    strict_connectivity: bool = False

    # Parse generated statements with sqlglot and flag failures in the output
    validate_output: bool = False

    # CREATE TABLE appends CreatedBy/CreatedAt/ModifiedBy/ModifiedAt
    include_audit_columns: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.alias_style, str):
            try:
                self.alias_style = AliasStyle(self.alias_style.lower())
            except ValueError:
                allowed = ", ".join(style.value for style in AliasStyle)
                raise ConfigurationError(
                    f"Invalid alias_style '{self.alias_style}'. Must be one of: {allowed}"
                ) from None
        if self.alias_prefix_length < 1:
            raise ConfigurationError("alias_prefix_length must be at least 1")
        try:
            sqlglot.Dialect.get_or_raise(self.dialect)
        except ValueError as e:
            raise ConfigurationError(f"Invalid dialect '{self.dialect}': {e}") from e

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any] | None) -> "GeneratorConfig":
        """
        Build a configuration from a plain mapping (e.g. a TOML table).

        Raises:
            ConfigurationError: If the mapping has unknown keys or invalid values
        """
        if not config_dict:
            return cls()

        known = {f.name: f for f in fields(cls)}
        unknown = set(config_dict) - set(known)
        if unknown:
            raise ConfigurationError(f"Unknown generator settings: {sorted(unknown)}")

        for key, value in config_dict.items():
            expected = known[key].type
            if expected in ("bool", bool) and not isinstance(value, bool):
                raise ConfigurationError(f"Setting '{key}' must be a boolean")
            if expected in ("int", int) and (isinstance(value, bool) or not isinstance(value, int)):
                raise ConfigurationError(f"Setting '{key}' must be an integer")
            if expected in ("str", str) and not isinstance(value, str):
                raise ConfigurationError(f"Setting '{key}' must be a string")

        return cls(**config_dict)
