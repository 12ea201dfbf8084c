"""
Custom exceptions for the generator module.
"""


class GeneratorError(Exception):
    """Base exception for all generator-related errors."""

    pass


class AliasAllocationError(GeneratorError):
    """Raised when a unique alias cannot be allocated."""

    pass


class JoinGraphError(GeneratorError):
    """Raised when the join graph cannot be built."""

    pass


class ClauseGenerationError(GeneratorError):
    """Raised when a clause cannot be rendered."""

    pass


class ValueFormattingError(GeneratorError):
    """Raised when a literal value cannot be rendered as SQL."""

    pass


class SQLValidationError(GeneratorError):
    """Raised when generated SQL does not parse in the target dialect."""

    pass


class ConfigurationError(GeneratorError):
    """Raised when generator configuration is invalid."""

    pass
