"""
SQL generation engine.

Turns a canvas snapshot (tables, columns, relationships, filters) into SQL.
"""

from .alias_allocator import AliasAllocator, OutputNameRegistry
from .config import AliasStyle, GeneratorConfig
from .constants import (
    ERROR_COMMENT_PREFIX,
    NO_GROUPING_COMMENT,
    NO_INSERTABLE_COLUMNS_COMMENT,
    NO_RELEVANT_TABLES_COMMENT,
    NO_UPDATABLE_COLUMNS_COMMENT,
    NO_VISIBLE_TABLES_COMMENT,
)
from .dialect import format_value, is_comment_only, quote_identifier, validate_sql
from .exceptions import (
    AliasAllocationError,
    ClauseGenerationError,
    ConfigurationError,
    GeneratorError,
    JoinGraphError,
    SQLValidationError,
    ValueFormattingError,
)
from .join_graph import JoinGraphBuilder, JoinPlan, JoinStep
from .query_generator import QueryGenerator
from .relevance import RelevanceSelector, ResolvedRelationship, resolve_relationships

__all__ = [
    "AliasAllocator",
    "AliasAllocationError",
    "AliasStyle",
    "ClauseGenerationError",
    "ConfigurationError",
    "ERROR_COMMENT_PREFIX",
    "GeneratorConfig",
    "GeneratorError",
    "JoinGraphBuilder",
    "JoinGraphError",
    "JoinPlan",
    "JoinStep",
    "NO_GROUPING_COMMENT",
    "NO_INSERTABLE_COLUMNS_COMMENT",
    "NO_RELEVANT_TABLES_COMMENT",
    "NO_UPDATABLE_COLUMNS_COMMENT",
    "NO_VISIBLE_TABLES_COMMENT",
    "OutputNameRegistry",
    "QueryGenerator",
    "RelevanceSelector",
    "ResolvedRelationship",
    "SQLValidationError",
    "ValueFormattingError",
    "format_value",
    "is_comment_only",
    "quote_identifier",
    "resolve_relationships",
    "validate_sql",
]
