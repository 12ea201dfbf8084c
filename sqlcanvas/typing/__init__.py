"""
Type definitions for sqlcanvas.
"""

from .query import (
    Aggregate,
    AggregateFunction,
    Column,
    Domain,
    Filter,
    FilterOperator,
    JoinType,
    Position,
    Query,
    Relationship,
    RelationshipType,
    Size,
    Table,
)

__all__ = [
    "Aggregate",
    "AggregateFunction",
    "Column",
    "Domain",
    "Filter",
    "FilterOperator",
    "JoinType",
    "Position",
    "Query",
    "Relationship",
    "RelationshipType",
    "Size",
    "Table",
]
