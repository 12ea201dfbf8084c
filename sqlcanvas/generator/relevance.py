"""
Relevance selection: which tables take part in a statement.
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Iterable

from sqlcanvas.typing import Column, JoinType, Query, Relationship, Table

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedRelationship:
    """A relationship whose tables and columns all exist in the query."""

    relationship: Relationship
    source_table: Table
    source_column: Column
    target_table: Table
    target_column: Column

    @property
    def join_type(self) -> JoinType:
        return self.relationship.join_type

    def other_end(self, table_id: str) -> Table:
        """Return the table at the opposite end from table_id."""
        if self.source_table.id == table_id:
            return self.target_table
        return self.source_table

    def touches(self, table_id: str) -> bool:
        return table_id in (self.source_table.id, self.target_table.id)


def resolve_relationships(
    query: Query, tables: Iterable[Table] | None = None
) -> list[ResolvedRelationship]:
    """
    Resolve relationships against the query's tables, dropping dangling ones.

    Args:
        query: The query snapshot
        tables: Restrict resolution to these tables (defaults to all tables)

    Returns:
        Resolved relationships in input order
    """
    by_id = {table.id: table for table in (query.tables if tables is None else tables)}
    resolved = []

    for relationship in query.relationships:
        source_table = by_id.get(relationship.source_table_id)
        target_table = by_id.get(relationship.target_table_id)
        if source_table is None or target_table is None:
            logger.debug(f"Skipping relationship {relationship.id}: table not available")
            continue

        source_column = source_table.find_column(relationship.source_column_id)
        target_column = target_table.find_column(relationship.target_column_id)
        if source_column is None or target_column is None:
            logger.warning(
                f"Skipping relationship {relationship.id} between '{source_table.name}' and "
                f"'{target_table.name}': column no longer exists"
            )
            continue

        resolved.append(
            ResolvedRelationship(
                relationship=relationship,
                source_table=source_table,
                source_column=source_column,
                target_table=target_table,
                target_column=target_column,
            )
        )

    return resolved


class RelevanceSelector:
    """
    Decides which tables participate in a statement.

    A table is relevant when it has a selected column (a seed) or when it is
    reachable from a seed through relationships, followed in both directions.
    """

    def select(
        self,
        tables: list[Table],
        relationships: list[ResolvedRelationship],
        seed_ids: Iterable[str] | None = None,
    ) -> list[Table]:
        """
        Select the relevant tables.

        Args:
            tables: Candidate tables, in input order
            relationships: Resolved relationships between candidate tables
            seed_ids: Explicit seed table ids (grouped queries); defaults to
                tables with a selected column

        Returns:
            Relevant tables, in input order
        """
        if seed_ids is None:
            seeds = [t.id for t in tables if t.selected_columns]
        else:
            wanted = set(seed_ids)
            seeds = [t.id for t in tables if t.id in wanted]

        adjacency: dict[str, list[str]] = {t.id: [] for t in tables}
        for rel in relationships:
            source_id, target_id = rel.source_table.id, rel.target_table.id
            if source_id in adjacency and target_id in adjacency:
                adjacency[source_id].append(target_id)
                adjacency[target_id].append(source_id)

        relevant: set[str] = set()
        for seed in seeds:
            if seed in relevant:
                continue
            relevant.add(seed)
            frontier = deque([seed])
            while frontier:
                current = frontier.popleft()
                for neighbour in adjacency[current]:
                    if neighbour not in relevant:
                        relevant.add(neighbour)
                        frontier.append(neighbour)

        result = [t for t in tables if t.id in relevant]
        logger.debug(
            f"Relevant tables: {[t.name for t in result]} (seeds: {len(seeds)})"
        )
        return result
