"""
Query generator: the public entry point of the SQL generation engine.

Every public ``generate_*`` method takes a complete snapshot, resets the
alias state, runs relevance selection, join planning and clause rendering,
and returns SQL text. Failures never escape: they come back as ``--``
comments so the caller can show them in a preview pane.
"""

import logging
from typing import Any, Callable

from sqlcanvas.typing import Aggregate, Column, Query, Table

from .alias_allocator import AliasAllocator, OutputNameRegistry
from .clauses import ClauseRenderer
from .config import GeneratorConfig
from .constants import (
    ERROR_COMMENT_PREFIX,
    EXCEL_ONLY_HEADER,
    EXCEL_WITH_RELATIONSHIPS_HEADER,
    NO_GROUPING_COMMENT,
    NO_RELEVANT_TABLES_COMMENT,
    NO_VISIBLE_TABLES_COMMENT,
)
from .ddl import DDLGenerator
from .dialect import is_comment_only, quote_identifier, validate_sql
from .dml import DMLGenerator
from .exceptions import SQLValidationError
from .join_graph import JoinGraphBuilder, JoinPlan
from .relevance import RelevanceSelector, ResolvedRelationship, resolve_relationships

logger = logging.getLogger(__name__)


def _as_comment(text: str) -> str:
    return "\n".join(f"-- {line}" if line else "--" for line in str(text).splitlines()) or "--"


class QueryGenerator(ClauseRenderer, DMLGenerator, DDLGenerator):
    """
    Generates SELECT, grouped SELECT, INSERT, UPDATE, DELETE and CREATE TABLE
    statements from canvas snapshots.

    Alias state lives on the instance and is reset at the start of every
    call, so one instance must not be shared between threads without a lock.
    Creating a generator per call is cheap.
    """

    def __init__(self, config: GeneratorConfig | None = None):
        self.config = config or GeneratorConfig()
        self.allocator = AliasAllocator(
            style=self.config.alias_style, prefix_length=self.config.alias_prefix_length
        )
        self.relevance = RelevanceSelector()
        self.join_builder = JoinGraphBuilder()

    # Public operations

    def generate_select(self, query: Query, visible_only: bool = False) -> str:
        """
        Generate a SELECT statement for the query.

        Args:
            query: Complete canvas snapshot
            visible_only: Leave out tables inside collapsed domains

        Returns:
            SQL text, or a comment explaining why no statement was produced
        """
        return self._run("SELECT", self._build_select, query, visible_only)

    def generate_grouped_select(
        self,
        query: Query,
        group_by_columns: list[str],
        aggregates: list[Aggregate],
    ) -> str:
        """
        Generate a grouped SELECT with aggregates.

        Args:
            query: Complete canvas snapshot
            group_by_columns: Ids of the columns to group by
            aggregates: Aggregates to compute per group
        """
        return self._run(
            "grouped SELECT", self._build_grouped_select, query, group_by_columns, aggregates
        )

    def generate_insert(self, table: Table, values: dict[str, Any]) -> str:
        """Generate an INSERT of one row. Computed columns are refused."""
        return self._run("INSERT", self.build_insert, table, values)

    def generate_update(
        self,
        table: Table,
        values: dict[str, Any],
        where_values: dict[str, Any] | None = None,
    ) -> str:
        """Generate an UPDATE. Computed and primary key columns are never written."""
        return self._run("UPDATE", self.build_update, table, values, where_values)

    def generate_delete(self, table: Table, where_values: dict[str, Any] | None = None) -> str:
        """Generate a DELETE matching the given column values."""
        return self._run("DELETE", self.build_delete, table, where_values)

    def generate_create_table(self, table: Table) -> str:
        """Generate a CREATE TABLE script for a table."""
        return self._run("CREATE TABLE", self.build_create_table, table)

    # Orchestration

    def _run(self, label: str, build: Callable[..., str], *args: Any) -> str:
        self.allocator.reset()
        try:
            return self._check(build(*args))
        except Exception as e:
            logger.exception(f"Failed to generate {label}: {e}")
            message = " ".join(str(e).split()) or e.__class__.__name__
            return f"{ERROR_COMMENT_PREFIX} {message}"

    def _check(self, sql: str) -> str:
        if not self.config.validate_output or is_comment_only(sql):
            return sql
        try:
            validate_sql(sql, self.config.dialect)
        except SQLValidationError as e:
            logger.warning(str(e))
            return _as_comment(f"WARNING: {e}") + "\n" + sql
        return sql

    def _candidate_tables(self, query: Query, visible_only: bool) -> list[Table]:
        if not visible_only:
            return list(query.tables)

        visible = []
        for table in query.tables:
            domain = query.find_domain(table.domain_id) if table.domain_id else None
            if domain is not None and domain.is_collapsed:
                logger.debug(f"Hiding table '{table.name}' in collapsed domain '{domain.name}'")
                continue
            visible.append(table)
        return visible

    def _allocate_aliases(self, plan: JoinPlan) -> None:
        # Join order fixes which table wins a contested alias
        for table in plan.placed_tables:
            self.allocator.alias_for(table)

    def _header_comments(
        self, plan: JoinPlan, relationships: list[ResolvedRelationship]
    ) -> list[str]:
        headers = []
        if any(table.is_from_excel for table in plan.placed_tables):
            headers.append(
                EXCEL_WITH_RELATIONSHIPS_HEADER if relationships else EXCEL_ONLY_HEADER
            )
        if plan.unreachable and self.config.strict_connectivity:
            names = ", ".join(quote_identifier(table.name) for table in plan.unreachable)
            headers.append(
                f"-- WARNING: Tables not connected to {quote_identifier(plan.root.name)} "
                f"were left out: {names}"
            )
        return headers

    def _assemble(
        self,
        headers: list[str],
        items: list[str],
        plan: JoinPlan,
        where: list[str],
        group_by: list[str],
        order_by: list[str],
    ) -> str:
        from_line, join_lines = self.join_builder.render(
            plan, self.allocator, self.config.default_schema
        )
        sections = headers + [self.render_select(items), from_line] + join_lines
        for clause in (
            self.render_where(where),
            self.render_list("GROUP BY", group_by),
            self.render_list("ORDER BY", order_by),
        ):
            if clause:
                sections.append(clause)
        return "\n".join(sections)

    def _build_select(self, query: Query, visible_only: bool) -> str:
        tables = self._candidate_tables(query, visible_only)
        relationships = resolve_relationships(query, tables)

        relevant = self.relevance.select(tables, relationships)
        if not relevant:
            return NO_VISIBLE_TABLES_COMMENT if visible_only else NO_RELEVANT_TABLES_COMMENT

        plan = self.join_builder.build(relevant, relationships)
        self._allocate_aliases(plan)
        placed = plan.placed_tables

        registry = OutputNameRegistry()
        items = self.select_items(placed, registry) or self.fallback_items(placed, registry)
        items += self.predefined_items(query.predefined_columns, registry)
        if not items:
            items = ["*"]

        return self._assemble(
            headers=self._header_comments(plan, relationships),
            items=items,
            plan=plan,
            where=self.where_predicates(placed),
            group_by=query.group_by_columns,
            order_by=query.order_by_columns,
        )

    def _resolve_column_ids(self, query: Query, column_ids: list[str]) -> list[tuple[Table, Column]]:
        resolved = []
        for column_id in column_ids:
            found = query.find_column(column_id)
            if found is None:
                logger.warning(f"Skipping unknown column id {column_id}")
                continue
            resolved.append(found)
        return resolved

    def _build_grouped_select(
        self, query: Query, group_by_columns: list[str], aggregates: list[Aggregate]
    ) -> str:
        grouped = self._resolve_column_ids(query, group_by_columns or [])
        aggregated = []
        for aggregate in aggregates or []:
            found = query.find_column(aggregate.column_id)
            if found is None:
                logger.warning(f"Skipping aggregate on unknown column id {aggregate.column_id}")
                continue
            aggregated.append((aggregate, found[0], found[1]))

        if not grouped and not aggregated:
            return NO_GROUPING_COMMENT

        counts: dict[str, int] = {}
        for table, _ in grouped:
            counts[table.id] = counts.get(table.id, 0) + 1
        for _, table, _ in aggregated:
            counts[table.id] = counts.get(table.id, 0) + 1

        relationships = resolve_relationships(query)
        relevant = self.relevance.select(query.tables, relationships, seed_ids=counts.keys())
        plan = self.join_builder.build(relevant, relationships, counts)
        self._allocate_aliases(plan)
        placed_ids = plan.placed_ids

        registry = OutputNameRegistry()
        items = []
        group_refs = []
        for table, column in grouped:
            if table.id not in placed_ids:
                continue
            items.append(self.render_column_item(table, column, registry))
            group_refs.append(self.column_expression(table, column))
        for aggregate, table, column in aggregated:
            if table.id not in placed_ids:
                continue
            items.append(self.aggregate_item(aggregate, table, column, registry))

        return self._assemble(
            headers=self._header_comments(plan, relationships),
            items=items,
            plan=plan,
            where=self.where_predicates(plan.placed_tables),
            group_by=group_refs,
            order_by=query.order_by_columns,
        )
