"""
Clause rendering for SELECT statements.

These methods are mixed into QueryGenerator. They expect ``self.config`` and
``self.allocator`` to be set by the generator.
"""

import logging

from sqlcanvas.typing import Aggregate, AggregateFunction, Column, FilterOperator, Table

from .alias_allocator import AliasAllocator, OutputNameRegistry
from .config import GeneratorConfig
from .dialect import (
    column_reference,
    format_filter_value,
    quote_identifier,
    quote_string,
)
from .exceptions import ClauseGenerationError

logger = logging.getLogger(__name__)


def _by_name(items):
    # sorted() is stable, so equal names keep input order
    return sorted(items, key=lambda item: item.name)


class ClauseRenderer:
    """Mixin class for rendering SELECT, WHERE, GROUP BY and ORDER BY clauses."""

    config: GeneratorConfig
    allocator: AliasAllocator

    # SELECT

    def column_expression(self, table: Table, column: Column) -> str:
        """
        Render the expression for a column.

        Computed columns use their expression verbatim in parentheses;
        everything else is qualified with the table alias.
        """
        if column.has_expression:
            return f"({column.computed_expression})"
        return column_reference(self.allocator.alias_for(table), column.name)

    def render_column_item(
        self, table: Table, column: Column, registry: OutputNameRegistry
    ) -> str:
        """
        Render one SELECT-list entry, aliasing it when renamed or when its
        output name collides with an earlier entry.
        """
        natural = column.alias or column.name
        output_name = registry.register(natural, prefix=self.allocator.alias_for(table))
        expression = self.column_expression(table, column)

        if column.has_expression or output_name != column.name:
            return f"{expression} AS {quote_identifier(output_name)}"
        return expression

    def select_items(self, tables: list[Table], registry: OutputNameRegistry) -> list[str]:
        """Render selected columns of the given tables, ordered by table then column name."""
        items = []
        for table in _by_name(tables):
            for column in _by_name(table.selected_columns):
                items.append(self.render_column_item(table, column, registry))
        return items

    def fallback_items(self, tables: list[Table], registry: OutputNameRegistry) -> list[str]:
        """
        Render the primary key columns (or the first column) of every table.

        Used when nothing is selected so the statement still has a column list.
        """
        items = []
        for table in _by_name(tables):
            keys = [c for c in table.columns if c.is_primary_key] or table.columns[:1]
            for column in keys:
                items.append(self.render_column_item(table, column, registry))
        if items:
            logger.debug("No columns selected, falling back to primary keys")
        return items

    def predefined_items(
        self, predefined_columns: dict[str, str], registry: OutputNameRegistry
    ) -> list[str]:
        """Render predefined raw expressions with their output aliases."""
        items = []
        for expression, alias in predefined_columns.items():
            output_name = registry.register(alias or "expr")
            items.append(f"{expression} AS {quote_identifier(output_name)}")
        return items

    def aggregate_item(
        self,
        aggregate: Aggregate,
        table: Table,
        column: Column,
        registry: OutputNameRegistry,
    ) -> str:
        """Render ``FUNC(<ref>) AS [alias]`` for an aggregate."""
        reference = self.column_expression(table, column)
        if aggregate.function is AggregateFunction.COUNT_DISTINCT:
            expression = f"COUNT(DISTINCT {reference})"
        else:
            expression = f"{aggregate.function.value}({reference})"

        alias = aggregate.alias or f"{aggregate.function.default_alias_prefix}_{column.name}"
        output_name = registry.register(alias, prefix=self.allocator.alias_for(table))
        return f"{expression} AS {quote_identifier(output_name)}"

    def render_select(self, items: list[str]) -> str:
        if not items:
            raise ClauseGenerationError("SELECT list is empty")
        indent = self.config.indent
        return "SELECT\n" + ",\n".join(f"{indent}{item}" for item in items)

    # WHERE

    def filter_predicate(self, table: Table, column: Column) -> str | None:
        """
        Render the filter attached to a column, or None when there is none.
        """
        condition = column.filter
        if condition is None:
            return None

        target = self.column_expression(table, column)
        operator = condition.operator

        if operator is FilterOperator.IS_NULL:
            return f"{target} IS NULL"
        if operator is FilterOperator.IS_NOT_NULL:
            return f"{target} IS NOT NULL"
        if operator in (FilterOperator.IN, FilterOperator.NOT_IN):
            if not (condition.value or "").strip():
                logger.warning(
                    f"Skipping {operator.value} filter on '{column.name}': no values supplied"
                )
                return None
            # Caller-supplied literal list, passed through as-is
            return f"{target} {operator.value} ({condition.value})"
        if operator in (FilterOperator.LIKE, FilterOperator.NOT_LIKE):
            return f"{target} {operator.value} {quote_string('%' + condition.value + '%')}"

        value = format_filter_value(condition.value, column.data_type)
        if operator is FilterOperator.BETWEEN:
            if condition.second_value is None or condition.second_value == "":
                return f"{target} = {value}"
            upper = format_filter_value(condition.second_value, column.data_type)
            return f"{target} BETWEEN {value} AND {upper}"
        if operator is FilterOperator.NOT_EQUALS:
            return f"{target} <> {value}"
        return f"{target} {operator.value} {value}"

    def where_predicates(self, tables: list[Table]) -> list[str]:
        """Render filters of selected columns. Filters on unselected columns are ignored."""
        predicates = []
        for table in _by_name(tables):
            for column in _by_name(table.selected_columns):
                predicate = self.filter_predicate(table, column)
                if predicate:
                    predicates.append(predicate)
        return predicates

    def render_where(self, predicates: list[str]) -> str | None:
        if not predicates:
            return None
        indent = self.config.indent
        return "WHERE\n" + indent + f" AND\n{indent}".join(predicates)

    # GROUP BY / ORDER BY

    def render_list(self, keyword: str, items: list[str]) -> str | None:
        """Render a comma-joined clause such as GROUP BY, or None when empty."""
        items = [item for item in items if item]
        if not items:
            return None
        return f"{keyword}\n{self.config.indent}" + ", ".join(items)
