"""
INSERT, UPDATE and DELETE generation.

These methods are mixed into QueryGenerator via multiple inheritance.
"""

import logging
from typing import Any

from sqlcanvas.typing import Column, Table

from .config import GeneratorConfig
from .constants import NO_INSERTABLE_COLUMNS_COMMENT, NO_UPDATABLE_COLUMNS_COMMENT
from .dialect import format_value, qualify_table, quote_identifier
from .exceptions import ClauseGenerationError

logger = logging.getLogger(__name__)


class DMLGenerator:
    """Mixin class for generating data modification statements for one table."""

    config: GeneratorConfig

    def _target_table(self, table: Table) -> str:
        return qualify_table(table.schema or self.config.default_schema, table.name)

    def _writable_columns(
        self, table: Table, values: dict[str, Any], skip_primary_keys: bool
    ) -> tuple[list[tuple[Column, Any]], list[str]]:
        """
        Match value keys to columns, refusing those that must not be written.

        Returns:
            (column, value) pairs to write, and comment lines for skipped keys
        """
        writable = []
        skipped = []
        taken: set[str] = set()
        for name, value in values.items():
            column = table.find_column_by_name(name)
            if column is None:
                skipped.append(f"-- Skipped unknown column {quote_identifier(name)}")
            elif column.id in taken:
                # Keys match case-insensitively, so "Amount" and "amount" collide
                skipped.append(f"-- Skipped duplicate column {quote_identifier(name)}")
            elif column.is_computed:
                skipped.append(f"-- Skipped computed column {quote_identifier(column.name)}")
            elif skip_primary_keys and column.is_primary_key:
                skipped.append(f"-- Skipped primary key column {quote_identifier(column.name)}")
            else:
                taken.add(column.id)
                writable.append((column, value))

        if skipped:
            logger.warning(f"Refused {len(skipped)} column(s) for table '{table.name}'")
        return writable, skipped

    def _match_conditions(self, table: Table, where_values: dict[str, Any]) -> list[str]:
        """
        Render WHERE equality conditions.

        Raises:
            ClauseGenerationError: If a key names no column, since dropping it
                would widen the statement
        """
        conditions = []
        for name, value in where_values.items():
            column = table.find_column_by_name(name)
            if column is None:
                raise ClauseGenerationError(
                    f"Unknown column '{name}' in WHERE values for table '{table.name}'"
                )
            target = quote_identifier(column.name)
            if value is None:
                conditions.append(f"{target} IS NULL")
            else:
                conditions.append(f"{target} = {format_value(value)}")
        return conditions

    def _where_clause(self, conditions: list[str]) -> str:
        indent = self.config.indent
        return "WHERE\n" + indent + f" AND\n{indent}".join(conditions)

    def _unbounded_warning(self, verb: str, table: Table) -> str:
        return (
            f"-- WARNING: No WHERE values supplied. This {verb} affects every row in "
            f"{self._target_table(table)}."
        )

    def build_insert(self, table: Table, values: dict[str, Any]) -> str:
        writable, skipped = self._writable_columns(table, values or {}, skip_primary_keys=False)
        if not writable:
            return "\n".join([NO_INSERTABLE_COLUMNS_COMMENT] + skipped)

        columns = ", ".join(quote_identifier(column.name) for column, _ in writable)
        literals = ", ".join(format_value(value) for _, value in writable)
        lines = skipped + [
            f"INSERT INTO {self._target_table(table)} ({columns})",
            f"VALUES ({literals})",
        ]
        return "\n".join(lines)

    def build_update(
        self,
        table: Table,
        values: dict[str, Any],
        where_values: dict[str, Any] | None = None,
    ) -> str:
        writable, skipped = self._writable_columns(table, values or {}, skip_primary_keys=True)
        if not writable:
            return "\n".join([NO_UPDATABLE_COLUMNS_COMMENT] + skipped)

        conditions = self._match_conditions(table, where_values or {})
        indent = self.config.indent
        assignments = [
            f"{quote_identifier(column.name)} = {format_value(value)}" for column, value in writable
        ]

        lines = list(skipped)
        if not conditions:
            logger.warning(f"UPDATE on '{table.name}' has no WHERE values")
            lines.append(self._unbounded_warning("UPDATE", table))
        lines.append(f"UPDATE {self._target_table(table)}")
        lines.append("SET\n" + ",\n".join(f"{indent}{a}" for a in assignments))
        if conditions:
            lines.append(self._where_clause(conditions))
        return "\n".join(lines)

    def build_delete(self, table: Table, where_values: dict[str, Any] | None = None) -> str:
        conditions = self._match_conditions(table, where_values or {})

        lines = []
        if not conditions:
            logger.warning(f"DELETE on '{table.name}' has no WHERE values")
            lines.append(self._unbounded_warning("DELETE", table))
        lines.append(f"DELETE FROM {self._target_table(table)}")
        if conditions:
            lines.append(self._where_clause(conditions))
        else:
            # Uncommenting this line turns the statement into a no-op
            lines.append("-- WHERE 1 = 0")
        return "\n".join(lines)
