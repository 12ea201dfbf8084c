"""
CREATE TABLE generation.

These methods are mixed into QueryGenerator via multiple inheritance.
"""

from sqlcanvas.typing import Column, Table

from .config import GeneratorConfig
from .constants import AUDIT_COLUMNS, NO_TABLE_COLUMNS_COMMENT
from .dialect import qualify_table, quote_identifier


class DDLGenerator:
    """Mixin class for generating table creation scripts."""

    config: GeneratorConfig

    def column_definition(self, column: Column) -> str:
        """
        Render one column definition line.

        A max_length of -1 renders as MAX; computed columns render as
        ``[name] AS (<expression>)``.
        """
        name = quote_identifier(column.name)
        if column.has_expression:
            return f"{name} AS ({column.computed_expression})"

        definition = f"{name} {column.data_type}"
        if column.max_length is not None:
            length = "MAX" if column.max_length == -1 else str(column.max_length)
            definition += f"({length})"
        if not column.is_nullable:
            definition += " NOT NULL"
        if column.is_primary_key:
            definition += " PRIMARY KEY"
        return definition

    def build_create_table(self, table: Table) -> str:
        if not table.columns:
            return NO_TABLE_COLUMNS_COMMENT

        indent = self.config.indent
        definitions = [self.column_definition(column) for column in table.columns]
        if self.config.include_audit_columns:
            existing = {column.name.lower() for column in table.columns}
            for audit in AUDIT_COLUMNS:
                audit_name = audit.split("]", 1)[0].lstrip("[").lower()
                if audit_name not in existing:
                    definitions.append(audit)

        schema = table.schema or self.config.default_schema
        return (
            f"CREATE TABLE {qualify_table(schema, table.name)} (\n"
            + ",\n".join(f"{indent}{d}" for d in definitions)
            + "\n);"
        )
