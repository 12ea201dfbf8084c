"""
Dialect helpers: identifier quoting, literal formatting and validation.

Identifiers use bracket quoting (``[name]``) with embedded closing brackets
doubled, which is what the target dialect expects.
"""

import datetime
import decimal
import logging
import uuid
from typing import Any

import sqlglot
from sqlglot.errors import ParseError, TokenError

from .constants import COMMENT_PREFIX, NUMERIC_DATA_TYPES
from .exceptions import SQLValidationError, ValueFormattingError

logger = logging.getLogger(__name__)


def quote_identifier(name: str) -> str:
    """Quote an identifier as ``[name]``, doubling any ``]`` inside it."""
    return "[" + str(name).replace("]", "]]") + "]"


def qualify_table(schema: str, name: str) -> str:
    """Render a schema-qualified table name, e.g. ``[dbo].[Orders]``."""
    return f"{quote_identifier(schema)}.{quote_identifier(name)}"


def column_reference(table_alias: str, column_name: str) -> str:
    """Render an alias-qualified column reference, e.g. ``[ord].[Id]``."""
    return f"{quote_identifier(table_alias)}.{quote_identifier(column_name)}"


def quote_string(value: str) -> str:
    """Render a string literal, doubling embedded single quotes."""
    return "'" + str(value).replace("'", "''") + "'"


def format_value(value: Any) -> str:
    """
    Render a Python value as a SQL literal.

    Type dispatch:
        None -> NULL
        bool -> 1 / 0
        int, float, Decimal -> unquoted
        datetime, date, time -> quoted ISO form
        UUID -> quoted
        str -> quoted and escaped

    Raises:
        ValueFormattingError: If the value is a float that has no SQL literal (nan, inf)
    """
    if value is None:
        return "NULL"
    # bool is a subclass of int
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            raise ValueFormattingError(f"Cannot render {value!r} as a SQL literal")
        return repr(value)
    if isinstance(value, (int, decimal.Decimal)):
        return str(value)
    if isinstance(value, datetime.datetime):
        return quote_string(value.isoformat(sep=" "))
    if isinstance(value, (datetime.date, datetime.time)):
        return quote_string(value.isoformat())
    if isinstance(value, uuid.UUID):
        return quote_string(str(value))
    return quote_string(str(value))


def is_numeric_type(data_type: str | None) -> bool:
    """Check whether a declared column type is numeric, ignoring any length suffix."""
    if not data_type:
        return False
    base = data_type.split("(", 1)[0].strip().lower()
    return base in NUMERIC_DATA_TYPES


def _looks_numeric(value: str) -> bool:
    try:
        number = decimal.Decimal(value.strip())
    except (decimal.InvalidOperation, ValueError):
        return False
    return number.is_finite()


def format_filter_value(value: str | None, data_type: str | None = None) -> str:
    """
    Render a filter comparison value.

    Filter values arrive as text from the canvas. They are quoted unless the
    column is numeric and the text is a number.
    """
    text = "" if value is None else str(value)
    if is_numeric_type(data_type) and _looks_numeric(text):
        return text.strip()
    return quote_string(text)


def is_comment_only(sql: str) -> bool:
    """
    Check whether generated output is only comments.

    This is the soft-failure signal: the generator explains why it could not
    produce a statement instead of raising. A statement that merely carries
    a leading warning comment is not comment-only.
    """
    lines = [line.strip() for line in sql.splitlines() if line.strip()]
    return all(line.startswith(COMMENT_PREFIX) for line in lines)


def validate_sql(sql: str, dialect: str = "tsql") -> None:
    """
    Parse generated SQL with sqlglot to confirm it is syntactically valid.

    Args:
        sql: Generated SQL text (comment lines are ignored)
        dialect: sqlglot dialect name

    Raises:
        SQLValidationError: If the SQL does not parse
    """
    statement = "\n".join(
        line for line in sql.splitlines() if not line.strip().startswith(COMMENT_PREFIX)
    ).strip()
    if not statement:
        return

    try:
        parsed = sqlglot.parse(statement, read=dialect)
    except (ParseError, TokenError) as e:
        raise SQLValidationError(f"Generated SQL does not parse as {dialect}: {e}") from e

    if not any(expression is not None for expression in parsed):
        raise SQLValidationError("Generated SQL contains no statement")
    logger.debug(f"Validated generated SQL against dialect {dialect}")
