"""
Constants for the generator module.
"""

from sqlcanvas.typing import JoinType

# Inner joins are placed first to keep generated SQL conservative
JOIN_TYPE_ORDER = {
    JoinType.INNER: 0,
    JoinType.LEFT: 1,
    JoinType.RIGHT: 2,
    JoinType.FULL_OUTER: 3,
    JoinType.CROSS: 4,
}

COMMENT_PREFIX = "--"

ERROR_COMMENT_PREFIX = "-- Error generating SQL:"

NO_RELEVANT_TABLES_COMMENT = (
    "-- No tables selected or connected.\n"
    "-- Please select columns or create relationships between tables."
)

NO_VISIBLE_TABLES_COMMENT = (
    "-- No visible tables selected or connected. Expand domains or select columns."
)

NO_GROUPING_COMMENT = (
    "-- No group-by columns or aggregates supplied.\n"
    "-- Pick at least one column to group by or aggregate."
)

NO_INSERTABLE_COLUMNS_COMMENT = "-- No insertable columns supplied."

NO_UPDATABLE_COLUMNS_COMMENT = "-- No updatable columns supplied."

NO_TABLE_COLUMNS_COMMENT = "-- Table has no columns to create."

EXCEL_WITH_RELATIONSHIPS_HEADER = "-- Query combining Excel data with database tables"

EXCEL_ONLY_HEADER = (
    "-- Query based on Excel sheet structure\n"
    "-- Note: This shows the SQL structure. Excel data would need to be imported "
    "to a database to execute."
)

# Declared types whose filter values may be emitted unquoted
NUMERIC_DATA_TYPES = {
    "bigint",
    "bit",
    "decimal",
    "float",
    "int",
    "integer",
    "money",
    "numeric",
    "real",
    "smallint",
    "smallmoney",
    "tinyint",
}

AUDIT_COLUMNS = [
    "[CreatedBy] NVARCHAR(255)",
    "[CreatedAt] DATETIME2 DEFAULT GETDATE()",
    "[ModifiedBy] NVARCHAR(255)",
    "[ModifiedAt] DATETIME2 DEFAULT GETDATE()",
]
