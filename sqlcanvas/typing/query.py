"""
Type definitions for the query graph consumed by the SQL generator.

A Query is a complete snapshot of the canvas: the tables the user placed,
the columns they ticked, the relationships they drew and any filters they
attached. The generator reads these structures and never mutates them.
"""

import logging
import re
import uuid
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return str(uuid.uuid4())


class JoinType(Enum):
    """Join kinds a relationship can be drawn with."""

    INNER = "INNER JOIN"
    LEFT = "LEFT JOIN"
    RIGHT = "RIGHT JOIN"
    FULL_OUTER = "FULL OUTER JOIN"
    CROSS = "CROSS JOIN"

    @property
    def keyword(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: "str | JoinType") -> "JoinType":
        """
        Parse a join kind from its canvas spelling.

        Accepts enum names ("FULL_OUTER"), SQL keywords ("LEFT JOIN") and the
        UI spellings ("InnerJoin", "FullOuter"), case-insensitively.

        Raises:
            ValueError: If the value does not name a join kind
        """
        if isinstance(value, JoinType):
            return value
        key = re.sub(r"[^a-z]", "", str(value).lower())
        if key.endswith("join"):
            key = key[: -len("join")]
        if key.endswith("outer") and key != "fullouter":
            key = key[: -len("outer")]
        mapping = {
            "inner": cls.INNER,
            "left": cls.LEFT,
            "right": cls.RIGHT,
            "full": cls.FULL_OUTER,
            "fullouter": cls.FULL_OUTER,
            "cross": cls.CROSS,
        }
        if key not in mapping:
            raise ValueError(f"Unknown join type: {value!r}")
        return mapping[key]


class RelationshipType(Enum):
    """Relationship classification shown on the canvas (no effect on SQL)."""

    PRIMARY = "primary"
    SECONDARY = "secondary"
    FOREIGN = "foreign"


class FilterOperator(Enum):
    """Comparison operators a column filter may use."""

    EQUALS = "="
    NOT_EQUALS = "!="
    LESS_THAN = "<"
    LESS_THAN_OR_EQUAL = "<="
    GREATER_THAN = ">"
    GREATER_THAN_OR_EQUAL = ">="
    LIKE = "LIKE"
    NOT_LIKE = "NOT LIKE"
    IN = "IN"
    NOT_IN = "NOT IN"
    IS_NULL = "IS NULL"
    IS_NOT_NULL = "IS NOT NULL"
    BETWEEN = "BETWEEN"

    @classmethod
    def parse(cls, value: "str | FilterOperator") -> "FilterOperator":
        """
        Parse an operator string. Unrecognised operators degrade to equality.
        """
        if isinstance(value, FilterOperator):
            return value
        normalized = " ".join(str(value).upper().split())
        if normalized == "<>":
            normalized = "!="
        elif normalized == "==":
            normalized = "="
        for member in cls:
            if member.value == normalized:
                return member
        logger.warning(f"Unknown filter operator {value!r}, falling back to '='")
        return cls.EQUALS

    @property
    def is_null_check(self) -> bool:
        return self in (FilterOperator.IS_NULL, FilterOperator.IS_NOT_NULL)


class AggregateFunction(Enum):
    """Aggregate functions available to the grouped query variant."""

    COUNT = "COUNT"
    SUM = "SUM"
    AVG = "AVG"
    MIN = "MIN"
    MAX = "MAX"
    COUNT_DISTINCT = "COUNT_DISTINCT"

    @classmethod
    def parse(cls, value: "str | AggregateFunction") -> "AggregateFunction":
        if isinstance(value, AggregateFunction):
            return value
        key = str(value).strip().upper().replace(" ", "_")
        if key == "COUNTDISTINCT":
            key = "COUNT_DISTINCT"
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown aggregate function: {value!r}") from None

    @property
    def default_alias_prefix(self) -> str:
        if self is AggregateFunction.COUNT_DISTINCT:
            return "CountDistinct"
        return self.value.capitalize()


@dataclass
class Position:
    x: float = 0.0
    y: float = 0.0


@dataclass
class Size:
    width: float = 250.0
    height: float = 300.0


@dataclass
class Filter:
    """A predicate attached to a column."""

    operator: FilterOperator = FilterOperator.EQUALS
    value: str = ""
    second_value: str | None = None  # BETWEEN upper bound

    def __post_init__(self) -> None:
        self.operator = FilterOperator.parse(self.operator)


@dataclass
class Column:
    """A column of a table on the canvas."""

    name: str
    id: str = field(default_factory=_new_id)
    data_type: str = "nvarchar"
    max_length: int | None = None
    is_nullable: bool = True
    is_selected: bool = False
    is_primary_key: bool = False
    is_foreign_key: bool = False
    is_computed: bool = False
    computed_expression: str | None = None
    alias: str = ""  # output rename
    filter: Filter | None = None

    @property
    def has_expression(self) -> bool:
        """True when the column is computed and carries an expression."""
        return self.is_computed and bool(self.computed_expression)


@dataclass
class Table:
    """A table placed on the canvas. Position and size are opaque to the generator."""

    name: str
    id: str = field(default_factory=_new_id)
    schema: str = ""
    alias: str = ""
    columns: list[Column] = field(default_factory=list)
    position: Position = field(default_factory=Position)
    size: Size = field(default_factory=Size)
    domain_id: str | None = None
    is_from_excel: bool = False

    @property
    def selected_columns(self) -> list[Column]:
        return [column for column in self.columns if column.is_selected]

    def find_column(self, column_id: str) -> Column | None:
        for column in self.columns:
            if column.id == column_id:
                return column
        return None

    def find_column_by_name(self, name: str) -> Column | None:
        lowered = name.lower()
        for column in self.columns:
            if column.name.lower() == lowered:
                return column
        return None


@dataclass
class Relationship:
    """A join drawn between a source column and a target column."""

    source_table_id: str
    source_column_id: str
    target_table_id: str
    target_column_id: str
    id: str = field(default_factory=_new_id)
    join_type: JoinType = JoinType.INNER
    relationship_type: RelationshipType = RelationshipType.SECONDARY
    name: str | None = None
    cardinality: str | None = None

    def __post_init__(self) -> None:
        self.join_type = JoinType.parse(self.join_type)

    def touches(self, table_id: str) -> bool:
        return table_id in (self.source_table_id, self.target_table_id)


@dataclass
class Domain:
    """A visual grouping of tables. Collapsed domains hide their tables."""

    name: str
    id: str = field(default_factory=_new_id)
    color: str = "#e3f2fd"
    is_collapsed: bool = False


@dataclass
class Aggregate:
    """An aggregate output column for the grouped query variant."""

    column_id: str
    function: AggregateFunction = AggregateFunction.COUNT
    alias: str | None = None

    def __post_init__(self) -> None:
        self.function = AggregateFunction.parse(self.function)


@dataclass
class Query:
    """A complete snapshot of the canvas."""

    tables: list[Table] = field(default_factory=list)
    relationships: list[Relationship] = field(default_factory=list)
    domains: list[Domain] = field(default_factory=list)
    group_by_columns: list[str] = field(default_factory=list)
    order_by_columns: list[str] = field(default_factory=list)
    # raw expression -> output alias
    predefined_columns: dict[str, str] = field(default_factory=dict)

    def find_table(self, table_id: str) -> Table | None:
        for table in self.tables:
            if table.id == table_id:
                return table
        return None

    def find_domain(self, domain_id: str) -> Domain | None:
        for domain in self.domains:
            if domain.id == domain_id:
                return domain
        return None

    def find_column(self, column_id: str) -> tuple[Table, Column] | None:
        """Locate a column by id across all tables."""
        for table in self.tables:
            column = table.find_column(column_id)
            if column is not None:
                return table, column
        return None
