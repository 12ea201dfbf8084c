"""
Snapshot Reader - Reads canvas snapshots from JSON and YAML files.

A snapshot is the full query graph the UI hands to the generator: tables with
their columns, relationships, domains and the optional GROUP BY / ORDER BY /
predefined column lists.
"""

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from sqlcanvas.typing import (
    Aggregate,
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

logger = logging.getLogger(__name__)


class SnapshotReaderError(Exception):
    """Exception raised when reading or validating a snapshot fails."""
    pass


def _require(data: dict[str, Any], key: str, context: str) -> Any:
    if key not in data or data[key] in (None, ""):
        raise SnapshotReaderError(f"{context} is missing required field '{key}'")
    return data[key]


def _mapping(data: Any, context: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise SnapshotReaderError(f"{context} must be a mapping, got {type(data).__name__}")
    return data


def _filter_from_dict(data: dict[str, Any] | None, context: str) -> Filter | None:
    if data is None:
        return None
    data = _mapping(data, context)
    second = data.get("second_value")
    return Filter(
        operator=FilterOperator.parse(data.get("operator", "=")),
        value="" if data.get("value") is None else str(data.get("value")),
        second_value=None if second is None else str(second),
    )


def _column_from_dict(data: dict[str, Any], context: str) -> Column:
    data = _mapping(data, context)
    name = _require(data, "name", context)
    column_context = f"{context} column '{name}'"
    kwargs = {
        "name": str(name),
        "data_type": data.get("data_type", "nvarchar"),
        "max_length": data.get("max_length"),
        "is_nullable": bool(data.get("is_nullable", True)),
        "is_selected": bool(data.get("is_selected", False)),
        "is_primary_key": bool(data.get("is_primary_key", False)),
        "is_foreign_key": bool(data.get("is_foreign_key", False)),
        "is_computed": bool(data.get("is_computed", False)),
        "computed_expression": data.get("computed_expression"),
        "alias": data.get("alias") or "",
        "filter": _filter_from_dict(data.get("filter"), f"{column_context} filter"),
    }
    if data.get("id"):
        kwargs["id"] = str(data["id"])
    return Column(**kwargs)


def _table_from_dict(data: dict[str, Any], index: int) -> Table:
    data = _mapping(data, f"Table #{index}")
    table_id = str(_require(data, "id", f"Table #{index}"))
    name = str(_require(data, "name", f"Table {table_id}"))
    context = f"Table '{name}'"

    position = data.get("position") or {}
    size = data.get("size") or {}
    return Table(
        id=table_id,
        name=name,
        schema=data.get("schema") or "",
        alias=data.get("alias") or "",
        columns=[_column_from_dict(c, context) for c in data.get("columns") or []],
        position=Position(x=position.get("x", 0.0), y=position.get("y", 0.0)),
        size=Size(width=size.get("width", 250.0), height=size.get("height", 300.0)),
        domain_id=data.get("domain_id"),
        is_from_excel=bool(data.get("is_from_excel", False)),
    )


def _relationship_from_dict(data: dict[str, Any], index: int) -> Relationship:
    context = f"Relationship #{index}"
    data = _mapping(data, context)
    try:
        join_type = JoinType.parse(data.get("join_type", "inner"))
        relationship_type = RelationshipType(
            str(data.get("relationship_type", "secondary")).lower()
        )
    except ValueError as e:
        raise SnapshotReaderError(f"{context}: {e}") from e

    kwargs = {
        "source_table_id": str(_require(data, "source_table_id", context)),
        "source_column_id": str(_require(data, "source_column_id", context)),
        "target_table_id": str(_require(data, "target_table_id", context)),
        "target_column_id": str(_require(data, "target_column_id", context)),
        "join_type": join_type,
        "relationship_type": relationship_type,
        "name": data.get("name"),
        "cardinality": data.get("cardinality"),
    }
    if data.get("id"):
        kwargs["id"] = str(data["id"])
    return Relationship(**kwargs)


def _domain_from_dict(data: dict[str, Any], index: int) -> Domain:
    context = f"Domain #{index}"
    data = _mapping(data, context)
    return Domain(
        id=str(_require(data, "id", context)),
        name=str(data.get("name", "")),
        color=data.get("color", "#e3f2fd"),
        is_collapsed=bool(data.get("is_collapsed", False)),
    )


def query_from_dict(data: dict[str, Any]) -> Query:
    """
    Build a Query from a snapshot mapping.

    Args:
        data: Snapshot mapping (as loaded from JSON or YAML)

    Returns:
        Query snapshot

    Raises:
        SnapshotReaderError: If the mapping is not a valid snapshot
    """
    data = _mapping(data, "Snapshot")

    tables = [_table_from_dict(t, i) for i, t in enumerate(data.get("tables") or [])]
    seen = set()
    for table in tables:
        if table.id in seen:
            raise SnapshotReaderError(f"Duplicate table id '{table.id}'")
        seen.add(table.id)

    predefined = data.get("predefined_columns") or {}
    if not isinstance(predefined, dict):
        raise SnapshotReaderError("'predefined_columns' must map expressions to aliases")

    query = Query(
        tables=tables,
        relationships=[
            _relationship_from_dict(r, i) for i, r in enumerate(data.get("relationships") or [])
        ],
        domains=[_domain_from_dict(d, i) for i, d in enumerate(data.get("domains") or [])],
        group_by_columns=[str(c) for c in data.get("group_by_columns") or []],
        order_by_columns=[str(c) for c in data.get("order_by_columns") or []],
        predefined_columns={str(k): str(v) for k, v in predefined.items()},
    )
    logger.debug(
        f"Loaded snapshot with {len(query.tables)} tables and "
        f"{len(query.relationships)} relationships"
    )
    return query


def parse_aggregate(text: str) -> Aggregate:
    """
    Parse an aggregate written as ``FUNC:COLUMN_ID[:ALIAS]``.

    Raises:
        SnapshotReaderError: If the text is malformed or names an unknown function
    """
    parts = text.split(":")
    if len(parts) not in (2, 3) or not parts[0] or not parts[1]:
        raise SnapshotReaderError(
            f"Invalid aggregate '{text}'. Expected FUNC:COLUMN_ID or FUNC:COLUMN_ID:ALIAS"
        )
    try:
        return Aggregate(
            column_id=parts[1],
            function=parts[0],
            alias=parts[2] if len(parts) == 3 and parts[2] else None,
        )
    except ValueError as e:
        raise SnapshotReaderError(str(e)) from e


def read_snapshot(file_path: Path | str) -> Query:
    """
    Read a snapshot from a .json, .yaml or .yml file.

    Raises:
        SnapshotReaderError: If the file cannot be read or is invalid
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise SnapshotReaderError(f"Snapshot file not found: {file_path}")

    is_yaml = file_path.suffix.lower() in (".yaml", ".yml")
    if not is_yaml and file_path.suffix.lower() != ".json":
        logger.warning(f"File {file_path} has no .json/.yaml extension, reading it as JSON")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            if is_yaml:
                data = yaml.safe_load(f)
                if data is None:
                    raise SnapshotReaderError(f"Empty YAML file: {file_path}")
            else:
                data = json.load(f)
    except json.JSONDecodeError as e:
        raise SnapshotReaderError(f"Invalid JSON in snapshot file {file_path}: {e}")
    except yaml.YAMLError as e:
        raise SnapshotReaderError(f"Invalid YAML in snapshot file {file_path}: {e}")
    except OSError as e:
        raise SnapshotReaderError(f"Error reading snapshot file {file_path}: {e}")

    return query_from_dict(data)
