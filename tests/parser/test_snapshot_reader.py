"""
Tests for reading canvas snapshots.
"""

import json

import pytest

from sqlcanvas.parser import SnapshotReaderError, parse_aggregate, query_from_dict, read_snapshot
from sqlcanvas.typing import AggregateFunction, FilterOperator, JoinType, RelationshipType


@pytest.fixture
def snapshot_dict():
    return {
        "tables": [
            {
                "id": "orders",
                "name": "Orders",
                "alias": "ord",
                "position": {"x": 10, "y": 20},
                "columns": [
                    {"id": "orders.id", "name": "Id", "data_type": "int", "is_primary_key": True},
                    {
                        "id": "orders.amount",
                        "name": "Amount",
                        "data_type": "decimal",
                        "is_selected": True,
                        "filter": {"operator": "<>", "value": 0},
                    },
                ],
            },
            {
                "id": "customers",
                "name": "Customers",
                "domain_id": "crm",
                "columns": [{"id": "customers.id", "name": "Id"}],
            },
        ],
        "relationships": [
            {
                "id": "r1",
                "source_table_id": "orders",
                "source_column_id": "orders.id",
                "target_table_id": "customers",
                "target_column_id": "customers.id",
                "join_type": "FullOuter",
                "relationship_type": "Foreign",
            }
        ],
        "domains": [{"id": "crm", "name": "CRM", "is_collapsed": True}],
        "order_by_columns": ["[ord].[Amount] DESC"],
        "predefined_columns": {"GETDATE()": "Now"},
    }


class TestQueryFromDict:
    """Test cases for building a Query from a mapping."""

    def test_tables_and_columns(self, snapshot_dict):
        query = query_from_dict(snapshot_dict)

        orders = query.find_table("orders")
        assert orders.alias == "ord"
        assert orders.position.x == 10
        assert [c.name for c in orders.columns] == ["Id", "Amount"]
        assert orders.columns[0].is_primary_key
        assert orders.columns[1].is_selected

    def test_filter_is_parsed(self, snapshot_dict):
        query = query_from_dict(snapshot_dict)

        condition = query.find_table("orders").columns[1].filter
        assert condition.operator is FilterOperator.NOT_EQUALS
        assert condition.value == "0"
        assert condition.second_value is None

    def test_relationship(self, snapshot_dict):
        rel = query_from_dict(snapshot_dict).relationships[0]

        assert rel.id == "r1"
        assert rel.join_type is JoinType.FULL_OUTER
        assert rel.relationship_type is RelationshipType.FOREIGN

    def test_domains_and_lists(self, snapshot_dict):
        query = query_from_dict(snapshot_dict)

        assert query.find_domain("crm").is_collapsed
        assert query.find_table("customers").domain_id == "crm"
        assert query.order_by_columns == ["[ord].[Amount] DESC"]
        assert query.predefined_columns == {"GETDATE()": "Now"}

    def test_defaults(self):
        query = query_from_dict({"tables": [{"id": "t", "name": "T", "columns": [{"name": "A"}]}]})

        column = query.tables[0].columns[0]
        assert column.data_type == "nvarchar"
        assert column.is_nullable
        assert not column.is_selected
        assert column.id
        assert query.relationships == []

    def test_empty_snapshot(self):
        assert query_from_dict({}).tables == []

    def test_table_without_id(self):
        with pytest.raises(SnapshotReaderError, match="missing required field 'id'"):
            query_from_dict({"tables": [{"name": "T"}]})

    def test_column_without_name(self):
        with pytest.raises(SnapshotReaderError, match="missing required field 'name'"):
            query_from_dict({"tables": [{"id": "t", "name": "T", "columns": [{"id": "c"}]}]})

    def test_duplicate_table_ids(self):
        with pytest.raises(SnapshotReaderError, match="Duplicate table id 't'"):
            query_from_dict({"tables": [{"id": "t", "name": "A"}, {"id": "t", "name": "B"}]})

    def test_unknown_join_type(self, snapshot_dict):
        snapshot_dict["relationships"][0]["join_type"] = "sideways"

        with pytest.raises(SnapshotReaderError, match="Relationship #0"):
            query_from_dict(snapshot_dict)

    def test_predefined_columns_must_be_a_mapping(self):
        with pytest.raises(SnapshotReaderError, match="predefined_columns"):
            query_from_dict({"predefined_columns": ["GETDATE()"]})

    def test_snapshot_must_be_a_mapping(self):
        with pytest.raises(SnapshotReaderError, match="must be a mapping"):
            query_from_dict(["not", "a", "snapshot"])


class TestParseAggregate:
    """Test cases for the FUNC:COLUMN_ID[:ALIAS] syntax."""

    def test_without_alias(self):
        aggregate = parse_aggregate("sum:orders.amount")

        assert aggregate.function is AggregateFunction.SUM
        assert aggregate.column_id == "orders.amount"
        assert aggregate.alias is None

    def test_with_alias(self):
        aggregate = parse_aggregate("count_distinct:orders.id:Orders")

        assert aggregate.function is AggregateFunction.COUNT_DISTINCT
        assert aggregate.alias == "Orders"

    @pytest.mark.parametrize("text", ["SUM", "SUM:", ":orders.id", "A:B:C:D", "MEDIAN:orders.id"])
    def test_invalid(self, text):
        with pytest.raises(SnapshotReaderError):
            parse_aggregate(text)


class TestReadSnapshot:
    """Test cases for reading snapshot files."""

    def test_read_json(self, tmp_path, snapshot_dict):
        path = tmp_path / "snapshot.json"
        path.write_text(json.dumps(snapshot_dict), encoding="utf-8")

        query = read_snapshot(path)

        assert [t.id for t in query.tables] == ["orders", "customers"]

    def test_read_yaml(self, tmp_path):
        path = tmp_path / "snapshot.yml"
        path.write_text(
            "tables:\n"
            "  - id: t\n"
            "    name: T\n"
            "    columns:\n"
            "      - {name: A, is_selected: true}\n",
            encoding="utf-8",
        )

        query = read_snapshot(str(path))

        assert query.tables[0].columns[0].is_selected

    def test_missing_file(self, tmp_path):
        with pytest.raises(SnapshotReaderError, match="not found"):
            read_snapshot(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(SnapshotReaderError, match="Invalid JSON"):
            read_snapshot(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("tables: [\n", encoding="utf-8")

        with pytest.raises(SnapshotReaderError, match="Invalid YAML"):
            read_snapshot(path)

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        with pytest.raises(SnapshotReaderError, match="Empty YAML"):
            read_snapshot(path)
