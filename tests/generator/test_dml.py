"""
Tests for INSERT, UPDATE and DELETE generation.
"""

import decimal

import pytest

from sqlcanvas.generator import NO_INSERTABLE_COLUMNS_COMMENT, NO_UPDATABLE_COLUMNS_COMMENT
from sqlcanvas.typing import Column


@pytest.fixture
def orders(orders_table):
    orders_table.columns.append(
        Column(id="orders.total", name="Total", is_computed=True, computed_expression="Amount * 2")
    )
    orders_table.columns.append(Column(id="orders.note", name="Note"))
    return orders_table


class TestGenerateInsert:
    """Test cases for INSERT generation."""

    def test_insert(self, generator, orders):
        sql = generator.generate_insert(
            orders, {"CustomerId": 7, "Amount": decimal.Decimal("10.50"), "Note": "O'Brien"}
        )

        assert sql == (
            "INSERT INTO [dbo].[Orders] ([CustomerId], [Amount], [Note])\n"
            "VALUES (7, 10.50, 'O''Brien')"
        )

    def test_primary_key_may_be_inserted(self, generator, orders):
        sql = generator.generate_insert(orders, {"Id": 1})

        assert sql == "INSERT INTO [dbo].[Orders] ([Id])\nVALUES (1)"

    def test_none_becomes_null(self, generator, orders):
        sql = generator.generate_insert(orders, {"Note": None})

        assert sql.endswith("VALUES (NULL)")

    def test_keys_match_case_insensitively(self, generator, orders):
        sql = generator.generate_insert(orders, {"customerid": 3})

        assert sql.startswith("INSERT INTO [dbo].[Orders] ([CustomerId])")

    def test_computed_and_unknown_columns_are_skipped(self, generator, orders):
        sql = generator.generate_insert(orders, {"Total": 5, "Bogus": 1, "Amount": 2})

        assert sql == (
            "-- Skipped computed column [Total]\n"
            "-- Skipped unknown column [Bogus]\n"
            "INSERT INTO [dbo].[Orders] ([Amount])\n"
            "VALUES (2)"
        )

    def test_duplicate_keys_insert_the_column_once(self, generator, orders):
        sql = generator.generate_insert(orders, {"Amount": 1, "amount": 2})

        assert sql == (
            "-- Skipped duplicate column [amount]\n"
            "INSERT INTO [dbo].[Orders] ([Amount])\n"
            "VALUES (1)"
        )

    def test_nothing_insertable_gives_comment(self, generator, orders):
        sql = generator.generate_insert(orders, {"Total": 5})

        assert sql == NO_INSERTABLE_COLUMNS_COMMENT + "\n-- Skipped computed column [Total]"

    def test_empty_values_gives_comment(self, generator, orders):
        assert generator.generate_insert(orders, {}) == NO_INSERTABLE_COLUMNS_COMMENT

    def test_table_schema(self, generator, orders):
        orders.schema = "sales"

        assert generator.generate_insert(orders, {"Id": 1}).startswith("INSERT INTO [sales].[Orders]")


class TestGenerateUpdate:
    """Test cases for UPDATE generation."""

    def test_update_with_where(self, generator, orders):
        sql = generator.generate_update(orders, {"Amount": 5, "Note": "paid"}, {"Id": 1})

        assert sql == (
            "UPDATE [dbo].[Orders]\n"
            "SET\n"
            "    [Amount] = 5,\n"
            "    [Note] = 'paid'\n"
            "WHERE\n"
            "    [Id] = 1"
        )

    def test_duplicate_keys_assign_the_column_once(self, generator, orders):
        sql = generator.generate_update(orders, {"Amount": 1, "AMOUNT": 2}, {"Id": 5})

        assert sql == (
            "-- Skipped duplicate column [AMOUNT]\n"
            "UPDATE [dbo].[Orders]\n"
            "SET\n"
            "    [Amount] = 1\n"
            "WHERE\n"
            "    [Id] = 5"
        )

    def test_primary_key_is_never_updated(self, generator, orders):
        sql = generator.generate_update(orders, {"Id": 9, "Amount": 5}, {"Id": 1})

        assert sql.splitlines()[0] == "-- Skipped primary key column [Id]"
        assert "[Id] = 9" not in sql

    def test_multiple_where_values(self, generator, orders):
        sql = generator.generate_update(orders, {"Amount": 0}, {"Id": 1, "Note": None})

        assert sql.endswith("WHERE\n    [Id] = 1 AND\n    [Note] IS NULL")

    def test_missing_where_gets_warning(self, generator, orders):
        sql = generator.generate_update(orders, {"Amount": 0})

        assert sql == (
            "-- WARNING: No WHERE values supplied. "
            "This UPDATE affects every row in [dbo].[Orders].\n"
            "UPDATE [dbo].[Orders]\n"
            "SET\n"
            "    [Amount] = 0"
        )

    def test_nothing_updatable_gives_comment(self, generator, orders):
        sql = generator.generate_update(orders, {"Id": 2}, {"Id": 1})

        assert sql == NO_UPDATABLE_COLUMNS_COMMENT + "\n-- Skipped primary key column [Id]"

    def test_unknown_where_column_is_an_error(self, generator, orders):
        sql = generator.generate_update(orders, {"Amount": 1}, {"Nope": 1})

        assert sql == (
            "-- Error generating SQL: Unknown column 'Nope' in WHERE values for table 'Orders'"
        )


class TestGenerateDelete:
    """Test cases for DELETE generation."""

    def test_delete_with_where(self, generator, orders):
        sql = generator.generate_delete(orders, {"CustomerId": 7})

        assert sql == "DELETE FROM [dbo].[Orders]\nWHERE\n    [CustomerId] = 7"

    def test_null_match(self, generator, orders):
        sql = generator.generate_delete(orders, {"Note": None})

        assert sql.endswith("WHERE\n    [Note] IS NULL")

    def test_missing_where_is_neutralised(self, generator, orders):
        sql = generator.generate_delete(orders)

        assert sql == (
            "-- WARNING: No WHERE values supplied. "
            "This DELETE affects every row in [dbo].[Orders].\n"
            "DELETE FROM [dbo].[Orders]\n"
            "-- WHERE 1 = 0"
        )

    def test_unknown_where_column_is_an_error(self, generator, orders):
        sql = generator.generate_delete(orders, {"Nope": 1})

        assert sql.startswith("-- Error generating SQL: Unknown column 'Nope'")

    def test_validated_delete_passes(self, make_generator, orders):
        sql = make_generator(validate_output=True).generate_delete(orders, {"Id": 3})

        assert sql == "DELETE FROM [dbo].[Orders]\nWHERE\n    [Id] = 3"
