"""
Pytest configuration and shared fixtures for sqlcanvas tests.
"""

import pytest

from sqlcanvas.generator import GeneratorConfig, QueryGenerator
from sqlcanvas.typing import Column, Query, Relationship, Table


@pytest.fixture
def generator():
    """Create a QueryGenerator with default configuration."""
    return QueryGenerator()


@pytest.fixture
def make_generator():
    """Create a QueryGenerator from configuration keyword arguments."""

    def _make(**settings):
        return QueryGenerator(GeneratorConfig(**settings))

    return _make


@pytest.fixture
def orders_table():
    """Orders table with its primary key selected."""
    return Table(
        id="orders",
        name="Orders",
        alias="ord",
        columns=[
            Column(id="orders.id", name="Id", data_type="int", is_primary_key=True, is_selected=True),
            Column(id="orders.customer_id", name="CustomerId", data_type="int", is_foreign_key=True),
            Column(id="orders.amount", name="Amount", data_type="decimal"),
        ],
    )


@pytest.fixture
def customers_table():
    """Customers table with Name selected."""
    return Table(
        id="customers",
        name="Customers",
        alias="cust",
        columns=[
            Column(id="customers.id", name="Id", data_type="int", is_primary_key=True),
            Column(id="customers.name", name="Name", data_type="nvarchar", is_selected=True),
        ],
    )


@pytest.fixture
def orders_customers_relationship():
    """Orders.CustomerId -> Customers.Id, inner join."""
    return Relationship(
        id="orders_customers",
        source_table_id="orders",
        source_column_id="orders.customer_id",
        target_table_id="customers",
        target_column_id="customers.id",
    )


@pytest.fixture
def orders_query(orders_table, customers_table, orders_customers_relationship):
    """Orders joined to Customers."""
    return Query(
        tables=[orders_table, customers_table],
        relationships=[orders_customers_relationship],
    )


def make_table(table_id, name, *column_names, selected=(), alias=""):
    """Build a table whose column ids are '<table_id>.<column name>'."""
    return Table(
        id=table_id,
        name=name,
        alias=alias,
        columns=[
            Column(id=f"{table_id}.{col}", name=col, is_selected=col in selected)
            for col in column_names
        ],
    )


def link(source_table_id, source_column, target_table_id, target_column, join_type="inner"):
    """Build a relationship between '<table_id>.<column>' columns."""
    return Relationship(
        id=f"{source_table_id}-{target_table_id}",
        source_table_id=source_table_id,
        source_column_id=f"{source_table_id}.{source_column}",
        target_table_id=target_table_id,
        target_column_id=f"{target_table_id}.{target_column}",
        join_type=join_type,
    )


@pytest.fixture
def table_factory():
    return make_table


@pytest.fixture
def link_factory():
    return link


def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
