"""
Unit tests for AliasAllocator and OutputNameRegistry.
"""

import pytest

from sqlcanvas.generator.alias_allocator import AliasAllocator, OutputNameRegistry
from sqlcanvas.generator.config import AliasStyle
from sqlcanvas.typing import Table


class TestAliasAllocator:
    """Test cases for table alias allocation."""

    @pytest.fixture
    def allocator(self):
        return AliasAllocator()

    def test_declared_alias_is_used(self, allocator):
        table = Table(id="t1", name="Orders", alias="o")

        assert allocator.alias_for(table) == "o"

    def test_alias_equal_to_name_is_ignored(self, allocator):
        table = Table(id="t1", name="Orders", alias="Orders")

        assert allocator.alias_for(table) == "ord"

    def test_synthesized_alias_uses_first_three_characters(self, allocator):
        assert allocator.alias_for(Table(id="t1", name="Customers")) == "cus"

    def test_colliding_prefixes_get_integer_suffixes(self, allocator):
        aliases = [
            allocator.alias_for(Table(id="t1", name="Orders")),
            allocator.alias_for(Table(id="t2", name="OrderLines")),
            allocator.alias_for(Table(id="t3", name="Ordinals")),
        ]

        assert aliases == ["ord", "ord1", "ord2"]

    def test_same_name_different_ids_get_distinct_aliases(self, allocator):
        first = allocator.alias_for(Table(id="t1", name="Orders", schema="sales"))
        second = allocator.alias_for(Table(id="t2", name="Orders", schema="archive"))

        assert first != second

    def test_taken_declared_alias_falls_back_to_synthesized(self, allocator):
        allocator.alias_for(Table(id="t1", name="Customers", alias="c"))
        alias = allocator.alias_for(Table(id="t2", name="Contacts", alias="c"))

        assert alias == "con"

    def test_aliases_compare_case_insensitively(self, allocator):
        allocator.alias_for(Table(id="t1", name="Archive", alias="ORD"))

        assert allocator.alias_for(Table(id="t2", name="Orders")) == "ord1"

    def test_repeat_lookup_returns_cached_alias(self, allocator):
        table = Table(id="t1", name="Orders")
        first = allocator.alias_for(table)
        allocator.alias_for(Table(id="t2", name="Orders"))

        assert allocator.alias_for(table) == first
        assert allocator.get_alias("t1") == first
        assert len(allocator) == 2

    def test_reset_clears_state(self, allocator):
        allocator.alias_for(Table(id="t1", name="Orders"))
        allocator.reset()

        assert allocator.get_alias("t1") is None
        assert allocator.alias_for(Table(id="t2", name="Orders")) == "ord"

    def test_invalid_characters_are_dropped(self, allocator):
        assert allocator.alias_for(Table(id="t1", name="Order Lines")) == "ord"

    def test_leading_digit_gets_letter_prefix(self, allocator):
        assert allocator.alias_for(Table(id="t1", name="2024 Sales")) == "t202"

    def test_empty_name_still_gets_alias(self, allocator):
        assert allocator.alias_for(Table(id="t1", name="")) == "t"

    def test_custom_prefix_length(self):
        allocator = AliasAllocator(prefix_length=5)

        assert allocator.alias_for(Table(id="t1", name="Customers")) == "custo"


class TestWordsAliasStyle:
    """Test cases for the word-initials alias style."""

    @pytest.fixture
    def allocator(self):
        return AliasAllocator(style=AliasStyle.WORDS)

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("order_lines", "ol"),
            ("Order Lines", "ol"),
            ("sales-order-line-items", "sol"),
            ("Customers", "c"),
        ],
    )
    def test_initials(self, allocator, name, expected):
        assert allocator.alias_for(Table(id="t1", name=name)) == expected

    def test_initials_collision(self, allocator):
        allocator.alias_for(Table(id="t1", name="order_lines"))

        assert allocator.alias_for(Table(id="t2", name="open_leads")) == "ol1"


class TestOutputNameRegistry:
    """Test cases for SELECT output name de-duplication."""

    def test_free_name_is_granted(self):
        registry = OutputNameRegistry()

        assert registry.register("Id", prefix="ord") == "Id"

    def test_collision_uses_prefix_first(self):
        registry = OutputNameRegistry()
        registry.register("Id")

        assert registry.register("Id", prefix="ord") == "ord_Id"

    def test_collision_falls_back_to_counter(self):
        registry = OutputNameRegistry()
        registry.register("Id")
        registry.register("Id", prefix="ord")

        assert registry.register("Id", prefix="ord") == "Id_1"
        assert registry.register("Id") == "Id_2"

    def test_names_compare_case_insensitively(self):
        registry = OutputNameRegistry()
        registry.register("Name")

        assert registry.register("NAME", prefix="c") == "c_NAME"
        assert len(registry) == 2
