"""
Join graph building: choose the FROM table and emit JOIN clauses.
"""

import logging
from dataclasses import dataclass, field

from sqlcanvas.typing import JoinType, Table

from .alias_allocator import AliasAllocator
from .constants import JOIN_TYPE_ORDER
from .dialect import column_reference, qualify_table, quote_identifier
from .exceptions import JoinGraphError
from .relevance import ResolvedRelationship

logger = logging.getLogger(__name__)


@dataclass
class JoinStep:
    """One JOIN clause: the table being joined and the relationship joining it."""

    table: Table
    relationship: ResolvedRelationship

    @property
    def join_type(self) -> JoinType:
        return self.relationship.join_type


@dataclass
class JoinPlan:
    """The FROM anchor plus the ordered JOIN steps covering every reachable table."""

    root: Table
    steps: list[JoinStep] = field(default_factory=list)
    unreachable: list[Table] = field(default_factory=list)

    @property
    def placed_tables(self) -> list[Table]:
        return [self.root] + [step.table for step in self.steps]

    @property
    def placed_ids(self) -> set[str]:
        return {table.id for table in self.placed_tables}


class JoinGraphBuilder:
    """
    Builds a spanning join structure over the relevant tables.

    Starting from the root, relationships touching the current table are
    followed depth-first, inner joins first. A table is joined at most once;
    any relationship leading back to an already placed table is dropped,
    which makes the traversal safe on cyclic graphs. Tables that cannot be
    reached from the root are reported in ``JoinPlan.unreachable`` and left
    out of the statement.
    """

    def choose_root(
        self,
        tables: list[Table],
        relationships: list[ResolvedRelationship],
        selection_counts: dict[str, int] | None = None,
    ) -> Table:
        """
        Pick the FROM table.

        Priority:
        1. Most selected columns (ties go to the earlier table)
        2. Most outgoing relationships, if nothing is selected
        3. The first table

        Raises:
            JoinGraphError: If there are no tables to choose from
        """
        if not tables:
            raise JoinGraphError("Cannot choose a root table from an empty table list")

        if selection_counts is None:
            selection_counts = {t.id: len(t.selected_columns) for t in tables}

        best = max(tables, key=lambda t: selection_counts.get(t.id, 0))
        if selection_counts.get(best.id, 0) > 0:
            return best

        outgoing = {t.id: 0 for t in tables}
        for rel in relationships:
            if rel.source_table.id in outgoing:
                outgoing[rel.source_table.id] += 1
        best = max(tables, key=lambda t: outgoing[t.id])
        if outgoing[best.id] > 0:
            return best

        return tables[0]

    def build(
        self,
        tables: list[Table],
        relationships: list[ResolvedRelationship],
        selection_counts: dict[str, int] | None = None,
    ) -> JoinPlan:
        """
        Build the join plan for the given relevant tables.

        Args:
            tables: Relevant tables, in input order
            relationships: Resolved relationships
            selection_counts: Per-table column counts used to choose the root

        Returns:
            JoinPlan with the root, join steps and any unreachable tables
        """
        root = self.choose_root(tables, relationships, selection_counts)
        logger.debug(f"Chose root table '{root.name}' ({root.id})")

        table_ids = {t.id for t in tables}
        usable = [
            rel
            for rel in relationships
            if rel.source_table.id in table_ids and rel.target_table.id in table_ids
        ]

        plan = JoinPlan(root=root)
        placed = {root.id}
        self._expand(root, usable, placed, plan)

        plan.unreachable = [t for t in tables if t.id not in placed]
        if plan.unreachable:
            logger.warning(
                "Tables not connected to root table "
                f"'{root.name}' are left out of the query: "
                f"{[t.name for t in plan.unreachable]}"
            )
        return plan

    @staticmethod
    def _candidates(
        current: Table, relationships: list[ResolvedRelationship], placed: set[str]
    ) -> list[ResolvedRelationship]:
        candidates = [
            rel
            for rel in relationships
            if rel.touches(current.id)
            and not (rel.source_table.id in placed and rel.target_table.id in placed)
        ]
        # sorted() is stable, so input order breaks ties
        candidates.sort(key=lambda rel: JOIN_TYPE_ORDER[rel.join_type])
        return candidates

    def _expand(
        self,
        root: Table,
        relationships: list[ResolvedRelationship],
        placed: set[str],
        plan: JoinPlan,
    ) -> None:
        # Depth-first over an explicit stack of (table, remaining candidates)
        stack = [(root, iter(self._candidates(root, relationships, placed)))]
        while stack:
            current, pending = stack[-1]
            for rel in pending:
                far = rel.other_end(current.id)
                # A deeper visit may have placed it already
                if far.id in placed:
                    continue
                placed.add(far.id)
                plan.steps.append(JoinStep(table=far, relationship=rel))
                logger.debug(
                    f"{rel.join_type.keyword} '{far.name}' via relationship {rel.relationship.id}"
                )
                stack.append((far, iter(self._candidates(far, relationships, placed))))
                break
            else:
                stack.pop()

    def render(
        self, plan: JoinPlan, allocator: AliasAllocator, default_schema: str
    ) -> tuple[str, list[str]]:
        """
        Render the FROM line and JOIN lines for a plan.

        The ON predicate uses the aliases of the relationship's declared source
        and target tables, whichever side the traversal arrived from.
        """
        from_line = "FROM " + self._table_source(plan.root, allocator, default_schema)

        join_lines = []
        for step in plan.steps:
            rel = step.relationship
            line = f"{step.join_type.keyword} " + self._table_source(
                step.table, allocator, default_schema
            )
            if step.join_type is not JoinType.CROSS:
                source_ref = column_reference(
                    allocator.alias_for(rel.source_table), rel.source_column.name
                )
                target_ref = column_reference(
                    allocator.alias_for(rel.target_table), rel.target_column.name
                )
                line += f" ON {source_ref} = {target_ref}"
            join_lines.append(line)

        return from_line, join_lines

    @staticmethod
    def _table_source(table: Table, allocator: AliasAllocator, default_schema: str) -> str:
        schema = table.schema or default_schema
        return f"{qualify_table(schema, table.name)} AS {quote_identifier(allocator.alias_for(table))}"
