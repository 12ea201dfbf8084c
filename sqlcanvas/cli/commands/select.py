"""
Select and grouped command implementations.
"""

import typer

from sqlcanvas.cli.context import CommandContext
from sqlcanvas.parser import parse_aggregate


def cmd_select(
    snapshot: str,
    config: str | None = None,
    verbose: bool = False,
    visible_only: bool = False,
    validate: bool = False,
) -> None:
    """
    Generate a SELECT statement from a snapshot.

    Args:
        snapshot: Path to the snapshot file (.json, .yaml)
        config: Optional TOML file with a [generator] table
        verbose: Enable verbose output
        visible_only: Leave out tables in collapsed domains
        validate: Check the output parses in the configured dialect
    """
    ctx = CommandContext(snapshot=snapshot, config=config, verbose=verbose)

    try:
        ctx.load(validate=validate)
        sql = ctx.generator.generate_select(ctx.query, visible_only=visible_only)
    except Exception as e:
        ctx.handle_error(e)

    ctx.emit(sql)


def cmd_grouped(
    snapshot: str,
    group_by: list[str] | None = None,
    aggregate: list[str] | None = None,
    config: str | None = None,
    verbose: bool = False,
    validate: bool = False,
) -> None:
    """
    Generate a grouped SELECT with aggregates.

    Args:
        snapshot: Path to the snapshot file
        group_by: Column ids to group by
        aggregate: Aggregates as FUNC:COLUMN_ID[:ALIAS]
        config: Optional TOML file with a [generator] table
        verbose: Enable verbose output
        validate: Check the output parses in the configured dialect
    """
    ctx = CommandContext(snapshot=snapshot, config=config, verbose=verbose)

    try:
        ctx.load(validate=validate)
        aggregates = [parse_aggregate(text) for text in aggregate or []]
        if verbose:
            typer.echo(f"Grouping by {group_by or []} with {len(aggregates)} aggregate(s)", err=True)
        sql = ctx.generator.generate_grouped_select(ctx.query, group_by or [], aggregates)
    except Exception as e:
        ctx.handle_error(e)

    ctx.emit(sql)
