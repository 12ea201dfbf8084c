"""
sqlcanvas CLI Main Module

Command-line interface for generating SQL from canvas snapshots.
"""

from typing import Any

import typer

from sqlcanvas.cli.commands import (
    cmd_create_table,
    cmd_delete,
    cmd_grouped,
    cmd_insert,
    cmd_select,
    cmd_update,
)


class AlphabeticalOrderGroup(typer.core.TyperGroup):
    """Custom Typer Group that lists commands in alphabetical order."""

    def list_commands(self, ctx: typer.Context) -> list[str]:
        return sorted(self.commands.keys())


app = typer.Typer(
    name="sqlcanvas",
    help="sqlcanvas - SQL from visually composed queries",
    add_completion=False,
    rich_markup_mode="rich",
    cls=AlphabeticalOrderGroup,
    invoke_without_command=True,
)


@app.callback()
def main_callback(ctx: typer.Context) -> None:
    """Main CLI callback - shows help when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


# Common option definitions to reduce duplication
SNAPSHOT_ARG = typer.Argument(None, help="Path to the snapshot file (.json, .yaml, .yml)")
CONFIG_OPTION = typer.Option(
    None, "-c", "--config", help="TOML file with a [generator] configuration table"
)
VERBOSE_OPTION = typer.Option(False, "-v", "--verbose", help="Enable verbose output")
VALIDATE_OPTION = typer.Option(
    False, "--validate", help="Check the generated SQL parses in the configured dialect"
)
TABLE_OPTION = typer.Option(..., "-t", "--table", help="Id (or unique name) of the target table")
VALUES_OPTION = typer.Option(None, "--values", help="Column values as a JSON object")
WHERE_OPTION = typer.Option(None, "--where", help="Column values to match, as a JSON object")


def _check_required_argument(ctx: typer.Context, arg_name: str, arg_value: Any) -> None:
    """Check if a required argument is provided, show help if not."""
    if arg_value is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)


@app.command()
def select(
    ctx: typer.Context,
    snapshot: str | None = SNAPSHOT_ARG,
    config: str | None = CONFIG_OPTION,
    verbose: bool = VERBOSE_OPTION,
    visible_only: bool = typer.Option(
        False, "--visible-only", help="Leave out tables inside collapsed domains"
    ),
    validate: bool = VALIDATE_OPTION,
) -> None:
    """Generate a SELECT statement from a snapshot."""
    _check_required_argument(ctx, "snapshot", snapshot)
    cmd_select(
        snapshot=snapshot,
        config=config,
        verbose=verbose,
        visible_only=visible_only,
        validate=validate,
    )


@app.command()
def grouped(
    ctx: typer.Context,
    snapshot: str | None = SNAPSHOT_ARG,
    group_by: list[str] | None = typer.Option(
        None, "-g", "--group-by", help="Column id to group by. Can be used multiple times."
    ),
    aggregate: list[str] | None = typer.Option(
        None,
        "-a",
        "--aggregate",
        help="Aggregate as FUNC:COLUMN_ID[:ALIAS]. Can be used multiple times.",
    ),
    config: str | None = CONFIG_OPTION,
    verbose: bool = VERBOSE_OPTION,
    validate: bool = VALIDATE_OPTION,
) -> None:
    """Generate a grouped SELECT with aggregates."""
    _check_required_argument(ctx, "snapshot", snapshot)
    cmd_grouped(
        snapshot=snapshot,
        group_by=group_by,
        aggregate=aggregate,
        config=config,
        verbose=verbose,
        validate=validate,
    )


@app.command()
def insert(
    ctx: typer.Context,
    snapshot: str | None = SNAPSHOT_ARG,
    table: str = TABLE_OPTION,
    values: str | None = VALUES_OPTION,
    config: str | None = CONFIG_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Generate an INSERT statement for one table."""
    _check_required_argument(ctx, "snapshot", snapshot)
    cmd_insert(snapshot=snapshot, table=table, values=values, config=config, verbose=verbose)


@app.command()
def update(
    ctx: typer.Context,
    snapshot: str | None = SNAPSHOT_ARG,
    table: str = TABLE_OPTION,
    values: str | None = VALUES_OPTION,
    where: str | None = WHERE_OPTION,
    config: str | None = CONFIG_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Generate an UPDATE statement for one table."""
    _check_required_argument(ctx, "snapshot", snapshot)
    cmd_update(
        snapshot=snapshot,
        table=table,
        values=values,
        where=where,
        config=config,
        verbose=verbose,
    )


@app.command()
def delete(
    ctx: typer.Context,
    snapshot: str | None = SNAPSHOT_ARG,
    table: str = TABLE_OPTION,
    where: str | None = WHERE_OPTION,
    config: str | None = CONFIG_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Generate a DELETE statement for one table."""
    _check_required_argument(ctx, "snapshot", snapshot)
    cmd_delete(snapshot=snapshot, table=table, where=where, config=config, verbose=verbose)


@app.command("create-table")
def create_table(
    ctx: typer.Context,
    snapshot: str | None = SNAPSHOT_ARG,
    table: str = TABLE_OPTION,
    config: str | None = CONFIG_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Generate a CREATE TABLE script for one table."""
    _check_required_argument(ctx, "snapshot", snapshot)
    cmd_create_table(snapshot=snapshot, table=table, config=config, verbose=verbose)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
