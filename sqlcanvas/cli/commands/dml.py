"""
Insert, update and delete command implementations.
"""

from sqlcanvas.cli.context import CommandContext
from sqlcanvas.cli.utils import parse_values


def cmd_insert(
    snapshot: str,
    table: str,
    values: str | None = None,
    config: str | None = None,
    verbose: bool = False,
) -> None:
    """Generate an INSERT for one table of the snapshot."""
    ctx = CommandContext(snapshot=snapshot, config=config, verbose=verbose)

    try:
        ctx.load()
        row = parse_values(values, "--values")
        sql = ctx.generator.generate_insert(ctx.get_table(table), row)
    except Exception as e:
        ctx.handle_error(e)

    ctx.emit(sql)


def cmd_update(
    snapshot: str,
    table: str,
    values: str | None = None,
    where: str | None = None,
    config: str | None = None,
    verbose: bool = False,
) -> None:
    """Generate an UPDATE for one table of the snapshot."""
    ctx = CommandContext(snapshot=snapshot, config=config, verbose=verbose)

    try:
        ctx.load()
        row = parse_values(values, "--values")
        match = parse_values(where, "--where")
        sql = ctx.generator.generate_update(ctx.get_table(table), row, match)
    except Exception as e:
        ctx.handle_error(e)

    ctx.emit(sql)


def cmd_delete(
    snapshot: str,
    table: str,
    where: str | None = None,
    config: str | None = None,
    verbose: bool = False,
) -> None:
    """Generate a DELETE for one table of the snapshot."""
    ctx = CommandContext(snapshot=snapshot, config=config, verbose=verbose)

    try:
        ctx.load()
        match = parse_values(where, "--where")
        sql = ctx.generator.generate_delete(ctx.get_table(table), match)
    except Exception as e:
        ctx.handle_error(e)

    ctx.emit(sql)
