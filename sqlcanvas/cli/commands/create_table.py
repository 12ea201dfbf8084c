"""
Create table command implementation.
"""

from sqlcanvas.cli.context import CommandContext


def cmd_create_table(
    snapshot: str,
    table: str,
    config: str | None = None,
    verbose: bool = False,
) -> None:
    """Generate a CREATE TABLE script for one table of the snapshot."""
    ctx = CommandContext(snapshot=snapshot, config=config, verbose=verbose)

    try:
        ctx.load()
        sql = ctx.generator.generate_create_table(ctx.get_table(table))
    except Exception as e:
        ctx.handle_error(e)

    ctx.emit(sql)
