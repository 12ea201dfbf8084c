"""
Command context for shared setup across CLI commands.
"""

import traceback
from pathlib import Path

import typer

from sqlcanvas.generator import QueryGenerator, is_comment_only
from sqlcanvas.parser import read_snapshot
from sqlcanvas.typing import Query, Table

from .utils import load_generator_config, setup_logging


class CommandContext:
    """
    Shared context for CLI commands.

    Handles common setup: logging, loading the generator configuration and
    reading the snapshot.
    """

    def __init__(
        self,
        snapshot: str,
        config: str | None = None,
        verbose: bool = False,
    ):
        self.snapshot_path = Path(snapshot).resolve()
        self.config_path = config
        self.verbose = verbose
        setup_logging(self.verbose)

        self.query: Query | None = None
        self.generator: QueryGenerator | None = None

    def load(self, validate: bool = False) -> None:
        """Load configuration and snapshot. Errors propagate to the command."""
        config = load_generator_config(self.config_path)
        if validate:
            config.validate_output = True
        self.generator = QueryGenerator(config)
        self.query = read_snapshot(self.snapshot_path)

    def get_table(self, table_id: str) -> Table:
        """Look up a table by id or, failing that, by name."""
        table = self.query.find_table(table_id)
        if table is None:
            matches = [t for t in self.query.tables if t.name.lower() == table_id.lower()]
            if len(matches) == 1:
                table = matches[0]
        if table is None:
            raise ValueError(f"Table '{table_id}' not found in snapshot")
        return table

    def emit(self, sql: str) -> None:
        """Print generated SQL. Comment-only output exits with status 2."""
        typer.echo(sql)
        if is_comment_only(sql):
            raise typer.Exit(2)

    def handle_error(self, error: Exception, show_traceback: bool | None = None) -> None:
        """
        Handle errors consistently across commands.

        Args:
            error: The exception that occurred
            show_traceback: Whether to show traceback (defaults to verbose mode)
        """
        if show_traceback is None:
            show_traceback = self.verbose

        error_prefix = typer.style("Error: ", fg=typer.colors.RED, bold=True)
        typer.echo(f"{error_prefix}{error}", err=True)
        if show_traceback:
            traceback.print_exc()
        raise typer.Exit(1)
