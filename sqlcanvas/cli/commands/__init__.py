"""
CLI command implementations.
"""

from sqlcanvas.cli.commands.create_table import cmd_create_table
from sqlcanvas.cli.commands.dml import cmd_delete, cmd_insert, cmd_update
from sqlcanvas.cli.commands.select import cmd_grouped, cmd_select

__all__ = [
    "cmd_create_table",
    "cmd_delete",
    "cmd_grouped",
    "cmd_insert",
    "cmd_select",
    "cmd_update",
]
