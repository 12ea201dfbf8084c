"""
sqlcanvas

SQL generation for visually composed queries: tables dropped on a canvas,
relationships drawn between columns, SQL produced from the resulting graph.
"""

from .cli import main as cli_main
from .generator import GeneratorConfig, QueryGenerator
from .parser import query_from_dict, read_snapshot
from .typing import Query

__all__ = [
    "GeneratorConfig",
    "Query",
    "QueryGenerator",
    "cli_main",
    "query_from_dict",
    "read_snapshot",
]
