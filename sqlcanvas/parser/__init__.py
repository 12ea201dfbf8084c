"""
Input parsing for canvas snapshots.
"""

from .snapshot_reader import (
    SnapshotReaderError,
    parse_aggregate,
    query_from_dict,
    read_snapshot,
)

__all__ = [
    "SnapshotReaderError",
    "parse_aggregate",
    "query_from_dict",
    "read_snapshot",
]
