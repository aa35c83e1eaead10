"""Store module initialization."""

from .payload import parse_snapshot, SnapshotPayload
from .base import SnapshotSource, JsonFileSnapshotSource
from .rest_source import RestSnapshotSource
from .sql_source import SqlSnapshotStore

__all__ = [
    "parse_snapshot", "SnapshotPayload", "SnapshotSource", "JsonFileSnapshotSource",
    "RestSnapshotSource", "SqlSnapshotStore"
]
