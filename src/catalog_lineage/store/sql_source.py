"""Lineage version snapshots stored in a relational database."""

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional
import logging

from sqlalchemy import (
    create_engine, select, func, MetaData, Table, Column, Integer, String, DateTime, JSON, Text,
    UniqueConstraint
)
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from catalog_lineage.errors import SnapshotFetchError, SnapshotNotFoundError
from catalog_lineage.graph import LineageNode, LineageEdge, LineageSnapshot
from .base import SnapshotSource
from .payload import parse_snapshot

logger = logging.getLogger(__name__)


class SqlSnapshotStore(SnapshotSource):
    """Reads and appends lineage versions in the ``lineage_versions`` table.

    Each row holds a complete snapshot of a data product's lineage as JSON,
    so old versions stay readable after the live graph is edited.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self.metadata = MetaData()

        self.versions_table = Table(
            'lineage_versions', self.metadata,
            Column('id', Integer, primary_key=True, autoincrement=True),
            Column('data_product_id', Integer, nullable=False, index=True),
            Column('version', Integer, nullable=False),
            Column('snapshot', JSON, nullable=False),
            Column('change_message', Text),
            Column('created_by', String(255)),
            Column('created_at', DateTime, nullable=False),
            UniqueConstraint('data_product_id', 'version')
        )

        try:
            self.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            raise SnapshotFetchError(f"Cannot open lineage version store: {e}") from e

    @classmethod
    def from_url(cls, database_url: str) -> "SqlSnapshotStore":
        """Connect to a database by SQLAlchemy URL."""
        try:
            engine = create_engine(database_url)
        except SQLAlchemyError as e:
            raise SnapshotFetchError(f"Invalid database URL: {e}") from e
        return cls(engine)

    def list_versions(self, data_product_id: int) -> List[Dict[str, Any]]:
        """Version history of a product, oldest first."""
        query = (
            select(
                self.versions_table.c.version,
                self.versions_table.c.created_at,
                self.versions_table.c.change_message,
                self.versions_table.c.created_by
            )
            .where(self.versions_table.c.data_product_id == data_product_id)
            .order_by(self.versions_table.c.version)
        )
        with self.engine.connect() as conn:
            rows = conn.execute(query).all()

        return [
            {
                "version": row.version,
                "timestamp": row.created_at,
                "changeMessage": row.change_message,
                "createdBy": row.created_by,
            }
            for row in rows
        ]

    def fetch(self, data_product_id: int, version: Optional[int] = None) -> LineageSnapshot:
        """Load the pinned version, or the latest one when none is pinned."""
        try:
            versions = self.list_versions(data_product_id)
            if not versions:
                raise SnapshotNotFoundError(f"No lineage versions for data product {data_product_id}")

            target = version if version is not None else versions[-1]["version"]
            query = select(self.versions_table.c.snapshot).where(
                self.versions_table.c.data_product_id == data_product_id,
                self.versions_table.c.version == target
            )
            with self.engine.connect() as conn:
                snapshot = conn.execute(query).scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error reading lineage for product {data_product_id}: {e}")
            raise SnapshotFetchError(f"Failed to read lineage versions: {e}") from e

        if snapshot is None:
            raise SnapshotNotFoundError(
                f"Data product {data_product_id} has no lineage version {target}"
            )

        payload = dict(snapshot)
        payload["version"] = target
        payload["versions"] = versions
        return parse_snapshot(payload, data_product_id)

    def record_version(
        self,
        data_product_id: int,
        nodes: Iterable[LineageNode],
        edges: Iterable[LineageEdge],
        change_message: Optional[str] = None,
        created_by: Optional[str] = None,
        created_at: Optional[datetime] = None
    ) -> int:
        """Append a new snapshot and return its version number."""
        snapshot = LineageSnapshot(nodes=list(nodes), edges=list(edges)).to_dict()

        with self.engine.begin() as conn:
            current = conn.execute(
                select(func.max(self.versions_table.c.version)).where(
                    self.versions_table.c.data_product_id == data_product_id
                )
            ).scalar()
            next_version = (current or 0) + 1

            conn.execute(
                self.versions_table.insert().values(
                    data_product_id=data_product_id,
                    version=next_version,
                    snapshot={"nodes": snapshot["nodes"], "links": snapshot["links"]},
                    change_message=change_message,
                    created_by=created_by,
                    created_at=created_at or datetime.now(timezone.utc).replace(tzinfo=None)
                )
            )

        logger.info("Recorded lineage version %d for data product %d", next_version, data_product_id)
        return next_version
