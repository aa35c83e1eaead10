"""Base snapshot source interface."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional
import json

from catalog_lineage.errors import SnapshotFetchError, SnapshotFormatError
from catalog_lineage.graph import LineageSnapshot
from .payload import parse_snapshot


class SnapshotSource(ABC):
    """Abstract base class for anything that serves lineage snapshots."""

    @abstractmethod
    def fetch(self, data_product_id: int, version: Optional[int] = None) -> LineageSnapshot:
        """Fetch the lineage snapshot of a data product.

        Args:
            data_product_id: Data product to fetch lineage for
            version: Pinned version, or None for the current one

        Returns:
            The snapshot, with the product's full version history
        """
        pass


class JsonFileSnapshotSource(SnapshotSource):
    """Serves a single snapshot saved as a JSON file.

    The file holds one lineage response, so the product id is only recorded
    on the snapshot and a pinned version must match the file's version.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def fetch(self, data_product_id: int, version: Optional[int] = None) -> LineageSnapshot:
        """Load the snapshot from disk."""
        try:
            with open(self.path, "r") as f:
                data = json.load(f)
        except OSError as e:
            raise SnapshotFetchError(f"Cannot read {self.path}: {e}") from e
        except json.JSONDecodeError as e:
            raise SnapshotFormatError(f"{self.path} is not valid JSON: {e}") from e

        snapshot = parse_snapshot(data, data_product_id)
        if version is not None and version != snapshot.version:
            raise SnapshotFetchError(
                f"{self.path} holds version {snapshot.version}, not version {version}"
            )
        return snapshot
