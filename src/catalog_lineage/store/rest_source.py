"""REST client for the catalog's lineage endpoint."""

from typing import Any, Dict, Optional
import logging

import httpx

from catalog_lineage.errors import SnapshotFetchError, SnapshotFormatError, SnapshotNotFoundError
from catalog_lineage.graph import LineageSnapshot
from .base import SnapshotSource
from .payload import parse_snapshot

logger = logging.getLogger(__name__)


class RestSnapshotSource(SnapshotSource):
    """Fetches snapshots from ``GET /api/lineage``.

    Failures are raised, not retried; the caller decides what the user sees.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.client = client or httpx.Client(timeout=timeout)

    def build_params(self, data_product_id: int, version: Optional[int] = None) -> Dict[str, Any]:
        params: Dict[str, Any] = {"dataProductId": data_product_id}
        if version is not None:
            params["version"] = version
        return params

    def fetch(self, data_product_id: int, version: Optional[int] = None) -> LineageSnapshot:
        """Fetch the lineage of a data product, optionally pinned to a version."""
        url = f"{self.base_url}/api/lineage"

        try:
            response = self.client.get(url, params=self.build_params(data_product_id, version))
        except httpx.HTTPError as e:
            logger.error(f"Error fetching lineage for product {data_product_id}: {e}")
            raise SnapshotFetchError(f"Cannot reach lineage service: {e}") from e

        if response.status_code == 404:
            raise SnapshotNotFoundError(
                f"No lineage for data product {data_product_id}"
                + (f" version {version}" if version is not None else ""),
                status_code=404
            )
        if response.status_code != 200:
            logger.error(f"Failed to fetch lineage: {response.status_code} - {response.text}")
            raise SnapshotFetchError(
                f"Lineage service returned {response.status_code}",
                status_code=response.status_code
            )

        try:
            data = response.json()
        except ValueError as e:
            raise SnapshotFormatError(f"Lineage response is not JSON: {e}") from e

        return parse_snapshot(data, data_product_id)

    def close(self) -> None:
        self.client.close()
