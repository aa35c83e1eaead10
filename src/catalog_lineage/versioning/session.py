"""A lineage view: fetch sequencing, version selection and layout."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional
import logging

from catalog_lineage.errors import CatalogLineageError
from catalog_lineage.graph import LineageSnapshot
from catalog_lineage.layout import LineageLayoutEngine, LayoutResult
from catalog_lineage.store import SnapshotSource
from .selector import VersionSelector

logger = logging.getLogger(__name__)

EMPTY_STATE_MESSAGE = "Select a data product to view its lineage"


class ViewState(Enum):
    """What the lineage view is currently showing."""

    EMPTY = "EMPTY"
    LOADING = "LOADING"
    READY = "READY"
    ERROR = "ERROR"


@dataclass(frozen=True)
class FetchTicket:
    """Identifies one snapshot request issued by a session."""

    sequence: int
    data_product_id: int
    version: Optional[int] = None


class LineageSession:
    """Drives one lineage view from product selection to a laid-out graph.

    Every request gets a ticket with an increasing sequence number. Only
    the most recently issued ticket may change the view: responses and
    failures for older tickets are dropped, whatever order they arrive in.
    """

    def __init__(
        self,
        source: SnapshotSource,
        engine: Optional[LineageLayoutEngine] = None,
        selector: Optional[VersionSelector] = None
    ) -> None:
        self.source = source
        self.engine = engine or LineageLayoutEngine()
        self.selector = selector or VersionSelector()

        self.state = ViewState.EMPTY
        self.snapshot: Optional[LineageSnapshot] = None
        self.result: Optional[LayoutResult] = None
        self.error: Optional[Exception] = None
        self._sequence = 0
        self._latest: Optional[FetchTicket] = None

    @property
    def message(self) -> Optional[str]:
        """Text to show instead of a graph, if any."""
        if self.state == ViewState.EMPTY:
            return EMPTY_STATE_MESSAGE
        if self.state == ViewState.ERROR:
            return f"Failed to load lineage: {self.error}"
        if self.state == ViewState.READY and self.result is not None and self.result.is_empty:
            return EMPTY_STATE_MESSAGE
        return None

    def select_product(self, data_product_id: int) -> FetchTicket:
        """Switch products; the next fetch asks for the product's current version."""
        self.selector.select_product(data_product_id)
        self.snapshot = None
        self.result = None
        return self.begin_request()

    def select_version(self, version: int) -> FetchTicket:
        """Pin a version of the selected product and request it."""
        self.selector.select_version(version)
        return self.begin_request()

    def begin_request(self) -> FetchTicket:
        """Issue a ticket for the selector's current product and version."""
        if self.selector.data_product_id is None:
            raise CatalogLineageError("No data product selected")

        self._sequence += 1
        self._latest = FetchTicket(
            sequence=self._sequence,
            data_product_id=self.selector.data_product_id,
            version=self.selector.requested_version
        )
        self.state = ViewState.LOADING
        self.error = None
        return self._latest

    def is_current(self, ticket: FetchTicket) -> bool:
        return self._latest is not None and ticket.sequence == self._latest.sequence

    def complete(self, ticket: FetchTicket, snapshot: LineageSnapshot) -> Optional[LayoutResult]:
        """Apply a fetched snapshot; returns None if the ticket is stale."""
        if not self.is_current(ticket):
            logger.debug("Discarding stale lineage response for request %d", ticket.sequence)
            return None

        self.selector.on_snapshot_loaded(snapshot)
        self.snapshot = snapshot
        self.result = self.engine.layout(snapshot)
        self.state = ViewState.READY
        return self.result

    def fail(self, ticket: FetchTicket, error: Exception) -> bool:
        """Record a failed fetch; returns False if the ticket is stale."""
        if not self.is_current(ticket):
            logger.debug("Ignoring failure of stale lineage request %d: %s", ticket.sequence, error)
            return False

        logger.warning(
            "Lineage fetch for data product %d failed: %s", ticket.data_product_id, error
        )
        self.snapshot = None
        self.result = None
        self.error = error
        self.state = ViewState.ERROR
        return True

    def run(self, ticket: FetchTicket) -> Optional[LayoutResult]:
        """Fetch the ticket's snapshot from the source and apply it."""
        try:
            snapshot = self.source.fetch(ticket.data_product_id, ticket.version)
        except CatalogLineageError as e:
            self.fail(ticket, e)
            return None
        return self.complete(ticket, snapshot)

    def load_product(self, data_product_id: int) -> Optional[LayoutResult]:
        """Select a product and load its current lineage."""
        return self.run(self.select_product(data_product_id))

    def load_version(self, version: int) -> Optional[LayoutResult]:
        """Pin a version and load it."""
        return self.run(self.select_version(version))
