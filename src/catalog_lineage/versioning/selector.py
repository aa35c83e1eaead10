"""Which lineage version a view shows."""

from enum import Enum
from typing import List, Optional
import logging

from catalog_lineage.errors import UnknownVersionError
from catalog_lineage.graph import LineageSnapshot

logger = logging.getLogger(__name__)


class SelectorState(Enum):
    """States of the version selector."""

    NO_VERSION_SELECTED = "NO_VERSION_SELECTED"
    VERSION_LOADED = "VERSION_LOADED"


class VersionSelector:
    """Tracks the pinned version of the selected data product.

    Selecting a product always clears the pin, so a version number chosen
    for one product is never requested for another. The first snapshot
    that loads afterwards pins its own reported version.
    """

    def __init__(self) -> None:
        self.data_product_id: Optional[int] = None
        self.pinned_version: Optional[int] = None
        self.known_versions: List[int] = []

    @property
    def state(self) -> SelectorState:
        if self.pinned_version is None:
            return SelectorState.NO_VERSION_SELECTED
        return SelectorState.VERSION_LOADED

    @property
    def requested_version(self) -> Optional[int]:
        """Version the next fetch should ask for; None means current."""
        return self.pinned_version

    def select_product(self, data_product_id: int) -> None:
        """Switch to another data product and drop the pinned version."""
        if data_product_id != self.data_product_id:
            logger.debug("Selected data product %s, clearing pinned version", data_product_id)
        self.data_product_id = data_product_id
        self.pinned_version = None
        self.known_versions = []

    def on_snapshot_loaded(self, snapshot: LineageSnapshot) -> None:
        """Record a loaded snapshot, pinning its version if nothing is pinned."""
        self.known_versions = snapshot.known_versions
        if self.pinned_version is None:
            self.pinned_version = snapshot.version

    def select_version(self, version: int) -> None:
        """Pin a version chosen by the user."""
        if self.known_versions and version not in self.known_versions:
            raise UnknownVersionError(version, self.known_versions)
        self.pinned_version = version
