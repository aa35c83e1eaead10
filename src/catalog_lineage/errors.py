"""Exceptions raised by catalog-lineage."""

from typing import Optional


class CatalogLineageError(Exception):
    """Base class for all catalog-lineage errors."""


class SnapshotFetchError(CatalogLineageError):
    """A lineage snapshot could not be fetched from the metadata store."""
    
    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SnapshotNotFoundError(SnapshotFetchError):
    """The requested data product or version has no lineage snapshot."""


class SnapshotFormatError(CatalogLineageError):
    """A snapshot payload does not match the expected wire format."""


class UnknownVersionError(CatalogLineageError):
    """A version was pinned that the data product does not have."""
    
    def __init__(self, version: int, known_versions: list) -> None:
        super().__init__(
            f"Version {version} is not one of the known versions {known_versions}"
        )
        self.version = version
        self.known_versions = known_versions
