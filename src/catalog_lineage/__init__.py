"""Lineage graph layout and versioning for the data catalog."""

__version__ = "0.1.0"
