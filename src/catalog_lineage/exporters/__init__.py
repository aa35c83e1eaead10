"""Exporters module initialization."""

from .json_exporter import JSONExporter
from .csv_exporter import CSVExporter
from .html_exporter import HTMLExporter

__all__ = ["JSONExporter", "CSVExporter", "HTMLExporter"]
