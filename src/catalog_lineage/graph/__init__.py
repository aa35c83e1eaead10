"""Graph module initialization."""

from .models import NodeRole, LineageNode, LineageEdge, LineageVersion, LineageSnapshot
from .normalizer import (
    normalize, edge_identity, blank_to_none, NormalizedGraph, IntegrityWarning, WarningKind
)
from .graph import LineageGraph

__all__ = [
    "NodeRole", "LineageNode", "LineageEdge", "LineageVersion", "LineageSnapshot",
    "normalize", "edge_identity", "blank_to_none", "NormalizedGraph", "IntegrityWarning", "WarningKind",
    "LineageGraph"
]
