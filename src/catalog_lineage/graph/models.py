"""Lineage graph data models."""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List
from enum import Enum
from datetime import datetime
import logging

logger = logging.getLogger(__name__)


class NodeRole(Enum):
    """Role of a node in the lineage graph."""

    SOURCE = "source"
    TRANSFORMATION = "transformation"
    TARGET = "target"
    SOURCE_ALIGNED = "source-aligned"
    AGGREGATE = "aggregate"
    CONSUMER_ALIGNED = "consumer-aligned"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Optional[str]) -> "NodeRole":
        """Parse a wire role, falling back to UNKNOWN."""
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            logger.warning("Unknown node role %r, rendering as %s", value, cls.UNKNOWN.value)
            return cls.UNKNOWN

    @property
    def tier(self) -> int:
        """Visual tier: 0 for sources, 1 for transformations, 2 for targets."""
        return _ROLE_TIERS[self]

    @property
    def color(self) -> str:
        """Fill colour for the role's visual tier."""
        if self is NodeRole.UNKNOWN:
            return "#9E9E9E"
        return _TIER_COLORS[self.tier]


_ROLE_TIERS = {
    NodeRole.SOURCE: 0,
    NodeRole.SOURCE_ALIGNED: 0,
    NodeRole.TRANSFORMATION: 1,
    NodeRole.AGGREGATE: 1,
    NodeRole.TARGET: 2,
    NodeRole.CONSUMER_ALIGNED: 2,
    NodeRole.UNKNOWN: 1,
}

_TIER_COLORS = {
    0: "#4CAF50",
    1: "#2196F3",
    2: "#F44336",
}


@dataclass(frozen=True)
class LineageNode:
    """A node in the lineage graph."""

    node_id: str
    role: NodeRole = NodeRole.SOURCE
    label: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire dictionary."""
        return {
            "id": self.node_id,
            "type": self.role.value,
            "label": self.label,
            "metadata": self.metadata,
        }


@dataclass(frozen=True)
class LineageEdge:
    """A directed edge from one node to another."""

    source_id: str
    target_id: str
    transformation_logic: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @property
    def endpoints(self) -> tuple:
        return (self.source_id, self.target_id)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire dictionary."""
        data: Dict[str, Any] = {"source": self.source_id, "target": self.target_id}
        if self.transformation_logic is not None:
            data["transformationLogic"] = self.transformation_logic
        if self.metadata:
            data["metadata"] = self.metadata
        return data


@dataclass(frozen=True)
class LineageVersion:
    """One entry of a data product's version history."""

    version: int
    timestamp: datetime
    change_message: Optional[str] = None
    created_by: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "version": self.version,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.change_message is not None:
            data["changeMessage"] = self.change_message
        if self.created_by is not None:
            data["createdBy"] = self.created_by
        return data


@dataclass(frozen=True)
class LineageSnapshot:
    """An immutable lineage graph for one version of a data product.

    Nodes and edges are kept exactly as fetched, duplicates and dangling
    references included; cleaning them up is the normalizer's job.
    """

    nodes: List[LineageNode] = field(default_factory=list)
    edges: List[LineageEdge] = field(default_factory=list)
    version: int = 1
    versions: List[LineageVersion] = field(default_factory=list)
    data_product_id: Optional[int] = None

    @property
    def latest_version(self) -> int:
        """Highest version known for the data product."""
        if not self.versions:
            return self.version
        return max(v.version for v in self.versions)

    @property
    def known_versions(self) -> List[int]:
        return sorted({v.version for v in self.versions} | {self.version})

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire dictionary."""
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "links": [edge.to_dict() for edge in self.edges],
            "version": self.version,
            "versions": [v.to_dict() for v in self.versions],
        }
