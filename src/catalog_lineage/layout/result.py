"""Layout engine output models."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from catalog_lineage.graph import LineageNode, LineageEdge, LineageVersion, IntegrityWarning
from .details import TransformationDetailIndex


@dataclass(frozen=True)
class PositionedNode:
    """A node with its computed position."""

    node: LineageNode
    x: float
    y: float
    depth: int

    @property
    def tier(self) -> int:
        return self.node.role.tier

    @property
    def color(self) -> str:
        return self.node.role.color

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.node.to_dict(),
            "x": self.x,
            "y": self.y,
            "depth": self.depth,
            "tier": self.tier,
            "color": self.color,
        }


@dataclass(frozen=True)
class PositionedEdge:
    """An edge with the id the renderer binds events to."""

    edge: LineageEdge
    render_id: str

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.render_id, **self.edge.to_dict()}


@dataclass
class LayoutResult:
    """Everything a renderer needs for one snapshot."""

    positioned_nodes: List[PositionedNode] = field(default_factory=list)
    positioned_edges: List[PositionedEdge] = field(default_factory=list)
    warnings: List[IntegrityWarning] = field(default_factory=list)
    version: Optional[int] = None
    versions: List[LineageVersion] = field(default_factory=list)
    details: TransformationDetailIndex = field(default_factory=TransformationDetailIndex)

    @property
    def is_empty(self) -> bool:
        return not self.positioned_nodes

    def get_position(self, node_id: str) -> Optional[PositionedNode]:
        """Positioned node for an id, if it was laid out."""
        for positioned in self.positioned_nodes:
            if positioned.node.node_id == node_id:
                return positioned
        return None

    def coordinates(self) -> Dict[str, tuple]:
        return {p.node.node_id: (p.x, p.y) for p in self.positioned_nodes}

    def depths(self) -> Dict[str, int]:
        return {p.node.node_id: p.depth for p in self.positioned_nodes}

    def transformation_detail(self, render_id: str) -> Optional[str]:
        """Transformation logic behind a rendered edge."""
        return self.details.lookup(render_id)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-ready dictionary."""
        return {
            "version": self.version,
            "versions": [v.to_dict() for v in self.versions],
            "nodes": [p.to_dict() for p in self.positioned_nodes],
            "edges": [p.to_dict() for p in self.positioned_edges],
            "warnings": [w.to_dict() for w in self.warnings],
        }
