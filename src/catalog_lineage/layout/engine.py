"""Public layout API."""

from typing import Iterable, List, Optional
import logging

from catalog_lineage.config import LayoutConfig
from catalog_lineage.graph import (
    LineageGraph, LineageNode, LineageEdge, LineageVersion, LineageSnapshot, normalize
)
from .coordinates import CoordinateAssigner
from .depth import assign_depths
from .details import TransformationDetailIndex
from .result import LayoutResult, PositionedNode, PositionedEdge

logger = logging.getLogger(__name__)


class LineageLayoutEngine:
    """Turns a lineage snapshot into positioned nodes and edges.

    The engine is stateless between calls: the same nodes and edges always
    produce the same depths and coordinates, and every call recomputes the
    layout from scratch.
    """

    def __init__(self, config: Optional[LayoutConfig] = None) -> None:
        self.config = config or LayoutConfig()
        self.coordinates = CoordinateAssigner(self.config)

    def layout(self, snapshot: LineageSnapshot) -> LayoutResult:
        """Lay out one snapshot, carrying its version history through."""
        return self.layout_graph(
            snapshot.nodes,
            snapshot.edges,
            version=snapshot.version,
            versions=snapshot.versions
        )

    def layout_graph(
        self,
        nodes: Iterable[LineageNode],
        edges: Iterable[LineageEdge],
        version: Optional[int] = None,
        versions: Optional[List[LineageVersion]] = None
    ) -> LayoutResult:
        """Normalize, level and position a raw node/edge set."""
        normalized = normalize(nodes, edges, self.config.edge_key)
        result = LayoutResult(
            warnings=list(normalized.warnings),
            version=version,
            versions=list(versions or [])
        )

        if not normalized.nodes:
            return result

        graph = LineageGraph.from_normalized(normalized)
        depths = assign_depths(graph)
        positions = self.coordinates.assign(depths)

        for node in normalized.nodes:
            x, y = positions[node.node_id]
            result.positioned_nodes.append(
                PositionedNode(node=node, x=x, y=y, depth=depths[node.node_id])
            )

        details = TransformationDetailIndex()
        for edge in normalized.edges:
            render_id = details.add(edge)
            result.positioned_edges.append(PositionedEdge(edge=edge, render_id=render_id))
        result.details = details

        logger.debug(
            "Laid out %d nodes and %d edges across %d columns",
            len(result.positioned_nodes),
            len(result.positioned_edges),
            max(depths.values()) + 1
        )
        return result
