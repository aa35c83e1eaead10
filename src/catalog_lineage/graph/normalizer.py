"""Deduplication of raw lineage nodes and edges."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple
import logging

from catalog_lineage.config import EdgeKey
from .models import LineageNode, LineageEdge

logger = logging.getLogger(__name__)


class WarningKind(Enum):
    """Kinds of data-integrity problems found while normalizing."""

    DANGLING_EDGE = "DANGLING_EDGE"
    CONFLICTING_NODE = "CONFLICTING_NODE"


@dataclass(frozen=True)
class IntegrityWarning:
    """A non-fatal problem with the input graph."""

    kind: WarningKind
    message: str
    node_id: Optional[str] = None
    edge: Optional[LineageEdge] = None

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "node_id": self.node_id,
            "source": self.edge.source_id if self.edge else None,
            "target": self.edge.target_id if self.edge else None,
        }


@dataclass(frozen=True)
class NormalizedGraph:
    """Deduplicated nodes and edges, in first-seen order."""

    nodes: Tuple[LineageNode, ...] = ()
    edges: Tuple[LineageEdge, ...] = ()
    warnings: Tuple[IntegrityWarning, ...] = field(default=(), compare=False)

    @property
    def node_ids(self) -> List[str]:
        return [node.node_id for node in self.nodes]


def blank_to_none(logic: Optional[str]) -> Optional[str]:
    """Treat empty or whitespace-only transformation logic as absent."""
    if logic is not None and not logic.strip():
        return None
    return logic


def edge_identity(edge: LineageEdge, edge_key: EdgeKey = EdgeKey.ENDPOINTS) -> tuple:
    """Key under which two edges count as the same edge."""
    if edge_key is EdgeKey.ENDPOINTS_AND_LOGIC:
        return (edge.source_id, edge.target_id, blank_to_none(edge.transformation_logic))
    return (edge.source_id, edge.target_id)


def normalize(
    nodes: Iterable[LineageNode],
    edges: Iterable[LineageEdge],
    edge_key: EdgeKey = EdgeKey.ENDPOINTS
) -> NormalizedGraph:
    """Collapse duplicate nodes and edges and drop dangling edges.

    The first occurrence of a node id or an edge key wins and keeps its
    input position. Later duplicates whose content differs from the kept
    node are reported, as are edges that reference unknown node ids.
    """
    unique_nodes: Dict[str, LineageNode] = {}
    warnings: List[IntegrityWarning] = []

    for node in nodes:
        kept = unique_nodes.get(node.node_id)
        if kept is None:
            unique_nodes[node.node_id] = node
            continue
        if kept != node or kept.metadata != node.metadata:
            warnings.append(IntegrityWarning(
                kind=WarningKind.CONFLICTING_NODE,
                message=f"Duplicate node '{node.node_id}' differs from the first occurrence; keeping the first",
                node_id=node.node_id
            ))

    unique_edges: Dict[tuple, LineageEdge] = {}
    for edge in edges:
        missing = [
            endpoint for endpoint in edge.endpoints if endpoint not in unique_nodes
        ]
        if missing:
            warnings.append(IntegrityWarning(
                kind=WarningKind.DANGLING_EDGE,
                message=(
                    f"Edge {edge.source_id} -> {edge.target_id} references unknown "
                    f"node(s) {', '.join(missing)}; dropped"
                ),
                edge=edge
            ))
            continue
        unique_edges.setdefault(edge_identity(edge, edge_key), edge)

    for warning in warnings:
        logger.warning(warning.message)

    return NormalizedGraph(
        nodes=tuple(unique_nodes.values()),
        edges=tuple(unique_edges.values()),
        warnings=tuple(warnings)
    )
