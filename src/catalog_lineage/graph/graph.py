"""Lineage graph operations."""

from typing import Dict, List
import networkx as nx

from .models import LineageNode, LineageEdge
from .normalizer import NormalizedGraph


class LineageGraph:
    """Graph structure over a normalized lineage snapshot."""

    def __init__(self) -> None:
        self.nodes: Dict[str, LineageNode] = {}
        self.edges: List[LineageEdge] = []
        self.graph = nx.DiGraph()

    @classmethod
    def from_normalized(cls, normalized: NormalizedGraph) -> "LineageGraph":
        """Build a graph from normalizer output."""
        graph = cls()
        for node in normalized.nodes:
            graph.add_node(node)
        for edge in normalized.edges:
            graph.add_edge(edge)
        return graph

    def add_node(self, node: LineageNode) -> None:
        """Add a node to the graph."""
        self.nodes[node.node_id] = node
        self.graph.add_node(node.node_id, role=node.role.value, label=node.label)

    def add_edge(self, edge: LineageEdge) -> None:
        """Add an edge to the graph.

        Parallel edges collapse onto one networkx edge; ``edges`` keeps them all.
        """
        self.edges.append(edge)
        self.graph.add_edge(edge.source_id, edge.target_id)

    def get_roots(self) -> List[str]:
        """Node ids without an incoming edge, in insertion order."""
        return [nid for nid in self.nodes if self.graph.in_degree(nid) == 0]

    def get_stats(self) -> Dict[str, int]:
        """Get graph statistics."""
        tiers = [node.role.tier for node in self.nodes.values()]
        return {
            "total_nodes": len(self.nodes),
            "total_edges": len(self.edges),
            "source_nodes": tiers.count(0),
            "transformation_nodes": tiers.count(1),
            "target_nodes": tiers.count(2),
            "root_nodes": len(self.get_roots()),
        }
