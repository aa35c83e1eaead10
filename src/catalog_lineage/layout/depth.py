"""Topological leveling of lineage nodes into columns."""

from typing import Dict, List
import networkx as nx

from catalog_lineage.graph import LineageGraph


def assign_depths(graph: LineageGraph) -> Dict[str, int]:
    """Assign every node a column index consistent with edge direction.

    A node's depth is the longest path to it from any root. Nodes on a
    cycle are collapsed into their strongly connected component first, so
    all members of a cycle share one depth and a cycle nobody feeds into
    sits at depth 0. The returned mapping follows node insertion order.
    """
    if not graph.nodes:
        return {}

    condensed = nx.condensation(graph.graph)
    mapping = condensed.graph["mapping"]

    component_depth: Dict[int, int] = {}
    for component in nx.topological_sort(condensed):
        component_depth[component] = max(
            (component_depth[parent] + 1 for parent in condensed.predecessors(component)),
            default=0
        )

    return {node_id: component_depth[mapping[node_id]] for node_id in graph.nodes}


def group_by_depth(depths: Dict[str, int]) -> Dict[int, List[str]]:
    """Group node ids by depth, keeping their order within each level."""
    levels: Dict[int, List[str]] = {}
    for node_id, depth in depths.items():
        levels.setdefault(depth, []).append(node_id)
    return dict(sorted(levels.items()))
