"""Lookup of transformation logic by rendered edge identity."""

from typing import Dict, Iterable, List, Optional, Tuple

from catalog_lineage.graph import LineageEdge, blank_to_none


def make_render_id(source_id: str, target_id: str, ordinal: int = 0) -> str:
    """Build the render id of the ``ordinal``-th edge between two nodes."""
    return f"edge-{source_id}-{target_id}-{ordinal}"


class TransformationDetailIndex:
    """Maps render ids to edges and their transformation logic.

    Edges sharing the same endpoints are told apart by an ordinal counted
    in input order, so the first edge between A and B is ``edge-A-B-0``.
    Node ids may themselves contain ``-``, so two different endpoint pairs
    can spell the same id; the later edge then takes the next free ordinal.
    """

    def __init__(self, edges: Iterable[LineageEdge] = ()) -> None:
        self._edges: Dict[str, LineageEdge] = {}
        self._details: Dict[str, Optional[str]] = {}
        self._by_endpoints: Dict[Tuple[str, str], List[str]] = {}

        for edge in edges:
            self.add(edge)

    def add(self, edge: LineageEdge) -> str:
        """Index an edge and return its render id."""
        siblings = self._by_endpoints.setdefault(edge.endpoints, [])
        ordinal = len(siblings)
        render_id = make_render_id(edge.source_id, edge.target_id, ordinal)
        while render_id in self._edges:
            ordinal += 1
            render_id = make_render_id(edge.source_id, edge.target_id, ordinal)
        siblings.append(render_id)

        self._edges[render_id] = edge
        self._details[render_id] = blank_to_none(edge.transformation_logic)
        return render_id

    def lookup(self, render_id: str) -> Optional[str]:
        """Transformation logic for an edge, or None when there is none."""
        return self._details.get(render_id)

    def get_edge(self, render_id: str) -> Optional[LineageEdge]:
        return self._edges.get(render_id)

    def render_ids_for(self, source_id: str, target_id: str) -> List[str]:
        """Render ids of all edges between two nodes, in input order."""
        return list(self._by_endpoints.get((source_id, target_id), []))

    def render_ids(self) -> List[str]:
        return list(self._edges)

    def to_dict(self) -> Dict[str, Optional[str]]:
        return dict(self._details)

    def __contains__(self, render_id: object) -> bool:
        return render_id in self._edges

    def __len__(self) -> int:
        return len(self._edges)
