"""Conversion of node depths into pixel coordinates."""

from typing import Dict, Optional, Tuple

from catalog_lineage.config import LayoutConfig
from .depth import group_by_depth


class CoordinateAssigner:
    """Places columns left to right and centres each column vertically."""

    def __init__(self, config: Optional[LayoutConfig] = None) -> None:
        self.config = config or LayoutConfig()

    def column_x(self, depth: int) -> float:
        return self.config.base_x + depth * self.config.column_spacing

    def row_y(self, index: int, count: int) -> float:
        offset = index - (count - 1) / 2
        return self.config.center_y + offset * self.config.row_spacing

    def assign(self, depths: Dict[str, int]) -> Dict[str, Tuple[float, float]]:
        """Map each node id to its (x, y) position."""
        positions: Dict[str, Tuple[float, float]] = {}

        for depth, node_ids in group_by_depth(depths).items():
            x = self.column_x(depth)
            for index, node_id in enumerate(node_ids):
                positions[node_id] = (x, self.row_y(index, len(node_ids)))

        return positions
