"""Layout module initialization."""

from .depth import assign_depths, group_by_depth
from .coordinates import CoordinateAssigner
from .details import TransformationDetailIndex, make_render_id
from .result import LayoutResult, PositionedNode, PositionedEdge
from .engine import LineageLayoutEngine

__all__ = [
    "assign_depths", "group_by_depth", "CoordinateAssigner",
    "TransformationDetailIndex", "make_render_id",
    "LayoutResult", "PositionedNode", "PositionedEdge", "LineageLayoutEngine"
]
