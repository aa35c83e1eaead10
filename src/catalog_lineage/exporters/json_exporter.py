"""JSON exporter for laid-out lineage."""

from pathlib import Path
import json
import logging

from catalog_lineage.graph import LineageGraph
from catalog_lineage.layout import LayoutResult

logger = logging.getLogger(__name__)


class JSONExporter:
    """Export a layout to the JSON shape the renderer consumes."""
    
    def export(self, result: LayoutResult, output_path: Path) -> None:
        """Export layout to JSON file."""
        data = result.to_dict()
        data["details"] = result.details.to_dict()
        data["stats"] = self._stats(result)
        
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            json.dump(data, f, indent=2, default=str)
        
        logger.info("Exported layout to %s", output_path)
    
    def _stats(self, result: LayoutResult) -> dict:
        graph = LineageGraph()
        for positioned in result.positioned_nodes:
            graph.add_node(positioned.node)
        for positioned in result.positioned_edges:
            graph.add_edge(positioned.edge)
        
        return {
            **graph.get_stats(),
            "columns": len({p.depth for p in result.positioned_nodes}),
            "warnings": len(result.warnings),
        }
