"""CSV exporter for laid-out lineage."""

from pathlib import Path
import csv
import json
import logging

from catalog_lineage.layout import LayoutResult

logger = logging.getLogger(__name__)


class CSVExporter:
    """Export positioned nodes and edges to CSV files."""
    
    def export(self, result: LayoutResult, output_dir: Path) -> None:
        """Export layout to CSV files."""
        output_dir.mkdir(parents=True, exist_ok=True)
        
        self._export_nodes(result, output_dir / "nodes.csv")
        self._export_edges(result, output_dir / "edges.csv")
        
        logger.info("Exported layout to %s", output_dir)
    
    def _export_nodes(self, result: LayoutResult, output_path: Path) -> None:
        """Export positioned nodes to CSV."""
        with open(output_path, "w", newline="") as f:
            writer = csv.DictWriter(
                f,
                fieldnames=["node_id", "role", "label", "depth", "x", "y", "tier", "metadata"]
            )
            writer.writeheader()
            
            for positioned in result.positioned_nodes:
                writer.writerow({
                    "node_id": positioned.node.node_id,
                    "role": positioned.node.role.value,
                    "label": positioned.node.label,
                    "depth": positioned.depth,
                    "x": positioned.x,
                    "y": positioned.y,
                    "tier": positioned.tier,
                    "metadata": json.dumps(positioned.node.metadata, default=str)
                })
    
    def _export_edges(self, result: LayoutResult, output_path: Path) -> None:
        """Export positioned edges to CSV."""
        with open(output_path, "w", newline="") as f:
            writer = csv.DictWriter(
                f,
                fieldnames=["render_id", "source_id", "target_id", "transformation_logic"]
            )
            writer.writeheader()
            
            for positioned in result.positioned_edges:
                writer.writerow({
                    "render_id": positioned.render_id,
                    "source_id": positioned.edge.source_id,
                    "target_id": positioned.edge.target_id,
                    "transformation_logic": positioned.edge.transformation_logic or ""
                })
