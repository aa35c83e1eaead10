"""HTML report generator with an SVG rendering of the layout."""

from html import escape
from pathlib import Path
import logging

from catalog_lineage.layout import LayoutResult

logger = logging.getLogger(__name__)

NODE_RADIUS = 25
PADDING = 80


class HTMLExporter:
    """Generate a standalone HTML page for a laid-out lineage graph."""

    def export(self, result: LayoutResult, output_path: Path) -> None:
        """Generate HTML report."""
        html = self._generate_html(result)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            f.write(html)

        logger.info("Exported HTML report to %s", output_path)

    def _generate_html(self, result: LayoutResult) -> str:
        """Generate HTML content."""
        version = "n/a" if result.version is None else result.version

        html = f"""
<!DOCTYPE html>
<html>
<head>
    <title>Data Lineage</title>
    <style>
        body {{ font-family: Arial, sans-serif; margin: 20px; }}
        h1 {{ color: #333; }}
        .stats {{ background: #f0f0f0; padding: 15px; border-radius: 5px; }}
        .warning {{ color: #b26a00; }}
        .edge {{ stroke: #666; stroke-opacity: 0.6; stroke-width: 2; fill: none; }}
        .edge:hover {{ stroke-opacity: 1; }}
        text {{ font-size: 12px; }}
    </style>
</head>
<body>
    <h1>Data Lineage</h1>

    <div class="stats">
        <p><strong>Version:</strong> {version}</p>
        <p><strong>Nodes:</strong> {len(result.positioned_nodes)}</p>
        <p><strong>Edges:</strong> {len(result.positioned_edges)}</p>
    </div>
"""

        if result.is_empty:
            html += """
    <p>Select a data product to view its lineage</p>
"""
        else:
            html += self._generate_svg(result)

        if result.versions:
            html += """
    <h2>Versions</h2>
    <ul>
"""
            for v in result.versions:
                note = f" - {escape(v.change_message)}" if v.change_message else ""
                html += f"""        <li>Version {v.version} ({v.timestamp.date().isoformat()}){note}</li>
"""
            html += """    </ul>
"""

        if result.warnings:
            html += """
    <h2>Warnings</h2>
    <ul>
"""
            for warning in result.warnings:
                html += f"""        <li class="warning">{escape(warning.message)}</li>
"""
            html += """    </ul>
"""

        html += """
</body>
</html>
"""

        return html

    def _generate_svg(self, result: LayoutResult) -> str:
        """Draw nodes as circles and edges as curved paths."""
        xs = [p.x for p in result.positioned_nodes]
        ys = [p.y for p in result.positioned_nodes]
        min_x, min_y = min(xs) - PADDING, min(ys) - PADDING
        width = max(xs) - min(xs) + 2 * PADDING
        height = max(ys) - min(ys) + 2 * PADDING
        coordinates = result.coordinates()

        svg = f"""
    <svg role="img" aria-label="Data lineage graph" width="{width:g}" height="{height:g}" viewBox="{min_x:g} {min_y:g} {width:g} {height:g}">
        <defs>
            <marker id="end-arrow" viewBox="0 -5 10 10" refX="10" refY="0" markerWidth="8" markerHeight="8" orient="auto">
                <path d="M0,-5L10,0L0,5" fill="#666"/>
            </marker>
        </defs>
"""

        for positioned in result.positioned_edges:
            sx, sy = coordinates[positioned.edge.source_id]
            tx, ty = coordinates[positioned.edge.target_id]
            path = self._edge_path(sx, sy, tx, ty)
            detail = result.transformation_detail(positioned.render_id)
            title = f"<title>{escape(detail)}</title>" if detail is not None else ""
            svg += f"""        <path id="{escape(positioned.render_id)}" class="edge" d="{path}" marker-end="url(#end-arrow)">{title}</path>
"""

        for positioned in result.positioned_nodes:
            label = escape(positioned.node.label)
            svg += f"""        <g transform="translate({positioned.x:g},{positioned.y:g})">
            <circle r="{NODE_RADIUS}" fill="{positioned.color}" stroke="#fff" stroke-width="2"/>
            <text text-anchor="middle" dy="{NODE_RADIUS + 20}">{label}</text>
        </g>
"""

        svg += """    </svg>
"""
        return svg

    def _edge_path(self, sx: float, sy: float, tx: float, ty: float) -> str:
        """Quadratic path that stops at the target circle's rim."""
        dx, dy = tx - sx, ty - sy
        distance = (dx * dx + dy * dy) ** 0.5
        if distance == 0:
            # Self-loop
            return (
                f"M{sx:g},{sy - NODE_RADIUS:g} "
                f"C{sx - 2 * NODE_RADIUS:g},{sy - 3 * NODE_RADIUS:g} "
                f"{sx + 2 * NODE_RADIUS:g},{sy - 3 * NODE_RADIUS:g} "
                f"{sx:g},{sy - NODE_RADIUS:g}"
            )
        end_x = tx - dx * NODE_RADIUS / distance
        end_y = ty - dy * NODE_RADIUS / distance
        mid_x, mid_y = (sx + tx) / 2, (sy + ty) / 2
        return f"M{sx:g},{sy:g} Q{mid_x:g},{mid_y:g} {end_x:g},{end_y:g}"
