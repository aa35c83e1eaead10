"""Shared fixtures for catalog-lineage tests."""

from datetime import datetime
from pathlib import Path
from typing import List, Optional

import pytest

from catalog_lineage.graph import LineageNode, LineageEdge, LineageVersion, LineageSnapshot, NodeRole

MOCKS_DIR = Path(__file__).parent / "mocks"


def make_node(node_id: str, role: str = "source", label: Optional[str] = None, **metadata) -> LineageNode:
    return LineageNode(
        node_id=node_id,
        role=NodeRole.parse(role),
        label=label or node_id,
        metadata=metadata
    )


def make_edge(source: str, target: str, logic: Optional[str] = None) -> LineageEdge:
    return LineageEdge(source_id=source, target_id=target, transformation_logic=logic)


def make_snapshot(
    nodes: List[LineageNode],
    edges: List[LineageEdge],
    version: int = 1,
    versions: Optional[List[int]] = None,
    data_product_id: Optional[int] = None
) -> LineageSnapshot:
    history = [
        LineageVersion(version=v, timestamp=datetime(2024, 1, v))
        for v in (versions or [version])
    ]
    return LineageSnapshot(
        nodes=nodes,
        edges=edges,
        version=version,
        versions=history,
        data_product_id=data_product_id
    )


@pytest.fixture
def var_report_path() -> Path:
    return MOCKS_DIR / "snapshots" / "var_report.json"


@pytest.fixture
def abc_graph():
    """Source -> transformation -> target with one repeated edge."""
    nodes = [
        make_node("A", "source"),
        make_node("B", "transformation"),
        make_node("C", "target"),
    ]
    edges = [make_edge("A", "B"), make_edge("B", "C"), make_edge("A", "B")]
    return nodes, edges
