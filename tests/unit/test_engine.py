"""Unit tests for the layout engine."""

import json
import random

from conftest import make_node, make_edge, make_snapshot
from catalog_lineage.config import EdgeKey, LayoutConfig
from catalog_lineage.graph import WarningKind
from catalog_lineage.layout import LineageLayoutEngine


class TestLayoutExamples:
    def setup_method(self):
        self.engine = LineageLayoutEngine()
    
    def test_source_transformation_target(self, abc_graph):
        nodes, edges = abc_graph
        result = self.engine.layout_graph(nodes, edges)
        
        assert len(result.positioned_edges) == 2
        assert result.depths() == {"A": 0, "B": 1, "C": 2}
        xs = [result.get_position(n).x for n in "ABC"]
        assert xs[0] < xs[1] < xs[2]
    
    def test_cycle_without_root(self):
        nodes = [make_node("A"), make_node("B")]
        edges = [make_edge("A", "B"), make_edge("B", "A")]
        result = self.engine.layout_graph(nodes, edges)
        
        assert result.depths() == {"A": 0, "B": 0}
        assert result.get_position("A").x == result.get_position("B").x
        assert result.get_position("A").y != result.get_position("B").y
    
    def test_empty_node_set(self):
        result = self.engine.layout_graph([], [make_edge("A", "B")])
        
        assert result.is_empty
        assert result.positioned_edges == []
        assert [w.kind for w in result.warnings] == [WarningKind.DANGLING_EDGE]
    
    def test_dangling_edge_reported_not_raised(self):
        nodes = [make_node("A"), make_node("B")]
        result = self.engine.layout_graph(nodes, [make_edge("A", "B"), make_edge("B", "Z")])
        
        assert [p.render_id for p in result.positioned_edges] == ["edge-A-B-0"]
        assert len(result.warnings) == 1
        assert result.warnings[0].edge.target_id == "Z"


class TestLayoutProperties:
    def random_graph(self, seed, size=25):
        rng = random.Random(seed)
        ids = [f"n{i}" for i in range(size)]
        nodes = [make_node(nid, rng.choice(["source", "transformation", "target"])) for nid in ids]
        nodes += [make_node(rng.choice(ids)) for _ in range(5)]
        edges = [
            make_edge(rng.choice(ids), rng.choice(ids + ["dangling"]), rng.choice([None, "x", "y"]))
            for _ in range(size * 2)
        ]
        return nodes, edges
    
    def test_determinism(self):
        engine = LineageLayoutEngine()
        for seed in range(10):
            nodes, edges = self.random_graph(seed)
            first = json.dumps(engine.layout_graph(nodes, edges).to_dict(), default=str)
            second = json.dumps(engine.layout_graph(nodes, edges).to_dict(), default=str)
            assert first == second
    
    def test_no_overlap_at_same_depth(self):
        config = LayoutConfig()
        engine = LineageLayoutEngine(config)
        for seed in range(10):
            result = engine.layout_graph(*self.random_graph(seed))
            placed = result.positioned_nodes
            for a in placed:
                for b in placed:
                    if a is not b and a.depth == b.depth:
                        assert abs(a.y - b.y) >= config.row_spacing
    
    def test_acyclic_edges_point_right(self):
        engine = LineageLayoutEngine()
        nodes = [make_node(f"n{i}") for i in range(20)]
        rng = random.Random(7)
        # Only forward edges, so the graph is a DAG
        edges = [
            make_edge(f"n{i}", f"n{j}")
            for i in range(20) for j in range(i + 1, 20) if rng.random() < 0.2
        ]
        result = engine.layout_graph(nodes, edges)
        depths = result.depths()
        for positioned in result.positioned_edges:
            assert depths[positioned.edge.source_id] < depths[positioned.edge.target_id]
    
    def test_every_node_positioned_once(self):
        engine = LineageLayoutEngine()
        nodes, edges = self.random_graph(3)
        result = engine.layout_graph(nodes, edges)
        ids = [p.node.node_id for p in result.positioned_nodes]
        assert len(ids) == len(set(ids))
        assert set(ids) == {n.node_id for n in nodes}


class TestSnapshotLayout:
    def test_versions_pass_through(self):
        snapshot = make_snapshot(
            [make_node("A"), make_node("B", "target")],
            [make_edge("A", "B", "copy")],
            version=3,
            versions=[1, 2, 3]
        )
        result = LineageLayoutEngine().layout(snapshot)
        
        assert result.version == 3
        assert result.versions == snapshot.versions
        assert result.transformation_detail("edge-A-B-0") == "copy"
    
    def test_snapshot_is_not_mutated(self, abc_graph):
        nodes, edges = abc_graph
        snapshot = make_snapshot(nodes, edges)
        LineageLayoutEngine().layout(snapshot)
        assert len(snapshot.edges) == 3
    
    def test_parallel_edges_with_logic_key(self):
        engine = LineageLayoutEngine(LayoutConfig(edge_key=EdgeKey.ENDPOINTS_AND_LOGIC))
        nodes = [make_node("A"), make_node("B")]
        edges = [make_edge("A", "B", "join"), make_edge("A", "B", "filter")]
        result = engine.layout_graph(nodes, edges)
        
        assert [p.render_id for p in result.positioned_edges] == ["edge-A-B-0", "edge-A-B-1"]
        assert result.transformation_detail("edge-A-B-1") == "filter"
    
    def test_positioned_node_carries_role_styling(self):
        result = LineageLayoutEngine().layout_graph([make_node("A", "consumer-aligned")], [])
        positioned = result.positioned_nodes[0]
        assert positioned.tier == 2
        assert positioned.to_dict()["color"] == "#F44336"
