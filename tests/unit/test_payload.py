"""Unit tests for snapshot payload parsing."""

import json

import pytest
from catalog_lineage.errors import SnapshotFormatError
from catalog_lineage.graph import NodeRole
from catalog_lineage.store import parse_snapshot


class TestParseSnapshot:
    def test_var_report_fixture(self, var_report_path):
        snapshot = parse_snapshot(json.loads(var_report_path.read_text()), data_product_id=7)
        
        assert snapshot.data_product_id == 7
        assert snapshot.version == 2
        assert [v.version for v in snapshot.versions] == [1, 2]
        assert len(snapshot.nodes) == 4
        assert len(snapshot.edges) == 5
        assert snapshot.nodes[2].role is NodeRole.AGGREGATE
        assert snapshot.nodes[2].metadata["parameters"]["timeHorizon"] == "10D"
        assert snapshot.edges[0].transformation_logic.startswith("Market data")
    
    def test_store_snapshot_aliases(self):
        data = {
            "nodes": [{"id": 1, "name": "Orders", "type": "source"}, {"id": 2, "type": "target"}],
            "edges": [{"sourceId": 1, "targetId": 2, "transformationLogic": "copy"}],
        }
        snapshot = parse_snapshot(data)
        
        assert [n.node_id for n in snapshot.nodes] == ["1", "2"]
        assert snapshot.nodes[0].label == "Orders"
        assert snapshot.nodes[1].label == "Node 2"
        assert snapshot.edges[0].endpoints == ("1", "2")
    
    def test_version_defaults_to_latest_history_entry(self):
        data = {
            "nodes": [],
            "links": [],
            "versions": [
                {"version": 3, "timestamp": "2024-03-01T00:00:00Z"},
                {"version": 1, "timestamp": "2024-01-01T00:00:00Z"},
            ],
        }
        snapshot = parse_snapshot(data)
        assert snapshot.version == 3
        assert [v.version for v in snapshot.versions] == [1, 3]
    
    def test_version_defaults_to_one(self):
        assert parse_snapshot({"nodes": []}).version == 1
    
    def test_null_metadata_becomes_empty(self):
        snapshot = parse_snapshot({"nodes": [{"id": "a", "type": "source", "metadata": None}]})
        assert snapshot.nodes[0].metadata == {}
    
    def test_missing_node_id_is_format_error(self):
        with pytest.raises(SnapshotFormatError):
            parse_snapshot({"nodes": [{"type": "source", "label": "x"}]})
    
    def test_bad_timestamp_is_format_error(self):
        with pytest.raises(SnapshotFormatError):
            parse_snapshot({"versions": [{"version": 1, "timestamp": "yesterday"}]})
    
    def test_non_object_payload(self):
        with pytest.raises(SnapshotFormatError):
            parse_snapshot([])
