"""Integration tests for the command line."""

import json
from datetime import datetime

import pytest
from click.testing import CliRunner
from sqlalchemy import create_engine

from conftest import make_node, make_edge
from catalog_lineage.cli import main
from catalog_lineage.store import SqlSnapshotStore


@pytest.fixture
def runner():
    return CliRunner()


class TestCLI:
    def test_layout_from_file(self, runner, var_report_path, tmp_path):
        out = tmp_path / "output"
        result = runner.invoke(main, ["--input", str(var_report_path), "--out", str(out)])
        
        assert result.exit_code == 0, result.output
        assert "Risk Calculator" in result.output
        assert "Warning" in result.output
        
        data = json.loads((out / "lineage_layout.json").read_text())
        depths = {n["label"]: n["depth"] for n in data["nodes"]}
        assert depths == {
            "Market Data Feed": 0,
            "Position Data": 0,
            "Risk Calculator": 1,
            "VaR Report Generator": 2,
        }
        assert len(data["edges"]) == 3
        assert (out / "csv" / "nodes.csv").exists()
        assert (out / "lineage.html").exists()
    
    def test_layout_from_database(self, runner, tmp_path):
        db_path = tmp_path / "lineage.db"
        url = f"sqlite:///{db_path}"
        store = SqlSnapshotStore(create_engine(url))
        store.record_version(3, [make_node("a", "source", "Orders")], [], created_at=datetime(2024, 1, 1))
        store.record_version(
            3,
            [make_node("a", "source", "Orders"), make_node("b", "target", "Revenue")],
            [make_edge("a", "b", "sum by day")],
            created_at=datetime(2024, 2, 1)
        )
        store.engine.dispose()
        
        out = tmp_path / "output"
        result = runner.invoke(
            main, ["--database-url", url, "--product", "3", "--version", "1", "--out", str(out)]
        )
        
        assert result.exit_code == 0, result.output
        data = json.loads((out / "lineage_layout.json").read_text())
        assert data["version"] == 1
        assert [n["label"] for n in data["nodes"]] == ["Orders"]
        assert [v["version"] for v in data["versions"]] == [1, 2]
    
    def test_requires_a_source(self, runner, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(main, ["--product", "1"])
        assert result.exit_code != 0
        assert "exactly one of" in result.output
    
    def test_fetch_failure_exits_nonzero(self, runner, tmp_path):
        result = runner.invoke(main, ["--input", str(tmp_path / "missing.json"), "--out", str(tmp_path)])
        assert result.exit_code == 1
        assert "Error" in result.output
    
    def test_empty_snapshot(self, runner, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text(json.dumps({"nodes": [], "links": [], "version": 1, "versions": []}))
        
        result = runner.invoke(main, ["--input", str(path), "--out", str(tmp_path / "out")])
        assert result.exit_code == 0, result.output
        assert "Select a data product to view its lineage" in result.output
    
    def test_unopenable_database_exits_with_error(self, runner, tmp_path):
        url = f"sqlite:///{tmp_path / 'missing_dir' / 'lineage.db'}"
        result = runner.invoke(main, ["--database-url", url, "--product", "1"])
        
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Error: Cannot open lineage version store" in result.output
    
    def test_malformed_config_exits_with_error(self, runner, var_report_path, tmp_path):
        config = tmp_path / "catalog_lineage.yaml"
        config.write_text("layout: [unclosed\n")
        
        result = runner.invoke(main, ["--input", str(var_report_path), "--config", str(config)])
        
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "cannot load config" in result.output
