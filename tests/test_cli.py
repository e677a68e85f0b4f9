"""
Tests for CLI functionality (end-to-end).

This module runs the model-lineage command in a subprocess against record
files written to a temporary directory.
"""

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent

RECORDS = {
    "stg_orders.json": {
        "model_name": "stg_orders",
        "target_type": "view",
        "columns": {"amount": {"source": "dbt_source.raw.orders.amount"}},
        "sources": [{"name": "raw", "type": "dbt_source", "table": "orders"}],
    },
    "orders_fct.json": {
        "model_name": "orders_fct",
        "target_type": "table",
        "columns": {
            "order_total": {"source": "ref.stg_orders.amount", "transformation": "sum(amount)"}
        },
        "sources": [{"name": "stg", "type": "ref", "model": "stg_orders"}],
    },
    "broken.json": {"model_name": ""},
}


class TestCLI:
    """Test CLI functionality (end-to-end)."""

    @pytest.fixture(autouse=True)
    def records_dir(self, tmp_path):
        """Write test record files."""
        self.test_dir = tmp_path
        self.models_dir = tmp_path / "models"
        self.models_dir.mkdir()
        for name, record in RECORDS.items():
            (self.models_dir / name).write_text(json.dumps(record), encoding="utf-8")

    def run_cli(self, *args):
        """Run CLI command."""
        env = dict(os.environ)
        env["PYTHONIOENCODING"] = "utf-8"
        env["PYTHONPATH"] = os.pathsep.join(
            filter(None, [str(PROJECT_ROOT), env.get("PYTHONPATH")])
        )
        cmd = [sys.executable, "-m", "model_lineage.cli", "--no-color"] + list(args)
        return subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            cwd=PROJECT_ROOT,
            env=env,
        )

    def test_summary(self):
        """Test the default summary."""
        result = self.run_cli(str(self.models_dir))

        assert result.returncode == 0
        assert "Lineage Summary" in result.stdout
        assert "raw.orders -> stg_orders" in result.stdout
        assert "stg_orders -> orders_fct" in result.stdout
        assert "1 warning(s)" in result.stdout

    def test_table_format(self):
        """Test --format table."""
        result = self.run_cli(str(self.models_dir), "--format", "table")

        assert result.returncode == 0
        assert "orders_fct" in result.stdout
        assert "view" in result.stdout

    def test_node_detail(self):
        """Test --node command."""
        result = self.run_cli(str(self.models_dir), "--node", "stg_orders")

        assert result.returncode == 0
        assert "dbt_source.raw.orders.amount" in result.stdout
        assert "orders_fct.order_total" in result.stdout

    def test_unknown_node(self):
        """Test --node with an unknown id."""
        result = self.run_cli(str(self.models_dir), "--node", "nope")

        assert result.returncode == 1
        assert "Node not found" in result.stderr

    def test_upstream(self):
        """Test --upstream command."""
        result = self.run_cli(str(self.models_dir), "--upstream", "orders_fct")

        assert result.returncode == 0
        assert "raw.orders (source)" in result.stdout
        assert "stg_orders (model)" in result.stdout

    def test_downstream_unknown_node_fails(self):
        """Test that queries on unknown nodes exit with an error."""
        result = self.run_cli(str(self.models_dir), "--downstream", "nope")

        assert result.returncode == 1
        assert "Lineage build failed" in result.stderr

    def test_list_nodes(self):
        """Test --list-nodes command."""
        result = self.run_cli(str(self.models_dir), "--list-nodes")

        assert result.returncode == 0
        assert "Model nodes" in result.stdout
        assert "raw.orders" in result.stdout

    def test_export_json(self):
        """Test --export command."""
        output_file = self.test_dir / "lineage.json"

        result = self.run_cli(
            str(self.models_dir), "--export", str(output_file), "--format", "json"
        )

        assert result.returncode == 0
        data = json.loads(output_file.read_text(encoding="utf-8"))
        assert {"from": "raw.orders", "to": "stg_orders"} in data["edges"]

    def test_export_cytoscape(self):
        """Test --export with Cytoscape format."""
        output_file = self.test_dir / "elements.json"

        result = self.run_cli(
            str(self.models_dir), "--export", str(output_file), "--format", "cytoscape"
        )

        assert result.returncode == 0
        elements = json.loads(output_file.read_text(encoding="utf-8"))
        assert all("data" in element for element in elements)

    def test_no_warnings(self):
        """Test --no-warnings."""
        result = self.run_cli(str(self.models_dir), "--no-warnings")

        assert result.returncode == 0
        assert "warning(s)" not in result.stdout

    def test_missing_path(self):
        """Test a missing record path."""
        result = self.run_cli(str(self.test_dir / "missing"))

        assert result.returncode == 1
        assert "Record path not found" in result.stderr

    def test_invalid_json(self):
        """Test that an invalid record file is reported."""
        (self.models_dir / "zzz.json").write_text("{oops", encoding="utf-8")

        result = self.run_cli(str(self.models_dir))

        assert result.returncode == 1
        assert "Invalid JSON" in result.stderr

    def test_non_utf8_file(self):
        """Test that a record file that is not UTF-8 is reported."""
        (self.models_dir / "zzz.json").write_bytes(b'{"model_name": "\xff\xfe"}')

        result = self.run_cli(str(self.models_dir))

        assert result.returncode == 1
        assert "not valid UTF-8" in result.stderr
        assert "Traceback" not in result.stderr

    def test_list_nodes_in_registration_order(self):
        """Test that --list-nodes keeps registration order."""
        (self.models_dir / "aaa.json").write_text(
            json.dumps({"model_name": "zeta_model"}), encoding="utf-8"
        )

        result = self.run_cli(str(self.models_dir), "--list-nodes")

        assert result.returncode == 0
        # aaa.json is read first
        assert result.stdout.index("zeta_model") < result.stdout.index("orders_fct")
