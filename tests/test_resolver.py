"""
Tests for identifier resolution and reference canonicalization.
"""

import pytest

from model_lineage import (
    LineageConfig,
    ModelRecord,
    canonicalize,
    resolve_model_id,
    split_qualified_reference,
)


class TestResolveModelId:
    """Tests for resolve_model_id."""

    def test_model_name_wins(self):
        """Test that model_name has the highest priority."""
        record = ModelRecord(model_name=" orders_fct ", target_table="t", file_name="f.sql")

        assert resolve_model_id(record) == "orders_fct"

    def test_target_table_fallback(self):
        """Test that target_table is used when model_name is blank."""
        record = ModelRecord(model_name="  ", target_table="analytics.orders", file_name="f.sql")

        assert resolve_model_id(record) == "analytics.orders"

    def test_file_name_extension_stripped(self):
        """Test that the .sql extension is stripped from file_name."""
        assert resolve_model_id(ModelRecord(file_name="stg_orders.sql")) == "stg_orders"
        assert resolve_model_id(ModelRecord(file_name=" stg_orders.SQL ")) == "stg_orders"

    def test_file_name_without_extension(self):
        """Test that a file name without extension is used as is."""
        assert resolve_model_id(ModelRecord(file_name="stg_orders")) == "stg_orders"

    def test_configured_extensions(self):
        """Test that configured extensions are stripped."""
        config = LineageConfig(model_file_extensions=(".sql", ".py"))

        assert resolve_model_id(ModelRecord(file_name="model.py"), config) == "model"

    def test_unresolvable(self):
        """Test that a record without usable identifiers resolves to None."""
        assert resolve_model_id(ModelRecord()) is None
        assert resolve_model_id(ModelRecord(model_name="", target_table=None)) is None
        assert resolve_model_id(ModelRecord(file_name=".sql")) is None


class TestCanonicalize:
    """Tests for canonicalize."""

    def test_strip_ref(self):
        """Test stripping the ref. qualifier."""
        assert canonicalize("ref.stg_customers") == "stg_customers"

    def test_strip_dbt_source(self):
        """Test stripping the dbt_source. qualifier."""
        assert canonicalize("dbt_source.raw.orders") == "raw.orders"

    def test_plain_value_unchanged(self):
        """Test that an unqualified reference is returned unchanged."""
        assert canonicalize("raw.orders") == "raw.orders"

    @pytest.mark.parametrize(
        "value",
        ["udtf:generate_series", "literal:1", "const:pi", "ref.udtf:generate_series"],
    )
    def test_reject_prefixes(self, value):
        """Test that pseudo-table references are rejected."""
        assert canonicalize(value) is None

    def test_non_string_and_empty(self):
        """Test that non-strings and empty results are rejected."""
        assert canonicalize(None) is None
        assert canonicalize(3) is None
        assert canonicalize("ref.") is None

    @pytest.mark.parametrize(
        "value",
        [
            "raw.orders",
            "ref.stg",
            "dbt_source.raw.orders",
            "ref.dbt_source.x",
            "dbt_source.ref.x",
            "ref.ref.x",
            "udtf:x",
            "",
        ],
    )
    def test_idempotent(self, value):
        """Test that canonicalizing twice equals canonicalizing once."""
        once = canonicalize(value)

        assert canonicalize(once) == once

    def test_default_config_built_per_call(self, monkeypatch):
        """Test that the default configuration is created for each call."""
        monkeypatch.setattr(
            "model_lineage.resolver.canonical.LineageConfig",
            lambda: LineageConfig(reject_prefixes=("raw.",)),
        )

        assert canonicalize("raw.orders") is None

    def test_custom_reject_prefixes(self):
        """Test configured reject prefixes."""
        config = LineageConfig(reject_prefixes=("tmp_",))

        assert canonicalize("tmp_table", config) is None
        assert canonicalize("udtf:x", config) == "udtf:x"


class TestSplitQualifiedReference:
    """Tests for split_qualified_reference."""

    def test_split_on_last_dot(self):
        """Test that only the last separator splits."""
        assert split_qualified_reference("a.b.c") == ("a.b", "c")
        assert split_qualified_reference("orders.amount") == ("orders", "amount")

    @pytest.mark.parametrize("value", ["amount", ".amount", "orders.", "", None, 7])
    def test_malformed(self, value):
        """Test that malformed references yield None."""
        assert split_qualified_reference(value) is None
