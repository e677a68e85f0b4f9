"""
Lineage graph builder.

This module defines the LineageGraphBuilder class, which turns a collection
of model records into a lineage graph in two passes:

1. Node & edge pass: register one model node per record, add edges for the
   record's declared ``ref`` and ``dbt_source`` dependencies, and collect
   the record's column references into a provisional column index.
2. Column merge pass: fold the provisional index into the graph, giving each
   referenced upstream node a ``used_by`` list per column.

All state lives in a LineageBuild owned by a single ``build`` call, so one
builder can be used for any number of independent builds.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from model_lineage.graph.materializer import materialize
from model_lineage.models.config import LineageConfig
from model_lineage.models.graph_output import GraphOutput
from model_lineage.models.node import ColumnInfo, NodeKind, UsedBy
from model_lineage.models.record import ModelRecord, SourceKind, SourceRef
from model_lineage.registry.node_registry import NodeRegistry
from model_lineage.resolver.canonical import canonicalize, split_qualified_reference
from model_lineage.resolver.identifier import resolve_model_id
from model_lineage.utils.warnings import WarningCollector

logger = logging.getLogger(__name__)

# owner id -> column name -> consumers, in processing order
ColumnIndex = Dict[str, Dict[str, List[UsedBy]]]


@dataclass
class LineageBuild:
    """State of one graph build.

    Attributes:
        registry: Nodes and edges.
        column_index: Provisional source column index filled by the first pass.
        warnings: Diagnostics.
        skipped_records: Input positions of records left out of the graph.
    """

    registry: NodeRegistry = field(default_factory=NodeRegistry)
    column_index: ColumnIndex = field(default_factory=dict)
    warnings: WarningCollector = field(default_factory=WarningCollector)
    skipped_records: List[int] = field(default_factory=list)

    def materialize(self) -> GraphOutput:
        return materialize(
            self.registry, self.registry.edges(), self.warnings.get_all()
        )


class LineageGraphBuilder:
    """Builds a lineage graph from model records.

    Usage:
        builder = LineageGraphBuilder()
        output = builder.build(records)
        detail = output.column_detail("raw.orders")
    """

    def __init__(self, config: Optional[LineageConfig] = None) -> None:
        """Initialize a LineageGraphBuilder.

        Args:
            config: LineageConfig for canonicalization and reporting.
        """
        self.config = config or LineageConfig()

    def build(self, records: Iterable[Any]) -> GraphOutput:
        """Build and materialize the lineage graph of ``records``.

        Args:
            records: Raw documents (mappings) or parsed ModelRecords, in
                processing order.

        Returns:
            GraphOutput: the materialized graph with its diagnostics.
        """
        return self.build_graph(records).materialize()

    def build_graph(self, records: Iterable[Any]) -> LineageBuild:
        """Run both passes and return the build state (not materialized).

        Args:
            records: Raw documents (mappings) or parsed ModelRecords.

        Returns:
            LineageBuild: registry, column index and diagnostics.
        """
        build = LineageBuild()

        count = 0
        for index, raw in enumerate(records):
            self._add_record(build, index, raw)
            count += 1

        self._merge_column_index(build)

        logger.info(
            "Built lineage graph from %d record(s): %d node(s), %d edge(s), %d skipped",
            count,
            len(build.registry),
            len(build.registry.edges()),
            len(build.skipped_records),
        )
        return build

    # === First pass ===

    def _add_record(self, build: LineageBuild, index: int, raw: Any) -> None:
        """Register one record's node, edges and column references."""
        if isinstance(raw, ModelRecord):
            record = raw
        elif isinstance(raw, Mapping):
            record = ModelRecord.from_dict(raw)
        else:
            build.skipped_records.append(index)
            build.warnings.add_unresolved_record(
                self.config.on_unresolved_record,
                index,
                f"expected an object, got {type(raw).__name__}",
            )
            return

        model_id = resolve_model_id(record, self.config)
        if model_id is None:
            build.skipped_records.append(index)
            build.warnings.add_unresolved_record(
                self.config.on_unresolved_record, index, record.describe()
            )
            return

        registry = build.registry
        registry.ensure_node(model_id, NodeKind.MODEL)
        node = registry.get_node(model_id)
        node.source_record = record

        if record.columns is not None:
            node.columns = {
                name: ColumnInfo(source_refs=list(meta.source_refs), transform=meta.transform)
                for name, meta in record.columns.items()
            }
            self._collect_column_references(build, model_id, record)

        for source in record.sources:
            self._add_source(build, model_id, source)

    def _collect_column_references(
        self, build: LineageBuild, model_id: str, record: ModelRecord
    ) -> None:
        """Add the record's column references to the provisional index."""
        local_names = set(record.intermediate_steps)

        for column_name, meta in (record.columns or {}).items():
            for reference in meta.references:
                parts = split_qualified_reference(reference)
                if parts is None:
                    build.warnings.add_malformed_reference(
                        self.config.on_malformed_reference, model_id, column_name, reference
                    )
                    continue

                owner, owner_column = parts
                canonical = canonicalize(owner, self.config)
                if canonical is None:
                    logger.debug("Ignoring non-table reference %r in %s", reference, model_id)
                    continue
                if owner in local_names or canonical in local_names:
                    continue

                build.column_index.setdefault(canonical, {}).setdefault(
                    owner_column, []
                ).append(UsedBy(model=model_id, column=column_name))

    def _add_source(self, build: LineageBuild, model_id: str, source: SourceRef) -> None:
        """Add the node and edge for one declared dependency."""
        registry = build.registry
        mode = self.config.on_malformed_reference

        if source.kind is SourceKind.REF:
            ref_id = source.model.strip() if source.model else ""
            if not ref_id:
                build.warnings.add_incomplete_source(
                    mode, model_id, source.raw, "ref without a model"
                )
                return
            registry.ensure_node(ref_id, NodeKind.MODEL)
            registry.add_edge(ref_id, model_id)

        elif source.kind is SourceKind.DBT_SOURCE:
            if not source.table or not source.name:
                build.warnings.add_incomplete_source(
                    mode, model_id, source.raw, "dbt_source needs both name and table"
                )
                return
            source_id = canonicalize(f"{source.name}.{source.table}", self.config)
            if source_id is None:
                logger.debug("Ignoring non-table source %r in %s", source.raw, model_id)
                return
            registry.ensure_node(source_id, NodeKind.SOURCE)
            registry.add_edge(source_id, model_id)

        else:
            build.warnings.add_incomplete_source(
                mode, model_id, source.raw, "unrecognized source type"
            )

    # === Second pass ===

    def _merge_column_index(self, build: LineageBuild) -> None:
        """Attach the provisional column index to upstream nodes.

        Creates source nodes for owners seen only in column references. Never
        creates model nodes or edges.
        """
        registry = build.registry
        for owner, columns in build.column_index.items():
            registry.ensure_node(owner, NodeKind.SOURCE)
            node = registry.get_node(owner)
            for column_name, consumers in columns.items():
                node.ensure_column(column_name).used_by.extend(consumers)


def build_lineage_graph(
    records: Iterable[Any], config: Optional[LineageConfig] = None
) -> GraphOutput:
    """Convenience wrapper around LineageGraphBuilder.build."""
    return LineageGraphBuilder(config).build(records)
