"""
Command-line interface for model lineage v1.0.

This module provides the ``model-lineage`` command, which loads model
description records from JSON files, builds the lineage graph and prints
summaries, column details and dependency queries.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from colorama import Fore, Style, init
from tabulate import tabulate

from model_lineage import (
    ErrorMode,
    GraphOutput,
    LineageBuild,
    LineageConfig,
    LineageGraphBuilder,
    NodeKind,
    load_records,
)
from model_lineage.exceptions import LineageError

init(autoreset=True)
USE_COLOR = True


def _color(msg: str, color: str) -> str:
    if USE_COLOR:
        return f"{color}{msg}{Style.RESET_ALL}"
    return msg


def print_success(msg: str) -> None:
    """Print success message."""
    print(_color(f"[OK] {msg}", Fore.GREEN))


def print_error(msg: str) -> None:
    """Print error message."""
    print(_color(f"[ERROR] {msg}", Fore.RED), file=sys.stderr)


def print_warning(msg: str) -> None:
    """Print warning message."""
    print(_color(f"[WARN] {msg}", Fore.YELLOW))


def print_info(msg: str) -> None:
    """Print info message."""
    print(_color(msg, Fore.CYAN))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="model-lineage",
        description="Model lineage graph builder - v1.0",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Summarize the lineage of a directory of model records
  %(prog)s models/

  # Show the columns of a node and who reads them
  %(prog)s models/ --node raw.orders

  # Everything a model depends on
  %(prog)s models/ --upstream orders_fct

  # Export the graph for a renderer
  %(prog)s models/ --export graph.json --format cytoscape
        """,
    )

    # === Input parameters ===
    input_group = parser.add_argument_group("Input Options")
    input_group.add_argument(
        "path", help="Directory of model record JSON files, or a single JSON file"
    )
    input_group.add_argument(
        "--pattern",
        default="*.json",
        help="Glob pattern for record files in a directory (default: *.json)",
    )

    # === Query parameters ===
    query_group = parser.add_argument_group("Query Options")
    query_group.add_argument(
        "--node", "-n", metavar="ID", help="Show column detail for a node"
    )
    query_group.add_argument(
        "--upstream", "-u", metavar="ID", help="List every node ID depends on"
    )
    query_group.add_argument(
        "--downstream", "-d", metavar="ID", help="List every node that depends on ID"
    )
    query_group.add_argument(
        "--list-nodes", action="store_true", help="List all nodes of the graph"
    )

    # === Output parameters ===
    output_group = parser.add_argument_group("Output Options")
    output_group.add_argument(
        "--format",
        "-f",
        choices=["pretty", "table", "json", "cytoscape"],
        default="pretty",
        help="Output format (default: pretty)",
    )
    output_group.add_argument(
        "--export", "-o", metavar="FILE", help="Export the graph to a JSON file"
    )
    output_group.add_argument(
        "--no-color", action="store_true", help="Disable colored output"
    )

    # === Configuration parameters ===
    config_group = parser.add_argument_group("Configuration")
    config_group.add_argument(
        "--reject-prefix",
        action="append",
        metavar="PREFIX",
        help="Pseudo-table prefix to ignore (repeatable, replaces the defaults)",
    )
    config_group.add_argument(
        "--no-warnings", action="store_true", help="Suppress build diagnostics"
    )
    config_group.add_argument(
        "--verbose", "-v", action="count", default=0, help="Increase log verbosity"
    )
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """
    CLI main entry point.

    Supported commands:
        model-lineage models/
        model-lineage models/ --node raw.orders
        model-lineage models/ --upstream orders_fct
        model-lineage models/ --downstream raw.orders
        model-lineage models/ --export graph.json --format cytoscape
    """
    args = build_parser().parse_args(argv)

    if args.no_color:
        global USE_COLOR
        USE_COLOR = False

    # Diagnostics are printed by show_warnings; logging repeats them only with -v
    log_levels = {0: logging.ERROR, 1: logging.INFO}
    logging.basicConfig(
        level=log_levels.get(args.verbose, logging.DEBUG),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        # 1. Load records
        print_info(f"Reading model records from: {args.path}")
        records = load_records(Path(args.path), args.pattern)

        # 2. Configure builder
        config_kwargs = {}
        if args.reject_prefix:
            config_kwargs["reject_prefixes"] = tuple(args.reject_prefix)
        if args.no_warnings:
            config_kwargs["on_unresolved_record"] = ErrorMode.IGNORE
            config_kwargs["on_malformed_reference"] = ErrorMode.IGNORE
        config = LineageConfig(**config_kwargs)

        # 3. Build graph
        build = LineageGraphBuilder(config).build_graph(records)
        output = build.materialize()
        print_success(
            f"Built lineage graph from {len(records)} record(s): "
            f"{len(output.nodes)} nodes, {len(output.edges)} edges."
        )

        # 4. Handle query commands
        if args.node:
            handle_node(output, args.node)
        elif args.upstream:
            handle_dependencies(build, args.upstream, upstream=True)
        elif args.downstream:
            handle_dependencies(build, args.downstream, upstream=False)
        elif args.list_nodes:
            handle_list_nodes(output)
        else:
            handle_summary(build, output, args.format)

        # 5. Export (if needed)
        if args.export:
            handle_export(output, args.export, args.format)

        # 6. Show warnings (if any)
        if not args.no_warnings:
            show_warnings(output)

    except LineageError as e:
        print_error(f"Lineage build failed: {e}")
        sys.exit(1)


def handle_node(output: GraphOutput, node_id: str) -> None:
    """Handle --node command."""
    node = output.get_node(node_id)
    detail = output.column_detail(node_id)
    if node is None or detail is None:
        print_error(f"Node not found: {node_id}")
        sys.exit(1)

    print_info(f"\n{node.id} ({node.kind.value})\n")
    if not detail.columns:
        print_warning(f"No column information for {node_id}")
        return

    rows = []
    for name, info in detail.columns.items():
        rows.append(
            [
                name,
                "\n".join(info.source_refs) or "-",
                info.transform or "-",
                "\n".join(f"{u.model}.{u.column}" for u in info.used_by) or "-",
            ]
        )
    print(
        tabulate(
            rows,
            headers=["Column", "Sources", "Transformation", "Used by"],
            tablefmt="grid",
        )
    )


def handle_dependencies(build: LineageBuild, node_id: str, upstream: bool) -> None:
    """Handle --upstream / --downstream commands."""
    direction = "upstream" if upstream else "downstream"
    related = build.registry.upstream(node_id) if upstream else build.registry.downstream(node_id)

    if not related:
        print_warning(f"No {direction} nodes found for {node_id}")
        return

    print_success(f"Found {len(related)} {direction} node(s) of {node_id}:\n")
    for related_id in related:
        kind = build.registry.get_node(related_id).kind.value
        print(f"  - {related_id} ({kind})")


def handle_list_nodes(output: GraphOutput) -> None:
    """Handle --list-nodes command."""
    for kind in (NodeKind.MODEL, NodeKind.SOURCE):
        nodes = output.get_nodes_by_kind(kind)
        if not nodes:
            continue
        print(_color(f"\n{kind.value.capitalize()} nodes:", Fore.GREEN))
        for node in nodes:
            columns = len(output.column_detail(node.id).columns)
            print(f"  - {node.id} ({columns} columns)")


def handle_summary(build: LineageBuild, output: GraphOutput, format: str) -> None:
    """Show build summary."""
    if format == "json":
        print(output.to_json(indent=2))
        return
    if format == "cytoscape":
        print(json.dumps(output.to_cytoscape(), indent=2, ensure_ascii=False))
        return

    stats = build.registry.get_statistics()
    print_info("\n" + "=" * 60)
    print_info("Lineage Summary")
    print_info("=" * 60 + "\n")
    print(
        tabulate(
            [
                ["Model nodes", stats["model_nodes"]],
                ["Source nodes", stats["source_nodes"]],
                ["Edges", stats["total_edges"]],
                ["Skipped records", len(build.skipped_records)],
                ["Acyclic", "yes" if stats["is_acyclic"] else "no"],
            ],
            tablefmt="simple",
        )
    )

    if format == "table":
        rows = [
            [
                node.id,
                node.kind.value,
                node.materialization or "-",
                len(output.column_detail(node.id).columns),
            ]
            for node in output.nodes
        ]
        print()
        print(tabulate(rows, headers=["Node", "Kind", "Type", "Columns"], tablefmt="github"))
        return

    print("\nDependencies:")
    for edge in output.edges:
        print(f"  {edge.source} -> {edge.target}")


def handle_export(output: GraphOutput, output_file: str, format: str) -> None:
    """Export the graph."""
    output_path = Path(output_file)
    print_info(f"\nExporting lineage to: {output_path}")

    if format == "cytoscape":
        data = output.to_cytoscape()
    else:
        data = output.to_dict()

    output_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    print_success(f"Exported to {output_path}")


def show_warnings(output: GraphOutput) -> None:
    """Show build diagnostics."""
    if output.warnings:
        print_warning(f"\n{len(output.warnings)} warning(s):")
        for i, warning in enumerate(output.warnings, 1):
            print(f"  {i}. {warning.message}")


if __name__ == "__main__":
    main()
