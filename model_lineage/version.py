"""Version information."""

__version__ = "1.0.0"
__version_info__ = (1, 0, 0)

# Version history
CHANGELOG = """
# Changelog

## v1.0.0

- Model/source lineage graph from model description records
- Column-level provenance index (source column -> used by)
- ref() and dbt source() dependency edges
- JSON and Cytoscape export
- model-lineage CLI
"""
