"""
Record loading.

Model records are produced elsewhere; this package reads them from JSON
files so they can be handed to the graph builder.
"""

from model_lineage.loader.json_loader import list_record_files, load_record_file, load_records

__all__ = [
    "list_record_files",
    "load_record_file",
    "load_records",
]
