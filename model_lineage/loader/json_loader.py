"""
JSON record loader.

Reads model description documents from the filesystem: either a directory
holding one JSON document per model, or a single JSON file holding one
document or an array of documents. Records are returned in a stable order
(sorted by path) so repeated builds see the same input order.
"""

import json
import logging
from pathlib import Path
from typing import Any, List, Union

from model_lineage.exceptions import RecordLoadError

logger = logging.getLogger(__name__)


def list_record_files(directory: Union[str, Path], pattern: str = "*.json") -> List[Path]:
    """List record files under a directory, recursively, sorted by path.

    Args:
        directory: Directory to scan.
        pattern: Glob pattern for record files.

    Returns:
        Sorted list of file paths.

    Raises:
        RecordLoadError: If the directory does not exist.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise RecordLoadError("Record directory not found", directory)
    return sorted(path for path in directory.rglob(pattern) if path.is_file())


def load_record_file(path: Union[str, Path]) -> List[Any]:
    """Load the documents held by one JSON file.

    Args:
        path: JSON file holding one document or an array of documents.

    Returns:
        List of documents (an array file yields each element).

    Raises:
        RecordLoadError: If the file cannot be read or is not valid JSON.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise RecordLoadError(f"Cannot read record file: {e.strerror or e}", path) from e
    except UnicodeDecodeError as e:
        raise RecordLoadError(f"Record file is not valid UTF-8: {e.reason}", path) from e
    except json.JSONDecodeError as e:
        raise RecordLoadError(
            f"Invalid JSON at line {e.lineno}, column {e.colno}: {e.msg}", path
        ) from e

    if isinstance(data, list):
        return data
    return [data]


def load_records(path: Union[str, Path], pattern: str = "*.json") -> List[Any]:
    """Load every model record found at ``path``.

    Args:
        path: A directory of record files or a single record file.
        pattern: Glob pattern used when ``path`` is a directory.

    Returns:
        Raw documents, in file order.

    Raises:
        RecordLoadError: If the path does not exist or a file is invalid.
    """
    path = Path(path)
    if path.is_dir():
        files = list_record_files(path, pattern)
    elif path.is_file():
        files = [path]
    else:
        raise RecordLoadError("Record path not found", path)

    records: List[Any] = []
    for file in files:
        documents = load_record_file(file)
        logger.debug("Loaded %d record(s) from %s", len(documents), file)
        records.extend(documents)

    logger.info("Loaded %d record(s) from %d file(s)", len(records), len(files))
    return records
