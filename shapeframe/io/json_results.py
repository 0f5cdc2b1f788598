"""
JSON result loading

Reads query results saved as JSON (the NRDB payload layout, or a bare list of
rows) and serves them through the QueryExecutor protocol.
"""

import hashlib
import json
import logging
from pathlib import Path

from shapeframe.core.exceptions import QueryError, ResultFormatError
from shapeframe.core.result import ResultSet

logger = logging.getLogger(__name__)


def load_result_set(path: str | Path) -> ResultSet:
    """
    Load a result set from a JSON file

    Args:
        path: JSON file with ``{"results": [...], "metadata": {...}}`` or a list

    Returns:
        ResultSet

    Raises:
        FileNotFoundError: If the file does not exist
        ResultFormatError: If the file is not valid JSON or not a result set
    """
    path = Path(path)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ResultFormatError(f"{path}: invalid JSON: {e}") from e

    result_set = ResultSet.from_dict(payload)
    logger.debug("Loaded %d rows from %s", len(result_set), path)
    return result_set


def query_digest(query: str) -> str:
    """Stable file stem for a query text."""
    return hashlib.sha1(query.encode("utf-8")).hexdigest()[:16]


class JsonFileExecutor:
    """
    QueryExecutor serving recorded results from a directory

    A query resolves to ``<directory>/<name>.json`` where ``name`` is the query
    text itself when it names an existing file, or the digest of the query text
    otherwise. Useful for replaying captured API responses.

    Examples:
        >>> executor = JsonFileExecutor("./recorded")
        >>> rs = executor.execute("faceted_count")   # ./recorded/faceted_count.json
    """

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def path_for(self, query: str) -> Path:
        named = self.directory / f"{query}.json"
        if named.is_file():
            return named
        return self.directory / f"{query_digest(query)}.json"

    def record(self, query: str, result_set: ResultSet) -> Path:
        """Save a result set as the recorded answer to a query."""
        path = self.directory / f"{query_digest(query)}.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(result_set.to_dict()), encoding="utf-8")
        return path

    def execute(self, query: str) -> ResultSet:
        path = self.path_for(query)
        if not path.is_file():
            raise QueryError(f"no recorded result at {path}", query=query)
        return load_result_set(path)
