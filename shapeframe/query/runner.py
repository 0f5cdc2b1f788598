"""
Query runner - executes queries and formats their results

Sits between a QueryExecutor and the FrameBuilder: normalizes query text,
executes it, and attaches execution failures to the response instead of
formatting anything.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Mapping

from shapeframe.core.builder import FrameBuilder
from shapeframe.core.exceptions import QueryError
from shapeframe.core.frame import Frame
from shapeframe.core.interfaces import QueryExecutor
from shapeframe.core.options import FormatOptions
from shapeframe.query.classifier import QueryShape, classify

logger = logging.getLogger(__name__)


def normalize_query(query: str) -> str:
    """
    Clean up pasted query text

    Drops ``--`` comment lines and blank lines, joins the remaining lines with
    spaces and collapses repeated whitespace.

    Examples:
        >>> normalize_query("SELECT count(*)\\n-- all time\\nFROM Transaction")
        'SELECT count(*) FROM Transaction'
    """
    lines = []
    for line in query.replace("\r", "").split("\n"):
        stripped = line.strip()
        if stripped and not stripped.startswith("--"):
            lines.append(stripped)
    return " ".join(" ".join(lines).split())


@dataclass
class QueryResponse:
    """
    Outcome of one query

    Attributes:
        ref_id: Caller's identifier for the query
        frames: Formatted frames (empty on error)
        error: Execution failure, None on success
        shape: Classified shape of the result set (None on error)
    """

    ref_id: str
    frames: list[Frame] = field(default_factory=list)
    error: QueryError | None = None
    shape: QueryShape | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class QueryRunner:
    """
    Runs queries through an executor and formats their results

    Attributes:
        executor: QueryExecutor issuing the queries
        options: Formatting options applied to every result set
        max_workers: Thread pool size for run_many()

    Examples:
        >>> runner = QueryRunner(executor, FormatOptions(sort_fields=True))
        >>> response = runner.run("SELECT count(*) FROM Transaction FACET appName")
        >>> response.ok
        True
        >>> responses = runner.run_many({"A": query_a, "B": query_b})
    """

    def __init__(
        self,
        executor: QueryExecutor,
        options: FormatOptions | None = None,
        max_workers: int = 4,
    ):
        if max_workers < 1:
            raise ValueError(f"max_workers must be positive, got {max_workers}")
        self.executor = executor
        self.options = options or FormatOptions()
        self.max_workers = max_workers
        self.builder = FrameBuilder(self.options)

    def run(self, query: str, ref_id: str = "A") -> QueryResponse:
        """
        Execute and format a single query

        Args:
            query: Raw query text (comments and line breaks allowed)
            ref_id: Identifier echoed in the response

        Returns:
            QueryResponse with frames, or with the error and no frames
        """
        text = normalize_query(query)
        if not text:
            logger.error("Query text is empty (refId=%s)", ref_id)
            return QueryResponse(ref_id, error=QueryError("query text cannot be empty"))

        try:
            result_set = self.executor.execute(text)
        except Exception as e:
            error = QueryError("query execution failed", query=text)
            error.__cause__ = e
            logger.error("Query execution failed (refId=%s): %s", ref_id, error)
            return QueryResponse(ref_id, error=error)

        shape = classify(result_set)
        frames = self.builder.build(result_set, shape)
        logger.info(
            "Query %s returned %d rows as %s (%d frames)",
            ref_id,
            len(result_set),
            shape.kind.value,
            len(frames),
        )
        return QueryResponse(ref_id, frames=frames, shape=shape)

    def run_many(self, queries: Mapping[str, str]) -> dict[str, QueryResponse]:
        """
        Execute independent queries concurrently

        Args:
            queries: Mapping of ref id to query text

        Returns:
            Responses keyed by ref id, in the order of ``queries``
        """
        if not queries:
            return {}
        workers = min(self.max_workers, len(queries))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = {
                ref_id: pool.submit(self.run, query, ref_id) for ref_id, query in queries.items()
            }
            return {ref_id: future.result() for ref_id, future in futures.items()}

    def __repr__(self) -> str:
        return (
            f"<QueryRunner>\n"
            f"Executor: {self.executor.__class__.__name__}\n"
            f"Workers: {self.max_workers}"
        )
