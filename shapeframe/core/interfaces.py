"""
ShapeFrame Collaborator Protocols

Contracts for the components ShapeFrame consumes but does not implement.

Design principle: "Contract-First Development"
- The remote analytics client stays outside the library
- Easy mocking/testing
- Clear contracts
"""

from typing import Protocol, runtime_checkable

from shapeframe.core.result import ResultSet


@runtime_checkable
class QueryExecutor(Protocol):
    """
    Issues analytics queries and returns their raw result sets

    Implementations wrap a remote API client (credentials, retries and
    transport are theirs to handle).
    """

    def execute(self, query: str) -> ResultSet:
        """
        Execute a query

        Args:
            query: Normalized query text

        Returns:
            ResultSet with the rows and grouping metadata of the query

        Raises:
            Exception: Any failure; the runner attaches it to the response
                as a QueryError and never formats a partial result
        """
        ...
