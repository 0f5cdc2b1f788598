"""
ShapeFrame Exceptions

Exception hierarchy for error handling.
"""


class ShapeFrameError(Exception):
    """Base exception for ShapeFrame"""

    pass


class QueryError(ShapeFrameError):
    """Query execution failed"""

    def __init__(self, message: str, query: str = ""):
        super().__init__(message)
        self.query = query

    def __str__(self) -> str:
        message = super().__str__()
        if self.query:
            message = f"query execution error for '{self.query}': {message}"
        if self.__cause__ is not None:
            message = f"{message}: {self.__cause__}"
        return message


class FrameShapeError(ShapeFrameError):
    """Columns of a frame disagree on row count"""

    pass


class ResultFormatError(ShapeFrameError):
    """Payload is not a recognizable result set"""

    pass
