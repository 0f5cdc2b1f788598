"""
Tests for exceptions
"""

import pytest

from shapeframe.core.exceptions import (
    FrameShapeError,
    QueryError,
    ResultFormatError,
    ShapeFrameError,
)


class TestExceptions:
    """Test exception hierarchy"""

    def test_base_exception(self):
        """Test ShapeFrameError"""
        with pytest.raises(ShapeFrameError):
            raise ShapeFrameError("Test error")

    def test_query_error(self):
        """Test QueryError inherits from ShapeFrameError"""
        with pytest.raises(ShapeFrameError):
            raise QueryError("Query failed")

        with pytest.raises(QueryError):
            raise QueryError("Query failed")

    def test_frame_shape_error(self):
        """Test FrameShapeError inherits from ShapeFrameError"""
        with pytest.raises(ShapeFrameError):
            raise FrameShapeError("Ragged frame")

    def test_result_format_error(self):
        """Test ResultFormatError inherits from ShapeFrameError"""
        with pytest.raises(ShapeFrameError):
            raise ResultFormatError("Not a result set")

    def test_exception_messages(self):
        """Test exception messages are preserved"""
        msg = "Custom error message"

        try:
            raise FrameShapeError(msg)
        except FrameShapeError as e:
            assert str(e) == msg

    def test_query_error_mentions_query_and_cause(self):
        """Test QueryError message includes the query text and wrapped cause"""
        try:
            try:
                raise ConnectionError("timeout")
            except ConnectionError as cause:
                raise QueryError("error from API", query="SELECT 1") from cause
        except QueryError as e:
            assert e.query == "SELECT 1"
            assert "SELECT 1" in str(e)
            assert "error from API" in str(e)
            assert "timeout" in str(e)
