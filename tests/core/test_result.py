"""
Tests for ResultSet
"""

import pytest

from shapeframe.core.exceptions import ResultFormatError
from shapeframe.core.result import ResultSet


class TestResultSet:
    """Test ResultSet container"""

    def test_defaults(self):
        rs = ResultSet()
        assert rs.is_empty
        assert len(rs) == 0
        assert not rs.has_grouping
        assert rs.primary_dimension is None

    def test_primary_dimension_is_first(self):
        rs = ResultSet(rows=[{"count": 1}], facets=["service", "region"])
        assert rs.has_grouping
        assert rs.primary_dimension == "service"

    def test_iteration(self):
        rows = [{"a": 1}, {"a": 2}]
        assert list(ResultSet(rows=rows)) == rows

    def test_from_dict_payload(self):
        rs = ResultSet.from_dict(
            {"results": [{"count": 42.0, "facet": ["s1"]}], "metadata": {"facets": ["service"]}}
        )
        assert rs.rows == [{"count": 42.0, "facet": ["s1"]}]
        assert rs.facets == ["service"]

    def test_from_dict_bare_list(self):
        rs = ResultSet.from_dict([{"count": 1}])
        assert len(rs) == 1
        assert rs.facets == []

    def test_from_dict_missing_metadata(self):
        rs = ResultSet.from_dict({"results": []})
        assert rs.is_empty
        assert rs.facets == []

    def test_from_dict_single_facet_string(self):
        rs = ResultSet.from_dict({"results": [], "metadata": {"facets": "service"}})
        assert rs.facets == ["service"]

    def test_to_dict_from_dict(self):
        rs = ResultSet(rows=[{"count": 1.0, "facet": "a"}], facets=["svc"])
        assert ResultSet.from_dict(rs.to_dict()) == rs

    @pytest.mark.parametrize(
        "payload",
        [
            "nope",
            {"results": {"count": 1}},
            {"results": [1, 2]},
            {"results": [], "metadata": {"facets": 3}},
        ],
    )
    def test_invalid_payloads(self, payload):
        with pytest.raises(ResultFormatError):
            ResultSet.from_dict(payload)
