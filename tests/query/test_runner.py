"""
Tests for QueryRunner

Uses in-memory executors so no network or recorded files are involved.
"""

import threading

import pytest

from shapeframe.core.exceptions import QueryError
from shapeframe.core.interfaces import QueryExecutor
from shapeframe.core.result import ResultSet
from shapeframe.query.classifier import ShapeKind
from shapeframe.query.runner import QueryResponse, QueryRunner, normalize_query


class DictExecutor:
    """Answers queries from a dict of query text to ResultSet"""

    def __init__(self, answers):
        self.answers = answers
        self.seen = []
        self._lock = threading.Lock()

    def execute(self, query):
        with self._lock:
            self.seen.append(query)
        if query not in self.answers:
            raise RuntimeError(f"unknown query: {query}")
        return self.answers[query]


class TestNormalizeQuery:
    """Tests for normalize_query()"""

    def test_drops_comments_and_joins_lines(self):
        text = "SELECT count(*)\n-- last day\nFROM Transaction\n\n  FACET   appName"
        assert normalize_query(text) == "SELECT count(*) FROM Transaction FACET appName"

    def test_windows_line_endings(self):
        assert normalize_query("SELECT 1\r\nFROM x") == "SELECT 1 FROM x"

    def test_only_comments(self):
        assert normalize_query("-- nothing\n   \n-- here") == ""

    def test_already_clean(self):
        assert normalize_query("SELECT count(*) FROM Transaction") == "SELECT count(*) FROM Transaction"


class TestQueryRunner:
    """Tests for QueryRunner.run()"""

    @pytest.fixture
    def executor(self, simple_count_results, faceted_count_results):
        return DictExecutor(
            {
                "SELECT count(*) FROM Transaction": simple_count_results,
                "SELECT count(*) FROM Transaction FACET service": faceted_count_results,
            }
        )

    def test_executor_protocol(self, executor):
        assert isinstance(executor, QueryExecutor)

    def test_run(self, executor, options):
        runner = QueryRunner(executor, options)
        response = runner.run("SELECT count(*)\n-- everything\nFROM Transaction", ref_id="B")

        assert response.ok
        assert response.ref_id == "B"
        assert response.shape.kind is ShapeKind.SIMPLE_COUNT
        assert [f.name for f in response.frames] == ["count", "count_time_series"]
        assert executor.seen == ["SELECT count(*) FROM Transaction"]

    def test_empty_query(self, executor, options):
        response = QueryRunner(executor, options).run("-- just a comment")
        assert not response.ok
        assert isinstance(response.error, QueryError)
        assert response.frames == []
        assert executor.seen == []

    def test_execution_failure(self, executor, options):
        response = QueryRunner(executor, options).run("SELECT nonsense")

        assert not response.ok
        assert response.frames == []
        assert response.shape is None
        assert isinstance(response.error.__cause__, RuntimeError)
        assert "SELECT nonsense" in str(response.error)
        assert "unknown query" in str(response.error)

    def test_empty_result_set(self, options):
        runner = QueryRunner(DictExecutor({"SELECT 1": ResultSet()}), options)
        response = runner.run("SELECT 1")
        assert response.ok
        assert response.frames == []
        assert response.shape.kind is ShapeKind.EMPTY

    def test_invalid_workers(self, executor):
        with pytest.raises(ValueError, match="max_workers"):
            QueryRunner(executor, max_workers=0)

    def test_repr(self, executor):
        text = repr(QueryRunner(executor, max_workers=2))
        assert "DictExecutor" in text
        assert "Workers: 2" in text


class TestRunMany:
    """Tests for QueryRunner.run_many()"""

    def test_responses_in_request_order(self, faceted_count_results, simple_count_results, options):
        executor = DictExecutor({"q1": faceted_count_results, "q2": simple_count_results})
        runner = QueryRunner(executor, options, max_workers=2)

        responses = runner.run_many({"B": "q2", "A": "q1", "C": "missing"})

        assert list(responses) == ["B", "A", "C"]
        assert all(isinstance(r, QueryResponse) for r in responses.values())
        assert responses["A"].shape.kind is ShapeKind.FACETED_COUNT
        assert responses["B"].shape.kind is ShapeKind.SIMPLE_COUNT
        assert not responses["C"].ok
        assert sorted(executor.seen) == ["missing", "q1", "q2"]

    def test_failure_isolated(self, simple_count_results, options):
        executor = DictExecutor({"ok": simple_count_results})
        responses = QueryRunner(executor, options).run_many({"A": "ok", "B": "bad"})
        assert responses["A"].ok
        assert len(responses["A"].frames) == 2
        assert responses["B"].error is not None

    def test_no_queries(self, options):
        assert QueryRunner(DictExecutor({}), options).run_many({}) == {}
