# ==============================================
# Tests for collaborator adapters and the run budget
# ==============================================

import threading
from unittest.mock import Mock

import pytest
import requests

from patternbridge.collaborators import (
    BudgetedRanker,
    DelimitedFileSource,
    FileMarkupSource,
    HttpMarkupSource,
    InMemoryDataSource,
    RunBudget,
    StaticMarkupSource,
    StaticRanker,
    recorded_call,
)
from patternbridge.context import LearningContext
from patternbridge.exceptions import BudgetExceededError, SourceError


# ==============================================
# RunBudget
# ==============================================

class TestRunBudget:
    """Per-call timeout and overall budget."""

    def test_returns_result(self):
        assert RunBudget(5).call(lambda: 42) == 42

    def test_remaining_uses_clock(self):
        now = [100.0]
        budget = RunBudget(10, clock=lambda: now[0])
        now[0] = 104.0
        assert budget.remaining() == 6.0
        now[0] = 111.0
        assert budget.expired

    def test_spent_budget_rejects_calls(self):
        now = [0.0]
        budget = RunBudget(1, clock=lambda: now[0])
        now[0] = 5.0
        fn = Mock()
        with pytest.raises(BudgetExceededError):
            budget.call(fn)
        fn.assert_not_called()

    def test_per_call_timeout(self):
        release = threading.Event()
        try:
            with pytest.raises(BudgetExceededError):
                RunBudget(30).call(lambda: release.wait(5), timeout=0.05, name="slow")
        finally:
            release.set()

    def test_errors_propagate(self):
        def boom():
            raise ValueError("bad input")

        with pytest.raises(ValueError):
            RunBudget(5).call(boom)


class TestRecordedCall:
    """Outcomes land in the caller's context."""

    def test_ok(self):
        context = LearningContext()
        assert recorded_call(RunBudget(5), context, "records", lambda: [1]) == [1]
        assert context.calls[0].status == "ok"
        assert context.last_responses["records"] == [1]

    def test_failed(self):
        context = LearningContext()

        def boom():
            raise SourceError("gone")

        with pytest.raises(SourceError):
            recorded_call(RunBudget(5), context, "markup", boom)
        (call,) = context.failed_calls()
        assert call.status == "failed"
        assert "SourceError: gone" in call.detail
        assert "markup" not in context.last_responses

    def test_timeout(self):
        context = LearningContext()
        release = threading.Event()
        try:
            with pytest.raises(BudgetExceededError):
                recorded_call(RunBudget(30), context, "ranker", lambda: release.wait(5), timeout=0.05)
        finally:
            release.set()
        assert context.calls[0].status == "timeout"

    def test_without_context(self):
        assert recorded_call(RunBudget(5), None, "records", lambda: "x") == "x"


class TestBudgetedRanker:
    """Ranker calls go through the budget."""

    def test_records_ranker_call(self):
        context = LearningContext()
        ranker = BudgetedRanker(StaticRanker(["#a"]), RunBudget(5), timeout=1, context=context)
        assert ranker.rank([], {}) == ["#a"]
        assert [c.name for c in context.calls] == ["ranker"]


# ==============================================
# Sources
# ==============================================

class TestDataSources:
    """Tabular record adapters."""

    def test_in_memory(self, breed_records):
        source = InMemoryDataSource(breed_records)
        assert source.records() == breed_records
        assert source.records() is not source.records()

    def test_tsv_file(self, tmp_path):
        path = tmp_path / "breeds.tsv"
        path.write_text("breed\tage\nLabrador\t3\nPoodle\t\n", encoding="utf-8")
        assert DelimitedFileSource(path).records() == [
            {"breed": "Labrador", "age": "3"},
            {"breed": "Poodle", "age": ""},
        ]

    def test_files_are_flattened(self, tmp_path):
        first = tmp_path / "a.csv"
        second = tmp_path / "b.csv"
        first.write_text("breed\nBoxer\n", encoding="utf-8")
        second.write_text("breed,age\nPoodle,4\n", encoding="utf-8")
        records = DelimitedFileSource([first, second]).records()
        assert [r["breed"] for r in records] == ["Boxer", "Poodle"]

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_text("", encoding="utf-8")
        assert DelimitedFileSource(path).records() == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(SourceError):
            DelimitedFileSource(tmp_path / "missing.tsv").records()

    def test_delimiter_for(self):
        assert DelimitedFileSource.delimiter_for("x.TSV") == "\t"
        assert DelimitedFileSource.delimiter_for("x.csv") == ","

    def test_from_text(self):
        assert DelimitedFileSource.from_text("a,b\n1,2\n") == [{"a": "1", "b": "2"}]
        assert DelimitedFileSource.from_text("  ") == []


class TestMarkupSources:
    """Markup snapshot adapters."""

    def test_static(self):
        assert StaticMarkupSource("<div></div>").snapshot() == "<div></div>"

    def test_file(self, tmp_path):
        path = tmp_path / "page.html"
        path.write_text("<select id='x'></select>", encoding="utf-8")
        assert FileMarkupSource(path).snapshot() == "<select id='x'></select>"

    def test_missing_file(self, tmp_path):
        with pytest.raises(SourceError):
            FileMarkupSource(tmp_path / "missing.html").snapshot()

    def test_http(self):
        session = Mock()
        session.get.return_value.text = "<table></table>"
        source = HttpMarkupSource("https://example.test/dogs", timeout=3, session=session)

        assert source.snapshot() == "<table></table>"
        session.get.assert_called_once_with("https://example.test/dogs", timeout=3)

    def test_http_failure(self):
        session = Mock()
        session.get.side_effect = requests.exceptions.ConnectionError("refused")
        with pytest.raises(SourceError):
            HttpMarkupSource("https://example.test", session=session).snapshot()

    def test_http_status_error(self):
        session = Mock()
        session.get.return_value.raise_for_status.side_effect = requests.exceptions.HTTPError("404")
        with pytest.raises(SourceError):
            HttpMarkupSource("https://example.test", session=session).snapshot()
