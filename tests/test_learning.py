# ==============================================
# Tests for LearningPipeline
# ==============================================
#
# End-to-end runs over the fixtures: all four topics wired together,
# plus the degraded paths (missing data, unusable UI, failing
# collaborators).
# ==============================================

import threading

import pytest

from patternbridge.collaborators import (
    AuxiliaryRanker,
    FileMarkupSource,
    InMemoryDataSource,
    StaticMarkupSource,
    StaticRanker,
    TabularDataSource,
)
from patternbridge.config import AppConfig, RuntimeConfig
from patternbridge.context import LearningContext
from patternbridge.exceptions import SourceError
from patternbridge.learning import LearningPipeline


@pytest.fixture
def pipeline(app_config):
    return LearningPipeline(app_config)


class _FailingRanker(AuxiliaryRanker):
    def rank(self, elements, field_summary):
        raise RuntimeError("ranker unavailable")


class _SlowRanker(AuxiliaryRanker):
    def __init__(self):
        self.release = threading.Event()

    def rank(self, elements, field_summary):
        self.release.wait(5)
        return []


class _BrokenSource(TabularDataSource):
    def records(self):
        raise SourceError("export unavailable")


# ==============================================
# Run Status
# ==============================================

class TestRun:
    """run() over inputs already in hand."""

    def test_complete(self, pipeline, breed_records, native_markup):
        result = pipeline.run(breed_records, native_markup)
        assert result.status == "complete"
        assert len(result.connections) == 4
        assert [c.id for c in result.test_cases] == [
            "filter_breed_1", "search_breed_1", "sort_breed_1", "sort_breed_2",
        ]
        assert result.context.warnings == []

    def test_ui_only(self, pipeline, native_markup):
        result = pipeline.run(None, native_markup)
        assert result.status == "ui_only"
        assert result.connections.is_empty
        assert len(result.test_cases) == 8
        assert all(c.confidence is None for c in result.test_cases)
        assert result.context.warnings

    def test_data_only(self, pipeline, breed_records):
        result = pipeline.run(breed_records, "")
        assert result.status == "data_only"
        assert result.connections.is_empty
        assert result.test_cases == []
        assert not result.data_patterns.is_empty

    def test_empty(self, pipeline):
        result = pipeline.run([], None)
        assert result.status == "empty"
        assert result.is_empty
        assert result.test_cases == []

    def test_caller_owned_context(self, pipeline, breed_records, native_markup):
        context = LearningContext()
        result = pipeline.run(breed_records, native_markup, context)
        assert result.context is context

    def test_summary_and_dict(self, pipeline, breed_records, native_markup):
        result = pipeline.run(breed_records, native_markup)
        assert result.summary() == {
            "status": "complete",
            "fields": 1,
            "ui_elements": 8,
            "connections": 4,
            "test_cases": 4,
            "failed_calls": 0,
        }
        data = result.to_dict()
        assert data["test_cases"][0]["type"] == "filter_test"
        assert data["connections"]["categorical_filters"][0]["confidence"] == 1.0

    def test_single_steps(self, pipeline, breed_records, native_markup):
        data = pipeline.classify_data(breed_records)
        ui = pipeline.classify_ui(native_markup)
        connections = pipeline.match(data, ui)
        cases = pipeline.synthesize(connections, ui)
        assert [c.id for c in cases] == [c.id for c in pipeline.run(breed_records, native_markup).test_cases]


# ==============================================
# Ranker Handling
# ==============================================

class TestRanker:
    """The ranker is optional and never breaks a run."""

    def test_ranked_order(self, app_config, breed_records, native_markup):
        pipeline = LearningPipeline(app_config, ranker=StaticRanker(['th:has-text("Breed")']))
        result = pipeline.run(breed_records, native_markup)
        assert result.test_cases[0].primary_selector == 'th:has-text("Breed")'
        assert [c.name for c in result.context.calls] == ["ranker"]

    def test_failing_ranker(self, app_config, breed_records, native_markup):
        pipeline = LearningPipeline(app_config, ranker=_FailingRanker())
        result = pipeline.run(breed_records, native_markup)
        assert result.test_cases[0].id == "filter_breed_1"
        assert result.context.failed_calls()[0].status == "failed"

    def test_ranker_timeout(self, breed_records, native_markup):
        config = AppConfig(runtime=RuntimeConfig(ranker_timeout_seconds=0.05))
        ranker = _SlowRanker()
        try:
            result = LearningPipeline(config, ranker=ranker).run(breed_records, native_markup)
        finally:
            ranker.release.set()
        assert result.test_cases[0].id == "filter_breed_1"
        assert result.context.failed_calls()[0].status == "timeout"


# ==============================================
# Sources
# ==============================================

class TestLearn:
    """learn() fetches both inputs through their collaborators."""

    def test_learn(self, pipeline, breed_records, mui_markup):
        result = pipeline.learn(InMemoryDataSource(breed_records), StaticMarkupSource(mui_markup))
        assert result.status == "complete"
        assert [c.name for c in result.context.calls] == ["records", "markup"]
        assert result.context.last_responses["records"] == breed_records

    def test_failing_markup_source(self, pipeline, breed_records, tmp_path):
        result = pipeline.learn(InMemoryDataSource(breed_records), FileMarkupSource(tmp_path / "none.html"))
        assert result.status == "data_only"
        assert result.context.failed_calls()[0].name == "markup"
        assert any("markup" in w for w in result.context.warnings)

    def test_failing_data_source(self, pipeline, native_markup):
        result = pipeline.learn(_BrokenSource(), StaticMarkupSource(native_markup))
        assert result.status == "ui_only"
        assert result.context.failed_calls()[0].name == "records"

    def test_no_sources(self, pipeline):
        result = pipeline.learn(None, None)
        assert result.status == "empty"
        assert result.context.calls == []
