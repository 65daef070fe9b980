"""Tests for shared error handling and the heuristic registry."""

from __future__ import annotations

import pytest

from webwrap_core.heuristics import create_default_registry, get_heuristics_by_category
from webwrap_core.heuristics.base import HeuristicRegistry
from webwrap_core.heuristics.content import ScriptPresenceHeuristic
from webwrap_core.infrastructure.shared import (
    ErrorSeverity, get_error_service, log_and_continue, safe_execute
)
from webwrap_core.logic.models import AnalysisConfig


@pytest.fixture
def error_service():
    service = get_error_service()
    service.reset_error_stats()
    yield service
    service.reset_error_stats()


def test_safe_execute_returns_default_and_counts(error_service):
    def explode():
        raise OSError("disk gone")

    assert safe_execute(explode, default_value=[], operation="list", component="scan.test") == []
    assert error_service.get_error_stats() == {"scan.test_warning": 1}


def test_safe_execute_passes_results_through(error_service):
    assert safe_execute(lambda: 42, default_value=0) == 42
    assert error_service.get_error_stats() == {}


def test_log_and_continue_records_severity(error_service, caplog):
    log_and_continue("step failed", component="materializer", severity=ErrorSeverity.ERROR, package="a.apk")

    assert error_service.get_error_stats() == {"materializer_error": 1}
    assert "step failed" in caplog.text
    assert "a.apk" in caplog.text


def test_registry_rejects_non_heuristics():
    with pytest.raises(ValueError):
        HeuristicRegistry().register(object)


def test_registry_creates_instances_in_order():
    registry = create_default_registry()

    instances = registry.create_instances(AnalysisConfig())

    assert [h.name for h in instances] == registry.get_available_heuristics()
    assert registry.create_instance("unknown") is None

    registry.clear()
    assert registry.get_available_heuristics() == []


def test_reregistering_overwrites():
    registry = HeuristicRegistry()
    registry.register(ScriptPresenceHeuristic)
    registry.register(ScriptPresenceHeuristic)

    assert registry.get_available_heuristics() == ["script_presence"]


def test_categories():
    assert [h().name for h in get_heuristics_by_category("Bundled Content")] == [
        "markup_presence", "script_presence",
    ]
    assert get_heuristics_by_category("Unknown") == []
