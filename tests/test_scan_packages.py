"""Tests for the batch orchestrator."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from webwrap_core.application import ScanPackagesUseCase
from webwrap_core.application.scan_packages import progress_percent
from webwrap_core.infrastructure.materializer import ArtifactMaterializer
from webwrap_core.infrastructure.storage import ReportStorageError
from webwrap_core.logic.models import AnalysisConfig, PathsConfig

from conftest import make_package


HYBRID_ENTRIES = {
    "classes.dex": "dex",
    "assets/www/index.html": "<html></html>",
    "assets/www/cordova.js": "",
}
NATIVE_ENTRIES = {"classes.dex": "dex", "res/layout/main.xml": ""}


def _use_case(tmp_path: Path, runner) -> ScanPackagesUseCase:
    config = AnalysisConfig(paths=PathsConfig(
        packages_dir=str(tmp_path / "apks"),
        work_dir=str(tmp_path / "zips"),
        report_path=str(tmp_path / "totals.json"),
    ))
    materializer = ArtifactMaterializer(config.paths.work_dir, config.tools, runner=runner)
    return ScanPackagesUseCase(config=config, materializer=materializer, setup_file_logging=False)


def test_batch_writes_one_entry_per_package(tmp_path, fake_runner_factory):
    make_package(tmp_path / "apks" / "hybrid.apk", HYBRID_ENTRIES)
    make_package(tmp_path / "apks" / "native.apk", NATIVE_ENTRIES)
    (tmp_path / "apks" / "notes.txt").write_text("not a package")
    (tmp_path / "apks" / "nested.apk").mkdir()
    runner = fake_runner_factory(
        classes=["org/apache/cordova/CordovaActivity.class"],
        listings={"A.ddx": "WebView", "B.ddx": "WebView"},
    )
    use_case = _use_case(tmp_path, runner)

    report = use_case.run_batch(str(tmp_path / "apks"))

    assert report.get_names() == ["hybrid.apk", "native.apk"]
    written = json.loads((tmp_path / "totals.json").read_text())
    assert [entry["name"] for entry in written] == ["hybrid.apk", "native.apk"]
    # The fake tools emit the same classes and listings for every package
    assert written[0]["total"] == "70.20"
    assert written[1]["total"] == "50.20"
    assert written[0]["traits"][0] == {
        "amount": 5,
        "reason": "Presence of HTML files",
        "files": [str(tmp_path / "zips" / "hybrid" / "assets" / "www" / "index.html")],
    }


def test_processing_order_is_preserved(tmp_path, fake_runner_factory):
    apks = tmp_path / "apks"
    b = make_package(apks / "B.apk", NATIVE_ENTRIES)
    a = make_package(apks / "A.apk", HYBRID_ENTRIES)
    use_case = _use_case(tmp_path, fake_runner_factory())

    report = use_case.run_batch(str(apks), packages=[b, a])

    assert report.get_names() == ["B.apk", "A.apk"]
    written = json.loads((tmp_path / "totals.json").read_text())
    assert [entry["name"] for entry in written] == ["B.apk", "A.apk"]


def test_packages_are_processed_one_at_a_time(tmp_path, fake_runner_factory, monkeypatch):
    apks = tmp_path / "apks"
    for name in ["one.apk", "two.apk", "three.apk"]:
        make_package(apks / name, NATIVE_ENTRIES)
    use_case = _use_case(tmp_path, fake_runner_factory())
    events = []

    original_materialize = use_case.materializer.materialize
    original_aggregate = use_case.analysis_service.aggregate

    def materialize(package_path):
        events.append(("materialize", Path(package_path).name))
        return original_materialize(package_path)

    def aggregate(name, tree):
        events.append(("aggregate", name))
        return original_aggregate(name, tree)

    monkeypatch.setattr(use_case.materializer, "materialize", materialize)
    monkeypatch.setattr(use_case.analysis_service, "aggregate", aggregate)

    use_case.run_batch(str(apks))

    assert events == [
        ("materialize", "one.apk"), ("aggregate", "one.apk"),
        ("materialize", "three.apk"), ("aggregate", "three.apk"),
        ("materialize", "two.apk"), ("aggregate", "two.apk"),
    ]


def test_crashing_package_still_yields_entry(tmp_path, fake_runner_factory, monkeypatch):
    apks = tmp_path / "apks"
    make_package(apks / "bad.apk", NATIVE_ENTRIES)
    make_package(apks / "good.apk", HYBRID_ENTRIES)
    use_case = _use_case(tmp_path, fake_runner_factory())
    original_aggregate = use_case.analysis_service.aggregate

    def aggregate(name, tree):
        if name == "bad.apk":
            raise RuntimeError("scanner exploded")
        return original_aggregate(name, tree)

    monkeypatch.setattr(use_case.analysis_service, "aggregate", aggregate)

    report = use_case.run_batch(str(apks))

    assert report.get_names() == ["bad.apk", "good.apk"]
    assert report.get("bad.apk").traits == []
    assert "bad.apk" in use_case.degraded_packages


def test_failed_materialization_continues_batch(tmp_path, fake_runner_factory):
    apks = tmp_path / "apks"
    (apks).mkdir()
    (apks / "corrupt.apk").write_bytes(b"garbage")
    make_package(apks / "fine.apk", HYBRID_ENTRIES)
    use_case = _use_case(tmp_path, fake_runner_factory())

    report = use_case.run_batch(str(apks))

    assert len(report) == 2
    assert report.get("corrupt.apk").formatted_total == "0.00"
    assert report.get("fine.apk").formatted_total == "20.00"
    assert use_case.degraded_packages == ["corrupt.apk"]


def test_empty_directory_writes_empty_report(tmp_path, fake_runner_factory):
    (tmp_path / "apks").mkdir()
    use_case = _use_case(tmp_path, fake_runner_factory())

    report = use_case.run_batch(str(tmp_path / "apks"))

    assert len(report) == 0
    assert json.loads((tmp_path / "totals.json").read_text()) == []


def test_report_write_failure_is_fatal(tmp_path, fake_runner_factory):
    make_package(tmp_path / "apks" / "app.apk", NATIVE_ENTRIES)
    blocker = tmp_path / "blocker"
    blocker.write_text("a file where a directory should be")
    use_case = _use_case(tmp_path, fake_runner_factory())

    with pytest.raises(ReportStorageError):
        use_case.run_batch(str(tmp_path / "apks"), report_path=str(blocker / "totals.json"))


def test_command_line_scan_and_view(tmp_path, fake_runner_factory):
    make_package(tmp_path / "apks" / "app.apk", HYBRID_ENTRIES)
    use_case = _use_case(tmp_path, fake_runner_factory())
    report_path = str(tmp_path / "out" / "totals.json")

    summary = use_case.execute_from_command_line([str(tmp_path / "apks"), "--output", report_path])

    assert summary["packages_scanned"] == 1
    assert summary["totals"] == {"app.apk": "20.00"}

    viewed = use_case.execute_from_command_line(["--view", report_path])

    assert Path(viewed["page"]).read_text(encoding="utf-8").count('class="title"') == 1


def test_command_line_missing_directory(tmp_path, fake_runner_factory):
    use_case = _use_case(tmp_path, fake_runner_factory())

    result = use_case.execute_from_command_line([str(tmp_path / "nowhere")])

    assert "not found" in result["error"]


@pytest.mark.parametrize("done, count, expected", [
    (1, 8, 13),
    (5, 8, 63),
    (1, 3, 33),
    (3, 3, 100),
])
def test_progress_rounds_halves_up(done, count, expected):
    assert progress_percent(done, count) == expected
