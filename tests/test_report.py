"""Tests for report serialization and the HTML viewer."""

from __future__ import annotations

import json

import pytest

from webwrap_core.infrastructure.reporting import ReportViewer
from webwrap_core.infrastructure.storage import ResultStorage
from webwrap_core.logic.models import Report, ReportEntry, Trait


def _report() -> Report:
    return Report([
        ReportEntry("native.apk", [Trait(0.1 * 3, "3.00 calls to WebView", ["a.ddx", "b.ddx", "c.ddx"])]),
        ReportEntry("hybrid.apk", [
            Trait(5, "Presence of HTML files", ["index.html"]),
            Trait(50, "Presence of Phonegap or similar", ["com/phonegap/App.class"]),
        ]),
        ReportEntry("empty.apk"),
    ])


def test_round_trip_keeps_totals_and_traits(tmp_path):
    storage = ResultStorage()
    path = str(tmp_path / "totals.json")
    original = _report()

    storage.save_report(original, path)
    loaded = storage.load_report(path)

    assert loaded.get_names() == original.get_names()
    for before, after in zip(original, loaded):
        assert abs(before.total - after.total) < 0.0001
        assert after.traits == before.traits


def test_report_file_format(tmp_path):
    path = tmp_path / "totals.json"
    ResultStorage().save_report(_report(), str(path))

    data = json.loads(path.read_text())

    assert data[0] == {
        "name": "native.apk",
        "traits": [{"amount": pytest.approx(0.3), "reason": "3.00 calls to WebView",
                    "files": ["a.ddx", "b.ddx", "c.ddx"]}],
        "total": "0.30",
    }
    assert data[1]["total"] == "55.00"
    assert data[2] == {"name": "empty.apk", "traits": [], "total": "0.00"}
    # Indented like the historical totals file
    assert path.read_text().startswith("[\n    {")


def test_report_replaces_same_name_in_place():
    report = _report()

    report.add(ReportEntry("native.apk", [Trait(15, "Presence of JavaScript files")]))

    assert report.get_names() == ["native.apk", "hybrid.apk", "empty.apk"]
    assert report.get("native.apk").formatted_total == "15.00"


def test_summary_lines():
    lines = _report().get("hybrid.apk").get_summary_lines()

    assert lines == [
        "###### hybrid.apk #######",
        "+ 5.00\tPresence of HTML files",
        "+ 50.00\tPresence of Phonegap or similar",
        "55.00 TOTAL",
    ]


def test_viewer_sorts_by_total_then_amount():
    viewer = ReportViewer()
    entries = _report().to_list()

    ordered = viewer.sort_entries(entries)

    assert [e["name"] for e in ordered] == ["hybrid.apk", "native.apk", "empty.apk"]
    assert [t["amount"] for t in ordered[0]["traits"]] == [50, 5]


def test_viewer_ties_keep_input_order():
    entries = [
        {"name": "first.apk", "traits": [], "total": "5.00"},
        {"name": "second.apk", "traits": [], "total": "5.00001"},
    ]

    ordered = ReportViewer().sort_entries(entries)

    assert [e["name"] for e in ordered] == ["first.apk", "second.apk"]


def test_viewer_renders_rows_with_hover_files():
    page = ReportViewer().render_html(_report().to_list())

    assert page.index("hybrid.apk") < page.index("native.apk") < page.index("empty.apk")
    assert '<tr title="a.ddx\nb.ddx\nc.ddx"><td>0.30</td><td>3.00 calls to WebView</td></tr>' in page
    assert "<td>55.00</td><td>hybrid.apk</td>" in page


def test_viewer_escapes_names():
    entries = [{"name": "<script>.apk", "traits": [], "total": "0.00"}]

    page = ReportViewer().render_html(entries)

    assert "<script>.apk" not in page
    assert "&lt;script&gt;.apk" in page


def test_viewer_malformed_report(tmp_path):
    bad = tmp_path / "totals.json"
    bad.write_text("{not json")

    viewer = ReportViewer()

    assert viewer.load(str(bad)) is None
    assert viewer.render_file(str(bad), str(tmp_path / "out.html")) is None
    assert not (tmp_path / "out.html").exists()


def test_viewer_missing_fields(tmp_path):
    report = tmp_path / "totals.json"
    report.write_text(json.dumps([{"name": "x.apk", "traits": []}]))

    assert ReportViewer().render_file(str(report), str(tmp_path / "out.html")) is None
