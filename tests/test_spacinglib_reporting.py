"""Tests for spacinglib.reporting module."""

# Standard Library
import json
import pathlib

# Third Party
import pytest

# Local
import conftest
conftest.add_tools_to_sys_path()

from spacinglib.analysis import AnalysisRequest, run_analysis
from spacinglib.errors import DocumentParseError
from spacinglib.reporting import (
	failed_file_report,
	file_report,
	format_distance,
	format_location,
	format_text_report,
	issue_report_rows,
	json_report,
	summary_stats,
	write_reports,
)


SETTINGS = {"threshold": 0.5, "max_comparisons": 1000000, "distance_mode": "approximate"}


#============================================
def _close_pairs_document(pair_count, gap=0.3):
	elements = ""
	for index in range(pair_count):
		x = index * 10.0
		elements += conftest.line_element(x, 0, x, 10)
		elements += conftest.line_element(x + gap, 0, x + gap, 10)
	return conftest.svg_document(elements, attributes="width='2000' height='20'")


#============================================
def _report_for(document, **kwargs):
	result = run_analysis(AnalysisRequest(document=document, **kwargs))
	return file_report(pathlib.Path("drawing.svg"), result)


#============================================
def test_format_distance_three_decimals():
	assert format_distance(0.4) == "0.400"
	assert format_distance(0.12345) == "0.123"


#============================================
def test_format_location_one_decimal():
	assert format_location((1.26, 2.04)) == "(1.3, 2.0)"


#============================================
def test_issue_report_rows_contents():
	result = run_analysis(AnalysisRequest(document=_close_pairs_document(1, gap=0.4)))
	rows = issue_report_rows(result.issues)
	assert rows == [{
		"distance": "0.400",
		"segment1": "line 0",
		"segment2": "line 1",
		"location": "(0.0, 5.0)",
	}]


#============================================
def test_file_report_fields():
	report = _report_for(_close_pairs_document(2))
	assert report["svg"] == "drawing.svg"
	assert report["status"] == "complete"
	assert report["issue_count"] == 2
	assert report["reported_issue_count"] == 2
	assert report["annotation_mark_count"] == 2
	assert report["extraction"]["segment_count"] == 4
	assert report["scan"]["comparisons"] == 2
	assert report["coordinate_errors"] == []
	# must be JSON serializable as-is
	json.dumps(report)


#============================================
def test_file_report_caps_listed_issues():
	report = _report_for(_close_pairs_document(120))
	assert report["issue_count"] == 120
	assert report["reported_issue_count"] == 100
	assert len(report["issues"]) == 100


#============================================
def test_failed_file_report():
	report = failed_file_report(pathlib.Path("bad.svg"), DocumentParseError("not xml"))
	assert report["status"] == "failed"
	assert report["error"] == "not xml"
	assert report["issue_count"] == 0


#============================================
def test_summary_stats_mixed_reports():
	reports = [
		_report_for(_close_pairs_document(3)),
		_report_for(_close_pairs_document(1), max_comparisons=0),
		failed_file_report(pathlib.Path("bad.svg"), DocumentParseError("not xml")),
	]
	summary = summary_stats(reports)
	assert summary["files_total"] == 3
	assert summary["files_analyzed"] == 2
	assert summary["files_failed"] == 1
	assert summary["files_with_issues"] == 1
	assert summary["files_truncated"] == 1
	assert summary["total_issues"] == 3
	assert summary["total_segments"] == 8
	assert summary["status_counts"] == {"complete": 1, "truncated": 1, "failed": 1}


#============================================
def test_json_report_layout():
	reports = [_report_for(_close_pairs_document(1))]
	data = json_report(reports, summary_stats(reports), SETTINGS)
	assert set(data) == {"generated_at", "settings", "summary", "files"}
	assert data["settings"]["threshold"] == pytest.approx(0.5)


#============================================
def test_text_report_marks_truncated_files():
	reports = [_report_for(_close_pairs_document(1), max_comparisons=0)]
	text = format_text_report(reports, summary_stats(reports), SETTINGS)
	assert "status: truncated" in text
	assert "issue list is a lower bound: comparison budget reached" in text


#============================================
def test_text_report_lists_issues_and_cap_notice():
	reports = [_report_for(_close_pairs_document(120))]
	text = format_text_report(reports, summary_stats(reports), SETTINGS)
	assert "0.300  line 0 / line 1  at (0.0, 5.0)" in text
	assert "showing first 100 issues..." in text
	assert "total issues: 120" in text


#============================================
def test_text_report_failed_file():
	reports = [failed_file_report(pathlib.Path("bad.svg"), DocumentParseError("not xml"))]
	text = format_text_report(reports, summary_stats(reports), SETTINGS)
	assert "failed: not xml" in text


#============================================
def test_write_reports_creates_directories(tmp_path):
	json_path = tmp_path / "a" / "report.json"
	text_path = tmp_path / "b" / "report.txt"
	write_reports(json_path, text_path, {"files": []}, "hello\n")
	assert json.loads(json_path.read_text(encoding="utf-8")) == {"files": []}
	assert text_path.read_text(encoding="utf-8") == "hello\n"
