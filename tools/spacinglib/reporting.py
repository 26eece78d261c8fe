"""Issue report rows, per-file reports and run summaries."""

# Standard Library
import datetime
import json
import pathlib

from spacinglib.constants import (
	DISTANCE_ROUND_DECIMALS,
	LOCATION_ROUND_DECIMALS,
	MAX_REPORTED_ISSUES,
	STATUS_TRUNCATED,
)


#============================================
def format_distance(distance: float) -> str:
	return f"{float(distance):.{DISTANCE_ROUND_DECIMALS}f}"


#============================================
def format_location(point: tuple[float, float]) -> str:
	"""Return "(x, y)" with coordinates rounded for display."""
	decimals = LOCATION_ROUND_DECIMALS
	return f"({float(point[0]):.{decimals}f}, {float(point[1]):.{decimals}f})"


#============================================
def issue_report_row(issue) -> dict:
	"""Return one human-facing issue row."""
	return {
		"distance": format_distance(issue.distance),
		"segment1": issue.segment_a.descriptor,
		"segment2": issue.segment_b.descriptor,
		"location": format_location(issue.location),
	}


#============================================
def issue_report_rows(issues, limit: int = MAX_REPORTED_ISSUES) -> list[dict]:
	"""Return report rows for the first `limit` issues in discovery order."""
	return [issue_report_row(issue) for issue in list(issues)[:limit]]


#============================================
def file_report(svg_path: pathlib.Path, result) -> dict:
	"""Return JSON-ready report for one analyzed SVG file."""
	return {
		"svg": str(svg_path),
		"status": result.status,
		"threshold": result.threshold,
		"max_comparisons": result.max_comparisons,
		"distance_mode": result.distance_mode,
		"issue_count": result.issue_count,
		"reported_issue_count": len(result.reported_issues),
		"annotation_mark_count": len(result.marks),
		"issues": issue_report_rows(result.reported_issues),
		"extraction": dict(result.extraction),
		"scan": result.scan.as_dict(),
		"coordinate_errors": [error.as_dict() for error in result.coordinate_errors],
	}


#============================================
def failed_file_report(svg_path: pathlib.Path, error: Exception) -> dict:
	"""Return JSON-ready report for one SVG file that could not be analyzed."""
	return {
		"svg": str(svg_path),
		"status": "failed",
		"error": str(error),
		"issue_count": 0,
		"issues": [],
	}


#============================================
def summary_stats(file_reports: list[dict]) -> dict:
	"""Compute overall summary metrics for one analysis run."""
	analyzed = [report for report in file_reports if report["status"] != "failed"]
	status_counts: dict[str, int] = {}
	for report in file_reports:
		status_counts[report["status"]] = int(status_counts.get(report["status"], 0)) + 1
	return {
		"files_total": len(file_reports),
		"files_analyzed": len(analyzed),
		"files_failed": len(file_reports) - len(analyzed),
		"files_with_issues": sum(1 for report in analyzed if report["issue_count"] > 0),
		"files_truncated": sum(1 for report in analyzed if report["status"] == STATUS_TRUNCATED),
		"status_counts": status_counts,
		"total_issues": sum(report["issue_count"] for report in analyzed),
		"total_segments": sum(report["extraction"]["segment_count"] for report in analyzed),
		"total_comparisons": sum(report["scan"]["comparisons"] for report in analyzed),
		"total_skipped": sum(report["scan"]["skipped"] for report in analyzed),
		"total_coordinate_errors": sum(len(report["coordinate_errors"]) for report in analyzed),
		"total_ignored_path_commands": sum(
			report["extraction"]["ignored_path_commands"] for report in analyzed
		),
	}


#============================================
def json_report(file_reports: list[dict], summary: dict, settings: dict) -> dict:
	"""Return the full JSON report document."""
	return {
		"generated_at": datetime.datetime.now().isoformat(timespec="seconds"),
		"settings": dict(settings),
		"summary": summary,
		"files": file_reports,
	}


#============================================
def format_text_report(file_reports: list[dict], summary: dict, settings: dict) -> str:
	"""Return human-readable text report for one run."""
	lines = []
	lines.append("SVG line spacing report")
	lines.append(f"threshold: {settings.get('threshold')}")
	lines.append(f"max comparisons: {settings.get('max_comparisons'):,}")
	lines.append(f"distance mode: {settings.get('distance_mode')}")
	lines.append("")
	lines.append(f"files analyzed: {summary['files_analyzed']} of {summary['files_total']}")
	lines.append(f"files failed: {summary['files_failed']}")
	lines.append(f"files with issues: {summary['files_with_issues']}")
	lines.append(f"files truncated by comparison budget: {summary['files_truncated']}")
	lines.append(f"total issues: {summary['total_issues']}")
	lines.append(f"total segments: {summary['total_segments']}")
	lines.append(f"total comparisons: {summary['total_comparisons']:,}")
	lines.append(f"coordinate errors: {summary['total_coordinate_errors']}")
	for report in file_reports:
		lines.append("")
		lines.append(f"== {report['svg']}")
		if report["status"] == "failed":
			lines.append(f"failed: {report['error']}")
			continue
		scan = report["scan"]
		lines.append(
			f"status: {report['status']} "
			f"(checked {scan['comparisons']:,} pairs, {scan['skipped']:,} skipped)"
		)
		if report["status"] == STATUS_TRUNCATED:
			lines.append("issue list is a lower bound: comparison budget reached")
		lines.append(f"segments: {report['extraction']['segment_count']}")
		lines.append(f"issues: {report['issue_count']}")
		for row in report["issues"]:
			lines.append(
				f"  {row['distance']}  {row['segment1']} / {row['segment2']}  at {row['location']}"
			)
		if report["issue_count"] > report["reported_issue_count"]:
			lines.append(f"  showing first {report['reported_issue_count']} issues...")
		for error in report["coordinate_errors"]:
			lines.append(f"  coordinate error: {error['message']}")
	return "\n".join(lines) + "\n"


#============================================
def write_reports(
		json_report_path: pathlib.Path,
		text_report_path: pathlib.Path,
		report_data: dict,
		text_report: str) -> None:
	"""Write JSON and text reports, creating parent directories."""
	json_report_path = pathlib.Path(json_report_path)
	text_report_path = pathlib.Path(text_report_path)
	json_report_path.parent.mkdir(parents=True, exist_ok=True)
	text_report_path.parent.mkdir(parents=True, exist_ok=True)
	json_report_path.write_text(json.dumps(report_data, indent=2), encoding="utf-8")
	text_report_path.write_text(text_report, encoding="utf-8")
