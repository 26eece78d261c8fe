#!/usr/bin/env python3
"""Find line segments closer than a minimum spacing in pen plotter SVG files."""

# Standard Library
import argparse
import math
import os
import pathlib
import sys

# Ensure the tools/ directory is on sys.path so spacinglib can be imported.
_TOOLS_DIR = os.path.dirname(os.path.abspath(__file__))
if _TOOLS_DIR not in sys.path:
	sys.path.insert(0, _TOOLS_DIR)

from spacinglib.analysis import analyze_svg_file
from spacinglib.constants import (
	ANNOTATED_SUFFIX,
	BUDGET_TIERS,
	DEFAULT_INPUT_GLOB,
	DEFAULT_JSON_REPORT,
	DEFAULT_MAX_COMPARISONS,
	DEFAULT_OUTPUT_DIR,
	DEFAULT_TEXT_REPORT,
	DEFAULT_THRESHOLD,
)
from spacinglib.diagnostic_svg import write_annotated_svg
from spacinglib.errors import DocumentParseError
from spacinglib.reporting import (
	failed_file_report,
	file_report,
	format_text_report,
	json_report,
	summary_stats,
	write_reports,
)
from spacinglib.svg_parse import resolve_svg_paths


#============================================
def positive_float(raw_value: str) -> float:
	"""Parse one positive finite float command-line value."""
	try:
		value = float(raw_value)
	except ValueError as error:
		raise argparse.ArgumentTypeError(f"not a number: {raw_value!r}") from error
	if not math.isfinite(value) or value <= 0.0:
		raise argparse.ArgumentTypeError(f"must be a positive number: {raw_value!r}")
	return value


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""Parse command-line arguments for spacing analysis."""
	parser = argparse.ArgumentParser(
		description="Flag lines from different SVG elements that are closer than a minimum spacing.",
	)
	parser.add_argument(
		"-i",
		"--input-glob",
		dest="input_glob",
		type=str,
		default=DEFAULT_INPUT_GLOB,
		help="Glob pattern for SVG files to analyze.",
	)
	parser.add_argument(
		"-t",
		"--threshold",
		dest="threshold",
		type=positive_float,
		default=DEFAULT_THRESHOLD,
		help="Minimum spacing in drawing units; closer pairs are flagged.",
	)
	parser.add_argument(
		"-m",
		"--max-comparisons",
		dest="max_comparisons",
		type=int,
		choices=BUDGET_TIERS,
		default=DEFAULT_MAX_COMPARISONS,
		help="Comparison budget per file; higher is more thorough but slower.",
	)
	parser.add_argument(
		"-d",
		"--deadline",
		dest="deadline_seconds",
		type=positive_float,
		default=None,
		help="Optional wall-clock limit in seconds for each file scan.",
	)
	parser.add_argument(
		"-x",
		"--exact",
		dest="distance_mode",
		action="store_const",
		const="exact",
		help="Use exact segment distance instead of the 4-point approximation.",
	)
	parser.add_argument(
		"-o",
		"--output-dir",
		dest="output_dir",
		type=str,
		default=DEFAULT_OUTPUT_DIR,
		help="Directory for annotated SVG files.",
	)
	parser.add_argument(
		"-j",
		"--json-report",
		dest="json_report",
		type=str,
		default=DEFAULT_JSON_REPORT,
		help="Output path for JSON report.",
	)
	parser.add_argument(
		"-r",
		"--text-report",
		dest="text_report",
		type=str,
		default=DEFAULT_TEXT_REPORT,
		help="Output path for text summary report.",
	)
	parser.add_argument(
		"-f",
		"--fail-on-issues",
		dest="fail_on_issues",
		action="store_true",
		help="Exit non-zero when any spacing issue is found.",
	)
	parser.add_argument(
		"-p",
		"--pass-on-issues",
		dest="fail_on_issues",
		action="store_false",
		help="Always exit zero, even when issues are found.",
	)
	parser.add_argument(
		"-q",
		"--quiet",
		dest="quiet",
		action="store_true",
		help="Do not draw the progress bar.",
	)
	parser.set_defaults(fail_on_issues=False)
	parser.set_defaults(distance_mode="approximate")
	return parser.parse_args(argv)


#============================================
def progress_bar_callback(label: str, bar_width: int = 30):
	"""Return a progress callback drawing one stderr progress bar line."""
	def draw(percent: float, message: str) -> None:
		done = int((percent / 100.0) * bar_width)
		bar = "#" * done + "-" * (bar_width - done)
		sys.stderr.write(f"\r[{bar}] {percent:5.1f}% {label}: {message}\x1b[K")
		sys.stderr.flush()
	return draw


#============================================
def annotated_output_path(output_dir: pathlib.Path, svg_path: pathlib.Path) -> pathlib.Path:
	"""Return annotated SVG path for one input SVG."""
	return output_dir / f"{svg_path.stem}{ANNOTATED_SUFFIX}.svg"


#============================================
def analyze_paths(args: argparse.Namespace, svg_paths: list[pathlib.Path]) -> list[dict]:
	"""Analyze each SVG file and write its annotated copy."""
	show_progress = (not args.quiet) and sys.stderr.isatty()
	output_dir = pathlib.Path(args.output_dir)
	file_reports = []
	for svg_path in svg_paths:
		callback = progress_bar_callback(svg_path.name) if show_progress else None
		try:
			result = analyze_svg_file(
				svg_path,
				threshold=args.threshold,
				max_comparisons=args.max_comparisons,
				deadline_seconds=args.deadline_seconds,
				distance_mode=args.distance_mode,
				progress_callback=callback,
			)
		except DocumentParseError as error:
			print(f"Failed to analyze {svg_path}: {error}")
			file_reports.append(failed_file_report(svg_path, error))
			continue
		finally:
			if show_progress:
				sys.stderr.write("\n")
				sys.stderr.flush()
		annotated_path = write_annotated_svg(
			result.annotated_svg,
			annotated_output_path(output_dir, svg_path),
		)
		report = file_report(svg_path, result)
		report["annotated_svg"] = str(annotated_path)
		file_reports.append(report)
	return file_reports


#============================================
def main(argv: list[str] | None = None) -> None:
	args = parse_args(argv)
	svg_paths = resolve_svg_paths(pathlib.Path.cwd(), args.input_glob)
	if not svg_paths:
		raise SystemExit(f"No SVG files matched input glob: {args.input_glob}")
	settings = {
		"input_glob": args.input_glob,
		"threshold": args.threshold,
		"max_comparisons": args.max_comparisons,
		"deadline_seconds": args.deadline_seconds,
		"distance_mode": args.distance_mode,
	}
	file_reports = analyze_paths(args, svg_paths)
	summary = summary_stats(file_reports)
	report_data = json_report(file_reports, summary, settings)
	text_report = format_text_report(file_reports, summary, settings)
	json_report_path = pathlib.Path(args.json_report)
	text_report_path = pathlib.Path(args.text_report)
	write_reports(json_report_path, text_report_path, report_data, text_report)
	print(f"Wrote JSON report: {json_report_path}")
	print(f"Wrote text report: {text_report_path}")
	print(f"Wrote annotated SVGs to: {args.output_dir}")
	print("Key stats:")
	print(f"- files analyzed: {summary['files_analyzed']} of {summary['files_total']}")
	print(f"- files failed: {summary['files_failed']}")
	print(f"- total segments: {summary['total_segments']}")
	print(f"- total comparisons: {summary['total_comparisons']:,}")
	print(f"- total issues: {summary['total_issues']}")
	print(f"- files with issues: {summary['files_with_issues']}")
	print(f"- files truncated by comparison budget: {summary['files_truncated']}")
	print(f"- coordinate errors: {summary['total_coordinate_errors']}")
	print(f"- ignored path commands: {summary['total_ignored_path_commands']}")
	if args.fail_on_issues and summary["total_issues"] > 0:
		raise SystemExit(2)


if __name__ == "__main__":
	main()
