"""Analysis entry points: request validation, run state machine and results."""

# Standard Library
import dataclasses
import math
import pathlib

from spacinglib.constants import (
	DEFAULT_DISTANCE_MODE,
	DEFAULT_MAX_COMPARISONS,
	DEFAULT_THRESHOLD,
	DEFAULT_YIELD_INTERVAL,
	DISTANCE_MODES,
	PROGRESS_ANNOTATING,
	PROGRESS_DONE,
	STATUS_CANCELLED,
	STATUS_COMPLETE,
	STATUS_DEADLINE,
	STATUS_TRUNCATED,
)
from spacinglib.diagnostic_svg import annotated_svg_root, build_annotation_marks, svg_to_string
from spacinglib.geometry import distance_function
from spacinglib.issues import IssueCollector
from spacinglib.progress import ProgressReporter
from spacinglib.scan import ScanBudget, ScanOutcome, scan_segment_pairs
from spacinglib.svg_parse import collect_svg_segments, parse_svg_document

STATE_IDLE = "idle"
STATE_EXTRACTING = "extracting"
STATE_SCANNING = "scanning"
STATE_ANNOTATING = "annotating"
STATE_DONE = "done"
STATE_FAILED = "failed"
RUN_TRANSITIONS = {
	STATE_IDLE: (STATE_EXTRACTING, STATE_FAILED),
	STATE_EXTRACTING: (STATE_SCANNING, STATE_FAILED),
	STATE_SCANNING: (STATE_ANNOTATING, STATE_FAILED),
	STATE_ANNOTATING: (STATE_DONE, STATE_FAILED),
	STATE_DONE: (),
	STATE_FAILED: (),
}


#============================================
@dataclasses.dataclass(frozen=True)
class AnalysisRequest:
	"""Immutable input for one analysis run."""
	document: str | bytes
	threshold: float = DEFAULT_THRESHOLD
	max_comparisons: int = DEFAULT_MAX_COMPARISONS
	deadline_seconds: float | None = None
	distance_mode: str = DEFAULT_DISTANCE_MODE
	yield_interval: int = DEFAULT_YIELD_INTERVAL

	def __post_init__(self) -> None:
		if not isinstance(self.document, (str, bytes)):
			raise TypeError(f"document must be SVG text or bytes, got {type(self.document).__name__}")
		if isinstance(self.threshold, bool) or not isinstance(self.threshold, (int, float)):
			raise ValueError(f"threshold must be a number, got {self.threshold!r}")
		if not math.isfinite(self.threshold) or self.threshold <= 0.0:
			raise ValueError(f"threshold must be a positive finite number, got {self.threshold!r}")
		if isinstance(self.max_comparisons, bool) or not isinstance(self.max_comparisons, int):
			raise ValueError(f"max_comparisons must be an integer, got {self.max_comparisons!r}")
		if self.max_comparisons < 0:
			raise ValueError(f"max_comparisons must not be negative, got {self.max_comparisons}")
		if self.deadline_seconds is not None:
			if not math.isfinite(self.deadline_seconds) or self.deadline_seconds < 0.0:
				raise ValueError(f"deadline_seconds must be a non-negative number, got {self.deadline_seconds!r}")
		if self.distance_mode not in DISTANCE_MODES:
			raise ValueError(f"distance_mode must be one of {DISTANCE_MODES}, got {self.distance_mode!r}")
		if isinstance(self.yield_interval, bool) or not isinstance(self.yield_interval, int) or self.yield_interval < 1:
			raise ValueError(f"yield_interval must be a positive integer, got {self.yield_interval!r}")


#============================================
@dataclasses.dataclass(frozen=True)
class AnalysisResult:
	status: str
	threshold: float
	max_comparisons: int
	distance_mode: str
	issues: tuple
	reported_issues: tuple
	marks: tuple
	annotated_svg: str
	extraction: dict
	scan: ScanOutcome
	coordinate_errors: tuple

	@property
	def issue_count(self) -> int:
		return len(self.issues)

	@property
	def truncated(self) -> bool:
		return self.status == STATUS_TRUNCATED

	@property
	def exhaustive(self) -> bool:
		return self.status == STATUS_COMPLETE


#============================================
def completion_message(status: str, comparisons: int, max_comparisons: int) -> str:
	"""Return the final progress message for one terminal scan status."""
	if status == STATUS_TRUNCATED:
		return f"Complete (limited to {max_comparisons:,} comparisons)"
	if status == STATUS_CANCELLED:
		return f"Cancelled after {comparisons:,} comparisons"
	if status == STATUS_DEADLINE:
		return f"Stopped at deadline after {comparisons:,} comparisons"
	return "Complete!"


#============================================
class AnalysisRun:
	"""One analysis invocation moving idle -> extracting -> scanning -> annotating -> done.

	Any exception moves the run to failed and propagates. A run object can be
	started once.
	"""

	def __init__(self, request: AnalysisRequest, progress_callback=None, cancel_check=None) -> None:
		self.request = request
		self.cancel_check = cancel_check
		self.progress = ProgressReporter(progress_callback)
		self.state = STATE_IDLE

	def _advance(self, new_state: str) -> None:
		if new_state not in RUN_TRANSITIONS[self.state]:
			raise RuntimeError(f"Analysis run cannot move from {self.state!r} to {new_state!r}")
		self.state = new_state

	def run(self) -> AnalysisResult:
		self._advance(STATE_EXTRACTING)
		try:
			return self._run_stages()
		except Exception:
			self._advance(STATE_FAILED)
			raise

	def _run_stages(self) -> AnalysisResult:
		request = self.request
		self.progress.report(0.0, "Parsing SVG...")
		svg_root = parse_svg_document(request.document)
		segments, coordinate_errors, extraction = collect_svg_segments(svg_root, progress=self.progress)
		self._advance(STATE_SCANNING)
		collector = IssueCollector()
		outcome = scan_segment_pairs(
			segments,
			threshold=float(request.threshold),
			budget=ScanBudget(
				max_comparisons=request.max_comparisons,
				deadline_seconds=request.deadline_seconds,
			),
			collector=collector,
			distance_function=distance_function(request.distance_mode),
			progress=self.progress,
			cancel_check=self.cancel_check,
			yield_interval=request.yield_interval,
		)
		self._advance(STATE_ANNOTATING)
		self.progress.report(PROGRESS_ANNOTATING, "Creating annotated SVG...")
		marks = build_annotation_marks(collector.issues, request.threshold)
		annotated_svg = svg_to_string(annotated_svg_root(svg_root, marks))
		self._advance(STATE_DONE)
		self.progress.report(
			PROGRESS_DONE,
			completion_message(outcome.status, outcome.comparisons, request.max_comparisons),
		)
		return AnalysisResult(
			status=outcome.status,
			threshold=float(request.threshold),
			max_comparisons=request.max_comparisons,
			distance_mode=request.distance_mode,
			issues=collector.issues,
			reported_issues=collector.reported_issues(),
			marks=marks,
			annotated_svg=annotated_svg,
			extraction=extraction,
			scan=outcome,
			coordinate_errors=tuple(coordinate_errors),
		)


#============================================
def run_analysis(request: AnalysisRequest, progress_callback=None, cancel_check=None) -> AnalysisResult:
	"""Run one spacing analysis.

	Args:
		request: validated analysis input.
		progress_callback: optional callable(percent, message) invoked at
			every yield point.
		cancel_check: optional callable returning True to stop the scan at
			its next yield point.

	Returns:
		AnalysisResult for the run.

	Raises:
		DocumentParseError: when the document is not a well-formed SVG.
	"""
	return AnalysisRun(request, progress_callback=progress_callback, cancel_check=cancel_check).run()


#============================================
def analyze_svg_file(
		svg_path: pathlib.Path,
		threshold: float = DEFAULT_THRESHOLD,
		max_comparisons: int = DEFAULT_MAX_COMPARISONS,
		deadline_seconds: float | None = None,
		distance_mode: str = DEFAULT_DISTANCE_MODE,
		progress_callback=None,
		cancel_check=None) -> AnalysisResult:
	"""Read one SVG file and run spacing analysis on it."""
	request = AnalysisRequest(
		document=pathlib.Path(svg_path).read_bytes(),
		threshold=threshold,
		max_comparisons=max_comparisons,
		deadline_seconds=deadline_seconds,
		distance_mode=distance_mode,
	)
	return run_analysis(request, progress_callback=progress_callback, cancel_check=cancel_check)
