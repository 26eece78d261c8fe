"""Budgeted all-pairs scan over extracted segments."""

# Standard Library
import dataclasses
import time

from spacinglib.constants import (
	DEFAULT_YIELD_INTERVAL,
	PROGRESS_SCAN_MAX,
	PROGRESS_SCAN_SPAN,
	PROGRESS_SCAN_START,
	STATUS_CANCELLED,
	STATUS_COMPLETE,
	STATUS_DEADLINE,
	STATUS_TRUNCATED,
)
from spacinglib.geometry import approximate_segment_distance, prune_buffer, prune_reason
from spacinglib.issues import IssueCollector, issue_qualifies
from spacinglib.progress import ProgressReporter


#============================================
@dataclasses.dataclass(frozen=True)
class ScanBudget:
	"""Limits for one scan: evaluated-pair ceiling and optional wall clock."""
	max_comparisons: int
	deadline_seconds: float | None = None


#============================================
@dataclasses.dataclass(frozen=True)
class ScanOutcome:
	status: str
	segment_count: int
	pairs_total: int
	estimated_comparisons: int
	comparisons: int
	skipped_same_owner: int
	skipped_bbox: int
	elapsed_seconds: float

	@property
	def skipped(self) -> int:
		return self.skipped_same_owner + self.skipped_bbox

	@property
	def truncated(self) -> bool:
		return self.status == STATUS_TRUNCATED

	@property
	def exhaustive(self) -> bool:
		return self.status == STATUS_COMPLETE

	def as_dict(self) -> dict:
		data = dataclasses.asdict(self)
		data["skipped"] = self.skipped
		return data


#============================================
def pair_count(segment_count: int) -> int:
	"""Return the number of i<j pairs for one segment count."""
	return (segment_count * (segment_count - 1)) // 2


#============================================
def scan_percent(comparisons: int, estimated_comparisons: int) -> float:
	"""Return advisory scan progress percent, never above PROGRESS_SCAN_MAX."""
	if estimated_comparisons <= 0:
		return PROGRESS_SCAN_START
	percent = PROGRESS_SCAN_START + (comparisons / estimated_comparisons) * PROGRESS_SCAN_SPAN
	return min(PROGRESS_SCAN_MAX, percent)


#============================================
def scan_message(comparisons: int, skipped: int) -> str:
	return f"Checked {comparisons:,} pairs ({skipped:,} skipped)..."


#============================================
def scan_segment_pairs(
		segments: list,
		threshold: float,
		budget: ScanBudget,
		collector: IssueCollector,
		distance_function=approximate_segment_distance,
		progress: ProgressReporter | None = None,
		cancel_check=None,
		yield_interval: int = DEFAULT_YIELD_INTERVAL,
		clock=time.monotonic) -> ScanOutcome:
	"""Compare every segment pair once and collect spacing issues.

	Pairs from the same element and pairs whose buffered boxes are apart are
	skipped without evaluation. Only evaluated pairs count against the
	budget; the scan stops the moment the budget is spent.

	Every yield_interval outer iterations the scan reports progress, then
	stops early when cancel_check() returns True or the deadline passed.

	Args:
		segments: extracted segments in discovery order.
		threshold: pairs closer than this are issues.
		budget: comparison ceiling and optional deadline.
		collector: receives qualifying pairs in discovery order.
		distance_function: segment distance evaluator.
		progress: optional progress reporter.
		cancel_check: optional zero-argument callable.
		yield_interval: outer iterations between yield points.
		clock: monotonic time source in seconds.

	Returns:
		ScanOutcome with terminal status and counters.
	"""
	if progress is None:
		progress = ProgressReporter()
	interval = max(1, int(yield_interval))
	count = len(segments)
	max_comparisons = int(budget.max_comparisons)
	pairs_total = pair_count(count)
	estimated = min(pairs_total, max_comparisons)
	buffer = prune_buffer(threshold)
	started = clock()
	comparisons = 0
	skipped_same_owner = 0
	skipped_bbox = 0
	status = STATUS_COMPLETE
	progress.report(PROGRESS_SCAN_START, f"Analyzing {count:,} segments...")
	for i in range(count):
		if comparisons >= max_comparisons:
			break
		if i % interval == 0:
			progress.report(
				scan_percent(comparisons, estimated),
				scan_message(comparisons, skipped_same_owner + skipped_bbox),
			)
			if cancel_check is not None and cancel_check():
				status = STATUS_CANCELLED
				break
			if budget.deadline_seconds is not None and (clock() - started) >= budget.deadline_seconds:
				status = STATUS_DEADLINE
				break
		segment_a = segments[i]
		for j in range(i + 1, count):
			if comparisons >= max_comparisons:
				break
			segment_b = segments[j]
			reason = prune_reason(segment_a, segment_b, buffer)
			if reason == "same_owner":
				skipped_same_owner += 1
				continue
			if reason == "bbox":
				skipped_bbox += 1
				continue
			comparisons += 1
			distance = distance_function(segment_a, segment_b)
			if issue_qualifies(distance, threshold):
				collector.add(segment_a, segment_b, distance)
	if status == STATUS_COMPLETE and comparisons >= max_comparisons:
		status = STATUS_TRUNCATED
	progress.report(
		scan_percent(comparisons, estimated),
		scan_message(comparisons, skipped_same_owner + skipped_bbox),
	)
	return ScanOutcome(
		status=status,
		segment_count=count,
		pairs_total=pairs_total,
		estimated_comparisons=estimated,
		comparisons=comparisons,
		skipped_same_owner=skipped_same_owner,
		skipped_bbox=skipped_bbox,
		elapsed_seconds=clock() - started,
	)
