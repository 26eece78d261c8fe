"""Segment model, pruning filter and segment distance evaluators."""

# Standard Library
import dataclasses
import math

from spacinglib.constants import (
	DISTANCE_MODES,
	PRUNE_BUFFER_MARGIN,
	ZERO_LENGTH_EPSILON,
)


#============================================
@dataclasses.dataclass(frozen=True)
class Segment:
	"""One straight piece sliced from a drawing element.

	owner_id is unique per element within one document; owner_index counts
	elements of the same kind in document order.
	"""
	kind: str
	owner_index: int
	owner_id: int
	start: tuple[float, float]
	end: tuple[float, float]
	bbox: tuple[float, float, float, float]

	@property
	def descriptor(self) -> str:
		return f"{self.kind} {self.owner_index}"

	@property
	def midpoint(self) -> tuple[float, float]:
		return (
			(self.start[0] + self.end[0]) * 0.5,
			(self.start[1] + self.end[1]) * 0.5,
		)


#============================================
def segment_bbox(
		start: tuple[float, float],
		end: tuple[float, float]) -> tuple[float, float, float, float]:
	"""Return (min_x, min_y, max_x, max_y) for two endpoints."""
	return (
		min(start[0], end[0]),
		min(start[1], end[1]),
		max(start[0], end[0]),
		max(start[1], end[1]),
	)


#============================================
def make_segment(
		kind: str,
		owner_index: int,
		owner_id: int,
		start: tuple[float, float],
		end: tuple[float, float]) -> Segment:
	"""Build one segment with its bbox derived from the endpoints."""
	start = (float(start[0]), float(start[1]))
	end = (float(end[0]), float(end[1]))
	return Segment(
		kind=kind,
		owner_index=int(owner_index),
		owner_id=int(owner_id),
		start=start,
		end=end,
		bbox=segment_bbox(start, end),
	)


#============================================
def point_is_finite(point: tuple[float, float]) -> bool:
	"""Return True when both point coordinates are finite numbers."""
	return math.isfinite(point[0]) and math.isfinite(point[1])


#============================================
def prune_buffer(threshold: float) -> float:
	"""Return bbox expansion used by the pruning filter."""
	return float(threshold) + PRUNE_BUFFER_MARGIN


#============================================
def bboxes_within_buffer(
		box_a: tuple[float, float, float, float],
		box_b: tuple[float, float, float, float],
		buffer: float) -> bool:
	"""Return True when two boxes overlap on both axes after expansion."""
	if box_a[2] + buffer < box_b[0] or box_a[0] - buffer > box_b[2]:
		return False
	if box_a[3] + buffer < box_b[1] or box_a[1] - buffer > box_b[3]:
		return False
	return True


#============================================
def prune_reason(segment_a: Segment, segment_b: Segment, buffer: float) -> str | None:
	"""Return why a pair needs no distance evaluation, or None to evaluate it.

	Args:
		segment_a: first segment of the pair.
		segment_b: second segment of the pair.
		buffer: bbox expansion from prune_buffer(threshold).

	Returns:
		"same_owner" when both segments come from one element, "bbox" when
		the expanded boxes are apart, otherwise None.
	"""
	if segment_a.owner_id == segment_b.owner_id:
		return "same_owner"
	if not bboxes_within_buffer(segment_a.bbox, segment_b.bbox, buffer):
		return "bbox"
	return None


#============================================
def point_to_segment_distance(
		point: tuple[float, float],
		seg_start: tuple[float, float],
		seg_end: tuple[float, float]) -> float:
	"""Return distance from one point to the clamped projection on one segment."""
	px, py = point
	x1, y1 = seg_start
	x2, y2 = seg_end
	dx = x2 - x1
	dy = y2 - y1
	denominator = (dx * dx) + (dy * dy)
	if denominator <= ZERO_LENGTH_EPSILON:
		# zero-length segment collapses to its start point
		return math.hypot(px - x1, py - y1)
	t_value = ((px - x1) * dx + (py - y1) * dy) / denominator
	t_value = max(0.0, min(1.0, t_value))
	closest_x = x1 + (dx * t_value)
	closest_y = y1 + (dy * t_value)
	return math.hypot(px - closest_x, py - closest_y)


#============================================
def approximate_segment_distance(segment_a: Segment, segment_b: Segment) -> float:
	"""Return minimum of the four endpoint-to-opposite-segment distances.

	Exact whenever the closest approach sits at an endpoint of either
	segment. Two segments crossing at interior points, with no endpoint near
	the other segment, report a distance larger than the true minimum.
	"""
	return min(
		point_to_segment_distance(segment_a.start, segment_b.start, segment_b.end),
		point_to_segment_distance(segment_a.end, segment_b.start, segment_b.end),
		point_to_segment_distance(segment_b.start, segment_a.start, segment_a.end),
		point_to_segment_distance(segment_b.end, segment_a.start, segment_a.end),
	)


#============================================
def orientation(
		p1: tuple[float, float],
		p2: tuple[float, float],
		p3: tuple[float, float]) -> int:
	"""Return orientation sign for one ordered point triplet."""
	value = ((p2[1] - p1[1]) * (p3[0] - p2[0])) - ((p2[0] - p1[0]) * (p3[1] - p2[1]))
	if abs(value) <= 1e-12:
		return 0
	return 1 if value > 0.0 else 2


#============================================
def on_segment(
		p1: tuple[float, float],
		p2: tuple[float, float],
		query: tuple[float, float]) -> bool:
	"""Return True when a collinear query point lies within segment p1-p2."""
	return (
		min(p1[0], p2[0]) - 1e-12 <= query[0] <= max(p1[0], p2[0]) + 1e-12
		and min(p1[1], p2[1]) - 1e-12 <= query[1] <= max(p1[1], p2[1]) + 1e-12
	)


#============================================
def segments_intersect(
		p1: tuple[float, float],
		p2: tuple[float, float],
		q1: tuple[float, float],
		q2: tuple[float, float]) -> bool:
	"""Return True when two finite segments intersect."""
	o1 = orientation(p1, p2, q1)
	o2 = orientation(p1, p2, q2)
	o3 = orientation(q1, q2, p1)
	o4 = orientation(q1, q2, p2)
	if o1 != o2 and o3 != o4:
		return True
	if o1 == 0 and on_segment(p1, p2, q1):
		return True
	if o2 == 0 and on_segment(p1, p2, q2):
		return True
	if o3 == 0 and on_segment(q1, q2, p1):
		return True
	if o4 == 0 and on_segment(q1, q2, p2):
		return True
	return False


#============================================
def exact_segment_distance(segment_a: Segment, segment_b: Segment) -> float:
	"""Return true minimum distance between two segments (0 when they cross)."""
	if segments_intersect(segment_a.start, segment_a.end, segment_b.start, segment_b.end):
		return 0.0
	return approximate_segment_distance(segment_a, segment_b)


#============================================
def distance_function(distance_mode: str):
	"""Return the segment distance evaluator for one distance mode name."""
	if distance_mode == "approximate":
		return approximate_segment_distance
	if distance_mode == "exact":
		return exact_segment_distance
	raise ValueError(f"Unsupported distance mode {distance_mode!r}; expected one of {DISTANCE_MODES}")
