"""Spacing issue records and the discovery-order issue collector."""

# Standard Library
import dataclasses

from spacinglib.constants import MAX_REPORTED_ISSUES, MIN_REPORTED_DISTANCE
from spacinglib.geometry import Segment


#============================================
@dataclasses.dataclass(frozen=True)
class Issue:
	"""Two segments from different elements closer than the threshold."""
	distance: float
	segment_a: Segment
	segment_b: Segment
	location: tuple[float, float]


#============================================
def issue_qualifies(distance: float, threshold: float) -> bool:
	"""Return True when one evaluated distance is a spacing issue.

	Distances at or below MIN_REPORTED_DISTANCE are coincident points, for
	example two elements sharing an endpoint, and are not reported.
	"""
	return MIN_REPORTED_DISTANCE < distance < threshold


#============================================
class IssueCollector:
	"""Append-only issue list kept in discovery order.

	Every issue is retained; only the first MAX_REPORTED_ISSUES are exposed
	as the reported listing. No deduplication.
	"""

	def __init__(self, report_limit: int = MAX_REPORTED_ISSUES) -> None:
		self.report_limit = int(report_limit)
		self._issues: list[Issue] = []

	def add(self, segment_a: Segment, segment_b: Segment, distance: float) -> Issue:
		issue = Issue(
			distance=float(distance),
			segment_a=segment_a,
			segment_b=segment_b,
			location=segment_a.midpoint,
		)
		self._issues.append(issue)
		return issue

	@property
	def issues(self) -> tuple[Issue, ...]:
		return tuple(self._issues)

	@property
	def total_count(self) -> int:
		return len(self._issues)

	def reported_issues(self) -> tuple[Issue, ...]:
		"""Return the capped detail listing in discovery order."""
		return tuple(self._issues[:self.report_limit])

	def __len__(self) -> int:
		return len(self._issues)
