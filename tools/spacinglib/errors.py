"""Error types for SVG line spacing analysis."""


#============================================
class DocumentParseError(ValueError):
	"""Raised when input is not a well-formed SVG document."""


#============================================
class CoordinateValueError(ValueError):
	"""One segment dropped because an endpoint coordinate is missing or not finite."""

	def __init__(self, kind: str, owner_index: int, segment_index: int, point) -> None:
		self.kind = kind
		self.owner_index = int(owner_index)
		self.segment_index = int(segment_index)
		self.point = (float(point[0]), float(point[1]))
		super().__init__(
			f"{kind} {owner_index}: segment {segment_index} has non-numeric "
			f"coordinate ({self.point[0]}, {self.point[1]})"
		)

	@property
	def descriptor(self) -> str:
		return f"{self.kind} {self.owner_index}"

	def as_dict(self) -> dict:
		"""Return JSON-ready description of this decode failure."""
		return {
			"element": self.descriptor,
			"segment_index": self.segment_index,
			"message": str(self),
		}
