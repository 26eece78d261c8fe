"""Monotonic progress reporting shared by extraction and scanning."""


#============================================
class ProgressReporter:
	"""Forward (percent, message) updates to a host callback.

	The reported percent never decreases within one run.
	"""

	def __init__(self, callback=None) -> None:
		self.callback = callback
		self.percent = 0.0
		self.message = ""

	def report(self, percent: float, message: str | None = None) -> float:
		"""Record one update and hand it to the callback; return the reported percent."""
		self.percent = max(self.percent, min(100.0, float(percent)))
		if message is not None:
			self.message = str(message)
		if self.callback is not None:
			self.callback(self.percent, self.message)
		return self.percent
