from __future__ import annotations


class AnalyzerError(Exception):
	"""Base class for failures outside the analysis engine."""


class NetworkError(AnalyzerError):
	"""Transport failure or unexpected HTTP status; retryable."""


class DecodeError(AnalyzerError):
	"""Fetched payload could not be turned into text."""


class RateLimitError(AnalyzerError):
	def __init__(self, reset_at: int) -> None:
		super().__init__(f"Rate limit exceeded. Resets at timestamp: {reset_at}")
		self.reset_at = reset_at
