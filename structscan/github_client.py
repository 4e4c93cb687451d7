from __future__ import annotations

import base64
import binascii
import logging
import re
import threading
import time
from typing import Any, Callable, List, Optional

import requests

from .config import Settings
from .errors import DecodeError, NetworkError, RateLimitError
from .model import GithubContent

logger = logging.getLogger(__name__)

USER_AGENT = "GitHub-Repository-Analyzer"
API_ROOT = "https://api.github.com/repos"

_REPO_URL = re.compile(
	r"^(?:https?://)?(?:www\.)?github\.com/(?P<owner>[^/]+)/(?P<repo>[^/]+?)(?:\.git)?(?:/tree/[^?#]*)?/?$"
)


def contents_api_url(repo_url: str, path: str, branch: str) -> str:
	"""Map ``https://github.com/owner/repo`` to its contents API endpoint."""
	match = _REPO_URL.match(repo_url.strip())
	if not match:
		raise ValueError(f"Not a GitHub repository URL: {repo_url}")
	base = f"{API_ROOT}/{match.group('owner')}/{match.group('repo')}/contents"
	if path:
		base += "/" + path.strip("/")
	return f"{base}?ref={branch}"


class GithubClient:
	"""Thin wrapper over the GitHub contents API with retry and rate-limit waits."""

	def __init__(
		self,
		token: Optional[str] = None,
		max_retries: int = 3,
		session: Optional[requests.Session] = None,
		sleep: Callable[[float], None] = time.sleep,
		clock: Callable[[], float] = time.time,
		timeout: float = 30.0,
	):
		self.token = token
		self.max_retries = max_retries
		# requests.Session is not thread-safe; without an injected session each
		# worker thread gets its own.
		self._session = session
		self._local = threading.local()
		self._sleep = sleep
		self._clock = clock
		self._timeout = timeout

		if token:
			logger.info("Using authenticated GitHub API requests")
		else:
			logger.warning(
				"Using unauthenticated GitHub API requests. "
				"Set GITHUB_TOKEN to increase rate limits."
			)

	@classmethod
	def from_settings(cls, settings: Settings) -> "GithubClient":
		return cls(token=settings.github_token, max_retries=settings.max_retries)

	def session(self) -> requests.Session:
		if self._session is not None:
			return self._session
		session = getattr(self._local, "session", None)
		if session is None:
			session = requests.Session()
			self._local.session = session
		return session

	def _headers(self) -> dict:
		headers = {"User-Agent": USER_AGENT}
		if self.token:
			headers["Authorization"] = f"token {self.token}"
		return headers

	def _rate_limit_wait(self, response: requests.Response) -> Optional[int]:
		"""Seconds to wait when ``response`` signals an exhausted quota.

		Returns None when the response is not a quota signal. Raises
		RateLimitError when it is one but carries no usable reset time.
		"""
		remaining = response.headers.get("x-ratelimit-remaining")
		if remaining != "0" and response.status_code != 429:
			return None
		try:
			reset_at = int(response.headers.get("x-ratelimit-reset", ""))
		except ValueError:
			raise RateLimitError(0) from None
		now = int(self._clock())
		if reset_at <= now:
			raise RateLimitError(reset_at)
		return reset_at - now + 1

	def get_with_retry(self, url: str, max_retries: Optional[int] = None) -> Any:
		if max_retries is None:
			max_retries = self.max_retries
		retries = 0
		last_error: Optional[NetworkError] = None

		while retries <= max_retries:
			if retries > 0:
				wait_time = 2 ** retries
				logger.warning(
					"Request failed, retrying in %d seconds... (%d/%d)", wait_time, retries, max_retries
				)
				self._sleep(wait_time)

			try:
				response = self.session().get(url, headers=self._headers(), timeout=self._timeout)
			except requests.RequestException as e:
				last_error = NetworkError(str(e))
				retries += 1
				continue

			if response.status_code in (403, 429):
				wait_time = self._rate_limit_wait(response)
				if wait_time is not None:
					logger.warning("Rate limit exceeded. Waiting %d seconds for reset...", wait_time)
					self._sleep(wait_time)
					continue

			if response.ok:
				try:
					return response.json()
				except ValueError as e:
					raise DecodeError(f"Invalid JSON from {url}: {e}") from e

			last_error = NetworkError(f"GitHub API returned status {response.status_code}: {url}")
			retries += 1

		raise last_error or NetworkError("Maximum retries exceeded")

	def get_repo_contents(self, repo_url: str, path: str, branch: str) -> List[GithubContent]:
		payload = self.get_with_retry(contents_api_url(repo_url, path, branch))
		if isinstance(payload, dict):
			payload = [payload]
		if not isinstance(payload, list):
			raise DecodeError(f"Unexpected contents payload for {path or '/'}")
		return [GithubContent.model_validate(item) for item in payload]

	def get_file_content(self, content_url: str) -> str:
		payload = self.get_with_retry(content_url)
		content = payload.get("content") if isinstance(payload, dict) else None
		encoding = payload.get("encoding") if isinstance(payload, dict) else None
		if content is None or encoding != "base64":
			raise DecodeError("Content or encoding unavailable")
		try:
			raw = base64.b64decode(content.replace("\n", ""))
		except (binascii.Error, ValueError) as e:
			raise DecodeError(str(e)) from e
		try:
			return raw.decode("utf-8")
		except UnicodeDecodeError as e:
			raise DecodeError(str(e)) from e
