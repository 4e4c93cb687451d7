from __future__ import annotations

import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional

from .config import Settings
from .errors import AnalyzerError, DecodeError, NetworkError
from .file_analysis import analyze_content
from .fs_scan import categorize_file, scan_repository
from .github_client import GithubClient
from .model import (
	CategoryKind,
	FileAnalysisResult,
	FileCategory,
	FileSummary,
	GithubContent,
	ProjectSummary,
	RepositoryStructure,
)
from .patterns import split_lines

logger = logging.getLogger(__name__)

BUILD_SYSTEMS: Dict[str, str] = {
	"Cargo.toml": "Rust/Cargo",
	"package.json": "Node.js/npm",
	"go.mod": "Go/modules",
	"pom.xml": "Java/Maven",
	"build.gradle": "Java/Gradle",
	"CMakeLists.txt": "C++/CMake",
}

SRC_PREFIX = "src/"
TEST_MARKER = "#[test]"


class ProjectSummaryBuilder:
	"""Folds per-file results into one ProjectSummary."""

	def __init__(self, repo_url: str, branch: str):
		self.summary = ProjectSummary(
			repo_url=repo_url,
			repository_structure=RepositoryStructure(branch_analyzed=branch),
		)

	def add_directory(self, path: str) -> None:
		if not path.startswith(SRC_PREFIX):
			return
		module_name = path.replace(SRC_PREFIX, "").replace(".rs", "")
		overview = self.summary.project_overview
		if module_name and module_name not in overview.main_modules:
			overview.main_modules.append(module_name)
		self.summary.repository_structure.has_src_directory = True

	def add_file(
		self,
		path: str,
		name: str,
		size: int,
		url: str,
		category: FileCategory,
		text: Optional[str],
	) -> None:
		self._update_structure(path, name, category)
		if text is not None and category.is_analyzable:
			result = analyze_content(text, path)
			self._record(result, text, size, url, category)
		self.summary.files_analyzed.append(path)

	def _update_structure(self, path: str, name: str, category: FileCategory) -> None:
		structure = self.summary.repository_structure
		if category.kind == CategoryKind.SOURCE:
			if path.startswith(SRC_PREFIX):
				structure.has_src_directory = True
		elif category.kind == CategoryKind.TEST:
			structure.has_tests = True
		elif category.kind == CategoryKind.DOCUMENTATION:
			structure.has_docs = True
		elif category.kind == CategoryKind.CONFIGURATION:
			system = BUILD_SYSTEMS.get(name)
			if system and system not in structure.build_systems:
				structure.build_systems.append(system)

	def _record(
		self,
		result: FileAnalysisResult,
		text: str,
		size: int,
		url: str,
		category: FileCategory,
	) -> None:
		if category.kind == CategoryKind.SOURCE and category.extension == "rs":
			overview = self.summary.project_overview
			overview.total_rust_files += 1
			overview.type_relations.extend(result.relations)
			overview.method_signatures.extend(result.signatures)
			config = overview.configuration
			config.constants.extend(result.configuration.constants)
			config.feature_flags.extend(result.configuration.feature_flags)
			config.custom_attributes.extend(result.configuration.custom_attributes)

			summary_lines = split_lines(result.summary)
			overview.total_public_types += sum(
				1
				for line in summary_lines
				if line.startswith(("Public struct: ", "Public enum: ", "Public trait: "))
			)
			overview.total_public_functions += sum(
				1 for line in summary_lines if "Public method: " in line
			)
			overview.total_tests += sum(
				1 for line in split_lines(text) if line.strip() == TEST_MARKER
			)

		self.summary.file_summaries.append(
			FileSummary(
				path=result.path,
				size=size,
				summary=result.summary,
				category=category,
				url=url,
			)
		)

	def finalize(self) -> ProjectSummary:
		self.summary.total_files = len(self.summary.files_analyzed)
		languages = Counter(
			fs.category.extension
			for fs in self.summary.file_summaries
			if fs.category.kind == CategoryKind.SOURCE
		)
		if languages:
			self.summary.repository_structure.primary_language = languages.most_common(1)[0][0]
		return self.summary


class RepositoryAnalyzer:
	"""Crawls a GitHub repository and analyzes every interesting file."""

	def __init__(self, client: Optional[GithubClient] = None, settings: Optional[Settings] = None):
		self.settings = settings or Settings()
		self.client = client or GithubClient.from_settings(self.settings)

	def analyze(self, repo_url: str) -> ProjectSummary:
		last_error: Optional[AnalyzerError] = None
		for branch in self.settings.branches:
			try:
				return self.analyze_branch(repo_url, branch)
			except AnalyzerError as e:
				logger.warning("Branch %s of %s failed: %s", branch, repo_url, e)
				last_error = e
		raise last_error or NetworkError("Failed to access repository on any branch")

	def analyze_branch(self, repo_url: str, branch: str) -> ProjectSummary:
		logger.info("Analyzing %s on branch %s", repo_url, branch)
		builder = ProjectSummaryBuilder(repo_url, branch)
		self._analyze_directory(repo_url, "", branch, builder)
		return builder.finalize()

	def _analyze_directory(
		self,
		repo_url: str,
		path: str,
		branch: str,
		builder: ProjectSummaryBuilder,
	) -> None:
		entries = self.client.get_repo_contents(repo_url, path, branch)
		texts = self._fetch_texts(entries)

		for entry in entries:
			if entry.content_type == "dir":
				builder.add_directory(entry.path)
				self._analyze_directory(repo_url, entry.path, branch, builder)
			elif entry.content_type == "file":
				if entry.size > self.settings.max_file_size:
					logger.info("Skipping %s (%d bytes)", entry.path, entry.size)
					continue
				builder.add_file(
					entry.path,
					entry.name,
					entry.size,
					entry.url,
					categorize_file(entry.name),
					texts.get(entry.path),
				)

	def _fetch_texts(self, entries: List[GithubContent]) -> Dict[str, Optional[str]]:
		wanted = [
			e
			for e in entries
			if e.content_type == "file"
			and e.size <= self.settings.max_file_size
			and categorize_file(e.name).is_analyzable
		]
		if not wanted:
			return {}
		with ThreadPoolExecutor(max_workers=self.settings.concurrency) as pool:
			texts = list(pool.map(self._fetch_text, wanted))
		return {entry.path: text for entry, text in zip(wanted, texts)}

	def _fetch_text(self, entry: GithubContent) -> Optional[str]:
		try:
			return self.client.get_file_content(entry.url)
		except (NetworkError, DecodeError) as e:
			logger.warning("Failed to fetch %s: %s", entry.path, e)
			return None


def analyze_repository(repo_url: str, settings: Optional[Settings] = None) -> ProjectSummary:
	return RepositoryAnalyzer(settings=settings).analyze(repo_url)


def read_text(path: str) -> str:
	with open(path, "r", encoding="utf-8") as fh:
		return fh.read()


def analyze_local(root: str, settings: Optional[Settings] = None) -> ProjectSummary:
	"""Same aggregation as RepositoryAnalyzer, over a directory on disk."""
	settings = settings or Settings()
	builder = ProjectSummaryBuilder(root, "local")
	for info in scan_repository(root):
		parents = info.rel_path.split("/")[:-1]
		for depth in range(1, len(parents) + 1):
			builder.add_directory("/".join(parents[:depth]))

		if info.size > settings.max_file_size:
			logger.info("Skipping %s (%d bytes)", info.rel_path, info.size)
			continue

		text: Optional[str] = None
		if info.category.is_analyzable:
			try:
				text = read_text(info.path)
			except (OSError, UnicodeDecodeError) as e:
				logger.warning("Failed to read %s: %s", info.rel_path, e)
		builder.add_file(info.rel_path, info.name, info.size, info.path, info.category, text)
	return builder.finalize()
