"""Structural analysis of Rust-style source trees.

Modules:
- patterns.py: Shared, immutable table of line-level extraction rules.
- type_relations.py: Declared types, their dependency graph and its closure.
- extractors.py: Method signatures and module-level configuration.
- summarize.py: Per-file digest and project-level text summary.
- file_analysis.py: Runs every pass over one file.
- fs_scan.py: File categorization and local tree scanning.
- github_client.py: GitHub contents API with retry and rate-limit handling.
- repository.py: Crawls a repository and aggregates per-file results.
- export.py: Chunked, LLM-ready export of a repository's files.
- model.py: Data structures for all of the above.
"""

from .file_analysis import analyze_content

__all__ = [
	"analyze_content",
	"patterns",
	"type_relations",
	"extractors",
	"summarize",
	"file_analysis",
	"fs_scan",
	"github_client",
	"repository",
	"export",
	"model",
]
