from __future__ import annotations

from typing import List

from .model import ProjectSummary, TypeRelation
from .patterns import PATTERNS, CodePatterns, split_lines

HEAD_LINES = 5


def generate_summary(text: str, patterns: CodePatterns = PATTERNS) -> str:
	"""Digest of a file: its first lines, then one labelled line per rule match.

	Matches are grouped by rule rather than by position in the file.
	"""
	lines = split_lines(text)
	parts: List[str] = []
	if lines:
		parts.append("File start:")
		parts.extend(lines[:HEAD_LINES])

	for pattern, label in patterns.summary_rules:
		for line in lines:
			if pattern.search(line):
				parts.append(f"{label}: {line.strip()}")

	if not parts:
		return ""
	return "\n".join(parts) + "\n"


def _describe_relation(relation: TypeRelation) -> str:
	text = f"  {relation.type_name}"
	if relation.implemented_traits:
		text += f" implements {', '.join(relation.implemented_traits)}"
	if relation.depends_on:
		text += f"; depends on {', '.join(relation.depends_on)}"
	if relation.used_by:
		text += f"; used by {', '.join(relation.used_by)}"
	return text


def summarize_project(summary: ProjectSummary) -> str:
	structure = summary.repository_structure
	overview = summary.project_overview
	parts: List[str] = []
	parts.append(
		f"Repository {summary.repo_url} ({structure.branch_analyzed}): "
		f"{summary.total_files} files analyzed"
	)
	parts.append(f"  Primary language: {structure.primary_language or 'Unknown'}")
	if structure.build_systems:
		parts.append(f"  Build systems: {', '.join(structure.build_systems)}")
	if overview.main_modules:
		parts.append(f"  Main modules: {', '.join(overview.main_modules)}")
	if overview.total_rust_files:
		parts.append(
			f"  Rust files: {overview.total_rust_files}, "
			f"public types: {overview.total_public_types}, "
			f"public functions: {overview.total_public_functions}, "
			f"tests: {overview.total_tests}"
		)
	if overview.type_relations:
		parts.append("  Types:")
		parts.extend(_describe_relation(r) for r in overview.type_relations)
	config = overview.configuration
	if config.feature_flags:
		parts.append(f"  Feature flags: {', '.join(sorted(set(config.feature_flags)))}")
	if config.constants:
		parts.append(f"  Constants: {', '.join(name for name, _, _ in config.constants[:10])}")
	return "\n".join(parts)
