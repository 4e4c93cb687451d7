from __future__ import annotations

import logging

from .extractors import extract_configuration, extract_method_signatures
from .model import FileAnalysisResult
from .patterns import PATTERNS, CodePatterns
from .summarize import generate_summary
from .type_relations import analyze_type_relations

logger = logging.getLogger(__name__)


def analyze_content(text: str, path: str, patterns: CodePatterns = PATTERNS) -> FileAnalysisResult:
	"""Run every extraction pass over one file.

	Lines that match no rule are skipped, so unusual input only yields fewer
	facts; this never raises for a string argument.
	"""
	logger.info("Analyzing file: %s", path)

	summary = generate_summary(text, patterns)
	relations = analyze_type_relations(text, patterns)
	for relation in relations:
		logger.debug(
			"Type %s implements=%s depends_on=%s used_by=%s",
			relation.type_name,
			relation.implemented_traits,
			relation.depends_on,
			relation.used_by,
		)
	signatures = extract_method_signatures(text, patterns)
	configuration = extract_configuration(text, patterns)

	logger.info(
		"%s: %d types, %d signatures, %d constants, %d feature flags, %d attributes",
		path,
		len(relations),
		len(signatures),
		len(configuration.constants),
		len(configuration.feature_flags),
		len(configuration.custom_attributes),
	)
	return FileAnalysisResult(
		path=path,
		summary=summary,
		relations=relations,
		signatures=signatures,
		configuration=configuration,
	)
