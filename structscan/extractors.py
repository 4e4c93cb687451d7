from __future__ import annotations

from typing import List, Optional

from .model import ConfigurationSnapshot, MethodSignature, Visibility
from .patterns import PATTERNS, CodePatterns, split_lines


def _visibility(qualifier: Optional[str]) -> Visibility:
	if qualifier == "pub":
		return Visibility.PUBLIC
	if qualifier == "pub(crate)":
		return Visibility.PUBLIC_CRATE
	# pub(super), pub(in path) and no qualifier at all
	return Visibility.PRIVATE


def _split_params(args: str) -> List[str]:
	# Naive split: `map: HashMap<K, V>` becomes two fragments and `()`
	# becomes a single empty fragment.
	return [part.strip() for part in args.split(",")]


def extract_method_signatures(text: str, patterns: CodePatterns = PATTERNS) -> List[MethodSignature]:
	signatures: List[MethodSignature] = []
	for line in split_lines(text):
		match = patterns.method.search(line)
		if not match:
			continue
		ret = match.group("ret")
		signatures.append(
			MethodSignature(
				name=match.group("name"),
				params=_split_params(match.group("args")),
				return_type=ret.strip() if ret and ret.strip() else "()",
				visibility=_visibility(match.group("vis")),
			)
		)
	return signatures


def extract_configuration(text: str, patterns: CodePatterns = PATTERNS) -> ConfigurationSnapshot:
	constants = []
	feature_flags: List[str] = []
	custom_attributes: List[str] = []

	for line in split_lines(text):
		const = patterns.const.search(line)
		if const:
			constants.append((const.group(1), const.group(2).strip(), const.group(3).strip()))

		for feature in patterns.feature.finditer(line):
			feature_flags.append(feature.group(1))

		for attribute in patterns.attribute.finditer(line):
			body = attribute.group(1)
			if not body.startswith(patterns.excluded_attribute_prefixes):
				custom_attributes.append(body)

	return ConfigurationSnapshot(
		constants=constants,
		feature_flags=feature_flags,
		custom_attributes=custom_attributes,
	)
