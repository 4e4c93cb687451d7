"""Line-level extraction rules shared by every analysis pass.

The table is built once at import time and never mutated; analysis
functions take it as a default argument so callers can run any number of
files in parallel against the same instance.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Pattern, Tuple

_TYPE_NAME = r"[A-Z][a-zA-Z0-9_]*"


def split_lines(text: str) -> List[str]:
	"""Split on ``\\n`` only, dropping a trailing ``\\r`` from each line.

	Unlike ``str.splitlines`` this keeps form feeds, vertical tabs and the
	Unicode separators inside their line. A final newline does not produce
	an extra empty line.
	"""
	if not text:
		return []
	lines = text.split("\n")
	if lines[-1] == "":
		lines.pop()
	return [line[:-1] if line.endswith("\r") else line for line in lines]


@dataclass(frozen=True)
class CodePatterns:
	# Applied to stripped lines; the capture is the declared name.
	type_decl: Pattern[str] = re.compile(
		r"^(?:pub(?:\([^)]*\))?\s+)?(?:struct|enum|type)\s+(" + _TYPE_NAME + r")"
	)
	derive: Pattern[str] = re.compile(r"#\[derive\((.*?)\)\]")
	method: Pattern[str] = re.compile(
		r"(?P<vis>pub(?:\([^)]+\))?)?\s*\bfn\s+(?P<name>\w+)\s*"
		r"(?:<(?P<generics>(?:[^<>]|<[^<>]*>)*)>)?\s*"
		r"\((?P<args>[^)]*)\)"
		r"(?:\s*->\s*(?P<ret>[^{]+))?"
	)
	const: Pattern[str] = re.compile(
		r"(?:pub\s+)?const\s+([A-Z_][A-Z0-9_]*)\s*:\s*([^=]+)\s*=\s*([^;]+);"
	)
	feature: Pattern[str] = re.compile(r'#\[cfg\(feature\s*=\s*"([^"]+)"\)\]')
	attribute: Pattern[str] = re.compile(r"#\[([^\]]+)\]")

	# Order matters only for logging; every rule runs on every line.
	dependency_rules: Tuple[Pattern[str], ...] = (
		# field annotation  `name: Type`
		re.compile(r":\s*(?:&\s*)?(" + _TYPE_NAME + r")\s*(?:<[^>]*>)?"),
		# parameter type    `fn f(x: &Type`
		re.compile(r"fn\s+\w+\s*(?:<[^>]*>)?\s*\([^)]*?(?:&\s*)?(" + _TYPE_NAME + r")"),
		# return type       `-> Result<Type`
		re.compile(r"->\s*(?:Result<)?(?:&\s*)?(" + _TYPE_NAME + r")"),
		# trait header      `impl Trait for`
		re.compile(r"impl(?:\s*<[^>]*>)?\s+(" + _TYPE_NAME + r")\s+for"),
		# generic argument  `<.., Type, ..>`
		re.compile(r"<[^>]*?(" + _TYPE_NAME + r")[^>]*>"),
		# wrapped           `Vec<Type>`
		re.compile(r"(?:Vec|Option|Box)<(" + _TYPE_NAME + r")>"),
	)

	# (pattern, label); matched against the raw line, so indented members
	# of impl blocks are not reported.
	summary_rules: Tuple[Tuple[Pattern[str], str], ...] = (
		(re.compile(r"^///\s*(.*)$"), "Documentation"),
		(re.compile(r"^//!\s*(.*)$"), "Module documentation"),
		(re.compile(r"^pub fn (\w+)"), "Public method"),
		(re.compile(r"^fn (\w+)"), "Private method"),
		(re.compile(r"^pub struct (\w+)"), "Public struct"),
		(re.compile(r"^pub enum (\w+)"), "Public enum"),
		(re.compile(r"^pub trait (\w+)"), "Public trait"),
		(re.compile(r"^impl\s+(\w+)"), "Implementation"),
		(re.compile(r"^\[.*\]"), "Section"),
	)

	# Attribute bodies starting with these belong to other categories.
	excluded_attribute_prefixes: Tuple[str, ...] = ("cfg", "test")


PATTERNS = CodePatterns()
