from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from .model import TypeRelation
from .patterns import PATTERNS, CodePatterns, split_lines

logger = logging.getLogger(__name__)


def collect_type_universe(text: str, patterns: CodePatterns = PATTERNS) -> Set[str]:
	"""Return the names of every type declared in the file."""
	universe: Set[str] = set()
	for line in split_lines(text):
		match = patterns.type_decl.match(line.strip())
		if match:
			universe.add(match.group(1))
	return universe


@dataclass
class ScanState:
	"""Accumulator folded over the lines of one file.

	``current_type`` owns every dependency matched until the next type that
	has not been seen before is declared. Re-declarations leave the open
	context untouched, so their lines fold into whatever record is open.
	"""

	universe: Set[str]
	current_type: Optional[str] = None
	processed: Set[str] = field(default_factory=set)
	dependencies: Set[str] = field(default_factory=set)
	traits_map: Dict[str, List[str]] = field(default_factory=dict)
	usage_map: Dict[str, Set[str]] = field(default_factory=dict)
	relations: List[TypeRelation] = field(default_factory=list)

	def open_type(self, type_name: str) -> None:
		self.finalize()
		logger.debug("Analyzing new type: %s", type_name)
		self.current_type = type_name
		self.processed.add(type_name)

	def finalize(self) -> None:
		if self.current_type is None:
			return
		name = self.current_type
		self.relations.append(
			TypeRelation(
				type_name=name,
				implemented_traits=list(self.traits_map.get(name, [])),
				depends_on=sorted(d for d in self.dependencies if d in self.universe),
				used_by=sorted(self.usage_map.get(name, ())),
			)
		)
		self.dependencies.clear()
		self.current_type = None

	def record_dependency(self, type_name: str) -> None:
		if self.current_type is None:
			return
		if type_name not in self.universe or type_name == self.current_type:
			return
		if type_name not in self.dependencies:
			logger.debug("Found dependency: %s -> %s", self.current_type, type_name)
		self.dependencies.add(type_name)
		self.usage_map.setdefault(type_name, set()).add(self.current_type)


def _scan_line(
	state: ScanState,
	line: str,
	next_line: Optional[str],
	patterns: CodePatterns,
) -> ScanState:
	# A derive only attaches to a declaration on the very next line.
	if line.startswith("#[derive") and next_line is not None:
		declared = patterns.type_decl.match(next_line)
		derive = patterns.derive.search(line)
		if declared and derive:
			traits = [token.strip() for token in derive.group(1).split(",")]
			state.traits_map[declared.group(1)] = traits

	declared = patterns.type_decl.match(line)
	if declared:
		type_name = declared.group(1)
		if type_name not in state.processed:
			state.open_type(type_name)
		else:
			logger.debug("Skipping already processed type: %s", type_name)

	if state.current_type is not None:
		for rule in patterns.dependency_rules:
			for match in rule.finditer(line):
				state.record_dependency(match.group(1))

	return state


def scan_type_relations(
	text: str,
	universe: Optional[Set[str]] = None,
	patterns: CodePatterns = PATTERNS,
) -> List[TypeRelation]:
	"""Build the immediate (non-transitive) relations of each declared type.

	Relations come back in the order their contexts were first closed.
	"""
	if universe is None:
		universe = collect_type_universe(text, patterns)
	lines = [line.strip() for line in split_lines(text)]
	state = ScanState(universe=universe)
	for index, line in enumerate(lines):
		next_line = lines[index + 1] if index + 1 < len(lines) else None
		state = _scan_line(state, line, next_line, patterns)
	state.finalize()
	return state.relations


def _close(graph: Dict[str, Set[str]]) -> int:
	"""Relax ``graph`` in place to its transitive closure.

	Every sweep unions each direct neighbour's current set into the node's
	own set. Sets only grow and are bounded by the node count, so cycles
	terminate. Returns the number of sweeps performed.
	"""
	sweeps = 0
	changed = True
	while changed:
		changed = False
		sweeps += 1
		for reach in graph.values():
			gained: Set[str] = set()
			for neighbor in list(reach):
				gained |= graph.get(neighbor, set())
			gained -= reach
			if gained:
				reach |= gained
				changed = True
	return sweeps


def build_transitive_relations(relations: List[TypeRelation]) -> List[TypeRelation]:
	"""Return copies of ``relations`` with fully propagated dependency sets."""
	depends: Dict[str, Set[str]] = {}
	users: Dict[str, Set[str]] = {}
	for relation in relations:
		depends.setdefault(relation.type_name, set()).update(relation.depends_on)
		users.setdefault(relation.type_name, set()).update(relation.used_by)
		for dep in relation.depends_on:
			users.setdefault(dep, set()).add(relation.type_name)

	sweeps = _close(depends) + _close(users)
	logger.debug("Closure converged after %d sweeps", sweeps)

	return [
		relation.model_copy(
			update={
				"depends_on": sorted(depends.get(relation.type_name, set())),
				"used_by": sorted(users.get(relation.type_name, set())),
			}
		)
		for relation in relations
	]


def analyze_type_relations(text: str, patterns: CodePatterns = PATTERNS) -> List[TypeRelation]:
	universe = collect_type_universe(text, patterns)
	logger.debug("Discovered types: %s", sorted(universe))
	relations = scan_type_relations(text, universe, patterns)
	return build_transitive_relations(relations)
