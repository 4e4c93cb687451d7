from __future__ import annotations

import logging
import os
from typing import List, Tuple

from pydantic import BaseModel

logger = logging.getLogger(__name__)

CHUNKS_DIR = "chunks"
SUMMARY_FILE = "analysis.json"
INDEX_FILE = "complete_analysis.txt"

README_TEMPLATE = """# Repository Analysis Output

This directory contains the analysis results for the repository.

## Files
- `{index}`: **Single file containing everything** - Use this for easy copy-paste into AI tools
- `{summary}`: Complete analysis of the repository in JSON format
- `{chunks}/`: Directory containing code files split into manageable chunks
    - Each chunk contains up to {chunk_size} files
    - Files are formatted with XML-style tags for easy parsing

## Format
Files are wrapped in XML-style tags:
```
<document>
<source>filename</source>
<document_content>
// actual file content
</document_content>
</document>
```

## Usage
To analyze the entire codebase:
1. Copy the entire content of `{index}`
2. Paste it into your conversation with the AI
3. The AI will automatically recognize and parse all the files
"""


def format_document(source: str, content: str) -> str:
	return (
		f"\n<document>\n<source>{source}</source>\n<document_content>\n"
		f"{content}\n</document_content>\n</document>\n"
	)


def repo_name_from_url(repo_url: str) -> str:
	name = repo_url.rstrip("/").replace("\\", "/").split("/")[-1]
	name = name.replace(".git", "")
	return name or "unknown_repo"


class ProjectExporter:
	"""Writes file contents in fixed-size chunks plus an all-in-one index."""

	def __init__(self, repo_url: str, output_dir: str = "output", chunk_size: int = 5):
		self.project_dir = os.path.join(output_dir, repo_name_from_url(repo_url))
		self.chunk_size = chunk_size
		self.chunk_counter = 0
		self._pending: List[Tuple[str, str]] = []
		os.makedirs(self.project_dir, exist_ok=True)

	def _chunk_path(self, index: int) -> str:
		return os.path.join(self.project_dir, CHUNKS_DIR, f"chunk_{index}.txt")

	def add_file(self, filename: str, content: str) -> None:
		self._pending.append((filename, content))
		if len(self._pending) >= self.chunk_size:
			self._write_chunk()

	def _write_chunk(self) -> None:
		if not self._pending:
			return
		os.makedirs(os.path.join(self.project_dir, CHUNKS_DIR), exist_ok=True)
		with open(self._chunk_path(self.chunk_counter), "w", encoding="utf-8") as fh:
			for filename, content in self._pending:
				fh.write(format_document(filename, content))
		logger.debug("Wrote chunk %d (%d files)", self.chunk_counter, len(self._pending))
		self._pending.clear()
		self.chunk_counter += 1

	def write_summary(self, summary: BaseModel) -> str:
		path = os.path.join(self.project_dir, SUMMARY_FILE)
		with open(path, "w", encoding="utf-8") as fh:
			fh.write(summary.model_dump_json(indent=2))
		return path

	def finish(self) -> str:
		self._write_chunk()

		summary_path = os.path.join(self.project_dir, SUMMARY_FILE)
		analysis = ""
		if os.path.exists(summary_path):
			with open(summary_path, "r", encoding="utf-8") as fh:
				analysis = fh.read()

		parts = [format_document(SUMMARY_FILE, analysis)]
		for index in range(self.chunk_counter):
			with open(self._chunk_path(index), "r", encoding="utf-8") as fh:
				parts.append(fh.read())

		index_path = os.path.join(self.project_dir, INDEX_FILE)
		with open(index_path, "w", encoding="utf-8") as fh:
			fh.write("".join(parts))

		with open(os.path.join(self.project_dir, "README.md"), "w", encoding="utf-8") as fh:
			fh.write(
				README_TEMPLATE.format(
					index=INDEX_FILE,
					summary=SUMMARY_FILE,
					chunks=CHUNKS_DIR,
					chunk_size=self.chunk_size,
				)
			)
		return index_path
