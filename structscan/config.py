"""Runtime settings.

Values come from the environment (a ``.env`` file in the working directory
is loaded first). Set ``GITHUB_TOKEN`` to raise the GitHub API rate limit.
"""

from __future__ import annotations

import os
from typing import List, Optional

import dotenv
from pydantic import BaseModel, Field


class Settings(BaseModel):
	github_token: Optional[str] = None
	max_retries: int = Field(default=3, ge=0)
	max_file_size: int = Field(default=1_000_000, gt=0)
	chunk_size: int = Field(default=5, gt=0)
	output_dir: str = "output"
	concurrency: int = Field(default=4, ge=1)
	branches: List[str] = ["main", "master"]

	@classmethod
	def from_env(cls, load_dotenv: bool = True) -> "Settings":
		if load_dotenv:
			dotenv.load_dotenv()
		values = {}
		token = os.getenv("GITHUB_TOKEN")
		if token:
			values["github_token"] = token
		for field_name, env_name in (
			("max_retries", "STRUCTSCAN_MAX_RETRIES"),
			("max_file_size", "STRUCTSCAN_MAX_FILE_SIZE"),
			("chunk_size", "STRUCTSCAN_CHUNK_SIZE"),
			("output_dir", "STRUCTSCAN_OUTPUT_DIR"),
			("concurrency", "STRUCTSCAN_CONCURRENCY"),
		):
			raw = os.getenv(env_name)
			if raw:
				values[field_name] = raw
		branches = os.getenv("STRUCTSCAN_BRANCHES")
		if branches:
			values["branches"] = [b.strip() for b in branches.split(",") if b.strip()]
		return cls(**values)
