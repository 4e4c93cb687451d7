from __future__ import annotations

import os
from typing import FrozenSet, List, Tuple

from .model import CategoryKind, FileCategory, FileInfo


SOURCE_EXTENSIONS: FrozenSet[str] = frozenset({"rs", "go", "js", "py", "java", "cpp", "c"})

CONFIG_FILES: FrozenSet[str] = frozenset({
	"Cargo.toml",
	"package.json",
	"go.mod",
	"Makefile",
	"CMakeLists.txt",
})

DOC_PREFIXES: Tuple[str, ...] = ("LICENSE", "CONTRIBUTING", "README", "CHANGELOG")

TEST_SUFFIXES: Tuple[str, ...] = (
	"_test.go",
	".test.js",
	"Test.java",
	"_test.py",
	"_spec.rb",
)

IGNORED_DIRS: FrozenSet[str] = frozenset({
	".git",
	"node_modules",
	"target",
	"dist",
	"build",
	"__pycache__",
})


def file_extension(filename: str) -> str:
	_, ext = os.path.splitext(filename)
	return ext[1:]


def is_config_file(filename: str) -> bool:
	return filename in CONFIG_FILES


def is_documentation_file(filename: str) -> bool:
	return filename.endswith(".md") or filename.startswith(DOC_PREFIXES)


def is_test_file(filename: str) -> bool:
	return "test" in filename or filename.endswith(TEST_SUFFIXES)


def categorize_file(filename: str) -> FileCategory:
	extension = file_extension(filename)
	if extension in SOURCE_EXTENSIONS:
		return FileCategory(kind=CategoryKind.SOURCE, extension=extension)
	if is_config_file(filename):
		return FileCategory(kind=CategoryKind.CONFIGURATION)
	if is_documentation_file(filename):
		return FileCategory(kind=CategoryKind.DOCUMENTATION)
	if is_test_file(filename):
		return FileCategory(kind=CategoryKind.TEST)
	return FileCategory(kind=CategoryKind.UNKNOWN)


def scan_repository(root: str) -> List[FileInfo]:
	files: List[FileInfo] = []
	for dirpath, dirnames, filenames in os.walk(root):
		dirnames[:] = sorted(d for d in dirnames if d not in IGNORED_DIRS)
		for filename in sorted(filenames):
			path = os.path.join(dirpath, filename)
			if os.path.islink(path):
				continue
			rel_path = os.path.relpath(path, root).replace(os.sep, "/")
			files.append(
				FileInfo(
					path=path,
					rel_path=rel_path,
					name=filename,
					size=os.path.getsize(path),
					category=categorize_file(filename),
				)
			)
	return files
