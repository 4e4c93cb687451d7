from __future__ import annotations

from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class Visibility(str, Enum):
	PUBLIC = "Public"
	PUBLIC_CRATE = "PublicCrate"
	PRIVATE = "Private"


class CategoryKind(str, Enum):
	SOURCE = "Source"
	CONFIGURATION = "Configuration"
	DOCUMENTATION = "Documentation"
	TEST = "Test"
	UNKNOWN = "Unknown"


class FileCategory(BaseModel):
	kind: CategoryKind
	# Only set for source files, e.g. "rs"
	extension: Optional[str] = None

	@property
	def is_analyzable(self) -> bool:
		return self.kind in (
			CategoryKind.SOURCE,
			CategoryKind.CONFIGURATION,
			CategoryKind.DOCUMENTATION,
		)


class TypeRelation(BaseModel):
	type_name: str
	implemented_traits: List[str] = []
	depends_on: List[str] = []
	used_by: List[str] = []


class MethodSignature(BaseModel):
	name: str
	params: List[str] = []
	return_type: str = "()"
	visibility: Visibility = Visibility.PRIVATE


class ConfigurationSnapshot(BaseModel):
	# (name, declared type, value)
	constants: List[Tuple[str, str, str]] = []
	feature_flags: List[str] = []
	custom_attributes: List[str] = []


class FileAnalysisResult(BaseModel):
	path: str
	summary: str
	relations: List[TypeRelation] = []
	signatures: List[MethodSignature] = []
	configuration: ConfigurationSnapshot = Field(default_factory=ConfigurationSnapshot)


class FileInfo(BaseModel):
	path: str
	rel_path: str
	name: str
	size: int
	category: FileCategory


class GithubContent(BaseModel):
	name: str
	path: str
	sha: str = ""
	size: int = 0
	url: str
	content: Optional[str] = None
	encoding: Optional[str] = None
	content_type: str = Field(alias="type")

	model_config = ConfigDict(populate_by_name=True)


class FileSummary(BaseModel):
	path: str
	size: int
	summary: str
	category: FileCategory
	url: str


class RepositoryStructure(BaseModel):
	has_src_directory: bool = False
	has_tests: bool = False
	has_docs: bool = False
	primary_language: Optional[str] = None
	build_systems: List[str] = []
	branch_analyzed: str


class ProjectOverview(BaseModel):
	total_rust_files: int = 0
	total_public_types: int = 0
	total_public_functions: int = 0
	total_tests: int = 0
	main_modules: List[str] = []
	type_relations: List[TypeRelation] = []
	method_signatures: List[MethodSignature] = []
	configuration: ConfigurationSnapshot = Field(default_factory=ConfigurationSnapshot)


class ProjectSummary(BaseModel):
	repo_url: str
	files_analyzed: List[str] = []
	total_files: int = 0
	file_summaries: List[FileSummary] = []
	project_overview: ProjectOverview = Field(default_factory=ProjectOverview)
	repository_structure: RepositoryStructure
