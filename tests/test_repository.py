from pathlib import Path

import pytest

from structscan.config import Settings
from structscan.errors import DecodeError, NetworkError
from structscan.model import GithubContent
from structscan.repository import RepositoryAnalyzer, analyze_local

FIXTURE = Path(__file__).parent / "fixtures" / "sample.rs"


def _entry(path, kind="file", size=100):
	return {
		"name": path.rsplit("/", 1)[-1],
		"path": path,
		"sha": "0" * 40,
		"size": size,
		"url": f"https://api.github.com/repos/acme/geo/contents/{path}",
		"type": kind,
	}


class FakeClient:
	def __init__(self, tree, files, failing_branches=()):
		self.tree = tree
		self.files = files
		self.failing_branches = set(failing_branches)
		self.fetched = []

	def get_repo_contents(self, repo_url, path, branch):
		if branch in self.failing_branches:
			raise NetworkError(f"no branch {branch}")
		return [GithubContent.model_validate(item) for item in self.tree[path]]

	def get_file_content(self, url):
		self.fetched.append(url)
		value = self.files[url]
		if isinstance(value, Exception):
			raise value
		return value


def _url(path):
	return f"https://api.github.com/repos/acme/geo/contents/{path}"


@pytest.fixture
def fake_client():
	tree = {
		"": [
			_entry("Cargo.toml"),
			_entry("src", kind="dir"),
			_entry("huge.rs", size=2_000_000),
			_entry("README.md"),
		],
		"src": [
			_entry("src/lib.rs"),
			_entry("src/broken.rs"),
			_entry("src/shapes", kind="dir"),
		],
		"src/shapes": [
			_entry("src/shapes/ring.rs"),
			_entry("src/shapes/ring_test_data.bin"),
		],
	}
	files = {
		_url("Cargo.toml"): '[package]\nname = "geo"\n',
		_url("README.md"): "# Geo\n",
		_url("src/lib.rs"): FIXTURE.read_text(),
		_url("src/broken.rs"): DecodeError("Content or encoding unavailable"),
		_url("src/shapes/ring.rs"): "pub struct Ring;\n\n#[test]\nfn ring() {}\n",
	}
	return FakeClient(tree, files, failing_branches={"main"})


def test_falls_back_to_master(fake_client):
	summary = RepositoryAnalyzer(fake_client, Settings()).analyze("https://github.com/acme/geo")
	assert summary.repository_structure.branch_analyzed == "master"


def test_crawl_aggregates_project(fake_client):
	summary = RepositoryAnalyzer(fake_client, Settings()).analyze("https://github.com/acme/geo")

	assert summary.files_analyzed == [
		"Cargo.toml",
		"src/lib.rs",
		"src/broken.rs",
		"src/shapes/ring.rs",
		"src/shapes/ring_test_data.bin",
		"README.md",
	]
	assert summary.total_files == 6
	assert [fs.path for fs in summary.file_summaries] == [
		"Cargo.toml",
		"src/lib.rs",
		"src/shapes/ring.rs",
		"README.md",
	]
	# oversized and non-analyzable files are never fetched
	assert _url("huge.rs") not in fake_client.fetched
	assert _url("src/shapes/ring_test_data.bin") not in fake_client.fetched

	structure = summary.repository_structure
	assert structure.has_src_directory
	assert structure.has_tests
	assert structure.has_docs
	assert structure.build_systems == ["Rust/Cargo"]
	assert structure.primary_language == "rs"

	overview = summary.project_overview
	assert overview.main_modules == ["shapes"]
	assert overview.total_rust_files == 2
	assert overview.total_public_types == 6
	assert overview.total_public_functions == 0
	assert overview.total_tests == 2
	assert [r.type_name for r in overview.type_relations] == ["Point", "Circle", "Canvas", "Label", "Ring"]
	assert len(overview.method_signatures) == 8
	assert overview.configuration.feature_flags == ["render"]


def test_every_branch_failing_raises_last_error(fake_client):
	fake_client.failing_branches = {"main", "master"}
	with pytest.raises(NetworkError) as exc:
		RepositoryAnalyzer(fake_client, Settings()).analyze("https://github.com/acme/geo")
	assert "master" in str(exc.value)


def test_analyze_local(tmp_path):
	(tmp_path / "Cargo.toml").write_text('[package]\nname = "geo"\n')
	(tmp_path / "README.md").write_text("# Geo\n")
	(tmp_path / "fixtures_test.txt").write_text("data\n")
	(tmp_path / "src" / "shapes").mkdir(parents=True)
	(tmp_path / "src" / "lib.rs").write_text(FIXTURE.read_text())
	(tmp_path / "src" / "shapes" / "circle.rs").write_text("pub struct Ring;\n")

	summary = analyze_local(str(tmp_path))

	assert summary.repository_structure.branch_analyzed == "local"
	assert summary.files_analyzed == [
		"Cargo.toml",
		"README.md",
		"fixtures_test.txt",
		"src/lib.rs",
		"src/shapes/circle.rs",
	]
	assert summary.total_files == 5
	assert len(summary.file_summaries) == 4
	assert summary.repository_structure.has_tests
	assert summary.repository_structure.primary_language == "rs"
	overview = summary.project_overview
	assert overview.main_modules == ["shapes"]
	assert overview.total_rust_files == 2
	assert overview.total_public_types == 6
	assert overview.total_tests == 1


def test_analyze_local_skips_large_files(tmp_path):
	(tmp_path / "big.rs").write_text("pub struct Big;\n" * 10)
	summary = analyze_local(str(tmp_path), Settings(max_file_size=20))
	assert summary.files_analyzed == []
	assert summary.total_files == 0
