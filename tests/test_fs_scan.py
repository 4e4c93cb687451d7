import pytest

from structscan.fs_scan import categorize_file, scan_repository
from structscan.model import CategoryKind, FileCategory


@pytest.mark.parametrize(
	"filename,expected",
	[
		("lib.rs", FileCategory(kind=CategoryKind.SOURCE, extension="rs")),
		("main.go", FileCategory(kind=CategoryKind.SOURCE, extension="go")),
		("parser_test.go", FileCategory(kind=CategoryKind.SOURCE, extension="go")),
		("Cargo.toml", FileCategory(kind=CategoryKind.CONFIGURATION)),
		("CMakeLists.txt", FileCategory(kind=CategoryKind.CONFIGURATION)),
		("README", FileCategory(kind=CategoryKind.DOCUMENTATION)),
		("LICENSE-MIT", FileCategory(kind=CategoryKind.DOCUMENTATION)),
		("guide.md", FileCategory(kind=CategoryKind.DOCUMENTATION)),
		("test_data.json", FileCategory(kind=CategoryKind.TEST)),
		("pom.xml", FileCategory(kind=CategoryKind.UNKNOWN)),
		(".gitignore", FileCategory(kind=CategoryKind.UNKNOWN)),
	],
)
def test_categorize_file(filename, expected):
	assert categorize_file(filename) == expected


def test_categorize_is_pure():
	names = ["lib.rs", "Cargo.toml", "README.md", "fixtures_test.txt", "blob.bin"]
	first = [categorize_file(n) for n in names]
	second = [categorize_file(n) for n in reversed(names)]
	assert first == list(reversed(second))
	assert [categorize_file(n) for n in names] == first


def test_analyzable_categories():
	assert categorize_file("lib.rs").is_analyzable
	assert categorize_file("Cargo.toml").is_analyzable
	assert categorize_file("README.md").is_analyzable
	assert not categorize_file("fixtures_test.txt").is_analyzable
	assert not categorize_file("logo.png").is_analyzable


def test_scan_repository(tmp_path):
	(tmp_path / "src").mkdir()
	(tmp_path / "src" / "lib.rs").write_text("pub struct A;\n")
	(tmp_path / "Cargo.toml").write_text("[package]\n")
	(tmp_path / "target").mkdir()
	(tmp_path / "target" / "out.rs").write_text("")

	files = scan_repository(str(tmp_path))
	assert [f.rel_path for f in files] == ["Cargo.toml", "src/lib.rs"]
	lib = files[1]
	assert lib.name == "lib.rs"
	assert lib.size == len("pub struct A;\n")
	assert lib.category.extension == "rs"
