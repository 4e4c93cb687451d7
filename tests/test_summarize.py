from textwrap import dedent

from structscan.model import (
	ProjectSummary,
	RepositoryStructure,
	TypeRelation,
)
from structscan.summarize import generate_summary, summarize_project


def test_empty_file_has_empty_summary():
	assert generate_summary("") == ""


def test_lines_are_grouped_by_rule():
	code = "use std::fmt;\npub struct A;\nfn helper() {}\npub fn run() {}\npub struct B;\n/// doc\n"
	assert generate_summary(code) == (
		"File start:\n"
		"use std::fmt;\n"
		"pub struct A;\n"
		"fn helper() {}\n"
		"pub fn run() {}\n"
		"pub struct B;\n"
		"Documentation: /// doc\n"
		"Public method: pub fn run() {}\n"
		"Private method: fn helper() {}\n"
		"Public struct: pub struct A;\n"
		"Public struct: pub struct B;\n"
	)


def test_indented_members_are_not_reported():
	code = dedent(
		"""\
		impl Widget {
		    pub fn draw(&self) {}
		}
		"""
	)
	summary = generate_summary(code)
	assert "Implementation: impl Widget {" in summary
	assert "Public method" not in summary


def test_toml_sections():
	code = '[package]\nname = "demo"\n\n[dependencies]\nserde = "1"\n'
	summary = generate_summary(code)
	lines = summary.splitlines()
	assert lines[-2:] == ["Section: [package]", "Section: [dependencies]"]


def test_only_first_five_lines_are_copied():
	code = "\n".join(f"line {i}" for i in range(10))
	assert generate_summary(code).splitlines() == ["File start:"] + [f"line {i}" for i in range(5)]


def test_form_feed_does_not_break_a_line():
	code = "#[derive(Debug)]\x0cpub struct P;\nstruct Q;\n"
	assert generate_summary(code) == "File start:\n#[derive(Debug)]\x0cpub struct P;\nstruct Q;\n"


def test_crlf_line_endings():
	code = "pub struct A;\r\nfn helper() {}\r\n"
	assert generate_summary(code) == (
		"File start:\n"
		"pub struct A;\n"
		"fn helper() {}\n"
		"Private method: fn helper() {}\n"
		"Public struct: pub struct A;\n"
	)


def test_summarize_project():
	summary = ProjectSummary(
		repo_url="https://github.com/acme/geo",
		total_files=3,
		repository_structure=RepositoryStructure(
			branch_analyzed="main",
			primary_language="rs",
			build_systems=["Rust/Cargo"],
		),
	)
	summary.project_overview.total_rust_files = 2
	summary.project_overview.type_relations.append(
		TypeRelation(type_name="Canvas", implemented_traits=["Debug"], depends_on=["Point"])
	)
	text = summarize_project(summary)
	assert text.splitlines()[0] == "Repository https://github.com/acme/geo (main): 3 files analyzed"
	assert "  Build systems: Rust/Cargo" in text
	assert "  Canvas implements Debug; depends on Point" in text
