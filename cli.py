from __future__ import annotations

import argparse
import json
import logging
import os
import sys

import uvicorn

from structscan.config import Settings
from structscan.errors import AnalyzerError
from structscan.export import ProjectExporter
from structscan.file_analysis import analyze_content
from structscan.github_client import GithubClient
from structscan.repository import RepositoryAnalyzer, analyze_local, read_text
from structscan.summarize import summarize_project

logger = logging.getLogger("structscan.cli")


def cmd_analyze(args: argparse.Namespace) -> None:
	settings = Settings.from_env()
	root = os.path.abspath(args.path)
	if not os.path.isdir(root):
		logger.error("Not a directory: %s", root)
		sys.exit(2)
	summary = analyze_local(root, settings)

	if args.export:
		exporter = ProjectExporter(root, settings.output_dir, settings.chunk_size)
		exporter.write_summary(summary)
		for file_summary in summary.file_summaries:
			try:
				exporter.add_file(file_summary.path, read_text(file_summary.url))
			except (OSError, UnicodeDecodeError) as e:
				logger.warning("Failed to export %s: %s", file_summary.path, e)
		logger.info("Export written to %s", exporter.finish())

	print(json.dumps(summary.model_dump(mode="json"), indent=2))


def cmd_file(args: argparse.Namespace) -> None:
	text = read_text(args.path)
	result = analyze_content(text, args.path)
	print(json.dumps(result.model_dump(mode="json"), indent=2))


def cmd_github(args: argparse.Namespace) -> None:
	settings = Settings.from_env()
	if args.output:
		settings.output_dir = args.output
	client = GithubClient.from_settings(settings)
	analyzer = RepositoryAnalyzer(client, settings)

	for repo_url in args.repos:
		logger.info("Analyzing repository: %s", repo_url)
		try:
			summary = analyzer.analyze(repo_url)
		except (AnalyzerError, ValueError) as e:
			logger.error("Error analyzing %s: %s", repo_url, e)
			continue

		if not args.no_export:
			exporter = ProjectExporter(repo_url, settings.output_dir, settings.chunk_size)
			exporter.write_summary(summary)
			for file_summary in summary.file_summaries:
				try:
					exporter.add_file(file_summary.path, client.get_file_content(file_summary.url))
				except AnalyzerError as e:
					logger.warning("Failed to fetch %s: %s", file_summary.path, e)
			index_path = exporter.finish()
			logger.info("Export completed: %s", index_path)

		print(summarize_project(summary))


def cmd_serve(args: argparse.Namespace) -> None:
	uvicorn.run("api:app", host=args.host, port=args.port, reload=args.reload)


def main() -> None:
	parser = argparse.ArgumentParser(prog="structscan")
	parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
	sub = parser.add_subparsers(dest="cmd", required=True)

	pa = sub.add_parser("analyze", help="Analyze a local source tree and print summary JSON")
	pa.add_argument("path", help="Path to repository root")
	pa.add_argument("--export", action="store_true", help="Also write chunked export files")
	pa.set_defaults(func=cmd_analyze)

	pf = sub.add_parser("file", help="Analyze a single file and print result JSON")
	pf.add_argument("path", help="Path to source file")
	pf.set_defaults(func=cmd_file)

	pg = sub.add_parser("github", help="Analyze GitHub repositories and export them")
	pg.add_argument("repos", nargs="+", help="Repository URLs")
	pg.add_argument("--output", default=None, help="Output directory (default: STRUCTSCAN_OUTPUT_DIR or ./output)")
	pg.add_argument("--no-export", action="store_true", help="Skip writing chunk files")
	pg.set_defaults(func=cmd_github)

	ps = sub.add_parser("serve", help="Run FastAPI server")
	ps.add_argument("--host", default="127.0.0.1")
	ps.add_argument("--port", type=int, default=8000)
	ps.add_argument("--reload", action="store_true")
	ps.set_defaults(func=cmd_serve)

	args = parser.parse_args()
	logging.basicConfig(
		level=logging.DEBUG if args.verbose else logging.INFO,
		format="%(levelname)s %(name)s: %(message)s",
		stream=sys.stderr,
	)
	args.func(args)


if __name__ == "__main__":
	main()
