from __future__ import annotations

import os

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from structscan.config import Settings
from structscan.errors import AnalyzerError, RateLimitError
from structscan.file_analysis import analyze_content
from structscan.model import FileAnalysisResult, ProjectSummary
from structscan.repository import RepositoryAnalyzer, analyze_local


app = FastAPI(title="Structscan Analyzer")


class AnalyzeRequest(BaseModel):
	root_path: str


class AnalyzeFileRequest(BaseModel):
	path: str
	content: str


class AnalyzeGithubRequest(BaseModel):
	repo_url: str


@app.post("/analyze", response_model=ProjectSummary)
def analyze(req: AnalyzeRequest) -> ProjectSummary:
	root = os.path.abspath(req.root_path)
	if not os.path.isdir(root):
		raise HTTPException(status_code=400, detail=f"Invalid root_path: {root}")
	return analyze_local(root, Settings.from_env())


@app.post("/analyze/file", response_model=FileAnalysisResult)
def analyze_file(req: AnalyzeFileRequest) -> FileAnalysisResult:
	return analyze_content(req.content, req.path)


@app.post("/analyze/github", response_model=ProjectSummary)
def analyze_github(req: AnalyzeGithubRequest) -> ProjectSummary:
	analyzer = RepositoryAnalyzer(settings=Settings.from_env())
	try:
		return analyzer.analyze(req.repo_url)
	except ValueError as e:
		raise HTTPException(status_code=400, detail=str(e))
	except RateLimitError as e:
		raise HTTPException(status_code=429, detail=str(e))
	except AnalyzerError as e:
		raise HTTPException(status_code=502, detail=str(e))


def create_app() -> FastAPI:
	return app
