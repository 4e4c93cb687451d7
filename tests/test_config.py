from structscan.config import Settings


def test_defaults(monkeypatch):
	for name in (
		"GITHUB_TOKEN",
		"STRUCTSCAN_MAX_RETRIES",
		"STRUCTSCAN_MAX_FILE_SIZE",
		"STRUCTSCAN_CHUNK_SIZE",
		"STRUCTSCAN_OUTPUT_DIR",
		"STRUCTSCAN_CONCURRENCY",
		"STRUCTSCAN_BRANCHES",
	):
		monkeypatch.delenv(name, raising=False)
	settings = Settings.from_env(load_dotenv=False)
	assert settings.github_token is None
	assert settings.max_retries == 3
	assert settings.max_file_size == 1_000_000
	assert settings.chunk_size == 5
	assert settings.branches == ["main", "master"]


def test_environment_overrides(monkeypatch):
	monkeypatch.setenv("GITHUB_TOKEN", "abc")
	monkeypatch.setenv("STRUCTSCAN_MAX_RETRIES", "5")
	monkeypatch.setenv("STRUCTSCAN_CHUNK_SIZE", "10")
	monkeypatch.setenv("STRUCTSCAN_BRANCHES", "develop, main")
	settings = Settings.from_env(load_dotenv=False)
	assert settings.github_token == "abc"
	assert settings.max_retries == 5
	assert settings.chunk_size == 10
	assert settings.branches == ["develop", "main"]
