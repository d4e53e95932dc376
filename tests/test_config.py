"""Tests for configuration loading."""

from proteus.config import Config, DEFAULT_IGNORED_DIRS


def test_config_defaults():
    """Defaults should not require any environment."""
    config = Config()

    assert config.max_file_size == 1_000_000
    assert config.scan_workers == 4
    assert config.respect_gitignore is True
    assert "node_modules" in config.ignored_dirs


def test_config_from_env_overrides(monkeypatch):
    """Environment variables should override defaults."""
    monkeypatch.setenv("MAX_FILE_SIZE", "2048")
    monkeypatch.setenv("SCAN_WORKERS", "8")
    monkeypatch.setenv("RESPECT_GITIGNORE", "false")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("IGNORED_DIRS", "coverage,.mypy_cache")

    config = Config.from_env()

    assert config.max_file_size == 2048
    assert config.scan_workers == 8
    assert config.respect_gitignore is False
    assert config.log_level == "DEBUG"

    # Ensure new ignored directories are appended to defaults
    assert set(DEFAULT_IGNORED_DIRS).issubset(set(config.ignored_dirs))
    assert ".mypy_cache" in config.ignored_dirs


def test_config_from_env_bad_integers_fall_back(monkeypatch):
    monkeypatch.setenv("MAX_FILE_SIZE", "lots")
    monkeypatch.setenv("SCAN_WORKERS", "0")

    config = Config.from_env()

    assert config.max_file_size == 1_000_000
    assert config.scan_workers == 1
