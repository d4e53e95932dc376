"""Pytest configuration and shared fixtures."""

import json
import pytest
from pathlib import Path
from proteus.config import Config


def write_files(root: Path, files: dict) -> Path:
    """Write a {relative path: content} mapping under root.

    Dict and list contents are serialized as JSON; a trailing "/" creates an
    empty directory.
    """
    root.mkdir(parents=True, exist_ok=True)
    for rel_path, content in files.items():
        target = root / rel_path
        if rel_path.endswith("/"):
            target.mkdir(parents=True, exist_ok=True)
            continue
        target.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, (dict, list)):
            content = json.dumps(content)
        target.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def make_repo(tmp_path: Path):
    """Factory fixture building a repository from a file mapping."""
    def _make(files: dict, name: str = "test_repo") -> Path:
        return write_files(tmp_path / name, files)
    return _make


@pytest.fixture
def temp_repo(tmp_path: Path) -> Path:
    """Create a temporary repository structure for testing."""
    repo = tmp_path / "test_repo"
    repo.mkdir()

    # Create sample files
    (repo / "README.md").write_text("# Test Project")
    (repo / "main.py").write_text("print('hello')")

    return repo


@pytest.fixture
def config() -> Config:
    """Provide a test configuration."""
    return Config(scan_workers=2)
