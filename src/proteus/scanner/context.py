"""Filesystem probe bound to a single directory.

Every detector receives a ``DetectorContext``. Reads never raise: a missing,
oversized, unreadable or malformed file resolves to ``None``.
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DEFAULT_MAX_FILE_SIZE = 1_000_000


class DetectorContext:
    """Read-only view of one directory's immediate entries.

    Usage:
        ctx = DetectorContext(repo_path)
        if ctx.has_file("package.json"):
            pkg = ctx.read_json("package.json")
    """

    def __init__(self, path: str | Path, max_file_size: int = DEFAULT_MAX_FILE_SIZE):
        """Bind the probe to a directory and snapshot its entries.

        Args:
            path: Directory to probe
            max_file_size: Files larger than this many bytes read as absent

        Raises:
            ValueError: If path is not a directory
        """
        self._path = Path(path).resolve()
        self._max_file_size = max_file_size

        if not self._path.is_dir():
            raise ValueError(f"Not a directory: {path}")

        files: list[str] = []
        dirs: list[str] = []
        try:
            entries = sorted(self._path.iterdir(), key=lambda p: p.name)
        except OSError:
            logger.debug("Cannot list %s", self._path)
            entries = []

        for entry in entries:
            try:
                if entry.is_dir():
                    dirs.append(entry.name)
                elif entry.is_file():
                    files.append(entry.name)
            except OSError:
                continue

        self._files = tuple(files)
        self._dirs = tuple(dirs)

    @property
    def path(self) -> Path:
        """Absolute directory this probe is bound to."""
        return self._path

    @property
    def files(self) -> tuple[str, ...]:
        return self._files

    @property
    def dirs(self) -> tuple[str, ...]:
        return self._dirs

    def has_file(self, name: str) -> bool:
        return name in self._files

    def has_dir(self, name: str) -> bool:
        return name in self._dirs

    def has_any_file(self, *names: str) -> bool:
        return any(name in self._files for name in names)

    def is_dir(self, relative_path: str) -> bool:
        """Check whether a nested path exists as a directory inside this root."""
        full_path = self._resolve_safe_path(relative_path)
        if full_path is None:
            return False
        try:
            return full_path.is_dir()
        except OSError:
            return False

    def is_file(self, relative_path: str) -> bool:
        full_path = self._resolve_safe_path(relative_path)
        if full_path is None:
            return False
        try:
            return full_path.is_file()
        except OSError:
            return False

    def list_dirs(self, relative_path: str) -> list[str]:
        """List visible subdirectory names of a nested path, sorted by name."""
        full_path = self._resolve_safe_path(relative_path)
        if full_path is None:
            return []
        try:
            return sorted(
                entry.name
                for entry in full_path.iterdir()
                if entry.is_dir() and not entry.name.startswith(".")
            )
        except OSError:
            return []

    def list_files(self, relative_path: str, suffix: str = "") -> list[str]:
        """List file names of a nested path, optionally filtered by suffix."""
        full_path = self._resolve_safe_path(relative_path)
        if full_path is None:
            return []
        try:
            return sorted(
                entry.name
                for entry in full_path.iterdir()
                if entry.is_file() and entry.name.endswith(suffix)
            )
        except OSError:
            return []

    def child(self, relative_path: str) -> DetectorContext:
        """Create a probe bound to a subdirectory.

        Raises:
            ValueError: If the subdirectory does not exist or escapes the root
        """
        full_path = self._resolve_safe_path(relative_path)
        if full_path is None:
            raise ValueError(f"Path escapes probe root: {relative_path}")
        return DetectorContext(full_path, self._max_file_size)

    def read_text(self, name: str) -> str | None:
        """Read a UTF-8 text file relative to the root, or None."""
        full_path = self._resolve_safe_path(name)
        if full_path is None:
            return None

        try:
            if not full_path.is_file():
                return None
            if full_path.stat().st_size > self._max_file_size:
                logger.debug("Skipping oversized file %s", full_path)
                return None
            return full_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            logger.debug("Unreadable file %s", full_path)
            return None

    def read_json(self, name: str) -> dict[str, Any] | None:
        """Read a JSON object; anything other than an object reads as None."""
        content = self.read_text(name)
        if content is None:
            return None
        try:
            data = json.loads(content)
        except json.JSONDecodeError:
            logger.debug("Malformed JSON in %s", name)
            return None
        return data if isinstance(data, dict) else None

    def read_toml(self, name: str) -> dict[str, Any] | None:
        content = self.read_text(name)
        if content is None:
            return None
        try:
            return tomllib.loads(content)
        except tomllib.TOMLDecodeError:
            logger.debug("Malformed TOML in %s", name)
            return None

    def read_yaml(self, name: str) -> Any:
        content = self.read_text(name)
        if content is None:
            return None
        try:
            return yaml.safe_load(content)
        except yaml.YAMLError:
            logger.debug("Malformed YAML in %s", name)
            return None

    def _resolve_safe_path(self, path: str) -> Path | None:
        """Resolve a relative path, refusing anything outside the root."""
        try:
            full_path = (self._path / path).resolve()
            full_path.relative_to(self._path)
        except (OSError, ValueError):
            return None
        return full_path
