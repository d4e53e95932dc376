"""Ignore-aware directory and file walking."""

import os
from pathlib import Path
from typing import Iterable, List, Set
from pathspec import PathSpec
from pathspec.patterns.gitwildmatch import GitWildMatchPattern
from ..config import Config


class StructureScanner:
    """Walks a project tree, skipping ignored directories and .gitignore matches."""

    def __init__(self, config: Config):
        """Initialize scanner with configuration.

        Args:
            config: Configuration with ignored_dirs and respect_gitignore
        """
        self.config = config
        self.ignored_dirs: Set[str] = set(config.ignored_dirs)

    def collect_files(self, repo_path: Path, patterns: Iterable[str] | None = None) -> List[str]:
        """Collect relative file paths, optionally filtered by glob patterns.

        Args:
            repo_path: Directory to walk
            patterns: Gitignore-style globs (e.g. ``**/components/**/*.tsx``)

        Returns:
            Sorted list of POSIX paths relative to repo_path
        """
        gitignore_spec = self._load_gitignore(repo_path)
        match_spec = PathSpec.from_lines(GitWildMatchPattern, patterns) if patterns else None
        files: List[str] = []

        for root, dirs, filenames in os.walk(repo_path):
            root_path = Path(root)

            # Prune directories before descending further
            dirs[:] = [
                directory
                for directory in dirs
                if not self._should_ignore(root_path / directory, repo_path, gitignore_spec)
            ]

            for filename in filenames:
                file_path = root_path / filename
                if self._should_ignore(file_path, repo_path, gitignore_spec):
                    continue
                rel_path = file_path.relative_to(repo_path).as_posix()
                if match_spec is None or match_spec.match_file(rel_path):
                    files.append(rel_path)

        return sorted(files)

    def collect_directories(
        self, repo_path: Path, base: str = ".", max_depth: int = 2
    ) -> List[str]:
        """List directories below a base directory up to max_depth levels.

        Args:
            repo_path: Repository root (ignore rules are evaluated against it)
            base: Directory to list, relative to repo_path
            max_depth: Number of levels to descend (1 = immediate children)

        Returns:
            POSIX paths relative to base, shallow ones first, then by name
        """
        base_path = repo_path / base
        if not base_path.is_dir():
            return []

        gitignore_spec = self._load_gitignore(repo_path)
        found: List[str] = []
        frontier = [base_path]

        for _ in range(max_depth):
            next_frontier = []
            for current in frontier:
                try:
                    children = sorted(p for p in current.iterdir() if p.is_dir())
                except OSError:
                    continue  # Skip directories we can't access
                for child in children:
                    if self._should_ignore(child, repo_path, gitignore_spec):
                        continue
                    found.append(child.relative_to(base_path).as_posix())
                    next_frontier.append(child)
            frontier = next_frontier

        return found

    def _should_ignore(
        self, path: Path, repo_root: Path, gitignore_spec: PathSpec | None = None
    ) -> bool:
        """Check if path should be ignored.

        Args:
            path: Path to check
            repo_root: Repository root

        Returns:
            True if path should be ignored
        """
        rel_path = path.relative_to(repo_root)
        for part in rel_path.parts:
            if part in self.ignored_dirs:
                return True

        if gitignore_spec:
            candidate = rel_path.as_posix()
            if path.is_dir():
                candidate += "/"
            if gitignore_spec.match_file(candidate):
                return True

        if path.is_file():
            try:
                if path.stat().st_size > self.config.max_file_size:
                    return True
            except OSError:
                return True

        return False

    def _load_gitignore(self, repo_root: Path) -> PathSpec | None:
        """Load .gitignore patterns if present."""
        if not self.config.respect_gitignore:
            return None

        gitignore_path = repo_root / ".gitignore"
        if not gitignore_path.exists():
            return None

        try:
            patterns = gitignore_path.read_text().splitlines()
        except OSError:
            return None

        if not patterns:
            return None

        return PathSpec.from_lines(GitWildMatchPattern, patterns)
