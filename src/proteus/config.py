"""Configuration management for Proteus."""

import os
from typing import Optional
from dotenv import load_dotenv
from pydantic import BaseModel, Field


load_dotenv()


DEFAULT_IGNORED_DIRS = [
    ".git",
    "node_modules",
    "__pycache__",
    ".venv",
    "venv",
    "dist",
    "build",
    ".pytest_cache",
    ".next",
    "target",
    "vendor",
    "coverage",
]


class Config(BaseModel):
    """Analysis configuration."""

    # Scanner Settings
    max_file_size: int = Field(default=1_000_000)  # 1MB
    ignored_dirs: list[str] = Field(default_factory=lambda: DEFAULT_IGNORED_DIRS.copy())
    respect_gitignore: bool = Field(default=True)

    # Workspace scanning
    scan_workers: int = Field(default=4, ge=1)

    # Logging
    log_level: str = Field(default="WARNING")

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        def _parse_int(value: Optional[str], fallback: int) -> int:
            try:
                return int(value) if value is not None else fallback
            except ValueError:
                return fallback

        def _parse_bool(value: Optional[str], fallback: bool) -> bool:
            if value is None:
                return fallback
            return value.strip().lower() in ("1", "true", "yes", "on")

        ignored_dirs = DEFAULT_IGNORED_DIRS.copy()
        extra_ignored = os.getenv("IGNORED_DIRS")
        if extra_ignored:
            ignored_dirs.extend(
                [entry.strip() for entry in extra_ignored.split(",") if entry.strip()]
            )

        return cls(
            max_file_size=_parse_int(os.getenv("MAX_FILE_SIZE"), 1_000_000),
            ignored_dirs=ignored_dirs,
            respect_gitignore=_parse_bool(os.getenv("RESPECT_GITIGNORE"), True),
            scan_workers=max(1, _parse_int(os.getenv("SCAN_WORKERS"), 4)),
            log_level=os.getenv("LOG_LEVEL", "WARNING").upper(),
        )
