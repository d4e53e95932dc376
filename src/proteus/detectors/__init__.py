"""Detectors that turn a file tree into analysis values."""

from .commands import detect_commands
from .documents import detect_project_documents, parse_claude_md, parse_readme
from .frameworks import detect_frameworks, select_primary_framework
from .languages import detect_languages
from .monorepo import detect_monorepo
from .naming import detect_naming_convention
from .patterns import detect_patterns
from .stack import detect_stack
from .tooling import detect_additional_tools, detect_package_manager, detect_test_framework

__all__ = [
    "detect_additional_tools",
    "detect_commands",
    "detect_frameworks",
    "detect_languages",
    "detect_monorepo",
    "detect_naming_convention",
    "detect_package_manager",
    "detect_patterns",
    "detect_project_documents",
    "detect_stack",
    "detect_test_framework",
    "parse_claude_md",
    "parse_readme",
    "select_primary_framework",
]
