"""Naming-convention classification."""

import re
from pathlib import Path, PurePosixPath
from typing import Iterable, List

from ..models import FileNaming, Language, NamingConvention, NamingPatterns, CodeNaming
from ..scanner.structure import StructureScanner

# Share of the sample the winning convention must cover.
DOMINANCE_THRESHOLD = 0.6

# Checked in order; a name counts toward the first regex it matches.
CASING_PATTERNS = [
    (NamingConvention.CAMEL_CASE, re.compile(r"^[a-z][a-zA-Z0-9]*$")),
    (NamingConvention.PASCAL_CASE, re.compile(r"^[A-Z][a-zA-Z0-9]*$")),
    (NamingConvention.SNAKE_CASE, re.compile(r"^[a-z][a-z0-9_]*$")),
    (NamingConvention.KEBAB_CASE, re.compile(r"^[a-z][a-z0-9-]*$")),
    (NamingConvention.SCREAMING_SNAKE_CASE, re.compile(r"^[A-Z][A-Z0-9_]*$")),
]

COMPONENT_GLOBS = ["**/components/**/*.tsx", "**/components/**/*.jsx",
                   "**/Components/**/*.tsx", "**/Components/**/*.jsx"]
UTILITY_GLOBS = ["**/utils/**/*.ts", "**/utils/**/*.js", "**/lib/**/*.ts",
                 "**/lib/**/*.js", "**/helpers/**/*.ts", "**/helpers/**/*.js"]
TEST_GLOBS = [f"**/*.{kind}.{ext}" for kind in ("test", "spec") for ext in ("ts", "tsx", "js", "jsx")]


def classify_name(name: str) -> NamingConvention:
    """Classify a single identifier; MIXED when no casing regex matches."""
    for convention, pattern in CASING_PATTERNS:
        if pattern.match(name):
            return convention
    return NamingConvention.MIXED


def detect_naming_convention(samples: Iterable[str]) -> NamingConvention:
    """Classify the dominant casing convention of a set of file paths.

    The extension is stripped from each basename before matching. The most
    frequent convention wins only if it covers at least 60% of the sample.

    Args:
        samples: File paths (any depth)

    Returns:
        The dominant convention, or MIXED for an empty or split sample
    """
    samples = list(samples)
    if not samples:
        return NamingConvention.MIXED

    counts = {convention: 0 for convention, _ in CASING_PATTERNS}
    counts[NamingConvention.MIXED] = 0
    for sample in samples:
        stem = PurePosixPath(sample).name
        stem = re.sub(r"\.[^.]+$", "", stem)
        counts[classify_name(stem)] += 1

    dominant = NamingConvention.MIXED
    max_count = 0
    for convention, count in counts.items():
        if count > max_count:
            dominant, max_count = convention, count

    if max_count < len(samples) * DOMINANCE_THRESHOLD:
        return NamingConvention.MIXED
    return dominant


def _test_file_style(test_files: List[str], language: Language) -> str:
    ext = "ts" if language == Language.TYPESCRIPT else "js"
    has_spec = any(".spec." in f for f in test_files)
    has_test = any(".test." in f for f in test_files)
    return f"*.spec.{ext}" if has_spec and not has_test else f"*.test.{ext}"


def detect_naming_patterns(
    scanner: StructureScanner, repo_path: Path, language: Language
) -> NamingPatterns:
    """Derive file and code naming patterns for the primary language."""
    files = FileNaming()
    code = CodeNaming()

    if language in (Language.TYPESCRIPT, Language.JAVASCRIPT):
        component_files = scanner.collect_files(repo_path, COMPONENT_GLOBS)
        if component_files:
            files.components = detect_naming_convention(component_files)
            code.components = NamingConvention.PASCAL_CASE

        utility_files = scanner.collect_files(repo_path, UTILITY_GLOBS)
        if utility_files:
            files.utilities = detect_naming_convention(utility_files)

        test_files = scanner.collect_files(repo_path, TEST_GLOBS)
        if test_files:
            files.tests = _test_file_style(test_files, language)

        if language == Language.TYPESCRIPT:
            code.types = NamingConvention.PASCAL_CASE

    elif language == Language.GO:
        # Exported identifiers are PascalCase, unexported camelCase
        code.constants = NamingConvention.PASCAL_CASE
        files.utilities = NamingConvention.SNAKE_CASE

    elif language == Language.PYTHON:
        code.functions = NamingConvention.SNAKE_CASE
        code.variables = NamingConvention.SNAKE_CASE
        files.utilities = NamingConvention.SNAKE_CASE
        code.types = NamingConvention.PASCAL_CASE

    elif language == Language.RUST:
        code.functions = NamingConvention.SNAKE_CASE
        code.variables = NamingConvention.SNAKE_CASE
        files.utilities = NamingConvention.SNAKE_CASE
        code.types = NamingConvention.PASCAL_CASE

    elif language == Language.RUBY:
        code.functions = NamingConvention.SNAKE_CASE
        code.variables = NamingConvention.SNAKE_CASE
        files.utilities = NamingConvention.SNAKE_CASE

    return NamingPatterns(files=files, code=code)
