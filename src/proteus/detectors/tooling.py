"""Test framework, package manager and auxiliary tooling lookups."""

import re
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from ..models import Language, PackageManager, TestFramework
from ..scanner.context import DetectorContext
from .languages import JS_FAMILY, merged_dependencies

PYTHON_MANIFESTS = ("requirements.txt", "requirements-dev.txt", "pyproject.toml", "Pipfile", "setup.py")
JAVA_MANIFESTS = ("pom.xml", "build.gradle", "build.gradle.kts")


def _manifest_text(ctx: DetectorContext, names: tuple[str, ...]) -> str:
    return "\n".join(filter(None, (ctx.read_text(name) for name in names)))


def _composer_dependencies(ctx: DetectorContext) -> dict:
    composer = ctx.read_json("composer.json") or {}
    deps: dict = {}
    for key in ("require", "require-dev"):
        section = composer.get(key)
        if isinstance(section, dict):
            deps.update(section)
    return deps


# ============================================
# Test framework
# ============================================

TestCheck = Callable[[DetectorContext], bool]

# language -> ordered (framework, check) pairs; first match wins
TEST_FRAMEWORK_CHECKS: dict[Language, List[tuple[TestFramework, TestCheck]]] = {
    Language.TYPESCRIPT: [
        (
            TestFramework.VITEST,
            lambda ctx: "vitest" in merged_dependencies(ctx)
            or ctx.has_any_file("vitest.config.ts", "vitest.config.js", "vitest.config.mts"),
        ),
        (
            TestFramework.JEST,
            lambda ctx: "jest" in merged_dependencies(ctx)
            or ctx.has_any_file("jest.config.js", "jest.config.ts", "jest.config.mjs", "jest.config.cjs"),
        ),
        (
            TestFramework.MOCHA,
            lambda ctx: "mocha" in merged_dependencies(ctx)
            or ctx.has_any_file(".mocharc.json", ".mocharc.js", ".mocharc.yml"),
        ),
    ],
    Language.PYTHON: [
        (
            TestFramework.PYTEST,
            lambda ctx: "pytest" in _manifest_text(ctx, PYTHON_MANIFESTS).lower()
            or ctx.has_any_file("pytest.ini", "conftest.py"),
        ),
    ],
    Language.GO: [(TestFramework.GO_TEST, lambda ctx: True)],
    Language.RUST: [(TestFramework.CARGO_TEST, lambda ctx: True)],
    Language.RUBY: [
        (
            TestFramework.RSPEC,
            lambda ctx: "rspec" in (ctx.read_text("Gemfile") or "") or ctx.has_file(".rspec"),
        ),
    ],
    Language.JAVA: [
        (TestFramework.JUNIT, lambda ctx: "junit" in _manifest_text(ctx, JAVA_MANIFESTS).lower()),
    ],
    Language.PHP: [
        (
            TestFramework.PHPUNIT,
            lambda ctx: "phpunit/phpunit" in _composer_dependencies(ctx)
            or ctx.has_any_file("phpunit.xml", "phpunit.xml.dist"),
        ),
    ],
}
TEST_FRAMEWORK_CHECKS[Language.JAVASCRIPT] = TEST_FRAMEWORK_CHECKS[Language.TYPESCRIPT]


def detect_test_framework(ctx: DetectorContext, language: Language) -> TestFramework:
    """Return the first test framework whose check passes for the language."""
    for framework, check in TEST_FRAMEWORK_CHECKS.get(language, []):
        if check(ctx):
            return framework
    return TestFramework.UNKNOWN


# ============================================
# Package manager
# ============================================

# language -> (ordered lockfile rows, default)
PACKAGE_MANAGER_LOCKFILES: dict[Language, tuple[List[tuple[tuple[str, ...], PackageManager]], PackageManager]] = {
    Language.TYPESCRIPT: (
        [
            (("bun.lockb", "bun.lock"), PackageManager.BUN),
            (("pnpm-lock.yaml",), PackageManager.PNPM),
            (("yarn.lock",), PackageManager.YARN),
            (("package-lock.json",), PackageManager.NPM),
        ],
        PackageManager.NPM,
    ),
    Language.PYTHON: (
        [
            (("uv.lock",), PackageManager.UV),
            (("poetry.lock",), PackageManager.POETRY),
            (("Pipfile.lock",), PackageManager.PIPENV),
        ],
        PackageManager.PIP,
    ),
    Language.GO: ([], PackageManager.GO_MODULES),
    Language.RUST: ([], PackageManager.CARGO),
    Language.RUBY: ([], PackageManager.BUNDLER),
    Language.JAVA: ([(("pom.xml",), PackageManager.MAVEN)], PackageManager.GRADLE),
    Language.PHP: ([], PackageManager.COMPOSER),
}
PACKAGE_MANAGER_LOCKFILES[Language.JAVASCRIPT] = PACKAGE_MANAGER_LOCKFILES[Language.TYPESCRIPT]


def detect_package_manager(ctx: DetectorContext, language: Language) -> PackageManager:
    """Lockfile-specific tool first, then the language default."""
    if language not in PACKAGE_MANAGER_LOCKFILES:
        return PackageManager.UNKNOWN

    rows, default = PACKAGE_MANAGER_LOCKFILES[language]
    for lockfiles, manager in rows:
        if ctx.has_any_file(*lockfiles):
            return manager
    return default


# ============================================
# Additional tooling
# ============================================


@dataclass(frozen=True)
class ToolRule:
    """Dependency keys, files or directories that reveal an auxiliary tool."""

    name: str
    packages: tuple[str, ...] = ()
    files: tuple[str, ...] = ()
    file_prefixes: tuple[str, ...] = ()
    file_suffixes: tuple[str, ...] = ()
    dirs: tuple[str, ...] = ()


@dataclass
class AdditionalTools:
    styling: Optional[str] = None
    database: Optional[str] = None
    tools: List[str] = field(default_factory=list)


JS_STYLING_RULES = [
    ToolRule("Tailwind CSS", packages=("tailwindcss",), files=("tailwind.config.js", "tailwind.config.ts")),
    ToolRule("styled-components", packages=("styled-components",)),
    ToolRule("Emotion", packages=("@emotion/react",)),
    ToolRule("CSS Modules", file_suffixes=(".module.css", ".module.scss")),
]

JS_DATABASE_RULES = [
    ToolRule("Prisma", packages=("prisma", "@prisma/client")),
    ToolRule("Drizzle", packages=("drizzle", "drizzle-orm")),
]

JS_TOOL_RULES = [
    # State management
    ToolRule("Zustand", packages=("zustand",)),
    ToolRule("Redux", packages=("@reduxjs/toolkit", "redux")),
    ToolRule("Jotai", packages=("jotai",)),
    ToolRule("Recoil", packages=("recoil",)),
    # Data fetching
    ToolRule("React Query", packages=("@tanstack/react-query",)),
    ToolRule("SWR", packages=("swr",)),
    ToolRule("Axios", packages=("axios",)),
    # Validation
    ToolRule("Zod", packages=("zod",)),
    ToolRule("Yup", packages=("yup",)),
    # Linting / formatting
    ToolRule("ESLint", packages=("eslint",), file_prefixes=(".eslintrc", "eslint.config")),
    ToolRule("Prettier", packages=("prettier",), files=(".prettierrc", "prettier.config.js")),
    ToolRule("Biome", packages=("biome", "@biomejs/biome"), files=("biome.json",)),
]

PYTHON_DATABASE_RULES = [
    ToolRule("SQLAlchemy", packages=("sqlalchemy",)),
    ToolRule("Django ORM", packages=("django",)),
    ToolRule("Tortoise ORM", packages=("tortoise-orm",)),
]

PYTHON_TOOL_RULES = [
    ToolRule("Alembic", packages=("alembic",)),
    ToolRule("Pydantic", packages=("pydantic",)),
    ToolRule("Celery", packages=("celery",)),
    ToolRule("Ruff", packages=("ruff",), files=("ruff.toml", ".ruff.toml")),
    ToolRule("Black", packages=("black",)),
    ToolRule("mypy", packages=("mypy",), files=("mypy.ini",)),
]

# Apply to any language
GENERIC_TOOL_RULES = [
    ToolRule("Docker", files=("Dockerfile", "docker-compose.yml", "docker-compose.yaml", "compose.yaml")),
    ToolRule("GitHub Actions", dirs=(".github",)),
]


def _rule_matches(ctx: DetectorContext, rule: ToolRule, has_package: Callable[[str], bool]) -> bool:
    if any(has_package(package) for package in rule.packages):
        return True
    if ctx.has_any_file(*rule.files):
        return True
    if any(ctx.has_dir(name) for name in rule.dirs):
        return True
    for name in ctx.files:
        if rule.file_prefixes and name.startswith(rule.file_prefixes):
            return True
        if rule.file_suffixes and name.endswith(rule.file_suffixes):
            return True
    return False


def _first_match(ctx: DetectorContext, rules: List[ToolRule], has_package) -> Optional[str]:
    return next((rule.name for rule in rules if _rule_matches(ctx, rule, has_package)), None)


def detect_additional_tools(ctx: DetectorContext, language: Language) -> AdditionalTools:
    """Scan dependency maps and config files for auxiliary libraries.

    Styling and database take the first matching row; tools collects every
    matching row in table order.
    """
    result = AdditionalTools()

    if language in JS_FAMILY:
        deps = merged_dependencies(ctx)
        has_package = deps.__contains__
        result.styling = _first_match(ctx, JS_STYLING_RULES, has_package)
        result.database = _first_match(ctx, JS_DATABASE_RULES, has_package)
        result.tools.extend(
            rule.name for rule in JS_DATABASE_RULES + JS_TOOL_RULES if _rule_matches(ctx, rule, has_package)
        )

    elif language == Language.PYTHON:
        text = _manifest_text(ctx, PYTHON_MANIFESTS).lower()

        def has_package(package: str) -> bool:
            return re.search(rf"(?<![\w\-]){re.escape(package)}(?![\w\-])", text) is not None

        result.database = _first_match(ctx, PYTHON_DATABASE_RULES, has_package)
        result.tools.extend(
            rule.name for rule in PYTHON_TOOL_RULES if _rule_matches(ctx, rule, has_package)
        )

    result.tools.extend(
        rule.name for rule in GENERIC_TOOL_RULES if _rule_matches(ctx, rule, lambda package: False)
    )
    return result
