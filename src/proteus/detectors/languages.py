"""Language detection from marker files."""

import re
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..models import Language
from ..scanner.context import DetectorContext

JS_FAMILY = (Language.TYPESCRIPT, Language.JAVASCRIPT)

_RANGE_PREFIX = re.compile(r"^[\s^~>=<v]+")


@dataclass(frozen=True)
class LanguageInfo:
    language: Language
    version: Optional[str] = None


def clean_version(raw: Optional[str]) -> Optional[str]:
    """Strip range operators from a version spec ("^5.3.0" -> "5.3.0")."""
    if not raw or not isinstance(raw, str):
        return None
    first = raw.split(",")[0].split("||")[0].strip()
    cleaned = _RANGE_PREFIX.sub("", first).strip()
    return cleaned or None


def merged_dependencies(ctx: DetectorContext) -> dict[str, str]:
    """Declared plus dev dependencies from package.json (dev wins on clashes)."""
    pkg = ctx.read_json("package.json") or {}
    deps: dict[str, str] = {}
    for key in ("dependencies", "devDependencies"):
        section = pkg.get(key)
        if isinstance(section, dict):
            deps.update({name: str(spec) for name, spec in section.items()})
    return deps


def _search(ctx: DetectorContext, name: str, pattern: str) -> Optional[str]:
    content = ctx.read_text(name)
    if content is None:
        return None
    match = re.search(pattern, content, re.MULTILINE)
    return match.group(1).strip() if match else None


# Version extractors, one per language

def _typescript_version(ctx: DetectorContext) -> Optional[str]:
    return clean_version(merged_dependencies(ctx).get("typescript"))


def _go_version(ctx: DetectorContext) -> Optional[str]:
    return _search(ctx, "go.mod", r"^go\s+(\d+\.\d+(?:\.\d+)?)")


def _python_version(ctx: DetectorContext) -> Optional[str]:
    pinned = ctx.read_text(".python-version")
    if pinned and pinned.strip():
        return pinned.strip().splitlines()[0].strip()
    return clean_version(
        _search(ctx, "pyproject.toml", r"""^requires-python\s*=\s*["']([^"']+)["']""")
    )


def _rust_version(ctx: DetectorContext) -> Optional[str]:
    return _search(ctx, "Cargo.toml", r"""^rust-version\s*=\s*["']([^"']+)["']""")


def _ruby_version(ctx: DetectorContext) -> Optional[str]:
    version = _search(ctx, "Gemfile", r"""^ruby\s+["']([^"']+)["']""")
    if version:
        return clean_version(version)
    pinned = ctx.read_text(".ruby-version")
    return pinned.strip() if pinned and pinned.strip() else None


def _java_version(ctx: DetectorContext) -> Optional[str]:
    version = _search(
        ctx, "pom.xml", r"<(?:java\.version|maven\.compiler\.source|maven\.compiler\.release)>\s*([^<\s]+)"
    )
    if version:
        return version
    for gradle_file in ("build.gradle", "build.gradle.kts"):
        version = _search(
            ctx,
            gradle_file,
            r"""sourceCompatibility\s*=\s*(?:JavaVersion\.VERSION_)?["']?([\d_.]+)""",
        )
        if version:
            return version.replace("_", ".")
    return None


def _php_version(ctx: DetectorContext) -> Optional[str]:
    composer = ctx.read_json("composer.json") or {}
    require = composer.get("require")
    if isinstance(require, dict):
        return clean_version(require.get("php"))
    return None


@dataclass(frozen=True)
class LanguageMarker:
    """One row of the ordered marker table: predicate plus version extractor."""

    language: Language
    matches: Callable[[DetectorContext], bool]
    version: Callable[[DetectorContext], Optional[str]]


# Evaluated top to bottom; every matching row contributes one entry.
# The JavaScript row only matches without tsconfig.json, so a directory yields
# at most one JavaScript-family entry.
LANGUAGE_MARKERS: List[LanguageMarker] = [
    LanguageMarker(
        Language.TYPESCRIPT,
        lambda ctx: ctx.has_file("tsconfig.json"),
        _typescript_version,
    ),
    LanguageMarker(
        Language.JAVASCRIPT,
        lambda ctx: ctx.has_file("package.json") and not ctx.has_file("tsconfig.json"),
        lambda ctx: None,
    ),
    LanguageMarker(Language.GO, lambda ctx: ctx.has_file("go.mod"), _go_version),
    LanguageMarker(
        Language.PYTHON,
        lambda ctx: ctx.has_any_file("pyproject.toml", "requirements.txt", "setup.py"),
        _python_version,
    ),
    LanguageMarker(Language.RUST, lambda ctx: ctx.has_file("Cargo.toml"), _rust_version),
    LanguageMarker(Language.RUBY, lambda ctx: ctx.has_file("Gemfile"), _ruby_version),
    LanguageMarker(
        Language.JAVA,
        lambda ctx: ctx.has_any_file("pom.xml", "build.gradle", "build.gradle.kts"),
        _java_version,
    ),
    LanguageMarker(Language.PHP, lambda ctx: ctx.has_file("composer.json"), _php_version),
]


def detect_languages(ctx: DetectorContext) -> List[LanguageInfo]:
    """Detect every language whose marker file is present.

    Args:
        ctx: Probe bound to the directory to inspect

    Returns:
        Ordered list of languages; ``[LanguageInfo(Language.UNKNOWN)]`` when
        nothing matches
    """
    detected = [
        LanguageInfo(marker.language, marker.version(ctx))
        for marker in LANGUAGE_MARKERS
        if marker.matches(ctx)
    ]
    return detected or [LanguageInfo(Language.UNKNOWN)]
