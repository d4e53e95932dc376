"""Framework detection from manifest dependencies."""

import re
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..models import Framework, Language
from ..scanner.context import DetectorContext
from .languages import JS_FAMILY, LanguageInfo, clean_version, merged_dependencies

# Server and full-stack frameworks. When several frameworks are detected, the
# first of these (in detection order) is treated as the primary one.
APP_FRAMEWORKS = (
    Framework.RAILS,
    Framework.DJANGO,
    Framework.FLASK,
    Framework.FASTAPI,
    Framework.GIN,
    Framework.ECHO,
    Framework.FIBER,
    Framework.NESTJS,
    Framework.ACTIX,
    Framework.AXUM,
    Framework.SPRING,
    Framework.LARAVEL,
)


@dataclass(frozen=True)
class FrameworkInfo:
    framework: Framework
    language: Language
    version: Optional[str] = None


@dataclass(frozen=True)
class DependencyRule:
    """package.json dependency key -> framework."""

    framework: Framework
    package: str
    unless: tuple[str, ...] = ()


@dataclass(frozen=True)
class TextRule:
    """Regex over manifest text -> framework. Group 1, if any, is the version."""

    framework: Framework
    pattern: str


JS_RULES: List[DependencyRule] = [
    DependencyRule(Framework.NEXTJS, "next"),
    DependencyRule(Framework.REACT, "react", unless=("next",)),
    DependencyRule(Framework.VUE, "vue"),
    DependencyRule(Framework.ANGULAR, "@angular/core"),
    DependencyRule(Framework.SVELTE, "svelte"),
    DependencyRule(Framework.NESTJS, "@nestjs/core"),
    DependencyRule(Framework.EXPRESS, "express"),
    DependencyRule(Framework.FASTIFY, "fastify"),
]

PHP_RULES: List[DependencyRule] = [
    DependencyRule(Framework.LARAVEL, "laravel/framework"),
]

# language -> (manifest files whose text is scanned, rules)
TEXT_RULES: dict[Language, tuple[tuple[str, ...], List[TextRule]]] = {
    Language.GO: (
        ("go.mod",),
        [
            TextRule(Framework.GIN, r"github\.com/gin-gonic/gin(?:\s+v([\w.\-]+))?"),
            TextRule(Framework.ECHO, r"github\.com/labstack/echo(?:/v\d+)?(?:\s+v([\w.\-]+))?"),
            TextRule(Framework.FIBER, r"github\.com/gofiber/fiber(?:/v\d+)?(?:\s+v([\w.\-]+))?"),
        ],
    ),
    Language.PYTHON: (
        ("requirements.txt", "pyproject.toml", "Pipfile", "setup.py"),
        [
            TextRule(Framework.DJANGO, r"(?i)\bdjango\b(?:\s*[=~>]=\s*([\d.]+))?"),
            TextRule(Framework.FASTAPI, r"(?i)\bfastapi\b(?:\s*[=~>]=\s*([\d.]+))?"),
            TextRule(Framework.FLASK, r"(?i)\bflask\b(?:\s*[=~>]=\s*([\d.]+))?"),
        ],
    ),
    Language.RUBY: (
        ("Gemfile",),
        [
            TextRule(Framework.RAILS, r"""gem\s+["']rails["'](?:\s*,\s*["'][~>=\s]*([\d.]+)["'])?"""),
        ],
    ),
    Language.RUST: (
        ("Cargo.toml",),
        [
            TextRule(Framework.ACTIX, r"""actix-web\s*=\s*(?:["']([\d.]+)["']|\{)"""),
            TextRule(Framework.AXUM, r"""\baxum\s*=\s*(?:["']([\d.]+)["']|\{)"""),
        ],
    ),
    Language.JAVA: (
        ("pom.xml", "build.gradle", "build.gradle.kts"),
        [
            TextRule(
                Framework.SPRING,
                r"""(?:spring-boot|org\.springframework\.boot)(?:["']\s+version\s+["']([\d.]+))?""",
            ),
        ],
    ),
}


def _apply_dependency_rules(
    deps: dict[str, str], rules: Sequence[DependencyRule], language: Language
) -> List[FrameworkInfo]:
    detected = []
    for rule in rules:
        if rule.package in deps and not any(key in deps for key in rule.unless):
            detected.append(
                FrameworkInfo(rule.framework, language, clean_version(deps[rule.package]))
            )
    return detected


def _apply_text_rules(ctx: DetectorContext, language: Language) -> List[FrameworkInfo]:
    manifests, rules = TEXT_RULES[language]
    content = "\n".join(filter(None, (ctx.read_text(name) for name in manifests)))
    if not content:
        return []

    detected = []
    for rule in rules:
        match = re.search(rule.pattern, content)
        if match:
            version = match.group(1) if match.groups() else None
            detected.append(FrameworkInfo(rule.framework, language, version))
    return detected


def detect_frameworks(ctx: DetectorContext, languages: Sequence[LanguageInfo]) -> List[FrameworkInfo]:
    """Detect frameworks for each detected language.

    Multiple matches for one language are all kept, in table order.

    Args:
        ctx: Probe bound to the directory to inspect
        languages: Output of ``detect_languages`` for the same directory

    Returns:
        Detected frameworks, possibly empty
    """
    present = [info.language for info in languages]
    detected: List[FrameworkInfo] = []

    js_language = next((lang for lang in present if lang in JS_FAMILY), None)
    if js_language is not None:
        detected.extend(_apply_dependency_rules(merged_dependencies(ctx), JS_RULES, js_language))

    for language in (Language.GO, Language.PYTHON, Language.RUBY, Language.RUST, Language.JAVA):
        if language in present:
            detected.extend(_apply_text_rules(ctx, language))

    if Language.PHP in present:
        composer = ctx.read_json("composer.json") or {}
        require = composer.get("require")
        if isinstance(require, dict):
            detected.extend(_apply_dependency_rules(require, PHP_RULES, Language.PHP))

    return detected


def select_primary_framework(frameworks: Sequence[FrameworkInfo]) -> Optional[FrameworkInfo]:
    """Pick the application framework if any, otherwise the first detected.

    Best effort: when several application frameworks are declared together,
    the first one in detection order wins.
    """
    for info in frameworks:
        if info.framework in APP_FRAMEWORKS:
            return info
    return frameworks[0] if frameworks else None
