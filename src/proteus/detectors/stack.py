"""Tech stack detection across the root and monorepo workspaces."""

import fnmatch
import logging
import re
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional

from ..config import Config
from ..models import Framework, Language, StackItem, TechStack
from ..scanner.context import DetectorContext
from .frameworks import FrameworkInfo, detect_frameworks, select_primary_framework
from .languages import LanguageInfo, detect_languages
from .monorepo import detect_monorepo
from .tooling import detect_additional_tools, detect_package_manager, detect_test_framework

logger = logging.getLogger(__name__)

ROOT_STACK_NAME = "root"


def detect_package_name(ctx: DetectorContext) -> Optional[str]:
    """Best-effort project name from the directory's manifests."""
    pkg = ctx.read_json("package.json") or {}
    if isinstance(pkg.get("name"), str) and pkg["name"]:
        return pkg["name"]

    cargo = ctx.read_toml("Cargo.toml") or {}
    package = cargo.get("package")
    if isinstance(package, dict) and isinstance(package.get("name"), str):
        return package["name"]

    pyproject = ctx.read_toml("pyproject.toml") or {}
    project = pyproject.get("project")
    if isinstance(project, dict) and isinstance(project.get("name"), str):
        return project["name"]
    poetry = pyproject.get("tool", {}).get("poetry") if isinstance(pyproject.get("tool"), dict) else None
    if isinstance(poetry, dict) and isinstance(poetry.get("name"), str):
        return poetry["name"]

    go_mod = ctx.read_text("go.mod")
    if go_mod:
        match = re.search(r"^module\s+(\S+)", go_mod, re.MULTILINE)
        if match:
            return match.group(1).rstrip("/").split("/")[-1]

    return None


def expand_workspaces(ctx: DetectorContext, patterns: List[str]) -> List[str]:
    """Expand workspace globs into existing directories relative to the root.

    ``packages/*`` lists the immediate, non-hidden children of ``packages``;
    plain entries are kept when they are directories. Entries starting with
    ``!`` exclude matching directories.
    """
    exclusions = [p[1:].removeprefix("./").rstrip("/") for p in patterns if p.startswith("!")]
    dirs: List[str] = []

    for pattern in patterns:
        if pattern.startswith("!"):
            continue
        pattern = pattern.removeprefix("./").rstrip("/")
        if "*" in pattern:
            base = re.sub(r"/?\*.*$", "", pattern)
            for name in ctx.list_dirs(base or "."):
                dirs.append(f"{base}/{name}" if base else name)
        elif pattern and ctx.is_dir(pattern):
            dirs.append(pattern)

    expanded: List[str] = []
    for directory in dirs:
        if directory in expanded:
            continue
        if any(fnmatch.fnmatch(directory, excluded) for excluded in exclusions):
            continue
        expanded.append(directory)
    return expanded


def _pick_language(languages: List[LanguageInfo], framework: Optional[FrameworkInfo]) -> LanguageInfo:
    if framework is not None:
        for info in languages:
            if info.language == framework.language:
                return info
    return languages[0]


def detect_stack_in_directory(root: DetectorContext, relative_path: str) -> Optional[StackItem]:
    """Detect a single StackItem for one directory.

    Returns:
        The directory's stack, or None when it does not exist or resolves
        only to an unknown language
    """
    try:
        ctx = root if relative_path in ("", ".") else root.child(relative_path)
    except ValueError:
        logger.debug("Skipping missing workspace directory %s", relative_path)
        return None

    languages = detect_languages(ctx)
    if all(info.language == Language.UNKNOWN for info in languages):
        logger.debug("No recognizable manifest in %s", relative_path)
        return None

    frameworks = detect_frameworks(ctx, languages)
    primary_framework = select_primary_framework(frameworks)
    primary_language = _pick_language(languages, primary_framework)

    return StackItem(
        language=primary_language.language,
        language_version=primary_language.version,
        framework=primary_framework.framework if primary_framework else Framework.UNKNOWN,
        framework_version=primary_framework.version if primary_framework else None,
        test_framework=detect_test_framework(ctx, primary_language.language),
        package_manager=detect_package_manager(ctx, primary_language.language),
        path=relative_path,
        name=detect_package_name(ctx),
    )


def scan_workspaces(root: DetectorContext, patterns: List[str], workers: int = 4) -> List[StackItem]:
    """Detect stacks for every workspace and for the root itself.

    Directories are probed concurrently; the result keeps the root first
    (when it has a stack of its own), then workspaces in pattern order.
    """
    # The root is probed once below, never as a workspace
    directories = [d for d in expand_workspaces(root, patterns) if d not in ("", ".")]

    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = list(pool.map(lambda d: detect_stack_in_directory(root, d), directories))

    stacks = [stack for stack in results if stack is not None]

    root_stack = detect_stack_in_directory(root, ".")
    if root_stack is not None and root_stack.language != Language.UNKNOWN:
        stacks.insert(0, root_stack.model_copy(update={"path": ".", "name": ROOT_STACK_NAME}))

    return stacks


def _root_stacks(ctx: DetectorContext) -> List[StackItem]:
    """One StackItem per (language, framework) pair found at a plain root."""
    languages = detect_languages(ctx)
    frameworks = detect_frameworks(ctx, languages)
    app_framework = select_primary_framework(frameworks)

    ordered = list(languages)
    if app_framework is not None:
        ordered.sort(key=lambda info: info.language != app_framework.language)

    stacks: List[StackItem] = []
    for info in ordered:
        if info.language == Language.UNKNOWN:
            continue

        test_framework = detect_test_framework(ctx, info.language)
        package_manager = detect_package_manager(ctx, info.language)
        language_frameworks = sorted(
            (fw for fw in frameworks if fw.language == info.language),
            key=lambda fw: fw != app_framework,
        )

        for fw in language_frameworks or [None]:
            stacks.append(
                StackItem(
                    language=info.language,
                    language_version=info.version,
                    framework=fw.framework if fw else Framework.UNKNOWN,
                    framework_version=fw.version if fw else None,
                    test_framework=test_framework,
                    package_manager=package_manager,
                    path=".",
                )
            )

    return stacks


def _unique(values):
    seen = []
    for value in values:
        if value not in seen:
            seen.append(value)
    return seen


def detect_stack(repo_path: Path, config: Optional[Config] = None) -> TechStack:
    """Detect the full tech stack of a project directory.

    Args:
        repo_path: Project root
        config: Analysis configuration (defaults to ``Config()``)

    Returns:
        TechStack whose ``stacks`` list is never empty
    """
    config = config or Config()
    ctx = DetectorContext(repo_path, config.max_file_size)

    monorepo = detect_monorepo(ctx)
    if monorepo is not None:
        stacks = scan_workspaces(ctx, monorepo.workspaces, config.scan_workers)
    else:
        stacks = _root_stacks(ctx)

    if not stacks:
        stacks = [StackItem()]

    primary = stacks[0]
    extras = detect_additional_tools(ctx, primary.language)

    return TechStack(
        primary=primary,
        stacks=stacks,
        monorepo=monorepo,
        all_languages=_unique(s.language for s in stacks if s.language != Language.UNKNOWN),
        all_frameworks=_unique(s.framework for s in stacks if s.framework != Framework.UNKNOWN),
        styling=extras.styling,
        database=extras.database,
        additional_tools=extras.tools,
    )
