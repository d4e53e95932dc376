"""Directory-structure classification and key-directory tagging."""

import re
from pathlib import Path
from typing import List, Optional

from ..models import DirectoryStructure, KeyDirectory, StructureType
from ..scanner.context import DetectorContext
from ..scanner.structure import StructureScanner

SOURCE_DIR_CANDIDATES = ["src", "app", "lib", "pkg", "internal", "cmd"]
TEST_DIR_CANDIDATES = ["test", "tests", "__tests__", "spec"]

STRUCTURE_DEPTH = 2

# A directory "matches" a role when any of its path segments matches the regex.
FEATURES = re.compile(r"^(features?|modules?)$")
COMPONENTS = re.compile(r"^components?$")
SERVICES = re.compile(r"^(services?|repositor(y|ies))$")
CONTROLLERS = re.compile(r"^(controllers?|handlers?)$")

# (segment regex, purpose); the first matching directory is recorded per row
KEY_DIRECTORY_PATTERNS = [
    (re.compile(r"^components?$"), "UI Components"),
    (re.compile(r"^features?$"), "Feature modules"),
    (re.compile(r"^services?$"), "Business logic"),
    (re.compile(r"^hooks$"), "Custom React hooks"),
    (re.compile(r"^(utils|utilities)$"), "Utility functions"),
    (re.compile(r"^lib$"), "Library code"),
    (re.compile(r"^api$"), "API routes/handlers"),
    (re.compile(r"^pages$"), "Page components (Pages Router)"),
    (re.compile(r"^app$"), "App Router pages"),
    (re.compile(r"^controllers?$"), "Request handlers"),
    (re.compile(r"^models?$"), "Data models"),
    (re.compile(r"^repositor(y|ies)$"), "Data access layer"),
    (re.compile(r"^handlers?$"), "HTTP handlers"),
    (re.compile(r"^middlewares?$"), "Middleware functions"),
    (re.compile(r"^types$"), "Type definitions"),
    (re.compile(r"^config$"), "Configuration"),
    (re.compile(r"^constants$"), "Constants and enums"),
]


def _matches(directory: str, pattern: re.Pattern) -> bool:
    return any(pattern.match(segment) for segment in directory.split("/"))


def _first_existing_dir(ctx: DetectorContext, candidates: List[str]) -> Optional[str]:
    return next((name for name in candidates if ctx.has_dir(name)), None)


def classify_structure(directories: List[str]) -> StructureType:
    """Classify architecture style from directory paths; first rule wins."""
    has_features = any(_matches(d, FEATURES) for d in directories)
    has_components = any(_matches(d, COMPONENTS) for d in directories)
    has_services = any(_matches(d, SERVICES) for d in directories)
    has_controllers = any(_matches(d, CONTROLLERS) for d in directories)

    if has_features:
        return StructureType.FEATURE_BASED
    if has_controllers and has_services:
        return StructureType.LAYER_BASED
    if has_components and not has_services:
        return StructureType.FLAT
    if has_components and has_services:
        return StructureType.HYBRID
    return StructureType.UNKNOWN


def find_key_directories(directories: List[str], source_dir: str) -> List[KeyDirectory]:
    """Tag the first directory matching each purpose pattern.

    Paths are returned relative to the project root.
    """
    prefix = "" if source_dir == "." else f"{source_dir}/"
    key_directories = []
    for pattern, purpose in KEY_DIRECTORY_PATTERNS:
        match = next((d for d in directories if _matches(d, pattern)), None)
        if match is not None:
            key_directories.append(KeyDirectory(path=f"{prefix}{match}", purpose=purpose))
    return key_directories


def detect_directory_structure(
    ctx: DetectorContext, scanner: StructureScanner
) -> DirectoryStructure:
    """Detect source/test directories, structure type and key directories."""
    source_dir = _first_existing_dir(ctx, SOURCE_DIR_CANDIDATES) or "."
    test_dir = _first_existing_dir(ctx, TEST_DIR_CANDIDATES)

    directories = scanner.collect_directories(Path(ctx.path), source_dir, STRUCTURE_DEPTH)

    return DirectoryStructure(
        type=classify_structure(directories),
        source_dir=source_dir,
        test_dir=test_dir,
        key_directories=find_key_directories(directories, source_dir),
    )
