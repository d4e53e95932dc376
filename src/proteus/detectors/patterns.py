"""Code pattern detection: naming, structure, import and export style."""

import re
from pathlib import Path
from typing import Optional

from ..models import CodePatterns, ExportPatterns, ImportPatterns, Language, TechStack
from ..scanner.context import DetectorContext
from ..scanner.structure import StructureScanner
from .layout import detect_directory_structure
from .naming import detect_naming_patterns

EXPORT_SAMPLE_SIZE = 10
EXPORT_SAMPLE_GLOBS = ["src/**/*.ts", "src/**/*.tsx", "app/**/*.ts", "app/**/*.tsx"]
NAMED_EXPORT = re.compile(r"export\s+(const|function|class|interface|type)\s+")


def detect_import_style(ctx: DetectorContext) -> ImportPatterns:
    """Absolute when tsconfig declares path aliases or a baseUrl."""
    tsconfig = ctx.read_json("tsconfig.json")
    options = tsconfig.get("compilerOptions") if tsconfig else None
    if not isinstance(options, dict):
        return ImportPatterns(style="relative")

    if isinstance(options.get("paths"), dict):
        return ImportPatterns(style="absolute", aliases=options["paths"])
    if options.get("baseUrl"):
        return ImportPatterns(style="absolute")
    return ImportPatterns(style="relative")


def detect_export_style(ctx: DetectorContext, scanner: StructureScanner) -> ExportPatterns:
    """Compare default vs named exports over a small sample of source files."""
    sample = scanner.collect_files(Path(ctx.path), EXPORT_SAMPLE_GLOBS)[:EXPORT_SAMPLE_SIZE]

    default_exports = 0
    named_exports = 0
    for rel_path in sample:
        content = ctx.read_text(rel_path)
        if content is None:
            continue
        if "export default" in content:
            default_exports += 1
        if NAMED_EXPORT.search(content):
            named_exports += 1

    if default_exports > named_exports * 2:
        return ExportPatterns(style="default")
    if named_exports > default_exports * 2:
        return ExportPatterns(style="named")
    return ExportPatterns(style="mixed")


def detect_patterns(
    ctx: DetectorContext, stack: TechStack, scanner: StructureScanner
) -> CodePatterns:
    """Detect the code patterns of a project for its primary language."""
    language = stack.language
    imports: Optional[ImportPatterns] = None
    exports: Optional[ExportPatterns] = None

    if language in (Language.TYPESCRIPT, Language.JAVASCRIPT):
        imports = detect_import_style(ctx)
        exports = detect_export_style(ctx, scanner)

    return CodePatterns(
        naming=detect_naming_patterns(scanner, Path(ctx.path), language),
        structure=detect_directory_structure(ctx, scanner),
        imports=imports,
        exports=exports,
    )
