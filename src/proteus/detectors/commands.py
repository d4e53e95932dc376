"""Developer command detection."""

import re

from ..models import Commands, Framework, Language, PackageManager, TechStack
from ..scanner.context import DetectorContext

SCRIPT_RUNNERS = {
    PackageManager.PNPM: "pnpm",
    PackageManager.YARN: "yarn",
    PackageManager.BUN: "bun",
}

# command -> package.json script names that provide it, in priority order
JS_SCRIPT_ALIASES = {
    "dev": ("dev", "start", "serve"),
    "build": ("build",),
    "test": ("test",),
    "lint": ("lint",),
    "format": ("format",),
    "typecheck": ("typecheck", "type-check"),
}

MAKE_TARGETS = {"dev": "run", "build": "build", "test": "test", "lint": "lint"}

PYTHON_DEV_SERVERS = {
    Framework.DJANGO: "python manage.py runserver",
    Framework.FASTAPI: "uvicorn main:app --reload",
    Framework.FLASK: "flask run",
}


def _make_targets(ctx: DetectorContext) -> set[str]:
    makefile = ctx.read_text("Makefile") or ""
    return set(re.findall(r"^([A-Za-z0-9_.\-]+):", makefile, re.MULTILINE))


def _js_commands(ctx: DetectorContext, stack: TechStack) -> Commands:
    pkg = ctx.read_json("package.json")
    if pkg is None:
        return Commands(dev="npm run dev", build="npm run build", test="npm test")

    scripts = pkg.get("scripts")
    if not isinstance(scripts, dict):
        return Commands()

    runner = SCRIPT_RUNNERS.get(stack.package_manager, "npm")
    found = {}
    for command, aliases in JS_SCRIPT_ALIASES.items():
        script = next((name for name in aliases if name in scripts), None)
        if script is not None:
            found[command] = f"{runner} run {script}"
    return Commands(**found)


def detect_commands(ctx: DetectorContext, stack: TechStack) -> Commands:
    """Derive dev/build/test/lint/format/typecheck commands for the primary stack."""
    language = stack.language

    if language in (Language.TYPESCRIPT, Language.JAVASCRIPT):
        return _js_commands(ctx, stack)

    if language == Language.GO:
        commands = Commands(build="go build ./...", test="go test ./...", lint="golangci-lint run")
        targets = _make_targets(ctx)
        for command, target in MAKE_TARGETS.items():
            if target in targets:
                setattr(commands, command, f"make {target}")
        return commands

    if language == Language.PYTHON:
        runner = {PackageManager.POETRY: "poetry run ", PackageManager.UV: "uv run "}.get(
            stack.package_manager, ""
        )
        return Commands(
            dev=PYTHON_DEV_SERVERS.get(stack.framework),
            test=f"{runner}pytest",
            lint=f"{runner}ruff check .",
            format=f"{runner}ruff format .",
        )

    if language == Language.RUBY and stack.framework == Framework.RAILS:
        return Commands(dev="rails server", test="rails test", lint="rubocop")

    if language == Language.RUST:
        return Commands(dev="cargo run", build="cargo build", test="cargo test", lint="cargo clippy")

    return Commands()
