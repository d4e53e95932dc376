"""Tests for developer command detection."""

from proteus.detectors.commands import detect_commands
from proteus.detectors.stack import detect_stack
from proteus.scanner.context import DetectorContext


def _commands(repo):
    return detect_commands(DetectorContext(repo), detect_stack(repo))


def test_package_scripts_use_detected_runner(make_repo):
    repo = make_repo({
        "package.json": {
            "scripts": {"start": "node server.js", "build": "tsc", "test": "vitest", "type-check": "tsc --noEmit"},
        },
        "pnpm-lock.yaml": "",
    })

    commands = _commands(repo)

    assert commands.dev == "pnpm run start"
    assert commands.build == "pnpm run build"
    assert commands.test == "pnpm run test"
    assert commands.typecheck == "pnpm run type-check"
    assert commands.lint is None


def test_dev_prefers_dev_script(make_repo):
    repo = make_repo({"package.json": {"scripts": {"dev": "next dev", "start": "next start"}}})

    assert _commands(repo).dev == "npm run dev"


def test_package_without_scripts(make_repo):
    commands = _commands(make_repo({"package.json": {"name": "x"}}))

    assert commands.model_dump() == {
        "dev": None, "build": None, "test": None, "lint": None, "format": None, "typecheck": None,
    }


def test_go_makefile_targets(make_repo):
    repo = make_repo({
        "go.mod": "module example.com/svc\n",
        "Makefile": "build:\n\tgo build ./...\n\ntest:\n\tgo test ./...\n",
    })

    commands = _commands(repo)

    assert commands.build == "make build"
    assert commands.test == "make test"
    assert commands.lint == "golangci-lint run"
    assert commands.dev is None


def test_python_poetry_django(make_repo):
    repo = make_repo({
        "pyproject.toml": '[tool.poetry]\nname = "site"\n\n[tool.poetry.dependencies]\ndjango = "^5.0"\n',
        "poetry.lock": "",
    })

    commands = _commands(repo)

    assert commands.dev == "python manage.py runserver"
    assert commands.test == "poetry run pytest"
    assert commands.lint == "poetry run ruff check ."


def test_rust(make_repo):
    commands = _commands(make_repo({"Cargo.toml": '[package]\nname = "cli"\n'}))

    assert commands.build == "cargo build"
    assert commands.test == "cargo test"


def test_unknown_project_has_no_commands(make_repo):
    commands = _commands(make_repo({}))

    assert commands.dev is None
    assert commands.test is None
