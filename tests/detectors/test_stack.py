"""Tests for stack resolution across roots and workspaces."""

from proteus.config import Config
from proteus.detectors.stack import (
    detect_package_name,
    detect_stack,
    detect_stack_in_directory,
    expand_workspaces,
    scan_workspaces,
)
from proteus.models import Framework, Language, PackageManager, TestFramework
from proteus.scanner.context import DetectorContext


def test_typed_manifest_with_full_stack_framework(make_repo):
    repo = make_repo({
        "package.json": {"dependencies": {"next": "14.1.0", "react": "18.2.0"}},
        "tsconfig.json": {},
    })

    stack = detect_stack(repo)

    assert stack.language == Language.TYPESCRIPT
    assert stack.framework == Framework.NEXTJS
    assert stack.test_framework == TestFramework.UNKNOWN
    assert stack.package_manager == PackageManager.NPM
    assert stack.monorepo is None
    assert len(stack.stacks) == 1


def test_workspace_without_manifest_is_dropped(make_repo, config):
    repo = make_repo({
        "pnpm-workspace.yaml": "packages:\n  - packages/*\n",
        "packages/api/go.mod": "module example.com/api\n\ngo 1.22\n\nrequire github.com/gin-gonic/gin v1.9.1\n",
        "packages/docs/notes.txt": "hello",
    })

    stack = detect_stack(repo, config)

    assert len(stack.stacks) == 1
    assert stack.stacks[0].path == "packages/api"
    assert stack.stacks[0].name == "api"
    assert stack.framework == Framework.GIN
    assert stack.monorepo is not None


def test_monorepo_root_stack_is_prepended(make_repo, config):
    repo = make_repo({
        "package.json": {"name": "monorepo", "workspaces": ["apps/*"]},
        "apps/web/package.json": {"name": "web", "dependencies": {"react": "18"}},
        "apps/server/go.mod": "module github.com/acme/server\n",
    })

    stack = detect_stack(repo, config)

    assert [item.path for item in stack.stacks] == [".", "apps/server", "apps/web"]
    assert stack.stacks[0].name == "root"
    assert stack.all_languages == [Language.JAVASCRIPT, Language.GO]
    assert stack.all_frameworks == [Framework.REACT]


def test_workspace_order_follows_patterns(make_repo):
    repo = make_repo({
        "b/Cargo.toml": '[package]\nname = "b"\n',
        "a/Cargo.toml": '[package]\nname = "a"\n',
    })

    stacks = scan_workspaces(DetectorContext(repo), ["b", "a"], workers=4)

    assert [item.path for item in stacks] == ["b", "a"]


def test_unknown_project_falls_back_to_single_unknown_stack(make_repo):
    stack = detect_stack(make_repo({"notes.txt": "hi"}))

    assert len(stack.stacks) == 1
    assert stack.language == Language.UNKNOWN
    assert stack.all_languages == []
    assert stack.all_frameworks == []


def test_multi_language_root_prefers_app_framework(make_repo):
    repo = make_repo({
        "package.json": {"dependencies": {"react": "18.2.0"}},
        "requirements.txt": "fastapi==0.110.0\n",
    })

    stack = detect_stack(repo)

    assert stack.language == Language.PYTHON
    assert stack.framework == Framework.FASTAPI
    assert [(s.language, s.framework) for s in stack.stacks] == [
        (Language.PYTHON, Framework.FASTAPI),
        (Language.JAVASCRIPT, Framework.REACT),
    ]


def test_additional_tools_come_from_primary_language(make_repo):
    repo = make_repo({
        "package.json": {"dependencies": {"styled-components": "6"}},
        "Dockerfile": "FROM node",
    })

    stack = detect_stack(repo, Config())

    assert stack.styling == "styled-components"
    assert stack.additional_tools == ["Docker"]


class TestExpandWorkspaces:
    def test_glob_plain_and_exclusion(self, make_repo):
        repo = make_repo({
            "packages/a/": "",
            "packages/b/": "",
            "packages/.hidden/": "",
            "tools/": "",
            "packages/readme.md": "",
        })

        expanded = expand_workspaces(
            DetectorContext(repo), ["packages/*", "./tools", "missing", "!packages/b"]
        )

        assert expanded == ["packages/a", "tools"]

    def test_duplicates_removed(self, make_repo):
        repo = make_repo({"apps/web/": ""})

        assert expand_workspaces(DetectorContext(repo), ["apps/*", "apps/web"]) == ["apps/web"]


def test_detect_stack_in_missing_directory(make_repo):
    assert detect_stack_in_directory(DetectorContext(make_repo({})), "nope") is None


class TestPackageName:
    def test_sources(self, make_repo):
        assert detect_package_name(DetectorContext(make_repo({"package.json": {"name": "web"}}, "a"))) == "web"
        assert detect_package_name(
            DetectorContext(make_repo({"pyproject.toml": '[project]\nname = "svc"\n'}, "b"))
        ) == "svc"
        assert detect_package_name(
            DetectorContext(make_repo({"pyproject.toml": '[tool.poetry]\nname = "legacy"\n'}, "c"))
        ) == "legacy"
        assert detect_package_name(
            DetectorContext(make_repo({"go.mod": "module github.com/acme/server\n"}, "d"))
        ) == "server"

    def test_none(self, make_repo):
        assert detect_package_name(DetectorContext(make_repo({}))) is None


def test_go_workspace_using_root_yields_one_root_stack(make_repo, config):
    repo = make_repo({
        "go.work": "go 1.22\n\nuse (\n\t.\n\t./svc\n)\n",
        "go.mod": "module example.com/tools\n",
        "svc/go.mod": "module example.com/svc\n",
    })

    stack = detect_stack(repo, config)

    assert [(item.path, item.name) for item in stack.stacks] == [(".", "root"), ("svc", "svc")]
