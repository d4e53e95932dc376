"""Tests for framework detection and primary-framework selection."""

from proteus.detectors.frameworks import (
    FrameworkInfo,
    detect_frameworks,
    select_primary_framework,
)
from proteus.detectors.languages import detect_languages
from proteus.models import Framework, Language
from proteus.scanner.context import DetectorContext


def _frameworks(make_repo, files):
    ctx = DetectorContext(make_repo(files))
    return detect_frameworks(ctx, detect_languages(ctx))


def test_next_suppresses_react(make_repo):
    result = _frameworks(make_repo, {
        "tsconfig.json": {},
        "package.json": {"dependencies": {"next": "^14.1.0", "react": "^18.2.0"}},
    })

    assert result == [FrameworkInfo(Framework.NEXTJS, Language.TYPESCRIPT, "14.1.0")]


def test_multiple_js_frameworks_are_kept(make_repo):
    result = _frameworks(make_repo, {
        "package.json": {
            "dependencies": {"react": "18.2.0", "express": "~4.18.2"},
        },
    })

    assert [f.framework for f in result] == [Framework.REACT, Framework.EXPRESS]
    assert all(f.language == Language.JAVASCRIPT for f in result)
    assert result[1].version == "4.18.2"


def test_dev_dependencies_are_scanned(make_repo):
    result = _frameworks(make_repo, {"package.json": {"devDependencies": {"svelte": "^4.0.0"}}})

    assert [f.framework for f in result] == [Framework.SVELTE]


def test_go_frameworks_with_version(make_repo):
    go_mod = "module api\n\ngo 1.21\n\nrequire (\n\tgithub.com/gin-gonic/gin v1.9.1\n)\n"

    result = _frameworks(make_repo, {"go.mod": go_mod})

    assert result == [FrameworkInfo(Framework.GIN, Language.GO, "1.9.1")]


def test_python_frameworks_from_requirements(make_repo):
    result = _frameworks(make_repo, {"requirements.txt": "fastapi==0.110.0\nuvicorn\n"})

    assert result == [FrameworkInfo(Framework.FASTAPI, Language.PYTHON, "0.110.0")]


def test_python_frameworks_from_pyproject(make_repo):
    pyproject = '[project]\nname = "site"\ndependencies = ["Django>=5.0", "celery"]\n'

    result = _frameworks(make_repo, {"pyproject.toml": pyproject})

    assert [f.framework for f in result] == [Framework.DJANGO]


def test_rails_rust_spring_laravel(make_repo):
    result = _frameworks(make_repo, {
        "Gemfile": "gem 'rails', '~> 7.1.0'\ngem 'rspec-rails'\n",
        "Cargo.toml": '[dependencies]\naxum = "0.7"\n',
        "build.gradle": "plugins {\n  id 'org.springframework.boot' version '3.2.0'\n}\n",
        "composer.json": {"require": {"laravel/framework": "^11.0"}},
    })

    assert result == [
        FrameworkInfo(Framework.RAILS, Language.RUBY, "7.1.0"),
        FrameworkInfo(Framework.AXUM, Language.RUST, "0.7"),
        FrameworkInfo(Framework.SPRING, Language.JAVA, "3.2.0"),
        FrameworkInfo(Framework.LARAVEL, Language.PHP, "11.0"),
    ]


def test_no_frameworks(make_repo):
    assert _frameworks(make_repo, {"package.json": {"dependencies": {"lodash": "4"}}}) == []


class TestSelectPrimaryFramework:
    def test_application_framework_preferred(self):
        frameworks = [
            FrameworkInfo(Framework.REACT, Language.JAVASCRIPT),
            FrameworkInfo(Framework.RAILS, Language.RUBY),
        ]

        assert select_primary_framework(frameworks).framework == Framework.RAILS

    def test_first_whitelisted_wins(self):
        frameworks = [
            FrameworkInfo(Framework.FLASK, Language.PYTHON),
            FrameworkInfo(Framework.DJANGO, Language.PYTHON),
        ]

        assert select_primary_framework(frameworks).framework == Framework.FLASK

    def test_falls_back_to_first(self):
        frameworks = [
            FrameworkInfo(Framework.VUE, Language.JAVASCRIPT),
            FrameworkInfo(Framework.EXPRESS, Language.JAVASCRIPT),
        ]

        assert select_primary_framework(frameworks).framework == Framework.VUE

    def test_empty(self):
        assert select_primary_framework([]) is None
