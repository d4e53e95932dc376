"""CLI tests for the analyze and docs commands."""

import json

import pytest
from click.testing import CliRunner
from proteus.main import cli


@pytest.fixture
def runner():
    """Create Click test runner."""
    return CliRunner()


@pytest.fixture
def sample_repo(make_repo):
    return make_repo({
        "go.mod": "module github.com/acme/api\n\ngo 1.22\n\nrequire github.com/gin-gonic/gin v1.9.1\n",
        "internal/handlers/user.go": "package handlers\n",
        "internal/services/user.go": "package services\n",
        "README.md": "# API\n\nUser service.\n",
        "CLAUDE.md": "## Rules\n- Wrap errors\n\n## Release\n\nTag and push.\n",
        ".claude/agents/reviewer.md": "Review",
    })


def test_analyze_help(runner):
    result = runner.invoke(cli, ["analyze", "--help"])

    assert result.exit_code == 0
    assert "--json" in result.output
    assert "--verbose" in result.output


def test_analyze_summary(runner, sample_repo):
    result = runner.invoke(cli, ["analyze", str(sample_repo)])

    assert result.exit_code == 0
    assert "Language:    go (1.22)" in result.output
    assert "Framework:   gin (1.9.1)" in result.output
    assert "Type:        layer-based" in result.output
    assert "Rules file:  CLAUDE.md" in result.output
    assert "custom: Release" in result.output
    assert "[agent] reviewer" in result.output


def test_analyze_json(runner, sample_repo):
    result = runner.invoke(cli, ["analyze", str(sample_repo), "--json"])

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["project_name"] == "api"
    assert data["analysis"]["stack"]["primary"]["framework"] == "gin"
    assert data["analysis"]["commands"]["test"] == "go test ./..."
    assert data["documents"]["claude_md"]["custom_sections"] == {"Release": "Tag and push."}


def test_analyze_nonexistent_path(runner):
    result = runner.invoke(cli, ["analyze", "/nonexistent/path"])

    assert result.exit_code != 0
    assert "does not exist" in result.output


def test_docs_command(runner, sample_repo):
    result = runner.invoke(cli, ["docs", str(sample_repo)])

    assert result.exit_code == 0
    assert "README:      README.md" in result.output
    assert "User service." in result.output


def test_docs_without_documents(runner, make_repo):
    result = runner.invoke(cli, ["docs", str(make_repo({}))])

    assert result.exit_code == 0
    assert "Rules file:  none" in result.output
