"""Main CLI entry point for Proteus."""

import logging
import click
from pathlib import Path
from .config import Config
from .analyzer import ProjectAnalyzer
from .detectors.documents import detect_project_documents
from .models import AnalysisResult, ProjectDocuments


def _configure_logging(config: Config, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, config.log_level, logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@click.group()
def cli():
    """Proteus - Shape-shifting project intelligence."""
    pass


@cli.command()
@click.argument("repo_path", type=click.Path(exists=True, file_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print the full analysis as JSON")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def analyze(repo_path: str, as_json: bool, verbose: bool):
    """Analyze a project's stack, patterns and documents.

    Examples:
        proteus analyze .
        proteus analyze path/to/monorepo --json
    """
    config = Config.from_env()
    _configure_logging(config, verbose)

    full = ProjectAnalyzer(config).analyze_full(Path(repo_path))

    if as_json:
        click.echo(full.model_dump_json(indent=2))
        return

    click.echo(f"🔍 Analyzed: {full.project_path}")
    _print_summary(full.analysis)
    _print_documents(full.documents)


@cli.command()
@click.argument("repo_path", type=click.Path(exists=True, file_okay=False))
def docs(repo_path: str):
    """Show the rules document, README and agents found in a project."""
    config = Config.from_env()
    documents = detect_project_documents(Path(repo_path).resolve(), config.max_file_size)
    _print_documents(documents)


def _print_summary(result: AnalysisResult) -> None:
    stack = result.stack
    primary = stack.primary

    click.echo("\n📊 Analysis Summary\n")
    click.echo("Tech Stack:")
    version = f" ({primary.language_version})" if primary.language_version else ""
    click.echo(f"  Language:    {primary.language.value}{version}")
    version = f" ({primary.framework_version})" if primary.framework_version else ""
    click.echo(f"  Framework:   {primary.framework.value}{version}")
    click.echo(f"  Testing:     {primary.test_framework.value}")
    click.echo(f"  Package Mgr: {primary.package_manager.value}")

    if stack.styling:
        click.echo(f"  Styling:     {stack.styling}")
    if stack.database:
        click.echo(f"  Database:    {stack.database}")
    if stack.additional_tools:
        click.echo(f"  Tools:       {', '.join(stack.additional_tools)}")

    if stack.monorepo:
        click.echo(f"\nMonorepo ({stack.monorepo.type.value}):")
        for item in stack.stacks:
            label = item.name or item.path
            click.echo(f"  {label:<20} {item.language.value} / {item.framework.value}  [{item.path}]")

    structure = result.patterns.structure
    click.echo("\nProject Structure:")
    click.echo(f"  Type:        {structure.type.value}")
    click.echo(f"  Source:      {structure.source_dir}/")
    if structure.key_directories:
        click.echo(f"  Key dirs:    {', '.join(d.path for d in structure.key_directories)}")

    commands = {k: v for k, v in result.commands.model_dump().items() if v}
    if commands:
        click.echo("\nCommands:")
        for name, command in commands.items():
            click.echo(f"  {name:<12} {command}")

    click.echo("\nConfidence:")
    click.echo(f"  Overall:     {round(result.confidence.overall * 100)}%")


def _print_documents(documents: ProjectDocuments) -> None:
    click.echo("\n📄 Documents\n")
    if documents.claude_md:
        rules = documents.claude_md
        click.echo(f"  Rules file:  {rules.path}")
        click.echo(
            f"               {len(rules.rules)} rules, {len(rules.conventions)} conventions, "
            f"{len(rules.warnings)} warnings, {len(rules.must_do)} must-do, {len(rules.prefer)} prefer"
        )
        if rules.custom_sections:
            click.echo(f"               custom: {', '.join(rules.custom_sections)}")
    else:
        click.echo("  Rules file:  none")

    if documents.readme:
        click.echo(f"  README:      {documents.readme.path}")
        if documents.readme.description:
            click.echo(f"               {documents.readme.description}")

    if documents.existing_agents:
        click.echo("  Existing agents/skills:")
        for agent in documents.existing_agents:
            click.echo(f"    [{agent.type}] {agent.name}  ({agent.path})")


if __name__ == "__main__":
    cli()
