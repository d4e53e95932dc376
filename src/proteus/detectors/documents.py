"""Existing documentation and agent/skill artifact discovery.

Parses the project's rules document (CLAUDE.md) into categorized list items,
extracts a README description and badges, and collects previously generated
agent and skill markdown files.
"""

import logging
import re
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml

from ..models import ClaudeMdContent, ExistingAgent, ProjectDocuments, ReadmeContent
from ..scanner.context import DEFAULT_MAX_FILE_SIZE, DetectorContext

logger = logging.getLogger(__name__)

RULES_FILE_CANDIDATES = ["CLAUDE.md", "claude.md", ".claude/CLAUDE.md"]
README_CANDIDATES = ["README.md", "readme.md", "Readme.md"]
AGENT_DIR_CANDIDATES = [".claude/agents", ".agents"]
SKILL_DIR_CANDIDATES = [".claude/skills", ".skills"]

SKILL_MANIFEST = "SKILL.md"
EXCLUDED_ARTIFACT_FILES = {SKILL_MANIFEST, "index.md", "INDEX.md", "README.md"}

# category -> accepted heading spellings (compared case-insensitively)
SECTION_ALIASES: Dict[str, Tuple[str, ...]] = {
    "rules": ("rules", "project rules", "ルール", "プロジェクトルール"),
    "conventions": ("conventions", "code conventions", "coding conventions", "規約", "コーディング規約"),
    "warnings": ("warnings", "cautions", "注意", "警告", "注意事項"),
    "must_do": ("must do", "required", "必須"),
    "prefer": ("prefer", "recommended", "推奨"),
}

# Headings produced by the generator; neither categorized nor custom.
RESERVED_HEADINGS = ("tech stack", "commands", "project structure")

CUSTOM_SECTION_LEVEL = 2

HEADING = re.compile(r"^(#{1,6})\s+(.+?)(?:\s+#+)?\s*$")
NUMBERING = re.compile(r"^\d+[.)]\s*")
BULLET_ITEM =re.compile(r"^[-*+]\s+(.*)$")
NUMBERED_ITEM = re.compile(r"^\d+[.)]\s+(.*)$")
BADGE = re.compile(r"\[!\[.+?\]\(.+?\)\]\(.+?\)")
LINK_ONLY_LINE = re.compile(r"^(\[[^\]]*\]\([^)]*\)\s*)+$")


def normalize_heading(text: str) -> str:
    """Lowercase a heading and drop leading symbols (emoji), numbering and trailing colons."""
    text = re.sub(r"^[^\w]+", "", text.strip())
    text = NUMBERING.sub("", text)
    return text.rstrip(":：").strip().lower()


def heading_category(text: str) -> Optional[str]:
    normalized = normalize_heading(text)
    for category, aliases in SECTION_ALIASES.items():
        if normalized in aliases:
            return category
    return None


def _list_item(line: str) -> Optional[str]:
    stripped = line.strip()
    match = BULLET_ITEM.match(stripped) or NUMBERED_ITEM.match(stripped)
    return match.group(1).strip() if match else None


def parse_rules_sections(content: str) -> Tuple[Dict[str, List[str]], Dict[str, str]]:
    """Split a rules document into categorized list items and custom sections.

    A recognized section collects only list items and ends at the next
    heading of the same or higher level. Unrecognized level-2 headings are
    kept verbatim (full body) as custom sections.

    Returns:
        (category -> items, heading text -> body)
    """
    categories: Dict[str, List[str]] = {key: [] for key in SECTION_ALIASES}
    custom: Dict[str, str] = {}

    section: Optional[Tuple[str, int]] = None
    custom_heading: Optional[str] = None
    custom_lines: List[str] = []
    in_fence = False

    def flush_custom():
        if custom_heading is None:
            return
        body = "\n".join(custom_lines).strip()
        custom[custom_heading] = f"{custom[custom_heading]}\n\n{body}" if custom_heading in custom else body

    for line in content.splitlines():
        if line.lstrip().startswith(("```", "~~~")):
            in_fence = not in_fence

        heading = None if in_fence else HEADING.match(line)
        if heading:
            level = len(heading.group(1))
            title = heading.group(2).strip()

            if section is not None and level <= section[1]:
                section = None
            if custom_heading is not None and level <= CUSTOM_SECTION_LEVEL:
                flush_custom()
                custom_heading, custom_lines = None, []

            category = heading_category(title)
            if category is not None:
                section = (category, level)
            elif level == CUSTOM_SECTION_LEVEL and normalize_heading(title) not in RESERVED_HEADINGS:
                custom_heading = title
                continue

        if custom_heading is not None:
            custom_lines.append(line)
        if section is not None and not in_fence:
            item = _list_item(line)
            if item:
                categories[section[0]].append(item)

    flush_custom()
    return categories, custom


def parse_claude_md(path: str, content: str) -> ClaudeMdContent:
    categories, custom = parse_rules_sections(content)
    return ClaudeMdContent(path=path, content=content, custom_sections=custom, **categories)


def _is_decoration(line: str) -> bool:
    """Badges, images, html and link-only lines are not description text."""
    return (
        line.startswith(("!", "<"))
        or "![" in line
        or LINK_ONLY_LINE.match(line) is not None
    )


def parse_readme(path: str, content: str) -> ReadmeContent:
    """Extract the first prose paragraph after the title, plus all badges."""
    paragraph: List[str] = []
    found_title = False

    for line in content.splitlines():
        stripped = line.strip()
        if not found_title:
            found_title = line.startswith("# ")
            continue
        if not stripped or stripped.startswith("#") or _is_decoration(stripped):
            if paragraph:
                break
            continue
        paragraph.append(stripped)

    return ReadmeContent(
        path=path,
        content=content,
        description=" ".join(paragraph),
        badges=BADGE.findall(content),
    )


def extract_frontmatter(content: str) -> dict:
    """Parse a leading YAML front matter block; {} when absent or malformed."""
    if not content.startswith("---"):
        return {}

    parts = content.split("---", 2)
    if len(parts) < 3:
        return {}

    try:
        metadata = yaml.safe_load(parts[1]) or {}
    except yaml.YAMLError:
        logger.debug("Malformed front matter")
        return {}
    return metadata if isinstance(metadata, dict) else {}


def _artifact(ctx: DetectorContext, rel_path: str, name: str, kind: str) -> Optional[ExistingAgent]:
    content = ctx.read_text(rel_path)
    if content is None:
        return None
    return ExistingAgent(
        path=rel_path, name=name, content=content, type=kind, metadata=extract_frontmatter(content)
    )


def _markdown_files(ctx: DetectorContext, directory: str) -> List[str]:
    return [
        name
        for name in ctx.list_files(directory, ".md")
        if not name.startswith("_") and name not in EXCLUDED_ARTIFACT_FILES
    ]


def _scan_agent_dir(ctx: DetectorContext, directory: str) -> List[ExistingAgent]:
    agents = []
    for filename in _markdown_files(ctx, directory):
        agent = _artifact(ctx, f"{directory}/{filename}", filename[: -len(".md")], "agent")
        if agent is not None:
            agents.append(agent)
    return agents


def _scan_skill_dir(ctx: DetectorContext, directory: str) -> List[ExistingAgent]:
    """Flat ``*.md`` files (skill only with front matter) and ``<name>/SKILL.md`` folders."""
    artifacts = []
    for filename in _markdown_files(ctx, directory):
        rel_path = f"{directory}/{filename}"
        content = ctx.read_text(rel_path)
        if content is None:
            continue
        artifacts.append(
            ExistingAgent(
                path=rel_path,
                name=filename[: -len(".md")],
                content=content,
                type="skill" if content.startswith("---") else "agent",
                metadata=extract_frontmatter(content),
            )
        )

    for folder in ctx.list_dirs(directory):
        manifest = f"{directory}/{folder}/{SKILL_MANIFEST}"
        if folder.startswith("_") or not ctx.is_file(manifest):
            continue
        skill = _artifact(ctx, manifest, folder, "skill")
        if skill is not None:
            artifacts.append(skill)

    return artifacts


def detect_existing_agents(ctx: DetectorContext) -> Tuple[List[ExistingAgent], Optional[str], Optional[str]]:
    """Scan the first existing agent directory and the first existing skill directory.

    Returns:
        (artifacts, agent directory, skill directory)
    """
    artifacts: List[ExistingAgent] = []

    agent_directory = next((d for d in AGENT_DIR_CANDIDATES if ctx.is_dir(d)), None)
    if agent_directory is not None:
        artifacts.extend(_scan_agent_dir(ctx, agent_directory))

    skill_directory = next((d for d in SKILL_DIR_CANDIDATES if ctx.is_dir(d)), None)
    if skill_directory is not None:
        artifacts.extend(_scan_skill_dir(ctx, skill_directory))

    return artifacts, agent_directory, skill_directory


def detect_project_documents(
    repo_path: Path, max_file_size: int = DEFAULT_MAX_FILE_SIZE
) -> ProjectDocuments:
    """Collect the rules document, README and existing agents of a project."""
    ctx = DetectorContext(repo_path, max_file_size)
    documents = ProjectDocuments()

    for candidate in RULES_FILE_CANDIDATES:
        content = ctx.read_text(candidate) if ctx.is_file(candidate) else None
        if content is not None:
            documents.claude_md = parse_claude_md(candidate, content)
            break

    for candidate in README_CANDIDATES:
        content = ctx.read_text(candidate) if ctx.is_file(candidate) else None
        if content is not None:
            documents.readme = parse_readme(candidate, content)
            break

    artifacts, agent_directory, skill_directory = detect_existing_agents(ctx)
    documents.existing_agents = artifacts
    documents.agent_directory = agent_directory
    documents.skill_directory = skill_directory

    return documents
