"""Core data models for Proteus project analysis."""

from enum import Enum
from pathlib import Path
from typing import Optional, Dict, List, Any, Literal
from pydantic import BaseModel, ConfigDict, Field


class _ClosedEnum(str, Enum):
    """String enum that degrades unrecognized values to ``UNKNOWN``."""

    @classmethod
    def _missing_(cls, value):
        return cls.__members__.get("UNKNOWN")

    def __str__(self) -> str:
        return self.value


class Language(_ClosedEnum):
    TYPESCRIPT = "typescript"
    JAVASCRIPT = "javascript"
    GO = "go"
    PYTHON = "python"
    RUST = "rust"
    RUBY = "ruby"
    JAVA = "java"
    PHP = "php"
    UNKNOWN = "unknown"


class Framework(_ClosedEnum):
    NEXTJS = "nextjs"
    REACT = "react"
    VUE = "vue"
    ANGULAR = "angular"
    SVELTE = "svelte"
    EXPRESS = "express"
    FASTIFY = "fastify"
    NESTJS = "nestjs"
    GIN = "gin"
    ECHO = "echo"
    FIBER = "fiber"
    DJANGO = "django"
    FLASK = "flask"
    FASTAPI = "fastapi"
    RAILS = "rails"
    SPRING = "spring"
    LARAVEL = "laravel"
    ACTIX = "actix"
    AXUM = "axum"
    UNKNOWN = "unknown"


class TestFramework(_ClosedEnum):
    __test__ = False  # keep pytest from collecting this class

    JEST = "jest"
    VITEST = "vitest"
    MOCHA = "mocha"
    PYTEST = "pytest"
    GO_TEST = "go-test"
    CARGO_TEST = "cargo-test"
    RSPEC = "rspec"
    JUNIT = "junit"
    PHPUNIT = "phpunit"
    UNKNOWN = "unknown"


class PackageManager(_ClosedEnum):
    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"
    BUN = "bun"
    GO_MODULES = "go-modules"
    PIP = "pip"
    POETRY = "poetry"
    PIPENV = "pipenv"
    UV = "uv"
    CARGO = "cargo"
    BUNDLER = "bundler"
    MAVEN = "maven"
    GRADLE = "gradle"
    COMPOSER = "composer"
    UNKNOWN = "unknown"


class MonorepoType(_ClosedEnum):
    PNPM_WORKSPACES = "pnpm-workspaces"
    NPM_WORKSPACES = "npm-workspaces"
    YARN_WORKSPACES = "yarn-workspaces"
    TURBOREPO = "turborepo"
    NX = "nx"
    LERNA = "lerna"
    GO_WORKSPACE = "go-workspace"
    CARGO_WORKSPACE = "cargo-workspace"
    UNKNOWN = "unknown"


class NamingConvention(_ClosedEnum):
    CAMEL_CASE = "camelCase"
    PASCAL_CASE = "PascalCase"
    SNAKE_CASE = "snake_case"
    KEBAB_CASE = "kebab-case"
    SCREAMING_SNAKE_CASE = "SCREAMING_SNAKE_CASE"
    MIXED = "mixed"

    @classmethod
    def _missing_(cls, value):
        return cls.MIXED


class StructureType(_ClosedEnum):
    FLAT = "flat"
    FEATURE_BASED = "feature-based"
    LAYER_BASED = "layer-based"
    HYBRID = "hybrid"
    UNKNOWN = "unknown"


# ============================================
# Stack
# ============================================


class StackItem(BaseModel):
    """One ecosystem instance (a workspace or the root) of a project."""

    model_config = ConfigDict(frozen=True)

    language: Language = Language.UNKNOWN
    language_version: Optional[str] = None
    framework: Framework = Framework.UNKNOWN
    framework_version: Optional[str] = None
    test_framework: TestFramework = TestFramework.UNKNOWN
    package_manager: PackageManager = PackageManager.UNKNOWN
    path: str = "."
    name: Optional[str] = None


class MonorepoInfo(BaseModel):
    """Workspace system detected at a project root."""

    type: MonorepoType
    root_path: Path
    workspaces: List[str] = Field(default_factory=list)


class TechStack(BaseModel):
    """Aggregate stack: the primary item plus every detected ecosystem."""

    primary: StackItem
    stacks: List[StackItem] = Field(min_length=1)
    monorepo: Optional[MonorepoInfo] = None
    all_languages: List[Language] = Field(default_factory=list)
    all_frameworks: List[Framework] = Field(default_factory=list)
    styling: Optional[str] = None
    database: Optional[str] = None
    additional_tools: List[str] = Field(default_factory=list)

    # Shortcuts onto the primary item
    @property
    def language(self) -> Language:
        return self.primary.language

    @property
    def framework(self) -> Framework:
        return self.primary.framework

    @property
    def test_framework(self) -> TestFramework:
        return self.primary.test_framework

    @property
    def package_manager(self) -> PackageManager:
        return self.primary.package_manager


# ============================================
# Patterns
# ============================================


class FileNaming(BaseModel):
    components: Optional[NamingConvention] = None
    utilities: Optional[NamingConvention] = None
    tests: Optional[str] = None  # e.g. "*.test.ts", "*.spec.ts"


class CodeNaming(BaseModel):
    functions: NamingConvention = NamingConvention.CAMEL_CASE
    variables: NamingConvention = NamingConvention.CAMEL_CASE
    constants: NamingConvention = NamingConvention.SCREAMING_SNAKE_CASE
    types: Optional[NamingConvention] = None
    components: Optional[NamingConvention] = None


class NamingPatterns(BaseModel):
    files: FileNaming = Field(default_factory=FileNaming)
    code: CodeNaming = Field(default_factory=CodeNaming)


class KeyDirectory(BaseModel):
    path: str
    purpose: str


class DirectoryStructure(BaseModel):
    type: StructureType = StructureType.UNKNOWN
    source_dir: str = "."
    test_dir: Optional[str] = None
    key_directories: List[KeyDirectory] = Field(default_factory=list)


class ImportPatterns(BaseModel):
    style: str  # "absolute", "relative" or "mixed"
    aliases: Optional[Dict[str, Any]] = None


class ExportPatterns(BaseModel):
    style: str  # "named", "default" or "mixed"


class CodePatterns(BaseModel):
    naming: NamingPatterns = Field(default_factory=NamingPatterns)
    structure: DirectoryStructure = Field(default_factory=DirectoryStructure)
    imports: Optional[ImportPatterns] = None
    exports: Optional[ExportPatterns] = None


class Commands(BaseModel):
    """Developer commands for the primary stack."""

    dev: Optional[str] = None
    build: Optional[str] = None
    test: Optional[str] = None
    lint: Optional[str] = None
    format: Optional[str] = None
    typecheck: Optional[str] = None


class Confidence(BaseModel):
    stack: float = Field(ge=0.0, le=1.0)
    patterns: float = Field(ge=0.0, le=1.0)
    overall: float = Field(ge=0.0, le=1.0)


class GitInfo(BaseModel):
    default_branch: Optional[str] = None
    has_husky: bool = False


class AnalysisResult(BaseModel):
    """Complete analysis of one project directory."""

    project_name: str
    project_path: Path
    description: Optional[str] = None
    stack: TechStack
    patterns: CodePatterns
    commands: Commands = Field(default_factory=Commands)
    git_info: Optional[GitInfo] = None
    confidence: Confidence


# ============================================
# Documents
# ============================================


class ClaudeMdContent(BaseModel):
    """Parsed rules document."""

    path: str
    content: str
    rules: List[str] = Field(default_factory=list)
    conventions: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    must_do: List[str] = Field(default_factory=list)
    prefer: List[str] = Field(default_factory=list)
    custom_sections: Dict[str, str] = Field(default_factory=dict)

    def render_sections(self) -> str:
        """Serialize the recognized categories back to markdown."""
        headings = [
            ("Rules", self.rules),
            ("Conventions", self.conventions),
            ("Warnings", self.warnings),
            ("Must Do", self.must_do),
            ("Prefer", self.prefer),
        ]
        blocks = []
        for heading, items in headings:
            if not items:
                continue
            lines = [f"## {heading}", ""]
            lines.extend(f"- {item}" for item in items)
            blocks.append("\n".join(lines))
        return "\n\n".join(blocks) + "\n" if blocks else ""


class ReadmeContent(BaseModel):
    path: str
    content: str
    description: str = ""
    badges: List[str] = Field(default_factory=list)


class ExistingAgent(BaseModel):
    """Agent or skill markdown file found on disk."""

    model_config = ConfigDict(frozen=True)

    path: str
    name: str
    content: str
    type: Literal["agent", "skill"]
    metadata: Dict[str, Any] = Field(default_factory=dict)


class ProjectDocuments(BaseModel):
    claude_md: Optional[ClaudeMdContent] = None
    readme: Optional[ReadmeContent] = None
    existing_agents: List[ExistingAgent] = Field(default_factory=list)
    agent_directory: Optional[str] = None
    skill_directory: Optional[str] = None

    @property
    def claude_md_raw_content(self) -> Optional[str]:
        return self.claude_md.content if self.claude_md else None


class FullAnalysis(BaseModel):
    project_name: str
    project_path: Path
    analysis: AnalysisResult
    documents: ProjectDocuments
