"""Analysis orchestration: run every detector and assemble the result."""

import logging
import re
from pathlib import Path
from typing import Optional

from .config import Config
from .confidence import calculate_confidence
from .detectors.commands import detect_commands
from .detectors.documents import detect_project_documents
from .detectors.patterns import detect_patterns
from .detectors.stack import detect_package_name, detect_stack
from .models import AnalysisResult, FullAnalysis, GitInfo, ProjectDocuments
from .scanner.context import DetectorContext
from .scanner.structure import StructureScanner

logger = logging.getLogger(__name__)


class ProjectAnalyzer:
    """Runs the detectors over a project directory."""

    def __init__(self, config: Optional[Config] = None):
        """Initialize analyzer.

        Args:
            config: Analysis configuration (defaults to ``Config()``)
        """
        self.config = config or Config()
        self.scanner = StructureScanner(self.config)

    def analyze(self, repo_path: Path, documents: Optional[ProjectDocuments] = None) -> AnalysisResult:
        """Analyze a project directory.

        Args:
            repo_path: Project root
            documents: Already-parsed documents; supplies the description

        Returns:
            AnalysisResult with stack, patterns, commands and confidence

        Raises:
            ValueError: If repo_path is not a directory
        """
        repo_path = Path(repo_path).resolve()
        ctx = DetectorContext(repo_path, self.config.max_file_size)
        logger.info("Analyzing %s", repo_path)

        stack = detect_stack(repo_path, self.config)
        logger.info(
            "Primary stack: %s / %s (%d stack(s))",
            stack.language.value,
            stack.framework.value,
            len(stack.stacks),
        )

        patterns = detect_patterns(ctx, stack, self.scanner)
        commands = detect_commands(ctx, stack)
        description = None
        if documents is not None and documents.readme is not None:
            description = documents.readme.description or None

        return AnalysisResult(
            project_name=detect_package_name(ctx) or repo_path.name,
            project_path=repo_path,
            description=description,
            stack=stack,
            patterns=patterns,
            commands=commands,
            git_info=detect_git_info(ctx),
            confidence=calculate_confidence(stack.primary, patterns),
        )

    def analyze_full(self, repo_path: Path) -> FullAnalysis:
        """Analyze a project and its existing documents together."""
        repo_path = Path(repo_path).resolve()
        documents = detect_project_documents(repo_path, self.config.max_file_size)
        analysis = self.analyze(repo_path, documents)
        return FullAnalysis(
            project_name=analysis.project_name,
            project_path=repo_path,
            analysis=analysis,
            documents=documents,
        )


def detect_git_info(ctx: DetectorContext) -> Optional[GitInfo]:
    """Husky hooks and the remote default branch, when the project is a git checkout."""
    if not ctx.has_dir(".git") and not ctx.has_dir(".husky"):
        return None

    default_branch = None
    head = ctx.read_text(".git/refs/remotes/origin/HEAD")
    if head:
        match = re.search(r"refs/remotes/origin/(\S+)", head)
        if match:
            default_branch = match.group(1)

    return GitInfo(default_branch=default_branch, has_husky=ctx.has_dir(".husky"))


def analyze_project(repo_path: Path, config: Optional[Config] = None) -> AnalysisResult:
    """Analyze a project directory with a fresh analyzer."""
    return ProjectAnalyzer(config).analyze(repo_path)


def analyze_full(repo_path: Path, config: Optional[Config] = None) -> FullAnalysis:
    """Analyze a project directory and its documents with a fresh analyzer."""
    return ProjectAnalyzer(config).analyze_full(repo_path)
