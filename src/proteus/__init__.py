"""Proteus - project analysis engine for generating agent context."""

__version__ = "0.1.0"

from .config import Config
from .models import (
    AnalysisResult,
    ClaudeMdContent,
    ExistingAgent,
    FullAnalysis,
    Language,
    Framework,
    ProjectDocuments,
    StackItem,
    TechStack,
)
from .analyzer import ProjectAnalyzer, analyze_project, analyze_full

__all__ = [
    "Config",
    "AnalysisResult",
    "ClaudeMdContent",
    "ExistingAgent",
    "FullAnalysis",
    "Language",
    "Framework",
    "ProjectDocuments",
    "StackItem",
    "TechStack",
    "ProjectAnalyzer",
    "analyze_project",
    "analyze_full",
]
