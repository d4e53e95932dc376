"""Tests for confidence scoring."""

from proteus.confidence import calculate_confidence, patterns_score, stack_score
from proteus.models import (
    CodePatterns,
    DirectoryStructure,
    FileNaming,
    Framework,
    KeyDirectory,
    Language,
    NamingConvention,
    NamingPatterns,
    PackageManager,
    StackItem,
    StructureType,
    TestFramework,
)


def test_all_unknown_scores_zero():
    confidence = calculate_confidence(StackItem(), CodePatterns())

    assert confidence.stack == 0
    assert confidence.patterns == 0
    assert confidence.overall == 0


def test_complete_detection_scores_one():
    stack = StackItem(
        language=Language.TYPESCRIPT,
        framework=Framework.NEXTJS,
        test_framework=TestFramework.VITEST,
        package_manager=PackageManager.PNPM,
    )
    patterns = CodePatterns(
        naming=NamingPatterns(files=FileNaming(components=NamingConvention.PASCAL_CASE)),
        structure=DirectoryStructure(
            type=StructureType.FLAT,
            key_directories=[KeyDirectory(path="src/components", purpose="UI Components")],
        ),
    )

    confidence = calculate_confidence(stack, patterns)

    assert confidence.overall == 1.0


def test_partial_scores():
    stack = StackItem(language=Language.GO, package_manager=PackageManager.GO_MODULES)
    patterns = CodePatterns(structure=DirectoryStructure(type=StructureType.LAYER_BASED))

    assert stack_score(stack) == 0.5
    assert patterns_score(patterns) == 0.4
    assert calculate_confidence(stack, patterns).overall == 0.45
