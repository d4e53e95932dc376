"""Confidence scoring for an analysis."""

from .models import (
    CodePatterns,
    Confidence,
    Framework,
    Language,
    PackageManager,
    StackItem,
    StructureType,
    TestFramework,
)

# Weights within each sub-score sum to 1.0
LANGUAGE_WEIGHT = 0.4
FRAMEWORK_WEIGHT = 0.3
TEST_FRAMEWORK_WEIGHT = 0.2
PACKAGE_MANAGER_WEIGHT = 0.1

STRUCTURE_WEIGHT = 0.4
KEY_DIRECTORIES_WEIGHT = 0.3
NAMING_WEIGHT = 0.3


def stack_score(stack: StackItem) -> float:
    score = 0.0
    if stack.language != Language.UNKNOWN:
        score += LANGUAGE_WEIGHT
    if stack.framework != Framework.UNKNOWN:
        score += FRAMEWORK_WEIGHT
    if stack.test_framework != TestFramework.UNKNOWN:
        score += TEST_FRAMEWORK_WEIGHT
    if stack.package_manager != PackageManager.UNKNOWN:
        score += PACKAGE_MANAGER_WEIGHT
    return round(score, 4)


def patterns_score(patterns: CodePatterns) -> float:
    score = 0.0
    if patterns.structure.type != StructureType.UNKNOWN:
        score += STRUCTURE_WEIGHT
    if patterns.structure.key_directories:
        score += KEY_DIRECTORIES_WEIGHT
    if patterns.naming.files.components or patterns.naming.files.utilities:
        score += NAMING_WEIGHT
    return round(score, 4)


def calculate_confidence(stack: StackItem, patterns: CodePatterns) -> Confidence:
    """Score detector completeness for the primary stack and the patterns.

    Overall is the mean of the two sub-scores.
    """
    stack_value = stack_score(stack)
    patterns_value = patterns_score(patterns)
    return Confidence(
        stack=stack_value,
        patterns=patterns_value,
        overall=round((stack_value + patterns_value) / 2, 4),
    )
