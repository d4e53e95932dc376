"""Tests for naming-convention classification."""

import pytest
from proteus.config import Config
from proteus.detectors.naming import classify_name, detect_naming_convention, detect_naming_patterns
from proteus.models import Language, NamingConvention
from proteus.scanner.structure import StructureScanner


@pytest.mark.parametrize(
    "name, expected",
    [
        ("userProfile", NamingConvention.CAMEL_CASE),
        ("button", NamingConvention.CAMEL_CASE),
        ("UserProfile", NamingConvention.PASCAL_CASE),
        ("user_profile", NamingConvention.SNAKE_CASE),
        ("user-profile", NamingConvention.KEBAB_CASE),
        ("MAX_RETRIES", NamingConvention.SCREAMING_SNAKE_CASE),
        ("User_profile-x", NamingConvention.MIXED),
    ],
)
def test_classify_name(name, expected):
    assert classify_name(name) == expected


def test_empty_sample_is_mixed():
    assert detect_naming_convention([]) == NamingConvention.MIXED


def test_dominant_convention_at_threshold():
    samples = [
        "src/components/Button.tsx",
        "src/components/NavBar.tsx",
        "src/components/UserCard.tsx",
        "src/components/date-picker.tsx",
        "src/components/modal_dialog.tsx",
    ]

    assert detect_naming_convention(samples) == NamingConvention.PASCAL_CASE


def test_below_threshold_is_mixed():
    samples = ["Button.tsx", "NavBar.tsx", "date-picker.tsx", "time-input.tsx"]

    assert detect_naming_convention(samples) == NamingConvention.MIXED


def test_only_last_extension_is_stripped():
    assert detect_naming_convention(["user-profile.test.ts"]) == NamingConvention.MIXED
    assert detect_naming_convention(["user-profile.ts"]) == NamingConvention.KEBAB_CASE


class TestNamingPatterns:
    def test_typescript_project(self, make_repo):
        repo = make_repo({
            "src/components/Button.tsx": "",
            "src/components/forms/TextField.tsx": "",
            "src/utils/format-date.ts": "",
            "src/utils/parse-query.ts": "",
            "src/utils/Button.test.tsx": "",
        })

        patterns = detect_naming_patterns(StructureScanner(Config()), repo, Language.TYPESCRIPT)

        assert patterns.files.components == NamingConvention.PASCAL_CASE
        assert patterns.files.utilities == NamingConvention.KEBAB_CASE
        assert patterns.files.tests == "*.test.ts"
        assert patterns.code.components == NamingConvention.PASCAL_CASE
        assert patterns.code.types == NamingConvention.PASCAL_CASE

    def test_spec_files(self, make_repo):
        repo = make_repo({"lib/api.spec.js": ""})

        patterns = detect_naming_patterns(StructureScanner(Config()), repo, Language.JAVASCRIPT)

        assert patterns.files.tests == "*.spec.js"
        assert patterns.files.components is None

    def test_python_defaults(self, make_repo):
        patterns = detect_naming_patterns(StructureScanner(Config()), make_repo({}), Language.PYTHON)

        assert patterns.code.functions == NamingConvention.SNAKE_CASE
        assert patterns.code.types == NamingConvention.PASCAL_CASE
        assert patterns.code.constants == NamingConvention.SCREAMING_SNAKE_CASE
        assert patterns.files.utilities == NamingConvention.SNAKE_CASE
