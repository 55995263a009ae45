"""Pytest configuration for the typedmessages test suite.

Single Source of Truth for Hypothesis max_examples:
- dev: Local development with 500 examples (thorough property testing)
- ci: CI runs with 50 examples (fast feedback)
- verbose: Debug mode with progress output (100 examples)

Profile auto-detection:
- CI=true environment variable -> "ci" profile
- HYPOTHESIS_PROFILE env var -> explicit override
- Otherwise -> "dev" profile (local development)

Override manually: HYPOTHESIS_PROFILE=verbose pytest tests/

Fuzzing Test Separation:
Tests marked with @pytest.mark.fuzz are excluded from normal test runs.
Run them via: pytest -m fuzz

Project fixtures build throwaway projects on tmp_path:

    project/
        typedmessages.toml
        src/home.vocab/translations.json
        src/home.vocab/fr.translations.json
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

from typedmessages.config import LanguageTarget, UserConfig
from tests.helpers.project_files import write_json

# =============================================================================
# HYPOTHESIS PROFILES - SINGLE SOURCE OF TRUTH
# =============================================================================

settings.register_profile(
    "dev",
    max_examples=500,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
)

settings.register_profile(
    "ci",
    max_examples=50,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=True,
    print_blob=True,
)

settings.register_profile(
    "verbose",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    verbosity=Verbosity.verbose,
)


def _detect_profile() -> str:
    """Detect appropriate Hypothesis profile based on execution context.

    Priority:
    1. HYPOTHESIS_PROFILE env var (explicit override)
    2. CI=true env var
    3. Default to "dev" (local development)
    """
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci", "verbose"):
        return explicit
    if os.environ.get("CI") == "true":
        return "ci"
    return "dev"


settings.load_profile(_detect_profile())


# =============================================================================
# FUZZING TEST SEPARATION
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Register the 'fuzz' marker for intensive property tests."""
    config.addinivalue_line(
        "markers",
        "fuzz: Intensive property tests for fuzzing (excluded from normal test runs)",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip fuzz-marked tests unless explicitly requested with -m fuzz."""
    marker_expr = config.getoption("-m", default="")
    if "fuzz" in str(marker_expr):
        return

    skip_fuzz = pytest.mark.skip(reason="Fuzzing test - run with: pytest -m fuzz")
    for item in items:
        if "fuzz" in item.keywords:
            item.add_marker(skip_fuzz)


# =============================================================================
# PROJECT FIXTURES
# =============================================================================

type TranslationData = Mapping[str, Mapping[str, object]]
type WriteTranslations = Callable[..., Path]


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Empty project directory."""
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def config(project_root: Path) -> UserConfig:
    """English dev language, French, and Australian English extending English."""
    return UserConfig(
        project_root=project_root,
        dev_language="en",
        languages=(
            LanguageTarget("en"),
            LanguageTarget("fr"),
            LanguageTarget("en-AU", extends="en"),
        ),
    )


@pytest.fixture
def write_translations(project_root: Path) -> WriteTranslations:
    """Write a translation directory; returns the dev language file path.

    Usage:
        dev_file = write_translations(
            "src/home.vocab",
            en={"hello": "Hello"},
            fr={"hello": "Bonjour"},
        )

    The dev language (default "en") is written as translations.json, the rest as
    <language>.translations.json. Plain string values become {"message": ...}.
    """

    def _write(directory: str, dev: str = "en", **languages: Mapping[str, object]) -> Path:
        target = project_root / directory
        dev_file = target / "translations.json"
        for language, messages in languages.items():
            data = {
                key: {"message": value} if isinstance(value, str) else value
                for key, value in messages.items()
            }
            name = "translations.json" if language == dev else f"{language}.translations.json"
            write_json(target / name, data)
        return dev_file

    return _write
