"""Pytest configuration for SimpleStrings test suite.

Single Source of Truth for Hypothesis max_examples:
- dev: Local development with 500 examples (thorough property testing)
- ci: GitHub Actions with 50 examples (fast CI feedback)
- verbose: Debug mode with progress output (100 examples)

Profile auto-detection:
- CI=true environment variable -> "ci" profile (GitHub Actions sets this)
- HYPOTHESIS_PROFILE env var -> explicit override
- Otherwise -> "dev" profile (local development)

Override manually: HYPOTHESIS_PROFILE=verbose pytest tests/

Fuzzing Test Separation:
Tests marked with @pytest.mark.fuzz are excluded from normal test runs.
Run them via: pytest -m fuzz

Shared fixtures:
- en_table / es_table: the reference string tables used across modules
- strings_en: Strings over [en]
- strings_es: Strings over [es, en]
"""

import copy
import random
from typing import Any

import pytest
from hypothesis import Phase, Verbosity, settings

from simplestrings import Strings

# =============================================================================
# HYPOTHESIS PROFILES - SINGLE SOURCE OF TRUTH
# =============================================================================

# Development profile: thorough local testing (500 examples, silent)
settings.register_profile(
    "dev",
    max_examples=500,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
)

# CI profile: fast feedback for GitHub Actions (50 examples)
settings.register_profile(
    "ci",
    max_examples=50,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=True,
    print_blob=True,
)

# Verbose profile: debug mode with progress visibility (100 examples)
settings.register_profile(
    "verbose",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    verbosity=Verbosity.verbose,
)


# =============================================================================
# AUTO-DETECT EXECUTION CONTEXT
# =============================================================================


def _detect_profile() -> str:
    """Detect appropriate Hypothesis profile based on execution context.

    Priority:
    1. HYPOTHESIS_PROFILE env var (explicit override)
    2. CI=true env var (GitHub Actions auto-detection)
    3. Default to "dev" (local development)
    """
    import os

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


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Skip fuzz-marked tests unless explicitly requested.

    Behavior:
    - Normal test run (pytest tests/): Fuzz tests are SKIPPED
    - Explicit fuzz run (pytest -m fuzz): Fuzz tests run, others skipped
    """
    marker_expr = config.getoption("-m", default="")
    if "fuzz" in str(marker_expr):
        return

    skip_fuzz = pytest.mark.skip(reason="Fuzzing test - run with: pytest -m fuzz")
    for item in items:
        if "fuzz" in item.keywords:
            item.add_marker(skip_fuzz)


# =============================================================================
# REFERENCE TABLES
# =============================================================================

EN_TABLE: dict[str, Any] = {
    "intro": {
        "hello": "Hello, World!",
        "bye": "Goodbye, {{0}}! I hope you enjoyed seeing {{1}}!",
        "options": {
            "copy": "Copy",
            "paste": "Paste",
        },
    },
    "choices": ["Choice A", "Choice B"],
    "thing": {"name": "Thing"},
    "monkey": "melon",
    "substitution": "Wow this one {{testKey}} has a key!",
}

ES_TABLE: dict[str, Any] = {
    "monkey": "melón",
    "extra": "Extra",
}


@pytest.fixture
def en_table() -> dict[str, Any]:
    """Fresh copy of the English reference table."""
    return copy.deepcopy(EN_TABLE)


@pytest.fixture
def es_table() -> dict[str, Any]:
    """Fresh copy of the Spanish reference table."""
    return copy.deepcopy(ES_TABLE)


@pytest.fixture
def strings_en(en_table: dict[str, Any]) -> Strings:
    """Strings over the English table only (seeded)."""
    return Strings([en_table], rng=random.Random(1234))


@pytest.fixture
def strings_es(es_table: dict[str, Any], en_table: dict[str, Any]) -> Strings:
    """Strings over [es, en] (seeded)."""
    return Strings([es_table, en_table], rng=random.Random(1234))
