"""Multi-locale string tables for StringsLocalization.

Provides the localization stack on top of Strings: type aliases, table
loading infrastructure, and the multi-locale orchestrator.

Submodules:
    types        - PEP 695 type aliases (KeyPath, LocaleCode, ResourceId)
    loading      - TableLoader protocol, PathTableLoader, LocaleFallbackInfo,
                   TableLoadResult, LoadSummary
    orchestrator - StringsLocalization (multi-locale orchestration)

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from simplestrings.enums import LoadStatus
from simplestrings.localization.loading import (
    LoadSummary,
    LocaleFallbackInfo,
    PathTableLoader,
    TableLoader,
    TableLoadResult,
)
from simplestrings.localization.orchestrator import StringsLocalization
from simplestrings.localization.types import KeyPath, LocaleCode, ResourceId

__all__ = [
    # Main orchestrator
    "StringsLocalization",
    # Loader protocol and implementations
    "TableLoader",
    "PathTableLoader",
    # Load tracking (eager loading diagnostics)
    "LoadStatus",
    "LoadSummary",
    "TableLoadResult",
    # Fallback observability
    "LocaleFallbackInfo",
    # Type aliases for user code type annotations
    "KeyPath",
    "LocaleCode",
    "ResourceId",
]
