"""SimpleStrings - prioritized JSON string tables with key paths.

Looks up display strings by slash-separated key paths across an ordered
list of tables, with array selectors (index, bounded, random, shuffled),
``{{name}}`` substitution, and inline error strings instead of exceptions.

Public API:
    Strings - String lookups over prioritized in-memory tables
    StringsLocalization - Per-locale JSON tables with fallback chains
    create - Functional constructor for Strings
    capitalize - Upper-case the first character
    capitalize_first_only - Upper-case the first character, lower the rest

Exceptions:
    StringsError - Base exception class
    InvalidTableError - Table is not a JSON-compatible tree
    DepthLimitExceededError - Table nests too deeply
    TableLoadError - Table file could not be used

Submodules:
    simplestrings.runtime - Resolver, selectors and substitution
    simplestrings.localization - Table loaders and type aliases
    simplestrings.diagnostics - Error types and diagnostic codes
"""

from .casing import capitalize, capitalize_first_only
from .diagnostics import (
    DepthLimitExceededError,
    InvalidTableError,
    StringsError,
    TableLoadError,
)
from .localization import StringsLocalization
from .runtime import NOT_FOUND, FallbackInfo, Strings, create

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError  # noqa: E402
from importlib.metadata import version as _get_version  # noqa: E402

try:
    __version__ = _get_version("simplestrings")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "NOT_FOUND",
    "DepthLimitExceededError",
    "FallbackInfo",
    "InvalidTableError",
    "Strings",
    "StringsError",
    "StringsLocalization",
    "TableLoadError",
    "__version__",
    "capitalize",
    "capitalize_first_only",
    "create",
]
