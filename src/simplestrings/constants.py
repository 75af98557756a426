"""Shared constants for SimpleStrings.

Centralizes the key-path syntax, the inline error strings returned by the
lookup API, and the limits applied when tables are registered. Placing
constants here avoids circular imports between the runtime and
localization packages.

Constants are grouped by domain:
- Key syntax: Path separator and array selector characters
- Fallback strings: Inline error text for failed lookups
- Limits: Recursion protection for table validation

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Key syntax
    "KEY_SEPARATOR",
    "SELECTOR_RANDOM",
    "SELECTOR_SHUFFLED",
    "SELECTOR_BOUNDED_PREFIX",
    "NAME_FIELD",
    # Fallback strings
    "FALLBACK_MISSING_STRING",
    "FALLBACK_BAD_TYPE",
    "FALLBACK_MISSING_SUBSTITUTION",
    "MISSING_COUNT",
    # Limits
    "MAX_DEPTH",
    # Loading
    "DEFAULT_LOCALE",
    "DEFAULT_BASE_PATH",
    "DEFAULT_RESOURCE_ID",
    "TABLE_FILE_SUFFIX",
]

# ============================================================================
# KEY SYNTAX
# ============================================================================

# Separates path segments. There is no escape for a literal "/" in a key.
KEY_SEPARATOR: str = "/"

# Uniform random element of an array: "choices/?"
SELECTOR_RANDOM: str = "?"

# Random element without replacement, pool refilled once exhausted: "choices/!"
SELECTOR_SHUFFLED: str = "!"

# Bounded index, clamped into the array: "choices/b-1", "choices/b7"
SELECTOR_BOUNDED_PREFIX: str = "b"

# Mappings carrying a string under this key read as that string.
NAME_FIELD: str = "name"

# ============================================================================
# FALLBACK STRINGS
# ============================================================================

# Lookups never raise for data-shape problems. The failure is rendered into
# the returned text so it stays visible in the UI.
# These are format strings - use .format(key=...) / .format(name=...)
FALLBACK_MISSING_STRING: str = 'ERROR-MISSING-STRING: "{key}"'
FALLBACK_BAD_TYPE: str = 'BAD-TYPE: "{key}"'
FALLBACK_MISSING_SUBSTITUTION: str = "ERROR-NO-SUB-{name}"

# get_string_count() result for anything that is not an array.
MISSING_COUNT: int = -1

# ============================================================================
# LIMITS
# ============================================================================

# Maximum nesting depth accepted when a table is registered.
# Tables are validated and frozen recursively; string tables deeper than
# 100 levels are malformed, and the limit keeps validation clear of
# RecursionError.
MAX_DEPTH: int = 100

# ============================================================================
# LOADING
# ============================================================================

# Locale appended to every requested chain as the last resort.
DEFAULT_LOCALE: str = "en_us"

# Directory template for table files; {locale} is substituted per locale.
DEFAULT_BASE_PATH: str = "Locale/{locale}"

# Table file identifier loaded for every locale when none are given.
DEFAULT_RESOURCE_ID: str = "strings"

TABLE_FILE_SUFFIX: str = ".json"
