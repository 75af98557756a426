"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the localization package
and by user code when annotating StringsLocalization call sites.

Python 3.13+. Zero external dependencies.
"""

__all__ = [
    "KeyPath",
    "LocaleCode",
    "ResourceId",
]

type KeyPath = str
"""Slash-separated key path (e.g., 'intro/options/copy', 'choices/!')."""

type LocaleCode = str
"""Normalized locale code (e.g., 'en_us', 'es')."""

type ResourceId = str
"""Table file identifier without extension (e.g., 'strings', 'shared/strings')."""
