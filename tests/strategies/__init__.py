"""Hypothesis strategies for SimpleStrings property-based testing.

Strategies are organized by domain:

- tables: key segments, JSON-like values, string tables and table lists
- localization: locale codes and locale chains

Usage:
    from tests.strategies import key_segments, string_tables
    from tests.strategies.localization import locale_codes

Event-Emitting Strategies (HypoFuzz-Optimized):
    These strategies emit hypothesis.event() calls for coverage-guided fuzzing:
    - string_tables, table_lists, templates, locale_chains
"""

from .localization import locale_chains, locale_codes
from .tables import (
    KEY_ALPHABET,
    array_lengths,
    json_scalars,
    key_segments,
    plain_texts,
    string_tables,
    table_lists,
    templates,
)

__all__ = [
    "KEY_ALPHABET",
    "array_lengths",
    "json_scalars",
    "key_segments",
    "locale_chains",
    "locale_codes",
    "plain_texts",
    "string_tables",
    "table_lists",
    "templates",
]
