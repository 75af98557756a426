"""Runtime lookup engine.

Components:
    value_types  - Value model, NOT_FOUND sentinel, table freezing
    selectors    - Array selectors and random-without-replacement state
    substitution - {{token}} template filling
    resolver     - Key path walking with table fallback
    strings      - Strings facade

Python 3.13+.
"""

from .resolver import KeyResolver
from .selectors import ArraySelector, SelectionState
from .strings import FallbackInfo, Strings, create
from .substitution import Substitutions, substitute
from .value_types import NOT_FOUND, Table, TableValue, freeze_table, value_kind

__all__ = [
    "NOT_FOUND",
    "ArraySelector",
    "FallbackInfo",
    "KeyResolver",
    "SelectionState",
    "Strings",
    "Substitutions",
    "Table",
    "TableValue",
    "create",
    "freeze_table",
    "substitute",
    "value_kind",
]
