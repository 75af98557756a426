"""Enumerations for SimpleStrings type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class ValueKind(StrEnum):
    """Tag of a table node.

    StrEnum provides automatic string conversion: str(ValueKind.STRING) == "string"
    """

    STRING = "string"
    """JSON string: "Hello, World!" """

    NUMBER = "number"
    """JSON number (int or float): 42, 1.5"""

    BOOLEAN = "boolean"
    """JSON true / false"""

    NULL = "null"
    """JSON null"""

    SEQUENCE = "sequence"
    """JSON array: ["Choice A", "Choice B"]"""

    MAPPING = "mapping"
    """JSON object: {"hello": "Hello"}"""


class SelectorKind(StrEnum):
    """How a key segment picks an element out of an array.

    StrEnum provides automatic string conversion: str(SelectorKind.INDEX) == "index"
    """

    INDEX = "index"
    """Plain zero-based index: choices/1"""

    BOUNDED = "bounded"
    """Index clamped into the array: choices/b-1, choices/b9"""

    RANDOM = "random"
    """Uniform random element: choices/?"""

    SHUFFLED = "shuffled"
    """Random element without replacement until the pool is exhausted: choices/!"""


class LoadStatus(StrEnum):
    """Outcome of loading one table file.

    StrEnum provides automatic string conversion: str(LoadStatus.SUCCESS) == "success"
    """

    SUCCESS = "success"
    """File read and parsed into a table."""

    NOT_FOUND = "not_found"
    """File does not exist (expected for partially translated locales)."""

    ERROR = "error"
    """File exists but could not be read or is not a JSON table."""


__all__ = [
    "LoadStatus",
    "SelectorKind",
    "ValueKind",
]
