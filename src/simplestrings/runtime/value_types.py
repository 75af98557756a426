"""Core value types for the string tables.

Defines the value model shared by the resolver, selectors and facade:
    - TableValue: Recursive union of JSON-compatible node types
    - Table: Root of one string table (mapping or sequence)
    - NOT_FOUND: Sentinel for a failed lookup, distinct from every TableValue
    - value_kind: Tag a node with its ValueKind
    - freeze_table: Validate a JSON-like tree and freeze it for registration

Registered tables are frozen: mappings become read-only MappingProxyType
views and lists become tuples. Resolution can therefore dispatch on node
shape with structural pattern matching, and nothing reachable through a
resolver can be mutated after construction.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Final, final

from simplestrings.constants import KEY_SEPARATOR, MAX_DEPTH, NAME_FIELD
from simplestrings.core import DepthGuard
from simplestrings.diagnostics import ErrorTemplate, InvalidTableError
from simplestrings.enums import ValueKind

__all__ = [
    "NOT_FOUND",
    "NotFoundType",
    "Table",
    "TableValue",
    "freeze_table",
    "is_table",
    "named_value",
    "to_text",
    "value_kind",
]

# Recursive JSON node. Frozen tables only contain tuples for arrays, but
# callers may hand in lists before registration.
type TableValue = (
    str
    | int
    | float
    | bool
    | None
    | tuple["TableValue", ...]
    | list["TableValue"]
    | Mapping[str, "TableValue"]
)

type Table = Mapping[str, TableValue] | tuple[TableValue, ...] | list[TableValue]


@final
class NotFoundType:
    """Type of the NOT_FOUND sentinel.

    Falsy, and never equal to any table value, so ``None``, ``False``,
    ``0`` and ``""`` found in a table remain distinguishable from a miss.
    """

    __slots__ = ()

    _instance: NotFoundType | None = None

    def __new__(cls) -> NotFoundType:
        """Return the single shared instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        """NOT_FOUND is falsy."""
        return False

    def __repr__(self) -> str:
        """Return sentinel name."""
        return "NOT_FOUND"

    def __reduce__(self) -> str:
        """Pickle by reference so the singleton survives round-trips."""
        return "NOT_FOUND"


NOT_FOUND: Final = NotFoundType()


def value_kind(value: TableValue) -> ValueKind:
    """Tag a table node with its ValueKind.

    Args:
        value: Node found in a table

    Returns:
        The node's ValueKind

    Raises:
        InvalidTableError: If value is not a JSON-compatible node

    Example:
        >>> value_kind("Hello")
        <ValueKind.STRING: 'string'>
        >>> value_kind(("a", "b"))
        <ValueKind.SEQUENCE: 'sequence'>
    """
    # bool before int: bool is an int subclass
    match value:
        case bool():
            return ValueKind.BOOLEAN
        case str():
            return ValueKind.STRING
        case int() | float():
            return ValueKind.NUMBER
        case None:
            return ValueKind.NULL
        case Mapping():
            return ValueKind.MAPPING
        case tuple() | list():
            return ValueKind.SEQUENCE
        case _:
            raise InvalidTableError(ErrorTemplate.table_value_invalid("", type(value).__name__))


def is_table(value: object) -> bool:
    """Check whether value can be registered as a table root."""
    return isinstance(value, (Mapping, list, tuple))


def named_value(value: TableValue) -> str | None:
    """Return the string ``name`` field of a named object node, if any."""
    if isinstance(value, Mapping):
        name = value.get(NAME_FIELD)
        if isinstance(name, str):
            return name
    return None


def to_text(value: TableValue) -> str:
    """Render a scalar the way JSON spells it.

    Strings are returned unchanged; booleans become ``true``/``false`` and
    ``None`` becomes ``null``.
    """
    match value:
        case str():
            return value
        case bool():
            return "true" if value else "false"
        case None:
            return "null"
        case _:
            return str(value)


def freeze_table(table: object, *, max_depth: int = MAX_DEPTH) -> Table:
    """Validate a JSON-like tree and return a frozen copy.

    Mappings are copied into read-only MappingProxyType views and lists into
    tuples, so later mutation of the caller's objects cannot leak into a
    resolver.

    Args:
        table: Parsed JSON document (dict or list at the root)
        max_depth: Maximum nesting depth accepted

    Returns:
        Frozen table

    Raises:
        InvalidTableError: If the root is not a mapping/sequence, a mapping
            key is not a string, or a value is not JSON-compatible
        DepthLimitExceededError: If nesting exceeds max_depth
    """
    if not is_table(table):
        raise InvalidTableError(ErrorTemplate.table_invalid(type(table).__name__))
    guard = DepthGuard(max_depth=max_depth)
    return _freeze(table, "", guard)  # type: ignore[return-value]


def _freeze(value: object, path: str, guard: DepthGuard) -> TableValue:
    """Recursive worker for freeze_table."""
    match value:
        case str() | bool() | int() | float() | None:
            return value
        case Mapping():
            with guard:
                frozen: dict[str, TableValue] = {}
                for key, child in value.items():
                    if not isinstance(key, str):
                        raise InvalidTableError(
                            ErrorTemplate.table_key_invalid(path, type(key).__name__)
                        )
                    frozen[key] = _freeze(child, _join(path, key), guard)
                return MappingProxyType(frozen)
        case list() | tuple():
            with guard:
                return tuple(
                    _freeze(child, _join(path, str(index)), guard)
                    for index, child in enumerate(value)
                )
        case _:
            raise InvalidTableError(
                ErrorTemplate.table_value_invalid(path, type(value).__name__)
            )


def _join(parent: str, segment: str) -> str:
    return f"{parent}{KEY_SEPARATOR}{segment}" if parent else segment
