"""Strings - main API for string table lookups.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import random
import threading
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass

from simplestrings.casing import capitalize, capitalize_first_only
from simplestrings.constants import (
    FALLBACK_BAD_TYPE,
    FALLBACK_MISSING_STRING,
    KEY_SEPARATOR,
    MAX_DEPTH,
    MISSING_COUNT,
)
from simplestrings.diagnostics import ErrorTemplate
from simplestrings.runtime.resolver import KeyResolver
from simplestrings.runtime.substitution import Substitutions, substitute
from simplestrings.runtime.value_types import (
    NOT_FOUND,
    Table,
    TableValue,
    freeze_table,
    is_table,
    named_value,
    to_text,
    value_kind,
)

__all__ = ["FallbackInfo", "Strings", "create"]

logger = logging.getLogger(__name__)

# Debug messages are high-volume; truncate resolved values
_LOG_TRUNCATE_DEBUG: int = 50


@dataclass(frozen=True, slots=True)
class FallbackInfo:
    """Information about a lookup answered by a lower-priority table.

    Provided to the on_fallback callback of Strings.

    Attributes:
        key: Key path that was looked up
        table_index: Index of the table that contained the key

    Example:
        >>> def log_fallback(info: FallbackInfo) -> None:
        ...     print(f"{info.key} came from table {info.table_index}")
        >>> strings = Strings([{"a": "A"}, {"b": "B"}], on_fallback=log_fallback)
        >>> strings.get_string("b")
        b came from table 1
        'B'
    """

    key: str
    table_index: int


class Strings:
    """String lookups over prioritized tables.

    Tables are nested JSON-like trees, highest priority first. Keys are
    slash-separated paths; segments applied to arrays select elements
    (``0``, ``b-1``, ``?``, ``!``). Every query is total: failures are
    rendered into the returned value instead of raised.

    Thread Safety:
        Lookups only read the frozen tables, except ``!`` segments which
        update per-instance selection pools. Pass thread_safe=True when an
        instance is shared across threads to serialize those updates.

    Example:
        >>> strings = Strings([
        ...     {"monkey": "melón"},
        ...     {
        ...         "monkey": "melon",
        ...         "intro": {"bye": "Goodbye, {{0}}! I hope you enjoyed seeing {{1}}!"},
        ...         "choices": ["Choice A", "Choice B"],
        ...     },
        ... ])
        >>> strings.get_string("monkey")
        'melón'
        >>> strings.get_string("intro/bye", ["Bob", "Susan"])
        'Goodbye, Bob! I hope you enjoyed seeing Susan!'
        >>> strings.get_string("choices/b9")
        'Choice B'
        >>> strings.get_string("missing/not/there")
        'ERROR-MISSING-STRING: "missing/not/there"'
        >>> strings.get_string_count("choices")
        2
    """

    __slots__ = ("_on_fallback", "_primary_tables", "_resolver", "_thread_safe")

    def __init__(
        self,
        tables: Table | Iterable[Table],
        *,
        rng: random.Random | None = None,
        thread_safe: bool = False,
        on_fallback: Callable[[FallbackInfo], None] | None = None,
        max_depth: int = MAX_DEPTH,
        primary_tables: int = 1,
    ) -> None:
        """Initialize string lookups.

        Args:
            tables: One table or an iterable of tables, highest priority
                first. A single mapping is treated as a one-table list; a
                list whose items are all tables is treated as a table list.
            rng: Random source for ``?`` and ``!`` segments (default: fresh
                unseeded random.Random)
            thread_safe: Guard ``!`` selection state with a lock
            on_fallback: Optional callback invoked when get_string returns
                a string from a table past the primary ones
            max_depth: Maximum table nesting depth accepted
            primary_tables: Number of leading tables whose answers are not
                fallbacks (0 reports every answer to on_fallback)

        Raises:
            InvalidTableError: If tables (or any table in it) is not a
                JSON-compatible mapping or sequence
            DepthLimitExceededError: If a table nests deeper than max_depth
        """
        frozen = tuple(
            freeze_table(table, max_depth=max_depth) for table in _as_table_list(tables)
        )
        self._thread_safe = thread_safe
        self._on_fallback = on_fallback
        self._primary_tables = max(primary_tables, 0)
        self._resolver = KeyResolver(
            frozen,
            rng=rng,
            lock=threading.Lock() if thread_safe else None,
        )
        logger.debug("Registered %d string table(s)", len(frozen))

    @property
    def tables(self) -> tuple[Table, ...]:
        """Frozen tables in priority order (read-only)."""
        return self._resolver.tables

    @property
    def table_count(self) -> int:
        """Number of registered tables."""
        return len(self._resolver.tables)

    @property
    def thread_safe(self) -> bool:
        """Whether selection state updates are locked (read-only)."""
        return self._thread_safe

    @property
    def resolver(self) -> KeyResolver:
        """Underlying key resolver."""
        return self._resolver

    def __repr__(self) -> str:
        """Return string representation for debugging.

        Example:
            >>> Strings([{"a": "A"}, {"b": "B"}])
            Strings(tables=2, selection_pools=0)
        """
        return (
            f"Strings(tables={self.table_count}, "
            f"selection_pools={len(self._resolver.selection_state)})"
        )

    def get_string(self, key: str, *substitutions: TableValue | Substitutions) -> str:
        """Look up a string and fill its substitution tokens.

        Args:
            key: Slash-separated key path (e.g., 'intro/options/copy')
            *substitutions: Either one list/tuple (``{{0}}``, ``{{1}}`` ...)
                or one mapping (``{{name}}``), or any number of loose
                positional values collected into a list

        Returns:
            The filled string. Failures are rendered inline:
            - ``ERROR-MISSING-STRING: "<key>"`` if no table has the key
            - ``BAD-TYPE: "<key>"`` if the key is not a string (mappings
              with a string ``name`` field read as that name)
            - ``ERROR-NO-SUB-<name>`` in place of unfilled tokens

        Example:
            >>> strings = Strings({"bye": "Goodbye, {{0}}!", "hi": "Hi {{who}}"})
            >>> strings.get_string("bye", "Eli")
            'Goodbye, Eli!'
            >>> strings.get_string("hi", {"who": "Eli"})
            'Hi Eli'
        """
        if not isinstance(key, str) or not key:
            logger.warning("%s", ErrorTemplate.invalid_key())
            return FALLBACK_MISSING_STRING.format(key=key)

        value, table_index = self._resolver.resolve_with_source(key)
        if value is NOT_FOUND or table_index is None:
            logger.warning("%s", ErrorTemplate.string_not_found(key))
            return FALLBACK_MISSING_STRING.format(key=key)

        if not isinstance(value, str):
            name = named_value(value)
            if name is None:
                logger.warning("%s", ErrorTemplate.bad_type(key, value_kind(value)))
                return FALLBACK_BAD_TYPE.format(key=key)
            value = name

        if self._on_fallback is not None and table_index >= self._primary_tables:
            self._on_fallback(FallbackInfo(key=key, table_index=table_index))

        result = substitute(value, _collect_substitutions(substitutions))
        logger.debug("Resolved string '%s': %s", key, result[:_LOG_TRUNCATE_DEBUG])
        return result

    def get_string_count(self, key: str) -> int:
        """Get the number of elements of an array key.

        Args:
            key: Slash-separated key path

        Returns:
            Array length, or -1 for anything that is not an array
            (missing keys, mappings and scalars alike)
        """
        match self._resolver.resolve(key):
            case tuple() | list() as array:
                return len(array)
            case _:
                return MISSING_COUNT

    def has_string(self, key: str) -> bool:
        """Check whether key resolves to anything in any table.

        Args:
            key: Slash-separated key path

        Returns:
            True if key is a non-empty string and resolves to a value of
            any type; False otherwise. Never raises.
        """
        if not isinstance(key, str) or not key:
            return False
        return self._resolver.resolve(key) is not NOT_FOUND

    def find_all_string_keys(self, parent_key: str | None = None) -> list[str]:
        """List the keys directly under parent_key across all tables.

        Each table is examined on its own (no fallback):
        - mapping: its immediate key names
        - array: its scalar elements, as text (the element values, not
          their indices; nested arrays and objects are skipped)
        - scalar: parent_key itself

        Args:
            parent_key: Key path to list (None or empty for table roots)

        Returns:
            Deduplicated keys in first-seen order, highest priority table
            first
        """
        seen: dict[str, None] = {}
        for node in self._nodes_per_table(parent_key):
            match node:
                case Mapping():
                    seen.update(dict.fromkeys(node))
                case tuple() | list():
                    seen.update(
                        dict.fromkeys(
                            to_text(element) for element in node if not is_table(element)
                        )
                    )
                case _ if parent_key:
                    seen[parent_key] = None
        return list(seen)

    def find_all_string_paths(self, parent_key: str | None = None) -> list[str]:
        """List every readable leaf path under parent_key across all tables.

        Walks each table recursively (no fallback). Arrays contribute one
        path per index, scalars their own path, and mappings with a string
        ``name`` field their own path in addition to their children.

        Args:
            parent_key: Key path to start from (None or empty for roots)

        Returns:
            Deduplicated full key paths in first-seen order

        Example:
            >>> Strings({"intro": {"hello": "Hi"}, "choices": ["A", "B"]}).find_all_string_paths()
            ['intro/hello', 'choices/0', 'choices/1']
        """
        seen: dict[str, None] = {}
        for node in self._nodes_per_table(parent_key):
            seen.update(dict.fromkeys(_iter_leaf_paths(node, parent_key or "")))
        return list(seen)

    def reset_selection_state(self) -> None:
        """Forget which ``!`` elements have already been returned."""
        self._resolver.selection_state.reset()

    capitalize = staticmethod(capitalize)
    capitalize_first_only = staticmethod(capitalize_first_only)

    def _nodes_per_table(self, parent_key: str | None) -> Iterator[TableValue]:
        """Yield the node at parent_key in each table that has it."""
        for index, table in enumerate(self._resolver.tables):
            if not parent_key:
                yield table
                continue
            node = self._resolver.resolve_in(parent_key, index)
            if node is not NOT_FOUND:
                yield node


def create(tables: Table | Iterable[Table], **options: object) -> Strings:
    """Create a Strings instance (functional constructor).

    Args:
        tables: One table or an iterable of tables, highest priority first
        **options: Keyword options forwarded to Strings

    Returns:
        New Strings instance
    """
    return Strings(tables, **options)  # type: ignore[arg-type]


def _as_table_list(tables: object) -> list[object]:
    """Normalize constructor input to a list of candidate tables.

    A mapping is one table. A list or tuple whose items are all tables is a
    table list; any other list or tuple is a single array-rooted table.
    """
    match tables:
        case Mapping():
            return [tables]
        case list() | tuple() if all(is_table(item) for item in tables):
            return list(tables)
        case list() | tuple():
            return [tables]
        case str() | bytes():
            return [tables]
        case Iterable():
            return list(tables)
        case _:
            return [tables]


def _collect_substitutions(
    substitutions: tuple[TableValue | Substitutions, ...],
) -> Substitutions | None:
    """Turn get_string's trailing arguments into one substitution source."""
    match substitutions:
        case ():
            return None
        case (Mapping() | list() | tuple() as single,):
            return single  # type: ignore[return-value]
        case _:
            return substitutions  # type: ignore[return-value]


def _iter_leaf_paths(node: TableValue, path: str) -> Iterator[str]:
    """Yield readable leaf paths below node (tables are depth-bounded)."""
    match node:
        case Mapping():
            if path and named_value(node) is not None:
                yield path
            for key, child in node.items():
                yield from _iter_leaf_paths(child, _join(path, key))
        case tuple() | list():
            for index, child in enumerate(node):
                yield from _iter_leaf_paths(child, _join(path, str(index)))
        case _ if path:
            yield path


def _join(parent: str, segment: str) -> str:
    return f"{parent}{KEY_SEPARATOR}{segment}" if parent else segment

