"""Key resolver - walks key paths through an ordered list of tables.

A key such as ``intro/options/copy`` is split on ``/`` and walked segment by
segment from the root of a table: mapping nodes are indexed by the segment,
array nodes hand the segment to the ArraySelector, and scalar nodes end the
walk. When a walk fails anywhere, the whole key is retried from the root of
the next table. Fallback is per table, never per segment: a partial match in
one table is not continued in another.

Python 3.13+. Zero external dependencies.

Thread Safety:
    Tables are frozen and never change. The only mutable state is the
    SelectionState used by ``!`` segments; see selectors.SelectionState.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

from simplestrings.constants import KEY_SEPARATOR
from simplestrings.runtime.selectors import ArraySelector, SelectionState
from simplestrings.runtime.value_types import NOT_FOUND, NotFoundType, Table, TableValue

if TYPE_CHECKING:
    import random
    import threading

__all__ = ["KeyResolver"]


class KeyResolver:
    """Resolves key paths across tables in priority order.

    Example:
        >>> resolver = KeyResolver(({"monkey": "melón"}, {"monkey": "melon", "hi": "Hi"}))
        >>> resolver.resolve("monkey")
        'melón'
        >>> resolver.resolve("hi")
        'Hi'
        >>> resolver.resolve("monkey/0")
        NOT_FOUND

    Attributes:
        tables: Frozen tables, highest priority first
    """

    __slots__ = ("_selector", "_state", "tables")

    def __init__(
        self,
        tables: Sequence[Table],
        *,
        rng: random.Random | None = None,
        lock: threading.Lock | None = None,
    ) -> None:
        """Initialize resolver.

        Args:
            tables: Frozen tables (see value_types.freeze_table), highest
                priority first
            rng: Random source for ``?`` and ``!`` segments
            lock: Optional lock guarding ``!`` selection state
        """
        self.tables: tuple[Table, ...] = tuple(tables)
        self._state = SelectionState(rng=rng, lock=lock)
        self._selector = ArraySelector(self._state)

    @property
    def selection_state(self) -> SelectionState:
        """Pools backing ``!`` segments."""
        return self._state

    def resolve(self, key: str, table_index: int = 0) -> TableValue | NotFoundType:
        """Resolve key, falling back across tables from table_index onward.

        Args:
            key: Slash-separated key path
            table_index: First table to try

        Returns:
            The node at key in the first table containing it, or NOT_FOUND
        """
        value, _ = self.resolve_with_source(key, table_index)
        return value

    def resolve_with_source(
        self, key: str, table_index: int = 0
    ) -> tuple[TableValue | NotFoundType, int | None]:
        """Resolve key and report which table answered.

        Returns:
            Tuple of (value, index of the answering table). The index is
            None when the value is NOT_FOUND.
        """
        segments = _split(key)
        if segments is None:
            return NOT_FOUND, None
        # Each miss restarts the full path at the next table
        for index in range(max(table_index, 0), len(self.tables)):
            value = self._walk(self.tables[index], segments)
            if value is not NOT_FOUND:
                return value, index
        return NOT_FOUND, None

    def resolve_in(self, key: str, table_index: int) -> TableValue | NotFoundType:
        """Resolve key in a single table without fallback.

        Args:
            key: Slash-separated key path
            table_index: Table to walk

        Returns:
            The node at key in that table, or NOT_FOUND
        """
        segments = _split(key)
        if segments is None or not 0 <= table_index < len(self.tables):
            return NOT_FOUND
        return self._walk(self.tables[table_index], segments)

    def _walk(self, table: Table, segments: Sequence[str]) -> TableValue | NotFoundType:
        """Walk segments from the root of one table."""
        node: TableValue | NotFoundType = table
        parent_key = ""
        for segment in segments:
            match node:
                case str():
                    return NOT_FOUND
                case Mapping():
                    node = node.get(segment, NOT_FOUND)
                case tuple() | list():
                    node = self._selector.select(node, segment, parent_key)
                case _:
                    return NOT_FOUND
            if node is NOT_FOUND:
                return NOT_FOUND
            # Segments are concatenated without separator: the selection
            # state identity of "a/b/!" is "ab"
            parent_key += segment
        return node


def _split(key: object) -> list[str] | None:
    """Split key into segments, or None for empty or non-string keys."""
    if not isinstance(key, str) or not key:
        return None
    return key.split(KEY_SEPARATOR)
