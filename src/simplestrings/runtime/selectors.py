"""Array selectors - pick one element of a table array from a key segment.

A key segment applied to an array is interpreted as a selector:

    choices/1     INDEX     plain zero-based index
    choices/b-1   BOUNDED   integer clamped into [0, len - 1]
    choices/?     RANDOM    uniform random element
    choices/!     SHUFFLED  random element without replacement

SHUFFLED keeps a pool of not-yet-returned indices per array, keyed by the
concatenated segments that led to the array. The pool is refilled with every
index once exhausted, so over len(array) draws each element appears once.
The first draw of a new cycle skips the element drawn last, so arrays with
two or more elements never return the same element twice in a row.

Thread Safety:
    SelectionState is the only mutable state in resolution. Its
    refill-then-draw is a read-modify-write; pass a lock to serialize it
    when a resolver is shared across threads.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import random
import threading
from contextlib import nullcontext
from typing import TYPE_CHECKING

from simplestrings import constants
from simplestrings.enums import SelectorKind
from simplestrings.runtime.value_types import NOT_FOUND, NotFoundType, TableValue

if TYPE_CHECKING:
    from collections.abc import Sequence

__all__ = ["ArraySelector", "SelectionState", "selector_kind"]

logger = logging.getLogger(__name__)


def selector_kind(segment: str) -> SelectorKind:
    """Classify a key segment applied to an array.

    Example:
        >>> selector_kind("?")
        <SelectorKind.RANDOM: 'random'>
        >>> selector_kind("b-1")
        <SelectorKind.BOUNDED: 'bounded'>
        >>> selector_kind("3")
        <SelectorKind.INDEX: 'index'>
    """
    match segment:
        case constants.SELECTOR_RANDOM:
            return SelectorKind.RANDOM
        case constants.SELECTOR_SHUFFLED:
            return SelectorKind.SHUFFLED
        case _ if segment.startswith(constants.SELECTOR_BOUNDED_PREFIX):
            return SelectorKind.BOUNDED
        case _:
            return SelectorKind.INDEX


def _parse_int(text: str) -> int | None:
    """Parse a signed decimal integer, or None if text is not one.

    Only ASCII digits with an optional leading sign are accepted, so
    whitespace, underscores and non-ASCII digits that int() would tolerate
    do not address array elements.
    """
    digits = text[1:] if text[:1] in ("-", "+") else text
    if not digits or not digits.isascii() or not digits.isdigit():
        return None
    return int(text)


class SelectionState:
    """Per-resolver pools of remaining indices for SHUFFLED selection.

    Pools are created lazily on first draw and refilled with every index of
    the array when empty. A drawn index is removed until the next refill.

    Attributes:
        rng: Random source used for draws
    """

    __slots__ = ("_last", "_lock", "_pools", "rng")

    def __init__(
        self,
        rng: random.Random | None = None,
        lock: threading.Lock | None = None,
    ) -> None:
        """Initialize empty selection state.

        Args:
            rng: Random source (default: fresh unseeded random.Random)
            lock: Optional lock serializing draws across threads
        """
        self.rng = rng if rng is not None else random.Random()
        self._lock = lock
        self._pools: dict[str, list[int]] = {}
        self._last: dict[str, int] = {}

    def draw(self, parent_key: str, length: int) -> int:
        """Draw an index without replacement from the pool for parent_key.

        Args:
            parent_key: Concatenated segments that led to the array
            length: Array length (must be > 0)

        Returns:
            Index into the array
        """
        with self._lock if self._lock is not None else nullcontext():
            pool = self._pools.setdefault(parent_key, [])
            # Different arrays can share a parent key ("ab/!" and "a/b/!")
            if pool and pool[-1] >= length:
                pool[:] = [index for index in pool if index < length]
            refilled = not pool
            if refilled:
                pool.extend(range(length))
                logger.debug("Refilled selection pool '%s' with %d indices", parent_key, length)
            position = self.rng.randrange(len(pool))
            last = self._last.get(parent_key)
            if refilled and length > 1 and pool[position] == last:
                # First draw of a cycle never repeats the previous draw
                other = self.rng.randrange(len(pool) - 1)
                position = other + 1 if other >= position else other
            index = pool.pop(position)
            self._last[parent_key] = index
            return index

    def remaining(self, parent_key: str) -> tuple[int, ...]:
        """Indices not yet drawn since the last refill (empty if unseen)."""
        return tuple(self._pools.get(parent_key, ()))

    def reset(self) -> None:
        """Forget all pools."""
        with self._lock if self._lock is not None else nullcontext():
            self._pools.clear()
            self._last.clear()

    def __len__(self) -> int:
        """Number of arrays with a pool."""
        return len(self._pools)


class ArraySelector:
    """Applies a key segment to an array node.

    Example:
        >>> selector = ArraySelector(SelectionState())
        >>> selector.select(("Choice A", "Choice B"), "b5", "choices")
        'Choice B'
        >>> selector.select(("Choice A", "Choice B"), "7", "choices")
        NOT_FOUND
    """

    __slots__ = ("_state",)

    def __init__(self, state: SelectionState) -> None:
        """Initialize selector with the resolver's selection state."""
        self._state = state

    @property
    def state(self) -> SelectionState:
        """Selection state used by SHUFFLED draws."""
        return self._state

    def select(
        self, array: Sequence[TableValue], segment: str, parent_key: str
    ) -> TableValue | NotFoundType:
        """Select an element of array according to segment.

        Args:
            array: Array node being walked
            segment: Key segment applied to the array
            parent_key: Concatenated segments consumed before this one

        Returns:
            The selected element, or NOT_FOUND
        """
        match selector_kind(segment):
            case SelectorKind.RANDOM:
                return self._random(array)
            case SelectorKind.SHUFFLED:
                return self._shuffled(array, parent_key)
            case SelectorKind.BOUNDED:
                return self._bounded(array, segment[len(constants.SELECTOR_BOUNDED_PREFIX) :])
            case SelectorKind.INDEX:
                return self._index(array, segment)

    def _random(self, array: Sequence[TableValue]) -> TableValue | NotFoundType:
        if not array:
            return NOT_FOUND
        return array[self._state.rng.randrange(len(array))]

    def _shuffled(
        self, array: Sequence[TableValue], parent_key: str
    ) -> TableValue | NotFoundType:
        if not array:
            return NOT_FOUND
        return array[self._state.draw(parent_key, len(array))]

    @staticmethod
    def _bounded(array: Sequence[TableValue], text: str) -> TableValue | NotFoundType:
        if not array:
            return NOT_FOUND
        index = _parse_int(text)
        if index is None:
            return NOT_FOUND
        return array[min(max(index, 0), len(array) - 1)]

    @staticmethod
    def _index(array: Sequence[TableValue], text: str) -> TableValue | NotFoundType:
        index = _parse_int(text)
        # Negative indices are misses, not Python's from-the-end indexing
        if index is None or not 0 <= index < len(array):
            return NOT_FOUND
        return array[index]
