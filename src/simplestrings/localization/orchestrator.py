"""Multi-locale orchestration with fallback chains.

Builds the ordered table list that Strings consumes from locale codes and
table files, then delegates every lookup to a single Strings instance.

Key architectural decisions:
- Eager loading: every table file is read at construction
- Protocol-based TableLoader (dependency inversion)
- Immutable locale chain and table list (established at construction)
- Load failures are recorded, never raised

Load Order:
    For each requested locale (then the default locale), for each resource
    id, the full locale is loaded before its region-stripped partial form:

        es_mx/strings, es/strings, en_us/strings, en/strings

    With resource ids ("game", "shared") the order becomes game/es_mx,
    game/es, shared/es_mx, shared/es, ... so locale-specific game strings
    shadow shared ones and the regional form shadows the language form.

Initialization Behavior:
    FileNotFoundError and other load errors are captured in TableLoadResult
    objects with NOT_FOUND / ERROR status. Call get_load_summary() after
    construction to detect them:

        l10n = StringsLocalization(['de'])
        summary = l10n.get_load_summary()
        if summary.has_errors:
            raise RuntimeError(f"Failed to load {summary.errors} tables")

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from simplestrings.constants import DEFAULT_BASE_PATH, DEFAULT_LOCALE, DEFAULT_RESOURCE_ID
from simplestrings.diagnostics import ErrorTemplate, StringsError, TableLoadError
from simplestrings.enums import LoadStatus
from simplestrings.locale_utils import (
    expand_locale_chain,
    get_partial_locale,
    get_system_locale,
    normalize_locale,
)
from simplestrings.localization.loading import (
    LoadSummary,
    LocaleFallbackInfo,
    PathTableLoader,
    TableLoader,
    TableLoadResult,
)
from simplestrings.localization.types import KeyPath, LocaleCode, ResourceId
from simplestrings.runtime.strings import FallbackInfo, Strings
from simplestrings.runtime.value_types import freeze_table, is_table

if TYPE_CHECKING:
    import random

    from simplestrings.runtime.substitution import Substitutions
    from simplestrings.runtime.value_types import TableValue

__all__ = ["StringsLocalization"]

logger = logging.getLogger(__name__)


class StringsLocalization:
    """String lookups over per-locale JSON tables with fallback chains.

    Wraps one Strings instance whose tables are loaded from disk (or any
    TableLoader) in locale priority order.

    Example - Disk-based tables:
        >>> l10n = StringsLocalization(['es-MX'], base_path="Locale/{locale}")
        >>> l10n.locales
        ('es_mx', 'es', 'en_us', 'en')
        >>> l10n.get_string('monkey')  # from es if present, else en
        'melón'

    Attributes:
        locales: Immutable tuple of normalized locale codes in priority order
    """

    __slots__ = (
        "_load_results",
        "_locales",
        "_on_fallback",
        "_resource_ids",
        "_strings",
        "_table_locales",
    )

    def __init__(
        self,
        locales: Iterable[LocaleCode] | None = None,
        resource_ids: Iterable[ResourceId] = (DEFAULT_RESOURCE_ID,),
        loader: TableLoader | None = None,
        *,
        default_locale: LocaleCode | None = DEFAULT_LOCALE,
        base_path: str = DEFAULT_BASE_PATH,
        on_fallback: Callable[[LocaleFallbackInfo], None] | None = None,
        rng: random.Random | None = None,
        thread_safe: bool = False,
    ) -> None:
        """Initialize and load all tables.

        Args:
            locales: Preferred locale codes in priority order. None uses the
                system locale.
            resource_ids: Table file identifiers loaded for every locale, in
                priority order
            loader: Loader for table documents (default:
                PathTableLoader(base_path))
            default_locale: Locale appended after the requested ones as the
                last resort (None to disable)
            base_path: Path template for the default loader
            on_fallback: Optional callback invoked when a key is resolved
                from a locale other than the primary one
            rng: Random source for ``?`` and ``!`` segments
            thread_safe: Guard ``!`` selection state with a lock

        Raises:
            ValueError: If no locale is given and default_locale is None,
                or resource_ids is empty
        """
        requested = list(locales) if locales is not None else [get_system_locale()]
        if default_locale:
            requested.append(default_locale)
        self._locales: tuple[LocaleCode, ...] = expand_locale_chain(requested)
        if not self._locales:
            msg = "At least one locale is required"
            raise ValueError(msg)

        self._resource_ids: tuple[ResourceId, ...] = tuple(resource_ids)
        if not self._resource_ids:
            msg = "At least one resource_id is required"
            raise ValueError(msg)

        self._on_fallback = on_fallback
        table_loader = loader if loader is not None else PathTableLoader(base_path)

        self._load_results: list[TableLoadResult] = [
            self._load_single_table(locale, resource_id, table_loader)
            for locale, resource_id in self._load_order(requested)
        ]
        loaded = [result for result in self._load_results if result.is_success]
        self._table_locales: tuple[LocaleCode, ...] = tuple(r.locale for r in loaded)

        self._strings = Strings(
            [result.table for result in loaded],
            rng=rng,
            thread_safe=thread_safe,
            on_fallback=self._report_fallback if on_fallback is not None else None,
            # The first loaded table may already belong to a fallback locale
            primary_tables=0,
        )

        summary = self.get_load_summary()
        logger.info(
            "Loaded %d/%d string tables (not found: %d, errors: %d), using locale %s",
            summary.successful,
            summary.total_attempted,
            summary.not_found,
            summary.errors,
            self.used_locale,
        )

    def _load_order(self, requested: list[str]) -> list[tuple[LocaleCode, ResourceId]]:
        """Pair every locale with every resource id in priority order."""
        order: dict[tuple[LocaleCode, ResourceId], None] = {}
        for locale_code in requested:
            if not locale_code:
                continue
            variants = [normalize_locale(locale_code)]
            partial = get_partial_locale(locale_code)
            if partial is not None:
                variants.append(partial)
            for resource_id in self._resource_ids:
                for variant in variants:
                    order.setdefault((variant, resource_id), None)
        return list(order)

    @staticmethod
    def _load_single_table(
        locale: LocaleCode,
        resource_id: ResourceId,
        loader: TableLoader,
    ) -> TableLoadResult:
        """Load one table file and record the result.

        Args:
            locale: Locale code to load the table for
            resource_id: Resource identifier (e.g., 'strings')
            loader: Loader implementation to use

        Returns:
            TableLoadResult indicating success, not_found, or error
        """
        describe = getattr(loader, "describe_path", None)
        source_path = describe(locale, resource_id) if describe else f"{locale}/{resource_id}"

        try:
            document = loader.load(locale, resource_id)
            if not is_table(document):
                raise TableLoadError(
                    ErrorTemplate.load_not_a_table(source_path, type(document).__name__)
                )
            table = freeze_table(document)
        except FileNotFoundError:
            # Expected for locales without their own translation of this file
            logger.debug("%s", ErrorTemplate.load_not_found(source_path))
            return TableLoadResult(
                locale=locale,
                resource_id=resource_id,
                status=LoadStatus.NOT_FOUND,
                source_path=source_path,
            )
        except (OSError, ValueError, RecursionError, StringsError) as e:
            # Permission errors, malformed or too deeply nested JSON, path
            # traversal, non-table roots
            logger.error("Failed to load string table %s: %s", source_path, e)
            return TableLoadResult(
                locale=locale,
                resource_id=resource_id,
                status=LoadStatus.ERROR,
                error=e,
                source_path=source_path,
            )

        logger.debug("Loaded string table %s", source_path)
        return TableLoadResult(
            locale=locale,
            resource_id=resource_id,
            status=LoadStatus.SUCCESS,
            source_path=source_path,
            table=table,
        )

    def _report_fallback(self, info: FallbackInfo) -> None:
        """Translate a table-index fallback into a locale fallback."""
        resolved_locale = self._table_locales[info.table_index]
        primary_locale = self._locales[0]
        if self._on_fallback is not None and resolved_locale != primary_locale:
            self._on_fallback(
                LocaleFallbackInfo(
                    requested_locale=primary_locale,
                    resolved_locale=resolved_locale,
                    key=info.key,
                )
            )

    @property
    def locales(self) -> tuple[LocaleCode, ...]:
        """Get immutable locale fallback chain.

        Returns:
            Tuple of normalized locale codes in priority order
        """
        return self._locales

    @property
    def resource_ids(self) -> tuple[ResourceId, ...]:
        """Table file identifiers loaded per locale."""
        return self._resource_ids

    @property
    def used_locale(self) -> LocaleCode | None:
        """Locale of the highest-priority table that loaded.

        Useful for populating locale metadata fields. None when no table
        loaded at all.
        """
        return self._table_locales[0] if self._table_locales else None

    @property
    def strings(self) -> Strings:
        """Underlying Strings instance."""
        return self._strings

    def get_load_summary(self) -> LoadSummary:
        """Get summary of table load attempts during initialization.

        Returns:
            LoadSummary with aggregated load results in load order

        Example:
            >>> l10n = StringsLocalization(['en', 'de', 'fr'])
            >>> summary = l10n.get_load_summary()
            >>> print(f"Loaded: {summary.successful}/{summary.total_attempted}")
            Loaded: 2/3
            >>> for result in summary.get_not_found():
            ...     print(f"Missing: {result.source_path}")
        """
        return LoadSummary(results=tuple(self._load_results))

    def __repr__(self) -> str:
        """Return string representation for debugging.

        Example:
            >>> StringsLocalization(['lv'])
            StringsLocalization(locales=('lv', 'en_us', 'en'), tables=2)
        """
        return (
            f"StringsLocalization(locales={self._locales!r}, "
            f"tables={self._strings.table_count})"
        )

    def get_string(self, key: KeyPath, *substitutions: TableValue | Substitutions) -> str:
        """Look up a string across the locale chain; see Strings.get_string."""
        return self._strings.get_string(key, *substitutions)

    def get_string_count(self, key: KeyPath) -> int:
        """Array length at key, or -1; see Strings.get_string_count."""
        return self._strings.get_string_count(key)

    def has_string(self, key: KeyPath) -> bool:
        """Check whether key exists in any locale; see Strings.has_string."""
        return self._strings.has_string(key)

    def find_all_string_keys(self, parent_key: KeyPath | None = None) -> list[str]:
        """Keys directly under parent_key; see Strings.find_all_string_keys."""
        return self._strings.find_all_string_keys(parent_key)

    def find_all_string_paths(self, parent_key: KeyPath | None = None) -> list[str]:
        """Leaf paths under parent_key; see Strings.find_all_string_paths."""
        return self._strings.find_all_string_paths(parent_key)

    capitalize = staticmethod(Strings.capitalize)
    capitalize_first_only = staticmethod(Strings.capitalize_first_only)
