"""Table loading infrastructure for StringsLocalization.

Provides the protocol for table loaders, a filesystem implementation
reading JSON files with path-traversal protection, and result/summary data
structures for tracking load attempts.

Components:
    TableLoader - Protocol for loading string tables (structural typing)
    PathTableLoader - Disk-based JSON loader with path-traversal prevention
    LocaleFallbackInfo - Immutable record of a locale fallback event
    TableLoadResult - Immutable result of a single table load attempt
    LoadSummary - Immutable aggregate of all load results from initialization

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from simplestrings.constants import TABLE_FILE_SUFFIX
from simplestrings.enums import LoadStatus
from simplestrings.localization.types import KeyPath, LocaleCode, ResourceId

if TYPE_CHECKING:
    from simplestrings.runtime.value_types import Table

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "TableLoader",
    # Concrete loader
    "PathTableLoader",
    # Fallback observability
    "LocaleFallbackInfo",
    # Load result types
    "TableLoadResult",
    "LoadSummary",
]

_LOCALE_PLACEHOLDER = "{locale}"
_RESOURCE_PLACEHOLDER = "{resource_id}"


class TableLoader(Protocol):
    """Protocol for loading string tables for specific locales.

    Implementations must provide a load() method that returns the parsed
    JSON document for a given locale and resource identifier.

    This is a Protocol (structural typing) rather than ABC to allow
    maximum flexibility for users implementing custom loaders (bundled
    package data, HTTP, in-memory fixtures).

    Example:
        >>> class MemoryLoader:
        ...     def __init__(self, documents: dict[str, object]) -> None:
        ...         self.documents = documents
        ...     def load(self, locale: str, resource_id: str) -> object:
        ...         try:
        ...             return self.documents[f"{locale}/{resource_id}"]
        ...         except KeyError:
        ...             raise FileNotFoundError(locale, resource_id) from None
        ...     def describe_path(self, locale: str, resource_id: str) -> str:
        ...         return f"memory:{locale}/{resource_id}"
    """

    def load(self, locale: LocaleCode, resource_id: ResourceId) -> object:
        """Load the table document for given locale.

        Args:
            locale: Normalized locale code (e.g., 'en_us', 'es')
            resource_id: Resource identifier (e.g., 'strings')

        Returns:
            Parsed JSON document (a dict or list for a usable table)

        Raises:
            FileNotFoundError: If the table doesn't exist for this locale
            OSError: If the file cannot be read
            ValueError: If the file is not valid JSON
        """

    def describe_path(self, locale: LocaleCode, resource_id: ResourceId) -> str:
        """Return human-readable path for diagnostics.

        Default implementation returns a generic "{locale}/{resource_id}" string.
        Override in concrete loaders that know the physical path.
        """
        return f"{locale}/{resource_id}"


@dataclass(frozen=True, slots=True)
class PathTableLoader:
    """File system table loader using path templates.

    Implements TableLoader for JSON files on disk. The ``{locale}``
    placeholder in base_path is replaced by the locale code. The resource
    id is substituted for a ``{resource_id}`` placeholder when present,
    otherwise appended as a path component. ``.json`` is added unless the
    resource id already ends with it.

    Security:
        Validates both locale and resource_id to prevent directory traversal.
        Locale codes containing path separators or ".." are rejected.
        Resource IDs containing ".." or absolute paths are rejected.
        All resolved paths are validated against a fixed root directory.

    Example:
        >>> loader = PathTableLoader("Locale/{locale}")
        >>> loader.describe_path("en_us", "strings")
        'Locale/en_us/strings.json'
        >>> shared = PathTableLoader("Locale/{resource_id}/{locale}/strings")
        >>> shared.describe_path("en", "game")
        'Locale/game/en/strings.json'

    Attributes:
        base_path: Path template with {locale} placeholder
        root_dir: Fixed root directory for path traversal validation.
                  Defaults to the static prefix of base_path.
    """

    base_path: str
    root_dir: str | None = None
    _resolved_root: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Cache resolved root directory and validate template at initialization.

        Raises:
            ValueError: If base_path does not contain {locale} placeholder
        """
        # Without the placeholder every locale would read the same file
        if _LOCALE_PLACEHOLDER not in self.base_path:
            msg = (
                f"base_path must contain '{{locale}}' placeholder for locale substitution, "
                f"got: '{self.base_path}'"
            )
            raise ValueError(msg)

        if self.root_dir is not None:
            resolved = Path(self.root_dir).resolve()
        else:
            # Static prefix before the first placeholder: "Locale/{locale}" -> "Locale"
            static_prefix = self.base_path.split("{", 1)[0].rstrip("/\\")
            resolved = Path(static_prefix).resolve() if static_prefix else Path.cwd().resolve()
        object.__setattr__(self, "_resolved_root", resolved)

    @staticmethod
    def _validate_locale(locale: LocaleCode) -> None:
        """Validate locale code for path traversal attacks.

        Raises:
            ValueError: If locale contains unsafe path components
        """
        if not locale:
            msg = "Locale code cannot be empty"
            raise ValueError(msg)
        if ".." in locale:
            msg = f"Path traversal sequences not allowed in locale: '{locale}'"
            raise ValueError(msg)
        if "/" in locale or "\\" in locale:
            msg = f"Path separators not allowed in locale: '{locale}'"
            raise ValueError(msg)

    @staticmethod
    def _validate_resource_id(resource_id: ResourceId) -> None:
        """Validate resource_id for path traversal attacks and whitespace.

        Raises:
            ValueError: If resource_id contains unsafe path components or
                       leading/trailing whitespace
        """
        stripped = resource_id.strip()
        if not stripped:
            msg = "Resource ID cannot be empty"
            raise ValueError(msg)
        if stripped != resource_id:
            msg = (
                f"Resource ID contains leading/trailing whitespace: {resource_id!r}. "
                f"Stripped would be: {stripped!r}"
            )
            raise ValueError(msg)
        if Path(resource_id).is_absolute() or resource_id.startswith(("/", "\\")):
            msg = f"Absolute paths not allowed in resource_id: '{resource_id}'"
            raise ValueError(msg)
        if ".." in resource_id:
            msg = f"Path traversal sequences not allowed in resource_id: '{resource_id}'"
            raise ValueError(msg)

    @staticmethod
    def _is_safe_path(base_dir: Path, full_path: Path) -> bool:
        """Check if full_path resolves to a location inside base_dir."""
        try:
            full_path.resolve().relative_to(base_dir.resolve())
            return True
        except ValueError:
            return False

    def describe_path(self, locale: LocaleCode, resource_id: ResourceId) -> str:
        """Return the locale- and resource-substituted file path."""
        # replace() instead of format() so unrelated braces stay literal
        path = self.base_path.replace(_LOCALE_PLACEHOLDER, locale)
        if _RESOURCE_PLACEHOLDER in path:
            path = path.replace(_RESOURCE_PLACEHOLDER, resource_id)
        else:
            path = f"{path.rstrip('/')}/{resource_id}"
        if not path.endswith(TABLE_FILE_SUFFIX):
            path += TABLE_FILE_SUFFIX
        return path

    def load(self, locale: LocaleCode, resource_id: ResourceId) -> object:
        """Load and parse a JSON table file from disk.

        Args:
            locale: Locale code to substitute in path template
            resource_id: Table file identifier (e.g., 'strings')

        Returns:
            Parsed JSON document

        Raises:
            ValueError: If locale or resource_id contains path traversal
                sequences, or the file is not valid UTF-8 JSON
                (including documents nested too deeply to parse)
            FileNotFoundError: If file doesn't exist
            OSError: If file cannot be read
        """
        self._validate_locale(locale)
        self._validate_resource_id(resource_id)

        full_path = Path(self.describe_path(locale, resource_id)).resolve()
        if not self._is_safe_path(self._resolved_root, full_path):
            msg = (
                f"Path traversal detected: resolved path escapes root directory. "
                f"locale='{locale}', resource_id='{resource_id}'"
            )
            raise ValueError(msg)

        with full_path.open(encoding="utf-8") as f:
            try:
                return json.load(f)
            except RecursionError as e:
                msg = f"JSON nesting too deep to parse: '{full_path}'"
                raise ValueError(msg) from e


@dataclass(frozen=True, slots=True)
class LocaleFallbackInfo:
    """Information about a locale fallback event.

    Provided to the on_fallback callback when StringsLocalization resolves
    a key from a fallback locale instead of the primary locale.

    Attributes:
        requested_locale: The primary (first) locale in the chain
        resolved_locale: The locale whose table contained the key
        key: The key path that was resolved

    Example:
        >>> def log_fallback(info: LocaleFallbackInfo) -> None:
        ...     print(f"Fallback: {info.key} resolved from "
        ...           f"{info.resolved_locale} (requested {info.requested_locale})")
        >>> l10n = StringsLocalization(['es_mx'], on_fallback=log_fallback)
    """

    requested_locale: LocaleCode
    resolved_locale: LocaleCode
    key: KeyPath


@dataclass(frozen=True, slots=True)
class TableLoadResult:
    """Result of loading a single table file.

    Attributes:
        locale: Locale code for this table
        resource_id: Resource identifier (e.g., 'strings')
        status: Load status (success, not_found, error)
        error: Exception if status is ERROR, None otherwise
        source_path: Human-readable path to the file (if available)
        table: Frozen table if status is SUCCESS, None otherwise
    """

    locale: LocaleCode
    resource_id: ResourceId
    status: LoadStatus
    error: Exception | None = None
    source_path: str | None = None
    table: Table | None = field(default=None, repr=False, compare=False)

    @property
    def is_success(self) -> bool:
        """Check if table loaded successfully."""
        return self.status == LoadStatus.SUCCESS

    @property
    def is_not_found(self) -> bool:
        """Check if table was not found (expected for partial translations)."""
        return self.status == LoadStatus.NOT_FOUND

    @property
    def is_error(self) -> bool:
        """Check if table load failed with an error."""
        return self.status == LoadStatus.ERROR


@dataclass(frozen=True, slots=True)
class LoadSummary:
    """Immutable aggregate of table load results from StringsLocalization initialization.

    All statistics are computed properties derived from the ``results`` tuple.

    Attributes:
        results: All individual load results in load (priority) order

    Example:
        >>> l10n = StringsLocalization(['de', 'en'])
        >>> summary = l10n.get_load_summary()
        >>> if summary.errors > 0:
        ...     for result in summary.get_errors():
        ...         print(f"Failed: {result.source_path}: {result.error}")
    """

    results: tuple[TableLoadResult, ...]

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"LoadSummary(total={self.total_attempted}, "
            f"ok={self.successful}, "
            f"not_found={self.not_found}, "
            f"errors={self.errors})"
        )

    @property
    def total_attempted(self) -> int:
        """Total number of load attempts."""
        return len(self.results)

    @property
    def successful(self) -> int:
        """Number of successful loads."""
        return sum(1 for r in self.results if r.is_success)

    @property
    def not_found(self) -> int:
        """Number of tables not found."""
        return sum(1 for r in self.results if r.is_not_found)

    @property
    def errors(self) -> int:
        """Number of load errors."""
        return sum(1 for r in self.results if r.is_error)

    def get_errors(self) -> tuple[TableLoadResult, ...]:
        """Get all results with errors."""
        return tuple(r for r in self.results if r.is_error)

    def get_not_found(self) -> tuple[TableLoadResult, ...]:
        """Get all results where the table was not found."""
        return tuple(r for r in self.results if r.is_not_found)

    def get_successful(self) -> tuple[TableLoadResult, ...]:
        """Get all successful load results."""
        return tuple(r for r in self.results if r.is_success)

    def get_by_locale(self, locale: LocaleCode) -> tuple[TableLoadResult, ...]:
        """Get all results for a specific locale."""
        return tuple(r for r in self.results if r.locale == locale)

    @property
    def has_errors(self) -> bool:
        """Check if any tables failed to load with errors."""
        return self.errors > 0

    @property
    def all_successful(self) -> bool:
        """Check if every attempted table was found and loaded.

        Returns:
            True if errors == 0 and not_found == 0
        """
        return self.errors == 0 and self.not_found == 0
