"""Locale utilities for table directory names and fallback chains.

Table directories use lower_snake_case locale codes ("en_us", "pt_br"),
which may not match what callers pass in ("en-US", "pt_BR"). This module
normalizes codes at the system boundary and derives the region-stripped
partial locale used as an extra fallback ("en_us" -> "en").

Python 3.13+. External dependency: Babel (locale identifier parsing).
"""

from __future__ import annotations

import functools
import logging
import os
from collections.abc import Iterable

from babel.core import parse_locale

from simplestrings.diagnostics import ErrorTemplate

__all__ = [
    "expand_locale_chain",
    "get_partial_locale",
    "get_system_locale",
    "normalize_locale",
]

logger = logging.getLogger(__name__)


def normalize_locale(locale_code: str) -> str:
    """Convert a locale code to lower_snake_case directory form.

    Hyphens become underscores and the result is lower-cased; an encoding
    or modifier suffix ("de_DE.UTF-8", "sr_RS@latin") is dropped.

    Args:
        locale_code: BCP-47 or POSIX locale code (e.g., "en-US", "pt_BR")

    Returns:
        Normalized code (e.g., "en_us", "pt_br")

    Example:
        >>> normalize_locale("en-US")
        'en_us'
        >>> normalize_locale("de_DE.UTF-8")
        'de_de'
        >>> normalize_locale("en")
        'en'
    """
    code = locale_code.strip().split(".", 1)[0].split("@", 1)[0]
    return code.replace("-", "_").lower()


@functools.lru_cache(maxsize=128)
def get_partial_locale(locale_code: str) -> str | None:
    """Get the language-only form of a locale code.

    Parses the code with Babel so that scripts and variants are recognized
    as well as regions ("zh_hant_tw" -> "zh").

    Args:
        locale_code: Locale code in any accepted form

    Returns:
        Normalized language code, or None if the code already is one or
        cannot be parsed

    Example:
        >>> get_partial_locale("en_us")
        'en'
        >>> get_partial_locale("en") is None
        True
    """
    normalized = normalize_locale(locale_code)
    try:
        language = parse_locale(normalized)[0]
    except ValueError as e:
        logger.warning("%s", ErrorTemplate.locale_invalid(locale_code, str(e)))
        return None
    return language if language != normalized else None


def expand_locale_chain(locales: Iterable[str | None]) -> tuple[str, ...]:
    """Build the ordered locale chain for table loading.

    Each requested locale is normalized and followed by its partial
    locale. Empty entries are skipped and duplicates keep their first
    position.

    Args:
        locales: Locale codes in priority order (None/empty entries allowed)

    Returns:
        Normalized locale chain

    Example:
        >>> expand_locale_chain(["es-MX", "en_US"])
        ('es_mx', 'es', 'en_us', 'en')
        >>> expand_locale_chain(["en", None, "en-us"])
        ('en', 'en_us')
    """
    chain: list[str] = []
    for locale_code in locales:
        if not locale_code:
            continue
        chain.append(normalize_locale(locale_code))
        partial = get_partial_locale(locale_code)
        if partial is not None:
            chain.append(partial)
    # dict.fromkeys() removes duplicates while maintaining insertion order
    return tuple(dict.fromkeys(chain))


def get_system_locale(*, raise_on_failure: bool = False) -> str:
    """Detect system locale from OS and environment variables.

    Detection order:
    1. Python locale.getlocale() (OS-level locale)
    2. LC_ALL environment variable (overrides all)
    3. LC_MESSAGES environment variable (for message catalogs)
    4. LANG environment variable (default locale)

    Filters out "C" and "POSIX" pseudo-locales.

    Args:
        raise_on_failure: If True, raise RuntimeError when locale cannot be
            determined. If False (default), return "en_us" as fallback.

    Returns:
        Detected locale code in normalized form.

    Raises:
        RuntimeError: If raise_on_failure is True and locale cannot be determined.

    Example:
        >>> import os
        >>> os.environ['LANG'] = 'de_DE.UTF-8'
        >>> get_system_locale()
        'de_de'
    """
    import locale as locale_module  # noqa: PLC0415

    try:
        system_locale, _ = locale_module.getlocale()
        if system_locale and system_locale not in ("C", "POSIX"):
            return normalize_locale(system_locale)
    except (ValueError, AttributeError):
        pass

    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(var)
        if value and value not in ("C", "POSIX", "C.UTF-8"):
            return normalize_locale(value)

    if raise_on_failure:
        msg = (
            "Could not determine system locale. "
            "Set LC_ALL, LC_MESSAGES, or LANG environment variable."
        )
        raise RuntimeError(msg)

    return "en_us"
