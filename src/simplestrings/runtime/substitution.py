"""Template substitution for resolved strings.

Fills ``{{name}}`` tokens from caller arguments:
    - Sequence arguments: name is a zero-based index ("{{0}}", "{{1}}")
    - Mapping arguments: name is looked up directly ("{{player}}")

A token with no matching argument is replaced by ``ERROR-NO-SUB-<name>``
so the rest of the text still renders. Replacement is a single pass:
substituted text is never scanned for further tokens.

Python 3.13+. Zero external dependencies.
"""

import logging
import re
from collections.abc import Mapping, Sequence

from simplestrings.constants import FALLBACK_MISSING_SUBSTITUTION
from simplestrings.diagnostics import ErrorTemplate
from simplestrings.runtime.value_types import TableValue, to_text

__all__ = ["Substitutions", "has_tokens", "substitute"]

logger = logging.getLogger(__name__)

type Substitutions = Sequence[TableValue] | Mapping[str, TableValue]
"""Positional (list/tuple) or named (mapping) template arguments."""

_TOKEN_PATTERN = re.compile(r"\{\{([A-Za-z0-9_]+)\}\}")

# Cheap pre-check before running the regex
_TOKEN_OPEN = "{{"


def has_tokens(template: str) -> bool:
    """Check whether template contains at least one substitution token."""
    return _TOKEN_OPEN in template and _TOKEN_PATTERN.search(template) is not None


def substitute(template: str, args: Substitutions | None) -> str:
    """Fill substitution tokens in template.

    Args:
        template: Resolved string, possibly containing ``{{name}}`` tokens
        args: Positional or named substitutions (None or empty for none)

    Returns:
        Filled string. When args is None or an empty sequence, or the
        template has no tokens, the template object itself is returned
        unchanged. An empty mapping still fills every token, with
        missing-substitution markers.

    Example:
        >>> substitute("Goodbye, {{0}}!", ["Bob"])
        'Goodbye, Bob!'
        >>> substitute("Hi {{who}}", {"who": "Eli"})
        'Hi Eli'
        >>> substitute("Hi {{who}}", {})
        'Hi ERROR-NO-SUB-who'
        >>> substitute("Hi {{who}}", [])
        'Hi {{who}}'
    """
    if args is None or _TOKEN_OPEN not in template:
        return template
    if not isinstance(args, Mapping) and len(args) == 0:
        return template

    def replace(match: re.Match[str]) -> str:
        name = match.group(1)
        found, value = _lookup(args, name)
        if not found:
            logger.warning("%s", ErrorTemplate.substitution_missing(name))
            return FALLBACK_MISSING_SUBSTITUTION.format(name=name)
        return to_text(value)

    return _TOKEN_PATTERN.sub(replace, template)


def _lookup(args: Substitutions, name: str) -> tuple[bool, TableValue]:
    """Find the argument for a token name.

    Returns:
        (found, value) - value is None when not found
    """
    match args:
        case Mapping():
            if name in args:
                return True, args[name]
            return False, None
        case Sequence():
            if not (name.isascii() and name.isdigit()):
                return False, None
            index = int(name)
            if index < len(args):
                return True, args[index]
            return False, None
        case _:
            return False, None
