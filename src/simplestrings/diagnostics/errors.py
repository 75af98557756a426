"""SimpleStrings exception hierarchy with structured diagnostics.

Lookups never raise: missing strings, wrong node types and missing
substitutions are rendered inline into the returned text. These exceptions
are reserved for programmer misuse, such as registering something that is
not a table.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class StringsError(Exception):
    """Base exception for all SimpleStrings errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize StringsError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class InvalidTableError(StringsError, TypeError):
    """Value passed as a table is not a JSON-compatible mapping or sequence.

    Raised at construction time. Also a TypeError so callers treating it as
    a plain argument-type error keep working.
    """


class DepthLimitExceededError(StringsError):
    """Table nesting exceeds the configured maximum depth.

    Raised while validating a table at construction time.
    """


class TableLoadError(StringsError):
    """A table file was read but does not hold a usable table.

    Captured in TableLoadResult by the localization layer rather than
    propagated out of StringsLocalization construction.
    """
