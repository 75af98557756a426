"""Diagnostic codes and data structures.

Defines error codes and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Lookup problems (rendered inline, never raised by lookups)
        2000-2999: Table problems (raised at registration time)
        3000-3999: Loading problems (recorded in load results)
    """

    # Lookup (1000-1999)
    STRING_NOT_FOUND = 1001
    BAD_TYPE = 1002
    SUBSTITUTION_MISSING = 1003
    INVALID_KEY = 1004

    # Table (2000-2999)
    TABLE_INVALID = 2001
    TABLE_KEY_INVALID = 2002
    TABLE_VALUE_INVALID = 2003
    MAX_DEPTH_EXCEEDED = 2004

    # Loading (3000-3999)
    LOAD_NOT_FOUND = 3001
    LOAD_FAILED = 3002
    LOCALE_INVALID = 3003


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        key: Key path or table location the diagnostic refers to
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    key: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like a compiler message.

        Control characters in the message are escaped so that table content
        echoed into a diagnostic cannot forge extra log lines.

        Example output:
            error[TABLE_KEY_INVALID]: Table mapping key must be a string, got int
              --> intro/options
              = help: JSON object keys are always strings

        Returns:
            Formatted error message
        """
        lines = [f"{self.severity}[{self.code.name}]: {_escape(self.message)}"]
        if self.key is not None:
            lines.append(f"  --> {_escape(self.key)}")
        if self.hint:
            lines.append(f"  = help: {_escape(self.hint)}")
        return "\n".join(lines)


def _escape(text: str) -> str:
    """Escape newlines and other control characters for single-line output."""
    return "".join(
        char.encode("unicode_escape").decode("ascii") if ord(char) < 0x20 else char
        for char in text
    )
