"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Centralized error message templates.

    All diagnostics are created here. NO f-strings in exception constructors!
    Keeps messages testable and documents every failure case in one place.
    """

    @staticmethod
    def string_not_found(key: str) -> Diagnostic:
        """Key path not present in any table.

        Args:
            key: The key path that was looked up

        Returns:
            Diagnostic for STRING_NOT_FOUND
        """
        msg = f"String '{key}' not found in any table"
        return Diagnostic(
            code=DiagnosticCode.STRING_NOT_FOUND,
            message=msg,
            hint="Check the key path segments against the loaded tables",
            key=key,
            severity="warning",
        )

    @staticmethod
    def bad_type(key: str, kind: str) -> Diagnostic:
        """Key path resolved to something that does not read as a string.

        Args:
            key: The key path that was looked up
            kind: Value kind found at the path

        Returns:
            Diagnostic for BAD_TYPE
        """
        msg = f"String '{key}' resolved to a {kind}, expected a string"
        return Diagnostic(
            code=DiagnosticCode.BAD_TYPE,
            message=msg,
            hint="Point the key at a string, or give the object a string 'name' field",
            key=key,
            severity="warning",
        )

    @staticmethod
    def substitution_missing(name: str) -> Diagnostic:
        """Template token with no matching argument.

        Args:
            name: Token name between the double braces

        Returns:
            Diagnostic for SUBSTITUTION_MISSING
        """
        msg = f"No substitution provided for '{{{{{name}}}}}'"
        return Diagnostic(
            code=DiagnosticCode.SUBSTITUTION_MISSING,
            message=msg,
            hint="Pass a list for numbered tokens or a mapping for named tokens",
            severity="warning",
        )

    @staticmethod
    def invalid_key() -> Diagnostic:
        """Key is empty or not a string.

        Returns:
            Diagnostic for INVALID_KEY
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_KEY,
            message="Invalid key: empty or non-string",
            severity="warning",
        )

    @staticmethod
    def table_invalid(type_name: str) -> Diagnostic:
        """Object registered as a table is not a mapping or sequence.

        Args:
            type_name: Type name of the rejected object

        Returns:
            Diagnostic for TABLE_INVALID
        """
        msg = f"Table must be a mapping or a sequence, got {type_name}"
        return Diagnostic(
            code=DiagnosticCode.TABLE_INVALID,
            message=msg,
            hint="Pass the parsed JSON document (a dict or list), or a list of them",
        )

    @staticmethod
    def table_key_invalid(path: str, type_name: str) -> Diagnostic:
        """Mapping inside a table has a non-string key.

        Args:
            path: Key path of the offending mapping
            type_name: Type name of the rejected key

        Returns:
            Diagnostic for TABLE_KEY_INVALID
        """
        msg = f"Table mapping key must be a string, got {type_name}"
        return Diagnostic(
            code=DiagnosticCode.TABLE_KEY_INVALID,
            message=msg,
            hint="JSON object keys are always strings",
            key=path or "<root>",
        )

    @staticmethod
    def table_value_invalid(path: str, type_name: str) -> Diagnostic:
        """Table contains a value JSON cannot represent.

        Args:
            path: Key path of the offending value
            type_name: Type name of the rejected value

        Returns:
            Diagnostic for TABLE_VALUE_INVALID
        """
        msg = f"Table value must be JSON-compatible, got {type_name}"
        return Diagnostic(
            code=DiagnosticCode.TABLE_VALUE_INVALID,
            message=msg,
            hint="Allowed: str, int, float, bool, None, list, tuple, dict",
            key=path or "<root>",
        )

    @staticmethod
    def depth_exceeded(max_depth: int) -> Diagnostic:
        """Table nested deeper than the validation limit.

        Args:
            max_depth: Maximum nesting depth

        Returns:
            Diagnostic for MAX_DEPTH_EXCEEDED
        """
        msg = f"Maximum table nesting depth ({max_depth}) exceeded"
        return Diagnostic(
            code=DiagnosticCode.MAX_DEPTH_EXCEEDED,
            message=msg,
            hint="Flatten the table; string tables rarely need more than a few levels",
        )

    @staticmethod
    def load_not_found(source_path: str) -> Diagnostic:
        """Table file does not exist for a locale.

        Args:
            source_path: Human-readable path of the missing file

        Returns:
            Diagnostic for LOAD_NOT_FOUND
        """
        msg = f"No string table at {source_path}"
        return Diagnostic(
            code=DiagnosticCode.LOAD_NOT_FOUND,
            message=msg,
            hint="Expected for partial translations; lookups fall back to later locales",
            key=source_path,
            severity="warning",
        )

    @staticmethod
    def load_not_a_table(source_path: str, type_name: str) -> Diagnostic:
        """Table file parsed to a JSON scalar.

        Args:
            source_path: Human-readable path of the file
            type_name: Type name of the parsed document root

        Returns:
            Diagnostic for LOAD_FAILED
        """
        msg = f"Table file must hold a JSON object or array, got {type_name}"
        return Diagnostic(
            code=DiagnosticCode.LOAD_FAILED,
            message=msg,
            key=source_path,
        )

    @staticmethod
    def locale_invalid(locale_code: str, reason: str) -> Diagnostic:
        """Locale code could not be parsed.

        Args:
            locale_code: The rejected locale code
            reason: Parser message

        Returns:
            Diagnostic for LOCALE_INVALID
        """
        msg = f"Locale code '{locale_code}' is not a valid identifier: {reason}"
        return Diagnostic(
            code=DiagnosticCode.LOCALE_INVALID,
            message=msg,
            hint="Use language[_REGION] codes such as 'en', 'en_us' or 'pt-BR'",
            severity="warning",
        )
