"""Capitalization helpers for resolved strings.

Python 3.13+. Zero external dependencies.
"""

__all__ = ["capitalize", "capitalize_first_only"]


def capitalize(text: str) -> str:
    """Upper-case the first character, leaving the rest untouched.

    Example:
        >>> capitalize("hello world")
        'Hello world'
        >>> capitalize("hELLO")
        'HELLO'
    """
    return text[:1].upper() + text[1:]


def capitalize_first_only(text: str) -> str:
    """Upper-case the first character and lower-case the rest.

    Example:
        >>> capitalize_first_only("heLlO WoRlD")
        'Hello world'
    """
    return text[:1].upper() + text[1:].lower()
