"""
Exceptions raised while extracting blocks and expanding macros.
"""

from typing import Optional


class WeaveError(Exception):
    """
    Base exception for errors that abort processing of a single file.

    Attributes:
        message: Human readable description
        path: Source file being processed, when known
    """

    def __init__(self, message: str, path: Optional[str] = None):
        self.message = message
        self.path = path
        super().__init__(message if path is None else f"{path}: {message}")


class DuplicateMacroName(WeaveError):
    """A region declared a macro name that is already registered."""

    def __init__(self, name: str, path: Optional[str] = None):
        self.name = name
        super().__init__(f"Macro '{name}' already exists.", path)


class MacroNotFound(WeaveError):
    """A markdown file referenced a macro that was never registered."""

    def __init__(self, name: str, path: Optional[str] = None):
        self.name = name
        super().__init__(f"Macro '{name}' not found.", path)


class MalformedInput(WeaveError):
    """The token stream contains regions that cannot be turned into macros."""
