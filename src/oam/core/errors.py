"""
Error types for OAM document loading and configuration.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class OamError(Exception):
    """Base exception for all OAM errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class DocumentLoadError(OamError):
    """
    Raised when an API description cannot be loaded.

    Examples:
    - File missing or unreadable
    - Invalid YAML or JSON
    - Missing ``openapi`` version or ``paths`` mapping
    - Unresolvable ``$ref`` pointer
    """

    pass


class ConfigError(OamError):
    """
    Raised when an ``oam.toml`` file is malformed.

    Examples:
    - Invalid TOML syntax
    - ``seed`` or ``port`` that is not an integer
    """

    pass


@dataclass
class ErrorContext:
    """
    Location of an error inside a loaded document.

    Attributes:
        file: Path to the document
        pointer: Optional JSON pointer to the offending node (e.g. ``/paths/~1users``)
    """

    file: Path
    pointer: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "openapi.yaml at #/components/schemas/User"
        """
        if self.pointer is not None:
            return f"{self.file} at #{self.pointer}"
        return str(self.file)


def make_load_error(
    message: str,
    file: Path | None = None,
    pointer: str | None = None,
) -> DocumentLoadError:
    """
    Helper to create a DocumentLoadError with optional context.

    Args:
        message: Error description
        file: Optional document path
        pointer: Optional JSON pointer inside the document

    Returns:
        DocumentLoadError with context if a file is known
    """
    if file is not None:
        return DocumentLoadError(message, ErrorContext(file=file, pointer=pointer))
    return DocumentLoadError(message)
