"""
Error types for xplot expression parsing and configuration.
"""

from dataclasses import dataclass
from typing import Optional


class XplotError(Exception):
    """Base exception for all xplot errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.message}\n{self.context.format()}"
        return self.message


class ParseError(XplotError):
    """
    Raised when an expression string cannot be parsed.

    Examples:
    - Unexpected tokens
    - Unbalanced parentheses
    - Unknown identifiers
    - Malformed numeric literals
    - Trailing input after a complete expression
    """

    def __init__(self, message: str, pos: int = 0, source: str | None = None):
        self.pos = pos
        self.source = source
        context = ErrorContext(source=source, column=pos + 1) if source is not None else None
        super().__init__(message, context)


class ConfigError(XplotError):
    """
    Raised when xplot.toml cannot be read or holds invalid values.
    """

    pass


@dataclass
class ErrorContext:
    """
    Location of an error inside an expression string.

    Attributes:
        source: The full expression text
        column: Column number (1-indexed)
    """

    source: str
    column: int

    def format(self) -> str:
        """
        Format the expression with a marker under the error column.

        Returns:
            Two lines like:
                "  1 + * 2"
                "      ^"
        """
        prefix = "  "
        marker_pos = len(prefix) + self.column - 1
        return f"{prefix}{self.source}\n" + " " * marker_pos + "^"
