"""Output formatter protocol and base classes."""

import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, TextIO

from dejoiner.config.schema import OutputFormat


@dataclass
class OutputData:
    """Container for output data to be formatted.

    Attributes:
        content: The main content to display.
        title: Optional title for the output.
        metadata: Additional metadata (counts, timing, etc.).
        error: Error message if operation failed.
        success: Whether the operation was successful.
    """

    content: str | list[Any] | dict[str, Any]
    title: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    error: str | None = None
    success: bool = True

    @classmethod
    def from_error(cls, error: str, title: str | None = None) -> "OutputData":
        """Create an OutputData instance for an error."""
        return cls(content="", title=title, error=error, success=False)

    @classmethod
    def from_content(
        cls,
        content: str | list[Any] | dict[str, Any],
        title: str | None = None,
        **metadata: Any,
    ) -> "OutputData":
        """Create an OutputData instance for successful output."""
        return cls(content=content, title=title, metadata=metadata, success=True)


def display_value(value: Any) -> str:
    """Render a value for human-readable (non-JSON) output."""
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ", ".join(display_value(item) for item in value)
    if isinstance(value, dict):
        return ", ".join(f"{k}={display_value(v)}" for k, v in value.items())
    return str(value)


class OutputFormatter(ABC):
    """Abstract base class for output formatters.

    Formatters render command results to the terminal as plain text,
    JSON or Rich tables.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        error_stream: TextIO | None = None,
        verbose: bool = False,
    ) -> None:
        """Initialize the formatter.

        Args:
            stream: Output stream (defaults to stdout).
            error_stream: Error stream (defaults to stderr).
            verbose: Whether to show verbose output.
        """
        self._stream = stream or sys.stdout
        self._error_stream = error_stream or sys.stderr
        self._verbose = verbose

    @property
    def stream(self) -> TextIO:
        return self._stream

    @property
    def error_stream(self) -> TextIO:
        return self._error_stream

    @property
    def verbose(self) -> bool:
        return self._verbose

    @property
    @abstractmethod
    def format_type(self) -> OutputFormat:
        """Get the format type of this formatter."""
        pass

    @abstractmethod
    def format(self, data: OutputData) -> str:
        """Format output data as a string.

        Args:
            data: The output data to format.

        Returns:
            Formatted string representation.
        """
        pass

    def print(self, data: OutputData) -> None:
        """Format and print output data.

        Errors go to the error stream.
        """
        formatted = self.format(data)
        if data.success:
            print(formatted, file=self._stream)
        else:
            print(formatted, file=self._error_stream)

    def print_content(
        self,
        content: str | list[Any] | dict[str, Any],
        title: str | None = None,
        **metadata: Any,
    ) -> None:
        self.print(OutputData.from_content(content, title, **metadata))

    def print_text(self, text: str) -> None:
        """Print an already formatted string."""
        if text:
            print(text, file=self._stream)

    @abstractmethod
    def format_list(self, items: list[str], title: str | None = None) -> str:
        """Format a list of items.

        Args:
            items: List of strings to format.
            title: Optional title.
        """
        pass

    @abstractmethod
    def format_table(
        self,
        rows: list[dict[str, Any]],
        columns: list[str] | None = None,
        title: str | None = None,
    ) -> str:
        """Format data as a table.

        Args:
            rows: List of row dictionaries.
            columns: Column names (inferred from rows if None).
            title: Optional title.
        """
        pass
