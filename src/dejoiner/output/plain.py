"""Plain text output formatter."""

from typing import Any, TextIO

from dejoiner.output.base import OutputData, OutputFormat, OutputFormatter, display_value


class PlainFormatter(OutputFormatter):
    """Plain text output formatter.

    Produces simple, unformatted text output suitable for
    piping to other commands.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        error_stream: TextIO | None = None,
        verbose: bool = False,
        show_metadata: bool = False,
    ) -> None:
        super().__init__(stream, error_stream, verbose)
        self._show_metadata = show_metadata

    @property
    def format_type(self) -> OutputFormat:
        return OutputFormat.PLAIN

    def _title_lines(self, title: str | None) -> list[str]:
        if not title:
            return []
        return [title, "-" * len(title), ""]

    def format(self, data: OutputData) -> str:
        """Format output data as plain text."""
        lines = self._title_lines(data.title)

        if not data.success and data.error:
            lines.append(f"Error: {data.error}")
            return "\n".join(lines)

        if isinstance(data.content, str):
            lines.append(data.content)
        elif isinstance(data.content, list):
            lines.extend(display_value(item) for item in data.content)
        elif isinstance(data.content, dict):
            for key, value in data.content.items():
                lines.append(f"{key}: {display_value(value)}")

        if (self._verbose or self._show_metadata) and data.metadata:
            lines.append("")
            lines.append("---")
            for key, value in data.metadata.items():
                lines.append(f"{key}: {display_value(value)}")

        return "\n".join(lines)

    def format_list(self, items: list[str], title: str | None = None) -> str:
        lines = self._title_lines(title)
        lines.extend(f"  {item}" for item in items)
        return "\n".join(lines)

    def format_table(
        self,
        rows: list[dict[str, Any]],
        columns: list[str] | None = None,
        title: str | None = None,
    ) -> str:
        """Format data as a plain text table with padded columns."""
        if not rows:
            return ""

        if columns is None:
            columns = list(rows[0].keys())

        widths: dict[str, int] = {}
        for col in columns:
            widths[col] = len(col)
            for row in rows:
                widths[col] = max(widths[col], len(display_value(row.get(col))))

        lines: list[str] = []
        if title:
            lines.append(title)
            lines.append("")

        lines.append("  ".join(col.ljust(widths[col]) for col in columns).rstrip())
        lines.append("  ".join("-" * widths[col] for col in columns))
        for row in rows:
            lines.append(
                "  ".join(
                    display_value(row.get(col)).ljust(widths[col]) for col in columns
                ).rstrip()
            )

        return "\n".join(lines)
