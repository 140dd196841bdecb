"""Rich terminal output formatter."""

from io import StringIO
from typing import Any, TextIO

from rich.console import Console, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from dejoiner.output.base import OutputData, OutputFormat, OutputFormatter, display_value


class RichFormatter(OutputFormatter):
    """Rich terminal output formatter.

    Renders panels and tables with the Rich library. Output is rendered
    to a string first so it can be captured and tested like the other
    formatters.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        error_stream: TextIO | None = None,
        verbose: bool = False,
        width: int | None = None,
        color: bool = True,
    ) -> None:
        """Initialize rich formatter.

        Args:
            stream: Output stream.
            error_stream: Error stream.
            verbose: Whether to show verbose output.
            width: Console width (None for auto-detect).
            color: Whether to emit ANSI styling when the stream is a terminal.
        """
        super().__init__(stream, error_stream, verbose)
        self._width = width
        self._color = color

    @property
    def format_type(self) -> OutputFormat:
        return OutputFormat.RICH

    def _render(self, *renderables: RenderableType) -> str:
        """Render renderables to a string."""
        string_io = StringIO()
        console = Console(
            file=string_io,
            width=self._width,
            force_terminal=self._color and self._stream.isatty(),
            no_color=not self._color,
            highlight=False,
        )
        for renderable in renderables:
            console.print(renderable)
        return string_io.getvalue().rstrip()

    def format(self, data: OutputData) -> str:
        """Format output data with Rich formatting."""
        if not data.success and data.error:
            error_text = Text(f"Error: {data.error}", style="bold red")
            if data.title:
                return self._render(Panel(error_text, title=data.title, border_style="red"))
            return self._render(error_text)

        content: RenderableType
        if isinstance(data.content, str):
            content = Text(data.content)
        elif isinstance(data.content, list):
            table = Table(show_header=False, box=None)
            table.add_column("Item")
            for item in data.content:
                table.add_row(display_value(item))
            content = table
        else:
            table = Table(show_header=False, box=None, padding=(0, 1))
            table.add_column("Key", style="bold cyan")
            table.add_column("Value")
            for key, value in data.content.items():
                table.add_row(str(key), display_value(value))
            content = table

        renderables: list[RenderableType] = [
            Panel(content, title=data.title) if data.title else content
        ]

        if self._verbose and data.metadata:
            meta_table = Table(title="Metadata", show_header=False, box=None)
            meta_table.add_column("Key", style="dim")
            meta_table.add_column("Value", style="dim")
            for key, value in data.metadata.items():
                meta_table.add_row(str(key), display_value(value))
            renderables.append(meta_table)

        return self._render(*renderables)

    def format_list(self, items: list[str], title: str | None = None) -> str:
        table = Table(show_header=False, box=None)
        table.add_column("Item")
        for item in items:
            table.add_row(f"• {item}")

        if title:
            return self._render(Panel(table, title=title))
        return self._render(table)

    def format_table(
        self,
        rows: list[dict[str, Any]],
        columns: list[str] | None = None,
        title: str | None = None,
    ) -> str:
        if not rows:
            return ""

        if columns is None:
            columns = list(rows[0].keys())

        table = Table(title=title)
        for col in columns:
            table.add_column(col, style="cyan" if col == columns[0] else None)
        for row in rows:
            table.add_row(*[display_value(row.get(col)) for col in columns])

        return self._render(table)
