"""Shared CLI options for dejoiner commands."""

from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from dejoiner.output.base import OutputFormat


class FormatChoice(str, Enum):
    """Output format choices for CLI."""

    PLAIN = "plain"
    JSON = "json"
    RICH = "rich"


FormatOption = Annotated[
    FormatChoice | None,
    typer.Option(
        "--format",
        "-f",
        help="Output format (plain, json, rich). Defaults to config setting.",
        case_sensitive=False,
    ),
]

VerboseOption = Annotated[
    bool,
    typer.Option(
        "--verbose",
        "-v",
        help="Show verbose output and debug logs.",
    ),
]

DbOption = Annotated[
    Path | None,
    typer.Option(
        "--db",
        help="Resource database file. Defaults to config store.path.",
        dir_okay=False,
    ),
]


def get_output_format(
    format_choice: FormatChoice | None, default: str = "rich"
) -> OutputFormat:
    """Convert CLI format choice to OutputFormat."""
    if format_choice is None:
        return OutputFormat(default)
    return OutputFormat(format_choice.value)
