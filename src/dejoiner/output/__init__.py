"""Output formatting (rich, plain, JSON).

Usage:
    from dejoiner.output import get_formatter

    formatter = get_formatter("plain")
    formatter.print_content({"query": "checkout", "totalCount": 2})
    print(formatter.format_table([{"Title": "Checkout Flow", "Type": "figma"}]))
"""

from typing import Any

from dejoiner.output.base import OutputData, OutputFormat, OutputFormatter
from dejoiner.output.json_fmt import JSONFormatter
from dejoiner.output.plain import PlainFormatter
from dejoiner.output.rich_fmt import RichFormatter

__all__ = [
    # Base classes
    "OutputFormatter",
    "OutputData",
    "OutputFormat",
    # Formatters
    "PlainFormatter",
    "JSONFormatter",
    "RichFormatter",
    "get_formatter",
]


def get_formatter(
    format_type: OutputFormat | str,
    verbose: bool = False,
    **kwargs: Any,
) -> OutputFormatter:
    """Get a formatter instance by format type.

    Args:
        format_type: The output format to use.
        verbose: Whether to enable verbose output.
        **kwargs: Additional formatter-specific options.

    Returns:
        An OutputFormatter instance.

    Raises:
        ValueError: If format_type is not recognized.
    """
    if isinstance(format_type, str):
        format_type = OutputFormat(format_type.lower())

    formatters: dict[OutputFormat, type[OutputFormatter]] = {
        OutputFormat.PLAIN: PlainFormatter,
        OutputFormat.JSON: JSONFormatter,
        OutputFormat.RICH: RichFormatter,
    }

    formatter_class = formatters.get(format_type)
    if formatter_class is None:
        raise ValueError(f"Unknown format type: {format_type}")

    return formatter_class(verbose=verbose, **kwargs)
