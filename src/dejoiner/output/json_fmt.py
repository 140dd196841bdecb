"""JSON output for scripts and the search API shape."""

import json
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any, TextIO

from dejoiner.output.base import OutputData, OutputFormat, OutputFormatter


def _json_default(value: Any) -> Any:
    # lastEditedAt and friends come back from DuckDB as datetimes
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


class JSONFormatter(OutputFormatter):
    """Writes command payloads as JSON documents.

    A mapping payload is written as the document itself, so
    ``dejoiner search --format json`` prints the same
    ``{"query", "results", "totalCount", "queryTime"}`` object the quick
    search endpoint returns. Any other payload is wrapped as
    ``{"content": ...}`` and failures as ``{"error": ...}``. Titles are
    for people and are left out; metadata is included under ``"meta"``
    only in verbose mode.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        error_stream: TextIO | None = None,
        verbose: bool = False,
        indent: int | None = 2,
    ) -> None:
        super().__init__(stream, error_stream, verbose)
        self._indent = indent

    @property
    def format_type(self) -> OutputFormat:
        return OutputFormat.JSON

    def _to_json(self, data: Any) -> str:
        return json.dumps(data, indent=self._indent, ensure_ascii=False, default=_json_default)

    def format(self, data: OutputData) -> str:
        if not data.success:
            return self._to_json({"error": data.error})

        if isinstance(data.content, Mapping):
            document = dict(data.content)
        else:
            document = {"content": data.content}

        if self._verbose and data.metadata:
            document["meta"] = data.metadata
        return self._to_json(document)

    def format_list(self, items: list[str], title: str | None = None) -> str:
        return self._to_json(items)

    def format_table(
        self,
        rows: list[dict[str, Any]],
        columns: list[str] | None = None,
        title: str | None = None,
    ) -> str:
        if columns:
            rows = [{column: row.get(column) for column in columns} for row in rows]
        return self._to_json(rows)
