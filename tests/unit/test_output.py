"""Tests for output formatters."""

import json
from datetime import datetime
from io import StringIO

import pytest

from dejoiner.output import (
    JSONFormatter,
    OutputData,
    OutputFormat,
    PlainFormatter,
    RichFormatter,
    get_formatter,
)
from dejoiner.output.base import display_value


class TestOutputData:
    """Tests for OutputData."""

    def test_from_content(self) -> None:
        """Test successful output data."""
        data = OutputData.from_content({"count": 2}, "Import", imported=2)
        assert data.success
        assert data.title == "Import"
        assert data.metadata == {"imported": 2}
        assert data.error is None

    def test_from_error(self) -> None:
        """Test error output data."""
        data = OutputData.from_error("Something went wrong")
        assert not data.success
        assert data.error == "Something went wrong"
        assert data.content == ""


class TestDisplayValue:
    """Tests for display_value."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, ""),
            ("text", "text"),
            (3, "3"),
            (["Cart", "Payment"], "Cart, Payment"),
            ({"a": 1, "b": None}, "a=1, b="),
        ],
    )
    def test_display(self, value: object, expected: str) -> None:
        """Test rendering of common value types."""
        assert display_value(value) == expected


class TestPlainFormatter:
    """Tests for PlainFormatter."""

    def test_format_string(self) -> None:
        """Test formatting string content."""
        formatter = PlainFormatter()
        assert formatter.format(OutputData.from_content("Hello")) == "Hello"

    def test_format_with_title(self) -> None:
        """Test that titles are underlined."""
        output = PlainFormatter().format(OutputData.from_content("Body", "Import"))
        assert output.splitlines()[:3] == ["Import", "------", ""]

    def test_format_dict(self) -> None:
        """Test formatting mapping content."""
        output = PlainFormatter().format(
            OutputData.from_content({"file": "checkout.json", "frames": ["Hero", "Cart"]})
        )
        assert "file: checkout.json" in output
        assert "frames: Hero, Cart" in output

    def test_format_error(self) -> None:
        """Test formatting an error."""
        output = PlainFormatter().format(OutputData.from_error("Resource not found"))
        assert output == "Error: Resource not found"

    def test_metadata_hidden_by_default(self) -> None:
        """Test that metadata only shows when asked."""
        data = OutputData.from_content("Body", candidates=3)
        assert "candidates" not in PlainFormatter().format(data)
        assert "candidates: 3" in PlainFormatter(verbose=True).format(data)
        assert "candidates: 3" in PlainFormatter(show_metadata=True).format(data)

    def test_format_list(self) -> None:
        """Test formatting a list."""
        output = PlainFormatter().format_list(["Checkout Flow", "Design System"])
        assert output == "  Checkout Flow\n  Design System"

    def test_format_table(self) -> None:
        """Test that columns are padded to their widest value."""
        rows = [
            {"Title": "Checkout Flow", "Type": "figma"},
            {"Title": "API", "Type": "github"},
        ]
        lines = PlainFormatter().format_table(rows).splitlines()

        assert lines[0] == "Title          Type"
        assert lines[1] == "-------------  ------"
        assert lines[2] == "Checkout Flow  figma"
        assert lines[3] == "API            github"

    def test_format_table_empty(self) -> None:
        """Test that an empty table renders nothing."""
        assert PlainFormatter().format_table([]) == ""

    def test_print_routes_errors(self) -> None:
        """Test that errors go to the error stream."""
        out, err = StringIO(), StringIO()
        formatter = PlainFormatter(stream=out, error_stream=err)

        formatter.print_content("ok")
        formatter.print(OutputData.from_error("bad"))

        assert out.getvalue() == "ok\n"
        assert err.getvalue() == "Error: bad\n"

    def test_print_text_skips_empty(self) -> None:
        """Test that empty text prints nothing."""
        out = StringIO()
        formatter = PlainFormatter(stream=out)
        formatter.print_text("")
        formatter.print_text("line")
        assert out.getvalue() == "line\n"


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_mapping_is_the_document(self) -> None:
        """Test that a search payload is written as the search response itself."""
        payload = {"query": "promo", "results": [], "totalCount": 0, "queryTime": 0.4}
        output = JSONFormatter().format(OutputData.from_content(payload, "Search", candidates=3))
        assert json.loads(output) == payload

    def test_verbose_meta(self) -> None:
        """Test that metadata appears under meta only when verbose."""
        data = OutputData.from_content({"totalCount": 1}, candidates=3)
        output = json.loads(JSONFormatter(verbose=True).format(data))
        assert output == {"totalCount": 1, "meta": {"candidates": 3}}

    def test_scalar_content_wrapped(self) -> None:
        """Test that non-mapping payloads are wrapped."""
        output = JSONFormatter().format(OutputData.from_content(["r1", "r2"]))
        assert json.loads(output) == {"content": ["r1", "r2"]}

    def test_format_error(self) -> None:
        """Test the error document."""
        output = JSONFormatter().format(OutputData.from_error("Resource not found"))
        assert json.loads(output) == {"error": "Resource not found"}

    def test_non_ascii_kept(self) -> None:
        """Test that non-ASCII text is written as-is."""
        output = JSONFormatter().format(OutputData.from_content("Café"))
        assert "Café" in output

    def test_datetimes_iso(self) -> None:
        """Test that store datetimes are written as ISO 8601."""
        output = JSONFormatter(indent=None).format(
            OutputData.from_content({"lastEditedAt": datetime(2024, 5, 3, 10, 0)})
        )
        assert json.loads(output)["lastEditedAt"] == "2024-05-03T10:00:00"

    def test_format_list(self) -> None:
        """Test that lists are written as arrays."""
        assert json.loads(JSONFormatter().format_list(["a", "b"], title="T")) == ["a", "b"]

    def test_format_table(self) -> None:
        """Test that tables keep only the requested columns."""
        rows = [{"Title": "Checkout", "URL": "https://example.com"}]
        output = json.loads(JSONFormatter().format_table(rows, columns=["Title"]))
        assert output == [{"Title": "Checkout"}]


class TestRichFormatter:
    """Tests for RichFormatter."""

    def test_no_ansi_when_not_a_terminal(self) -> None:
        """Test that output captured to a buffer carries no escape codes."""
        formatter = RichFormatter(stream=StringIO(), width=80)
        output = formatter.format(OutputData.from_content({"file": "checkout.json"}, "Index"))

        assert "\x1b[" not in output
        assert "Index" in output
        assert "checkout.json" in output

    def test_format_error(self) -> None:
        """Test formatting an error."""
        formatter = RichFormatter(stream=StringIO(), width=80)
        assert "Error: Resource not found" in formatter.format(
            OutputData.from_error("Resource not found")
        )

    def test_format_table(self) -> None:
        """Test rendering a table."""
        formatter = RichFormatter(stream=StringIO(), width=80)
        output = formatter.format_table(
            [{"Title": "Checkout Flow", "Type": "figma"}], title="Results"
        )
        assert "Checkout Flow" in output
        assert "Results" in output
        assert formatter.format_table([]) == ""

    def test_format_list(self) -> None:
        """Test rendering a list."""
        formatter = RichFormatter(stream=StringIO(), width=80)
        assert "Checkout Flow" in formatter.format_list(["Checkout Flow"])

    def test_verbose_metadata(self) -> None:
        """Test that metadata shows in verbose mode."""
        data = OutputData.from_content("Body", candidates=3)
        assert "candidates" not in RichFormatter(stream=StringIO(), width=80).format(data)
        assert "candidates" in RichFormatter(
            stream=StringIO(), width=80, verbose=True
        ).format(data)


class TestGetFormatter:
    """Tests for get_formatter."""

    @pytest.mark.parametrize(
        ("name", "formatter_class"),
        [("plain", PlainFormatter), ("JSON", JSONFormatter), ("rich", RichFormatter)],
    )
    def test_by_name(self, name: str, formatter_class: type) -> None:
        """Test looking up formatters by name."""
        assert isinstance(get_formatter(name), formatter_class)

    def test_by_enum(self) -> None:
        """Test looking up formatters by enum."""
        formatter = get_formatter(OutputFormat.PLAIN, verbose=True)
        assert formatter.format_type == OutputFormat.PLAIN
        assert formatter.verbose

    def test_unknown(self) -> None:
        """Test that unknown names are rejected."""
        with pytest.raises(ValueError):
            get_formatter("xml")
