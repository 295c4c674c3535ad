"""Unit tests for output formatters."""

import json
from io import StringIO

import pytest

from dtool.output import (
    JSONFormatter,
    OutputData,
    OutputFormat,
    PlainFormatter,
    RichFormatter,
    get_formatter,
)


def _streams() -> tuple[StringIO, StringIO]:
    return StringIO(), StringIO()


class TestOutputData:
    """Tests for OutputData dataclass."""

    def test_create_output_data(self) -> None:
        """Test creating output data."""
        data = OutputData(content=["a", "b"])
        assert data.content == ["a", "b"]
        assert data.title is None
        assert data.metadata == {}
        assert data.error is None
        assert data.success is True

    def test_from_error(self) -> None:
        """Test creating error output data."""
        data = OutputData.from_error("Something went wrong", title="h2s")
        assert data.success is False
        assert data.error == "Something went wrong"
        assert data.title == "h2s"
        assert data.content == []
        assert data.exit_code == 1

    def test_from_content(self) -> None:
        """Test creating content output data."""
        data = OutputData.from_content(("x",), title="s2h", lines=1)
        assert data.success is True
        assert data.content == ["x"]
        assert data.metadata == {"lines": 1}


class TestPlainFormatter:
    """Tests for PlainFormatter."""

    def test_lines(self) -> None:
        """Test that each output line is printed on its own line."""
        out, err = _streams()
        formatter = PlainFormatter(stream=out, error_stream=err)
        formatter.print(OutputData.from_content(["256", "0x100"]))

        assert out.getvalue() == "256\n0x100\n"
        assert err.getvalue() == ""

    def test_error_goes_to_error_stream(self) -> None:
        out, err = _streams()
        formatter = PlainFormatter(stream=out, error_stream=err)
        formatter.print(OutputData.from_error("Invalid hex"))

        assert out.getvalue() == ""
        assert err.getvalue() == "Error: Invalid hex\n"

    def test_empty_output_prints_nothing(self) -> None:
        """Test that a command with no output lines prints nothing."""
        out, err = _streams()
        PlainFormatter(stream=out, error_stream=err).print(OutputData.from_content([]))
        assert out.getvalue() == ""

    def test_empty_line_is_printed(self) -> None:
        out, err = _streams()
        PlainFormatter(stream=out, error_stream=err).print(OutputData.from_content([""]))
        assert out.getvalue() == "\n"

    def test_verbose_metadata(self) -> None:
        formatter = PlainFormatter(verbose=True)
        text = formatter.format(OutputData.from_content(["x"], lines=1))
        assert text == "x\n---\nlines: 1"


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_success(self) -> None:
        out, err = _streams()
        formatter = JSONFormatter(stream=out, error_stream=err)
        formatter.print(OutputData.from_content(["abc"], title="h2s"))

        assert json.loads(out.getvalue()) == {
            "success": True,
            "command": "h2s",
            "output": ["abc"],
        }

    def test_empty_output_is_still_a_document(self) -> None:
        out, err = _streams()
        JSONFormatter(stream=out, error_stream=err).print(OutputData.from_content([], title="re"))
        assert json.loads(out.getvalue())["output"] == []

    def test_error(self) -> None:
        out, err = _streams()
        formatter = JSONFormatter(stream=out, error_stream=err)
        formatter.print(OutputData.from_error("Invalid hex", title="h2s"))

        assert out.getvalue() == ""
        assert json.loads(err.getvalue()) == {
            "success": False,
            "command": "h2s",
            "error": "Invalid hex",
            "exit_code": 1,
        }

    def test_non_ascii_kept(self) -> None:
        formatter = JSONFormatter(indent=None)
        assert "©" in formatter.format(OutputData.from_content(["©"]))


class TestRichFormatter:
    """Tests for RichFormatter."""

    def test_lines_are_not_wrapped_or_highlighted(self) -> None:
        out, err = _streams()
        line = "0x" + "ab" * 100
        RichFormatter(stream=out, error_stream=err, color=False).print(
            OutputData.from_content([line])
        )
        assert out.getvalue() == line + "\n"

    def test_error(self) -> None:
        out, err = _streams()
        RichFormatter(stream=out, error_stream=err, color=False).print(
            OutputData.from_error("bad")
        )
        assert err.getvalue() == "Error: bad\n"
        assert out.getvalue() == ""

    def test_format_is_plain_text(self) -> None:
        formatter = RichFormatter()
        assert formatter.format(OutputData.from_content(["a", "b"])) == "a\nb"


class TestGetFormatter:
    """Tests for get_formatter factory."""

    @pytest.mark.parametrize(
        ("format_type", "expected"),
        [
            ("plain", PlainFormatter),
            ("JSON", JSONFormatter),
            (OutputFormat.RICH, RichFormatter),
        ],
    )
    def test_get_formatter(self, format_type: str, expected: type) -> None:
        assert isinstance(get_formatter(format_type), expected)

    def test_unknown_format(self) -> None:
        with pytest.raises(ValueError):
            get_formatter("xml")

    def test_verbose(self) -> None:
        assert get_formatter("plain", verbose=True).verbose is True
