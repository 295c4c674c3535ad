"""Tests for the usage generator."""

import pytest

from dtool.commands import ModuleManager
from dtool.commands.usage import command_line, render
from dtool.exceptions import InvalidArgumentError


class TestCommandLine:
    """Tests for example command lines."""

    def test_shell_quoting(self, manager: ModuleManager) -> None:
        case = manager.commands["up"].cases[0]
        assert command_line("up", case) == "dtool up 'a b'"


class TestCliFormat:
    """Tests for the cli usage format."""

    def test_render(self, manager: ModuleManager) -> None:
        lines = render(manager, {"format": "cli"})
        assert lines == [
            "Text tools",
            "  Reverse text",
            "    $ dtool rev abc",
            "    cba",
            "  Repeat text",
            "    $ dtool repeat -n 2 ab",
            "    ab",
            "    ab",
            "",
            "Upper case",
            "  Upper-case | pipe",
            "    $ dtool up 'a b'",
            "    A B",
            "  Random output",
            "    $ dtool up x",
            "    whatever",
        ]

    def test_hidden_cases_are_skipped(self, manager: ModuleManager) -> None:
        assert "Hidden repeat" not in "\n".join(render(manager, {}))

    def test_search(self, manager: ModuleManager) -> None:
        """Test filtering on command name, module and description."""
        assert render(manager, {"search": "REV"})[:2] == ["Text tools", "  Reverse text"]
        assert render(manager, {"search": "upper case"})[0] == "Upper case"
        lines = render(manager, {"search": "random"})
        assert lines == ["Upper case", "  Random output", "    $ dtool up x", "    whatever"]

    def test_search_without_match(self, manager: ModuleManager) -> None:
        with pytest.raises(InvalidArgumentError, match="No examples match 'zzz'"):
            render(manager, {"search": "zzz"})

    def test_invalid_format(self, manager: ModuleManager) -> None:
        with pytest.raises(InvalidArgumentError):
            render(manager, {"format": "html"})


class TestMarkdownFormat:
    """Tests for the markdown usage format."""

    def test_render(self, manager: ModuleManager) -> None:
        lines = render(manager, {"format": "markdown", "search": "up"})
        assert lines == [
            "## Upper case",
            "",
            "| Sub command | Desc | Example | Since |",
            "|-------------|------|---------|-------|",
            "| up | Upper-case \\| pipe | `$ dtool up 'a b'`<br>`A B` | 0.1.0 |",
            "| up | Random output | `$ dtool up x`<br>`whatever` | 0.1.0 |",
        ]

    def test_one_section_per_module(self, full_manager: ModuleManager) -> None:
        lines = render(full_manager, {"format": "markdown"})
        headings = [line for line in lines if line.startswith("## ")]
        assert len(headings) == len(full_manager.modules)


class TestUsageCommand:
    """Tests for usage dispatched through the registry."""

    def test_parse_and_run(self, manager: ModuleManager) -> None:
        args = manager.parse("usage", ["-f", "markdown", "-s", "rev"])
        result = manager.execute("usage", args)
        assert result.success is True
        assert result.data[0] == "## Text tools"

    def test_no_match_fails(self, manager: ModuleManager) -> None:
        result = manager.execute("usage", manager.parse("usage", ["-s", "zzz"]))
        assert result.success is False
        assert result.exit_code == 42
