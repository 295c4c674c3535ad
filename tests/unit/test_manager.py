"""Tests for the command registry."""

from io import StringIO

import click
import pytest

from dtool.commands import Arg, Command, CommandSchema, Module, ModuleManager
from dtool.exceptions import (
    DuplicateCommandError,
    RegistryLockedError,
    UnknownCommandError,
)
from dtool.output import JSONFormatter, PlainFormatter


def _plain() -> tuple[PlainFormatter, StringIO, StringIO]:
    out, err = StringIO(), StringIO()
    return PlainFormatter(stream=out, error_stream=err), out, err


def _single(name: str) -> Module:
    def factory() -> list[Command]:
        return [
            Command(
                schema=CommandSchema(name, "Duplicate", args=(Arg.input("Text"),)),
                func=lambda args: [args["input"]],
            )
        ]

    return Module(name, f"Module {name}", factory)


class TestRegistration:
    """Tests for building the registry."""

    def test_registration_order(self, manager: ModuleManager) -> None:
        assert manager.names() == ["rev", "repeat", "up"]
        assert list(manager.commands) == ["rev", "repeat", "up"]
        assert [m.name for m in manager.modules] == ["text", "upper"]

    def test_commands_is_read_only(self, manager: ModuleManager) -> None:
        with pytest.raises(TypeError):
            manager.commands["x"] = manager.commands["rev"]  # type: ignore[index]

    def test_duplicate_name(self, text_module: Module) -> None:
        with pytest.raises(DuplicateCommandError):
            ModuleManager([text_module, _single("rev")])

    @pytest.mark.parametrize("name", ["usage", "completion"])
    def test_builtin_names_are_reserved(self, name: str) -> None:
        with pytest.raises(DuplicateCommandError):
            ModuleManager([_single(name)])

    def test_register_after_construction(self, manager: ModuleManager) -> None:
        with pytest.raises(RegistryLockedError):
            manager.register(_single("late").commands())

    def test_empty_registry(self) -> None:
        manager = ModuleManager([])
        assert manager.names() == []
        assert [s.name for s in manager.schemas()] == ["usage", "completion"]


class TestLookup:
    """Tests for registry queries."""

    def test_schemas_end_with_builtins(self, manager: ModuleManager) -> None:
        names = [schema.name for schema in manager.schemas()]
        assert names == ["rev", "repeat", "up", "usage", "completion"]

    def test_schemas_are_stable(self, manager: ModuleManager) -> None:
        first = manager.schemas()
        second = manager.schemas()
        assert all(a is b for a, b in zip(first, second, strict=True))

    def test_get(self, manager: ModuleManager) -> None:
        rev = manager.get("rev")
        assert rev is not None
        assert rev.name == "rev"
        assert manager.get("usage") is not None
        assert manager.get("missing") is None

    def test_execute_adds_metadata(self, manager: ModuleManager) -> None:
        result = manager.execute("repeat", {"count": "2", "input": "ab"})
        assert result.metadata["module"] == "text"
        assert result.metadata["lines"] == 2

    def test_builtin_metadata(self, manager: ModuleManager) -> None:
        result = manager.execute("completion", {"shell": "bash"})
        assert result.metadata["module"] == "builtin"

    def test_failure_has_no_metadata(self, manager: ModuleManager) -> None:
        result = manager.execute("repeat", {"count": "-1", "input": "ab"})
        assert not result.success
        assert result.metadata == {}

    def test_grouped_cases(self, manager: ModuleManager) -> None:
        groups = manager.grouped_cases()
        assert [module.name for module, _ in groups] == ["text", "upper"]
        assert list(groups[0][1]) == ["rev", "repeat"]

    def test_regression_cases(self, manager: ModuleManager) -> None:
        """Test that only cases marked as tests are replayed."""
        descs = [(name, case.desc) for name, case in manager.regression_cases()]
        assert descs == [
            ("rev", "Reverse text"),
            ("repeat", "Repeat text"),
            ("repeat", "Hidden repeat"),
            ("up", "Upper-case | pipe"),
        ]


class TestParse:
    """Tests for argument parsing against a schema."""

    def test_parse(self, manager: ModuleManager) -> None:
        assert manager.parse("repeat", ["-n", "3", "x"]) == {"count": "3", "input": "x"}

    def test_parse_default(self, manager: ModuleManager) -> None:
        assert manager.parse("repeat", ["x"]) == {"count": "1", "input": "x"}

    def test_parse_omitted_stdin_input(self, manager: ModuleManager) -> None:
        assert manager.parse("rev", []) == {"input": None}

    def test_parse_unknown_option(self, manager: ModuleManager) -> None:
        with pytest.raises(click.UsageError):
            manager.parse("rev", ["--nope", "x"])

    def test_parse_unknown_command(self, manager: ModuleManager) -> None:
        with pytest.raises(UnknownCommandError):
            manager.parse("missing", [])


class TestDispatch:
    """Tests for dispatch and its exit codes."""

    def test_success(self, manager: ModuleManager) -> None:
        formatter, out, err = _plain()
        code = manager.dispatch("repeat", {"count": "2", "input": "ab"}, formatter)

        assert code == 0
        assert out.getvalue() == "ab\nab\n"
        assert err.getvalue() == ""

    def test_domain_error(self, manager: ModuleManager) -> None:
        """Test that a failed command prints only the error."""
        formatter, out, err = _plain()
        code = manager.dispatch("repeat", {"count": "-1", "input": "ab"}, formatter)

        assert code == 42
        assert out.getvalue() == ""
        assert err.getvalue() == "Error: Invalid count: -1\n"

    def test_builtin(self, manager: ModuleManager) -> None:
        formatter, out, _ = _plain()
        code = manager.dispatch("usage", {"format": "cli", "search": None}, formatter)

        assert code == 0
        assert out.getvalue().startswith("Text tools\n")

    def test_json_formatter(self, manager: ModuleManager) -> None:
        out, err = StringIO(), StringIO()
        formatter = JSONFormatter(stream=out, error_stream=err, indent=None)
        manager.dispatch("rev", {"input": "ab"}, formatter)

        assert out.getvalue() == '{"success": true, "command": "rev", "output": ["ba"]}\n'

    def test_unknown_command(self, manager: ModuleManager) -> None:
        with pytest.raises(UnknownCommandError):
            manager.dispatch("missing", {})

    def test_run_case(self, manager: ModuleManager) -> None:
        case = manager.commands["repeat"].cases[0]
        result = manager.run_case("repeat", case)
        assert result.success is True
        assert tuple(result.data) == case.output


class TestShippedModules:
    """Tests for the registry of every shipped module."""

    def test_names_are_unique(self, full_manager: ModuleManager) -> None:
        names = [schema.name for schema in full_manager.schemas()]
        assert len(names) == len(set(names))

    def test_module_order(self, full_manager: ModuleManager) -> None:
        assert [m.name for m in full_manager.modules] == [
            "hex",
            "time",
            "number_system",
            "base58",
            "base64",
            "url",
            "number_codec",
            "hash",
            "unicode",
            "html",
            "re",
            "pbkdf2",
            "case",
            "aes",
            "ecdsa",
            "eddsa",
        ]

    def test_every_command_has_an_example(self, full_manager: ModuleManager) -> None:
        for command in full_manager.commands.values():
            assert any(case.is_example for case in command.cases), command.name

    def test_case_inputs_parse(self, full_manager: ModuleManager) -> None:
        """Test that every case, tested or not, parses against its schema."""
        for command in full_manager.commands.values():
            for case in command.cases:
                full_manager.parse(command.name, case.input)
