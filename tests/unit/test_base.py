"""Tests for command, schema and example data types."""

import dataclasses

import click
import pytest

from dtool.commands import Arg, Case, Command, CommandResult, CommandSchema, Module
from dtool.exceptions import CommandError, InvalidArgumentError, SchemaError


class TestArg:
    """Tests for Arg declarations."""

    def test_input_helper(self) -> None:
        arg = Arg.input("Hex")
        assert arg.name == "input"
        assert arg.positional is True
        assert arg.stdin is True
        assert arg.option_names == []

    def test_option_names(self) -> None:
        arg = Arg("algorithm", short="a", long="algorithm")
        assert arg.option_names == ["-a", "--algorithm"]
        assert arg.takes_value is True

    def test_flag_takes_no_value(self) -> None:
        assert Arg("compress", short="C", flag=True).takes_value is False

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"name": "in put", "positional": True},
            {"name": "x", "positional": True, "flag": True},
            {"name": "x", "positional": True, "short": "x"},
            {"name": "x"},
            {"name": "x", "short": "x", "stdin": True},
            {"name": "x", "short": "xy"},
            {"name": "x", "short": "x", "flag": True, "choices": ("a",)},
            {"name": "x", "short": "x", "choices": ("a", "b"), "default": "c"},
        ],
    )
    def test_malformed_declarations(self, kwargs: dict) -> None:
        """Test that malformed declarations are rejected at construction."""
        with pytest.raises(SchemaError):
            Arg(**kwargs)

    def test_choices_are_frozen(self) -> None:
        arg = Arg("t", short="t", choices=["a", "b"])  # type: ignore[arg-type]
        assert arg.choices == ("a", "b")

    def test_to_click_option(self) -> None:
        param = Arg("mode", short="m", long="mode", choices=("ecb", "cbc"), default="ecb").to_click()
        assert isinstance(param, click.Option)
        assert param.opts == ["-m", "--mode"]
        assert isinstance(param.type, click.Choice)
        assert param.default == "ecb"

    def test_to_click_stdin_positional_is_optional(self) -> None:
        param = Arg.input("Hex").to_click()
        assert isinstance(param, click.Argument)
        assert param.required is False


class TestCommandSchema:
    """Tests for CommandSchema."""

    def test_option_names_include_help(self) -> None:
        schema = CommandSchema(
            "hash", "Hash", args=(Arg("algorithm", short="a", long="algorithm"),)
        )
        assert schema.option_names() == ["-a", "--algorithm", "-h", "--help"]

    @pytest.mark.parametrize("name", ["", "has space", "-lead"])
    def test_invalid_name(self, name: str) -> None:
        with pytest.raises(SchemaError):
            CommandSchema(name, "About")

    def test_duplicate_argument_names(self) -> None:
        with pytest.raises(SchemaError):
            CommandSchema("x", "X", args=(Arg.input("A"), Arg.input("B")))

    def test_conflicting_spellings(self) -> None:
        with pytest.raises(SchemaError):
            CommandSchema(
                "x", "X", args=(Arg("a", short="a"), Arg("b", short="a"))
            )

    def test_help_is_reserved(self) -> None:
        with pytest.raises(SchemaError):
            CommandSchema("x", "X", args=(Arg("hint", short="h"),))

    def test_to_click_parses(self) -> None:
        schema = CommandSchema(
            "ne",
            "Number encode",
            args=(
                Arg("type", short="t", long="type", choices=("u8", "u16"), default="u8"),
                Arg.input("Number"),
            ),
        )
        command = schema.to_click()
        assert command.name == "ne"
        with command.make_context("ne", ["-t", "u16", "1"]) as ctx:
            assert ctx.params == {"type": "u16", "input": "1"}

    def test_to_click_rejects_bad_choice(self) -> None:
        schema = CommandSchema(
            "ne", "Number encode", args=(Arg("type", short="t", choices=("u8",)),)
        )
        with pytest.raises(click.BadParameter):
            schema.to_click().make_context("ne", ["-t", "u9"])

    def test_required_option_without_default(self) -> None:
        schema = CommandSchema(
            "re",
            "Regex",
            args=(Arg("pattern", short="p", required=True), Arg.input("Text")),
        )
        with pytest.raises(click.MissingParameter):
            schema.to_click().make_context("re", ["abc"])

    def test_omitted_options_parse_as_none(self) -> None:
        schema = CommandSchema(
            "ts2d", "Timestamp", args=(Arg("timezone", short="z"), Arg.input("Ts"))
        )
        with schema.to_click().make_context("ts2d", []) as ctx:
            assert ctx.params == {"timezone": None, "input": None}


class TestCase:
    """Tests for Case records."""

    def test_lists_are_frozen(self) -> None:
        case = Case(desc="d", input=["a"], output=["b"], since="0.1.0")
        assert case.input == ("a",)
        assert case.output == ("b",)
        assert case.is_example is True
        assert case.is_test is True

    def test_immutable(self) -> None:
        case = Case(desc="d", input=[], output=[], since="0.1.0")
        with pytest.raises(dataclasses.FrozenInstanceError):
            case.desc = "other"  # type: ignore[misc]


class TestCommandResult:
    """Tests for CommandResult."""

    def test_ok(self) -> None:
        result = CommandResult.ok(("a", "b"), lines=2)
        assert result.success is True
        assert result.data == ["a", "b"]
        assert result.exit_code == 0
        assert result.metadata == {"lines": 2}

    def test_fail(self) -> None:
        result = CommandResult.fail("bad")
        assert result.success is False
        assert result.error == "bad"
        assert result.exit_code == CommandError.exit_code

    def test_to_output_data(self) -> None:
        data = CommandResult.fail("bad", exit_code=42).to_output_data(title="h2s")
        assert data.success is False
        assert data.error == "bad"
        assert data.title == "h2s"
        assert data.exit_code == 42


def _echo(args):
    return [args["input"]]


def _fail(args):
    raise InvalidArgumentError("Invalid hex: 'zz'")


class TestCommand:
    """Tests for Command.run."""

    def _command(self, func=_echo) -> Command:
        return Command(
            schema=CommandSchema("echo", "Echo", args=(Arg.input("Text"),)),
            func=func,
        )

    def test_name_and_description(self) -> None:
        command = self._command()
        assert command.name == "echo"
        assert command.description == "Echo"
        assert repr(command) == "Command(name='echo')"

    def test_run(self) -> None:
        result = self._command().run({"input": "abc"})
        assert result.success is True
        assert result.data == ["abc"]
        assert result.metadata["lines"] == 1
        assert result.metadata["elapsed_ms"] >= 0

    def test_domain_error_becomes_failed_result(self) -> None:
        result = self._command(_fail).run({"input": "zz"})
        assert result.success is False
        assert result.error == "Invalid hex: 'zz'"
        assert result.exit_code == 42

    def test_missing_stdin_input(self) -> None:
        """Test that an input still missing at run time is a domain error."""
        result = self._command().run({"input": None})
        assert result.success is False
        assert result.error == "Missing input: INPUT"
        assert result.exit_code == InvalidArgumentError.exit_code

    def test_unexpected_errors_propagate(self) -> None:
        def broken(args):
            raise KeyError("input")

        with pytest.raises(KeyError):
            self._command(broken).run({"input": "x"})


class TestModule:
    """Tests for Module."""

    def test_commands_are_repeatable(self, text_module: Module) -> None:
        first = [c.name for c in text_module.commands()]
        second = [c.name for c in text_module.commands()]
        assert first == second == ["rev", "repeat"]

    def test_cases(self, text_module: Module) -> None:
        cases = text_module.cases()
        assert list(cases) == ["rev", "repeat"]
        assert [c.desc for c in cases["repeat"]] == ["Repeat text", "Hidden repeat"]
