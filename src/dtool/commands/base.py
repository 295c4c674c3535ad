"""Command, schema and example data types.

This module provides the building blocks every dtool module is made of:
an argument schema (Arg, CommandSchema), the worked examples that document
and test a command (Case), the pure transformation bound to its schema
(Command), and the named group of related commands (Module).
"""

import re
import time
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

import click

from dtool.exceptions import CommandError, InvalidArgumentError, SchemaError
from dtool.output.base import OutputData

# Signature of a transformation: parsed arguments in, output lines out.
Transform = Callable[[Mapping[str, Any]], Sequence[str]]

_NAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")

HELP_OPTION_NAMES = ("-h", "--help")


@dataclass(frozen=True)
class Arg:
    """One positional argument, option or flag of a command.

    Attributes:
        name: Destination key in the parsed arguments.
        help: Help text shown in ``--help`` and completion scripts.
        short: Single-letter short option (``-a``), without the dash.
        long: Long option (``--algorithm``), without the dashes.
        positional: Whether this is a positional argument.
        required: Whether the parser must reject its absence.
        flag: Whether this is a boolean switch taking no value.
        default: Default value when the option is omitted.
        choices: Allowed values, validated by the parser.
        stdin: Positional only; read from standard input when omitted.
        metavar: Placeholder shown in usage lines.
    """

    name: str
    help: str = ""
    short: str | None = None
    long: str | None = None
    positional: bool = False
    required: bool = False
    flag: bool = False
    default: str | None = None
    choices: tuple[str, ...] = ()
    stdin: bool = False
    metavar: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "choices", tuple(self.choices))

        if not self.name.isidentifier():
            raise SchemaError(f"Invalid argument name: {self.name!r}")
        if self.positional:
            if self.flag:
                raise SchemaError(f"Positional argument '{self.name}' cannot be a flag")
            if self.short or self.long:
                raise SchemaError(
                    f"Positional argument '{self.name}' cannot have option names"
                )
        else:
            if not (self.short or self.long):
                raise SchemaError(f"Option '{self.name}' needs a short or long name")
            if self.stdin:
                raise SchemaError(f"Only positional arguments can read stdin: {self.name}")
        if self.short is not None and len(self.short) != 1:
            raise SchemaError(f"Short option must be one character: {self.short!r}")
        if self.flag and (self.choices or self.default is not None):
            raise SchemaError(f"Flag '{self.name}' cannot take choices or a default")
        if self.choices and self.default is not None and self.default not in self.choices:
            raise SchemaError(
                f"Default {self.default!r} of '{self.name}' is not one of its choices"
            )

    @classmethod
    def input(cls, help: str, name: str = "input") -> "Arg":
        """The usual positional input, read from stdin when omitted."""
        return cls(name=name, help=help, positional=True, stdin=True)

    @property
    def takes_value(self) -> bool:
        """Whether the argument consumes a value."""
        return not self.flag

    @property
    def option_names(self) -> list[str]:
        """Command-line spellings of this option (empty for positionals)."""
        names = []
        if self.short:
            names.append(f"-{self.short}")
        if self.long:
            names.append(f"--{self.long}")
        return names

    def to_click(self) -> click.Parameter:
        """Build the equivalent click parameter."""
        param_type: click.ParamType = (
            click.Choice(list(self.choices)) if self.choices else click.STRING
        )
        # From click 8.3 an explicit default=None satisfies required=True
        extra: dict[str, Any] = {}
        if self.default is not None:
            extra["default"] = self.default

        if self.positional:
            return click.Argument(
                [self.name],
                type=param_type,
                required=self.required and not self.stdin,
                metavar=self.metavar or self.name.upper(),
                **extra,
            )

        decls = [*self.option_names, self.name]
        if self.flag:
            return click.Option(decls, is_flag=True, default=False, help=self.help)

        return click.Option(
            decls,
            type=param_type,
            required=self.required,
            show_default=self.default is not None,
            metavar=self.metavar,
            help=self.help,
            **extra,
        )


@dataclass(frozen=True)
class CommandSchema:
    """Declarative description of a command's command-line surface.

    Attributes:
        name: The subcommand name, unique across the registry.
        about: One-line description.
        args: Arguments in declaration order.
    """

    name: str
    about: str
    args: tuple[Arg, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))

        if not _NAME_PATTERN.match(self.name):
            raise SchemaError(f"Invalid command name: {self.name!r}")

        seen: set[str] = set()
        for arg in self.args:
            if arg.name in seen:
                raise SchemaError(f"Duplicate argument '{arg.name}' in '{self.name}'")
            seen.add(arg.name)

        spellings = [s for arg in self.args for s in arg.option_names]
        if len(spellings) != len(set(spellings)) or set(spellings) & set(
            HELP_OPTION_NAMES
        ):
            raise SchemaError(f"Conflicting option names in '{self.name}'")

    @property
    def positionals(self) -> list[Arg]:
        return [arg for arg in self.args if arg.positional]

    @property
    def options(self) -> list[Arg]:
        return [arg for arg in self.args if not arg.positional]

    def option_names(self) -> list[str]:
        """Every option spelling accepted by the command, help included."""
        return [s for arg in self.options for s in arg.option_names] + list(
            HELP_OPTION_NAMES
        )

    def help_text(self) -> str:
        """Long help: the description followed by positional argument help."""
        lines = [self.about]
        if self.positionals:
            lines.extend(["", "\b", "Arguments:"])
            for arg in self.positionals:
                note = " (read from stdin when omitted)" if arg.stdin else ""
                lines.append(f"  {arg.metavar or arg.name.upper()}  {arg.help}{note}")
        return "\n".join(lines)

    def to_click(
        self, callback: Callable[..., Any] | None = None
    ) -> click.Command:
        """Build a click command parsing this schema.

        Args:
            callback: Function invoked with the parsed parameters.

        Returns:
            A click.Command named after the schema.
        """
        return click.Command(
            self.name,
            params=[arg.to_click() for arg in self.args],
            callback=callback,
            help=self.help_text(),
            short_help=self.about,
            context_settings={"help_option_names": list(HELP_OPTION_NAMES)},
        )


@dataclass(frozen=True)
class Case:
    """One worked example of a command.

    Attributes:
        desc: Human description of the example.
        input: Command-line tokens following the command name.
        output: Exact output lines the command produces.
        is_example: Whether the example appears in generated usage.
        is_test: Whether the example is replayed as a regression test.
        since: Version the behaviour first appeared in.
    """

    desc: str
    input: tuple[str, ...]
    output: tuple[str, ...]
    since: str
    is_example: bool = True
    is_test: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "input", tuple(self.input))
        object.__setattr__(self, "output", tuple(self.output))


@dataclass
class CommandResult:
    """Result of a command execution.

    Attributes:
        success: Whether the command succeeded.
        data: Output lines, in order.
        error: Error message if command failed.
        exit_code: Process exit code for this result.
        metadata: Additional metadata about the execution.
    """

    success: bool
    data: list[str] = field(default_factory=list)
    error: str | None = None
    exit_code: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, data: Sequence[str], **metadata: Any) -> "CommandResult":
        """Create a successful result."""
        return cls(success=True, data=list(data), metadata=metadata)

    @classmethod
    def fail(
        cls,
        error: str,
        exit_code: int = CommandError.exit_code,
        **metadata: Any,
    ) -> "CommandResult":
        """Create a failed result."""
        return cls(
            success=False,
            error=error,
            exit_code=exit_code,
            metadata=metadata,
        )

    def to_output_data(self, title: str | None = None) -> OutputData:
        """Convert to OutputData for formatting."""
        if self.success:
            return OutputData.from_content(self.data, title=title, **self.metadata)
        return OutputData.from_error(
            self.error or "Unknown error", title=title, exit_code=self.exit_code
        )


@dataclass(frozen=True)
class Command:
    """A dispatchable subcommand: schema, transformation and examples.

    The transformation receives the parsed arguments and returns the output
    lines. It performs no I/O and reports bad input by raising a
    CommandError, which ``run`` turns into a failed CommandResult.

    Example:
        Command(
            schema=CommandSchema("s2h", "Convert string to hex",
                                 args=(Arg.input("String"),)),
            func=lambda args: [encode_hex(args["input"].encode())],
            cases=[Case(desc="Convert string to hex", input=["abc"],
                        output=["0x616263"], since="0.1.0")],
        )
    """

    schema: CommandSchema
    func: Transform
    cases: tuple[Case, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "cases", tuple(self.cases))

    @property
    def name(self) -> str:
        """The command name (used in CLI)."""
        return self.schema.name

    @property
    def description(self) -> str:
        return self.schema.about

    def run(self, args: Mapping[str, Any]) -> CommandResult:
        """Run the transformation on already-parsed arguments.

        Args:
            args: Parsed arguments keyed by Arg.name.

        Returns:
            CommandResult with the output lines, or the error.
        """
        for arg in self.schema.positionals:
            if arg.stdin and args.get(arg.name) is None:
                return CommandResult.fail(
                    f"Missing input: {arg.metavar or arg.name.upper()}",
                    exit_code=InvalidArgumentError.exit_code,
                )

        start = time.perf_counter()
        try:
            lines = self.func(args)
        except CommandError as e:
            return CommandResult.fail(str(e), exit_code=e.exit_code)
        elapsed_ms = (time.perf_counter() - start) * 1000
        return CommandResult.ok(lines, lines=len(lines), elapsed_ms=round(elapsed_ms, 3))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


@dataclass(frozen=True)
class Module:
    """A named group of related commands contributed as a unit.

    Attributes:
        name: Short identifier (e.g. ``"hash"``).
        description: Heading used when grouping documentation.
        factory: Returns the module's commands; pure and repeatable.
    """

    name: str
    description: str
    factory: Callable[[], Sequence[Command]]

    def commands(self) -> list[Command]:
        """Build the module's commands."""
        return list(self.factory())

    def cases(self) -> dict[str, tuple[Case, ...]]:
        """Cases of every command, keyed by command name in declaration order."""
        return {command.name: command.cases for command in self.commands()}
