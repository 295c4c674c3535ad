"""The process-wide command table and its dispatch path."""

import logging
from collections.abc import Iterable, Mapping, Sequence
from types import MappingProxyType
from typing import Any

from dtool.commands import completion, usage
from dtool.commands.base import Case, Command, CommandResult, CommandSchema, Module
from dtool.exceptions import (
    DuplicateCommandError,
    RegistryLockedError,
    UnknownCommandError,
)
from dtool.output.base import OutputFormatter
from dtool.output.plain import PlainFormatter
from dtool.utils.logging import get_logger, log_with_context

logger = get_logger(__name__)

BUILTIN_NAMES = (usage.NAME, completion.NAME)


class ModuleManager:
    """Registry of every command contributed by the modules.

    The registry is filled once, in the constructor, from an explicit
    ordered list of modules, and is read-only afterwards. Registration
    order is preserved and decides the order of schemas, usage text and
    completion output.

    Usage:
        manager = ModuleManager()

        # Build a parser from the schemas
        for schema in manager.schemas():
            group.add_command(schema.to_click())

        # Run a command
        exit_code = manager.dispatch("h2s", {"input": "0x616263"})
    """

    def __init__(self, modules: Sequence[Module] | None = None) -> None:
        """Build the registry.

        Args:
            modules: Modules to register, in order. Defaults to every
                module shipped with dtool.
        """
        if modules is None:
            from dtool.modules import MODULES

            modules = MODULES

        self._commands: dict[str, Command] = {}
        self._groups: list[tuple[Module, tuple[str, ...]]] = []
        self._module_of: dict[str, str] = {}
        self._ready = False

        for module in modules:
            self.register(module.commands(), module=module)

        self._builtins: dict[str, Command] = {
            usage.NAME: usage.command(self),
            completion.NAME: completion.command(self),
        }
        self._ready = True
        logger.debug(
            "Registered %d commands from %d modules",
            len(self._commands),
            len(self._groups),
        )

    def register(
        self,
        commands: Iterable[Command],
        module: Module | None = None,
    ) -> None:
        """Insert commands into the table, keyed by name.

        Only allowed while the registry is being built.

        Args:
            commands: The commands to register, in order.
            module: The module the commands belong to (for usage grouping).

        Raises:
            RegistryLockedError: If the registry has already been built.
            DuplicateCommandError: If a command name is already taken.
        """
        if self._ready:
            raise RegistryLockedError("Commands can only be registered at startup")

        names = []
        for command in commands:
            name = command.name
            if name in self._commands or name in BUILTIN_NAMES:
                raise DuplicateCommandError(f"Command '{name}' is already registered")
            self._commands[name] = command
            names.append(name)
            if module is not None:
                self._module_of[name] = module.name

        if module is not None:
            self._groups.append((module, tuple(names)))
            logger.debug("Registered module %s: %s", module.name, ", ".join(names))

    @property
    def commands(self) -> Mapping[str, Command]:
        """Read-only view of the registered commands, in registration order."""
        return MappingProxyType(self._commands)

    @property
    def modules(self) -> tuple[Module, ...]:
        """Registered modules, in registration order."""
        return tuple(module for module, _ in self._groups)

    def names(self) -> list[str]:
        """Registered command names (built-ins excluded)."""
        return list(self._commands)

    def get(self, name: str) -> Command | None:
        """Get a registered or built-in command by name."""
        return self._commands.get(name) or self._builtins.get(name)

    def grouped_cases(self) -> list[tuple[Module, dict[str, tuple[Case, ...]]]]:
        """Cases of every registered command, grouped by module.

        Returns:
            (module, {command name: cases}) pairs in registration order.
        """
        return [
            (module, {name: self._commands[name].cases for name in names})
            for module, names in self._groups
        ]

    def schemas(self) -> list[CommandSchema]:
        """Every schema the top-level parser accepts.

        Returns:
            Registered schemas in registration order, followed by the
            built-in ``usage`` and ``completion`` schemas.
        """
        return [command.schema for command in self._commands.values()] + [
            self._builtins[name].schema for name in BUILTIN_NAMES
        ]

    def _lookup(self, name: str) -> Command:
        command = self.get(name)
        if command is None:
            # The parser only accepts names from schemas(); reaching this is a bug
            raise UnknownCommandError(f"Subcommand '{name}' is not registered")
        return command

    def parse(self, name: str, tokens: Sequence[str]) -> dict[str, Any]:
        """Parse raw argument tokens against a command's schema.

        Args:
            name: The command name.
            tokens: Arguments following the command name.

        Returns:
            The parsed arguments keyed by argument name.

        Raises:
            UnknownCommandError: If the name is not registered.
            click.UsageError: If the tokens do not match the schema.
        """
        schema = self._lookup(name).schema
        with schema.to_click().make_context(name, list(tokens)) as ctx:
            return dict(ctx.params)

    def execute(self, name: str, args: Mapping[str, Any]) -> CommandResult:
        """Run a command on parsed arguments without printing anything.

        Args:
            name: The command name, as resolved by the parser.
            args: The parsed arguments.

        Returns:
            The command's result. A successful one carries the module
            name, line count and run time as metadata.

        Raises:
            UnknownCommandError: If the name is not registered.
        """
        result = self._lookup(name).run(args)
        if result.success:
            result.metadata["module"] = self._module_of.get(name, "builtin")
        return result

    def dispatch(
        self,
        name: str,
        args: Mapping[str, Any],
        formatter: OutputFormatter | None = None,
    ) -> int:
        """Run a command and print its output lines or its error.

        Output is all-or-nothing: a failed command prints only the error.

        Args:
            name: The command name, as resolved by the parser.
            args: The parsed arguments.
            formatter: Output formatter (plain text by default).

        Returns:
            The process exit code: 0 on success, else the error's code.
        """
        formatter = formatter or PlainFormatter()
        result = self.execute(name, args)

        log_with_context(
            logger,
            logging.DEBUG,
            f"Dispatched {name}",
            command=name,
            success=result.success,
            exit_code=result.exit_code,
            lines=len(result.data),
        )

        formatter.print(result.to_output_data(title=name))
        return 0 if result.success else result.exit_code

    def run_case(self, name: str, case: Case) -> CommandResult:
        """Replay a documented example: parse its input and run it."""
        return self.execute(name, self.parse(name, case.input))

    def regression_cases(self) -> list[tuple[str, Case]]:
        """Every (command name, case) pair marked as a regression test."""
        return [
            (command.name, case)
            for command in self._commands.values()
            for case in command.cases
            if case.is_test
        ]
