"""The built-in ``usage`` command: documentation rendered from Cases."""

import shlex
from collections.abc import Mapping
from functools import partial
from typing import TYPE_CHECKING, Any

from dtool.commands.base import Arg, Case, Command, CommandSchema, Module
from dtool.config.defaults import PROG_NAME
from dtool.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from dtool.commands.manager import ModuleManager

NAME = "usage"

FORMATS = ("cli", "markdown")

SCHEMA = CommandSchema(
    NAME,
    "Show usage examples of every command",
    args=(
        Arg(
            "format",
            "Output format",
            short="f",
            long="format",
            choices=FORMATS,
            default="cli",
        ),
        Arg(
            "search",
            "Only show examples whose command, module or description matches",
            short="s",
            long="search",
            metavar="KEYWORD",
        ),
    ),
)

# (command name, case) pairs of one module
Entries = list[tuple[str, Case]]


def command(manager: "ModuleManager") -> Command:
    """Build the usage command bound to a registry."""
    return Command(schema=SCHEMA, func=partial(render, manager))


def command_line(name: str, case: Case) -> str:
    """The shell command a case stands for, e.g. ``dtool h2s 0x61``."""
    return shlex.join([PROG_NAME, name, *case.input])


def _matches(keyword: str, module: Module, name: str, case: Case) -> bool:
    if not keyword:
        return True
    haystack = (name, module.description, case.desc)
    return any(keyword in text.casefold() for text in haystack)


def render(manager: "ModuleManager", args: Mapping[str, Any]) -> list[str]:
    """Render the example cases of every registered command.

    Args:
        manager: The registry to document.
        args: Parsed ``usage`` arguments (``format`` and ``search``).

    Returns:
        Output lines, grouped by module in registration order.

    Raises:
        InvalidArgumentError: On an unknown format, or when a search
            matches nothing.
    """
    output_format = args.get("format") or "cli"
    if output_format not in FORMATS:
        raise InvalidArgumentError(f"Invalid format: {output_format}")

    search = args.get("search") or ""
    keyword = search.casefold()

    groups: list[tuple[Module, Entries]] = []
    for module, cases_by_name in manager.grouped_cases():
        entries = [
            (name, case)
            for name, cases in cases_by_name.items()
            for case in cases
            if case.is_example and _matches(keyword, module, name, case)
        ]
        if entries:
            groups.append((module, entries))

    if not groups and keyword:
        raise InvalidArgumentError(f"No examples match '{search}'")

    if output_format == "markdown":
        return _render_markdown(groups)
    return _render_cli(groups)


def _render_cli(groups: list[tuple[Module, Entries]]) -> list[str]:
    lines: list[str] = []
    for i, (module, entries) in enumerate(groups):
        if i:
            lines.append("")
        lines.append(module.description)
        for name, case in entries:
            lines.append(f"  {case.desc}")
            lines.append(f"    $ {command_line(name, case)}")
            lines.extend(f"    {line}" for line in case.output)
    return lines


def _md_escape(text: str) -> str:
    return text.replace("|", "\\|")


def _render_markdown(groups: list[tuple[Module, Entries]]) -> list[str]:
    lines: list[str] = []
    for i, (module, entries) in enumerate(groups):
        if i:
            lines.append("")
        lines.append(f"## {module.description}")
        lines.append("")
        lines.append("| Sub command | Desc | Example | Since |")
        lines.append("|-------------|------|---------|-------|")
        for name, case in entries:
            example = "<br>".join(
                f"`{_md_escape(text)}`"
                for text in [f"$ {command_line(name, case)}", *case.output]
            )
            lines.append(
                f"| {name} | {_md_escape(case.desc)} | {example} | {case.since} |"
            )
    return lines
