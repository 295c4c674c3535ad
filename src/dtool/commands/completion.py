"""The built-in ``completion`` command: shell completion scripts.

Scripts are generated from the registry's schemas only: command names,
option spellings and option choices.
"""

from collections.abc import Callable, Mapping, Sequence
from functools import partial
from typing import TYPE_CHECKING, Any

from dtool.commands.base import Arg, Command, CommandSchema
from dtool.config.defaults import PROG_NAME
from dtool.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from dtool.commands.manager import ModuleManager

NAME = "completion"

HELP_TEXT = "Print help"

SCHEMA = CommandSchema(
    NAME,
    "Generate a shell completion script",
    args=(
        Arg(
            "shell",
            "Shell to generate the script for",
            positional=True,
            required=True,
            choices=("bash", "zsh", "fish"),
            metavar="SHELL",
        ),
    ),
)


def command(manager: "ModuleManager") -> Command:
    """Build the completion command bound to a registry."""
    return Command(schema=SCHEMA, func=partial(render, manager))


def render(manager: "ModuleManager", args: Mapping[str, Any]) -> list[str]:
    """Render the completion script for the requested shell.

    Raises:
        InvalidArgumentError: If the shell is not supported.
    """
    shell = args.get("shell")
    generator = GENERATORS.get(shell or "")
    if generator is None:
        raise InvalidArgumentError(f"Unsupported shell: {shell}")
    return generator(manager.schemas())


def _positional_words(schema: CommandSchema) -> list[str]:
    return [choice for arg in schema.positionals for choice in arg.choices]


# --- bash ---


def bash(schemas: Sequence[CommandSchema]) -> list[str]:
    """Generate a bash completion function for ``complete -F``."""
    func = f"_{PROG_NAME}"
    names = " ".join(schema.name for schema in schemas)

    lines = [
        f"{func}() {{",
        "    local cur prev cmd",
        "    COMPREPLY=()",
        '    cur="${COMP_WORDS[COMP_CWORD]}"',
        '    prev="${COMP_WORDS[COMP_CWORD-1]}"',
        "",
        "    if [[ ${COMP_CWORD} -eq 1 ]]; then",
        f'        COMPREPLY=( $(compgen -W "{names}" -- "${{cur}}") )',
        "        return 0",
        "    fi",
        "",
        '    cmd="${COMP_WORDS[1]}"',
        '    case "${cmd}" in',
    ]

    for schema in schemas:
        lines.append(f"        {schema.name})")
        with_choices = [arg for arg in schema.options if arg.choices]
        if with_choices:
            lines.append('            case "${prev}" in')
            for arg in with_choices:
                lines.append(f"                {'|'.join(arg.option_names)})")
                lines.append(
                    f'                    COMPREPLY=( $(compgen -W "{" ".join(arg.choices)}"'
                    ' -- "${cur}") )'
                )
                lines.append("                    return 0")
                lines.append("                    ;;")
            lines.append("            esac")
        words = " ".join(schema.option_names() + _positional_words(schema))
        lines.append(f'            COMPREPLY=( $(compgen -W "{words}" -- "${{cur}}") )')
        lines.append("            ;;")

    lines.extend(
        [
            "    esac",
            "    return 0",
            "}",
            "",
            f"complete -F {func} {PROG_NAME}",
        ]
    )
    return lines


# --- zsh ---


def _zsh_quote(text: str) -> str:
    """Escape text for a single-quoted zsh completion spec."""
    text = text.replace("'", "'\\''")
    for ch in "[]:":
        text = text.replace(ch, "\\" + ch)
    return text


def _zsh_specs(schema: CommandSchema) -> list[str]:
    specs = []
    for arg in schema.options:
        for spelling in arg.option_names:
            spec = f"{spelling}[{_zsh_quote(arg.help)}]"
            if arg.choices:
                spec += f":{arg.name}:({' '.join(arg.choices)})"
            elif arg.takes_value:
                spec += f":{arg.name}:"
            specs.append(f"'{spec}'")
    specs.append(f"'-h[{HELP_TEXT}]'")
    specs.append(f"'--help[{HELP_TEXT}]'")
    for position, arg in enumerate(schema.positionals, start=1):
        colon = ":" if arg.required and not arg.stdin else "::"
        action = f"({' '.join(arg.choices)})" if arg.choices else ""
        specs.append(f"'{position}{colon}{arg.name}:{action}'")
    return specs


def zsh(schemas: Sequence[CommandSchema]) -> list[str]:
    """Generate a zsh completion function (``#compdef``)."""
    func = f"_{PROG_NAME}"
    lines = [
        f"#compdef {PROG_NAME}",
        "",
        f"{func}() {{",
        "    local -a commands",
        "    commands=(",
    ]
    lines.extend(
        f"        '{schema.name}:{_zsh_quote(schema.about)}'" for schema in schemas
    )
    lines.extend(
        [
            "    )",
            "",
            "    if (( CURRENT == 2 )); then",
            f"        _describe -t commands '{PROG_NAME} command' commands",
            "        return",
            "    fi",
            "",
            '    local cmd="${words[2]}"',
            "    shift words",
            "    (( CURRENT-- ))",
            "",
            '    case "${cmd}" in',
        ]
    )

    for schema in schemas:
        lines.append(f"        {schema.name})")
        lines.append("            _arguments \\")
        specs = _zsh_specs(schema)
        for i, spec in enumerate(specs):
            suffix = " \\" if i < len(specs) - 1 else ""
            lines.append(f"                {spec}{suffix}")
        lines.append("            ;;")

    lines.extend(
        [
            "    esac",
            "}",
            "",
            f'{func} "$@"',
        ]
    )
    return lines


# --- fish ---


def _fish_quote(text: str) -> str:
    return "'" + text.replace("\\", "\\\\").replace("'", "\\'") + "'"


def fish(schemas: Sequence[CommandSchema]) -> list[str]:
    """Generate fish ``complete`` directives."""
    prefix = f"complete -c {PROG_NAME}"
    lines = [f"{prefix} -f"]

    for schema in schemas:
        lines.append(
            f'{prefix} -n "__fish_use_subcommand" -a {schema.name}'
            f" -d {_fish_quote(schema.about)}"
        )

    for schema in schemas:
        condition = f'-n "__fish_seen_subcommand_from {schema.name}"'
        for arg in schema.options:
            parts = [prefix, condition]
            if arg.short:
                parts.append(f"-s {arg.short}")
            if arg.long:
                parts.append(f"-l {arg.long}")
            parts.append(f"-d {_fish_quote(arg.help)}")
            if arg.choices:
                parts.append(f"-x -a {_fish_quote(' '.join(arg.choices))}")
            elif arg.takes_value:
                parts.append("-r")
            lines.append(" ".join(parts))
        lines.append(f"{prefix} {condition} -s h -l help -d {_fish_quote(HELP_TEXT)}")
        words = _positional_words(schema)
        if words:
            lines.append(f"{prefix} {condition} -x -a {_fish_quote(' '.join(words))}")

    return lines


GENERATORS: dict[str, Callable[[Sequence[CommandSchema]], list[str]]] = {
    "bash": bash,
    "zsh": zsh,
    "fish": fish,
}
