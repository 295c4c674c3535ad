"""Main CLI application for dtool.

The root command is a click group carrying the global options, with one
click command per registered schema attached to it, so the set of
subcommands is exactly the registry's.
"""

from collections.abc import Callable, Mapping
from typing import Any

import click

from dtool import __version__
from dtool.cli.context import CliState, create_state
from dtool.cli.options import format_option, log_level_option, verbose_option
from dtool.commands.base import HELP_OPTION_NAMES, CommandSchema
from dtool.commands.manager import ModuleManager
from dtool.config import get_config
from dtool.config.defaults import PROG_NAME
from dtool.exceptions import ConfigError
from dtool.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


class RootGroup(click.Group):
    """Lists subcommands in registration order rather than alphabetically."""

    def list_commands(self, ctx: click.Context) -> list[str]:
        return list(self.commands)


def create_root() -> click.Group:
    """Build the root group with the global options and no subcommands."""

    @click.group(
        cls=RootGroup,
        name=PROG_NAME,
        no_args_is_help=True,
        context_settings={"help_option_names": list(HELP_OPTION_NAMES)},
    )
    @click.version_option(
        __version__,
        "--version",
        "-V",
        prog_name=PROG_NAME,
        message="%(prog)s version %(version)s",
        help="Show version and exit.",
    )
    @format_option
    @verbose_option
    @log_level_option
    @click.pass_context
    def root(
        ctx: click.Context,
        output_format: str | None,
        verbose: bool,
        log_level: str | None,
    ) -> None:
        """A command-line tool collection to assist development.

        Run 'dtool usage' to see an example of every command.
        """
        try:
            config = get_config()
        except ConfigError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(e.exit_code)

        setup_logging(
            level=log_level or config.logging.level,
            log_file=config.logging.file,
            json_format=config.logging.json_format,
            use_color=config.output.color,
        )
        ctx.obj = create_state(output_format, verbose, config)

    return root


def read_stdin_inputs(
    schema: CommandSchema, params: Mapping[str, Any]
) -> dict[str, Any]:
    """Fill omitted stdin-capable positionals from standard input.

    One trailing newline is removed. Nothing is read from a terminal; the
    positional then stays None and the command reports the missing input.
    """
    args = dict(params)
    for arg in schema.positionals:
        if not arg.stdin or args.get(arg.name) is not None:
            continue
        stream = click.get_text_stream("stdin")
        if stream.isatty():
            continue
        text = stream.read()
        if text.endswith("\n"):
            text = text[:-1]
            if text.endswith("\r"):
                text = text[:-1]
        args[arg.name] = text
        logger.debug("Read %d characters of %s from stdin", len(text), arg.name)
    return args


def make_callback(
    manager: ModuleManager, schema: CommandSchema
) -> Callable[..., None]:
    """Build the click callback dispatching one subcommand."""

    @click.pass_context
    def callback(ctx: click.Context, **params: Any) -> None:
        state = ctx.find_object(CliState) or create_state()
        args = read_stdin_inputs(schema, params)
        exit_code = manager.dispatch(schema.name, args, state.formatter)
        if exit_code:
            ctx.exit(exit_code)

    return callback


def build_cli(manager: ModuleManager | None = None) -> click.Group:
    """Build the root click group with one subcommand per schema.

    Args:
        manager: The registry to expose. Defaults to every shipped module.

    Returns:
        The root command group.
    """
    manager = manager or ModuleManager()
    group = create_root()

    for schema in manager.schemas():
        group.add_command(schema.to_click(make_callback(manager, schema)))
    return group


def main() -> None:
    """Entry point for the CLI."""
    build_cli()(prog_name=PROG_NAME)


if __name__ == "__main__":
    main()
