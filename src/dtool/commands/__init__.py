"""Command infrastructure for dtool.

This package provides the data types every transformation module is built
from, and the registry that dispatches them.

Usage:
    from dtool.commands import Arg, Case, Command, CommandSchema, Module

    def _upper(args):
        return [args["input"].upper()]

    def commands():
        return [
            Command(
                schema=CommandSchema(
                    "upper", "Upper-case text", args=(Arg.input("Text"),)
                ),
                func=_upper,
                cases=[Case(desc="Upper-case", input=["abc"],
                            output=["ABC"], since="0.1.0")],
            )
        ]

    MODULE = Module("upper", "Upper case", commands)

    # Build the registry and run a command
    manager = ModuleManager([MODULE])
    exit_code = manager.dispatch("upper", {"input": "abc"})
"""

from dtool.commands.base import (
    Arg,
    Case,
    Command,
    CommandResult,
    CommandSchema,
    Module,
    Transform,
)
from dtool.commands.manager import ModuleManager

__all__ = [
    # Data types
    "Arg",
    "Case",
    "Command",
    "CommandResult",
    "CommandSchema",
    "Module",
    "Transform",
    # Registry
    "ModuleManager",
]
