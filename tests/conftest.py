"""Pytest fixtures for dtool tests."""

import logging
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

from dtool.commands import Arg, Case, Command, CommandSchema, Module, ModuleManager
from dtool.config import reset_config
from dtool.config.schema import DToolConfig
from dtool.exceptions import InvalidArgumentError


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def isolated_config(
    temp_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Point the config at a missing file and reset the singleton."""
    monkeypatch.setenv("DTOOL_CONFIG", str(temp_dir / "missing.toml"))
    for name in ("DTOOL_LOG_LEVEL", "DTOOL_FORMAT", "NO_COLOR"):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()
    # The CLI points handlers at the runner's streams
    logging.getLogger("dtool").handlers.clear()


@pytest.fixture
def default_config() -> DToolConfig:
    """Get default configuration."""
    return DToolConfig()


@pytest.fixture
def config_file(temp_dir: Path) -> Path:
    """Create a test config file."""
    config_path = temp_dir / "config.toml"
    config_path.write_text("""
[output]
default_format = "json"
color = false

[logging]
level = "DEBUG"
""")
    return config_path


def _reverse(args):
    return [args["input"][::-1]]


def _repeat(args):
    count = int(args.get("count") or "1")
    if count < 0:
        raise InvalidArgumentError(f"Invalid count: {count}")
    return [args["input"]] * count


def _text_commands() -> list[Command]:
    return [
        Command(
            schema=CommandSchema("rev", "Reverse text", args=(Arg.input("Text"),)),
            func=_reverse,
            cases=[
                Case(desc="Reverse text", input=["abc"], output=["cba"], since="0.1.0"),
            ],
        ),
        Command(
            schema=CommandSchema(
                "repeat",
                "Repeat text",
                args=(
                    Arg("count", "How many times", short="n", long="count", default="1"),
                    Arg.input("Text"),
                ),
            ),
            func=_repeat,
            cases=[
                Case(
                    desc="Repeat text",
                    input=["-n", "2", "ab"],
                    output=["ab", "ab"],
                    since="0.1.0",
                ),
                Case(
                    desc="Hidden repeat",
                    input=["-n", "0", "ab"],
                    output=[],
                    since="0.2.0",
                    is_example=False,
                ),
            ],
        ),
    ]


def _upper_commands() -> list[Command]:
    return [
        Command(
            schema=CommandSchema("up", "Upper-case text", args=(Arg.input("Text"),)),
            func=lambda args: [args["input"].upper()],
            cases=[
                Case(desc="Upper-case | pipe", input=["a b"], output=["A B"], since="0.1.0"),
                Case(
                    desc="Random output",
                    input=["x"],
                    output=["whatever"],
                    since="0.1.0",
                    is_test=False,
                ),
            ],
        ),
    ]


@pytest.fixture
def text_module() -> Module:
    """A small module with two commands."""
    return Module("text", "Text tools", _text_commands)


@pytest.fixture
def upper_module() -> Module:
    """A second module with one command."""
    return Module("upper", "Upper case", _upper_commands)


@pytest.fixture
def manager(text_module: Module, upper_module: Module) -> ModuleManager:
    """A registry built from the test modules only."""
    return ModuleManager([text_module, upper_module])


@pytest.fixture(scope="session")
def full_manager() -> ModuleManager:
    """The registry of every shipped module."""
    return ModuleManager()
