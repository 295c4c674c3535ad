"""Unix timestamp <-> date conversion.

Both commands take ``-z/--timezone`` as a whole-hour offset from UTC. When
it is omitted, the local timezone is used.
"""

from collections.abc import Mapping
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Any

from dtool.commands.base import Arg, Case, Command, CommandSchema, Module
from dtool.exceptions import InvalidArgumentError
from dtool.utils.codec import parse_int

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

TIMEZONE_ARG = Arg(
    "timezone",
    "Timezone offset in hours (e.g. 8 for UTC+8); local time when omitted",
    short="z",
    long="timezone",
    metavar="HOURS",
)


def _tz(value: str | None) -> tzinfo | None:
    """Resolve the timezone option; None means local time."""
    if value is None:
        return None
    hours = parse_int(value, "timezone")
    if not -23 <= hours <= 23:
        raise InvalidArgumentError(f"Invalid timezone: {value}")
    return timezone(timedelta(hours=hours))


def ts2d(args: Mapping[str, Any]) -> list[str]:
    tz = _tz(args.get("timezone"))
    ts = parse_int(args["input"], "timestamp")
    try:
        if tz is None:
            date = datetime.fromtimestamp(ts)
        else:
            date = datetime.fromtimestamp(ts, tz)
    except (OverflowError, OSError, ValueError) as e:
        raise InvalidArgumentError(f"Invalid timestamp: {ts}") from e
    return [date.strftime(DATE_FORMAT)]


def d2ts(args: Mapping[str, Any]) -> list[str]:
    tz = _tz(args.get("timezone"))
    text = args["input"].strip()
    try:
        date = datetime.strptime(text, DATE_FORMAT)
    except ValueError:
        try:
            date = datetime.fromisoformat(text)
        except ValueError as e:
            raise InvalidArgumentError(f"Invalid date: {text!r}") from e

    # An offset in the input wins over the option
    if date.tzinfo is None and tz is not None:
        date = date.replace(tzinfo=tz)
    return [str(int(date.timestamp()))]


def commands() -> list[Command]:
    return [
        Command(
            schema=CommandSchema(
                "ts2d",
                "Convert timestamp to date",
                args=(TIMEZONE_ARG, Arg.input("Unix timestamp in seconds")),
            ),
            func=ts2d,
            cases=[
                Case(
                    desc="Convert timestamp to date (UTC)",
                    input=["-z", "0", "10000"],
                    output=["1970-01-01 02:46:40"],
                    since="0.1.0",
                ),
                Case(
                    desc="Convert timestamp to date (UTC+8)",
                    input=["-z", "8", "10000"],
                    output=["1970-01-01 10:46:40"],
                    since="0.1.0",
                ),
                Case(
                    desc="Convert a timestamp before 1970 (after --)",
                    input=["-z", "0", "--", "-1"],
                    output=["1969-12-31 23:59:59"],
                    since="0.3.0",
                ),
            ],
        ),
        Command(
            schema=CommandSchema(
                "d2ts",
                "Convert date to timestamp",
                args=(
                    TIMEZONE_ARG,
                    Arg.input(f"Date as '{DATE_FORMAT}' or ISO 8601"),
                ),
            ),
            func=d2ts,
            cases=[
                Case(
                    desc="Convert date to timestamp (UTC)",
                    input=["-z", "0", "1970-01-01 02:46:40"],
                    output=["10000"],
                    since="0.1.0",
                ),
                Case(
                    desc="Convert date to timestamp (UTC+8)",
                    input=["-z", "8", "1970-01-01 10:46:40"],
                    output=["10000"],
                    since="0.1.0",
                ),
                Case(
                    desc="Convert ISO 8601 date with offset to timestamp",
                    input=["1970-01-01T10:46:40+08:00"],
                    output=["10000"],
                    since="0.2.0",
                ),
            ],
        ),
    ]


MODULE = Module("time", "Timestamp / date conversion", commands)
