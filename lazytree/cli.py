"""Command-line front door for lazytree.

Builds a demo session, applies editing commands given as arguments or read
from a script, and prints the resulting outline.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Iterable
from pathlib import Path

from .config import load_id_floor, load_latency_policy
from .errors import ChildFetchError, CommandError
from .loading import NO_DELAY
from .outline import format_outline
from .sample_data import build_demo_session
from .session import TreeSession

ROOT_PARENT = "-"

_ARITY = {
    "expand": 1,
    "collapse": 1,
    "toggle": 1,
    "remove": 1,
    "rename": 2,
    "add": 2,
    "move": 3,
}


def parse_command(line: str) -> tuple[str, list[str]]:
    """Split one command line into ``(verb, args)``.

    Names for ``rename`` and ``add`` may contain spaces; they take the rest
    of the line.
    """
    parts = line.split()
    if not parts:
        raise CommandError("empty command")
    verb = parts[0].lower()
    arity = _ARITY.get(verb)
    if arity is None:
        raise CommandError(f"unknown command: {parts[0]!r}")
    if verb in ("rename", "add"):
        if len(parts) < 3:
            raise CommandError(f"{verb} needs an id and a name")
        return verb, [parts[1], " ".join(parts[2:])]
    if len(parts) - 1 != arity:
        raise CommandError(f"{verb} takes {arity} argument(s), got {len(parts) - 1}")
    if verb == "move":
        try:
            int(parts[3])
        except ValueError as exc:
            raise CommandError(f"invalid move index: {parts[3]!r}") from exc
    return verb, parts[1:]


async def apply_command(session: TreeSession, verb: str, args: list[str]) -> None:
    if verb == "expand":
        await session.expand(args[0])
    elif verb == "collapse":
        session.collapse(args[0])
    elif verb == "toggle":
        await session.toggle(args[0])
    elif verb == "rename":
        session.rename(args[0], args[1])
    elif verb == "add":
        session.add_child(args[0], args[1])
    elif verb == "remove":
        session.remove(args[0])
    elif verb == "move":
        parent = None if args[1] == ROOT_PARENT else args[1]
        session.move(args[0], parent, int(args[2]))


async def run_commands(session: TreeSession, commands: Iterable[tuple[str, list[str]]]) -> None:
    for verb, args in commands:
        await apply_command(session, verb, args)


def read_script(source: str) -> list[str]:
    """Read command lines from ``source`` (``-`` for stdin), skipping blanks and comments."""
    text = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
    lines: list[str] = []
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        lines.append(line)
    return lines


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments, run the commands against a demo session, print the outline."""
    parser = argparse.ArgumentParser(
        prog="lazytree",
        description="Apply tree editing commands to a demo forest and print the result.",
    )
    parser.add_argument(
        "commands",
        nargs="*",
        metavar="COMMAND",
        help="one quoted command each, e.g. 'expand root-1' or 'move eng-2 - 0'",
    )
    parser.add_argument("--script", help="file with one command per line ('-' for stdin)")
    parser.add_argument("--no-delay", action="store_true", help="skip simulated fetch latency")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging verbosity (default: WARNING)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    lines = list(args.commands)
    if args.script:
        try:
            lines.extend(read_script(args.script))
        except OSError as exc:
            parser.error(f"cannot read script: {exc}")

    try:
        commands = [parse_command(line) for line in lines]
    except CommandError as exc:
        parser.error(str(exc))

    policy = NO_DELAY if args.no_delay else load_latency_policy()
    session = build_demo_session(policy, id_floor=load_id_floor())
    try:
        asyncio.run(run_commands(session, commands))
    except ChildFetchError as exc:
        print(f"lazytree: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    print(format_outline(session))
