"""Command line entry point: ``ethkit <command> [args]``."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Callable, Sequence

NAME = "ethgo"

VERSION = "0.1.3"
"""The main version."""

VERSION_PRERELEASE = ""
"""A marker for the version, such as ``dev``."""

GIT_COMMIT = ""
"""The git commit the package was built from, if known."""

_HELP_FLAGS = ("-h", "-help", "--help")


def get_version() -> str:
    """Return the version string, with the prerelease marker and commit if set."""
    version = VERSION
    if VERSION_PRERELEASE:
        version += f"-{VERSION_PRERELEASE}"
        if GIT_COMMIT:
            version += f" ({GIT_COMMIT})"
    return version


@dataclass(frozen=True)
class _Command:
    synopsis: str
    help: str
    output: Callable[[], str] | None = None
    """Produces the text the command prints; a group command prints nothing."""


_COMMANDS: dict[str, _Command] = {
    "ens": _Command(
        synopsis="Interact with ens",
        help="Usage: ethgo ens\n\n  Interact with ens",
    ),
    "version": _Command(
        synopsis="Display the Ethgo version",
        help="Usage: ethgo version\n\n  Display the Ethgo version",
        output=get_version,
    ),
}


def _usage() -> str:
    width = max(len(name) for name in _COMMANDS)
    lines = [
        f"Usage: {NAME} [--version] [--help] <command> [<args>]",
        "",
        "Available commands are:",
    ]
    lines.extend(
        f"    {name.ljust(width)}    {command.synopsis}"
        for name, command in sorted(_COMMANDS.items())
    )
    return "\n".join(lines)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command named in ``argv`` and return its exit code."""
    args = list(sys.argv[1:] if argv is None else argv)

    if not args:
        print(_usage(), file=sys.stderr)
        return 127

    name, rest = args[0], args[1:]
    if name in _HELP_FLAGS:
        print(_usage(), file=sys.stderr)
        return 0

    command = _COMMANDS.get(name)
    if command is None:
        print(_usage(), file=sys.stderr)
        return 127

    if any(flag in _HELP_FLAGS for flag in rest):
        print(command.help, file=sys.stderr)
        return 0

    try:
        if command.output is not None:
            print(command.output())
    except Exception as exc:
        print(f"Error executing CLI: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())