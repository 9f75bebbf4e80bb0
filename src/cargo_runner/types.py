# cargo_runner/types.py
from __future__ import annotations

from enum import Enum

from .exceptions import ConfigKeyNotFoundError


class CommandContext(str, Enum):
    """The fixed purposes a set of command variants can be configured for."""

    RUN = "run"
    TEST = "test"
    BUILD = "build"
    BENCH = "bench"
    SCRIPT = "script"


class CommandType(str, Enum):
    """
    How a variant's command line is interpreted.

    - CARGO → managed: the command is a cargo subcommand ("run", "test", ...)
    - SHELL → raw: the command is handed to the shell as-is (default)
    """

    CARGO = "cargo"
    SHELL = "shell"


def to_context(context: CommandContext | str) -> CommandContext:
    """Accept a CommandContext or its string value; unknown names raise ConfigKeyNotFoundError."""
    try:
        return CommandContext(context)
    except ValueError:
        raise ConfigKeyNotFoundError(str(context)) from None


def to_command_type(command_type: CommandType | str) -> CommandType:
    """Accept a CommandType or "cargo"/"shell"."""
    try:
        return CommandType(command_type)
    except ValueError:
        raise ValueError(
            f"Invalid command type '{command_type}': must be 'cargo' or 'shell'"
        ) from None
