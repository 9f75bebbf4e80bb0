# cargo_runner/command_details.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .exceptions import ConfigParseError
from .types import CommandContext, CommandType

WORKSPACE_FOLDER = "${workspaceFolder}"
"""Placeholder for the workspace root, substituted by whatever runs the command."""

RUN_COMMAND_TEMPLATE = "run --package ${packageName} --bin ${binaryName}"

_SEEDED_COMMANDS: dict[str, tuple[str, CommandType]] = {
    CommandContext.RUN.value: (RUN_COMMAND_TEMPLATE, CommandType.CARGO),
    CommandContext.TEST.value: ("test", CommandType.CARGO),
    CommandContext.BUILD.value: ("build", CommandType.CARGO),
    CommandContext.BENCH.value: ("bench", CommandType.CARGO),
}


@dataclass
class CommandDetails:
    """
    One fully-specified way to invoke a command (a "variant").

    Every field except command_type is optional; None means "not configured"
    and is omitted when the variant is written to TOML.
    """

    command_type: CommandType = CommandType.SHELL
    """'cargo' runs command as a cargo subcommand, 'shell' runs it verbatim."""

    command: str | None = None
    """The executable or subcommand, e.g. "test" or "run --release"."""

    params: str | None = None
    """Extra arguments appended to the command."""

    env: dict[str, str] | None = None
    """Environment variables for the command."""

    allow_multiple_instances: bool | None = None
    """Whether several instances may run at once. None reads as False."""

    working_directory: str | None = None
    """Directory to run in. May contain placeholders like ${workspaceFolder}."""

    pre_command: str | None = None
    """
    Name of another variant in the same set that must run first.
    Validated by CommandConfig.update_pre_command(), not here.
    """

    def __post_init__(self) -> None:
        self.command_type = CommandType(self.command_type)
        # "" and absent are the same state
        if self.pre_command == "":
            self.pre_command = None

    @property
    def allows_multiple_instances(self) -> bool:
        return bool(self.allow_multiple_instances)

    # ------------------------------------------------------------------ #
    # Seeding
    # ------------------------------------------------------------------ #
    @classmethod
    def seed(cls, context: CommandContext | str) -> CommandDetails:
        """
        Build the initial variant for a context.

        run/test/build/bench get a managed cargo command; any other name
        (including "script") gets an empty shell command. Never raises.
        """
        name = context.value if isinstance(context, CommandContext) else str(context)
        command, command_type = _SEEDED_COMMANDS.get(name, ("", CommandType.SHELL))
        return cls(
            command_type=command_type,
            command=command,
            params="",
            env={},
            allow_multiple_instances=False,
            working_directory=WORKSPACE_FOLDER,
            pre_command=None,
        )

    # ------------------------------------------------------------------ #
    # TOML table conversion
    # ------------------------------------------------------------------ #
    def to_dict(self) -> dict[str, Any]:
        """Variant table as written to disk. Absent fields are left out."""
        data: dict[str, Any] = {"type": self.command_type.value}
        optional = (
            ("command", self.command),
            ("params", self.params),
            ("env", dict(self.env) if self.env is not None else None),
            ("allow_multiple_instances", self.allow_multiple_instances),
            ("working_directory", self.working_directory),
            ("pre_command", self.pre_command),
        )
        for key, value in optional:
            if value is not None:
                data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: Any, *, name: str = "<unknown>") -> CommandDetails:
        """
        Build a variant from a TOML table.

        'type' is required; other keys are optional and unknown keys are ignored.

        Raises:
            ConfigParseError: If the table is malformed
        """
        if not isinstance(data, dict):
            raise ConfigParseError(f"Variant '{name}' must be a table")
        if "type" not in data:
            raise ConfigParseError(f"Variant '{name}' is missing required field 'type'")
        try:
            command_type = CommandType(data["type"])
        except ValueError:
            raise ConfigParseError(
                f"Variant '{name}' has invalid type {data['type']!r}: must be 'cargo' or 'shell'"
            ) from None

        for key in ("command", "params", "working_directory", "pre_command"):
            _check_type(name, key, data.get(key), str)
        _check_type(name, "allow_multiple_instances", data.get("allow_multiple_instances"), bool)

        env = data.get("env")
        if env is not None:
            if not isinstance(env, dict) or not all(
                isinstance(k, str) and isinstance(v, str) for k, v in env.items()
            ):
                raise ConfigParseError(f"Variant '{name}': 'env' must be a table of strings")
            env = dict(env)

        return cls(
            command_type=command_type,
            command=data.get("command"),
            params=data.get("params"),
            env=env,
            allow_multiple_instances=data.get("allow_multiple_instances"),
            working_directory=data.get("working_directory"),
            pre_command=data.get("pre_command"),
        )


def _check_type(name: str, key: str, value: Any, expected: type) -> None:
    if value is not None and not isinstance(value, expected):
        raise ConfigParseError(
            f"Variant '{name}': '{key}' must be {expected.__name__}, got {type(value).__name__}"
        )

