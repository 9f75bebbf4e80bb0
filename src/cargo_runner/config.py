# cargo_runner/config.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .command_config import CommandConfig
from .command_details import CommandDetails
from .exceptions import ConfigKeyNotFoundError, ConfigParseError
from .types import CommandContext, CommandType, to_context

if TYPE_CHECKING:
    from .load_config import ConfigContext

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """
    Root of the persisted configuration: one optional CommandConfig per context.

    Config() builds the built-in defaults (run/test/build/bench each seeded with
    a "default" variant, script empty). Use Config.empty() for no slots at all.
    A slot, once populated, is never cleared implicitly.
    """

    run: CommandConfig | None = field(default_factory=lambda: CommandConfig.with_context("run"))
    test: CommandConfig | None = field(default_factory=lambda: CommandConfig.with_context("test"))
    build: CommandConfig | None = field(
        default_factory=lambda: CommandConfig.with_context("build")
    )
    bench: CommandConfig | None = field(
        default_factory=lambda: CommandConfig.with_context("bench")
    )
    script: CommandConfig | None = None

    @classmethod
    def empty(cls) -> Config:
        return cls(run=None, test=None, build=None, bench=None, script=None)

    # ------------------------------------------------------------------ #
    # Slot access
    # ------------------------------------------------------------------ #
    def get_command_config(self, context: CommandContext | str) -> CommandConfig | None:
        return getattr(self, to_context(context).value)

    def require_command_config(self, context: CommandContext | str) -> CommandConfig:
        """
        Raises:
            ConfigKeyNotFoundError: If nothing is configured for the context
        """
        ctx = to_context(context)
        command_config = getattr(self, ctx.value)
        if command_config is None:
            raise ConfigKeyNotFoundError(ctx.value)
        return command_config

    def get_or_insert_command_config(self, context: CommandContext | str) -> CommandConfig:
        """Return the set for a context, creating an empty one first if needed."""
        ctx = to_context(context)
        command_config = getattr(self, ctx.value)
        if command_config is None:
            command_config = CommandConfig()
            setattr(self, ctx.value, command_config)
            logger.debug(f"Created empty command config for '{ctx.value}'")
        return command_config

    def reset_context(self, context: CommandContext | str) -> CommandConfig:
        """Replace the set for a context with a freshly seeded one."""
        ctx = to_context(context)
        command_config = CommandConfig.with_context(ctx)
        setattr(self, ctx.value, command_config)
        logger.debug(f"Reset command config for '{ctx.value}'")
        return command_config

    def contexts(self) -> list[CommandContext]:
        """Contexts with a populated slot, in declaration order."""
        return [ctx for ctx in CommandContext if getattr(self, ctx.value) is not None]

    def set_default_config(self, context: CommandContext | str, key: str) -> None:
        """
        Make key the default variant for a context.

        Raises:
            ConfigKeyNotFoundError: If the context has no set or key is not in it
        """
        ctx = to_context(context)
        command_config = getattr(self, ctx.value)
        if command_config is None:
            logger.warning(f"Cannot set default '{key}': nothing configured for '{ctx.value}'")
            raise ConfigKeyNotFoundError(key)
        command_config.set_default(key)

    # ------------------------------------------------------------------ #
    # Per-variant operations addressed by (context, key)
    # ------------------------------------------------------------------ #
    def _existing(self, context: CommandContext | str, key: str) -> CommandConfig:
        # Missing slot is reported as a missing key and is not created
        ctx = to_context(context)
        command_config = getattr(self, ctx.value)
        if command_config is None:
            logger.warning(f"Cannot update '{key}': nothing configured for '{ctx.value}'")
            raise ConfigKeyNotFoundError(key)
        return command_config

    def update_config(self, context: CommandContext | str, key: str, details: CommandDetails) -> None:
        self.get_or_insert_command_config(context).update_config(key, details)

    def remove_config(self, context: CommandContext | str, key: str) -> None:
        command_config = self.get_command_config(context)
        if command_config is not None:
            command_config.remove_config(key)

    def update_command(self, context: CommandContext | str, key: str, command: str) -> None:
        self._existing(context, key).update_command(key, command)

    def update_params(self, context: CommandContext | str, key: str, params: str) -> None:
        self._existing(context, key).update_params(key, params)

    def update_working_directory(
        self, context: CommandContext | str, key: str, working_directory: str
    ) -> None:
        self._existing(context, key).update_working_directory(key, working_directory)

    def update_allow_multiple_instances(
        self, context: CommandContext | str, key: str, allow: bool
    ) -> None:
        self._existing(context, key).update_allow_multiple_instances(key, allow)

    def update_command_type(
        self, context: CommandContext | str, key: str, command_type: CommandType | str
    ) -> None:
        self._existing(context, key).update_command_type(key, command_type)

    def update_env(
        self, context: CommandContext | str, key: str, env: dict[str, str] | None
    ) -> None:
        self._existing(context, key).update_env(key, env)

    def update_pre_command(self, context: CommandContext | str, key: str, pre_command: str) -> None:
        self._existing(context, key).update_pre_command(key, pre_command)

    # ------------------------------------------------------------------ #
    # TOML document conversion
    # ------------------------------------------------------------------ #
    def to_dict(self) -> dict[str, Any]:
        commands = {
            ctx.value: getattr(self, ctx.value).to_dict() for ctx in self.contexts()
        }
        return {"commands": commands}

    @classmethod
    def from_dict(cls, data: Any) -> Config:
        """
        Raises:
            ConfigParseError: If the [commands] table is missing or malformed
        """
        if not isinstance(data, dict) or "commands" not in data:
            raise ConfigParseError("Missing required [commands] table")
        commands = data["commands"]
        if not isinstance(commands, dict):
            raise ConfigParseError("[commands] must be a table")

        slots = {f.name: None for f in fields(cls)}
        for name in slots:
            if commands.get(name) is not None:
                slots[name] = CommandConfig.from_dict(commands[name], context=name)
        return cls(**slots)

    # ------------------------------------------------------------------ #
    # Persistence
    # ------------------------------------------------------------------ #
    @classmethod
    def load(cls, context: ConfigContext, path: str | Path | None = None) -> Config:
        """See load_config.load_config()."""
        from .load_config import load_config

        return load_config(context, path)

    def save(self, context: ConfigContext, path: str | Path | None = None) -> Path:
        """See load_config.save_config()."""
        from .load_config import save_config

        return save_config(self, context, path)
