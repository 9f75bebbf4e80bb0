# cargo_runner/command_config.py
from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any

from .command_details import CommandDetails
from .exceptions import ConfigKeyNotFoundError, ConfigParseError, InvalidPreCommandError
from .types import CommandContext, CommandType, to_command_type

logger = logging.getLogger(__name__)

DEFAULT_KEY = "default"
"""Name of the seeded variant, and the fallback default after removing the default."""


@dataclass
class CommandConfig:
    """
    The named command variants configured for one context, plus which one
    is the default.

    `default` is only checked when changed through CommandConfig.set_default()
    or Config.set_default_config(); it may name a variant that no longer exists.
    """

    default: str = DEFAULT_KEY
    """Key of the variant used when no variant is named explicitly."""

    configs: dict[str, CommandDetails] = field(default_factory=dict)
    """Variant name → variant."""

    @classmethod
    def with_context(cls, context: CommandContext | str) -> CommandConfig:
        """A set holding a single seeded "default" variant for the context."""
        return cls(default=DEFAULT_KEY, configs={DEFAULT_KEY: CommandDetails.seed(context)})

    # ------------------------------------------------------------------ #
    # Lookup
    # ------------------------------------------------------------------ #
    def __contains__(self, key: object) -> bool:
        return key in self.configs

    def __len__(self) -> int:
        return len(self.configs)

    def __iter__(self) -> Iterator[str]:
        return iter(self.configs)

    def keys(self) -> list[str]:
        return list(self.configs)

    def get(self, key: str) -> CommandDetails:
        """
        Return the variant named key.

        Raises:
            ConfigKeyNotFoundError: If no such variant exists
        """
        try:
            return self.configs[key]
        except KeyError:
            raise ConfigKeyNotFoundError(key) from None

    @property
    def default_details(self) -> CommandDetails | None:
        """The default variant, or None if `default` does not resolve."""
        return self.configs.get(self.default)

    # ------------------------------------------------------------------ #
    # Set-level mutations
    # ------------------------------------------------------------------ #
    def set_default(self, key: str) -> None:
        if key not in self.configs:
            logger.warning(f"Cannot set default to '{key}': no such variant")
            raise ConfigKeyNotFoundError(key)
        self.default = key
        logger.debug(f"Default variant set to '{key}'")

    def update_config(self, key: str, details: CommandDetails) -> None:
        """Insert or overwrite the variant named key. Never fails."""
        self.configs[key] = details
        logger.debug(f"Stored variant '{key}'")

    def remove_config(self, key: str) -> None:
        """
        Remove the variant named key (no-op if absent).

        If it was the default, the default resets to "default" whether or not
        a variant with that name still exists. Other variants whose
        pre_command names the removed key are left as they are.
        """
        removed = self.configs.pop(key, None)
        if self.default == key:
            self.default = DEFAULT_KEY
            logger.debug(f"Removed default variant '{key}', default reset to '{DEFAULT_KEY}'")
        elif removed is not None:
            logger.debug(f"Removed variant '{key}'")

    # ------------------------------------------------------------------ #
    # Field updates
    # ------------------------------------------------------------------ #
    def _update_command_details(self, key: str, update_fn: Callable[[CommandDetails], None]) -> None:
        details = self.configs.get(key)
        if details is None:
            logger.warning(f"Cannot update variant '{key}': no such variant")
            raise ConfigKeyNotFoundError(key)
        update_fn(details)

    def update_command(self, key: str, command: str) -> None:
        self._update_command_details(key, lambda d: setattr(d, "command", command))

    def update_params(self, key: str, params: str) -> None:
        self._update_command_details(key, lambda d: setattr(d, "params", params))

    def update_working_directory(self, key: str, working_directory: str) -> None:
        self._update_command_details(
            key, lambda d: setattr(d, "working_directory", working_directory)
        )

    def update_allow_multiple_instances(self, key: str, allow: bool) -> None:
        self._update_command_details(key, lambda d: setattr(d, "allow_multiple_instances", allow))

    def update_command_type(self, key: str, command_type: CommandType | str) -> None:
        # Key lookup first: a missing key is reported before a bad type
        self._update_command_details(
            key, lambda d: setattr(d, "command_type", to_command_type(command_type))
        )

    def update_env(self, key: str, env: dict[str, str] | None) -> None:
        """Replace the variant's environment. None clears it."""
        env = dict(env) if env is not None else None
        self._update_command_details(key, lambda d: setattr(d, "env", env))

    def update_pre_command(self, key: str, pre_command: str) -> None:
        """
        Link the variant named key to another variant that must run first.

        Checks run in this order:
            1. pre_command == key → InvalidPreCommandError (self-reference)
            2. pre_command == ""  → clear the link
            3. pre_command not a variant in this set → InvalidPreCommandError

        Raises:
            InvalidPreCommandError: On self-reference or a dangling reference
            ConfigKeyNotFoundError: If key does not exist
        """
        if pre_command == key:
            logger.warning(f"Rejected pre_command for '{key}': cannot reference itself")
            raise InvalidPreCommandError(
                key, pre_command, f"Cannot set pre_command to its own key: {key}"
            )

        if not pre_command:
            self._update_command_details(key, lambda d: setattr(d, "pre_command", None))
            return

        if pre_command not in self.configs:
            logger.warning(f"Rejected pre_command for '{key}': '{pre_command}' does not exist")
            raise InvalidPreCommandError(
                key, pre_command, f"pre_command '{pre_command}' does not exist as a command key"
            )

        self._update_command_details(key, lambda d: setattr(d, "pre_command", pre_command))

    # ------------------------------------------------------------------ #
    # TOML table conversion
    # ------------------------------------------------------------------ #
    def to_dict(self) -> dict[str, Any]:
        return {
            "default": self.default,
            "configs": {key: details.to_dict() for key, details in self.configs.items()},
        }

    @classmethod
    def from_dict(cls, data: Any, *, context: str = "<unknown>") -> CommandConfig:
        """
        Raises:
            ConfigParseError: If 'default' or 'configs' is missing or malformed
        """
        if not isinstance(data, dict):
            raise ConfigParseError(f"[commands.{context}] must be a table")
        default = data.get("default")
        if not isinstance(default, str):
            raise ConfigParseError(f"[commands.{context}] requires a string 'default'")
        configs = data.get("configs")
        if not isinstance(configs, dict):
            raise ConfigParseError(f"[commands.{context}] requires a 'configs' table")
        return cls(
            default=default,
            configs={
                key: CommandDetails.from_dict(value, name=key) for key, value in configs.items()
            },
        )
