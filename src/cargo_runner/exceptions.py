# cargo_runner/exceptions.py
"""
Custom exception hierarchy for cargo_runner.

All cargo_runner-specific exceptions inherit from CargoRunnerError to enable
catch-all error handling while still providing specific exception types
for different error conditions.
"""

from __future__ import annotations

from pathlib import Path


class CargoRunnerError(Exception):
    """
    Base exception for all cargo_runner errors.

    Catch this to handle any cargo_runner-specific error.
    """

    pass


class ConfigKeyNotFoundError(CargoRunnerError, KeyError):
    """
    Raised when a command variant key (or a context slot) does not exist.

    Also a KeyError, so mapping-style callers can catch it the usual way.

    Example:
        >>> config.run.update_command("missing", "build")
        ConfigKeyNotFoundError: Config key 'missing' not found
    """

    def __init__(self, key: str):
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the key
        return f"Config key '{self.key}' not found"


class InvalidPreCommandError(CargoRunnerError, ValueError):
    """
    Raised when a pre_command link would point at its own variant or at a
    variant that does not exist in the same set.

    Attributes:
        key: The variant whose pre_command was being set
        pre_command: The rejected pre_command value
    """

    def __init__(self, key: str, pre_command: str, reason: str):
        self.key = key
        self.pre_command = pre_command
        super().__init__(reason)


class ConfigIOError(CargoRunnerError, OSError):
    """
    Raised when the configuration file cannot be opened, read or written.

    Attributes:
        path: The file that failed
    """

    def __init__(self, path: str | Path, message: str):
        self.path = Path(path)
        super().__init__(f"{message}: {self.path}")


class SerializationError(CargoRunnerError):
    """
    Raised when a Config cannot be rendered as TOML.

    Should not happen for configs built through the public API; it guards
    against values of the wrong type being assigned directly to fields.
    """

    pass


class ConfigParseError(CargoRunnerError, ValueError):
    """
    Raised when persisted text is not valid TOML or does not match the
    configuration schema.

    load_config() never raises this: a malformed file is replaced by the
    built-in defaults. Use parse_config() or ParseOutcome.unwrap() to see it.
    """

    pass
