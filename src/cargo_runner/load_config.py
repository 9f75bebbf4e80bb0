# cargo_runner/load_config.py
from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

try:
    import tomllib as tomli  # Python 3.11+
except ImportError:
    import tomli  # <3.11

import tomli_w

from .config import Config
from .exceptions import CargoRunnerError, ConfigParseError, SerializationError
from .persistence import read_config_file, write_config_file

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "cargo-runner.toml"


@dataclass(frozen=True)
class ConfigContext:
    """
    Where load_config()/save_config() read and write when no path is given.

    Passed explicitly to every load/save call instead of living in a global.
    """

    default_path: Path

    def __post_init__(self) -> None:
        object.__setattr__(self, "default_path", Path(self.default_path))

    @classmethod
    def for_workspace(cls, root: str | Path) -> ConfigContext:
        """Context whose default file is <root>/cargo-runner.toml."""
        return cls(Path(root) / CONFIG_FILE_NAME)

    def resolve(self, path: str | Path | None = None) -> Path:
        return Path(path) if path is not None else self.default_path


# =====================================================================
#   Parsing
# =====================================================================
@dataclass(frozen=True)
class ParseOutcome:
    """
    Result of try_parse(): exactly one of config / error is set.

    Callers decide what a failure means: or_default() substitutes the
    built-in configuration, unwrap() raises the parse error.
    """

    config: Config | None = None
    error: ConfigParseError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Config:
        if self.error is not None:
            raise self.error
        return self.config  # type: ignore[return-value]

    def or_default(self, factory: Callable[[], Config] = Config) -> Config:
        if self.error is None:
            return self.config  # type: ignore[return-value]
        logger.warning(f"Invalid configuration, falling back to defaults: {self.error}")
        return factory()


def parse_config(text: str | bytes) -> Config:
    """
    Parse TOML text (or raw UTF-8 bytes) into a Config.

    Raises:
        ConfigParseError: If the content is not UTF-8, not TOML, or does not
            match the schema
    """
    if isinstance(text, bytes):
        try:
            text = text.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ConfigParseError(f"Config is not valid UTF-8: {e}") from None
    try:
        data = tomli.loads(text)
    except tomli.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML: {e}") from None
    except RecursionError:
        raise ConfigParseError("Invalid TOML: nesting too deep") from None
    return Config.from_dict(data)


def try_parse(text: str | bytes) -> ParseOutcome:
    """Like parse_config(), but returns the error instead of raising it."""
    try:
        return ParseOutcome(config=parse_config(text))
    except ConfigParseError as e:
        return ParseOutcome(error=e)


def dump_config(config: Config) -> str:
    """
    Render a Config as TOML.

    Raises:
        SerializationError: If a field holds a value TOML cannot represent
    """
    try:
        return tomli_w.dumps(config.to_dict())
    except (TypeError, ValueError, AttributeError) as e:
        raise SerializationError(f"Cannot serialize configuration: {e}") from e


# =====================================================================
#   Main loader / saver
# =====================================================================
def load_config(context: ConfigContext, path: str | Path | None = None) -> Config:
    """
    Read the config file (path, or the context's default path) into a Config.

    A file that cannot be parsed yields the built-in defaults instead of an
    error; only I/O failures propagate.

    Raises:
        ConfigIOError: If the file cannot be opened or read
    """
    config_path = context.resolve(path)
    text = read_config_file(config_path)
    config = try_parse(text).or_default()
    logger.debug(f"Loaded config from {config_path} ({len(config.contexts())} contexts)")
    return config


def save_config(config: Config, context: ConfigContext, path: str | Path | None = None) -> Path:
    """
    Write config as pretty TOML to path (or the context's default path).

    Returns:
        The path written to

    Raises:
        SerializationError: If the config cannot be rendered
        ConfigIOError: If the file cannot be written
    """
    config_path = context.resolve(path)
    try:
        text = dump_config(config)
    except CargoRunnerError:
        logger.error(f"Refusing to write {config_path}: configuration is not serializable")
        raise
    write_config_file(config_path, text)
    logger.debug(f"Saved config to {config_path}")
    return config_path
