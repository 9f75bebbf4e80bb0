__version__ = "0.1.0"

import logging

from .command_config import DEFAULT_KEY, CommandConfig
from .command_details import WORKSPACE_FOLDER, CommandDetails
from .config import Config
from .config_store import ConfigStore
from .exceptions import (
    CargoRunnerError,
    ConfigIOError,
    ConfigKeyNotFoundError,
    ConfigParseError,
    InvalidPreCommandError,
    SerializationError,
)
from .load_config import (
    ConfigContext,
    ParseOutcome,
    dump_config,
    load_config,
    parse_config,
    save_config,
    try_parse,
)
from .logging_config import disable_logging, get_log_file_path, setup_logging
from .persistence import read_config_file, write_config_file
from .types import CommandContext, CommandType

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Version
    "__version__",
    # Model
    "CommandContext",
    "CommandType",
    "CommandDetails",
    "CommandConfig",
    "Config",
    "DEFAULT_KEY",
    "WORKSPACE_FOLDER",
    # Loading / saving
    "ConfigContext",
    "ConfigStore",
    "ParseOutcome",
    "dump_config",
    "load_config",
    "parse_config",
    "save_config",
    "try_parse",
    "read_config_file",
    "write_config_file",
    # Logging
    "disable_logging",
    "get_log_file_path",
    "setup_logging",
    # Exceptions
    "CargoRunnerError",
    "ConfigIOError",
    "ConfigKeyNotFoundError",
    "ConfigParseError",
    "InvalidPreCommandError",
    "SerializationError",
]
