# cargo_runner/config_store.py
"""
Thread-safe holder for a single Config.

The model itself does no locking: a read-modify-write such as remove_config()
(which reads `default` and then writes it) must not interleave with another
mutation. ConfigStore serializes load/mutate/save sequences behind one lock.
"""

from __future__ import annotations

import copy
import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from .config import Config
from .load_config import ConfigContext, load_config, save_config

logger = logging.getLogger(__name__)


class ConfigStore:
    """
    Owns one in-memory Config and the lock guarding it.

    Example:
        >>> store = ConfigStore(ConfigContext.for_workspace("."))
        >>> with store.transaction() as config:
        ...     config.set_default_config("run", "fast")
    """

    def __init__(self, context: ConfigContext):
        self._context = context
        self._lock = threading.RLock()
        self._config: Config | None = None

    @property
    def context(self) -> ConfigContext:
        return self._context

    @property
    def config(self) -> Config:
        """The current Config, loaded from the default path on first access."""
        with self._lock:
            if self._config is None:
                self._config = load_config(self._context)
            return self._config

    def load(self, path: str | Path | None = None) -> Config:
        with self._lock:
            self._config = load_config(self._context, path)
            return self._config

    def save(self, path: str | Path | None = None) -> Path:
        with self._lock:
            return save_config(self.config, self._context, path)

    @contextmanager
    def transaction(self, path: str | Path | None = None) -> Iterator[Config]:
        """
        Load, yield the Config for mutation, then save, all under the lock.

        If the block raises, the in-memory Config is restored to what was
        loaded and nothing is written.
        """
        with self._lock:
            config = self.load(path)
            snapshot = copy.deepcopy(config)
            try:
                yield config
            except BaseException:
                self._config = snapshot
                logger.debug("Transaction aborted, changes discarded")
                raise
            save_config(config, self._context, path)

    def __repr__(self) -> str:
        loaded = self._config is not None
        return f"ConfigStore(default_path={str(self._context.default_path)!r}, loaded={loaded})"
