# tests/conftest.py
import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src')))

import pytest
from cargo_runner.command_config import CommandConfig
from cargo_runner.command_details import CommandDetails
from cargo_runner.config import Config
from cargo_runner.load_config import ConfigContext


@pytest.fixture
def default_config():
    return Config()


@pytest.fixture
def run_config():
    config = CommandConfig.with_context("run")
    config.update_config("fast", CommandDetails(command_type="cargo", command="run --release"))
    config.update_config("lint", CommandDetails(command="cargo clippy"))
    return config


@pytest.fixture
def config_context(tmp_path):
    return ConfigContext.for_workspace(tmp_path)
