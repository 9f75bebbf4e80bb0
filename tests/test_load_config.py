# tests/test_load_config.py

import logging
from pathlib import Path

import pytest

from cargo_runner import (
    CommandDetails,
    CommandType,
    Config,
    ConfigContext,
    ConfigIOError,
    ConfigParseError,
    SerializationError,
    dump_config,
    load_config,
    parse_config,
    save_config,
    try_parse,
)

logging.getLogger("cargo_runner").setLevel(logging.DEBUG)


@pytest.fixture
def sample_toml():
    return """
[commands.run]
default = "fast"

[commands.run.configs.fast]
type = "cargo"
command = "run --release"
params = "-- --port 8080"
allow_multiple_instances = true
working_directory = "${workspaceFolder}/server"
pre_command = "build"

[commands.run.configs.fast.env]
RUST_LOG = "debug"

[commands.run.configs.build]
type = "cargo"
command = "build"

[commands.script]
default = "fmt"

[commands.script.configs.fmt]
type = "shell"
command = "cargo fmt --all"
"""


def test_context_resolve(tmp_path: Path):
    context = ConfigContext.for_workspace(tmp_path)
    assert context.default_path == tmp_path / "cargo-runner.toml"
    assert context.resolve() == context.default_path
    assert context.resolve(str(tmp_path / "other.toml")) == tmp_path / "other.toml"


def test_parse_config(sample_toml):
    config = parse_config(sample_toml)
    assert config.test is None
    assert config.script.default == "fmt"
    assert config.run.default == "fast"
    assert config.run.get("fast") == CommandDetails(
        command_type=CommandType.CARGO,
        command="run --release",
        params="-- --port 8080",
        env={"RUST_LOG": "debug"},
        allow_multiple_instances=True,
        working_directory="${workspaceFolder}/server",
        pre_command="build",
    )
    assert config.run.get("build").params is None


def test_parse_empty_pre_command_is_absent():
    config = parse_config(
        '[commands.test]\ndefault = "default"\n'
        '[commands.test.configs.default]\ntype = "cargo"\npre_command = ""\n'
    )
    assert config.test.get("default").pre_command is None


@pytest.mark.parametrize(
    "text",
    [
        "",
        "not = [valid toml",
        "commands = 1",
        "[commands.run]\nconfigs = {}",
        '[commands.run]\ndefault = "x"\n[commands.run.configs.x]\ncommand = "run"',
        '[commands.run]\ndefault = "x"\n[commands.run.configs.x]\ntype = "npm"',
    ],
)
def test_try_parse_reports_errors(text):
    outcome = try_parse(text)
    assert not outcome.ok
    assert outcome.config is None
    assert isinstance(outcome.error, ConfigParseError)
    with pytest.raises(ConfigParseError):
        outcome.unwrap()
    assert outcome.or_default() == Config()


def test_or_default_custom_factory():
    assert try_parse("garbage =").or_default(Config.empty) == Config.empty()


def test_or_default_logs_warning(caplog):
    caplog.set_level(logging.WARNING, logger="cargo_runner")
    try_parse("").or_default()
    assert "falling back to defaults" in caplog.text


def test_try_parse_success(sample_toml):
    outcome = try_parse(sample_toml)
    assert outcome.ok
    assert outcome.unwrap() is outcome.config
    assert outcome.or_default() is outcome.config


def test_dump_config_is_readable_toml(default_config):
    text = dump_config(default_config)
    assert "[commands.run]" in text
    assert 'default = "default"' in text
    assert 'type = "cargo"' in text
    assert "pre_command" not in text
    assert "script" not in text


def test_dump_config_rejects_unserializable(default_config):
    default_config.run.get("default").env = {"A": object()}
    with pytest.raises(SerializationError):
        dump_config(default_config)


# =====================================================================
#   load / save
# =====================================================================
def test_save_then_load_round_trip(config_context, sample_toml):
    config = parse_config(sample_toml)
    config.reset_context("bench")
    path = save_config(config, config_context)

    assert path == config_context.default_path
    assert load_config(config_context) == config


def test_default_config_round_trip(config_context, default_config):
    default_config.save(config_context)
    assert Config.load(config_context) == default_config


def test_explicit_path_overrides_default(config_context, tmp_path: Path, default_config):
    other = tmp_path / "nested" / "custom.toml"
    default_config.update_config("script", "fmt", CommandDetails(command="cargo fmt"))
    default_config.save(config_context, other)

    assert other.exists()
    assert not config_context.default_path.exists()
    assert load_config(config_context, other).script.keys() == ["fmt"]


def test_load_corrupted_file_yields_defaults(config_context):
    config_context.default_path.write_text("[commands.run\n", encoding="utf-8")
    assert load_config(config_context) == Config()


@pytest.mark.parametrize("content", [b"\xff\xfe", b"[commands.run\n\xff\xfe garbage\n"])
def test_load_non_utf8_file_yields_defaults(config_context, content):
    config_context.default_path.write_bytes(content)
    assert load_config(config_context) == Config()


def test_parse_config_accepts_bytes(sample_toml):
    assert parse_config(sample_toml.encode("utf-8")) == parse_config(sample_toml)


def test_parse_config_rejects_non_utf8_bytes():
    with pytest.raises(ConfigParseError, match="not valid UTF-8"):
        parse_config(b"\xff\xfe")


def test_try_parse_deeply_nested_input():
    outcome = try_parse("a = " + "[" * 200000)
    assert not outcome.ok
    assert isinstance(outcome.error, ConfigParseError)
    assert outcome.or_default() == Config()


def test_load_missing_file_raises_io_error(config_context):
    with pytest.raises(ConfigIOError) as exc_info:
        load_config(config_context)
    assert exc_info.value.path == config_context.default_path
    assert isinstance(exc_info.value, OSError)


def test_save_refuses_unserializable(config_context, default_config, caplog):
    default_config.run.get("default").env = {"A": object()}
    with pytest.raises(SerializationError):
        save_config(default_config, config_context)
    assert not config_context.default_path.exists()
    assert "not serializable" in caplog.text


def test_debug_log_on_load(config_context, default_config, caplog):
    caplog.set_level(logging.DEBUG, logger="cargo_runner")
    default_config.save(config_context)
    load_config(config_context)
    assert "Loaded config from" in caplog.text
