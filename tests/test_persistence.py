# tests/test_persistence.py
import os
from pathlib import Path

import pytest

from cargo_runner import ConfigIOError, read_config_file, write_config_file


def test_write_then_read(tmp_path: Path):
    path = tmp_path / "a" / "b" / "cargo-runner.toml"
    write_config_file(path, "[commands]\n# ünïcode\n")
    assert read_config_file(path).decode("utf-8") == "[commands]\n# ünïcode\n"
    assert sorted(p.name for p in path.parent.iterdir()) == ["cargo-runner.toml"]


def test_write_replaces_whole_file(tmp_path: Path):
    path = tmp_path / "cfg.toml"
    path.write_text("x" * 100, encoding="utf-8")
    write_config_file(path, "short")
    assert path.read_text(encoding="utf-8") == "short"


def test_read_missing_file(tmp_path: Path):
    with pytest.raises(ConfigIOError, match="Cannot read config file"):
        read_config_file(tmp_path / "missing.toml")


def test_read_returns_undecoded_bytes(tmp_path: Path):
    path = tmp_path / "bad.toml"
    path.write_bytes(b"\xff\xfe\x00")
    assert read_config_file(path) == b"\xff\xfe\x00"


def test_each_write_uses_its_own_temp_file(tmp_path: Path, monkeypatch):
    path = tmp_path / "cfg.toml"
    sources = []
    real_replace = os.replace

    def capture_replace(src, dst):
        sources.append(Path(src))
        real_replace(src, dst)

    monkeypatch.setattr(os, "replace", capture_replace)
    write_config_file(path, "first")
    write_config_file(path, "second")

    assert len(set(sources)) == 2
    assert all(src.parent == tmp_path and src != path for src in sources)
    assert path.read_text(encoding="utf-8") == "second"


def test_failed_replace_leaves_original(tmp_path: Path, monkeypatch):
    path = tmp_path / "cfg.toml"
    path.write_text("original", encoding="utf-8")

    def fail_replace(src, dst):
        raise PermissionError("denied")

    monkeypatch.setattr(os, "replace", fail_replace)
    with pytest.raises(ConfigIOError, match="Cannot write config file") as exc_info:
        write_config_file(path, "new")

    assert exc_info.value.path == path
    assert path.read_text(encoding="utf-8") == "original"
    assert [p.name for p in tmp_path.iterdir()] == ["cfg.toml"]
