"""Shared test fixtures."""

from __future__ import annotations

import os
import stat

import pytest

from irm.settings import Settings


@pytest.fixture(autouse=True)
def isolate_settings(tmp_path, monkeypatch):
    """Point settings at an empty temp config dir and reset the singleton."""
    config_home = tmp_path / "config"
    config_home.mkdir()
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.setattr(Settings, "_instance", None)
    return config_home / "irm" / "settings.json"


@pytest.fixture
def tree(tmp_path):
    """Writable tree D/{a.txt (13 bytes), s/b.txt (0 bytes), s/t/c.bin (5 bytes)}."""
    root = tmp_path / "D"
    (root / "s" / "t").mkdir(parents=True)
    (root / "a.txt").write_text("Hello, World!")
    (root / "s" / "b.txt").write_text("")
    (root / "s" / "t" / "c.bin").write_bytes(b"\x00" * 5)
    return root


@pytest.fixture
def guarded_tree(tmp_path):
    """D/a.txt (13 bytes, writable) and D/s/b.txt (0 bytes, read-only)."""
    root = tmp_path / "D"
    (root / "s").mkdir(parents=True)
    (root / "a.txt").write_text("Hello, World!")
    protected = root / "s" / "b.txt"
    protected.write_text("")
    _strip_write_bits(protected)
    return root


@pytest.fixture
def make_read_only():
    """Return a helper that strips every write bit from a path."""
    return _strip_write_bits


def _strip_write_bits(path) -> None:
    mode = stat.S_IMODE(os.stat(path).st_mode)
    os.chmod(path, mode & ~(stat.S_IWUSR | stat.S_IWGRP | stat.S_IWOTH))
