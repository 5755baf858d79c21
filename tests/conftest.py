"""Shared fixtures for locale-sync tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

import locale_sync.config as cfg


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the user configuration file at an empty temporary location."""
    path = tmp_path_factory.mktemp("config") / "locale_sync_config.json"
    monkeypatch.setattr(cfg, "CONFIG_PATH", path)
    return path


@pytest.fixture()
def write_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write ``text`` verbatim to ``name`` below ``tmp_path``."""

    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(text.encode("utf-8"))
        return path.resolve()

    return _write
