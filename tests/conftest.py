"""Shared fixtures: keep every test away from the user's real settings file."""
from __future__ import annotations

import pytest

import settings
from settings import SettingsManager


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point the settings singleton at an empty temp directory."""
    manager = SettingsManager(settings_dir=tmp_path / "config")
    monkeypatch.setattr(settings, "_settings_manager", manager)
    yield manager
