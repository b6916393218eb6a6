"""Tests for TOML settings persistence."""
from __future__ import annotations

from settings import AppSettings, SettingsManager


class TestSettingsManager:
    def test_defaults_when_missing(self, tmp_path):
        mgr = SettingsManager(settings_dir=tmp_path)
        assert mgr.settings == AppSettings()
        assert mgr.get_settings_path() == tmp_path / "settings.toml"

    def test_save_and_reload(self, tmp_path):
        mgr = SettingsManager(settings_dir=tmp_path / "nested")
        mgr.settings.overlay.flash_duration_ms = 1200
        mgr.settings.colors.severity_high = "#FF0000"
        mgr.settings.dental.notation = "universal"
        mgr.save()

        again = SettingsManager(settings_dir=tmp_path / "nested")
        assert again.settings.overlay.flash_duration_ms == 1200
        assert again.settings.colors.severity_high == "#FF0000"
        assert again.settings.dental.notation == "universal"

    def test_partial_file_keeps_other_defaults(self, tmp_path):
        (tmp_path / "settings.toml").write_text("[overlay]\nstroke_width = 3.5\n", encoding="utf-8")
        s = SettingsManager(settings_dir=tmp_path).settings
        assert s.overlay.stroke_width == 3.5
        assert s.overlay.flash_duration_ms == 750

    def test_corrupt_file_uses_defaults(self, tmp_path):
        (tmp_path / "settings.toml").write_text("[overlay\nnot toml", encoding="utf-8")
        assert SettingsManager(settings_dir=tmp_path).settings == AppSettings()

    def test_unknown_notation_ignored(self, tmp_path):
        (tmp_path / "settings.toml").write_text('[dental]\nnotation = "roman"\n', encoding="utf-8")
        assert SettingsManager(settings_dir=tmp_path).settings.dental.notation == "fdi"

    def test_invalid_flash_duration_ignored(self, tmp_path):
        (tmp_path / "settings.toml").write_text(
            '[overlay]\nflash_duration_ms = "slow"\n', encoding="utf-8")
        assert SettingsManager(settings_dir=tmp_path).settings.overlay.flash_duration_ms == 750

    def test_to_toml_and_reset(self, tmp_path):
        mgr = SettingsManager(settings_dir=tmp_path)
        mgr.settings.overlay.show_labels = False
        assert "show_labels = false" in mgr.to_toml()
        mgr.reset()
        assert mgr.settings.overlay.show_labels is True
