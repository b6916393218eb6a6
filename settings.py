"""
settings.py

Persistent settings management for toothmark.

Handles cross-platform settings storage using TOML format with platformdirs
for proper user config directory detection.

Settings file location:
    - Windows: %APPDATA%/toothmark/settings.toml
    - macOS: ~/Library/Application Support/toothmark/settings.toml
    - Linux: ~/.config/toothmark/settings.toml

Default values are documented in comments throughout this file.
If settings.toml is corrupted, these defaults will be used.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import platformdirs

# TOML reading - use tomllib for Python 3.11+, tomli for earlier versions
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import tomli_w

log = logging.getLogger(__name__)

APP_NAME = "toothmark"

NOTATIONS = ("fdi", "universal", "palmer")

# Global settings manager instance (singleton)
_settings_manager: Optional["SettingsManager"] = None


def get_settings() -> "SettingsManager":
    """Get the global settings manager instance.

    Returns:
        The singleton SettingsManager instance.
    """
    global _settings_manager
    if _settings_manager is None:
        _settings_manager = SettingsManager()
    return _settings_manager


# =============================================================================
# Overlay Settings
# =============================================================================

@dataclass
class OverlaySettings:
    """Overlay interaction and render settings.

    Defaults:
        flash_duration_ms: 750
        stroke_width: 2.0
        hot_stroke_multiplier: 1.6
        min_magnitude: 1.0
        dash_pattern: [6.0, 6.0]
        label_radius: 10.0
        label_hot_grow: 2.0
        idle_opacity: 0.92
        show_labels: True
        label_padding: 6.0
    """
    flash_duration_ms: int = 750          # Default: 750 ms
    stroke_width: float = 2.0             # Default: 2.0 units
    hot_stroke_multiplier: float = 1.6    # Default: 1.6x when highlighted or flashing
    min_magnitude: float = 1.0            # Default: radius/width/height floor of 1 unit
    dash_pattern: List[float] = field(default_factory=lambda: [6.0, 6.0])  # Default: [6, 6]
    label_radius: float = 10.0            # Default: 10.0 units
    label_hot_grow: float = 2.0           # Default: +2.0 units when hot
    idle_opacity: float = 0.92            # Default: 0.92 (hot items render at 1.0)
    show_labels: bool = True              # Default: True
    label_padding: float = 6.0            # Default: 6.0 units from the viewport edge


# =============================================================================
# Color Settings
# =============================================================================

@dataclass
class ColorSettings:
    """Annotation colors.

    Defaults:
        severity_low: "#34D399"
        severity_medium: "#F59E0B"
        severity_high: "#EF4444"
        palette: 10 distinct colors cycled by annotation index
    """
    severity_low: str = "#34D399"      # Default: green
    severity_medium: str = "#F59E0B"   # Default: amber
    severity_high: str = "#EF4444"     # Default: red
    palette: List[str] = field(default_factory=lambda: [
        "#22D3EE", "#60A5FA", "#A78BFA", "#F472B6", "#FB7185",
        "#F59E0B", "#10B981", "#34D399", "#F97316", "#38BDF8",
    ])

    def severity_colors(self) -> Dict[str, str]:
        return {
            "low": self.severity_low,
            "medium": self.severity_medium,
            "high": self.severity_high,
        }


# =============================================================================
# Dental Settings
# =============================================================================

@dataclass
class DentalSettings:
    """Tooth numbering display settings.

    Defaults:
        notation: "fdi"
    """
    notation: str = "fdi"  # Default: "fdi" (one of fdi | universal | palmer)


# =============================================================================
# Main App Settings
# =============================================================================

@dataclass
class AppSettings:
    """Application settings with default values.

    Attributes:
        overlay: Overlay interaction and render settings.
        colors: Severity colors and palette.
        dental: Tooth numbering display settings.
    """
    overlay: OverlaySettings = field(default_factory=OverlaySettings)
    colors: ColorSettings = field(default_factory=ColorSettings)
    dental: DentalSettings = field(default_factory=DentalSettings)


# =============================================================================
# Settings Manager
# =============================================================================

class SettingsManager:
    """Manages loading, saving, and accessing application settings.

    Settings are stored in a TOML file at the platform-appropriate location.
    If the settings file doesn't exist, defaults are used and the file is
    created on first save.

    Args:
        app_name: Application name used for the config directory.
        settings_dir: Explicit settings directory (overrides platformdirs).
    """

    def __init__(self, app_name: str = APP_NAME, settings_dir: Optional[Path] = None):
        if settings_dir is None:
            settings_dir = Path(platformdirs.user_config_dir(app_name))
        self.settings_dir = Path(settings_dir)
        self.settings_file = self.settings_dir / "settings.toml"
        self.settings = self.load()

    def load(self) -> AppSettings:
        """Load settings from the TOML file.

        Returns:
            AppSettings instance with values from file or defaults if file
            doesn't exist or is invalid.
        """
        if not self.settings_file.exists():
            return AppSettings()

        try:
            with open(self.settings_file, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            # If file is corrupted or unreadable, return defaults
            log.warning("Could not read %s, using defaults: %s", self.settings_file, e)
            return AppSettings()

        return self._parse_toml(data)

    def _parse_toml(self, data: Dict[str, Any]) -> AppSettings:
        """Parse TOML data into AppSettings.

        Args:
            data: Parsed TOML dictionary.

        Returns:
            AppSettings instance populated from TOML data.
        """
        settings = AppSettings()

        # Overlay section
        ov = data.get("overlay", {})
        flash_ms = ov.get("flash_duration_ms", settings.overlay.flash_duration_ms)
        if isinstance(flash_ms, int) and not isinstance(flash_ms, bool) and flash_ms >= 0:
            settings.overlay.flash_duration_ms = flash_ms
        else:
            log.warning("Invalid overlay.flash_duration_ms %r in settings, keeping %r",
                        flash_ms, settings.overlay.flash_duration_ms)
        settings.overlay.stroke_width = ov.get("stroke_width", settings.overlay.stroke_width)
        settings.overlay.hot_stroke_multiplier = ov.get("hot_stroke_multiplier", settings.overlay.hot_stroke_multiplier)
        settings.overlay.min_magnitude = ov.get("min_magnitude", settings.overlay.min_magnitude)
        settings.overlay.dash_pattern = ov.get("dash_pattern", settings.overlay.dash_pattern)
        settings.overlay.label_radius = ov.get("label_radius", settings.overlay.label_radius)
        settings.overlay.label_hot_grow = ov.get("label_hot_grow", settings.overlay.label_hot_grow)
        settings.overlay.idle_opacity = ov.get("idle_opacity", settings.overlay.idle_opacity)
        settings.overlay.show_labels = ov.get("show_labels", settings.overlay.show_labels)
        settings.overlay.label_padding = ov.get("label_padding", settings.overlay.label_padding)

        # Colors section
        colors = data.get("colors", {})
        if "severity" in colors:
            sev = colors["severity"]
            settings.colors.severity_low = sev.get("low", settings.colors.severity_low)
            settings.colors.severity_medium = sev.get("medium", settings.colors.severity_medium)
            settings.colors.severity_high = sev.get("high", settings.colors.severity_high)
        palette = colors.get("palette")
        if isinstance(palette, list) and palette:
            settings.colors.palette = [str(c) for c in palette]

        # Dental section
        dental = data.get("dental", {})
        notation = dental.get("notation", settings.dental.notation)
        if notation in NOTATIONS:
            settings.dental.notation = notation
        else:
            log.warning("Unknown tooth notation %r in settings, keeping %r", notation, settings.dental.notation)

        return settings

    def save(self) -> None:
        """Save current settings to the TOML file.

        Creates the settings directory if it doesn't exist.
        """
        self.settings_dir.mkdir(parents=True, exist_ok=True)

        data = self._to_toml_dict()

        with open(self.settings_file, "wb") as f:
            tomli_w.dump(data, f)

    def _to_toml_dict(self) -> Dict[str, Any]:
        """Convert settings to a TOML-compatible dictionary structure.

        Returns:
            Dictionary organized by TOML sections.
        """
        s = self.settings
        return {
            "overlay": {
                "flash_duration_ms": s.overlay.flash_duration_ms,
                "stroke_width": s.overlay.stroke_width,
                "hot_stroke_multiplier": s.overlay.hot_stroke_multiplier,
                "min_magnitude": s.overlay.min_magnitude,
                "dash_pattern": list(s.overlay.dash_pattern),
                "label_radius": s.overlay.label_radius,
                "label_hot_grow": s.overlay.label_hot_grow,
                "idle_opacity": s.overlay.idle_opacity,
                "show_labels": s.overlay.show_labels,
                "label_padding": s.overlay.label_padding,
            },
            "colors": {
                "severity": {
                    "low": s.colors.severity_low,
                    "medium": s.colors.severity_medium,
                    "high": s.colors.severity_high,
                },
                "palette": list(s.colors.palette),
            },
            "dental": {
                "notation": s.dental.notation,
            },
        }

    def to_toml(self) -> str:
        """Convert current settings to a TOML-formatted string.

        Returns:
            TOML representation of the current settings.
        """
        return tomli_w.dumps(self._to_toml_dict())

    def reset(self) -> None:
        """Restore all settings to their defaults (not saved until save())."""
        self.settings = AppSettings()

    def get_settings_path(self) -> Path:
        """Get the path to the settings file."""
        return self.settings_file
