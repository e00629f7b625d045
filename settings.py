"""
settings.py

Persistent settings management for DimSync.

Handles cross-platform settings storage using TOML format with platformdirs
for proper user config directory detection.

Settings file location:
    - Windows: %APPDATA%/dimsync/settings.toml
    - macOS: ~/Library/Application Support/dimsync/settings.toml
    - Linux: ~/.config/dimsync/settings.toml

Default values are documented in comments throughout this file.
If settings.toml is corrupted, these defaults will be used.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

# TOML reading - use tomllib for Python 3.11+, tomli for earlier versions
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import tomli_w

APP_NAME = "dimsync"

log = logging.getLogger(__name__)

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
# Measurement Settings
# =============================================================================

@dataclass
class MeasurementSettings:
    """Dimension labelling settings.

    Defaults:
        scale_preset: '1/4" = 1\\''
        counter_enabled: True
    """
    scale_preset: str = "1/4\" = 1'"   # Default: 1/4" = 1'
    counter_enabled: bool = True       # Default: True


@dataclass
class LabelSettings:
    """Presentation attributes stamped onto new dimension labels.

    These are set once when a label is created and never touched again.

    Defaults:
        font_size: 4
        font_family: 1
        text_align: "center"
        vertical_align: "middle"
        line_height: 1.25
        stroke_color: "#000"
    """
    font_size: int = 4                # Default: 4 scene units
    font_family: int = 1              # Default: 1 (hand-drawn)
    text_align: str = "center"        # Default: "center"
    vertical_align: str = "middle"    # Default: "middle"
    line_height: float = 1.25         # Default: 1.25 (unitless)
    stroke_color: str = "#000"        # Default: black


@dataclass
class GridSettings:
    """Grid snapping settings.

    Defaults:
        size: '12"'
        enabled: False
    """
    size: str = "12\""     # Default: 12" (864 PDF points)
    enabled: bool = False  # Default: False


@dataclass
class SyncSettings:
    """Label recompute scheduling.

    Defaults:
        frame_interval_ms: 16
    """
    frame_interval_ms: int = 16  # Default: 16 ms (one frame at 60 Hz)


@dataclass
class HiddenLineSettings:
    """Hidden-line rendering for the 3D viewer.

    Defaults:
        color: "#FFFFFF"
        double_sided: True
    """
    color: str = "#FFFFFF"     # Default: white
    double_sided: bool = True  # Default: True


@dataclass
class DebugSettings:
    """Trace output.

    Defaults:
        trace: False
        trace_file: ""
    """
    trace: bool = False   # Default: False
    trace_file: str = ""  # Default: "" (stderr only)


# =============================================================================
# Main App Settings
# =============================================================================

@dataclass
class AppSettings:
    """Application settings with default values.

    Attributes:
        measurement: Scale and counter settings.
        labels: Label presentation defaults.
        grid: Grid snapping settings.
        sync: Recompute scheduling.
        hidden_line: 3D viewer hidden-line material.
        debug: Trace output.
    """
    measurement: MeasurementSettings = field(default_factory=MeasurementSettings)
    labels: LabelSettings = field(default_factory=LabelSettings)
    grid: GridSettings = field(default_factory=GridSettings)
    sync: SyncSettings = field(default_factory=SyncSettings)
    hidden_line: HiddenLineSettings = field(default_factory=HiddenLineSettings)
    debug: DebugSettings = field(default_factory=DebugSettings)


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
        settings_dir: Override for the config directory (tests, portable installs).
    """

    def __init__(self, app_name: str = APP_NAME, settings_dir: Optional[Path] = None):
        if settings_dir is None:
            settings_dir = Path(platformdirs.user_config_dir(app_name))
        self.settings_dir = Path(settings_dir)
        self.settings_file = self.settings_dir / "settings.toml"
        self.settings = self.load()
        self._needs_save = not self.settings_file.exists()  # Save if file didn't exist

    def ensure_file_complete(self) -> None:
        """Ensure settings file exists with all sections. Call once at startup."""
        if self._needs_save or not self.settings_file.exists():
            self.save()
            self._needs_save = False

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

            return self._parse_toml(data)
        except (OSError, tomllib.TOMLDecodeError) as e:
            # If file is corrupted or invalid, return defaults
            log.warning("Ignoring unreadable settings file %s: %s", self.settings_file, e)
            return AppSettings()

    def _parse_toml(self, data: Dict[str, Any]) -> AppSettings:
        """Parse TOML data into AppSettings.

        Args:
            data: Parsed TOML dictionary.

        Returns:
            AppSettings instance populated from TOML data.
        """
        settings = AppSettings()

        m = data.get("measurement", {})
        settings.measurement.scale_preset = m.get("scale_preset", settings.measurement.scale_preset)
        settings.measurement.counter_enabled = m.get("counter_enabled", settings.measurement.counter_enabled)

        lb = data.get("labels", {})
        settings.labels.font_size = lb.get("font_size", settings.labels.font_size)
        settings.labels.font_family = lb.get("font_family", settings.labels.font_family)
        settings.labels.text_align = lb.get("text_align", settings.labels.text_align)
        settings.labels.vertical_align = lb.get("vertical_align", settings.labels.vertical_align)
        settings.labels.line_height = lb.get("line_height", settings.labels.line_height)
        settings.labels.stroke_color = lb.get("stroke_color", settings.labels.stroke_color)

        g = data.get("grid", {})
        settings.grid.size = g.get("size", settings.grid.size)
        settings.grid.enabled = g.get("enabled", settings.grid.enabled)

        sy = data.get("sync", {})
        settings.sync.frame_interval_ms = sy.get("frame_interval_ms", settings.sync.frame_interval_ms)

        hl = data.get("hidden_line", {})
        settings.hidden_line.color = hl.get("color", settings.hidden_line.color)
        settings.hidden_line.double_sided = hl.get("double_sided", settings.hidden_line.double_sided)

        dbg = data.get("debug", {})
        settings.debug.trace = dbg.get("trace", settings.debug.trace)
        settings.debug.trace_file = dbg.get("trace_file", settings.debug.trace_file)

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
            "measurement": {
                "scale_preset": s.measurement.scale_preset,
                "counter_enabled": s.measurement.counter_enabled,
            },
            "labels": {
                "font_size": s.labels.font_size,
                "font_family": s.labels.font_family,
                "text_align": s.labels.text_align,
                "vertical_align": s.labels.vertical_align,
                "line_height": s.labels.line_height,
                "stroke_color": s.labels.stroke_color,
            },
            "grid": {
                "size": s.grid.size,
                "enabled": s.grid.enabled,
            },
            "sync": {
                "frame_interval_ms": s.sync.frame_interval_ms,
            },
            "hidden_line": {
                "color": s.hidden_line.color,
                "double_sided": s.hidden_line.double_sided,
            },
            "debug": {
                "trace": s.debug.trace,
                "trace_file": s.debug.trace_file,
            },
        }

    def to_toml(self) -> str:
        """Convert current settings to a TOML-formatted string.

        Returns:
            TOML representation of the current settings.
        """
        data = self._to_toml_dict()
        return tomli_w.dumps(data)

    def get_settings_path(self) -> Path:
        """Get the path to the settings file.

        Returns:
            Path object pointing to the settings file location.
        """
        return self.settings_file
