"""
Persisted application preferences.
"""

from dataclasses import dataclass
from pathlib import Path

from PySide6.QtCore import QSettings


DEFAULT_EXPORT_NAME = "qrcode.png"


@dataclass
class AppSettings:
    theme: str = "dark"
    output_dir: str = ""
    escape_values: bool = False
    toast_ms: int = 2000
    window_geometry: str = ""

    def __post_init__(self):
        if not self.output_dir:
            self.output_dir = str(Path.home() / "Desktop")

    def default_export_path(self) -> str:
        return str(Path(self.output_dir) / DEFAULT_EXPORT_NAME)


def open_settings() -> QSettings:
    return QSettings("CardQR", "CardQR")


def load_settings(qsettings: QSettings) -> AppSettings:
    defaults = AppSettings()
    return AppSettings(
        theme=qsettings.value("theme", defaults.theme),
        output_dir=qsettings.value("output_dir", defaults.output_dir),
        escape_values=qsettings.value("escape_values", defaults.escape_values, type=bool),
        toast_ms=int(qsettings.value("toast_ms", defaults.toast_ms)),
        window_geometry=qsettings.value("geometry", ""),
    )


def save_settings(qsettings: QSettings, settings: AppSettings):
    qsettings.setValue("theme", settings.theme)
    qsettings.setValue("output_dir", settings.output_dir)
    qsettings.setValue("escape_values", settings.escape_values)
    qsettings.setValue("toast_ms", settings.toast_ms)
    qsettings.setValue("geometry", settings.window_geometry)
    qsettings.sync()
