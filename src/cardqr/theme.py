"""
Color themes and the Qt stylesheets built from them.
"""

from dataclasses import dataclass


# =============================================================================
# THEME SYSTEM
# =============================================================================
@dataclass
class Theme:
    name: str
    bg: str
    surface: str
    card: str
    border: str
    text_primary: str
    text_secondary: str
    accent: str
    accent_hover: str
    success: str
    error: str


THEMES = {
    "dark": Theme(
        name="Dark",
        bg="#1a1a2e",
        surface="#16213e",
        card="#0f0f23",
        border="#2d3561",
        text_primary="#e8e8e8",
        text_secondary="#a0a0b0",
        accent="#4f8cff",
        accent_hover="#6ba3ff",
        success="#4ade80",
        error="#f87171",
    ),
    "light": Theme(
        name="Light",
        bg="#f5f7fa",
        surface="#ffffff",
        card="#ffffff",
        border="#e2e8f0",
        text_primary="#1e293b",
        text_secondary="#64748b",
        accent="#3b82f6",
        accent_hover="#2563eb",
        success="#22c55e",
        error="#ef4444",
    ),
}


def get_theme(name: str) -> Theme:
    return THEMES.get(name, THEMES["dark"])


class StyleManager:
    """Qt stylesheets for the card window and its toast."""

    def __init__(self, theme: Theme):
        self.theme = theme

    def get_app_stylesheet(self) -> str:
        t = self.theme
        return f"""
            QMainWindow {{
                background: {t.bg};
            }}
            QWidget {{
                color: {t.text_primary};
                font-size: 13px;
            }}
            QGroupBox {{
                background: {t.card};
                border: 1px solid {t.border};
                border-radius: 8px;
                margin-top: 12px;
                padding: 16px 12px 12px 12px;
            }}
            QGroupBox::title {{
                subcontrol-origin: margin;
                left: 12px;
                padding: 2px 8px;
                color: {t.accent};
                font-weight: 600;
            }}
            QLineEdit {{
                background: {t.surface};
                border: 1px solid {t.border};
                border-radius: 6px;
                padding: 6px 8px;
            }}
            QLineEdit:focus {{
                border: 1px solid {t.accent};
            }}
            QPlainTextEdit#vcardView {{
                background: {t.surface};
                border: 1px solid {t.border};
                border-radius: 6px;
                font-family: 'Consolas', 'Menlo', monospace;
                font-size: 12px;
            }}
            QTextEdit#activityLog {{
                background: {t.surface};
                border: none;
                color: {t.text_secondary};
                font-size: 12px;
            }}
            QLabel#qrPreview {{
                background: #ffffff;
                border: 1px solid {t.border};
                border-radius: 4px;
            }}
            QPushButton {{
                background: {t.surface};
                border: 1px solid {t.border};
                border-radius: 6px;
                padding: 6px 12px;
            }}
            QPushButton:hover {{
                border-color: {t.accent};
            }}
            QPushButton[class="primary"] {{
                background: {t.accent};
                border: none;
                color: #ffffff;
                font-weight: 600;
            }}
            QPushButton[class="primary"]:hover {{
                background: {t.accent_hover};
            }}
            QLabel[class="secondary"] {{
                color: {t.text_secondary};
                font-size: 11px;
            }}
            QStatusBar QLabel {{
                color: {t.text_secondary};
            }}
        """

    def get_toast_stylesheet(self, error: bool = False) -> str:
        t = self.theme
        edge = t.error if error else t.success
        return f"""
            QLabel {{
                background-color: {t.card};
                color: {t.text_primary};
                border: 1px solid {edge};
                border-radius: 8px;
                padding: 10px 16px;
            }}
        """
