#!/usr/bin/env python3
"""
CardQR - Business Card QR Generator

Fill in a contact form, generate a vCard 3.0 record and show it as a QR code.

Features:
- vCard text preview next to the QR preview
- Copy vCard text or QR image to the clipboard
- PNG export (512x512, error correction M)
- Optional escaping of reserved vCard characters
- Dark / light themes and settings persistence
- Keyboard shortcuts
"""

import logging
import os
import sys
from typing import Dict, Optional

from PySide6 import QtCore, QtGui, QtWidgets
from PySide6.QtCore import Qt, QSettings
from qrcode.exceptions import DataOverflowError

from .contact import ContactRecord
from .engine import ExportError
from .session import CardSession
from .settings import load_settings, open_settings, save_settings
from .theme import THEMES, StyleManager, get_theme
from .widgets import PreviewWidget, Toast, bitmap_to_qimage


logger = logging.getLogger(__name__)

SHORTCUTS = (
    ("Ctrl+G", "generate"),
    ("Ctrl+Shift+C", "copy_text"),
    ("Ctrl+Shift+I", "copy_image"),
    ("Ctrl+S", "export_png"),
    ("Ctrl+N", "clear_form"),
)


# =============================================================================
# MAIN WINDOW
# =============================================================================
class CardQRWindow(QtWidgets.QMainWindow):
    """Contact form, vCard text and QR preview in one window."""

    def __init__(self, qsettings: Optional[QSettings] = None):
        super().__init__()
        self.setWindowTitle("Business Card QR Generator")
        self.setMinimumSize(900, 620)
        self.resize(1100, 720)

        self.qsettings = qsettings if qsettings is not None else open_settings()
        self.app_settings = load_settings(self.qsettings)

        self.session = CardSession(escape=self.app_settings.escape_values)
        self.field_edits: Dict[str, QtWidgets.QLineEdit] = {}

        self.theme = get_theme(self.app_settings.theme)
        self.style_mgr = StyleManager(self.theme)

        self._build_ui()
        self._setup_shortcuts()
        self._restore_geometry()

    def _restore_geometry(self):
        if self.app_settings.window_geometry:
            self.restoreGeometry(QtCore.QByteArray.fromBase64(
                self.app_settings.window_geometry.encode()))

    def closeEvent(self, event):
        self.app_settings.window_geometry = self.saveGeometry().toBase64().data().decode()
        save_settings(self.qsettings, self.app_settings)
        super().closeEvent(event)

    def _setup_shortcuts(self):
        for key, handler_name in SHORTCUTS:
            shortcut = QtGui.QShortcut(QtGui.QKeySequence(key), self)
            shortcut.activated.connect(getattr(self, handler_name))

    # =========================================================================
    # UI
    # =========================================================================
    def _build_ui(self):
        self.setStyleSheet(self.style_mgr.get_app_stylesheet())

        central = QtWidgets.QWidget()
        self.setCentralWidget(central)
        layout = QtWidgets.QHBoxLayout(central)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)

        left = QtWidgets.QVBoxLayout()
        left.setSpacing(8)
        layout.addLayout(left, 5)
        left.addWidget(self._build_form_card())
        left.addWidget(self._build_vcard_card())
        left.addWidget(self._build_log_card())

        right = QtWidgets.QVBoxLayout()
        right.setSpacing(8)
        layout.addLayout(right, 4)
        right.addWidget(self._build_preview_card())
        right.addWidget(self._build_actions_card())
        right.addWidget(self._build_options_card())
        right.addStretch()

        self.status_label = QtWidgets.QLabel("Ready")
        self.statusBar().addWidget(self.status_label)

        self.toast = Toast(central)

    def _build_form_card(self) -> QtWidgets.QGroupBox:
        box = QtWidgets.QGroupBox("Contact Information")
        grid = QtWidgets.QGridLayout(box)
        grid.setHorizontalSpacing(12)
        grid.setVerticalSpacing(6)

        # Two columns of five, like a paper business card form
        half = (len(ContactRecord.FIELDS) + 1) // 2
        for idx, (attr, label) in enumerate(ContactRecord.FIELDS):
            col = 0 if idx < half else 2
            row = idx if idx < half else idx - half
            edit = QtWidgets.QLineEdit()
            edit.setPlaceholderText(label)
            edit.textChanged.connect(
                lambda text, attr=attr: setattr(self.session.record, attr, text)
            )
            grid.addWidget(QtWidgets.QLabel(f"{label}:"), row, col)
            grid.addWidget(edit, row, col + 1)
            self.field_edits[attr] = edit

        btn_row = QtWidgets.QHBoxLayout()
        generate_btn = QtWidgets.QPushButton("Generate vCard")
        generate_btn.setProperty("class", "primary")
        generate_btn.setCursor(Qt.PointingHandCursor)
        generate_btn.clicked.connect(self.generate)
        btn_row.addWidget(generate_btn)

        clear_btn = QtWidgets.QPushButton("Clear")
        clear_btn.clicked.connect(self.clear_form)
        btn_row.addWidget(clear_btn)
        grid.addLayout(btn_row, half, 0, 1, 4)

        return box

    def _build_vcard_card(self) -> QtWidgets.QGroupBox:
        box = QtWidgets.QGroupBox("Generated vCard")
        layout = QtWidgets.QVBoxLayout(box)
        layout.setContentsMargins(8, 8, 8, 8)

        self.vcard_view = QtWidgets.QPlainTextEdit()
        self.vcard_view.setObjectName("vcardView")
        self.vcard_view.setReadOnly(True)
        self.vcard_view.setPlaceholderText("Press Generate (Ctrl+G) to build the vCard")
        self.vcard_view.setMinimumHeight(160)
        layout.addWidget(self.vcard_view)

        return box

    def _build_log_card(self) -> QtWidgets.QGroupBox:
        box = QtWidgets.QGroupBox("Log")
        layout = QtWidgets.QVBoxLayout(box)
        layout.setContentsMargins(8, 8, 8, 8)

        self.log_view = QtWidgets.QTextEdit()
        self.log_view.setObjectName("activityLog")
        self.log_view.setReadOnly(True)
        self.log_view.setMaximumHeight(80)
        self.log_view.setPlaceholderText("Activity log...")
        layout.addWidget(self.log_view)

        return box

    def _build_preview_card(self) -> QtWidgets.QGroupBox:
        box = QtWidgets.QGroupBox("QR Code")
        layout = QtWidgets.QVBoxLayout(box)
        layout.setContentsMargins(8, 8, 8, 8)

        self.preview_widget = PreviewWidget()
        self.preview_widget.setObjectName("qrPreview")
        self.preview_widget.setMinimumSize(300, 300)
        self.preview_widget.setMaximumSize(380, 380)
        layout.addWidget(self.preview_widget, alignment=Qt.AlignCenter)

        return box

    def _build_actions_card(self) -> QtWidgets.QGroupBox:
        box = QtWidgets.QGroupBox("Actions")
        layout = QtWidgets.QHBoxLayout(box)
        layout.setSpacing(6)
        layout.setContentsMargins(8, 8, 8, 8)

        actions = [
            ("Copy Text", self.copy_text),
            ("Copy Image", self.copy_image),
            ("Export PNG", self.export_png),
        ]
        for text, handler in actions:
            btn = QtWidgets.QPushButton(text)
            btn.setFixedHeight(30)
            btn.clicked.connect(handler)
            layout.addWidget(btn)

        return box

    def _build_options_card(self) -> QtWidgets.QGroupBox:
        box = QtWidgets.QGroupBox("Options")
        layout = QtWidgets.QFormLayout(box)

        self.escape_check = QtWidgets.QCheckBox("Escape special characters (, ; \\ newlines)")
        self.escape_check.setChecked(self.app_settings.escape_values)
        self.escape_check.toggled.connect(self._on_escape_changed)
        layout.addRow(self.escape_check)

        self.theme_combo = QtWidgets.QComboBox()
        self.theme_combo.addItems(list(THEMES.keys()))
        self.theme_combo.setCurrentText(self.app_settings.theme)
        self.theme_combo.currentTextChanged.connect(self._on_theme_changed)
        layout.addRow("Theme:", self.theme_combo)

        hint = QtWidgets.QLabel(
            "Ctrl+G: Generate | Ctrl+S: Export PNG<br>"
            "Ctrl+Shift+C: Copy Text | Ctrl+Shift+I: Copy Image<br>"
            "Ctrl+N: Clear"
        )
        hint.setProperty("class", "secondary")
        layout.addRow(hint)

        return box

    # =========================================================================
    # EVENT HANDLERS
    # =========================================================================
    def _on_escape_changed(self, checked: bool):
        self.app_settings.escape_values = checked
        self.session.escape = checked
        self._log("✏️ Escaping on" if checked else "✏️ Escaping off")

    def _on_theme_changed(self, theme_name: str):
        self.app_settings.theme = theme_name
        self.theme = get_theme(theme_name)
        self.style_mgr = StyleManager(self.theme)
        self.setStyleSheet(self.style_mgr.get_app_stylesheet())
        self._log(f"✨ Switched to {theme_name} theme")

    # =========================================================================
    # CORE ACTIONS
    # =========================================================================
    def _log(self, message: str):
        """Add message to activity log."""
        self.log_view.append(message)
        self.status_label.setText(message)
        logger.info(message)

    def _notify(self, message: str, error: bool = False):
        self._log(message)
        self.toast.show_message(
            message, self.app_settings.toast_ms,
            self.style_mgr.get_toast_stylesheet(error=error),
        )

    def _show_session(self):
        self.vcard_view.setPlainText(self.session.vcard_text)
        self.preview_widget.set_bitmap(self.session.bitmap)

    def generate(self):
        try:
            self.session.regenerate()
        except DataOverflowError:
            self._notify("⚠️ Too much data for a QR code, shorten some fields", error=True)
            return

        self._show_session()
        if self.session.record.is_blank():
            self._log("ℹ️ All fields are empty, generated a blank card")
        else:
            self._log("✅ vCard and QR code ready")

    def clear_form(self):
        for edit in self.field_edits.values():
            edit.blockSignals(True)
            edit.clear()
            edit.blockSignals(False)
        self.session.clear()
        self._show_session()
        self._log("🗑 Form cleared")

    def copy_text(self):
        if not self.session.has_output:
            self._notify("⚠️ Please generate a vCard first before copying", error=True)
            return
        QtWidgets.QApplication.clipboard().setText(self.session.vcard_text)
        self._notify("📋 vCard text copied to clipboard")

    def copy_image(self):
        if self.session.bitmap is None:
            self._notify("⚠️ Please generate a QR code first before copying", error=True)
            return
        QtWidgets.QApplication.clipboard().setImage(bitmap_to_qimage(self.session.bitmap))
        self._notify("📋 QR code image copied to clipboard")

    def export_png(self):
        if not self.session.has_output:
            self._notify("⚠️ Please generate a QR code first before exporting", error=True)
            return

        path, _ = QtWidgets.QFileDialog.getSaveFileName(
            self, "Export QR Code",
            self.app_settings.default_export_path(),
            "PNG (*.png);;All files (*.*)",
        )
        if path:
            self.export_to(path)

    def export_to(self, path: str):
        """Write the QR code to ``path`` and report the outcome."""
        try:
            written = self.session.export(path)
        except ExportError as e:
            self._notify(f"⚠️ {e}", error=True)
            return

        self.app_settings.output_dir = str(written.parent)
        self._notify(f"💾 Saved successfully: {os.path.basename(str(written))}")


# =============================================================================
# MAIN ENTRY POINT
# =============================================================================
def main():
    logging.basicConfig(
        level=os.environ.get("CARDQR_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    QtWidgets.QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )

    app = QtWidgets.QApplication(sys.argv)
    app.setApplicationName("CardQR")
    app.setOrganizationName("CardQR")

    window = CardQRWindow()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
