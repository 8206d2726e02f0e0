"""Smoke tests for the main window, run on the offscreen Qt platform."""

import pytest

pytest.importorskip("PySide6")

from PySide6 import QtGui, QtWidgets  # noqa: E402

from cardqr.app import CardQRWindow  # noqa: E402
from cardqr.session import SessionState  # noqa: E402
from cardqr.settings import AppSettings, load_settings, save_settings  # noqa: E402


@pytest.fixture()
def window(qapp, qsettings):
    win = CardQRWindow(qsettings=qsettings)
    yield win
    win.close()


def _fill(window, **values):
    for attr, text in values.items():
        window.field_edits[attr].setText(text)


def test_form_edits_update_record(window):
    _fill(window, first_name="Jane", last_name="Doe")
    assert window.session.record.first_name == "Jane"
    assert window.session.record.last_name == "Doe"
    # Editing alone does not regenerate
    assert window.session.state is SessionState.EMPTY


def test_generate_shows_text_and_preview(window):
    _fill(window, first_name="Jane", last_name="Doe", organization="Acme")
    window.generate()
    assert window.vcard_view.toPlainText() == window.session.vcard_text
    assert "ORG:Acme" in window.vcard_view.toPlainText()
    assert window.preview_widget.has_bitmap()


def test_copy_text_needs_generation(window):
    QtWidgets.QApplication.clipboard().setText("untouched")
    window.copy_text()
    assert QtWidgets.QApplication.clipboard().text() == "untouched"

    _fill(window, first_name="Jane")
    window.generate()
    window.copy_text()
    assert QtWidgets.QApplication.clipboard().text() == window.session.vcard_text


def test_export_to_writes_file_and_remembers_folder(window, tmp_path):
    _fill(window, first_name="Jane")
    window.generate()
    target = tmp_path / "out" / "card.png"
    target.parent.mkdir()
    window.export_to(str(target))
    assert target.exists()
    assert window.session.state is SessionState.EXPORTED
    assert window.app_settings.output_dir == str(target.parent)


def test_export_failure_is_reported(window, tmp_path):
    _fill(window, first_name="Jane")
    window.generate()
    window.export_to(str(tmp_path / "missing" / "card.png"))
    assert window.session.state is SessionState.GENERATED
    assert "Could not write" in window.status_label.text()


def test_export_before_generate_is_reported(window, tmp_path):
    window.export_to(str(tmp_path / "card.png"))
    assert not (tmp_path / "card.png").exists()
    assert "Nothing to export" in window.status_label.text()


def test_clear_form(window):
    _fill(window, first_name="Jane")
    window.generate()
    window.clear_form()
    assert window.field_edits["first_name"].text() == ""
    assert window.vcard_view.toPlainText() == ""
    assert not window.preview_widget.has_bitmap()
    assert window.session.state is SessionState.EMPTY

    # New edits land in the fresh record
    _fill(window, last_name="Roe")
    assert window.session.record.last_name == "Roe"


def test_escape_option_persists(qapp, qsettings):
    win = CardQRWindow(qsettings=qsettings)
    win.escape_check.setChecked(True)
    assert win.session.escape
    win.closeEvent(QtGui.QCloseEvent())

    assert load_settings(qsettings).escape_values is True


def test_settings_round_trip(qsettings, tmp_path):
    settings = AppSettings(theme="light", output_dir=str(tmp_path), toast_ms=500)
    save_settings(qsettings, settings)
    loaded = load_settings(qsettings)
    assert loaded.theme == "light"
    assert loaded.output_dir == str(tmp_path)
    assert loaded.toast_ms == 500
    assert loaded.escape_values is False
    assert loaded.default_export_path().endswith("qrcode.png")


def test_generate_blank_form_reports_blank_card(window):
    window.generate()
    assert window.session.state is SessionState.GENERATED
    assert "N:;;;;" in window.vcard_view.toPlainText()
    assert window.preview_widget.has_bitmap()
    assert "blank card" in window.status_label.text()

    _fill(window, first_name="Jane")
    window.generate()
    assert "ready" in window.status_label.text()


@pytest.mark.parametrize("theme_name", ["dark", "light"])
def test_stylesheet_targets_window_widgets(window, theme_name):
    window.theme_combo.setCurrentText(theme_name)
    sheet = window.styleSheet()
    for widget in (window.vcard_view, window.log_view, window.preview_widget):
        assert f"#{widget.objectName()}" in sheet
    assert window.theme.name.lower() == theme_name
