"""Test configuration and fixtures."""

import os

import pytest

from cardqr.contact import ContactRecord

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture()
def jane():
    return ContactRecord(
        first_name="Jane",
        last_name="Doe",
        organization="Acme",
        email="jane@acme.com",
    )


@pytest.fixture()
def full_record():
    return ContactRecord(
        first_name="Jane",
        last_name="Doe",
        organization="Acme",
        title="CTO",
        email="jane@acme.com",
        phone="+1 555 0100",
        mobile="+1 555 0199",
        website="https://acme.example",
        address="1 Main St",
        note="Met at PyCon",
    )


@pytest.fixture(scope="session")
def qapp():
    QtWidgets = pytest.importorskip("PySide6.QtWidgets")
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app


@pytest.fixture()
def qsettings(tmp_path, qapp):
    from PySide6.QtCore import QSettings

    return QSettings(str(tmp_path / "cardqr.ini"), QSettings.IniFormat)
