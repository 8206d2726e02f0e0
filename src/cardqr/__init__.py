"""CardQR - business card vCard and QR code generator."""

from .contact import ContactRecord, encode_vcard
from .engine import (
    CardQRError,
    EmptyInputError,
    ExportError,
    ExportIOError,
    QrBitmap,
    QREngine,
)
from .session import CardSession, SessionState

__version__ = "1.0.0"

__all__ = [
    "CardQRError",
    "CardSession",
    "ContactRecord",
    "EmptyInputError",
    "ExportError",
    "ExportIOError",
    "QrBitmap",
    "QREngine",
    "SessionState",
    "encode_vcard",
]
