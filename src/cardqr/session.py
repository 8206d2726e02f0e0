"""
Current record / vCard / bitmap for one window.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from .contact import ContactRecord, encode_vcard
from .engine import QrBitmap, QREngine


logger = logging.getLogger(__name__)


class SessionState(Enum):
    EMPTY = "empty"
    GENERATED = "generated"
    EXPORTED = "exported"


class CardSession:
    """Keeps the generated text and its QR bitmap in step.

    The form mutates ``record`` freely. ``vcard_text`` and ``bitmap`` only
    change together inside ``regenerate``, so a displayed bitmap always
    belongs to the displayed text.
    """

    def __init__(self, record: Optional[ContactRecord] = None, escape: bool = False):
        self.record = record if record is not None else ContactRecord()
        self.escape = escape
        self.vcard_text = ""
        self.bitmap: Optional[QrBitmap] = None
        self.state = SessionState.EMPTY
        self.last_export_path: Optional[Path] = None

    @property
    def has_output(self) -> bool:
        return self.state is not SessionState.EMPTY

    def regenerate(self):
        """Encode the record and render it.

        An all-empty record still yields a card (BEGIN, N, FN and END lines),
        so the encoded text is never empty and always gets rendered.
        """
        text = encode_vcard(self.record, escape=self.escape)

        # Render before assigning anything so a failure leaves the old pair intact
        bitmap = QREngine.render(text)
        self.vcard_text, self.bitmap = text, bitmap
        self.state = SessionState.GENERATED
        logger.debug("Regenerated vCard (%d chars)", len(text))

    def export(self, path: Union[str, Path]) -> Path:
        written = QREngine.export(self.vcard_text, path)
        self.last_export_path = written
        self.state = SessionState.EXPORTED
        return written

    def clear(self):
        self.record = ContactRecord()
        self.vcard_text = ""
        self.bitmap = None
        self.state = SessionState.EMPTY
        self.last_export_path = None
