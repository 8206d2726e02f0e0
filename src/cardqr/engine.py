"""
QR rendering and PNG export for vCard payloads.
"""

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple, Union

import qrcode
from qrcode.constants import ERROR_CORRECT_M
from PIL import Image


logger = logging.getLogger(__name__)

WARN_QR_BYTES = 2000


# =============================================================================
# ERRORS
# =============================================================================
class CardQRError(Exception):
    """Base class for errors reported to the window."""


class ExportError(CardQRError):
    pass


class EmptyInputError(ExportError):
    def __init__(self):
        super().__init__("Nothing to export: generate a vCard first")


class ExportIOError(ExportError):
    def __init__(self, path: Path, reason: str):
        super().__init__(f"Could not write {path}: {reason}")
        self.path = path
        self.reason = reason


# =============================================================================
# BITMAP
# =============================================================================
@dataclass(frozen=True)
class QrBitmap:
    """Opaque RGBA pixels, row-major, ready to hand to a painter."""
    width: int
    height: int
    pixels: bytes

    def pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        i = (y * self.width + x) * 4
        r, g, b, a = self.pixels[i:i + 4]
        return r, g, b, a

    def to_image(self) -> Image.Image:
        return Image.frombytes("RGBA", (self.width, self.height), self.pixels)


# =============================================================================
# QR ENGINE
# =============================================================================
class QREngine:
    """Stateless QR generation at a fixed error-correction level and size."""

    ERROR_CORRECTION = ERROR_CORRECT_M
    SIZE = 512
    BORDER = 4

    @staticmethod
    def check_payload_size(text: str) -> int:
        length = len(text.encode("utf-8"))
        if length > WARN_QR_BYTES:
            logger.warning(
                "vCard payload is %d bytes; dense codes may be hard to scan", length
            )
        return length

    @staticmethod
    def rasterize(text: str) -> Image.Image:
        """Grayscale SIZE x SIZE image: 0 for dark modules, 255 for light."""
        QREngine.check_payload_size(text)

        qr = qrcode.QRCode(
            version=None,
            error_correction=QREngine.ERROR_CORRECTION,
            box_size=1,
            border=QREngine.BORDER,
        )
        qr.add_data(text)
        qr.make(fit=True)

        # Largest whole box size that fits, so every module stays crisp
        total = qr.modules_count + 2 * QREngine.BORDER
        qr.box_size = max(1, QREngine.SIZE // total)
        logger.debug("QR version %s, box size %d", qr.version, qr.box_size)

        code = qr.make_image(fill_color="black", back_color="white").get_image()
        code = code.convert("L")
        if code.size == (QREngine.SIZE, QREngine.SIZE):
            return code

        canvas = Image.new("L", (QREngine.SIZE, QREngine.SIZE), 255)
        offset = ((QREngine.SIZE - code.width) // 2, (QREngine.SIZE - code.height) // 2)
        canvas.paste(code, offset)
        return canvas

    @staticmethod
    def render(text: str) -> QrBitmap:
        """Rasterize and expand gray to opaque RGBA for display."""
        gray = QREngine.rasterize(text)
        alpha = Image.new("L", gray.size, 255)
        rgba = Image.merge("RGBA", (gray, gray, gray, alpha))
        return QrBitmap(width=rgba.width, height=rgba.height, pixels=rgba.tobytes())

    @staticmethod
    def png_bytes(text: str) -> bytes:
        if not text:
            raise EmptyInputError()
        buffer = io.BytesIO()
        QREngine.rasterize(text).save(buffer, format="PNG")
        return buffer.getvalue()

    @staticmethod
    def export(text: str, path: Union[str, Path]) -> Path:
        """Render afresh and write a PNG to ``path``, overwriting it."""
        if not text:
            raise EmptyInputError()

        path = Path(path)
        img = QREngine.rasterize(text)
        try:
            img.save(str(path), "PNG")
        except OSError as e:
            raise ExportIOError(path, e.strerror or str(e)) from e

        logger.info("Exported QR code to %s", path)
        return path
