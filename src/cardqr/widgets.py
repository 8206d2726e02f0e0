"""
Preview and notification widgets used by the main window.
"""

from typing import Optional

from PySide6 import QtCore, QtGui, QtWidgets
from PySide6.QtCore import Qt, QTimer

from .engine import QrBitmap


def bitmap_to_qimage(bitmap: QrBitmap) -> QtGui.QImage:
    qim = QtGui.QImage(
        bitmap.pixels, bitmap.width, bitmap.height,
        bitmap.width * 4, QtGui.QImage.Format_RGBA8888,
    )
    # Detach from the Python buffer
    return qim.copy()


# =============================================================================
# PREVIEW WIDGET
# =============================================================================
class PreviewWidget(QtWidgets.QLabel):
    """Paints the current QR bitmap scaled to fit, or a placeholder."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setAlignment(Qt.AlignCenter)
        self.setMinimumSize(280, 280)
        self._pixmap: Optional[QtGui.QPixmap] = None

    def set_bitmap(self, bitmap: Optional[QrBitmap]):
        if bitmap is None:
            self._pixmap = None
        else:
            self._pixmap = QtGui.QPixmap.fromImage(bitmap_to_qimage(bitmap))
        self.update()

    def has_bitmap(self) -> bool:
        return self._pixmap is not None

    def paintEvent(self, event):
        painter = QtGui.QPainter(self)
        rect = self.rect()

        if self._pixmap:
            side = min(rect.width(), rect.height()) - 8
            scaled = self._pixmap.scaled(
                side, side, Qt.AspectRatioMode.KeepAspectRatio,
                Qt.TransformationMode.FastTransformation,
            )
            px = (rect.width() - scaled.width()) // 2
            py = (rect.height() - scaled.height()) // 2
            painter.drawPixmap(px, py, scaled)
        else:
            painter.setPen(QtGui.QColor("#64748b"))
            painter.drawText(rect, Qt.AlignCenter, "QR code will appear here")

        painter.end()


# =============================================================================
# TOAST
# =============================================================================
class Toast(QtWidgets.QLabel):
    """Transient message pinned to the bottom of its parent."""

    MARGIN = 24

    def __init__(self, parent: QtWidgets.QWidget):
        super().__init__(parent)
        self.setAlignment(Qt.AlignCenter)
        self.setAttribute(Qt.WA_TransparentForMouseEvents)
        self.hide()
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self.hide)

    def show_message(self, text: str, duration_ms: int, stylesheet: str = ""):
        self.setText(text)
        if stylesheet:
            self.setStyleSheet(stylesheet)
        self.adjustSize()
        self._reposition()
        self.show()
        self.raise_()
        # Restarting drops any pending hide from an earlier message
        self._timer.start(duration_ms)

    def _reposition(self):
        parent = self.parentWidget()
        if parent is None:
            return
        x = (parent.width() - self.width()) // 2
        y = parent.height() - self.height() - self.MARGIN
        self.move(QtCore.QPoint(max(0, x), max(0, y)))
