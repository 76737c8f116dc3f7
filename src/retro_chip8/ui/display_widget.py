# src/retro_chip8/ui/display_widget.py
"""
CHIP-8 フレームバッファを描画するウィジェット。
"""
from typing import Optional

from PySide6.QtWidgets import QWidget
from PySide6.QtCore import QSize
from PySide6.QtGui import QPainter, QColor

from retro_chip8.common.types import DisplayGrid
from retro_chip8.config.models import DisplayConfig
from retro_chip8.arch.chip8.peripherals import SCREEN_WIDTH, SCREEN_HEIGHT

# @intent:responsibility 64x32 のフレームバッファを拡大して描画します。
class Chip8DisplayWidget(QWidget):
    """
    受け取ったフレーム（行のタプル）を scale 倍のブロックで描画するウィジェット。
    """
    def __init__(self, config: Optional[DisplayConfig] = None, parent=None):
        super().__init__(parent)
        self._config = config or DisplayConfig()
        self._foreground = QColor(self._config.foreground)
        self._background = QColor(self._config.background)
        self._frame: DisplayGrid = tuple((False,) * SCREEN_WIDTH for _ in range(SCREEN_HEIGHT))
        self.setFixedSize(self.sizeHint())

    def sizeHint(self) -> QSize:
        scale = self._config.scale
        return QSize(SCREEN_WIDTH * scale, SCREEN_HEIGHT * scale)

    # @intent:responsibility 表示するフレームを更新し、再描画を要求します。
    def set_frame(self, frame: DisplayGrid) -> None:
        self._frame = frame
        self.update()

    def frame(self) -> DisplayGrid:
        return self._frame

    def paintEvent(self, event):
        scale = self._config.scale
        painter = QPainter(self)
        painter.fillRect(self.rect(), self._background)
        for y, row in enumerate(self._frame):
            for x, lit in enumerate(row):
                if lit:
                    painter.fillRect(x * scale, y * scale, scale, scale, self._foreground)
        painter.end()
