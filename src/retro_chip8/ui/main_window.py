# src/retro_chip8/ui/main_window.py
"""
メインウィンドウの実装。

ホストとして命令クロックとタイマークロックを駆動し、
キーボード入力をキーパッドへ、フレームバッファを画面へ中継します。
"""
import logging

from PySide6.QtWidgets import QMainWindow, QApplication, QDockWidget
from PySide6.QtCore import Qt, QTimer, Slot
from PySide6.QtGui import QKeyEvent

from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.config.models import SystemConfig
from retro_chip8.core.errors import EmulationError
from .display_widget import Chip8DisplayWidget
from .register_view import RegisterView
from .keymap import resolve_keymap

logger = logging.getLogger(__name__)

# @intent:responsibility アプリケーションのメインウィンドウを定義し、エミュレーションの周期実行を管理します。
class MainWindow(QMainWindow):
    """
    1フレーム（timer_hz 周期）ごとに cpu_hz / timer_hz 命令を実行し、タイマーを1回更新します。
    割り切れない端数は次のフレームへ繰り越すため、timer_hz フレームでちょうど cpu_hz 命令を実行します。
    フレーム周期はミリ秒単位に丸められるため（60Hz なら 17ms）、実時間に対する速度は近似です。
    """
    def __init__(self, cpu: Chip8Cpu, config: SystemConfig, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Retro CHIP-8")

        self._cpu = cpu
        self._config = config
        self._keymap = resolve_keymap(config.keymap)
        self._sound_was_active = False
        self._step_remainder = 0

        self.display_widget = Chip8DisplayWidget(config.display, self)
        self.setCentralWidget(self.display_widget)

        self.register_view = RegisterView()
        self.register_view.set_cpu(cpu)
        register_dock = QDockWidget("Registers", self)
        register_dock.setWidget(self.register_view)
        self.addDockWidget(Qt.RightDockWidgetArea, register_dock)

        # @intent:rationale タイマー周期を1フレームとし、その中で命令を複数回実行します。
        #                  命令クロックとタイマークロックの比は設定から決まります。
        self._frame_timer = QTimer(self)
        self._frame_timer.setTimerType(Qt.PreciseTimer)
        self._frame_timer.setInterval(max(1, round(1000 / config.timer_hz)))
        self._frame_timer.timeout.connect(self.run_frame)

        self.statusBar().showMessage("Ready")

    def start(self) -> None:
        self._frame_timer.start()
        self.statusBar().showMessage("Running")

    def stop(self) -> None:
        self._frame_timer.stop()

    def is_running(self) -> bool:
        return self._frame_timer.isActive()

    # @intent:responsibility 次のフレームで実行する命令数を返し、端数を繰り越します。
    def steps_for_next_frame(self) -> int:
        steps, self._step_remainder = divmod(self._step_remainder + self._config.cpu_hz, self._config.timer_hz)
        return steps

    # @intent:responsibility 1フレーム分の命令実行、タイマー更新、画面更新を行います。
    # @intent:post-condition 致命的エラーが発生した場合は周期実行を停止し、ステータスバーに表示します。
    @Slot()
    def run_frame(self) -> None:
        try:
            for _ in range(self.steps_for_next_frame()):
                self._cpu.step()
        except EmulationError as e:
            self.stop()
            logger.error("Emulation halted: %s", e)
            self.statusBar().showMessage(f"Halted: {e}")
            self._refresh()
            return

        # @intent:rationale タイマー更新の前に発音状態を見るため、このフレームで ST=1 が設定された場合も鳴ります。
        if self._cpu.sound_active and not self._sound_was_active:
            QApplication.beep()
        self._cpu.tick_timers()
        self._sound_was_active = self._cpu.sound_active
        self._refresh()

    def _refresh(self) -> None:
        self.display_widget.set_frame(self._cpu.get_display())
        self.register_view.update_registers()

    def keyPressEvent(self, event: QKeyEvent) -> None:
        if not self._forward_key(event, True):
            super().keyPressEvent(event)

    def keyReleaseEvent(self, event: QKeyEvent) -> None:
        if not self._forward_key(event, False):
            super().keyReleaseEvent(event)

    # @intent:responsibility マッピングされたキーのイベントをキーパッドへ転送します。オートリピートは無視します。
    def _forward_key(self, event: QKeyEvent, pressed: bool) -> bool:
        chip8_key = self._keymap.get(int(event.key()))
        if chip8_key is None:
            return False
        if not event.isAutoRepeat():
            self._cpu.set_key(chip8_key, pressed)
        event.accept()
        return True
