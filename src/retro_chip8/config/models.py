from dataclasses import dataclass, field
from typing import Dict, Optional

# @intent:constant 一般的な 1234/QWER/ASDF/ZXCV 配列からCHIP-8の16キーへの既定マッピング。
DEFAULT_KEYMAP: Dict[str, int] = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "Q": 0x4, "W": 0x5, "E": 0x6, "R": 0xD,
    "A": 0x7, "S": 0x8, "D": 0x9, "F": 0xE,
    "Z": 0xA, "X": 0x0, "C": 0xB, "V": 0xF,
}

@dataclass
class DisplayConfig:
    scale: int = 10
    foreground: str = "#33FF66"
    background: str = "#000000"

@dataclass
class SystemConfig:
    cpu_hz: int = 700   # 1秒あたりの命令ステップ数
    timer_hz: int = 60  # 1秒あたりのタイマー更新数
    seed: Optional[int] = None  # RND命令用乱数のシード（Noneなら非決定的）
    display: DisplayConfig = field(default_factory=DisplayConfig)
    keymap: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_KEYMAP))

    # @intent:responsibility 1フレーム（タイマー1回分）あたりの公称命令数を返します（切り捨て、最小1）。
    #                        実際の周期実行では MainWindow が端数を繰り越します。
    @property
    def steps_per_frame(self) -> int:
        return max(1, self.cpu_hz // self.timer_hz)
