# src/retro_chip8/arch/chip8/state.py
"""
CHIP-8 CPU固有の状態定義。
"""
from dataclasses import dataclass, field
from typing import List

from retro_chip8.core.state import CpuState

# @intent:constant CHIP-8 のアドレス空間とレジスタ構成を定義します。
MEMORY_SIZE = 0x1000     # 4KB
PROGRAM_START = 0x200    # プログラムのロード先、リセット時のPC
NUM_REGISTERS = 16       # V0 - VF
STACK_DEPTH = 16         # コールスタックのスロット数
FLAG_REGISTER = 0xF      # VF はキャリー/ボロー/衝突フラグを兼ねる

# @intent:responsibility CHIP-8 CPUの全てのレジスタ（V0-VF, I, PC, SP）とスタック、タイマーの状態を保持します。
@dataclass
class Chip8CpuState(CpuState):
    """
    CHIP-8 CPUのレジスタ状態を保持するデータクラス。
    sp はスタックの次の空きスロットを指します（0 = 空, 16 = 満杯）。
    """
    pc: int = PROGRAM_START
    v: List[int] = field(default_factory=lambda: [0] * NUM_REGISTERS)      # 汎用レジスタ V0 - VF
    i: int = 0x0000                                                       # インデックスレジスタ
    stack: List[int] = field(default_factory=lambda: [0] * STACK_DEPTH)   # 戻りアドレス
    delay_timer: int = 0x00
    sound_timer: int = 0x00

    # @intent:accessor フラグレジスタ(VF)へのアクセスを提供します。
    # @intent:rationale VFを書き換える命令が多いため、インデックス直書きを避けて可読性を高めます。
    @property
    def vf(self) -> int:
        return self.v[FLAG_REGISTER]

    @vf.setter
    def vf(self, value: int) -> None:
        self.v[FLAG_REGISTER] = value & 0xFF
