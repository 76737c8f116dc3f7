# retro_chip8/core/state.py
"""
Core Layer (レジスタ状態の基底)

命令サイクルの駆動に必要な最小限のレジスタ（PCとSP）だけを持ちます。
"""
from dataclasses import dataclass

# @intent:responsibility AbstractCpuが参照するPCとSPを保持します。
@dataclass
class CpuState:
    """
    step() はこの型のPCのみを更新します。
    V0-VF、I、タイマーなどは派生クラス（Chip8CpuState）が追加します。
    """
    pc: int = 0x0000
    sp: int = 0x0000  # 派生クラスごとに意味が異なる（CHIP-8では次の空きスロット番号）
