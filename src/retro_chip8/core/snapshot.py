# retro_chip8/core/snapshot.py
"""
実行状態の不変スナップショット

このモジュールは、1命令実行後のCPU状態と実行された命令を記録した
不変のデータ構造を定義します。ホストへの情報提供に用いる責務を負います。
"""
from dataclasses import dataclass, field
from typing import List

from retro_chip8.core.state import CpuState


# @intent:responsibility デコードされた命令の詳細を記録します。
@dataclass(frozen=True) # 不変データ構造
class Operation:
    """
    デコードされた命令の詳細（HEX、ニーモニック、オペランド）を記録するデータクラス。
    """
    opcode_hex: str # 例: "D015"
    mnemonic: str # 例: "DRW"
    operands: List[str] = field(default_factory=list) # 例: ["V0", "V1", "5"]
    operand_values: List[int] = field(default_factory=list) # デコード済みのフィールド値 (X, Y, N, NN, NNN)
    length: int = 2 # 命令のバイト長

    # @intent:accessor 命令ワードを整数として返します。
    @property
    def opcode(self) -> int:
        return int(self.opcode_hex, 16)

    # @intent:responsibility "MNEMONIC op1, op2" 形式の文字列を生成します。
    def render(self) -> str:
        text = self.mnemonic
        if self.operands:
            text += " " + ", ".join(self.operands)
        return text

# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True) # 不変データ構造
class Metadata:
    """
    実行に関するメタデータ（リセット以降の実行命令数、命令の表記）を記録するデータクラス。
    """
    instruction_count: int
    text: str = "" # 例: "DRW V0, V1, 5"

# @intent:responsibility ある一時点におけるCPUの状態と、直前に実行された命令を不変に記録します。
@dataclass(frozen=True) # 不変データ構造
class Snapshot:
    """
    1命令実行直後のCPU状態を記録した不変のデータ構造。
    state は実行後の状態のコピーであり、以降の実行で変化しません。
    """
    state: CpuState
    operation: Operation
    metadata: Metadata
