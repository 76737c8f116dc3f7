# src/retro_chip8/arch/chip8/instructions/__init__.py
"""
CHIP-8命令セット実装パッケージ。
"""
from typing import Optional

from retro_chip8.core.errors import UnknownOpcodeError
from retro_chip8.core.snapshot import Operation
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.arch.chip8.peripherals import Chip8Io
from .maps import DECODE_MAP, InstructionEntry

# @intent:responsibility 命令ワードに一致するパターン定義を検索します。
def find_instruction(opcode: int) -> Optional[InstructionEntry]:
    for entry in DECODE_MAP[(opcode >> 12) & 0xF]:
        if opcode & entry.mask == entry.pattern:
            return entry
    return None

# @intent:responsibility 与えられた命令ワードをCHIP-8の命令としてデコードします。
# @intent:post-condition どのパターンにも一致しない場合、UnknownOpcodeErrorを発生させます。
def decode_opcode(opcode: int, pc: Optional[int] = None) -> Operation:
    """
    CHIP-8の16bit命令ワードをデコードし、Operationオブジェクトを返します。
    未定義の命令は推測せず、致命的エラーとして扱います。
    """
    entry = find_instruction(opcode)
    if entry is None:
        raise UnknownOpcodeError(opcode, pc)
    return entry.decode(opcode)

# @intent:responsibility デコードされたCHIP-8命令を実行し、CPUの状態を変更します。
def execute_instruction(operation: Operation, state: Chip8CpuState, bus: Bus, io: Chip8Io) -> None:
    """
    デコードされたCHIP-8命令を実行し、CPUの状態、メモリ、周辺機器を変更します。
    """
    entry = find_instruction(operation.opcode)
    if entry is None:
        raise UnknownOpcodeError(operation.opcode)
    entry.execute(state, bus, io, operation)
