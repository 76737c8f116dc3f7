# src/retro_chip8/arch/chip8/instructions/keypad.py
"""
キー入力命令の実装。
"""
from retro_chip8.core.snapshot import Operation
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.arch.chip8.peripherals import Chip8Io
from .base import decode_reg, skip_next

# --- SKP Vx (EX9E) ---
def decode_skp(opcode: int) -> Operation:
    return decode_reg(opcode, "SKP")

# @intent:responsibility VXの値のキーが押されている場合に次の命令をスキップします。
def execute_skp(state: Chip8CpuState, bus: Bus, io: Chip8Io, op: Operation) -> None:
    if io.keypad.is_pressed(state.v[op.operand_values[0]]):
        skip_next(state)

# --- SKNP Vx (EXA1) ---
def decode_sknp(opcode: int) -> Operation:
    return decode_reg(opcode, "SKNP")

# @intent:responsibility VXの値のキーが離されている場合に次の命令をスキップします。
def execute_sknp(state: Chip8CpuState, bus: Bus, io: Chip8Io, op: Operation) -> None:
    if not io.keypad.is_pressed(state.v[op.operand_values[0]]):
        skip_next(state)

# --- LD Vx, K (FX0A) ---
# @intent:responsibility キー待ち命令をデコードします。
def decode_wait_key(opcode: int) -> Operation:
    return decode_reg(opcode, "LD", after="K")

# @intent:responsibility 押されているキーのうち番号が最小のものをVXに格納します。
# @intent:rationale 押されていない場合はPCを2戻し、次のstepで同じ命令を再実行させます（ビジーウェイト）。
#                  スレッドをブロックしないため、ホストのタイマー/描画周期は影響を受けません。
def execute_wait_key(state: Chip8CpuState, bus: Bus, io: Chip8Io, op: Operation) -> None:
    key = io.keypad.first_pressed()
    if key is None:
        state.pc = (state.pc - op.length) & 0xFFFF
        return
    state.v[op.operand_values[0]] = key
