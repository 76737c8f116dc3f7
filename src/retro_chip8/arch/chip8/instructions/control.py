# src/retro_chip8/arch/chip8/instructions/control.py
"""
制御命令（ジャンプ、サブルーチン、条件スキップ）の実装。

実行関数が呼ばれる時点で、PCは既に次の命令を指しています。
"""
from retro_chip8.core.snapshot import Operation
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.arch.chip8.peripherals import Chip8Io
from .base import decode_implied, decode_addr, decode_reg_byte, decode_reg_reg, skip_next, push, pop

# --- NOP (0000) ---
def decode_nop(opcode: int) -> Operation:
    return decode_implied(opcode, "NOP")

def execute_nop(state: Chip8CpuState, bus: Bus, io: Chip8Io, op: Operation) -> None:
    # Intentional: No operation.
    pass

# --- RET (00EE) ---
# @intent:responsibility RET命令をデコードします。
def decode_ret(opcode: int) -> Operation:
    return decode_implied(opcode, "RET")

# @intent:responsibility コールスタックから戻りアドレスを取り出し、PCに設定します。
def execute_ret(state: Chip8CpuState, bus: Bus, io: Chip8Io, op: Operation) -> None:
    state.pc = pop(state)

# --- JP addr (1NNN) ---
# @intent:responsibility JP命令をデコードします。
def decode_jp(opcode: int) -> Operation:
    return decode_addr(opcode, "JP")

# @intent:responsibility NNNへ無条件ジャンプします。
def execute_jp(state: Chip8CpuState, bus: Bus, io: Chip8Io, op: Operation) -> None:
    state.pc = op.operand_values[0]

# --- CALL addr (2NNN) ---
# @intent:responsibility CALL命令をデコードします。
def decode_call(opcode: int) -> Operation:
    return decode_addr(opcode, "CALL")

# @intent:responsibility 戻りアドレス（次の命令）をスタックに積み、NNNへジャンプします。
def execute_call(state: Chip8CpuState, bus: Bus, io: Chip8Io, op: Operation) -> None:
    # state.pc is currently pointing to the NEXT instruction because it was updated in CPU.step
    push(state, state.pc)
    state.pc = op.operand_values[0]

# --- SE Vx, byte (3XNN) ---
def decode_se_byte(opcode: int) -> Operation:
    return decode_reg_byte(opcode, "SE")

# @intent:responsibility VXがNNと等しい場合に次の命令をスキップします。
def execute_se_byte(state: Chip8CpuState, bus: Bus, io: Chip8Io, op: Operation) -> None:
    x, nn = op.operand_values
    if state.v[x] == nn:
        skip_next(state)

# --- SNE Vx, byte (4XNN) ---
def decode_sne_byte(opcode: int) -> Operation:
    return decode_reg_byte(opcode, "SNE")

# @intent:responsibility VXがNNと異なる場合に次の命令をスキップします。
def execute_sne_byte(state: Chip8CpuState, bus: Bus, io: Chip8Io, op: Operation) -> None:
    x, nn = op.operand_values
    if state.v[x] != nn:
        skip_next(state)

# --- SE Vx, Vy (5XY0) ---
def decode_se_reg(opcode: int) -> Operation:
    return decode_reg_reg(opcode, "SE")

def execute_se_reg(state: Chip8CpuState, bus: Bus, io: Chip8Io, op: Operation) -> None:
    x, y = op.operand_values
    if state.v[x] == state.v[y]:
        skip_next(state)

# --- SNE Vx, Vy (9XY0) ---
def decode_sne_reg(opcode: int) -> Operation:
    return decode_reg_reg(opcode, "SNE")

def execute_sne_reg(state: Chip8CpuState, bus: Bus, io: Chip8Io, op: Operation) -> None:
    x, y = op.operand_values
    if state.v[x] != state.v[y]:
        skip_next(state)

# --- JP V0, addr (BNNN) ---
# @intent:responsibility JP V0命令をデコードします。
def decode_jp_v0(opcode: int) -> Operation:
    return decode_addr(opcode, "JP", prefix="V0")

# @intent:responsibility V0 + NNN へジャンプします。範囲外の飛び先は次のフェッチで検出されます。
def execute_jp_v0(state: Chip8CpuState, bus: Bus, io: Chip8Io, op: Operation) -> None:
    state.pc = (state.v[0] + op.operand_values[0]) & 0xFFFF
