# src/retro_chip8/arch/chip8/instructions/alu.py
"""
算術論理演算命令の実装。

フラグを定義する命令は、結果をVXに書き込んだ後でVFを設定します。
そのため X が F の場合はフラグ値が残ります。
"""
from retro_chip8.core.snapshot import Operation
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.arch.chip8.peripherals import Chip8Io
from .base import decode_reg_byte, decode_reg_reg, decode_reg

# --- ADD Vx, byte (7XNN) ---
# @intent:responsibility ADD (Immediate) 命令をデコードします。
def decode_add_byte(opcode: int) -> Operation:
    return decode_reg_byte(opcode, "ADD")

# @intent:responsibility VXにNNを加算します。桁あふれは折り返し、フラグは変化しません。
def execute_add_byte(state: Chip8CpuState, bus: Bus, io: Chip8Io, op: Operation) -> None:
    x, nn = op.operand_values
    state.v[x] = (state.v[x] + nn) & 0xFF

# --- OR / AND / XOR (8XY1, 8XY2, 8XY3) ---
def decode_or(opcode: int) -> Operation:
    return decode_reg_reg(opcode, "OR")

def execute_or(state: Chip8CpuState, bus: Bus, io: Chip8Io, op: Operation) -> None:
    x, y = op.operand_values
    state.v[x] |= state.v[y]

def decode_and(opcode: int) -> Operation:
    return decode_reg_reg(opcode, "AND")

def execute_and(state: Chip8CpuState, bus: Bus, io: Chip8Io, op: Operation) -> None:
    x, y = op.operand_values
    state.v[x] &= state.v[y]

def decode_xor(opcode: int) -> Operation:
    return decode_reg_reg(opcode, "XOR")

def execute_xor(state: Chip8CpuState, bus: Bus, io: Chip8Io, op: Operation) -> None:
    x, y = op.operand_values
    state.v[x] ^= state.v[y]

# --- ADD Vx, Vy (8XY4) ---
# @intent:responsibility ADD (Register) 命令をデコードします。
def decode_add_reg(opcode: int) -> Operation:
    return decode_reg_reg(opcode, "ADD")

# @intent:responsibility VXにVYを加算し、桁あふれが発生した場合にVF=1とします。
def execute_add_reg(state: Chip8CpuState, bus: Bus, io: Chip8Io, op: Operation) -> None:
    x, y = op.operand_values
    res = state.v[x] + state.v[y]
    state.v[x] = res & 0xFF
    state.vf = 1 if res > 0xFF else 0

# --- SUB Vx, Vy (8XY5) ---
# @intent:responsibility SUB命令をデコードします。
def decode_sub(opcode: int) -> Operation:
    return decode_reg_reg(opcode, "SUB")

# @intent:responsibility VX - VY を計算します。VFはボローが発生しなかった場合に1となります（キャリーとは逆の意味）。
def execute_sub(state: Chip8CpuState, bus: Bus, io: Chip8Io, op: Operation) -> None:
    x, y = op.operand_values
    v1, v2 = state.v[x], state.v[y]
    state.v[x] = (v1 - v2) & 0xFF
    state.vf = 0 if v1 < v2 else 1

# --- SHR Vx (8X_6) ---
# @intent:responsibility SHR命令をデコードします。Yニブルは使用しません。
def decode_shr(opcode: int) -> Operation:
    return decode_reg(opcode, "SHR")

# @intent:responsibility VXを1ビット右シフトし、シフト前のLSBをVFに格納します。
def execute_shr(state: Chip8CpuState, bus: Bus, io: Chip8Io, op: Operation) -> None:
    x = op.operand_values[0]
    lsb = state.v[x] & 0x01
    state.v[x] >>= 1
    state.vf = lsb

# --- SUBN Vx, Vy (8XY7) ---
def decode_subn(opcode: int) -> Operation:
    return decode_reg_reg(opcode, "SUBN")

# @intent:responsibility VX := VY - VX。フラグの規約はSUBと同じです。
def execute_subn(state: Chip8CpuState, bus: Bus, io: Chip8Io, op: Operation) -> None:
    x, y = op.operand_values
    v1, v2 = state.v[y], state.v[x]
    state.v[x] = (v1 - v2) & 0xFF
    state.vf = 0 if v1 < v2 else 1

# --- SHL Vx (8X_E) ---
def decode_shl(opcode: int) -> Operation:
    return decode_reg(opcode, "SHL")

# @intent:responsibility VXを1ビット左シフトし、シフト前のMSBをVFに格納します。
def execute_shl(state: Chip8CpuState, bus: Bus, io: Chip8Io, op: Operation) -> None:
    x = op.operand_values[0]
    msb = (state.v[x] >> 7) & 0x01
    state.v[x] = (state.v[x] << 1) & 0xFF
    state.vf = msb

# --- RND Vx, byte (CXNN) ---
# @intent:responsibility RND命令をデコードします。
def decode_rnd(opcode: int) -> Operation:
    return decode_reg_byte(opcode, "RND")

# @intent:responsibility 一様乱数バイトとNNの論理積をVXに格納します。NNのマスク外のビットは決して立ちません。
def execute_rnd(state: Chip8CpuState, bus: Bus, io: Chip8Io, op: Operation) -> None:
    x, nn = op.operand_values
    state.v[x] = io.rng.randint(0, 0xFF) & nn

# --- ADD I, Vx (FX1E) ---
def decode_add_i(opcode: int) -> Operation:
    return decode_reg(opcode, "ADD", before="I")

# @intent:responsibility VXをIに加算します。Iは16bitで折り返します。
def execute_add_i(state: Chip8CpuState, bus: Bus, io: Chip8Io, op: Operation) -> None:
    x = op.operand_values[0]
    state.i = (state.i + state.v[x]) & 0xFFFF
