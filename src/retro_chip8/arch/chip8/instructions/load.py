# src/retro_chip8/arch/chip8/instructions/load.py
"""
ロード/ストア命令（レジスタ、インデックス、タイマー、メモリ転送）の実装。
"""
from retro_chip8.core.snapshot import Operation
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.arch.chip8.peripherals import Chip8Io
from .base import decode_reg_byte, decode_reg_reg, decode_addr, decode_reg

# --- LD Vx, byte (6XNN) ---
# @intent:responsibility LD (Immediate) 命令をデコードします。
def decode_ld_byte(opcode: int) -> Operation:
    return decode_reg_byte(opcode, "LD")

# @intent:responsibility NNをVXに格納します。
def execute_ld_byte(state: Chip8CpuState, bus: Bus, io: Chip8Io, op: Operation) -> None:
    x, nn = op.operand_values
    state.v[x] = nn

# --- LD Vx, Vy (8XY0) ---
def decode_ld_reg(opcode: int) -> Operation:
    return decode_reg_reg(opcode, "LD")

def execute_ld_reg(state: Chip8CpuState, bus: Bus, io: Chip8Io, op: Operation) -> None:
    x, y = op.operand_values
    state.v[x] = state.v[y]

# --- LD I, addr (ANNN) ---
# @intent:responsibility LD I命令をデコードします。
def decode_ld_i(opcode: int) -> Operation:
    return decode_addr(opcode, "LD", prefix="I")

def execute_ld_i(state: Chip8CpuState, bus: Bus, io: Chip8Io, op: Operation) -> None:
    state.i = op.operand_values[0]

# --- LD Vx, DT (FX07) ---
def decode_ld_vx_dt(opcode: int) -> Operation:
    return decode_reg(opcode, "LD", after="DT")

def execute_ld_vx_dt(state: Chip8CpuState, bus: Bus, io: Chip8Io, op: Operation) -> None:
    state.v[op.operand_values[0]] = state.delay_timer

# --- LD DT, Vx (FX15) ---
def decode_ld_dt_vx(opcode: int) -> Operation:
    return decode_reg(opcode, "LD", before="DT")

def execute_ld_dt_vx(state: Chip8CpuState, bus: Bus, io: Chip8Io, op: Operation) -> None:
    state.delay_timer = state.v[op.operand_values[0]]

# --- LD ST, Vx (FX18) ---
def decode_ld_st_vx(opcode: int) -> Operation:
    return decode_reg(opcode, "LD", before="ST")

def execute_ld_st_vx(state: Chip8CpuState, bus: Bus, io: Chip8Io, op: Operation) -> None:
    state.sound_timer = state.v[op.operand_values[0]]

# --- LD B, Vx (FX33) ---
# @intent:responsibility BCD変換命令をデコードします。
def decode_ld_bcd(opcode: int) -> Operation:
    return decode_reg(opcode, "LD", before="B")

# @intent:responsibility VXを10進3桁（百、十、一の位）に分解し、I, I+1, I+2 に格納します。
# @intent:pre-condition I+2 がメモリ範囲内である必要があります（範囲外なら書き込み前に失敗します）。
def execute_ld_bcd(state: Chip8CpuState, bus: Bus, io: Chip8Io, op: Operation) -> None:
    vx = state.v[op.operand_values[0]]
    digits = bytes([vx // 100, (vx // 10) % 10, vx % 10])
    bus.load(state.i, digits)

# --- LD [I], Vx (FX55) ---
# @intent:responsibility レジスタ一括ストア命令をデコードします。
def decode_ld_mem_vx(opcode: int) -> Operation:
    return decode_reg(opcode, "LD", before="[I]")

# @intent:responsibility V0からVXまで（両端を含む）をIから始まるメモリに格納します。Iは変化しません。
def execute_ld_mem_vx(state: Chip8CpuState, bus: Bus, io: Chip8Io, op: Operation) -> None:
    x = op.operand_values[0]
    bus.load(state.i, bytes(state.v[:x + 1]))

# --- LD Vx, [I] (FX65) ---
def decode_ld_vx_mem(opcode: int) -> Operation:
    return decode_reg(opcode, "LD", after="[I]")

# @intent:responsibility Iから始まるメモリをV0からVXまで（両端を含む）に読み込みます。
def execute_ld_vx_mem(state: Chip8CpuState, bus: Bus, io: Chip8Io, op: Operation) -> None:
    x = op.operand_values[0]
    bus.check_range(state.i, x + 1)
    for idx in range(x + 1):
        state.v[idx] = bus.read(state.i + idx)
