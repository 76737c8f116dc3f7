# src/retro_chip8/arch/chip8/instructions/display.py
"""
画面命令（クリア、スプライト描画、グリフアドレス設定）の実装。
"""
from retro_chip8.core.snapshot import Operation
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.arch.chip8.peripherals import Chip8Io
from retro_chip8.arch.chip8.glyphs import glyph_address
from .base import decode_implied, decode_reg, make_operation

# --- CLS (00E0) ---
def decode_cls(opcode: int) -> Operation:
    return decode_implied(opcode, "CLS")

def execute_cls(state: Chip8CpuState, bus: Bus, io: Chip8Io, op: Operation) -> None:
    io.display.clear()

# --- DRW Vx, Vy, N (DXYN) ---
# @intent:responsibility DRW命令をデコードします。
def decode_drw(opcode: int) -> Operation:
    x, y, n = (opcode >> 8) & 0xF, (opcode >> 4) & 0xF, opcode & 0xF
    return make_operation(opcode, "DRW", [f"V{x:X}", f"V{y:X}", f"{n}"], [x, y, n])

# @intent:responsibility Iから始まるNバイトのスプライトを(VX, VY)にXOR描画し、衝突の有無をVFに格納します。
# @intent:rationale 座標は画面端で折り返します（クリップしません）。
def execute_drw(state: Chip8CpuState, bus: Bus, io: Chip8Io, op: Operation) -> None:
    x, y, height = op.operand_values
    origin_x, origin_y = state.v[x], state.v[y]
    bus.check_range(state.i, height)

    collided = False
    for row in range(height):
        pixels = bus.read(state.i + row)
        for col in range(8):
            if pixels & (0x80 >> col):
                collided |= io.display.xor_pixel(origin_x + col, origin_y + row)

    state.vf = 1 if collided else 0

# --- LD F, Vx (FX29) ---
def decode_ld_glyph(opcode: int) -> Operation:
    return decode_reg(opcode, "LD", before="F")

# @intent:responsibility VXの値に対応するグリフの先頭アドレス(5 x VX)をIに設定します。
def execute_ld_glyph(state: Chip8CpuState, bus: Bus, io: Chip8Io, op: Operation) -> None:
    state.i = glyph_address(state.v[op.operand_values[0]])
