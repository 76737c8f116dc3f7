# src/retro_chip8/arch/chip8/instructions/maps.py
"""
命令パターンと命令実装のマッピング定義。
"""
from typing import Callable, Dict, List, NamedTuple

from . import control
from . import load
from . import alu
from . import display
from . import keypad

# @intent:data_structure 1命令分のパターン定義。(opcode & mask) == pattern の場合に一致します。
class InstructionEntry(NamedTuple):
    mask: int
    pattern: int
    decode: Callable
    execute: Callable

# @intent:map 命令ファミリー（先頭ニブル）から候補パターンへのマッピングテーブル。
# マスクが0の位置はワイルドカード（アドレス、レジスタ番号、即値）です。
DECODE_MAP: Dict[int, List[InstructionEntry]] = {
    0x0: [
        InstructionEntry(0xFFFF, 0x0000, control.decode_nop, control.execute_nop),
        InstructionEntry(0xFFFF, 0x00E0, display.decode_cls, display.execute_cls),
        InstructionEntry(0xFFFF, 0x00EE, control.decode_ret, control.execute_ret),
    ],
    0x1: [InstructionEntry(0xF000, 0x1000, control.decode_jp, control.execute_jp)],
    0x2: [InstructionEntry(0xF000, 0x2000, control.decode_call, control.execute_call)],
    0x3: [InstructionEntry(0xF000, 0x3000, control.decode_se_byte, control.execute_se_byte)],
    0x4: [InstructionEntry(0xF000, 0x4000, control.decode_sne_byte, control.execute_sne_byte)],
    0x5: [InstructionEntry(0xF00F, 0x5000, control.decode_se_reg, control.execute_se_reg)],
    0x6: [InstructionEntry(0xF000, 0x6000, load.decode_ld_byte, load.execute_ld_byte)],
    0x7: [InstructionEntry(0xF000, 0x7000, alu.decode_add_byte, alu.execute_add_byte)],
    0x8: [
        InstructionEntry(0xF00F, 0x8000, load.decode_ld_reg, load.execute_ld_reg),
        InstructionEntry(0xF00F, 0x8001, alu.decode_or, alu.execute_or),
        InstructionEntry(0xF00F, 0x8002, alu.decode_and, alu.execute_and),
        InstructionEntry(0xF00F, 0x8003, alu.decode_xor, alu.execute_xor),
        InstructionEntry(0xF00F, 0x8004, alu.decode_add_reg, alu.execute_add_reg),
        InstructionEntry(0xF00F, 0x8005, alu.decode_sub, alu.execute_sub),
        InstructionEntry(0xF00F, 0x8006, alu.decode_shr, alu.execute_shr),
        InstructionEntry(0xF00F, 0x8007, alu.decode_subn, alu.execute_subn),
        InstructionEntry(0xF00F, 0x800E, alu.decode_shl, alu.execute_shl),
    ],
    0x9: [InstructionEntry(0xF00F, 0x9000, control.decode_sne_reg, control.execute_sne_reg)],
    0xA: [InstructionEntry(0xF000, 0xA000, load.decode_ld_i, load.execute_ld_i)],
    0xB: [InstructionEntry(0xF000, 0xB000, control.decode_jp_v0, control.execute_jp_v0)],
    0xC: [InstructionEntry(0xF000, 0xC000, alu.decode_rnd, alu.execute_rnd)],
    0xD: [InstructionEntry(0xF000, 0xD000, display.decode_drw, display.execute_drw)],
    0xE: [
        InstructionEntry(0xF0FF, 0xE09E, keypad.decode_skp, keypad.execute_skp),
        InstructionEntry(0xF0FF, 0xE0A1, keypad.decode_sknp, keypad.execute_sknp),
    ],
    0xF: [
        InstructionEntry(0xF0FF, 0xF007, load.decode_ld_vx_dt, load.execute_ld_vx_dt),
        InstructionEntry(0xF0FF, 0xF00A, keypad.decode_wait_key, keypad.execute_wait_key),
        InstructionEntry(0xF0FF, 0xF015, load.decode_ld_dt_vx, load.execute_ld_dt_vx),
        InstructionEntry(0xF0FF, 0xF018, load.decode_ld_st_vx, load.execute_ld_st_vx),
        InstructionEntry(0xF0FF, 0xF01E, alu.decode_add_i, alu.execute_add_i),
        InstructionEntry(0xF0FF, 0xF029, display.decode_ld_glyph, display.execute_ld_glyph),
        InstructionEntry(0xF0FF, 0xF033, load.decode_ld_bcd, load.execute_ld_bcd),
        InstructionEntry(0xF0FF, 0xF055, load.decode_ld_mem_vx, load.execute_ld_mem_vx),
        InstructionEntry(0xF0FF, 0xF065, load.decode_ld_vx_mem, load.execute_ld_vx_mem),
    ],
}
