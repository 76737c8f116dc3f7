# src/retro_chip8/arch/chip8/instructions/base.py
"""
CHIP-8命令実装用の共通ユーティリティ。
"""
from typing import Tuple

from retro_chip8.core.errors import AddressOutOfRangeError
from retro_chip8.core.snapshot import Operation
from retro_chip8.arch.chip8.state import Chip8CpuState, STACK_DEPTH

# @intent:utility_function 16bit命令ワードを上位から順に4つのニブルへ分解します。
def nibbles(opcode: int) -> Tuple[int, int, int, int]:
    return (opcode >> 12) & 0xF, (opcode >> 8) & 0xF, (opcode >> 4) & 0xF, opcode & 0xF

# @intent:utility_function デコード結果のOperationを生成します。
def make_operation(opcode: int, mnemonic: str, operands=None, values=None) -> Operation:
    return Operation(f"{opcode:04X}", mnemonic, list(operands or []), list(values or []))

# --- オペランド形式ごとのデコーダ ---

def decode_implied(opcode: int, mnemonic: str) -> Operation:
    return make_operation(opcode, mnemonic)

def decode_addr(opcode: int, mnemonic: str, prefix: str = "") -> Operation:
    """NNN 形式。prefix は "V0" のような先行オペランドです。"""
    nnn = opcode & 0x0FFF
    operands = [prefix, f"${nnn:03X}"] if prefix else [f"${nnn:03X}"]
    return make_operation(opcode, mnemonic, operands, [nnn])

def decode_reg_byte(opcode: int, mnemonic: str) -> Operation:
    """X, NN 形式。"""
    x, nn = (opcode >> 8) & 0xF, opcode & 0xFF
    return make_operation(opcode, mnemonic, [f"V{x:X}", f"#${nn:02X}"], [x, nn])

def decode_reg_reg(opcode: int, mnemonic: str) -> Operation:
    """X, Y 形式。"""
    x, y = (opcode >> 8) & 0xF, (opcode >> 4) & 0xF
    return make_operation(opcode, mnemonic, [f"V{x:X}", f"V{y:X}"], [x, y])

def decode_reg(opcode: int, mnemonic: str, before: str = "", after: str = "") -> Operation:
    """X 形式。before/after は "DT" や "[I]" のような固定オペランドです。"""
    x = (opcode >> 8) & 0xF
    operands = [s for s in (before, f"V{x:X}", after) if s]
    return make_operation(opcode, mnemonic, operands, [x])

# --- 実行時ヘルパー ---

# @intent:utility_function 次の命令をスキップします（PCをさらに2進める）。
def skip_next(state: Chip8CpuState) -> None:
    state.pc = (state.pc + 2) & 0xFFFF

# @intent:utility_function 戻りアドレスをコールスタックに積みます。
# @intent:pre-condition 17段目のネストはAddressOutOfRangeErrorとなります。
def push(state: Chip8CpuState, address: int) -> None:
    if state.sp >= STACK_DEPTH:
        raise AddressOutOfRangeError(f"Call stack overflow: depth {STACK_DEPTH} exceeded.", state.sp)
    state.stack[state.sp] = address
    state.sp += 1

# @intent:utility_function コールスタックから戻りアドレスを取り出します。
# @intent:pre-condition 空のスタックからのリターンはAddressOutOfRangeErrorとなります。
def pop(state: Chip8CpuState) -> int:
    if state.sp <= 0:
        raise AddressOutOfRangeError("Call stack underflow: return with empty stack.", state.sp)
    state.sp -= 1
    return state.stack[state.sp]
