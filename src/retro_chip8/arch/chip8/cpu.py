# src/retro_chip8/arch/chip8/cpu.py
"""
CHIP-8 仮想マシンの中心モジュール。

ホストは以下の操作のみで仮想マシンを駆動します。
    reset / load_program / set_key / step / tick_timers / get_display
命令クロックとタイマークロック（通常60Hz）は独立しており、
どちらもホストが適切な周期で呼び出す必要があります。
"""
import logging
import random
from typing import Callable, Dict, List, Optional

from retro_chip8.common.types import DisplayGrid, RegisterInfo, RegisterLayoutInfo
from retro_chip8.core.cpu import AbstractCpu
from retro_chip8.core.errors import AddressOutOfRangeError
from retro_chip8.core.snapshot import Operation
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.glyphs import GLYPHS, GLYPH_BASE
from retro_chip8.arch.chip8.instructions import decode_opcode, execute_instruction
from retro_chip8.arch.chip8.peripherals import Chip8Io
from retro_chip8.arch.chip8.state import Chip8CpuState, MEMORY_SIZE, PROGRAM_START, NUM_REGISTERS

logger = logging.getLogger(__name__)

MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START  # 3584 bytes

# @intent:responsibility CHIP-8 の具体的なエミュレーションロジック（フェッチ、デコード、実行）とタイマーを提供します。
class Chip8Cpu(AbstractCpu):
    """
    CHIP-8 仮想マシンをエミュレートするクラス。
    全ての状態（メモリ、レジスタ、スタック、タイマー、キーパッド、フレームバッファ）は
    このインスタンスが排他的に保持します。複数のインスタンスは互いに独立です。
    スレッドセーフではありません。
    """
    # @intent:responsibility Chip8Cpuを初期化し、グリフテーブルを書き込みます。
    # @intent:pre-condition busには0x000-0xFFFの4KBがマップされている必要があります。
    def __init__(self, bus: Bus, rng: Optional[random.Random] = None,
                 on_sound_stop: Optional[Callable[[], None]] = None):
        self._io = Chip8Io(rng=rng if rng is not None else random.Random())
        # @intent:rationale リセット後に同じ乱数列を再生するため、構築時点の乱数状態を保存します。
        self._rng_state = self._io.rng.getstate()
        self._on_sound_stop = on_sound_stop
        super().__init__(bus)
        self._reset_memory()

    # @intent:responsibility CHIP-8の初期状態を生成します（PC=0x200、その他はゼロ）。
    def _create_initial_state(self) -> Chip8CpuState:
        return Chip8CpuState()

    # @intent:responsibility 全ての状態をゼロに戻し、グリフテーブルを書き込み、PCを0x200にします。
    # @intent:rationale 構築直後とリセット後の状態は同一です。ロード済みのプログラムは破棄されます。
    def reset(self) -> None:
        super().reset()
        self._io.display.clear()
        self._io.keypad.release_all()
        self._io.rng.setstate(self._rng_state)
        self._reset_memory()
        logger.debug("CHIP-8 reset: PC=%#05x", self._state.pc)

    def _reset_memory(self) -> None:
        self._bus.clear()
        self._bus.load(GLYPH_BASE, GLYPHS)

    # @intent:responsibility プログラムを0x200から書き込みます。
    # @intent:pre-condition データ長は3584バイト以下である必要があります。超える場合は書き込み前に失敗します。
    def load_program(self, data: bytes) -> None:
        """
        プログラムのバイト列を、そのまま0x200以降のメモリへコピーします。
        """
        data = bytes(data)
        if len(data) > MAX_PROGRAM_SIZE:
            raise AddressOutOfRangeError(
                f"Program of {len(data)} bytes does not fit in memory (max {MAX_PROGRAM_SIZE} bytes).",
                PROGRAM_START + len(data) - 1,
            )
        self._bus.load(PROGRAM_START, data)
        logger.debug("Loaded %d program bytes at %#05x", len(data), PROGRAM_START)

    # @intent:responsibility ホストからのキーイベントを反映します。他の副作用はありません。
    def set_key(self, key: int, pressed: bool) -> None:
        self._io.keypad.set_key(key, pressed)

    # @intent:responsibility PCから2バイトをビッグエンディアンで読み込みます。
    def _fetch(self) -> int:
        return self._bus.read_word(self._state.pc)

    # @intent:responsibility 命令ワードをデコードし、Operationオブジェクトを返します。
    def _decode(self, opcode: int) -> Operation:
        return decode_opcode(opcode, self._state.pc)

    # @intent:responsibility Operationを実行し、状態を更新します。
    def _execute(self, operation: Operation) -> None:
        execute_instruction(operation, self._state, self._bus, self._io)

    # @intent:responsibility 遅延タイマーとサウンドタイマーを1ずつ減らします（0で止まります）。
    # @intent:post-condition サウンドタイマーが1から0になった呼び出しでのみTrueを返します（発音停止の通知）。
    def tick_timers(self) -> bool:
        """
        ホストから一定周期（通常60Hz）で呼び出されるタイマー更新。
        """
        s = self._state
        if s.delay_timer > 0:
            s.delay_timer -= 1

        sound_stopped = False
        if s.sound_timer > 0:
            s.sound_timer -= 1
            sound_stopped = s.sound_timer == 0

        if sound_stopped and self._on_sound_stop is not None:
            self._on_sound_stop()
        return sound_stopped

    # @intent:accessor サウンドタイマーが動作中（発音すべき状態）かを返します。
    @property
    def sound_active(self) -> bool:
        return self._state.sound_timer > 0

    # @intent:responsibility 64x32 のフレームバッファを読み取り専用のグリッドとして返します。
    def get_display(self) -> DisplayGrid:
        return self._io.display.rows()

    # @intent:responsibility UI表示用に、現在のレジスタ値を辞書形式で提供します。
    def get_register_map(self) -> Dict[str, int]:
        s = self._state
        regs = {f"V{n:X}": s.v[n] for n in range(NUM_REGISTERS)}
        regs.update({"I": s.i, "PC": s.pc, "SP": s.sp, "DT": s.delay_timer, "ST": s.sound_timer})
        return regs

    # @intent:responsibility UIのレジスタ表示レイアウト（グループ化）を定義します。
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [
            RegisterLayoutInfo("General", [RegisterInfo(f"V{n:X}", 8) for n in range(NUM_REGISTERS)]),
            RegisterLayoutInfo("Index/Pointers", [
                RegisterInfo("I", 16), RegisterInfo("PC", 16), RegisterInfo("SP", 8)
            ]),
            RegisterLayoutInfo("Timers", [RegisterInfo("DT", 8), RegisterInfo("ST", 8)]),
        ]

    # @intent:responsibility UI表示用に、現在のフラグ状態（VF）を辞書形式で提供します。
    def get_flag_state(self) -> Dict[str, bool]:
        return {"VF": self._state.vf != 0}
