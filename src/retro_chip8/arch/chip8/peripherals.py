# src/retro_chip8/arch/chip8/peripherals.py
"""
CHIP-8 の周辺機器（フレームバッファ、キーパッド）。

これらはメモリマップされず、命令の実行関数から直接操作されます。
ホストからはフレームバッファの読み出しとキー状態の設定のみが行われます。
"""
import random
from dataclasses import dataclass, field
from typing import List, Optional

from retro_chip8.common.types import DisplayGrid
from retro_chip8.core.errors import AddressOutOfRangeError

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32
NUM_KEYS = 16

# @intent:responsibility 64x32 のモノクロフレームバッファを保持し、XOR描画を提供します。
class Display:
    """
    行優先(row-major)のモノクロビットマップ。
    変更はクリアとXOR描画の2操作のみです。
    """
    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT):
        self.width = width
        self.height = height
        self._pixels: List[bool] = [False] * (width * height)

    # @intent:responsibility 全ピクセルを消灯します。
    def clear(self) -> None:
        self._pixels = [False] * (self.width * self.height)

    # @intent:responsibility 指定座標のピクセルを反転し、点灯→消灯の衝突が起きたかを返します。
    # @intent:rationale 座標は画面端でクリップせず、幅/高さで折り返します。
    def xor_pixel(self, x: int, y: int) -> bool:
        idx = (x % self.width) + self.width * (y % self.height)
        collided = self._pixels[idx]
        self._pixels[idx] = not collided
        return collided

    def pixel(self, x: int, y: int) -> bool:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise ValueError(f"Pixel ({x}, {y}) is outside the {self.width}x{self.height} display.")
        return self._pixels[x + self.width * y]

    # @intent:responsibility 読み取り専用のグリッド（行のタプル）としてフレームバッファを返します。
    def rows(self) -> DisplayGrid:
        w = self.width
        return tuple(tuple(self._pixels[y * w:(y + 1) * w]) for y in range(self.height))

# @intent:responsibility 16キーの押下状態を保持します。
class Keypad:
    """
    キー 0x0-0xF の押下フラグ。ホストのみが書き込み、命令は読み出しのみ行います。
    """
    def __init__(self):
        self._keys: List[bool] = [False] * NUM_KEYS

    # @intent:responsibility ホストからのキーイベントを反映します。
    # @intent:pre-condition keyは0から15の範囲である必要があります。
    def set_key(self, key: int, pressed: bool) -> None:
        if not 0 <= key < NUM_KEYS:
            raise ValueError(f"Key index {key} out of range (0-{NUM_KEYS - 1}).")
        self._keys[key] = bool(pressed)

    # @intent:responsibility 命令から参照されるキー状態を返します。
    # @intent:post-condition 範囲外のキー（VXが16以上）の場合、AddressOutOfRangeErrorを発生させます。
    def is_pressed(self, key: int) -> bool:
        if not 0 <= key < NUM_KEYS:
            raise AddressOutOfRangeError(f"Key index {key:#04x} out of range for keypad of {NUM_KEYS} keys.", key)
        return self._keys[key]

    # @intent:responsibility インデックス順に走査し、最初に押されているキーを返します。
    def first_pressed(self) -> Optional[int]:
        for key, pressed in enumerate(self._keys):
            if pressed:
                return key
        return None

    def release_all(self) -> None:
        self._keys = [False] * NUM_KEYS

# @intent:data_structure 命令実行関数に渡す、バス以外の周辺機器一式。
# @intent:rationale 乱数源を差し替え可能にし、C,X,N,N を含むプログラムを決定的にテストできるようにします。
@dataclass
class Chip8Io:
    display: Display = field(default_factory=Display)
    keypad: Keypad = field(default_factory=Keypad)
    rng: random.Random = field(default_factory=random.Random)
