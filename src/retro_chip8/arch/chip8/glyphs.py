# src/retro_chip8/arch/chip8/glyphs.py
"""
内蔵の16進数字グリフ(0-F)。

各グリフは幅4ピクセル x 高さ5行で、1行を1バイト（MSBが左端）で表します。
リセット時にアドレス0x000から書き込まれます。
"""

GLYPH_BASE = 0x000
GLYPH_HEIGHT = 5

# @intent:constant 16グリフ x 5バイト = 80バイトのグリフテーブル。
GLYPHS = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0, # 0
    0x20, 0x60, 0x20, 0x20, 0x70, # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0, # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0, # 3
    0x90, 0x90, 0xF0, 0x10, 0x10, # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0, # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0, # 6
    0xF0, 0x10, 0x20, 0x40, 0x40, # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0, # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0, # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90, # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0, # B
    0xF0, 0x80, 0x80, 0x80, 0xF0, # C
    0xE0, 0x90, 0x90, 0x90, 0xE0, # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0, # E
    0xF0, 0x80, 0xF0, 0x80, 0x80, # F
])

# @intent:utility_function 指定した数字のグリフの先頭アドレスを返します。
def glyph_address(digit: int) -> int:
    return GLYPH_BASE + GLYPH_HEIGHT * digit
