# tests/arch/chip8/test_chip8_display.py
"""
画面命令（CLS, DRW, LD F）とフレームバッファの単体テスト。
"""
import pytest

from retro_chip8.config.builder import SystemBuilder
from retro_chip8.core.errors import AddressOutOfRangeError
from retro_chip8.arch.chip8.peripherals import Display, SCREEN_WIDTH, SCREEN_HEIGHT

def program(*words):
    return b"".join(w.to_bytes(2, "big") for w in words)

@pytest.fixture
def machine():
    cpu, bus = SystemBuilder().build_system()
    return cpu, bus

def lit_pixels(grid):
    return {(x, y) for y, row in enumerate(grid) for x, lit in enumerate(row) if lit}

class TestDisplay:
    def test_initially_dark(self):
        display = Display()
        grid = display.rows()
        assert len(grid) == SCREEN_HEIGHT
        assert all(len(row) == SCREEN_WIDTH for row in grid)
        assert not lit_pixels(grid)

    def test_xor_pixel_reports_collision(self):
        display = Display()
        assert display.xor_pixel(3, 4) is False
        assert display.pixel(3, 4) is True
        assert display.xor_pixel(3, 4) is True
        assert display.pixel(3, 4) is False

    def test_xor_pixel_wraps(self):
        display = Display()
        display.xor_pixel(64 + 1, 32 + 2)
        assert display.pixel(1, 2) is True

    def test_pixel_out_of_range(self):
        with pytest.raises(ValueError):
            Display().pixel(64, 0)

class TestDrawInstructions:
    def test_draw_twice_collides_and_erases(self, machine):
        cpu, bus = machine
        bus.write(0x300, 0xFF)
        # LD I, $300 / DRW V0, V1, 1 / DRW V0, V1, 1
        cpu.load_program(program(0xA300, 0xD011, 0xD011))
        cpu.step()

        cpu.step()
        assert lit_pixels(cpu.get_display()) == {(x, 0) for x in range(8)}
        assert cpu.get_state().vf == 0

        cpu.step()
        assert not lit_pixels(cpu.get_display())
        assert cpu.get_state().vf == 1

    def test_draw_wraps_horizontally(self, machine):
        cpu, bus = machine
        bus.write(0x300, 0b11000000)
        state = cpu.get_state()
        state.v[0] = 63
        state.v[1] = 5
        cpu.load_program(program(0xA300, 0xD011))
        cpu.step()
        cpu.step()
        assert lit_pixels(cpu.get_display()) == {(63, 5), (0, 5)}

    def test_draw_wraps_vertically(self, machine):
        cpu, bus = machine
        bus.write(0x300, 0x80)
        bus.write(0x301, 0x80)
        state = cpu.get_state()
        state.v[0] = 10
        state.v[1] = 31
        cpu.load_program(program(0xA300, 0xD012))
        cpu.step()
        cpu.step()
        assert lit_pixels(cpu.get_display()) == {(10, 31), (10, 0)}

    def test_draw_glyph(self, machine):
        cpu, _ = machine
        state = cpu.get_state()
        state.v[0] = 0x0
        # LD F, V0 / DRW V1, V1, 5  (V1 = 0)
        cpu.load_program(program(0xF029, 0xD115))
        cpu.step()
        assert state.i == 0x000
        cpu.step()
        # Glyph "0": F0 90 90 90 F0
        expected = {(x, 0) for x in range(4)} | {(x, 4) for x in range(4)}
        expected |= {(0, y) for y in range(1, 4)} | {(3, y) for y in range(1, 4)}
        assert lit_pixels(cpu.get_display()) == expected

    def test_glyph_address(self, machine):
        cpu, _ = machine
        cpu.get_state().v[3] = 0xA
        cpu.load_program(program(0xF329))
        cpu.step()
        assert cpu.get_state().i == 50

    def test_cls(self, machine):
        cpu, bus = machine
        bus.write(0x300, 0xFF)
        cpu.load_program(program(0xA300, 0xD011, 0x00E0))
        for _ in range(3):
            cpu.step()
        assert not lit_pixels(cpu.get_display())

    def test_draw_sprite_past_end_of_memory(self, machine):
        cpu, _ = machine
        cpu.get_state().i = 0xFFF
        cpu.load_program(program(0xD002))
        with pytest.raises(AddressOutOfRangeError):
            cpu.step()
        assert not lit_pixels(cpu.get_display())

    def test_display_is_read_only(self, machine):
        cpu, _ = machine
        grid = cpu.get_display()
        with pytest.raises(TypeError):
            grid[0][0] = True
