# tests/arch/chip8/test_chip8_keypad.py
"""
キー入力命令（SKP, SKNP, LD Vx, K）とキーパッドの単体テスト。
"""
import pytest

from retro_chip8.config.builder import SystemBuilder
from retro_chip8.core.errors import AddressOutOfRangeError
from retro_chip8.arch.chip8.peripherals import Keypad

def program(*words):
    return b"".join(w.to_bytes(2, "big") for w in words)

@pytest.fixture
def cpu():
    cpu, _ = SystemBuilder().build_system()
    return cpu

class TestKeypad:
    def test_set_and_query(self):
        keypad = Keypad()
        keypad.set_key(0xA, True)
        assert keypad.is_pressed(0xA)
        keypad.set_key(0xA, False)
        assert not keypad.is_pressed(0xA)

    def test_first_pressed_is_lowest_index(self):
        keypad = Keypad()
        assert keypad.first_pressed() is None
        keypad.set_key(0xC, True)
        keypad.set_key(0x3, True)
        assert keypad.first_pressed() == 0x3

    def test_set_key_out_of_range(self):
        with pytest.raises(ValueError):
            Keypad().set_key(16, True)
        with pytest.raises(ValueError):
            Keypad().set_key(-1, True)

class TestKeyInstructions:
    def test_skp(self, cpu):
        state = cpu.get_state()
        state.v[2] = 0x5
        cpu.load_program(program(0xE29E))
        cpu.step()
        assert state.pc == 0x202

        cpu.set_key(0x5, True)
        state.pc = 0x200
        cpu.step()
        assert state.pc == 0x204

    def test_sknp(self, cpu):
        state = cpu.get_state()
        state.v[2] = 0x5
        cpu.load_program(program(0xE2A1))
        cpu.step()
        assert state.pc == 0x204

        cpu.set_key(0x5, True)
        state.pc = 0x200
        cpu.step()
        assert state.pc == 0x202

    def test_key_skip_with_register_beyond_keypad(self, cpu):
        cpu.get_state().v[0] = 0x10
        cpu.load_program(program(0xE09E))
        with pytest.raises(AddressOutOfRangeError):
            cpu.step()

    def test_wait_key_retries_until_pressed(self, cpu):
        state = cpu.get_state()
        state.v[4] = 0x77
        cpu.load_program(program(0xF40A))

        for _ in range(5):
            snapshot = cpu.step()
            assert state.pc == 0x200
            assert state.v[4] == 0x77
            assert snapshot.operation.mnemonic == "LD"

        cpu.set_key(0x9, True)
        cpu.step()
        assert state.v[4] == 0x9
        assert state.pc == 0x202

    def test_wait_key_does_not_stall_timers(self, cpu):
        state = cpu.get_state()
        state.delay_timer = 3
        cpu.load_program(program(0xF00A))
        for _ in range(3):
            cpu.step()
            cpu.tick_timers()
        assert state.delay_timer == 0
        assert state.pc == 0x200
