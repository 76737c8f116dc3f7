import unittest
from retro_chip8.transport.bus import Bus, RAM
from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.core.errors import AddressOutOfRangeError, UnknownOpcodeError

class TestChip8ControlInstructions(unittest.TestCase):
    def setUp(self):
        self.bus = Bus()
        self.bus.register_device(0x000, 0xFFF, RAM(0x1000))
        self.cpu = Chip8Cpu(self.bus)
        self.state = self.cpu.get_state()

    def _write_words(self, address, *words):
        for i, w in enumerate(words):
            self.bus.write(address + 2 * i, w >> 8)
            self.bus.write(address + 2 * i + 1, w & 0xFF)

    def test_nop(self):
        self._write_words(0x200, 0x0000)
        self.cpu.step()
        self.assertEqual(self.state.pc, 0x202)

    def test_jp(self):
        self._write_words(0x200, 0x1345)
        self.cpu.step()
        self.assertEqual(self.state.pc, 0x345)

    def test_jp_v0(self):
        self.state.v[0] = 0x04
        self._write_words(0x200, 0xB300)
        self.cpu.step()
        self.assertEqual(self.state.pc, 0x304)

    def test_call_and_return(self):
        # 0x200: CALL $300 / 0x300: RET
        self._write_words(0x200, 0x2300)
        self._write_words(0x300, 0x00EE)
        self.cpu.step()
        self.assertEqual(self.state.pc, 0x300)
        self.assertEqual(self.state.sp, 1)
        self.assertEqual(self.state.stack[0], 0x202)

        self.cpu.step()
        self.assertEqual(self.state.pc, 0x202)
        self.assertEqual(self.state.sp, 0)

    def _write_call_chain(self, depth):
        # 0x200 + 4k: CALL 0x200 + 4(k+1) / 0x202 + 4k: RET
        for k in range(depth):
            site = 0x200 + 4 * k
            self._write_words(site, 0x2000 | (site + 4), 0x00EE)

    def test_sixteen_nested_calls(self):
        self._write_call_chain(16)
        self._write_words(0x240, 0x00EE)

        for _ in range(16):
            self.cpu.step()
        self.assertEqual(self.state.sp, 16)
        self.assertEqual(self.state.pc, 0x240)

        for _ in range(16):
            self.cpu.step()
        self.assertEqual(self.state.sp, 0)
        self.assertEqual(self.state.pc, 0x202)

        # Returning once more has nothing to pop
        with self.assertRaises(AddressOutOfRangeError):
            self.cpu.step()

    def test_seventeenth_call_overflows(self):
        self._write_call_chain(17)
        for _ in range(16):
            self.cpu.step()
        with self.assertRaises(AddressOutOfRangeError):
            self.cpu.step()
        self.assertEqual(self.state.sp, 16)

    def test_se_byte(self):
        self.state.v[1] = 0x42
        self._write_words(0x200, 0x3142)
        self.cpu.step()
        self.assertEqual(self.state.pc, 0x204)

        self.state.pc = 0x200
        self.state.v[1] = 0x41
        self.cpu.step()
        self.assertEqual(self.state.pc, 0x202)

    def test_sne_byte(self):
        self.state.v[1] = 0x41
        self._write_words(0x200, 0x4142)
        self.cpu.step()
        self.assertEqual(self.state.pc, 0x204)

        self.state.pc = 0x200
        self.state.v[1] = 0x42
        self.cpu.step()
        self.assertEqual(self.state.pc, 0x202)

    def test_se_reg_and_sne_reg(self):
        self.state.v[1] = 0x10
        self.state.v[2] = 0x10
        self._write_words(0x200, 0x5120, 0x0000, 0x9120)
        self.cpu.step()
        self.assertEqual(self.state.pc, 0x204)
        self.cpu.step() # SNE V1, V2 -> equal, no skip
        self.assertEqual(self.state.pc, 0x206)

    def test_register_compare_requires_zero_low_nibble(self):
        self._write_words(0x200, 0x5121)
        with self.assertRaises(UnknownOpcodeError) as ctx:
            self.cpu.step()
        self.assertEqual(ctx.exception.opcode, 0x5121)
        self.assertEqual(self.state.pc, 0x200)

if __name__ == '__main__':
    unittest.main()
