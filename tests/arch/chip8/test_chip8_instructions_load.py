import unittest
from retro_chip8.transport.bus import Bus, RAM
from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.core.errors import AddressOutOfRangeError

class TestChip8LoadInstructions(unittest.TestCase):
    def setUp(self):
        self.bus = Bus()
        self.bus.register_device(0x000, 0xFFF, RAM(0x1000))
        self.cpu = Chip8Cpu(self.bus)
        self.state = self.cpu.get_state()

    def _execute(self, *words):
        self.cpu.load_program(b"".join(w.to_bytes(2, "big") for w in words))
        self.state.pc = 0x200
        for _ in words:
            self.cpu.step()

    def test_ld_byte_and_reg(self):
        # LD V3, #$2A / LD V4, V3
        self._execute(0x632A, 0x8430)
        self.assertEqual(self.state.v[3], 0x2A)
        self.assertEqual(self.state.v[4], 0x2A)

    def test_ld_i(self):
        self._execute(0xA123)
        self.assertEqual(self.state.i, 0x123)

    def test_timer_transfers(self):
        self.state.v[2] = 0x30
        self.state.v[3] = 0x40
        # LD DT, V2 / LD ST, V3 / LD V5, DT
        self._execute(0xF215, 0xF318, 0xF507)
        self.assertEqual(self.state.delay_timer, 0x30)
        self.assertEqual(self.state.sound_timer, 0x40)
        self.assertEqual(self.state.v[5], 0x30)

    def test_bcd(self):
        self.state.v[0] = 157
        self.state.i = 0x300
        # LD B, V0
        self._execute(0xF033)
        self.assertEqual([self.bus.read(0x300 + n) for n in range(3)], [1, 5, 7])

    def test_bcd_small_and_max_values(self):
        self.state.i = 0x300
        self.state.v[0] = 7
        self._execute(0xF033)
        self.assertEqual([self.bus.read(0x300 + n) for n in range(3)], [0, 0, 7])

        self.state.v[0] = 255
        self._execute(0xF033)
        self.assertEqual([self.bus.read(0x300 + n) for n in range(3)], [2, 5, 5])

    def test_bcd_out_of_range_writes_nothing(self):
        self.state.v[0] = 123
        self.state.i = 0xFFE
        with self.assertRaises(AddressOutOfRangeError):
            self._execute(0xF033)
        self.assertEqual(self.bus.read(0xFFE), 0)
        self.assertEqual(self.bus.read(0xFFF), 0)

    def test_store_and_load_registers(self):
        self.state.v[:4] = [0x11, 0x22, 0x33, 0x44]
        self.state.v[4] = 0x55
        self.state.i = 0x400
        # LD [I], V3
        self._execute(0xF355)
        self.assertEqual([self.bus.read(0x400 + n) for n in range(5)], [0x11, 0x22, 0x33, 0x44, 0x00])
        self.assertEqual(self.state.i, 0x400) # I is unchanged

        self.state.v[:5] = [0] * 5
        # LD V3, [I]
        self._execute(0xF365)
        self.assertEqual(self.state.v[:5], [0x11, 0x22, 0x33, 0x44, 0x00])

    def test_store_registers_out_of_range(self):
        self.state.i = 0xFFF
        with self.assertRaises(AddressOutOfRangeError):
            self._execute(0xF155)
        self.assertEqual(self.bus.read(0xFFF), 0)

    def test_load_registers_out_of_range(self):
        self.state.i = 0xFFFF
        with self.assertRaises(AddressOutOfRangeError):
            self._execute(0xF065)

if __name__ == '__main__':
    unittest.main()
