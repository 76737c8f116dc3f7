# tests/config/test_config.py
"""
YAML構成の読み込みとシステム構築の単体テスト。
"""
import logging

import pytest

from retro_chip8.config.loader import ConfigLoader
from retro_chip8.config.builder import SystemBuilder
from retro_chip8.config.models import SystemConfig, DEFAULT_KEYMAP
from retro_chip8.arch.chip8.cpu import Chip8Cpu

class TestConfigLoader:
    def test_defaults_for_empty_document(self):
        config = ConfigLoader().load_from_string("")
        assert config == SystemConfig()
        assert config.keymap == DEFAULT_KEYMAP
        assert config.steps_per_frame == 700 // 60

    def test_full_document(self):
        text = """
        cpu_hz: 600
        timer_hz: "60"
        seed: "0x10"
        display:
          scale: 8
          foreground: "#FFFFFF"
        keymap:
          "1": 0x1
          q: "0xC"
          Space: 0
        """
        config = ConfigLoader().load_from_string(text)
        assert config.cpu_hz == 600
        assert config.timer_hz == 60
        assert config.seed == 16
        assert config.display.scale == 8
        assert config.display.foreground == "#FFFFFF"
        assert config.display.background == "#000000"
        assert config.keymap == {"1": 0x1, "q": 0xC, "Space": 0}
        assert config.steps_per_frame == 10

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "machine.yaml"
        path.write_text("cpu_hz: 1200\n")
        assert ConfigLoader().load_from_file(str(path)).cpu_hz == 1200

    @pytest.mark.parametrize("text", [
        "cpu_hz: 0",
        "timer_hz: -60",
        "display: {scale: 0}",
        "keymap: {A: 16}",
        "cpu_hz: fast",
        "cpu_hz: true",
        "- not a mapping",
        "display: 5",
        "display: [scale, 8]",
        "keymap: 3",
        "keymap: [A, B]",
        "keymap: {A: [1]}",
    ])
    def test_invalid_values(self, text):
        with pytest.raises(ValueError):
            ConfigLoader().load_from_string(text)

    def test_numeric_keymap_names_become_strings(self):
        config = ConfigLoader().load_from_string("keymap: {1: 0x1, 2: 0x2}\n")
        assert config.keymap == {"1": 0x1, "2": 0x2}

    def test_empty_sections_take_defaults(self):
        config = ConfigLoader().load_from_string("display:\nkeymap:\n")
        assert config.display.scale == 10
        assert config.keymap == DEFAULT_KEYMAP

    def test_unknown_key_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="retro_chip8.config.loader"):
            config = ConfigLoader().load_from_string("cpu_hz: 500\nturbo: true\n")
        assert config.cpu_hz == 500
        assert "turbo" in caplog.text

    def test_slow_clock_runs_at_least_one_step_per_frame(self):
        assert SystemConfig(cpu_hz=30, timer_hz=60).steps_per_frame == 1

class TestSystemBuilder:
    def test_build_default_system(self):
        cpu, bus = SystemBuilder().build_system()
        assert isinstance(cpu, Chip8Cpu)
        assert cpu.get_state().pc == 0x200
        assert bus.read(0x000) == 0xF0 # glyph "0"
        assert bus.read(0xFFF) == 0x00

    def test_seed_makes_random_reproducible(self):
        def first_random(seed):
            cpu, _ = SystemBuilder().build_system(SystemConfig(seed=seed))
            cpu.load_program(bytes([0xC0, 0xFF, 0xC1, 0xFF]))
            cpu.step()
            cpu.step()
            return cpu.get_state().v[:2]

        assert first_random(99) == first_random(99)

    def test_sound_stop_callback_is_wired(self):
        stops = []
        cpu, _ = SystemBuilder().build_system(on_sound_stop=lambda: stops.append(1))
        cpu.get_state().sound_timer = 1
        cpu.tick_timers()
        assert stops == [1]
