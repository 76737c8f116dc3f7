import random
from typing import Callable, Optional, Tuple
from retro_chip8.transport.bus import Bus, RAM
from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.arch.chip8.state import MEMORY_SIZE
from .models import SystemConfig

# @intent:responsibility システム構成（Config）に基づいて、Bus、RAM、CPUを生成・接続します。
class SystemBuilder:
    def build_system(self, config: Optional[SystemConfig] = None,
                     on_sound_stop: Optional[Callable[[], None]] = None) -> Tuple[Chip8Cpu, Bus]:
        """
        4KBのRAMを 0x000-0xFFF にマップしたバスと、リセット済みのCPUを返します。
        """
        config = config or SystemConfig()

        bus = Bus()
        bus.register_device(0x000, MEMORY_SIZE - 1, RAM(MEMORY_SIZE))

        # @intent:rationale シードが指定された場合、RND命令の結果を再現可能にします。
        rng = random.Random(config.seed)
        cpu = Chip8Cpu(bus, rng=rng, on_sound_stop=on_sound_stop)
        return cpu, bus
