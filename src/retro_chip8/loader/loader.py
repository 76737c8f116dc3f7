# retro_chip8/loader/loader.py
"""
コードローダーモジュール。
生のCHIP-8プログラムイメージ（.ch8 など）をファイルから読み込みます。
"""
import logging
from pathlib import Path
from typing import Union

from retro_chip8.arch.chip8.cpu import Chip8Cpu

logger = logging.getLogger(__name__)

class RomLoader:
    """
    バイナリファイルを読み込み、CPUのプログラム領域(0x200-)にロードするローダー。
    """
    def load_rom(self, file_path: Union[str, Path], cpu: Chip8Cpu) -> int:
        data = Path(file_path).read_bytes()
        logger.info("Loading program %s (%d bytes)", file_path, len(data))
        cpu.load_program(data)
        return len(data)
