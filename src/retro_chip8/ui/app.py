# src/retro_chip8/ui/app.py
"""
PySide6アプリケーションのエントリポイント。
設定とプログラムを読み込み、メインウィンドウを起動します。
"""
import argparse
import logging
import sys
from typing import List, Optional

from PySide6.QtWidgets import QApplication

from retro_chip8.config.builder import SystemBuilder
from retro_chip8.config.loader import ConfigLoader
from retro_chip8.config.models import SystemConfig
from retro_chip8.loader.loader import RomLoader
from .main_window import MainWindow

logger = logging.getLogger(__name__)

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="retro-chip8", description="CHIP-8 virtual machine")
    parser.add_argument("rom", help="Path to a raw CHIP-8 program image")
    parser.add_argument("--config", help="YAML machine/host configuration file")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser

# @intent:responsibility アプリケーションを起動し、メインウィンドウを表示します。
def main(argv: Optional[List[str]] = None) -> int:
    """
    アプリケーションのメイン関数。終了コードを返します。
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    config = ConfigLoader().load_from_file(args.config) if args.config else SystemConfig()
    cpu, _ = SystemBuilder().build_system(config)
    RomLoader().load_rom(args.rom, cpu)

    app = QApplication.instance() or QApplication(sys.argv[:1])
    main_win = MainWindow(cpu, config)
    main_win.show()
    main_win.start()
    logger.info("Emulation started at %d Hz (%d steps per frame)", config.cpu_hz, config.steps_per_frame)
    return app.exec()

if __name__ == '__main__':
    sys.exit(main())
