# src/retro_chip8/ui/keymap.py
"""
ホストのキーボードとCHIP-8キーパッドの対応付け。
設定ファイル上のキー名（"1", "Q", "Space" など）をQtのキーコードへ解決します。
"""
import logging
from typing import Dict, Optional

from PySide6.QtCore import Qt

logger = logging.getLogger(__name__)

# @intent:utility_function 設定上のキー名をQtのキーコードに変換します。未知の名前はNoneを返します。
def qt_key_for_name(name: str) -> Optional[int]:
    attr = f"Key_{name.upper() if len(name) == 1 else name}"
    key = getattr(Qt.Key, attr, None)
    return int(key) if key is not None else None

# @intent:responsibility {キー名: CHIP-8キー} の設定を {Qtキーコード: CHIP-8キー} に解決します。
# @intent:post-condition 解決できないキー名は警告をログに出力して無視されます。
def resolve_keymap(keymap: Dict[str, int]) -> Dict[int, int]:
    resolved: Dict[int, int] = {}
    for name, chip8_key in keymap.items():
        qt_key = qt_key_for_name(name)
        if qt_key is None:
            logger.warning("Unknown host key name '%s' in keymap, ignored", name)
            continue
        resolved[qt_key] = chip8_key
    return resolved
