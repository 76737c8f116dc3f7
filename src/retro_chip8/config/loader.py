import logging
import yaml
from typing import Dict, Any, Optional
from .models import SystemConfig, DisplayConfig, DEFAULT_KEYMAP

logger = logging.getLogger(__name__)

KNOWN_KEYS = {"cpu_hz", "timer_hz", "seed", "display", "keymap"}

class ConfigLoader:
    def load_from_file(self, path: str) -> SystemConfig:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        return self._parse_config(data or {})

    def load_from_string(self, text: str) -> SystemConfig:
        return self._parse_config(yaml.safe_load(text) or {})

    def _parse_config(self, data: Dict[str, Any]) -> SystemConfig:
        if not isinstance(data, dict):
            raise ValueError(f"Configuration root must be a mapping, got {type(data).__name__}")

        for key in data:
            if key not in KNOWN_KEYS:
                logger.warning("Ignoring unknown configuration key '%s'", key)

        cpu_hz = self._parse_positive(data.get("cpu_hz", 700), "cpu_hz")
        timer_hz = self._parse_positive(data.get("timer_hz", 60), "timer_hz")
        seed = data.get("seed")
        seed = self._parse_int(seed) if seed is not None else None

        # Parse Display
        display_data = self._parse_mapping(data.get("display"), "display") or {}
        display = DisplayConfig(
            scale=self._parse_positive(display_data.get("scale", 10), "display.scale"),
            foreground=str(display_data.get("foreground", "#33FF66")),
            background=str(display_data.get("background", "#000000")),
        )

        # Parse Keymap
        keymap_data = self._parse_mapping(data.get("keymap"), "keymap")
        keymap = dict(DEFAULT_KEYMAP)
        if keymap_data is not None:
            keymap = {}
            for name, value in keymap_data.items():
                key = self._parse_int(value)
                if not 0 <= key <= 0xF:
                    raise ValueError(f"Keymap entry '{name}' must map to a key in 0x0-0xF, got {value}")
                keymap[str(name)] = key

        return SystemConfig(
            cpu_hz=cpu_hz,
            timer_hz=timer_hz,
            seed=seed,
            display=display,
            keymap=keymap,
        )

    # @intent:utility_function 省略された節はNoneのまま返し、マッピング以外はValueErrorとします。
    def _parse_mapping(self, value: Any, name: str) -> Optional[Dict[Any, Any]]:
        if value is None or isinstance(value, dict):
            return value
        raise ValueError(f"'{name}' must be a mapping, got {type(value).__name__}")

    def _parse_positive(self, value: Any, name: str) -> int:
        parsed = self._parse_int(value)
        if parsed <= 0:
            raise ValueError(f"'{name}' must be a positive integer, got {value}")
        return parsed

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            if value.lower().startswith("0x"):
                return int(value, 16)
            return int(value)
        raise ValueError(f"Invalid integer format: {value}")
