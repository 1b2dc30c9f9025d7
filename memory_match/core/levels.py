from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

import yaml

DATA_DIR = Path(__file__).resolve().parent.parent / "data"

_REQUIRED_INT_KEYS = ("size", "pairs", "time")


@dataclass(frozen=True)
class LevelConfig:
    level: int
    grid_size: int
    pair_count: int
    time_limit_seconds: int
    label: str


class LevelCatalog:
    """Read-only table of level number -> LevelConfig.

    Lookups never fail: an unknown level resolves to level 1.
    """

    def __init__(self, base_dir: Optional[Path] = None) -> None:
        self._base_dir = base_dir if base_dir is not None else DATA_DIR / "levels"
        self._levels = self._load_levels()

    def all(self) -> List[LevelConfig]:
        return list(self._levels.values())

    @property
    def first(self) -> LevelConfig:
        return self._levels[1]

    @property
    def max_level(self) -> int:
        return max(self._levels)

    def has(self, level: int) -> bool:
        return level in self._levels

    def get(self, level: int) -> LevelConfig:
        return self._levels.get(level, self.first)

    def _load_levels(self) -> Dict[int, LevelConfig]:
        base_dir = self._base_dir
        if not base_dir.exists():
            raise FileNotFoundError(f"Levels directory not found: {base_dir}")

        levels: Dict[int, LevelConfig] = {}
        paths = []
        for level_path in base_dir.glob("level*.yaml"):
            m = re.match(r"^level(\d+)$", level_path.stem)
            if m:
                paths.append((int(m.group(1)), level_path))

        for number, level_path in sorted(paths):
            raw = yaml.safe_load(level_path.read_text(encoding="utf-8"))
            if not raw or not isinstance(raw, dict):
                raise ValueError(f"{level_path.name}: expected YAML with 'size', 'pairs', 'time' and 'label'")
            values: Dict[str, int] = {}
            for key in _REQUIRED_INT_KEYS:
                value = raw.get(key)
                # bool is an int subclass; reject it explicitly
                if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                    raise ValueError(f"{level_path.name}: missing or invalid '{key}'")
                values[key] = value
            label = raw.get("label")
            if not label or not isinstance(label, str):
                raise ValueError(f"{level_path.name}: missing or invalid 'label'")
            if values["pairs"] * 2 > values["size"] * values["size"]:
                raise ValueError(f"{level_path.name}: {values['pairs']} pairs do not fit a {values['size']}x{values['size']} grid")
            levels[number] = LevelConfig(
                level=number,
                grid_size=values["size"],
                pair_count=values["pairs"],
                time_limit_seconds=values["time"],
                label=label.strip(),
            )

        if not levels:
            raise ValueError("No level files (level*.yaml) found in data/levels")
        if 1 not in levels:
            raise ValueError("data/levels must define level1.yaml")
        return levels
