from __future__ import annotations

import random
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import yaml

from memory_match.core.levels import DATA_DIR, LevelCatalog


@dataclass
class Tile:
    """One board position. ``id`` is the index the tile was dealt to."""

    id: int
    content: str
    is_flipped: bool = False
    is_matched: bool = False


class SymbolCatalog:
    """Ordered tile faces loaded from ``data/symbols.yaml``."""

    def __init__(self, symbols: Optional[List[str]] = None, path: Optional[Path] = None) -> None:
        if symbols is None:
            symbols = self._load_symbols(path if path is not None else DATA_DIR / "symbols.yaml")
        if len(symbols) < 2:
            raise ValueError("Symbol catalog needs at least two symbols")
        if len(set(symbols)) != len(symbols):
            raise ValueError("Symbol catalog contains duplicates")
        self._symbols = list(symbols)

    def __len__(self) -> int:
        return len(self._symbols)

    def first(self, count: int) -> List[str]:
        """Return the first *count* symbols, clamped to the catalog size."""
        return self._symbols[: max(0, min(count, len(self._symbols)))]

    @staticmethod
    def _load_symbols(path: Path) -> List[str]:
        if not path.exists():
            raise FileNotFoundError(f"Symbol file not found: {path}")
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
        if not raw or not isinstance(raw, dict):
            raise ValueError(f"{path.name}: expected YAML with 'symbols'")
        symbols = raw.get("symbols")
        if not isinstance(symbols, list):
            raise ValueError(f"{path.name}: missing or invalid 'symbols'")
        return [str(item).strip() for item in symbols if str(item).strip()]


class BoardGenerator:
    """Deals shuffled boards of paired tiles for a level.

    When a level asks for more pairs than the catalog holds, the first two
    symbols are appended again until the deck is full, so those two faces
    can appear more than twice on that board.
    """

    def __init__(
        self,
        levels: LevelCatalog,
        symbols: SymbolCatalog,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._levels = levels
        self._symbols = symbols
        self._rng = rng if rng is not None else random.Random()

    def contents(self, level: int) -> List[str]:
        """Unshuffled face values for *level*'s board."""
        config = self._levels.get(level)
        selected = self._symbols.first(config.pair_count)
        contents = selected + selected
        padding = self._symbols.first(2)
        while len(contents) < config.pair_count * 2:
            contents.extend(padding)
        return contents

    def generate(self, level: int) -> List[Tile]:
        contents = self.contents(level)
        # random.shuffle is Fisher-Yates: i from the end down to 1, swap with j <= i
        self._rng.shuffle(contents)
        return [Tile(id=index, content=content) for index, content in enumerate(contents)]
