"""Data models used by the UI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from memory_match.core.board import Tile
from memory_match.core.game import MemoryGame

TILE_BACK_TEXT = "?"


@dataclass
class StatusView:
    """Texts shown above the board while a level is played."""

    title: str
    attempts: str
    record: str
    time_left: str
    low_time: bool = False


def record_text(best_attempts: Optional[int], missing: str = "N/A") -> str:
    return missing if best_attempts is None else str(best_attempts)


def tile_text(tile: Tile) -> str:
    return tile.content if tile.is_flipped or tile.is_matched else TILE_BACK_TEXT


def status_view(game: MemoryGame) -> StatusView:
    config = game.level_config
    return StatusView(
        title=f"Level {game.current_level} ({config.label})",
        attempts=f"Attempts: {game.attempts}",
        record=f"Record: {record_text(game.best_attempts)}",
        time_left=f"Time left: {game.remaining_seconds}s",
        low_time=game.is_low_time,
    )
