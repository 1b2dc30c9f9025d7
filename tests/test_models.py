"""Tests for memory_match.ui.models – status texts and tile faces."""

from __future__ import annotations

import random

import pytest

from memory_match.core.board import BoardGenerator, SymbolCatalog, Tile
from memory_match.core.game import MemoryGame
from memory_match.core.levels import LevelCatalog
from memory_match.core.progress import RECORD_KEY, MemoryStorage, ProgressStore
from memory_match.core.scheduler import VirtualScheduler
from memory_match.ui.models import StatusView, record_text, status_view, tile_text


def _game(storage: MemoryStorage, scheduler: VirtualScheduler) -> MemoryGame:
    levels = LevelCatalog()
    generator = BoardGenerator(levels, SymbolCatalog(), rng=random.Random(3))
    return MemoryGame(levels, generator, ProgressStore(storage), scheduler)


# ===========================================================================
# record_text / tile_text
# ===========================================================================

class TestRecordText:
    def test_missing(self):
        assert record_text(None) == "N/A"

    def test_custom_missing(self):
        assert record_text(None, missing="Not recorded yet") == "Not recorded yet"

    def test_value(self):
        assert record_text(7) == "7"


class TestTileText:
    def test_hidden(self):
        assert tile_text(Tile(id=0, content="A")) == "?"

    def test_flipped(self):
        assert tile_text(Tile(id=0, content="A", is_flipped=True)) == "A"

    def test_matched(self):
        assert tile_text(Tile(id=0, content="A", is_flipped=True, is_matched=True)) == "A"


# ===========================================================================
# status_view
# ===========================================================================

class TestStatusView:
    def test_fresh_game(self):
        scheduler = VirtualScheduler()
        game = _game(MemoryStorage(), scheduler)
        game.start_game(1)
        assert status_view(game) == StatusView(
            title="Level 1 (2x2 (Easy))",
            attempts="Attempts: 0",
            record="Record: N/A",
            time_left="Time left: 30s",
            low_time=False,
        )

    def test_record_and_low_time(self):
        scheduler = VirtualScheduler()
        game = _game(MemoryStorage({RECORD_KEY: "4"}), scheduler)
        game.start_game(1)
        scheduler.advance(25_000)
        view = status_view(game)
        assert view.record == "Record: 4"
        assert view.time_left == "Time left: 5s"
        assert view.low_time is True

    @pytest.mark.parametrize("level,label", [(2, "4x4 (Normal)"), (3, "6x6 (Hard)")])
    def test_title_per_level(self, level: int, label: str):
        game = _game(MemoryStorage(), VirtualScheduler())
        game.start_game(level)
        assert status_view(game).title == f"Level {level} ({label})"
