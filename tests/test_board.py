"""Tests for memory_match.core.board – deck building and shuffling."""

from __future__ import annotations

import random
from collections import Counter
from pathlib import Path

import pytest
import yaml

from memory_match.core.board import BoardGenerator, SymbolCatalog, Tile
from memory_match.core.levels import LevelCatalog


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def levels() -> LevelCatalog:
    return LevelCatalog()


@pytest.fixture()
def generator(levels: LevelCatalog) -> BoardGenerator:
    return BoardGenerator(levels, SymbolCatalog(), rng=random.Random(1234))


def _small_catalog_levels(tmp_path: Path, pairs: int) -> LevelCatalog:
    d = tmp_path / "levels"
    d.mkdir()
    (d / "level1.yaml").write_text(
        yaml.dump({"size": 6, "pairs": pairs, "time": 30, "label": "padded"}),
        encoding="utf-8",
    )
    return LevelCatalog(d)


# ---------------------------------------------------------------------------
# Tile dataclass
# ---------------------------------------------------------------------------

class TestTile:
    def test_defaults(self):
        tile = Tile(id=3, content="A")
        assert tile.is_flipped is False
        assert tile.is_matched is False

    def test_mutable(self):
        tile = Tile(id=0, content="A")
        tile.is_flipped = True
        assert tile.is_flipped is True


# ---------------------------------------------------------------------------
# SymbolCatalog
# ---------------------------------------------------------------------------

class TestSymbolCatalog:
    def test_bundled_has_eighteen(self):
        assert len(SymbolCatalog()) == 18

    def test_first_clamps(self):
        catalog = SymbolCatalog(["a", "b", "c"])
        assert catalog.first(2) == ["a", "b"]
        assert catalog.first(10) == ["a", "b", "c"]
        assert catalog.first(0) == []

    def test_needs_two_symbols(self):
        with pytest.raises(ValueError, match="at least two"):
            SymbolCatalog(["a"])

    def test_rejects_duplicates(self):
        with pytest.raises(ValueError, match="duplicates"):
            SymbolCatalog(["a", "b", "a"])

    def test_load_from_file(self, tmp_path: Path):
        path = tmp_path / "symbols.yaml"
        path.write_text(yaml.dump({"symbols": ["x", " y ", ""]}), encoding="utf-8")
        assert SymbolCatalog(path=path).first(5) == ["x", "y"]

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            SymbolCatalog(path=tmp_path / "nope.yaml")

    def test_malformed_file(self, tmp_path: Path):
        path = tmp_path / "symbols.yaml"
        path.write_text(yaml.dump({"symbols": "abc"}), encoding="utf-8")
        with pytest.raises(ValueError, match="'symbols'"):
            SymbolCatalog(path=path)


# ---------------------------------------------------------------------------
# BoardGenerator – shape and parity
# ---------------------------------------------------------------------------

class TestBoardParity:
    @pytest.mark.parametrize("level", [1, 2, 3])
    def test_tile_count(self, generator: BoardGenerator, levels: LevelCatalog, level: int):
        board = generator.generate(level)
        assert len(board) == levels.get(level).pair_count * 2

    @pytest.mark.parametrize("level", [1, 2, 3])
    def test_every_symbol_even(self, generator: BoardGenerator, level: int):
        counts = Counter(tile.content for tile in generator.generate(level))
        assert all(count >= 2 and count % 2 == 0 for count in counts.values())

    def test_bundled_levels_are_exact_pairs(self, generator: BoardGenerator):
        counts = Counter(tile.content for tile in generator.generate(3))
        assert set(counts.values()) == {2}
        assert len(counts) == 18

    def test_ids_are_positions(self, generator: BoardGenerator):
        board = generator.generate(2)
        assert [tile.id for tile in board] == list(range(len(board)))

    def test_tiles_start_hidden(self, generator: BoardGenerator):
        board = generator.generate(2)
        assert not any(tile.is_flipped or tile.is_matched for tile in board)

    def test_uses_first_symbols(self, generator: BoardGenerator):
        board = generator.generate(1)
        assert {tile.content for tile in board} == set(SymbolCatalog().first(2))


# ---------------------------------------------------------------------------
# BoardGenerator – padding when the catalog runs out
# ---------------------------------------------------------------------------

class TestPadding:
    def test_first_two_symbols_repeat(self, tmp_path: Path):
        levels = _small_catalog_levels(tmp_path, pairs=5)
        generator = BoardGenerator(levels, SymbolCatalog(["a", "b", "c"]), rng=random.Random(0))
        assert generator.contents(1) == ["a", "b", "c", "a", "b", "c", "a", "b", "a", "b"]
        counts = Counter(tile.content for tile in generator.generate(1))
        assert counts == {"a": 4, "b": 4, "c": 2}

    def test_padding_fills_exactly(self, tmp_path: Path):
        levels = _small_catalog_levels(tmp_path, pairs=18)
        generator = BoardGenerator(levels, SymbolCatalog([str(i) for i in range(16)]))
        board = generator.generate(1)
        assert len(board) == 36
        counts = Counter(tile.content for tile in board)
        assert counts["0"] == 4
        assert counts["1"] == 4
        assert all(count % 2 == 0 for count in counts.values())


# ---------------------------------------------------------------------------
# BoardGenerator – shuffling and fallback
# ---------------------------------------------------------------------------

class TestShuffle:
    def test_orderings_vary(self, levels: LevelCatalog):
        generator = BoardGenerator(levels, SymbolCatalog(), rng=random.Random(99))
        orderings = {tuple(t.content for t in generator.generate(3)) for _ in range(20)}
        assert len(orderings) > 1

    def test_seeded_is_deterministic(self, levels: LevelCatalog):
        a = BoardGenerator(levels, SymbolCatalog(), rng=random.Random(7)).generate(2)
        b = BoardGenerator(levels, SymbolCatalog(), rng=random.Random(7)).generate(2)
        assert a == b

    def test_shuffle_keeps_multiset(self, generator: BoardGenerator):
        board = generator.generate(2)
        assert sorted(t.content for t in board) == sorted(generator.contents(2))


class TestFallback:
    def test_unknown_level_matches_level_one(self, levels: LevelCatalog):
        a = BoardGenerator(levels, SymbolCatalog(), rng=random.Random(5)).generate(99)
        b = BoardGenerator(levels, SymbolCatalog(), rng=random.Random(5)).generate(1)
        assert a == b
