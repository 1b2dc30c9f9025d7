from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, List, Optional, Tuple

from memory_match.core.board import BoardGenerator, Tile
from memory_match.core.levels import LevelCatalog, LevelConfig
from memory_match.core.progress import ProgressStore
from memory_match.core.scheduler import Scheduler

logger = logging.getLogger(__name__)

COUNTDOWN_TAG = "countdown"
RESOLVE_TAG = "resolve"

LOW_TIME_SECONDS = 10


class Phase(Enum):
    MENU = "menu"
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


@dataclass(frozen=True)
class GameTimings:
    """Delays in milliseconds. Mismatches stay visible longer than matches."""

    match_delay_ms: int = 800
    mismatch_delay_ms: int = 1200
    tick_ms: int = 1000


class MemoryGame:
    """Authoritative game state: board, selection, countdown and progression.

    All mutation goes through this object. Two tiles selected schedule one
    resolution; ``is_resolving`` blocks further selections until it fires.
    Listeners are called with no arguments after every state change and are
    expected to read whatever they need from the public properties.
    """

    def __init__(
        self,
        levels: LevelCatalog,
        generator: BoardGenerator,
        progress: ProgressStore,
        scheduler: Scheduler,
        timings: Optional[GameTimings] = None,
    ) -> None:
        self._levels = levels
        self._generator = generator
        self._progress = progress
        self._scheduler = scheduler
        self._timings = timings if timings is not None else GameTimings()
        self._listeners: List[Callable[[], None]] = []

        saved = progress.load()
        self._current_level = saved.level
        self._best_attempts: Optional[int] = saved.record
        self._board: List[Tile] = []
        self._selected: List[int] = []
        self._is_resolving = False
        self._attempts = 0
        self._remaining_seconds = levels.get(saved.level).time_limit_seconds
        self._phase = Phase.MENU

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def current_level(self) -> int:
        return self._current_level

    @property
    def level_config(self) -> LevelConfig:
        return self._levels.get(self._current_level)

    @property
    def best_attempts(self) -> Optional[int]:
        """Fewest attempts on a won level, or None when nothing is recorded."""
        return self._best_attempts

    @property
    def board(self) -> Tuple[Tile, ...]:
        """Copies of the tiles in board order."""
        return tuple(replace(tile) for tile in self._board)

    @property
    def selected_indices(self) -> Tuple[int, ...]:
        return tuple(self._selected)

    @property
    def is_resolving(self) -> bool:
        return self._is_resolving

    @property
    def attempts(self) -> int:
        return self._attempts

    @property
    def remaining_seconds(self) -> int:
        return self._remaining_seconds

    @property
    def is_low_time(self) -> bool:
        return self._remaining_seconds <= LOW_TIME_SECONDS

    @property
    def has_next_level(self) -> bool:
        return self._levels.has(self._current_level + 1)

    def add_listener(self, listener: Callable[[], None]) -> None:
        self._listeners.append(listener)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def start_game(self, level: Optional[int] = None) -> None:
        """Deal a fresh board for *level* (default: the current level) and start the clock."""
        if level is None:
            level = self._current_level
        config = self._levels.get(level)
        self._scheduler.cancel(COUNTDOWN_TAG)
        self._board = self._generator.generate(level)
        self._attempts = 0
        self._remaining_seconds = config.time_limit_seconds
        self._selected = []
        self._is_resolving = False
        self._set_progress(level, self._best_attempts)
        self._phase = Phase.PLAYING
        logger.info("Starting level %d (%s), %d tiles, %ds", level, config.label, len(self._board), config.time_limit_seconds)
        self._schedule_tick()
        self._notify()

    def retry(self) -> None:
        self.start_game(self._current_level)

    def select_tile(self, index: int) -> bool:
        """Flip the tile at *index*. Returns False when the selection is ignored."""
        if self._phase is not Phase.PLAYING or self._is_resolving or len(self._selected) >= 2:
            return False
        if not 0 <= index < len(self._board):
            return False
        tile = self._board[index]
        if tile.is_flipped or tile.is_matched:
            return False

        tile.is_flipped = True
        self._selected.append(index)
        if len(self._selected) == 2:
            self._begin_resolution()
        self._notify()
        return True

    def next_level(self) -> None:
        if self.has_next_level:
            self.start_game(self._current_level + 1)
        else:
            logger.info("Level %d was the last one; challenge complete", self._current_level)
            self._leave_play(Phase.MENU)

    def return_to_menu(self) -> None:
        self._leave_play(Phase.MENU)

    def reset_progress(self) -> None:
        """Forget the level and record, then start over from level 1."""
        self._progress.clear()
        self._set_progress(1, None)
        self.start_game(1)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _begin_resolution(self) -> None:
        self._is_resolving = True
        board = self._board
        first, second = (board[i] for i in self._selected)
        matched = first.content == second.content
        delay = self._timings.match_delay_ms if matched else self._timings.mismatch_delay_ms
        self._scheduler.call_later(
            delay,
            lambda: self._settle(board, first, second, matched),
            RESOLVE_TAG,
        )

    def _settle(self, board: List[Tile], first: Tile, second: Tile, matched: bool) -> None:
        if matched:
            first.is_matched = second.is_matched = True
        else:
            first.is_flipped = second.is_flipped = False
        if board is not self._board:
            # a new board was dealt during the delay; its counters are not ours
            logger.debug("Resolution fired after the board was replaced")
            return

        self._selected = []
        self._is_resolving = False
        self._attempts += 1
        self._check_win()
        self._notify()

    def _check_win(self) -> None:
        if self._phase is not Phase.PLAYING or not self._board:
            return
        if not all(tile.is_matched for tile in self._board):
            return
        self._scheduler.cancel(COUNTDOWN_TAG)
        self._phase = Phase.WON
        logger.info("Level %d won in %d attempts", self._current_level, self._attempts)
        if self._best_attempts is None or self._attempts < self._best_attempts:
            logger.info("New record: %d attempts (was %s)", self._attempts, self._best_attempts)
            self._set_progress(self._current_level, self._attempts)

    def _schedule_tick(self) -> None:
        self._scheduler.call_later(self._timings.tick_ms, self._tick, COUNTDOWN_TAG)

    def _tick(self) -> None:
        if self._phase is not Phase.PLAYING:
            return
        self._remaining_seconds = max(0, self._remaining_seconds - 1)
        if self._remaining_seconds == 0:
            self._phase = Phase.LOST
            logger.info("Time is up on level %d after %d attempts", self._current_level, self._attempts)
        else:
            self._schedule_tick()
        self._notify()

    def _leave_play(self, phase: Phase) -> None:
        self._scheduler.cancel(COUNTDOWN_TAG)
        self._phase = phase
        self._notify()

    def _set_progress(self, level: int, best_attempts: Optional[int]) -> None:
        if level == self._current_level and best_attempts == self._best_attempts:
            return
        self._current_level = level
        self._best_attempts = best_attempts
        self._progress.save(level, best_attempts)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()
