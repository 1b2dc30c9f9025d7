"""Application entry point and setup for Memory Match."""

import logging
import sys

from PySide6.QtGui import QFont, QGuiApplication
from PySide6.QtWidgets import QApplication

from memory_match.core.board import BoardGenerator, SymbolCatalog
from memory_match.core.game import MemoryGame
from memory_match.core.levels import LevelCatalog
from memory_match.core.progress import ProgressStore
from memory_match.ui.main_window import MainWindow
from memory_match.ui.qt_scheduler import QtScheduler


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def apply_emoji_font(app: QApplication) -> None:
    """Prefer color emoji fonts so tile faces render on every platform."""
    app_font = QFont(app.font())
    app_font.setFamilies(
        [
            app_font.family(),
            "Noto Color Emoji",  # Linux (common)
            "Noto Emoji",
            "Segoe UI Emoji",  # Windows
            "Apple Color Emoji",  # macOS
        ]
    )
    app.setFont(app_font)


def build_game(scheduler: QtScheduler) -> MemoryGame:
    levels = LevelCatalog()
    generator = BoardGenerator(levels, SymbolCatalog())
    progress = ProgressStore()
    game = MemoryGame(levels, generator, progress, scheduler)
    logging.info("Loaded %d levels; resuming at level %d", len(levels.all()), game.current_level)
    return game


def run() -> None:
    """Initialize the application, wire the game, and start the main window."""
    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("Memory Match")
    app.setApplicationDisplayName("Memory Match")
    apply_emoji_font(app)

    scheduler = QtScheduler(app)
    game = build_game(scheduler)

    window = MainWindow(game)
    screen = QGuiApplication.primaryScreen()
    if screen is not None:
        geometry = screen.availableGeometry()
        window.resize(min(760, geometry.width()), min(860, geometry.height()))
    window.show()

    sys.exit(app.exec())
