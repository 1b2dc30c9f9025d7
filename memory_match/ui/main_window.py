from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from memory_match.core.game import MemoryGame, Phase
from memory_match.ui.board_widgets import BoardWidget
from memory_match.ui.colors import GameColors
from memory_match.ui.models import record_text, status_view


def _title_label(text: str = "", size: int = 26) -> QLabel:
    label = QLabel(text)
    label.setAlignment(Qt.AlignCenter)
    label.setWordWrap(True)
    label.setStyleSheet(f"color: {GameColors.PRIMARY_DARK}; font-size: {size}px; font-weight: 800;")
    return label


def _text_label(text: str = "", size: int = 15) -> QLabel:
    label = QLabel(text)
    label.setAlignment(Qt.AlignCenter)
    label.setWordWrap(True)
    label.setStyleSheet(f"color: {GameColors.TEXT_SECONDARY}; font-size: {size}px;")
    return label


def _action_button(text: str) -> QPushButton:
    button = QPushButton(text)
    button.setCursor(Qt.PointingHandCursor)
    button.setMinimumHeight(40)
    button.setStyleSheet(
        f"""
        QPushButton {{
            background: {GameColors.PRIMARY};
            color: white;
            border: none;
            border-radius: 10px;
            padding: 8px 20px;
            font-size: 15px;
            font-weight: 700;
        }}
        QPushButton:hover {{
            background: {GameColors.PRIMARY_LIGHT};
        }}
        """
    )
    return button


class MainWindow(QMainWindow):
    """Menu, board and result screens over a single MemoryGame.

    The window owns no game state; every screen is redrawn from the game
    after each change it reports.
    """

    def __init__(self, game: MemoryGame) -> None:
        super().__init__()
        self._game = game
        self._stack = QStackedWidget()

        self._menu_level_label: Optional[QLabel] = None
        self._menu_record_label: Optional[QLabel] = None
        self._continue_button: Optional[QPushButton] = None

        self._status_title: Optional[QLabel] = None
        self._status_attempts: Optional[QLabel] = None
        self._status_record: Optional[QLabel] = None
        self._status_time: Optional[QLabel] = None
        self._board_widget: Optional[BoardWidget] = None

        self._won_title: Optional[QLabel] = None
        self._won_summary: Optional[QLabel] = None
        self._next_button: Optional[QPushButton] = None
        self._complete_label: Optional[QLabel] = None

        self._lost_retry_button: Optional[QPushButton] = None

        self._build_ui()
        self._game.add_listener(self._render)
        self._render()

    def _build_ui(self) -> None:
        self.setWindowTitle("Memory Match")
        self.setMinimumSize(520, 620)
        self._menu_screen = self._build_menu_screen()
        self._game_screen = self._build_game_screen()
        self._won_screen = self._build_won_screen()
        self._lost_screen = self._build_lost_screen()
        for screen in (self._menu_screen, self._game_screen, self._won_screen, self._lost_screen):
            self._stack.addWidget(screen)

        central = QWidget()
        central.setObjectName("central")
        central.setStyleSheet(
            f"""
            QWidget#central {{
                background: qlineargradient(x1:0, y1:0, x2:0, y2:1,
                    stop:0 {GameColors.BG_TOP}, stop:1 {GameColors.BG_BOTTOM});
            }}
            """
        )
        layout = QVBoxLayout(central)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.addWidget(self._stack)
        self.setCentralWidget(central)

    def _build_menu_screen(self) -> QWidget:
        screen = QWidget()
        layout = QVBoxLayout(screen)
        layout.setSpacing(14)
        layout.addStretch(1)
        layout.addWidget(_title_label("Memory Match", size=32))
        self._menu_level_label = _text_label()
        self._menu_record_label = _text_label()
        layout.addWidget(self._menu_level_label)
        layout.addWidget(self._menu_record_label)

        self._continue_button = _action_button("")
        self._continue_button.clicked.connect(lambda: self._game.start_game())
        restart_button = _action_button("Restart level 1")
        restart_button.clicked.connect(lambda: self._game.start_game(1))
        reset_button = _action_button("Reset progress (record and level)")
        reset_button.clicked.connect(self._game.reset_progress)
        for button in (self._continue_button, restart_button, reset_button):
            layout.addWidget(button, 0, Qt.AlignHCenter)
        layout.addStretch(1)
        return screen

    def _build_game_screen(self) -> QWidget:
        screen = QWidget()
        layout = QVBoxLayout(screen)
        layout.setSpacing(8)

        self._status_title = _title_label(size=22)
        layout.addWidget(self._status_title)
        stats_row = QHBoxLayout()
        self._status_attempts = _text_label()
        self._status_record = _text_label()
        self._status_time = _text_label()
        for label in (self._status_attempts, self._status_record, self._status_time):
            stats_row.addWidget(label)
        layout.addLayout(stats_row)

        self._board_widget = BoardWidget(on_select=self._game.select_tile)
        layout.addWidget(self._board_widget, 1)
        return screen

    def _build_won_screen(self) -> QWidget:
        screen = QWidget()
        layout = QVBoxLayout(screen)
        layout.setSpacing(14)
        layout.addStretch(1)
        self._won_title = _title_label()
        self._won_summary = _text_label()
        layout.addWidget(self._won_title)
        layout.addWidget(self._won_summary)

        self._next_button = _action_button("")
        self._next_button.clicked.connect(self._game.next_level)
        self._complete_label = _text_label("You completed every level of the challenge!")
        menu_button = _action_button("Back to menu")
        menu_button.clicked.connect(self._game.return_to_menu)
        layout.addWidget(self._next_button, 0, Qt.AlignHCenter)
        layout.addWidget(self._complete_label)
        layout.addWidget(menu_button, 0, Qt.AlignHCenter)
        layout.addStretch(1)
        return screen

    def _build_lost_screen(self) -> QWidget:
        screen = QWidget()
        layout = QVBoxLayout(screen)
        layout.setSpacing(14)
        layout.addStretch(1)
        layout.addWidget(_title_label("⏰ Game over!"))
        layout.addWidget(_text_label("Time ran out. Try again!"))
        self._lost_retry_button = _action_button("")
        self._lost_retry_button.clicked.connect(self._game.retry)
        menu_button = _action_button("Back to menu")
        menu_button.clicked.connect(self._game.return_to_menu)
        layout.addWidget(self._lost_retry_button, 0, Qt.AlignHCenter)
        layout.addWidget(menu_button, 0, Qt.AlignHCenter)
        layout.addStretch(1)
        return screen

    def _render(self) -> None:
        phase = self._game.phase
        if phase is Phase.MENU:
            self._render_menu()
            self._stack.setCurrentWidget(self._menu_screen)
        elif phase is Phase.PLAYING:
            self._render_game()
            self._stack.setCurrentWidget(self._game_screen)
        elif phase is Phase.WON:
            self._render_won()
            self._stack.setCurrentWidget(self._won_screen)
        else:
            self._lost_retry_button.setText(f"Try again (level {self._game.current_level})")
            self._stack.setCurrentWidget(self._lost_screen)

    def _render_menu(self) -> None:
        game = self._game
        self._menu_level_label.setText(f"Current progress: level {game.current_level} ({game.level_config.label})")
        self._menu_record_label.setText(
            f"Attempt record (best result): {record_text(game.best_attempts, missing='Not recorded yet')}"
        )
        self._continue_button.setText(f"Continue at level {game.current_level}")

    def _render_game(self) -> None:
        view = status_view(self._game)
        self._status_title.setText(view.title)
        self._status_attempts.setText(view.attempts)
        self._status_record.setText(view.record)
        self._status_time.setText(view.time_left)
        color = GameColors.TEXT_LOW_TIME if view.low_time else GameColors.TEXT_SECONDARY
        self._status_time.setStyleSheet(f"color: {color}; font-size: 15px; font-weight: 700;")
        self._board_widget.show_board(self._game.board, self._game.level_config.grid_size)

    def _render_won(self) -> None:
        game = self._game
        self._won_title.setText(f"🏆 Congratulations! You beat level {game.current_level}! 🥳")
        self._won_summary.setText(f"You finished the level in {game.attempts} attempts.")
        has_next = game.has_next_level
        self._next_button.setVisible(has_next)
        self._next_button.setText(f"Advance to level {game.current_level + 1}")
        self._complete_label.setVisible(not has_next)

    def closeEvent(self, event: QCloseEvent) -> None:
        """Leave play so no timers fire against a closed window."""
        if self._game.phase is Phase.PLAYING:
            self._game.return_to_menu()
        super().closeEvent(event)
