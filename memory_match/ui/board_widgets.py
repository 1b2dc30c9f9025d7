"""Board UI: one button per tile laid out on a square grid."""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QGridLayout, QPushButton, QSizePolicy, QWidget

from memory_match.core.board import Tile
from memory_match.ui.colors import GameColors, tile_colors
from memory_match.ui.models import tile_text


class TileButton(QPushButton):
    """A clickable tile showing '?' until it is flipped."""

    def __init__(self, index: int, on_click: Callable[[int], None], parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._index = index
        self.setMinimumSize(64, 64)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.setCursor(Qt.PointingHandCursor)
        self.clicked.connect(lambda: on_click(self._index))

    def show_tile(self, tile: Tile) -> None:
        background, border = tile_colors(tile.is_flipped, tile.is_matched)
        text_color = GameColors.TEXT_PRIMARY if tile.is_flipped or tile.is_matched else "white"
        self.setText(tile_text(tile))
        self.setEnabled(not tile.is_matched)
        self.setStyleSheet(
            f"""
            QPushButton {{
                background: {background};
                color: {text_color};
                border: 2px solid {border};
                border-radius: 12px;
                font-size: 28px;
                font-weight: 700;
            }}
            """
        )


class BoardWidget(QWidget):
    """Grid of TileButtons, rebuilt when the board size changes."""

    def __init__(self, on_select: Callable[[int], None], parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._on_select = on_select
        self._buttons: List[TileButton] = []
        self._layout = QGridLayout(self)
        self._layout.setSpacing(10)
        self._layout.setContentsMargins(16, 16, 16, 16)

    def show_board(self, tiles: Sequence[Tile], grid_size: int) -> None:
        if len(tiles) != len(self._buttons):
            self._rebuild(len(tiles), max(1, grid_size))
        for button, tile in zip(self._buttons, tiles):
            button.show_tile(tile)

    def _rebuild(self, count: int, columns: int) -> None:
        for button in self._buttons:
            self._layout.removeWidget(button)
            button.setParent(None)
            button.deleteLater()
        self._buttons = []
        for index in range(count):
            button = TileButton(index, self._on_select)
            self._layout.addWidget(button, index // columns, index % columns)
            self._buttons.append(button)
