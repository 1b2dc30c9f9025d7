"""Scheduler port backed by single-shot QTimers on the GUI event loop."""

from __future__ import annotations

from typing import Dict, List, Optional

from PySide6.QtCore import QObject, QTimer

from memory_match.core.scheduler import Callback


class QtScheduler(QObject):
    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._timers: Dict[str, List[QTimer]] = {}

    def call_later(self, delay_ms: int, callback: Callback, tag: str) -> None:
        timer = QTimer(self)
        timer.setSingleShot(True)

        def fire() -> None:
            self._forget(tag, timer)
            callback()

        timer.timeout.connect(fire)
        self._timers.setdefault(tag, []).append(timer)
        timer.start(max(0, int(delay_ms)))

    def cancel(self, tag: str) -> None:
        for timer in self._timers.pop(tag, []):
            timer.stop()
            timer.deleteLater()

    def _forget(self, tag: str, timer: QTimer) -> None:
        timers = self._timers.get(tag, [])
        if timer in timers:
            timers.remove(timer)
        timer.deleteLater()
