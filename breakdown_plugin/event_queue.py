"""Single-threaded queue that defers surface events to the next UI tick."""
from __future__ import annotations

import logging
from collections import deque
from typing import Any, Callable, Deque

LOGGER = logging.getLogger("ScriptBreakdown.EventQueue")

Scheduler = Callable[[Callable[[], None]], Any]


def immediate_scheduler(callback: Callable[[], None]) -> None:
    """Run the drain synchronously; used by headless tools and tests."""
    callback()


def tk_idle_scheduler(widget: Any) -> Scheduler:
    """Scheduler that drains on the widget's next idle turn."""
    return lambda callback: widget.after_idle(callback)


def qt_scheduler() -> Scheduler:
    """Scheduler that drains on the next Qt event loop iteration."""
    from PyQt6.QtCore import QTimer

    return lambda callback: QTimer.singleShot(0, callback)


class DeferredEventQueue:
    """Collects events raised during view evaluation and applies them once per tick.

    Events drain in receipt order. Enqueueing while a drain is already scheduled
    does not schedule a second one; pending events cannot be cancelled.
    """

    def __init__(self, scheduler: Scheduler) -> None:
        self._scheduler = scheduler
        self._pending: Deque[Callable[[], None]] = deque()
        self._drain_scheduled = False

    @property
    def pending(self) -> int:
        return len(self._pending)

    def post(self, event: Callable[[], None]) -> None:
        self._pending.append(event)
        if self._drain_scheduled:
            return
        self._drain_scheduled = True
        self._scheduler(self.drain)

    def drain(self) -> int:
        self._drain_scheduled = False
        applied = 0
        while self._pending:
            event = self._pending.popleft()
            try:
                event()
            except Exception:
                LOGGER.debug("Deferred event %r failed", event, exc_info=True)
            applied += 1
        return applied

