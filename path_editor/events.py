from __future__ import annotations

from enum import Enum
import logging
from typing import Any, Callable

from PyQt5 import QtCore

logger = logging.getLogger(__name__)

Listener = Callable[[Any, bool], None]


class PathEvent(Enum):
    RESET_MODE = "reset_mode"
    CHECKPOINT_MENU = "checkpoint_menu"


class PathEventEmitter(QtCore.QObject):
    """Synchronous event hub for path notifications.

    Listeners registered with :meth:`on` only see their own event and are
    called with ``(payload, error)``, in registration order. A listener that
    raises stops the emission and the exception reaches the caller of
    :meth:`emit_event`. Once every listener has run, ``eventRaised`` carries
    ``(event, payload, error)`` to connected Qt slots.
    """

    eventRaised = QtCore.pyqtSignal(object, object, bool)

    def __init__(self, parent: QtCore.QObject | None = None) -> None:
        super().__init__(parent)
        self._listeners: dict[PathEvent, list[Listener]] = {event: [] for event in PathEvent}

    def on(self, event: PathEvent, listener: Listener) -> None:
        self._listeners[event].append(listener)

    def remove_listener(self, event: PathEvent, listener: Listener) -> None:
        listeners = self._listeners[event]
        if listener in listeners:
            listeners.remove(listener)

    def listener_count(self, event: PathEvent) -> int:
        return len(self._listeners[event])

    def emit_event(self, event: PathEvent, payload: Any = None, error: bool = False) -> None:
        logger.debug("Path event %s (error=%s)", event.value, error)
        for listener in list(self._listeners[event]):
            listener(payload, error)
        self.eventRaised.emit(event, payload, error)
