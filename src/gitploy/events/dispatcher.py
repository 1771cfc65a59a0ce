from __future__ import annotations

import logging
from typing import Any

from gitploy.events.observer import EventObserver
from gitploy.events.types import EVENT_TYPE_MAP

logger = logging.getLogger(__name__)


class EventDispatcher:
    """Fans deployment progress events out to observers.

    Every emitted event is also logged at DEBUG, so ``--verbose`` runs keep a
    timestamped trace even when no observer is attached.
    """

    def __init__(self, observers: list[EventObserver] | None = None) -> None:
        self._observers: list[EventObserver] = list(observers or [])

    def add_observer(self, observer: EventObserver) -> None:
        self._observers.append(observer)

    def emit(self, event_type: str, **data: Any) -> None:
        event_cls = EVENT_TYPE_MAP.get(event_type)
        if event_cls is None:
            logger.debug("Dropping unknown event type %s", event_type)
            return
        event = event_cls(**data)
        logger.debug("%s %s", event.event_type, event.model_dump(exclude={"event_type", "timestamp"}))
        for observer in self._observers:
            observer.on_event(event)
