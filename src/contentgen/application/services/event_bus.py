from collections import defaultdict
import logging
from typing import Callable, DefaultDict, List, Type


Handler = Callable[[object], None]


class EventBus:
    """Synchronous fan-out of effect and build events.

    Handlers run in ascending priority, then subscription order. A failing
    handler is logged and recorded; later handlers still run.
    """

    def __init__(self) -> None:
        self._subscribers: DefaultDict[Type[object], List[tuple[int, int, Handler]]] = defaultdict(list)
        self._next_order = 0
        self._last_publish_errors: List[Exception] = []
        self._logger = logging.getLogger(__name__)

    def subscribe(self, event_type: Type[object], handler: Handler, *, priority: int = 100) -> None:
        rows = self._subscribers[event_type]
        rows.append((int(priority), self._next_order, handler))
        self._next_order += 1
        rows.sort(key=lambda row: (row[0], row[1]))

    def unsubscribe(self, event_type: Type[object], handler: Handler) -> bool:
        rows = self._subscribers.get(event_type, [])
        kept = [row for row in rows if row[2] is not handler]
        if len(kept) == len(rows):
            return False
        self._subscribers[event_type] = kept
        return True

    def subscriber_count(self, event_type: Type[object]) -> int:
        return len(self._subscribers.get(event_type, []))

    def publish(self, event: object) -> int:
        """Deliver ``event`` to its subscribers; returns how many handlers completed."""

        self._last_publish_errors = []
        event_type = type(event)
        delivered = 0
        for priority, _, handler in list(self._subscribers.get(event_type, [])):
            try:
                handler(event)
            except Exception as exc:
                self._last_publish_errors.append(exc)
                handler_name = getattr(handler, "__qualname__", getattr(handler, "__name__", repr(handler)))
                self._logger.exception(
                    "Content event handler failed and was isolated",
                    extra={
                        "event_type": event_type.__name__,
                        "handler": handler_name,
                        "priority": priority,
                    },
                )
            else:
                delivered += 1
        return delivered

    def last_publish_errors(self) -> List[Exception]:
        return list(self._last_publish_errors)
