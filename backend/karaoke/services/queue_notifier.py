"""In-process change notifications for event queues.

Stands in for the push side of a realtime store: writers publish the id of
the event whose queue changed after their commit, and every subscriber of
that event is called with the id. Subscribers re-read and recompute; no
payload is carried.
"""
import logging
import threading
from collections import defaultdict
from typing import Callable

logger = logging.getLogger(__name__)

Listener = Callable[[str], None]


class QueueNotifier:
    def __init__(self):
        self._lock = threading.Lock()
        self._listeners: dict[str, list[Listener]] = defaultdict(list)

    def subscribe(self, event_id: str, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for ``event_id``; returns the unsubscribe handle."""
        with self._lock:
            self._listeners[event_id].append(listener)

        def unsubscribe() -> None:
            with self._lock:
                listeners = self._listeners.get(event_id, [])
                if listener in listeners:
                    listeners.remove(listener)
                if not listeners:
                    self._listeners.pop(event_id, None)

        return unsubscribe

    def publish(self, event_id: str) -> None:
        with self._lock:
            listeners = list(self._listeners.get(event_id, []))
        for listener in listeners:
            try:
                listener(event_id)
            except Exception:
                # A broken viewer must not fail the write that triggered it.
                logger.exception("Queue listener failed for event %s", event_id)

    def subscriber_count(self, event_id: str) -> int:
        with self._lock:
            return len(self._listeners.get(event_id, []))


notifier = QueueNotifier()
