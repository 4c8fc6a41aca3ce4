"""
Publish/subscribe surface for run lifecycle events.

The engine owns no global broadcaster: each WorkflowEngine gets an EventChannel
(its own, or one injected by the caller) and emits WorkflowEvent values on it.
"""
import logging
import time
from typing import Any, Callable, Dict, List, Optional

from .models import WorkflowEvent

logger = logging.getLogger(__name__)

Observer = Callable[[WorkflowEvent], None]


class EventChannel:
    """ A single named event ("workflowEvent") with any number of observers. """

    name = "workflowEvent"

    def __init__(self):
        self._observers: List[Observer] = []

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """
        Register an observer. Returns a callable that unsubscribes it.
        """
        self._observers.append(observer)
        return lambda: self.unsubscribe(observer)

    def unsubscribe(self, observer: Observer) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def emit(self, event: WorkflowEvent) -> None:
        # snapshot so observers may unsubscribe while being notified
        for observer in list(self._observers):
            try:
                observer(event)
            except Exception:
                logger.exception("Observer %r failed handling %s event", observer, event.type)

    def __len__(self) -> int:
        return len(self._observers)


class EventLog:
    """ Observer that keeps every event it sees, with the time it arrived. """

    def __init__(self, run_id: Optional[str] = None):
        self.run_id = run_id
        self.entries: List[Dict[str, Any]] = []

    def __call__(self, event: WorkflowEvent) -> None:
        if self.run_id is not None and event.run_id != self.run_id:
            return
        self.entries.append({"timestamp": time.time(), "event": event})

    @property
    def events(self) -> List[WorkflowEvent]:
        return [entry["event"] for entry in self.entries]

    def types(self) -> List[str]:
        return [e.type for e in self.events]

    def clear(self) -> None:
        self.entries.clear()
