"""
Deferred event queue.

Anything that must happen "a little later" (reverting a plane's firing
animation, removing a shot-down enemy, ending the game) is queued here
instead of being captured in a timer callback. Events are plain data keyed
by (kind, entity_id); the simulation drains due events once per step and
decides what each one means.

A reset empties the queue and bumps the generation counter, so an event
created before a restart can never be applied to the new game.
"""

import heapq
import itertools
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from models.dogfight import ScheduledEventKind
from aces.logging import get_logger

log = get_logger('dogfight.scheduler')

EventKey = Tuple[ScheduledEventKind, Optional[int]]


@dataclass(order=True)
class ScheduledEvent:
    """A fire-once event.

    Ordered by due time, then by insertion order.
    """
    due: float
    seq: int
    kind: ScheduledEventKind = field(compare=False)
    entity_id: Optional[int] = field(default=None, compare=False)
    generation: int = field(default=0, compare=False)
    payload: Any = field(default=None, compare=False)
    cancelled: bool = field(default=False, compare=False)

    @property
    def key(self) -> EventKey:
        return (self.kind, self.entity_id)


class EventScheduler:
    """Priority queue of ScheduledEvents.

    Scheduling an event whose key is already pending replaces the pending
    one. At most one event per key is ever outstanding.

    Examples:
        >>> scheduler = EventScheduler()
        >>> _ = scheduler.schedule(ScheduledEventKind.REMOVE_ENEMY, due=1.8, entity_id=7)
        >>> scheduler.pop_due(1.0)
        []
        >>> [e.entity_id for e in scheduler.pop_due(2.0)]
        [7]
    """

    def __init__(self):
        self._heap: List[ScheduledEvent] = []
        self._pending: Dict[EventKey, ScheduledEvent] = {}
        self._seq = itertools.count()
        self.generation = 0

    def schedule(
        self,
        kind: ScheduledEventKind,
        due: float,
        entity_id: Optional[int] = None,
        payload: Any = None,
    ) -> ScheduledEvent:
        """Queue an event to fire once `now >= due`."""
        key = (kind, entity_id)
        previous = self._pending.get(key)
        if previous is not None:
            previous.cancelled = True

        event = ScheduledEvent(
            due=due,
            seq=next(self._seq),
            kind=kind,
            entity_id=entity_id,
            generation=self.generation,
            payload=payload,
        )
        heapq.heappush(self._heap, event)
        self._pending[key] = event
        log.trace("Scheduled %s for entity %s at %.3f", kind.value, entity_id, due)
        return event

    def cancel(self, kind: ScheduledEventKind, entity_id: Optional[int] = None) -> bool:
        """Cancel the pending event with this key, if any."""
        event = self._pending.pop((kind, entity_id), None)
        if event is None:
            return False
        event.cancelled = True
        return True

    def is_pending(self, kind: ScheduledEventKind, entity_id: Optional[int] = None) -> bool:
        return (kind, entity_id) in self._pending

    def pop_due(self, now: float) -> List[ScheduledEvent]:
        """Remove and return every event due at `now`, in due-time order."""
        due: List[ScheduledEvent] = []
        while self._heap and self._heap[0].due <= now:
            event = heapq.heappop(self._heap)
            if event.cancelled:
                continue
            if self._pending.get(event.key) is event:
                del self._pending[event.key]
            due.append(event)
        return due

    def is_current(self, event: ScheduledEvent) -> bool:
        """True if the event was scheduled in the current generation."""
        return event.generation == self.generation

    def reset(self) -> None:
        """Drop every pending event and start a new generation."""
        dropped = len(self._pending)
        self._heap.clear()
        self._pending.clear()
        self.generation += 1
        log.debug("Scheduler reset (generation %d, dropped %d events)", self.generation, dropped)

    def __len__(self) -> int:
        return len(self._pending)
