"""
Keyboard input source for the Dogfight game.

Converts pygame KEYDOWN/KEYUP events into a held-key ControlState and a
queue of InputEvents, one per key press.
"""

import time
from typing import Callable, Dict, List, Optional, Set

import pygame

from models.dogfight import ControlState, InputAction
from games.Dogfight.input.input_event import InputEvent
from games.Dogfight.input.sources.base import InputSource

DEFAULT_BINDINGS: Dict[int, InputAction] = {
    pygame.K_w: InputAction.MOVE_UP,
    pygame.K_UP: InputAction.MOVE_UP,
    pygame.K_s: InputAction.MOVE_DOWN,
    pygame.K_DOWN: InputAction.MOVE_DOWN,
    pygame.K_a: InputAction.MOVE_LEFT,
    pygame.K_LEFT: InputAction.MOVE_LEFT,
    pygame.K_d: InputAction.MOVE_RIGHT,
    pygame.K_RIGHT: InputAction.MOVE_RIGHT,
    pygame.K_SPACE: InputAction.FIRE,
    pygame.K_p: InputAction.PAUSE,
    pygame.K_f: InputAction.TOGGLE_FPS,
    pygame.K_r: InputAction.RESTART,
    pygame.K_ESCAPE: InputAction.QUIT,
}

# Actions that are sampled as held levels rather than only as presses
HELD_ACTIONS = {
    InputAction.MOVE_UP: 'up',
    InputAction.MOVE_DOWN: 'down',
    InputAction.MOVE_LEFT: 'left',
    InputAction.MOVE_RIGHT: 'right',
    InputAction.FIRE: 'fire',
}


class KeyboardInputSource(InputSource):
    """Keyboard input using pygame events.

    Args:
        bindings: Key code to action map (default: WASD/arrows, space, P, F, R, Esc)
        clock: Timestamp source for events

    Examples:
        >>> source = KeyboardInputSource()
        >>> source.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_w))
        True
        >>> source.controls.up
        True
    """

    def __init__(
        self,
        bindings: Optional[Dict[int, InputAction]] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._bindings = dict(DEFAULT_BINDINGS if bindings is None else bindings)
        self._clock = clock
        self._event_queue: List[InputEvent] = []
        self._held_keys: Set[int] = set()

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Consume one pygame event.

        Returns:
            True if the event was a keyboard or focus event this source used
        """
        if event.type == pygame.KEYDOWN:
            action = self._bindings.get(event.key, InputAction.OTHER)
            self._held_keys.add(event.key)
            self._event_queue.append(InputEvent(action=action, timestamp=self._clock(), key=event.key))
            return True

        if event.type == pygame.KEYUP:
            self._held_keys.discard(event.key)
            return True

        if event.type == pygame.WINDOWFOCUSLOST:
            # Key-up events are not delivered while unfocused
            self._held_keys.clear()
            return True

        return False

    def update(self, dt: float) -> None:
        """Process pending pygame events.

        Non-keyboard events are re-posted so the game loop still sees
        them (QUIT in particular).
        """
        for event in pygame.event.get():
            if not self.handle_event(event):
                pygame.event.post(event)

    def poll_events(self) -> List[InputEvent]:
        events = self._event_queue.copy()
        self._event_queue.clear()
        return events

    @property
    def controls(self) -> ControlState:
        held: Dict[str, bool] = {}
        for key in self._held_keys:
            field_name = HELD_ACTIONS.get(self._bindings.get(key))
            if field_name:
                held[field_name] = True
        return ControlState(**held)

    def clear(self) -> None:
        """Forget queued presses and held keys."""
        self._event_queue.clear()
        self._held_keys.clear()
