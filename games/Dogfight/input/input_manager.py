"""
Single point of access to player input.

The game loop asks the InputManager, never a device, for key presses and
held controls. Tests swap in a scripted source.
"""

from typing import List, Optional

from models.dogfight import ControlState
from games.Dogfight.input.input_event import InputEvent
from games.Dogfight.input.sources.base import InputSource


class InputManager:
    """Wraps at most one InputSource.

    With no source attached the manager reports no presses and nothing
    held, so the game can run headless.

    Examples:
        >>> from games.Dogfight.input.sources.keyboard import KeyboardInputSource
        >>> inputs = InputManager(KeyboardInputSource())
        >>> inputs.update(1 / 60)
        >>> pressed = [e.action for e in inputs.get_events()]
    """

    def __init__(self, source: Optional[InputSource] = None):
        self._source = source

    def set_source(self, source: InputSource) -> None:
        """Replace the attached source.

        Raises:
            TypeError: If `source` is not an InputSource
        """
        if not isinstance(source, InputSource):
            raise TypeError(f"expected an InputSource, got {type(source).__name__}")
        self._source = source

    def has_source(self) -> bool:
        return self._source is not None

    def update(self, dt: float) -> None:
        if self._source:
            self._source.update(dt)

    def get_events(self) -> List[InputEvent]:
        """Drain the presses queued since the previous call."""
        return self._source.poll_events() if self._source else []

    @property
    def controls(self) -> ControlState:
        return self._source.controls if self._source else ControlState()
