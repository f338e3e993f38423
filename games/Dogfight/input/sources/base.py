"""InputSource interface shared by the keyboard and scripted sources."""

from abc import ABC, abstractmethod
from typing import List

from models.dogfight import ControlState
from games.Dogfight.input.input_event import InputEvent


class InputSource(ABC):
    """A device (or script) producing key presses and held controls.

    `poll_events` and `update` are required. Sources with no notion of
    held keys can leave `controls` alone.
    """

    @abstractmethod
    def poll_events(self) -> List[InputEvent]:
        """Return and clear the presses seen since the last poll."""

    @abstractmethod
    def update(self, dt: float) -> None:
        """Read the device. `dt` is seconds since the previous frame."""

    @property
    def controls(self) -> ControlState:
        return ControlState()
