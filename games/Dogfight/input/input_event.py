"""
One-shot key presses.

Movement and fire are sampled every frame as a ControlState. Everything
else the player does (pause, restart, "press any key") arrives as an
InputEvent.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from models.dogfight import InputAction


class InputEvent(BaseModel):
    """A key going down.

    Attributes:
        action: Bound action, or InputAction.OTHER for unbound keys
        timestamp: Monotonic seconds at the press, never negative
        key: Device key code when the source has one

    Examples:
        >>> str(InputEvent(action=InputAction.PAUSE, timestamp=12.5))
        'InputEvent(action=pause, t=12.500)'
    """
    model_config = ConfigDict(frozen=True)

    action: InputAction
    timestamp: float = Field(ge=0)
    key: Optional[int] = None

    def __str__(self) -> str:
        return f"InputEvent(action={self.action.value}, t={self.timestamp:.3f})"
