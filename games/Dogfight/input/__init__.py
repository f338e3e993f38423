"""Dogfight Input Module."""
from games.Dogfight.input.input_event import InputEvent
from games.Dogfight.input.input_manager import InputManager
from games.Dogfight.input.sources import InputSource, KeyboardInputSource

__all__ = [
    'InputEvent',
    'InputManager',
    'InputSource',
    'KeyboardInputSource',
]
