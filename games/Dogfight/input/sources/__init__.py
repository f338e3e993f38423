"""Input source implementations."""

from games.Dogfight.input.sources.base import InputSource
from games.Dogfight.input.sources.keyboard import KeyboardInputSource

__all__ = [
    'InputSource',
    'KeyboardInputSource',
]
