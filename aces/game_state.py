"""Outward-facing game state shared by every Aces game mode."""
from enum import Enum


class GameState(Enum):
    """What a driver needs to know about a running mode.

    Modes keep their own finer-grained state machine and expose it through
    a `state` property that collapses to one of these. A title screen
    counts as PLAYING.
    """
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"
