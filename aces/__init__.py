"""
Aces Arcade Platform

Shared services for the arcade games: leveled logging, the standard game
state enum and the persisted high-score store.
"""

from aces.game_state import GameState
from aces.storage import HighScoreStore

__all__ = ['GameState', 'HighScoreStore']
