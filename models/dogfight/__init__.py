"""
Dogfight-specific models package.

This package contains the data models specific to the Dogfight game:
enums, sprite atlas configuration and the snapshots exchanged with
collaborators.
"""

from .enums import (
    Team,
    PlaneAnimation,
    ParticleKind,
    PowerUpKind,
    GameOverReason,
    ScheduledEventKind,
    InputAction,
    DogfightInternalState,
    GameState,  # Re-exported from aces.game_state
)

from .atlas import (
    AnimationClip,
    SpriteAtlas,
)

from .models import (
    ControlState,
    ScoreData,
    GameOverResult,
)

__all__ = [
    # Enums
    "Team",
    "PlaneAnimation",
    "ParticleKind",
    "PowerUpKind",
    "GameOverReason",
    "ScheduledEventKind",
    "InputAction",
    "DogfightInternalState",
    "GameState",
    # Atlas configuration
    "AnimationClip",
    "SpriteAtlas",
    # Snapshots
    "ControlState",
    "ScoreData",
    "GameOverResult",
]
