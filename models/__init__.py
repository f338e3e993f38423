"""
Unified models library for the Dogfight project.

This package provides the Pydantic data models used across the system:
- Primitives: Basic geometric and color types (Point2D, Color, Rectangle)
- Dogfight: Game-specific enums, sprite atlas configuration and snapshots

Usage:
    >>> from models import Point2D, Rectangle
    >>> from models.dogfight import Team, SpriteAtlas
    >>> from models.primitives import Color
"""

# ============================================================================
# Primitives (basic types used everywhere)
# ============================================================================
from .primitives import (
    Point2D,
    Color,
    Rectangle,
)

# ============================================================================
# Dogfight models
# ============================================================================
from .dogfight import (
    Team,
    PlaneAnimation,
    ParticleKind,
    PowerUpKind,
    GameOverReason,
    GameState,
    DogfightInternalState,
    AnimationClip,
    SpriteAtlas,
    ControlState,
    ScoreData,
    GameOverResult,
)

__all__ = [
    # Primitives
    "Point2D",
    "Color",
    "Rectangle",
    # Dogfight
    "Team",
    "PlaneAnimation",
    "ParticleKind",
    "PowerUpKind",
    "GameOverReason",
    "GameState",
    "DogfightInternalState",
    "AnimationClip",
    "SpriteAtlas",
    "ControlState",
    "ScoreData",
    "GameOverResult",
]
