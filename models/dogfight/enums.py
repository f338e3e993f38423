"""
Dogfight-specific enumerations.

These enums define the closed sets of tags used by the simulation: teams,
animation states, particle and power-up kinds, and game-over causes.
"""

from enum import Enum

from aces.game_state import GameState


class Team(str, Enum):
    """The two opposing sides.

    Team-specific geometry (size, muzzle offset, sprite adjustments) is
    resolved through the profile table in games.Dogfight.game.teams, never
    through inline comparisons.
    """
    ALLY = "ally"
    ENEMY = "enemy"


class PlaneAnimation(str, Enum):
    """Animation states of a plane.

    Each state plays the atlas clip named by `clip_name`.

    Attributes:
        FLYING: Default looping flight animation
        SHOOTING: Short looping firing animation, reverted after a delay
        EXPLODING: Non-looping explosion; completion returns to FLYING
    """
    FLYING = "flying"
    SHOOTING = "shooting"
    EXPLODING = "exploding"

    @property
    def clip_name(self) -> str:
        """Name of the atlas animation for this state."""
        return _CLIP_NAMES[self]


_CLIP_NAMES = {
    PlaneAnimation.FLYING: "fly",
    PlaneAnimation.SHOOTING: "shoot",
    PlaneAnimation.EXPLODING: "explode",
}


class ParticleKind(str, Enum):
    """Visual kinds of particles."""
    EXPLOSION = "explosion"
    SMOKE = "smoke"
    MUZZLE = "muzzle"


class PowerUpKind(str, Enum):
    """Collectible buffs.

    Attributes:
        HEALTH: Restores health (capped at max)
        RAPID_FIRE: Halves the firing cooldown for a while
        SHIELD: Blocks all damage for a while
    """
    HEALTH = "health"
    RAPID_FIRE = "rapid_fire"
    SHIELD = "shield"


class GameOverReason(str, Enum):
    """Why a game ended."""
    SHOT_DOWN = "shot_down"
    COLLISION = "collision"


class ScheduledEventKind(str, Enum):
    """Deferred effects drained by the event scheduler."""
    REVERT_TO_FLYING = "revert_to_flying"
    REMOVE_ENEMY = "remove_enemy"
    GAME_OVER = "game_over"
    CLEAR_STATUS = "clear_status"


class InputAction(str, Enum):
    """Discrete keyboard actions understood by the game."""
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    FIRE = "fire"
    PAUSE = "pause"
    TOGGLE_FPS = "toggle_fps"
    RESTART = "restart"
    QUIT = "quit"
    OTHER = "other"  # Any unmapped key


class DogfightInternalState(str, Enum):
    """Internal states of the game loop driver.

    These map to the common GameState for platform compatibility:
    - IDLE -> GameState.PLAYING (title screen shown within the game)
    - RUNNING -> GameState.PLAYING
    - PAUSED -> GameState.PAUSED
    - GAME_OVER -> GameState.GAME_OVER
    """
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"

    def to_game_state(self) -> GameState:
        """Convert internal state to common GameState."""
        mapping = {
            DogfightInternalState.IDLE: GameState.PLAYING,
            DogfightInternalState.RUNNING: GameState.PLAYING,
            DogfightInternalState.PAUSED: GameState.PAUSED,
            DogfightInternalState.GAME_OVER: GameState.GAME_OVER,
        }
        return mapping[self]
