"""
Dogfight-specific data models.

Immutable snapshots handed across the boundary between the simulation
core and its collaborators: the sampled control state, the score line and
the game-over result.
"""

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .enums import GameOverReason


class ControlState(BaseModel):
    """Held/not-held level map of the continuous controls.

    Sampled once per frame so a step always sees a consistent input
    snapshot.

    Examples:
        >>> ControlState(up=True, fire=True).fire
        True
    """
    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False
    fire: bool = False

    model_config = ConfigDict(frozen=True)


class ScoreData(BaseModel):
    """Immutable score line.

    Attributes:
        ally_score: Points earned by the player (10 per kill)
        enemy_score: Enemies that escaped past the left edge
        high_score: Best ally score on record
        wave: Current wave number (0 before the game starts)
        enemies_defeated: Kills counted toward the current wave
        enemies_in_wave: Kills required to clear the current wave
    """
    ally_score: int = Field(default=0, ge=0)
    enemy_score: int = Field(default=0, ge=0)
    high_score: int = Field(default=0, ge=0)
    wave: int = Field(default=0, ge=0)
    enemies_defeated: int = Field(default=0, ge=0)
    enemies_in_wave: int = Field(default=0, ge=0)

    model_config = ConfigDict(frozen=True)

    @computed_field
    @property
    def wave_label(self) -> str:
        """HUD text for wave progress."""
        return f"Wave {self.wave} | Enemies: {self.enemies_defeated}/{self.enemies_in_wave}"


class GameOverResult(BaseModel):
    """Outcome reported when a game ends.

    Attributes:
        reason: What ended the game
        final_score: Ally score at the moment of game over
        is_new_high_score: True if this score set the record
    """
    reason: GameOverReason
    final_score: int = Field(ge=0)
    is_new_high_score: bool = False

    model_config = ConfigDict(frozen=True)

    @computed_field
    @property
    def headline(self) -> str:
        """Short message describing the cause."""
        if self.reason == GameOverReason.SHOT_DOWN:
            return "You were shot down!"
        return "Collision!"
