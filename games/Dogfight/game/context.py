"""
Simulation context.

Everything the simulation mutates lives on one explicit SimulationContext
object that is handed to every step function: the planes and the other
entity collections, the score and wave counters, the deferred event queue
and the random source. Nothing is module-global, so independent games (and
tests) never share state.
"""

import itertools
import random
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, TYPE_CHECKING

from models.dogfight import (
    GameOverResult,
    ParticleKind,
    ScheduledEventKind,
    ScoreData,
    SpriteAtlas,
    Team,
)
from aces.logging import get_logger
from aces.storage import HighScoreStore
from games.Dogfight import config
from games.Dogfight.config import DifficultyPreset
from games.Dogfight.game.atlases import load_team_atlases
from games.Dogfight.game.cloud import Cloud
from games.Dogfight.game.particle import Particle, burst
from games.Dogfight.game.plane import Plane
from games.Dogfight.game.scheduler import EventScheduler, ScheduledEvent

if TYPE_CHECKING:
    from games.Dogfight.game.powerup import PowerUp

log = get_logger('dogfight.context')


@dataclass(frozen=True)
class FrameContext:
    """Timing for the current frame.

    Attributes:
        now: Wall-clock time in seconds
        refresh_rate: Display refresh rate used for frame-counted timers
    """
    now: float = 0.0
    refresh_rate: float = config.FPS


@dataclass
class GameStats:
    """Score, wave and status counters for one game."""
    ally_score: int = 0
    enemy_score: int = 0
    high_score: int = 0
    wave: int = 0
    enemies_in_wave: int = 0
    enemies_defeated: int = 0
    status_message: str = ''
    result: Optional[GameOverResult] = None

    def reset(self) -> None:
        """Back to a fresh game. The high score is kept."""
        self.ally_score = 0
        self.enemy_score = 0
        self.wave = 1
        self.enemies_in_wave = config.FIRST_WAVE_ENEMIES
        self.enemies_defeated = 0
        self.status_message = config.DEFAULT_STATUS
        self.result = None

    def to_score_data(self) -> ScoreData:
        return ScoreData(
            ally_score=self.ally_score,
            enemy_score=self.enemy_score,
            high_score=self.high_score,
            wave=self.wave,
            enemies_defeated=self.enemies_defeated,
            enemies_in_wave=self.enemies_in_wave,
        )


@dataclass
class GameCallbacks:
    """Optional hooks for collaborators (HUD, audio, telemetry).

    on_score_change(ally_score, enemy_score, high_score)
    on_wave_change(wave, enemies_defeated, enemies_in_wave)
    on_game_over(reason, final_score, is_new_high_score)
    on_wave_cleared(wave)
    on_shot(team)
    on_explosion(team)
    """
    on_score_change: Optional[Callable[[int, int, int], None]] = None
    on_wave_change: Optional[Callable[[int, int, int], None]] = None
    on_game_over: Optional[Callable] = None
    on_wave_cleared: Optional[Callable[[int], None]] = None
    on_shot: Optional[Callable[[Team], None]] = None
    on_explosion: Optional[Callable[[Team], None]] = None


class SimulationContext:
    """Mutable world state for one game.

    Args:
        width: Playfield width in pixels
        height: Playfield height in pixels
        rng: Random source (seed it for reproducible games)
        atlases: Sprite atlas per team (default: the bundled YAML atlases)
        difficulty: Spawn and aggression preset
        callbacks: Collaborator hooks
        high_score_store: Where the high score is read from and written to
    """

    def __init__(
        self,
        width: int = config.SCREEN_WIDTH,
        height: int = config.SCREEN_HEIGHT,
        rng: Optional[random.Random] = None,
        atlases: Optional[Dict[Team, SpriteAtlas]] = None,
        difficulty: Optional[DifficultyPreset] = None,
        callbacks: Optional[GameCallbacks] = None,
        high_score_store: Optional[HighScoreStore] = None,
    ):
        self.width = width
        self.height = height
        self.rng = rng or random.Random()
        self.atlases = atlases or load_team_atlases()
        self.difficulty = difficulty or config.get_difficulty('normal')
        self.callbacks = callbacks or GameCallbacks()
        self.high_score_store = high_score_store

        self.frame = FrameContext()
        self.scheduler = EventScheduler()
        self.stats = GameStats()
        if high_score_store is not None:
            self.stats.high_score = high_score_store.load()

        self._ids = itertools.count(1)
        self.clouds: List[Cloud] = [Cloud(width, height, self.rng) for _ in range(config.CLOUD_COUNT)]
        self.ally: Plane = self.create_plane(Team.ALLY, *self.ally_start)
        self.enemies: List[Plane] = []
        self.particles: List[Particle] = []
        self.powerups: List['PowerUp'] = []

    # =========================================================================
    # Clock
    # =========================================================================

    @property
    def now(self) -> float:
        return self.frame.now

    @property
    def refresh_rate(self) -> float:
        return self.frame.refresh_rate

    def advance_clock(self, now: float) -> None:
        self.frame = FrameContext(now=now, refresh_rate=self.frame.refresh_rate)

    # =========================================================================
    # Entities
    # =========================================================================

    @property
    def ally_start(self):
        return (config.ALLY_START_X, self.height / 2 - 15)

    def next_entity_id(self) -> int:
        return next(self._ids)

    def create_plane(self, team: Team, x: float, y: float) -> Plane:
        speed = config.PLANE_SPEED if team == Team.ALLY else self.difficulty.enemy_speed
        return Plane(x, y, team, self.atlases[team], self.next_entity_id(), speed=speed)

    def find_plane(self, entity_id: Optional[int]) -> Optional[Plane]:
        """Return the ally or enemy with this id, if it still exists."""
        if self.ally.entity_id == entity_id:
            return self.ally
        for plane in self.enemies:
            if plane.entity_id == entity_id:
                return plane
        return None

    def emit_particles(self, kind: ParticleKind, x: float, y: float, count: int = 1) -> None:
        self.particles.extend(burst(kind, x, y, count, self.rng))

    # =========================================================================
    # Deferred events and status
    # =========================================================================

    def schedule(
        self,
        kind: ScheduledEventKind,
        delay: float,
        entity_id: Optional[int] = None,
        payload=None,
    ) -> ScheduledEvent:
        return self.scheduler.schedule(kind, self.now + delay, entity_id=entity_id, payload=payload)

    def set_status(self, message: str, duration: Optional[float] = None) -> None:
        """Show a status line, optionally reverting to the default after `duration`."""
        self.stats.status_message = message
        if duration is not None:
            self.schedule(ScheduledEventKind.CLEAR_STATUS, duration)

    # =========================================================================
    # Notifications
    # =========================================================================

    def notify_score_change(self) -> None:
        """Publish the score line, recording a new high score if one was set."""
        stats = self.stats
        if stats.ally_score > stats.high_score:
            stats.high_score = stats.ally_score
            if self.high_score_store is not None:
                self.high_score_store.save(stats.high_score)

        if self.callbacks.on_score_change:
            self.callbacks.on_score_change(stats.ally_score, stats.enemy_score, stats.high_score)
        self.notify_wave_change()

    def notify_wave_change(self) -> None:
        stats = self.stats
        if self.callbacks.on_wave_change:
            self.callbacks.on_wave_change(stats.wave, stats.enemies_defeated, stats.enemies_in_wave)

    def notify_shot(self, team: Team) -> None:
        if self.callbacks.on_shot:
            self.callbacks.on_shot(team)

    def notify_explosion(self, team: Team) -> None:
        if self.callbacks.on_explosion:
            self.callbacks.on_explosion(team)

    # =========================================================================
    # Restart
    # =========================================================================

    def reset(self) -> None:
        """Start a fresh game: new counters, empty collections, fresh ally.

        Clouds are scenery and carry over.
        """
        self.scheduler.reset()
        self.stats.reset()
        self.ally.reset(*self.ally_start)
        self.enemies.clear()
        self.particles.clear()
        self.powerups.clear()
        log.debug("World reset (generation %d)", self.scheduler.generation)
