"""
Dogfight Game Mode

Arcade biplane combat: the player's plane holds the left half of the sky
while waves of enemy fighters fly in from the right.

DogfightMode is the game-loop driver. Once per display refresh the host
calls `frame(now, controls, actions)`; the mode applies discrete key
actions, advances the simulation if it is running, and returns the frame
as an ordered list of draw commands. It never draws pixels itself.

States:
    IDLE -> RUNNING -> {PAUSED <-> RUNNING} -> GAME_OVER -> (restart) -> RUNNING
"""
import math
import random
import time
from collections import deque
from typing import Dict, Iterable, List, Optional

from models.dogfight import (
    ControlState,
    DogfightInternalState,
    GameOverReason,
    GameOverResult,
    GameState,
    InputAction,
    ScoreData,
    SpriteAtlas,
    Team,
)
from aces.logging import emit_record, get_logger
from aces.storage import HighScoreStore
from games.Dogfight import config
from games.Dogfight.game.audio import SoundBoard
from games.Dogfight.game.context import GameCallbacks, SimulationContext
from games.Dogfight.game.draw_commands import DrawCommand
from games.Dogfight.game.render import (
    render_background,
    render_effect_timers,
    render_fps,
    render_game_over,
    render_pause,
    render_scoreboard,
    render_title,
    render_world,
)
from games.Dogfight.game.simulation import step, update_clouds, update_particles
from games.Dogfight.game.waves import spawn_enemy
from games.Dogfight.input.input_event import InputEvent

log = get_logger('dogfight')


class DogfightMode:
    """Dogfight game mode - shoot down enemy waves, avoid their fire.

    Features:
    - Enemy waves that grow in size and spawn faster
    - Health, rapid-fire and shield power-ups
    - Persisted high score
    - Difficulty presets (easy, normal, hard)
    """

    def __init__(
        self,
        width: int = config.SCREEN_WIDTH,
        height: int = config.SCREEN_HEIGHT,
        difficulty: str = config.DEFAULT_DIFFICULTY,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        high_score_store: Optional[HighScoreStore] = None,
        callbacks: Optional[GameCallbacks] = None,
        atlases: Optional[Dict[Team, SpriteAtlas]] = None,
        sounds: Optional[SoundBoard] = None,
        show_fps: bool = False,
        **kwargs,
    ):
        """Initialize the Dogfight game.

        Args:
            width: Playfield width in pixels
            height: Playfield height in pixels
            difficulty: Difficulty preset name (easy, normal, hard)
            seed: Seed for the game's random source (ignored if rng is given)
            rng: Random source to use
            high_score_store: High score persistence (None = not persisted)
            callbacks: Collaborator hooks (score, wave, game over)
            atlases: Sprite atlas per team (default: bundled atlases)
            sounds: Sound effects player (None = silent)
            show_fps: Start with the FPS counter visible

        Raises:
            ValueError: If the difficulty name is unknown
        """
        self._user_callbacks = callbacks or GameCallbacks()
        self._sounds = sounds
        self._ctx = SimulationContext(
            width=width,
            height=height,
            rng=rng or random.Random(seed),
            atlases=atlases,
            difficulty=config.get_difficulty(difficulty),
            callbacks=self._wire_callbacks(),
            high_score_store=high_score_store,
        )

        self._internal_state = DogfightInternalState.IDLE
        self._frame_times: deque = deque(maxlen=config.FPS_SAMPLE_COUNT)
        self._last_frame_time: Optional[float] = None
        self._high_score_at_start = self._ctx.stats.high_score
        self._games_played = 0
        self.fps = 0
        self.show_fps = show_fps

        log.info("Dogfight ready (%dx%d, difficulty=%s, high score=%d)",
                 width, height, difficulty, self._ctx.stats.high_score)

    def _wire_callbacks(self) -> GameCallbacks:
        """Fan simulation notifications out to the user's hooks and the sound board."""
        user = self._user_callbacks
        sounds = self._sounds

        def on_shot(team: Team) -> None:
            if sounds:
                sounds.play_shot(team)
            if user.on_shot:
                user.on_shot(team)

        def on_explosion(team: Team) -> None:
            if sounds:
                sounds.play_explosion(team)
            if user.on_explosion:
                user.on_explosion(team)

        def on_wave_cleared(wave: int) -> None:
            if sounds:
                sounds.play_wave_cleared(wave)
            if user.on_wave_cleared:
                user.on_wave_cleared(wave)

        return GameCallbacks(
            on_score_change=user.on_score_change,
            on_wave_change=user.on_wave_change,
            on_game_over=user.on_game_over,
            on_wave_cleared=on_wave_cleared,
            on_shot=on_shot,
            on_explosion=on_explosion,
        )

    # =========================================================================
    # Read-only state
    # =========================================================================

    @property
    def state(self) -> GameState:
        """Current game state (platform-compatible)."""
        return self._internal_state.to_game_state()

    @property
    def internal_state(self) -> DogfightInternalState:
        return self._internal_state

    @property
    def context(self) -> SimulationContext:
        return self._ctx

    @property
    def paused(self) -> bool:
        return self._internal_state == DogfightInternalState.PAUSED

    @property
    def result(self) -> Optional[GameOverResult]:
        return self._ctx.stats.result

    def get_score(self) -> int:
        """Get current ally score."""
        return self._ctx.stats.ally_score

    def get_score_data(self) -> ScoreData:
        return self._ctx.stats.to_score_data()

    # =========================================================================
    # Input
    # =========================================================================

    def handle_input(self, events: List[InputEvent]) -> None:
        """Apply discrete key presses."""
        for event in events:
            self.handle_action(event.action)

    def handle_action(self, action: InputAction) -> None:
        """Apply one key press.

        From IDLE any key starts the game and is otherwise consumed.
        """
        if action == InputAction.QUIT:
            return

        if action == InputAction.TOGGLE_FPS:
            self.show_fps = not self.show_fps
            return

        state = self._internal_state
        if state == DogfightInternalState.IDLE:
            self._start()
        elif action == InputAction.PAUSE and state == DogfightInternalState.RUNNING:
            self._internal_state = DogfightInternalState.PAUSED
            log.debug("Paused")
        elif action == InputAction.PAUSE and state == DogfightInternalState.PAUSED:
            self._internal_state = DogfightInternalState.RUNNING
            log.debug("Resumed")
        elif action == InputAction.RESTART and state == DogfightInternalState.GAME_OVER:
            self._restart()

    # =========================================================================
    # Transitions
    # =========================================================================

    def _start(self) -> None:
        """IDLE -> RUNNING: wave 1 with one enemy already in the air."""
        ctx = self._ctx
        ctx.stats.reset()
        self._high_score_at_start = ctx.stats.high_score
        self._internal_state = DogfightInternalState.RUNNING
        ctx.set_status(config.DEFAULT_STATUS)
        ctx.notify_score_change()
        spawn_enemy(ctx)
        log.info("Game started")

    def _restart(self) -> None:
        """GAME_OVER -> RUNNING with a fresh world."""
        ctx = self._ctx
        ctx.reset()
        self._high_score_at_start = ctx.stats.high_score
        self._internal_state = DogfightInternalState.RUNNING
        ctx.notify_score_change()
        log.info("Game restarted")

    def _end_game(self, reason: GameOverReason) -> None:
        """RUNNING -> GAME_OVER."""
        ctx = self._ctx
        stats = ctx.stats
        final_score = stats.ally_score
        is_new_high = final_score > self._high_score_at_start and final_score == stats.high_score
        stats.result = GameOverResult(reason=reason, final_score=final_score, is_new_high_score=is_new_high)
        stats.status_message = ''
        self._internal_state = DogfightInternalState.GAME_OVER
        self._games_played += 1

        log.info("Game over (%s): score %d, wave %d%s", reason.value, final_score, stats.wave,
                 " - new high score" if is_new_high else "")
        emit_record('session', {
            'type': 'game_over',
            'game': config.HIGH_SCORE_GAME,
            'game_number': self._games_played,
            'reason': reason.value,
            'ally_score': final_score,
            'enemy_score': stats.enemy_score,
            'wave': stats.wave,
            'high_score': stats.high_score,
            'new_high_score': is_new_high,
        })

        if self._user_callbacks.on_game_over:
            self._user_callbacks.on_game_over(reason, final_score, is_new_high)

    # =========================================================================
    # Frame
    # =========================================================================

    def _record_frame_time(self, now: float) -> None:
        if self._last_frame_time is not None:
            # Millisecond deltas, rounded to microseconds to absorb float noise
            self._frame_times.append(round((now - self._last_frame_time) * 1000.0, 3))
            mean_delta = sum(self._frame_times) / len(self._frame_times)
            if mean_delta > 0:
                self.fps = math.floor(1000.0 / mean_delta + 0.5)
        self._last_frame_time = now

    def frame(
        self,
        now: Optional[float] = None,
        controls: Optional[ControlState] = None,
        actions: Iterable[InputAction] = (),
    ) -> List[DrawCommand]:
        """Run one display frame.

        Args:
            now: Wall-clock time in seconds (default: time.monotonic())
            controls: Held-key snapshot for this frame
            actions: Discrete key presses since the last frame

        Returns:
            Ordered draw commands for the whole frame
        """
        if now is None:
            now = time.monotonic()
        controls = controls or ControlState()
        ctx = self._ctx

        for action in actions:
            self.handle_action(action)

        self._record_frame_time(now)
        ctx.advance_clock(now)

        out: List[DrawCommand] = []
        if not self.paused:
            update_clouds(ctx)
        render_background(ctx, out)

        if self._internal_state == DogfightInternalState.RUNNING:
            result = step(ctx, controls)
            if result.game_over is not None:
                self._end_game(result.game_over)

        update_particles(ctx)

        render_world(ctx, out)
        self._render_hud(out)
        return out

    def _render_hud(self, out: List[DrawCommand]) -> None:
        ctx = self._ctx
        state = self._internal_state

        if state == DogfightInternalState.IDLE:
            render_title(ctx, out)
        else:
            render_effect_timers(ctx.ally, ctx.refresh_rate, out)
            render_scoreboard(ctx, out)
            if state == DogfightInternalState.GAME_OVER:
                render_game_over(ctx, ctx.stats.result, out)

        if self.paused:
            render_pause(ctx, out)
        if self.show_fps:
            render_fps(ctx, self.fps, out)
