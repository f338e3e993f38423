"""
Tests for the DogfightMode driver: state machine, frame loop and scoring.
"""

import pytest

from aces.logging import LogSink, register_sink, close_all_sinks
from aces.storage import MemoryHighScoreStore
from models.dogfight import (
    ControlState,
    DogfightInternalState,
    GameOverReason,
    GameState,
    InputAction,
    ParticleKind,
    ScheduledEventKind,
)
from games.Dogfight import config
from games.Dogfight.game.bullet import Bullet
from games.Dogfight.game.context import GameCallbacks
from games.Dogfight.game.draw_commands import Overlay, Text
from games.Dogfight.game_mode import DogfightMode


class RecordingSink(LogSink):
    def __init__(self):
        self.records = []

    def emit(self, module, record):
        self.records.append((module, record))

    def flush(self):
        pass

    def close(self):
        pass


def _texts(commands):
    return [c.text for c in commands if isinstance(c, Text)]


def _start(mode, now=0.0):
    return mode.frame(now, actions=[InputAction.OTHER])


def _crash_into_ally(mode):
    """Put the only enemy on top of the ally so the next frame collides."""
    ctx = mode.context
    enemy = ctx.enemies[0]
    enemy.x, enemy.y = ctx.ally.x, ctx.ally.y
    return enemy


class TestStateMachine:
    """Test IDLE/RUNNING/PAUSED/GAME_OVER transitions."""

    def test_starts_idle(self, mode):
        """Test the mode waits on the title screen."""
        assert mode.internal_state == DogfightInternalState.IDLE
        assert mode.state == GameState.PLAYING
        assert config.TITLE_TEXT in _texts(mode.frame(0.0))

    def test_idle_frames_do_not_simulate(self, mode):
        """Test nothing spawns before the first key."""
        for i in range(5):
            mode.frame(i * 0.016)
        assert mode.context.enemies == []

    def test_any_key_starts(self, mode):
        """Test any key leaves the title with one enemy in the air."""
        commands = _start(mode)

        assert mode.internal_state == DogfightInternalState.RUNNING
        assert len(mode.context.enemies) == 1
        assert config.TITLE_TEXT not in _texts(commands)
        assert config.DEFAULT_STATUS in _texts(commands)

    def test_starting_key_is_consumed(self, mode):
        """Test the key that starts the game has no other effect."""
        mode.handle_action(InputAction.PAUSE)
        assert mode.internal_state == DogfightInternalState.RUNNING

    def test_pause_toggles(self, mode):
        """Test P pauses and resumes."""
        _start(mode)
        mode.handle_action(InputAction.PAUSE)
        assert mode.paused
        assert mode.state == GameState.PAUSED
        mode.handle_action(InputAction.PAUSE)
        assert mode.internal_state == DogfightInternalState.RUNNING

    def test_restart_only_after_game_over(self, mode):
        """Test R does nothing while playing."""
        _start(mode)
        mode.context.stats.ally_score = 20
        mode.handle_action(InputAction.RESTART)
        assert mode.get_score() == 20

    def test_toggle_fps_in_any_state(self, mode):
        """Test F works on the title screen too."""
        mode.handle_action(InputAction.TOGGLE_FPS)
        assert mode.show_fps
        assert mode.internal_state == DogfightInternalState.IDLE

    def test_unknown_difficulty(self, store):
        """Test an unknown preset is rejected up front."""
        with pytest.raises(ValueError):
            DogfightMode(difficulty='impossible', high_score_store=store)


class TestFrame:
    """Test the per-frame driver."""

    def test_controls_move_ally(self, mode):
        """Test held keys move the ally while running."""
        _start(mode)
        x = mode.context.ally.x
        mode.frame(0.016, controls=ControlState(right=True))
        assert mode.context.ally.x == x + mode.context.ally.speed

    def test_pause_freezes_world_but_not_particles(self, mode):
        """Test a paused frame leaves planes alone while effects finish."""
        _start(mode)
        mode.frame(0.016, actions=[InputAction.PAUSE])
        ctx = mode.context
        enemy_x = ctx.enemies[0].x
        ctx.emit_particles(ParticleKind.EXPLOSION, 500, 300, 3)
        lives = [p.life for p in ctx.particles]

        commands = mode.frame(0.032, controls=ControlState(up=True, fire=True))

        assert ctx.enemies[0].x == enemy_x
        assert ctx.ally.bullets == []
        assert all(p.life < life for p, life in zip(ctx.particles, lives))
        assert "PAUSED" in _texts(commands)

    def test_fps_from_rolling_average(self, mode):
        """Test ten 16ms frames read as 63 FPS (halves round up)."""
        mode.show_fps = True
        commands = []
        for i in range(11):
            commands = mode.frame(i * 0.016)

        assert mode.fps == 63
        assert "FPS: 63" in _texts(commands)

    def test_background_drawn_first(self, mode):
        """Test every frame begins with the sky."""
        commands = _start(mode)
        assert commands[0].kind == 'vertical_gradient'


class TestGameOver:
    """Test the end of a game and restarting."""

    def test_collision_ends_game_after_delay(self, mode):
        """Test a crash ends the game one second later."""
        _start(mode)
        _crash_into_ally(mode)

        mode.frame(1.0)
        assert mode.internal_state == DogfightInternalState.RUNNING
        assert mode.context.ally.exploding

        mode.frame(1.5)
        assert mode.internal_state == DogfightInternalState.RUNNING

        commands = mode.frame(2.0)
        assert mode.internal_state == DogfightInternalState.GAME_OVER
        assert mode.state == GameState.GAME_OVER
        assert mode.result.reason == GameOverReason.COLLISION
        assert "Collision!" in _texts(commands)
        assert "Press R to restart" in _texts(commands)
        assert any(isinstance(c, Overlay) for c in commands)

    def test_frozen_after_game_over(self, mode):
        """Test the simulation stops once the game is over."""
        _start(mode)
        _crash_into_ally(mode)
        mode.frame(1.0)
        mode.frame(2.0)

        ally_y = mode.context.ally.y
        mode.frame(2.1, controls=ControlState(down=True))
        assert mode.context.ally.y == ally_y

    def test_new_high_score(self, quiet_rng, store):
        """Test beating the stored best is saved and flagged."""
        games = []
        mode = DogfightMode(width=1024, height=600, rng=quiet_rng, high_score_store=store,
                            callbacks=GameCallbacks(on_game_over=lambda *args: games.append(args)))
        _start(mode)
        mode.context.stats.ally_score = 40
        mode.context.notify_score_change()
        _crash_into_ally(mode)
        mode.frame(1.0)
        mode.frame(2.0)

        assert store.value == 40
        assert mode.result.final_score == 40
        assert mode.result.is_new_high_score is True
        assert "Final Score: 40  NEW HIGH SCORE!" in _texts(mode.frame(2.1))
        assert games == [(GameOverReason.COLLISION, 40, True)]

    def test_not_a_high_score(self, quiet_rng):
        """Test a score below the stored best is not flagged."""
        store = MemoryHighScoreStore('dogfight', initial=100)
        mode = DogfightMode(width=1024, height=600, rng=quiet_rng, high_score_store=store)
        _start(mode)
        mode.context.stats.ally_score = 40
        mode.context.notify_score_change()
        _crash_into_ally(mode)
        mode.frame(1.0)
        mode.frame(2.0)

        assert mode.result.is_new_high_score is False
        assert store.value == 100
        assert store.writes == 0

    def test_restart_resets_world(self, mode):
        """Test R after game over starts a clean wave 1."""
        _start(mode)
        ctx = mode.context
        ctx.stats.ally_score = 30
        ctx.stats.enemy_score = 4
        _crash_into_ally(mode)
        mode.frame(1.0)
        mode.frame(2.0)
        ctx.schedule(ScheduledEventKind.GAME_OVER, 1.0, payload=GameOverReason.SHOT_DOWN)
        ctx.ally.bullets.append(Bullet(ctx.ally.x, ctx.ally.y, ctx.ally.team))
        assert ctx.particles

        mode.frame(2.5, actions=[InputAction.RESTART])

        assert ctx.particles == []
        assert ctx.ally.bullets == []
        assert mode.internal_state == DogfightInternalState.RUNNING
        assert ctx.stats.ally_score == 0
        assert ctx.stats.enemy_score == 0
        assert ctx.stats.wave == 1
        assert ctx.stats.high_score == 30
        assert ctx.ally.is_alive
        assert ctx.ally.health == ctx.ally.max_health
        assert (ctx.ally.x, ctx.ally.y) == ctx.ally_start
        assert ctx.enemies == []
        assert ctx.powerups == []
        assert len(ctx.scheduler) == 0

        mode.frame(3.6)
        assert mode.internal_state == DogfightInternalState.RUNNING

    def test_session_record(self, mode):
        """Test a finished game is written to the session log."""
        sink = RecordingSink()
        register_sink('session', sink)
        try:
            _start(mode)
            _crash_into_ally(mode)
            mode.frame(1.0)
            mode.frame(2.0)
        finally:
            close_all_sinks()

        assert len(sink.records) == 1
        module, record = sink.records[0]
        assert module == 'session'
        assert record['type'] == 'game_over'
        assert record['reason'] == 'collision'
        assert record['wave'] == 1


class TestCallbacks:
    """Test collaborator notifications."""

    def test_score_and_wave_callbacks(self, quiet_rng, store):
        """Test score and wave hooks fire on start."""
        scores, waves = [], []
        mode = DogfightMode(
            width=1024, height=600, rng=quiet_rng, high_score_store=store,
            callbacks=GameCallbacks(
                on_score_change=lambda *args: scores.append(args),
                on_wave_change=lambda *args: waves.append(args),
            ),
        )
        _start(mode)

        assert scores == [(0, 0, 0)]
        assert waves == [(1, 0, 3)]

    def test_shot_callback(self, quiet_rng, store):
        """Test firing reports the shooter's team."""
        shots = []
        mode = DogfightMode(width=1024, height=600, rng=quiet_rng, high_score_store=store,
                            callbacks=GameCallbacks(on_shot=shots.append))
        _start(mode)
        mode.frame(0.5, controls=ControlState(fire=True))
        assert [team.value for team in shots] == ['ally']

    def test_seeded_games_repeat(self, store):
        """Test the same seed gives the same enemy placement."""
        a = DogfightMode(seed=7, high_score_store=store)
        b = DogfightMode(seed=7, high_score_store=store)
        _start(a)
        _start(b)
        assert a.context.enemies[0].y == b.context.enemies[0].y

    def test_score_data(self, mode):
        """Test the HUD snapshot."""
        _start(mode)
        data = mode.get_score_data()
        assert data.wave_label == "Wave 1 | Enemies: 0/3"

