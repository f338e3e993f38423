"""
Shared fixtures for Dogfight tests.

Tests run headless: SDL uses its dummy video and audio drivers, and no
window is ever opened.
"""

import os

os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')
os.environ.setdefault('SDL_AUDIODRIVER', 'dummy')

import random

import pygame
import pytest

from aces.storage import MemoryHighScoreStore
from games.Dogfight.game.atlases import load_team_atlases
from games.Dogfight.game.context import SimulationContext
from games.Dogfight.game_mode import DogfightMode

WIDTH = 1024
HEIGHT = 600


class ScriptedRandom(random.Random):
    """Random source whose random() always returns `value`.

    0.99 means "nothing random ever happens": no spawns, no AI fire, no
    smoke, no power-up drops.
    """

    def __init__(self, value: float = 0.99, seed: int = 0):
        super().__init__(seed)
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture(scope='session', autouse=True)
def pygame_headless():
    """Initialize pygame once without a display."""
    pygame.init()
    yield
    pygame.quit()


@pytest.fixture
def scripted_random():
    """Factory for ScriptedRandom instances."""
    return ScriptedRandom


@pytest.fixture
def quiet_rng():
    return ScriptedRandom(0.99)


@pytest.fixture
def atlases():
    return load_team_atlases()


@pytest.fixture
def ctx(quiet_rng, atlases):
    """A running wave-1 world with no randomness at t=10s."""
    context = SimulationContext(width=WIDTH, height=HEIGHT, rng=quiet_rng, atlases=atlases)
    context.stats.reset()
    context.advance_clock(10.0)
    return context


@pytest.fixture
def store():
    return MemoryHighScoreStore('dogfight')


@pytest.fixture
def mode(quiet_rng, store):
    """Game mode in IDLE with no randomness and an in-memory high score."""
    return DogfightMode(width=WIDTH, height=HEIGHT, rng=quiet_rng, high_score_store=store)
