"""
Dogfight - Configuration loader with difficulty presets.

All tunables default to the classic arcade values and can be overridden
from a `.env` file in this directory or from the environment.

Units: distances in pixels, speeds in pixels per frame at the target
refresh rate, durations in seconds unless a name ends in _FRAMES.
"""
import os
from pathlib import Path
from dataclasses import dataclass
from typing import Dict

from dotenv import load_dotenv

from models.primitives import Color

# Load .env from game directory
_env_path = Path(__file__).parent / '.env'
load_dotenv(_env_path)


def _get_bool(key: str, default: bool) -> bool:
    """Get boolean from environment."""
    val = os.getenv(key, str(default)).lower()
    return val in ('true', '1', 'yes')


def _get_color(key: str, default: str) -> tuple:
    """Get an RGB tuple from a #RRGGBB environment value."""
    return Color.from_hex(os.getenv(key, default)).as_rgb_tuple


def _get_int(key: str, default: int) -> int:
    """Get integer from environment."""
    return int(os.getenv(key, str(default)))


def _get_float(key: str, default: float) -> float:
    """Get float from environment."""
    return float(os.getenv(key, str(default)))


# Display
SCREEN_WIDTH = _get_int('SCREEN_WIDTH', 1024)
SCREEN_HEIGHT = _get_int('SCREEN_HEIGHT', 600)
FPS = _get_int('FPS', 60)  # Target refresh rate; frame-counted timers assume it
FPS_SAMPLE_COUNT = 10

# Planes
PLANE_SPEED = _get_float('PLANE_SPEED', 3.0)
PLANE_MAX_HEALTH = _get_int('PLANE_MAX_HEALTH', 100)
SHOOT_COOLDOWN = _get_float('SHOOT_COOLDOWN', 0.3)
SHOOT_ANIMATION_TIME = 0.25
MUZZLE_PARTICLES = 5
EXPLOSION_PARTICLES = 30
DAMAGE_FLASH_FRAMES = 5
SMOKE_HEALTH_RATIO = 0.4
SMOKE_CHANCE = 0.3

# Ally movement bounds
ALLY_START_X = 100.0
ALLY_MARGIN_Y = 20.0
ALLY_MIN_X = 10.0

# Bullets
BULLET_SPEED = _get_float('BULLET_SPEED', 8.0)
BULLET_WIDTH = 8
BULLET_HEIGHT = 3
ALLY_BULLET_DAMAGE = _get_int('ALLY_BULLET_DAMAGE', 20)
ENEMY_BULLET_DAMAGE = _get_int('ENEMY_BULLET_DAMAGE', 10)
MAX_BULLET_DAMAGE = max(ALLY_BULLET_DAMAGE, ENEMY_BULLET_DAMAGE)

# Power-ups
POWERUP_SIZE = 30
POWERUP_SPEED = 2.0
POWERUP_DESPAWN_X = -50.0
POWERUP_HEALTH_BONUS = 50
RAPID_FIRE_DURATION_FRAMES = FPS * 5
SHIELD_DURATION_FRAMES = FPS * 10
POWERUP_DROP_CHANCE = _get_float('POWERUP_DROP_CHANCE', 0.2)
POWERUP_SPAWN_CHANCE = _get_float('POWERUP_SPAWN_CHANCE', 0.001)
MAX_POWERUPS = 1

# Scoring
KILL_POINTS = _get_int('KILL_POINTS', 10)

# Deferred events (seconds)
ENEMY_REMOVAL_DELAY = 0.8
GAME_OVER_DELAY = 1.0
WAVE_STATUS_DURATION = 2.0

# Enemy AI
AI_DEAD_ZONE = 5.0
AI_VERTICAL_FACTOR = 0.6
AI_DRIFT_FACTOR = 0.8
AI_FIRE_CHANCE = _get_float('AI_FIRE_CHANCE', 0.02)
ENEMY_ESCAPE_X = -100.0

# Waves and spawning
FIRST_WAVE_ENEMIES = 3
WAVE_BASE_ENEMIES = 3  # Enemies in wave N (N > 1) is WAVE_BASE_ENEMIES + N
MAX_CONCURRENT_ENEMIES = 3
ENEMY_SPAWN_BASE_CHANCE = _get_float('ENEMY_SPAWN_BASE_CHANCE', 0.01)
ENEMY_SPAWN_WAVE_CHANCE = _get_float('ENEMY_SPAWN_WAVE_CHANCE', 0.002)
ENEMY_SPAWN_X_OFFSET = 150
SPAWN_MARGIN_TOP = 50

# Clouds
CLOUD_COUNT = _get_int('CLOUD_COUNT', 5)
CLOUD_MAX_Y_RATIO = 0.6

# Particles
PARTICLE_GRAVITY = 0.1

# Background
SKY_RATIO = 0.7

# Persistence
HIGH_SCORE_GAME = 'dogfight'
AUDIO_ENABLED = _get_bool('AUDIO_ENABLED', True)

# Assets
ASSETS_DIR = Path(__file__).parent / 'assets'
ATLAS_DIR = ASSETS_DIR / 'atlases'
IMAGE_DIR = ASSETS_DIR / 'images'


class Colors:
    """Named colours (RGB tuples)."""
    SKY_TOP = _get_color('SKY_TOP_COLOR', '#87CEEB')
    SKY_BOTTOM = _get_color('SKY_BOTTOM_COLOR', '#E0F6FF')
    GROUND_TOP = _get_color('GROUND_TOP_COLOR', '#8FBC8F')
    GROUND_BOTTOM = _get_color('GROUND_BOTTOM_COLOR', '#556B2F')
    CLOUD = (255, 255, 255)

    BULLET = (255, 165, 0)
    BULLET_STREAK = (255, 255, 0)
    EXPLOSION = [(255, 69, 0), (255, 165, 0)]
    SMOKE = (85, 85, 85)
    MUZZLE = (255, 255, 0)

    POWERUP_HEALTH = (0, 255, 0)
    POWERUP_RAPID_FIRE = (255, 0, 255)
    POWERUP_SHIELD = (0, 255, 255)

    HEALTH_HIGH = (0, 255, 0)
    HEALTH_MEDIUM = (255, 165, 0)
    HEALTH_LOW = (255, 0, 0)
    HEALTH_BAR_BACK = (50, 50, 50)
    DAMAGE_FLASH = (255, 0, 0)
    SHIELD_RING = (0, 255, 255)
    HEALTH_BAR_BORDER = (255, 255, 255)
    POWERUP_BORDER = (255, 255, 255)

    ALLY_FALLBACK = Color.from_hex('#8B4513').as_rgb_tuple
    ENEMY_FALLBACK = Color.from_hex('#696969').as_rgb_tuple

    TEXT = (255, 255, 255)
    TEXT_SHADOW = (0, 0, 0)
    TITLE = (255, 215, 0)
    OVERLAY = (0, 0, 0)
    FPS = (0, 255, 0)


class Fonts:
    """Font sizes in pixels."""
    SMALL = 16
    MEDIUM = 24
    LARGE = 36
    HUGE = 60


# Difficulty presets - spawn and aggression parameters bundled together
@dataclass
class DifficultyPreset:
    """Scales applied to the base spawn and AI chances."""
    name: str
    spawn_scale: float          # Multiplier on the enemy spawn chance
    fire_scale: float           # Multiplier on AI_FIRE_CHANCE
    enemy_speed: float          # Enemy plane speed
    powerup_drop_chance: float  # Chance a kill drops a power-up


DIFFICULTY_PRESETS: Dict[str, DifficultyPreset] = {
    'easy': DifficultyPreset(
        name='easy',
        spawn_scale=0.7,
        fire_scale=0.5,
        enemy_speed=2.5,
        powerup_drop_chance=0.3,
    ),
    'normal': DifficultyPreset(
        name='normal',
        spawn_scale=1.0,
        fire_scale=1.0,
        enemy_speed=PLANE_SPEED,
        powerup_drop_chance=POWERUP_DROP_CHANCE,
    ),
    'hard': DifficultyPreset(
        name='hard',
        spawn_scale=1.5,
        fire_scale=1.75,
        enemy_speed=3.5,
        powerup_drop_chance=0.1,
    ),
}

# Default difficulty
DEFAULT_DIFFICULTY = os.getenv('DEFAULT_DIFFICULTY', 'normal')


def get_difficulty(name: str) -> DifficultyPreset:
    """Look up a difficulty preset by name.

    Raises:
        ValueError: If the name is not a known preset
    """
    try:
        return DIFFICULTY_PRESETS[name]
    except KeyError:
        raise ValueError(
            f"Unknown difficulty '{name}'. Choose from: {', '.join(DIFFICULTY_PRESETS)}"
        ) from None


# HUD text
TITLE_TEXT = "Dogfight"
START_PROMPT = "Press any key to start"
DEFAULT_STATUS = "Good luck, pilot!"
WAVE_STATUS_TEMPLATE = "Wave {wave} - Get Ready!"
HEALTH_BAR_WIDTH = 50
HEALTH_BAR_HEIGHT = 5
HEALTH_BAR_OFFSET = 12
