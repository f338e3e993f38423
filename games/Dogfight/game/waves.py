"""
Wave progression and spawning.

A wave is cleared once enough enemies have been shot down AND the sky is
empty of enemy planes (shot-down planes still count until they are
removed). Clearing a wave raises the kill target for the next one. Enemy
spawn odds and the number of enemies allowed at once both grow with the
wave number.
"""

from typing import Optional, TYPE_CHECKING

from models.dogfight import Team
from aces.logging import get_logger
from games.Dogfight import config
from games.Dogfight.game.powerup import PowerUp

if TYPE_CHECKING:
    from games.Dogfight.game.context import SimulationContext
    from games.Dogfight.game.plane import Plane

log = get_logger('dogfight.waves')


def enemies_for_wave(wave: int) -> int:
    """Kills required to clear a wave."""
    if wave <= 1:
        return config.FIRST_WAVE_ENEMIES
    return config.WAVE_BASE_ENEMIES + wave


def max_concurrent_enemies(wave: int) -> int:
    return min(config.MAX_CONCURRENT_ENEMIES, 1 + wave // 2)


def enemy_spawn_chance(ctx: 'SimulationContext') -> float:
    base = config.ENEMY_SPAWN_BASE_CHANCE + ctx.stats.wave * config.ENEMY_SPAWN_WAVE_CHANCE
    return base * ctx.difficulty.spawn_scale


def is_wave_complete(ctx: 'SimulationContext') -> bool:
    stats = ctx.stats
    return stats.enemies_defeated >= stats.enemies_in_wave and not ctx.enemies


def check_wave_progress(ctx: 'SimulationContext') -> bool:
    """Advance to the next wave if the current one is cleared.

    Returns:
        True if the wave advanced
    """
    if not is_wave_complete(ctx):
        return False

    stats = ctx.stats
    cleared = stats.wave
    stats.wave += 1
    stats.enemies_in_wave = enemies_for_wave(stats.wave)
    stats.enemies_defeated = 0
    ctx.set_status(config.WAVE_STATUS_TEMPLATE.format(wave=stats.wave), config.WAVE_STATUS_DURATION)
    log.info("Wave %d cleared; wave %d needs %d kills", cleared, stats.wave, stats.enemies_in_wave)

    ctx.notify_wave_change()
    if ctx.callbacks.on_wave_cleared:
        ctx.callbacks.on_wave_cleared(cleared)
    return True


def spawn_enemy(ctx: 'SimulationContext') -> 'Plane':
    """Add an enemy near the right edge at a random height."""
    y = config.SPAWN_MARGIN_TOP + ctx.rng.random() * (ctx.height - 150)
    plane = ctx.create_plane(Team.ENEMY, ctx.width - config.ENEMY_SPAWN_X_OFFSET, y)
    ctx.enemies.append(plane)
    log.debug("Spawned enemy %d at y=%.0f", plane.entity_id, y)
    return plane


def maybe_spawn_enemy(ctx: 'SimulationContext') -> Optional['Plane']:
    if ctx.rng.random() < enemy_spawn_chance(ctx) and len(ctx.enemies) < max_concurrent_enemies(ctx.stats.wave):
        return spawn_enemy(ctx)
    return None


def spawn_powerup(ctx: 'SimulationContext') -> PowerUp:
    """Add a power-up of random kind at the right edge."""
    y = config.SPAWN_MARGIN_TOP + ctx.rng.random() * (ctx.height - 100)
    powerup = PowerUp.with_random_kind(ctx.width - 50, y, ctx.rng)
    ctx.powerups.append(powerup)
    return powerup


def maybe_spawn_powerup(ctx: 'SimulationContext') -> Optional[PowerUp]:
    if ctx.rng.random() < config.POWERUP_SPAWN_CHANCE and len(ctx.powerups) < config.MAX_POWERUPS:
        return spawn_powerup(ctx)
    return None
