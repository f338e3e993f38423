"""Enemy pilot behaviour."""

from typing import List, TYPE_CHECKING

from aces.logging import get_logger
from games.Dogfight import config

if TYPE_CHECKING:
    from games.Dogfight.game.context import SimulationContext

log = get_logger('dogfight.ai')


def run_ai(ctx: 'SimulationContext') -> List[int]:
    """Steer, fire and retire every enemy for one step.

    Live enemies track the ally's height (with a small dead zone), drift
    left and fire at random. Downed enemies only drift. An enemy that
    drifts past the left edge is removed; if it was still live it escaped
    and the enemy side scores.

    Returns:
        Ids of enemies that escaped this step
    """
    ally_y = ctx.ally.y
    fire_chance = config.AI_FIRE_CHANCE * ctx.difficulty.fire_scale
    escaped = []
    remaining = []

    for plane in ctx.enemies:
        if plane.is_alive:
            if plane.y < ally_y - config.AI_DEAD_ZONE:
                plane.y += plane.speed * config.AI_VERTICAL_FACTOR
            elif plane.y > ally_y + config.AI_DEAD_ZONE:
                plane.y -= plane.speed * config.AI_VERTICAL_FACTOR

        plane.x -= plane.speed * config.AI_DRIFT_FACTOR

        if plane.is_alive and ctx.rng.random() < fire_chance:
            plane.shoot(ctx)

        if plane.x < config.ENEMY_ESCAPE_X:
            if plane.is_alive:
                escaped.append(plane.entity_id)
                log.debug("Enemy %d escaped", plane.entity_id)
            continue
        remaining.append(plane)

    ctx.enemies = remaining
    if escaped:
        ctx.stats.enemy_score += len(escaped)
        ctx.notify_score_change()
    return escaped
