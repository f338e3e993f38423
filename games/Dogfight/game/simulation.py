"""
The simulation step.

`step` advances the world by one frame while the game is running and not
paused. The order is fixed:

    1. ally movement (clamped)        7. power-up spawn
    2. ally firing                    8. enemy updates
    3. ally update                    9. power-up updates and pruning
    4. enemy AI                      10. collisions
    5. wave progress                 11. deferred events that are due
    6. enemy spawn

Particles and clouds are advanced separately by the driver because they
keep moving in states where the simulation is frozen.
"""

from dataclasses import dataclass, field
from typing import List, Optional, TYPE_CHECKING

from models.dogfight import ControlState, GameOverReason, ScheduledEventKind
from aces.logging import get_logger
from games.Dogfight import config
from games.Dogfight.game.ai import run_ai
from games.Dogfight.game.collisions import CollisionReport, resolve_collisions
from games.Dogfight.game.scheduler import ScheduledEvent
from games.Dogfight.game.waves import check_wave_progress, maybe_spawn_enemy, maybe_spawn_powerup

if TYPE_CHECKING:
    from games.Dogfight.game.context import SimulationContext

log = get_logger('dogfight.simulation')


@dataclass
class StepResult:
    """Outcome of one simulation step.

    Attributes:
        collisions: Collision resolver report
        escaped: Ids of enemies that escaped
        wave_advanced: True if a wave was cleared this step
        game_over: Reason, if a scheduled game-over fired this step
    """
    collisions: CollisionReport = field(default_factory=CollisionReport)
    escaped: List[int] = field(default_factory=list)
    wave_advanced: bool = False
    game_over: Optional[GameOverReason] = None


def move_ally(ctx: 'SimulationContext', controls: ControlState) -> None:
    """Move the ally one frame per held direction, within its flight box."""
    ally = ctx.ally
    if not ally.is_alive:
        return

    if controls.up and ally.y > config.ALLY_MARGIN_Y:
        ally.y -= ally.speed
    if controls.down and ally.y < ctx.height - ally.height - config.ALLY_MARGIN_Y:
        ally.y += ally.speed
    if controls.left and ally.x > config.ALLY_MIN_X:
        ally.x -= ally.speed
    if controls.right and ally.x < ctx.width / 2:
        ally.x += ally.speed


def step(ctx: 'SimulationContext', controls: ControlState) -> StepResult:
    """Advance the world by one frame."""
    result = StepResult()

    move_ally(ctx, controls)
    if controls.fire:
        ctx.ally.shoot(ctx)
    ctx.ally.update(ctx)

    result.escaped = run_ai(ctx)
    result.wave_advanced = check_wave_progress(ctx)
    maybe_spawn_enemy(ctx)
    maybe_spawn_powerup(ctx)

    for plane in ctx.enemies:
        plane.update(ctx)

    for powerup in ctx.powerups:
        powerup.update()
    ctx.powerups = [p for p in ctx.powerups if not p.is_offscreen]

    result.collisions = resolve_collisions(ctx)
    if not result.collisions.empty:
        log.trace("Collisions at t=%.3f: %s", ctx.now, result.collisions)

    for event in ctx.scheduler.pop_due(ctx.now):
        reason = apply_event(ctx, event)
        if reason is not None:
            result.game_over = reason
    return result


def apply_event(ctx: 'SimulationContext', event: ScheduledEvent) -> Optional[GameOverReason]:
    """Apply one deferred event if its target still exists.

    Returns:
        The game-over reason if the event ends the game
    """
    if not ctx.scheduler.is_current(event):
        log.debug("Dropping stale %s event from generation %d", event.kind.value, event.generation)
        return None

    if event.kind == ScheduledEventKind.REVERT_TO_FLYING:
        plane = ctx.find_plane(event.entity_id)
        if plane is None:
            log.debug("Revert target %s no longer exists", event.entity_id)
            return None
        plane.revert_to_flying()

    elif event.kind == ScheduledEventKind.REMOVE_ENEMY:
        before = len(ctx.enemies)
        ctx.enemies = [p for p in ctx.enemies if p.entity_id != event.entity_id]
        if len(ctx.enemies) == before:
            log.debug("Enemy %s already gone", event.entity_id)

    elif event.kind == ScheduledEventKind.CLEAR_STATUS:
        ctx.stats.status_message = config.DEFAULT_STATUS

    elif event.kind == ScheduledEventKind.GAME_OVER:
        return GameOverReason(event.payload)

    return None


def update_particles(ctx: 'SimulationContext') -> None:
    for particle in ctx.particles:
        particle.update()
    ctx.particles = [p for p in ctx.particles if not p.is_dead]


def update_clouds(ctx: 'SimulationContext') -> None:
    for cloud in ctx.clouds:
        cloud.update(ctx.width, ctx.height, ctx.rng)
