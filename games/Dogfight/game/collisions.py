"""
Collision resolution.

Runs once per simulation step after everything has moved. All tests are
strict axis-aligned box tests: touching edges never count.

    (a) ally bullets vs live enemies
    (b) enemy bullets vs the live ally
    (c) ally vs each live enemy (mid-air collision)
    (d) ally vs uncollected power-ups
"""

from dataclasses import dataclass, field
from typing import List, Optional, TYPE_CHECKING

from models.dogfight import GameOverReason, PowerUpKind, ScheduledEventKind
from aces.logging import get_logger
from games.Dogfight import config
from games.Dogfight.game.waves import spawn_powerup

if TYPE_CHECKING:
    from games.Dogfight.game.context import SimulationContext

log = get_logger('dogfight.collisions')


@dataclass
class CollisionReport:
    """What the resolver did this step.

    Attributes:
        kills: Ids of enemies shot down
        enemy_hits: Ally bullets that hit an enemy (kills included)
        ally_hits: Enemy bullets that hit the ally
        collisions: Ids of enemies that collided with the ally
        powerups_collected: Kinds picked up by the ally
        game_over_reason: Set if a game-over was scheduled this step
    """
    kills: List[int] = field(default_factory=list)
    enemy_hits: int = 0
    ally_hits: int = 0
    collisions: List[int] = field(default_factory=list)
    powerups_collected: List[PowerUpKind] = field(default_factory=list)
    game_over_reason: Optional[GameOverReason] = None

    @property
    def empty(self) -> bool:
        return not (self.kills or self.enemy_hits or self.ally_hits
                    or self.collisions or self.powerups_collected)


def resolve_collisions(ctx: 'SimulationContext') -> CollisionReport:
    """Resolve every collision for this step."""
    report = CollisionReport()
    _ally_bullets_vs_enemies(ctx, report)
    _enemy_bullets_vs_ally(ctx, report)
    _ally_vs_enemies(ctx, report)
    _ally_vs_powerups(ctx, report)
    return report


def _ally_bullets_vs_enemies(ctx: 'SimulationContext', report: CollisionReport) -> None:
    ally = ctx.ally
    remaining = []
    for bullet in ally.bullets:
        tip = bullet.tip
        target = next((p for p in ctx.enemies if p.is_alive and p.rect.contains_point(tip)), None)
        if target is None:
            remaining.append(bullet)
            continue

        report.enemy_hits += 1
        target.take_damage(ally.profile.bullet_damage)
        if target.health <= 0:
            _shoot_down(ctx, target, report)
    ally.bullets = remaining


def _shoot_down(ctx: 'SimulationContext', enemy, report: CollisionReport) -> None:
    enemy.explode(ctx)
    ctx.schedule(ScheduledEventKind.REMOVE_ENEMY, config.ENEMY_REMOVAL_DELAY, entity_id=enemy.entity_id)

    stats = ctx.stats
    stats.ally_score += config.KILL_POINTS
    stats.enemies_defeated += 1
    report.kills.append(enemy.entity_id)
    ctx.notify_score_change()

    if ctx.rng.random() < ctx.difficulty.powerup_drop_chance:
        spawn_powerup(ctx)


def _enemy_bullets_vs_ally(ctx: 'SimulationContext', report: CollisionReport) -> None:
    ally = ctx.ally
    for enemy in ctx.enemies:
        remaining = []
        for bullet in enemy.bullets:
            if not (ally.is_alive and ally.rect.contains_point(bullet.tip)):
                remaining.append(bullet)
                continue

            report.ally_hits += 1
            ally.take_damage(enemy.profile.bullet_damage)
            if ally.health <= 0:
                ally.explode(ctx)
                _schedule_game_over(ctx, GameOverReason.SHOT_DOWN, report)
        enemy.bullets = remaining


def _ally_vs_enemies(ctx: 'SimulationContext', report: CollisionReport) -> None:
    ally = ctx.ally
    for enemy in ctx.enemies:
        if not (ally.is_alive and enemy.is_alive):
            continue
        if not ally.rect.overlaps(enemy.rect):
            continue

        ally.explode(ctx)
        enemy.explode(ctx)
        report.collisions.append(enemy.entity_id)
        _schedule_game_over(ctx, GameOverReason.COLLISION, report)


def _ally_vs_powerups(ctx: 'SimulationContext', report: CollisionReport) -> None:
    ally = ctx.ally
    remaining = []
    for powerup in ctx.powerups:
        if powerup.collected or not ally.rect.overlaps(powerup.rect):
            remaining.append(powerup)
            continue

        powerup.collected = True
        ally.apply_power_up(powerup.kind)
        report.powerups_collected.append(powerup.kind)
        log.debug("Collected %s power-up", powerup.kind.value)
    ctx.powerups = remaining


def _schedule_game_over(ctx: 'SimulationContext', reason: GameOverReason, report: CollisionReport) -> None:
    report.game_over_reason = reason
    ctx.schedule(ScheduledEventKind.GAME_OVER, config.GAME_OVER_DELAY, payload=reason)
    log.info("Ally down (%s); game over in %.1fs", reason.value, config.GAME_OVER_DELAY)
