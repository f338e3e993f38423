"""
Planes: the player's aircraft and the enemy fighters.

A plane's animation is an explicit state machine over PlaneAnimation:

    FLYING --shoot--> SHOOTING --revert event--> FLYING
    FLYING/SHOOTING --explode--> EXPLODING --clip finished--> FLYING

Entering a state plays its atlas clip from frame 0. Exploding marks the
plane as downed for good (until `reset`): a downed plane is no longer live,
so it can't be hit, can't collide and can't fire, even after its explosion
clip has finished.
"""

from typing import List, Optional, TYPE_CHECKING

from models import Rectangle
from models.dogfight import (
    ParticleKind,
    PlaneAnimation,
    PowerUpKind,
    ScheduledEventKind,
    SpriteAtlas,
    Team,
)
from aces.logging import get_logger
from games.Dogfight import config
from games.Dogfight.game.animation import AnimationPlayer
from games.Dogfight.game.bullet import Bullet
from games.Dogfight.game.draw_commands import (
    DrawCommand,
    FillRect,
    SpriteFrame,
    StrokeCircle,
    StrokeRect,
)
from games.Dogfight.game.teams import profile_for

if TYPE_CHECKING:
    from games.Dogfight.game.context import SimulationContext

log = get_logger('dogfight.plane')


class Plane:
    """A biplane of either team.

    Args:
        x: Top-left x
        y: Top-left y
        team: Side the plane fights for
        atlas: Sprite atlas whose clips drive the animation
        entity_id: Unique id used to key deferred events
        speed: Pixels per frame (default: PLANE_SPEED)

    Attributes:
        health: Current health. May dip below zero by at most one hit.
        bullets: Bullets this plane has fired that are still in flight
        state: Current animation state
        downed: Set by `explode`; cleared only by `reset`
    """

    def __init__(
        self,
        x: float,
        y: float,
        team: Team,
        atlas: SpriteAtlas,
        entity_id: int,
        speed: Optional[float] = None,
    ):
        self.team = team
        self.profile = profile_for(team)
        self.entity_id = entity_id
        self.atlas = atlas
        self.width = self.profile.width
        self.height = self.profile.height
        self.speed = config.PLANE_SPEED if speed is None else speed
        self.max_health = config.PLANE_MAX_HEALTH
        self.animation = AnimationPlayer(atlas, PlaneAnimation.FLYING.clip_name)
        self.reset(x, y)

    def reset(self, x: float, y: float) -> None:
        """Return to a fresh, fully healthy, flying plane at (x, y)."""
        self.x = x
        self.y = y
        self.health = self.max_health
        self.bullets: List[Bullet] = []
        self.last_shot = float('-inf')
        self.exploding = False
        self.downed = False
        self.shield_frames = 0
        self.rapid_fire_frames = 0
        self.damage_flash = 0
        self._enter(PlaneAnimation.FLYING)

    # =========================================================================
    # State
    # =========================================================================

    def _enter(self, state: PlaneAnimation) -> None:
        self.state = state
        self.animation.play(state.clip_name)

    @property
    def is_alive(self) -> bool:
        """Live planes can be hit, collide and fire."""
        return not self.downed and self.health > 0

    @property
    def shielded(self) -> bool:
        return self.shield_frames > 0

    @property
    def rapid_fire(self) -> bool:
        return self.rapid_fire_frames > 0

    @property
    def cooldown(self) -> float:
        """Seconds required between shots."""
        if self.rapid_fire:
            return config.SHOOT_COOLDOWN / 2
        return config.SHOOT_COOLDOWN

    @property
    def health_ratio(self) -> float:
        """Health as a fraction of max, clamped to [0, 1]."""
        return max(0.0, min(1.0, self.health / self.max_health))

    @property
    def rect(self) -> Rectangle:
        return Rectangle(x=self.x, y=self.y, width=self.width, height=self.height)

    @property
    def center(self):
        return (self.x + self.width / 2, self.y + self.height / 2)

    # =========================================================================
    # Actions
    # =========================================================================

    def shoot(self, ctx: 'SimulationContext') -> Optional[Bullet]:
        """Fire if the cooldown has elapsed.

        Returns:
            The new bullet, or None if the plane could not fire
        """
        if self.exploding or self.downed:
            return None
        if ctx.now - self.last_shot <= self.cooldown:
            return None

        dx, dy = self.profile.muzzle_offset
        bullet = Bullet(self.x + dx, self.y + dy, self.team)
        self.bullets.append(bullet)
        self.last_shot = ctx.now
        self._enter(PlaneAnimation.SHOOTING)

        ctx.emit_particles(ParticleKind.MUZZLE, bullet.x, bullet.y, config.MUZZLE_PARTICLES)
        ctx.schedule(ScheduledEventKind.REVERT_TO_FLYING, config.SHOOT_ANIMATION_TIME,
                     entity_id=self.entity_id)
        ctx.notify_shot(self.team)
        return bullet

    def revert_to_flying(self) -> bool:
        """Leave the firing animation. Ignored unless currently SHOOTING."""
        if self.state != PlaneAnimation.SHOOTING:
            return False
        self._enter(PlaneAnimation.FLYING)
        return True

    def take_damage(self, amount: int) -> bool:
        """Apply damage unless shielded.

        Does not explode the plane; callers check `health` afterwards.

        Returns:
            True if damage was applied
        """
        if self.shielded:
            return False
        self.health -= amount
        self.damage_flash = config.DAMAGE_FLASH_FRAMES
        return True

    def explode(self, ctx: 'SimulationContext') -> bool:
        """Start exploding. Does nothing once the plane is downed.

        Returns:
            True if the explosion started on this call
        """
        if self.exploding or self.downed:
            return False

        self.exploding = True
        self.downed = True
        self._enter(PlaneAnimation.EXPLODING)
        cx, cy = self.center
        ctx.emit_particles(ParticleKind.EXPLOSION, cx, cy, config.EXPLOSION_PARTICLES)
        ctx.notify_explosion(self.team)
        log.debug("%s plane %d exploded", self.team.value, self.entity_id)
        return True

    def apply_power_up(self, kind: PowerUpKind) -> None:
        """Apply a collected power-up.

        Raises:
            ValueError: If kind is not a PowerUpKind
        """
        kind = PowerUpKind(kind)
        if kind == PowerUpKind.HEALTH:
            self.health = min(self.max_health, self.health + config.POWERUP_HEALTH_BONUS)
        elif kind == PowerUpKind.RAPID_FIRE:
            self.rapid_fire_frames = config.RAPID_FIRE_DURATION_FRAMES
        elif kind == PowerUpKind.SHIELD:
            self.shield_frames = config.SHIELD_DURATION_FRAMES

    # =========================================================================
    # Per-frame update
    # =========================================================================

    def update(self, ctx: 'SimulationContext') -> None:
        """Tick effect timers, move bullets and advance the animation."""
        if self.shield_frames > 0:
            self.shield_frames -= 1
        if self.rapid_fire_frames > 0:
            self.rapid_fire_frames -= 1
        if self.damage_flash > 0:
            self.damage_flash -= 1

        for bullet in self.bullets:
            bullet.update()
        self.bullets = [b for b in self.bullets if not b.is_offscreen(ctx.width)]

        if self.animation.tick(ctx.refresh_rate) and self.state == PlaneAnimation.EXPLODING:
            self._finish_explosion()

        if (self.is_alive and self.health < self.max_health * config.SMOKE_HEALTH_RATIO
                and ctx.rng.random() < config.SMOKE_CHANCE):
            cx, cy = self.center
            ctx.emit_particles(ParticleKind.SMOKE, cx, cy)

    def _finish_explosion(self) -> None:
        self.exploding = False
        self._enter(PlaneAnimation.FLYING)

    # =========================================================================
    # Drawing
    # =========================================================================

    def draw(self) -> List[DrawCommand]:
        """Draw commands for the plane (its bullets are drawn separately).

        A downed plane whose explosion has finished is not drawn.
        """
        if self.downed and not self.exploding:
            return []

        commands: List[DrawCommand] = []
        cx, cy = self.center

        if self.shielded:
            commands.append(StrokeCircle(
                x=cx, y=cy, radius=max(self.width, self.height) / 2 + 10,
                color=config.Colors.SHIELD_RING, line_width=3, alpha=0.6,
            ))

        if self.damage_flash > 0:
            commands.append(FillRect(x=self.x, y=self.y, width=self.width, height=self.height,
                                     color=config.Colors.DAMAGE_FLASH, alpha=0.5))

        commands.append(self._sprite_command())

        if not self.exploding:
            commands.extend(self._health_bar())
        return commands

    def _sprite_command(self) -> SpriteFrame:
        profile = self.profile
        sx, sy, sw, sh = self.animation.source_rect
        offset_y = 0
        if self.state in (PlaneAnimation.SHOOTING, PlaneAnimation.EXPLODING):
            offset_y = profile.action_offset_y

        fx, fy, fw, fh = profile.fallback_rect
        return SpriteFrame(
            sheet=profile.atlas_name,
            source=(sx, sy, sw, sh - profile.crop_bottom),
            dest=(self.x, self.y + offset_y, self.width, self.height),
            flip_x=profile.flip_x,
            fallback=FillRect(x=self.x + fx, y=self.y + fy, width=fw, height=fh,
                              color=profile.fallback_color),
        )

    def _health_bar(self) -> List[DrawCommand]:
        bar_w = config.HEALTH_BAR_WIDTH
        bar_h = config.HEALTH_BAR_HEIGHT
        bar_x = self.x + (self.width - bar_w) / 2
        bar_y = self.y - config.HEALTH_BAR_OFFSET

        ratio = self.health_ratio
        if ratio > 0.6:
            color = config.Colors.HEALTH_HIGH
        elif ratio > 0.3:
            color = config.Colors.HEALTH_MEDIUM
        else:
            color = config.Colors.HEALTH_LOW

        commands: List[DrawCommand] = [
            FillRect(x=bar_x, y=bar_y, width=bar_w, height=bar_h, color=config.Colors.HEALTH_BAR_BACK),
        ]
        if ratio > 0:
            commands.append(FillRect(x=bar_x, y=bar_y, width=ratio * bar_w, height=bar_h, color=color))
        commands.append(StrokeRect(x=bar_x, y=bar_y, width=bar_w, height=bar_h,
                                   color=config.Colors.HEALTH_BAR_BORDER))
        return commands

    def __repr__(self) -> str:
        return (f"Plane({self.team.value}#{self.entity_id}, x={self.x:.1f}, y={self.y:.1f}, "
                f"health={self.health}, state={self.state.value})")
