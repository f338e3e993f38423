"""
Tests for Plane: firing, damage, explosions, power-ups and drawing.
"""

import pytest

from models.dogfight import ParticleKind, PlaneAnimation, PowerUpKind, ScheduledEventKind, Team
from games.Dogfight import config
from games.Dogfight.game.bullet import Bullet
from games.Dogfight.game.collisions import resolve_collisions
from games.Dogfight.game.context import SimulationContext
from games.Dogfight.game.draw_commands import SpriteFrame, StrokeCircle


def _particles(ctx, kind):
    return [p for p in ctx.particles if p.kind == kind]


# ============================================================================
# Shooting
# ============================================================================


class TestShoot:
    """Test firing and cooldowns."""

    def test_bullet_leaves_ally_muzzle(self, ctx):
        """Test the ally fires from its nose, flying right."""
        ally = ctx.ally
        bullet = ally.shoot(ctx)

        assert bullet is not None
        assert (bullet.x, bullet.y) == (ally.x + 120, ally.y + 70)
        assert bullet.direction == 1
        assert ally.bullets == [bullet]

    def test_enemy_bullet_flies_left(self, ctx):
        """Test enemy muzzle offset and direction."""
        enemy = ctx.create_plane(Team.ENEMY, 600, 200)
        bullet = enemy.shoot(ctx)

        assert (bullet.x, bullet.y) == (610, 270)
        bullet.update()
        assert bullet.x == 610 - config.BULLET_SPEED

    def test_shooting_enters_shoot_state(self, ctx):
        """Test firing plays the shoot clip and schedules the revert."""
        ally = ctx.ally
        ally.shoot(ctx)

        assert ally.state == PlaneAnimation.SHOOTING
        assert ally.animation.clip_name == 'shoot'
        assert ally.animation.frame_index == 0
        assert ctx.scheduler.is_pending(ScheduledEventKind.REVERT_TO_FLYING, ally.entity_id)

    def test_muzzle_flash(self, ctx):
        """Test each shot emits five muzzle particles."""
        ctx.ally.shoot(ctx)
        assert len(_particles(ctx, ParticleKind.MUZZLE)) == config.MUZZLE_PARTICLES

    def test_cooldown_blocks_second_shot(self, ctx):
        """Test a plane cannot fire again within the cooldown."""
        ally = ctx.ally
        ally.shoot(ctx)
        ctx.advance_clock(10.2)
        assert ally.shoot(ctx) is None
        ctx.advance_clock(10.31)
        assert ally.shoot(ctx) is not None
        assert len(ally.bullets) == 2

    def test_rapid_fire_halves_cooldown(self, ctx):
        """Test rapid fire allows shots after half the cooldown."""
        ally = ctx.ally
        ally.apply_power_up(PowerUpKind.RAPID_FIRE)
        ally.shoot(ctx)
        ctx.advance_clock(10.16)
        assert ally.shoot(ctx) is not None

    def test_exploding_plane_cannot_fire(self, ctx):
        """Test exploding planes fire no shots."""
        ally = ctx.ally
        ally.explode(ctx)
        assert ally.shoot(ctx) is None
        assert ally.bullets == []

    def test_revert_only_from_shooting(self, ctx):
        """Test the revert transition is ignored while exploding."""
        ally = ctx.ally
        ally.shoot(ctx)
        ally.explode(ctx)
        assert ally.revert_to_flying() is False
        assert ally.state == PlaneAnimation.EXPLODING

    def test_offscreen_bullets_pruned(self, ctx):
        """Test bullets past the right edge are dropped on update."""
        ally = ctx.ally
        ally.bullets.append(Bullet(ctx.width - 1, 100, Team.ALLY))
        ally.update(ctx)
        assert ally.bullets == []


# ============================================================================
# Damage
# ============================================================================


class TestDamage:
    """Test take_damage and the health floor."""

    def test_damage_reduces_health_and_flashes(self, ctx):
        """Test damage is subtracted and the flash timer set."""
        ally = ctx.ally
        assert ally.take_damage(20) is True
        assert ally.health == 80
        assert ally.damage_flash == config.DAMAGE_FLASH_FRAMES

    def test_shield_blocks_damage(self, ctx):
        """Test shielded planes take no damage."""
        ally = ctx.ally
        ally.apply_power_up(PowerUpKind.SHIELD)
        assert ally.take_damage(50) is False
        assert ally.health == ally.max_health
        assert ally.damage_flash == 0

    def test_damage_does_not_explode(self, ctx):
        """Test the caller decides when to explode."""
        ally = ctx.ally
        ally.take_damage(150)
        assert not ally.exploding
        assert ally.state == PlaneAnimation.FLYING

    def test_health_floor_after_kill(self, ctx):
        """Test health never drops below minus the largest bullet damage."""
        enemy = ctx.create_plane(Team.ENEMY, 500, 200)
        enemy.health = 10
        ctx.enemies.append(enemy)
        for dx in (20, 30, 40):
            ctx.ally.bullets.append(Bullet(500 + dx, 250, Team.ALLY))

        resolve_collisions(ctx)

        assert enemy.health >= -config.MAX_BULLET_DAMAGE
        assert enemy.health == -10
        # The downed enemy absorbs nothing further
        assert len(ctx.ally.bullets) == 2

    def test_health_ratio_clamped(self, ctx):
        """Test health_ratio stays within [0, 1]."""
        ally = ctx.ally
        ally.health = -15
        assert ally.health_ratio == 0.0
        ally.health = 50
        assert ally.health_ratio == 0.5


# ============================================================================
# Explosions
# ============================================================================


class TestExplode:
    """Test the explosion transition."""

    def test_explode_emits_particles(self, ctx):
        """Test an explosion spawns 30 particles at the plane centre."""
        ally = ctx.ally
        assert ally.explode(ctx) is True

        explosion = _particles(ctx, ParticleKind.EXPLOSION)
        assert len(explosion) == config.EXPLOSION_PARTICLES
        assert ally.exploding and ally.downed
        assert not ally.is_alive

    def test_explode_is_idempotent(self, ctx):
        """Test a second explode neither adds particles nor rewinds the clip."""
        ally = ctx.ally
        ally.explode(ctx)
        for _ in range(10):
            ally.animation.tick(ctx.refresh_rate)
        frame_before = ally.animation.frame_index
        assert frame_before > 0

        assert ally.explode(ctx) is False
        assert len(_particles(ctx, ParticleKind.EXPLOSION)) == config.EXPLOSION_PARTICLES
        assert ally.animation.frame_index == frame_before

    def test_explosion_finishes_back_to_flying(self, ctx):
        """Test the clip's completion returns to FLYING but the plane stays downed."""
        ally = ctx.ally
        ally.explode(ctx)
        for _ in range(40):
            ally.update(ctx)

        assert ally.state == PlaneAnimation.FLYING
        assert not ally.exploding
        assert ally.downed
        assert not ally.is_alive
        assert ally.draw() == []

    def test_explode_after_clip_finished_is_ignored(self, ctx):
        """Test a downed plane waiting for removal cannot explode again."""
        ally = ctx.ally
        ally.explode(ctx)
        for _ in range(60):
            ally.update(ctx)
        assert not ally.exploding

        assert ally.explode(ctx) is False
        assert len(_particles(ctx, ParticleKind.EXPLOSION)) == config.EXPLOSION_PARTICLES
        assert ally.state == PlaneAnimation.FLYING
        assert ally.draw() == []

    def test_reset_restores_plane(self, ctx):
        """Test reset gives a fresh plane."""
        ally = ctx.ally
        ally.shoot(ctx)
        ally.explode(ctx)
        ally.reset(100, 200)

        assert ally.is_alive
        assert ally.health == ally.max_health
        assert ally.bullets == []
        assert ally.state == PlaneAnimation.FLYING
        assert (ally.x, ally.y) == (100, 200)


# ============================================================================
# Power-ups and smoke
# ============================================================================


class TestPowerUps:
    """Test power-up effects."""

    def test_health_capped(self, ctx):
        """Test health power-ups never exceed max health."""
        ally = ctx.ally
        ally.health = 30
        ally.apply_power_up(PowerUpKind.HEALTH)
        assert ally.health == 80
        ally.apply_power_up(PowerUpKind.HEALTH)
        assert ally.health == 100

    def test_timed_effects(self, ctx):
        """Test rapid fire lasts 5s and shield 10s of frames."""
        ally = ctx.ally
        ally.apply_power_up(PowerUpKind.RAPID_FIRE)
        ally.apply_power_up(PowerUpKind.SHIELD)
        assert ally.rapid_fire_frames == config.FPS * 5
        assert ally.shield_frames == config.FPS * 10

        ally.update(ctx)
        assert ally.rapid_fire_frames == config.FPS * 5 - 1

    def test_unknown_kind_rejected(self, ctx):
        """Test unknown power-up kinds raise ValueError."""
        with pytest.raises(ValueError):
            ctx.ally.apply_power_up('laser')


class TestSmoke:
    """Test damage smoke."""

    def test_damaged_plane_smokes(self, atlases, scripted_random):
        """Test planes under 40% health trail smoke."""
        ctx = SimulationContext(width=1024, height=600, rng=scripted_random(0.1), atlases=atlases)
        ctx.ally.health = 30
        ctx.ally.update(ctx)
        assert len(ctx.particles) == 1
        assert ctx.particles[0].kind == ParticleKind.SMOKE

    def test_healthy_plane_does_not_smoke(self, atlases, scripted_random):
        """Test healthy planes never smoke."""
        ctx = SimulationContext(width=1024, height=600, rng=scripted_random(0.1), atlases=atlases)
        ctx.ally.update(ctx)
        assert ctx.particles == []


# ============================================================================
# Drawing
# ============================================================================


class TestDraw:
    """Test draw command emission."""

    def test_enemy_sprite_is_flipped_and_cropped(self, ctx):
        """Test enemy sprites face left and have their crop applied."""
        enemy = ctx.create_plane(Team.ENEMY, 600, 200)
        sprite = next(c for c in enemy.draw() if isinstance(c, SpriteFrame))

        assert sprite.sheet == 'fokker'
        assert sprite.flip_x is True
        assert sprite.source[3] == 341 - 100
        assert sprite.dest == (600, 200, 140, 112)
        assert sprite.fallback.x == 610

    def test_action_offset_while_shooting(self, ctx):
        """Test the shoot clip is drawn lower by the team offset."""
        ally = ctx.ally
        ally.shoot(ctx)
        sprite = next(c for c in ally.draw() if isinstance(c, SpriteFrame))
        assert sprite.dest[1] == ally.y + 45

    def test_shield_ring_drawn(self, ctx):
        """Test a shielded plane draws its ring."""
        ctx.ally.apply_power_up(PowerUpKind.SHIELD)
        assert any(isinstance(c, StrokeCircle) for c in ctx.ally.draw())
