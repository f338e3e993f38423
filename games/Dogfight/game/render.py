"""
Render step: turns the world into an ordered list of draw commands.

Each function appends to and returns a list so the driver can assemble a
frame in layers (background, world, HUD, overlays) without this module
knowing which state the game is in.
"""

from typing import List, Optional, TYPE_CHECKING

from models.dogfight import GameOverResult
from games.Dogfight import config
from games.Dogfight.config import Colors, Fonts
from games.Dogfight.game.draw_commands import DrawCommand, Overlay, Text, VerticalGradient

if TYPE_CHECKING:
    from games.Dogfight.game.context import SimulationContext
    from games.Dogfight.game.plane import Plane

EFFECT_TEXT_SIZE = 14
FPS_TEXT_SIZE = 12


def render_background(ctx: 'SimulationContext', out: List[DrawCommand]) -> List[DrawCommand]:
    """Sky, ground and clouds."""
    sky_h = ctx.height * config.SKY_RATIO
    out.append(VerticalGradient(x=0, y=0, width=ctx.width, height=sky_h,
                                top_color=Colors.SKY_TOP, bottom_color=Colors.SKY_BOTTOM))
    out.append(VerticalGradient(x=0, y=sky_h, width=ctx.width, height=ctx.height - sky_h,
                                top_color=Colors.GROUND_TOP, bottom_color=Colors.GROUND_BOTTOM))
    for cloud in ctx.clouds:
        out.extend(cloud.draw())
    return out


def render_world(ctx: 'SimulationContext', out: List[DrawCommand]) -> List[DrawCommand]:
    """Planes, bullets, power-ups and particles, back to front."""
    out.extend(ctx.ally.draw())
    for bullet in ctx.ally.bullets:
        out.extend(bullet.draw())

    for plane in ctx.enemies:
        out.extend(plane.draw())
        for bullet in plane.bullets:
            out.extend(bullet.draw())

    for powerup in ctx.powerups:
        out.extend(powerup.draw())
    for particle in ctx.particles:
        out.extend(particle.draw())
    return out


def _seconds_left(frames: int, refresh_rate: float) -> int:
    return -(-frames // int(refresh_rate))


def render_effect_timers(ally: 'Plane', refresh_rate: float, out: List[DrawCommand]) -> List[DrawCommand]:
    """Remaining shield and rapid-fire time in the top-left corner."""
    y = 10
    if ally.shielded:
        out.append(Text(text=f"Shield: {_seconds_left(ally.shield_frames, refresh_rate)}s",
                        x=10, y=y, size=EFFECT_TEXT_SIZE, color=Colors.POWERUP_SHIELD))
        y += 20
    if ally.rapid_fire:
        out.append(Text(text=f"Rapid Fire: {_seconds_left(ally.rapid_fire_frames, refresh_rate)}s",
                        x=10, y=y, size=EFFECT_TEXT_SIZE, color=Colors.POWERUP_RAPID_FIRE))
    return out


def render_scoreboard(ctx: 'SimulationContext', out: List[DrawCommand]) -> List[DrawCommand]:
    """Scores and wave progress along the top, status line along the bottom."""
    stats = ctx.stats
    cx = ctx.width / 2
    out.append(Text(
        text=f"Allies: {stats.ally_score}    Enemies: {stats.enemy_score}    High Score: {stats.high_score}",
        x=cx, y=8, size=Fonts.MEDIUM, color=Colors.TEXT, align='center', shadow=True,
    ))
    out.append(Text(text=stats.to_score_data().wave_label, x=cx, y=34, size=Fonts.SMALL + 2,
                    color=Colors.TEXT, align='center', shadow=True))
    if stats.status_message:
        out.append(Text(text=stats.status_message, x=cx, y=ctx.height - 40, size=Fonts.MEDIUM,
                        color=Colors.TITLE, align='center', shadow=True))
    return out


def render_title(ctx: 'SimulationContext', out: List[DrawCommand]) -> List[DrawCommand]:
    """Start screen shown before the first key press."""
    cx, cy = ctx.width / 2, ctx.height / 2
    out.append(Overlay(color=Colors.OVERLAY, alpha=0.3))
    out.append(Text(text=config.TITLE_TEXT, x=cx, y=cy - 100, size=Fonts.HUGE,
                    color=Colors.TITLE, align='center', shadow=True))
    out.append(Text(text=config.START_PROMPT, x=cx, y=cy - 20, size=Fonts.LARGE,
                    color=Colors.TEXT, align='center', shadow=True))
    out.append(Text(text="W/A/S/D move   SPACE fire   P pause   F fps   R restart",
                    x=cx, y=cy + 30, size=Fonts.MEDIUM, color=Colors.TEXT, align='center', shadow=True))
    if ctx.stats.high_score:
        out.append(Text(text=f"High Score: {ctx.stats.high_score}", x=cx, y=cy + 70,
                        size=Fonts.MEDIUM, color=Colors.TITLE, align='center', shadow=True))
    return out


def render_game_over(ctx: 'SimulationContext', result: Optional[GameOverResult],
                     out: List[DrawCommand]) -> List[DrawCommand]:
    """Game-over panel with the cause and the final score."""
    if result is None:
        return out
    cx, cy = ctx.width / 2, ctx.height / 2
    score_line = f"Final Score: {result.final_score}"
    if result.is_new_high_score:
        score_line += "  NEW HIGH SCORE!"

    out.append(Overlay(color=Colors.OVERLAY, alpha=0.5))
    out.append(Text(text=result.headline, x=cx, y=cy - 70, size=Fonts.HUGE,
                    color=Colors.HEALTH_LOW, align='center', shadow=True))
    out.append(Text(text=score_line, x=cx, y=cy, size=Fonts.LARGE,
                    color=Colors.TITLE if result.is_new_high_score else Colors.TEXT,
                    align='center', shadow=True))
    out.append(Text(text="Press R to restart", x=cx, y=cy + 50, size=Fonts.MEDIUM,
                    color=Colors.TEXT, align='center', shadow=True))
    return out


def render_pause(ctx: 'SimulationContext', out: List[DrawCommand]) -> List[DrawCommand]:
    cx, cy = ctx.width / 2, ctx.height / 2
    out.append(Overlay(color=Colors.OVERLAY, alpha=0.5))
    out.append(Text(text="PAUSED", x=cx, y=cy - 30, size=48, color=Colors.TEXT, align='center'))
    out.append(Text(text="Press P to resume", x=cx, y=cy + 25, size=Fonts.MEDIUM,
                    color=Colors.TEXT, align='center'))
    return out


def render_fps(ctx: 'SimulationContext', fps: int, out: List[DrawCommand]) -> List[DrawCommand]:
    out.append(Text(text=f"FPS: {fps}", x=ctx.width - 70, y=10, size=FPS_TEXT_SIZE, color=Colors.FPS))
    return out
