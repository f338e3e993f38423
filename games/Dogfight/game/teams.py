"""
Per-team plane profiles.

Everything that differs between the two sides lives in this table:
geometry, where bullets leave the plane and which way they fly, and how
the team's sprite sheet is cropped, offset and mirrored.
"""

from dataclasses import dataclass
from typing import Dict, Tuple

from models.dogfight import Team
from games.Dogfight import config


@dataclass(frozen=True)
class TeamProfile:
    """Static per-team constants."""
    team: Team
    width: int
    height: int
    muzzle_offset: Tuple[float, float]   # From the plane's top-left corner
    bullet_direction: int                # +1 flies right, -1 flies left
    bullet_damage: int                   # Damage dealt by this team's bullets
    atlas_name: str
    crop_bottom: int                     # Pixels trimmed off the bottom of each frame
    action_offset_y: int                 # Vertical shift while shooting or exploding
    flip_x: bool
    fallback_color: Tuple[int, int, int]
    fallback_rect: Tuple[float, float, float, float]  # (dx, dy, w, h) from top-left


TEAM_PROFILES: Dict[Team, TeamProfile] = {
    Team.ALLY: TeamProfile(
        team=Team.ALLY,
        width=160,
        height=128,
        muzzle_offset=(120.0, 70.0),
        bullet_direction=1,
        bullet_damage=config.ALLY_BULLET_DAMAGE,
        atlas_name='sopwith',
        crop_bottom=80,
        action_offset_y=45,
        flip_x=False,
        fallback_color=config.Colors.ALLY_FALLBACK,
        fallback_rect=(0.0, 15.0, 60.0, 10.0),
    ),
    Team.ENEMY: TeamProfile(
        team=Team.ENEMY,
        width=140,
        height=112,
        muzzle_offset=(10.0, 70.0),
        bullet_direction=-1,
        bullet_damage=config.ENEMY_BULLET_DAMAGE,
        atlas_name='fokker',
        crop_bottom=100,
        action_offset_y=56,
        flip_x=True,
        fallback_color=config.Colors.ENEMY_FALLBACK,
        fallback_rect=(10.0, 15.0, 60.0, 10.0),
    ),
}


def profile_for(team: Team) -> TeamProfile:
    return TEAM_PROFILES[team]
