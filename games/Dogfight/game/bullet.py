"""
Bullets fired by planes.

A bullet belongs to the plane that fired it and lives in that plane's
bullet list until it leaves the playfield or hits something.
"""

from typing import List

from models import Point2D, Rectangle
from models.dogfight import Team
from games.Dogfight import config
from games.Dogfight.game.draw_commands import FillRect
from games.Dogfight.game.teams import profile_for


class Bullet:
    """A straight-flying projectile.

    Attributes:
        x: Leading point x (the point used for hit tests)
        y: Leading point y
        team: Team of the firing plane
        speed: Pixels per frame
    """

    def __init__(self, x: float, y: float, team: Team):
        self.x = x
        self.y = y
        self.team = team
        self.speed = config.BULLET_SPEED
        self.width = config.BULLET_WIDTH
        self.height = config.BULLET_HEIGHT
        self.direction = profile_for(team).bullet_direction

    def update(self) -> None:
        self.x += self.speed * self.direction

    def is_offscreen(self, width: float) -> bool:
        return self.x < 0 or self.x > width

    @property
    def tip(self) -> Point2D:
        return Point2D(x=self.x, y=self.y)

    @property
    def rect(self) -> Rectangle:
        return Rectangle(x=self.x, y=self.y, width=self.width, height=self.height)

    def draw(self) -> List[FillRect]:
        return [
            FillRect(x=self.x, y=self.y, width=self.width, height=self.height,
                     color=config.Colors.BULLET),
            FillRect(x=self.x, y=self.y + 1, width=self.width - 2, height=1,
                     color=config.Colors.BULLET_STREAK),
        ]

    def __repr__(self) -> str:
        return f"Bullet({self.team.value}, x={self.x:.1f}, y={self.y:.1f})"
