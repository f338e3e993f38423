"""Collectible power-ups that drift leftwards across the playfield."""

import random
from typing import List, Union

from models import Rectangle
from models.dogfight import PowerUpKind
from games.Dogfight import config
from games.Dogfight.game.draw_commands import FillCircle, StrokeCircle, Text

POWERUP_COLORS = {
    PowerUpKind.HEALTH: config.Colors.POWERUP_HEALTH,
    PowerUpKind.RAPID_FIRE: config.Colors.POWERUP_RAPID_FIRE,
    PowerUpKind.SHIELD: config.Colors.POWERUP_SHIELD,
}

POWERUP_ICONS = {
    PowerUpKind.HEALTH: '+',
    PowerUpKind.RAPID_FIRE: 'R',
    PowerUpKind.SHIELD: 'S',
}


class PowerUp:
    """A power-up pickup.

    Attributes:
        kind: Effect applied when collected
        collected: Set once the ally has picked it up
    """

    def __init__(self, x: float, y: float, kind: PowerUpKind):
        self.x = x
        self.y = y
        self.kind = PowerUpKind(kind)
        self.width = config.POWERUP_SIZE
        self.height = config.POWERUP_SIZE
        self.speed = config.POWERUP_SPEED
        self.collected = False

    @classmethod
    def with_random_kind(cls, x: float, y: float, rng: random.Random) -> 'PowerUp':
        """Create a power-up with a uniformly chosen kind."""
        return cls(x, y, rng.choice(list(PowerUpKind)))

    def update(self) -> None:
        self.x -= self.speed

    @property
    def is_offscreen(self) -> bool:
        return self.x < config.POWERUP_DESPAWN_X

    @property
    def rect(self) -> Rectangle:
        return Rectangle(x=self.x, y=self.y, width=self.width, height=self.height)

    def draw(self) -> List[Union[FillCircle, StrokeCircle, Text]]:
        cx = self.x + self.width / 2
        cy = self.y + self.height / 2
        radius = self.width / 2
        return [
            FillCircle(x=cx, y=cy, radius=radius, color=POWERUP_COLORS[self.kind]),
            StrokeCircle(x=cx, y=cy, radius=radius, color=config.Colors.POWERUP_BORDER, line_width=2),
            Text(text=POWERUP_ICONS[self.kind], x=cx, y=cy - config.Fonts.SMALL / 2,
                 size=config.Fonts.SMALL, color=config.Colors.TEXT, align='center'),
        ]
