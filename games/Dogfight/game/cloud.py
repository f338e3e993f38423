"""Parallax background clouds."""

import random
from typing import List

from games.Dogfight import config
from games.Dogfight.game.draw_commands import FillEllipse


class Cloud:
    """A drifting cloud that wraps from the right edge back to the left.

    `depth` in [0, 1) is the parallax factor: nearer clouds (higher depth)
    move faster and are more opaque.
    """

    def __init__(self, width: float, height: float, rng: random.Random):
        self.x = rng.random() * width
        self.y = self._random_y(height, rng)
        self.width = 80 + rng.random() * 40
        self.height = 40 + rng.random() * 20
        self.speed = 0.3 + rng.random() * 0.5
        self.depth = rng.random()

    @staticmethod
    def _random_y(height: float, rng: random.Random) -> float:
        return rng.random() * (height * config.CLOUD_MAX_Y_RATIO)

    @property
    def velocity(self) -> float:
        return self.speed * (0.5 + self.depth * 0.5)

    @property
    def opacity(self) -> float:
        return 0.5 + self.depth * 0.3

    def update(self, width: float, height: float, rng: random.Random) -> None:
        self.x += self.velocity
        if self.x > width + self.width:
            self.x = -self.width
            self.y = self._random_y(height, rng)

    def draw(self) -> List[FillEllipse]:
        return [FillEllipse(x=self.x, y=self.y, radius_x=self.width / 2, radius_y=self.height / 2,
                            color=config.Colors.CLOUD, alpha=self.opacity)]
