"""
Short-lived visual particles: explosion debris, damage smoke and muzzle
flashes. All kinds share the same physics (constant gravity on vy, linear
life decay) and differ only in their randomised launch parameters.
"""

import random
from typing import List

from models.dogfight import ParticleKind
from games.Dogfight import config
from games.Dogfight.game.draw_commands import FillCircle


class Particle:
    """A single particle.

    Args:
        x: Spawn x
        y: Spawn y
        kind: Particle kind, selects velocity, size, decay and colour
        rng: Random source

    Raises:
        ValueError: If kind is not a ParticleKind
    """

    def __init__(self, x: float, y: float, kind: ParticleKind, rng: random.Random):
        self.x = x
        self.y = y
        self.kind = kind
        self.life = 1.0

        if kind == ParticleKind.EXPLOSION:
            self.vx = (rng.random() - 0.5) * 6
            self.vy = (rng.random() - 0.5) * 6
            self.size = 3 + rng.random() * 4
            self.decay = 0.02 + rng.random() * 0.02
            self.color = config.Colors.EXPLOSION[0] if rng.random() > 0.5 else config.Colors.EXPLOSION[1]
        elif kind == ParticleKind.SMOKE:
            self.vx = (rng.random() - 0.5) * 1
            self.vy = -1 - rng.random() * 2
            self.size = 5 + rng.random() * 5
            self.decay = 0.01
            self.color = config.Colors.SMOKE
        elif kind == ParticleKind.MUZZLE:
            self.vx = (rng.random() - 0.5) * 2
            self.vy = (rng.random() - 0.5) * 2
            self.size = 2 + rng.random() * 3
            self.decay = 0.08
            self.color = config.Colors.MUZZLE
        else:
            raise ValueError(f"Unknown particle kind: {kind!r}")

    def update(self) -> None:
        self.x += self.vx
        self.y += self.vy
        self.life -= self.decay
        self.vy += config.PARTICLE_GRAVITY

    @property
    def is_dead(self) -> bool:
        return self.life <= 0

    def draw(self) -> List[FillCircle]:
        alpha = max(0.0, min(1.0, self.life))
        return [FillCircle(x=self.x, y=self.y, radius=self.size, color=self.color, alpha=alpha)]


def burst(kind: ParticleKind, x: float, y: float, count: int, rng: random.Random) -> List[Particle]:
    """Create `count` particles of one kind at the same point."""
    return [Particle(x, y, kind, rng) for _ in range(count)]
